"""Key signatures and their diatonic accidentals.

The drill works with a fixed table of 13 key signatures. Each key is named
by its tonic (``"C"``, ``"F#"``, ``"Bb"``...) and carries the traditional
key-signature accidentals: sharps for G through F#, flats for F through Gb,
none for C.

Module-level constants:
- `NOTE_LETTERS`: The seven natural note letters in diatonic order, starting on C
- `KEY_SIGNATURES`: All supported key names, sharp keys first
- `KEY_ACCIDENTALS`: Maps key name to ``{letter: +1 | -1}`` for every altered letter
- `MODES`: ``"major"`` and ``"minor"``

The accidental table is a static lookup. Minor keys share the same spelling
as their major namesake here, since mode only changes the chord-quality label.
"""

import typing


NOTE_LETTERS: typing.List[str] = ["C", "D", "E", "F", "G", "A", "B"]

KEY_SIGNATURES: typing.List[str] = [
	"C", "G", "D", "A", "E", "B", "F#",
	"F", "Bb", "Eb", "Ab", "Db", "Gb",
]

KEY_ACCIDENTALS: typing.Dict[str, typing.Dict[str, int]] = {
	"C": {},
	"G": {"F": 1},
	"D": {"F": 1, "C": 1},
	"A": {"F": 1, "C": 1, "G": 1},
	"E": {"F": 1, "C": 1, "G": 1, "D": 1},
	"B": {"F": 1, "C": 1, "G": 1, "D": 1, "A": 1},
	"F#": {"F": 1, "C": 1, "G": 1, "D": 1, "A": 1, "E": 1},
	"F": {"B": -1},
	"Bb": {"B": -1, "E": -1},
	"Eb": {"B": -1, "E": -1, "A": -1},
	"Ab": {"B": -1, "E": -1, "A": -1, "D": -1},
	"Db": {"B": -1, "E": -1, "A": -1, "D": -1, "G": -1},
	"Gb": {"B": -1, "E": -1, "A": -1, "D": -1, "G": -1, "C": -1},
}

MODES: typing.List[str] = ["major", "minor"]


def validate_key (key: str) -> str:

	"""Return ``key`` unchanged if it is one of the supported key signatures.

	Raises:
		ValueError: If the key name is not in the table.

	Example:
		```python
		validate_key("Bb")  # → "Bb"
		validate_key("A#")  # ValueError
		```
	"""

	if key not in KEY_ACCIDENTALS:
		available = ", ".join(KEY_SIGNATURES)
		raise ValueError(f"Unknown key signature: {key!r}. Available: {available}")

	return key


def validate_mode (mode: str) -> str:

	"""Return ``mode`` unchanged if it is ``"major"`` or ``"minor"``."""

	if mode not in MODES:
		raise ValueError(f"Unknown mode: {mode!r}. Expected 'major' or 'minor'.")

	return mode


def tonic_letter (key: str) -> str:

	"""
	Return the natural letter of the key's tonic (``"F"`` for ``"F#"``).
	"""

	return validate_key(key)[0]


def key_accidental (key: str, letter: str) -> int:

	"""Return the accidental the key signature applies to a note letter.

	Parameters:
		key: Key signature name (e.g. ``"D"``).
		letter: Natural note letter (``"C"`` to ``"B"``).

	Returns:
		``1`` for a sharp, ``-1`` for a flat, ``0`` when the letter is natural
		in that key.

	Example:
		```python
		key_accidental("D", "F")   # → 1   (F#)
		key_accidental("Eb", "A")  # → -1  (Ab)
		key_accidental("G", "C")   # → 0
		```
	"""

	return KEY_ACCIDENTALS[validate_key(key)].get(letter, 0)


def is_flat_key (key: str) -> bool:

	"""
	True when the key signature is written with flats.
	"""

	return any(acc < 0 for acc in KEY_ACCIDENTALS[validate_key(key)].values())
