"""Human-readable labels for a drill chord.

The answer shown under the staves: the key, the chord name, the voicing and
its Roman-numeral function. Also provides note-name spelling for pitches.

Example:
	```python
	import chorale.annotation
	import chorale.generation

	chord = chorale.generation.generate_chord(2, "D", "major", (1, 3, 5, "1'"))
	chorale.annotation.annotate(chord)
	# → Annotation(key='D major', chord='Em', voicing="1 3 5 1'", function='ii (supertonic)')
	```
"""

import dataclasses
import typing

import chorale.chords
import chorale.keys
import chorale.pitches
import chorale.ranges


MAJOR_QUALITIES: typing.List[str] = ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
MINOR_QUALITIES: typing.List[str] = ["i", "ii°", "III", "iv", "v", "VI", "VII"]

SHARP_NAMES: typing.List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_NAMES: typing.List[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

ACCIDENTAL_SUFFIX: typing.Dict[int, str] = {-1: "b", 0: "", 1: "#"}


@dataclasses.dataclass(frozen=True)
class Annotation:

	"""
	Labels describing a chord, ready for display.
	"""

	key: str
	chord: str
	voicing: str
	function: str


def chord_quality (root: int, mode: str) -> str:

	"""Return the Roman numeral for a diatonic triad on a scale degree.

	Upper case is major, lower case minor, ``°`` diminished. The minor table
	is natural minor (minor ``v``, major ``VII``).
	"""

	qualities = MAJOR_QUALITIES if chorale.keys.validate_mode(mode) == "major" else MINOR_QUALITIES

	return qualities[(root - 1) % 7]


def pitch_to_note_name (pitch: int) -> str:

	"""
	Return a sharp-spelled note name with octave, e.g. 61 → ``"C#4"``.
	"""

	return f"{SHARP_NAMES[pitch % 12]}{pitch // 12 - 1}"


def spell_pitch (pitch: int, key: str) -> str:

	"""Return a note name using flats in flat keys and sharps otherwise.

	Example:
		```python
		spell_pitch(70, "F")   # → "Bb4"
		spell_pitch(66, "D")   # → "F#4"
		```
	"""

	names = FLAT_NAMES if chorale.keys.is_flat_key(key) else SHARP_NAMES

	return f"{names[pitch % 12]}{pitch // 12 - 1}"


def spell_voice (chord: chorale.chords.Chord, voice: str, pitch: typing.Optional[int] = None) -> str:

	"""Spell one voice of a chord with the letter its voicing degree gives it.

	Unlike :func:`spell_pitch`, the name always agrees with the key signature,
	so the fourth degree of Gb major is ``"Cb4"`` rather than ``"B3"``.

	Parameters:
		chord: The chord the voice belongs to.
		voice: ``"soprano"``, ``"alto"``, ``"tenor"`` or ``"bass"``.
		pitch: Pitch to name, for a voice written at another octave. Defaults
			to the voice's sounding pitch.
	"""

	index = chorale.ranges.VOICES.index(voice)

	if pitch is None:
		pitch = chord.pitches[index]

	# Voicings run bass to soprano, pitches soprano to bass.
	relative_degree, _ = chorale.pitches.parse_voicing_degree(chord.voicing[3 - index])
	letter = chorale.pitches.note_letter(chord.root + relative_degree - 1, chord.key_signature)
	accidental = chorale.keys.key_accidental(chord.key_signature, letter)
	octave = (pitch - accidental - chorale.pitches.NATURAL_SEMITONES[letter]) // 12 - 1

	return f"{letter}{ACCIDENTAL_SUFFIX[accidental]}{octave}"


def voicing_label (voicing: chorale.pitches.Voicing) -> str:

	return " ".join(str(degree) for degree in voicing)


def root_name (root: int, key: str) -> str:

	"""
	Return the spelled root of a scale degree in a key (``"F#"`` for 3 in D).
	"""

	letter = chorale.pitches.note_letter(root, key)

	return letter + ACCIDENTAL_SUFFIX[chorale.keys.key_accidental(key, letter)]


def annotate (chord: chorale.chords.Chord) -> Annotation:

	"""Build the display labels for a chord.

	The chord name is the spelled root followed by ``M`` (major), ``m``
	(minor) or ``°`` (diminished).
	"""

	quality = chord_quality(chord.root, chord.mode)

	if quality == quality.upper():
		quality_char = "M"
	elif "°" in quality:
		quality_char = "°"
	else:
		quality_char = "m"

	return Annotation(
		key = f"{chord.key_signature} {chord.mode}",
		chord = f"{root_name(chord.root, chord.key_signature)}{quality_char}",
		voicing = voicing_label(chord.voicing),
		function = f"{quality} ({chorale.chords.degree_name(chord.root)})"
	)
