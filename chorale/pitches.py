"""Diatonic pitch resolution.

Turns an abstract voicing (scale degrees relative to a chord root, with
octave marks) into concrete MIDI pitches for the four voices. Spelling is
diatonic: the note letter comes from stepping through the key's letters,
the accidental comes from the key signature table, and the octave is derived
from a reference root pitch.

A voicing degree is either a bare integer (``3``) or a string with trailing
apostrophes (``"3''"``), each apostrophe lifting that chord member one more
octave above the reference root's register.

Example:
	```python
	import chorale.pitches

	# C major, root position, close spacing, soprano doubling the bass
	chorale.pitches.resolve_chord_pitches(1, "C", (1, 3, 5, "1'"), 48)
	# → (60, 55, 52, 48)  soprano, alto, tenor, bass
	```
"""

import typing

import chorale.keys


VoicingDegree = typing.Union[int, str]
Voicing = typing.Tuple[VoicingDegree, ...]
SATBPitches = typing.Tuple[int, int, int, int]

OCTAVE_MARK = "'"

NATURAL_SEMITONES: typing.Dict[str, int] = {
	"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11,
}

# Reference roots are normalised into C3-B3.
REFERENCE_ROOT_LOW = 48
REFERENCE_ROOT_HIGH = 60


class InvalidVoicingError (ValueError):

	"""
	Raised for a voicing that is not exactly four well-formed degrees.
	"""


def parse_voicing_degree (degree: VoicingDegree) -> typing.Tuple[int, int]:

	"""Split a voicing degree into ``(relative_degree, octave_shift)``.

	Octave marks are counted, not nested: ``"1''"`` is degree 1 shifted up
	two octaves.

	Raises:
		InvalidVoicingError: If a string degree has no integer part.

	Example:
		```python
		parse_voicing_degree(5)       # → (5, 0)
		parse_voicing_degree("1'")    # → (1, 1)
		parse_voicing_degree("3''")   # → (3, 2)
		```
	"""

	if isinstance(degree, int):
		return degree, 0

	octave_shift = degree.count(OCTAVE_MARK)
	bare = degree.replace(OCTAVE_MARK, "").strip()

	try:
		return int(bare), octave_shift
	except ValueError:
		raise InvalidVoicingError(f"Cannot parse voicing degree {degree!r}") from None


def note_letter (scale_degree: int, key: str) -> str:

	"""Return the note letter of a scale degree in a key.

	The degree may fall outside 1-7; it wraps in both directions, so degree 8
	has the same letter as degree 1 and degree 0 the same as degree 7.

	Example:
		```python
		note_letter(1, "Eb")  # → "E"
		note_letter(3, "D")   # → "F"
		note_letter(8, "G")   # → "G"
		```
	"""

	tonic_index = chorale.keys.NOTE_LETTERS.index(chorale.keys.tonic_letter(key))

	return chorale.keys.NOTE_LETTERS[(tonic_index + scale_degree - 1) % 7]


def note_to_midi_pitch (letter: str, accidental: int, octave: int) -> int:

	"""
	Return the MIDI pitch for a letter, accidental and octave (C4 = 60).
	"""

	return (octave + 1) * 12 + NATURAL_SEMITONES[letter] + accidental


def root_pitch (root_scale_degree: int, key: str, octave: int) -> int:

	"""
	Return the spelled pitch of a chord root in a given octave.
	"""

	letter = note_letter(root_scale_degree, key)

	return note_to_midi_pitch(letter, chorale.keys.key_accidental(key, letter), octave)


def resolve_pitch (
	voicing_degree: VoicingDegree,
	reference_root: int,
	key: str,
	root_scale_degree: int
) -> int:

	"""Resolve one voicing degree to a MIDI pitch.

	Parameters:
		voicing_degree: Chord member relative to the root (``1`` root,
			``3`` third, ``5`` fifth), optionally with octave marks.
		reference_root: MIDI pitch anchoring the chord; only its octave is used.
		key: Key signature name.
		root_scale_degree: Scale degree of the chord root in the key (1-7).

	Returns:
		MIDI note number.

	The octave starts from the reference root's octave. A chord member whose
	letter sits earlier in the C-B cycle than the root's letter has wrapped
	past B, so it moves up one octave (unless a full seven-step multiple was
	already crossed). Octave marks are added last.
	"""

	relative_degree, octave_shift = parse_voicing_degree(voicing_degree)

	absolute_degree = root_scale_degree + (relative_degree - 1)
	letter = note_letter(absolute_degree, key)
	accidental = chorale.keys.key_accidental(key, letter)

	reference_octave = reference_root // 12 - 1
	root_index = chorale.keys.NOTE_LETTERS.index(note_letter(root_scale_degree, key))
	letter_index = chorale.keys.NOTE_LETTERS.index(letter)

	octaves_crossed = (relative_degree - 1) // 7
	octave = reference_octave + octaves_crossed

	if octaves_crossed == 0 and letter_index < root_index:
		octave += 1

	octave += octave_shift

	return note_to_midi_pitch(letter, accidental, octave)


def find_reference_root (root_scale_degree: int, key: str) -> int:

	"""Derive a low-register anchor for a chord root.

	Starts from the root's octave-3 spelling and moves it by whole octaves
	until it lies in ``[48, 60)`` (C3 up to, not including, C4).

	Example:
		```python
		find_reference_root(1, "C")   # → 48  (C3)
		find_reference_root(5, "A")   # → 52  (E3)
		find_reference_root(1, "Gb")  # → 54  (Gb3)
		```
	"""

	octave = 3
	pitch = root_pitch(root_scale_degree, key, octave)

	while pitch >= REFERENCE_ROOT_HIGH:
		octave -= 1
		pitch = root_pitch(root_scale_degree, key, octave)

	while pitch < REFERENCE_ROOT_LOW:
		octave += 1
		pitch = root_pitch(root_scale_degree, key, octave)

	return pitch


def resolve_chord_pitches (
	root_scale_degree: int,
	key: str,
	voicing: typing.Sequence[VoicingDegree],
	reference_root: typing.Optional[int] = None
) -> SATBPitches:

	"""Resolve all four voices of a chord.

	Parameters:
		root_scale_degree: Scale degree of the chord root (1-7).
		key: Key signature name.
		voicing: Four voicing degrees ordered bass, tenor, alto, soprano.
		reference_root: Explicit anchor pitch. When omitted, one is derived
			with :func:`find_reference_root`.

	Returns:
		``(soprano, alto, tenor, bass)`` MIDI pitches.

	Raises:
		InvalidVoicingError: If the voicing does not have exactly four degrees.
	"""

	if len(voicing) != 4:
		raise InvalidVoicingError(f"Voicing must have exactly 4 degrees, got {len(voicing)}: {voicing!r}")

	if reference_root is None:
		reference_root = find_reference_root(root_scale_degree, key)

	bass, tenor, alto, soprano = (
		resolve_pitch(degree, reference_root, key, root_scale_degree)
		for degree in voicing
	)

	return soprano, alto, tenor, bass
