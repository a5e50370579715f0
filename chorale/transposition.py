"""Stepping a displayed chord up or down the scale.

The pitch engine always places a root in the C3-B3 register, so stepping
from B up to C would otherwise jump down almost an octave. A
:class:`DisplayedChord` carries an octave offset alongside the chord; each
step compares the note letters of the old and new roots to detect wrapping
past C and adjusts the offset, then shifts the freshly resolved pitches by
that many octaves.

The wrap test uses note letters, not scale degrees. In a key whose tonic is
not C, the letter cycle wraps somewhere in the middle of the scale (between
degrees 3 and 4 in G, from B to C), and that is where the register jumps.

Example:
	```python
	import chorale.generation
	import chorale.transposition

	chord = chorale.generation.generate_chord(7, "C", "major", (1, 3, 5, "1'"))
	shown = chorale.transposition.DisplayedChord(chord)
	shown = chorale.transposition.transpose(shown, "up")
	shown.chord.root      # → 1
	shown.octave_offset   # → 1
	```
"""

import dataclasses
import typing

import chorale.chords
import chorale.keys
import chorale.pitches


DIRECTIONS: typing.List[str] = ["up", "down"]


@dataclasses.dataclass(frozen=True)
class DisplayedChord:

	"""A chord as shown, plus the octave offset accumulated by stepping.

	Attributes:
		chord: The chord with its displayed pitches (offset already applied).
		octave_offset: Whole octaves added to freshly resolved pitches.
	"""

	chord: chorale.chords.Chord
	octave_offset: int = 0


def step_root (root: int, direction: str) -> int:

	"""Return the next scale degree up or down, wrapping 7 → 1 and 1 → 7."""

	if direction == "up":
		return root % 7 + 1

	if direction == "down":
		return 7 if root == 1 else root - 1

	raise ValueError(f"Unknown direction: {direction!r}. Expected 'up' or 'down'")


def transpose (displayed: DisplayedChord, direction: str) -> DisplayedChord:

	"""Move the chord root one diatonic step, keeping the register continuous.

	Parameters:
		displayed: The chord currently shown.
		direction: ``"up"`` or ``"down"``.

	Returns:
		A new :class:`DisplayedChord` with the same key, mode and voicing.
	"""

	chord = displayed.chord
	new_root = step_root(chord.root, direction)

	old_index = chorale.keys.NOTE_LETTERS.index(chorale.pitches.note_letter(chord.root, chord.key_signature))
	new_index = chorale.keys.NOTE_LETTERS.index(chorale.pitches.note_letter(new_root, chord.key_signature))

	octave_offset = displayed.octave_offset

	if direction == "up" and new_index < old_index:
		octave_offset += 1

	elif direction == "down" and new_index > old_index:
		octave_offset -= 1

	soprano, alto, tenor, bass = chorale.pitches.resolve_chord_pitches(
		new_root, chord.key_signature, chord.voicing
	)

	stepped = dataclasses.replace(
		chord,
		root = new_root,
		pitches = (soprano, alto, tenor, bass)
	)

	return DisplayedChord(chord=stepped.shifted(octave_offset * 12), octave_offset=octave_offset)
