"""The chord value handed from the generator to the display.

Module-level helpers:
- `degree_name(root)`: Roman-numeral-free name for a scale degree (``"tonic"``, ``"dominant"``...)
"""

import dataclasses
import typing

import chorale.pitches


SCALE_DEGREE_NAMES: typing.List[str] = [
	"tonic",
	"supertonic",
	"mediant",
	"subdominant",
	"dominant",
	"submediant",
	"leading tone",
]


def degree_name (root: int) -> str:

	"""
	Return the functional name of a scale degree, wrapping modulo 7.
	"""

	return SCALE_DEGREE_NAMES[(root - 1) % 7]


@dataclasses.dataclass(frozen=True)
class Chord:

	"""A four-voice diatonic triad in a key.

	Attributes:
		root: Scale degree of the chord root (1-7).
		key_signature: Key name (``"C"``, ``"F#"``, ``"Bb"``...).
		mode: ``"major"`` or ``"minor"``.
		voicing: The template used, ordered bass, tenor, alto, soprano.
		pitches: MIDI pitches ordered soprano, alto, tenor, bass.
	"""

	root: int
	key_signature: str
	mode: str
	voicing: chorale.pitches.Voicing
	pitches: chorale.pitches.SATBPitches


	@property
	def soprano (self) -> int:
		return self.pitches[0]

	@property
	def alto (self) -> int:
		return self.pitches[1]

	@property
	def tenor (self) -> int:
		return self.pitches[2]

	@property
	def bass (self) -> int:
		return self.pitches[3]


	def shifted (self, semitones: int) -> "Chord":

		"""
		Return a copy with every voice moved by the same number of semitones.
		"""

		soprano, alto, tenor, bass = (pitch + semitones for pitch in self.pitches)

		return dataclasses.replace(self, pitches=(soprano, alto, tenor, bass))
