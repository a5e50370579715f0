"""Singing ranges for the four voices.

Ranges are inclusive MIDI pitches. Every check takes pitches in
``(soprano, alto, tenor, bass)`` order and rejects any other count.

Example:
	```python
	import chorale.ranges

	chorale.ranges.validate_all((60, 55, 52, 48))  # → True
	chorale.ranges.validate_all((59, 55, 52, 48))  # → False, soprano below C4
	```
"""

import typing


VOICES: typing.List[str] = ["soprano", "alto", "tenor", "bass"]

# Inclusive MIDI ranges per voice.
VOICE_RANGES: typing.Dict[str, typing.Tuple[int, int]] = {
	"soprano": (60, 81),  # C4 - A5
	"alto": (55, 76),     # G3 - E5
	"tenor": (48, 67),    # C3 - G4
	"bass": (40, 62),     # E2 - D4
}


def is_in_range (pitch: int, voice: str) -> bool:

	"""
	Return True if a pitch lies within the inclusive range of a voice.
	"""

	if voice not in VOICE_RANGES:
		raise ValueError(f"Unknown voice: {voice!r}. Expected one of {', '.join(VOICES)}")

	low, high = VOICE_RANGES[voice]

	return low <= pitch <= high


def _check_voice_count (pitches: typing.Sequence[int]) -> None:

	if len(pitches) != len(VOICES):
		raise ValueError(f"Expected {len(VOICES)} pitches (soprano, alto, tenor, bass), got {len(pitches)}: {pitches!r}")


def validate_all (pitches: typing.Sequence[int]) -> bool:

	"""Return True only if every voice is within its range.

	Parameters:
		pitches: ``(soprano, alto, tenor, bass)`` MIDI pitches.

	Raises:
		ValueError: If there are not exactly four pitches.
	"""

	_check_voice_count(pitches)

	return all(is_in_range(pitch, voice) for pitch, voice in zip(pitches, VOICES))


def out_of_range_voices (pitches: typing.Sequence[int]) -> typing.List[str]:

	"""
	Return the names of the voices whose pitch is out of range, top down.
	"""

	_check_voice_count(pitches)

	return [voice for pitch, voice in zip(pitches, VOICES) if not is_in_range(pitch, voice)]
