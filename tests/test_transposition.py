import pytest

import chorale.generation
import chorale.keys
import chorale.transposition

import conftest


def _shown (root: int, key: str, voicing: tuple = (1, 3, 5, "1'")) -> chorale.transposition.DisplayedChord:

	return chorale.transposition.DisplayedChord(conftest.make_chord(root, key, voicing))


def test_step_root_wraps () -> None:

	"""Degrees wrap 7 → 1 going up and 1 → 7 going down."""

	assert chorale.transposition.step_root(7, "up") == 1
	assert chorale.transposition.step_root(3, "up") == 4
	assert chorale.transposition.step_root(1, "down") == 7
	assert chorale.transposition.step_root(4, "down") == 3


def test_step_root_bad_direction () -> None:

	"""Only up and down are directions."""

	with pytest.raises(ValueError, match="Unknown direction"):
		chorale.transposition.step_root(1, "sideways")


def test_up_from_leading_tone_in_c_raises_octave () -> None:

	"""B up to C continues upward instead of jumping down."""

	shown = _shown(7, "C")
	assert shown.chord.pitches == (71, 65, 62, 59)

	stepped = chorale.transposition.transpose(shown, "up")

	assert stepped.chord.root == 1
	assert stepped.octave_offset == 1
	assert stepped.chord.pitches == (72, 67, 64, 60)


def test_down_from_tonic_in_c_lowers_octave () -> None:

	"""C down to B continues downward."""

	stepped = chorale.transposition.transpose(_shown(1, "C"), "down")

	assert stepped.chord.root == 7
	assert stepped.octave_offset == -1
	assert stepped.chord.pitches == (59, 53, 50, 47)


def test_step_without_wrap_keeps_offset () -> None:

	"""Steps that do not pass C leave the offset unchanged."""

	stepped = chorale.transposition.transpose(_shown(2, "C"), "up")

	assert stepped.chord.root == 3
	assert stepped.octave_offset == 0
	assert stepped.chord.pitches == chorale.generation.generate_chord(3, "C", "major", (1, 3, 5, "1'")).pitches


def test_g_major_wraps_between_mediant_and_subdominant () -> None:

	"""In G the letter cycle passes C between degrees 3 and 4, not 7 and 1."""

	assert chorale.transposition.transpose(_shown(3, "G"), "up").octave_offset == 1
	assert chorale.transposition.transpose(_shown(7, "G"), "up").octave_offset == 0
	assert chorale.transposition.transpose(_shown(4, "G"), "down").octave_offset == -1


def test_transpose_keeps_key_mode_and_voicing () -> None:

	"""Only the root and pitches change."""

	shown = chorale.transposition.DisplayedChord(conftest.make_chord(2, "Eb", (5, "1'", "3'", "5'"), mode="minor"))
	stepped = chorale.transposition.transpose(shown, "down")

	assert stepped.chord.key_signature == "Eb"
	assert stepped.chord.mode == "minor"
	assert stepped.chord.voicing == (5, "1'", "3'", "5'")


@pytest.mark.parametrize("key", chorale.keys.KEY_SIGNATURES)
@pytest.mark.parametrize("root", range(1, 8))
def test_up_then_down_restores (key: str, root: int) -> None:

	"""A step up followed by a step down returns to the original chord."""

	shown = _shown(root, key)
	back = chorale.transposition.transpose(chorale.transposition.transpose(shown, "up"), "down")

	assert back == shown


@pytest.mark.parametrize("key", chorale.keys.KEY_SIGNATURES)
def test_seven_steps_up_is_one_octave (key: str) -> None:

	"""Walking once around the scale lands an octave above the start."""

	shown = _shown(5, key)
	stepped = shown

	for _ in range(7):
		stepped = chorale.transposition.transpose(stepped, "up")

	assert stepped.chord.root == 5
	assert stepped.octave_offset == 1
	assert stepped.chord.pitches == tuple(pitch + 12 for pitch in shown.chord.pitches)


@pytest.mark.parametrize("key", chorale.keys.KEY_SIGNATURES)
def test_seven_steps_down_is_one_octave (key: str) -> None:

	"""Walking down around the scale lands an octave below the start."""

	shown = _shown(1, key)
	stepped = shown

	for _ in range(7):
		stepped = chorale.transposition.transpose(stepped, "down")

	assert stepped.octave_offset == -1
	assert stepped.chord.pitches == tuple(pitch - 12 for pitch in shown.chord.pitches)
