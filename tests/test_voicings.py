import pytest

import chorale.pitches
import chorale.voicings


def test_twelve_categories () -> None:

	"""Six doublings in two spacings give twelve categories."""

	assert len(chorale.voicings.all_categories()) == 12


@pytest.mark.parametrize("category", list(chorale.voicings.VOICINGS))
def test_every_template_has_four_voices (category: str) -> None:

	"""Templates list exactly bass, tenor, alto and soprano."""

	for voicing in chorale.voicings.VOICINGS[category]:
		assert len(voicing) == 4


@pytest.mark.parametrize("category", list(chorale.voicings.VOICINGS))
def test_inversion_index_matches_bass (category: str) -> None:

	"""Index 0 has the root in the bass, 1 the fifth, 2 the third."""

	basses = [
		chorale.pitches.parse_voicing_degree(voicing[0])
		for voicing in chorale.voicings.VOICINGS[category]
	]

	assert basses == [(1, 0), (5, 0), (3, 0)]


def test_sb_close_root_position () -> None:

	"""The basic close root-position voicing doubles the root an octave up."""

	assert chorale.voicings.get_voicing("SB-doubled-close", 0) == (1, 3, 5, "1'")


def test_st_category_uses_bottom_infix () -> None:

	"""Soprano-tenor doubling lives under the "-doubled-bottom" name."""

	assert chorale.voicings.get_voicing("ST-doubled-bottom-spread", 2) == (3, "1'", "5'", "1''")
	assert chorale.voicings.get_voicing("ST-doubled-spread", 2) is None


def test_lookup_misses_return_none () -> None:

	"""Unknown categories and indexes are absent, not errors."""

	assert chorale.voicings.get_voicing("XX-doubled-close", 0) is None
	assert chorale.voicings.get_voicing("SB-doubled-close", 3) is None
	assert chorale.voicings.get_voicing("SB-doubled-close", -1) is None


def test_all_voicings_flattened () -> None:

	"""Flattening yields every template with its category and index."""

	flat = chorale.voicings.all_voicings()

	assert len(flat) == 36
	assert flat[0] == ("SB-doubled-close", 0, (1, 3, 5, "1'"))
	assert ("TB-doubled-spread", 1, (5, "5'", "3''", "1'''")) in flat
