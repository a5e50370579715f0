"""Finding playable chords and drawing one at random.

For a voicing template and a key, every scale degree (1-7) is tried as the
chord root with its reference pitch in each octave from 1 to 5. Every
placement whose four pitches fall inside the SATB ranges is a candidate.

:func:`generate_random_chord` pools the candidates of every enabled
(voicing, key) pair and draws exactly one of them with a single uniform
``randrange``. The pool is flat: a configuration with more playable octave
registers contributes more candidates, so it is proportionally more likely
to be drawn.

Search diagnostics go to an optional ``observer`` callable rather than being
logged here, so the search has no side effects beyond its return value.

Example:
	```python
	import random
	import chorale.generation
	import chorale.voicing_selection as vs

	selections = vs.expand_selections(["SB"], ["close"], ["root", "fifth"])
	chord = chorale.generation.generate_random_chord(
		selections, ["C", "G"], "major", rng=random.Random(7)
	)
	```
"""

import dataclasses
import random
import typing

import chorale.chords
import chorale.keys
import chorale.pitches
import chorale.ranges
import chorale.voicing_selection


OCTAVE_RANGE = range(1, 6)
SCALE_DEGREES = range(1, 8)


@dataclasses.dataclass(frozen=True)
class Candidate:

	"""
	A playable placement of one voicing in one key.
	"""

	category: str
	index: int
	voicing: chorale.pitches.Voicing
	key: str
	root: int
	reference_root: int


@dataclasses.dataclass(frozen=True)
class SearchStep:

	"""Diagnostics for one (voicing, key) pair of a search.

	Attributes:
		category: Voicing category searched.
		index: Inversion index within the category.
		key: Key searched.
		combinations: Number of playable ``(root, reference_root)`` placements found.
	"""

	category: str
	index: int
	key: str
	combinations: int


SearchObserver = typing.Callable[[SearchStep], None]


def is_valid_combination (root: int, key: str, voicing: typing.Sequence[chorale.pitches.VoicingDegree]) -> bool:

	"""
	True if the voicing fits all four ranges at its default reference root.
	"""

	pitches = chorale.pitches.resolve_chord_pitches(root, key, voicing)

	return chorale.ranges.validate_all(pitches)


def get_valid_roots (
	voicing: typing.Sequence[chorale.pitches.VoicingDegree],
	key: str
) -> typing.List[typing.Tuple[int, int]]:

	"""Return every playable ``(root, reference_root)`` pair for a voicing in a key.

	All 7 roots x 5 octaves are evaluated; nothing stops early. The same root
	may appear several times with different reference pitches.

	Parameters:
		voicing: Template ordered bass, tenor, alto, soprano.
		key: Key signature name.

	Returns:
		Pairs in root-then-octave order.
	"""

	valid: typing.List[typing.Tuple[int, int]] = []

	for root in SCALE_DEGREES:
		for octave in OCTAVE_RANGE:
			reference_root = chorale.pitches.root_pitch(root, key, octave)
			pitches = chorale.pitches.resolve_chord_pitches(root, key, voicing, reference_root)

			if chorale.ranges.validate_all(pitches):
				valid.append((root, reference_root))

	return valid


def collect_candidates (
	selections: typing.Iterable[chorale.voicing_selection.VoicingSelection],
	keys: typing.Iterable[str],
	observer: typing.Optional[SearchObserver] = None
) -> typing.List[Candidate]:

	"""Build the flat candidate pool for the enabled selections and keys.

	Selections without a catalog template are dropped silently.
	"""

	keys = [chorale.keys.validate_key(key) for key in keys]
	pool: typing.List[Candidate] = []

	for category, index, voicing in chorale.voicing_selection.voicings_for_selections(selections):
		for key in keys:
			placements = get_valid_roots(voicing, key)

			if observer is not None:
				observer(SearchStep(category=category, index=index, key=key, combinations=len(placements)))

			pool.extend(
				Candidate(
					category = category,
					index = index,
					voicing = voicing,
					key = key,
					root = root,
					reference_root = reference_root
				)
				for root, reference_root in placements
			)

	return pool


def generate_random_chord (
	selections: typing.Sequence[chorale.voicing_selection.VoicingSelection],
	keys: typing.Sequence[str],
	mode: str,
	rng: typing.Optional[random.Random] = None,
	observer: typing.Optional[SearchObserver] = None
) -> typing.Optional[chorale.chords.Chord]:

	"""Draw one playable chord from the enabled selections and keys.

	Parameters:
		selections: Enabled voicing selections.
		keys: Enabled key signatures.
		mode: ``"major"`` or ``"minor"``; carried into the chord unchanged.
		rng: Random source. A fresh ``random.Random()`` when omitted.
		observer: Called with a :class:`SearchStep` for every (voicing, key) pair.

	Returns:
		A :class:`~chorale.chords.Chord`, or ``None`` when nothing is enabled
		or no enabled combination fits the voice ranges.
	"""

	chorale.keys.validate_mode(mode)

	if not selections or not keys:
		return None

	pool = collect_candidates(selections, keys, observer=observer)

	if not pool:
		return None

	if rng is None:
		rng = random.Random()

	chosen = pool[rng.randrange(len(pool))]

	pitches = chorale.pitches.resolve_chord_pitches(
		chosen.root, chosen.key, chosen.voicing, chosen.reference_root
	)

	return chorale.chords.Chord(
		root = chosen.root,
		key_signature = chosen.key,
		mode = mode,
		voicing = chosen.voicing,
		pitches = pitches
	)


def generate_chord (
	root: int,
	key: str,
	mode: str,
	voicing: typing.Sequence[chorale.pitches.VoicingDegree]
) -> typing.Optional[chorale.chords.Chord]:

	"""Build one explicit chord at its default reference root.

	Returns ``None`` if that placement leaves any voice out of range.

	Example:
		```python
		generate_chord(1, "C", "major", (1, 3, 5, "1'")).pitches
		# → (60, 55, 52, 48)
		```
	"""

	chorale.keys.validate_mode(mode)

	if not is_valid_combination(root, key, voicing):
		return None

	return chorale.chords.Chord(
		root = root,
		key_signature = key,
		mode = mode,
		voicing = tuple(voicing),
		pitches = chorale.pitches.resolve_chord_pitches(root, key, voicing)
	)
