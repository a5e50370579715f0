"""Expanding independent voicing toggles into concrete selections.

A user picks doublings, spacings and inversions independently. Every
combination of the three becomes a :class:`VoicingSelection`, which maps to a
catalog category and inversion index.

Example:
	```python
	import chorale.voicing_selection as vs

	selections = vs.expand_selections(["SB", "ST"], ["close"], ["root"])
	[vs.selection_to_category(s) for s in selections]
	# → [("SB-doubled-close", 0), ("ST-doubled-bottom-close", 0)]
	```
"""

import dataclasses
import itertools
import typing

import chorale.pitches
import chorale.voicings


DOUBLINGS: typing.List[str] = ["SB", "AB", "TB", "ST", "TA", "AS"]
SPACINGS: typing.List[str] = ["close", "spread"]
INVERSIONS: typing.List[str] = ["root", "fifth", "third"]

# Bass note of each inversion, as an index into a category's templates.
INVERSION_INDEX: typing.Dict[str, int] = {
	"root": 0,
	"fifth": 1,
	"third": 2,
}


@dataclasses.dataclass(frozen=True)
class VoicingSelection:

	"""
	One enabled doubling + spacing + inversion combination.
	"""

	doubling: str
	spacing: str
	inversion: str


	def __post_init__ (self) -> None:

		"""
		Reject values outside the known doublings, spacings and inversions.
		"""

		for value, allowed, label in (
			(self.doubling, DOUBLINGS, "doubling"),
			(self.spacing, SPACINGS, "spacing"),
			(self.inversion, INVERSIONS, "inversion"),
		):
			if value not in allowed:
				raise ValueError(f"Unknown {label}: {value!r}. Expected one of {', '.join(allowed)}")


def expand_selections (
	doublings: typing.Iterable[str],
	spacings: typing.Iterable[str],
	inversions: typing.Iterable[str]
) -> typing.List[VoicingSelection]:

	"""Return the Cartesian product of the three toggle sets.

	Order follows the inputs: doublings vary slowest, inversions fastest. Any
	empty input yields an empty list.
	"""

	return [
		VoicingSelection(doubling=doubling, spacing=spacing, inversion=inversion)
		for doubling, spacing, inversion in itertools.product(doublings, spacings, inversions)
	]


def selection_to_category (selection: VoicingSelection) -> typing.Tuple[str, int]:

	"""Map a selection to its ``(category, inversion_index)`` catalog address.

	Example:
		```python
		selection_to_category(VoicingSelection("AB", "spread", "fifth"))
		# → ("AB-doubled-spread", 1)
		selection_to_category(VoicingSelection("ST", "close", "third"))
		# → ("ST-doubled-bottom-close", 2)
		```
	"""

	# ST is the only doubling whose category carries the "-bottom" infix.
	infix = "-doubled-bottom" if selection.doubling == "ST" else "-doubled"
	category = f"{selection.doubling}{infix}-{selection.spacing}"

	return category, INVERSION_INDEX[selection.inversion]


def voicing_for_selection (selection: VoicingSelection) -> typing.Optional[chorale.pitches.Voicing]:

	"""
	Return the catalog template for a selection, or ``None`` if it has none.
	"""

	category, index = selection_to_category(selection)

	return chorale.voicings.get_voicing(category, index)


def voicings_for_selections (
	selections: typing.Iterable[VoicingSelection]
) -> typing.List[typing.Tuple[str, int, chorale.pitches.Voicing]]:

	"""Resolve selections to ``(category, index, voicing)`` triples.

	Selections with no template are skipped.
	"""

	result: typing.List[typing.Tuple[str, int, chorale.pitches.Voicing]] = []

	for selection in selections:
		category, index = selection_to_category(selection)
		voicing = chorale.voicings.get_voicing(category, index)

		if voicing is None:
			continue

		result.append((category, index, voicing))

	return result
