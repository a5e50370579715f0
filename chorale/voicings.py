"""SATB voicing templates.

Each template lists the chord member sung by bass, tenor, alto and soprano
(bottom to top). ``1``, ``3`` and ``5`` are root, third and fifth; each
trailing apostrophe lifts the note one octave above the reference root.

Templates are grouped by category - which voice pair doubles a chord tone,
and whether the upper voices are in close or spread position. Within a
category, the list index is the inversion:

- ``0`` root on the bottom
- ``1`` fifth on the bottom
- ``2`` third on the bottom

Some templates are only idiomatic for supertonic, mediant or submediant
roots; they are marked below. Lookups of a category or index that does not
exist return ``None``.

Example:
	```python
	import chorale.voicings

	chorale.voicings.get_voicing("SB-doubled-close", 0)   # → (1, 3, 5, "1'")
	chorale.voicings.get_voicing("XX-doubled-close", 0)   # → None
	```
"""

import typing

import chorale.pitches


VOICINGS: typing.Dict[str, typing.List[chorale.pitches.Voicing]] = {
	"SB-doubled-close": [
		(1, 3, 5, "1'"),
		(5, "1'", "3'", "5'"),
		(3, 5, "1'", "3'"),  # supertonic, mediant, submediant only
	],
	"SB-doubled-spread": [
		(1, 5, "3'", "1''"),
		(5, "3'", "1''", "5''"),
		(3, "1'", "5'", "3''"),  # supertonic, mediant, submediant only
	],
	"AB-doubled-close": [
		(1, 5, "1'", "3'"),
		(5, "3'", "5'", "1''"),
		(3, "1'", "3'", "5'"),
	],
	"AB-doubled-spread": [
		(1, 3, "1'", "5'"),
		(5, "1'", "5'", "3''"),
		(3, 5, "3'", "1''"),
	],
	"TB-doubled-close": [
		(1, "1'", "3'", "5'"),
		(5, "5'", "1''", "3''"),
		(3, "3'", "5'", "1''"),
	],
	"TB-doubled-spread": [
		(1, "1'", "5'", "3''"),
		(5, "5'", "3''", "1'''"),
		(3, "3'", "1''", "5''"),
	],
	"ST-doubled-bottom-close": [
		(1, 3, 5, "3'"),
		(5, "1'", "3'", "1''"),
		(3, 5, "1'", "5'"),
	],
	"ST-doubled-bottom-spread": [
		(1, 5, "3'", "5'"),
		(5, "3'", "1''", "3''"),
		(3, "1'", "5'", "1''"),
	],
	"TA-doubled-close": [
		(1, 3, "3'", "5'"),  # supertonic, mediant, submediant only
		(5, "1'", "1''", "3''"),
		(3, 5, "5'", "1''"),
	],
	"TA-doubled-spread": [
		(1, 5, "5'", "3''"),
		(5, "3'", "3''", "1'''"),  # supertonic, mediant, submediant only
		(3, "1'", "1''", "5''"),
	],
	"AS-doubled-close": [
		(1, 3, 5, "5'"),
		(5, "1'", "3'", "3''"),  # supertonic, mediant, submediant only
		(3, 5, "1'", "1''"),
	],
	"AS-doubled-spread": [
		(1, 5, "3'", "3''"),  # supertonic, mediant, submediant only
		(5, "3'", "1''", "1'''"),
		(3, "1'", "5'", "5''"),
	],
}


def get_voicing (category: str, index: int) -> typing.Optional[chorale.pitches.Voicing]:

	"""Return the template for a category and inversion index, or ``None``.

	A miss is not an error: the category may be unknown, or it may define
	fewer templates than ``index`` requires.
	"""

	templates = VOICINGS.get(category)

	if templates is None or not 0 <= index < len(templates):
		return None

	return templates[index]


def all_categories () -> typing.List[str]:

	"""
	Return every category name in catalog order.
	"""

	return list(VOICINGS)


def all_voicings () -> typing.List[typing.Tuple[str, int, chorale.pitches.Voicing]]:

	"""
	Return every ``(category, index, voicing)`` template, flattened.
	"""

	return [
		(category, index, voicing)
		for category, templates in VOICINGS.items()
		for index, voicing in enumerate(templates)
	]
