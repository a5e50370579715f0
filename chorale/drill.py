"""A chord-reading drill session.

Holds what the user has enabled (keys, mode, doublings, spacings,
inversions), the chord currently shown and whether its annotation is
visible. Nothing recomputes on its own: every toggle just edits a set, and
the enabled voicings are expanded when the next chord is requested.

Example:
	```python
	import chorale.drill

	drill = chorale.drill.Drill(keys=["C", "F"], seed=42)
	drill.toggle_doubling("AB")
	shown = drill.next_chord()
	shown = drill.transpose("up")
	```
"""

import logging
import random
import typing

import chorale.annotation
import chorale.display
import chorale.generation
import chorale.keys
import chorale.midi_utils
import chorale.transposition
import chorale.voicing_selection


logger = logging.getLogger(__name__)

DEFAULT_KEYS: typing.List[str] = ["C", "G", "D"]
DEFAULT_DOUBLINGS: typing.List[str] = ["SB"]
DEFAULT_SPACINGS: typing.List[str] = ["close"]
DEFAULT_INVERSIONS: typing.List[str] = ["root", "fifth"]


def _check_allowed (value: str, allowed: typing.List[str], label: str) -> str:

	if value not in allowed:
		raise ValueError(f"Unknown {label}: {value!r}. Expected one of {', '.join(allowed)}")

	return value


def _enabled_set (values: typing.Iterable[str], allowed: typing.List[str], label: str) -> typing.Set[str]:
	return {_check_allowed(value, allowed, label) for value in values}


def _log_search_step (step: chorale.generation.SearchStep) -> None:

	logger.debug(f"Category: {step.category}, Index: {step.index}, Key: {step.key}, Valid combinations: {step.combinations}")


class Drill:

	"""
	Selection state and the currently displayed chord.
	"""

	def __init__ (
		self,
		keys: typing.Optional[typing.Iterable[str]] = None,
		mode: str = "major",
		doublings: typing.Optional[typing.Iterable[str]] = None,
		spacings: typing.Optional[typing.Iterable[str]] = None,
		inversions: typing.Optional[typing.Iterable[str]] = None,
		clef_arrangement: str = chorale.display.SA_TB,
		hide_annotation: bool = False,
		seed: typing.Optional[int] = None,
		player: typing.Optional[chorale.midi_utils.ChordPlayer] = None
	) -> None:

		"""Start a session with nothing displayed.

		Parameters:
			keys: Enabled key signatures (default C, G, D).
			mode: ``"major"`` or ``"minor"``.
			doublings: Enabled doublings (default SB).
			spacings: Enabled spacings (default close).
			inversions: Enabled inversions (default root and fifth).
			clef_arrangement: ``"SA/TB"`` or ``"Four staves"``.
			hide_annotation: When True, each new chord starts with its
				annotation hidden.
			seed: Seed for a repeatable sequence of chords.
			player: Optional MIDI player that sounds each displayed chord.
		"""

		self.keys = _enabled_set(DEFAULT_KEYS if keys is None else keys, chorale.keys.KEY_SIGNATURES, "key signature")
		self.mode = chorale.keys.validate_mode(mode)

		self.doublings = _enabled_set(DEFAULT_DOUBLINGS if doublings is None else doublings, chorale.voicing_selection.DOUBLINGS, "doubling")
		self.spacings = _enabled_set(DEFAULT_SPACINGS if spacings is None else spacings, chorale.voicing_selection.SPACINGS, "spacing")
		self.inversions = _enabled_set(DEFAULT_INVERSIONS if inversions is None else inversions, chorale.voicing_selection.INVERSIONS, "inversion")

		self.clef_arrangement = chorale.display.validate_clef_arrangement(clef_arrangement)
		self.hide_annotation = hide_annotation
		self.annotation_visible = not hide_annotation

		self.rng = random.Random(seed)
		self.player = player
		self.current: typing.Optional[chorale.transposition.DisplayedChord] = None


	@classmethod
	def from_config (cls, config: typing.Dict[str, typing.Any], player: typing.Optional[chorale.midi_utils.ChordPlayer] = None) -> "Drill":

		"""Build a session from a parsed configuration dict.

		Reads the ``drill`` and ``display`` sections; missing values fall back
		to the defaults.
		"""

		drill_config = config.get("drill") or {}
		display_config = config.get("display") or {}

		return cls(
			keys = drill_config.get("keys"),
			mode = drill_config.get("mode", "major"),
			doublings = drill_config.get("doublings"),
			spacings = drill_config.get("spacings"),
			inversions = drill_config.get("inversions"),
			clef_arrangement = display_config.get("clef_arrangement", chorale.display.SA_TB),
			hide_annotation = bool(display_config.get("hide_annotation", False)),
			seed = drill_config.get("seed"),
			player = player
		)


	# ------------------------------------------------------------------
	# Selection state
	# ------------------------------------------------------------------

	@staticmethod
	def _toggle (enabled: typing.Set[str], value: str, allowed: typing.List[str], label: str) -> None:

		_check_allowed(value, allowed, label)

		if value in enabled:
			enabled.remove(value)
		else:
			enabled.add(value)

	def toggle_key (self, key: str) -> None:
		self._toggle(self.keys, key, chorale.keys.KEY_SIGNATURES, "key signature")

	def toggle_doubling (self, doubling: str) -> None:
		self._toggle(self.doublings, doubling, chorale.voicing_selection.DOUBLINGS, "doubling")

	def toggle_spacing (self, spacing: str) -> None:
		self._toggle(self.spacings, spacing, chorale.voicing_selection.SPACINGS, "spacing")

	def toggle_inversion (self, inversion: str) -> None:
		self._toggle(self.inversions, inversion, chorale.voicing_selection.INVERSIONS, "inversion")

	def select_all_keys (self) -> None:
		self.keys = set(chorale.keys.KEY_SIGNATURES)

	def clear_keys (self) -> None:
		self.keys = set()

	def select_all_voicings (self) -> None:

		"""
		Enable every doubling, spacing and inversion.
		"""

		self.doublings = set(chorale.voicing_selection.DOUBLINGS)
		self.spacings = set(chorale.voicing_selection.SPACINGS)
		self.inversions = set(chorale.voicing_selection.INVERSIONS)

	def clear_voicings (self) -> None:

		self.doublings = set()
		self.spacings = set()
		self.inversions = set()

	def set_mode (self, mode: str) -> None:
		self.mode = chorale.keys.validate_mode(mode)

	def set_hide_annotation (self, hide: bool) -> None:

		"""
		Turn the hide-annotation option on or off; also applies to the current chord.
		"""

		self.hide_annotation = hide
		self.annotation_visible = not hide

	def enabled_keys (self) -> typing.List[str]:

		"""
		Return enabled keys in circle order (sharps, then flats).
		"""

		return [key for key in chorale.keys.KEY_SIGNATURES if key in self.keys]

	def selections (self) -> typing.List[chorale.voicing_selection.VoicingSelection]:

		"""
		Expand the enabled toggles into voicing selections.
		"""

		return chorale.voicing_selection.expand_selections(
			[d for d in chorale.voicing_selection.DOUBLINGS if d in self.doublings],
			[s for s in chorale.voicing_selection.SPACINGS if s in self.spacings],
			[i for i in chorale.voicing_selection.INVERSIONS if i in self.inversions],
		)


	# ------------------------------------------------------------------
	# Actions
	# ------------------------------------------------------------------

	def next_chord (self) -> typing.Optional[chorale.transposition.DisplayedChord]:

		"""Draw a new chord and display it.

		Returns:
			The new displayed chord, or ``None`` when the current selection
			has no playable combination (the display is cleared).
		"""

		chord = chorale.generation.generate_random_chord(
			self.selections(),
			self.enabled_keys(),
			self.mode,
			rng = self.rng,
			observer = _log_search_step
		)

		self.annotation_visible = not self.hide_annotation

		if chord is None:
			logger.warning("No playable chord for the enabled keys and voicings - widen the selection")
			self.current = None
			return None

		self.current = chorale.transposition.DisplayedChord(chord)
		self._sound()

		return self.current


	def transpose (self, direction: str) -> typing.Optional[chorale.transposition.DisplayedChord]:

		"""
		Step the displayed chord one scale degree up or down.
		"""

		if self.current is None:
			return None

		self.current = chorale.transposition.transpose(self.current, direction)
		self._sound()

		return self.current


	def toggle_annotation (self) -> None:
		self.annotation_visible = not self.annotation_visible


	def annotation (self) -> typing.Optional[chorale.annotation.Annotation]:

		"""
		Return the labels for the displayed chord, or ``None`` while hidden.
		"""

		if self.current is None or not self.annotation_visible:
			return None

		return chorale.annotation.annotate(self.current.chord)


	def _sound (self) -> None:

		if self.player is not None and self.current is not None:
			self.player.play(self.current.chord)
