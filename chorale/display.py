"""Terminal display of the current drill chord.

Renders the chord as staves of spelled note names, followed by the
annotation when it is visible. The block is redrawn in place on stderr, and
a custom log handler keeps log messages scrolling above it.

Two clef arrangements are supported:

- ``"SA/TB"``: soprano and alto on a treble staff, tenor and bass on a bass staff.
- ``"Four staves"``: one staff per voice. The tenor is written an octave higher
  on a treble staff, as in vocal scores.

Example output::

	Key: D     treble  S D4     A A3
	           bass    T F#3    B D3
	Chord: DM   Voicing: 1 3 5 1'   Function: I (tonic)   (D major)
"""

import logging
import sys
import typing

import chorale.annotation
import chorale.chords
import chorale.ranges

if typing.TYPE_CHECKING:
	from chorale.drill import Drill


SA_TB = "SA/TB"
FOUR_STAVES = "Four staves"

CLEF_ARRANGEMENTS: typing.List[str] = [SA_TB, FOUR_STAVES]

_VOICE_LABELS: typing.Dict[str, str] = {"soprano": "S", "alto": "A", "tenor": "T", "bass": "B"}
_CLEF_WIDTH = 8
_NOTE_WIDTH = 5

Staff = typing.Tuple[str, typing.List[typing.Tuple[str, int]]]


def validate_clef_arrangement (arrangement: str) -> str:

	if arrangement not in CLEF_ARRANGEMENTS:
		raise ValueError(f"Unknown clef arrangement: {arrangement!r}. Expected one of {', '.join(CLEF_ARRANGEMENTS)}")

	return arrangement


def staff_layout (chord: chorale.chords.Chord, arrangement: str) -> typing.List[Staff]:

	"""Assign voices to staves, top staff first.

	Returns:
		``(clef, [(voice, written_pitch), ...])`` per staff. Written pitch
		differs from sounding pitch only for the tenor on four staves.
	"""

	soprano, alto, tenor, bass = chord.pitches

	if validate_clef_arrangement(arrangement) == SA_TB:
		return [
			("treble", [("soprano", soprano), ("alto", alto)]),
			("bass", [("tenor", tenor), ("bass", bass)]),
		]

	return [
		("treble", [("soprano", soprano)]),
		("treble", [("alto", alto)]),
		("treble", [("tenor", tenor + 12)]),
		("bass", [("bass", bass)]),
	]


def render_lines (drill: "Drill") -> typing.List[str]:

	"""Build the display block for the drill's current state."""

	if drill.current is None:
		return ["No playable chord for the enabled keys and voicings - widen the selection"]

	chord = drill.current.chord
	lines: typing.List[str] = []

	for i, (clef, voices) in enumerate(staff_layout(chord, drill.clef_arrangement)):

		prefix = f"Key: {chord.key_signature}" if i == 0 else ""
		notes = "  ".join(
			f"{_VOICE_LABELS[voice]} {chorale.annotation.spell_voice(chord, voice, pitch).ljust(_NOTE_WIDTH)}"
			for voice, pitch in voices
		)
		lines.append(f"{prefix.ljust(10)} {clef.ljust(_CLEF_WIDTH)}{notes}".rstrip())

	# Stepping can carry a chord outside the ranges the generator enforces.
	outside = chorale.ranges.out_of_range_voices(chord.pitches)

	if outside:
		lines.append(f"Out of range: {', '.join(outside)}")

	annotation = drill.annotation()

	if annotation is not None:
		lines.append(f"Chord: {annotation.chord}   Voicing: {annotation.voicing}   Function: {annotation.function}   ({annotation.key})")

	return lines


class DisplayLogHandler (logging.Handler):

	"""Logging handler that clears and redraws the chord block around log output.

	Installed by ``Display.start()`` and removed by ``Display.stop()``.
	"""

	def __init__ (self, display: "Display") -> None:

		super().__init__()
		self._display = display

	def emit (self, record: logging.LogRecord) -> None:

		"""Clear the block, write the log message, then redraw."""

		try:
			self._display.clear()

			msg = self.format(record)
			sys.stderr.write(msg + "\n")
			sys.stderr.flush()

			self._display.draw()

		except Exception:
			self.handleError(record)


class Display:

	"""Redraws the drill's chord block in place on stderr.

	Example:
		```python
		display = Display(drill)
		display.start()
		drill.next_chord()
		display.update()
		display.stop()
		```
	"""

	def __init__ (self, drill: "Drill") -> None:

		"""Store the drill to read state from; nothing is drawn until started."""

		self._drill = drill
		self._active: bool = False
		self._handler: typing.Optional[DisplayLogHandler] = None
		self._saved_handlers: typing.List[logging.Handler] = []
		self._lines: typing.List[str] = []
		self._drawn_line_count: int = 0

	def start (self) -> None:

		"""Replace the root logger's handlers with one that respects the block.

		The original handlers are restored by ``stop()``.
		"""

		if self._active:
			return

		self._active = True

		root_logger = logging.getLogger()
		self._saved_handlers = list(root_logger.handlers)
		self._handler = DisplayLogHandler(self)

		if self._saved_handlers and self._saved_handlers[0].formatter:
			self._handler.setFormatter(self._saved_handlers[0].formatter)
		else:
			self._handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))

		root_logger.handlers.clear()
		root_logger.addHandler(self._handler)

	def stop (self) -> None:

		"""Clear the block and restore the original log handlers."""

		if not self._active:
			return

		self.clear()
		self._active = False

		root_logger = logging.getLogger()
		root_logger.handlers.clear()

		for handler in self._saved_handlers:
			root_logger.addHandler(handler)

		self._saved_handlers = []
		self._handler = None

	def update (self) -> None:

		"""Re-read the drill state and redraw."""

		if not self._active:
			return

		self._lines = render_lines(self._drill)
		self.draw()

	def draw (self) -> None:

		"""Write the current block to the terminal."""

		if not self._active or not self._lines:
			return

		# A shorter block would leave rows of the old one on screen.
		if self._drawn_line_count > len(self._lines):
			self.clear()

		# Cursor sits on the last line of the previous block.
		if self._drawn_line_count > 1:
			sys.stderr.write(f"\033[{self._drawn_line_count - 1}A")

		for line in self._lines[:-1]:
			sys.stderr.write(f"\r\033[K{line}\n")

		sys.stderr.write(f"\r\033[K{self._lines[-1]}")
		sys.stderr.flush()

		self._drawn_line_count = len(self._lines)

	def clear (self) -> None:

		"""Erase the drawn block from the terminal."""

		if not self._active:
			return

		if self._drawn_line_count > 1:
			sys.stderr.write(f"\033[{self._drawn_line_count - 1}A")

			for _ in range(self._drawn_line_count):
				sys.stderr.write("\r\033[K\n")

			sys.stderr.write(f"\033[{self._drawn_line_count}A")
		else:
			sys.stderr.write("\r\033[K")

		sys.stderr.flush()
		self._drawn_line_count = 0
