"""Keyboard control of a drill session.

The drill is driven one key at a time:

- space: next chord
- ``k`` / ``j``: step the chord up / down one scale degree
- ``a``: show or hide the annotation
- ``?``: list the bindings
- ``q``: end the session

:class:`KeystrokeListener` reads single keys from stdin in cbreak mode on a
background thread, and :meth:`KeystrokeListener.poll` runs the bound drill
actions on the caller's thread, so the drill itself is never touched
concurrently. The display writes to stderr and the listener reads stdin.

Cbreak input needs ``termios`` and a real TTY on stdin. Without them
:data:`HOTKEYS_SUPPORTED` is False and the caller falls back to whole lines
typed at a prompt, interpreted by :func:`key_from_line`.
"""

import dataclasses
import logging
import queue
import select
import sys
import threading
import typing

if typing.TYPE_CHECKING:
	from chorale.drill import Drill


logger = logging.getLogger(__name__)

HELP_KEY = "?"
QUIT_KEY = "q"
NEXT_CHORD_KEY = " "

POLL_INTERVAL = 0.1


def _terminal_problem () -> typing.Optional[str]:

	"""Return why cbreak input cannot work here, or ``None`` if it can."""

	try:
		import termios  # noqa: PLC0415
	except ImportError:
		return "Single-key input needs the POSIX 'termios' module (Linux or macOS)."

	if sys.stdin is None or not sys.stdin.isatty():
		return "stdin is not an interactive terminal."

	try:
		fd = sys.stdin.fileno()
		termios.tcsetattr(fd, termios.TCSADRAIN, termios.tcgetattr(fd))
	except (OSError, ValueError, termios.error) as exc:
		return f"Cannot configure the terminal: {exc}"

	return None


#: Why single-key input is unavailable, or ``None`` when it works.
HOTKEYS_UNAVAILABLE_REASON: typing.Optional[str] = _terminal_problem()

#: ``True`` when single-key input can work on this platform and stdin.
HOTKEYS_SUPPORTED: bool = HOTKEYS_UNAVAILABLE_REASON is None


@dataclasses.dataclass
class HotkeyBinding:

	"""A key and the zero-argument drill action it triggers."""

	key: str
	action: typing.Callable[[], typing.Any]
	label: str


def drill_hotkeys (drill: "Drill") -> typing.Dict[str, HotkeyBinding]:

	"""Return the standard bindings for a drill session, keyed by character."""

	bindings = [
		HotkeyBinding(NEXT_CHORD_KEY, drill.next_chord, "next chord"),
		HotkeyBinding("k", lambda: drill.transpose("up"), "step up"),
		HotkeyBinding("j", lambda: drill.transpose("down"), "step down"),
		HotkeyBinding("a", drill.toggle_annotation, "toggle annotation"),
	]

	return {binding.key: binding for binding in bindings}


def key_from_line (line: str) -> str:

	"""Map a line typed at the prompt to a key; an empty line is the next-chord key."""

	return line.strip()[:1] or NEXT_CHORD_KEY


def list_hotkeys (bindings: typing.Dict[str, HotkeyBinding]) -> None:

	"""Log every binding (triggered by the ``?`` key)."""

	lines = ["Active hotkeys:"]

	for key in sorted(bindings):
		name = "space" if key == NEXT_CHORD_KEY else key
		lines.append(f"  {name}  →  {bindings[key].label}")

	lines.append(f"  {HELP_KEY}  →  list hotkeys")
	lines.append(f"  {QUIT_KEY}  →  quit")

	logger.info("\n".join(lines))


def dispatch (key: str, bindings: typing.Dict[str, HotkeyBinding]) -> bool:

	"""Run the action bound to ``key``.

	An action that raises is logged as a warning; the drill keeps running.

	Returns:
		True if a binding (or the help key) handled the key.
	"""

	if key == HELP_KEY:
		list_hotkeys(bindings)
		return True

	binding = bindings.get(key)

	if binding is None:
		return False

	try:
		binding.action()
	except Exception as exc:
		logger.warning(f"Hotkey {key!r} action raised: {exc}")

	return True


class KeystrokeListener:

	"""Reads drill keys from the terminal and applies them on :meth:`poll`.

	Example::

		listener = KeystrokeListener(drill_hotkeys(drill))
		listener.start()

		while not listener.quit_requested:
		    if listener.poll():
		        display.update()
		    time.sleep(0.02)

		listener.stop()

	On an unsupported terminal :meth:`start` logs a warning and leaves
	:attr:`active` False.
	"""

	def __init__ (self, bindings: typing.Dict[str, HotkeyBinding]) -> None:

		self.bindings = bindings
		self.active: bool = False
		self.quit_requested: bool = False

		self._keys: queue.Queue[str] = queue.Queue()
		self._thread: typing.Optional[threading.Thread] = None

	def start (self) -> None:

		"""Begin reading keys. A second call is a no-op."""

		if self.active:
			return

		if not HOTKEYS_SUPPORTED:
			logger.warning(f"Single-key controls are disabled. {HOTKEYS_UNAVAILABLE_REASON}")
			return

		self.active = True
		self._thread = threading.Thread(target=self._read_keys, name="chorale-keys", daemon=True)
		self._thread.start()

	def stop (self) -> None:

		"""Ask the reader thread to restore the terminal and exit."""

		self.active = False

	def feed (self, key: str) -> None:

		"""Queue a key as if it had been typed."""

		self._keys.put(key)

	def drain (self) -> typing.List[str]:

		"""Return the keys typed since the last drain, oldest first. Never blocks."""

		keys: typing.List[str] = []

		while True:
			try:
				keys.append(self._keys.get_nowait())
			except queue.Empty:
				return keys

	def poll (self) -> bool:

		"""Apply every queued key to the drill.

		Keys after the quit key are discarded and :attr:`quit_requested` is set.

		Returns:
			True if any key changed what should be displayed.
		"""

		handled = False

		for key in self.drain():

			if key == QUIT_KEY:
				self.quit_requested = True
				break

			handled = dispatch(key, self.bindings) or handled

		return handled

	def _read_keys (self) -> None:

		import termios  # noqa: PLC0415
		import tty      # noqa: PLC0415

		fd = sys.stdin.fileno()
		saved = termios.tcgetattr(fd)

		try:
			# cbreak keeps Ctrl+C working.
			tty.setcbreak(fd)

			while self.active:
				ready, _, _ = select.select([sys.stdin], [], [], POLL_INTERVAL)

				if ready:
					char = sys.stdin.read(1)

					if char:
						self.feed(char)

		except (OSError, ValueError, termios.error) as exc:
			logger.warning(f"Keyboard input stopped: {exc}")

		finally:
			termios.tcsetattr(fd, termios.TCSADRAIN, saved)
			self.active = False
