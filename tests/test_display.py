import io
import logging
import re
import sys
import typing

import pytest

import chorale.display
import chorale.drill
import chorale.transposition

import conftest


def _drill_showing (root: int, key: str, **kwargs) -> chorale.drill.Drill:

	"""Create a drill with a known chord on display."""

	drill = chorale.drill.Drill(**kwargs)
	drill.current = chorale.transposition.DisplayedChord(conftest.make_chord(root, key))

	return drill


def test_render_without_chord () -> None:

	"""An empty display explains that nothing fits."""

	drill = chorale.drill.Drill()

	assert chorale.display.render_lines(drill) == [
		"No playable chord for the enabled keys and voicings - widen the selection"
	]


def test_render_sa_tb () -> None:

	"""Two staves: soprano and alto on treble, tenor and bass on bass."""

	lines = chorale.display.render_lines(_drill_showing(1, "C"))

	assert lines[0] == "Key: C     treble  S C4     A G3"
	assert lines[1] == "           bass    T E3     B C3"
	assert lines[2] == "Chord: CM   Voicing: 1 3 5 1'   Function: I (tonic)   (C major)"
	assert len(lines) == 3


def test_render_four_staves_writes_tenor_up_an_octave () -> None:

	"""On four staves the tenor sits on a treble staff an octave higher."""

	lines = chorale.display.render_lines(_drill_showing(1, "C", clef_arrangement=chorale.display.FOUR_STAVES))

	assert len(lines) == 5
	assert "treble" in lines[2]
	assert "T E4" in lines[2]
	assert "bass" in lines[3]
	assert "B C3" in lines[3]


def test_render_spells_flats_in_flat_keys () -> None:

	lines = chorale.display.render_lines(_drill_showing(1, "Bb"))

	assert "Key: Bb" in lines[0]
	assert "S Bb4" in lines[0]
	assert "A F4" in lines[0]
	assert "T D4" in lines[1]
	assert "B Bb3" in lines[1]


def test_render_hidden_annotation () -> None:

	"""No annotation line while it is hidden."""

	lines = chorale.display.render_lines(_drill_showing(5, "G", hide_annotation=True))

	assert len(lines) == 2
	assert not any(line.startswith("Chord:") for line in lines)


def test_render_flags_out_of_range () -> None:

	"""A chord stepped out of the singing ranges is flagged."""

	drill = _drill_showing(1, "C")
	drill.current = chorale.transposition.DisplayedChord(drill.current.chord.shifted(24), octave_offset=2)

	lines = chorale.display.render_lines(drill)

	assert "Out of range: soprano, alto, tenor, bass" in lines


def test_staff_layout_rejects_unknown_arrangement () -> None:

	with pytest.raises(ValueError, match="clef arrangement"):
		chorale.display.staff_layout(conftest.make_chord(1, "C"), "grand staff")


def test_draw_writes_to_stderr () -> None:

	"""draw() writes every line with ANSI clear codes."""

	display = chorale.display.Display(chorale.drill.Drill())
	display._active = True
	display._lines = ["first", "second"]

	stream = io.StringIO()
	original_stderr = sys.stderr
	sys.stderr = stream

	try:
		display.draw()
		display.draw()
	finally:
		sys.stderr = original_stderr

	output = stream.getvalue()

	assert output.startswith("\r\033[Kfirst\n\r\033[Ksecond")
	# The second draw moves back up over the first block.
	assert "\033[1A" in output


def test_update_inactive_is_noop () -> None:

	"""update() does nothing before start()."""

	display = chorale.display.Display(chorale.drill.Drill())

	display.update()

	assert display._lines == []


def test_update_renders_drill () -> None:

	drill = _drill_showing(1, "C")
	display = chorale.display.Display(drill)
	display._active = True

	original_stderr = sys.stderr
	sys.stderr = io.StringIO()

	try:
		display.update()
	finally:
		sys.stderr = original_stderr

	assert display._lines == chorale.display.render_lines(drill)


def test_start_installs_handler_and_stop_restores () -> None:

	"""start() swaps the root handlers for a DisplayLogHandler; stop() puts them back."""

	display = chorale.display.Display(chorale.drill.Drill())

	root_logger = logging.getLogger()
	original_handlers = list(root_logger.handlers)

	original_stderr = sys.stderr
	sys.stderr = io.StringIO()

	try:
		display.start()

		assert len(root_logger.handlers) == 1
		assert isinstance(root_logger.handlers[0], chorale.display.DisplayLogHandler)

		display.stop()

		assert root_logger.handlers == original_handlers
	finally:
		display.stop()
		sys.stderr = original_stderr


def test_log_messages_scroll_above_block () -> None:

	"""Log output clears the block, prints, then redraws it."""

	drill = _drill_showing(1, "C")
	display = chorale.display.Display(drill)

	stream = io.StringIO()
	original_stderr = sys.stderr
	sys.stderr = stream

	try:
		display.start()
		display.update()
		logging.getLogger("chorale.test").warning("hello from the drill")
	finally:
		display.stop()
		sys.stderr = original_stderr

	output = stream.getvalue()
	message_at = output.index("hello from the drill")

	assert "Key: C" in output[message_at:]


def _screen (output: str) -> list:

	"""Replay the cursor movement and line clears the display uses; return the visible rows."""

	rows = [""]
	row = 0
	col = 0

	for token in re.split(r"(\033\[\d*[AK]|\r|\n)", output):

		if not token:
			continue

		if token == "\r":
			col = 0
		elif token == "\n":
			row += 1
			col = 0
		elif token.startswith("\033[") and token.endswith("A"):
			row -= int(token[2:-1] or 1)
		elif token.startswith("\033[") and token.endswith("K"):
			rows[row] = rows[row][:col]
		else:
			rows[row] = rows[row][:col].ljust(col) + token + rows[row][col + len(token):]
			col += len(token)

		while len(rows) <= row:
			rows.append("")

	return [r for r in rows if r.strip()]


def _redraw_after (drill: chorale.drill.Drill, change: typing.Callable[[], None]) -> list:

	display = chorale.display.Display(drill)
	display._active = True

	stream = io.StringIO()
	original_stderr = sys.stderr
	sys.stderr = stream

	try:
		display.update()
		change()
		display.update()
	finally:
		sys.stderr = original_stderr

	return _screen(stream.getvalue())


def test_hiding_annotation_erases_it () -> None:

	"""A block that shrinks leaves none of its old rows on screen."""

	drill = _drill_showing(3, "C")

	screen = _redraw_after(drill, drill.toggle_annotation)

	assert screen == chorale.display.render_lines(drill)
	assert not any(row.startswith("Chord:") for row in screen)


def test_exhausted_selection_replaces_whole_block () -> None:

	"""The no-chord hint is the only thing left after the staves disappear."""

	drill = _drill_showing(1, "C")

	def _clear () -> None:
		drill.current = None

	screen = _redraw_after(drill, _clear)

	assert screen == ["No playable chord for the enabled keys and voicings - widen the selection"]


def test_growing_block_redraws_in_place () -> None:

	drill = _drill_showing(1, "C", hide_annotation=True)

	screen = _redraw_after(drill, drill.toggle_annotation)

	assert screen == chorale.display.render_lines(drill)
	assert len(screen) == 3


def test_render_keeps_key_spelling () -> None:

	"""Staff note names agree with the key signature."""

	lines = chorale.display.render_lines(_drill_showing(4, "Gb"))

	assert "S Cb4" in lines[0]
	assert "B Cb3" in lines[1]
	assert "B3" not in lines[0]
