import argparse
import logging
import os
import time
import typing

import yaml

import chorale.display
import chorale.drill
import chorale.keystroke
import chorale.midi_utils


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_player (config: dict) -> typing.Optional[chorale.midi_utils.ChordPlayer]:

	"""
	Create a MIDI player when the config asks for a device or a recording.
	"""

	midi_config = config.get('midi') or {}
	device_name = midi_config.get('device_name')
	record = midi_config.get('record_filename') is not None

	if device_name is None and not record:
		return None

	port = None

	if device_name is not None:
		_, port = chorale.midi_utils.select_output_device(device_name)

	return chorale.midi_utils.ChordPlayer(port=port, record=record)


def run_line_mode (drill: chorale.drill.Drill, display: chorale.display.Display, bindings: typing.Dict[str, chorale.keystroke.HotkeyBinding]) -> None:

	"""
	Drive the drill from whole lines of input when single keystrokes are unavailable.
	"""

	while True:
		try:
			line = input()
		except EOFError:
			return

		key = chorale.keystroke.key_from_line(line)

		if key == chorale.keystroke.QUIT_KEY:
			return

		chorale.keystroke.dispatch(key, bindings)
		display.update()


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the chorale drill.
	"""

	parser = argparse.ArgumentParser(description="SATB chord reading drill")
	parser.add_argument("--config", default="config.yaml", help="Path to a YAML config file")
	args = parser.parse_args(argv)

	logger.info("Chorale starting...")

	config = load_config(args.config)
	player = build_player(config)
	drill = chorale.drill.Drill.from_config(config, player=player)

	display = chorale.display.Display(drill)
	bindings = chorale.keystroke.drill_hotkeys(drill)
	listener = chorale.keystroke.KeystrokeListener(bindings)

	display.start()
	drill.next_chord()
	display.update()

	try:
		listener.start()

		if not listener.active:
			logger.info("Press Enter for the next chord, or type k, j, a, ? or q then Enter.")
			run_line_mode(drill, display, bindings)
			return

		while not listener.quit_requested:

			if listener.poll():
				display.update()

			time.sleep(0.02)

	except KeyboardInterrupt:
		logger.info("Stopping...")

	finally:
		listener.stop()
		display.stop()

		if player is not None:
			player.close()
			player.save_recording((config.get('midi') or {}).get('record_filename'))


if __name__ == "__main__":
	main()
