"""MIDI output for drill chords.

Each displayed chord can be sounded on a MIDI output port (held until the
next chord replaces it) and recorded so the whole session can be saved as a
standard MIDI file, one whole-note block chord per bar.
"""

import datetime
import logging
import typing

import mido

import chorale.chords


logger = logging.getLogger(__name__)

TICKS_PER_BEAT = 480
BEATS_PER_CHORD = 4
DEFAULT_VELOCITY = 80


def select_output_device (device_name: typing.Optional[str] = None) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""Open a MIDI output port.

	If ``device_name`` is given, that port is opened. Otherwise a single
	available port is opened automatically; with none or several available,
	nothing is opened.

	Returns:
		``(device_name, port)``, or ``(None, None)`` when no port was opened.
	"""

	try:
		outputs = mido.get_output_names()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None:
			if device_name not in outputs:
				logger.error(f"MIDI output device '{device_name}' not found. Available devices: {outputs}")
				return None, None

			port = mido.open_output(device_name)
			logger.info(f"Opened MIDI output: {device_name}")
			return device_name, port

		if len(outputs) == 1:
			port = mido.open_output(outputs[0])
			logger.info(f"One MIDI output found - using '{outputs[0]}'")
			return outputs[0], port

		logger.warning(f"Several MIDI outputs found; set midi.device_name to one of {outputs}")
		return None, None

	except OSError as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None


def note_on_messages (chord: chorale.chords.Chord, velocity: int = DEFAULT_VELOCITY, channel: int = 0) -> typing.List[mido.Message]:

	"""
	Return note_on messages for the chord, bass first.
	"""

	return [
		mido.Message("note_on", channel=channel, note=pitch, velocity=velocity)
		for pitch in reversed(chord.pitches)
	]


def note_off_messages (chord: chorale.chords.Chord, channel: int = 0) -> typing.List[mido.Message]:

	"""
	Return note_off messages for the chord, bass first.
	"""

	return [
		mido.Message("note_off", channel=channel, note=pitch, velocity=0)
		for pitch in reversed(chord.pitches)
	]


class ChordPlayer:

	"""Sounds the displayed chord on an output port and records the session.

	Example:
		```python
		_, port = select_output_device("IAC Driver Bus 1")
		player = ChordPlayer(port=port, record=True)
		player.play(chord)
		player.close()
		player.save_recording("session.mid")
		```
	"""

	def __init__ (
		self,
		port: typing.Optional[typing.Any] = None,
		record: bool = False,
		velocity: int = DEFAULT_VELOCITY,
		channel: int = 0
	) -> None:

		"""
		Store the port and recording options; nothing sounds until ``play()``.
		"""

		self.port = port
		self.recording = record
		self.velocity = velocity
		self.channel = channel
		self.recorded_chords: typing.List[chorale.chords.Chord] = []
		self._sounding: typing.Optional[chorale.chords.Chord] = None


	def play (self, chord: chorale.chords.Chord) -> None:

		"""
		Release the chord currently sounding (if any) and sound ``chord``.
		"""

		if self.recording:
			self.recorded_chords.append(chord)

		if self.port is None:
			return

		self.release()

		for message in note_on_messages(chord, self.velocity, self.channel):
			self.port.send(message)

		self._sounding = chord


	def release (self) -> None:

		"""
		Send note_off for the chord currently sounding.
		"""

		if self.port is None or self._sounding is None:
			return

		for message in note_off_messages(self._sounding, self.channel):
			self.port.send(message)

		self._sounding = None


	def close (self) -> None:

		"""
		Release any held notes and close the port.
		"""

		if self.port is None:
			return

		self.release()
		self.port.close()
		self.port = None


	def build_midi_file (self) -> mido.MidiFile:

		"""
		Return the recorded chords as a one-track MIDI file, one chord per bar.
		"""

		mid = mido.MidiFile(type=1, ticks_per_beat=TICKS_PER_BEAT)
		track = mido.MidiTrack()
		mid.tracks.append(track)

		chord_ticks = TICKS_PER_BEAT * BEATS_PER_CHORD

		for chord in self.recorded_chords:

			for message in note_on_messages(chord, self.velocity, self.channel):
				track.append(message.copy(time=0))

			# The first note_off carries the whole duration; the rest are simultaneous.
			for i, message in enumerate(note_off_messages(chord, self.channel)):
				track.append(message.copy(time=chord_ticks if i == 0 else 0))

		return mid


	def save_recording (self, filename: typing.Optional[str] = None) -> typing.Optional[str]:

		"""Save recorded chords to a MIDI file.

		Parameters:
			filename: Output path. Defaults to a timestamped name.

		Returns:
			The path written, or ``None`` if nothing was recorded or the
			write failed.
		"""

		if not self.recording or not self.recorded_chords:
			return None

		if filename is None:
			filename = datetime.datetime.now().strftime("drill_%Y%m%d_%H%M%S.mid")

		logger.info(f"Saving {len(self.recorded_chords)} chords to {filename}...")

		try:
			self.build_midi_file().save(filename)
		except OSError as e:
			logger.error(f"Failed to save MIDI recording: {e}")
			return None

		logger.info(f"Saved {filename}")

		return filename
