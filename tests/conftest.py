import typing

import mido
import pytest

import chorale.chords
import chorale.pitches


class FakeMidiOut:

	"""MIDI output stub that keeps every message sent to it."""

	def __init__ (self) -> None:

		self.sent: typing.List[mido.Message] = []
		self.closed = False

	def send (self, message: mido.Message) -> None:

		"""Store the outgoing message."""

		self.sent.append(message)

	def close (self) -> None:

		self.closed = True


def _fake_get_output_names () -> list[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	return FakeMidiOut()


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use a fake MIDI output for tests that open ports."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)


def make_chord (
	root: int,
	key: str,
	voicing: chorale.pitches.Voicing = (1, 3, 5, "1'"),
	mode: str = "major",
	reference_root: typing.Optional[int] = None
) -> chorale.chords.Chord:

	"""Build a chord directly, without the range check ``generate_chord`` applies."""

	return chorale.chords.Chord(
		root = root,
		key_signature = key,
		mode = mode,
		voicing = voicing,
		pitches = chorale.pitches.resolve_chord_pitches(root, key, voicing, reference_root)
	)
