import os
import random

import mido
import pytest

import songbrain.arrangement
import songbrain.midi_export
import songbrain.song_state


@pytest.fixture
def arrangement () -> songbrain.arrangement.Arrangement:

	"""A short seeded punk song."""

	return songbrain.arrangement.arrange_song("PUNK_ROCK", root_pc=4, rng=random.Random(3))


def _note_ons (track: mido.MidiTrack) -> list:

	return [message for message in track if message.type == 'note_on' and message.velocity > 0]


def test_midi_velocity () -> None:

	"""Normalised velocities map to 1-127 and never to a silent zero."""

	assert songbrain.midi_export.midi_velocity(1.0) == 127
	assert songbrain.midi_export.midi_velocity(0.5) == 64
	assert songbrain.midi_export.midi_velocity(0.0) == 1
	assert songbrain.midi_export.midi_velocity(1.5) == 127


def test_step_to_ticks () -> None:

	"""A sixteenth is 120 ticks at 480 ticks per beat."""

	assert songbrain.midi_export.step_to_ticks(4, 16) == 480
	assert songbrain.midi_export.step_to_ticks(1.2, 16) == 144
	assert songbrain.midi_export.step_to_ticks(1, 8) == 240


def test_back_to_back_notes_release_before_retrigger () -> None:

	"""On a shared tick the note off comes first, so repeated pitches retrigger cleanly."""

	notes = [
		songbrain.song_state.GeneratedNote(60, 0, 4, 0.8),
		songbrain.song_state.GeneratedNote(60, 4, 4, 0.8),
	]

	events = songbrain.midi_export._note_messages(notes, 0, 16)

	assert [(tick, message.type) for tick, _, message in events] == [
		(0, 'note_on'), (480, 'note_off'), (480, 'note_on'), (960, 'note_off'),
	]


def test_zero_length_notes_last_one_tick () -> None:

	"""A note never ends on the tick it starts."""

	events = songbrain.midi_export._note_messages([songbrain.song_state.GeneratedNote(60, 2, 0, 0.8)], 0, 16)

	assert [tick for tick, _, _ in events] == [240, 241]


def test_arrangement_to_midi (arrangement) -> None:

	"""A conductor track then one track per part, drums on channel 10."""

	mid = songbrain.midi_export.arrangement_to_midi(arrangement)

	assert mid.type == 1
	assert mid.ticks_per_beat == 480
	assert len(mid.tracks) == 6

	tempo = [message for message in mid.tracks[0] if message.type == 'set_tempo']
	assert tempo[0].tempo == mido.bpm2tempo(160)

	drums = mid.tracks[1]
	assert {message.channel for message in _note_ons(drums)} == {9}
	assert not any(message.type == 'program_change' for message in drums)

	bass = mid.tracks[2]
	programs = [message for message in bass if message.type == 'program_change']
	assert programs[0].program == 38
	assert programs[0].channel != 9


def test_note_counts_match (arrangement) -> None:

	"""Every generated note becomes one note on."""

	mid = songbrain.midi_export.arrangement_to_midi(arrangement)

	for track, part in zip(mid.tracks[1:], arrangement.tracks.values()):
		assert len(_note_ons(track)) == len(part.notes)


def test_write_midi_file_round_trip (arrangement, tmp_path) -> None:

	"""The saved file reads back with the same tracks and length."""

	filename = str(tmp_path / "song.mid")

	written = songbrain.midi_export.write_midi_file(arrangement, filename)
	loaded = mido.MidiFile(filename)

	assert os.path.exists(filename)
	assert len(loaded.tracks) == len(written.tracks)
	assert [track.name for track in loaded.tracks[1:]] == list(arrangement.tracks)
	assert loaded.length == pytest.approx(arrangement.state.total_bars * 4 * 60 / 160, abs=0.5)


def test_write_midi_file_to_missing_directory (arrangement, tmp_path) -> None:

	"""A write failure is raised to the caller."""

	with pytest.raises(OSError):
		songbrain.midi_export.write_midi_file(arrangement, str(tmp_path / "missing" / "song.mid"))
