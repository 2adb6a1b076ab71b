"""Write an arrangement to a Standard MIDI File with mido.

The file is type 1: a conductor track carrying the tempo, then one track per
part.  Pitched parts get their own channel and a General MIDI program change;
the drum part plays on the GM percussion channel.  Step positions are
converted at 480 ticks per beat.
"""

import logging
import typing

import mido

import songbrain.accompaniment
import songbrain.arrangement
import songbrain.constants
import songbrain.constants.gm_drums
import songbrain.song_state


logger = logging.getLogger(__name__)

TICKS_PER_BEAT = 480

# Channels for pitched parts, skipping the GM percussion channel.
_MELODIC_CHANNELS = [channel for channel in range(16) if channel != songbrain.constants.gm_drums.GM_DRUM_CHANNEL]


def midi_velocity (velocity: float) -> int:

	"""Convert a normalised velocity to a MIDI velocity in 1-127 (zero would read as note off)."""

	return max(1, min(127, int(round(velocity * 127))))


def step_to_ticks (step: float, steps_per_bar: int) -> int:

	"""Convert a step position to MIDI ticks."""

	ticks_per_step = TICKS_PER_BEAT * songbrain.constants.BEATS_PER_BAR / steps_per_bar

	return int(round(step * ticks_per_step))


def _note_messages (
	notes: typing.Iterable[songbrain.song_state.GeneratedNote],
	channel: int,
	steps_per_bar: int
) -> typing.List[typing.Tuple[int, int, mido.Message]]:

	"""Return ``(tick, order, message)`` triples; note offs sort before note ons on the same tick."""

	events: typing.List[typing.Tuple[int, int, mido.Message]] = []

	for note in notes:

		start = step_to_ticks(note.start, steps_per_bar)
		end = max(start + 1, step_to_ticks(note.end, steps_per_bar))
		velocity = midi_velocity(note.velocity)

		events.append((start, 1, mido.Message('note_on', note=note.midi, velocity=velocity, channel=channel)))
		events.append((end, 0, mido.Message('note_off', note=note.midi, velocity=0, channel=channel)))

	events.sort(key=lambda event: (event[0], event[1]))

	return events


def _append_with_deltas (track: mido.MidiTrack, events: typing.List[typing.Tuple[int, int, mido.Message]]) -> None:

	last_tick = 0

	for tick, _, message in events:
		message.time = max(0, tick - last_tick)
		track.append(message)
		last_tick = tick


def arrangement_to_midi (arrangement: songbrain.arrangement.Arrangement) -> mido.MidiFile:

	"""Build a mido ``MidiFile`` for an arrangement without touching the disk."""

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = TICKS_PER_BEAT

	conductor = mido.MidiTrack()
	conductor.append(mido.MetaMessage('track_name', name=arrangement.template_name, time=0))
	conductor.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(arrangement.bpm), time=0))
	conductor.append(mido.MetaMessage('time_signature', numerator=songbrain.constants.BEATS_PER_BAR, denominator=4, time=0))
	mid.tracks.append(conductor)

	melodic_index = 0

	for name, part in arrangement.tracks.items():

		track = mido.MidiTrack()
		track.append(mido.MetaMessage('track_name', name=name, time=0))

		if part.is_drum:
			channel = songbrain.constants.gm_drums.GM_DRUM_CHANNEL

		else:
			channel = _MELODIC_CHANNELS[melodic_index % len(_MELODIC_CHANNELS)]
			melodic_index += 1
			track.append(mido.Message('program_change', program=songbrain.accompaniment.gm_program(part.instrument), channel=channel, time=0))

		_append_with_deltas(track, _note_messages(part.notes, channel, arrangement.state.steps_per_bar))
		mid.tracks.append(track)

	return mid


def write_midi_file (arrangement: songbrain.arrangement.Arrangement, filename: str) -> mido.MidiFile:

	"""Write an arrangement to ``filename`` and return the saved ``MidiFile``.

	Raises:
		OSError: If the file cannot be written (logged before re-raising).
	"""

	mid = arrangement_to_midi(arrangement)
	note_count = sum(len(track.notes) for track in arrangement.tracks.values())

	logger.info(f"Saving MIDI file ({note_count} notes, {len(mid.tracks)} tracks) to {filename}...")

	try:
		mid.save(filename)
	except OSError as e:
		logger.error(f"Failed to save MIDI file: {e}")
		raise

	logger.info(f"Saved {filename}")

	return mid
