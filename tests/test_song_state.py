import dataclasses

import pytest

import songbrain
import songbrain.sections
import songbrain.song_state


def test_lookups_inside_the_song (make_state) -> None:

	"""Sections, chords and bar starts come from the per-bar tuples."""

	state = make_state(structure=("INTRO", "VERSE"), chords=(0, 4))

	assert state.section_at(1) == songbrain.sections.SectionType.VERSE
	assert state.chord_index_at(1) == 4
	assert state.chord_at(1).name == "V"
	assert state.bar_start(1) == 16
	assert state.beat_steps == 4


def test_lookups_outside_the_song (make_state) -> None:

	"""Out-of-range bars read as NONE over the tonic."""

	state = make_state(structure=("VERSE",), chords=(3,))

	assert state.section_at(5) == songbrain.sections.SectionType.NONE
	assert state.section_at(-1) == songbrain.sections.SectionType.NONE
	assert state.chord_index_at(5) == 0


def test_invalid_chord_index (make_state) -> None:

	"""A chord index past the table gives no chord."""

	state = make_state(structure=("VERSE",), chords=(7,), scale_name="Blues")

	assert state.chord_at(0) is None


def test_beat_steps_never_below_one () -> None:

	"""Very coarse grids still have a one-step beat."""

	assert songbrain.song_state.SongState(steps_per_bar=2).beat_steps == 1


def test_generated_note () -> None:

	"""Notes are immutable and know where they end."""

	note = songbrain.GeneratedNote(midi=60, start=8, duration=1.5, velocity=0.7)

	assert note.end == 9.5

	with pytest.raises(dataclasses.FrozenInstanceError):
		note.midi = 61
