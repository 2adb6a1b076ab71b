import random
import typing

import pytest

import songbrain.sections
import songbrain.song_state


def _make_state (
	structure: typing.Sequence[typing.Any] = ("VERSE",) * 4,
	chords: typing.Optional[typing.Sequence[int]] = None,
	root_pc: int = 0,
	scale_name: str = "Major",
	steps_per_bar: int = 16,
	vocal_range: str = "NONE"
) -> songbrain.song_state.SongState:

	"""Build a SongState from section names, defaulting every bar to the tonic chord."""

	sections = tuple(songbrain.sections.resolve_section(section) for section in structure)

	return songbrain.song_state.SongState(
		root_pc = root_pc,
		scale_name = scale_name,
		steps_per_bar = steps_per_bar,
		total_bars = len(sections),
		bar_chords = tuple(chords) if chords is not None else (0,) * len(sections),
		bar_structure = sections,
		vocal_range = vocal_range
	)


@pytest.fixture
def make_state () -> typing.Callable[..., songbrain.song_state.SongState]:

	"""Provide the SongState builder to tests that need custom structures."""

	return _make_state


@pytest.fixture
def rng () -> random.Random:

	"""Provide a seeded random number generator so tests are repeatable."""

	return random.Random(1234)


@pytest.fixture
def chorus_state () -> songbrain.song_state.SongState:

	"""Four Chorus bars in C major over I - V - vi - IV."""

	return _make_state(structure=("CHORUS",) * 4, chords=(0, 4, 5, 3))
