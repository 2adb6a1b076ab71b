import pytest

import songbrain.constants.gm_drums as gm
import songbrain.drums


def _bar (genre: str, current: str, next_section: str, transition: bool = False, start: bool = False, steps_per_bar: int = 16) -> list:

	"""Return the hits of every step of one bar."""

	return [
		songbrain.drums.drum_hits(genre, current, next_section, step, steps_per_bar, is_transition=transition, is_section_start=start)
		for step in range(steps_per_bar)
	]


# --- Tables ---


def test_pattern_tables_have_sixteen_steps () -> None:

	"""Every genre table is written on the 16-step grid."""

	for table in songbrain.drums.DRUM_PATTERNS.values():
		assert len(table.kick) == len(table.snare) == len(table.hat) == 16


def test_from_strings_rejects_wrong_lengths () -> None:

	"""A table with a short row is an error."""

	with pytest.raises(ValueError):
		songbrain.drums.DrumPatternTable.from_strings("1000", "0000 1000 0000 1000", "1111 1111 1111 1111")


def test_trap_and_techno_borrow_tables () -> None:

	"""TRAP plays the hip hop table, TECHNO the EDM table, unknown genres POP."""

	assert songbrain.drums.pattern_table("TRAP") is songbrain.drums.pattern_table("HIPHOP")
	assert songbrain.drums.pattern_table("TECHNO") is songbrain.drums.pattern_table("EDM")
	assert songbrain.drums.pattern_table("polka") is songbrain.drums.pattern_table("POP")


# --- Steady state ---


def test_pop_verse_backbeat () -> None:

	"""Kick on one, snare on two, hats on every step."""

	bar = _bar("POP", "VERSE", "VERSE")

	assert bar[0] == [gm.KICK, gm.CLOSED_HAT]
	assert bar[4] == [gm.SNARE, gm.CLOSED_HAT]
	assert bar[1] == [gm.CLOSED_HAT]


def test_pre_chorus_drive () -> None:

	"""Pre-Chorus ignores the genre table: four on the floor, eighth hats, late snares."""

	for genre in ("POP", "LOFI", "TRAP"):
		bar = _bar(genre, "PRE_CHORUS", "PRE_CHORUS")
		assert bar[0] == [gm.KICK, gm.CLOSED_HAT]
		assert bar[2] == [gm.CLOSED_HAT]
		assert bar[4] == [gm.KICK, gm.CLOSED_HAT]
		assert bar[7] == [gm.SNARE]
		assert bar[15] == [gm.SNARE]
		assert bar[5] == []


def test_intro_and_outro_have_no_snare () -> None:

	"""Intro keeps only kicks on one and three; neither plays a snare."""

	intro = _bar("POP", "INTRO", "INTRO")
	outro = _bar("POP", "OUTRO", "OUTRO")

	assert [step for step, hits in enumerate(intro) if gm.KICK in hits] == [0, 8]
	assert not any(gm.SNARE in hits for hits in intro + outro)
	assert outro[0] == [gm.KICK, gm.CLOSED_HAT]


def test_bridge_drops_the_kick () -> None:

	"""The Bridge plays snare and hats but no kick."""

	bridge = _bar("ROCK", "BRIDGE", "BRIDGE")

	assert not any(gm.KICK in hits for hits in bridge)
	assert bridge[4] == [gm.SNARE, gm.CLOSED_HAT]


def test_chorus_opens_the_hats () -> None:

	"""Chorus hats are closed except on the third sixteenth of each beat."""

	bar = _bar("POP", "CHORUS", "CHORUS")

	assert bar[2] == [gm.OPEN_HAT]
	assert bar[3] == [gm.CLOSED_HAT]
	assert bar[0] == [gm.KICK, gm.CLOSED_HAT]


def test_crash_marks_the_section_start () -> None:

	"""Chorus and Solo crash on the first step of their first bar only."""

	assert _bar("POP", "CHORUS", "CHORUS", start=True)[0] == [gm.KICK, gm.CLOSED_HAT, gm.CRASH]
	assert _bar("ROCK", "SOLO", "SOLO", start=True)[0][-1] == gm.CRASH
	assert gm.CRASH not in _bar("POP", "VERSE", "VERSE", start=True)[0]


def test_techno_keeps_offbeat_hats_in_the_chorus () -> None:

	"""TECHNO does not switch to the open-hat Chorus pattern."""

	bar = _bar("TECHNO", "CHORUS", "CHORUS", start=True)

	assert bar[0] == [gm.KICK, gm.CRASH]
	assert bar[2] == [gm.CLOSED_HAT]
	assert not any(gm.OPEN_HAT in hits for hits in bar)


# --- Fills ---


def test_chorus_to_verse_tom_cascade () -> None:

	"""Leaving a Chorus: the groove carries on to step 11, then high, mid and low toms."""

	bar = _bar("POP", "CHORUS", "VERSE", transition=True)
	steady = _bar("POP", "CHORUS", "CHORUS")

	assert bar[:12] == steady[:12]
	assert bar[8] == [gm.KICK, gm.CLOSED_HAT]
	assert bar[12:] == [[gm.HIGH_TOM], [gm.MID_TOM], [gm.LOW_TOM], []]


def test_chorus_into_outro_plays_the_genre_buildup () -> None:

	"""Chorus into Outro is not an exit; POP plays its buildup."""

	bar = _bar("POP", "CHORUS", "OUTRO", transition=True)

	assert bar[8] == [gm.SNARE]
	assert bar[10] == [gm.KICK]
	assert bar[14] == [gm.SNARE, gm.LOW_TOM]
	assert bar[15] == []


def test_intro_fill_is_two_snares () -> None:

	"""The Intro fill only replaces the last two steps."""

	bar = _bar("POP", "INTRO", "VERSE", transition=True)

	assert bar[14] == [gm.SNARE]
	assert bar[15] == [gm.SNARE]
	assert bar[8] == [gm.KICK, gm.CLOSED_HAT]
	assert bar[13] == [gm.CLOSED_HAT]


def test_genre_without_buildup_closes_with_snares () -> None:

	"""LOFI has no buildup: the fill is silent until two closing snares."""

	bar = _bar("LOFI", "VERSE", "CHORUS", transition=True)

	assert bar[8:14] == [[]] * 6
	assert bar[14:] == [[gm.SNARE], [gm.SNARE]]


def test_techno_snare_roll () -> None:

	"""TECHNO rolls the snare every step, doubling even steps with the kick."""

	bar = _bar("TECHNO", "VERSE", "CHORUS", transition=True)

	assert bar[8] == [gm.SNARE, gm.KICK]
	assert bar[9] == [gm.SNARE]


# --- Grids ---


def test_fine_grid_plays_first_sub_step_only () -> None:

	"""On 32 steps per bar odd steps are silent."""

	bar = _bar("POP", "VERSE", "VERSE", steps_per_bar=32)

	assert bar[1] == []
	assert bar[8] == [gm.SNARE, gm.CLOSED_HAT]


def test_coarse_grid_is_scaled () -> None:

	"""On 8 steps per bar every step sounds the scaled grid cell."""

	bar = _bar("POP", "VERSE", "VERSE", steps_per_bar=8)

	assert bar[2] == [gm.SNARE, gm.CLOSED_HAT]
	assert all(hits for hits in bar)


# --- Whole song ---


def test_generate_drums_places_fills_at_section_ends (make_state) -> None:

	"""Fills land on the last bar of each run and of the song."""

	state = make_state(structure=("CHORUS", "CHORUS", "VERSE", "VERSE"))
	notes = songbrain.drums.generate_drums(state, "POP")
	at = lambda step: sorted(note.midi for note in notes if note.start == step)

	assert at(0) == sorted([gm.KICK, gm.CLOSED_HAT, gm.CRASH])
	assert at(16 + 12) == [gm.HIGH_TOM]
	assert at(12) == [gm.SNARE, gm.CLOSED_HAT]
	assert at(48 + 14) == sorted([gm.SNARE, gm.LOW_TOM])
	assert all(note.duration == 1 for note in notes)


def test_drum_velocities (make_state) -> None:

	"""Kicks are loudest, closed hats softest, and LOFI is scaled down."""

	state = make_state(structure=("VERSE",))

	pop = {note.midi: note.velocity for note in songbrain.drums.generate_drums(state, "POP")}
	lofi = {note.midi: note.velocity for note in songbrain.drums.generate_drums(state, "LOFI")}

	assert pop[gm.KICK] == 1.0
	assert pop[gm.SNARE] == 0.9
	assert pop[gm.CLOSED_HAT] == 0.7
	assert lofi[gm.KICK] == pytest.approx(0.8)
