"""Drum pattern engine: genre step tables plus a section-aware fill state machine.

Each genre has three 16-step tables (kick, snare, hat).  A bar is either
**steady** (tables plus section overrides) or **filling**: on the last bar of
a section run (or of the song) the tail of the bar is replaced by a fill.

Steady-state overrides:

- Pre-Chorus: kick every beat, closed hat every other step, snare on 7 and 15.
- Intro: kick on 0 and 8 only.  Bridge: no kick.  Intro/Outro: no snare.
- Chorus/Solo: hats alternate closed/open (open on the third sixteenth of a
  beat), except TECHNO which keeps its off-beat hats; a crash marks the
  first step of the section.

Fills (steps 8-15 unless noted):

- Intro: snare on 14 and 15 only.
- Leaving a Chorus for anything but Chorus/Outro: the groove runs on to
  step 11, then a descending tom cascade on 12-14.
- Otherwise a per-genre buildup, or two closing snares for genres without one.

Tables are written against a 16-step grid.  On finer grids only the first
sub-step of each grid cell plays.
"""

import dataclasses
import logging
import typing

import songbrain.constants
import songbrain.constants.gm_drums
import songbrain.constants.velocity
import songbrain.form
import songbrain.sections
import songbrain.sequence_utils
import songbrain.song_state


logger = logging.getLogger(__name__)

_S = songbrain.sections.SectionType
_G = songbrain.sections.Genre

KICK = songbrain.constants.gm_drums.KICK
SNARE = songbrain.constants.gm_drums.SNARE
CLOSED_HAT = songbrain.constants.gm_drums.CLOSED_HAT
OPEN_HAT = songbrain.constants.gm_drums.OPEN_HAT
CRASH = songbrain.constants.gm_drums.CRASH
LOW_TOM = songbrain.constants.gm_drums.LOW_TOM
MID_TOM = songbrain.constants.gm_drums.MID_TOM
HIGH_TOM = songbrain.constants.gm_drums.HIGH_TOM

FILL_START = 8
INTRO_FILL_START = 14
CHORUS_EXIT_FILL_START = 12


@dataclasses.dataclass(frozen=True)
class DrumPatternTable:

	"""
	Steady-state kick, snare and hat hits for one genre on a 16-step grid.
	"""

	kick: typing.Tuple[int, ...]
	snare: typing.Tuple[int, ...]
	hat: typing.Tuple[int, ...]

	@classmethod
	def from_strings (cls, kick: str, snare: str, hat: str) -> "DrumPatternTable":

		"""
		Build a table from ``"1000..."`` step strings.
		"""

		table = cls(
			kick = songbrain.sequence_utils.parse_step_pattern(kick),
			snare = songbrain.sequence_utils.parse_step_pattern(snare),
			hat = songbrain.sequence_utils.parse_step_pattern(hat)
		)

		for name in ("kick", "snare", "hat"):
			if len(getattr(table, name)) != songbrain.constants.DRUM_GRID_STEPS:
				raise ValueError(f"Drum {name} pattern must have {songbrain.constants.DRUM_GRID_STEPS} steps")

		return table


_FOUR_ON_THE_FLOOR = DrumPatternTable.from_strings(
	kick  = "1000 1000 1000 1000",
	snare = "0000 1000 0000 1000",
	hat   = "0010 0010 0010 0010",
)

_HALF_TIME = DrumPatternTable.from_strings(
	kick  = "1000 0000 1000 0000",
	snare = "0000 0000 1000 0000",
	hat   = "1010 1110 1010 1011",
)

DRUM_PATTERNS: typing.Dict[songbrain.sections.Genre, DrumPatternTable] = {
	_G.ROCK: DrumPatternTable.from_strings(
		kick  = "1000 0010 1000 0010",
		snare = "0000 1000 0000 1000",
		hat   = "1111 1111 1111 1111",
	),
	_G.POP: DrumPatternTable.from_strings(
		kick  = "1000 0000 1000 0010",
		snare = "0000 1000 0000 1000",
		hat   = "1111 1111 1111 1111",
	),
	_G.TECHNO: _FOUR_ON_THE_FLOOR,
	_G.EDM: _FOUR_ON_THE_FLOOR,
	_G.HIPHOP: _HALF_TIME,
	_G.TRAP: _HALF_TIME,
	_G.LOFI: DrumPatternTable.from_strings(
		kick  = "1000 0000 0010 0000",
		snare = "0000 1000 0000 1000",
		hat   = "1010 1010 1010 1010",
	),
	# Dembow
	_G.LATIN: DrumPatternTable.from_strings(
		kick  = "1000 1000 1000 1000",
		snare = "0001 0010 0001 0010",
		hat   = "1010 1010 1010 1010",
	),
	_G.PERSIAN: DrumPatternTable.from_strings(
		kick  = "1000 0010 1000 0000",
		snare = "0000 1000 0000 1001",
		hat   = "1111 1111 1111 1111",
	),
}


Fill = typing.Dict[int, typing.Tuple[int, ...]]

INTRO_FILL: Fill = {
	14: (SNARE,),
	15: (SNARE,),
}

CHORUS_EXIT_FILL: Fill = {
	12: (HIGH_TOM,),
	13: (MID_TOM,),
	14: (LOW_TOM,),
}

DEFAULT_FILL: Fill = {
	14: (SNARE,),
	15: (SNARE,),
}

_TRAP_FILL: Fill = {
	8: (SNARE,),
	9: (SNARE,),
	10: (SNARE,),
	13: (KICK,),
	14: (SNARE,),
	15: (SNARE,),
}

# Snare roll on every step with the kick doubling the even ones.
_TECHNO_FILL: Fill = {
	step: (SNARE, KICK) if step % 2 == 0 else (SNARE,)
	for step in range(FILL_START, songbrain.constants.DRUM_GRID_STEPS)
}

BUILDUP_FILLS: typing.Dict[songbrain.sections.Genre, Fill] = {
	_G.ROCK: {
		8: (SNARE,),
		9: (SNARE,),
		10: (MID_TOM,),
		11: (MID_TOM,),
		12: (LOW_TOM,),
		13: (LOW_TOM,),
		14: (KICK,),
		15: (SNARE,),
	},
	_G.POP: {
		8: (SNARE,),
		9: (SNARE,),
		10: (KICK,),
		11: (MID_TOM,),
		12: (KICK,),
		13: (HIGH_TOM,),
		14: (SNARE, LOW_TOM),
	},
	_G.TECHNO: _TECHNO_FILL,
	_G.EDM: _TECHNO_FILL,
	_G.TRAP: _TRAP_FILL,
	_G.HIPHOP: _TRAP_FILL,
}


def pattern_table (genre: typing.Any) -> DrumPatternTable:

	"""Return a genre's steady-state table; unknown genres use POP."""

	return DRUM_PATTERNS.get(songbrain.sections.resolve_genre(genre), DRUM_PATTERNS[_G.POP])


def grid_position (step: int, steps_per_bar: int) -> typing.Tuple[int, bool]:

	"""Map a bar step to the 16-step drum grid.

	Returns ``(grid_step, sounds)``.  On grids that divide evenly into 16
	cells, only the first sub-step of each cell sounds.  Coarser or uneven
	grids are scaled onto the nearest lower cell and every step sounds.

	Example:
		```python
		grid_position(6, 32)   # → (3, True)
		grid_position(7, 32)   # → (3, False)
		grid_position(2, 8)    # → (4, True)
		```
	"""

	grid = songbrain.constants.DRUM_GRID_STEPS

	if steps_per_bar >= grid and steps_per_bar % grid == 0:
		cell = steps_per_bar // grid
		return (step // cell) % grid, step % cell == 0

	return (step * grid // max(1, steps_per_bar)) % grid, True


def _fill_hits (genre: songbrain.sections.Genre, current: songbrain.sections.SectionType, next_section: songbrain.sections.SectionType, s: int) -> typing.Optional[typing.List[int]]:

	"""Return the fill hits for a grid step, or None when the step plays the steady pattern."""

	if current == _S.INTRO:
		if s >= INTRO_FILL_START:
			return list(INTRO_FILL.get(s, ()))
		return None

	if current == _S.CHORUS and next_section not in (_S.CHORUS, _S.OUTRO):
		if s >= CHORUS_EXIT_FILL_START:
			return list(CHORUS_EXIT_FILL.get(s, ()))
		return None

	if s < FILL_START:
		return None

	return list(BUILDUP_FILLS.get(genre, DEFAULT_FILL).get(s, ()))


def _steady_hits (genre: songbrain.sections.Genre, current: songbrain.sections.SectionType, s: int, is_section_start: bool, step: int) -> typing.List[int]:

	if current == _S.PRE_CHORUS:
		hits = []
		if s % 4 == 0:
			hits.append(KICK)
		if s % 2 == 0:
			hits.append(CLOSED_HAT)
		if s in (7, 15):
			hits.append(SNARE)
		return hits

	table = pattern_table(genre)
	hits = []

	if current == _S.INTRO:
		if s in (0, 8):
			hits.append(KICK)
	elif current != _S.BRIDGE:
		if table.kick[s]:
			hits.append(KICK)

	if current not in (_S.INTRO, _S.OUTRO) and table.snare[s]:
		hits.append(SNARE)

	is_lifted = current in (_S.CHORUS, _S.SOLO)

	if is_lifted and genre != _G.TECHNO:
		hits.append(OPEN_HAT if s % 4 == 2 else CLOSED_HAT)
	elif table.hat[s]:
		hits.append(CLOSED_HAT)

	if is_lifted and is_section_start and step == 0:
		hits.append(CRASH)

	return hits


def drum_hits (
	genre: typing.Any,
	current: typing.Any,
	next_section: typing.Any,
	step: int,
	steps_per_bar: int = songbrain.constants.DEFAULT_STEPS_PER_BAR,
	is_transition: bool = False,
	is_section_start: bool = False
) -> typing.List[int]:

	"""Return the GM drum notes to play on one step of a bar.

	Parameters:
		genre: Genre member or name (unknown → POP).
		current: The bar's section.
		next_section: The following bar's section.
		step: Step within the bar (``0 <= step < steps_per_bar``).
		steps_per_bar: Grid resolution of the bar.
		is_transition: True on the last bar of a section run or of the song.
		is_section_start: True on the first bar of a section run (enables the crash).

	Example:
		```python
		drum_hits("POP", "CHORUS", "VERSE", 12, 16, is_transition=True)   # → [48]
		drum_hits("POP", "VERSE", "VERSE", 4, 16)                          # → [38, 42]
		```
	"""

	resolved_genre = songbrain.sections.resolve_genre(genre)
	resolved_current = songbrain.sections.resolve_section(current)
	resolved_next = songbrain.sections.resolve_section(next_section)

	s, sounds = grid_position(step, steps_per_bar)

	if not sounds:
		return []

	if is_transition:
		fill = _fill_hits(resolved_genre, resolved_current, resolved_next, s)
		if fill is not None:
			return fill

	return _steady_hits(resolved_genre, resolved_current, s, is_section_start, step)


def drum_velocity (note: int, genre: songbrain.sections.Genre) -> float:

	"""Return the velocity of a drum hit: loud kick, soft closed hat, LOFI scaled down."""

	if note == KICK:
		velocity = songbrain.constants.velocity.KICK_VELOCITY
	elif note == CLOSED_HAT:
		velocity = songbrain.constants.velocity.CLOSED_HAT_VELOCITY
	else:
		velocity = songbrain.constants.velocity.DRUM_VELOCITY

	if genre == _G.LOFI:
		velocity *= songbrain.constants.velocity.LOFI_DRUM_SCALE

	return velocity


def generate_drums (state: songbrain.song_state.SongState, genre: typing.Any) -> typing.List[songbrain.song_state.GeneratedNote]:

	"""Generate the drum part for the whole song, one step long per hit.

	The structure is read from ``state.bar_structure``; the bar after the
	last one is treated as ``OUTRO``.
	"""

	resolved_genre = songbrain.sections.resolve_genre(genre)
	structure = [state.section_at(bar) for bar in range(state.total_bars)]
	infos = songbrain.form.section_infos(structure)

	notes: typing.List[songbrain.song_state.GeneratedNote] = []

	for bar, info in enumerate(infos):

		bar_start = state.bar_start(bar)

		for step in range(state.steps_per_bar):

			hits = drum_hits(
				resolved_genre,
				info.section,
				info.next_section,
				step,
				state.steps_per_bar,
				is_transition = info.last_bar,
				is_section_start = info.first_bar
			)

			for note in hits:
				notes.append(songbrain.song_state.GeneratedNote(
					midi = note,
					start = bar_start + step,
					duration = 1,
					velocity = drum_velocity(note, resolved_genre)
				))

	logger.debug(f"Generated {len(notes)} drum hits for {resolved_genre.value}")

	return notes
