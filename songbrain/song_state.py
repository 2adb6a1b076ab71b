"""The data that crosses the engine boundary.

Defines :class:`SongState` (the caller-owned, read-only song context the
generators consume) and :class:`GeneratedNote` (the only thing the generators
produce).  Both are frozen: generators never mutate the song they are given
and always return freshly allocated note lists, so the caller decides how to
merge results into its own track storage.
"""

import dataclasses
import typing

import songbrain.chord_tables
import songbrain.chords
import songbrain.constants
import songbrain.intervals
import songbrain.sections


@dataclasses.dataclass(frozen=True)
class GeneratedNote:

	"""
	A note produced by the engine.

	Attributes:
		midi: MIDI note number (0-127).
		start: Absolute start position in steps (``bar * steps_per_bar + step``).
		duration: Length in steps.  Arpeggio gates may produce fractional lengths.
		velocity: Normalised velocity in ``[0.0, 1.0]``.
	"""

	midi: int
	start: float
	duration: float
	velocity: float

	@property
	def end (self) -> float:

		"""Return the step at which the note stops sounding."""

		return self.start + self.duration


@dataclasses.dataclass(frozen=True)
class SongState:

	"""
	Read-only view of a song for the generators.

	Attributes:
		root_pc: Key root pitch class (0 = C).
		scale_name: Scale name (see ``songbrain.intervals.SCALE_DEFINITIONS``).
		steps_per_bar: Grid resolution of one bar.
		total_bars: Number of bars in the song.
		bar_chords: Chord-degree index per bar.
		bar_structure: Section per bar.
		vocal_range: Name of the vocal range used to clip melodies.
	"""

	root_pc: int = 0
	scale_name: str = songbrain.intervals.DEFAULT_SCALE
	steps_per_bar: int = songbrain.constants.DEFAULT_STEPS_PER_BAR
	total_bars: int = 4
	bar_chords: typing.Tuple[int, ...] = ()
	bar_structure: typing.Tuple[songbrain.sections.SectionType, ...] = ()
	vocal_range: str = "NONE"

	@property
	def beat_steps (self) -> int:

		"""Return the number of steps in one beat (never less than one)."""

		return max(1, self.steps_per_bar // songbrain.constants.BEATS_PER_BAR)

	def section_at (self, bar: int) -> songbrain.sections.SectionType:

		"""Return the section of a bar, or ``NONE`` outside the structure."""

		if 0 <= bar < len(self.bar_structure):
			return songbrain.sections.resolve_section(self.bar_structure[bar])

		return songbrain.sections.SectionType.NONE

	def chord_index_at (self, bar: int) -> int:

		"""Return the chord-degree index of a bar, defaulting to the tonic."""

		if 0 <= bar < len(self.bar_chords):
			return self.bar_chords[bar]

		return 0

	def chord_at (self, bar: int) -> typing.Optional[songbrain.chords.ChordDegree]:

		"""Return the chord degree in effect for a bar, or None when the index is invalid."""

		return songbrain.chord_tables.chord_degree(self.scale_name, self.chord_index_at(bar))

	def bar_start (self, bar: int) -> int:

		"""Return the absolute step at which a bar begins."""

		return bar * self.steps_per_bar
