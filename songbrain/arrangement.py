"""Whole-song arrangement: template → structure → chords → five generated parts.

:func:`arrange_song` is the one-call entry point used by the command line.
It expands a template, assigns chords from a progression style and runs the
drum, bass, pad, lead and arpeggio generators against the resulting
:class:`~songbrain.song_state.SongState`.
"""

import dataclasses
import logging
import random
import typing

import songbrain.accompaniment
import songbrain.arpeggio
import songbrain.chords
import songbrain.constants
import songbrain.drums
import songbrain.form
import songbrain.intervals
import songbrain.progressions
import songbrain.sections
import songbrain.song_state


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Track:

	"""
	One generated part of an arrangement.

	Attributes:
		instrument: Instrument name (``"Standard"`` for the drum kit).
		notes: Generated notes; not guaranteed to be time-ordered.
		is_drum: True for the drum part (written to the GM percussion channel).
	"""

	instrument: str
	notes: typing.List[songbrain.song_state.GeneratedNote] = dataclasses.field(default_factory=list)
	is_drum: bool = False

	@property
	def end (self) -> float:

		"""Return the step at which the last note of the track stops sounding."""

		return max((note.end for note in self.notes), default=0.0)


@dataclasses.dataclass
class Arrangement:

	"""
	A generated song: the read-only song state plus its parts, in playing order.
	"""

	state: songbrain.song_state.SongState
	bpm: int
	genre: songbrain.sections.Genre
	template_name: str
	style_name: str
	tracks: typing.Dict[str, Track] = dataclasses.field(default_factory=dict)

	@property
	def total_steps (self) -> int:

		"""Return the song length in steps."""

		return self.state.bar_start(self.state.total_bars)

	def chord_names (self) -> typing.List[str]:

		"""Return the concrete chord name of every bar (``"?"`` for an invalid index)."""

		names = []

		for bar in range(self.state.total_bars):
			degree = self.state.chord_at(bar)
			names.append(songbrain.chords.real_chord_name(degree, self.state.root_pc) if degree else "?")

		return names

	def section_summary (self) -> typing.List[typing.Tuple[songbrain.sections.SectionType, int, typing.List[str]]]:

		"""Return ``(section, bars, chord names)`` for each section run, in order."""

		names = self.chord_names()
		infos = songbrain.form.section_infos(self.state.bar_structure)
		summary: typing.List[typing.Tuple[songbrain.sections.SectionType, int, typing.List[str]]] = []

		for bar, info in enumerate(infos):
			if info.first_bar:
				summary.append((info.section, info.bars, names[bar:bar + info.bars]))

		return summary


def arrange_song (
	template: typing.Union[songbrain.form.SongTemplate, str, None] = None,
	genre: typing.Any = None,
	vibe_index: int = 0,
	root_pc: int = 0,
	scale_name: typing.Optional[str] = None,
	vocal_range: str = "NONE",
	steps_per_bar: int = songbrain.constants.DEFAULT_STEPS_PER_BAR,
	spread: bool = False,
	rng: typing.Optional[random.Random] = None
) -> Arrangement:

	"""Build a complete arrangement from a song template.

	Parameters:
		template: A template or library key (unknown keys use ``POP_RADIO``).
		genre: Genre for chords, drums and instruments; defaults to the template's genre.
		vibe_index: Which progression style of the genre to use (out of range → the first).
		root_pc: Key root pitch class (0-11).
		scale_name: Scale to write in; defaults to the style's preferred scale.
		vocal_range: Vocal range name used to clip the lead.
		steps_per_bar: Grid resolution.
		spread: Use open pad voicings.
		rng: Random number generator (a fresh unseeded one when omitted).

	Raises:
		ValueError: If ``steps_per_bar`` is not positive or ``root_pc`` is outside 0-11.

	Example:
		```python
		arrangement = arrange_song("POP_SHORT", root_pc=9, rng=random.Random(42))
		arrangement.tracks["drums"].notes[:3]
		```
	"""

	if steps_per_bar <= 0:
		raise ValueError(f"Steps per bar must be positive, got {steps_per_bar}")

	if not 0 <= root_pc < 12:
		raise ValueError(f"Root pitch class must be between 0 and 11, got {root_pc}")

	rng = rng or random.Random()

	if not isinstance(template, songbrain.form.SongTemplate):
		template = songbrain.form.get_template(template)

	resolved_genre = songbrain.sections.resolve_genre(genre) if genre is not None else template.genre
	style = songbrain.progressions.style_by_vibe(resolved_genre, vibe_index)
	scale = songbrain.intervals.resolve_scale_name(scale_name or style.preferred_scale)

	structure = songbrain.form.expand_structure(template)
	chords = songbrain.progressions.assign_chords_to_structure(structure, style)

	state = songbrain.song_state.SongState(
		root_pc = root_pc,
		scale_name = scale,
		steps_per_bar = steps_per_bar,
		total_bars = len(structure),
		bar_chords = tuple(chords),
		bar_structure = tuple(structure),
		vocal_range = vocal_range
	)

	logger.info(
		f"Arranging {template.name} ({len(structure)} bars) as {resolved_genre.value} "
		f"in {songbrain.chords.PC_TO_NOTE_NAME[root_pc]} {scale}, style {style.name!r}"
	)

	instruments = songbrain.accompaniment.instruments_for_genre(resolved_genre)

	arrangement = Arrangement(
		state = state,
		bpm = template.bpm,
		genre = resolved_genre,
		template_name = template.name,
		style_name = style.name
	)

	arrangement.tracks["drums"] = Track("Standard", songbrain.drums.generate_drums(state, resolved_genre), is_drum=True)
	arrangement.tracks["bass"] = Track(instruments.bass, songbrain.accompaniment.generate_bass(state))
	arrangement.tracks["pad"] = Track(instruments.pad, songbrain.accompaniment.generate_pads(state, spread))
	arrangement.tracks["lead"] = Track(instruments.lead, songbrain.accompaniment.generate_lead(state, rng))
	arrangement.tracks["arp"] = Track(instruments.arp, songbrain.arpeggio.generate_arpeggio(state, resolved_genre, rng))

	for name, track in arrangement.tracks.items():
		logger.info(f"{name}: {len(track.notes)} notes ({track.instrument})")

	return arrangement
