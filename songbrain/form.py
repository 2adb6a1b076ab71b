"""Song form: templates, run-length structure expansion and per-bar section lookups.

Defines :class:`SongTemplate` (a named, run-length encoded section list with a
tempo) and :class:`SectionInfo` (an immutable snapshot of where a bar sits in
its section).  ``expand_structure`` turns a template into one section per bar;
everything downstream (chords, drums, melody) indexes that list by bar.
"""

import dataclasses
import logging
import typing

import songbrain.sections


logger = logging.getLogger(__name__)

_S = songbrain.sections.SectionType
_G = songbrain.sections.Genre

DEFAULT_TEMPLATE = "POP_RADIO"


@dataclasses.dataclass(frozen=True)
class SectionSpan:

	"""A run of bars sharing one section.  Spans of zero or fewer bars contribute nothing."""

	section: songbrain.sections.SectionType
	bars: int


@dataclasses.dataclass(frozen=True)
class SongTemplate:

	"""
	A named song form.

	Attributes:
		name: Library key, e.g. ``"POP_RADIO"``.
		genre: The genre the template is listed under.
		bpm: Suggested tempo.
		label: Display name.
		description: One-line summary.
		sections: Ordered section spans.
	"""

	name: str
	genre: songbrain.sections.Genre
	bpm: int
	label: str
	description: str
	sections: typing.Tuple[SectionSpan, ...]

	@property
	def total_bars (self) -> int:

		"""Return the number of bars the template expands to."""

		return sum(max(0, span.bars) for span in self.sections)


def _spans (*pairs: typing.Tuple[songbrain.sections.SectionType, int]) -> typing.Tuple[SectionSpan, ...]:

	return tuple(SectionSpan(section, bars) for section, bars in pairs)


SONG_TEMPLATES: typing.Dict[str, SongTemplate] = {
	template.name: template for template in (
		SongTemplate(
			"POP_RADIO", _G.POP, 120, "Pop: Radio Hit",
			"The gold standard. Balanced verse/chorus (~3:00).",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 8), (_S.PRE_CHORUS, 4), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.PRE_CHORUS, 4), (_S.CHORUS, 8),
				(_S.BRIDGE, 8), (_S.CHORUS, 16), (_S.OUTRO, 4)
			)
		),
		SongTemplate(
			"POP_SHORT", _G.POP, 124, "Pop: Short / Viral",
			"Fast paced, no bridge, straight to the point (~2:00).",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 8), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.CHORUS, 8), (_S.OUTRO, 4)
			)
		),
		SongTemplate(
			"POP_EPIC", _G.POP, 75, "Pop: Power Ballad / Epic",
			"Slow, emotional, includes Solo section (~3:45).",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 8), (_S.PRE_CHORUS, 4), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.PRE_CHORUS, 4), (_S.CHORUS, 8),
				(_S.SOLO, 8), (_S.BRIDGE, 8), (_S.CHORUS, 16), (_S.OUTRO, 8)
			)
		),
		SongTemplate(
			"TRAP", _G.HIPHOP, 140, "Hip Hop: Modern Trap",
			"Standard trap structure with distinct hook sections.",
			_spans(
				(_S.INTRO, 4), (_S.CHORUS, 8), (_S.VERSE, 16),
				(_S.CHORUS, 8), (_S.VERSE, 16), (_S.CHORUS, 8), (_S.OUTRO, 4)
			)
		),
		SongTemplate(
			"BOOMBAP", _G.HIPHOP, 90, "Hip Hop: Old School",
			"Focus on rhythm and long verses.",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 16), (_S.CHORUS, 4),
				(_S.VERSE, 16), (_S.CHORUS, 4), (_S.VERSE, 16), (_S.OUTRO, 8)
			)
		),
		SongTemplate(
			"EDM_RADIO", _G.EDM, 128, "EDM: Radio Edit",
			"Compact version of a dance track.",
			_spans(
				(_S.INTRO, 8), (_S.VERSE, 8), (_S.PRE_CHORUS, 8), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.PRE_CHORUS, 8), (_S.CHORUS, 16), (_S.OUTRO, 8)
			)
		),
		SongTemplate(
			"EDM_CLUB", _G.EDM, 128, "EDM: Club Extended",
			"DJ friendly. Long Intro/Outro.",
			_spans(
				(_S.INTRO, 16), (_S.VERSE, 16), (_S.PRE_CHORUS, 8), (_S.CHORUS, 16),
				(_S.BRIDGE, 8), (_S.PRE_CHORUS, 8), (_S.CHORUS, 16), (_S.OUTRO, 16)
			)
		),
		SongTemplate(
			"ROCK_CLASSIC", _G.ROCK, 110, "Classic Rock",
			"Standard Verse-Chorus rock anthem.",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 8), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.CHORUS, 8), (_S.SOLO, 8),
				(_S.CHORUS, 16), (_S.OUTRO, 4)
			)
		),
		SongTemplate(
			"PUNK_ROCK", _G.ROCK, 160, "Punk / High Energy",
			"Fast, loud, and short.",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 8), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.CHORUS, 8), (_S.OUTRO, 4)
			)
		),
		SongTemplate(
			"LOFI_BEAT", _G.LOFI, 80, "Lo-Fi Hip Hop",
			"Relaxing beats to study/relax to.",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 16), (_S.BRIDGE, 4),
				(_S.VERSE, 16), (_S.OUTRO, 8)
			)
		),
		SongTemplate(
			"REGGAETON", _G.LATIN, 95, "Latin / Reggaeton",
			"The classic Dembow rhythm.",
			_spans(
				(_S.INTRO, 4), (_S.CHORUS, 8), (_S.VERSE, 16),
				(_S.CHORUS, 8), (_S.VERSE, 16), (_S.CHORUS, 8), (_S.OUTRO, 4)
			)
		),
		SongTemplate(
			"PERSIAN_SLOW_6_8", _G.PERSIAN, 85, "Persian: Slow 6/8 (Slo-Rock)",
			"Classic slow rhythm, emotional and heavy.",
			_spans(
				(_S.INTRO, 4), (_S.VERSE, 8), (_S.PRE_CHORUS, 4), (_S.CHORUS, 8),
				(_S.SOLO, 8), (_S.VERSE, 8), (_S.CHORUS, 16), (_S.OUTRO, 8)
			)
		),
		SongTemplate(
			"PERSIAN_POP_NOSTALGIA", _G.PERSIAN, 105, "Persian: 80s/90s Pop",
			"Standard 4/4 pop structure.",
			_spans(
				(_S.INTRO, 8), (_S.VERSE, 8), (_S.CHORUS, 8),
				(_S.VERSE, 8), (_S.CHORUS, 8), (_S.BRIDGE, 8),
				(_S.CHORUS, 16), (_S.OUTRO, 8)
			)
		),
	)
}


def get_template (name: typing.Optional[str]) -> SongTemplate:

	"""
	Return a template by library key, falling back to ``POP_RADIO``.
	"""

	if name is not None and name.upper() in SONG_TEMPLATES:
		return SONG_TEMPLATES[name.upper()]

	logger.debug(f"Unknown template {name!r}, using {DEFAULT_TEMPLATE}")
	return SONG_TEMPLATES[DEFAULT_TEMPLATE]


def templates_for_genre (genre: typing.Any) -> typing.List[SongTemplate]:

	"""Return the templates listed under a genre, in library order."""

	resolved = songbrain.sections.resolve_genre(genre)

	return [template for template in SONG_TEMPLATES.values() if template.genre == resolved]


def expand_structure (template: typing.Union[SongTemplate, str, None]) -> typing.List[songbrain.sections.SectionType]:

	"""Run-length decode a template into one section per bar.

	Accepts a template or a library key (unknown keys use ``POP_RADIO``).
	The result length is the sum of the positive span lengths; zero and
	negative spans are skipped.

	Example:
		```python
		template = SongTemplate("tiny", Genre.POP, 120, "Tiny", "", (
			SectionSpan(SectionType.INTRO, 2),
			SectionSpan(SectionType.VERSE, 3),
		))
		expand_structure(template)
		# → [INTRO, INTRO, VERSE, VERSE, VERSE]
		```
	"""

	if not isinstance(template, SongTemplate):
		template = get_template(template)

	structure: typing.List[songbrain.sections.SectionType] = []

	for span in template.sections:
		structure.extend([songbrain.sections.resolve_section(span.section)] * max(0, span.bars))

	return structure


def next_sections (structure: typing.Sequence[songbrain.sections.SectionType]) -> typing.List[songbrain.sections.SectionType]:

	"""Return the section of the following bar for every bar; the last bar looks ahead to ``OUTRO``."""

	return [
		structure[bar + 1] if bar + 1 < len(structure) else _S.OUTRO
		for bar in range(len(structure))
	]


@dataclasses.dataclass(frozen=True)
class SectionInfo:

	"""
	An immutable snapshot of where one bar sits in the song form.

	Attributes:
		section: The bar's section.
		bar: The bar index within this section (0-indexed).
		bars: Total number of bars in this section run.
		next_section: The section of the following bar (``OUTRO`` after the last bar).
	"""

	section: songbrain.sections.SectionType
	bar: int
	bars: int
	next_section: songbrain.sections.SectionType

	@property
	def first_bar (self) -> bool:

		"""Return True if this is the first bar of the section."""

		return self.bar == 0

	@property
	def last_bar (self) -> bool:

		"""Return True if this is the last bar of the section."""

		return self.bar == self.bars - 1


def section_infos (structure: typing.Sequence[songbrain.sections.SectionType]) -> typing.List[SectionInfo]:

	"""Describe every bar of an expanded structure.

	A section run is a maximal stretch of consecutive bars with the same
	section, so two adjacent template spans of the same type form one run.
	The last bar of each run is where the drum engine plays its fill.
	"""

	resolved = [songbrain.sections.resolve_section(section) for section in structure]
	lookahead = next_sections(resolved)

	infos: typing.List[SectionInfo] = []
	run_start = 0

	while run_start < len(resolved):

		run_end = run_start
		while run_end + 1 < len(resolved) and resolved[run_end + 1] == resolved[run_start]:
			run_end += 1

		length = run_end - run_start + 1

		for offset in range(length):
			bar = run_start + offset
			infos.append(SectionInfo(
				section = resolved[bar],
				bar = offset,
				bars = length,
				next_section = lookahead[bar]
			))

		run_start = run_end + 1

	return infos
