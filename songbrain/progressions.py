"""Progression styles: per-genre chord libraries keyed by section.

A progression is a list of chord-degree indices into the chord table of the
style's preferred scale (see ``songbrain.chord_tables``).  Each genre offers a
handful of named styles ("vibes"); each style maps sections to a short loop
of indices.

Lookup fallbacks:

- Genre without a library (``TECHNO``, ``TRAP``, unknown names) → ``POP``.
- ``progression_for``: Solo/Drop read the Chorus entry; a missing entry falls
  back to Chorus, then Verse, then the tonic alone.
- ``chord_progression`` keeps the fixed ``[0, 5, 3, 4]`` loop for a section the
  style does not list, reduced modulo the scale's chord count.
"""

import dataclasses
import logging
import random
import typing

import songbrain.chord_tables
import songbrain.sections


logger = logging.getLogger(__name__)

_S = songbrain.sections.SectionType
_G = songbrain.sections.Genre

FALLBACK_PROGRESSION: typing.Tuple[int, ...] = (0, 5, 3, 4)


@dataclasses.dataclass(frozen=True)
class ProgressionStyle:

	"""
	A named chord vocabulary for one genre.

	Attributes:
		name: Display name of the style.
		preferred_scale: Scale the indices are written against.
		description: One-line summary shown to the user.
		sections: Chord-degree loop per section.
	"""

	name: str
	preferred_scale: str
	description: str
	sections: typing.Dict[songbrain.sections.SectionType, typing.Tuple[int, ...]]

	def progression_for (self, section: typing.Any) -> typing.Tuple[int, ...]:

		"""Return the chord loop for a section, following the fallback chain.

		Example:
			```python
			style = style_by_vibe("POP", 0)
			style.progression_for("DROP")   # → the Chorus loop
			style.progression_for("NONE")   # → the Chorus loop
			```
		"""

		target = songbrain.sections.resolve_section(section)

		if target in songbrain.sections.CHORUS_LIKE:
			target = _S.CHORUS

		for candidate in (target, _S.CHORUS, _S.VERSE):
			chords = self.sections.get(candidate)
			if chords:
				return chords

		logger.debug(f"Style {self.name!r} has no chords for {target.value}, using the tonic")
		return (0,)


PROGRESSION_STYLES: typing.Dict[songbrain.sections.Genre, typing.List[ProgressionStyle]] = {

	_G.POP: [
		ProgressionStyle(
			name = "The Axis of Awesome",
			preferred_scale = "Major",
			description = "The most famous 4 chords (I - V - vi - IV). Works for everything.",
			sections = {
				_S.INTRO: (0,),
				_S.VERSE: (0, 4),
				_S.PRE_CHORUS: (5, 3),
				_S.CHORUS: (0, 4, 5, 3),
				_S.BRIDGE: (3, 4, 3, 4),
				_S.SOLO: (0, 4, 5, 3),
				_S.OUTRO: (0,),
			}
		),
		ProgressionStyle(
			name = "Emotional Ballad",
			preferred_scale = "Major",
			description = "Sad & deep start, heroic finish (vi - IV - I - V).",
			sections = {
				_S.INTRO: (5, 3),
				_S.VERSE: (5, 3),
				_S.PRE_CHORUS: (1, 4),
				_S.CHORUS: (5, 3, 0, 4),
				_S.BRIDGE: (2, 5, 1, 4),
				_S.SOLO: (5, 3, 0, 4),
				_S.OUTRO: (3, 0),
			}
		),
		ProgressionStyle(
			name = "Doo-Wop / 50s",
			preferred_scale = "Major",
			description = "Classic romantic vibes (I - vi - IV - V).",
			sections = {
				_S.INTRO: (0, 5, 3, 4),
				_S.VERSE: (0, 5, 3, 4),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (0, 5, 3, 4),
				_S.BRIDGE: (1, 4, 0, 4),
				_S.SOLO: (0, 5, 3, 4),
				_S.OUTRO: (0, 3, 0),
			}
		),
		ProgressionStyle(
			name = "Royal Road (Anime/Epic)",
			preferred_scale = "Major",
			description = "Powerful & Heroic (IV - V - iii - vi). Very popular in Japan.",
			sections = {
				_S.INTRO: (3, 4, 2, 5),
				_S.VERSE: (0, 4, 5, 0),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (3, 4, 2, 5),
				_S.BRIDGE: (1, 4, 3, 4),
				_S.SOLO: (3, 4, 2, 5),
				_S.OUTRO: (3, 4, 0),
			}
		),
		ProgressionStyle(
			name = "Dreamy / Psychedelic",
			preferred_scale = "Major",
			description = "Floating summer vibes (I - IV loop).",
			sections = {
				_S.INTRO: (0, 3),
				_S.VERSE: (0, 3),
				_S.PRE_CHORUS: (1, 4),
				_S.CHORUS: (0, 3, 0, 3),
				_S.BRIDGE: (5, 2, 3, 4),
				_S.SOLO: (0, 3),
				_S.OUTRO: (0,),
			}
		),
		ProgressionStyle(
			name = "80s Synth-Pop Revival",
			preferred_scale = "Major",
			description = "Fast, energetic and driving.",
			sections = {
				_S.INTRO: (5, 5, 3, 3),
				_S.VERSE: (5, 0, 4, 3),
				_S.PRE_CHORUS: (1, 4),
				_S.CHORUS: (5, 3, 0, 4),
				_S.BRIDGE: (3, 4, 3, 4),
				_S.SOLO: (5, 3, 0, 4),
				_S.OUTRO: (5,),
			}
		),
		ProgressionStyle(
			name = "Gen-Z Alternative",
			preferred_scale = "Minor",
			description = "Moody, bass-driven and minimal.",
			sections = {
				_S.INTRO: (5,),
				_S.VERSE: (5, 3),
				_S.PRE_CHORUS: (0, 4),
				_S.CHORUS: (5, 2, 3, 4),
				_S.BRIDGE: (1, 6, 5),
				_S.OUTRO: (5,),
			}
		),
	],

	_G.EDM: [
		ProgressionStyle(
			name = "Festival Anthem",
			preferred_scale = "Minor",
			description = "Big Room Energy (vi - IV - I - V). Minor feel.",
			sections = {
				_S.INTRO: (5,),
				_S.VERSE: (5, 2),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (5, 3, 0, 4),
				_S.DROP: (5, 3, 0, 4),
				_S.BRIDGE: (1, 4),
				_S.OUTRO: (5, 0),
			}
		),
		ProgressionStyle(
			name = "Summer Vibes",
			preferred_scale = "Major",
			description = "Uplifting & Sunny (IV - I - V - vi).",
			sections = {
				_S.INTRO: (3, 0),
				_S.VERSE: (3, 0),
				_S.PRE_CHORUS: (1, 4),
				_S.CHORUS: (3, 0, 4, 5),
				_S.DROP: (3, 0, 4, 5),
				_S.BRIDGE: (1, 3, 4),
				_S.OUTRO: (3, 3, 0),
			}
		),
	],

	_G.HIPHOP: [
		ProgressionStyle(
			name = "Dark Trap",
			preferred_scale = "Phrygian",
			description = "Menacing & Phrygian (i - bII). Semitone tension.",
			sections = {
				_S.INTRO: (0, 1),
				_S.VERSE: (0, 1),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (0, 2, 0, 1),
				_S.BRIDGE: (3, 4),
				_S.OUTRO: (0,),
			}
		),
		ProgressionStyle(
			name = "Melodic / Emo Rap",
			preferred_scale = "Minor",
			description = "Emotional Loop (vi - V - IV - V).",
			sections = {
				_S.INTRO: (5, 4),
				_S.VERSE: (5, 4),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (3, 4, 5, 5),
				_S.BRIDGE: (1, 4),
				_S.OUTRO: (5,),
			}
		),
	],

	_G.ROCK: [
		ProgressionStyle(
			name = "Arena Rock",
			preferred_scale = "Mixolydian",
			description = "Powerful Mixolydian (I - bVII - IV).",
			sections = {
				_S.INTRO: (0, 6, 3),
				_S.VERSE: (0, 3),
				_S.PRE_CHORUS: (5, 4),
				_S.CHORUS: (0, 6, 3, 4),
				_S.SOLO: (0, 6, 3),
				_S.BRIDGE: (1, 4),
				_S.OUTRO: (0, 0, 0),
			}
		),
		ProgressionStyle(
			name = "Alternative / Grunge",
			preferred_scale = "Minor",
			description = "Moody & Contrast (vi - I - V). Verse/Chorus shift.",
			sections = {
				_S.INTRO: (5, 2),
				_S.VERSE: (5, 2),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (5, 0, 4, 4),
				_S.SOLO: (5, 0, 4),
				_S.OUTRO: (5,),
			}
		),
	],

	_G.LOFI: [
		ProgressionStyle(
			name = "Jazz Hop (2-5-1)",
			preferred_scale = "Dorian",
			description = "The Jazz Standard (ii - V - I). Smooth & Classy.",
			sections = {
				_S.INTRO: (1, 4),
				_S.VERSE: (1, 4, 0, 5),
				_S.PRE_CHORUS: (3, 6),
				_S.CHORUS: (1, 4, 0, 0),
				_S.BRIDGE: (3, 4),
				_S.SOLO: (1, 4, 0),
				_S.OUTRO: (0,),
			}
		),
		ProgressionStyle(
			name = "Nostalgic Drift",
			preferred_scale = "Major",
			description = "Sentimental (IV - iii - ii - V).",
			sections = {
				_S.INTRO: (3,),
				_S.VERSE: (3, 2),
				_S.PRE_CHORUS: (1, 4),
				_S.CHORUS: (3, 2, 1, 4),
				_S.BRIDGE: (5, 4),
				_S.OUTRO: (0,),
			}
		),
	],

	_G.LATIN: [
		ProgressionStyle(
			name = "Despacito Vibe",
			preferred_scale = "Major",
			description = "Latin Pop Standard (vi - IV - I - V).",
			sections = {
				_S.INTRO: (5, 3),
				_S.VERSE: (5, 3),
				_S.PRE_CHORUS: (0, 4),
				_S.CHORUS: (5, 3, 0, 4),
				_S.BRIDGE: (1, 4),
				_S.SOLO: (5, 3, 0, 4),
				_S.OUTRO: (5,),
			}
		),
		ProgressionStyle(
			name = "Party Starter",
			preferred_scale = "Minor",
			description = "Simple & Catchy (ii - V - vi).",
			sections = {
				_S.INTRO: (1, 4),
				_S.VERSE: (1, 4),
				_S.PRE_CHORUS: (3, 4),
				_S.CHORUS: (1, 4, 5, 5),
				_S.SOLO: (1, 4, 5),
				_S.OUTRO: (1,),
			}
		),
	],

	_G.PERSIAN: [
		ProgressionStyle(
			name = "Andalusian Nostalgia",
			preferred_scale = "HarmonicMinor",
			description = "Classic descending nostalgia (i - VII - VI - V).",
			sections = {
				_S.INTRO: (4, 4, 0, 0),
				_S.VERSE: (0, 6, 5, 4),
				_S.PRE_CHORUS: (3, 0, 3, 4),
				_S.CHORUS: (0, 6, 5, 4),
				_S.BRIDGE: (5, 6, 3, 4),
				_S.SOLO: (0, 6, 5, 4),
				_S.OUTRO: (4, 0),
			}
		),
		ProgressionStyle(
			name = "6/8 Persian Ballad",
			preferred_scale = "HarmonicMinor",
			description = "Traditional Persian Pop rhythm (i - iv - V).",
			sections = {
				_S.INTRO: (0, 3),
				_S.VERSE: (0, 3, 4, 0),
				_S.PRE_CHORUS: (3, 0, 4, 4),
				_S.CHORUS: (2, 5, 3, 4),
				_S.BRIDGE: (1, 4),
				_S.OUTRO: (0,),
			}
		),
	],
}


def styles_for_genre (genre: typing.Any) -> typing.List[ProgressionStyle]:

	"""
	Return the style list of a genre, falling back to POP.
	"""

	resolved = songbrain.sections.resolve_genre(genre)

	if resolved not in PROGRESSION_STYLES:
		logger.debug(f"No progression styles for {resolved.value}, using POP")
		return PROGRESSION_STYLES[_G.POP]

	return PROGRESSION_STYLES[resolved]


def style_by_vibe (genre: typing.Any, vibe_index: int) -> ProgressionStyle:

	"""
	Return the style at ``vibe_index`` for a genre, or the first style when the index is out of range.
	"""

	styles = styles_for_genre(genre)

	if 0 <= vibe_index < len(styles):
		return styles[vibe_index]

	logger.debug(f"Vibe index {vibe_index} out of range, using {styles[0].name!r}")
	return styles[0]


def chord_progression (genre: typing.Any, section: typing.Any, rng: typing.Optional[random.Random] = None) -> typing.List[int]:

	"""Pick a random style of the genre and return its loop for a section.

	Unlike ``ProgressionStyle.progression_for`` this does not walk the
	section fallback chain: a section the chosen style does not list gets the
	fixed ``[0, 5, 3, 4]`` loop, reduced modulo the chord count of the style's
	scale so every index is valid.

	Parameters:
		genre: Genre member or name.
		section: Section member or name.
		rng: Random number generator (a fresh unseeded one when omitted).

	Example:
		```python
		chord_progression("POP", "CHORUS", random.Random(1))   # e.g. [5, 3, 0, 4]
		chord_progression("ROCK", "DROP", random.Random(1))    # → [0, 5, 3, 4]
		```
	"""

	rng = rng or random.Random()

	styles = styles_for_genre(genre)
	style = rng.choice(styles)

	chords = style.sections.get(songbrain.sections.resolve_section(section))

	if chords:
		return list(chords)

	count = songbrain.chord_tables.degree_count(style.preferred_scale)
	return [index % count for index in FALLBACK_PROGRESSION]


def assign_chords_to_structure (
	bar_structure: typing.Sequence[typing.Any],
	style: ProgressionStyle
) -> typing.List[int]:

	"""Assign one chord-degree index to every bar of a song.

	Each bar reads its section's loop and indexes it with the **global** bar
	index (``bar % len(loop)``), so a loop is not restarted at a section
	boundary.  An eight-bar Verse that starts on bar 4 with a loop of three
	chords therefore starts on the loop's second chord.
	"""

	chords: typing.List[int] = []

	for bar, section in enumerate(bar_structure):
		loop = style.progression_for(section)
		chords.append(loop[bar % len(loop)])

	return chords


@dataclasses.dataclass(frozen=True)
class SectionRule:

	"""
	Harmony advice for a section: chords that suit it, chords to avoid, and short tips.
	"""

	description: str
	suggested: typing.Tuple[int, ...] = ()
	avoid: typing.Tuple[int, ...] = ()
	tips: typing.Dict[int, str] = dataclasses.field(default_factory=dict)


SECTION_RULES: typing.Dict[songbrain.sections.SectionType, SectionRule] = {
	_S.NONE: SectionRule("No Section Defined"),
	_S.INTRO: SectionRule(
		"Set the Atmosphere",
		suggested = (0,),
		tips = {0: "Perfect Start", 4: "Tension Start"}
	),
	_S.VERSE: SectionRule(
		"Storytelling (Stable & Loop)",
		suggested = (0, 5),
		tips = {0: "Main Story", 5: "Emotional Loop", 3: "Walking away"}
	),
	_S.PRE_CHORUS: SectionRule(
		"Build Tension",
		suggested = (3, 4, 1),
		avoid = (0,),
		tips = {4: "Ultimate Buildup", 3: "Lift off", 1: "Jazzy Prep"}
	),
	_S.CHORUS: SectionRule(
		"Release & Power",
		suggested = (0, 3, 4, 5),
		avoid = (1, 2, 6),
		tips = {0: "Power Home", 3: "Anthem Feel", 4: "Call to action"}
	),
	_S.SOLO: SectionRule(
		"Instrumental Break",
		suggested = (0, 5, 3, 4),
		tips = {0: "Epic Center", 5: "Emotional Solo"}
	),
	_S.BRIDGE: SectionRule(
		"Contrast & Shift",
		suggested = (5, 2, 3),
		avoid = (0,),
		tips = {5: "Dark Turn", 2: "Emotional Shift", 4: "Peak Tension"}
	),
	_S.OUTRO: SectionRule(
		"Fade Out",
		suggested = (0,),
		avoid = (4,),
		tips = {0: "The End", 3: "Plagal Fade"}
	),
}


@dataclasses.dataclass(frozen=True)
class DegreeRating:

	"""How a chord degree suits a section."""

	verdict: str
	tip: typing.Optional[str]


def section_rule (section: typing.Any) -> SectionRule:

	"""Return the harmony rule of a section; Drop borrows the Chorus rule, anything unknown gets the empty rule."""

	resolved = songbrain.sections.resolve_section(section)

	if resolved == _S.DROP:
		resolved = _S.CHORUS

	return SECTION_RULES.get(resolved, SECTION_RULES[_S.NONE])


def rate_degree (section: typing.Any, degree_index: int) -> DegreeRating:

	"""Rate a chord degree for a section as ``"suggested"``, ``"avoid"`` or ``"neutral"``.

	Example:
		```python
		rate_degree("PRE_CHORUS", 4)   # → DegreeRating("suggested", "Ultimate Buildup")
		rate_degree("CHORUS", 6)       # → DegreeRating("avoid", None)
		```
	"""

	rule = section_rule(section)

	if degree_index in rule.suggested:
		verdict = "suggested"
	elif degree_index in rule.avoid:
		verdict = "avoid"
	else:
		verdict = "neutral"

	return DegreeRating(verdict=verdict, tip=rule.tips.get(degree_index))
