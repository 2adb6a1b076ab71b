"""Closed vocabularies for song sections, genres and complexity.

Every lookup in the engine is keyed by one of the enums below.  Callers may
pass either an enum member or a (case-insensitive) string; the ``resolve_*``
helpers turn anything into a member, falling back to a documented default
instead of raising.  Generation must always produce something playable, so
an unknown key is a logged lookup miss, never an error.

Fallback policy (defined once, here):

- Section: unknown → ``SectionType.NONE``.
- Genre: unknown → ``Genre.POP``.
- Complexity: unknown → ``Complexity.MEDIUM``.
"""

import enum
import logging
import typing


logger = logging.getLogger(__name__)


class SectionType (str, enum.Enum):

	"""A structural section of a song."""

	INTRO = "INTRO"
	VERSE = "VERSE"
	PRE_CHORUS = "PRE_CHORUS"
	CHORUS = "CHORUS"
	BRIDGE = "BRIDGE"
	SOLO = "SOLO"
	DROP = "DROP"
	OUTRO = "OUTRO"
	NONE = "NONE"


class Genre (str, enum.Enum):

	"""A stylistic family that selects progression, drum and arp libraries."""

	POP = "POP"
	ROCK = "ROCK"
	EDM = "EDM"
	TECHNO = "TECHNO"
	HIPHOP = "HIPHOP"
	TRAP = "TRAP"
	LOFI = "LOFI"
	LATIN = "LATIN"
	PERSIAN = "PERSIAN"


class Complexity (str, enum.Enum):

	"""Rhythmic density requested for melody generation."""

	LOW = "LOW"
	MEDIUM = "MEDIUM"
	HIGH = "HIGH"


class RhythmVibe (str, enum.Enum):

	"""Coarse rhythmic character used to pick a motif pool."""

	SPARSE = "SPARSE"
	CHATTY = "CHATTY"
	ANTHEM = "ANTHEM"
	SYNC = "SYNC"


# Presentation data only: the engine never reads these.
SECTION_LABELS: typing.Dict[SectionType, typing.Tuple[str, str]] = {
	SectionType.INTRO: ("Intro", "#4a69bd"),
	SectionType.VERSE: ("Verse", "#38ada9"),
	SectionType.PRE_CHORUS: ("Pre-Chorus", "#f6b93b"),
	SectionType.CHORUS: ("Chorus", "#e55039"),
	SectionType.BRIDGE: ("Bridge", "#8e44ad"),
	SectionType.SOLO: ("Solo", "#e67e22"),
	SectionType.DROP: ("Drop", "#c0392b"),
	SectionType.OUTRO: ("Outro", "#60a3bc"),
	SectionType.NONE: ("None", "#555555"),
}

SECTION_VIBES: typing.Dict[SectionType, RhythmVibe] = {
	SectionType.INTRO: RhythmVibe.SPARSE,
	SectionType.OUTRO: RhythmVibe.SPARSE,
	SectionType.VERSE: RhythmVibe.CHATTY,
	SectionType.CHORUS: RhythmVibe.ANTHEM,
	SectionType.BRIDGE: RhythmVibe.SYNC,
}

# Sections that borrow the Chorus material when a library has no entry of their own.
CHORUS_LIKE: typing.FrozenSet[SectionType] = frozenset({SectionType.SOLO, SectionType.DROP})


EnumType = typing.TypeVar("EnumType", bound=enum.Enum)


def _resolve (value: typing.Any, enum_type: typing.Type[EnumType], default: EnumType) -> EnumType:

	"""Coerce ``value`` into a member of ``enum_type`` or return ``default``."""

	if isinstance(value, enum_type):
		return value

	if isinstance(value, str):
		key = value.strip().upper().replace("-", "_").replace(" ", "_")

		try:
			return enum_type(key)
		except ValueError:
			pass

	logger.debug(f"Unknown {enum_type.__name__} {value!r}, using {default.value}")
	return default


def resolve_section (value: typing.Any) -> SectionType:

	"""Return the ``SectionType`` for a member or name, defaulting to ``NONE``.

	Example:
		```python
		resolve_section("chorus")      # → SectionType.CHORUS
		resolve_section("pre-chorus")  # → SectionType.PRE_CHORUS
		resolve_section("coda")        # → SectionType.NONE
		```
	"""

	return _resolve(value, SectionType, SectionType.NONE)


def resolve_genre (value: typing.Any) -> Genre:

	"""Return the ``Genre`` for a member or name, defaulting to ``POP``."""

	return _resolve(value, Genre, Genre.POP)


def resolve_complexity (value: typing.Any) -> Complexity:

	"""Return the ``Complexity`` for a member or name, defaulting to ``MEDIUM``."""

	return _resolve(value, Complexity, Complexity.MEDIUM)


def section_vibe (section: typing.Any) -> RhythmVibe:

	"""Return the rhythmic vibe for a section; unlisted sections talk (``CHATTY``)."""

	return SECTION_VIBES.get(resolve_section(section), RhythmVibe.CHATTY)


def section_label (section: typing.Any) -> str:

	"""Return the human-readable label of a section."""

	return SECTION_LABELS[resolve_section(section)][0]
