"""Scale definitions, interval consonance ratings and vocal ranges.

Module-level constants:
- `SCALE_DEFINITIONS`: Maps scale names to semitone offsets from the root
- `INTERVAL_QUALITIES`: Consonance score and mood for each interval (semitones mod 12)
- `VOCAL_RANGES`: Named inclusive MIDI bounds used to clip generated melodies

Scale names are matched exactly (``"Major"``, ``"HarmonicMinor"``, …).  An
unknown name resolves to ``"Major"`` rather than raising: the engine is a
creative tool and every call must produce something playable.
"""

import dataclasses
import logging
import typing

import songbrain.constants


logger = logging.getLogger(__name__)


DEFAULT_SCALE = "Major"

SCALE_DEFINITIONS: typing.Dict[str, typing.List[int]] = {
	"Major": [0, 2, 4, 5, 7, 9, 11],
	"Minor": [0, 2, 3, 5, 7, 8, 10],
	"HarmonicMinor": [0, 2, 3, 5, 7, 8, 11],
	"Dorian": [0, 2, 3, 5, 7, 9, 10],
	"Phrygian": [0, 1, 3, 5, 7, 8, 10],
	"Mixolydian": [0, 2, 4, 5, 7, 9, 10],
	"Blues": [0, 3, 5, 6, 7, 10],
	"PentatonicMajor": [0, 2, 4, 7, 9],
	"PentatonicMinor": [0, 3, 5, 7, 10],
}


@dataclasses.dataclass(frozen=True)
class IntervalQuality:

	"""
	How consonant an interval sounds, on a 0-100 scale, with a short description.
	"""

	score: int
	mood: str


INTERVAL_QUALITIES: typing.Dict[int, IntervalQuality] = {
	0: IntervalQuality(100, "Unison"),
	1: IntervalQuality(10, "Min 2nd (Clash)"),
	2: IntervalQuality(60, "Major 2nd"),
	3: IntervalQuality(85, "Minor 3rd (Sad)"),
	4: IntervalQuality(90, "Major 3rd (Happy)"),
	5: IntervalQuality(70, "Perfect 4th"),
	6: IntervalQuality(20, "Tritone (Dissonant)"),
	7: IntervalQuality(95, "Perfect 5th (Stable)"),
	9: IntervalQuality(80, "Major 6th"),
	11: IntervalQuality(40, "Maj 7th (Tense)"),
	12: IntervalQuality(100, "Octave"),
}


@dataclasses.dataclass(frozen=True)
class VocalRange:

	"""
	Inclusive MIDI bounds for a voice type.
	"""

	low: int
	high: int
	label: str


VOCAL_RANGES: typing.Dict[str, VocalRange] = {
	"NONE": VocalRange(0, 127, "No Limit"),
	"SOPRANO": VocalRange(60, 84, "Soprano (C4-C6)"),
	"MEZZO": VocalRange(57, 81, "Mezzo (A3-A5)"),
	"ALTO": VocalRange(53, 77, "Alto (F3-F5)"),
	"TENOR": VocalRange(48, 72, "Tenor (C3-C5)"),
	"BARITONE": VocalRange(41, 64, "Baritone (F2-E4)"),
	"BASS": VocalRange(36, 60, "Bass (C2-C4)"),
}

# Used when the requested vocal range is not in the table.
DEFAULT_VOCAL_RANGE = VocalRange(48, 84, "Default")


def validate_scale_offsets (offsets: typing.Sequence[int]) -> None:

	"""Raise ValueError unless offsets start at 0, strictly increase and stay below 12."""

	if not offsets:
		raise ValueError("Scale offsets cannot be empty")

	if offsets[0] != 0:
		raise ValueError(f"Scale offsets must start at 0, got {offsets[0]}")

	for previous, current in zip(offsets, offsets[1:]):
		if current <= previous:
			raise ValueError(f"Scale offsets must be strictly increasing: {list(offsets)}")

	if offsets[-1] >= 12:
		raise ValueError(f"Scale offsets must be below 12: {list(offsets)}")


def register_scale (name: str, offsets: typing.Sequence[int]) -> None:

	"""Register a custom scale so it can be used anywhere a scale name is accepted.

	Parameters:
		name: Scale name (case-sensitive, like the built-ins).
		offsets: Semitone offsets from the root, e.g. ``[0, 2, 3, 7, 8]``.

	Raises:
		ValueError: If the offsets violate the scale invariant.

	Example:
		```python
		register_scale("Hirajoshi", [0, 2, 3, 7, 8])
		scale_notes(2, "Hirajoshi")
		```
	"""

	validate_scale_offsets(offsets)
	SCALE_DEFINITIONS[name] = list(offsets)


def resolve_scale_name (scale_name: typing.Optional[str]) -> str:

	"""Return ``scale_name`` if it is defined, otherwise ``DEFAULT_SCALE``."""

	if scale_name in SCALE_DEFINITIONS:
		return typing.cast(str, scale_name)

	logger.debug(f"Unknown scale {scale_name!r}, using {DEFAULT_SCALE}")
	return DEFAULT_SCALE


def get_scale_offsets (scale_name: typing.Optional[str]) -> typing.List[int]:

	"""
	Return the offsets of a scale, falling back to Major.
	"""

	return list(SCALE_DEFINITIONS[resolve_scale_name(scale_name)])


def scale_pitch_classes (root_pc: int, scale_name: typing.Optional[str]) -> typing.FrozenSet[int]:

	"""
	Return the pitch classes (0-11) of a scale built on ``root_pc``.
	"""

	return frozenset((root_pc + offset) % 12 for offset in get_scale_offsets(scale_name))


def scale_notes (root_pc: int, scale_name: typing.Optional[str]) -> typing.FrozenSet[int]:

	"""Return every MIDI note (0-127) that belongs to the scale.

	A note belongs when ``(midi - root_pc) mod 12`` is one of the scale offsets.

	Parameters:
		root_pc: Root pitch class (0 = C, 1 = C#/Db, …, 11 = B).
		scale_name: Scale name, e.g. ``"Major"``.  Unknown names use Major.

	Example:
		```python
		notes = scale_notes(0, "Major")
		60 in notes  # → True  (C4)
		61 in notes  # → False (C#4)
		```
	"""

	offsets = set(get_scale_offsets(scale_name))

	return frozenset(
		midi for midi in range(songbrain.constants.MIN_MIDI, songbrain.constants.MAX_MIDI + 1)
		if (midi - root_pc) % 12 in offsets
	)


def notes_in_range (notes: typing.AbstractSet[int], low: int, high: int) -> typing.List[int]:

	"""
	Return the members of a note set within ``[low, high]`` (inclusive), ascending.
	"""

	return [midi for midi in range(max(low, 0), min(high, 127) + 1) if midi in notes]


def scale_notes_in_range (root_pc: int, scale_name: typing.Optional[str], low: int, high: int) -> typing.List[int]:

	"""
	Return the ascending scale notes within ``[low, high]`` (inclusive).
	"""

	return notes_in_range(scale_notes(root_pc, scale_name), low, high)


def interval_quality (interval: int) -> typing.Optional[IntervalQuality]:

	"""
	Return the consonance rating of an interval in semitones, or None if it is not rated.
	"""

	return INTERVAL_QUALITIES.get(interval)


def get_vocal_range (name: typing.Optional[str]) -> VocalRange:

	"""
	Return a named vocal range, falling back to a 48-84 default.
	"""

	if name is not None and name.upper() in VOCAL_RANGES:
		return VOCAL_RANGES[name.upper()]

	logger.debug(f"Unknown vocal range {name!r}, using default")
	return DEFAULT_VOCAL_RANGE
