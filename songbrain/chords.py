"""Chord degree definitions and pitch class utilities.

This module provides the `ChordDegree` type used by every scale's chord
table, note naming helpers, and the note-role classifier.

Module-level constants:
- `PC_TO_NOTE_NAME`: Maps pitch classes to note names
- `NOTE_NAME_TO_PC`: Maps note names (e.g., `"C"`, `"F#"`, `"Bb"`) to pitch classes (0-11)
- `CHORD_SUFFIX`: Maps chord qualities to display suffixes (e.g., `"m"`, `"7"`)
- `ROLE_INTERVALS`: Maps intervals above the chord root to a `NoteRole`

Chord degree intervals are offsets from the **scale root**, not the chord
root: ``intervals[0]`` is the chord root's distance from the tonic.  The
minor ``iv`` chord of A minor is therefore ``[5, 8, 0]`` (D, F, A).
"""

import dataclasses
import enum
import typing


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]


class ChordQuality (str, enum.Enum):

	"""Chord quality as shown in a scale's chord table."""

	MAJOR = "Major"
	MINOR = "Minor"
	DIM = "Dim"
	AUG = "Aug"
	DOM7 = "Dom7"


class HarmonicFunction (str, enum.Enum):

	"""The role a chord plays in tension and resolution."""

	TONIC = "TONIC"
	SUPERTONIC = "SUPERTONIC"
	MEDIANT = "MEDIANT"
	SUBDOMINANT = "SUBDOMINANT"
	DOMINANT = "DOMINANT"
	SUBMEDIANT = "SUBMEDIANT"
	LEADING = "LEADING"
	SUBTONIC = "SUBTONIC"


class NoteRole (str, enum.Enum):

	"""Where a note sits relative to the root of the current chord."""

	ROOT = "ROOT"
	THIRD = "THIRD"
	FIFTH = "FIFTH"
	SEVENTH = "SEVENTH"
	EXTENSION = "EXTENSION"
	NON_CHORD = "NON_CHORD"


CHORD_SUFFIX: typing.Dict[ChordQuality, str] = {
	ChordQuality.MAJOR: "",
	ChordQuality.MINOR: "m",
	ChordQuality.DIM: "°",
	ChordQuality.AUG: "+",
	ChordQuality.DOM7: "7",
}

ROLE_INTERVALS: typing.Dict[int, NoteRole] = {
	0: NoteRole.ROOT,
	3: NoteRole.THIRD,
	4: NoteRole.THIRD,
	7: NoteRole.FIFTH,
	10: NoteRole.SEVENTH,
	11: NoteRole.SEVENTH,
	2: NoteRole.EXTENSION,
	5: NoteRole.EXTENSION,
	9: NoteRole.EXTENSION,
}


@dataclasses.dataclass(frozen=True)
class ChordDegree:

	"""
	One chord of a scale's chord table.

	Attributes:
		name: Roman numeral for display (e.g. ``"vi"``).
		quality: Chord quality.
		intervals: Offsets from the scale root; the first is the chord root.
		function: Harmonic function within the scale.
		vibe: Free-text mood tag.
	"""

	name: str
	quality: ChordQuality
	intervals: typing.Tuple[int, ...]
	function: HarmonicFunction
	vibe: str = ""


	def root_pc (self, scale_root: int) -> int:

		"""
		Return the absolute pitch class of the chord root.
		"""

		return (scale_root + self.intervals[0]) % 12


	def tone_pcs (self, scale_root: int) -> typing.FrozenSet[int]:

		"""
		Return the absolute pitch classes of the chord tones.
		"""

		return frozenset((scale_root + interval) % 12 for interval in self.intervals)


def note_name (midi: int) -> str:

	"""Return a note name with octave, e.g. ``60`` → ``"C4"``.

	Octave numbering puts middle C (60) in octave 4: ``octave = midi // 12 - 1``.
	"""

	return f"{PC_TO_NOTE_NAME[midi % 12]}{midi // 12 - 1}"


def note_label (midi: int) -> str:

	"""
	Return the pitch-class name of a MIDI note, e.g. ``61`` → ``"C#"``.
	"""

	return PC_TO_NOTE_NAME[midi % 12]


def key_name_to_pc (key_name: str) -> int:

	"""Validate a key name and return its pitch class (0–11).

	Raises:
		ValueError: If the key name is not recognised.
	"""

	if key_name not in NOTE_NAME_TO_PC:
		raise ValueError(
			f"Unknown key name: {key_name!r}. Expected e.g. 'C', 'F#', 'Bb'."
		)

	return NOTE_NAME_TO_PC[key_name]


def real_chord_name (degree: ChordDegree, root_pc: int) -> str:

	"""Return the concrete chord name for a degree in a key.

	Example:
		```python
		vi = chord_degrees("Major")[5]
		real_chord_name(vi, 0)  # → "Am"
		real_chord_name(vi, 7)  # → "Em"
		```
	"""

	root_name = PC_TO_NOTE_NAME[degree.root_pc(root_pc)]
	suffix = CHORD_SUFFIX.get(degree.quality, "")

	return f"{root_name}{suffix}"


def chord_tone_pcs (degree: ChordDegree, root_pc: int) -> typing.FrozenSet[int]:

	"""
	Return the set of absolute pitch classes a chord allows.
	"""

	return degree.tone_pcs(root_pc)


def role_for_interval (interval: int) -> NoteRole:

	"""
	Return the role of an interval (in semitones above the chord root, any octave).
	"""

	return ROLE_INTERVALS.get(interval % 12, NoteRole.NON_CHORD)


def note_role (
	midi: int,
	degree: typing.Optional[ChordDegree],
	scale_root: int,
	chord_root_pc: int
) -> typing.Optional[NoteRole]:

	"""Classify a note against the current chord root.

	The interval ``(midi - chord_root_pc) mod 12`` falls into exactly one of
	the buckets: root {0}, third {3, 4}, fifth {7}, seventh {10, 11},
	extension {2, 5, 9}; everything else (1, 6, 8) is a non-chord tone.

	Parameters:
		midi: Note to classify.
		degree: The chord in effect, or None when the bar has no chord.
		scale_root: Key root pitch class (unused by the buckets, kept for context).
		chord_root_pc: Absolute pitch class of the chord root.

	Returns:
		The note's role, or None when there is no chord to compare against.
	"""

	if degree is None:
		return None

	return role_for_interval(midi % 12 - chord_root_pc)
