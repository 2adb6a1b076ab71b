"""Chord tables: the diatonic chords available in each scale.

Each scale maps to an ordered tuple of `ChordDegree` objects.  A chord
progression is a list of indices into this tuple, so index ``0`` is always
the tonic chord and the meaning of the other indices depends on the scale
(``5`` is ``vi`` in Major, ``VI`` in Minor).

Scales without a table of their own (including custom scales registered at
runtime) borrow the Major table.
"""

import logging
import typing

import songbrain.chords
import songbrain.intervals


logger = logging.getLogger(__name__)

_Q = songbrain.chords.ChordQuality
_F = songbrain.chords.HarmonicFunction
_Degree = songbrain.chords.ChordDegree


CHORD_DEGREES: typing.Dict[str, typing.Tuple[songbrain.chords.ChordDegree, ...]] = {
	"Major": (
		_Degree("I", _Q.MAJOR, (0, 4, 7), _F.TONIC, "Home, Stable"),
		_Degree("ii", _Q.MINOR, (2, 5, 9), _F.SUPERTONIC, "Pre-Dominant"),
		_Degree("iii", _Q.MINOR, (4, 7, 11), _F.MEDIANT, "Emotional bridge"),
		_Degree("IV", _Q.MAJOR, (5, 9, 0), _F.SUBDOMINANT, "Motion, Openness"),
		_Degree("V", _Q.MAJOR, (7, 11, 2), _F.DOMINANT, "Tension -> Home"),
		_Degree("vi", _Q.MINOR, (9, 0, 4), _F.SUBMEDIANT, "Sad relative"),
		_Degree("vii°", _Q.DIM, (11, 2, 5), _F.LEADING, "Unstable"),
	),
	"Minor": (
		_Degree("i", _Q.MINOR, (0, 3, 7), _F.TONIC, "Home, Dark"),
		_Degree("ii°", _Q.DIM, (2, 5, 8), _F.SUPERTONIC, "Tense prep"),
		_Degree("III", _Q.MAJOR, (3, 7, 10), _F.MEDIANT, "Relative Major"),
		_Degree("iv", _Q.MINOR, (5, 8, 0), _F.SUBDOMINANT, "Soft motion"),
		_Degree("v", _Q.MINOR, (7, 10, 2), _F.DOMINANT, "Soft tension"),
		_Degree("VI", _Q.MAJOR, (8, 0, 3), _F.SUBMEDIANT, "Epic lift"),
		_Degree("VII", _Q.MAJOR, (10, 2, 5), _F.SUBTONIC, "Backdoor"),
	),
	"HarmonicMinor": (
		_Degree("i", _Q.MINOR, (0, 3, 7), _F.TONIC, "Home, Serious"),
		_Degree("ii°", _Q.DIM, (2, 5, 8), _F.SUPERTONIC, "Tense"),
		_Degree("III+", _Q.AUG, (3, 7, 11), _F.MEDIANT, "Suspense"),
		_Degree("iv", _Q.MINOR, (5, 8, 0), _F.SUBDOMINANT, "Dark motion"),
		_Degree("V", _Q.MAJOR, (7, 11, 2), _F.DOMINANT, "STRONG Tension!"),
		_Degree("VI", _Q.MAJOR, (8, 0, 3), _F.SUBMEDIANT, "Deceptive resolve"),
		_Degree("vii°", _Q.DIM, (11, 2, 5), _F.LEADING, "Very Unstable"),
	),
	"Dorian": (
		_Degree("i", _Q.MINOR, (0, 3, 7), _F.TONIC, "Groovy Home"),
		_Degree("ii", _Q.MINOR, (2, 5, 9), _F.SUPERTONIC, "Soulful prep"),
		_Degree("III", _Q.MAJOR, (3, 7, 10), _F.MEDIANT, "Bright contrast"),
		_Degree("IV", _Q.MAJOR, (5, 9, 0), _F.SUBDOMINANT, "The Dorian Flavor!"),
		_Degree("v", _Q.MINOR, (7, 10, 2), _F.DOMINANT, "Soft pull"),
		_Degree("vi°", _Q.DIM, (9, 0, 3), _F.SUBMEDIANT, "Dark passing"),
		_Degree("VII", _Q.MAJOR, (10, 2, 5), _F.SUBTONIC, "Classic Rock resolve"),
	),
	"Phrygian": (
		_Degree("i", _Q.MINOR, (0, 3, 7), _F.TONIC, "Menacing Home"),
		_Degree("bII", _Q.MAJOR, (1, 5, 8), _F.SUPERTONIC, "Semitone threat"),
		_Degree("III", _Q.MAJOR, (3, 7, 10), _F.MEDIANT, "Dark lift"),
		_Degree("iv", _Q.MINOR, (5, 8, 0), _F.SUBDOMINANT, "Heavy motion"),
		_Degree("v°", _Q.DIM, (7, 10, 1), _F.DOMINANT, "Unstable pull"),
		_Degree("VI", _Q.MAJOR, (8, 0, 3), _F.SUBMEDIANT, "Cinematic"),
		_Degree("vii", _Q.MINOR, (10, 1, 5), _F.SUBTONIC, "Brooding"),
	),
	"Mixolydian": (
		_Degree("I", _Q.MAJOR, (0, 4, 7), _F.TONIC, "Happy Home"),
		_Degree("ii", _Q.MINOR, (2, 5, 9), _F.SUPERTONIC, "Mellow"),
		_Degree("iii°", _Q.DIM, (4, 7, 10), _F.MEDIANT, "Unstable"),
		_Degree("IV", _Q.MAJOR, (5, 9, 0), _F.SUBDOMINANT, "Bright motion"),
		_Degree("v", _Q.MINOR, (7, 10, 2), _F.DOMINANT, "Modal flavor"),
		_Degree("vi", _Q.MINOR, (9, 0, 4), _F.SUBMEDIANT, "Relative minor"),
		_Degree("bVII", _Q.MAJOR, (10, 2, 5), _F.SUBTONIC, "Backdoor to I"),
	),
	"Blues": (
		_Degree("I7", _Q.DOM7, (0, 4, 7), _F.TONIC, "Blues Home"),
		_Degree("IV7", _Q.DOM7, (5, 9, 0), _F.SUBDOMINANT, "Blues motion"),
		_Degree("V7", _Q.DOM7, (7, 11, 2), _F.DOMINANT, "Turnaround"),
		_Degree("I", _Q.MAJOR, (0, 4, 7), _F.TONIC, "Simplified"),
		_Degree("bVII", _Q.MAJOR, (10, 2, 5), _F.SUBTONIC, "Cool resolve"),
	),
	"PentatonicMajor": (
		_Degree("I", _Q.MAJOR, (0, 4, 7), _F.TONIC, "Home"),
		_Degree("ii", _Q.MINOR, (2, 5, 9), _F.SUPERTONIC, "Soft"),
		_Degree("iii", _Q.MINOR, (4, 7, 11), _F.MEDIANT, "Sweet"),
		_Degree("V", _Q.MAJOR, (7, 11, 2), _F.DOMINANT, "Strong"),
		_Degree("vi", _Q.MINOR, (9, 0, 4), _F.SUBMEDIANT, "Warm"),
	),
	"PentatonicMinor": (
		_Degree("i", _Q.MINOR, (0, 3, 7), _F.TONIC, "Base"),
		_Degree("III", _Q.MAJOR, (3, 7, 10), _F.MEDIANT, "Bright"),
		_Degree("iv", _Q.MINOR, (5, 8, 0), _F.SUBDOMINANT, "Drifting"),
		_Degree("v", _Q.MINOR, (7, 10, 2), _F.DOMINANT, "Soft"),
		_Degree("VII", _Q.MAJOR, (10, 2, 5), _F.SUBTONIC, "Rock vibe"),
	),
}


def chord_degrees (scale_name: typing.Optional[str]) -> typing.Tuple[songbrain.chords.ChordDegree, ...]:

	"""
	Return the chord table of a scale, borrowing the Major table when it has none.
	"""

	if scale_name in CHORD_DEGREES:
		return CHORD_DEGREES[typing.cast(str, scale_name)]

	logger.debug(f"No chord table for {scale_name!r}, using {songbrain.intervals.DEFAULT_SCALE}")
	return CHORD_DEGREES[songbrain.intervals.DEFAULT_SCALE]


def degree_count (scale_name: typing.Optional[str]) -> int:

	"""
	Return how many chord degrees a scale's table holds.
	"""

	return len(chord_degrees(scale_name))


def chord_degree (scale_name: typing.Optional[str], index: typing.Optional[int]) -> typing.Optional[songbrain.chords.ChordDegree]:

	"""Return one chord of a scale's table, or None if the index is out of range.

	Example:
		```python
		chord_degree("Major", 4).name   # → "V"
		chord_degree("Blues", 6)        # → None (the Blues table has 5 chords)
		```
	"""

	table = chord_degrees(scale_name)

	if index is None or index < 0 or index >= len(table):
		return None

	return table[index]
