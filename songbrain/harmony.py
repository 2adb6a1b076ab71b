import dataclasses
import logging
import math
import typing

import songbrain.chord_tables
import songbrain.chords
import songbrain.intervals
import songbrain.song_state


logger = logging.getLogger(__name__)


OUT_OF_KEY_SCORE = 10
IN_SCALE_SCORE = 50
UNRATED_INTERVAL_SCORE = 50
HARMONIOUS_THRESHOLD = 80

# The tonic reference for a note with no predecessor sits in the middle octave.
TONIC_REFERENCE_MIDI = 60


@dataclasses.dataclass(frozen=True)
class NoteAnalysis:

	"""
	How well a single note fits its scale and melodic context.
	"""

	score: int
	mood: str
	details: typing.Tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class BarHarmony:

	"""
	How well the notes of a bar fit the bar's chord.
	"""

	score: int
	chord_name: typing.Optional[str]


def _round_half_up (value: float) -> int:

	"""Round like a score display would (``92.5`` → ``93``)."""

	return int(math.floor(value + 0.5))


def chord_root_pitch_class (scale_root: int, scale_name: str, degree_index: int) -> int:

	"""Return the absolute pitch class of a chord degree's root.

	Returns 0 when the scale has no chord table or the index is out of range.
	"""

	table = songbrain.chord_tables.CHORD_DEGREES.get(scale_name)

	if not table or degree_index < 0 or degree_index >= len(table):
		return 0

	return table[degree_index].root_pc(scale_root)


def analyze_note (
	target_midi: int,
	root_pc: int,
	scale_set: typing.AbstractSet[int],
	previous_midi: typing.Optional[int] = None
) -> NoteAnalysis:

	"""Score a single note against the scale and the note before it.

	Out-of-scale notes short-circuit to a fixed low score.  In-scale notes
	start at 50 and add half the consonance score of the interval to the
	reference note: the previous note when there is one, otherwise the tonic
	in the middle octave.

	Parameters:
		target_midi: The note to analyse.
		root_pc: Key root pitch class.
		scale_set: MIDI notes belonging to the scale (see ``scale_notes``).
		previous_midi: The preceding melody note, if any.

	Example:
		```python
		scale = songbrain.intervals.scale_notes(0, "Major")
		analyze_note(67, 0, scale, previous_midi=60).score  # → 98 (perfect fifth)
		analyze_note(61, 0, scale).score                    # → 10 (out of key)
		```
	"""

	if target_midi not in scale_set:
		return NoteAnalysis(score=OUT_OF_KEY_SCORE, mood="Out of Key", details=("Accidental",))

	score = float(IN_SCALE_SCORE)
	details = ["In Scale"]

	if previous_midi is not None:
		interval = abs(target_midi - previous_midi) % 12
		quality = songbrain.intervals.interval_quality(interval)
		mood = quality.mood if quality else "Unknown"
		details.append(f"Interval: {mood}")

	else:
		interval = abs(target_midi - (TONIC_REFERENCE_MIDI + root_pc)) % 12
		quality = songbrain.intervals.interval_quality(interval)
		mood = quality.mood if quality else "Neutral"
		details.append(f"Root Relation: {mood}")

	score += (quality.score if quality else UNRATED_INTERVAL_SCORE) / 2

	return NoteAnalysis(
		score = min(100, _round_half_up(score)),
		mood = "Harmonious" if score > HARMONIOUS_THRESHOLD else "Tense",
		details = tuple(details)
	)


def _midi_of (note: typing.Union[int, songbrain.song_state.GeneratedNote]) -> int:

	if isinstance(note, songbrain.song_state.GeneratedNote):
		return note.midi

	return note


def analyze_bar_harmony (
	notes: typing.Sequence[typing.Union[int, songbrain.song_state.GeneratedNote]],
	degree: typing.Optional[songbrain.chords.ChordDegree],
	root_pc: int
) -> BarHarmony:

	"""Return the percentage of notes whose pitch class belongs to the chord.

	An empty bar is vacuously harmonious (100).  A bar without a chord scores 0.
	"""

	if degree is None:
		return BarHarmony(score=0, chord_name=None)

	if not notes:
		return BarHarmony(score=100, chord_name=degree.name)

	allowed = degree.tone_pcs(root_pc)
	matches = sum(1 for note in notes if _midi_of(note) % 12 in allowed)

	return BarHarmony(
		score = _round_half_up(matches / len(notes) * 100),
		chord_name = degree.name
	)


def bar_harmony_report (state: songbrain.song_state.SongState, notes: typing.Sequence[songbrain.song_state.GeneratedNote]) -> typing.List[BarHarmony]:

	"""Score every bar of a song's note list against the bar's chord.

	Notes are grouped by the bar their start step falls in; notes outside the
	song are ignored.
	"""

	by_bar: typing.List[typing.List[songbrain.song_state.GeneratedNote]] = [[] for _ in range(state.total_bars)]

	for note in notes:
		bar = int(note.start // state.steps_per_bar)
		if 0 <= bar < state.total_bars:
			by_bar[bar].append(note)

	return [
		analyze_bar_harmony(bar_notes, state.chord_at(bar), state.root_pc)
		for bar, bar_notes in enumerate(by_bar)
	]
