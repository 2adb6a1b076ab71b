"""Melody pitch selection and whole-phrase melody generation.

Two interchangeable pitch pickers consume the same :class:`PitchContext`:

- :func:`pick_smooth_note` scores every scale tone in range for voice-leading
  smoothness and harmonic fit, adds a little jitter and takes the best.
- :func:`pick_markov_note` steps to a nearby note, ranks the candidates by
  distance and rolls for one of the closest three.

:func:`generate_melody` drives a picker over the rhythm produced by the
phrase state machine in ``songbrain.motif``.  Pitches are absolute MIDI
numbers throughout, so a step from B3 (59) to C4 (60) is one semitone up.
"""

import dataclasses
import enum
import logging
import random
import typing

import songbrain.chords
import songbrain.constants
import songbrain.constants.velocity
import songbrain.intervals
import songbrain.motif
import songbrain.sections
import songbrain.sequence_utils
import songbrain.song_state


logger = logging.getLogger(__name__)

# Smooth strategy scoring.
REPEAT_PENALTY = -5
STEP_BONUS = 20
THIRD_BONUS = 10
FOURTH_BONUS = 5
LEAP_PENALTY_PER_SEMITONE = 2
STRONG_CHORD_TONE_BONUS = 15
WEAK_CHORD_TONE_BONUS = 5
WEAK_PASSING_TONE_BONUS = 5
STRONG_PASSING_TONE_PENALTY = -5
SMOOTH_JITTER = 8.0

# Markov strategy.
NEIGHBOUR_INTERVAL = 7
WIDE_NEIGHBOUR_INTERVAL = 12
REPEAT_RANK_DISTANCE = 100
STARTER_LOW = 60
STARTER_HIGH = 72
STARTER_CENTRE = 66
STARTER_SPREAD = 8
CHORUS_LIFT_FLOOR = 65

# Register shaping for the smooth strategy.
VERSE_CEILING_DROP = 4
CHORUS_FLOOR_RAISE = 4


class MelodyStrategy (str, enum.Enum):

	"""Which pitch picker drives a melody."""

	SMOOTH = "SMOOTH"
	MARKOV = "MARKOV"


def resolve_strategy (value: typing.Any) -> MelodyStrategy:

	"""Return the strategy for a member or name, defaulting to ``SMOOTH``."""

	if isinstance(value, MelodyStrategy):
		return value

	if isinstance(value, str) and value.strip().upper() in MelodyStrategy.__members__:
		return MelodyStrategy[value.strip().upper()]

	logger.debug(f"Unknown melody strategy {value!r}, using SMOOTH")
	return MelodyStrategy.SMOOTH


@dataclasses.dataclass(frozen=True)
class PitchContext:

	"""
	Everything a pitch picker needs to choose one note.

	Attributes:
		previous: The previous melody note, or None at the start of a line.
		degree: The chord in effect, or None when the bar has no valid chord.
		scale_root: Key root pitch class.
		scale_set: MIDI notes belonging to the scale.
		low: Lowest allowed note (inclusive).
		high: Highest allowed note (inclusive).
		is_strong_beat: True on the first step of a beat.
		is_phrase_start: True on the first step of a phrase.
	"""

	previous: typing.Optional[int]
	degree: typing.Optional[songbrain.chords.ChordDegree]
	scale_root: int
	scale_set: typing.AbstractSet[int]
	low: int
	high: int
	is_strong_beat: bool = True
	is_phrase_start: bool = False

	def allowed_pcs (self) -> typing.FrozenSet[int]:

		"""Return the chord's pitch classes, or an empty set when there is no chord."""

		if self.degree is None:
			return frozenset()

		return self.degree.tone_pcs(self.scale_root)

	def scale_tones (self) -> typing.List[int]:

		"""Return the ascending scale notes inside ``[low, high]``."""

		return songbrain.intervals.notes_in_range(self.scale_set, self.low, self.high)


def _smooth_score (note: int, previous: int, is_chord_tone: bool, is_strong_beat: bool) -> float:

	distance = abs(note - previous)

	if distance == 0:
		score = REPEAT_PENALTY
	elif distance <= 2:
		score = STEP_BONUS
	elif distance <= 4:
		score = THIRD_BONUS
	elif distance <= 5:
		score = FOURTH_BONUS
	else:
		score = -LEAP_PENALTY_PER_SEMITONE * distance

	if is_chord_tone:
		score += STRONG_CHORD_TONE_BONUS if is_strong_beat else WEAK_CHORD_TONE_BONUS
	else:
		score += STRONG_PASSING_TONE_PENALTY if is_strong_beat else WEAK_PASSING_TONE_BONUS

	return float(score)


def pick_smooth_note (context: PitchContext, rng: typing.Optional[random.Random] = None) -> typing.Optional[int]:

	"""Choose the smoothest, best-fitting note for the next melody slot.

	Phrase starts (and the first note of a line) anchor on the middle chord
	tone in range, or the middle scale tone when no chord tone fits.
	Otherwise every scale tone in range is scored for proximity to the
	previous note and for harmonic fit on the current beat, plus a jitter of
	up to 8 points; the first candidate with the highest score wins.

	Returns:
		A MIDI note, or None when the range contains no scale note.

	Example:
		```python
		scale = songbrain.intervals.scale_notes(0, "Major")
		context = PitchContext(previous=64, degree=chord_degree("Major", 0),
			scale_root=0, scale_set=scale, low=60, high=72, is_strong_beat=True)
		pick_smooth_note(context, random.Random(1))  # → a C-major chord tone close to 64
		```
	"""

	rng = rng or random.Random()

	scale_tones = context.scale_tones()

	if not scale_tones:
		return None

	allowed = context.allowed_pcs()
	chord_tones = [note for note in scale_tones if note % 12 in allowed]

	if context.is_phrase_start or context.previous is None:
		return songbrain.sequence_utils.middle_item(chord_tones or scale_tones)

	best_note = scale_tones[0]
	best_score = float("-inf")

	for note in scale_tones:

		score = _smooth_score(note, context.previous, note % 12 in allowed, context.is_strong_beat)
		score += rng.random() * SMOOTH_JITTER

		if score > best_score:
			best_score = score
			best_note = note

	return best_note


def pick_markov_note (
	context: PitchContext,
	rng: typing.Optional[random.Random] = None,
	lift_floor: typing.Optional[int] = None
) -> typing.Optional[int]:

	"""Step to a nearby note, favouring the closest candidates.

	Parameters:
		context: Pitch context; ``is_phrase_start`` is not used.
		rng: Random number generator.
		lift_floor: Optional lowest note for this slot (the Chorus lift).  When
			no scale note in range reaches it the whole range is used.

	The first note of a line is a starter from the 60-72 band (preferring
	chord tones), weighted towards the middle of the band.  Later notes
	choose among scale tones within a fifth of the previous note (chord
	tones only on a strong beat, when any fit), widening to an octave and
	finally repeating the previous note.
	Candidates are ranked by distance with a repeat ranked last, then one of
	the first three is rolled for (60% / 30% / 10%).

	Returns:
		A MIDI note, or None when the range contains no scale note.
	"""

	rng = rng or random.Random()

	pool = context.scale_tones()

	if not pool:
		return None

	if lift_floor is not None:
		lifted = [note for note in pool if note >= lift_floor]
		if lifted:
			pool = lifted

	allowed = context.allowed_pcs()

	if context.previous is None:

		starters = [note for note in pool if STARTER_LOW <= note <= STARTER_HIGH] or pool

		if allowed:
			starters = [note for note in starters if note % 12 in allowed] or starters

		return songbrain.sequence_utils.weighted_choice(
			[(note, max(1, STARTER_SPREAD - abs(note - STARTER_CENTRE))) for note in starters],
			rng
		)

	previous = context.previous
	neighbours = [note for note in pool if abs(note - previous) <= NEIGHBOUR_INTERVAL]

	candidates: typing.List[int] = []

	if context.is_strong_beat and allowed:
		candidates = [note for note in neighbours if note % 12 in allowed]

	if not candidates:
		candidates = neighbours

	if not candidates:
		candidates = [note for note in pool if abs(note - previous) <= WIDE_NEIGHBOUR_INTERVAL]

	if not candidates:
		return previous

	ranked = sorted(candidates, key=lambda note: abs(note - previous) or REPEAT_RANK_DISTANCE)

	return songbrain.sequence_utils.ranked_choice(ranked, rng)


def _smooth_velocity (section: songbrain.sections.SectionType, is_strong_beat: bool) -> float:

	velocity = songbrain.constants.velocity.SMOOTH_CHORUS_VELOCITY if section == songbrain.sections.SectionType.CHORUS else songbrain.constants.velocity.SMOOTH_VELOCITY

	if not is_strong_beat:
		velocity -= songbrain.constants.velocity.SMOOTH_WEAK_BEAT_DROP

	return songbrain.sequence_utils.clamp(velocity, songbrain.constants.velocity.MIN_AUDIBLE_VELOCITY, songbrain.constants.velocity.MAX_VELOCITY)


def _markov_velocity (section: songbrain.sections.SectionType, is_strong_beat: bool, rng: random.Random) -> float:

	velocity = songbrain.constants.velocity.MARKOV_CHORUS_VELOCITY if section == songbrain.sections.SectionType.CHORUS else songbrain.constants.velocity.MARKOV_VELOCITY

	if is_strong_beat:
		velocity += songbrain.constants.velocity.MARKOV_STRONG_BEAT_BOOST

	velocity += (rng.random() * 2 - 1) * songbrain.constants.velocity.MARKOV_JITTER

	return round(songbrain.sequence_utils.clamp(velocity, songbrain.constants.velocity.MIN_AUDIBLE_VELOCITY, songbrain.constants.velocity.MAX_VELOCITY), 2)


def melody_range (state: songbrain.song_state.SongState, first_section: songbrain.sections.SectionType, strategy: MelodyStrategy) -> typing.Tuple[int, int]:

	"""Return the ``(low, high)`` register for a request.

	The smooth strategy sits a little lower for a Verse and a little higher
	for a Chorus, judged by the request's first bar.
	"""

	vocal = songbrain.intervals.get_vocal_range(state.vocal_range)
	low, high = vocal.low, vocal.high

	if strategy == MelodyStrategy.SMOOTH:
		if first_section == songbrain.sections.SectionType.VERSE:
			high -= VERSE_CEILING_DROP
		elif first_section == songbrain.sections.SectionType.CHORUS:
			low += CHORUS_FLOOR_RAISE

	return low, high


def generate_melody (
	state: songbrain.song_state.SongState,
	start_bar: int,
	length: int,
	complexity: typing.Any = songbrain.sections.Complexity.MEDIUM,
	strategy: typing.Any = MelodyStrategy.SMOOTH,
	rng: typing.Optional[random.Random] = None
) -> typing.List[songbrain.song_state.GeneratedNote]:

	"""Generate a melody for ``length`` bars starting at ``start_bar``.

	Bars past the end of the song are not generated.  Notes never cross a
	bar line and always lie inside the scale and the vocal range.

	Parameters:
		state: The song to write against.
		start_bar: First bar of the request.
		length: Number of bars requested.
		complexity: Rhythmic density (``HIGH`` unlocks sixteenth-note motifs).
		strategy: ``SMOOTH`` or ``MARKOV``.
		rng: Random number generator (a fresh unseeded one when omitted).

	Example:
		```python
		state = SongState(root_pc=0, scale_name="Major", total_bars=4,
			bar_chords=(0, 4, 5, 3), bar_structure=(SectionType.CHORUS,) * 4)
		notes = generate_melody(state, 0, 4, "LOW", rng=random.Random(7))
		```
	"""

	rng = rng or random.Random()
	strategy = resolve_strategy(strategy)

	steps_per_bar = state.steps_per_bar
	beat = state.beat_steps
	scale_set = songbrain.intervals.scale_notes(state.root_pc, state.scale_name)
	low, high = melody_range(state, state.section_at(start_bar), strategy)

	bank = songbrain.motif.MotifBank(complexity, steps_per_bar, rng)

	notes: typing.List[songbrain.song_state.GeneratedNote] = []
	previous: typing.Optional[int] = None

	for offset in range(length):

		bar = start_bar + offset

		if bar >= state.total_bars:
			break

		section = state.section_at(bar)
		degree = state.chord_at(bar)
		rhythm = songbrain.motif.phrase_rhythm(offset, length, section, bank, steps_per_bar)
		position = offset % songbrain.constants.PHRASE_BARS

		for step, event in songbrain.motif.place_in_bar(rhythm, steps_per_bar):

			if event.is_rest:
				continue

			is_strong_beat = step % beat == 0

			context = PitchContext(
				previous = previous,
				degree = degree,
				scale_root = state.root_pc,
				scale_set = scale_set,
				low = low,
				high = high,
				is_strong_beat = is_strong_beat,
				is_phrase_start = step == 0 and position == 0
			)

			if strategy == MelodyStrategy.SMOOTH:
				midi = pick_smooth_note(context, rng)
				velocity = _smooth_velocity(section, is_strong_beat)

			else:
				lift = CHORUS_LIFT_FLOOR if section == songbrain.sections.SectionType.CHORUS else None
				midi = pick_markov_note(context, rng, lift_floor=lift)
				velocity = _markov_velocity(section, is_strong_beat, rng)

			if midi is None:
				continue

			notes.append(songbrain.song_state.GeneratedNote(
				midi = midi,
				start = state.bar_start(bar) + step,
				duration = event.duration,
				velocity = velocity
			))

			previous = midi

	logger.debug(f"Generated {len(notes)} {strategy.value.lower()} melody notes from bar {start_bar}")

	return notes
