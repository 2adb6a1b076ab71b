"""Rhythmic motifs and the four-bar phrase state machine.

A motif is a list of :class:`RhythmEvent` durations in steps.  Melody
generation asks :func:`phrase_rhythm` for the rhythm of each bar; the answer
depends on the bar's position in its four-bar phrase:

- bars 1 and 2 replay the base motif of the section's vibe,
- bar 3 plays a variation (the first long note split in two),
- bar 4 resolves (half-bar note, half-bar rest),
- the last bar of a request holds one whole-bar note,
- Intro bars always use a sparse note-rest arpeggio.

Motif templates are written in beats and converted to steps with
``max(1, floor(beats * beat_steps))``, so a template's total may fall short of
or overrun the bar; :func:`place_in_bar` truncates at the bar boundary.
"""

import dataclasses
import logging
import math
import random
import typing

import songbrain.constants
import songbrain.sections


logger = logging.getLogger(__name__)

_V = songbrain.sections.RhythmVibe


@dataclasses.dataclass(frozen=True)
class RhythmEvent:

	"""
	One slot of a rhythm: a note or a rest lasting ``duration`` steps.
	"""

	duration: int
	is_rest: bool = False


RhythmMotif = typing.List[RhythmEvent]


# Durations in beats.
MOTIF_POOLS: typing.Dict[songbrain.sections.RhythmVibe, typing.Tuple[typing.Tuple[float, ...], ...]] = {
	_V.ANTHEM: (
		(2, 2),
		(4,),
		(1, 1, 2),
		(1.5, 0.5, 2),
		(2, 1, 1),
		(3, 1),
		(1, 1, 1, 1),
		(0.5, 0.5, 1, 2),
		(2.5, 0.5, 1),
	),
	_V.CHATTY: (
		(1, 1, 1, 1),
		(0.5, 0.5, 1, 1, 1),
		(1, 0.5, 0.5, 1, 1),
		(0.5, 0.5, 0.5, 0.5, 1, 1),
		(0.5, 1, 0.5, 1, 1),
		(1, 1, 0.5, 0.5, 1),
		(1, 1, 2),
		(0.5, 0.5, 1, 2),
		(0.75, 0.25, 1, 1, 1),
	),
	_V.SYNC: (
		(1.5, 1.5, 1),
		(0.75, 0.25, 1, 1.5, 0.5),
		(0.5, 1, 0.5, 1, 1),
		(1, 0.5, 1, 0.5, 1),
	),
	# The whole note is listed twice to make it the likeliest choice.
	_V.SPARSE: (
		(4,),
		(2, 2),
		(3, 1),
		(4,),
	),
}

# Sixteenth-note templates unlocked by HIGH complexity.
HIGH_COMPLEXITY_POOLS: typing.Dict[songbrain.sections.RhythmVibe, typing.Tuple[typing.Tuple[float, ...], ...]] = {
	_V.CHATTY: (
		(0.25, 0.25, 0.5, 1, 1, 1),
		(0.5, 0.5, 0.5, 0.5, 0.5, 0.5, 1),
	),
}


def beat_steps (steps_per_bar: int) -> int:

	"""Return the number of steps in one beat (never less than one)."""

	return max(1, steps_per_bar // songbrain.constants.BEATS_PER_BAR)


def motif_pool (vibe: songbrain.sections.RhythmVibe, complexity: typing.Any = songbrain.sections.Complexity.MEDIUM) -> typing.List[typing.Tuple[float, ...]]:

	"""
	Return the templates a vibe chooses from at a complexity level.
	"""

	pool = list(MOTIF_POOLS[vibe])

	if songbrain.sections.resolve_complexity(complexity) == songbrain.sections.Complexity.HIGH:
		pool.extend(HIGH_COMPLEXITY_POOLS.get(vibe, ()))

	return pool


def template_to_motif (template: typing.Sequence[float], steps_per_bar: int) -> RhythmMotif:

	"""Convert a template in beats to note events in steps."""

	beat = beat_steps(steps_per_bar)

	return [RhythmEvent(max(1, int(math.floor(beats * beat)))) for beats in template]


def generate_motif (
	vibe: songbrain.sections.RhythmVibe,
	complexity: typing.Any = songbrain.sections.Complexity.MEDIUM,
	steps_per_bar: int = songbrain.constants.DEFAULT_STEPS_PER_BAR,
	rng: typing.Optional[random.Random] = None
) -> RhythmMotif:

	"""Pick one template of a vibe uniformly at random and convert it to steps.

	Example:
		```python
		generate_motif(RhythmVibe.SPARSE, rng=random.Random(3))
		# e.g. [RhythmEvent(duration=8), RhythmEvent(duration=8)]
		```
	"""

	rng = rng or random.Random()

	template = rng.choice(motif_pool(vibe, complexity))

	return template_to_motif(template, steps_per_bar)


def vary_motif (motif: typing.Sequence[RhythmEvent]) -> RhythmMotif:

	"""Split the first sounding event of four or more steps into two back-to-back notes.

	The halves are ``d // 2`` and ``d - d // 2`` so the total length is kept.
	A motif without such an event is returned unchanged (as a new list).
	"""

	varied = list(motif)

	for index, event in enumerate(varied):

		if event.is_rest or event.duration < 4:
			continue

		half = event.duration // 2
		varied[index:index + 1] = [RhythmEvent(half), RhythmEvent(event.duration - half)]
		break

	return varied


def resolution_pattern (steps_per_bar: int, final: bool = False) -> RhythmMotif:

	"""Return the cadence rhythm that closes a phrase.

	A phrase ends with a half-bar note and a half-bar rest; the final bar of
	a request holds a single note for the whole bar.
	"""

	if final:
		return [RhythmEvent(steps_per_bar)]

	half = max(1, steps_per_bar // 2)

	return [RhythmEvent(half), RhythmEvent(max(1, steps_per_bar - half), is_rest=True)]


def intro_arpeggio (steps_per_bar: int) -> RhythmMotif:

	"""Return the sparse note-rest-note-rest pattern used in Intro bars."""

	quarter = max(1, steps_per_bar // 4)

	return [
		RhythmEvent(quarter),
		RhythmEvent(quarter, is_rest=True),
		RhythmEvent(quarter),
		RhythmEvent(quarter, is_rest=True),
	]


class MotifBank:

	"""One base motif per vibe, chosen once per generation request.

	Every bar of a request that shares a vibe replays the same base motif, so
	a Verse keeps its rhythm across bars while a Chorus in the same request
	gets its own.
	"""

	def __init__ (
		self,
		complexity: typing.Any = songbrain.sections.Complexity.MEDIUM,
		steps_per_bar: int = songbrain.constants.DEFAULT_STEPS_PER_BAR,
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""
		Draw a motif for every vibe, in declaration order.
		"""

		rng = rng or random.Random()

		self.complexity = songbrain.sections.resolve_complexity(complexity)
		self.steps_per_bar = steps_per_bar
		self.motifs: typing.Dict[songbrain.sections.RhythmVibe, RhythmMotif] = {
			vibe: generate_motif(vibe, self.complexity, steps_per_bar, rng)
			for vibe in songbrain.sections.RhythmVibe
		}

	def motif_for (self, section: typing.Any) -> RhythmMotif:

		"""
		Return a copy of the base motif for a section's vibe.
		"""

		return list(self.motifs[songbrain.sections.section_vibe(section)])


def phrase_rhythm (
	bar_offset: int,
	length: int,
	section: typing.Any,
	bank: MotifBank,
	steps_per_bar: int = songbrain.constants.DEFAULT_STEPS_PER_BAR
) -> RhythmMotif:

	"""Return the rhythm for one bar of a generation request.

	Parameters:
		bar_offset: Index of the bar within the request (0-based).
		length: Number of bars requested.
		section: The bar's section.
		bank: Base motifs for the request.
		steps_per_bar: Grid resolution.
	"""

	resolved = songbrain.sections.resolve_section(section)

	if resolved == songbrain.sections.SectionType.INTRO:
		return intro_arpeggio(steps_per_bar)

	if bar_offset == length - 1:
		return resolution_pattern(steps_per_bar, final=True)

	position = bar_offset % songbrain.constants.PHRASE_BARS

	if position == 3:
		return resolution_pattern(steps_per_bar)

	if position == 2:
		return vary_motif(bank.motif_for(resolved))

	return bank.motif_for(resolved)


def place_in_bar (motif: typing.Sequence[RhythmEvent], steps_per_bar: int) -> typing.List[typing.Tuple[int, RhythmEvent]]:

	"""Lay a motif out from the start of a bar, truncating at the bar line.

	Returns ``(step, event)`` pairs; an event that crosses the bar line is
	shortened, and events that would start on or after it are dropped.
	"""

	placed: typing.List[typing.Tuple[int, RhythmEvent]] = []
	cursor = 0

	for event in motif:

		if cursor >= steps_per_bar:
			break

		duration = min(event.duration, steps_per_bar - cursor)
		placed.append((cursor, dataclasses.replace(event, duration=duration)))
		cursor += duration

	return placed
