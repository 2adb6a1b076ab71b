import random
import typing

T = typing.TypeVar("T")


def parse_step_pattern (pattern: str) -> typing.Tuple[int, ...]:

	"""
	Convert a step string such as ``"1000100010001000"`` into a tuple of 0/1 values.

	Spaces and bar lines (``|``) are ignored so long patterns can be grouped by beat.
	"""

	cleaned = pattern.replace(" ", "").replace("|", "")

	if any(char not in "01" for char in cleaned):
		raise ValueError(f"Step pattern may only contain 0 and 1: {pattern!r}")

	return tuple(int(char) for char in cleaned)


def weighted_choice (options: typing.Sequence[typing.Tuple[T, float]], rng: random.Random) -> T:

	"""Pick one value from (value, weight) pairs in proportion to its weight.

	Weights are relative and need not sum to one.  A zero weight is never
	picked.

	Example:
		```python
		starter = songbrain.sequence_utils.weighted_choice([
			(60, 2),
			(64, 6),
			(67, 7),   # closest to the middle of the band
			(72, 2),
		], rng)
		```
	"""

	if not options:
		raise ValueError("Cannot choose from an empty list of options")

	total = sum(weight for _, weight in options)

	if total <= 0:
		raise ValueError("Option weights must add up to more than zero")

	roll = rng.random() * total

	for value, weight in options:
		if roll < weight:
			return value
		roll -= weight

	return options[-1][0]


# Cumulative thresholds for picking the first, second or third ranked candidate.
RANK_THRESHOLDS: typing.Tuple[float, ...] = (0.6, 0.9)


def ranked_choice (ranked: typing.Sequence[T], rng: random.Random, thresholds: typing.Sequence[float] = RANK_THRESHOLDS) -> T:

	"""Pick from a best-first list, strongly favouring the head.

	One roll is drawn: at or below ``thresholds[0]`` takes index 0, at or
	below ``thresholds[1]`` takes index 1, anything above takes index 2.  The
	index is clamped to the list, so a single candidate is always returned.

	Parameters:
		ranked: Candidates sorted best-first.
		rng: Random number generator instance
		thresholds: Ascending cumulative thresholds (default 60% / 30% / 10%).
	"""

	if not ranked:
		raise ValueError("Ranked list cannot be empty")

	roll = rng.random()
	index = len(thresholds)

	for i, threshold in enumerate(thresholds):
		if roll <= threshold:
			index = i
			break

	return ranked[min(index, len(ranked) - 1)]


def middle_item (items: typing.Sequence[T]) -> T:

	"""Return the element at ``len // 2`` (the upper middle for even lengths)."""

	if not items:
		raise ValueError("Cannot take the middle of an empty sequence")

	return items[len(items) // 2]


def clamp (value: float, low: float, high: float) -> float:

	"""Clamp a value to ``[low, high]``."""

	return max(low, min(high, value))
