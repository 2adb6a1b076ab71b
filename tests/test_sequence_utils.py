import random

import pytest

import songbrain.sequence_utils


def test_parse_step_pattern_ignores_grouping () -> None:

	"""Spaces and bar lines only group the pattern visually."""

	assert songbrain.sequence_utils.parse_step_pattern("1000 1000|0010") == (1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0)


def test_parse_step_pattern_rejects_other_characters () -> None:

	"""Anything but 0 and 1 is an error."""

	with pytest.raises(ValueError):
		songbrain.sequence_utils.parse_step_pattern("1x00")


def test_weighted_choice_respects_zero_weight () -> None:

	"""An option with no weight is never chosen."""

	rng = random.Random(5)

	picks = {songbrain.sequence_utils.weighted_choice([("a", 1.0), ("b", 0.0)], rng) for _ in range(50)}

	assert picks == {"a"}


@pytest.mark.parametrize("roll, expected", [
	(0.0, "b"),
	(0.49, "b"),
	(0.5, "c"),
	(0.99, "c"),
])
def test_weighted_choice_splits_the_roll_by_weight (roll: float, expected: str) -> None:

	"""The roll is scaled by the total weight and walks the options in order."""

	options = [("a", 0.0), ("b", 2.0), ("c", 2.0)]

	assert songbrain.sequence_utils.weighted_choice(options, _FixedRoll(roll)) == expected


def test_weighted_choice_validation () -> None:

	"""Empty options and non-positive totals raise."""

	with pytest.raises(ValueError):
		songbrain.sequence_utils.weighted_choice([], random.Random())

	with pytest.raises(ValueError):
		songbrain.sequence_utils.weighted_choice([("a", 0.0)], random.Random())


class _FixedRoll:

	"""A stand-in rng that always rolls the same value."""

	def __init__ (self, value: float) -> None:
		self.value = value

	def random (self) -> float:
		return self.value


@pytest.mark.parametrize("roll, expected", [
	(0.0, "best"),
	(0.6, "best"),
	(0.61, "second"),
	(0.9, "second"),
	(0.95, "third"),
])
def test_ranked_choice_thresholds (roll: float, expected: str) -> None:

	"""One roll picks the head 60% of the time, the runner-up 30%, the third 10%."""

	ranked = ["best", "second", "third", "fourth"]

	assert songbrain.sequence_utils.ranked_choice(ranked, _FixedRoll(roll)) == expected


def test_ranked_choice_clamps_to_short_lists () -> None:

	"""A single candidate is returned whatever the roll."""

	assert songbrain.sequence_utils.ranked_choice(["only"], _FixedRoll(0.99)) == "only"
	assert songbrain.sequence_utils.ranked_choice(["a", "b"], _FixedRoll(0.99)) == "b"

	with pytest.raises(ValueError):
		songbrain.sequence_utils.ranked_choice([], _FixedRoll(0.1))


def test_middle_item () -> None:

	"""The middle is at len // 2, the upper middle for even lengths."""

	assert songbrain.sequence_utils.middle_item([1, 2, 3]) == 2
	assert songbrain.sequence_utils.middle_item([1, 2, 3, 4]) == 3

	with pytest.raises(ValueError):
		songbrain.sequence_utils.middle_item([])


def test_clamp () -> None:

	"""Values are pinned to the bounds."""

	assert songbrain.sequence_utils.clamp(1.2, 0.0, 1.0) == 1.0
	assert songbrain.sequence_utils.clamp(-3, 0, 10) == 0
	assert songbrain.sequence_utils.clamp(0.5, 0.0, 1.0) == 0.5
