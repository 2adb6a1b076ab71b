import random

import pytest

import songbrain.chord_tables
import songbrain.progressions
import songbrain.sections


S = songbrain.sections.SectionType
G = songbrain.sections.Genre


def _style (**sections: tuple) -> songbrain.progressions.ProgressionStyle:

	"""Build a Major-scale style from ``SECTION=(indices)`` keywords."""

	return songbrain.progressions.ProgressionStyle(
		name = "Test",
		preferred_scale = "Major",
		description = "",
		sections = {S[name]: chords for name, chords in sections.items()}
	)


def test_every_style_index_is_valid_for_its_scale () -> None:

	"""No library loop points past the chord table of its preferred scale."""

	for genre, styles in songbrain.progressions.PROGRESSION_STYLES.items():
		for style in styles:
			count = songbrain.chord_tables.degree_count(style.preferred_scale)
			for section, chords in style.sections.items():
				assert chords, f"{style.name} {section}"
				assert all(0 <= index < count for index in chords), f"{style.name} {section}"


def test_genres_without_a_library_use_pop () -> None:

	"""TECHNO, TRAP and unknown names share the POP styles."""

	pop = songbrain.progressions.PROGRESSION_STYLES[G.POP]

	assert songbrain.progressions.styles_for_genre("TECHNO") is pop
	assert songbrain.progressions.styles_for_genre(G.TRAP) is pop
	assert songbrain.progressions.styles_for_genre("zydeco") is pop
	assert songbrain.progressions.styles_for_genre("EDM") is not pop


def test_style_by_vibe_out_of_range_uses_the_first () -> None:

	"""A vibe index past the list (or negative) picks the first style."""

	styles = songbrain.progressions.styles_for_genre("LOFI")

	assert songbrain.progressions.style_by_vibe("LOFI", 1) is styles[1]
	assert songbrain.progressions.style_by_vibe("LOFI", 9) is styles[0]
	assert songbrain.progressions.style_by_vibe("LOFI", -1) is styles[0]


class TestProgressionFor:

	def test_listed_section (self) -> None:
		"""A listed section returns its own loop."""
		style = songbrain.progressions.style_by_vibe("POP", 0)

		assert style.progression_for("VERSE") == (0, 4)

	def test_drop_and_solo_read_the_chorus (self) -> None:
		"""Solo and Drop borrow the Chorus loop even when the style lists a Solo."""
		style = _style(VERSE=(0,), CHORUS=(3, 4), SOLO=(5,))

		assert style.progression_for("DROP") == (3, 4)
		assert style.progression_for("SOLO") == (3, 4)

	def test_missing_section_falls_back_to_chorus_then_verse (self) -> None:
		"""Unlisted sections walk Chorus, then Verse, then the tonic."""
		assert _style(VERSE=(1,), CHORUS=(2,)).progression_for("BRIDGE") == (2,)
		assert _style(VERSE=(1,)).progression_for("NONE") == (1,)
		assert _style(INTRO=(4,)).progression_for("OUTRO") == (0,)


class TestChordProgression:

	def test_returns_a_loop_of_the_genre (self) -> None:
		"""The loop comes from one of the genre's styles."""
		loops = {tuple(style.sections[S.CHORUS]) for style in songbrain.progressions.styles_for_genre("EDM")}
		rng = random.Random(3)

		for _ in range(10):
			assert tuple(songbrain.progressions.chord_progression("EDM", "CHORUS", rng)) in loops

	def test_unlisted_section_gets_the_fixed_loop (self) -> None:
		"""A section the style does not list gets I - vi - IV - V, without the fallback chain."""
		assert songbrain.progressions.chord_progression("ROCK", "DROP", random.Random(1)) == [0, 5, 3, 4]

	def test_fixed_loop_is_reduced_to_the_scale (self, monkeypatch: pytest.MonkeyPatch) -> None:
		"""On a five-chord scale the vi index wraps to 0."""
		blues = songbrain.progressions.ProgressionStyle("Twelve Bar", "Blues", "", {S.VERSE: (0, 1, 2)})
		monkeypatch.setitem(songbrain.progressions.PROGRESSION_STYLES, G.LATIN, [blues])

		assert songbrain.progressions.chord_progression("LATIN", "CHORUS", random.Random(1)) == [0, 0, 3, 4]

	def test_returns_a_copy (self) -> None:
		"""Callers may mutate the result without touching the library."""
		result = songbrain.progressions.chord_progression("PERSIAN", "VERSE", random.Random(2))
		result.append(99)

		for style in songbrain.progressions.styles_for_genre("PERSIAN"):
			assert 99 not in style.sections[S.VERSE]


def test_assign_chords_uses_the_global_bar_index () -> None:

	"""The loop is indexed by song bar, so it does not restart at a section boundary."""

	style = _style(VERSE=(1, 2, 3), CHORUS=(4, 5))
	structure = [S.VERSE, S.VERSE, S.VERSE, S.CHORUS, S.CHORUS]

	assert songbrain.progressions.assign_chords_to_structure(structure, style) == [1, 2, 3, 5, 4]


def test_assign_chords_covers_every_bar () -> None:

	"""One chord per bar, always a valid index."""

	style = songbrain.progressions.style_by_vibe("HIPHOP", 0)
	structure = [S.INTRO] * 3 + [S.DROP] * 5 + [S.OUTRO] * 2
	chords = songbrain.progressions.assign_chords_to_structure(structure, style)

	assert len(chords) == 10
	assert chords[3:8] == [1, 0, 2, 0, 1]


class TestSectionRules:

	def test_drop_uses_the_chorus_rule (self) -> None:
		"""Drop has no rule of its own."""
		assert songbrain.progressions.section_rule("DROP") is songbrain.progressions.SECTION_RULES[S.CHORUS]

	def test_unknown_section_gets_the_empty_rule (self) -> None:
		"""Unknown sections get no advice."""
		rule = songbrain.progressions.section_rule("coda")

		assert rule.suggested == ()
		assert rule.avoid == ()

	@pytest.mark.parametrize("section, index, verdict, tip", [
		("PRE_CHORUS", 4, "suggested", "Ultimate Buildup"),
		("CHORUS", 6, "avoid", None),
		("VERSE", 3, "neutral", "Walking away"),
		("OUTRO", 4, "avoid", None),
		("coda", 0, "neutral", None),
	])
	def test_rate_degree (self, section: str, index: int, verdict: str, tip: str) -> None:
		"""Degrees are suggested, avoided or neutral, with an optional tip."""
		rating = songbrain.progressions.rate_degree(section, index)

		assert rating.verdict == verdict
		assert rating.tip == tip
