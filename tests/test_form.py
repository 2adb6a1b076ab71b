import dataclasses

import pytest

import songbrain.form
import songbrain.sections


S = songbrain.sections.SectionType


def _template (*spans: tuple) -> songbrain.form.SongTemplate:

	return songbrain.form.SongTemplate(
		"TINY", songbrain.sections.Genre.POP, 120, "Tiny", "",
		tuple(songbrain.form.SectionSpan(section, bars) for section, bars in spans)
	)


# --- Templates ---


def test_template_library () -> None:

	"""Every library template is keyed by its own name and expands to its bar count."""

	assert len(songbrain.form.SONG_TEMPLATES) == 13

	for name, template in songbrain.form.SONG_TEMPLATES.items():
		assert template.name == name
		assert template.bpm > 0
		assert len(songbrain.form.expand_structure(template)) == template.total_bars


def test_pop_radio_length () -> None:

	"""The radio template runs 72 bars and starts with a four-bar intro."""

	structure = songbrain.form.expand_structure("POP_RADIO")

	assert len(structure) == 72
	assert structure[:5] == [S.INTRO] * 4 + [S.VERSE]
	assert structure[-1] == S.OUTRO


def test_get_template_is_case_insensitive_with_fallback () -> None:

	"""Keys match in any case; unknown keys use the radio template."""

	assert songbrain.form.get_template("edm_club").name == "EDM_CLUB"
	assert songbrain.form.get_template("polka").name == "POP_RADIO"
	assert songbrain.form.get_template(None).name == "POP_RADIO"


def test_templates_for_genre () -> None:

	"""Trap and boom bap are listed under hip hop."""

	names = [template.name for template in songbrain.form.templates_for_genre("HIPHOP")]

	assert names == ["TRAP", "BOOMBAP"]
	assert songbrain.form.templates_for_genre("TECHNO") == []


# --- Structure expansion ---


def test_expand_structure () -> None:

	"""Spans are run-length decoded in order."""

	template = _template((S.INTRO, 2), (S.VERSE, 3))

	assert songbrain.form.expand_structure(template) == [S.INTRO, S.INTRO, S.VERSE, S.VERSE, S.VERSE]


def test_expand_structure_skips_empty_spans () -> None:

	"""Zero and negative spans contribute no bars."""

	template = _template((S.INTRO, 0), (S.VERSE, -2), (S.CHORUS, 1))

	assert songbrain.form.expand_structure(template) == [S.CHORUS]
	assert template.total_bars == 1


def test_expand_structure_is_repeatable () -> None:

	"""Expanding the same template twice gives equal, independent lists."""

	first = songbrain.form.expand_structure("POP_RADIO")
	second = songbrain.form.expand_structure("POP_RADIO")

	assert first == second
	assert first is not second

	first.clear()

	assert songbrain.form.expand_structure("POP_RADIO") == second


def test_next_sections_looks_ahead_to_outro () -> None:

	"""The last bar's next section is OUTRO."""

	assert songbrain.form.next_sections([S.VERSE, S.CHORUS]) == [S.CHORUS, S.OUTRO]
	assert songbrain.form.next_sections([]) == []


# --- Section info ---


def test_section_infos_runs () -> None:

	"""Bars know their position in the section run and what follows."""

	infos = songbrain.form.section_infos([S.INTRO, S.INTRO, S.VERSE, S.VERSE, S.VERSE, S.CHORUS])

	assert [(info.bar, info.bars) for info in infos] == [
		(0, 2), (1, 2),
		(0, 3), (1, 3), (2, 3),
		(0, 1),
	]

	assert infos[1].last_bar
	assert infos[1].next_section == S.VERSE
	assert infos[2].first_bar
	assert infos[5].first_bar and infos[5].last_bar
	assert infos[5].next_section == S.OUTRO


def test_adjacent_spans_of_the_same_section_merge () -> None:

	"""Two back-to-back Chorus spans form one run, so only the last bar is a boundary."""

	structure = songbrain.form.expand_structure(_template((S.CHORUS, 2), (S.CHORUS, 2), (S.VERSE, 1)))
	infos = songbrain.form.section_infos(structure)

	assert [info.last_bar for info in infos] == [False, False, False, True, True]
	assert infos[0].bars == 4


def test_section_info_is_frozen () -> None:

	"""Snapshots cannot be modified."""

	info = songbrain.form.section_infos([S.VERSE])[0]

	with pytest.raises(dataclasses.FrozenInstanceError):
		info.bar = 3
