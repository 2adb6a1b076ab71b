import random

import pytest

import songbrain.arpeggio
import songbrain.sections


def test_arp_pattern_section_mapping () -> None:

	"""Intro and Outro are silent, Solo and Drop play the Chorus, Pre-Chorus the Verse."""

	pop = songbrain.arpeggio.ARP_STYLES[songbrain.sections.Genre.POP]
	S = songbrain.sections.SectionType

	assert songbrain.arpeggio.arp_pattern("POP", "INTRO") is None
	assert songbrain.arpeggio.arp_pattern("POP", "OUTRO") is None
	assert songbrain.arpeggio.arp_pattern("POP", "SOLO") is pop[S.CHORUS]
	assert songbrain.arpeggio.arp_pattern("POP", "DROP") is pop[S.CHORUS]
	assert songbrain.arpeggio.arp_pattern("POP", "PRE_CHORUS") is pop[S.VERSE]


def test_arp_pattern_fallbacks () -> None:

	"""Unlisted sections use the Verse style; genres without styles use POP."""

	edm = songbrain.arpeggio.ARP_STYLES[songbrain.sections.Genre.EDM]
	pop = songbrain.arpeggio.ARP_STYLES[songbrain.sections.Genre.POP]
	S = songbrain.sections.SectionType

	assert songbrain.arpeggio.arp_pattern("EDM", "BRIDGE") is edm[S.VERSE]
	assert songbrain.arpeggio.arp_pattern("TECHNO", "BRIDGE") is pop[S.BRIDGE]
	assert songbrain.arpeggio.arp_pattern("TRAP", "NONE") is pop[S.VERSE]


def test_arp_tones_span_two_octaves (make_state) -> None:

	"""Chord tones from middle C up, doubled an octave higher, ascending."""

	state = make_state(structure=("VERSE", "VERSE"), chords=(0, 3), root_pc=9, scale_name="Minor")

	assert songbrain.arpeggio.arp_tones(state, 0) == [69, 72, 76, 81, 84, 88]
	assert songbrain.arpeggio.arp_tones(state, 1) == [69, 74, 77, 81, 86, 89]


def test_arp_tones_without_chord (make_state) -> None:

	"""An invalid chord index gives no tones."""

	state = make_state(structure=("VERSE",), chords=(9,))

	assert songbrain.arpeggio.arp_tones(state, 0) == []


def test_pop_verse_arpeggio (make_state) -> None:

	"""POP Verse alternates root and fifth on eighth notes."""

	state = make_state(structure=("VERSE",))
	notes = songbrain.arpeggio.generate_arpeggio(state, "POP", random.Random(1))

	assert [note.start for note in notes] == [0, 2, 4, 6, 8, 10, 12, 14]
	assert [note.midi for note in notes] == [60, 67] * 4
	assert all(note.duration == pytest.approx(1.2) for note in notes)
	assert all(0.65 <= note.velocity <= 0.75 for note in notes)


def test_rests_are_skipped (make_state) -> None:

	"""EDM Verse pulses the root with rests between."""

	state = make_state(structure=("VERSE",))
	notes = songbrain.arpeggio.generate_arpeggio(state, "EDM", random.Random(1))

	assert [note.start for note in notes] == [0, 2, 4, 6, 8, 10, 12, 14]
	assert {note.midi for note in notes} == {60}
	assert all(note.duration == pytest.approx(0.4) for note in notes)


def test_legato_gate_stops_at_the_song_end (make_state) -> None:

	"""ROCK Verse rings for three steps, but the last note is cut at the end of the song."""

	state = make_state(structure=("VERSE",))
	notes = songbrain.arpeggio.generate_arpeggio(state, "ROCK", random.Random(1))

	assert notes[0].duration == pytest.approx(3.0)
	assert notes[-1].start == 14
	assert notes[-1].end == pytest.approx(16)


def test_silent_sections (make_state) -> None:

	"""Intro and Outro bars carry no arpeggio."""

	state = make_state(structure=("INTRO", "CHORUS", "OUTRO"))
	notes = songbrain.arpeggio.generate_arpeggio(state, "POP", random.Random(1))

	assert notes
	assert all(16 <= note.start < 32 for note in notes)
