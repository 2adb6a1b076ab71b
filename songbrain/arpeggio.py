"""Arpeggiator styles per genre and section, and whole-song arpeggio generation.

A pattern indexes the current chord's tones extended over two octaves
(``0`` is the lowest tone); ``None`` is a rest.  ``rate`` is the number of
steps between pattern slots (1 = sixteenths, 2 = eighths, 4 = quarters) and
``gate`` scales each note's length relative to the rate.
"""

import dataclasses
import logging
import random
import typing

import songbrain.constants.velocity
import songbrain.sections
import songbrain.song_state


logger = logging.getLogger(__name__)

_S = songbrain.sections.SectionType
_G = songbrain.sections.Genre

ARP_BASE_MIDI = 60
MIN_ARP_DURATION = 0.1


@dataclasses.dataclass(frozen=True)
class ArpeggioStyle:

	"""
	How an arpeggio walks the chord in one section.
	"""

	pattern: typing.Tuple[typing.Optional[int], ...]
	rate: int
	gate: float


ARP_STYLES: typing.Dict[songbrain.sections.Genre, typing.Dict[songbrain.sections.SectionType, ArpeggioStyle]] = {
	_G.POP: {
		_S.VERSE: ArpeggioStyle((0, 2), 2, 0.6),
		_S.CHORUS: ArpeggioStyle((0, 1, 2, 3, 2, 1), 1, 0.9),
		_S.BRIDGE: ArpeggioStyle((0, 3, 1, 2), 2, 1.1),
	},
	_G.EDM: {
		_S.VERSE: ArpeggioStyle((0, None, 0, None), 1, 0.4),
		_S.CHORUS: ArpeggioStyle((0, 2, 3, 2), 1, 0.8),
	},
	_G.ROCK: {
		_S.VERSE: ArpeggioStyle((0, 1, 2, 1), 2, 1.5),
		_S.CHORUS: ArpeggioStyle((0, 0, 1, 0, 2, 0), 1, 0.7),
		_S.SOLO: ArpeggioStyle((0, 1, 2, 3), 1, 0.8),
	},
	_G.LOFI: {
		_S.VERSE: ArpeggioStyle((0, 1, 2, 3), 4, 1.2),
		_S.CHORUS: ArpeggioStyle((0, 2, 1, 3), 2, 1.0),
		_S.BRIDGE: ArpeggioStyle((0, None, 1, None), 4, 1.0),
	},
	_G.LATIN: {
		_S.VERSE: ArpeggioStyle((0, None, 2), 2, 0.6),
		_S.CHORUS: ArpeggioStyle((0, None, 1, 2, None, 1), 1, 0.7),
	},
	_G.HIPHOP: {
		_S.VERSE: ArpeggioStyle((0, 2), 4, 0.5),
		_S.CHORUS: ArpeggioStyle((0, 1, 2), 2, 0.6),
	},
	_G.PERSIAN: {
		_S.VERSE: ArpeggioStyle((0, 1, 2, 3), 2, 0.8),
		_S.CHORUS: ArpeggioStyle((0, 1, 2, 3, 2, 1), 2, 0.9),
	},
}


def arp_pattern (genre: typing.Any, section: typing.Any) -> typing.Optional[ArpeggioStyle]:

	"""Return the arpeggio style for a section, or None where the arpeggio is silent.

	Intro and Outro are silent.  Solo and Drop play the Chorus style and the
	Pre-Chorus plays the Verse style.  A section the genre does not list uses
	the Verse style, then the Chorus style.  Genres without styles use POP.
	"""

	resolved_genre = songbrain.sections.resolve_genre(genre)
	styles = ARP_STYLES.get(resolved_genre)

	if styles is None:
		logger.debug(f"No arpeggio styles for {resolved_genre.value}, using POP")
		styles = ARP_STYLES[_G.POP]

	target = songbrain.sections.resolve_section(section)

	if target in (_S.INTRO, _S.OUTRO):
		return None

	if target in songbrain.sections.CHORUS_LIKE:
		target = _S.CHORUS
	elif target == _S.PRE_CHORUS:
		target = _S.VERSE

	return styles.get(target) or styles.get(_S.VERSE) or styles.get(_S.CHORUS)


def arp_tones (state: songbrain.song_state.SongState, bar: int) -> typing.List[int]:

	"""Return the bar's chord tones from middle C upward, doubled an octave up and sorted."""

	degree = state.chord_at(bar)

	if degree is None:
		return []

	base = ARP_BASE_MIDI + state.root_pc
	tones = [base + interval for interval in degree.intervals]

	return sorted(tones + [tone + 12 for tone in tones])


def generate_arpeggio (
	state: songbrain.song_state.SongState,
	genre: typing.Any,
	rng: typing.Optional[random.Random] = None
) -> typing.List[songbrain.song_state.GeneratedNote]:

	"""Generate the arpeggio part for the whole song.

	The pattern restarts every bar and advances one slot every ``rate``
	steps; indices beyond the available tones are skipped.  Each note lasts
	``max(0.1, rate * gate)`` steps (legato gates may ring into the next bar
	but never past the end of the song) and its velocity is humanised by up
	to ±0.05 around 0.7.
	"""

	rng = rng or random.Random()

	song_end = state.bar_start(state.total_bars)
	notes: typing.List[songbrain.song_state.GeneratedNote] = []

	for bar in range(state.total_bars):

		style = arp_pattern(genre, state.section_at(bar))
		tones = arp_tones(state, bar)

		if style is None or not tones:
			continue

		duration = max(MIN_ARP_DURATION, style.rate * style.gate)

		for slot, step in enumerate(range(0, state.steps_per_bar, max(1, style.rate))):

			index = style.pattern[slot % len(style.pattern)]

			if index is None or index >= len(tones):
				continue

			start = state.bar_start(bar) + step
			velocity = songbrain.constants.velocity.ARP_VELOCITY + (rng.random() * 2 - 1) * songbrain.constants.velocity.ARP_JITTER

			notes.append(songbrain.song_state.GeneratedNote(
				midi = tones[index],
				start = start,
				duration = min(duration, song_end - start),
				velocity = velocity
			))

	return notes
