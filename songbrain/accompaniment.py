"""Bass, pad and lead parts for a whole song, plus the per-genre instrument set."""

import dataclasses
import logging
import random
import typing

import songbrain.constants.velocity
import songbrain.melody
import songbrain.sections
import songbrain.song_state


logger = logging.getLogger(__name__)

_S = songbrain.sections.SectionType
_G = songbrain.sections.Genre

BASS_BASE_MIDI = 36
PAD_BASE_MIDI = 48
PAD_CEILING = 80
LEAD_PHRASE_BARS = 4


@dataclasses.dataclass(frozen=True)
class InstrumentSet:

	"""
	Instrument names for the pitched parts of an arrangement.
	"""

	bass: str
	pad: str
	lead: str
	arp: str


GENRE_INSTRUMENTS: typing.Dict[songbrain.sections.Genre, InstrumentSet] = {
	_G.POP: InstrumentSet("Analog Bass", "Soft Pad", "Saw Lead", "Distorted Guitar"),
	_G.ROCK: InstrumentSet("Analog Bass", "Vintage Synth Pad", "Distorted Guitar", "Distorted Guitar"),
	_G.LOFI: InstrumentSet("Sub Bass", "Dark Ocean Pad", "Vintage Rhodes", "Distorted Guitar"),
	_G.EDM: InstrumentSet("Analog Bass", "Bright Cloud Pad", "Saw Lead", "Distorted Guitar"),
	_G.HIPHOP: InstrumentSet("Sub Bass", "Soft Pad", "Soft Lead", "Distorted Guitar"),
	_G.LATIN: InstrumentSet("Analog Bass", "Electric Piano", "Saw Lead", "Distorted Guitar"),
	_G.PERSIAN: InstrumentSet("Analog Bass", "Bright Cloud Pad", "Saw Lead", "Acoustic Guitar"),
}

# General MIDI program numbers (0-indexed) used when an arrangement is written to a MIDI file.
GM_PROGRAMS: typing.Dict[str, int] = {
	"Analog Bass": 38,
	"Sub Bass": 39,
	"Soft Pad": 89,
	"Vintage Synth Pad": 90,
	"Dark Ocean Pad": 95,
	"Bright Cloud Pad": 88,
	"Electric Piano": 4,
	"Vintage Rhodes": 4,
	"Saw Lead": 81,
	"Soft Lead": 80,
	"Distorted Guitar": 30,
	"Acoustic Guitar": 25,
}


def instruments_for_genre (genre: typing.Any) -> InstrumentSet:

	"""Return the instrument set of a genre; genres without one use POP."""

	return GENRE_INSTRUMENTS.get(songbrain.sections.resolve_genre(genre), GENRE_INSTRUMENTS[_G.POP])


def gm_program (instrument: str) -> int:

	"""Return the General MIDI program for an instrument name (Acoustic Grand Piano when unknown)."""

	return GM_PROGRAMS.get(instrument, 0)


def generate_bass (state: songbrain.song_state.SongState) -> typing.List[songbrain.song_state.GeneratedNote]:

	"""Generate a root-note bass line for the whole song.

	The chord root sits in the octave above C2.  Intro and Outro hold a
	whole-bar note, Chorus and Drop pump eighth notes, every other section
	plays quarter notes on beats one and three.
	"""

	steps_per_bar = state.steps_per_bar
	beat = state.beat_steps
	eighth = max(1, steps_per_bar // 8)

	notes: typing.List[songbrain.song_state.GeneratedNote] = []

	for bar in range(state.total_bars):

		degree = state.chord_at(bar)

		if degree is None:
			continue

		midi = BASS_BASE_MIDI + degree.root_pc(state.root_pc)
		section = state.section_at(bar)
		bar_start = state.bar_start(bar)

		if section in (_S.INTRO, _S.OUTRO):
			hits = [(0, steps_per_bar, songbrain.constants.velocity.BASS_VELOCITY)]

		elif section in (_S.CHORUS, _S.DROP):
			hits = [
				(step, eighth, songbrain.constants.velocity.BASS_CHORUS_VELOCITY)
				for step in range(0, steps_per_bar, eighth)
			]

		else:
			hits = [
				(0, beat, songbrain.constants.velocity.BASS_VELOCITY),
				(steps_per_bar // 2, beat, songbrain.constants.velocity.BASS_VELOCITY),
			]

		for step, duration, velocity in hits:
			notes.append(songbrain.song_state.GeneratedNote(midi=midi, start=bar_start + step, duration=duration, velocity=velocity))

	return notes


def pad_voicing (state: songbrain.song_state.SongState, bar: int, spread: bool = False) -> typing.List[int]:

	"""Return the pad notes for a bar.

	Tones whose offset from the scale root is above a fifth are dropped an
	octave to keep the chord compact.  ``spread`` lifts the middle voice an
	octave for an open voicing.  Anything still above 80 drops an octave.
	"""

	degree = state.chord_at(bar)

	if degree is None:
		return []

	base = PAD_BASE_MIDI + state.root_pc
	voicing = [base + interval - (12 if interval > 7 else 0) for interval in degree.intervals]

	if spread and len(voicing) >= 3:
		voicing.sort()
		voicing[1] += 12
		voicing.sort()

	return [note - 12 if note > PAD_CEILING else note for note in voicing]


def generate_pads (state: songbrain.song_state.SongState, spread: bool = False) -> typing.List[songbrain.song_state.GeneratedNote]:

	"""Generate sustained whole-bar chords for every bar except Drops."""

	notes: typing.List[songbrain.song_state.GeneratedNote] = []

	for bar in range(state.total_bars):

		if state.section_at(bar) == _S.DROP:
			continue

		for midi in pad_voicing(state, bar, spread):
			notes.append(songbrain.song_state.GeneratedNote(
				midi = midi,
				start = state.bar_start(bar),
				duration = state.steps_per_bar,
				velocity = songbrain.constants.velocity.PAD_VELOCITY
			))

	return notes


def generate_lead (
	state: songbrain.song_state.SongState,
	rng: typing.Optional[random.Random] = None
) -> typing.List[songbrain.song_state.GeneratedNote]:

	"""Generate lead phrases over the high-energy sections.

	The song is read in four-bar phrases; a phrase that starts in a Chorus or
	Drop gets a catchy (MEDIUM) melody and one that starts in a Solo gets a
	busier (HIGH) one.  Other phrases stay silent.
	"""

	rng = rng or random.Random()

	notes: typing.List[songbrain.song_state.GeneratedNote] = []

	for bar in range(0, state.total_bars, LEAD_PHRASE_BARS):

		section = state.section_at(bar)

		if section in (_S.CHORUS, _S.DROP):
			complexity = songbrain.sections.Complexity.MEDIUM
		elif section == _S.SOLO:
			complexity = songbrain.sections.Complexity.HIGH
		else:
			continue

		notes.extend(songbrain.melody.generate_melody(
			state,
			bar,
			LEAD_PHRASE_BARS,
			complexity = complexity,
			strategy = songbrain.melody.MelodyStrategy.SMOOTH,
			rng = rng
		))

	return notes
