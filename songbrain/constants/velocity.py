"""Normalised velocity constants.

Generated notes carry velocity as a float in ``[0.0, 1.0]``.  Callers that
need MIDI velocities (0-127) convert at the boundary (see
``songbrain.midi_export``).
"""

MIN_VELOCITY = 0.0
MAX_VELOCITY = 1.0

# Floor applied when shaping melody velocities so no note goes silent.
MIN_AUDIBLE_VELOCITY = 0.1

# Melody (smooth voice-leading strategy)
SMOOTH_VELOCITY = 0.8
SMOOTH_CHORUS_VELOCITY = 0.95
SMOOTH_WEAK_BEAT_DROP = 0.15

# Melody (markov strategy)
MARKOV_VELOCITY = 0.75
MARKOV_CHORUS_VELOCITY = 0.85
MARKOV_STRONG_BEAT_BOOST = 0.1
MARKOV_JITTER = 0.05

# Drums
DRUM_VELOCITY = 0.9
KICK_VELOCITY = 1.0
CLOSED_HAT_VELOCITY = 0.7
LOFI_DRUM_SCALE = 0.8

# Accompaniment
BASS_VELOCITY = 0.8
BASS_CHORUS_VELOCITY = 0.9
PAD_VELOCITY = 0.6
ARP_VELOCITY = 0.7
ARP_JITTER = 0.05
