"""Constants for songbrain.

This package contains:

- ``songbrain.constants.velocity`` - Normalised (0.0-1.0) velocity constants
- ``songbrain.constants.gm_drums`` - General MIDI drum note numbers used by the drum engine

Step-grid constants live here directly.  The engine works on a step grid
where one bar is ``DEFAULT_STEPS_PER_BAR`` steps (sixteenth notes in 4/4)
and drum tables are always written against ``DRUM_GRID_STEPS`` steps.
"""

DEFAULT_STEPS_PER_BAR = 16
BEATS_PER_BAR = 4
DRUM_GRID_STEPS = 16
PHRASE_BARS = 4

# MIDI standard range
MIN_MIDI = 0
MAX_MIDI = 127
