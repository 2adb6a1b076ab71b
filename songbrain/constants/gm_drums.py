"""General MIDI drum note numbers used by the drum pattern engine.

Only the voices the engine writes are listed.  Values follow the GM Level 1
percussion key map (channel 10, 0-indexed channel 9).
"""

KICK = 36
SNARE = 38
CLOSED_HAT = 42
OPEN_HAT = 46
CRASH = 49
LOW_TOM = 41
MID_TOM = 45
HIGH_TOM = 48

GM_DRUM_CHANNEL = 9
