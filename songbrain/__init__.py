"""
Songbrain - a procedural song composition engine for Python.

Songbrain models the music theory a songwriter leans on (scales, diatonic
chords, harmonic function) and uses it to generate chord progressions,
melodies, rhythmic motifs and drum patterns that fit a song's structure,
genre and complexity. It produces plain note lists (pitch, start step,
duration, velocity) and leaves playback and rendering to the caller.

What it does:

- **Song forms.** A library of templates (radio pop, club EDM, trap, boom
  bap, classic rock, lo-fi, reggaeton, Persian pop) expands into one
  section per bar.
- **Progressions by genre and vibe.** Each genre offers named styles with a
  chord loop per section, plus per-section harmony advice (suggested and
  avoided degrees).
- **Phrase-aware melodies.** A four-bar phrase state machine repeats,
  varies and resolves a motif chosen for the section's vibe. Two pitch
  pickers choose the notes: smooth voice leading or a Markov-style stepper.
- **Drums with fills.** Genre step tables, section overrides and fills at
  section boundaries, written with General MIDI drum notes.
- **Full arrangements.** Drums, bass, pads, lead and arpeggio in one call,
  exportable to a Standard MIDI File.
- **Repeatable.** Every generator takes a ``random.Random``; seed it and the
  output is deterministic.

Minimal example:

    ```python
    import random
    import songbrain

    arrangement = songbrain.arrange_song("POP_RADIO", root_pc=9, rng=random.Random(42))
    songbrain.write_midi_file(arrangement, "song.mid")
    ```

Command line:

    ```
    python -m songbrain config.yaml
    ```

Package-level exports: ``SongState``, ``GeneratedNote``, ``arrange_song``,
``generate_melody``, ``write_midi_file``, ``register_scale``.
"""

import songbrain.arrangement
import songbrain.intervals
import songbrain.melody
import songbrain.midi_export
import songbrain.song_state


SongState = songbrain.song_state.SongState
GeneratedNote = songbrain.song_state.GeneratedNote
arrange_song = songbrain.arrangement.arrange_song
generate_melody = songbrain.melody.generate_melody
write_midi_file = songbrain.midi_export.write_midi_file
register_scale = songbrain.intervals.register_scale
