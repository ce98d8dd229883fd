"""
diddle - procedural note sequences for algorithmic composition.

diddle builds timed note sequences (pitch, duration, delay, velocity in
ticks of 128 per beat) from a handful of generators and transforms, and
encodes them as standard MIDI files.

What it does:

- **Runs.** Ascending or descending runs between two pitches, chromatic or
  in any of the seven diatonic modes, stretched to an exact duration.
- **Pattern fills.** A recursive pattern language (``[0, [1, "-"], "_", 2]``
  or ``"0 [1 -] _ 2"``) expanded against a chord progression. Deltas can be
  read as absolute pitches, semitones from the chord root, chord tones or
  scale degrees. Every step adds up to its duration exactly.
- **Random fills.** Random note counts and lengths from exact-sum
  partitions, with pitches drawn from the scale, the chord or any list.
- **Groove transforms.** ``reform()`` restructures rhythm while keeping the
  total length, plus ``sample()``, ``jumble()``, ``repeat()``,
  ``transpose()``, ``velocity()`` and ``delay()``.
- **Harmonization.** A sticky harmonizer that derives a second voice and
  holds notes for as long as they still fit.
- **MIDI export.** Render builders into a ``Session`` and encode it as a
  ``mido.MidiFile``.

Every random decision goes through an injectable ``random.Random``, so
passing ``rng=random.Random(42)`` makes a piece repeatable.

Minimal example:

    ```python
    import diddle

    session = diddle.Session()

    (
        diddle.Diddle()
        .run(60, 72, duration=4 * 128, mode="ionian")
        .reform(resolution=64)
        .jumble()
        .repeat(4)
        .render(session, channel=3)
    )

    session.to_midi_file().save("tune.mid")
    ```

Package-level exports: ``Diddle``, ``NoteEvent``, ``Session``, ``register_mode``.
"""

import diddle.builder
import diddle.intervals
import diddle.note
import diddle.session


Diddle = diddle.builder.Diddle
NoteEvent = diddle.note.NoteEvent
Session = diddle.session.Session
register_mode = diddle.intervals.register_mode
