"""Tick-based timing constants.

Every duration and delay in diddle is an integer number of **ticks**, with
**128 ticks per beat**. The MIDI encoder writes files at the same resolution,
so no rescaling happens between a generated sequence and its track.

Multiply by a count for longer spans::

    import diddle.constants.ticks as ticks

    diddle.Diddle().run(60, 72, duration=4 * ticks.BEAT)
"""

SIXTEENTH = 32
EIGHTH = 64
BEAT = 128
HALF = 256
BAR = 512
