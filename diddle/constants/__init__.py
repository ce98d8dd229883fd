"""Constants for diddle.

This package contains two sets of constants:

- ``diddle.constants.ticks`` - Tick-based timing (128 ticks per beat)
- ``diddle.constants.velocity`` - MIDI velocity constants

Tick constants and the playable pitch range are re-exported here, so
``diddle.constants.BEAT`` and ``diddle.constants.MAX_PITCH`` work directly.
"""

# Re-export tick constants.
# These match the values in diddle.constants.ticks.

BEAT = 128
BAR = 512

# Playable pitch range. 127 is left free for the encoder.

MIN_PITCH = 0
MAX_PITCH = 126
