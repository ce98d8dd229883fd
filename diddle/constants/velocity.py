"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127). A note whose velocity is unset
is written with ``DEFAULT_VELOCITY``.
"""

# Primary defaults
DEFAULT_VELOCITY = 100          # Notes with no velocity assigned
DEFAULT_VOX_VELOCITY = 126      # Progression steps marked as vocal sections

# MIDI standard range
MIN_VELOCITY = 0
MAX_VELOCITY = 127
