import dataclasses
import logging
import random
import typing

import diddle.constants
import diddle.errors
import diddle.intervals
import diddle.note


logger = logging.getLogger(__name__)

# Scale-degree offsets above a melody note that make acceptable harmony notes.
HARMONY_DEGREES: typing.Tuple[int, ...] = (0, 2, 3, 4, 5)


def harmony_candidates (pitch: int, key: typing.List[int], min_pitch: int, max_pitch: int) -> typing.List[int]:

	"""Return every pitch that may harmonize ``pitch`` within a register.

	``key`` is the full list of pitches in the key (see ``notes_in_key``). The
	melody pitch must be one of them. Degrees above the top of the key are
	skipped.

	Example:
		```python
		key = diddle.intervals.notes_in_key(60, "ionian")
		harmony_candidates(60, key, 60, 72)   # → [60, 64, 65, 67, 69, 72]
		```
	"""

	index = key.index(pitch)
	degrees = [key[index + offset] for offset in HARMONY_DEGREES if index + offset < len(key)]

	return diddle.intervals.instances_of(degrees, min_pitch, max_pitch)


def harmonize (
	notes: typing.Sequence[diddle.note.NoteEvent],
	rng: random.Random,
	mode: str = "ionian",
	tonic: int = 60,
	min_pitch: typing.Optional[int] = None,
	max_pitch: typing.Optional[int] = None
) -> typing.List[diddle.note.NoteEvent]:

	"""Derive a harmony voice from a melody, holding notes where it can.

	For each melody note the candidates are the scale degrees 0, +2, +3, +4
	and +5 above it, in every octave of the register. If the harmony note
	already sounding is still a candidate it is held through the melody note
	(sticky harmonization); otherwise a new candidate is picked at random.
	A held note absorbs the melody note's delay as well as its duration,
	while a newly picked note keeps the melody note's delay.

	This is a greedy, order-dependent heuristic rather than a search for the
	smoothest voice leading.

	Parameters:
		notes: The melody. It is not modified.
		rng: Random number generator instance
		mode: Mode of the key.
		tonic: Tonic of the key; also centres the default register.
		min_pitch: Lowest harmony pitch (default ``tonic - 24``).
		max_pitch: Highest harmony pitch (default ``tonic + 24``).

	Returns:
		The harmony voice, lasting exactly as long as the melody.
	"""

	if min_pitch is None:
		min_pitch = max(diddle.constants.MIN_PITCH, tonic - 24)

	if max_pitch is None:
		max_pitch = min(diddle.constants.MAX_PITCH, tonic + 24)

	if min_pitch > max_pitch:
		raise diddle.errors.ConfigError(f"min_pitch ({min_pitch}) must be <= max_pitch ({max_pitch})")

	key = diddle.intervals.notes_in_key(tonic, mode)
	scale_pcs = diddle.intervals.scale_pitch_classes(tonic, mode)
	harmony: typing.List[diddle.note.NoteEvent] = []

	for note in notes:

		pitch = diddle.intervals.quantize_pitch(note.pitch, scale_pcs)

		if pitch != note.pitch:
			logger.debug("harmonize(): melody pitch %d is outside the key, harmonizing as %d", note.pitch, pitch)

		candidates = harmony_candidates(pitch, key, min_pitch, max_pitch)

		if not candidates:
			raise diddle.errors.PitchResolutionError(f"No harmony for pitch {note.pitch} between {min_pitch} and {max_pitch}")

		# Sticky: keep the sounding harmony note while it still fits.
		if harmony and harmony[-1].pitch in candidates:
			harmony[-1].duration += note.span
			continue

		harmony.append(dataclasses.replace(note, pitch=rng.choice(candidates)))

	return [note for note in harmony if note.duration]
