"""Sequence-level groove transforms.

Each function takes a list of ``NoteEvent`` and either edits it in place and
returns it (``jumble``, ``transpose``, ``set_velocity``, ``set_delay``) or
builds and returns a new list (``reform``, ``sample``, ``repeat``,
``repeat_last``). Nothing is changed when a transform raises.
"""

import dataclasses
import logging
import random
import typing

import diddle.constants
import diddle.errors
import diddle.note
import diddle.sequence_utils


logger = logging.getLogger(__name__)

Notes = typing.List[diddle.note.NoteEvent]


def reform (notes: Notes, rng: random.Random, resolution: int = diddle.constants.BEAT, delay_mode: typing.Optional[str] = None) -> Notes:

	"""
	Restructure a sequence with random note lengths, keeping its total duration.

	The sounding time is cut into units of ``resolution`` ticks and shared out
	again with ``partition_uniform``. With ``delay_mode="random"`` the delays
	are redrawn from the same pool; otherwise every note keeps its delay.
	When the sounding time is shorter than one unit the delays are folded
	into the pool and cleared, so only a resolution longer than the whole
	sequence is rejected.

	A note left with no duration but some delay sounds for the delay instead,
	and a note left with neither is dropped. Ticks that do not fill a whole
	unit are added to the last note.

	Parameters:
		notes: The sequence to restructure.
		rng: Random number generator instance
		resolution: Unit size in ticks.
		delay_mode: ``"random"`` to redraw delays, or ``None`` to keep them.

	Example::

		notes = diddle.runs.run(60, 72, duration=512, mode="ionian")
		reformed = reform(notes, random.Random(3), resolution=64)
		diddle.note.total_ticks(reformed)   # → 512
	"""

	if not notes:
		return []

	randomize_delays = delay_mode == "random"
	total = diddle.note.total_ticks(notes)

	if resolution > total:
		raise diddle.errors.ConfigError(f"Resolution {resolution} is longer than the whole {total} tick sequence")

	sounding = total - sum(note.delay for note in notes)
	keep_delays = not randomize_delays and sounding >= resolution

	if not randomize_delays and not keep_delays:
		logger.warning("reform(): resolution %d is coarser than the %d sounding ticks - folding delays into the note lengths", resolution, sounding)

	budget = sounding if keep_delays else total
	chunks = budget // resolution

	slots = len(notes) * 2 if randomize_delays else len(notes)

	if resolution * slots > budget:
		logger.warning("reform(): resolution %d is not fine enough for %d notes in %d ticks - some notes will be lost", resolution, len(notes), budget)

	remainder = budget - chunks * resolution

	if remainder:
		logger.warning("reform(): %d ticks are not divisible by resolution %d - adding %d ticks to the last note", budget, resolution, remainder)

	parts = diddle.sequence_utils.partition_uniform(slots, chunks, rng)
	result: Notes = []

	for note in notes:

		new = dataclasses.replace(note, duration=parts.pop() * resolution)

		if randomize_delays:
			new.delay = parts.pop() * resolution
		elif not keep_delays:
			new.delay = 0

		# A silent note cannot sound; let it sound through its delay instead.
		if not new.duration and new.delay:
			new.duration, new.delay = new.delay, 0

		if new.duration or new.delay:
			result.append(new)

	if remainder:
		result[-1].duration += remainder

	return result


def sample (notes: Notes, resolution: int) -> Notes:

	"""
	Re-quantize a sequence into fixed slices of ``resolution`` ticks.

	A running tick counter walks the sequence; each time it passes a
	``resolution`` boundary, a copy of the current note is emitted with
	``duration=resolution`` and no delay. The first note emits at most one
	slice and hands the rest of its span on to the next note.

	Sampling a 256-tick C and a 128-tick D at 128 ticks gives C, D, D.
	"""

	ticks = 0
	result: Notes = []

	for i, note in enumerate(notes):

		ticks += note.span

		while ticks >= resolution:

			result.append(dataclasses.replace(note, duration=resolution, delay=0))
			ticks -= resolution

			if i == 0:
				break

	return result


def jumble (notes: Notes, rng: random.Random) -> Notes:

	"""Shuffle the notes in place. Timing fields travel with their notes."""

	rng.shuffle(notes)
	return notes


def repeat (notes: Notes, times: int) -> Notes:

	"""Return the sequence played ``times`` times, as independent copies."""

	if times < 0:
		raise diddle.errors.ConfigError(f"Cannot repeat a sequence {times} times")

	return [dataclasses.replace(note) for _ in range(times) for note in notes]


def repeat_last (notes: Notes, count: int) -> Notes:

	"""Return the sequence followed by copies of its last ``count`` notes."""

	if count < 0:
		raise diddle.errors.ConfigError(f"Cannot repeat the last {count} notes")

	if count == 0:
		return list(notes)

	return list(notes) + diddle.note.copy_notes(notes[-count:])


def transpose (notes: Notes, steps: int) -> Notes:

	"""
	Shift every pitch by ``steps`` semitones, in place.

	Pitches are not clamped. If any note would leave 0–126 nothing is changed
	and ``PitchResolutionError`` is raised.
	"""

	outside = [
		note.pitch + steps for note in notes
		if not diddle.constants.MIN_PITCH <= note.pitch + steps <= diddle.constants.MAX_PITCH
	]

	if outside:
		raise diddle.errors.PitchResolutionError(f"Transposing by {steps} gives pitches outside {diddle.constants.MIN_PITCH}-{diddle.constants.MAX_PITCH}: {outside}")

	for note in notes:
		note.pitch += steps

	return notes


def set_velocity (
	notes: Notes,
	rng: random.Random,
	level: typing.Optional[int] = None,
	min_velocity: int = 0,
	max_velocity: int = 127,
	random_velocity: bool = False
) -> Notes:

	"""
	Give every note a fixed velocity, or a random one from ``[min, max]``.

	Does nothing unless ``level`` or ``random_velocity`` is set. A fixed
	``level`` wins over ``random_velocity``.
	"""

	if level is None and not random_velocity:
		return notes

	for note in notes:
		note.velocity = level if level is not None else rng.randint(min_velocity, max_velocity)

	return notes


def duration (notes: Notes) -> int:

	"""Total ticks of a sequence, delays included."""

	return diddle.note.total_ticks(notes)


def set_delay (notes: Notes, ticks: int) -> Notes:

	"""Set the delay of the first note, moving the whole sequence later."""

	if not notes:
		raise diddle.errors.ConfigError("Cannot delay an empty sequence")

	if ticks < 0:
		raise diddle.errors.ConfigError(f"Delay cannot be negative ({ticks})")

	notes[0].delay = ticks
	return notes
