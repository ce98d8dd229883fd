import logging
import typing

import diddle.constants
import diddle.errors
import diddle.intervals
import diddle.note


logger = logging.getLogger(__name__)


def run_pitches (start: int, end: int, tonic: typing.Optional[int] = None, mode: typing.Optional[str] = None) -> typing.List[int]:

	"""Return the pitches of a stepwise run from ``start`` to ``end``.

	Without a mode the run is chromatic and includes both ends. With a mode,
	only the scale tones of ``tonic`` (default ``start``) between the two ends
	are kept, in the run's direction.

	Example:
		```python
		run_pitches(12, 0, mode="ionian")           # → [12, 11, 9, 7, 5, 4, 2, 0]
		run_pitches(12, 24, tonic=4, mode="ionian") # → [13, 15, 16, 18, 20, 21, 23]
		```
	"""

	descending = end < start

	if mode is None:
		step = -1 if descending else 1
		return list(range(start, end + step, step))

	low, high = min(start, end), max(start, end)
	pitches = [n for n in diddle.intervals.notes_in_key(start if tonic is None else tonic, mode) if low <= n <= high]

	if descending:
		pitches.reverse()

	return pitches


def run (
	start: int,
	end: int,
	duration: typing.Optional[int] = None,
	resolution: int = diddle.constants.BEAT,
	tonic: typing.Optional[int] = None,
	mode: typing.Optional[str] = None,
	delay: int = 0
) -> typing.List[diddle.note.NoteEvent]:

	"""Build an ascending or descending run of notes.

	Every step lasts ``resolution`` ticks. When ``duration`` is given, the
	resolution is derived from it instead (``duration // steps``) and any
	leftover ticks are added to the last note, so the run lasts exactly
	``duration``.

	Parameters:
		start: First pitch.
		end: Last pitch (the direction follows from ``start`` and ``end``).
		duration: Optional total length of the run in ticks.
		resolution: Ticks per step when ``duration`` is not given.
		tonic: Tonic of the mode (defaults to ``start``).
		mode: Optional mode name; chromatic when omitted.
		delay: Silence before the first note.

	Returns:
		New note events, one per step.

	Example:
		```python
		notes = run(60, 72, duration=4 * 128, mode="ionian")
		len(notes)                          # → 8
		sum(n.duration for n in notes)      # → 512
		```
	"""

	pitches = run_pitches(start, end, tonic=tonic, mode=mode)

	if not pitches:
		raise diddle.errors.ConfigError(f"No {mode} scale tones between {start} and {end}")

	if duration is not None:

		if duration < len(pitches):
			raise diddle.errors.ConfigError(f"Duration {duration} is too short for a run of {len(pitches)} notes")

		resolution = duration // len(pitches)

	notes = [diddle.note.NoteEvent(pitch=pitch, duration=resolution) for pitch in pitches]
	notes[0].delay = delay

	if duration is not None:

		remainder = duration - resolution * len(pitches)

		if remainder:
			logger.warning("run(): duration %d is not divisible into %d steps - adding %d ticks to the last note", duration, len(pitches), remainder)
			notes[-1].duration += remainder

	return notes
