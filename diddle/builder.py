import dataclasses
import logging
import random
import typing

import diddle.config
import diddle.fill
import diddle.groove
import diddle.harmony
import diddle.note
import diddle.runs
import diddle.schemas

if typing.TYPE_CHECKING:
	import diddle.session

logger = logging.getLogger(__name__)

NoteLike = typing.Union[diddle.note.NoteEvent, typing.Dict[str, typing.Any]]


class Diddle:

	"""
	A chainable builder around one voice's note sequence.

	Every generator appends to the sequence and every transform edits it, and
	all of them return the builder so calls can be chained. Options are
	validated before anything changes, so a failed call leaves the sequence
	as it was.

	Durations and delays are integer ticks, 128 to the beat.

	Example:
		```python
		import diddle

		session = diddle.Session()

		(
			diddle.Diddle()
			.run(60, 72, duration=4 * 128, mode="ionian")
			.reform(resolution=64)
			.jumble()
			.repeat(4)
			.velocity(random=True, min=60, max=100)
			.render(session, channel=3)
		)
		```
	"""

	def __init__ (
		self,
		notes: typing.Optional[typing.Iterable[NoteLike]] = None,
		progression: typing.Optional[typing.List[typing.Any]] = None,
		rng: typing.Optional[random.Random] = None,
		defaults: typing.Optional[diddle.config.Defaults] = None
	) -> None:

		"""Create a builder, optionally seeded with notes and a progression.

		Parameters:
			notes: Initial notes (``NoteEvent`` objects or mappings); copied.
			progression: Default progression for ``fill()``.
			rng: Optional seeded ``Random`` for reproducibility.
			defaults: Fallback option values (see ``diddle.config``).
		"""

		initial = [diddle.note.as_note(n) for n in notes] if notes is not None else None
		options = diddle.schemas.validate(diddle.schemas.DiddleOptions, {
			"notes": [dataclasses.asdict(n) for n in initial] if initial is not None else None,
			"progression": progression,
		})

		self.notes: typing.List[diddle.note.NoteEvent] = initial or []
		self.progression: typing.Optional[typing.List[diddle.schemas.ProgressionStep]] = options.progression
		self.rng: random.Random = rng or random.Random()
		self.defaults: diddle.config.Defaults = defaults or diddle.config.Defaults()

		# Silence left over by a fill that ended on a rest; it lands on the
		# first note the next generator produces.
		self.trailing_delay: int = 0


	def _extend (self, notes: typing.List[diddle.note.NoteEvent]) -> None:

		if notes and self.trailing_delay:
			notes[0].delay += self.trailing_delay
			self.trailing_delay = 0

		self.notes.extend(notes)


	def add_note (self, pitch: int, duration: int, delay: int = 0, velocity: typing.Optional[int] = None) -> "Diddle":

		"""Append a single note."""

		note = diddle.schemas.validate(diddle.schemas.NoteSchema, {"pitch": pitch, "duration": duration, "delay": delay, "velocity": velocity})
		self._extend([diddle.note.NoteEvent(**note.model_dump())])
		return self


	def add_notes (self, notes: typing.Iterable[NoteLike]) -> "Diddle":

		"""Append copies of existing notes (e.g. another builder's ``notes``)."""

		self._extend([diddle.note.as_note(n) for n in notes])
		return self


	def prepend (self, notes: typing.Iterable[NoteLike]) -> "Diddle":

		"""Insert copies of notes before the current sequence."""

		self.notes = [diddle.note.as_note(n) for n in notes] + self.notes
		return self


	def duration (self) -> int:

		"""
		Total ticks of the sequence, including any trailing rest.

		Ends a chain, since it returns a number.
		"""

		return diddle.groove.duration(self.notes) + self.trailing_delay


	def run (
		self,
		start: int,
		end: int,
		duration: typing.Optional[int] = None,
		resolution: typing.Optional[int] = None,
		tonic: typing.Optional[int] = None,
		mode: typing.Optional[str] = None,
		delay: typing.Optional[int] = None
	) -> "Diddle":

		"""Append an ascending/descending run (see ``diddle.runs.run``).

		Defaults to a chromatic run when no mode is given.
		"""

		options = diddle.schemas.validate(diddle.schemas.RunOptions, {
			"start": start,
			"end": end,
			"duration": duration,
			"resolution": resolution if resolution is not None else self.defaults.resolution,
			"tonic": tonic,
			"mode": mode,
			"delay": delay,
		})

		self._extend(diddle.runs.run(**options.model_dump()))
		return self


	def fill (
		self,
		duration: typing.Optional[int] = None,
		pattern: typing.Optional[typing.Any] = None,
		progression: typing.Optional[typing.List[typing.Any]] = None,
		tonic: typing.Optional[int] = None,
		mode: typing.Optional[str] = None,
		delta: typing.Optional[str] = None,
		resolution: typing.Optional[int] = None,
		notes: typing.Optional[typing.Union[str, typing.List[int]]] = None,
		min_notes: typing.Optional[int] = None,
		max_notes: typing.Optional[int] = None,
		on_vox: typing.Optional[int] = None
	) -> "Diddle":

		"""Append notes generated from a pattern and/or progression (see ``diddle.fill``).

		Parameters:
			duration: Ticks to fill when there is no progression.
			pattern: Pattern tree or bracket-notation string.
			progression: Progression steps; defaults to the builder's own.
			tonic: Tonic of the scale used by ``degree`` deltas.
			mode: Mode of that scale.
			delta: ``"absolute"``, ``"chromatic"``, ``"chord"`` or ``"degree"``.
			resolution: Unit size for random fills.
			notes: Random-fill pitch pool: a list, ``"all"``, ``"scale"`` or ``"chord"``.
			min_notes: Fewest notes in a random fill.
			max_notes: Most notes in a random fill.
			on_vox: Velocity for steps marked ``vox``.

		Example:
			```python
			progression = [
				{"chord": ["M", "C4"], "duration": 4},
				{"chord": ["M", "F4"], "duration": 4},
			]

			Diddle(progression=progression).fill(pattern=[0, 1], delta="chord").notes
			# → pitches 60, 64, 65, 69, each 2 ticks long
			```
		"""

		steps = progression if progression is not None else self.progression

		options = diddle.schemas.validate(diddle.schemas.FillOptions, {
			"tonic": tonic if tonic is not None else self.defaults.tonic,
			"mode": mode if mode is not None else self.defaults.mode,
			"delta": delta if delta is not None else self.defaults.delta,
			"resolution": resolution if resolution is not None else self.defaults.resolution,
			"duration": duration,
			"min_notes": min_notes,
			"max_notes": max_notes,
			"notes": notes,
			"on_vox": on_vox,
			"pattern": pattern,
			"progression": [_step_dict(step) for step in steps] if steps is not None else None,
		})

		state = diddle.fill.fill(options, self.rng, pending_delay=self.trailing_delay)

		self.trailing_delay = 0
		self._extend(state.notes)
		self.trailing_delay = state.pending_delay

		if state.pending_delay:
			logger.debug("fill(): %d ticks of rest carried to the next call", state.pending_delay)

		return self


	def reform (self, resolution: typing.Optional[int] = None, delay: typing.Optional[str] = None) -> "Diddle":

		"""Restructure the notes with random lengths, keeping the total (see ``diddle.groove.reform``).

		Pass ``delay="random"`` to redraw the delays as well.
		"""

		options = diddle.schemas.validate(diddle.schemas.ReformOptions, {
			"resolution": resolution if resolution is not None else self.defaults.resolution,
			"delay": delay,
		})

		self.notes = diddle.groove.reform(self.notes, self.rng, resolution=options.resolution, delay_mode=options.delay)
		return self


	def sample (self, resolution: int) -> "Diddle":

		"""Re-quantize into slices of ``resolution`` ticks (see ``diddle.groove.sample``)."""

		options = diddle.schemas.validate(diddle.schemas.SampleOptions, {"resolution": resolution})

		self.notes = diddle.groove.sample(self.notes, options.resolution)
		return self


	def jumble (self) -> "Diddle":

		"""Shuffle the notes."""

		diddle.groove.jumble(self.notes, self.rng)
		return self


	def repeat (self, times: int) -> "Diddle":

		"""Repeat the whole sequence ``times`` times."""

		self.notes = diddle.groove.repeat(self.notes, times)
		return self


	def repeat_last (self, count: int) -> "Diddle":

		"""Append a copy of the last ``count`` notes."""

		self.notes = diddle.groove.repeat_last(self.notes, count)
		return self


	def transpose (self, steps: int) -> "Diddle":

		"""Shift every pitch by ``steps`` semitones."""

		diddle.groove.transpose(self.notes, steps)
		return self


	def velocity (
		self,
		level: typing.Optional[int] = None,
		min: typing.Optional[int] = None,
		max: typing.Optional[int] = None,
		random: bool = False
	) -> "Diddle":

		"""Set a fixed velocity, or random velocities in ``[min, max]``.

		Does nothing unless ``level`` or ``random`` is given.
		"""

		options = diddle.schemas.validate(diddle.schemas.VelocityOptions, {"level": level, "min": min, "max": max, "random": random})

		diddle.groove.set_velocity(
			self.notes,
			self.rng,
			level = options.level,
			min_velocity = options.min,
			max_velocity = options.max,
			random_velocity = options.random
		)
		return self


	def delay (self, ticks: int) -> "Diddle":

		"""Delay the start of the sequence by setting the first note's delay."""

		diddle.groove.set_delay(self.notes, ticks)
		return self


	def map (self, func: typing.Callable[[diddle.note.NoteEvent], typing.Any]) -> "Diddle":

		"""Call ``func`` on every note (for in-place edits)."""

		for note in self.notes:
			func(note)

		return self


	def copy (self) -> "Diddle":

		"""Return an independent builder with copies of the notes."""

		clone = Diddle(rng=self.rng, defaults=self.defaults)
		clone.notes = diddle.note.copy_notes(self.notes)
		clone.progression = self.progression
		clone.trailing_delay = self.trailing_delay

		return clone


	def harmonize (
		self,
		mode: typing.Optional[str] = None,
		tonic: typing.Optional[int] = None,
		min_pitch: typing.Optional[int] = None,
		max_pitch: typing.Optional[int] = None
	) -> "Diddle":

		"""Return a new builder holding a harmony voice for this one.

		This builder is left unchanged (see ``diddle.harmony.harmonize``).
		"""

		options = diddle.schemas.validate(diddle.schemas.HarmonizeOptions, {
			"mode": mode if mode is not None else self.defaults.mode,
			"tonic": tonic if tonic is not None else self.defaults.tonic,
			"min_pitch": min_pitch,
			"max_pitch": max_pitch,
		})

		companion = Diddle(rng=self.rng, defaults=self.defaults)
		companion.notes = diddle.harmony.harmonize(self.notes, self.rng, **options.model_dump())

		return companion


	def render (self, session: "diddle.session.Session", channel: int) -> "Diddle":

		"""Add the sequence to ``session`` as a track on ``channel``.

		Notes without a velocity take the default velocity.
		"""

		notes = [
			dataclasses.replace(note, velocity=self.defaults.velocity) if note.velocity is None else note
			for note in self.notes
		]

		session.add_track(channel, notes)
		return self


def _step_dict (step: typing.Any) -> typing.Any:

	if isinstance(step, diddle.schemas.ProgressionStep):
		return step.model_dump(exclude_none=True)

	return step
