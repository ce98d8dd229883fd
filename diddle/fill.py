"""Pattern compiler: fills a span of time with notes.

A pattern is a tree of tokens that share a duration budget evenly:

- an int is a *delta*, turned into a pitch by the active delta-mode,
- ``"-"`` is a rest, added to the delay of the next note,
- ``"_"`` is a tie, extending the previous note,
- a nested list subdivides its own slot among its children.

``[0, [1, 2], "-"]`` over 384 ticks gives ``0`` 128 ticks, ``1`` and ``2``
64 ticks each, and leaves a 128-tick rest before whatever note comes next.

Delta-modes:

- ``absolute`` - the delta is the pitch itself.
- ``chromatic`` - semitones from the chord root.
- ``chord`` - steps through every octave instance of the chord's tones.
- ``degree`` - steps through every octave instance of the scale.

With a progression, every step fills its own duration with its own chord.
Without one the fill duration is filled with random notes, and any pattern
is ignored; to run a pattern around the tonic, pass a one-step progression
whose chord is the tonic alone.

Durations are integer ticks. A level of ``k`` children sharing ``D`` ticks gives
each child ``D // k`` and adds the remainder to the last child, so every
level adds up to its budget exactly.
"""

import dataclasses
import logging
import random
import typing

import diddle.chords
import diddle.constants
import diddle.errors
import diddle.intervals
import diddle.note
import diddle.pattern_notation
import diddle.schemas
import diddle.sequence_utils


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class HarmonicContext:

	"""
	Everything a delta needs to become a pitch.
	"""

	root: int
	chord_tones: typing.List[int]
	scale: typing.List[int]
	delta: str


	@classmethod
	def from_chord (cls, chord: typing.List[int], scale: typing.List[int], delta: str) -> "HarmonicContext":

		"""
		Build a context from resolved chord pitches (root first).
		"""

		return cls(
			root = chord[0],
			chord_tones = diddle.intervals.instances_of(chord),
			scale = scale,
			delta = delta
		)


	def resolve (self, value: int) -> int:

		"""
		Turn a pattern delta into a MIDI pitch.
		"""

		if self.delta == "absolute":
			pitch = value

		elif self.delta == "chromatic":
			pitch = self.root + value

		elif self.delta == "chord":
			pitch = self._offset(self.chord_tones, value, "chord tone")

		elif self.delta == "degree":
			if self.root not in self.scale:
				raise diddle.errors.PitchResolutionError(f"Chord root {self.root} is not in the scale, cannot step by degree")
			pitch = self._offset(self.scale, value, "scale degree")

		else:
			raise diddle.errors.ConfigError(f"Unknown delta-mode: {self.delta!r}")

		if not diddle.constants.MIN_PITCH <= pitch <= diddle.constants.MAX_PITCH:
			raise diddle.errors.PitchResolutionError(f"Delta {value} resolves to pitch {pitch}, outside {diddle.constants.MIN_PITCH}-{diddle.constants.MAX_PITCH}")

		return pitch


	def _offset (self, pitches: typing.List[int], value: int, label: str) -> int:

		index = pitches.index(self.root) + value

		if not 0 <= index < len(pitches):
			raise diddle.errors.PitchResolutionError(f"{label.capitalize()} offset {value} from root {self.root} is out of range")

		return pitches[index]


@dataclasses.dataclass
class FillState:

	"""
	Accumulator threaded through the recursion.

	``pending_delay`` collects rests until the next note is emitted, including
	across nested groups and progression steps. ``velocity`` is stamped on
	every note emitted while it is set.
	"""

	notes: typing.List[diddle.note.NoteEvent] = dataclasses.field(default_factory=list)
	pending_delay: int = 0
	velocity: typing.Optional[int] = None


	def emit (self, pitch: int, duration: int) -> None:

		self.notes.append(diddle.note.NoteEvent(pitch=pitch, duration=duration, delay=self.pending_delay, velocity=self.velocity))
		self.pending_delay = 0


	def hold (self, ticks: int) -> None:

		# A tie after a rest (or before any note) lengthens the silence.
		if self.pending_delay or not self.notes:
			self.pending_delay += ticks
		else:
			self.notes[-1].duration += ticks


def split_budget (budget: int, count: int) -> typing.List[int]:

	"""Divide ``budget`` ticks into ``count`` integer slots, remainder on the last.

	Example:
		```python
		split_budget(128, 3)   # → [42, 42, 44]
		```
	"""

	if count < 1:
		raise diddle.errors.PatternError("Pattern levels cannot be empty")

	if budget < count:
		raise diddle.errors.PatternError(f"Cannot subdivide {budget} ticks into {count} slots")

	share = budget // count
	slots = [share] * count
	slots[-1] += budget - share * count

	return slots


def compile_pattern (
	pattern: diddle.pattern_notation.Pattern,
	budget: int,
	context: HarmonicContext,
	state: FillState
) -> FillState:

	"""Expand a pattern tree over ``budget`` ticks into ``state.notes``.

	Parameters:
		pattern: A validated pattern (see ``diddle.pattern_notation.validate``).
		budget: Ticks to fill.
		context: Chord and scale used to resolve deltas.
		state: Accumulator; notes are appended and pending delay carried.

	Every level needs at least one tick per child: a list of ``k`` tokens
	sharing a slot shorter than ``k`` ticks cannot be subdivided.

	Returns:
		The same ``state``.

	Raises:
		PatternError: If some level has more children than ticks to share,
			e.g. ``[0, [1, 2, 3]]`` over 4 ticks leaves 2 ticks for 3 children.
	"""

	for token, slot in zip(pattern, split_budget(budget, len(pattern))):

		if isinstance(token, list):
			compile_pattern(token, slot, context, state)

		elif token == diddle.pattern_notation.TIE:
			state.hold(slot)

		elif token == diddle.pattern_notation.REST:
			state.pending_delay += slot

		else:
			state.emit(context.resolve(token), slot)

	return state


def random_notes (
	duration: int,
	resolution: int,
	candidates: typing.Sequence[int],
	rng: random.Random,
	min_notes: int = 1,
	max_notes: typing.Optional[int] = None,
	velocity: typing.Optional[int] = None
) -> typing.List[diddle.note.NoteEvent]:

	"""Fill ``duration`` ticks with randomly placed notes from ``candidates``.

	The note count is drawn from ``[min_notes, max_notes]`` (``max_notes``
	defaults to the number of ``resolution`` units in the span), and the units
	are shared among the notes with ``partition_uniform``. Notes that draw no
	units are dropped. A span that is not a whole number of units gives the
	leftover ticks to the last note.
	"""

	chunks = duration // resolution

	if chunks < 1:
		raise diddle.errors.ConfigError(f"Duration {duration} is shorter than the resolution {resolution}")

	if not candidates:
		raise diddle.errors.PitchResolutionError("No candidate pitches to fill with")

	upper = max_notes if max_notes is not None else chunks
	count = diddle.sequence_utils.random_int(min_notes, max(min_notes, upper), rng)
	parts = diddle.sequence_utils.partition_uniform(count, chunks, rng)

	notes = [
		diddle.note.NoteEvent(pitch=rng.choice(candidates), duration=part * resolution, velocity=velocity)
		for part in parts
		if part
	]

	remainder = duration - chunks * resolution

	if remainder:
		logger.warning("fill(): duration %d is not divisible by resolution %d - adding %d ticks to the last note", duration, resolution, remainder)
		notes[-1].duration += remainder

	return notes


def _candidates (options: diddle.schemas.FillOptions, scale: typing.List[int], chord: typing.Optional[typing.List[int]]) -> typing.List[int]:

	if isinstance(options.notes, list):
		return list(options.notes)

	if options.notes == "scale":
		return scale

	if options.notes == "chord":
		if chord is None:
			raise diddle.errors.ConfigError("notes='chord' needs a progression to take chords from")
		return diddle.intervals.instances_of(chord)

	return list(diddle.intervals.ALL_PITCHES)


def _append_random (state: FillState, notes: typing.List[diddle.note.NoteEvent]) -> None:

	if notes:
		notes[0].delay += state.pending_delay
		state.pending_delay = 0

	state.notes.extend(notes)


def fill (options: diddle.schemas.FillOptions, rng: random.Random, pending_delay: int = 0) -> FillState:

	"""Generate notes for a validated set of fill options.

	Parameters:
		options: Validated ``FillOptions``.
		rng: Random number generator instance (random fills only).
		pending_delay: Silence carried in from an earlier call; it lands on
			the first note produced here.

	Returns:
		A ``FillState`` holding the new notes and any rest left pending at
		the end (a trailing ``"-"``), which the caller carries forward.

	Example:
		```python
		options = diddle.schemas.validate(diddle.schemas.FillOptions, {
			"pattern": [0, 1],
			"progression": [
				{"chord": ["M", "C4"], "duration": 4},
				{"chord": ["M", "F4"], "duration": 4},
			],
		})
		[n.pitch for n in fill(options, random.Random()).notes]   # → [60, 62, 65, 67]
		```
	"""

	scale = diddle.intervals.notes_in_key(options.tonic, options.mode)
	pattern = diddle.pattern_notation.validate(options.pattern) if options.pattern is not None else None
	state = FillState(pending_delay=pending_delay)

	if options.progression:

		# Resolve every step before generating anything.
		steps = [
			(
				step,
				diddle.chords.chord_notes(step.chord),
				diddle.pattern_notation.validate(step.pattern) if step.pattern is not None else pattern
			)
			for step in options.progression
		]

		logger.debug("fill(): %d progression steps, delta=%s", len(steps), options.delta)

		for step, chord, step_pattern in steps:

			state.velocity = options.on_vox if step.vox else None

			if step_pattern is None:
				_append_random(state, random_notes(
					duration = step.duration,
					resolution = min(options.resolution, step.duration),
					candidates = _candidates(options, scale, chord),
					rng = rng,
					min_notes = options.min_notes,
					max_notes = options.max_notes,
					velocity = state.velocity
				))
				continue

			compile_pattern(step_pattern, step.duration, HarmonicContext.from_chord(chord, scale, options.delta), state)

		state.velocity = None
		return state

	if pattern is not None:
		logger.warning("fill(): a pattern needs a progression to follow - filling %d ticks randomly instead", options.duration)

	_append_random(state, random_notes(
		duration = options.duration,
		resolution = options.resolution,
		candidates = _candidates(options, scale, None),
		rng = rng,
		min_notes = options.min_notes,
		max_notes = options.max_notes
	))

	return state
