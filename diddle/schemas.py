"""
Pydantic schemas for option validation.

Every public generator and transform validates its options here before it
touches a sequence, so a bad call never leaves a half-edited sequence behind.
Validator failures are surfaced verbatim: the ``ConfigError`` message is the
validator's own text and ``details`` is its structured error list.

Validation includes:
- MIDI pitch ranges (0-126)
- Velocity values (0-127)
- Tick durations, delays and resolutions (integers, no floats or strings)
- Delta-mode and note-pool enumerations
- Progression steps (chord spec, positive duration, optional pattern)
"""

import typing

import pydantic

import diddle.constants
import diddle.constants.velocity
import diddle.errors


Model = typing.TypeVar("Model", bound=pydantic.BaseModel)

MidiPitch = typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=diddle.constants.MIN_PITCH, le=diddle.constants.MAX_PITCH)]
Velocity = typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=diddle.constants.velocity.MIN_VELOCITY, le=diddle.constants.velocity.MAX_VELOCITY)]
Ticks = typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=0)]
Resolution = typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=1)]

DeltaMode = typing.Literal["absolute", "chromatic", "degree", "chord"]
NotePool = typing.Literal["all", "chord", "scale"]
PatternSpec = typing.Union[pydantic.StrictStr, typing.List[typing.Any]]
ChordSpec = typing.Union[typing.List[MidiPitch], typing.List[pydantic.StrictStr], pydantic.StrictStr]


class _Options (pydantic.BaseModel):

	model_config = pydantic.ConfigDict(extra="forbid")


class NoteSchema (_Options):

	"""Validated note event."""

	pitch: MidiPitch
	duration: Ticks
	delay: Ticks = 0
	velocity: typing.Optional[Velocity] = None


class ProgressionStep (_Options):

	"""One harmonic region: a chord held for ``duration`` ticks.

	``pattern`` overrides the fill pattern for this step only. ``vox`` marks a
	vocal section, whose notes get the fill's ``on_vox`` velocity.
	"""

	chord: ChordSpec
	duration: typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=1)]
	pattern: typing.Optional[PatternSpec] = None
	vox: pydantic.StrictBool = False


class DiddleOptions (_Options):

	notes: typing.Optional[typing.List[NoteSchema]] = None
	progression: typing.Optional[typing.List[ProgressionStep]] = None


class RunOptions (_Options):

	start: MidiPitch
	end: MidiPitch
	duration: typing.Optional[typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=1)]] = None
	resolution: Resolution = diddle.constants.BEAT
	tonic: typing.Optional[MidiPitch] = None
	mode: typing.Optional[pydantic.StrictStr] = None
	delay: Ticks = 0


class FillOptions (_Options):

	tonic: MidiPitch = 60
	mode: pydantic.StrictStr = "ionian"
	delta: DeltaMode = "degree"
	resolution: Resolution = diddle.constants.BEAT
	duration: Ticks = diddle.constants.BEAT
	min_notes: typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=1)] = 1
	max_notes: typing.Optional[typing.Annotated[pydantic.StrictInt, pydantic.Field(ge=1)]] = None
	notes: typing.Union[typing.List[MidiPitch], NotePool] = "all"
	on_vox: Velocity = diddle.constants.velocity.DEFAULT_VOX_VELOCITY
	pattern: typing.Optional[PatternSpec] = None
	progression: typing.Optional[typing.List[ProgressionStep]] = None

	@pydantic.model_validator(mode="after")
	def check_note_counts (self) -> "FillOptions":

		"""A fixed upper note count must not be below the lower one."""

		if self.max_notes is not None and self.max_notes < self.min_notes:
			raise ValueError(f"max_notes ({self.max_notes}) must be >= min_notes ({self.min_notes})")

		if isinstance(self.notes, list) and not self.notes:
			raise ValueError("notes list cannot be empty")

		return self


class ReformOptions (_Options):

	resolution: Resolution = diddle.constants.BEAT
	delay: typing.Optional[typing.Literal["random"]] = None


class SampleOptions (_Options):

	resolution: Resolution


class VelocityOptions (_Options):

	level: typing.Optional[Velocity] = None
	min: Velocity = diddle.constants.velocity.MIN_VELOCITY
	max: Velocity = diddle.constants.velocity.MAX_VELOCITY
	random: pydantic.StrictBool = False

	@pydantic.model_validator(mode="after")
	def check_range (self) -> "VelocityOptions":

		if self.min > self.max:
			raise ValueError(f"min ({self.min}) must be <= max ({self.max})")

		return self


class HarmonizeOptions (_Options):

	mode: pydantic.StrictStr = "ionian"
	tonic: MidiPitch = 60
	min_pitch: typing.Optional[MidiPitch] = None
	max_pitch: typing.Optional[MidiPitch] = None


def validate (model: typing.Type[Model], options: typing.Mapping[str, typing.Any]) -> Model:

	"""Validate an options mapping against a schema.

	Keys whose value is ``None`` are treated as omitted, so callers can pass
	their keyword arguments straight through.

	Raises:
		ConfigError: Carrying the validator's message and ``details`` list.

	Example:
		```python
		options = validate(RunOptions, {"start": 60, "end": 72, "mode": "dorian"})
		options.resolution   # → 128
		```
	"""

	given = {key: value for key, value in options.items() if value is not None}

	try:
		return model.model_validate(given)
	except pydantic.ValidationError as e:
		raise diddle.errors.ConfigError(str(e), details=e.errors()) from e
