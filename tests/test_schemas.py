import pytest

import diddle.errors
import diddle.schemas


def test_validate_drops_none () -> None:

	"""None means 'not given', so schema defaults apply."""

	options = diddle.schemas.validate(diddle.schemas.RunOptions, {"start": 60, "end": 72, "resolution": None, "mode": "dorian"})

	assert options.resolution == 128
	assert options.mode == "dorian"
	assert options.delay == 0


def test_validate_reports_details () -> None:

	"""Errors carry the validator's message and structured details."""

	with pytest.raises(diddle.errors.ConfigError) as info:
		diddle.schemas.validate(diddle.schemas.FillOptions, {"progression": [{"chord": 9, "duration": 4}]})

	assert info.value.details
	assert info.value.details[0]["loc"][:3] == ("progression", 0, "chord")
	assert "progression" in str(info.value)


def test_unknown_option_rejected () -> None:

	"""Options not in the schema are errors, not silently ignored."""

	with pytest.raises(diddle.errors.ConfigError):
		diddle.schemas.validate(diddle.schemas.SampleOptions, {"resolution": 64, "swing": 0.5})


@pytest.mark.parametrize("options", [
	{"pitch": 127, "duration": 10},
	{"pitch": -1, "duration": 10},
	{"pitch": 60, "duration": "10"},
	{"pitch": 60, "duration": 10, "delay": -5},
	{"pitch": 60, "duration": 10, "velocity": 128},
	{"pitch": 60.0, "duration": 10},
])
def test_note_schema_rejects (options: dict) -> None:

	"""Pitches, ticks and velocities are strict integers within range."""

	with pytest.raises(diddle.errors.ConfigError):
		diddle.schemas.validate(diddle.schemas.NoteSchema, options)


def test_progression_step_forms () -> None:

	"""Chords may be pitch lists, pairs or symbols; patterns lists or strings."""

	options = diddle.schemas.validate(diddle.schemas.FillOptions, {"progression": [
		{"chord": [60, 64, 67], "duration": 4},
		{"chord": ["m", "A3"], "duration": 4, "pattern": "0 [1 2]"},
		{"chord": "G4", "duration": 4, "pattern": [0, "_"], "vox": True},
	]})

	assert [step.vox for step in options.progression] == [False, False, True]
	assert options.progression[1].pattern == "0 [1 2]"


@pytest.mark.parametrize("options", [
	{"min_notes": 3, "max_notes": 2},
	{"notes": []},
	{"notes": "everything"},
	{"delta": "diagonal"},
	{"resolution": 0},
	{"on_vox": 200},
])
def test_fill_options_rejects (options: dict) -> None:

	"""Inconsistent or out-of-range fill options are rejected."""

	with pytest.raises(diddle.errors.ConfigError):
		diddle.schemas.validate(diddle.schemas.FillOptions, options)


def test_velocity_options_range () -> None:

	"""min must not exceed max."""

	with pytest.raises(diddle.errors.ConfigError, match="must be <="):
		diddle.schemas.validate(diddle.schemas.VelocityOptions, {"min": 90, "max": 10})


def test_config_error_is_value_error () -> None:

	"""Validation failures can be caught as ValueError."""

	with pytest.raises(ValueError):
		diddle.schemas.validate(diddle.schemas.ReformOptions, {"delay": "sometimes"})
