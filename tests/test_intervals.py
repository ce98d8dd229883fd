import pytest

import diddle.errors
import diddle.intervals


def test_mode_patterns_are_diatonic () -> None:

	"""Every built-in mode has seven positive steps that span one octave."""

	assert len(diddle.intervals.MODE_PATTERNS) >= 7

	for name, pattern in diddle.intervals.MODE_PATTERNS.items():
		assert len(pattern) == 7, name
		assert sum(pattern) == 12, name
		assert all(step > 0 for step in pattern), name


def test_scale_pitch_classes_c_major () -> None:

	"""C ionian covers the white keys."""

	assert diddle.intervals.scale_pitch_classes(60, "ionian") == [0, 2, 4, 5, 7, 9, 11]


def test_scale_pitch_classes_below_tonic () -> None:

	"""Classes below the tonic's own class are found by walking backward."""

	# E major: C# and D# lie below E within the octave.
	assert diddle.intervals.scale_pitch_classes(4, "ionian") == [1, 3, 4, 6, 8, 9, 11]


def test_scale_pitch_classes_a_aeolian () -> None:

	"""A aeolian has the same classes as C ionian."""

	assert diddle.intervals.scale_pitch_classes(57, "aeolian") == [0, 2, 4, 5, 7, 9, 11]


def test_notes_in_key_range () -> None:

	"""Pitches run from the bottom of MIDI to the highest scale tone at or below 126, ascending."""

	notes = diddle.intervals.notes_in_key(60, "ionian")

	assert notes[:8] == [0, 2, 4, 5, 7, 9, 11, 12]
	assert notes[-1] == 125
	assert diddle.intervals.notes_in_key(67, "ionian")[-1] == 126
	assert notes == sorted(notes)
	assert all(n % 12 in {0, 2, 4, 5, 7, 9, 11} for n in notes)


def test_notes_in_key_ignores_octave_of_tonic () -> None:

	"""Only the tonic's pitch class matters."""

	assert diddle.intervals.notes_in_key(2, "dorian") == diddle.intervals.notes_in_key(74, "dorian")


def test_notes_in_key_unknown_mode () -> None:

	"""An unregistered mode raises UnknownModeError, which is a ConfigError."""

	with pytest.raises(diddle.errors.UnknownModeError):
		diddle.intervals.notes_in_key(60, "bebop")

	with pytest.raises(diddle.errors.ConfigError):
		diddle.intervals.notes_in_key(60, "bebop")


def test_instances_of_full_range () -> None:

	"""Without bounds every octave of every class is returned."""

	instances = diddle.intervals.instances_of([60, 64, 67])

	assert instances[:3] == [0, 4, 7]
	assert 60 in instances and 64 in instances and 67 in instances
	assert max(instances) <= 126


def test_instances_of_bounds_inclusive () -> None:

	"""Both bounds are inclusive."""

	assert diddle.intervals.instances_of([0, 4, 7], min_pitch=48, max_pitch=60) == [48, 52, 55, 60]


def test_quantize_pitch () -> None:

	"""Out-of-scale pitches snap to the nearest scale tone, upward on ties."""

	scale = diddle.intervals.scale_pitch_classes(0, "ionian")

	assert diddle.intervals.quantize_pitch(60, scale) == 60
	assert diddle.intervals.quantize_pitch(61, scale) == 62
	assert diddle.intervals.quantize_pitch(66, scale) == 67


def test_register_mode () -> None:

	"""A registered mode can be used like a built-in one."""

	diddle.intervals.register_mode("test_harmonic_minor", [2, 1, 2, 2, 1, 3, 1])

	try:
		assert diddle.intervals.scale_pitch_classes(9, "test_harmonic_minor") == [0, 2, 4, 5, 8, 9, 11]
	finally:
		del diddle.intervals.MODE_PATTERNS["test_harmonic_minor"]


@pytest.mark.parametrize("pattern", [
	[2, 2, 1, 2, 2, 2],
	[2, 2, 1, 2, 2, 2, 2],
	[0, 2, 3, 2, 2, 2, 1],
])
def test_register_mode_rejects_bad_patterns (pattern: list) -> None:

	"""Patterns must have seven positive steps that sum to 12."""

	with pytest.raises(diddle.errors.ConfigError):
		diddle.intervals.register_mode("broken", pattern)
