import logging

import pytest

import diddle.constants.ticks
import diddle.errors
import diddle.note
import diddle.runs


def test_chromatic_run_ascending () -> None:

	"""Without a mode every semitone is included, both ends too."""

	assert diddle.runs.run_pitches(60, 64) == [60, 61, 62, 63, 64]


def test_chromatic_run_descending () -> None:

	"""A start above the end runs downward."""

	assert diddle.runs.run_pitches(64, 60) == [64, 63, 62, 61, 60]


def test_modal_run_descending () -> None:

	"""A modal run keeps only scale tones, tonic defaulting to the start pitch."""

	assert diddle.runs.run_pitches(12, 0, mode="ionian") == [12, 11, 9, 7, 5, 4, 2, 0]


def test_modal_run_with_tonic () -> None:

	"""An explicit tonic picks the scale; the ends need not be in it."""

	assert diddle.runs.run_pitches(12, 24, tonic=4, mode="ionian") == [13, 15, 16, 18, 20, 21, 23]


def test_run_default_resolution () -> None:

	"""Each step lasts one beat unless told otherwise."""

	notes = diddle.runs.run(60, 62)

	assert [(n.pitch, n.duration, n.delay) for n in notes] == [(60, 128, 0), (61, 128, 0), (62, 128, 0)]


def test_run_resolution () -> None:

	"""An explicit resolution sets every step."""

	notes = diddle.runs.run(60, 62, resolution=32)

	assert [n.duration for n in notes] == [32, 32, 32]


def test_run_duration () -> None:

	"""A duration is shared evenly between the steps."""

	notes = diddle.runs.run(60, 72, duration=diddle.constants.ticks.BAR, mode="ionian")

	assert [n.pitch for n in notes] == [60, 62, 64, 65, 67, 69, 71, 72]
	assert [n.duration for n in notes] == [diddle.constants.ticks.EIGHTH] * 8


def test_run_duration_remainder (caplog: pytest.LogCaptureFixture) -> None:

	"""Leftover ticks go to the last note so the run lasts exactly its duration."""

	with caplog.at_level(logging.WARNING, logger="diddle.runs"):
		notes = diddle.runs.run(60, 62, duration=11)

	assert [n.duration for n in notes] == [3, 3, 5]
	assert diddle.note.total_ticks(notes) == 11
	assert "not divisible" in caplog.text


def test_run_delay () -> None:

	"""The delay goes on the first note only."""

	notes = diddle.runs.run(60, 62, delay=10)

	assert [n.delay for n in notes] == [10, 0, 0]
	assert diddle.note.total_ticks(notes) == 3 * 128 + 10


def test_run_duration_too_short () -> None:

	"""A duration shorter than the number of steps is rejected."""

	with pytest.raises(diddle.errors.ConfigError):
		diddle.runs.run(60, 72, duration=5)


def test_run_without_scale_tones () -> None:

	"""A modal run with no scale tones between its ends is rejected."""

	with pytest.raises(diddle.errors.ConfigError):
		diddle.runs.run(61, 61, tonic=60, mode="ionian")


def test_run_unknown_mode () -> None:

	"""An unknown mode is a configuration error."""

	with pytest.raises(diddle.errors.UnknownModeError):
		diddle.runs.run(60, 72, mode="bebop")
