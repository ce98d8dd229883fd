import random

import pytest

import diddle.errors
import diddle.harmony
import diddle.intervals
import diddle.note
import diddle.runs


def test_harmony_candidates () -> None:

	"""Degrees 0, +2, +3, +4 and +5 above the melody note, in every octave of the register."""

	key = diddle.intervals.notes_in_key(60, "ionian")

	assert diddle.harmony.harmony_candidates(60, key, 60, 72) == [60, 64, 65, 67, 69, 72]
	assert diddle.harmony.harmony_candidates(62, key, 60, 72) == [62, 65, 67, 69, 71]


def test_sticky_harmony_holds (first_choice: random.Random) -> None:

	"""A harmony note that still fits the next melody note is held through it."""

	melody = [diddle.note.NoteEvent(pitch=60, duration=128), diddle.note.NoteEvent(pitch=64, duration=128)]
	harmony = diddle.harmony.harmonize(melody, first_choice, tonic=60, min_pitch=60, max_pitch=72)

	assert [(n.pitch, n.duration) for n in harmony] == [(60, 256)]


def test_harmony_moves_when_it_no_longer_fits (first_choice: random.Random) -> None:

	"""A new harmony note is picked when the held one is not a candidate."""

	melody = [diddle.note.NoteEvent(pitch=60, duration=128), diddle.note.NoteEvent(pitch=62, duration=128)]
	harmony = diddle.harmony.harmonize(melody, first_choice, tonic=60, min_pitch=60, max_pitch=72)

	assert [(n.pitch, n.duration) for n in harmony] == [(60, 128), (62, 128)]


def test_held_note_absorbs_delay (first_choice: random.Random) -> None:

	"""Holding through a delayed melody note covers its delay too."""

	melody = [diddle.note.NoteEvent(pitch=60, duration=128), diddle.note.NoteEvent(pitch=64, duration=64, delay=64)]
	harmony = diddle.harmony.harmonize(melody, first_choice, tonic=60, min_pitch=60, max_pitch=72)

	assert [(n.pitch, n.duration, n.delay) for n in harmony] == [(60, 256, 0)]


def test_out_of_key_melody_is_quantized (first_choice: random.Random) -> None:

	"""A chromatic melody note is harmonized as the nearest scale tone."""

	melody = [diddle.note.NoteEvent(pitch=61, duration=128)]
	harmony = diddle.harmony.harmonize(melody, first_choice, tonic=60, min_pitch=60, max_pitch=72)

	assert [n.pitch for n in harmony] == [62]


def test_harmonize_keeps_length_and_melody () -> None:

	"""The harmony lasts as long as the melody, which is left untouched."""

	for seed in range(10):
		melody = diddle.runs.run(60, 72, duration=1024, mode="dorian", tonic=62)
		before = diddle.note.copy_notes(melody)
		harmony = diddle.harmony.harmonize(melody, random.Random(seed), mode="dorian", tonic=62)

		assert melody == before
		assert diddle.note.total_ticks(harmony) == 1024
		assert all(38 <= n.pitch <= 86 for n in harmony)
		assert all(n.pitch % 12 in diddle.intervals.scale_pitch_classes(62, "dorian") for n in harmony)


def test_harmonize_empty_register () -> None:

	"""A register with no candidate raises PitchResolutionError."""

	melody = [diddle.note.NoteEvent(pitch=60, duration=128)]

	with pytest.raises(diddle.errors.PitchResolutionError):
		diddle.harmony.harmonize(melody, random.Random(0), min_pitch=61, max_pitch=61)


def test_harmonize_inverted_register () -> None:

	"""min_pitch above max_pitch is a configuration error."""

	melody = [diddle.note.NoteEvent(pitch=60, duration=128)]

	with pytest.raises(diddle.errors.ConfigError):
		diddle.harmony.harmonize(melody, random.Random(0), min_pitch=72, max_pitch=60)


def test_harmonize_empty_melody () -> None:

	"""No melody, no harmony."""

	assert diddle.harmony.harmonize([], random.Random(0)) == []
