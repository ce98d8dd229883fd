import diddle.note


def test_span_and_total () -> None:

	"""A note spans its delay plus its duration."""

	notes = [diddle.note.NoteEvent(pitch=60, duration=100, delay=28), diddle.note.NoteEvent(pitch=62, duration=128)]

	assert notes[0].span == 128
	assert diddle.note.total_ticks(notes) == 256
	assert diddle.note.total_ticks([]) == 0


def test_as_note_from_mapping () -> None:

	"""Mappings become notes, with missing delay and velocity defaulted."""

	note = diddle.note.as_note({"pitch": 64, "duration": 32})

	assert note == diddle.note.NoteEvent(pitch=64, duration=32, delay=0, velocity=None)


def test_as_note_copies () -> None:

	"""An existing note is copied rather than shared."""

	original = diddle.note.NoteEvent(pitch=64, duration=32)
	copied = diddle.note.as_note(original)
	copied.pitch = 65

	assert original.pitch == 64
