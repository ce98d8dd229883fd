import dataclasses
import typing

import mido

import diddle.midi_utils
import diddle.note


@dataclasses.dataclass
class Track:

	"""
	One rendered voice: a MIDI channel and its notes.
	"""

	channel: int
	notes: typing.List[diddle.note.NoteEvent] = dataclasses.field(default_factory=list)


	def duration (self) -> int:

		"""Total ticks of the track."""

		return diddle.note.total_ticks(self.notes)


class Session:

	"""
	A composition session that owns the rendered tracks.

	Builders render into a session instead of a shared global file, so two
	pieces can be composed side by side without touching each other.

	Example:
		```python
		session = diddle.Session()

		diddle.Diddle().run(60, 72, duration=512, mode="ionian").render(session, channel=3)
		diddle.Diddle().run(48, 36, duration=512).render(session, channel=1)

		session.to_midi_file().save("tune.mid")
		```
	"""

	def __init__ (self) -> None:

		self.tracks: typing.List[Track] = []


	def add_track (self, channel: int, notes: typing.Iterable[diddle.note.NoteEvent]) -> Track:

		"""
		Add a copy of ``notes`` as a new track on ``channel``.
		"""

		track = Track(channel=channel, notes=diddle.note.copy_notes(notes))
		self.tracks.append(track)

		return track


	def duration (self) -> int:

		"""Length of the longest track in ticks."""

		return max((track.duration() for track in self.tracks), default=0)


	def to_midi_file (self) -> mido.MidiFile:

		"""Encode every track into a ``mido.MidiFile``."""

		return diddle.midi_utils.encode_tracks(self.tracks)
