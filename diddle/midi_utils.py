import logging
import typing

import mido

import diddle.constants
import diddle.constants.velocity
import diddle.errors
import diddle.note

if typing.TYPE_CHECKING:
	import diddle.session

logger = logging.getLogger(__name__)

MAX_CHANNEL = 15


def encode_notes (notes: typing.Iterable[diddle.note.NoteEvent], channel: int) -> mido.MidiTrack:

	"""
	Encode one voice as a MIDI track.

	Each note becomes a ``note_on`` after ``delay`` ticks and a ``note_off``
	after ``duration`` ticks. Notes with no velocity use ``DEFAULT_VELOCITY``.
	"""

	if not 0 <= channel <= MAX_CHANNEL:
		raise diddle.errors.ConfigError(f"MIDI channel must be 0-{MAX_CHANNEL}, got {channel}")

	track = mido.MidiTrack()

	for note in notes:

		if not diddle.constants.MIN_PITCH <= note.pitch <= diddle.constants.MAX_PITCH:
			raise diddle.errors.PitchResolutionError(f"Cannot encode pitch {note.pitch}")

		velocity = diddle.constants.velocity.DEFAULT_VELOCITY if note.velocity is None else note.velocity

		track.append(mido.Message('note_on', channel=channel, note=note.pitch, velocity=velocity, time=note.delay))
		track.append(mido.Message('note_off', channel=channel, note=note.pitch, velocity=0, time=note.duration))

	track.append(mido.MetaMessage('end_of_track', time=0))

	return track


def encode_tracks (tracks: typing.Iterable["diddle.session.Track"], ticks_per_beat: int = diddle.constants.BEAT) -> mido.MidiFile:

	"""
	Encode tracks into a type 1 MIDI file (one MIDI track per track).

	The file is built in memory; call ``.save(filename)`` on the result to
	write it.
	"""

	mid = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)

	for track in tracks:
		mid.tracks.append(encode_notes(track.notes, track.channel))

	logger.info("Encoded %d tracks at %d ticks per beat", len(mid.tracks), ticks_per_beat)

	return mid
