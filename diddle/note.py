import dataclasses
import typing


@dataclasses.dataclass
class NoteEvent:

	"""
	Represents a single timed note.

	``delay`` is silence before the note sounds; it never overlaps the
	previous note's ``duration``. Both are integer ticks (128 per beat).
	A ``velocity`` of ``None`` is written with the encoder's default.
	"""

	pitch: int
	duration: int
	delay: int = 0
	velocity: typing.Optional[int] = None


	@property
	def span (self) -> int:

		"""
		Total ticks this event occupies (delay + duration).
		"""

		return self.delay + self.duration


def total_ticks (notes: typing.Iterable[NoteEvent]) -> int:

	"""Sum of delay + duration over a sequence."""

	return sum(note.span for note in notes)


def copy_notes (notes: typing.Iterable[NoteEvent]) -> typing.List[NoteEvent]:

	"""Return field-by-field copies so no two sequences share an event."""

	return [dataclasses.replace(note) for note in notes]


def as_note (value: typing.Union[NoteEvent, typing.Dict[str, typing.Any]]) -> NoteEvent:

	"""
	Accept a ``NoteEvent`` or a mapping with ``pitch``/``duration``/``delay``/``velocity``.
	"""

	if isinstance(value, NoteEvent):
		return dataclasses.replace(value)

	return NoteEvent(
		pitch = value["pitch"],
		duration = value["duration"],
		delay = value.get("delay") or 0,
		velocity = value.get("velocity")
	)
