"""Chord definitions and chord-symbol resolution.

This module is the chord-theory provider used by the fill engine: it turns a
chord specification into an ordered list of MIDI pitches whose first element
is the chord root.

Accepted chord specifications:
- A list of MIDI pitches, used as given (e.g. ``[60, 64, 67]``)
- A ``[quality, tonic]`` pair (e.g. ``["M", "C4"]``, ``["m7", "A3"]``)
- A chord symbol string (e.g. ``"C4"``, ``"Am7"``, ``"F#3dim"``)

Note names use **C4 = 60**. A name with no octave is placed in octave 4.

Module-level constants:
- `NOTE_NAME_TO_PC`: Maps note names (e.g., `"C"`, `"F#"`, `"Bb"`) to pitch classes (0-11)
- `PC_TO_NOTE_NAME`: Maps pitch classes to note names
- `CHORD_INTERVALS`: Maps chord quality names to interval lists (semitones from root)
- `QUALITY_ALIASES`: Maps chord symbol suffixes (e.g. `"m"`, `"maj7"`) to quality names
"""

import dataclasses
import re
import typing

import diddle.constants
import diddle.errors


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

CHORD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 4, 7],
	"minor": [0, 3, 7],
	"diminished": [0, 3, 6],
	"augmented": [0, 4, 8],
	"dominant_7th": [0, 4, 7, 10],
	"major_7th": [0, 4, 7, 11],
	"minor_7th": [0, 3, 7, 10],
	"half_diminished_7th": [0, 3, 6, 10],
	"sus2": [0, 2, 7],
	"sus4": [0, 5, 7],
	"power": [0, 7],
}

QUALITY_ALIASES: typing.Dict[str, str] = {
	"": "major",
	"M": "major",
	"maj": "major",
	"major": "major",
	"m": "minor",
	"min": "minor",
	"minor": "minor",
	"dim": "diminished",
	"°": "diminished",
	"aug": "augmented",
	"+": "augmented",
	"7": "dominant_7th",
	"dom7": "dominant_7th",
	"maj7": "major_7th",
	"M7": "major_7th",
	"m7": "minor_7th",
	"min7": "minor_7th",
	"m7b5": "half_diminished_7th",
	"ø": "half_diminished_7th",
	"sus2": "sus2",
	"sus4": "sus4",
	"5": "power",
}

DEFAULT_OCTAVE = 4

_NOTE_PATTERN = re.compile(r"^([A-G][#b]?)(-?\d)?$")
_SYMBOL_PATTERN = re.compile(r"^([A-G][#b]?)(-?\d)?(.*)$")


def note_name_to_midi (name: str) -> int:

	"""Convert a note name such as ``"C4"``, ``"F#3"`` or ``"Bb"`` to a MIDI pitch.

	Raises:
		ChordResolutionError: If the name cannot be read or falls outside 0–126.

	Example:
		```python
		note_name_to_midi("C4")   # → 60
		note_name_to_midi("A")    # → 69
		```
	"""

	match = _NOTE_PATTERN.match(name.strip())

	if match is None:
		raise diddle.errors.ChordResolutionError(f"Unknown note name: {name!r}. Expected e.g. 'C4', 'F#3', 'Bb'.")

	letter, octave = match.groups()

	return _to_midi(letter, int(octave) if octave is not None else DEFAULT_OCTAVE, name)


def _to_midi (letter: str, octave: int, source: str) -> int:

	if letter not in NOTE_NAME_TO_PC:
		raise diddle.errors.ChordResolutionError(f"Unknown note name in {source!r}: {letter!r}")

	pc = NOTE_NAME_TO_PC[letter]
	pitch = (octave + 1) * 12 + pc

	if not diddle.constants.MIN_PITCH <= pitch <= diddle.constants.MAX_PITCH:
		raise diddle.errors.ChordResolutionError(f"{source!r} resolves to pitch {pitch}, outside {diddle.constants.MIN_PITCH}-{diddle.constants.MAX_PITCH}")

	return pitch


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	Represents a chord as a root pitch and quality.
	"""

	root: int
	quality: str


	def intervals (self) -> typing.List[int]:

		"""
		Return the chord intervals for this chord quality.
		"""

		if self.quality not in CHORD_INTERVALS:
			raise diddle.errors.ChordResolutionError(f"Unknown chord quality: {self.quality}")

		return CHORD_INTERVALS[self.quality]


	def pitches (self) -> typing.List[int]:

		"""
		Return the chord's MIDI pitches in root position, root first.

		Example:
			```python
			Chord(root=60, quality="major").pitches()  # → [60, 64, 67]
			```
		"""

		pitches = [self.root + interval for interval in self.intervals()]

		if pitches[-1] > diddle.constants.MAX_PITCH:
			raise diddle.errors.ChordResolutionError(f"{self.name()} at root {self.root} reaches above pitch {diddle.constants.MAX_PITCH}")

		return pitches


	def name (self) -> str:

		"""
		Return a human-friendly chord name, e.g. ``"C4m7"``.
		"""

		suffix = {"major": "", "minor": "m", "diminished": "dim", "augmented": "+"}.get(self.quality, self.quality)

		return f"{PC_TO_NOTE_NAME[self.root % 12]}{self.root // 12 - 1}{suffix}"


def parse_quality (symbol: str) -> str:

	"""Return the quality name for a chord suffix such as ``"m7"`` or ``"M"``."""

	if symbol in QUALITY_ALIASES:
		return QUALITY_ALIASES[symbol]

	if symbol in CHORD_INTERVALS:
		return symbol

	raise diddle.errors.ChordResolutionError(f"Unknown chord quality: {symbol!r}. Available: {sorted(QUALITY_ALIASES)}")


def parse_symbol (symbol: str) -> Chord:

	"""Parse a chord symbol such as ``"C4"``, ``"Am7"`` or ``"F#3dim"``."""

	match = _SYMBOL_PATTERN.match(symbol.strip())

	if match is None:
		raise diddle.errors.ChordResolutionError(f"Cannot read chord symbol: {symbol!r}")

	letter, octave, suffix = match.groups()
	root = _to_midi(letter, int(octave) if octave is not None else DEFAULT_OCTAVE, symbol)

	return Chord(root=root, quality=parse_quality(suffix))


def chord_notes (spec: typing.Union[str, typing.Sequence[typing.Union[int, str]]]) -> typing.List[int]:

	"""Resolve a chord specification to MIDI pitches, root first.

	Parameters:
		spec: A list of MIDI pitches, a ``[quality, tonic]`` pair, or a chord
			symbol string.

	Returns:
		The chord's MIDI pitches. The first element is the chord root.

	Raises:
		ChordResolutionError: If the specification cannot be resolved.

	Example:
		```python
		chord_notes(["M", "C4"])     # → [60, 64, 67]
		chord_notes("Am")            # → [69, 72, 76]
		chord_notes([62, 65, 69])    # → [62, 65, 69]
		```
	"""

	if isinstance(spec, str):
		return parse_symbol(spec).pitches()

	items = list(spec)

	if not items:
		raise diddle.errors.ChordResolutionError("Chord specification is empty")

	if all(isinstance(item, int) and not isinstance(item, bool) for item in items):
		out_of_range = [p for p in items if not diddle.constants.MIN_PITCH <= p <= diddle.constants.MAX_PITCH]
		if out_of_range:
			raise diddle.errors.ChordResolutionError(f"Chord pitches out of range: {out_of_range}")
		return [int(item) for item in items]

	if len(items) == 2 and all(isinstance(item, str) for item in items):
		first, second = typing.cast(typing.List[str], items)

		# Either [quality, tonic] or [tonic, quality].
		if _NOTE_PATTERN.match(second.strip()):
			return Chord(root=note_name_to_midi(second), quality=parse_quality(first)).pitches()

		if _NOTE_PATTERN.match(first.strip()):
			return Chord(root=note_name_to_midi(first), quality=parse_quality(second)).pitches()

	raise diddle.errors.ChordResolutionError(f"Cannot resolve chord specification: {spec!r}")
