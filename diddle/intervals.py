import typing

import diddle.constants
import diddle.errors


MODE_PATTERNS: typing.Dict[str, typing.List[int]] = {
	"ionian": [2, 2, 1, 2, 2, 2, 1],
	"dorian": [2, 1, 2, 2, 2, 1, 2],
	"phrygian": [1, 2, 2, 2, 1, 2, 2],
	"lydian": [2, 2, 2, 1, 2, 2, 1],
	"mixolydian": [2, 2, 1, 2, 2, 1, 2],
	"aeolian": [2, 1, 2, 2, 1, 2, 2],
	"locrian": [1, 2, 2, 1, 2, 2, 2],
}

ALL_PITCHES: typing.List[int] = list(range(diddle.constants.MIN_PITCH, diddle.constants.MAX_PITCH + 1))


def register_mode (name: str, pattern: typing.List[int]) -> None:

	"""
	Register a custom mode for use with ``notes_in_key()``, runs, fills and
	the harmonizer.

	Parameters:
		name: Mode name (used as ``mode=name``).
		pattern: Seven positive semitone steps from the root, summing to 12.

	Example:
		```python
		import diddle.intervals

		diddle.intervals.register_mode("harmonic_minor", [2, 1, 2, 2, 1, 3, 1])
		diddle.Diddle().run(57, 69, mode="harmonic_minor")
		```
	"""

	if len(pattern) != 7:
		raise diddle.errors.ConfigError(f"Mode '{name}' needs 7 steps, got {len(pattern)}")

	if any(step < 1 for step in pattern):
		raise diddle.errors.ConfigError(f"Mode '{name}' steps must be positive: {pattern}")

	if sum(pattern) != 12:
		raise diddle.errors.ConfigError(f"Mode '{name}' steps must sum to 12, got {sum(pattern)}")

	MODE_PATTERNS[name] = list(pattern)


def get_pattern (mode: str) -> typing.List[int]:

	"""
	Return a mode's interval pattern from the registry.
	"""

	if mode not in MODE_PATTERNS:
		raise diddle.errors.UnknownModeError(f"Unknown mode '{mode}'. Available: {sorted(MODE_PATTERNS)}")

	return list(MODE_PATTERNS[mode])


def scale_pitch_classes (tonic: int, mode: str = "ionian") -> typing.List[int]:

	"""
	Return the pitch classes (0–11) that belong to a tonic and mode.

	The mode pattern is walked forward from the tonic's pitch class to the top
	of the octave, then backward from the tonic while the class stays at or
	above zero, so the classes below the tonic are covered too.

	Parameters:
		tonic: Any MIDI pitch; only its pitch class matters.
		mode: A registered mode name.

	Returns:
		Sorted list of pitch classes in the scale.

	Example:
		```python
		scale_pitch_classes(4, "ionian")   # → [1, 3, 4, 6, 8, 9, 11] (E major)
		```
	"""

	pattern = get_pattern(mode)
	root = tonic % 12
	classes = [root]

	for step in pattern:
		classes.append(classes[-1] + step)

	# Scale tones below the tonic's own pitch class
	current = root
	for step in reversed(pattern):
		if current - step < 0:
			break
		current -= step
		classes.append(current)

	return sorted({pc for pc in classes if pc < 12})


def notes_in_key (tonic: int, mode: str = "ionian") -> typing.List[int]:

	"""
	Return every MIDI pitch in [0, 126] that belongs to a tonic and mode.

	Parameters:
		tonic: Any MIDI pitch; only its pitch class matters.
		mode: A registered mode name.

	Returns:
		Ascending list of pitches.

	Raises:
		UnknownModeError: If the mode is not registered.

	Example:
		```python
		notes_in_key(60, "ionian")[:8]  # → [0, 2, 4, 5, 7, 9, 11, 12]
		```
	"""

	pcs = set(scale_pitch_classes(tonic, mode))

	return [n for n in ALL_PITCHES if n % 12 in pcs]


def instances_of (
	pitches: typing.Iterable[int],
	min_pitch: int = diddle.constants.MIN_PITCH,
	max_pitch: int = diddle.constants.MAX_PITCH
) -> typing.List[int]:

	"""
	Return every octave instance of the given pitches' classes within
	``[min_pitch, max_pitch]`` (both inclusive).

	Used for both scale-degree and chord-tone octave expansion.

	Example:
		```python
		instances_of([60, 64, 67], min_pitch=48, max_pitch=60)  # → [48, 52, 55, 60]
		```
	"""

	pcs = {p % 12 for p in pitches}

	return [n for n in ALL_PITCHES if n % 12 in pcs and min_pitch <= n <= max_pitch]


def quantize_pitch (pitch: int, scale_pcs: typing.Sequence[int]) -> int:

	"""
	Snap a MIDI pitch to the nearest note in the given scale.

	Searches outward in semitone steps from the input pitch.  When two
	notes are equidistant (e.g. C# between C and D in C major), the
	upward direction is preferred.

	Parameters:
		pitch: MIDI note number to quantize.
		scale_pcs: Pitch classes accepted by the scale (0–11). Typically
		           the output of :func:`scale_pitch_classes`.

	Returns:
		A MIDI note number that lies within the scale.
	"""

	pc = pitch % 12

	if pc in scale_pcs:
		return pitch

	for offset in range(1, 7):
		if (pc + offset) % 12 in scale_pcs and pitch + offset <= diddle.constants.MAX_PITCH:
			return pitch + offset
		if (pc - offset) % 12 in scale_pcs and pitch - offset >= diddle.constants.MIN_PITCH:
			return pitch - offset

	return pitch
