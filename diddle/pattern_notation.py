import typing

import diddle.errors

REST = "-"
TIE = "_"

Token = typing.Union[int, str, typing.List[typing.Any]]
Pattern = typing.List[Token]


def parse (notation: str) -> Pattern:

	"""
	Parse a bracket-notation string into a pattern tree.

	**Syntax:**
	- `0 2 -1`: Integer deltas separated by spaces share the enclosing duration.
	- `[a b]`: Groups items into a single subdivided slot.
	- `-`: A rest; its slot is added to the delay of the next note.
	- `_`: A tie; its slot extends the previous note.

	Parameters:
		notation: The string to parse.

	Returns:
		A nested list of ints, ``"-"`` and ``"_"``.

	Example:
		```python
		parse("0 [1 -] _ 2")   # → [0, [1, "-"], "_", 2]
		parse("-1 [- 4]")      # → [-1, ["-", 4]]
		```
	"""

	text = notation.replace("[", " [ ").replace("]", " ] ")
	raw_tokens = text.split()

	stack: typing.List[typing.List[typing.Any]] = [[]]

	for token in raw_tokens:

		if token == "[":
			new_group: typing.List[typing.Any] = []
			stack[-1].append(new_group)
			stack.append(new_group)

		elif token == "]":
			if len(stack) <= 1:
				raise diddle.errors.PatternError(f"Unexpected closing bracket in {notation!r}")
			stack.pop()

		elif token in (REST, TIE):
			stack[-1].append(token)

		else:
			try:
				stack[-1].append(int(token))
			except ValueError:
				raise diddle.errors.PatternError(f"Invalid pattern token {token!r} in {notation!r}") from None

	if len(stack) > 1:
		raise diddle.errors.PatternError(f"Missing closing bracket in {notation!r}")

	return validate(stack[0])


def validate (pattern: typing.Sequence[typing.Any]) -> Pattern:

	"""
	Check a pattern tree and return it as nested lists.

	Raises ``PatternError`` for an empty level anywhere in the tree or a token
	that is not an int, ``"-"``, ``"_"`` or a nested sequence. Strings are
	parsed as bracket notation first.
	"""

	if isinstance(pattern, str):
		return parse(pattern)

	result: Pattern = []

	for token in pattern:

		if isinstance(token, bool):
			raise diddle.errors.PatternError(f"Invalid pattern token {token!r}")

		if isinstance(token, int):
			result.append(token)

		elif token in (REST, TIE):
			result.append(token)

		elif isinstance(token, (list, tuple)):
			result.append(validate(token))

		else:
			raise diddle.errors.PatternError(f"Invalid pattern token {token!r}")

	if not result:
		raise diddle.errors.PatternError("Pattern levels cannot be empty")

	return result
