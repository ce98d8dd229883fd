import random
import typing

import diddle.errors

T = typing.TypeVar("T")


def random_int (low: int, high: int, rng: random.Random) -> int:

	"""Draw a random integer from ``[low, high]`` (both inclusive).

	The bounds may be given in either order.
	"""

	if low > high:
		low, high = high, low

	return rng.randint(low, high)


def partition_uniform (n: int, total: int, rng: random.Random) -> typing.List[int]:

	"""Split ``total`` into ``n`` random non-negative integers that sum to ``total``.

	Each part is seeded with a random share of roughly ``total / n``, every
	part is then raised by the integer share of the shortfall, and the units
	still missing are handed out one at a time to randomly chosen parts. The
	result is approximately uniform, never adversarially exact.

	Parameters:
		n: Number of parts (at least 1).
		total: Sum of the parts (at least 0).
		rng: Random number generator instance

	Example:
		```python
		parts = diddle.sequence_utils.partition_uniform(4, 16, random.Random(1))
		sum(parts)  # → 16
		```
	"""

	if n < 1:
		raise diddle.errors.ConfigError(f"Cannot partition into {n} parts")

	if total < 0:
		raise diddle.errors.ConfigError(f"Cannot partition a negative total ({total})")

	parts = [round(rng.random() * total / n) for _ in range(n)]
	augment = (total - sum(parts)) // n

	if augment > 0:
		parts = [part + augment for part in parts]

	remaining = total - sum(parts)

	while remaining > 0:
		parts[rng.randrange(n)] += 1
		remaining -= 1

	# Rounding every seed upward can overshoot by a few units.
	while remaining < 0:
		candidates = [i for i, part in enumerate(parts) if part > 0]
		parts[rng.choice(candidates)] -= 1
		remaining += 1

	return parts


def partition_backloaded (n: int, total: int, rng: random.Random) -> typing.List[int]:

	"""Split ``total`` into ``n`` random positive integers, cramming the bulk in late.

	The first ``n - 1`` parts are each drawn from ``[1, budget - slots]``,
	where ``budget`` is what is left of the total and ``slots`` is the number
	of parts still to come, so a valid solution always remains. The final part
	takes the exact remainder.

	Parameters:
		n: Number of parts (at least 1).
		total: Sum of the parts (at least ``n``).
		rng: Random number generator instance
	"""

	if n < 1:
		raise diddle.errors.ConfigError(f"Cannot partition into {n} parts")

	if total < n:
		raise diddle.errors.ConfigError(f"Cannot split {total} into {n} positive parts")

	parts: typing.List[int] = []

	for i in range(1, n):
		budget = total - sum(parts)
		parts.append(rng.randint(1, budget - (n - i)))

	parts.append(total - sum(parts))

	return parts


def choose (
	n: int,
	pool: typing.Sequence[T],
	rng: random.Random,
	min_value: typing.Optional[T] = None,
	max_value: typing.Optional[T] = None
) -> typing.List[T]:

	"""Pick up to ``n`` distinct items from a pool, optionally bounded.

	Items outside ``[min_value, max_value]`` are discarded before choosing.

	Parameters:
		n: Number of items to return (fewer if the bounded pool is smaller)
		pool: Items to choose from
		rng: Random number generator instance
		min_value: Optional inclusive lower bound
		max_value: Optional inclusive upper bound

	Example:
		```python
		# Three different tones from the middle of C major
		tones = diddle.sequence_utils.choose(3, notes_in_key(60, "ionian"), rng, min_value=55, max_value=79)
		```
	"""

	candidates = [
		item for item in pool
		if (min_value is None or item >= min_value) and (max_value is None or item <= max_value)
	]

	if n <= 0 or not candidates:
		return []

	return rng.sample(candidates, min(n, len(candidates)))
