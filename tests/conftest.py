import random
import typing

import pytest

import diddle.schemas


class FirstChoiceRandom (random.Random):

	"""Seeded RNG whose ``choice`` always returns the first candidate."""

	def choice (self, seq: typing.Sequence[typing.Any]) -> typing.Any:

		"""Return the first element instead of a random one."""

		return seq[0]


class FixedRandom (random.Random):

	"""Seeded RNG whose ``random`` always returns the same value."""

	def __init__ (self, value: float, seed: int = 0) -> None:

		"""Store the value returned by ``random()``."""

		super().__init__(seed)
		self.value = value

	def random (self) -> float:

		"""Return the stored value."""

		return self.value


@pytest.fixture
def first_choice () -> FirstChoiceRandom:

	"""An RNG that always picks the first candidate."""

	return FirstChoiceRandom(0)


@pytest.fixture
def c_f_progression () -> typing.List[typing.Dict[str, typing.Any]]:

	"""C major then F major, four ticks each."""

	return [
		{"chord": ["M", "C4"], "duration": 4},
		{"chord": ["M", "F4"], "duration": 4},
	]


def fill_options (**options: typing.Any) -> diddle.schemas.FillOptions:

	"""Validate fill options the way the builder does."""

	return diddle.schemas.validate(diddle.schemas.FillOptions, options)
