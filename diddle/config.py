import dataclasses
import logging
import os
import typing

import yaml

import diddle.constants
import diddle.constants.velocity
import diddle.errors


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Defaults:

	"""
	Fallback values used wherever a builder call leaves an option out.

	Example ``diddle.yaml``::

		defaults:
		  tonic: 62
		  mode: dorian
		  delta: chord
		  resolution: 64
	"""

	tonic: int = 60
	mode: str = "ionian"
	delta: str = "degree"
	resolution: int = diddle.constants.BEAT
	velocity: int = diddle.constants.velocity.DEFAULT_VELOCITY


	@classmethod
	def from_config (cls, config: typing.Mapping[str, typing.Any]) -> "Defaults":

		"""
		Build defaults from the ``defaults`` mapping of a loaded config.
		"""

		values = config.get("defaults") or {}
		known = {field.name for field in dataclasses.fields(cls)}
		unknown = sorted(set(values) - known)

		if unknown:
			raise diddle.errors.ConfigError(f"Unknown defaults: {unknown}. Available: {sorted(known)}")

		return cls(**values)


def load_config (config_path: str = 'diddle.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def load_defaults (config_path: str = 'diddle.yaml') -> Defaults:

	"""
	Load ``Defaults`` from a YAML file, falling back to the built-in values.
	"""

	return Defaults.from_config(load_config(config_path))
