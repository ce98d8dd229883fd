"""Exceptions raised by diddle.

Every error is raised synchronously, before the sequence being edited is
touched. All of them are also ``ValueError`` subclasses.
"""

import typing


class DiddleError (Exception):
	pass


class ConfigError (DiddleError, ValueError):

	"""
	Malformed options, an unknown mode or an unknown delta-mode.

	When raised from schema validation, ``details`` holds the validator's
	structured error list unchanged.
	"""

	def __init__ (self, message: str, details: typing.Optional[typing.List[typing.Dict[str, typing.Any]]] = None) -> None:

		super().__init__(message)
		self.details: typing.List[typing.Dict[str, typing.Any]] = details or []


class UnknownModeError (ConfigError):
	pass


class PatternError (DiddleError, ValueError):
	pass


class PitchResolutionError (DiddleError, ValueError):
	pass


class ChordResolutionError (DiddleError, ValueError):
	pass
