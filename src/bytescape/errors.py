"""Argument errors raised at the bytescape call boundary."""

from __future__ import annotations

# Type name reported when a required argument was not supplied
NO_VALUE = "no value"


class ArgumentError(TypeError):
	"""
	Base class for bad-argument errors.

	The message follows the ``bad argument #N to 'func' (reason)`` form so
	callers debugging through logs see which argument was rejected.

	"""

	def __init__(self, position: int, function: str, reason: str) -> None:
		"""
		Initialize the error.

		Args:
		        position: 1-based position of the offending argument
		        function: Name of the function that rejected it
		        reason: Human-readable explanation

		"""
		self.position = position
		self.function = function
		self.reason = reason
		super().__init__(f"bad argument #{position} to '{function}' ({reason})")


class ArgumentMissing(ArgumentError):
	"""Raised when a required argument was not supplied."""

	def __init__(self, position: int, function: str, expected: str = "argument") -> None:
		self.expected = expected
		if expected == "argument":
			reason = "argument expected, got no argument"
		else:
			reason = f"{expected} expected, got {NO_VALUE}"
		super().__init__(position, function, reason)


class ArgumentTypeMismatch(ArgumentError):
	"""Raised when an argument is present but of the wrong kind."""

	def __init__(self, position: int, function: str, expected: str, got: object) -> None:
		self.expected = expected
		self.got = type(got).__name__
		super().__init__(position, function, f"{expected} expected, got {self.got}")


class _Missing:
	"""Sentinel type for an argument that was not supplied."""

	def __repr__(self) -> str:
		return "MISSING"


MISSING = _Missing()
