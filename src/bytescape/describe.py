"""
Diagnostic stringification of arbitrary values.

``describe`` never looks at the content of a string or container. Strings
and references render as ``<kind>: <address>`` so two values can be told
apart by identity when debugging.

"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Callable, Mapping, Sequence, Set
from typing import Any

from bytescape.errors import MISSING, ArgumentMissing

# Kinds checked in order after nil, boolean, number and string
REFERENCE_KINDS: tuple[tuple[str, Callable[[Any], bool]], ...] = (
	(
		"thread",
		lambda value: (
			inspect.isgenerator(value)
			or inspect.iscoroutine(value)
			or inspect.isasyncgen(value)
			or isinstance(value, threading.Thread)
		),
	),
	("function", lambda value: callable(value) and not inspect.isclass(value)),
	("table", lambda value: isinstance(value, (Mapping, Sequence, Set))),
)

# Fallback kind for any reference not matched above
DEFAULT_KIND = "userdata"

STRING_TYPES = (str, bytes, bytearray, memoryview)


def format_number(value: float) -> str:
	"""
	Render a number in canonical decimal form.

	Integers use their exact decimal text. Floats use 14 significant digits
	and keep a trailing ``.0`` when the result would otherwise read as an
	integer, so ``1.0`` and ``1`` stay distinguishable. Integers too long to
	convert to text render as ``inf`` or ``-inf``, the value they would
	overflow to as a float.

	Args:
	        value: Integer or float to format

	Returns:
	        str: Decimal text of the number

	"""
	if isinstance(value, int):
		try:
			return str(value)
		except ValueError:
			# Past the int-to-str digit limit
			return "inf" if value > 0 else "-inf"
	text = f"{value:.14g}"
	if text.lstrip("-").isdigit():
		text += ".0"
	return text


def kind_of(value: object) -> str:
	"""Return the kind name ``describe`` reports for ``value``."""
	if value is None:
		return "nil"
	if isinstance(value, bool):
		return "boolean"
	if isinstance(value, (int, float)):
		return "number"
	if isinstance(value, STRING_TYPES):
		return "string"
	for kind, matches in REFERENCE_KINDS:
		if matches(value):
			return kind
	return DEFAULT_KIND


def address_of(value: object) -> str:
	"""Return the identity of ``value`` formatted as a hex address."""
	return f"0x{id(value):x}"


def describe(value: object = MISSING) -> str:
	"""
	Describe a value for diagnostics.

	Args:
	        value: Any value. Must be supplied, ``None`` included.

	Returns:
	        str: ``nil``, ``true``/``false``, the number's decimal text, or
	        ``<kind>: <address>`` for strings and references

	Raises:
	        ArgumentMissing: If called without an argument

	"""
	if value is MISSING:
		raise ArgumentMissing(1, "describe")

	kind = kind_of(value)
	if kind == "nil":
		return "nil"
	if kind == "boolean":
		return "true" if value else "false"
	if kind == "number":
		return format_number(value)  # type: ignore[arg-type]
	return f"{kind}: {address_of(value)}"
