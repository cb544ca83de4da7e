"""
Escape and unescape raw byte sequences.

``escape`` turns control bytes into backslash sequences so the result is
printable and can be read back with ``unescape``. Work happens byte by byte
through a fixed-size working buffer that is flushed as a chunk whenever it
cannot hold another escaped byte; the chunks are joined once at the end.

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bytescape.config import DEFAULT_BUFFER_SIZE, MIN_BUFFER_SIZE
from bytescape.describe import format_number
from bytescape.errors import MISSING, ArgumentMissing, ArgumentTypeMismatch
from bytescape.utils.config_loader import ConfigLoader

if TYPE_CHECKING:
	from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Text input is encoded this way, and results decoded back the same way.
# Lone surrogates that surrogateescape cannot carry are passed through as
# their three-byte UTF-8 form instead.
ENCODING = "utf-8"
ERRORS = "surrogateescape"
FALLBACK_ERRORS = "surrogatepass"

BACKSLASH = 0x5C

# Free space required before encoding the next byte
FLUSH_THRESHOLD = MIN_BUFFER_SIZE

CONTROL_BYTES = frozenset([*range(0x20), 0x7F])

NAMED_ESCAPES = {
	0x00: b"\\0",
	0x07: b"\\a",
	0x08: b"\\b",
	0x09: b"\\t",
	0x0A: b"\\n",
	0x0B: b"\\v",
	0x0C: b"\\f",
	0x0D: b"\\r",
}

# Encoded form of every byte value; backslash is handled in the loop
ESCAPE_TABLE = [bytes([c]) for c in range(256)]
for _c in CONTROL_BYTES:
	ESCAPE_TABLE[_c] = NAMED_ESCAPES.get(_c, b"\\x%02x" % _c)
del _c

_UNESCAPE_RE = re.compile(rb"\\([0abtnvfr]|x[0-9a-fA-F]{2})")
_UNESCAPE = {value[1:]: bytes([key]) for key, value in NAMED_ESCAPES.items()}


def _encode(text: str) -> tuple[bytes, str]:
	try:
		return text.encode(ENCODING, ERRORS), ERRORS
	except UnicodeEncodeError:
		return text.encode(ENCODING, FALLBACK_ERRORS), FALLBACK_ERRORS


def _decode(raw: bytes, errors: str) -> str:
	try:
		return raw.decode(ENCODING, errors)
	except UnicodeDecodeError:
		# Bytes produced by unescape may not fit the handler the text came in with
		return raw.decode(ENCODING, ERRORS)


def _coerce(data: object, function: str, *, allow_numbers: bool = True) -> tuple[bytes, str | None]:
	"""
	Convert an argument into raw bytes.

	Args:
	        data: The argument as passed by the caller
	        function: Name of the public function, used in error messages
	        allow_numbers: Whether numbers are accepted as their decimal text

	Returns:
	        tuple[bytes, str | None]: The raw bytes, and the error handler to
	        decode the result with when the caller passed text (None for bytes)

	Raises:
	        ArgumentMissing: If no argument was supplied
	        ArgumentTypeMismatch: If the argument is not string-like

	"""
	if data is MISSING:
		raise ArgumentMissing(1, function, "string")
	if isinstance(data, bytes):
		return data, None
	if isinstance(data, (bytearray, memoryview)):
		return bytes(data), None
	if isinstance(data, str):
		return _encode(data)
	if allow_numbers and isinstance(data, (int, float)) and not isinstance(data, bool):
		return format_number(data).encode(ENCODING), ERRORS
	raise ArgumentTypeMismatch(1, function, "string", data)


class Escaper:
	"""
	Escapes byte sequences through a fixed-size working buffer.

	Each call allocates its own buffer, so a single instance can be shared
	between threads.

	"""

	def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
		"""
		Initialize the escaper.

		Args:
		        buffer_size: Capacity of the working buffer in bytes

		Raises:
		        ValueError: If the buffer cannot hold one escaped byte plus margin

		"""
		if buffer_size < MIN_BUFFER_SIZE:
			msg = f"buffer_size must be at least {MIN_BUFFER_SIZE}, got {buffer_size}"
			raise ValueError(msg)
		self.buffer_size = buffer_size

	@classmethod
	def from_config(cls, config_loader: ConfigLoader | None = None) -> Escaper:
		"""
		Create an escaper sized from configuration.

		Args:
		        config_loader: Loader to read from, defaults to the shared instance

		Returns:
		        Escaper: Escaper using ``escape.buffer_size``

		"""
		loader = config_loader or ConfigLoader.get_instance()
		return cls(loader.get("escape.buffer_size", DEFAULT_BUFFER_SIZE))

	def iter_chunks(self, data: object = MISSING) -> Iterator[bytes]:
		"""
		Escape ``data`` and return an iterator over the output chunks.

		The argument is validated before the iterator is created, so a bad
		argument fails here rather than on the first ``next()``.

		Args:
		        data: Bytes-like, text or number to escape

		Returns:
		        Iterator[bytes]: Chunks whose concatenation is the escaped form

		"""
		raw, _ = _coerce(data, "escape")
		return self._generate_chunks(raw)

	def escape(self, data: object = MISSING) -> bytes | str:
		"""
		Escape ``data`` in one call.

		Args:
		        data: Bytes-like, text or number to escape

		Returns:
		        bytes | str: The escaped form, ``str`` for text and number input

		"""
		raw, text_errors = _coerce(data, "escape")
		if not raw:
			return "" if text_errors else b""

		chunks = list(self._generate_chunks(raw))
		logger.debug("Escaped %d bytes in %d chunk(s)", len(raw), len(chunks))
		result = b"".join(chunks)
		return _decode(result, text_errors) if text_errors else result

	def _generate_chunks(self, raw: bytes) -> Iterator[bytes]:
		buffer = bytearray(self.buffer_size)
		head = 0
		last = len(raw) - 1

		for i, c in enumerate(raw):
			if self.buffer_size - head < FLUSH_THRESHOLD:
				yield bytes(buffer[:head])
				head = 0

			# Drop a backslash that directly precedes a control byte
			if c == BACKSLASH and i < last and raw[i + 1] in CONTROL_BYTES:
				continue

			unit = ESCAPE_TABLE[c]
			buffer[head : head + len(unit)] = unit
			head += len(unit)

		if head:
			yield bytes(buffer[:head])


def escape(data: object = MISSING, *, buffer_size: int | None = None) -> bytes | str:
	"""
	Escape control bytes in ``data``.

	Args:
	        data: Bytes-like, text or number to escape
	        buffer_size: Working buffer capacity, defaults to the platform buffer size

	Returns:
	        bytes | str: The escaped form. Bytes-like input gives ``bytes``;
	        text and number input give ``str``.

	Raises:
	        ArgumentMissing: If ``data`` was not supplied
	        ArgumentTypeMismatch: If ``data`` is not string-like

	"""
	return Escaper(DEFAULT_BUFFER_SIZE if buffer_size is None else buffer_size).escape(data)


def _unescape_sequence(match: re.Match[bytes]) -> bytes:
	seq = match.group(1)
	return _UNESCAPE[seq] if len(seq) == 1 else bytes([int(seq[1:], 16)])


def unescape(data: object = MISSING) -> bytes | str:
	"""
	Reverse ``escape``.

	Named sequences and ``\\xHH`` become the byte they stand for; any other
	backslash is kept as is.

	Text results are decoded from UTF-8 with ``surrogateescape``, so a
	``\\x80`` to ``\\xff`` sequence that does not complete a valid UTF-8
	character comes back as a lone surrogate: ``unescape("\\\\xff")`` is
	``"\\udcff"``, not ``"ÿ"``. Encode the result with ``surrogateescape`` to
	get the original bytes.

	Args:
	        data: Bytes-like or text holding an escaped form

	Returns:
	        bytes | str: The decoded value, of the same kind as ``data``

	Raises:
	        ArgumentMissing: If ``data`` was not supplied
	        ArgumentTypeMismatch: If ``data`` is not bytes-like or text

	"""
	raw, text_errors = _coerce(data, "unescape", allow_numbers=False)
	result = _UNESCAPE_RE.sub(_unescape_sequence, raw)
	return _decode(result, text_errors) if text_errors else result
