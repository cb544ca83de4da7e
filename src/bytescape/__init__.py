"""bytescape - printable escaping of raw bytes and diagnostic value descriptions."""

from bytescape.describe import describe
from bytescape.errors import ArgumentError, ArgumentMissing, ArgumentTypeMismatch
from bytescape.escape import Escaper, escape, unescape

__version__ = "0.1.0"

__all__ = [
	"ArgumentError",
	"ArgumentMissing",
	"ArgumentTypeMismatch",
	"Escaper",
	"__version__",
	"describe",
	"escape",
	"unescape",
]
