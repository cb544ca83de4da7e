"""Default configuration settings for bytescape."""

import io

# Platform buffer size used for the escape working buffer
DEFAULT_BUFFER_SIZE = io.DEFAULT_BUFFER_SIZE

# Smallest working buffer that still fits one escaped byte plus the flush margin
MIN_BUFFER_SIZE = 5

DEFAULT_CONFIG = {
	# Escape configuration
	"escape": {
		# Capacity in bytes of the working buffer flushed as one chunk
		"buffer_size": DEFAULT_BUFFER_SIZE,
	},
	# Logging configuration
	"logging": {
		# Enable debug logging
		"verbose": False,
		# Whether to log to the console
		"console": True,
		# Optional file to append logs to
		"log_file": None,
	},
}
