# Level tool utilities
from .logging import log, logWarning, logError, logDebug, init_logging, close_logging, print_summary, get_counts
from .strings import trim_string, pad_string, fits
from .binary import BinaryReader, BinaryWriter
from .link import generate_link
