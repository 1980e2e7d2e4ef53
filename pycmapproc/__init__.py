"""
CMap Processor

Interprets Adobe CMap resources into CMap objects that map character codes to CIDs
and unicode text.
"""

__version__ = "1.0.0"

__all__ = ['parser', 'parse', 'load', 'CMap', 'CodespaceRange', 'CMapRange', 'WritingMode', 'errors', 'cli']

import logging

# Local files
from . import parser
from . import errors
from .cmap import CMap, CodespaceRange, CMapRange, WritingMode
from .errors import CMapIOError

logger = logging.getLogger(__name__)

def parse(dat, strict=False):
	"""
	Parse the CMap program in @dat (bytes or str) and return a CMap.
	If @strict then unknown operators raise UnknownOperatorError instead of being skipped.

	A usecmap reference is only recorded in CMap.usecmap; to resolve it, parse the
	parent separately and merge() it in.
	"""
	return parser.CMapTokenizer(strict=strict).BuildCMap(dat)

def load(fname, strict=False):
	"""
	Read the CMap resource file @fname and parse it.
	"""

	logger.debug("Loading CMap from '%s'", fname)

	try:
		with open(fname, 'rb') as f:
			dat = f.read()
	except OSError as e:
		raise CMapIOError(fname, e.strerror or str(e)) from e

	return parse(dat, strict=strict)
