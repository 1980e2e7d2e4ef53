"""
CMap data model and the query engine that resolves character codes.

A CMap is populated by a single interpreter pass (see parser.CMapTokenizer) and is
then treated as read-only, with merge() being the only supported mutation afterwards.
"""

import enum
import logging

from .errors import CMapDecodeError, NoUnicodeMappingFound

__all__ = ['CMap', 'CodespaceRange', 'CMapRange', 'WritingMode', 'as_code', 'from_code', 'as_string']

logger = logging.getLogger(__name__)

def as_code(dat):
	"""
	Big-endian numeric value of the byte string @dat.
	"""
	return int.from_bytes(dat, 'big')

def from_code(code):
	"""
	Inverse of as_code() using the fewest bytes that hold @code.
	Multi-byte results are left-padded to an even length so they split cleanly into 16-bit units.
	"""
	n = max(1, (code.bit_length() + 7) // 8)
	if n > 1 and n % 2:
		n += 1

	return code.to_bytes(n, 'big')

def as_string(dat):
	"""
	Decode the bytes of a mapping target as text.

	A single byte is legacy 8-bit text and maps 1:1 onto Latin-1 code points.
	Anything longer is UTF-16BE glyph text; an odd trailing byte is taken as Latin-1.
	"""
	if len(dat) == 0:
		return ''
	elif len(dat) == 1:
		return dat.decode('latin-1')

	even = len(dat) - (len(dat) % 2)
	try:
		ret = dat[:even].decode('utf-16-be')
	except UnicodeDecodeError as e:
		raise CMapDecodeError("Invalid UTF-16 in %s: %s" % (dat.hex(), e.reason)) from e

	if even != len(dat):
		ret += dat[even:].decode('latin-1')

	return ret

class WritingMode(enum.Enum):
	Horizontal = 0
	Vertical = 1

class CodespaceRange:
	"""
	Declares that codes of exactly @len bytes whose value is in [@frm, @to] are valid.
	"""

	def __init__(self, frm, to, len):
		self.frm = frm
		self.to = to
		self.len = len

	def __repr__(self):
		return "<CodespaceRange from=0x%x to=0x%x len=%d>" % (self.frm, self.to, self.len)

	def __eq__(self, other):
		if not isinstance(other, CodespaceRange):
			return NotImplemented
		return (self.frm, self.to, self.len) == (other.frm, other.to, other.len)

	def in_range(self, dat):
		if len(dat) != self.len:
			return False

		code = as_code(dat)
		return self.frm <= code and code <= self.to

class CMapRange:
	"""
	Affine mapping of the codes [@frm, @to] onto @start, @start+1, ...
	"""

	def __init__(self, frm, to, start):
		self.frm = frm
		self.to = to
		self.start = start

	def __repr__(self):
		return "<CMapRange from=0x%x to=0x%x start=0x%x>" % (self.frm, self.to, self.start)

	def __eq__(self, other):
		if not isinstance(other, CMapRange):
			return NotImplemented
		return (self.frm, self.to, self.start) == (other.frm, other.to, other.start)

	def mapped_value(self, code):
		if self.frm <= code and code <= self.to:
			return self.start + (code - self.frm)
		else:
			return None

class CMap:
	"""
	Character codes to CIDs and unicode text.

	Direct mappings always win over range mappings, and within a range table the first
	declared range containing the code wins.
	"""

	# Metadata
	name = None
	version = None
	cmap_type = None
	writing_mode = None
	registry = None
	ordering = None
	supplement = None

	# Name of the parent CMap given to usecmap (resolving it is up to the caller)
	usecmap = None

	# List of CodespaceRange objects
	codespace_ranges = None

	# Code -> unicode string, and list of CMapRange objects
	unicode_mapping = None
	unicode_range_mapping = None

	# Code -> CID, and list of CMapRange objects
	cid_mapping = None
	cid_range_mapping = None

	def __init__(self):
		self.name = ''
		self.version = ''
		self.cmap_type = 0
		self.writing_mode = WritingMode.Horizontal
		self.registry = ''
		self.ordering = ''
		self.supplement = 0
		self.usecmap = None

		self.codespace_ranges = []
		self.unicode_mapping = {}
		self.unicode_range_mapping = []
		self.cid_mapping = {}
		self.cid_range_mapping = []

	def __repr__(self):
		return str(self)
	def __str__(self):
		return "<CMap name='%s' registry='%s' ordering='%s' supplement=%d wmode=%s codespaces=%d unicode=%d+%d cid=%d+%d>" % (
			self.name, self.registry, self.ordering, self.supplement, self.writing_mode.name,
			len(self.codespace_ranges),
			len(self.unicode_mapping), len(self.unicode_range_mapping),
			len(self.cid_mapping), len(self.cid_range_mapping))

	# ---------------------------------------------------------------
	# Queries

	def max_len_codespace(self):
		if not len(self.codespace_ranges):
			return 1

		return max(r.len for r in self.codespace_ranges)

	def extract_codepoint(self, dat):
		"""
		Find the first code at the start of @dat.
		Returns the index of the code's last byte, or None if no prefix is in any codespace range.
		"""
		for i in range(min(self.max_len_codespace(), len(dat))):
			sub = dat[0:i+1]
			for r in self.codespace_ranges:
				if r.in_range(sub):
					return i

		return None

	def iter_codepoints(self, dat):
		"""
		Split @dat into codes, yielding (code bytes, codepoint) pairs.
		A byte that does not start any valid code is yielded on its own so that decoding can continue.
		"""
		pos = 0
		while pos < len(dat):
			idx = self.extract_codepoint(dat[pos:])
			if idx == None:
				idx = 0

			sub = dat[pos:pos+idx+1]
			yield (sub, as_code(sub))

			pos += idx+1

	def codepoint_to_cid(self, code):
		if code in self.cid_mapping:
			return self.cid_mapping[code]

		for r in self.cid_range_mapping:
			cid = r.mapped_value(code)
			if cid != None:
				return cid

		# Unmapped codes go to CID 0 (notdef)
		return 0

	def codepoint_to_unicode(self, code):
		if code in self.unicode_mapping:
			return self.unicode_mapping[code]

		for r in self.unicode_range_mapping:
			val = r.mapped_value(code)
			if val != None:
				return as_string(from_code(val))

		raise NoUnicodeMappingFound(code)

	# ---------------------------------------------------------------
	# Builders

	def add_codespace_range(self, r):
		self.codespace_ranges.append(r)

	def add_unicode_mapping(self, dat, text):
		self.unicode_mapping[ as_code(dat) ] = text

	def add_unicode_range(self, r):
		self.unicode_range_mapping.append(r)

	def add_cid_mapping(self, dat, cid):
		self.cid_mapping[ as_code(dat) ] = cid

	def add_cid_range(self, r):
		self.cid_range_mapping.append(r)

	def merge(self, other):
		"""
		Append every table of @other to this CMap (e.g., a parent named by usecmap).
		Ranges of @other come after this CMap's ranges; on a direct mapping collision @other's entry wins.
		Metadata is left untouched.
		"""
		logger.debug("Merging %s into %s", other, self)

		self.codespace_ranges.extend(other.codespace_ranges)
		self.unicode_mapping.update(other.unicode_mapping)
		self.unicode_range_mapping.extend(other.unicode_range_mapping)
		self.cid_mapping.update(other.cid_mapping)
		self.cid_range_mapping.extend(other.cid_range_mapping)
