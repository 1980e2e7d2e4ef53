import logging

from . import cmap as cmaploc
from .cmap import TokenKind, ExpectLiteral, ExpectName, ExpectInteger

from .. import cmap as _cmap
from ..errors import CMapDecodeError, CMapParseError, CMapTypeError, InvalidArrayLengthError, UnknownOperatorError

__all__ = ['CMapTokenizer', 'GetToken', 'IncrementCode']

logger = logging.getLogger(__name__)

# Block operators and the number of tokens in each of their groups
BLOCK_OPERATORS = {
	'beginbfchar':			2,
	'beginbfrange':			3,
	'begincodespacerange':	2,
	'begincidchar':			2,
	'begincidrange':		3,
}

# Keys whose value is picked out of the token stream
METADATA_KEYS = frozenset([
	b'WMode',
	b'CMapName',
	b'CMapVersion',
	b'CMapType',
	b'Registry',
	b'Ordering',
	b'Supplement',
])

# PostScript scaffolding found in CMap resources; skipped without complaint even in strict mode
PROCSET_OPERATORS = frozenset([
	'begin', 'end', 'def', 'dict', 'dup', 'pop', 'exch', 'currentdict',
	'findresource', 'defineresource', 'begincmap',
	'endbfchar', 'endbfrange', 'endcodespacerange', 'endcidchar', 'endcidrange',
	'beginnotdefchar', 'endnotdefchar', 'beginnotdefrange', 'endnotdefrange',
	'beginusematrix', 'endusematrix',
])

# --------------------------------------------------------------------------------------------------------
# --------------------------------------------------------------------------------------------------------

def GetToken(toks, idx):
	"""
	Token at @idx, where running off either end of @toks means the stream is broken.
	"""
	if idx < 0 or idx >= len(toks):
		raise CMapParseError("Token index %d out of range of %d tokens" % (idx, len(toks)), idx)

	return toks[idx]

def IncrementCode(dat):
	"""
	Increment the bytearray @dat in place as a big-endian counter (0xFF wraps to 0x00 and carries).
	"""
	for i in range(len(dat)-1, -1, -1):
		if dat[i] == 0xFF:
			dat[i] = 0
		else:
			dat[i] += 1
			break

def DecodeUTF8(dat):
	try:
		return dat.decode('utf-8')
	except UnicodeDecodeError as e:
		raise CMapDecodeError("Invalid UTF-8 in %r: %s" % (dat, e.reason)) from e

class CMapTokenizer:
	"""
	Tokenizer and interpreter for CMap programs.

	BuildCMap() makes a single forward pass over the tokens with an explicit cursor,
	filling in a CMap object. The first error raised aborts the whole thing.
	"""

	# Raise UnknownOperatorError for operators that are neither understood nor PostScript scaffolding
	strict = False

	def __init__(self, strict=False):
		self.strict = strict

	def TokenizeString(self, txt):
		return cmaploc.TokenizeString(txt)

	def BuildCMap(self, txt):
		"""
		Build a CMap from a CMap program (bytes or str) or an already tokenized list.
		"""

		if isinstance(txt, (bytes, bytearray, str)):
			toks = self.TokenizeString(txt)
		else:
			toks = txt

		logger.debug("Interpreting %d tokens (strict=%s)", len(toks), self.strict)

		c = _cmap.CMap()

		i = 0
		while i < len(toks):
			tok = toks[i]

			if tok.type == 'OP':
				if tok.value in BLOCK_OPERATORS:
					i = self.Block(c, toks, i)

				elif tok.value == 'usecmap':
					c.usecmap = DecodeUTF8( ExpectName(GetToken(toks, i-1)) )
					logger.debug("CMap references parent '%s' (not resolved)", c.usecmap)
					i += 1

				elif tok.value == 'endcmap':
					# Everything after is resource bookkeeping
					break

				else:
					if self.strict and tok.value not in PROCSET_OPERATORS:
						raise UnknownOperatorError(tok.value)

					i += 1

			elif tok.type == 'NAME':
				i = self.Metadata(c, toks, i)

			else:
				i += 1

		logger.debug("Built %s", c)
		return c

	def Block(self, c, toks, i):
		"""
		Handle the block operator at @i: "N op <group 1> ... <group N> endop".
		Returns the index of the token after the terminator.
		"""

		op = toks[i].value
		arity = BLOCK_OPERATORS[op]
		handler = getattr(self, op)

		size = ExpectInteger(GetToken(toks, i-1))
		if size < 0:
			raise CMapParseError("Negative count %d for %s" % (size, op), i-1)

		for k in range(size):
			idx = i + 1 + arity*k
			handler(c, *[GetToken(toks, idx+j) for j in range(arity)])

		# Terminator must be there, but whatever its name; the cursor resumes right after it
		# (not arity*(size+1) past the operator, which would swallow the next block's count)
		end = i + 1 + arity*size
		GetToken(toks, end)

		return end + 1

	def Metadata(self, c, toks, i):
		"""
		Handle the name at @i. A known key takes the next token as its value (ignored
		if it is not of the expected kind); any other name consumes nothing.
		"""

		key = toks[i].value
		if key not in METADATA_KEYS:
			return i + 1

		val = GetToken(toks, i+1)

		if key == b'WMode':
			if val.type == 'INT':
				c.writing_mode = _cmap.WritingMode.Vertical if val.value != 0 else _cmap.WritingMode.Horizontal

		elif key == b'CMapName':
			if val.type == 'NAME':
				c.name = DecodeUTF8(val.value)

		elif key == b'CMapVersion':
			if val.type == 'INT':
				c.version = str(val.value)
			elif val.type == 'LIT':
				c.version = DecodeUTF8(val.value)
			elif val.type == 'NUMBER':
				c.version = val.value

		elif key == b'CMapType':
			if val.type == 'INT':
				c.cmap_type = val.value

		elif key == b'Registry':
			if val.type == 'LIT':
				c.registry = DecodeUTF8(val.value)

		elif key == b'Ordering':
			if val.type == 'LIT':
				c.ordering = DecodeUTF8(val.value)

		elif key == b'Supplement':
			# Unsigned, so a negative value is ignored like any other bad value
			if val.type == 'INT' and val.value >= 0:
				c.supplement = val.value

		return i + 2

	# ----------------------------------------------------------------------------------------
	# Group handlers, named after their block operator

	def beginbfchar(self, c, code, target):
		code = ExpectLiteral(code)

		if target.type == 'LIT':
			c.add_unicode_mapping(code, _cmap.as_string(target.value))
		elif target.type == 'NAME':
			# Glyph name stored as is
			c.add_unicode_mapping(code, DecodeUTF8(target.value))
		else:
			raise CMapTypeError('LiteralString or Name', TokenKind(target))

	def beginbfrange(self, c, lower, upper, target):
		lower = ExpectLiteral(lower)
		upper = ExpectLiteral(upper)

		if target.type == 'LIT':
			c.add_unicode_range( _cmap.CMapRange(_cmap.as_code(lower), _cmap.as_code(upper), _cmap.as_code(target.value)) )

		elif target.type == 'ARR':
			expected = _cmap.as_code(upper) - _cmap.as_code(lower) + 1
			if expected != len(target.value):
				raise InvalidArrayLengthError(expected, len(target.value))

			code = bytearray(lower)
			for tok in target.value:
				c.add_unicode_mapping(bytes(code), _cmap.as_string(ExpectLiteral(tok)))
				IncrementCode(code)

		else:
			raise CMapTypeError('LiteralString or Array', TokenKind(target))

	def begincodespacerange(self, c, lower, upper):
		lower = ExpectLiteral(lower)
		upper = ExpectLiteral(upper)

		c.add_codespace_range( _cmap.CodespaceRange(_cmap.as_code(lower), _cmap.as_code(upper), len(upper)) )

	def begincidchar(self, c, code, cid):
		c.add_cid_mapping(ExpectLiteral(code), ExpectInteger(cid))

	def begincidrange(self, c, first, second, start):
		first = ExpectLiteral(first)
		second = ExpectLiteral(second)

		# Kept in the order given, even if that makes an empty range
		c.add_cid_range( _cmap.CMapRange(_cmap.as_code(first), _cmap.as_code(second), ExpectInteger(start)) )
