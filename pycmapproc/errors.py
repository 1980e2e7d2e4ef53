"""
Exceptions raised while lexing, interpreting, and querying CMaps.

The first error anywhere aborts the whole parse, so each exception carries
enough context (token kinds, lengths, codepoint, position) to explain itself.
"""

__all__ = [
	'CMapError', 'UnknownOperatorError', 'CMapTypeError', 'InvalidArrayLengthError',
	'NoUnicodeMappingFound', 'CMapDecodeError', 'CMapLexError', 'CMapParseError', 'CMapIOError',
]

class CMapError(Exception):
	"""
	Base class of every error raised by this package.
	"""

	def __init__(self, message):
		self.message = message
		super().__init__(message)

class UnknownOperatorError(CMapError):
	"""Only raised when interpreting in strict mode."""

	def __init__(self, operator):
		self.operator = operator
		super().__init__("Encountered unknown operator %s" % operator)

class CMapTypeError(CMapError):
	"""
	An operand token is of a different kind than the operator position requires.
	Both @expected and @found are kind names (e.g., 'LiteralString', 'Integer').
	"""

	def __init__(self, expected, found):
		self.expected = expected
		self.found = found
		super().__init__("Encountered the type %s, but expected %s" % (found, expected))

class InvalidArrayLengthError(CMapError):
	def __init__(self, expected, found):
		self.expected = expected
		self.found = found
		super().__init__("Encountered an array of size %d, but expected %d" % (found, expected))

class NoUnicodeMappingFound(CMapError):
	def __init__(self, codepoint):
		self.codepoint = codepoint
		super().__init__("No unicode mapping found for codepoint %d" % codepoint)

class CMapDecodeError(CMapError):
	"""
	Bytes could not be decoded as text (UTF-8 for names, UTF-16 for strings).
	The original UnicodeDecodeError is chained as __cause__.
	"""

	def __init__(self, reason):
		self.reason = reason
		super().__init__(reason)

class CMapLexError(CMapError):
	def __init__(self, message, lineno, lexpos):
		self.lineno = lineno
		self.lexpos = lexpos
		super().__init__("%s on line %d (offset %d)" % (message, lineno, lexpos))

class CMapParseError(CMapError):
	"""
	The token stream is structurally broken for the interpreter, for example an
	operand index falls past the end of the token list.
	"""

	def __init__(self, message, index):
		self.index = index
		super().__init__("%s at token %d" % (message, index))

class CMapIOError(CMapError):
	def __init__(self, filename, reason):
		self.filename = filename
		super().__init__("Unable to read CMap '%s': %s" % (filename, reason))
