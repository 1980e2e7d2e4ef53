"""
Tokenizer for CMap programs.

The token rules cover the flat grammar; literal strings (balanced parentheses) are
yanked out by hand in TokenizeString() and ConsolidateTokens() folds brackets into
ARR and DICT tokens afterwards.
"""

import re

import ply.lex as plylex

from ..errors import CMapLexError, CMapTypeError

__all__ = ['TokenizeString', 'ConsolidateTokens', 'TokenKind', 'ExpectLiteral', 'ExpectName', 'ExpectInteger']

tokens = (
	'COMMENT',
	'WS',

	'DICT_START',
	'DICT_END',
	'ARR_START',
	'ARR_END',
	'LIT_START',

	'HEXSTRING',
	'BOOL',
	'NUMBER',
	'INT',
	'NAME',
	'OP',

	# Not produced by a rule directly
	'LIT',
	'ARR',
	'DICT',
)

# Names of each token type as they appear in error messages
KINDS = {
	'LIT':		'LiteralString',
	'NAME':		'Name',
	'NUMBER':	'Number',
	'INT':		'Integer',
	'ARR':		'Array',
	'OP':		'Operator',
	'BOOL':		'Boolean',
	'DICT':		'Dictionary',
}

# Single character escapes in literal strings
ESCAPES = {
	'\\':	'\\',
	'(':	'(',
	')':	')',
	'n':	'\n',
	'r':	'\r',
	't':	'\t',
	'b':	'\x08',
	'f':	'\x0c',
}

OCTAL = '01234567'

# Bracket token that closes each opening bracket token
CLOSERS = {
	'ARR_START':	'ARR_END',
	'DICT_START':	'DICT_END',
}

# All rules are functions so they are tried in the order given here

def t_COMMENT(t):
	r'%[^\r\n]*'
	return None

def t_WS(t):
	r'[ \t\r\n\f\x00]+'

	t.lexer.lineno += CountLines(t.value)
	return None

# Important that this is before t_HEXSTRING otherwise "<<" would be read as a broken hex string
def t_DICT_START(t):
	r'<<'
	return t

def t_DICT_END(t):
	r'>>'
	return t

def t_HEXSTRING(t):
	r'<[0-9A-Fa-f]*>'

	digits = t.value[1:-1]
	if len(digits) % 2:
		raise CMapLexError("Odd number of digits in hexadecimal string '%s'" % t.value, t.lexer.lineno, t.lexpos)

	# Hex strings are just another way of writing a literal string
	t.type = 'LIT'
	t.value = bytes.fromhex(digits)
	return t

def t_ARR_START(t):
	r'\['
	return t

def t_ARR_END(t):
	r'\]'
	return t

def t_LIT_START(t):
	r'\('
	return t

def t_BOOL(t):
	r'(?:true|false)(?![A-Za-z*\'"])'
	t.value = (t.value == 'true')
	return t

# Important that this is before t_INT otherwise something like "13.0" will match t_INT first and
# result in (INT, 13) and (NUMBER, .0)
def t_NUMBER(t):
	r'[-+]?(?:\d+\.\d*|\.\d+)'
	return t

def t_INT(t):
	r'[-+]?\d+'
	t.value = int(t.value)
	return t

def t_NAME(t):
	r'/(?:[^ \t\r\n\f\x00()<>\[\]{}/%\#]|\#[0-9A-Fa-f]{2})*'

	# Ignore slash (not formally a part of the name) and expand #xx escapes
	t.value = re.sub(r'#([0-9A-Fa-f]{2})', lambda m: chr(int(m.group(1), 16)), t.value[1:]).encode('latin-1')
	return t

def t_OP(t):
	r'[A-Za-z*\'"]+'
	return t

def t_error(t):
	raise CMapLexError("Bad character ord='%d'" % ord(t.value[0]), t.lexer.lineno, t.lexpos)

# Ignore nothing, whitespace is handled above
t_ignore = ''

# Initiate lexer (cloned for every string tokenized)
lexer = plylex.lex()

def CountLines(txt):
	"""
	Number of line ends in @txt, where CR LF, LF and a lone CR each end a line.
	"""
	return txt.count('\n') + len(re.findall(r'\r(?!\n)', txt))

def ReadLiteral(lexdata, pos, lineno):
	"""
	Read a literal string whose opening parenthesis is just before @pos.
	Returns the decoded string and the position right after the closing parenthesis.

	Balanced parentheses are kept, parentheses and all, with escapes processed inside them.
	Nesting is tracked with a depth counter so any depth of balanced parentheses is accepted.
	"""

	ret = []
	depth = 0
	while True:
		if pos >= len(lexdata):
			raise CMapLexError("Unterminated literal string", lineno, pos)

		c = lexdata[pos]
		if c == ')':
			pos += 1
			if depth == 0:
				return ''.join(ret), pos

			depth -= 1
			ret.append(c)

		elif c == '(':
			depth += 1
			ret.append(c)
			pos += 1

		elif c == '\\':
			pos += 1
			if pos >= len(lexdata):
				raise CMapLexError("Unterminated literal string", lineno, pos)

			c = lexdata[pos]
			if c in ESCAPES:
				ret.append(ESCAPES[c])
				pos += 1

			elif c in OCTAL:
				end = pos+1
				while end < len(lexdata) and end < pos+3 and lexdata[end] in OCTAL:
					end += 1

				# High-order overflow of \777 and friends is dropped
				ret.append( chr(int(lexdata[pos:end], 8) & 0xFF) )
				pos = end

			elif c == '\r':
				# Line continuation
				pos += 1
				if pos < len(lexdata) and lexdata[pos] == '\n':
					pos += 1
			elif c == '\n':
				pos += 1

			# Otherwise the backslash is ignored and the character is read normally

		else:
			ret.append(c)
			pos += 1

def TokenizeString(txt):
	"""
	Tokenize a CMap program (bytes or str) and return the list of consolidated tokens.
	Bytes are mapped 1:1 onto characters so any byte value makes it through to the token values.
	A str is taken as UTF-8 text and lexed as those bytes.
	"""

	if isinstance(txt, str):
		txt = txt.encode('utf-8')
	txt = bytes(txt).decode('latin-1')

	lx = lexer.clone()
	lx.lineno = 1
	lx.input(txt)

	toks = []

	# Parse text stream into tokens
	while True:
		tok = lx.token()
		if not tok:
			break

		# Special handling by yanking out literal text because balanced parenthesis is hard in regex
		if tok.type == 'LIT_START':
			startpos = lx.lexpos

			val, lx.lexpos = ReadLiteral(lx.lexdata, startpos, lx.lineno)
			lx.lineno += CountLines(lx.lexdata[startpos:lx.lexpos])

			tok.type = 'LIT'
			tok.value = val.encode('latin-1')

		toks.append(tok)

	return ConsolidateTokens(toks)

def _MakeToken(typ, value, like):
	tok = plylex.LexToken()
	tok.type = typ
	tok.value = value
	tok.lineno = like.lineno
	tok.lexpos = like.lexpos
	return tok

def ConsolidateTokens(toks):
	"""
	Fold ARR_START ... ARR_END into a single ARR token whose value is the list of
	tokens inside, and likewise DICT_START ... DICT_END into a DICT token whose value
	maps each key (str) to its value token. Nesting is handled with a stack of open brackets.
	"""

	# Each entry is (opening token, tokens collected so far); the bottom entry is the top level
	stack = [(None, [])]

	for tok in toks:
		if tok.type in ('ARR_START', 'DICT_START'):
			stack.append( (tok, []) )

		elif tok.type in ('ARR_END', 'DICT_END'):
			opener, items = stack.pop()

			if opener == None:
				raise CMapLexError("Unexpected '%s'" % tok.value, tok.lineno, tok.lexpos)
			if CLOSERS[opener.type] != tok.type:
				raise CMapLexError("Mismatched '%s' for '%s'" % (tok.value, opener.value), tok.lineno, tok.lexpos)

			if opener.type == 'ARR_START':
				newtok = _MakeToken('ARR', items, opener)
			else:
				newtok = _MakeToken('DICT', _PairEntries(items, opener), opener)

			stack[-1][1].append(newtok)

		else:
			stack[-1][1].append(tok)

	if len(stack) > 1:
		opener = stack[-1][0]
		raise CMapLexError("Unterminated '%s'" % opener.value, opener.lineno, opener.lexpos)

	return stack[0][1]

def _PairEntries(items, opener):
	if len(items) % 2:
		raise CMapLexError("Dictionary has a key without a value", opener.lineno, opener.lexpos)

	ret = {}
	for i in range(0, len(items), 2):
		key = items[i]
		if key.type != 'NAME':
			raise CMapLexError("Dictionary key must be a name, found %s" % TokenKind(key), key.lineno, key.lexpos)

		try:
			ret[ key.value.decode('utf-8') ] = items[i+1]
		except UnicodeDecodeError:
			raise CMapLexError("Invalid UTF-8 in dictionary key", key.lineno, key.lexpos)

	return ret

# --------------------------------------------------------------------------------
# Token type checks used by the interpreter

def TokenKind(tok):
	return KINDS.get(tok.type, tok.type)

def ExpectLiteral(tok):
	if tok.type != 'LIT':
		raise CMapTypeError('LiteralString', TokenKind(tok))
	return tok.value

def ExpectName(tok):
	if tok.type != 'NAME':
		raise CMapTypeError('Name', TokenKind(tok))
	return tok.value

def ExpectInteger(tok):
	if tok.type != 'INT':
		raise CMapTypeError('Integer', TokenKind(tok))
	return tok.value
