"""
CMap command-line interface to inspect CMap resources and look up codes.
"""

# System libs
import argparse, cmd, logging, os, sys, traceback

# Libraries
from .. import load
from ..errors import CMapError, NoUnicodeMappingFound

__all__ = ['Run', 'CMapCmd', 'CMapCmdState', 'CmdError']

def format_cols(dat, pre="  ", celldiv=" ", rowdiv="\n", post=""):
	"""
	Simple method for formating multi-column data.
	"""

	# No data = no output
	if not len(dat):
		return ""

	# Create list of max column sizes
	maxes = [0] * len(dat[0])
	for row in dat:
		for j in range(len(row)):
			if maxes[j] < len(row[j]):
				maxes[j] = len(row[j])

	# Now format each row as a collection of cells
	ret = []
	for row in dat:
		retrow = []
		for j in range(len(row)):
			retrow.append( ("%%%ds" % maxes[j]) % row[j] )

		ret.append(pre + celldiv.join(retrow) + post)

	# Newline between each row
	return rowdiv.join(ret)

def parse_hex(line):
	"""
	Bytes of a hex string typed by the user, with or without angle brackets and spaces.
	"""
	txt = line.strip().lstrip('<').rstrip('>').replace(' ', '')
	if not len(txt):
		raise CmdError("Expected a hex code")

	try:
		return bytes.fromhex(txt)
	except ValueError:
		raise CmdError("Invalid hex code '%s'" % line.strip())


class CmdError(Exception):
	"""
	Catching this exception results in the message being printed.
	Other exceptions caught result in the full traceback being printed.
	"""

	def __init__(self, message):
		self.message = message
		super().__init__(message)

class CMapCmdState:
	"""
	Handles and maintains the CLI state.
	This is so that that is separate from the actual CLI parsing.
	"""

	# Opened files as (name, absolute path) and their CMap objects keyed by name
	_files = None
	_cmaps = None

	# Name of the CMap that queries run against
	_current = None

	# Passed on to load()
	strict = False

	def __init__(self, strict=False):
		self._files = []
		self._cmaps = {}
		self._current = None
		self.strict = strict

	def quit(self):
		self._files = []
		self._cmaps.clear()
		self._current = None

	def prompt(self):
		if self._current:
			return "%s $ " % self._current
		else:
			return "$ "

	def _get_current(self):
		if self._current == None:
			raise CmdError("No CMap selected, open or use one first")

		return self._cmaps[self._current]

	# ---------------------------------------------------------------
	# Commands

	def open(self, item):
		f = item.strip()
		if not len(f):
			raise CmdError("Expected a file name")

		absf = os.path.abspath(f)
		fname = os.path.basename(absf)

		if fname in self._cmaps:
			raise CmdError("Cannot open more than one file with the same filename: '%s'" % f)

		try:
			c = load(absf, strict=self.strict)
		except CMapError as e:
			raise CmdError(e.message)

		self._files.append( (fname,absf) )
		self._cmaps[fname] = c
		self._current = fname

	def close(self, item):
		item = item.strip()

		for i in range(len(self._files)):
			if self._files[i][0] == item:
				del self._files[i]
				del self._cmaps[item]

				if self._current == item:
					self._current = None
				return

		raise CmdError("File '%s' not found, cannot close it" % item)

	def use(self, item):
		item = item.strip()
		if item not in self._cmaps:
			raise CmdError("File '%s' not opened, open it first to use it" % item)

		self._current = item

	def ls(self):
		dat = []
		for fname,absf in self._files:
			c = self._cmaps[fname]
			mark = '*' if fname == self._current else ' '
			dat.append( (mark, fname, c.name or '-', "%d codespaces" % len(c.codespace_ranges)) )

		ret = "total %d\n" % len(self._files)
		ret += format_cols(dat, celldiv="  ")
		return ret

	def info(self):
		c = self._get_current()

		dat = [
			('Name', c.name),
			('Version', c.version),
			('Type', str(c.cmap_type)),
			('WMode', c.writing_mode.name),
			('Registry', c.registry),
			('Ordering', c.ordering),
			('Supplement', str(c.supplement)),
			('UseCMap', c.usecmap or '-'),
			('Unicode', "%d chars, %d ranges" % (len(c.unicode_mapping), len(c.unicode_range_mapping))),
			('CID', "%d chars, %d ranges" % (len(c.cid_mapping), len(c.cid_range_mapping))),
		]
		return format_cols(dat, celldiv="  ")

	def codespace(self):
		c = self._get_current()

		dat = []
		for r in c.codespace_ranges:
			w = r.len*2
			dat.append( ("<%0*x>" % (w, r.frm), "<%0*x>" % (w, r.to), "%d bytes" % r.len) )

		return format_cols(dat, celldiv="  ")

	def cid(self, line):
		c = self._get_current()
		code = int.from_bytes(parse_hex(line), 'big')
		return "%d" % c.codepoint_to_cid(code)

	def unicode(self, line):
		c = self._get_current()
		code = int.from_bytes(parse_hex(line), 'big')

		try:
			return repr(c.codepoint_to_unicode(code))
		except NoUnicodeMappingFound as e:
			raise CmdError(e.message)

	def decode(self, line):
		"""
		Split a hex byte string into codes and show each code's CID and unicode.
		"""
		c = self._get_current()

		dat = []
		for sub,code in c.iter_codepoints(parse_hex(line)):
			try:
				u = repr(c.codepoint_to_unicode(code))
			except NoUnicodeMappingFound:
				u = '-'

			dat.append( ("<%s>" % sub.hex(), "cid=%d" % c.codepoint_to_cid(code), u) )

		return format_cols(dat, celldiv="  ")

class CMapCmd(cmd.Cmd):
	"""
	CLI interface handling class.
	Explicitly does not handle or store any state information.
	Utilizes the CMapCmdState class to store and maintain state.
	"""

	state = None

	def get_prompt(self): return self.state.prompt()
	prompt = property(get_prompt)

	def __init__(self, *args, strict=False, **kargs):
		cmd.Cmd.__init__(self, *args, **kargs)

		self.state = CMapCmdState(strict=strict)

	def setinitargs(self, args):
		for arg in args:
			self.onecmd("open %s" % arg)

	# ----------------------------------------------------------------------------------------
	# ----------------------------------------------------------------------------------------

	def onecmd(self, line):
		try:
			return cmd.Cmd.onecmd(self, line)

		except SystemExit:
			print("", file=self.stdout)
			raise
		except CmdError as e:
			# Print just the message instead of the whole exception traceback
			print(e.message, file=self.stdout)
		except Exception:
			traceback.print_exc()
			# That's it, just print and continue on with life

	def _print(self, ret):
		if ret:
			print(ret, file=self.stdout)

	# ----------------------------------------------------------------------------------------
	# ----------------------------------------------------------------------------------------
	# Commands

	def do_open(self, line):
		"""Open a CMap file and select it."""
		self._print(self.state.open(line))

	def do_close(self, line):
		"""Close a CMap file."""
		self._print(self.state.close(line))

	def do_use(self, line):
		"""Select an opened CMap file for queries."""
		self._print(self.state.use(line))

	def do_ls(self, line):
		"""List opened CMap files"""
		self._print(self.state.ls())

	def do_info(self, line):
		"""Print metadata of the selected CMap"""
		self._print(self.state.info())

	def do_codespace(self, line):
		"""Print codespace ranges of the selected CMap"""
		self._print(self.state.codespace())

	def do_cid(self, line):
		"""Map a hex code to its CID (e.g., cid 0041)"""
		self._print(self.state.cid(line))

	def do_unicode(self, line):
		"""Map a hex code to unicode (e.g., unicode <0041>)"""
		self._print(self.state.unicode(line))

	def do_decode(self, line):
		"""Split a hex byte string into codes and map each one"""
		self._print(self.state.decode(line))

	def do_quit(self, line):
		"""Quit the command-line interface"""
		self.state.quit()

		sys.exit(0)
	def do_EOF(self, line):
		"""Quit the command-line interface (ctrl-d)"""
		self.do_quit(line)

def Run(args=None):
	p = argparse.ArgumentParser(description="Inspect CMap resources")
	p.add_argument('-v', '--verbose', action='store_true', help="Log debug output")
	p.add_argument('--strict', action='store_true', help="Fail on unknown operators")
	p.add_argument('files', nargs='*', help="CMap files to open")
	opts = p.parse_args(args)

	if opts.verbose:
		logging.basicConfig(level=logging.DEBUG)

	c = CMapCmd(strict=opts.strict)
	c.setinitargs(opts.files)
	c.cmdloop(intro="CMap command-line interface. Type 'help' or '?' to get available commands.")
