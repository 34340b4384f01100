"""
Extraction Interface Definitions: the agreed glyphs, the knobs, and the ways a file can fail.

Structural problems (blocks that do not pair up, names declared twice, data definitions that
cannot be read) abort extraction for the one file in which they occur. They are exceptions,
all derived from ExtractionError, and each knows the line where things went wrong.

Cosmetic problems (odd markdown, a signature line that almost parses) never abort anything.
They become Issue records with NOTICE or WARNING severity and the text degrades to prose.
"""

from typing import NamedTuple, Optional
from ..support.failureprone import Issue, Evidence, Severity

COMMENT_PREFIX = '#'
DOC_SECTION_MARKER = '!doc'

PUBLIC_BINDING = ('←', '=')
PRIVATE_BINDING = ('↚', '=~')

# Each sigil counts for this many macro arguments.
ARITY_SIGILS = {'!': 1, '‼': 2}

MODULE_OPENER = '┌─╴'
MODULE_CLOSER = '└─╴'
ASCII_MODULE_DELIMITER = '---'

DATA_MARKER = '~'
VARIANT_MARKER = '|'
UNBOXED_BRACKETS = ('[', ']')
BOXED_BRACKETS = ('{', '}')

class Options(NamedTuple):
	"""
	max_macro_arity: the largest number of arguments a macro's sigils may spell out.
	strict_arity: if set, exceeding max_macro_arity aborts the file; otherwise the arity is capped with a warning.
	allow_shadowing: if set, a binding may re-use the name of an earlier sibling binding.
	doc_marker: the comment content that switches a comment run into markdown mode.
	"""
	max_macro_arity: int = 8
	strict_arity: bool = True
	allow_shadowing: bool = False
	doc_marker: str = DOC_SECTION_MARKER

DEFAULT_OPTIONS = Options()

class ExtractionError(ValueError):
	""" Base class of all exceptions that abort extraction of a file. """
	phase = "extracting documentation"

	def __init__(self, line_nr:int, message:str, filename:Optional[str]=None):
		super().__init__(line_nr, message)
		self.line_nr, self.message, self.filename = line_nr, message, filename

	def __str__(self):
		where = "line %d"%self.line_nr if self.filename is None else "%s, line %d"%(self.filename, self.line_nr)
		return "%s: %s"%(where, self.message)

	def as_issue(self) -> Issue:
		return Issue(self.phase, Severity.ERROR, self.message, {self.filename: [Evidence(self.line_nr)]})

class UnmatchedBlockCloser(ExtractionError):
	phase = "matching module blocks"

class UnterminatedBlock(ExtractionError):
	phase = "matching module blocks"

	def __init__(self, line_nr:int, message:str, filename:Optional[str]=None, *, opened_at:int):
		super().__init__(line_nr, message, filename)
		self.opened_at = opened_at

	def as_issue(self) -> Issue:
		evidence = [Evidence(self.opened_at, caption="opened here"), Evidence(self.line_nr, caption="still open here")]
		return Issue(self.phase, Severity.ERROR, self.message, {self.filename: evidence})

class MalformedDataDefinition(ExtractionError):
	phase = "reading a data definition"

class IdentifierConflict(ExtractionError):
	phase = "declaring names"

	def __init__(self, line_nr:int, message:str, filename:Optional[str]=None, *, name:Optional[str], previous_line:int):
		super().__init__(line_nr, message, filename)
		self.name, self.previous_line = name, previous_line

	def as_issue(self) -> Issue:
		evidence = [Evidence(self.previous_line, caption="first declared here"), Evidence(self.line_nr, caption="declared again here")]
		return Issue(self.phase, Severity.ERROR, self.message, {self.filename: evidence})

class MacroArityError(ExtractionError):
	phase = "counting macro arguments"
