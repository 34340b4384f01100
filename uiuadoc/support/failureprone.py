"""
Showing people where their Uiua files go wrong.

Extraction thinks in lines, not character offsets: every declaration, comment and block
marker lives on a line of its own. So the location that travels with an error or an issue
is a 1-based line number, plus an optional column and width for the caret underline.

A SourceText holds the content of one file and hands out its lines. Reading the file is
somebody else's job: by the time a SourceText exists, the I/O is over.

Uiua itself accepts \n, \r\n and a bare \r as line breaks, so the "normal" mode does too.
The other modes exist for text that must be split more narrowly.
"""

import re, sys
from typing import NamedTuple, Any, Optional
from enum import Enum

LINEBREAK_MODE = {
	'normal': re.compile(r'\r\n?|\n'),
	'unix': re.compile(r'\n'),
	'dos': re.compile(r'\r\n'),
}

class Severity(Enum):
	NOTICE = "Notice"
	WARNING = "Warning"
	ERROR = "Error"

class Evidence(NamedTuple):
	line_nr: int
	column: int = 0
	width: int = 0
	caption: str = "here"

class Issue(NamedTuple):
	"""
	One problem worth telling somebody about.

	phase: what the extractor was doing, as in "Error while reading a data definition".
	severity: ERROR aborts the file; the others are recorded and extraction carries on.
	description: the plain-language complaint.
	evidence: maps a key (a file name, or None while the name is not yet known)
		to the list of places in that file which bear on the problem.
	"""
	phase: str
	severity: Severity
	description: str
	evidence: dict[Any, list[Evidence]]

	def headline(self) -> str:
		return "%s while %s: %s"%(self.severity.value, self.phase, self.description)

	def as_text(self, fetch) -> str:
		"""
		Render the issue with an excerpt for each piece of evidence.
		`fetch` maps an evidence key to its SourceText, or to None when the text is gone,
		in which case the bare line numbers have to do.
		"""
		lines = [self.headline()]
		for key, evidence in self.evidence.items():
			source = fetch(key)
			if source is None: lines.extend("  at line %d"%e.line_nr for e in evidence)
			else: lines.extend(source.excerpt(evidence))
		return "\n".join(lines)

	def emit(self, fetch):
		print(self.as_text(fetch), file=sys.stderr)

	def first_line(self) -> Optional[int]:
		for evidence in self.evidence.values():
			if evidence: return evidence[0].line_nr
		return None

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" The line itself, then a caret underline beneath the span of interest. Tabs stay tabs so the caret lines up. """
	margin = ''.join('\t' if c == '\t' else ' ' for c in prefix + single_line[:start])
	carets = '^' * max(1, min(width, len(single_line) - start))
	return "%s%s\n%s%s %s"%(prefix, single_line.rstrip(), margin, carets, caption)

class SourceText:
	""" The text of one Uiua file, split into lines on demand. """
	def __init__(self, content:str, line_breaks='normal', filename:str=None):
		self.content = content
		self.filename = filename
		self.line_breaks = line_breaks
		self.__lines = None

	@property
	def lines(self) -> tuple[str, ...]:
		if self.__lines is None:
			lines = LINEBREAK_MODE[self.line_breaks].split(self.content)
			if lines[-1] == '': lines.pop() # A final line break does not start another line.
			self.__lines = tuple(lines)
		return self.__lines

	def line_of_text(self, row:int) -> str:
		""" Rows count from one. Out-of-range rows come back empty so a report never fails. """
		if 1 <= row <= len(self.lines): return self.lines[row-1]
		return ''

	def excerpt(self, evidence) -> list[str]:
		heading = ["Excerpt from %s :"%self.filename] if self.filename else []
		return heading + [
			illustration(self.line_of_text(e.line_nr), e.column, e.width, prefix='% 6d :'%e.line_nr, caption=e.caption)
			for e in evidence
		]
