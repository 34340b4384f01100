"""
Comment Block Collector.

A doc-comment is the run of comment lines directly above a declaration. A blank line breaks a
run; that is the assembler's business. This module takes one complete run and works out what
it says:

	* The comment prefix (#) and one following space come off every line.
	* A line whose content is exactly the doc-section marker (normally `!doc`) switches the rest
	  of the run into markdown mode. Those lines go verbatim to the markdown renderer.
	* Before that, the first line shaped like `Result ? Input1 Input2` is the parameter signature.
	* Everything else is prose. The first paragraph of prose is the summary.

Signature lines that almost parse are just prose, with a notice about it. Nothing here is fatal.
"""

import re
from typing import NamedTuple, Optional
from ..model import DocComment, Signature
from ..support.failureprone import Issue, Evidence, Severity
from .interface import COMMENT_PREFIX, DOC_SECTION_MARKER

NAME = r'[A-Za-z][A-Za-z0-9_]*'
SIGNATURE = re.compile(r'\s*(?P<outputs>%s(?:\s+%s)*)\s+\?\s+(?P<inputs>%s(?:\s+%s)*)\s*$'%(NAME, NAME, NAME, NAME))
NEAR_MISS = re.compile(r'(?:^|\s)\?(?:\s|$)')

class CommentLine(NamedTuple):
	line_nr: int
	text: str # With the prefix (and one space) already stripped.

def is_comment(line:str) -> bool:
	return line.lstrip().startswith(COMMENT_PREFIX)

def strip_prefix(line:str) -> str:
	""" Remove the comment marker and at most one space which follows it. """
	text = line.lstrip()[len(COMMENT_PREFIX):]
	return text[1:] if text.startswith(' ') else text

def parse_signature(text:str) -> Optional[Signature]:
	m = SIGNATURE.match(text)
	if m: return Signature(outputs=tuple(m.group('outputs').split()), inputs=tuple(m.group('inputs').split()))

class DocDraft:
	"""
	The collector's verdict on one comment run, short of rendering the markdown.
	The `mode` tells what sort of comment it is: 'markdown' if the doc-section marker appears,
	otherwise 'signature' if a signature was captured, otherwise plain 'prose'.
	"""
	def __init__(self, first_line:int):
		self.first_line = first_line
		self.prose = []
		self.signature = None
		self.markdown = None # A list of CommentLine once the marker shows up.
		self.issues = []

	@property
	def mode(self) -> str:
		if self.markdown is not None: return 'markdown'
		if self.signature is not None: return 'signature'
		return 'prose'

	@property
	def summary(self) -> Optional[str]:
		paragraph = []
		for text in self.__trimmed_prose():
			if not text.strip():
				if paragraph: break
			else: paragraph.append(text.strip())
		return ' '.join(paragraph) or None

	def __trimmed_prose(self) -> list:
		lines = list(self.prose)
		while lines and not lines[0].strip(): lines.pop(0)
		while lines and not lines[-1].strip(): lines.pop()
		return lines

	def finish(self, render=None) -> DocComment:
		"""
		Build the DocComment. `render` turns the markdown lines into nodes; it gets a list of
		CommentLine and should return a tuple of markdown nodes.
		"""
		markdown = None
		if self.markdown is not None:
			markdown = render(self.markdown) if render is not None else ()
		return DocComment(
			summary=self.summary,
			signature=self.signature,
			text='\n'.join(self.__trimmed_prose()),
			markdown=markdown,
			first_line=self.first_line,
		)

def collect(lines, *, marker:str=DOC_SECTION_MARKER) -> Optional[DocDraft]:
	""" Classify a run of CommentLine. An empty run means no doc-comment at all. """
	lines = list(lines)
	if not lines: return None
	draft = DocDraft(lines[0].line_nr)
	for line in lines:
		signature = None if draft.signature else parse_signature(line.text)
		if draft.markdown is not None:
			draft.markdown.append(line)
		elif line.text.strip() == marker:
			draft.markdown = []
		elif signature is not None:
			draft.signature = signature
		else:
			if draft.signature is None and NEAR_MISS.search(line.text):
				draft.issues.append(Issue(
					"collecting doc-comments", Severity.NOTICE,
					"This looks like a signature line, but is not of the form `Result ? Input ...`; keeping it as prose.",
					{None: [Evidence(line.line_nr)]},
				))
			draft.prose.append(line.text)
	return draft
