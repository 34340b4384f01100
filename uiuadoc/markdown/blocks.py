"""
Block structure for the markdown embedded in doc-comments.

This is a sub-pipeline in its own right: it consumes plain strings (the comment prefix has
already been stripped off) and knows nothing of the Uiua source around them. The structure
is a straightforward line-at-a-time state machine, which is plenty for the subset that
doc-comments actually use:

	ATX headings (# .. ######) and setext headings (=== and --- underlines),
	paragraphs, single-level ordered and unordered lists,
	fenced code blocks (``` or ~~~, with an optional language tag),
	pipe tables with per-column alignment.

The contract is that rendering never fails. Anything that does not fit one of the above ends
up as literal paragraph text. When something had to be patched up (an unterminated fence, a
ragged table row) a note is recorded so the caller can report it.
"""

import re
from typing import Optional
from .nodes import Alignment, Heading, Paragraph, OrderedList, UnorderedList, CodeBlock, Table
from .inline import parse_inline

ATX_HEADING = re.compile(r' {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$')
SETEXT_UNDERLINE = re.compile(r' {0,3}(=+|-+)[ \t]*$')
FENCE = re.compile(r' {0,3}(`{3,}|~{3,})[ \t]*([^`\s]*)[^`]*$')
BULLET = re.compile(r' {0,3}[-*+][ \t]+(.*)$')
ORDINAL = re.compile(r' {0,3}(\d{1,9})[.)][ \t]+(.*)$')
TABLE_SEPARATOR_CELL = re.compile(r'[ \t]*(:?)-+(:?)[ \t]*$')
FENCE_CLOSER = re.compile(r' {0,3}(`{3,}|~{3,})[ \t]*$')

class MarkdownRenderer:
	"""
	One renderer may be used for any number of documents; `notes` accumulates across them.
	Each note is a pair of (line offset within the rendered lines, message).
	"""
	def __init__(self):
		self.notes = []

	def render(self, lines) -> tuple:
		lines = list(lines)
		blocks = []
		paragraph = []
		listing = None # A pair (kind, start) while a list is open.
		items = []

		def close_paragraph():
			if paragraph:
				text = '\n'.join(paragraph)
				blocks.append(Paragraph(parse_inline(text)))
				paragraph.clear()

		def close_list():
			nonlocal listing
			if listing is not None:
				kind, start = listing
				runs = tuple(parse_inline('\n'.join(item)) for item in items)
				blocks.append(OrderedList(start, runs) if kind == 'ordered' else UnorderedList(runs))
				items.clear()
				listing = None

		def close_all():
			close_paragraph()
			close_list()

		def open_item(kind, start, text):
			nonlocal listing
			if listing is None or listing[0] != kind:
				close_all()
				listing = (kind, start)
			items.append([text])

		index = 0
		while index < len(lines):
			line = lines[index]
			index += 1
			if not line.strip():
				close_all()
				continue
			fence = FENCE.match(line)
			if fence:
				close_all()
				index = self.__read_fence(lines, index, fence, blocks)
				continue
			heading = ATX_HEADING.match(line)
			if heading:
				close_all()
				text = (heading.group(2) or '').strip()
				blocks.append(Heading(len(heading.group(1)), text, parse_inline(text)))
				continue
			underline = SETEXT_UNDERLINE.match(line)
			if underline and paragraph and listing is None:
				text = '\n'.join(paragraph).strip()
				paragraph.clear()
				level = 1 if underline.group(1).startswith('=') else 2
				blocks.append(Heading(level, text, parse_inline(text)))
				continue
			if '|' in line and index < len(lines):
				table = self.__read_table(lines, index-1)
				if table is not None:
					close_all()
					node, index = table
					blocks.append(node)
					continue
			bullet = BULLET.match(line)
			if bullet:
				open_item('unordered', None, bullet.group(1))
				continue
			ordinal = ORDINAL.match(line)
			if ordinal:
				open_item('ordered', int(ordinal.group(1)), ordinal.group(2))
				continue
			if listing is not None and line[:1] in (' ', '\t'):
				items[-1].append(line.strip())
				continue
			close_list()
			paragraph.append(line.strip())
		close_all()
		return tuple(blocks)

	def __read_fence(self, lines, index, fence, blocks) -> int:
		""" Gobble up a fenced code block, byte-for-byte. Return the index just past its end. """
		marker = fence.group(1)
		language = fence.group(2) or None
		opened_at = index - 1
		body = []
		while index < len(lines):
			line = lines[index]
			index += 1
			closer = FENCE_CLOSER.match(line)
			if closer and closer.group(1)[0] == marker[0] and len(closer.group(1)) >= len(marker):
				break
			body.append(line)
		else:
			self.notes.append((opened_at, "Code fence never closes; it runs to the end of the comment."))
		blocks.append(CodeBlock(language, '\n'.join(body)))
		return index

	def __read_table(self, lines, index) -> Optional[tuple]:
		"""
		If lines[index] is a table header followed by a separator row, read the whole table
		and return (Table, next_index). Otherwise return None and let it be a paragraph.
		"""
		header = split_row(lines[index])
		alignments = separator_alignments(lines[index+1])
		if alignments is None or len(alignments) != len(header): return None
		width = len(header)
		rows = []
		cursor = index + 2
		while cursor < len(lines) and '|' in lines[cursor] and lines[cursor].strip():
			cells = split_row(lines[cursor])
			if len(cells) != width:
				self.notes.append((cursor, "Table row has %d cells where the header has %d."%(len(cells), width)))
				cells = (cells + [''] * width)[:width]
			rows.append(tuple(parse_inline(cell) for cell in cells))
			cursor += 1
		node = Table(
			header=tuple(parse_inline(cell) for cell in header),
			alignments=tuple(alignments),
			rows=tuple(rows),
		)
		return node, cursor

def split_row(line:str) -> list:
	""" Split a table row on unescaped pipes, ignoring the optional outer pipes. """
	line = line.strip()
	if line.startswith('|'): line = line[1:]
	if line.endswith('|') and not line.endswith('\\|'): line = line[:-1]
	cells = re.split(r'(?<!\\)\|', line)
	return [cell.strip().replace('\\|', '|') for cell in cells]

def separator_alignments(line:str) -> Optional[list]:
	""" Read the colon placement of a separator row like `|:--|:-:|--:|`; None if it is not one. """
	if '-' not in line: return None
	alignments = []
	for cell in split_row(line):
		m = TABLE_SEPARATOR_CELL.match(cell)
		if not m: return None
		left, right = bool(m.group(1)), bool(m.group(2))
		if left and right: alignments.append(Alignment.CENTER)
		elif left: alignments.append(Alignment.LEFT)
		elif right: alignments.append(Alignment.RIGHT)
		else: alignments.append(Alignment.DEFAULT)
	return alignments

def render(lines) -> tuple:
	""" Convenience: render without caring about notes. """
	return MarkdownRenderer().render(lines)
