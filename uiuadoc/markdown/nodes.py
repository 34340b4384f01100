"""
The rendering tree for markdown found in doc-comments.

This is deliberately independent of any output format: a renderer turns these into HTML,
the summary pass rewrites headings, and the interchange module turns them into plain dicts.
Nodes are frozen once built. Children are always tuples so that whole trees compare by value.

Block nodes: Heading, Paragraph, OrderedList, UnorderedList, CodeBlock, Table.
Inline nodes: Text, Emphasis, Strikethrough, InlineCode, Link.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

class Alignment(Enum):
	DEFAULT = 'default'
	LEFT = 'left'
	CENTER = 'center'
	RIGHT = 'right'

@dataclass(frozen=True)
class Node:
	""" Base-class of all markdown nodes. """

	def plain_text(self) -> str:
		""" Concatenated text content, with all markup stripped off. """
		return ''.join(child.plain_text() for child in getattr(self, 'children', ()))

### Inline runs:

@dataclass(frozen=True)
class Text(Node):
	text: str
	def plain_text(self): return self.text

@dataclass(frozen=True)
class Emphasis(Node):
	strength: int # 1: *italic*, 2: **bold**, 3: ***both***
	children: tuple

@dataclass(frozen=True)
class Strikethrough(Node):
	children: tuple

@dataclass(frozen=True)
class InlineCode(Node):
	text: str
	def plain_text(self): return self.text

@dataclass(frozen=True)
class Link(Node):
	children: tuple
	url: str
	title: Optional[str] = None

### Blocks:

@dataclass(frozen=True)
class Heading(Node):
	level: int
	text: str # The raw source of the heading, before inline analysis.
	children: tuple

@dataclass(frozen=True)
class Paragraph(Node):
	children: tuple

@dataclass(frozen=True)
class OrderedList(Node):
	start: int
	items: tuple # Each item is a tuple of inline nodes.
	def plain_text(self): return '\n'.join(_runs_text(item) for item in self.items)

@dataclass(frozen=True)
class UnorderedList(Node):
	items: tuple
	def plain_text(self): return '\n'.join(_runs_text(item) for item in self.items)

@dataclass(frozen=True)
class CodeBlock(Node):
	language: Optional[str]
	text: str
	def plain_text(self): return self.text

@dataclass(frozen=True)
class Table(Node):
	header: tuple # Cells; each cell is a tuple of inline nodes.
	alignments: tuple # One Alignment per column.
	rows: tuple # Tuples of cells, each exactly as wide as the header.
	def plain_text(self):
		return '\n'.join(' '.join(_runs_text(cell) for cell in row) for row in (self.header,)+self.rows)

def _runs_text(runs) -> str:
	return ''.join(node.plain_text() for node in runs)

NODE_TYPES = {cls.__name__: cls for cls in (
	Text, Emphasis, Strikethrough, InlineCode, Link,
	Heading, Paragraph, OrderedList, UnorderedList, CodeBlock, Table,
)}
