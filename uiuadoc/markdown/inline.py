"""
Inline runs: the bits of markdown that live inside a paragraph, heading, list item or table cell.

The approach is a single left-to-right search with one alternation pattern. Whatever the pattern
does not recognize is literal text, so a stray asterisk or an unclosed bracket simply shows up
as itself. Nothing in here can fail.

Emphasis, strikethrough and link text get analyzed recursively, which gives nesting for free.
Code spans do not: their content is literal by definition.
"""

import re
from .nodes import Text, Emphasis, Strikethrough, InlineCode, Link

INLINE = re.compile(r"""
	(?P<escape> \\ (?P<escaped> [!-/:-@\[-`{-~] ) )
	| (?P<code> (?P<ticks> `+ ) (?P<code_text> .+? ) (?P=ticks) (?!`) )
	| (?P<link> \[ (?P<link_text> [^\]]* ) \] \( \s* (?P<url> [^\s()]+ ) (?: \s+ "(?P<title> [^"]* )" )? \s* \) )
	| (?P<strike> ~~ (?=\S) (?P<strike_text> .+? ) (?<=\S) ~~ )
	| (?P<emphasis> (?P<stars> \*{1,3} ) (?=[^\s*]) (?P<emphasis_text> .+? ) (?<=[^\s*]) (?P=stars) (?!\*) )
""", re.VERBOSE | re.DOTALL)

def parse_inline(text:str) -> tuple:
	""" Break a run of text into a tuple of inline nodes. Adjacent literal text is merged. """
	runs = []
	literal = []
	def flush():
		joined = ''.join(literal)
		literal.clear()
		if joined: runs.append(Text(joined))
	position = 0
	for match in INLINE.finditer(text):
		literal.append(text[position:match.start()])
		position = match.end()
		kind = match.lastgroup
		if kind == 'escape':
			literal.append(match.group('escaped'))
			continue
		flush()
		if kind == 'code':
			runs.append(InlineCode(_trim_code(match.group('code_text'))))
		elif kind == 'link':
			runs.append(Link(parse_inline(match.group('link_text')), match.group('url'), match.group('title')))
		elif kind == 'strike':
			runs.append(Strikethrough(parse_inline(match.group('strike_text'))))
		else:
			runs.append(Emphasis(len(match.group('stars')), parse_inline(match.group('emphasis_text'))))
	literal.append(text[position:])
	flush()
	return tuple(runs)

def _trim_code(text:str) -> str:
	# One space of padding on both sides is stripped, so that `` `x` `` can show a backtick.
	if len(text) > 2 and text.startswith(' ') and text.endswith(' ') and text.strip():
		return text[1:-1]
	return text
