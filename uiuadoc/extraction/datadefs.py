"""
Data Definition Parser.

A data definition is a `~` (or a `|` for a variant), an optional name, and a field list:

	~Point [X Y]                          unboxed: bare names only
	~Person {Name: □°1type                boxed: each field may carry a validator and a default,
	         Age ← 0}                     and a validator runs to the end of its line
	~Pair [A B] ⊂                         anything after the closing bracket is the call body

Validators and defaults are raw Uiua and are kept as text, verbatim apart from trailing
comments. A validator runs from its colon to the end of the line, except that a top-level `←`
splits off a default. Field order is exactly source order; it matters for positional construction.
"""

import re
from typing import Optional
from ..model import DataDefinition, Field, Representation, DocComment
from .declarations import DataLine, NAME
from .interface import MalformedDataDefinition, UnterminatedBlock, PUBLIC_BINDING
from .lexical import strip_comment, find_closer, find_top_level, bracket_depth

FIELD_NAME = re.compile(r'\s*(%s)'%NAME)
DEFAULT_ARROW = PUBLIC_BINDING[0]

def read_definition(data:DataLine, line_nr:int, lines, doc:Optional[DocComment]=None) -> DataDefinition:
	"""
	`lines` are all the lines of the file and `line_nr` (counting from one) is where `data` came from.
	The field list may run on for several lines; the result's `last_line` tells how far it went.
	"""
	if data.representation is None:
		return DataDefinition(data.name, Representation.UNBOXED, (), data.variant, None, doc, line_nr, line_nr)
	body = []
	text, current, depth = data.rest, line_nr, 1
	while True:
		closer = find_closer(text, depth)
		if closer is not None: break
		body.append((current, text))
		depth = bracket_depth(text, depth)
		if current >= len(lines):
			raise UnterminatedBlock(current, "This data definition's field list never closes.", opened_at=line_nr)
		text = lines[current]
		current += 1
	body.append((current, text[:closer]))
	call = strip_comment(text[closer+1:]).strip() or None
	fields = parse_fields(data.representation, body)
	return DataDefinition(data.name, data.representation, fields, data.variant, call, doc, line_nr, current)

def parse_fields(representation:Representation, body) -> tuple:
	""" `body` is a sequence of (line_nr, text) pairs: the text between the brackets, line by line. """
	fields, seen = [], {}
	for line_nr, text in body:
		code = strip_comment(text)
		if representation is Representation.UNBOXED: found = _bare_names(line_nr, code)
		else: found = _boxed_fields(line_nr, code)
		for field in found:
			if field.name in seen:
				message = "Field %r appears more than once; it was first given on line %d."%(field.name, seen[field.name])
				raise MalformedDataDefinition(line_nr, message)
			seen[field.name] = line_nr
			fields.append(field)
	return tuple(fields)

def _bare_names(line_nr, code):
	if find_top_level(code, ':') is not None or find_top_level(code, DEFAULT_ARROW) is not None:
		raise MalformedDataDefinition(line_nr, "Unboxed field lists hold bare names only; validators and defaults need braces.")
	for token in code.split():
		if not re.fullmatch(NAME, token):
			raise MalformedDataDefinition(line_nr, "Expected a field name, but found %r."%token)
		yield Field(token)

def _boxed_fields(line_nr, code):
	position = 0
	while code[position:].strip():
		m = FIELD_NAME.match(code, position)
		if not m:
			raise MalformedDataDefinition(line_nr, "Expected a field name, but found %r."%code[position:].split()[0])
		name, position = m.group(1), m.end()
		rest = code[position:].lstrip()
		if rest.startswith(':'):
			yield _validated_field(line_nr, name, rest[1:])
			return
		if rest.startswith(DEFAULT_ARROW):
			yield Field(name, default=_required(line_nr, rest[len(DEFAULT_ARROW):], "Field %r has an empty default."%name))
			return
		if rest and not code[position].isspace():
			raise MalformedDataDefinition(line_nr, "Expected a field name, but found %r."%rest.split()[0])
		yield Field(name)

def _validated_field(line_nr, name, text) -> Field:
	split = find_top_level(text, DEFAULT_ARROW)
	if split is None: validator, default = text, None
	else:
		validator = text[:split]
		default = _required(line_nr, text[split+len(DEFAULT_ARROW):], "Field %r has an empty default."%name)
	return Field(name, _required(line_nr, validator, "Field %r has an empty validator."%name), default)

def _required(line_nr, text, complaint) -> str:
	text = text.strip()
	if not text: raise MalformedDataDefinition(line_nr, complaint)
	return text
