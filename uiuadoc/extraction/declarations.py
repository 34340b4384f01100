"""
Declaration Tokenizer: what sort of thing does one line of code declare?

The answer is one of a handful of NamedTuple shapes, and `Other` is always a valid answer.
Nothing in here raises: a line that cannot be understood is simply not a declaration.
Trailing comments come off before any decision is made.

This works on single lines. Whether a declaration continues onto later lines (open brackets,
multi-line field lists) is for the assembler and the data-definition parser to work out.
"""

import re
from typing import NamedTuple, Optional
from ..model import Visibility, Representation, StackSignature
from . import interface
from .lexical import strip_comment

NAME = r'[A-Za-z][A-Za-z0-9]*(?:[₀-₉]+|__\d+)?'
SIGILS = '[%s]*'%''.join(interface.ARITY_SIGILS)

def _alternatives(options) -> str:
	# Longest first, so that `=~` beats `=`.
	return '|'.join(re.escape(o) for o in sorted(options, key=len, reverse=True))

BINDING = re.compile(r'\s*(?P<name>%s)(?P<sigils>%s)\s*(?P<operator>%s)[ \t]?(?P<body>.*)$'%(
	NAME, SIGILS, _alternatives(interface.PUBLIC_BINDING + interface.PRIVATE_BINDING),
))
MODULE_OPEN = re.compile(r'\s*(?P<marker>%s|%s)\s*(?P<name>%s)?\s*$'%(
	re.escape(interface.MODULE_OPENER), re.escape(interface.ASCII_MODULE_DELIMITER), NAME,
))
MODULE_CLOSE = re.compile(r'\s*%s\s*$'%re.escape(interface.MODULE_CLOSER))
QUOTED = r'"(?:[^"\\]|\\.)*"'
IMPORT_NAMES = re.compile(r'\s*~\s*(?P<path>%s)\s*(?:~\s*(?P<names>.*?))?\s*$'%QUOTED)
IMPORT_MODULE = re.compile(r'\s*(?P<name>%s)\s*~\s*(?P<path>%s)\s*$'%(NAME, QUOTED))
DATA = re.compile(r'\s*(?P<marker>[~|])\s*(?P<name>%s)?\s*(?P<rest>.*)$'%NAME)
STACK_SIGNATURE = re.compile(r'\s*\(?\s*\|(?P<inputs>\d+)(?:\.(?P<outputs>\d+))?')

class BindingLine(NamedTuple):
	name: str # With sigils
	arity: int
	visibility: Visibility
	body: str # Everything after the binding operator, trailing comment included.

class DataLine(NamedTuple):
	name: Optional[str]
	variant: bool
	representation: Optional[Representation] # None if there is no field list at all.
	rest: str # Text just past the opening bracket, to the end of the line.

class ImportLine(NamedTuple):
	path: str
	name: Optional[str]
	names: tuple

class ModuleOpen(NamedTuple):
	name: Optional[str] # None means a test scope.

class ModuleClose(NamedTuple):
	ambiguous: bool # A bare `---` closes if something is open, and opens a test scope otherwise.

class Other(NamedTuple):
	text: str

def classify(line:str):
	code = strip_comment(line)
	if not code.strip(): return Other(line)
	if MODULE_CLOSE.match(code): return ModuleClose(ambiguous=False)
	m = MODULE_OPEN.match(code)
	if m:
		if m.group('marker') == interface.ASCII_MODULE_DELIMITER and m.group('name') is None:
			return ModuleClose(ambiguous=True)
		return ModuleOpen(m.group('name'))
	m = IMPORT_NAMES.match(code)
	if m: return ImportLine(_unquote(m.group('path')), None, tuple((m.group('names') or '').split()))
	m = IMPORT_MODULE.match(code)
	if m: return ImportLine(_unquote(m.group('path')), m.group('name'), ())
	m = BINDING.match(line)
	if m:
		visibility = Visibility.PRIVATE if m.group('operator') in interface.PRIVATE_BINDING else Visibility.PUBLIC
		arity = sum(interface.ARITY_SIGILS[s] for s in m.group('sigils'))
		return BindingLine(m.group('name')+m.group('sigils'), arity, visibility, m.group('body'))
	return _data_line(code) or Other(line)

def _data_line(code:str) -> Optional[DataLine]:
	m = DATA.match(code)
	if not m: return None
	variant = m.group('marker') == interface.VARIANT_MARKER
	name, rest = m.group('name'), m.group('rest')
	if variant and name is None: return None
	if not rest: return DataLine(name, variant, None, '')
	for representation, (opener, closer) in [
		(Representation.UNBOXED, interface.UNBOXED_BRACKETS),
		(Representation.BOXED, interface.BOXED_BRACKETS),
	]:
		if rest.startswith(opener): return DataLine(name, variant, representation, rest[1:])

def _unquote(literal:str) -> str:
	return re.sub(r'\\(.)', r'\1', literal[1:-1])

def stack_signature(body:str) -> Optional[StackSignature]:
	""" Read a `|2` or `|2.1` annotation from the front of a body, if there is one. """
	m = STACK_SIGNATURE.match(body)
	if m:
		outputs = m.group('outputs')
		return StackSignature(int(m.group('inputs')), 1 if outputs is None else int(outputs))

def is_code_macro(body:str) -> bool:
	""" Code macros put a caret straight after the binding arrow; index macros use `^0` placeholders. """
	body = body.lstrip()
	return body.startswith('^') and not body[1:2].isdigit()
