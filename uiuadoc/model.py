"""
The documentation model: what the extractor produces and what a renderer consumes.

Everything in here is immutable. Sequences are tuples, so whole trees compare by value,
which is what makes the interchange round-trip checkable with a plain ==.

A Scope is a node of the module tree: the root of a file, or a named module inside it.
It owns its bindings, data definitions, imports, child scopes and any free-standing
documentation sections, each in source order.
"""

from enum import Enum
from typing import NamedTuple, Optional

class Visibility(Enum):
	PUBLIC = 'public'
	PRIVATE = 'private'

class BindingKind(Enum):
	FUNCTION = 'function'
	CONSTANT = 'constant'
	MACRO = 'macro'

class Representation(Enum):
	UNBOXED = 'unboxed'
	BOXED = 'boxed'

class Signature(NamedTuple):
	""" The names from a `Result ? Input1 Input2` doc-comment line. """
	outputs: tuple
	inputs: tuple

class StackSignature(NamedTuple):
	""" The numbers from a `|2.1` annotation at the head of a function body. """
	inputs: int
	outputs: int = 1

class DocComment(NamedTuple):
	summary: Optional[str]
	signature: Optional[Signature]
	text: str
	markdown: Optional[tuple] # Markdown nodes, only if the comment had the doc-section marker.
	first_line: int

class Binding(NamedTuple):
	name: str # Including any arity sigils, as written.
	visibility: Visibility
	kind: BindingKind
	arity: int # Macro arguments; zero unless kind is MACRO.
	code_macro: bool
	stack_signature: Optional[StackSignature]
	doc: Optional[DocComment]
	first_line: int
	last_line: int
	code: str

	@property
	def base_name(self) -> str:
		return self.name.rstrip('!‼')

	@property
	def hidden(self) -> bool:
		return self.visibility is Visibility.PRIVATE

	@property
	def inputs(self) -> Optional[int]:
		""" Best known number of inputs: declared stack signature first, then the doc-comment's names. """
		if self.stack_signature is not None: return self.stack_signature.inputs
		if self.doc is not None and self.doc.signature is not None: return len(self.doc.signature.inputs)

class Field(NamedTuple):
	name: str
	validator: Optional[str] = None
	default: Optional[str] = None

class DataDefinition(NamedTuple):
	name: Optional[str] # None means this is the scope's unnamed data definition.
	representation: Representation
	fields: tuple
	variant: bool
	call: Optional[str] # Code following the field list makes this a data function.
	doc: Optional[DocComment]
	first_line: int
	last_line: int

class Import(NamedTuple):
	path: str
	name: Optional[str] # The module binding, for `Name ~ "path"`.
	names: tuple # Names pulled in, for `~ "path" ~ A B`.
	line: int

class Scope(NamedTuple):
	name: Optional[str]
	visibility: Visibility
	doc: Optional[DocComment]
	bindings: tuple
	data: tuple
	scopes: tuple
	imports: tuple
	sections: tuple # Free-standing DocComments which carry markdown.
	first_line: int
	last_line: int

	@property
	def hidden(self) -> bool:
		return self.visibility is Visibility.PRIVATE

	def has_public_items(self) -> bool:
		return (
			any(not b.hidden for b in self.bindings)
			or bool(self.data or self.imports or self.sections)
			or any(s.has_public_items() for s in self.scopes)
		)

	def visible_bindings(self) -> tuple:
		return tuple(b for b in self.bindings if not b.hidden)
