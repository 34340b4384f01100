"""
Module/Scope Tracker.

Scopes under construction live in an arena (a plain list) and get referred to by their index.
The stack of open scopes is a stack of those indices, and each builder lists its children the
same way. Nothing is a real tree until `finish`, at which point the whole thing gets frozen
into model.Scope objects from the root down.

Test scopes (module blocks without a name) get a builder like anything else, so that whatever
is declared inside them gets checked for conflicts in its own right. They just never make it
into the finished model.
"""

from typing import NamedTuple, Optional
from ..model import Scope, Visibility, DocComment
from ..support.foundation import allocate
from ..support.symtab import NameSpace, SymbolAlreadyExists
from .interface import Options, DEFAULT_OPTIONS, UnmatchedBlockCloser, UnterminatedBlock, IdentifierConflict

ROOT = 0
UNNAMED = object() # The namespace key which every unnamed data definition in a scope shares.

class Declaration(NamedTuple):
	kind: str # 'binding', 'data', 'import', or 'module'
	line_nr: int
	index: int # Position within the builder's list for that kind.

class ScopeBuilder:
	def __init__(self, name:Optional[str], first_line:int, doc:Optional[DocComment], test:bool):
		self.name, self.first_line, self.doc, self.test = name, first_line, doc, test
		self.last_line = first_line
		if test: place = "the test scope opened at line %d"%first_line
		elif name is None: place = "the top level of the file"
		else: place = "module %s"%name
		self.names = NameSpace(place=place)
		self.bindings, self.data, self.children, self.imports, self.sections = [], [], [], [], []

class ScopeTracker:
	def __init__(self, options:Options=DEFAULT_OPTIONS):
		self.options = options
		self.arena = []
		self.stack = []
		allocate(self.arena, ScopeBuilder(None, 1, None, False))

	@property
	def depth(self) -> int:
		return len(self.stack)

	def current(self) -> ScopeBuilder:
		return self.arena[self.stack[-1] if self.stack else ROOT]

	def declare(self, name, line_nr:int, kind:str, index:int) -> Optional[Declaration]:
		"""
		Reserve a name in the current scope. Return the declaration this one shadows, if any.
		Pass `None` as the name for an unnamed data definition.
		"""
		key = UNNAMED if name is None else name
		names = self.current().names
		declaration = Declaration(kind, line_nr, index)
		try: names.declare(key, declaration)
		except SymbolAlreadyExists as e:
			previous = e.existing
			if self.options.allow_shadowing and kind == previous.kind == 'binding':
				return names.shadow(key, declaration._replace(index=previous.index))
			if name is None: message = "There is already an unnamed data definition in %s."%names.place
			else: message = "The name %r is already declared in %s."%(name, names.place)
			raise IdentifierConflict(line_nr, message, name=name, previous_line=previous.line_nr) from None

	def open(self, name:Optional[str], line_nr:int, doc:Optional[DocComment]=None) -> int:
		""" Push a new scope as a child of the current one. A name of None means a test scope. """
		parent = self.current()
		if name is not None: self.declare(name, line_nr, 'module', len(parent.children))
		handle = allocate(self.arena, ScopeBuilder(name, line_nr, doc, name is None))
		parent.children.append(handle)
		self.stack.append(handle)
		return handle

	def close(self, line_nr:int):
		if not self.stack:
			raise UnmatchedBlockCloser(line_nr, "This closes a module block, but there is none open.")
		self.arena[self.stack.pop()].last_line = line_nr

	def add_binding(self, binding):
		scope = self.current()
		previous = self.declare(binding.name, binding.first_line, 'binding', len(scope.bindings))
		if previous is None: scope.bindings.append(binding)
		else: scope.bindings[previous.index] = binding

	def add_data(self, definition):
		scope = self.current()
		self.declare(definition.name, definition.first_line, 'data', len(scope.data))
		scope.data.append(definition)

	def add_import(self, an_import):
		scope = self.current()
		if an_import.name is not None: self.declare(an_import.name, an_import.line, 'import', len(scope.imports))
		scope.imports.append(an_import)

	def add_section(self, doc:DocComment):
		self.current().sections.append(doc)

	def finish(self, last_line:int) -> Scope:
		if self.stack:
			opened_at = self.arena[self.stack[-1]].first_line
			raise UnterminatedBlock(last_line, "A module block is still open at the end of the file.", opened_at=opened_at)
		self.arena[ROOT].last_line = last_line
		return self.__build(ROOT)

	def __build(self, handle:int) -> Scope:
		builder = self.arena[handle]
		scope = Scope(
			name=builder.name,
			visibility=Visibility.PUBLIC,
			doc=builder.doc,
			bindings=tuple(builder.bindings),
			data=tuple(builder.data),
			scopes=tuple(self.__build(h) for h in builder.children if not self.arena[h].test),
			imports=tuple(builder.imports),
			sections=tuple(builder.sections),
			first_line=builder.first_line,
			last_line=builder.last_line,
		)
		if handle != ROOT and not scope.has_public_items():
			scope = scope._replace(visibility=Visibility.PRIVATE)
		return scope
