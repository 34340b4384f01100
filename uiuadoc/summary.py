"""
The summary pass arranges one file's public items the way a documentation page presents them.

It is still format-neutral: no HTML, just groups of model objects in a fixed order, each with
a title and a link anchor. A renderer walks the result top to bottom.

Sections, in order, each only if it has anything in it:
	Documentation: the free-standing markdown sections, with every heading pushed down one level
		so the page title stays the only level-1 heading. Headings that land on level 2 become links.
	Modules: child modules with something public in them, stripped of their private members.
	Bindings: groups of constants, data types, code macros, index macros, and functions by input count.
"""

import dataclasses
from enum import Enum
from typing import NamedTuple
from .model import Scope, BindingKind
from .markdown.nodes import Heading

FUNCTION_GROUPS = ['Noadic', 'Monadic', 'Dyadic', 'Triadic', 'Tetradic', 'Pentadic', 'Hexadic']
DEEPEST_HEADING = 6

class SectionType(Enum):
	DOCUMENTATION = 'documentation'
	MODULES = 'modules'
	BINDINGS = 'bindings'

class Title(NamedTuple):
	title: str
	link_id: str

class ItemLink(NamedTuple):
	title: str
	url: str

class ItemGroup(NamedTuple):
	title: Title
	items: tuple

class DocumentationItem(NamedTuple):
	links: tuple
	markdown: tuple

class DocumentationSection(NamedTuple):
	title: str
	section_type: SectionType
	content: tuple

class DocumentationSummary(NamedTuple):
	title: str
	sections: tuple

def summarize(scope:Scope, title:str) -> DocumentationSummary:
	sections = []
	documentation = tuple(summarize_section(doc.markdown) for doc in scope.sections if doc.markdown is not None)
	if documentation:
		sections.append(DocumentationSection("Documentation", SectionType.DOCUMENTATION, documentation))
	modules = tuple(ItemGroup(Title(m.name, m.name), (m,)) for m in public_modules(scope))
	if modules:
		sections.append(DocumentationSection("Modules", SectionType.MODULES, modules))
	bindings = binding_groups(scope)
	if bindings:
		sections.append(DocumentationSection("Bindings", SectionType.BINDINGS, bindings))
	return DocumentationSummary(title, tuple(sections))

def summarize_section(markdown) -> DocumentationItem:
	links = []
	nodes = []
	for node in markdown:
		if isinstance(node, Heading):
			node = dataclasses.replace(node, level=min(node.level+1, DEEPEST_HEADING))
			if node.level == 2:
				title = node.plain_text()
				links.append(ItemLink(title, '#'+anchor(title)))
		nodes.append(node)
	return DocumentationItem(tuple(links), tuple(nodes))

def anchor(title:str) -> str:
	return title.lower().replace(' ', '-')

def public_modules(scope:Scope) -> list:
	""" Modules worth a mention, with whatever is private inside them filtered out, all the way down. """
	return [
		module._replace(bindings=module.visible_bindings(), scopes=tuple(public_modules(module)))
		for module in scope.scopes if module.has_public_items()
	]

def binding_groups(scope:Scope) -> tuple:
	bindings = scope.visible_bindings()
	def group(title, link_id, items):
		if items: groups.append(ItemGroup(Title(title, link_id), tuple(items)))
	groups = []
	group("Constants", "__constants", [b for b in bindings if b.kind is BindingKind.CONSTANT])
	group("Data types", "__data", scope.data)
	macros = [b for b in bindings if b.kind is BindingKind.MACRO]
	group("Code macros", "__code_macros", [b for b in macros if b.code_macro])
	group("Index macros", "__index_macros", [b for b in macros if not b.code_macro])
	functions = [b for b in bindings if b.kind is BindingKind.FUNCTION]
	for inputs, prefix in enumerate(FUNCTION_GROUPS):
		title = prefix + " functions"
		group(title, '__'+anchor(title).replace('-', '_'), [f for f in functions if f.inputs == inputs])
	group("Other functions", "__other_functions", [f for f in functions if f.inputs is None or f.inputs >= len(FUNCTION_GROUPS)])
	return tuple(groups)
