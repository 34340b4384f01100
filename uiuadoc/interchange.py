"""
Interchange format: the documentation model as a tree of plain dicts and lists.

Only JSON types appear in the output, so `json.dumps` takes it as-is. Going out is generic:
records become dicts keyed by field name, tuples become lists, enumerations become their values,
and markdown nodes get a "type" key naming their class. Coming back in is a bit more particular,
since the dict tree does not say which record each dict was. But the shape of the model
is fixed, so each decoder just knows what to expect.

The promise is that from_dict(to_dict(scope)) == scope for any scope the extractor makes.
"""

import json
from enum import Enum
from dataclasses import fields
from .support.foundation import Visitor
from .model import (
	Scope, Binding, DataDefinition, Field, Import, DocComment, Signature, StackSignature,
	Visibility, BindingKind, Representation,
)
from .markdown.nodes import Node, NODE_TYPES, Alignment

class Encoder(Visitor):
	def visit_tuple(self, host):
		if hasattr(host, '_fields'): return {key: self.visit(getattr(host, key)) for key in host._fields}
		return [self.visit(item) for item in host]

	def visit_Node(self, host:Node):
		encoded = {'type': host.__class__.__name__}
		for f in fields(host): encoded[f.name] = self.visit(getattr(host, f.name))
		return encoded

	def visit_Enum(self, host:Enum): return host.value

	def visit_object(self, host):
		# Strings, numbers, booleans and None go through untouched.
		return host

	def visit_Library(self, host):
		# The source texts stay behind.
		return {'root': host.root, 'files': self.visit(host.files)}

	def visit_ExtractionError(self, host):
		return {'line': host.line_nr, 'message': host.message, 'kind': host.__class__.__name__}

	def visit_Issue(self, host):
		return {
			'phase': host.phase,
			'severity': host.severity.value,
			'description': host.description,
			'lines': sorted(e.line_nr for evidence in host.evidence.values() for e in evidence),
		}

ENCODER = Encoder()

def to_dict(thing):
	""" Works on a Scope, or anything else from the model or the summary pass. """
	return ENCODER.visit(thing)

def to_json(thing, **kwargs) -> str:
	return json.dumps(to_dict(thing), ensure_ascii=False, **kwargs)

def from_json(text:str) -> Scope:
	return from_dict(json.loads(text))

def from_dict(tree:dict) -> Scope:
	return Scope(
		name=tree['name'],
		visibility=Visibility(tree['visibility']),
		doc=_doc(tree['doc']),
		bindings=tuple(_binding(b) for b in tree['bindings']),
		data=tuple(_data(d) for d in tree['data']),
		scopes=tuple(from_dict(s) for s in tree['scopes']),
		imports=tuple(Import(i['path'], i['name'], tuple(i['names']), i['line']) for i in tree['imports']),
		sections=tuple(_doc(s) for s in tree['sections']),
		first_line=tree['first_line'],
		last_line=tree['last_line'],
	)

def _binding(tree) -> Binding:
	stack_signature = tree['stack_signature']
	return Binding(
		name=tree['name'],
		visibility=Visibility(tree['visibility']),
		kind=BindingKind(tree['kind']),
		arity=tree['arity'],
		code_macro=tree['code_macro'],
		stack_signature=None if stack_signature is None else StackSignature(**stack_signature),
		doc=_doc(tree['doc']),
		first_line=tree['first_line'],
		last_line=tree['last_line'],
		code=tree['code'],
	)

def _data(tree) -> DataDefinition:
	return DataDefinition(
		name=tree['name'],
		representation=Representation(tree['representation']),
		fields=tuple(Field(**f) for f in tree['fields']),
		variant=tree['variant'],
		call=tree['call'],
		doc=_doc(tree['doc']),
		first_line=tree['first_line'],
		last_line=tree['last_line'],
	)

def _doc(tree):
	if tree is None: return None
	signature = tree['signature']
	markdown = tree['markdown']
	return DocComment(
		summary=tree['summary'],
		signature=None if signature is None else Signature(tuple(signature['outputs']), tuple(signature['inputs'])),
		text=tree['text'],
		markdown=None if markdown is None else tuple(_node(n) for n in markdown),
		first_line=tree['first_line'],
	)

def _node(tree) -> Node:
	cls = NODE_TYPES[tree['type']]
	kwargs = {}
	for f in fields(cls):
		value = tree[f.name]
		if f.name == 'alignments': kwargs[f.name] = tuple(Alignment(a) for a in value)
		else: kwargs[f.name] = _markdown_value(value)
	return cls(**kwargs)

def _markdown_value(value):
	# Lists are children, items, cells or rows, to any depth; dicts are nodes.
	if isinstance(value, list): return tuple(_markdown_value(v) for v in value)
	if isinstance(value, dict): return _node(value)
	return value
