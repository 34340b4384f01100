"""
Model Assembler: the top-level driver of the extraction pass.

One pass reads one file's lines in order, keeping a pending run of comment lines and a
ScopeTracker. Each non-comment line is classified and dealt with, and whatever comment run
was pending is either attached to the declaration, kept as a free-standing documentation
section, or dropped. A blank line always ends a comment run.

Structural errors come out as exceptions derived from ExtractionError, tagged with the file
name. Everything softer becomes an Issue in `Extractor.issues`.
"""

from typing import Optional
from ..model import Binding, BindingKind, Import, Scope, DocComment
from ..markdown.blocks import MarkdownRenderer
from ..support.failureprone import SourceText, Issue, Evidence, Severity
from . import comments, declarations
from .datadefs import read_definition
from .lexical import bracket_depth
from .scopes import ScopeTracker
from .interface import Options, DEFAULT_OPTIONS, ExtractionError, UnterminatedBlock, MacroArityError

class Extractor:
	"""
	Holds the options and collects soft issues. One extractor may process any number of files
	one after another; the issues accumulate. Override `log_issue` to hear about them as they happen.
	"""
	def __init__(self, options:Options=DEFAULT_OPTIONS, *, verbose=False):
		self.options = options
		self.verbose = verbose
		self.issues = []

	def log_issue(self, issue:Issue, source:SourceText):
		if self.verbose: issue.emit(lambda key:source)

	def note(self, issue:Issue, source:SourceText):
		if None in issue.evidence:
			evidence = {(source.filename if k is None else k):v for k,v in issue.evidence.items()}
			issue = issue._replace(evidence=evidence)
		self.issues.append(issue)
		self.log_issue(issue, source)

	def extract(self, source, filename:Optional[str]=None) -> Scope:
		""" `source` may be a SourceText or a plain string. """
		if not isinstance(source, SourceText): source = SourceText(source, filename=filename)
		elif filename is not None and source.filename is None: source.filename = filename
		try: return _Pass(self, source).run()
		except ExtractionError as e:
			if e.filename is None: e.filename = source.filename
			raise

class _Pass:
	""" The state of one extraction pass over one file. """
	def __init__(self, extractor:Extractor, source:SourceText):
		self.extractor = extractor
		self.options = extractor.options
		self.source = source
		self.lines = source.lines
		self.tracker = ScopeTracker(self.options)
		self.pending = []

	def run(self) -> Scope:
		index = 0
		while index < len(self.lines):
			text = self.lines[index]
			index += 1
			if not text.strip():
				self.flush()
			elif comments.is_comment(text):
				self.pending.append(comments.CommentLine(index, comments.strip_prefix(text)))
			else:
				index = self.declaration(declarations.classify(text), index)
		self.flush()
		return self.tracker.finish(len(self.lines))

	def declaration(self, decl, line_nr:int) -> int:
		""" Deal with one classified line. Return the index of the next line to look at. """
		if isinstance(decl, declarations.ModuleOpen):
			if decl.name is None: self.flush()
			self.tracker.open(decl.name, line_nr, self.take_doc())
		elif isinstance(decl, declarations.ModuleClose):
			self.flush()
			if decl.ambiguous and not self.tracker.depth: self.tracker.open(None, line_nr)
			else: self.tracker.close(line_nr)
		elif isinstance(decl, declarations.BindingLine):
			binding = self.read_binding(decl, line_nr, self.take_doc())
			self.tracker.add_binding(binding)
			return binding.last_line
		elif isinstance(decl, declarations.DataLine):
			definition = read_definition(decl, line_nr, self.lines, self.take_doc())
			self.tracker.add_data(definition)
			return definition.last_line
		elif isinstance(decl, declarations.ImportLine):
			self.flush()
			self.tracker.add_import(Import(decl.path, decl.name, decl.names, line_nr))
		else:
			self.flush()
		return line_nr

	def read_binding(self, decl:declarations.BindingLine, line_nr:int, doc:Optional[DocComment]) -> Binding:
		code = [self.lines[line_nr-1]]
		depth = bracket_depth(decl.body)
		while depth > 0:
			if line_nr + len(code) > len(self.lines):
				message = "Brackets opened in the definition of %s never close."%decl.name
				raise UnterminatedBlock(len(self.lines), message, opened_at=line_nr)
			text = self.lines[line_nr + len(code) - 1]
			code.append(text)
			depth = bracket_depth(text, depth)
		body = decl.body.strip()
		arity = self.check_arity(decl, line_nr)
		stack_signature = declarations.stack_signature(body)
		if arity: kind = BindingKind.MACRO
		elif stack_signature or (doc and doc.signature and doc.signature.inputs) or body.startswith('('):
			kind = BindingKind.FUNCTION
		else: kind = BindingKind.CONSTANT
		return Binding(
			name=decl.name,
			visibility=decl.visibility,
			kind=kind,
			arity=arity,
			code_macro=bool(arity) and declarations.is_code_macro(body),
			stack_signature=stack_signature,
			doc=doc,
			first_line=line_nr,
			last_line=line_nr + len(code) - 1,
			code='\n'.join(code),
		)

	def check_arity(self, decl:declarations.BindingLine, line_nr:int) -> int:
		limit = self.options.max_macro_arity
		if decl.arity <= limit: return decl.arity
		message = "%s spells out %d macro arguments, but the most allowed is %d."%(decl.name, decl.arity, limit)
		if self.options.strict_arity: raise MacroArityError(line_nr, message)
		self.note(Issue("counting macro arguments", Severity.WARNING, message, {None: [Evidence(line_nr)]}))
		return limit

	def take_doc(self) -> Optional[DocComment]:
		""" The pending comment run becomes the doc-comment of whatever is being declared now. """
		draft = comments.collect(self.pending, marker=self.options.doc_marker)
		self.pending = []
		if draft is None: return None
		for issue in draft.issues: self.note(issue)
		return draft.finish(self.render)

	def flush(self):
		""" Nothing follows the pending run. Keep it only as a free-standing documentation section. """
		draft = comments.collect(self.pending, marker=self.options.doc_marker)
		self.pending = []
		if draft is not None and draft.mode == 'markdown':
			for issue in draft.issues: self.note(issue)
			self.tracker.add_section(draft.finish(self.render))

	def render(self, comment_lines) -> tuple:
		renderer = MarkdownRenderer()
		nodes = renderer.render(line.text for line in comment_lines)
		for offset, message in renderer.notes:
			evidence = {None: [Evidence(comment_lines[offset].line_nr)]}
			self.note(Issue("rendering markdown", Severity.NOTICE, message, evidence))
		return nodes

	def note(self, issue:Issue):
		self.extractor.note(issue, self.source)

def extract(source_text, *, filename:Optional[str]=None, options:Optional[Options]=None) -> Scope:
	"""
	The one operation the extraction engine exposes: source text in, documentation model out.
	Raises some kind of ExtractionError if the file's structure is broken.
	"""
	return Extractor(options or DEFAULT_OPTIONS).extract(source_text, filename=filename)
