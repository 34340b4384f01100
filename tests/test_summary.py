import unittest
import os
from uiuadoc import summary, interchange
from uiuadoc.extraction.assembler import extract
from uiuadoc.markdown.nodes import Heading, Text
from uiuadoc.summary import SectionType, Title, ItemLink

EXAMPLE_FOLDER = os.path.join(os.path.dirname(__file__), '..', 'example')

def example(name):
	with open(os.path.join(EXAMPLE_FOLDER, name), encoding='utf-8') as fh: return fh.read()

def group_names(section):
	return [(group.title.title, [item.name for item in group.items]) for group in section.content]

class ExampleSummaryTests(unittest.TestCase):
	def setUp(self):
		self.summary = summary.summarize(extract(example('lib.ua')), 'lib')

	def test_section_order(self):
		self.assertEqual('lib', self.summary.title)
		self.assertEqual(
			[SectionType.DOCUMENTATION, SectionType.MODULES, SectionType.BINDINGS],
			[section.section_type for section in self.summary.sections],
		)

	def test_documentation_headings_move_down_a_level(self):
		(item,) = self.summary.sections[0].content
		self.assertEqual(Heading(2, 'Example library', (Text('Example library'),)), item.markdown[0])
		self.assertEqual((ItemLink('Example library', '#example-library'),), item.links)

	def test_only_modules_with_public_items(self):
		modules = self.summary.sections[1]
		self.assertEqual([('Strings', ['Strings'])], group_names(modules))
		(strings,) = modules.content[0].items
		self.assertEqual(['Join'], [b.name for b in strings.bindings])
		self.assertEqual(Title('Strings', 'Strings'), modules.content[0].title)

	def test_binding_groups(self):
		self.assertEqual([
			('Constants', ['Alphabet']),
			('Data types', ['Point']),
			('Code macros', ['Gen!']),
			('Index macros', ['Twice!']),
			('Monadic functions', ['Inc']),
		], group_names(self.summary.sections[2]))

	def test_link_ids(self):
		ids = [group.title.link_id for group in self.summary.sections[2].content]
		self.assertEqual(['__constants', '__data', '__code_macros', '__index_macros', '__monadic_functions'], ids)

	def test_summary_is_json_ready(self):
		tree = interchange.to_dict(self.summary)
		self.assertEqual('documentation', tree['sections'][0]['section_type'])

class GroupingTests(unittest.TestCase):
	def test_functions_by_input_count(self):
		text = '\n'.join([
			'N ← |0 1', 'M ← |1 ¬', 'D ← |2 +', 'T ← |3 ⊂⊂', 'H ← |6 ⊂⊂⊂⊂⊂', 'Big ← |7 ⊂⊂⊂⊂⊂⊂', 'Paren ← (+1)',
			'Hidden ↚ |1 ¬',
		])
		groups = group_names(summary.summarize(extract(text), 'x').sections[0])
		self.assertEqual([
			('Noadic functions', ['N']),
			('Monadic functions', ['M']),
			('Dyadic functions', ['D']),
			('Triadic functions', ['T']),
			('Hexadic functions', ['H']),
			('Other functions', ['Big', 'Paren']),
		], groups)

	def test_empty_scope_has_no_sections(self):
		self.assertEqual((), summary.summarize(extract('X ↚ 1\n'), 'x').sections)

	def test_deep_headings_stop_at_six(self):
		scope = extract('# !doc\n# ###### Tiny\n# ## Sub Section\n')
		(item,) = summary.summarize(scope, 'x').sections[0].content
		self.assertEqual([6, 3], [node.level for node in item.markdown])
		self.assertEqual((), item.links)

	def test_nested_private_modules_are_filtered(self):
		scope = extract('┌─╴Outer\n  X ← 1\n  ┌─╴Quiet\n    Y ↚ 2\n  └─╴\n  ┌─╴Loud\n    Z ← 3\n  └─╴\n└─╴\n')
		(group,) = summary.summarize(scope, 'x').sections[0].content
		(outer,) = group.items
		self.assertEqual(['Loud'], [s.name for s in outer.scopes])

	def test_private_members_of_grandchildren_are_filtered(self):
		scope = extract('┌─╴A\n  ┌─╴B\n    X ↚ 1\n    Y ← 2\n    ┌─╴C\n      W ↚ 0\n      Z ← 3\n    └─╴\n  └─╴\n└─╴\n')
		(a,) = summary.public_modules(scope)
		(b,) = a.scopes
		self.assertEqual(['Y'], [binding.name for binding in b.bindings])
		(c,) = b.scopes
		self.assertEqual(['Z'], [binding.name for binding in c.bindings])


if __name__ == '__main__':
	unittest.main()
