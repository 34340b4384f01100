import unittest
import warnings
from uiuadoc.extraction import lexical, declarations
from uiuadoc.extraction.declarations import BindingLine, DataLine, ImportLine, ModuleOpen, ModuleClose, Other, classify
from uiuadoc.model import Visibility, Representation, StackSignature

class LexicalTests(unittest.TestCase):
	def test_strip_comment(self):
		self.assertEqual('X ← 1', lexical.strip_comment('X ← 1 # one'))
		self.assertEqual('X ← "a # b"', lexical.strip_comment('X ← "a # b" # real'))
		self.assertEqual('C ← @#', lexical.strip_comment('C ← @# # the hash character'))
		self.assertEqual('Q ← "say \\"#\\""', lexical.strip_comment('Q ← "say \\"#\\"" # escaped'))
		self.assertEqual('R ← $ raw # not a comment', lexical.strip_comment('R ← $ raw # not a comment'))

	def test_comment_start(self):
		self.assertEqual(6, lexical.comment_start('X ← 1 # one'))
		self.assertIsNone(lexical.comment_start('X ← "#"'))

	def test_bracket_depth(self):
		self.assertEqual(0, lexical.bracket_depth('F ← (+1)'))
		self.assertEqual(2, lexical.bracket_depth('F ← ([ "(" @('))
		self.assertEqual(1, lexical.bracket_depth(')', depth=2))
		self.assertEqual(1, lexical.bracket_depth('{ # ]'))

	def test_find_closer(self):
		self.assertEqual(7, lexical.find_closer('a [b] c] d'))
		self.assertEqual(1, lexical.find_closer(')]', depth=2))
		self.assertIsNone(lexical.find_closer('still open'))
		self.assertIsNone(lexical.find_closer('"]" @]'))

	def test_find_top_level(self):
		self.assertEqual(10, lexical.find_top_level('x (a ← b) ← c', '←'))
		self.assertIsNone(lexical.find_top_level('(a ← b)', '←'))
		self.assertIsNone(lexical.find_top_level('"a ← b"', '←'))

	def test_module_source_compiles_without_warnings(self):
		with open(lexical.__file__, encoding='utf-8') as fh: source = fh.read()
		with warnings.catch_warnings():
			warnings.simplefilter('error')
			compile(source, lexical.__file__, 'exec')

class BindingTests(unittest.TestCase):
	def test_public_and_private(self):
		self.assertEqual(BindingLine('Alphabet', 0, Visibility.PUBLIC, '+@a⇡26'), classify('Alphabet ← +@a⇡26'))
		self.assertEqual(BindingLine('Helper', 0, Visibility.PRIVATE, '×2'), classify('Helper ↚ ×2'))

	def test_ascii_operators(self):
		self.assertEqual(BindingLine('X', 0, Visibility.PUBLIC, '5'), classify('X = 5'))
		self.assertEqual(BindingLine('X', 0, Visibility.PRIVATE, '5'), classify('X =~ 5'))

	def test_sigils_count_arguments(self):
		self.assertEqual(1, classify('F! ← ^0').arity)
		self.assertEqual(2, classify('F‼ ← ^0^1').arity)
		self.assertEqual(3, classify('F‼! ← ^0^1^2').arity)
		self.assertEqual('F‼!', classify('F‼! ← ^0^1^2').name)

	def test_indented_with_trailing_comment(self):
		self.assertEqual(BindingLine('Join', 0, Visibility.PUBLIC, '/⊂ # glue'), classify('  Join ← /⊂ # glue'))

	def test_subscripted_names(self):
		self.assertEqual('X₁', classify('X₁ ← 1').name)

	def test_empty_body(self):
		self.assertEqual(BindingLine('F', 0, Visibility.PUBLIC, ''), classify('F ←'))

class BlockMarkerTests(unittest.TestCase):
	def test_openers(self):
		self.assertEqual(ModuleOpen('Strings'), classify('┌─╴Strings'))
		self.assertEqual(ModuleOpen('Strings'), classify('---Strings'))
		self.assertEqual(ModuleOpen('Strings'), classify('┌─╴ Strings # text functions'))
		self.assertEqual(ModuleOpen(None), classify('┌─╴'))

	def test_closers(self):
		self.assertEqual(ModuleClose(False), classify('└─╴'))
		self.assertEqual(ModuleClose(False), classify('  └─╴ # done'))
		self.assertEqual(ModuleClose(True), classify('---'))

	def test_not_markers(self):
		self.assertIsInstance(classify('----'), Other)
		self.assertIsInstance(classify('┌─╴Two Names'), Other)

class DataTests(unittest.TestCase):
	def test_unboxed(self):
		self.assertEqual(DataLine('Point', False, Representation.UNBOXED, 'X Y]'), classify('~Point [X Y]'))

	def test_boxed(self):
		self.assertEqual(DataLine('Person', False, Representation.BOXED, 'Name: °1type}'), classify('~Person {Name: °1type}'))

	def test_unnamed(self):
		self.assertEqual(DataLine(None, False, Representation.BOXED, 'A B}'), classify('~ {A B}'))

	def test_multiline_opener(self):
		self.assertEqual(DataLine('Rect', False, Representation.BOXED, ''), classify('~Rect {'))

	def test_no_field_list(self):
		self.assertEqual(DataLine('Empty', False, None, ''), classify('~Empty'))

	def test_variant(self):
		self.assertEqual(DataLine('Circle', True, Representation.UNBOXED, 'Radius]'), classify('|Circle [Radius]'))
		self.assertEqual(DataLine('Nothing', True, None, ''), classify('|Nothing'))

	def test_variant_needs_a_name(self):
		self.assertIsInstance(classify('| [R]'), Other)

	def test_junk_after_name(self):
		self.assertIsInstance(classify('~Point X Y'), Other)

class ImportTests(unittest.TestCase):
	def test_named_items(self):
		self.assertEqual(ImportLine('geometry.ua', None, ('Area', 'Sq')), classify('~ "geometry.ua" ~ Area Sq'))

	def test_bare_path(self):
		self.assertEqual(ImportLine('git: github.com/x/y', None, ()), classify('~ "git: github.com/x/y"'))

	def test_module_binding(self):
		self.assertEqual(ImportLine('geometry.ua', 'Geo', ()), classify('Geo ~ "geometry.ua" # shapes'))

class FallbackTests(unittest.TestCase):
	def test_other(self):
		for line in ['⍤. =3 Inc 2', '&p "hello"', '+1 2', '# just a comment', '']:
			with self.subTest(line=line):
				self.assertIsInstance(classify(line), Other)

class BodyTests(unittest.TestCase):
	def test_stack_signature(self):
		self.assertEqual(StackSignature(2, 1), declarations.stack_signature('|2.1 +'))
		self.assertEqual(StackSignature(3, 1), declarations.stack_signature('(|3 ⊂⊂)'))
		self.assertEqual(StackSignature(1, 2), declarations.stack_signature('|1.2 ⊃⊢⊣'))
		self.assertIsNone(declarations.stack_signature('+1'))

	def test_code_macro(self):
		self.assertTrue(declarations.is_code_macro('^ $"_ _"'))
		self.assertFalse(declarations.is_code_macro('^0^0'))
		self.assertFalse(declarations.is_code_macro('+1'))


if __name__ == '__main__':
	unittest.main()
