import unittest
from typing import NamedTuple
import uiuadoc.support.foundation as foundation

class Animal: pass
class Dog(Animal): pass
class Rock: pass

class Namer(foundation.Visitor):
	def visit_Animal(self, host, suffix=''): return 'animal'+suffix
	def visit_Dog(self, host, suffix=''): return 'dog'+suffix

class Puppy(Dog): pass

class ModuleTests(unittest.TestCase):
	def test_allocate(self):
		things = ['a']
		self.assertEqual(1, foundation.allocate(things, 'b'))
		self.assertEqual(2, foundation.allocate(things, 'c'))
		self.assertEqual(['a', 'b', 'c'], things)

	def test_visitor_dispatch(self):
		namer = Namer()
		self.assertEqual('dog', namer.visit(Dog()))
		self.assertEqual('animal!', namer.visit(Animal(), suffix='!'))

	def test_visitor_falls_back_along_the_mro(self):
		self.assertEqual('dog', Namer().visit(Puppy()))

	def test_visitor_without_a_method(self):
		with self.assertRaises(AttributeError): Namer().visit(Rock())

	def test_named_tuples_fall_back_to_tuple(self):
		class Pair(NamedTuple):
			left: int
			right: int
		class Shapes(foundation.Visitor):
			def visit_tuple(self, host): return len(host)
		self.assertEqual(2, Shapes().visit(Pair(1, 2)))
		self.assertEqual(3, Shapes().visit((1, 2, 3)))

	def test_each_visitor_class_keeps_its_own_methods(self):
		class Loud(Namer):
			def visit_Dog(self, host, suffix=''): return 'DOG'+suffix
		self.assertEqual('dog', Namer().visit(Puppy()))
		self.assertEqual('DOG', Loud().visit(Puppy()))
		self.assertEqual('dog', Namer().visit(Puppy()))

if __name__ == '__main__':
	unittest.main()
