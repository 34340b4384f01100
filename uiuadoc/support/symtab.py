"""
Every scope in a Uiua file draws its names from one pool: bindings, data definitions,
imports and sub-modules alike. Two of them in the same scope may not share a name,
unless the caller deliberately lets a later entry shadow an earlier one.

A NameSpace only remembers what was declared directly in it. Nothing here resolves a use
of a name through enclosing scopes: documentation never needs to, so there is no parent link.
"""

from typing import Generic, TypeVar

T = TypeVar("T")

class NoSuchSymbol(KeyError):
	pass

class SymbolAlreadyExists(KeyError):
	""" Carries the entry already on file, so a complaint can point at both declarations. """
	def __init__(self, key, existing):
		super().__init__(key)
		self.key, self.existing = key, existing

class NameSpace(Generic[T]):
	"""
	Maps each declared key to whatever the caller remembers about it.
	The "place" says where the namespace lives, in words fit for an error message.
	"""
	def __init__(self, *, place:str):
		self.place = place
		self.__entries : dict[object, T] = {}

	def declare(self, key, entry:T):
		if key in self.__entries: raise SymbolAlreadyExists(key, self.__entries[key])
		self.__entries[key] = entry

	def shadow(self, key, entry:T) -> T:
		""" Put a new entry over an existing one, and hand back the one it covers. """
		previous = self[key]
		self.__entries[key] = entry
		return previous

	def __getitem__(self, key) -> T:
		try: return self.__entries[key]
		except KeyError: raise NoSuchSymbol(key) from None

	def __contains__(self, key):
		return key in self.__entries
