""" Small generic helpers shared by the extraction passes and the interchange encoder. """

def allocate(a_list:list, item) -> int:
	""" Append the item and return its index: a handle into an arena list. """
	a_list.append(item)
	return len(a_list) - 1

class Visitor:
	"""
	Dispatch on the class of the host: `visit(host)` calls `visit_<ClassName>`.

	When there is no method for the exact class, the nearest ancestor along the MRO
	that has one wins, so a `visit_tuple` catches every NamedTuple and a `visit_object`
	catches everything. A subclass decides for itself which parts of a host to visit
	and in what order. The method found for each class is remembered per visitor class.
	"""

	def visit(self, host, *args, **kwargs):
		return self.__method_for(host.__class__)(self, host, *args, **kwargs)

	@classmethod
	def __method_for(cls, kind):
		cache = cls.__dict__.get('_dispatch')
		if cache is None:
			cache = {}
			setattr(cls, '_dispatch', cache)
		try: return cache[kind]
		except KeyError: pass
		for ancestor in kind.__mro__:
			method = getattr(cls, 'visit_' + ancestor.__name__, None)
			if method is not None: break
		else: raise AttributeError('%s has no visit method for %s'%(cls.__name__, kind.__name__))
		cache[kind] = method
		return method
