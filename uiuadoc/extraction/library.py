"""
Extract a whole library: every `.ua` file under one directory, each on its own.

Files are read once, up front, as UTF-8. After that the extraction passes touch no files
at all, so they may run in any order or all at once: pass an executor (say, a
concurrent.futures.ThreadPoolExecutor) to spread them out. Results always come back in
sorted path order regardless.

A broken file does not break the library. Its report carries the error instead of a scope,
and every other file extracts as normal.
"""

import os
from typing import NamedTuple, Optional
from ..model import Scope
from ..support.failureprone import SourceText
from .assembler import Extractor
from .interface import Options, DEFAULT_OPTIONS, ExtractionError

MAIN_FILE = 'lib.ua'
EXTENSION = '.ua'
EXCLUDED_DIRECTORY = 'uiua-modules' # Where the package manager keeps other people's code.

class LibraryNotFound(FileNotFoundError):
	pass

class FileReport(NamedTuple):
	path: str # Relative to the library root, with forward slashes.
	main: bool
	scope: Optional[Scope]
	error: Optional[ExtractionError]
	issues: tuple

	@property
	def ok(self) -> bool:
		return self.error is None

class Library(NamedTuple):
	root: str
	files: tuple # FileReport, in path order.
	sources: dict # {path: text} exactly as read.

	def errors(self) -> list:
		return [report.error for report in self.files if report.error is not None]

	def source_text(self, path) -> Optional[SourceText]:
		if path in self.sources: return SourceText(self.sources[path], filename=path)
		return None

def find_sources(directory:str) -> list:
	""" Relative paths of all the source files under `directory`, sorted. """
	found = []
	for folder, subfolders, filenames in os.walk(directory):
		subfolders[:] = sorted(d for d in subfolders if d != EXCLUDED_DIRECTORY)
		for filename in filenames:
			if filename.endswith(EXTENSION):
				relative = os.path.relpath(os.path.join(folder, filename), directory)
				found.append(relative.replace(os.sep, '/'))
	return sorted(found)

def read_sources(directory:str, paths) -> dict:
	sources = {}
	for path in paths:
		with open(os.path.join(directory, path), encoding='utf-8') as fh: sources[path] = fh.read()
	return sources

def extract_sources(sources:dict, *, options:Optional[Options]=None, executor=None, main:str=MAIN_FILE) -> tuple:
	"""
	Extract every file in a {path: text} mapping independently.
	Return a tuple of FileReport in sorted path order.
	"""
	options = options or DEFAULT_OPTIONS
	paths = sorted(sources)
	def extract_one(path):
		return extract_file(path, sources[path], options, main=(path == main))
	mapper = map if executor is None else executor.map
	return tuple(mapper(extract_one, paths))

def extract_file(path:str, text:str, options:Options=DEFAULT_OPTIONS, *, main:bool=False) -> FileReport:
	extractor = Extractor(options)
	try: scope, error = extractor.extract(SourceText(text, filename=path)), None
	except ExtractionError as e: scope, error = None, e
	return FileReport(path, main, scope, error, tuple(extractor.issues))

def extract_library(directory:str, *, options:Optional[Options]=None, executor=None) -> Library:
	if not os.path.isfile(os.path.join(directory, MAIN_FILE)):
		raise LibraryNotFound("There is no %s in %s"%(MAIN_FILE, directory))
	sources = read_sources(directory, find_sources(directory))
	return Library(directory, extract_sources(sources, options=options, executor=executor), sources)
