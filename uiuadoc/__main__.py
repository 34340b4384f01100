"""
Extract the documentation model from a Uiua library into a JSON file.

The library is a directory with a lib.ua file in it. Every .ua file under it gets extracted on
its own (except in uiua-modules, which is other people's code). A file which fails to extract
gets reported on STDERR, and the rest still make it into the output.
"""

import sys, os, argparse, json
from concurrent.futures import ThreadPoolExecutor

from uiuadoc import interchange
from uiuadoc.summary import summarize
from uiuadoc.extraction.interface import Options, DEFAULT_OPTIONS
from uiuadoc.extraction.library import extract_library, LibraryNotFound

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m uiuadoc', description=__doc__,)
	parser.add_argument('source_path', help='path to the library directory')
	parser.add_argument('-f', '--force', action='store_true', dest='force', help='allow to write over existing file')
	parser.add_argument('-o', '--output', help='path to output file')
	parser.add_argument('-i', '--indent', help='indent the JSON output for easier reading.', action='store_const', dest='indent', const=2, default=None)
	parser.add_argument('--summary', action='store_true', help='Write the grouped summary of each file instead of the raw model.')
	parser.add_argument('--max-macro-arity', type=int, default=DEFAULT_OPTIONS.max_macro_arity, help='Most arguments a macro may take.')
	parser.add_argument('--lenient-arity', action='store_true', help='Cap excessive macro arity with a warning rather than failing the file.')
	parser.add_argument('--allow-shadowing', action='store_true', help='Let a binding re-use the name of an earlier one in the same scope.')
	parser.add_argument('-v', '--verbose', action='store_true', help="Squawk about every little thing in the doc-comments.")
	return parser.parse_args(argv)

def options_from(args) -> Options:
	return Options(
		max_macro_arity=args.max_macro_arity,
		strict_arity=not args.lenient_arity,
		allow_shadowing=args.allow_shadowing,
	)

def main(args):
	target_path = args.output or os.path.join(args.source_path, 'uiuadoc.json')
	if os.path.exists(target_path) and not args.force:
		print('Target file already exists and --force command-line argument was not given.', file=sys.stderr)
		sys.exit(1)
	try:
		with ThreadPoolExecutor() as executor:
			library = extract_library(args.source_path, options=options_from(args), executor=executor)
	except LibraryNotFound as e:
		print(e.args[0], file=sys.stderr)
		sys.exit(1)
	report_problems(library, verbose=args.verbose)
	if args.summary:
		document = {report.path: interchange.to_dict(summarize(report.scope, title_of(report.path))) for report in library.files if report.ok}
	else:
		document = interchange.to_dict(library)
	with open(target_path, 'w', encoding='utf-8') as fh:
		json.dump(document, fh, ensure_ascii=False, sort_keys=False, indent=args.indent)
	print('Wrote documentation model in JSON format to:')
	print('\t'+target_path)
	if library.errors(): sys.exit(1)

def report_problems(library, *, verbose=False):
	""" Errors always get printed. Softer issues only on request. """
	for report in library.files:
		if report.error is not None: report.error.as_issue().emit(library.source_text)
		if verbose:
			for issue in report.issues: issue.emit(library.source_text)

def title_of(path:str) -> str:
	return os.path.splitext(path)[0]

if __name__ == '__main__': main(parse_arguments())
