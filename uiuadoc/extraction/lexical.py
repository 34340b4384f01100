"""
Just enough lexical knowledge of Uiua to find where code ends and comments begin, and where
brackets open and close. The glyphs themselves are opaque; all that matters here is which
characters are hiding inside a literal and therefore do not count.

Things that hide characters:
	"string literals" with backslash escapes, ending at the close-quote or the end of the line;
	@c character literals (and @\\c escapes), which can hide a quote, bracket or hash;
	$ raw strings, which run to the end of the line;
	# comments, which also run to the end of the line.

Format strings ($"...") need no special treatment: the $ is code and the string follows.
"""

OPEN_BRACKETS = '([{'
CLOSE_BRACKETS = ')]}'

def _scan(text:str):
	"""
	Yield (index, character) for every character of `text` that is actual code.
	Comments come through as a single ('#') entry at the index where they start.
	"""
	i, size = 0, len(text)
	while i < size:
		c = text[i]
		if c == '"':
			i += 1
			while i < size and text[i] not in '"\n':
				i += 2 if text[i] == '\\' else 1
			i += 1
		elif c == '@':
			i += 3 if text[i+1:i+2] == '\\' else 2
		elif c == '$' and text[i+1:i+2] in (' ', '\n', ''):
			i = _end_of_line(text, i)
		elif c == '#':
			yield i, c
			i = _end_of_line(text, i)
		else:
			yield i, c
			i += 1

def _end_of_line(text, i):
	end = text.find('\n', i)
	return len(text) if end < 0 else end

def comment_start(line:str):
	""" Index of the # that begins a trailing comment, or None. """
	for i, c in _scan(line):
		if c == '#': return i

def strip_comment(line:str) -> str:
	""" The code part of a line, with any trailing comment and whitespace removed. """
	i = comment_start(line)
	return (line if i is None else line[:i]).rstrip()

def bracket_depth(text:str, depth:int=0) -> int:
	""" Net nesting depth after scanning `text`, starting from `depth`. """
	for i, c in _scan(text):
		if c in OPEN_BRACKETS: depth += 1
		elif c in CLOSE_BRACKETS: depth -= 1
	return depth

def find_closer(text:str, depth:int=1):
	"""
	Index of the bracket which brings the nesting depth down to zero, or None if the text
	runs out first. Assumes we begin `depth` levels deep: just past an opening bracket, normally.
	"""
	for i, c in _scan(text):
		if c in OPEN_BRACKETS: depth += 1
		elif c in CLOSE_BRACKETS:
			depth -= 1
			if depth == 0: return i

def find_top_level(text:str, target:str):
	""" Index of the first occurrence of `target` that is code and not nested in brackets; None otherwise. """
	depth = 0
	for i, c in _scan(text):
		if c in OPEN_BRACKETS: depth += 1
		elif c in CLOSE_BRACKETS: depth -= 1
		elif depth == 0 and text.startswith(target, i): return i
