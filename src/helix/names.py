"""Identifier transforms: DSL dashed names -> host runtime names."""

from __future__ import annotations

from typing import Any

from helix.forms import Keyword, Symbol

# First words that keep their dashes: aria-* and data-* attributes.
RESERVED_PREFIXES: frozenset[str] = frozenset({"aria", "data"})


def camel_case(s: Any) -> Any:
	"""Returns the camel case version of a dashed name.

	"http-equiv" becomes "httpEquiv". Names without a dash and names whose
	first word is `aria` or `data` come back unchanged, as does anything that
	is not a symbol, keyword or string.
	"""
	if isinstance(s, (Symbol, Keyword)):
		text = s.name
	elif isinstance(s, str):
		text = s
	else:
		return s
	first_word, *words = text.split("-")
	# trailing empty segments are not words: "foo-" stays "foo-"
	while words and not words[-1]:
		words.pop()
	if not words or first_word in RESERVED_PREFIXES:
		return s
	return first_word + "".join(w.capitalize() for w in words)


_MUNGE_CHARS: dict[str, str] = {
	"-": "_",
	"?": "_QMARK_",
	"!": "_BANG_",
	"*": "_STAR_",
	">": "_GT_",
	"<": "_LT_",
	"=": "_EQ_",
	"+": "_PLUS_",
	"'": "_PRIME_",
	".": "_DOT_",
	"&": "_AMPERSAND_",
	"/": "_SLASH_",
	"%": "_PERCENT_",
	"#": "_SHARP_",
}

JS_RESERVED: frozenset[str] = frozenset(
	{
		"arguments",
		"await",
		"break",
		"case",
		"catch",
		"class",
		"const",
		"continue",
		"debugger",
		"default",
		"delete",
		"do",
		"else",
		"enum",
		"eval",
		"export",
		"extends",
		"false",
		"finally",
		"for",
		"function",
		"if",
		"implements",
		"import",
		"in",
		"instanceof",
		"interface",
		"let",
		"new",
		"null",
		"package",
		"private",
		"protected",
		"public",
		"return",
		"static",
		"super",
		"switch",
		"this",
		"throw",
		"true",
		"try",
		"typeof",
		"undefined",
		"var",
		"void",
		"while",
		"with",
		"yield",
	}
)


def munge(name: str, *, property: bool = False) -> str:
	"""Turn a DSL local name into a legal JS identifier.

	use-state -> useState, valid? -> valid_QMARK_, data-x -> data_x,
	class -> class$ (property names may be reserved words and keep them)
	"""
	camel = camel_case(name)
	out = "".join(_MUNGE_CHARS.get(ch, ch) for ch in camel)
	if out and out[0].isdigit():
		out = "_" + out
	if out in JS_RESERVED and not property:
		out += "$"
	return out
