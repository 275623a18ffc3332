"""
Reader: DSL source text -> forms.

Reads the EDN-like surface syntax used in component files: lists, vectors,
maps, sets, strings, numbers, keywords, symbols, metadata (`^:static`,
`^{...}`), quote and `#_` discard. Collections and symbols are stamped with
their source line/column so compile errors can point back at them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from helix.errors import ReadError
from helix.forms import (
	Form,
	FormList,
	FormMap,
	FormSet,
	Keyword,
	Symbol,
	Vector,
)

_DELIMS = "()[]{}"
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.\d*([eE][+-]?\d+)?|\d+[eE][+-]?\d+|\d+)$")
_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"b": "\b",
	"f": "\f",
	'"': '"',
	"\\": "\\",
	"0": "\x00",
}

_CLOSERS = {"(": ")", "[": "]", "{": "}", "#{": "}"}


@dataclass(slots=True)
class Token:
	kind: str  # "open", "close", "string", "atom", "meta", "quote", "discard"
	text: str
	line: int
	column: int


class Lexer:
	"""Split source into tokens, tracking line and column."""

	source: str
	pos: int
	line: int
	column: int
	tokens: list[Token]

	def __init__(self, source: str) -> None:
		self.source = source
		self.pos = 0
		self.line = 1
		self.column = 1
		self.tokens = []

	def tokenize(self) -> list[Token]:
		src = self.source
		while self.pos < len(src):
			ch = src[self.pos]
			if ch.isspace() or ch == ",":
				self._advance()
			elif ch == ";":
				while self.pos < len(src) and src[self.pos] != "\n":
					self._advance()
			elif ch in _DELIMS:
				kind = "open" if ch in "([{" else "close"
				self._add(kind, ch)
				self._advance()
			elif ch == "#" and self._peek() == "{":
				self._add("open", "#{")
				self._advance(2)
			elif ch == "#" and self._peek() == "_":
				self._add("discard", "#_")
				self._advance(2)
			elif ch == "^":
				self._add("meta", "^")
				self._advance()
			elif ch == "'":
				self._add("quote", "'")
				self._advance()
			elif ch == '"':
				self._read_string()
			else:
				self._read_atom()
		return self.tokens

	def _peek(self, offset: int = 1) -> str:
		pos = self.pos + offset
		return self.source[pos] if pos < len(self.source) else ""

	def _advance(self, n: int = 1) -> None:
		for _ in range(n):
			if self.source[self.pos] == "\n":
				self.line += 1
				self.column = 1
			else:
				self.column += 1
			self.pos += 1

	def _add(self, kind: str, text: str) -> None:
		self.tokens.append(Token(kind, text, self.line, self.column))

	def _read_string(self) -> None:
		line, column = self.line, self.column
		self._advance()  # opening quote
		chars: list[str] = []
		src = self.source
		while True:
			if self.pos >= len(src):
				raise ReadError("Unterminated string", line=line, column=column)
			ch = src[self.pos]
			if ch == '"':
				self._advance()
				break
			if ch == "\\":
				nxt = self._peek()
				if nxt == "u":
					code = src[self.pos + 2 : self.pos + 6]
					try:
						if len(code) != 4:
							raise ValueError(code)
						chars.append(chr(int(code, 16)))
					except ValueError:
						raise ReadError(
							f"Invalid unicode escape \\u{code}",
							line=self.line,
							column=self.column,
						) from None
					self._advance(6)
					continue
				if nxt not in _ESCAPES:
					raise ReadError(
						f"Unsupported escape \\{nxt}", line=self.line, column=self.column
					)
				chars.append(_ESCAPES[nxt])
				self._advance(2)
				continue
			chars.append(ch)
			self._advance()
		self.tokens.append(Token("string", "".join(chars), line, column))

	def _read_atom(self) -> None:
		line, column = self.line, self.column
		start = self.pos
		src = self.source
		while self.pos < len(src):
			ch = src[self.pos]
			if ch.isspace() or ch in _DELIMS or ch in ',";':
				break
			self._advance()
		self.tokens.append(Token("atom", src[start : self.pos], line, column))


class Reader:
	"""Build forms from a token stream."""

	tokens: list[Token]
	pos: int

	def __init__(self, tokens: list[Token]) -> None:
		self.tokens = tokens
		self.pos = 0

	def at_end(self) -> bool:
		return self.pos >= len(self.tokens)

	def read_all(self) -> list[Form]:
		forms: list[Form] = []
		while True:
			self._skip_discards()
			if self.at_end():
				return forms
			forms.append(self.read())

	def read(self) -> Form:
		self._skip_discards()
		if self.at_end():
			last = self.tokens[-1] if self.tokens else None
			raise ReadError(
				"Unexpected end of input",
				line=last.line if last else None,
				column=last.column if last else None,
			)
		tok = self.tokens[self.pos]
		self.pos += 1
		loc = {"line": tok.line, "column": tok.column}

		if tok.kind == "open":
			items = self._read_until(_CLOSERS[tok.text], tok)
			if tok.text == "(":
				return FormList(items, loc)
			if tok.text == "[":
				return Vector(items, loc)
			if tok.text == "#{":
				return FormSet(items, loc)
			if len(items) % 2 != 0:
				raise ReadError(
					"Map literal must contain an even number of forms",
					line=tok.line,
					column=tok.column,
				)
			return FormMap(zip(items[::2], items[1::2], strict=True), loc)
		if tok.kind == "close":
			raise ReadError(
				f"Unmatched delimiter {tok.text!r}", line=tok.line, column=tok.column
			)
		if tok.kind == "string":
			return tok.text
		if tok.kind == "quote":
			return FormList([Symbol("quote"), self.read()], loc)
		if tok.kind == "meta":
			return self._read_meta(tok)
		return self._parse_atom(tok)

	def _skip_discards(self) -> None:
		while not self.at_end() and self.tokens[self.pos].kind == "discard":
			self.pos += 1
			self.read()

	def _read_until(self, closer: str, opener: Token) -> list[Form]:
		items: list[Form] = []
		while True:
			self._skip_discards()
			if self.at_end():
				raise ReadError(
					f"Unclosed {opener.text!r}", line=opener.line, column=opener.column
				)
			tok = self.tokens[self.pos]
			if tok.kind == "close":
				if tok.text != closer:
					raise ReadError(
						f"Expected {closer!r} but found {tok.text!r}",
						line=tok.line,
						column=tok.column,
					)
				self.pos += 1
				return items
			items.append(self.read())

	def _read_meta(self, tok: Token) -> Form:
		raw = self.read()
		if isinstance(raw, Keyword):
			meta: dict[str, Any] = {raw.name: True}
		elif isinstance(raw, Symbol):
			meta = {"tag": raw}
		elif isinstance(raw, str):
			meta = {"tag": raw}
		elif isinstance(raw, FormMap):
			meta = {
				(k.name if isinstance(k, Keyword) else str(k)): v for k, v in raw.items()
			}
		else:
			raise ReadError(
				"Metadata must be a keyword, symbol, string or map",
				line=tok.line,
				column=tok.column,
			)
		target = self.read()
		if not hasattr(target, "with_meta"):
			raise ReadError(
				"Metadata can only be attached to symbols and collections",
				line=tok.line,
				column=tok.column,
			)
		return target.with_meta(meta)

	def _parse_atom(self, tok: Token) -> Form:
		text = tok.text
		if text == "nil":
			return None
		if text == "true":
			return True
		if text == "false":
			return False
		if _NUMBER_RE.match(text):
			if any(c in text for c in ".eE"):
				return float(text)
			return int(text)
		if text.startswith(":"):
			if len(text) == 1:
				raise ReadError("Empty keyword", line=tok.line, column=tok.column)
			return Keyword.parse(text[1:])
		return Symbol.parse(text, {"line": tok.line, "column": tok.column})


def read_string(source: str) -> list[Form]:
	"""Read every top-level form in `source`."""
	return Reader(Lexer(source).tokenize()).read_all()


def read_one(source: str) -> Form:
	"""Read exactly one form from `source`."""
	forms = read_string(source)
	if len(forms) != 1:
		raise ReadError(f"Expected exactly one form, found {len(forms)}")
	return forms[0]
