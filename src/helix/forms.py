"""Unevaluated DSL syntax as Python values.

Scalars (str, int, float, bool, None) are represented as themselves.
Everything else is one of the form types below. Collections and symbols carry
an optional `meta` dict (source location, author tags such as ``^:static``)
that never takes part in equality or hashing.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeAlias

from typing_extensions import override

Form: TypeAlias = Any
Meta: TypeAlias = Mapping[str, Any]

_EMPTY_META: dict[str, Any] = {}


# =============================================================================
# Atoms
# =============================================================================


class Symbol:
	"""A symbol: `foo`, `hooks/use-state`, `&`."""

	__slots__: tuple[str, ...] = ("name", "ns", "meta")
	name: str
	ns: str | None
	meta: Meta

	def __init__(self, name: str, ns: str | None = None, meta: Meta | None = None):
		self.name = name
		self.ns = ns
		self.meta = meta or _EMPTY_META

	@classmethod
	def parse(cls, text: str, meta: Meta | None = None) -> Symbol:
		"""Build a symbol from `ns/name` text. A lone `/` is a plain name."""
		if "/" in text and text != "/":
			ns, _, name = text.partition("/")
			if ns and name:
				return cls(name, ns, meta)
		return cls(text, None, meta)

	def with_meta(self, meta: Meta) -> Symbol:
		return Symbol(self.name, self.ns, {**self.meta, **meta})

	@property
	def full_name(self) -> str:
		return f"{self.ns}/{self.name}" if self.ns else self.name

	@override
	def __eq__(self, other: object) -> bool:
		return (
			isinstance(other, Symbol)
			and other.name == self.name
			and other.ns == self.ns
		)

	@override
	def __hash__(self) -> int:
		return hash(("sym", self.ns, self.name))

	@override
	def __repr__(self) -> str:
		return f"Symbol({self.full_name!r})"


class Keyword:
	"""A keyword: `:class`, `:on-click`, `:aria/label`."""

	__slots__: tuple[str, ...] = ("name", "ns")
	name: str
	ns: str | None

	def __init__(self, name: str, ns: str | None = None):
		self.name = name
		self.ns = ns

	@classmethod
	def parse(cls, text: str) -> Keyword:
		if "/" in text and text != "/":
			ns, _, name = text.partition("/")
			if ns and name:
				return cls(name, ns)
		return cls(text)

	@property
	def full_name(self) -> str:
		return f"{self.ns}/{self.name}" if self.ns else self.name

	@override
	def __eq__(self, other: object) -> bool:
		return (
			isinstance(other, Keyword)
			and other.name == self.name
			and other.ns == self.ns
		)

	@override
	def __hash__(self) -> int:
		return hash(("kw", self.ns, self.name))

	@override
	def __repr__(self) -> str:
		return f"Keyword({self.full_name!r})"


# =============================================================================
# Collections
# =============================================================================


class _Seq(tuple[Any, ...]):
	"""Shared base for list-like forms. Metadata lives outside the tuple."""

	meta: Meta

	def __new__(cls, items: Iterable[Any] = (), meta: Meta | None = None):
		self = super().__new__(cls, items)
		self.meta = meta or _EMPTY_META
		return self

	def with_meta(self, meta: Meta):
		return type(self)(self, {**self.meta, **meta})

	@override
	def __eq__(self, other: object) -> bool:
		return type(other) is type(self) and tuple.__eq__(self, other)

	@override
	def __ne__(self, other: object) -> bool:
		return not self.__eq__(other)

	@override
	def __hash__(self) -> int:
		return hash((type(self).__name__, tuple(self)))


class FormList(_Seq):
	"""A call-shaped form: `(f a b)`."""

	@property
	def head(self) -> Form:
		return self[0] if self else None

	@override
	def __repr__(self) -> str:
		return f"FormList({list(self)!r})"


class Vector(_Seq):
	"""A vector literal: `[a b]`."""

	@override
	def __repr__(self) -> str:
		return f"Vector({list(self)!r})"


class FormSet(_Seq):
	"""A set literal: `#{a b}`. Keeps source order for emission."""

	@override
	def __repr__(self) -> str:
		return f"FormSet({list(self)!r})"


class FormMap(Mapping[Any, Any]):
	"""An ordered map literal: `{:a 1 :b 2}`."""

	__slots__: tuple[str, ...] = ("_items", "meta")
	_items: dict[Any, Any]
	meta: Meta

	def __init__(
		self,
		items: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = (),
		meta: Meta | None = None,
	):
		self._items = dict(items)
		self.meta = meta or _EMPTY_META

	def with_meta(self, meta: Meta) -> FormMap:
		return FormMap(self._items, {**self.meta, **meta})

	def dissoc(self, *keys: Any) -> FormMap:
		return FormMap(
			((k, v) for k, v in self._items.items() if k not in keys), self.meta
		)

	@override
	def __getitem__(self, key: Any) -> Any:
		return self._items[key]

	@override
	def __iter__(self) -> Iterator[Any]:
		return iter(self._items)

	@override
	def __len__(self) -> int:
		return len(self._items)

	@override
	def __eq__(self, other: object) -> bool:
		return isinstance(other, FormMap) and list(self._items.items()) == list(
			other._items.items()
		)

	@override
	def __hash__(self) -> int:
		return hash(("map", tuple(self._items.items())))

	@override
	def __repr__(self) -> str:
		return f"FormMap({self._items!r})"


# =============================================================================
# Helpers
# =============================================================================


def sym(text: str) -> Symbol:
	return Symbol.parse(text)


def kw(text: str) -> Keyword:
	return Keyword.parse(text)


def is_ident(x: Form) -> bool:
	"""True for name-like values: symbols, keywords and strings."""
	return isinstance(x, (Symbol, Keyword, str))


def name_of(x: Form) -> str:
	"""Plain name of a name-like value, without namespace."""
	if isinstance(x, (Symbol, Keyword)):
		return x.name
	if isinstance(x, str):
		return x
	return pr_str(x)


def meta_of(x: Form) -> Meta:
	return getattr(x, "meta", None) or _EMPTY_META


def location_of(x: Form) -> tuple[int | None, int | None]:
	meta = meta_of(x)
	return meta.get("line"), meta.get("column")


def is_call(form: Form, name: str | None = None) -> bool:
	"""True for a non-empty list form, optionally headed by symbol `name`."""
	if not isinstance(form, FormList) or not form:
		return False
	if name is None:
		return True
	head = form[0]
	return isinstance(head, Symbol) and head.ns is None and head.name == name


def pr_str(form: Form) -> str:
	"""Print a form back as DSL text. Deterministic: used for hook signatures."""
	if form is None:
		return "nil"
	if form is True:
		return "true"
	if form is False:
		return "false"
	if isinstance(form, str):
		return json.dumps(form, ensure_ascii=False)
	if isinstance(form, (int, float)):
		return repr(form)
	if isinstance(form, Symbol):
		return form.full_name
	if isinstance(form, Keyword):
		return ":" + form.full_name
	if isinstance(form, FormList):
		return "(" + " ".join(pr_str(f) for f in form) + ")"
	if isinstance(form, Vector):
		return "[" + " ".join(pr_str(f) for f in form) + "]"
	if isinstance(form, FormSet):
		return "#{" + " ".join(pr_str(f) for f in form) + "}"
	if isinstance(form, FormMap):
		return "{" + ", ".join(f"{pr_str(k)} {pr_str(v)}" for k, v in form.items()) + "}"
	raise TypeError(f"Cannot print {type(form).__name__} as a form")
