"""Class components: `defcomponent`.

Entries tagged `^:static` go to the statics object, everything else to the
instance object. Method entries `(name [params] body...)` become named
functions; value entries `(name value)` keep their value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from helix.definition import ClassDefinition, CompiledDefinition
from helix.errors import ShapeError
from helix.forms import Form, FormList, Symbol, Vector, meta_of
from helix.names import munge
from helix.transpiler.nodes import (
	Assign,
	Call,
	Comment,
	Export,
	ExprNode,
	Function,
	Literal,
	Object,
	StmtNode,
)

if TYPE_CHECKING:
	from helix.transpiler.transpiler import Transpiler

logger = logging.getLogger(__name__)

RENDER_MEMBER = "render"


@dataclass(slots=True, frozen=True)
class MethodEntry:
	name: Symbol
	params: Vector
	body: tuple[Form, ...]
	static: bool


@dataclass(slots=True, frozen=True)
class ValueEntry:
	name: Symbol
	value: Form
	static: bool


Entry = MethodEntry | ValueEntry


def is_static(form: Form) -> bool:
	return bool(meta_of(form).get("static"))


def is_method(form: Form) -> bool:
	return (
		isinstance(form, FormList)
		and len(form) >= 2
		and isinstance(form[0], Symbol)
		and form[0].ns is None
		and isinstance(form[1], Vector)
	)


def parse_entry(form: Form) -> Entry:
	static = is_static(form)
	if is_method(form):
		return MethodEntry(form[0], form[1], tuple(form[2:]), static)
	if (
		isinstance(form, FormList)
		and len(form) == 2
		and isinstance(form[0], Symbol)
		and form[0].ns is None
	):
		return ValueEntry(form[0], form[1], static)
	raise ShapeError(
		"Component entries must be (name [params] body...) or (name value)",
		form=form,
	)


def partition(entries: tuple[Form, ...]) -> tuple[list[Entry], list[Entry]]:
	"""Split entries into (instance, statics), each in source order."""
	instance: list[Entry] = []
	statics: list[Entry] = []
	for form in entries:
		entry = parse_entry(form)
		(statics if entry.static else instance).append(entry)
	return instance, statics


def emit_entry(entry: Entry, ctx: Transpiler) -> tuple[str, ExprNode]:
	key = entry.name.name
	if isinstance(entry, ValueEntry):
		return key, ctx.emit_expr(entry.value)
	with ctx.scope():
		params, prologue = ctx.emit_params(entry.params)
		body = [*prologue, *ctx.emit_body(entry.body)]
	return key, Function(params, body, name=munge(key))


def compile_class(definition: ClassDefinition, ctx: Transpiler) -> CompiledDefinition:
	display_name = definition.name.name
	instance, statics = partition(definition.entries)
	if not any(
		isinstance(e, MethodEntry) and e.name.name == RENDER_MEMBER for e in instance
	):
		raise ShapeError("Component must define a render method", form=definition.form)
	logger.debug(
		"%s: %d instance and %d static member(s)",
		display_name,
		len(instance),
		len(statics),
	)

	instance_obj = Object(
		[("displayName", Literal(display_name)), *(emit_entry(e, ctx) for e in instance)]
	)
	statics_obj = Object([emit_entry(e, ctx) for e in statics])
	name = munge(display_name)

	stmts: list[StmtNode] = []
	if definition.docstring is not None:
		stmts.append(Comment(definition.docstring, doc=True))
	create = Call(ctx.runtime("createComponent"), [instance_obj, statics_obj])
	stmts.append(Export(Assign(name, create, "const")))
	return CompiledDefinition(name=name, statements=stmts, definition=definition)
