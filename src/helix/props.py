"""Props compilation.

Decides, per call site, how a literal property map becomes a runtime props
object:

- no rest marker: a StaticPlan, a closed list of (key, value) pairs emitted
  as one object literal
- rest marker (`&` or `:&`): a DynamicPlan, the static part merged at runtime
  with the rest map, literal entries winning

Native (built-in tag) targets get their keys rewritten to DOM prop names;
composite targets receive the DSL keys verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from helix.errors import ShapeError
from helix.forms import Form, FormMap, Keyword, Symbol, name_of
from helix.names import camel_case
from helix.transpiler.nodes import Call, ExprNode, Literal, Object

if TYPE_CHECKING:
	from helix.transpiler.transpiler import Transpiler

logger = logging.getLogger(__name__)

REST_MARKERS: tuple[Form, ...] = (Symbol("&"), Keyword("&"))


# =============================================================================
# Plans
# =============================================================================


@dataclass(slots=True, frozen=True)
class StaticPlan:
	"""Props fully known at compile time, in source order."""

	entries: tuple[tuple[str, PropValue], ...]

	def keys(self) -> list[str]:
		return [k for k, _ in self.entries]


@dataclass(slots=True, frozen=True)
class DynamicPlan:
	"""Static base merged at runtime with the value of the rest form."""

	base: StaticPlan
	rest: Form
	native: bool


@dataclass(slots=True, frozen=True)
class ConvertValue:
	"""A value whose shape is unknown at compile time: deep-convert at runtime."""

	form: Form


PropValue: TypeAlias = "Form | StaticPlan | ConvertValue"
Plan: TypeAlias = StaticPlan | DynamicPlan


# =============================================================================
# Key rewriting
# =============================================================================


def _key_name(k: Form) -> str:
	if isinstance(k, (Symbol, Keyword, str)):
		return name_of(k)
	return str(k)


def style(x: Form) -> PropValue:
	"""Rewrite a literal style map: keys camel-cased, nested maps recursed.

	Anything that is not a literal map is returned unchanged.
	"""
	if isinstance(x, FormMap):
		return StaticPlan(
			tuple((camel_case(_key_name(k)), style(v)) for k, v in x.items())
		)
	return x


def key_to_native_prop(k: Form, v: Form) -> tuple[str, PropValue]:
	"""Rewrite one DSL prop to its native DOM prop name and value."""
	if isinstance(k, Keyword) and k.ns is None:
		if k.name == "class":
			return "className", v
		if k.name == "for":
			return "htmlFor", v
		if k.name == "style":
			if isinstance(v, FormMap):
				return "style", style(v)
			return "style", ConvertValue(v)
	return camel_case(_key_name(k)), v


def _entry_as_is(k: Form, v: Form) -> tuple[str, PropValue]:
	return _key_name(k), v


# =============================================================================
# Plan construction
# =============================================================================


def _find_rest_marker(spec: FormMap) -> Form | None:
	found = [m for m in REST_MARKERS if m in spec]
	if len(found) > 1:
		raise ShapeError("Property map has more than one rest marker", form=spec)
	return found[0] if found else None


def static_plan(spec: FormMap, native: bool) -> StaticPlan:
	kv_to_prop = key_to_native_prop if native else _entry_as_is
	return StaticPlan(tuple(kv_to_prop(k, v) for k, v in spec.items()))


def compile_props(spec: Form, native: bool) -> Plan:
	"""Build the construction plan for a literal property map."""
	if not isinstance(spec, FormMap):
		raise ShapeError("Expected a literal property mapping", form=spec)
	marker = _find_rest_marker(spec)
	if marker is None:
		return static_plan(spec, native)
	logger.debug("Props with rest marker compile to a runtime merge")
	return DynamicPlan(
		base=static_plan(spec.dissoc(marker), native),
		rest=spec[marker],
		native=native,
	)


# =============================================================================
# Lowering
# =============================================================================


def emit_prop_value(value: PropValue, ctx: Transpiler) -> ExprNode:
	if isinstance(value, StaticPlan):
		return emit_static(value, ctx)
	if isinstance(value, ConvertValue):
		return Call(ctx.runtime("cljToJs"), [ctx.emit_expr(value.form)])
	return ctx.emit_expr(value)


def emit_static(plan: StaticPlan, ctx: Transpiler) -> Object:
	return Object([(k, emit_prop_value(v, ctx)) for k, v in plan.entries])


def emit_plan(plan: Plan, ctx: Transpiler) -> ExprNode:
	"""Lower a plan to JS: an object literal or a mergeMapObj() call."""
	if isinstance(plan, StaticPlan):
		return emit_static(plan, ctx)
	return Call(
		ctx.runtime("mergeMapObj"),
		[Literal(plan.native), emit_static(plan.base, ctx), ctx.emit_expr(plan.rest)],
	)

