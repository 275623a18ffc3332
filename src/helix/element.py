"""Element construction: the `$` and `<>` macros.

    ($ MyComponent
       "child1"
       ($ "span" {:style {:color "green"}} "child2"))

A keyword or string target is a native tag; anything else is a composite
component reference. A literal map in first argument position is compiled as
props. Any other first argument, including a form that might evaluate to a
map at runtime, is passed through as a child.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from helix.errors import ShapeError
from helix.forms import Form, FormMap, Keyword, Symbol, name_of
from helix.props import Plan, compile_props, emit_plan
from helix.transpiler.nodes import Call, ExprNode, Literal, transformer

if TYPE_CHECKING:
	from helix.transpiler.transpiler import Transpiler

logger = logging.getLogger(__name__)

FRAGMENT = Symbol("Fragment")


@dataclass(slots=True, frozen=True)
class ElementCall:
	"""One createElement call, decided at compile time."""

	target: Form  # tag name string for natives, the type form for composites
	native: bool
	props: Plan | None
	children: tuple[Form, ...]


def is_native(target: Form) -> bool:
	return isinstance(target, (Keyword, str))


def expand_element(target: Form, args: Sequence[Form]) -> ElementCall:
	native = is_native(target)
	if native:
		target = name_of(target)
	if args and isinstance(args[0], FormMap):
		return ElementCall(
			target=target,
			native=native,
			props=compile_props(args[0], native),
			children=tuple(args[1:]),
		)
	if args:
		logger.debug(
			"First argument to %s is not a literal map; treating it as a child",
			target,
		)
	return ElementCall(target=target, native=native, props=None, children=tuple(args))


def emit_element(
	element: ElementCall, ctx: Transpiler, *, target: ExprNode | None = None
) -> ExprNode:
	if target is None:
		target = (
			Literal(element.target) if element.native else ctx.emit_expr(element.target)
		)
	props = emit_plan(element.props, ctx) if element.props is not None else Literal(None)
	children = [ctx.emit_expr(c) for c in element.children]
	return Call(ctx.runtime("createElement"), [target, props, *children])


@transformer("$")
def emit_dollar(*args: Form, ctx: Transpiler) -> ExprNode:
	"""($ type props? & children) -> createElement(type, props | null, ...children)"""
	if not args:
		raise ShapeError("$ requires an element type")
	return emit_element(expand_element(args[0], args[1:]), ctx)


@transformer("<>")
def emit_fragment(*args: Form, ctx: Transpiler) -> ExprNode:
	"""(<> props? & children) -> createElement(Fragment, props | null, ...children)

	A fragment is a composite element: a literal map in first position is its
	props (typically `{:key ...}`), passed through without key rewriting.
	"""
	element = expand_element(FRAGMENT, args)
	return emit_element(element, ctx, target=ctx.runtime("Fragment"))
