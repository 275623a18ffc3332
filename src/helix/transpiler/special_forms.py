"""
Special forms for component bodies.

Each one is a Transformer: it receives the raw argument forms plus the
transpiler and returns a JS expression node. Statement-shaped forms (`let`,
`do`) used in expression position become immediately invoked arrows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from helix.element import emit_dollar, emit_fragment
from helix.errors import TranspileError
from helix.forms import Form, FormList, Keyword, Symbol, Vector, pr_str
from helix.transpiler.nodes import (
	Array,
	Arrow,
	Binary,
	Call,
	ExprNode,
	Function,
	Identifier,
	Literal,
	Member,
	New,
	StmtNode,
	Subscript,
	Ternary,
	Throw,
	Unary,
	transformer,
)

if TYPE_CHECKING:
	from helix.transpiler.transpiler import Transpiler


def _iife(body: list[StmtNode]) -> ExprNode:
	return Call(Arrow([], body), [])


# =============================================================================
# Control flow
# =============================================================================


@transformer("if")
def emit_if(*args: Form, ctx: Transpiler) -> ExprNode:
	"""(if test then else?) -> test ? then : else"""
	if len(args) not in (2, 3):
		raise TranspileError("if takes a test, a then and an optional else")
	else_ = ctx.emit_expr(args[2]) if len(args) == 3 else Literal(None)
	return Ternary(ctx.emit_expr(args[0]), ctx.emit_expr(args[1]), else_)


@transformer("when")
def emit_when(test: Form, *body: Form, ctx: Transpiler) -> ExprNode:
	"""(when test body...) -> test ? body : null"""
	return Ternary(ctx.emit_expr(test), _emit_do(body, ctx), Literal(None))


@transformer("when-not")
def emit_when_not(test: Form, *body: Form, ctx: Transpiler) -> ExprNode:
	return Ternary(ctx.emit_expr(test), Literal(None), _emit_do(body, ctx))


def _emit_do(body: tuple[Form, ...], ctx: Transpiler) -> ExprNode:
	if not body:
		return Literal(None)
	if len(body) == 1:
		return ctx.emit_expr(body[0])
	with ctx.scope():
		return _iife(ctx.emit_body(body))


@transformer("do")
def emit_do(*body: Form, ctx: Transpiler) -> ExprNode:
	return _emit_do(body, ctx)


@transformer("let")
def emit_let(*args: Form, ctx: Transpiler) -> ExprNode:
	"""Expression-position let: (() => { const ...; return body; })()"""
	with ctx.scope():
		body = ctx.emit_let(FormList((Symbol("let"), *args)), tail=True)
	return _iife(body)


@transformer("fn")
def emit_fn(*args: Form, ctx: Transpiler) -> ExprNode:
	"""(fn name? [params] body...) -> function expression.

	Only single-arity functions are supported.
	"""
	name: str | None = None
	rest = list(args)
	if rest and isinstance(rest[0], Symbol):
		name = rest.pop(0).name
	if not rest or not isinstance(rest[0], Vector):
		if rest and isinstance(rest[0], FormList):
			raise TranspileError("Multi-arity fn is not supported", form=rest[0])
		raise TranspileError("fn requires a parameter vector")
	params_form, body = rest[0], rest[1:]
	with ctx.scope():
		js_name = ctx.declare(name, param=True) if name else None
		params, prologue = ctx.emit_params(params_form)
		stmts = [*prologue, *ctx.emit_body(body)]
	if js_name:
		return Function(params, stmts, name=js_name)
	return Arrow(params, stmts)


@transformer("throw")
def emit_throw(value: Form, *, ctx: Transpiler) -> ExprNode:
	return _iife([Throw(ctx.emit_expr(value))])


@transformer("quote")
def emit_quote(value: Form, *, ctx: Transpiler) -> ExprNode:
	"""'x -> "x" for symbols; literal data otherwise."""
	return _quoted(value, ctx)


def _quoted(value: Form, ctx: Transpiler) -> ExprNode:
	if isinstance(value, Symbol):
		return Literal(value.full_name)
	if isinstance(value, (FormList, Vector)):
		return Array([_quoted(v, ctx) for v in value])
	return ctx.emit_expr(value)


@transformer("set!")
def emit_set(target: Form, value: Form, *, ctx: Transpiler) -> ExprNode:
	node = ctx.emit_expr(target)
	if not isinstance(node, (Identifier, Member, Subscript)):
		raise TranspileError(f"Cannot assign to {pr_str(target)}", form=target)
	return Binary(node, "=", ctx.emit_expr(value))


# =============================================================================
# Interop
# =============================================================================


@transformer(".")
def emit_dot(obj: Form, member: Form, *args: Form, ctx: Transpiler) -> ExprNode:
	"""(. obj method args...), (. obj -prop), (. obj (method args...))"""
	target = ctx.emit_expr(obj)
	if isinstance(member, FormList) and member and isinstance(member[0], Symbol):
		return Call(
			Member(target, member[0].name), [ctx.emit_expr(a) for a in member[1:]]
		)
	if not isinstance(member, Symbol):
		raise TranspileError("(. obj member) requires a symbol member", form=member)
	if member.name.startswith("-"):
		return Member(target, member.name[1:])
	return Call(Member(target, member.name), [ctx.emit_expr(a) for a in args])


@transformer("new")
def emit_new(ctor: Form, *args: Form, ctx: Transpiler) -> ExprNode:
	return New(ctx.emit_expr(ctor), [ctx.emit_expr(a) for a in args])


def _subscript_key(key: Form, ctx: Transpiler) -> ExprNode:
	if isinstance(key, Keyword):
		return Literal(key.full_name)
	return ctx.emit_expr(key)


@transformer("aget")
def emit_aget(obj: Form, *keys: Form, ctx: Transpiler) -> ExprNode:
	node = ctx.emit_expr(obj)
	for k in keys:
		node = Subscript(node, ctx.emit_expr(k))
	return node


@transformer("get")
def emit_get(obj: Form, key: Form, *default: Form, ctx: Transpiler) -> ExprNode:
	"""(get obj key default?) -> obj[key] ?? default"""
	node: ExprNode = Subscript(ctx.emit_expr(obj), _subscript_key(key, ctx))
	if len(default) > 1:
		raise TranspileError("get takes at most one default")
	if default:
		node = Binary(node, "??", ctx.emit_expr(default[0]))
	return node


@transformer("clj->js")
def emit_clj_to_js(value: Form, *, ctx: Transpiler) -> ExprNode:
	return Call(ctx.runtime("cljToJs"), [ctx.emit_expr(value)])


# =============================================================================
# Operators
# =============================================================================


@transformer("str")
def emit_str(*parts: Form, ctx: Transpiler) -> ExprNode:
	"""(str a b) -> [a, b].join("")"""
	return Call(
		Member(Array([ctx.emit_expr(p) for p in parts]), "join"), [Literal("")]
	)


@transformer("not")
def emit_not(x: Form, *, ctx: Transpiler) -> ExprNode:
	return Unary("!", ctx.emit_expr(x))


@transformer("nil?")
def emit_nil(x: Form, *, ctx: Transpiler) -> ExprNode:
	return Binary(ctx.emit_expr(x), "==", Literal(None))


@transformer("inc")
def emit_inc(x: Form, *, ctx: Transpiler) -> ExprNode:
	return Binary(ctx.emit_expr(x), "+", Literal(1))


@transformer("dec")
def emit_dec(x: Form, *, ctx: Transpiler) -> ExprNode:
	return Binary(ctx.emit_expr(x), "-", Literal(1))


def _chain(op: str, identity: ExprNode | None):
	def emit_chain(*args: Form, ctx: Transpiler) -> ExprNode:
		if not args:
			if identity is None:
				raise TranspileError(f"{op} requires at least one argument")
			return identity
		nodes = [ctx.emit_expr(a) for a in args]
		if len(nodes) == 1:
			if op == "-":
				return Unary("-", nodes[0])
			if op == "/":
				return Binary(Literal(1), "/", nodes[0])
			return nodes[0]
		result = nodes[0]
		for n in nodes[1:]:
			result = Binary(result, op, n)
		return result

	return emit_chain


def _compare(op: str):
	def emit_compare(*args: Form, ctx: Transpiler) -> ExprNode:
		if len(args) < 2:
			if not args:
				raise TranspileError(f"{op} requires at least one argument")
			return Literal(True)
		nodes = [ctx.emit_expr(a) for a in args]
		pairs = [Binary(a, op, b) for a, b in zip(nodes, nodes[1:])]
		result: ExprNode = pairs[0]
		for p in pairs[1:]:
			result = Binary(result, "&&", p)
		return result

	return emit_compare


_ARITHMETIC: dict[str, tuple[str, ExprNode | None]] = {
	"+": ("+", Literal(0)),
	"-": ("-", None),
	"*": ("*", Literal(1)),
	"/": ("/", None),
	"mod": ("%", None),
	"and": ("&&", Literal(True)),
	"or": ("||", Literal(None)),
}

_COMPARISONS: dict[str, str] = {
	"=": "===",
	"not=": "!==",
	"<": "<",
	"<=": "<=",
	">": ">",
	">=": ">=",
}


DEFAULT_MACROS: dict[str, ExprNode] = {
	"$": emit_dollar,
	"<>": emit_fragment,
	"if": emit_if,
	"when": emit_when,
	"when-not": emit_when_not,
	"do": emit_do,
	"let": emit_let,
	"fn": emit_fn,
	"throw": emit_throw,
	"quote": emit_quote,
	"set!": emit_set,
	".": emit_dot,
	"new": emit_new,
	"aget": emit_aget,
	"get": emit_get,
	"clj->js": emit_clj_to_js,
	"str": emit_str,
	"not": emit_not,
	"nil?": emit_nil,
	"inc": emit_inc,
	"dec": emit_dec,
	**{
		name: transformer(name)(_chain(op, identity))
		for name, (op, identity) in _ARITHMETIC.items()
	},
	**{name: transformer(name)(_compare(op)) for name, op in _COMPARISONS.items()},
}
