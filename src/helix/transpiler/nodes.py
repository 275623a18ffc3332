from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from inspect import isfunction, signature
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar, cast, overload

from typing_extensions import override
from typing import Literal as Lit

from helix.errors import TranspileError

if TYPE_CHECKING:
	from helix.transpiler.transpiler import Transpiler

TransformerFn: TypeAlias = Callable[..., "ExprNode"]
_F = TypeVar("_F", bound="Callable[..., Any]")


# =============================================================================
# Base classes
# =============================================================================
class Node(ABC):
	"""Base class for all JS AST nodes."""

	__slots__: tuple[str, ...] = ()

	@abstractmethod
	def emit(self, out: list[str]) -> None:
		"""Emit this node as JavaScript code into the output buffer."""


class ExprNode(Node, ABC):
	"""Base class for expression nodes.

	`emit_call` lets a node decide what happens when it sits in the head
	position of a DSL call form. Macros and special forms are ExprNodes whose
	`emit_call` receives the raw, unevaluated argument forms.
	"""

	__slots__: tuple[str, ...] = ()

	def precedence(self) -> int:
		"""Operator precedence (higher = binds tighter). Default: primary (20)."""
		return 20

	def emit_call(self, args: list[Any], ctx: Transpiler) -> ExprNode:
		"""Called when this expression heads a call form: (expr args...).

		Args are raw forms. Use ctx.emit_expr() to lower them as needed.
		Default: a plain JS call.
		"""
		return Call(self, [ctx.emit_expr(a) for a in args])


class StmtNode(Node, ABC):
	"""Base class for statement nodes."""

	__slots__: tuple[str, ...] = ()


# =============================================================================
# Expression Nodes
# =============================================================================


@dataclass(slots=True)
class Identifier(ExprNode):
	"""JS identifier: x, foo, myFunc"""

	name: str

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.name)


@dataclass(slots=True)
class Literal(ExprNode):
	"""JS literal: 42, "hello", true, null"""

	value: int | float | str | bool | None

	@override
	def emit(self, out: list[str]) -> None:
		if self.value is None:
			out.append("null")
		elif isinstance(self.value, bool):
			out.append("true" if self.value else "false")
		elif isinstance(self.value, str):
			out.append('"')
			out.append(_escape_string(self.value))
			out.append('"')
		else:
			out.append(str(self.value))


@dataclass(slots=True)
class Array(ExprNode):
	"""JS array: [a, b, c]"""

	elements: Sequence[ExprNode]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("[")
		for i, e in enumerate(self.elements):
			if i > 0:
				out.append(", ")
			e.emit(out)
		out.append("]")


@dataclass(slots=True)
class Object(ExprNode):
	"""JS object literal: {"key": value}. Keys keep insertion order."""

	props: Sequence[tuple[str, ExprNode]]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("{")
		for i, (k, v) in enumerate(self.props):
			if i > 0:
				out.append(", ")
			out.append('"')
			out.append(_escape_string(k))
			out.append('": ')
			v.emit(out)
		out.append("}")


@dataclass(slots=True)
class Member(ExprNode):
	"""JS member access: obj.prop"""

	obj: ExprNode
	prop: str

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.obj, out)
		out.append(".")
		out.append(self.prop)


@dataclass(slots=True)
class Subscript(ExprNode):
	"""JS subscript access: obj[key]"""

	obj: ExprNode
	key: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.obj, out)
		out.append("[")
		self.key.emit(out)
		out.append("]")


@dataclass(slots=True)
class Call(ExprNode):
	"""JS function call: fn(args)"""

	callee: ExprNode
	args: Sequence[ExprNode]

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.callee, out)
		out.append("(")
		for i, a in enumerate(self.args):
			if i > 0:
				out.append(", ")
			a.emit(out)
		out.append(")")


@dataclass(slots=True)
class Unary(ExprNode):
	"""JS unary expression: -x, !x, typeof x"""

	op: str
	operand: ExprNode

	@override
	def precedence(self) -> int:
		op = self.op
		tag = "+u" if op == "+" else ("-u" if op == "-" else op)
		return _PRECEDENCE.get(tag, 17)

	@override
	def emit(self, out: list[str]) -> None:
		if self.op in {"typeof", "void", "delete"}:
			out.append(self.op)
			out.append(" ")
		else:
			out.append(self.op)
		_emit_paren(self.operand, self.op, "unary", out)


@dataclass(slots=True)
class Binary(ExprNode):
	"""JS binary expression: x + y, a && b"""

	left: ExprNode
	op: str
	right: ExprNode

	@override
	def precedence(self) -> int:
		return _PRECEDENCE.get(self.op, 0)

	@override
	def emit(self, out: list[str]) -> None:
		_emit_paren(self.left, self.op, "left", out)
		out.append(" ")
		out.append(self.op)
		out.append(" ")
		_emit_paren(self.right, self.op, "right", out)


@dataclass(slots=True)
class Ternary(ExprNode):
	"""JS ternary expression: cond ? a : b"""

	cond: ExprNode
	then: ExprNode
	else_: ExprNode

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["?:"]

	@override
	def emit(self, out: list[str]) -> None:
		if self.cond.precedence() <= _PRECEDENCE["?:"]:
			out.append("(")
			self.cond.emit(out)
			out.append(")")
		else:
			self.cond.emit(out)
		out.append(" ? ")
		self.then.emit(out)
		out.append(" : ")
		self.else_.emit(out)


@dataclass(slots=True)
class Arrow(ExprNode):
	"""JS arrow function: (x) => expr or () => { ... }

	A sequence body is emitted as a statement block.
	"""

	params: Sequence[str]
	body: ExprNode | Sequence[StmtNode]

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["=>"]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("(")
		out.append(", ".join(self.params))
		out.append(") => ")
		if isinstance(self.body, ExprNode):
			if isinstance(self.body, Object):
				out.append("(")
				self.body.emit(out)
				out.append(")")
			else:
				self.body.emit(out)
			return
		_emit_block(self.body, out)


@dataclass(slots=True)
class Function(ExprNode):
	"""JS function expression: function name(params) { ... }"""

	params: Sequence[str]
	body: Sequence[StmtNode]
	name: str | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("function")
		if self.name:
			out.append(" ")
			out.append(self.name)
		out.append("(")
		out.append(", ".join(self.params))
		out.append(") ")
		_emit_block(self.body, out)


@dataclass(slots=True)
class New(ExprNode):
	"""JS new expression: new Ctor(args)"""

	ctor: ExprNode
	args: Sequence[ExprNode]

	@override
	def emit(self, out: list[str]) -> None:
		out.append("new ")
		_emit_primary(self.ctor, out)
		out.append("(")
		for i, a in enumerate(self.args):
			if i > 0:
				out.append(", ")
			a.emit(out)
		out.append(")")


@dataclass(slots=True)
class Transformer(ExprNode):
	"""ExprNode wrapping a function that turns raw argument forms into an ExprNode.

	Macros and special forms are Transformers. The wrapped function receives
	the unevaluated argument forms plus the transpiler as `ctx`.

	Example:
		emit_not = Transformer(lambda x, ctx: Unary("!", ctx.emit_expr(x)), name="not")
		# (not ok) -> emit_not.emit_call([Symbol("ok")], ctx) -> Unary("!", ok)
	"""

	fn: TransformerFn
	name: str = ""  # For error messages

	@override
	def emit(self, out: list[str]) -> None:
		label = self.name or "Transformer"
		raise TypeError(f"{label} cannot be emitted directly - must be called")

	@override
	def emit_call(self, args: list[Any], ctx: Transpiler) -> ExprNode:
		try:
			signature(self.fn).bind(*args, ctx=ctx)
		except TypeError:
			label = self.name or "macro"
			raise TranspileError(
				f"Wrong number of arguments ({len(args)}) passed to {label}"
			) from None
		return self.fn(*args, ctx=ctx)


@overload
def transformer(arg: str) -> Callable[[_F], _F]: ...


@overload
def transformer(arg: _F) -> _F: ...


def transformer(arg: str | _F) -> Callable[[_F], _F] | _F:
	"""Decorator/helper for Transformer.

	Usage:
		@transformer("when")
		def emit_when(test, *body, ctx): ...
	or:
		emit_not = transformer(lambda x, *, ctx: ...)

	Returns a Transformer, but the type signature lies and preserves
	the original function type.
	"""
	if isinstance(arg, str):

		def decorator(fn: _F) -> _F:
			return cast(_F, Transformer(fn, name=arg))

		return decorator
	elif isfunction(arg):
		name = "" if arg.__name__ == "<lambda>" else arg.__name__
		return cast(_F, Transformer(arg, name=name))
	else:
		raise TypeError(
			"transformer expects a function or string (for decorator usage)"
		)


# =============================================================================
# Binding patterns
# =============================================================================


@dataclass(slots=True)
class ObjectPattern:
	"""Object destructuring target: {"foo-bar": fooBar = 1, baz}"""

	entries: Sequence[tuple[str, str, ExprNode | None]]  # (key, local, default)

	def emit(self, out: list[str]) -> None:
		out.append("{")
		first = True
		for key, local, default in self.entries:
			if not first:
				out.append(", ")
			first = False
			if key == local:
				out.append(local)
			else:
				out.append('"')
				out.append(_escape_string(key))
				out.append('": ')
				out.append(local)
			if default is not None:
				out.append(" = ")
				default.emit(out)
		out.append("}")


@dataclass(slots=True)
class ArrayPattern:
	"""Array destructuring target: [a, b, ...rest]"""

	names: Sequence[str]
	rest: str | None = None

	def emit(self, out: list[str]) -> None:
		parts = list(self.names)
		if self.rest:
			parts.append("..." + self.rest)
		out.append("[")
		out.append(", ".join(parts))
		out.append("]")


Pattern: TypeAlias = str | ObjectPattern | ArrayPattern


# =============================================================================
# Statement Nodes
# =============================================================================


@dataclass(slots=True)
class Return(StmtNode):
	"""JS return statement: return expr;"""

	value: ExprNode | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("return")
		if self.value is not None:
			out.append(" ")
			self.value.emit(out)
		out.append(";")


@dataclass(slots=True)
class If(StmtNode):
	"""JS if statement: if (cond) { ... } else { ... }"""

	cond: ExprNode
	then: Sequence[StmtNode]
	else_: Sequence[StmtNode] = ()

	@override
	def emit(self, out: list[str]) -> None:
		out.append("if (")
		self.cond.emit(out)
		out.append(") ")
		_emit_block(self.then, out)
		if self.else_:
			out.append(" else ")
			_emit_block(self.else_, out)


@dataclass(slots=True)
class Assign(StmtNode):
	"""JS assignment: const x = expr; let {a} = expr; or x = expr;

	declare: "let", "const", or None (reassignment)
	"""

	target: Pattern
	value: ExprNode
	declare: Lit["let", "const"] | None = None

	@override
	def emit(self, out: list[str]) -> None:
		if self.declare:
			out.append(self.declare)
			out.append(" ")
		if isinstance(self.target, str):
			out.append(self.target)
		else:
			self.target.emit(out)
		out.append(" = ")
		self.value.emit(out)
		out.append(";")


@dataclass(slots=True)
class AssignMember(StmtNode):
	"""JS property assignment: obj.prop = expr;"""

	target: Member | Subscript
	value: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		self.target.emit(out)
		out.append(" = ")
		self.value.emit(out)
		out.append(";")


@dataclass(slots=True)
class ExprStmt(StmtNode):
	"""JS expression statement: expr;"""

	expr: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		if isinstance(self.expr, (Object, Function)):
			out.append("(")
			self.expr.emit(out)
			out.append(")")
		else:
			self.expr.emit(out)
		out.append(";")


@dataclass(slots=True)
class Block(StmtNode):
	"""JS block: { ... } - a sequence of statements."""

	body: Sequence[StmtNode]

	@override
	def emit(self, out: list[str]) -> None:
		_emit_block(self.body, out)


@dataclass(slots=True)
class Throw(StmtNode):
	"""JS throw statement: throw expr;"""

	value: ExprNode

	@override
	def emit(self, out: list[str]) -> None:
		out.append("throw ")
		self.value.emit(out)
		out.append(";")


@dataclass(slots=True)
class Comment(StmtNode):
	"""JS comment. Docstrings are emitted as JSDoc blocks."""

	text: str
	doc: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		if self.doc:
			lines = self.text.replace("*/", "*\\/").splitlines() or [""]
			out.append("/**\n")
			for line in lines:
				out.append(" * " + line if line else " *")
				out.append("\n")
			out.append(" */")
		else:
			out.append("// ")
			out.append(self.text.replace("\n", " "))


@dataclass(slots=True)
class Import(StmtNode):
	"""ES import.

	import def from "src"; import * as ns from "src";
	import { a, b as c } from "src";
	"""

	src: str
	names: Sequence[tuple[str, str]] = ()  # (imported, local)
	default: str | None = None
	namespace: str | None = None

	@override
	def emit(self, out: list[str]) -> None:
		clauses: list[str] = []
		if self.default:
			clauses.append(self.default)
		if self.namespace:
			clauses.append(f"* as {self.namespace}")
		if self.names:
			named = ", ".join(
				imported if imported == local else f"{imported} as {local}"
				for imported, local in self.names
			)
			clauses.append("{ " + named + " }")
		out.append("import ")
		if clauses:
			out.append(", ".join(clauses))
			out.append(" from ")
		out.append('"')
		out.append(_escape_string(self.src))
		out.append('";')


@dataclass(slots=True)
class Export(StmtNode):
	"""ES export of a declaration: export const x = ...;"""

	decl: Assign

	@override
	def emit(self, out: list[str]) -> None:
		out.append("export ")
		self.decl.emit(out)


# =============================================================================
# Emit logic
# =============================================================================


def emit(node: Node) -> str:
	"""Emit a node as JavaScript code."""
	out: list[str] = []
	node.emit(out)
	return "".join(out)


def emit_program(stmts: Sequence[StmtNode]) -> str:
	"""Emit top-level statements, one per line."""
	return "\n".join(emit(s) for s in stmts) + ("\n" if stmts else "")


# Operator precedence table (higher = binds tighter)
_PRECEDENCE: dict[str, int] = {
	# Primary
	".": 20,
	"[]": 20,
	"()": 20,
	# Unary
	"!": 17,
	"+u": 17,
	"-u": 17,
	"typeof": 17,
	"void": 17,
	"delete": 17,
	# Exponentiation (right-assoc)
	"**": 16,
	# Multiplicative
	"*": 15,
	"/": 15,
	"%": 15,
	# Additive
	"+": 14,
	"-": 14,
	# Relational
	"<": 12,
	"<=": 12,
	">": 12,
	">=": 12,
	"instanceof": 12,
	"in": 12,
	# Equality
	"==": 11,
	"!=": 11,
	"===": 11,
	"!==": 11,
	# Logical
	"&&": 7,
	"||": 6,
	"??": 6,
	# Ternary
	"?:": 4,
	# Arrow functions
	"=>": 3,
	# Assignment (right-assoc)
	"=": 2,
	# Comma
	",": 1,
}

_RIGHT_ASSOC = {"**", "="}


def _escape_string(s: str) -> str:
	"""Escape for double-quoted JS string literals."""
	return (
		s.replace("\\", "\\\\")
		.replace('"', '\\"')
		.replace("\n", "\\n")
		.replace("\r", "\\r")
		.replace("\t", "\\t")
		.replace("\b", "\\b")
		.replace("\f", "\\f")
		.replace("\v", "\\v")
		.replace("\x00", "\\x00")
		.replace("\u2028", "\\u2028")
		.replace("\u2029", "\\u2029")
	)


def _emit_block(body: Sequence[StmtNode], out: list[str]) -> None:
	out.append("{\n")
	for stmt in body:
		stmt.emit(out)
		out.append("\n")
	out.append("}")


def _emit_paren(node: ExprNode, parent_op: str, side: str, out: list[str]) -> None:
	"""Emit child with parens if needed for precedence."""
	needs_parens = False
	if isinstance(node, (Ternary, Arrow)):
		needs_parens = True
	else:
		child_prec = node.precedence()
		parent_prec = _PRECEDENCE.get(parent_op, 0)
		if child_prec < parent_prec:
			needs_parens = True
		elif child_prec == parent_prec and isinstance(node, (Binary, Ternary)):
			# Handle associativity
			if parent_op in _RIGHT_ASSOC:
				needs_parens = side == "left"
			else:
				needs_parens = side == "right"

	if needs_parens:
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)


def _emit_primary(node: ExprNode, out: list[str]) -> None:
	"""Emit with parens if not primary precedence."""
	if node.precedence() < 20 or isinstance(node, (Ternary, Function)):
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)
