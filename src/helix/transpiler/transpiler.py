"""
DSL forms -> JavaScript transpiler.

Lowers the ordinary code inside component bodies (locals, calls, `let`,
`if`, `fn`, interop) to v2-style JS nodes. Macros such as `$` and special
forms are ExprNodes registered by name; when one heads a call form its
`emit_call` receives the raw argument forms.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager

from helix.errors import CompileError, TranspileError
from helix.forms import (
	Form,
	FormList,
	FormMap,
	FormSet,
	Keyword,
	Symbol,
	Vector,
	pr_str,
)
from helix.names import munge
from helix.transpiler.id import gensym
from helix.transpiler.nodes import (
	Array,
	ArrayPattern,
	Assign,
	Binary,
	Block,
	Call,
	ExprNode,
	ExprStmt,
	Identifier,
	If,
	Literal,
	Member,
	New,
	Object,
	ObjectPattern,
	Return,
	StmtNode,
	Subscript,
	Unary,
)

# Names a generated module imports from the runtime, in import order.
RUNTIME_NAMES: tuple[str, ...] = (
	"createElement",
	"Fragment",
	"createComponent",
	"mergeMapObj",
	"cljToJs",
	"signature",
	"register",
)


class Transpiler:
	"""Transpile DSL forms to JS nodes.

	One Transpiler serves a whole module: it accumulates the runtime helpers
	and namespace aliases the generated code refers to.
	"""

	macros: dict[str, ExprNode]
	aliases: dict[str, str]
	referred: dict[str, str]
	runtime_names: set[str]
	_scopes: list[dict[str, str]]

	def __init__(
		self,
		macros: Mapping[str, ExprNode] | None = None,
		aliases: Mapping[str, str] | None = None,
		referred: Mapping[str, str] | None = None,
	) -> None:
		if macros is None:
			from helix.transpiler.special_forms import DEFAULT_MACROS

			macros = DEFAULT_MACROS
		self.macros = dict(macros)
		self.aliases = dict(aliases or {})
		self.referred = dict(referred or {})
		self.runtime_names = set()
		self._scopes = [{}]

	# --- Runtime helpers ----------------------------------------------------

	def runtime(self, name: str) -> Identifier:
		"""Reference a runtime helper, recording it for the module's imports."""
		if name not in RUNTIME_NAMES:
			raise ValueError(f"Unknown runtime helper: {name}")
		self.runtime_names.add(name)
		return Identifier(name)

	def used_runtime_names(self) -> list[str]:
		return [n for n in RUNTIME_NAMES if n in self.runtime_names]

	# --- Scopes -------------------------------------------------------------

	@contextmanager
	def scope(self) -> Iterator[None]:
		self._scopes.append({})
		try:
			yield
		finally:
			self._scopes.pop()

	def lookup(self, name: str) -> str | None:
		for frame in reversed(self._scopes):
			if name in frame:
				return frame[name]
		return None

	def is_local(self, name: str) -> bool:
		return self.lookup(name) is not None

	def declare(self, name: str, *, param: bool = False) -> str:
		"""Bind a DSL local in the current scope and return its JS name.

		Rebinding a name that is already visible gets a fresh JS name, so
		`(let [x (inc x)] ...)` never reads its own uninitialized const.
		"""
		js_name = munge(name)
		taken = {v for frame in self._scopes for v in frame.values()}
		if not param and (self.is_local(name) or js_name in taken):
			js_name = gensym(js_name)
		self._scopes[-1][name] = js_name
		return js_name

	def fresh(self, prefix: str) -> str:
		"""A generated local that cannot collide with author names."""
		name = gensym(prefix)
		self._scopes[-1][f"${name}"] = name
		return name

	# --- Expressions ----------------------------------------------------------

	def emit_expr(self, form: Form) -> ExprNode:
		"""Lower one form in expression position."""
		if form is None or isinstance(form, (bool, int, float, str)):
			return Literal(form)
		if isinstance(form, Keyword):
			return Literal(form.full_name)
		if isinstance(form, Symbol):
			return self.emit_symbol(form)
		if isinstance(form, Vector):
			return Array([self.emit_expr(f) for f in form])
		if isinstance(form, FormSet):
			return New(Identifier("Set"), [Array([self.emit_expr(f) for f in form])])
		if isinstance(form, FormMap):
			return Object([(self.emit_key(k), self.emit_expr(v)) for k, v in form.items()])
		if isinstance(form, FormList):
			return self.emit_call(form)
		raise TranspileError(f"Unsupported form type: {type(form).__name__}", form=form)

	def emit_key(self, key: Form) -> str:
		if isinstance(key, Keyword):
			return key.full_name
		if isinstance(key, str):
			return key
		if isinstance(key, (int, float)) and not isinstance(key, bool):
			return str(key)
		raise TranspileError(
			"Map keys must be keywords, strings or numbers", form=key
		)

	def emit_symbol(self, sym: Symbol) -> ExprNode:
		if sym.ns == "js":
			return Identifier(sym.name)
		if sym.ns is not None:
			alias = self.aliases.get(sym.ns)
			if alias is None:
				raise TranspileError(f"Unknown namespace alias '{sym.ns}'", form=sym)
			return Member(Identifier(alias), munge(sym.name, property=True))
		if (local := self.lookup(sym.name)) is not None:
			return Identifier(local)
		if (referred := self.referred.get(sym.name)) is not None:
			return Identifier(referred)
		return Identifier(munge(sym.name))

	def emit_call(self, form: FormList) -> ExprNode:
		if not form:
			return Array([])
		head, args = form[0], list(form[1:])

		if isinstance(head, Symbol) and head.ns is None and not self.is_local(head.name):
			name = head.name
			macro = self.macros.get(name)
			if macro is not None:
				try:
					return macro.emit_call(args, self)
				except CompileError as exc:
					if exc.form is not None:
						raise
					raise type(exc)(exc.message, form=form) from None
			if name.startswith(".-") and len(name) > 2:
				if len(args) != 1:
					raise TranspileError(f"({name} obj) takes one argument", form=form)
				return Member(self.emit_expr(args[0]), munge(name[2:], property=True))
			if name.startswith(".") and len(name) > 1:
				if not args:
					raise TranspileError(f"({name} obj ...) needs a target", form=form)
				target = self.emit_expr(args[0])
				method = Member(target, munge(name[1:], property=True))
				return Call(method, [self.emit_expr(a) for a in args[1:]])
			if name.endswith(".") and len(name) > 1:
				ctor = self.emit_symbol(Symbol(name[:-1]))
				return New(ctor, [self.emit_expr(a) for a in args])

		if isinstance(head, Symbol) and head.ns == "js" and head.name.endswith("."):
			return New(Identifier(head.name[:-1]), [self.emit_expr(a) for a in args])

		if isinstance(head, Keyword):
			if len(args) not in (1, 2):
				raise TranspileError("Keyword lookup takes one or two arguments", form=form)
			return _lookup(self.emit_expr(args[0]), Literal(head.full_name), args[1:], self)

		callee = self.emit_expr(head)
		return callee.emit_call(args, self)

	# --- Statements -----------------------------------------------------------

	def emit_stmts(self, form: Form, *, tail: bool) -> list[StmtNode]:
		"""Lower one form in statement position.

		With tail=True the form's value is returned.
		"""
		if isinstance(form, FormList) and form and isinstance(form[0], Symbol):
			head = form[0]
			name = head.name if head.ns is None and not self.is_local(head.name) else None
			if name == "do":
				return self.emit_block(form[1:], tail=tail)
			if name == "let":
				with self.scope():
					stmts = self.emit_let(form, tail=tail)
				# A later sibling may bind the same names.
				return stmts if tail else [Block(stmts)]
			if name in ("if", "when", "when-not"):
				return self._emit_if_stmt(form, tail=tail)
		expr = self.emit_expr(form)
		return [Return(expr)] if tail else [ExprStmt(expr)]

	def emit_block(self, forms: Sequence[Form], *, tail: bool) -> list[StmtNode]:
		"""Lower a sequence of forms; the last one is returned when tail=True."""
		if not forms:
			return [Return(Literal(None))] if tail else []
		stmts: list[StmtNode] = []
		last = len(forms) - 1
		for i, f in enumerate(forms):
			stmts.extend(self.emit_stmts(f, tail=tail and i == last))
		return stmts

	def emit_let(self, form: FormList, *, tail: bool) -> list[StmtNode]:
		"""(let [a 1 b (f a)] body...) in the current scope."""
		if len(form) < 2 or not isinstance(form[1], Vector):
			raise TranspileError("let requires a binding vector", form=form)
		bindings = form[1]
		if len(bindings) % 2 != 0:
			raise TranspileError(
				"let requires an even number of forms in its binding vector",
				form=bindings,
			)
		stmts: list[StmtNode] = []
		for i in range(0, len(bindings), 2):
			value = self.emit_expr(bindings[i + 1])
			stmts.extend(self.destructure(bindings[i], value))
		stmts.extend(self.emit_block(form[2:], tail=tail))
		return stmts

	def emit_body(self, forms: Sequence[Form]) -> list[StmtNode]:
		"""Function body: forms in order, the last one returned."""
		return self.emit_block(forms, tail=True)

	def _emit_if_stmt(self, form: FormList, *, tail: bool) -> list[StmtNode]:
		name = form[0].name
		if len(form) < 2:
			raise TranspileError(f"{name} requires a test", form=form)
		test = self.emit_expr(form[1])
		if name == "if":
			if len(form) not in (3, 4):
				raise TranspileError("if takes a test, a then and an optional else", form=form)
			with self.scope():
				then = self.emit_stmts(form[2], tail=tail)
			with self.scope():
				else_ = (
					self.emit_stmts(form[3], tail=tail)
					if len(form) == 4
					else ([Return(Literal(None))] if tail else [])
				)
			return [If(test, then, else_)]
		if name == "when-not":
			test = Unary("!", test)
		with self.scope():
			body = self.emit_block(form[2:], tail=tail)
		stmts: list[StmtNode] = [If(test, body)]
		if tail:
			stmts.append(Return(Literal(None)))
		return stmts

	# --- Binding patterns -------------------------------------------------------

	def destructure(self, pattern: Form, value: ExprNode) -> list[StmtNode]:
		"""Bind `pattern` (symbol, vector or map) to `value` as const declarations."""
		if isinstance(pattern, Symbol) and pattern.ns is None:
			return [Assign(self.declare(pattern.name), value, "const")]
		if isinstance(pattern, Vector):
			return self._destructure_vector(pattern, value)
		if isinstance(pattern, FormMap):
			return self._destructure_map(pattern, value)
		raise TranspileError(f"Invalid binding form: {pr_str(pattern)}", form=pattern)

	def _as_source(self, value: ExprNode, stmts: list[StmtNode]) -> ExprNode:
		if isinstance(value, Identifier):
			return value
		tmp = self.fresh("tmp")
		stmts.append(Assign(tmp, value, "const"))
		return Identifier(tmp)

	def _destructure_vector(self, pattern: Vector, value: ExprNode) -> list[StmtNode]:
		items = list(pattern)
		rest: Form = None
		as_name: Form = None
		if len(items) >= 2 and items[-2] == Keyword("as"):
			as_name = items[-1]
			items = items[:-2]
		if len(items) >= 2 and items[-2] == Symbol("&"):
			rest = items[-1]
			items = items[:-2]
		if any(i == Symbol("&") for i in items):
			raise TranspileError("& must be followed by exactly one binding", form=pattern)

		stmts: list[StmtNode] = []
		if as_name is not None:
			stmts.extend(self.destructure(as_name, value))
			value = Identifier(self.lookup(as_name.name) or munge(as_name.name))

		simple = all(isinstance(i, Symbol) and i.ns is None for i in items) and (
			rest is None or isinstance(rest, Symbol)
		)
		if simple:
			names = [self.declare(i.name) for i in items]
			rest_name = self.declare(rest.name) if rest is not None else None
			stmts.append(Assign(ArrayPattern(names, rest_name), value, "const"))
			return stmts

		src = self._as_source(value, stmts)
		for idx, item in enumerate(items):
			stmts.extend(self.destructure(item, Subscript(src, Literal(idx))))
		if rest is not None:
			sliced = Call(Member(src, "slice"), [Literal(len(items))])
			stmts.extend(self.destructure(rest, sliced))
		return stmts

	def _destructure_map(self, pattern: FormMap, value: ExprNode) -> list[StmtNode]:
		stmts: list[StmtNode] = []
		defaults = pattern.get(Keyword("or"))
		if defaults is not None and not isinstance(defaults, FormMap):
			raise TranspileError(":or must be a map", form=pattern)
		as_name = pattern.get(Keyword("as"))
		if as_name is not None:
			stmts.extend(self.destructure(as_name, value))
			value = Identifier(self.lookup(as_name.name) or munge(as_name.name))

		entries: list[tuple[str, Form]] = []
		for k, v in pattern.items():
			if k in (Keyword("or"), Keyword("as")):
				continue
			if k in (Keyword("keys"), Keyword("strs")):
				if not isinstance(v, Vector):
					raise TranspileError(f"{pr_str(k)} requires a vector", form=pattern)
				for s in v:
					if not isinstance(s, Symbol):
						raise TranspileError(
							f"{pr_str(k)} entries must be symbols", form=pattern
						)
					entries.append((s.name, s))
				continue
			if isinstance(v, Keyword):
				entries.append((v.full_name, k))
			elif isinstance(v, str):
				entries.append((v, k))
			else:
				raise TranspileError(
					"Map binding values must be keywords or strings", form=pattern
				)

		src = self._as_source(value, stmts)
		flat: list[tuple[str, str, ExprNode | None]] = []
		nested: list[tuple[str, Form]] = []
		for key, target in entries:
			if isinstance(target, Symbol) and target.ns is None:
				default = defaults.get(target) if defaults is not None else None
				default_expr = self.emit_expr(default) if default is not None else None
				flat.append((key, self.declare(target.name), default_expr))
			else:
				nested.append((key, target))
		if flat:
			stmts.append(Assign(ObjectPattern(flat), src, "const"))
		for key, target in nested:
			stmts.extend(self.destructure(target, Subscript(src, Literal(key))))
		return stmts

	def emit_params(self, params: Vector) -> tuple[list[str], list[StmtNode]]:
		"""Function parameters plus the statements that destructure them.

		Must be called inside the function's own scope.
		"""
		items = list(params)
		rest: Form = None
		if len(items) >= 2 and items[-2] == Symbol("&"):
			rest = items[-1]
			items = items[:-2]
		names: list[str] = []
		prologue: list[StmtNode] = []
		for item in items:
			if isinstance(item, Symbol) and item.ns is None and item.name != "&":
				names.append(self.declare(item.name, param=True))
			elif isinstance(item, (Vector, FormMap)):
				tmp = self.fresh("p")
				names.append(tmp)
				prologue.extend(self.destructure(item, Identifier(tmp)))
			else:
				raise TranspileError(
					f"Invalid parameter: {pr_str(item)}", form=params
				)
		if rest is not None:
			if isinstance(rest, Symbol) and rest.ns is None:
				names.append("..." + self.declare(rest.name, param=True))
			else:
				tmp = self.fresh("rest")
				names.append("..." + tmp)
				prologue.extend(self.destructure(rest, Identifier(tmp)))
		return names, prologue


def _lookup(
	obj: ExprNode, key: ExprNode, default: Sequence[Form], ctx: Transpiler
) -> ExprNode:
	sub = Subscript(obj, key)
	if default:
		return Binary(sub, "??", ctx.emit_expr(default[0]))
	return sub

