"""
Module compiler: a whole source file -> one ES module.

    (ns app.main
      (:require ["react" :as react]
                ["./api" :refer [fetch-user]]))

    (defnc app [_] ($ "div" "hi"))

Handles `ns`, component definitions, `def`/`defn`, drops `comment`, and
lowers any other top-level form to a statement. Runtime helpers are
imported by name from the configured runtime module, only when the
generated code uses them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from helix.definition import (
	CompiledDefinition,
	Effect,
	compile_definition,
	is_definition,
	parse_definition,
)
from helix.errors import ShapeError
from helix.forms import (
	Form,
	FormList,
	FormMap,
	Keyword,
	Symbol,
	Vector,
	is_call,
	meta_of,
	pr_str,
)
from helix.names import munge
from helix.options import CompilerOptions
from helix.reader import read_string
from helix.transpiler.nodes import (
	Assign,
	Comment,
	Export,
	ExprNode,
	Function,
	Import,
	StmtNode,
	emit_program,
)
from helix.transpiler.transpiler import Transpiler

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompiledModule:
	"""Result of compiling one source file."""

	code: str
	ns: str
	definitions: list[CompiledDefinition] = field(default_factory=list)
	effects: list[Effect] = field(default_factory=list)
	runtime_names: list[str] = field(default_factory=list)

	def definition(self, name: str) -> CompiledDefinition:
		for d in self.definitions:
			if d.name == name:
				return d
		raise KeyError(name)


class ModuleCompiler:
	"""Compiles the top-level forms of one file, in order."""

	options: CompilerOptions
	ctx: Transpiler
	ns: str
	imports: list[Import]
	body: list[StmtNode]
	definitions: list[CompiledDefinition]

	def __init__(self, options: CompilerOptions | None = None) -> None:
		self.options = options or CompilerOptions()
		self.ctx = Transpiler()
		self.ns = self.options.default_ns
		self.imports = []
		self.body = []
		self.definitions = []

	def compile(self, forms: Sequence[Form]) -> CompiledModule:
		for form in forms:
			self.compile_form(form)

		header: list[StmtNode] = []
		runtime_names = self.ctx.used_runtime_names()
		if runtime_names:
			header.append(
				Import(self.options.runtime_module, names=[(n, n) for n in runtime_names])
			)
		header.extend(self.imports)

		effects = [e for d in self.definitions for e in d.effects]
		logger.info(
			"Compiled %s: %d definition(s), %d effect(s)",
			self.ns,
			len(self.definitions),
			len(effects),
		)
		return CompiledModule(
			code=emit_program([*header, *self.body]),
			ns=self.ns,
			definitions=self.definitions,
			effects=effects,
			runtime_names=runtime_names,
		)

	def compile_form(self, form: Form) -> None:
		if is_definition(form):
			compiled = compile_definition(
				parse_definition(form), self.ctx, self.options, self.ns
			)
			self.definitions.append(compiled)
			self.body.extend(compiled.statements)
			if self.options.emit_effects:
				self.body.extend(compiled.effect_statements(self.ctx))
			return
		if is_call(form, "ns"):
			self.compile_ns(form)
		elif is_call(form, "comment"):
			return
		elif is_call(form, "def"):
			self.compile_def(form)
		elif is_call(form, "defn"):
			self.compile_defn(form)
		else:
			self.body.extend(self.ctx.emit_stmts(form, tail=False))

	# --- ns ---------------------------------------------------------------------

	def compile_ns(self, form: FormList) -> None:
		if len(form) < 2 or not isinstance(form[1], Symbol):
			raise ShapeError("ns requires a namespace symbol", form=form)
		self.ns = form[1].full_name
		for clause in form[2:]:
			if isinstance(clause, str):
				continue
			if (
				isinstance(clause, FormList)
				and clause
				and clause[0] == Keyword("require")
			):
				for spec in clause[1:]:
					self.compile_require(spec)
			else:
				logger.debug("Ignoring ns clause %s", pr_str(clause))

	def compile_require(self, spec: Form) -> None:
		if isinstance(spec, (Symbol, str)):
			self.imports.append(Import(_lib_source(spec)))
			return
		if not isinstance(spec, Vector) or not spec:
			raise ShapeError("Require spec must be a vector or a library", form=spec)
		src = _lib_source(spec[0])
		opts = list(spec[1:])
		if len(opts) % 2 != 0:
			raise ShapeError("Require options must come in pairs", form=spec)

		namespace: str | None = None
		default: str | None = None
		names: list[tuple[str, str]] = []
		for key, value in zip(opts[::2], opts[1::2]):
			if key == Keyword("as"):
				alias = _simple_symbol(value, spec)
				namespace = munge(alias.name)
				self.ctx.aliases[alias.name] = namespace
			elif key == Keyword("default"):
				local = _simple_symbol(value, spec)
				default = munge(local.name)
				self.ctx.referred[local.name] = default
			elif key == Keyword("refer"):
				if not isinstance(value, Vector):
					raise ShapeError(":refer takes a vector of symbols", form=spec)
				for s in value:
					local = munge(_simple_symbol(s, spec).name)
					names.append((local, local))
					self.ctx.referred[s.name] = local
			else:
				raise ShapeError(f"Unsupported require option {pr_str(key)}", form=spec)

		# `import d, * as ns from` is legal; a namespace and named list together is not.
		if namespace is not None and names:
			self.imports.append(Import(src, default=default, namespace=namespace))
			self.imports.append(Import(src, names=names))
		else:
			self.imports.append(
				Import(src, names=names, default=default, namespace=namespace)
			)

	# --- def / defn -----------------------------------------------------------

	def _declare(self, name: Symbol, value: ExprNode, docstring: str | None) -> None:
		if docstring is not None:
			self.body.append(Comment(docstring, doc=True))
		decl = Assign(munge(name.name), value, "const")
		if meta_of(name).get("private"):
			self.body.append(decl)
		else:
			self.body.append(Export(decl))

	def compile_def(self, form: FormList) -> None:
		"""(def name "doc"? value)"""
		args = list(form[1:])
		if not args or not isinstance(args[0], Symbol) or args[0].ns is not None:
			raise ShapeError("def requires a simple symbol name", form=form)
		name = args.pop(0)
		docstring = args.pop(0) if len(args) == 2 and isinstance(args[0], str) else None
		if len(args) > 1:
			raise ShapeError("def takes a name, an optional docstring and a value", form=form)
		value = self.ctx.emit_expr(args[0] if args else None)
		self._declare(name, value, docstring)

	def compile_defn(self, form: FormList) -> None:
		"""(defn name "doc"? [params] body...)"""
		args = list(form[1:])
		if not args or not isinstance(args[0], Symbol) or args[0].ns is not None:
			raise ShapeError("defn requires a simple symbol name", form=form)
		name = args.pop(0)
		docstring = args.pop(0) if args and isinstance(args[0], str) else None
		if args and isinstance(args[0], FormMap):
			args.pop(0)
		if not args or not isinstance(args[0], Vector):
			raise ShapeError(f"defn {name.name} requires a parameter vector", form=form)
		params_form = args.pop(0)
		with self.ctx.scope():
			params, prologue = self.ctx.emit_params(params_form)
			body = [*prologue, *self.ctx.emit_body(args)]
		fn = Function(params, body, name=munge(name.name))
		self._declare(name, fn, docstring)


def _lib_source(lib: Form) -> str:
	if isinstance(lib, str):
		return lib
	if isinstance(lib, Symbol):
		return lib.full_name
	raise ShapeError("Library must be a string or a symbol", form=lib)


def _simple_symbol(value: Form, spec: Form) -> Symbol:
	if not isinstance(value, Symbol) or value.ns is not None:
		raise ShapeError(f"Expected a simple symbol, got {pr_str(value)}", form=spec)
	return value


def compile_forms(
	forms: Sequence[Form], options: CompilerOptions | None = None
) -> CompiledModule:
	return ModuleCompiler(options).compile(forms)


def compile_module(source: str, options: CompilerOptions | None = None) -> CompiledModule:
	"""Read and compile one source file."""
	return compile_forms(read_string(source), options)
