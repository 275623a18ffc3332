"""Functional components: `defnc`.

    (defnc greeting
      "Says hello"
      [{:keys [name]}]
      {:wrap [(memo)]}
      ($ "div" "Hello, " name))

compiles to a named render function bound through its wrappers. In debug
mode the render function also gets a reload signature slot and a display
name, and the definition carries signature/registry effects.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from helix.definition import (
	CompiledDefinition,
	Effect,
	FunctionalDefinition,
	RegisterEffect,
	SignatureEffect,
)
from helix.forms import Form, FormList, Symbol
from helix.hooks import HookSignature
from helix.names import munge
from helix.transpiler.id import gensym
from helix.transpiler.nodes import (
	Assign,
	AssignMember,
	Call,
	Comment,
	Export,
	ExprStmt,
	Function,
	Identifier,
	If,
	Literal,
	Member,
	StmtNode,
)

if TYPE_CHECKING:
	from helix.options import CompilerOptions
	from helix.transpiler.transpiler import Transpiler

logger = logging.getLogger(__name__)

RENDER_SUFFIX = "_helix_render"


def render_name(name: Symbol) -> str:
	return munge(name.name) + RENDER_SUFFIX


def qualified_name(ns: str, name: Symbol) -> str:
	return f"{ns}/{name.name}"


def thread_wrappers(inner: str, wrappers: tuple[Form, ...]) -> Form:
	"""Thread the render function through each wrapper, left to right.

	`(memo)` becomes `(memo inner)`, `(with-x 1)` becomes `(with-x inner 1)`,
	and a bare symbol `w` becomes `(w inner)`.
	"""
	current: Form = Symbol(inner, ns="js")
	for w in wrappers:
		if isinstance(w, FormList) and w:
			current = FormList((w[0], current, *w[1:]), w.meta)
		else:
			current = FormList((w, current))
	return current


def compile_functional(
	definition: FunctionalDefinition,
	ctx: Transpiler,
	options: CompilerOptions,
	ns: str,
) -> CompiledDefinition:
	debug = options.debug
	name = munge(definition.name.name)
	render = render_name(definition.name)
	fq_name = qualified_name(ns, definition.name)
	signature = HookSignature.of(definition.body)
	logger.debug("%s: %d hook call(s)", fq_name, len(signature))

	stmts: list[StmtNode] = []
	sig_var: str | None = None
	if debug:
		sig_var = gensym("sig")
		stmts.append(Assign(sig_var, Call(ctx.runtime("signature"), []), "const"))

	with ctx.scope():
		params, prologue = ctx.emit_params(definition.bindings)
		body: list[StmtNode] = []
		if sig_var is not None:
			sig = Identifier(sig_var)
			body.append(If(sig, [ExprStmt(Call(sig, []))]))
		body.extend(prologue)
		body.extend(ctx.emit_body(definition.body))

	fn = Function(params, body, name=render)
	stmts.append(Assign(render, fn, "let" if definition.wrappers else "const"))
	if debug:
		stmts.append(
			AssignMember(Member(Identifier(render), "displayName"), Literal(fq_name))
		)
	if definition.wrappers:
		wrapped = ctx.emit_expr(thread_wrappers(render, definition.wrappers))
		stmts.append(Assign(render, wrapped))

	if definition.docstring is not None:
		stmts.append(Comment(definition.docstring, doc=True))
	stmts.append(Export(Assign(name, Identifier(render), "const")))

	effects: list[Effect] = []
	if debug and sig_var is not None:
		effects.append(
			SignatureEffect(
				signature_var=sig_var,
				target=render,
				hooks=signature.calls,
				key=signature.key,
			)
		)
		effects.append(RegisterEffect(target=render, qualified_name=fq_name))

	return CompiledDefinition(
		name=name, statements=stmts, effects=effects, definition=definition
	)
