"""Component definitions and their registration effects.

`(defnc ...)` and `(defcomponent ...)` parse into one tagged variant,
`ComponentDefinition`, with a single check on the head symbol. Compiling a
definition yields JS statements plus the registration effects the build may
emit, skip, or batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from helix.errors import ShapeError
from helix.forms import Form, FormList, FormMap, Keyword, Symbol, Vector
from helix.transpiler.nodes import (
	Call,
	ExprStmt,
	Identifier,
	If,
	Literal,
	StmtNode,
)

if TYPE_CHECKING:
	from helix.options import CompilerOptions
	from helix.transpiler.transpiler import Transpiler

DEFINITION_HEADS = ("defnc", "defcomponent")


# =============================================================================
# Definitions
# =============================================================================


@dataclass(slots=True, frozen=True)
class FunctionalDefinition:
	"""(defnc name "doc"? [props ref?] {:wrap [...]}? body...)"""

	name: Symbol
	bindings: Vector
	body: tuple[Form, ...]
	docstring: str | None = None
	wrappers: tuple[Form, ...] = ()
	form: Form = None


@dataclass(slots=True, frozen=True)
class ClassDefinition:
	"""(defcomponent name "doc"? entries...)"""

	name: Symbol
	entries: tuple[Form, ...]
	docstring: str | None = None
	form: Form = None


ComponentDefinition: TypeAlias = FunctionalDefinition | ClassDefinition


def _require_name(form: FormList) -> Symbol:
	if len(form) < 2 or not isinstance(form[1], Symbol) or form[1].ns is not None:
		raise ShapeError(f"{form[0].name} requires a simple symbol name", form=form)
	return form[1]


def parse_functional(form: FormList) -> FunctionalDefinition:
	name = _require_name(form)
	rest = list(form[2:])
	docstring = None
	if rest and isinstance(rest[0], str):
		docstring = rest.pop(0)
	if not rest:
		raise ShapeError(f"defnc {name.name} requires a props binding vector", form=form)
	bindings = rest.pop(0)
	if not isinstance(bindings, Vector) or len(bindings) not in (1, 2):
		raise ShapeError(
			f"defnc {name.name}: props binding must be a vector of one or two slots",
			form=bindings if isinstance(bindings, (Vector, FormList, FormMap)) else form,
		)
	wrappers: tuple[Form, ...] = ()
	if rest and isinstance(rest[0], FormMap):
		opts = rest.pop(0)
		wrap = opts.get(Keyword("wrap"), Vector())
		if not isinstance(wrap, (Vector, FormList)):
			raise ShapeError(":wrap must be a sequence of wrapper forms", form=opts)
		wrappers = tuple(wrap)
	return FunctionalDefinition(
		name=name,
		bindings=bindings,
		body=tuple(rest),
		docstring=docstring,
		wrappers=wrappers,
		form=form,
	)


def parse_class(form: FormList) -> ClassDefinition:
	name = _require_name(form)
	rest = list(form[2:])
	docstring = None
	if rest and isinstance(rest[0], str):
		docstring = rest.pop(0)
	return ClassDefinition(name=name, entries=tuple(rest), docstring=docstring, form=form)


def is_definition(form: Form) -> bool:
	return (
		isinstance(form, FormList)
		and bool(form)
		and isinstance(form[0], Symbol)
		and form[0].ns is None
		and form[0].name in DEFINITION_HEADS
	)


def parse_definition(form: Form) -> ComponentDefinition:
	"""Parse a defnc/defcomponent form into its definition variant."""
	if not is_definition(form):
		raise ShapeError("Expected (defnc ...) or (defcomponent ...)", form=form)
	if form[0].name == "defnc":
		return parse_functional(form)
	return parse_class(form)


# =============================================================================
# Registration effects
# =============================================================================


@dataclass(slots=True, frozen=True)
class SignatureEffect:
	"""Bind the reload signature handle to a component and its hook list."""

	signature_var: str
	target: str
	hooks: tuple[FormList, ...]
	key: str


@dataclass(slots=True, frozen=True)
class RegisterEffect:
	"""Register a component with the reload registry under its qualified name."""

	target: str
	qualified_name: str


Effect: TypeAlias = SignatureEffect | RegisterEffect


def lower_effect(effect: Effect, ctx: Transpiler) -> StmtNode:
	if isinstance(effect, SignatureEffect):
		sig = Identifier(effect.signature_var)
		call = Call(
			sig,
			[Identifier(effect.target), Literal(effect.key), Literal(None), Literal(None)],
		)
		return If(sig, [ExprStmt(call)])
	return ExprStmt(
		Call(
			ctx.runtime("register"),
			[Identifier(effect.target), Literal(effect.qualified_name)],
		)
	)


# =============================================================================
# Compilation
# =============================================================================


@dataclass(slots=True)
class CompiledDefinition:
	"""Output of compiling one definition form."""

	name: str  # JS binding the definition exports
	statements: list[StmtNode]
	effects: list[Effect] = field(default_factory=list)
	definition: ComponentDefinition | None = None

	def effect_statements(self, ctx: Transpiler) -> list[StmtNode]:
		return [lower_effect(e, ctx) for e in self.effects]


def compile_definition(
	definition: ComponentDefinition, ctx: Transpiler, options: CompilerOptions, ns: str
) -> CompiledDefinition:
	"""Compile a parsed definition to JS statements and effects."""
	from helix.class_component import compile_class
	from helix.component import compile_functional

	if isinstance(definition, FunctionalDefinition):
		return compile_functional(definition, ctx, options, ns)
	return compile_class(definition, ctx)

