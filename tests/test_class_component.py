"""
Tests for class component (defcomponent) compilation.
"""

import pytest
from helix.class_component import (
	MethodEntry,
	ValueEntry,
	is_method,
	is_static,
	parse_entry,
	partition,
)
from helix.definition import ClassDefinition, compile_definition, parse_definition
from helix.errors import ShapeError
from helix.forms import Symbol
from helix.options import CompilerOptions
from helix.reader import read_one
from helix.transpiler import Call, Export, Object, Transpiler, emit_program

CLOCK = """
(defcomponent clock
  "A clock"
  (render [this] ($ "div" (.-now (.-props this))))
  ^:static (default-props {:format "hh:mm"})
  (other [this x] x))
"""


def compile_class_src(source: str, *, debug: bool = False):
	ctx = Transpiler()
	compiled = compile_definition(
		parse_definition(read_one(source)), ctx, CompilerOptions(debug=debug), "app"
	)
	return compiled, ctx


def factory_call(compiled) -> Call:
	export = compiled.statements[-1]
	assert isinstance(export, Export)
	call = export.decl.value
	assert isinstance(call, Call)
	return call


class TestEntries:
	def test_method_shape(self):
		assert is_method(read_one("(render [this] 1)"))
		assert not is_method(read_one("(greeting 1)"))
		assert not is_method(read_one("[render [this]]"))

	def test_static_tag(self):
		assert is_static(read_one('^:static (greeting "hi")'))
		assert not is_static(read_one('(greeting "hi")'))

	def test_parse_entry(self):
		assert parse_entry(read_one("(render [this] 1 2)")) == MethodEntry(
			Symbol("render"), read_one("[this]"), (1, 2), False
		)
		assert parse_entry(read_one('^:static (greeting "hi")')) == ValueEntry(
			Symbol("greeting"), "hi", True
		)

	def test_bad_entry(self):
		with pytest.raises(ShapeError):
			parse_entry(read_one("(a b c)"))
		with pytest.raises(ShapeError):
			parse_entry(Symbol("render"))

	def test_partition_keeps_order(self):
		definition = parse_definition(read_one(CLOCK))
		assert isinstance(definition, ClassDefinition)
		instance, statics = partition(definition.entries)
		assert [e.name.name for e in instance] == ["render", "other"]
		assert [e.name.name for e in statics] == ["default-props"]


class TestCompile:
	def test_instance_and_static_objects(self):
		compiled, _ = compile_class_src(CLOCK)
		instance, statics = factory_call(compiled).args
		assert isinstance(instance, Object)
		assert isinstance(statics, Object)
		assert [k for k, _ in instance.props] == ["displayName", "render", "other"]
		assert [k for k, _ in statics.props] == ["default-props"]

	def test_emitted(self):
		compiled, ctx = compile_class_src(CLOCK)
		assert emit_program(compiled.statements) == (
			"/**\n * A clock\n */\n"
			+ "export const clock = createComponent("
			+ '{"displayName": "clock", '
			+ '"render": function render(this$) {\n'
			+ 'return createElement("div", null, this$.props.now);\n'
			+ "}, "
			+ '"other": function other(this$, x) {\n'
			+ "return x;\n"
			+ "}}, "
			+ '{"default-props": {"format": "hh:mm"}});\n'
		)
		assert ctx.used_runtime_names() == ["createElement", "createComponent"]
		assert compiled.effects == []

	def test_static_method(self):
		compiled, _ = compile_class_src(
			"(defcomponent c (render [this] nil) ^:static (create [] 1))"
		)
		_, statics = factory_call(compiled).args
		assert [k for k, _ in statics.props] == ["create"]

	def test_display_name_is_unqualified(self):
		compiled, _ = compile_class_src("(defcomponent my-widget (render [this] nil))")
		instance, _ = factory_call(compiled).args
		key, value = instance.props[0]
		assert key == "displayName"
		assert value.value == "my-widget"
		assert compiled.name == "myWidget"

	def test_debug_has_no_effects(self):
		compiled, _ = compile_class_src("(defcomponent c (render [this] nil))", debug=True)
		assert compiled.effects == []

	def test_missing_render(self):
		with pytest.raises(ShapeError, match="Component must define a render method"):
			compile_class_src("(defcomponent c (other [this] 1))")

	def test_static_render_does_not_count(self):
		with pytest.raises(ShapeError, match="render method"):
			compile_class_src("(defcomponent c ^:static (render [] 1))")

	def test_render_value_does_not_count(self):
		with pytest.raises(ShapeError, match="render method"):
			compile_class_src("(defcomponent c (render 1))")
