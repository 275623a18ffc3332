"""
Tests for property-map compilation: static vs dynamic plans and native key
rewriting.
"""

import pytest
from helix.errors import ShapeError
from helix.forms import Keyword, Symbol
from helix.props import (
	ConvertValue,
	DynamicPlan,
	StaticPlan,
	compile_props,
	key_to_native_prop,
	style,
)
from helix.reader import read_one
from helix.transpiler import Transpiler, emit


def plan(source: str, native: bool = True):
	return compile_props(read_one(source), native)


def lower(source: str) -> str:
	return emit(Transpiler().emit_expr(read_one(source)))


class TestKeyRewriting:
	def test_class_and_for(self):
		assert key_to_native_prop(Keyword("class"), "a") == ("className", "a")
		assert key_to_native_prop(Keyword("for"), "id") == ("htmlFor", "id")

	def test_other_keys_camel_cased(self):
		assert key_to_native_prop(Keyword("on-click"), Symbol("f")) == (
			"onClick",
			Symbol("f"),
		)
		assert key_to_native_prop(Keyword("data-x"), 1) == ("data-x", 1)
		assert key_to_native_prop("tab-index", 0) == ("tabIndex", 0)

	def test_literal_style_is_rewritten(self):
		k, v = key_to_native_prop(Keyword("style"), read_one('{:background-color "red"}'))
		assert k == "style"
		assert v == StaticPlan((("backgroundColor", "red"),))

	def test_nested_vendor_style(self):
		v = style(read_one('{:-webkit-transition "x" :hover {:font-size 12}}'))
		assert v == StaticPlan(
			(
				("WebkitTransition", "x"),
				("hover", StaticPlan((("fontSize", 12),))),
			)
		)

	def test_runtime_style_is_converted(self):
		k, v = key_to_native_prop(Keyword("style"), Symbol("s"))
		assert (k, v) == ("style", ConvertValue(Symbol("s")))

	def test_deterministic(self):
		spec = read_one('{:class "a" :style {:z-index 1}}')
		assert compile_props(spec, True) == compile_props(spec, True)


class TestStaticPlan:
	def test_native_entries_rewritten(self):
		assert plan('{:class "a" :data-x 1}') == StaticPlan(
			(("className", "a"), ("data-x", 1))
		)

	def test_composite_entries_verbatim(self):
		assert plan('{:on-click f :class "a"}', native=False) == StaticPlan(
			(("on-click", Symbol("f")), ("class", "a"))
		)

	def test_keys_in_source_order(self):
		assert plan("{:z 1 :a 2 :m 3}").keys() == ["z", "a", "m"]

	def test_empty(self):
		assert plan("{}") == StaticPlan(())


class TestDynamicPlan:
	def test_symbol_rest_marker(self):
		assert plan('{:class "a" & props}') == DynamicPlan(
			base=StaticPlan((("className", "a"),)),
			rest=Symbol("props"),
			native=True,
		)

	def test_keyword_rest_marker(self):
		assert plan("{:& (get-props) :id 1}", native=False) == DynamicPlan(
			base=StaticPlan((("id", 1),)),
			rest=read_one("(get-props)"),
			native=False,
		)

	def test_literal_part_matches_static(self):
		with_rest = plan('{:class "a" :on-click f & more}')
		without = plan('{:class "a" :on-click f}')
		assert isinstance(with_rest, DynamicPlan)
		assert with_rest.base == without

	def test_two_markers_rejected(self):
		with pytest.raises(ShapeError):
			plan("{& a :& b}")

	def test_not_a_map(self):
		with pytest.raises(ShapeError, match="Expected a literal property mapping"):
			compile_props(read_one("[:a 1]"), True)


class TestLowering:
	def test_static_object(self):
		assert (
			lower('($ "label" {:for "name" :class "lbl"} "Name")')
			== 'createElement("label", {"htmlFor": "name", "className": "lbl"}, "Name")'
		)

	def test_nested_style_object(self):
		assert (
			lower('($ "div" {:style {:background-color "red"}})')
			== 'createElement("div", {"style": {"backgroundColor": "red"}})'
		)

	def test_converted_style(self):
		assert (
			lower('($ "div" {:style s})')
			== 'createElement("div", {"style": cljToJs(s)})'
		)

	def test_dynamic_merge(self):
		assert (
			lower('($ "div" {:class "a" & props})')
			== 'createElement("div", mergeMapObj(true, {"className": "a"}, props))'
		)

	def test_dynamic_merge_composite(self):
		assert (
			lower("($ Card {:on-close f & props})")
			== 'createElement(Card, mergeMapObj(false, {"on-close": f}, props))'
		)
