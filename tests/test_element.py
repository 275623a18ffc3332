"""
Tests for the `$` and `<>` element macros.
"""

import pytest
from helix.element import ElementCall, expand_element, is_native
from helix.errors import ShapeError
from helix.forms import FormMap, Keyword, Symbol
from helix.props import StaticPlan
from helix.reader import read_one
from helix.transpiler import Transpiler, emit


def lower(source: str, ctx: Transpiler | None = None) -> str:
	return emit((ctx or Transpiler()).emit_expr(read_one(source)))


class TestClassification:
	@pytest.mark.parametrize("target", [Keyword("div"), "span"])
	def test_native_targets(self, target):
		assert is_native(target)

	@pytest.mark.parametrize(
		"target", [Symbol("Button"), read_one("(get-comp)"), read_one("ui/Card")]
	)
	def test_composite_targets(self, target):
		assert not is_native(target)

	def test_native_target_becomes_string(self):
		assert expand_element(Keyword("div"), []) == ElementCall("div", True, None, ())

	def test_composite_with_props(self):
		element = expand_element(Symbol("Button"), [read_one("{:on-click f}"), "Go"])
		assert element.native is False
		assert element.props == StaticPlan((("on-click", Symbol("f")),))
		assert element.children == ("Go",)

	def test_non_literal_first_arg_is_child(self):
		element = expand_element("div", [Symbol("props"), "x"])
		assert element.props is None
		assert element.children == (Symbol("props"), "x")

	def test_call_first_arg_is_child(self):
		element = expand_element(Symbol("Item"), [read_one("(merge a b)")])
		assert element.props is None
		assert element.children == (read_one("(merge a b)"),)

	def test_map_later_is_child(self):
		element = expand_element("div", ["a", FormMap()])
		assert element.props is None
		assert len(element.children) == 2


class TestEmission:
	def test_no_props(self):
		assert lower("($ :div)") == 'createElement("div", null)'

	def test_composite(self):
		assert (
			lower('($ Button {:on-click f} "Go")')
			== 'createElement(Button, {"on-click": f}, "Go")'
		)

	def test_nested_children(self):
		assert (
			lower('($ "ul" ($ "li" "x") ($ :li {:key 2} "y"))')
			== 'createElement("ul", null, createElement("li", null, "x"), '
			+ 'createElement("li", {"key": 2}, "y"))'
		)

	def test_ambiguous_first_arg(self):
		assert lower('($ "div" props "x")') == 'createElement("div", null, props, "x")'

	def test_namespaced_component(self):
		ctx = Transpiler(aliases={"ui": "ui"})
		assert lower("($ ui/Card)", ctx) == "createElement(ui.Card, null)"

	def test_fragment(self):
		ctx = Transpiler()
		assert (
			lower('(<> "a" ($ "b"))', ctx)
			== 'createElement(Fragment, null, "a", createElement("b", null))'
		)
		assert ctx.used_runtime_names() == ["createElement", "Fragment"]

	def test_keyed_fragment(self):
		assert lower('(<> {:key "k"} "a")') == 'createElement(Fragment, {"key": "k"}, "a")'

	def test_fragment_props_are_not_rewritten(self):
		ctx = Transpiler()
		assert lower("(<> {:key id :class c & more})", ctx) == (
			'createElement(Fragment, mergeMapObj(false, {"key": id, "class": c}, more))'
		)
		assert ctx.used_runtime_names() == ["createElement", "Fragment", "mergeMapObj"]

	def test_empty_fragment(self):
		assert lower("(<>)") == "createElement(Fragment, null)"

	def test_missing_type(self):
		with pytest.raises(ShapeError):
			lower("($)")
