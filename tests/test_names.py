"""
Tests for dashed-name to camelCase conversion and JS identifier munging.
"""

import pytest
from helix.forms import Keyword, Symbol
from helix.names import camel_case, munge


class TestCamelCase:
	"""Dashed names become camelCase unless reserved."""

	@pytest.mark.parametrize(
		"name,expected",
		[
			("on-click", "onClick"),
			("http-equiv", "httpEquiv"),
			("background-color", "backgroundColor"),
			("a-b-c", "aBC"),
			("-webkit-transition", "WebkitTransition"),
		],
	)
	def test_dashed_names(self, name: str, expected: str):
		assert camel_case(name) == expected

	@pytest.mark.parametrize("name", ["data-foo-bar", "aria-label", "aria-describedby"])
	def test_reserved_prefixes_unchanged(self, name: str):
		assert camel_case(name) == name

	def test_single_word_unchanged(self):
		assert camel_case("class") == "class"

	@pytest.mark.parametrize("name", ["foo-", "foo--", "-"])
	def test_trailing_dashes_unchanged(self, name: str):
		assert camel_case(name) == name

	def test_inner_empty_segment_dropped(self):
		assert camel_case("foo--bar") == "fooBar"
		assert camel_case("on-click-") == "onClick"

	def test_idempotent_on_camel_case(self):
		assert camel_case("onClick") == "onClick"
		assert camel_case(camel_case("on-mouse-enter")) == "onMouseEnter"

	def test_keyword_and_symbol(self):
		assert camel_case(Keyword("on-change")) == "onChange"
		assert camel_case(Symbol("use-state")) == "useState"

	def test_unchanged_returns_input_object(self):
		k = Keyword("class")
		assert camel_case(k) is k

	def test_non_names_pass_through(self):
		assert camel_case(42) == 42
		assert camel_case(None) is None


class TestMunge:
	"""Local names become legal JS identifiers."""

	@pytest.mark.parametrize(
		"name,expected",
		[
			("use-state", "useState"),
			("valid?", "valid_QMARK_"),
			("swap!", "swap_BANG_"),
			("data-x", "data_x"),
			("class", "class$"),
			("this", "this$"),
			("2d", "_2d"),
			("x", "x"),
		],
	)
	def test_munge(self, name: str, expected: str):
		assert munge(name) == expected

	def test_property_names_keep_reserved_words(self):
		assert munge("delete", property=True) == "delete"
		assert munge("class", property=True) == "class"
		assert munge("scroll-top", property=True) == "scrollTop"
