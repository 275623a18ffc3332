"""
Tests for JS node emission.
"""

import pytest
from helix.transpiler.nodes import (
	Array,
	ArrayPattern,
	Arrow,
	Assign,
	Binary,
	Call,
	Comment,
	Export,
	ExprStmt,
	Function,
	Identifier,
	If,
	Import,
	Literal,
	Member,
	Object,
	ObjectPattern,
	Return,
	Ternary,
	Unary,
	emit,
	emit_program,
	transformer,
)

a, b, c, d = (Identifier(n) for n in "abcd")


class TestLiterals:
	def test_string_escaping(self):
		assert emit(Literal('say "hi"\n')) == '"say \\"hi\\"\\n"'

	def test_line_separators_escaped(self):
		assert emit(Literal("a\u2028b")) == '"a\\u2028b"'

	def test_object_keys_always_quoted(self):
		assert emit(Object([("className", a), ("data-x", Literal(1))])) == (
			'{"className": a, "data-x": 1}'
		)

	def test_null(self):
		assert emit(Literal(None)) == "null"


class TestPrecedence:
	def test_left_assoc(self):
		assert emit(Binary(Binary(a, "-", b), "-", Binary(c, "-", d))) == "a - b - (c - d)"

	def test_right_assoc_exponent(self):
		assert emit(Binary(a, "**", Binary(b, "**", c))) == "a ** b ** c"

	def test_ternary_in_condition(self):
		assert emit(Ternary(Ternary(a, b, c), d, a)) == "(a ? b : c) ? d : a"

	def test_unary_operand(self):
		assert emit(Unary("!", Binary(a, "&&", b))) == "!(a && b)"

	def test_iife(self):
		assert emit(Call(Arrow([], Literal(1)), [])) == "(() => 1)()"

	def test_member_of_call(self):
		assert emit(Member(Call(a, []), "x")) == "a().x"

	def test_arrow_object_body(self):
		assert emit(Arrow(["x"], Object([("a", Identifier("x"))]))) == (
			'(x) => ({"a": x})'
		)


class TestStatements:
	def test_object_expression_statement(self):
		assert emit(ExprStmt(Object([]))) == "({});"

	def test_object_pattern(self):
		pattern = ObjectPattern([("on-click", "onClick", None), ("id", "id", Literal(0))])
		assert emit(Assign(pattern, Identifier("p"), "const")) == (
			'const {"on-click": onClick, id = 0} = p;'
		)

	def test_array_pattern(self):
		assert emit(Assign(ArrayPattern(["a"], rest="more"), Identifier("xs"), "const")) == (
			"const [a, ...more] = xs;"
		)

	def test_reassign(self):
		assert emit(Assign("x", Literal(1))) == "x = 1;"

	def test_if_without_else(self):
		assert emit(If(a, [Return(b)])) == "if (a) {\nreturn b;\n}"

	def test_function(self):
		fn = Function(["x"], [Return(Identifier("x"))], name="id")
		assert emit(fn) == "function id(x) {\nreturn x;\n}"

	def test_export(self):
		assert emit(Export(Assign("x", Literal(1), "const"))) == "export const x = 1;"

	def test_doc_comment(self):
		assert emit(Comment("Says hi\n\nTwice", doc=True)) == (
			"/**\n * Says hi\n *\n * Twice\n */"
		)

	def test_doc_comment_closer_escaped(self):
		assert "*/ " not in emit(Comment("a */ b", doc=True))

	def test_line_comment(self):
		assert emit(Comment("note")) == "// note"

	def test_program(self):
		assert emit_program([ExprStmt(a), ExprStmt(b)]) == "a;\nb;\n"
		assert emit_program([]) == ""


class TestImports:
	def test_named(self):
		imp = Import("react", names=[("useState", "useState"), ("memo", "m")])
		assert emit(imp) == 'import { useState, memo as m } from "react";'

	def test_default_and_namespace(self):
		assert emit(Import("./Button", default="Button")) == 'import Button from "./Button";'
		assert emit(Import("./theme", namespace="theme")) == (
			'import * as theme from "./theme";'
		)
		assert emit(Import("x", default="X", namespace="x")) == (
			'import X, * as x from "x";'
		)

	def test_side_effect(self):
		assert emit(Import("./styles.css")) == 'import "./styles.css";'


class TestTransformer:
	def test_cannot_emit_directly(self):
		@transformer("double")
		def double(x, *, ctx):
			return Binary(ctx.emit_expr(x), "*", Literal(2))

		with pytest.raises(TypeError):
			emit(double)  # pyright: ignore[reportArgumentType]
