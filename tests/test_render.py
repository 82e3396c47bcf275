"""Tests for the source, native and display renderings."""

import math

import pytest

from cexmodel.render import SynthesizedFunction, to_display, to_plain, to_source, to_syntax
from cexmodel.syntax import (
    BinaryExpression,
    Identifier,
    Literal,
    LogicalExpression,
    format_number,
    stringify_expression,
)
from cexmodel.values import (
    UNDEFINED,
    Array,
    Boolean,
    ClassInstance,
    Function,
    FunctionCase,
    Null,
    Number,
    Object,
    String,
    Undefined,
    plain_to_value,
)

SELECT = Function(1, [FunctionCase([Number(3.0)], String("c"))], String("d"))

PAIR = Function(
    2,
    [FunctionCase([Number(1.0), String("a")], Boolean(True))],
    Boolean(False),
)


class TestFormatNumber:
    """Tests for JavaScript number formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (10.0, "10"),
            (-3.0, "-3"),
            (1.5, "1.5"),
            (0.1, "0.1"),
            (123.456, "123.456"),
            (0.0, "0"),
            (-0.0, "0"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (2.5e-7, "2.5e-7"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (math.nan, "NaN"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
        ],
    )
    def test_format(self, value, expected):
        assert format_number(value) == expected


class TestToSource:
    """Tests for rendering values as JavaScript source."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Number(10.0), "10"),
            (Boolean(False), "false"),
            (String('say "hi"'), '"say \\"hi\\""'),
            (Null(), "null"),
            (Undefined(), "undefined"),
            (Array([Number(1.0), Number(2.0)]), "[1, 2]"),
            (Array([]), "[]"),
            (Object({"x": Number(1.0), "a b": Number(2.0)}), '{ x: 1, "a b": 2 }'),
            (Object({}), "{}"),
            (ClassInstance("P", [Number(1.0), String("s")]), 'new P(1, "s")'),
        ],
    )
    def test_values(self, value, expected):
        assert to_source(value) == expected

    def test_function(self):
        """Test the synthesized body of a one-argument function."""
        assert to_source(SELECT) == '(function (x_0) { if (x_0 === 3) { return "c"; } return "d"; })'

    def test_function_conjunction(self):
        assert to_source(PAIR) == (
            '(function (x_0, x_1) { if (x_0 === 1 && x_1 === "a") { return true; } return false; })'
        )

    def test_empty_function(self):
        assert to_source(Function(0)) == "(function () {})"

    def test_object_keys_escaped(self):
        """Test that quoted object keys are valid string literals."""
        value = Object({'a"b': Number(1.0), "a\\b": Number(2.0), "l\n": Number(3.0)})

        assert to_source(value) == '{ "a\\"b": 1, "a\\\\b": 2, "l\\n": 3 }'

    def test_syntax_tree(self):
        """Test the tree built for a function's case test."""
        tree = to_syntax(PAIR)

        assert [p.name for p in tree.params] == ["x_0", "x_1"]
        test = tree.body[0].test
        assert isinstance(test, LogicalExpression)
        assert test.left == BinaryExpression("===", Identifier("x_0"), Literal(1.0))

    def test_nested_logical_parenthesized_when_needed(self):
        left = LogicalExpression("||", Identifier("a"), Identifier("b"))
        expr = LogicalExpression("&&", left, Identifier("c"))

        assert stringify_expression(expr) == "(a || b) && c"


class TestToDisplay:
    """Tests for human-readable rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Number(10.0), "10"),
            (Number(-0.5), "-0.5"),
            (Boolean(True), "true"),
            (String("hi there"), "hi there"),
            (Null(), "null"),
            (Undefined(), "undefined"),
            (Array([Number(1.0), String("a")]), "[1, a]"),
            (Object({"x": Number(1.0), "a-b": Boolean(False)}), '{ x:1, "a-b":false }'),
            (Object({}), "{  }"),
            (ClassInstance("P", [Number(1.0), String("s")]), "new P(1, s)"),
        ],
    )
    def test_values(self, value, expected):
        assert to_display(value) == expected

    def test_function_without_outer_parens(self):
        assert to_display(SELECT) == 'function (x_0) { if (x_0 === 3) { return "c"; } return "d"; }'

    def test_object_keys_not_escaped(self):
        assert to_display(Object({'a"b': Number(1.0)})) == '{ "a"b":1 }'

    def test_nested(self):
        value = Object({"items": Array([Object({"n": Null()})])})

        assert to_display(value) == "{ items:[{ n:null }] }"


class TestToPlain:
    """Tests for native rendering."""

    def test_structures(self):
        value = Object({"a": Array([Number(1.0), Null(), Undefined()]), "b": String("s")})

        assert to_plain(value) == {"a": [1.0, None, UNDEFINED], "b": "s"}

    def test_class_instance_description(self):
        """Test that class instances render as constructor text."""
        assert to_plain(ClassInstance("P", [Number(1.0), String("s")])) == "new P(1, s)"

    def test_function_is_callable(self):
        """Test evaluating a synthesized function directly."""
        fn = to_plain(SELECT)

        assert isinstance(fn, SynthesizedFunction)
        assert fn(3) == "c"
        assert fn(3.0) == "c"
        assert fn(4) == "d"
        assert fn() == "d"

    def test_function_strict_equality(self):
        """Test that arguments are compared without coercion."""
        fn = to_plain(SELECT)

        assert fn("3") == "d"

    def test_booleans_do_not_equal_numbers(self):
        fn = to_plain(Function(1, [FunctionCase([Number(1.0)], String("one"))], String("other")))

        assert fn(True) == "other"
        assert fn(1) == "one"

    def test_two_arguments(self):
        fn = to_plain(PAIR)

        assert fn(1, "a") is True
        assert fn(1, "b") is False

    def test_null_and_undefined_conditions(self):
        fn = to_plain(Function(1, [FunctionCase([Null()], Number(0.0))], Number(1.0)))

        assert fn(None) == 0.0
        assert fn(UNDEFINED) == 1.0

    def test_empty_function_returns_undefined(self):
        assert to_plain(Function(0))() is UNDEFINED

    def test_function_source(self):
        assert to_plain(SELECT).source == to_source(SELECT)


class TestPlainToValue:
    """Tests for converting native values back to concrete values."""

    def test_bool_before_number(self):
        assert plain_to_value(True) == Boolean(True)

    def test_int(self):
        assert plain_to_value(10) == Number(10.0)

    def test_class_marker(self):
        value = plain_to_value({"_cls_": "P", "_args_": [1, "s"]})

        assert value == ClassInstance("P", [Number(1.0), String("s")])

    def test_nested(self):
        value = plain_to_value({"a": [None, UNDEFINED]})

        assert value == Object({"a": Array([Null(), Undefined()])})

    def test_unsupported(self):
        with pytest.raises(TypeError):
            plain_to_value(object())

    @pytest.mark.parametrize("plain", [1.5, True, "s", None, [1.0, "a"], {"k": 2.0, "l": [False]}])
    def test_round_trip(self, plain):
        """Test that native rendering inverts the conversion."""
        assert to_plain(plain_to_value(plain)) == plain

    def test_undefined_round_trip(self):
        assert to_plain(plain_to_value(UNDEFINED)) is UNDEFINED

    @pytest.mark.parametrize(
        "value",
        [Number(2.0), Boolean(False), String("x"), Null(), Undefined()],
    )
    def test_scalar_display_round_trip(self, value):
        """Test that scalars survive the native rendering."""
        assert plain_to_value(to_plain(value)) == value
