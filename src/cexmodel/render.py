"""Renderings of concrete values: source syntax, native values and display text."""

from __future__ import annotations

from typing import Any

from cexmodel import syntax
from cexmodel.syntax import format_key, format_number
from cexmodel.values import (
    UNDEFINED,
    Array,
    Boolean,
    ClassInstance,
    Function,
    Null,
    Number,
    Object,
    String,
    Undefined,
    Value,
)


def _function_syntax(val: Function) -> syntax.FunctionExpression:
    body: list[syntax.Statement] = []
    for case in val.cases:
        tests = [
            syntax.BinaryExpression("===", syntax.Identifier(f"x_{i}"), to_syntax(cond))
            for i, cond in enumerate(case.conditions)
        ]
        test: syntax.Expression = tests[-1] if tests else syntax.Literal(True)
        for left in reversed(tests[:-1]):
            test = syntax.LogicalExpression("&&", left, test)
        body.append(syntax.IfStatement(test, [syntax.ReturnStatement(to_syntax(case.result))]))
    if val.default is not None:
        body.append(syntax.ReturnStatement(to_syntax(val.default)))
    return syntax.FunctionExpression([syntax.Identifier(p) for p in val.params], body)


def to_syntax(val: Value) -> syntax.Expression:
    """Render a value as a JavaScript expression."""
    if isinstance(val, (Number, Boolean, String)):
        return syntax.Literal(val.value)
    elif isinstance(val, Null):
        return syntax.Literal(None)
    elif isinstance(val, Undefined):
        return syntax.Literal(UNDEFINED)
    elif isinstance(val, Function):
        return _function_syntax(val)
    elif isinstance(val, Object):
        return syntax.ObjectExpression([syntax.Property(k, to_syntax(v)) for k, v in val.fields.items()])
    elif isinstance(val, ClassInstance):
        return syntax.NewExpression(syntax.Identifier(val.cls), [to_syntax(a) for a in val.args])
    elif isinstance(val, Array):
        return syntax.ArrayExpression([to_syntax(e) for e in val.elements])
    raise TypeError(f"not a concrete value: {val!r}")


def to_source(val: Value) -> str:
    """Render a value as JavaScript source text."""
    return syntax.stringify_expression(to_syntax(val))


def _strict_equals(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


class SynthesizedFunction:
    """Native callable for a synthesized function.

    Evaluates the case list directly: the first case whose conditions are
    strictly equal to the arguments supplies the result. Missing arguments
    are undefined.
    """

    def __init__(self, val: Function) -> None:
        self.function = val
        self.source = to_source(val)

    def __call__(self, *args: Any) -> Any:
        padded = list(args) + [UNDEFINED] * (self.function.arity - len(args))
        for case in self.function.cases:
            if all(_strict_equals(arg, to_plain(cond)) for arg, cond in zip(padded, case.conditions)):
                return to_plain(case.result)
        if self.function.default is None:
            return UNDEFINED
        return to_plain(self.function.default)

    def __repr__(self) -> str:
        return self.source


def to_plain(val: Value) -> Any:
    """Render a value as a native Python value.

    null becomes None and undefined becomes UNDEFINED. Class instances are
    described by their constructor call text.
    """
    if isinstance(val, (Number, Boolean, String)):
        return val.value
    elif isinstance(val, Null):
        return None
    elif isinstance(val, Undefined):
        return UNDEFINED
    elif isinstance(val, Function):
        return SynthesizedFunction(val)
    elif isinstance(val, Object):
        return {k: to_plain(v) for k, v in val.fields.items()}
    elif isinstance(val, ClassInstance):
        # TODO: construct an instance once class definitions are available to the decoder
        args = ", ".join(to_display(a) for a in val.args)
        return f"new {val.cls}({args})"
    elif isinstance(val, Array):
        return [to_plain(e) for e in val.elements]
    raise TypeError(f"not a concrete value: {val!r}")


def to_display(val: Value) -> str:
    """Render a value as human-readable text."""
    if isinstance(val, Number):
        return format_number(val.value)
    elif isinstance(val, Boolean):
        return "true" if val.value else "false"
    elif isinstance(val, String):
        return val.value
    elif isinstance(val, Null):
        return "null"
    elif isinstance(val, Undefined):
        return "undefined"
    elif isinstance(val, Function):
        # Strip the parentheses around the function expression
        return to_source(val)[1:-1]
    elif isinstance(val, Object):
        fields = ", ".join(f"{format_key(k)}:{to_display(v)}" for k, v in val.fields.items())
        return f"{{ {fields} }}"
    elif isinstance(val, ClassInstance):
        return f"new {val.cls}(" + ", ".join(to_display(a) for a in val.args) + ")"
    elif isinstance(val, Array):
        return "[" + ", ".join(to_display(e) for e in val.elements) + "]"
    raise TypeError(f"not a concrete value: {val!r}")
