"""A small JavaScript syntax tree and its source code generator."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union

from cexmodel.values import UNDEFINED

IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


# ---- Expressions ----


@dataclass
class Literal:
    """A literal; value is a float, bool, str, None (null) or UNDEFINED."""

    value: Any


@dataclass
class Identifier:
    name: str


@dataclass
class BinaryExpression:
    operator: str
    left: Expression
    right: Expression


@dataclass
class LogicalExpression:
    operator: str
    left: Expression
    right: Expression


@dataclass
class Property:
    key: str
    value: Expression


@dataclass
class ObjectExpression:
    properties: list[Property] = field(default_factory=list)


@dataclass
class ArrayExpression:
    elements: list[Expression] = field(default_factory=list)


@dataclass
class NewExpression:
    callee: Identifier
    args: list[Expression] = field(default_factory=list)


@dataclass
class FunctionExpression:
    params: list[Identifier] = field(default_factory=list)
    body: list[Statement] = field(default_factory=list)


# ---- Statements ----


@dataclass
class ReturnStatement:
    argument: Expression


@dataclass
class IfStatement:
    test: Expression
    consequent: list[Statement] = field(default_factory=list)


Expression = Union[
    Literal,
    Identifier,
    BinaryExpression,
    LogicalExpression,
    ObjectExpression,
    ArrayExpression,
    NewExpression,
    FunctionExpression,
]
Statement = Union[ReturnStatement, IfStatement]

# Binding strength of the operators the generator emits
_PRECEDENCE = {"||": 1, "&&": 2, "===": 3, "!==": 3}
_ATOMIC = 10


def format_number(value: float) -> str:
    """Format a number the way JavaScript's String(number) does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = repr(float(value))
    if 1e-6 <= abs(value) < 1e21:
        text = format(Decimal(text), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    mantissa, _, exponent = text.partition("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    return f"{mantissa}e{int(exponent):+d}"


def format_key(key: str) -> str:
    """Return an object key for display, quoted unless it is an identifier."""
    if IDENTIFIER_RE.match(key):
        return key
    return '"' + key + '"'


def _source_key(key: str) -> str:
    if IDENTIFIER_RE.match(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def _literal(value: Any) -> str:
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return json.dumps(value, ensure_ascii=False)


def _precedence(expr: Expression) -> int:
    if isinstance(expr, (BinaryExpression, LogicalExpression)):
        return _PRECEDENCE.get(expr.operator, 0)
    return _ATOMIC


def _operand(expr: Expression, parent: int, right: bool, associative: bool) -> str:
    text = stringify_expression(expr)
    prec = _precedence(expr)
    if prec < parent or (right and prec == parent and not associative):
        return f"({text})"
    return text


def stringify_expression(expr: Expression) -> str:
    """Generate source text for an expression."""
    if isinstance(expr, Literal):
        return _literal(expr.value)
    elif isinstance(expr, Identifier):
        return expr.name
    elif isinstance(expr, (BinaryExpression, LogicalExpression)):
        prec = _precedence(expr)
        associative = isinstance(expr, LogicalExpression)
        left = _operand(expr.left, prec, False, associative)
        right = _operand(expr.right, prec, True, associative)
        return f"{left} {expr.operator} {right}"
    elif isinstance(expr, ObjectExpression):
        if not expr.properties:
            return "{}"
        props = ", ".join(f"{_source_key(p.key)}: {stringify_expression(p.value)}" for p in expr.properties)
        return f"{{ {props} }}"
    elif isinstance(expr, ArrayExpression):
        return "[" + ", ".join(stringify_expression(e) for e in expr.elements) + "]"
    elif isinstance(expr, NewExpression):
        args = ", ".join(stringify_expression(a) for a in expr.args)
        return f"new {expr.callee.name}({args})"
    elif isinstance(expr, FunctionExpression):
        params = ", ".join(p.name for p in expr.params)
        body = " ".join(stringify_statement(s) for s in expr.body)
        if not body:
            return f"(function ({params}) {{}})"
        return f"(function ({params}) {{ {body} }})"
    raise TypeError(f"unknown expression {expr!r}")


def stringify_statement(stmt: Statement) -> str:
    """Generate source text for a statement."""
    if isinstance(stmt, ReturnStatement):
        return f"return {stringify_expression(stmt.argument)};"
    elif isinstance(stmt, IfStatement):
        body = " ".join(stringify_statement(s) for s in stmt.consequent)
        return f"if ({stringify_expression(stmt.test)}) {{ {body} }}"
    raise TypeError(f"unknown statement {stmt!r}")
