"""Lazy values: model values that may still need table lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from cexmodel.errors import ModelFormatError
from cexmodel.literals import parse_number, parse_string
from cexmodel.sexpr import SExpr, format_sexpr
from cexmodel.values import Boolean, Null, Number, String, Undefined, Value


@dataclass
class LazyObject:
    """An inline object literal whose field values are still lazy."""

    fields: dict[str, LazyValue] = field(default_factory=dict)


@dataclass
class PendingInstance:
    """A class-instance constructor call with lazy arguments."""

    cls: str
    args: list[LazyValue] = field(default_factory=list)


@dataclass(frozen=True)
class ArrayRef:
    name: str


@dataclass(frozen=True)
class ObjectRef:
    name: str


@dataclass(frozen=True)
class FunctionRef:
    name: str


@dataclass(frozen=True)
class Location:
    """A mutable heap location."""

    name: str


LazyValue = Union[
    Number,
    Boolean,
    String,
    Null,
    Undefined,
    LazyObject,
    PendingInstance,
    ArrayRef,
    ObjectRef,
    FunctionRef,
    Location,
]

CLASS_PREFIX = "jsobj_"
ARRAY_PREFIX = "Arr!"


def _single_atom(expr: list[SExpr]) -> str:
    """Return the only argument of a tagged value, which must be an atom."""
    if len(expr) != 2 or not isinstance(expr[1], str):
        raise ModelFormatError(format_sexpr(expr))
    return expr[1]


def try_parse_simple_value(expr: SExpr) -> Value | None:
    """Parse a scalar that needs no table lookup, or return None."""
    if isinstance(expr, str):
        if expr == "jsundefined":
            return Undefined()
        elif expr == "jsnull":
            return Null()
        return None

    if not expr or not isinstance(expr[0], str) or len(expr) != 2:
        return None
    tag = expr[0]
    if tag == "jsbool":
        if not isinstance(expr[1], str):
            return None
        return Boolean(expr[1] == "true")
    elif tag in ("jsint", "jsreal"):
        return Number(parse_number(expr[1]))
    elif tag == "jsstr":
        value = parse_string(expr[1])
        if value is None:
            return None
        return String(value)
    return None


def parse_lazy_value(expr: SExpr) -> LazyValue:
    """Parse a JSVal term from the model.

    Raises:
        ModelFormatError: If the term is not a recognized value shape.
    """
    if isinstance(expr, str):
        if expr == "jsundefined":
            return Undefined()
        elif expr == "jsnull":
            return Null()
        elif expr.startswith(CLASS_PREFIX):
            return PendingInstance(expr[len(CLASS_PREFIX):])
        elif expr.startswith(ARRAY_PREFIX):
            return ArrayRef(expr)
        raise ModelFormatError(expr)

    if not expr or not isinstance(expr[0], str):
        raise ModelFormatError(format_sexpr(expr))

    tag = expr[0]
    if tag == "jsbool":
        return Boolean(_single_atom(expr) == "true")
    elif tag in ("jsint", "jsreal"):
        if len(expr) != 2:
            raise ModelFormatError(format_sexpr(expr))
        return Number(parse_number(expr[1]))
    elif tag == "jsstr":
        if len(expr) != 2:
            raise ModelFormatError(format_sexpr(expr))
        value = parse_string(expr[1])
        if value is None:
            raise ModelFormatError(f"cannot parse string value {format_sexpr(expr[1])}")
        return String(value)
    elif tag == "jsfun":
        return FunctionRef(_single_atom(expr))
    elif tag == "jsobj":
        return ObjectRef(_single_atom(expr))
    elif tag == "jsobj_Array":
        return ArrayRef(_single_atom(expr))
    elif tag.startswith(CLASS_PREFIX):
        return PendingInstance(tag[len(CLASS_PREFIX):], [parse_lazy_value(a) for a in expr[1:]])
    raise ModelFormatError(tag)
