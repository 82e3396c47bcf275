"""Concrete JavaScript values reconstructed from a solver model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


class _UndefinedType:
    """Native stand-in for JavaScript ``undefined``.

    ``None`` already plays the part of ``null``, so ``undefined`` needs a
    distinct singleton.
    """

    _instance: _UndefinedType | None = None

    def __new__(cls) -> _UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _UndefinedType()


@dataclass(frozen=True)
class Number:
    """A double-precision number."""

    value: float


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class Undefined:
    pass


@dataclass
class FunctionCase:
    """One guarded return of a synthesized function.

    conditions holds one value per parameter; the case applies when every
    argument is strictly equal to its condition value.
    """

    conditions: list[Value]
    result: Value


@dataclass
class Function:
    """A function synthesized from the solver's application table.

    Cases are tried in order; when none applies the function returns
    default. A default of None stands for an empty body.
    """

    arity: int
    cases: list[FunctionCase] = field(default_factory=list)
    default: Value | None = None

    @property
    def params(self) -> list[str]:
        """Return the generated parameter names."""
        return [f"x_{i}" for i in range(self.arity)]


@dataclass
class Object:
    fields: dict[str, Value] = field(default_factory=dict)


@dataclass
class ClassInstance:
    """An instance of a user class, described by its constructor call."""

    cls: str
    args: list[Value] = field(default_factory=list)


@dataclass
class Array:
    elements: list[Value] = field(default_factory=list)


Value = Union[Number, Boolean, String, Null, Undefined, Function, Object, ClassInstance, Array]


def plain_to_value(val: Any) -> Value:
    """Convert a native Python value into a concrete value.

    Dicts carrying both ``_cls_`` and ``_args_`` describe class instances.

    Raises:
        TypeError: If the value has no JavaScript counterpart.
    """
    if isinstance(val, bool):
        return Boolean(val)
    elif isinstance(val, (int, float)):
        return Number(float(val))
    elif isinstance(val, str):
        return String(val)
    elif val is None:
        return Null()
    elif val is UNDEFINED:
        return Undefined()
    elif isinstance(val, (list, tuple)):
        return Array([plain_to_value(v) for v in val])
    elif isinstance(val, dict):
        if "_cls_" in val and "_args_" in val:
            return ClassInstance(val["_cls_"], [plain_to_value(a) for a in val["_args_"]])
        return Object({str(k): plain_to_value(v) for k, v in val.items()})
    raise TypeError(f"unsupported value {val!r}")
