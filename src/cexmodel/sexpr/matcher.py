"""Structural matching of symbolic expressions against templates.

A template is built from the same material as the expressions it matches:
literal atoms must be equal, lists must have the same length and match
element-wise, and capture markers bind sub-expressions by key:

    >>> match_sexpr(["_", "as-array", "k!0"], ["_", "as-array", Name("name")])
    {'name': 'k!0'}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from cexmodel.sexpr.sexpr_parser import SExpr


@dataclass(frozen=True)
class Name:
    """Captures an atom."""

    key: str


@dataclass(frozen=True)
class Group:
    """Captures a list."""

    key: str


@dataclass(frozen=True)
class Expr:
    """Captures any sub-expression."""

    key: str


Template = Union[str, Name, Group, Expr, list[Any]]


def match_sexpr(expr: SExpr, template: Template) -> dict[str, SExpr] | None:
    """Match expr against template and return the captures, or None."""
    captures: dict[str, SExpr] = {}
    if _match(expr, template, captures):
        return captures
    return None


def _match(expr: SExpr, template: Template, captures: dict[str, SExpr]) -> bool:
    if isinstance(template, Name):
        if not isinstance(expr, str):
            return False
        captures[template.key] = expr
        return True
    if isinstance(template, Group):
        if not isinstance(expr, list):
            return False
        captures[template.key] = expr
        return True
    if isinstance(template, Expr):
        captures[template.key] = expr
        return True
    if isinstance(template, str):
        return expr == template
    if not isinstance(expr, list) or len(expr) != len(template):
        return False
    return all(_match(e, t, captures) for e, t in zip(expr, template))
