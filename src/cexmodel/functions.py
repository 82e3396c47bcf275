"""Reconstruction of function values from the solver's application tables.

Function calls are encoded through one uninterpreted function per arity,
``appN(f, this, heap, a0, ..., aN-1)``. In a model each such table is a
chain of cases

    (ite (and (= x!0 (jsfun F)) (= x!1 this) (= x!2 heap) (= x!3 a0) ...)
         result
         ...)

whose final leaf is the result shared by every function of that arity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cexmodel.errors import ModelFormatError
from cexmodel.lazy import LazyValue, parse_lazy_value, try_parse_simple_value
from cexmodel.sexpr import Expr, Group, Name, SExpr, format_sexpr, match_sexpr
from cexmodel.values import Value

logger = logging.getLogger(__name__)

# 'and', the function identity, the this-argument and the heap generation
_BOOKKEEPING_CONJUNCTS = 4

_ITE = ["ite", Group("cond"), Expr("then"), Expr("else")]
_FUNCTION_IDENTITY = ["=", "x!0", ["jsfun", Name("func")]]


@dataclass
class FunctionBranch:
    """Argument values a case applies to and the value it returns."""

    conditions: list[Value]
    result: LazyValue


@dataclass
class FunctionTable:
    """Branches of every synthesized function by name and arity."""

    branches: dict[str, dict[int, list[FunctionBranch]]] = field(default_factory=dict)
    defaults: dict[int, LazyValue] = field(default_factory=dict)

    def arities(self, name: str) -> dict[int, list[FunctionBranch]]:
        """Return the branch lists of a function keyed by arity."""
        return self.branches.get(name, {})

    def add_application(self, body: SExpr, arity: int) -> None:
        """Record the cases of an ``appN`` table.

        Cases are recorded in the order they appear in the chain. A case
        that belongs to something other than a function value is skipped;
        a case whose argument tests are not equalities with plain scalars
        is dropped.

        Raises:
            ModelFormatError: If a case condition is not a conjunction.
        """
        links = []
        while True:
            m = match_sexpr(body, _ITE)
            if m is None:
                break
            links.append((m["cond"], m["then"]))
            body = m["else"]
        self.defaults[arity] = parse_lazy_value(body)

        # Innermost first, each inserted at the front
        for cond, then in reversed(links):
            self._add_branch(cond, then, arity)

    def _add_branch(self, cond: list[SExpr], then: SExpr, arity: int) -> None:
        if len(cond) < 3 or cond[0] != "and":
            raise ModelFormatError(f"expected (and ...) in app{arity}, got {format_sexpr(cond)}")
        func_match = match_sexpr(cond[1], _FUNCTION_IDENTITY)
        if func_match is None:
            logger.debug("Skipping non-function case %s in app%d", format_sexpr(cond[1]), arity)
            return
        name = func_match["func"]
        branches = self.branches.setdefault(name, {}).setdefault(arity, [])

        conditions: list[Value] = []
        for idx in range(_BOOKKEEPING_CONJUNCTS, len(cond)):
            arg_match = match_sexpr(cond[idx], ["=", f"x!{idx - 1}", Expr("val")])
            value = None if arg_match is None else try_parse_simple_value(arg_match["val"])
            if value is None:
                logger.debug("Dropping case of %s with condition %s", name, format_sexpr(cond[idx]))
                return
            conditions.append(value)

        branches.insert(0, FunctionBranch(conditions, parse_lazy_value(then)))
