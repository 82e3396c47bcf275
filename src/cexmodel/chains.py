"""Decoding of right-nested if-then-else chains.

The solver encodes finite maps (array lengths, heap contents, object
fields, ...) as chains of the form

    (ite (= x!0 k1) v1 (ite (= x!0 k2) v2 ... vN))

or, for two-argument maps, with an ``(and (= x!0 a) (= x!1 b))`` test.
decode_chain turns such a chain into a total lookup function; the first
matching test along the chain wins and the final leaf is the fallback.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Sequence, TypeVar

from cexmodel.sexpr import Expr, SExpr, match_sexpr

T = TypeVar("T")

KeyParser = Callable[[SExpr], Any]


class Constant(Generic[T]):
    """Lookup that ignores its keys."""

    def __init__(self, value: T) -> None:
        self.value = value

    def __call__(self, *keys: Any) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Constant({self.value!r})"


class ChainLookup(Generic[T]):
    """Lookup testing its keys against each case in chain order."""

    def __init__(
        self,
        cases: list[tuple[tuple[Any, ...], Callable[..., T]]],
        fallback: Callable[..., T],
    ) -> None:
        self.cases = cases
        self.fallback = fallback

    def __call__(self, *keys: Any) -> T:
        for literals, then in self.cases:
            if literals == keys:
                return then(*keys)
        return self.fallback(*keys)

    def __repr__(self) -> str:
        return f"ChainLookup({len(self.cases)} cases)"


def ite_template(arity: int) -> list[Any]:
    """Return the template of one chain link testing x!0 .. x!{arity-1}."""
    tests = [["=", f"x!{i}", Expr(f"k{i}")] for i in range(arity)]
    cond = tests[0] if arity == 1 else ["and", *tests]
    return ["ite", cond, Expr("then"), Expr("else")]


def _links(expr: SExpr, arity: int) -> tuple[list[tuple[list[SExpr], SExpr]], SExpr]:
    """Split a chain into its (key literals, then-branch) links and final leaf."""
    template = ite_template(arity)
    links = []
    while True:
        m = match_sexpr(expr, template)
        if m is None:
            return links, expr
        links.append(([m[f"k{i}"] for i in range(arity)], m["then"]))
        expr = m["else"]


def decode_chain(
    expr: SExpr,
    key_parsers: Sequence[KeyParser],
    leaf: Callable[[SExpr], T],
) -> Callable[..., T]:
    """Decode an ite chain over len(key_parsers) keys into a lookup.

    Args:
        expr: The chain expression.
        key_parsers: One converter per key, applied to the literal the key
            is compared with.
        leaf: Converter for expressions that are not chain links.

    Returns:
        A callable taking one argument per key.
    """
    links, last = _links(expr, len(key_parsers))
    cases = []
    for literals, then in links:
        keys = tuple(parse(lit) for parse, lit in zip(key_parsers, literals))
        cases.append((keys, decode_chain(then, key_parsers, leaf)))
    fallback = Constant(leaf(last))
    if not cases:
        return fallback
    return ChainLookup(cases, fallback)


def _union(*parts: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(name for part in parts for name in part))


def decode_member_set(
    expr: SExpr,
    key_parser: Callable[[SExpr], str],
    leaf: Callable[[SExpr], tuple[str, ...] | None],
) -> tuple[str, ...] | None:
    """Decode a boolean ite chain over one key into the set of keys mapped to true.

    leaf maps ``true`` to an empty set and ``false`` to None. A link whose
    then-branch is None contributes nothing; otherwise its key is added in
    front of the members of both branches. The result keeps first-seen order.
    """
    links, last = _links(expr, 1)
    result = leaf(last)
    for (literal,), then_expr in reversed(links):
        key = key_parser(literal)
        then = decode_member_set(then_expr, key_parser, leaf)
        if then is None:
            continue
        elif result is None:
            result = _union((key,), then)
        else:
            result = _union((key,), then, result)
    return result
