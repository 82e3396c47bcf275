"""Decoding of numeric and string literals in solver output."""

from __future__ import annotations

import math
import re

from cexmodel.errors import ModelFormatError
from cexmodel.sexpr import Name, SExpr, format_sexpr, match_sexpr

# \xNN, \u{N...} and \uNNNN escapes in Z3 string literals
_ESCAPE_RE = re.compile(r"\\x([0-9a-fA-F]{2})|\\u\{([0-9a-fA-F]{1,6})\}|\\u([0-9a-fA-F]{4})")


def _parse_numeral(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        pass
    try:
        if text.startswith("#x"):
            return float(int(text[2:], 16))
        if text.startswith("#b"):
            return float(int(text[2:], 2))
    except ValueError:
        pass
    return None


def _divide(n: float, d: float) -> float:
    if d == 0:
        if n == 0 or math.isnan(n):
            return math.nan
        return math.copysign(math.inf, n) * math.copysign(1.0, d)
    return n / d


def parse_number(expr: SExpr) -> float:
    """Decode a numeral or a constant arithmetic expression.

    Raises:
        ModelFormatError: If the expression is not a supported number form.
    """
    if isinstance(expr, str):
        num = _parse_numeral(expr)
        if num is None:
            raise ModelFormatError(f"cannot parse number {expr}")
        return num

    if not expr:
        raise ModelFormatError("cannot parse number ()")

    op = expr[0]
    if op == "-" and len(expr) == 2:
        return -parse_number(expr[1])
    elif op == "/" and len(expr) == 3:
        return _divide(parse_number(expr[1]), parse_number(expr[2]))
    elif op == "*" and len(expr) == 3:
        return parse_number(expr[1]) * parse_number(expr[2])
    elif op == "+" and len(expr) == 3:
        return parse_number(expr[1]) + parse_number(expr[2])
    elif op == "to_real" and len(expr) == 2:
        return parse_number(expr[1])
    elif op == "to_int" and len(expr) == 2:
        return float(math.floor(parse_number(expr[1])))

    raise ModelFormatError(f"cannot parse number expression {format_sexpr(expr)}")


def decode_string_literal(text: str) -> str | None:
    """Decode a quoted string atom, or return None if it is not quoted."""
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        return None
    chars = text[1:-1].replace('""', '"')
    return _ESCAPE_RE.sub(lambda m: chr(int(next(g for g in m.groups() if g), 16)), chars)


def parse_char_code(expr: SExpr) -> int | None:
    """Decode a character code, or return None."""
    if isinstance(expr, str):
        num = _parse_numeral(expr)
        if num is None or not num.is_integer():
            return None
        return int(num)
    m = match_sexpr(expr, ["char", Name("code")]) or match_sexpr(expr, ["_", "Char", Name("code")])
    if m is None:
        return None
    code = m["code"]
    try:
        if code.startswith("#x"):
            return int(code[2:], 16)
        elif code.startswith("#b"):
            return int(code[2:], 2)
        return int(code)
    except ValueError:
        return None


def parse_string(expr: SExpr) -> str | None:
    """Decode a Z3 string expression.

    Never raises; returns None when the expression is not understood
    (``str.at`` indexing is one such form).
    """
    if isinstance(expr, str):
        return decode_string_literal(expr)
    if not expr:
        return None

    op = expr[0]
    if op == "str.++":
        parts = []
        for part in expr[1:]:
            decoded = parse_string(part)
            if decoded is None:
                return None
            parts.append(decoded)
        return "".join(parts)
    elif op in ("seq.unit", "str.from_code"):
        if len(expr) != 2:
            return None
        code = parse_char_code(expr[1])
        if code is None or not 0 <= code <= 0x10FFFF:
            return None
        return chr(code)
    return None
