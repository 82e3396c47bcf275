"""Symbolic-expression reading and matching."""

from cexmodel.sexpr.matcher import Expr, Group, Name, match_sexpr
from cexmodel.sexpr.sexpr_lexer import SExprLexer
from cexmodel.sexpr.sexpr_parser import SExpr, SExprParser, format_sexpr, parse_sexpr

__all__ = [
    "Expr",
    "Group",
    "Name",
    "SExpr",
    "SExprLexer",
    "SExprParser",
    "format_sexpr",
    "match_sexpr",
    "parse_sexpr",
]
