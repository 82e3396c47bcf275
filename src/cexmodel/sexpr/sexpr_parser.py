"""Parser for SMT-LIB symbolic expressions."""

from __future__ import annotations

import os
from typing import Any, Union

import ply.yacc as yacc

from cexmodel.sexpr.sexpr_lexer import SExprLexer

# An atom is its token text; a list is a Python list of sub-expressions.
SExpr = Union[str, list["SExpr"]]

_PARSER_DIR = os.path.dirname(os.path.abspath(__file__))


class SExprParser:
    """Parser turning solver output into nested lists of atoms."""

    tokens = SExprLexer.tokens

    start = "sexpr"

    def __init__(self) -> None:
        self.lexer = SExprLexer()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_sexpr_atom(self, p: yacc.YaccProduction) -> None:
        """sexpr : SYMBOL
                 | STRING
                 | QUOTED_SYMBOL"""
        p[0] = p[1]

    def p_sexpr_list(self, p: yacc.YaccProduction) -> None:
        """sexpr : LPAREN sexpr_list RPAREN"""
        p[0] = p[2]

    def p_sexpr_list_empty(self, p: yacc.YaccProduction) -> None:
        """sexpr_list : """
        p[0] = []

    def p_sexpr_list_multiple(self, p: yacc.YaccProduction) -> None:
        """sexpr_list : sexpr_list sexpr"""
        p[0] = p[1]
        p[0].append(p[2])

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the lexer and parser."""
        self.lexer.build(debug=False, errorlog=yacc.NullLogger())
        kwargs.setdefault("debug", False)
        kwargs.setdefault("write_tables", True)
        kwargs.setdefault("outputdir", _PARSER_DIR)
        kwargs.setdefault("tabmodule", "cexmodel.sexpr._sexpr_parsetab")
        kwargs.setdefault("errorlog", yacc.NullLogger())
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> SExpr:
        """Parse exactly one symbolic expression."""
        if self.parser is None:
            self.build()
        if not data.strip():
            raise SyntaxError("Syntax error at end of input")
        self.lexer.lexer.lineno = 1
        return self.parser.parse(data, lexer=self.lexer.lexer)


_shared_parser: SExprParser | None = None


def parse_sexpr(data: str) -> SExpr:
    """Parse text into a symbolic expression, reusing one built parser."""
    global _shared_parser
    if _shared_parser is None:
        _shared_parser = SExprParser()
    return _shared_parser.parse(data)


def format_sexpr(expr: SExpr) -> str:
    """Render a symbolic expression back to text."""
    if isinstance(expr, str):
        return expr
    return "(" + " ".join(format_sexpr(e) for e in expr) + ")"
