"""Lexer for SMT-LIB symbolic expressions."""

import ply.lex as lex


class SExprLexer:
    """Lexer for tokenizing solver output."""

    tokens = [
        "LPAREN",
        "RPAREN",
        "STRING",
        "QUOTED_SYMBOL",
        "SYMBOL",
    ]

    t_LPAREN = r"\("
    t_RPAREN = r"\)"

    # Ignored characters (spaces, tabs, carriage returns)
    t_ignore = " \t\r"

    t_ignore_COMMENT = r";[^\n]*"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"(?:[^"]|"")*"'
        # Quotes are kept; the string decoder works on the literal text
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_QUOTED_SYMBOL(self, t: lex.LexToken) -> lex.LexToken:
        r"\|[^|]*\|"
        t.lexer.lineno += t.value.count("\n")
        t.value = t.value[1:-1]
        return t

    def t_SYMBOL(self, t: lex.LexToken) -> lex.LexToken:
        r'[^\s()";|]+'
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at line {t.lineno}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
