"""Lexer for the Monkey language.

The token set is declared as a lark grammar and scanned with lark's basic
lexer, which gives us maximal munch for identifiers and integers, longest
match for two-character operators, and keyword retyping of identifiers
(``letter`` stays an identifier while ``let`` becomes a keyword).

The parser does not consume lark tokens directly. :class:`Lexer` wraps the
token stream into the pull interface ``next_token() -> Token`` and keeps
returning an ``EOF`` token once the input is exhausted.
"""

from __future__ import annotations

from typing import Iterator

from lark import Lark

from .token import Token, EOF

MONKEY_TOKENS = r"""
    start: (IDENT | INT | ASSIGN | PLUS | MINUS | BANG | ASTERISK | SLASH
           | LT | GT | EQ | NOT_EQ | COMMA | SEMICOLON | LPAREN | RPAREN
           | LBRACE | RBRACE | FUNCTION | LET | TRUE | FALSE | IF | ELSE
           | RETURN | ILLEGAL)*

    // Keywords
    FUNCTION: "fn"
    LET: "let"
    TRUE: "true"
    FALSE: "false"
    IF: "if"
    ELSE: "else"
    RETURN: "return"

    IDENT: /[A-Za-z_]+/
    INT: /[0-9]+/

    EQ: "=="
    NOT_EQ: "!="
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    BANG: "!"
    ASTERISK: "*"
    SLASH: "/"
    LT: "<"
    GT: ">"

    COMMA: ","
    SEMICOLON: ";"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"

    // Any single character no other terminal can start with
    ILLEGAL: /[^ \t\r\nA-Za-z0-9_=+\-!*\/<>,;(){}]/

    WS: /[ \t\r\n]+/
    %ignore WS
"""


MONKEY_LEXER = Lark(
    MONKEY_TOKENS,
    parser='lalr',
    lexer='basic',
)


class Lexer:
    """Pull-style token source over a piece of Monkey source code."""

    def __init__(self, source: str):
        self.source = source
        self._tokens = MONKEY_LEXER.lex(source)
        self._eof = self._make_eof(source)

    @staticmethod
    def _make_eof(source: str) -> Token:
        line = source.count('\n') + 1
        column = len(source) - (source.rfind('\n') + 1) + 1
        return Token(EOF, '', line, column)

    def next_token(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            return self._eof
        return Token(tok.type, tok.value, tok.line, tok.column)

    def __iter__(self) -> Iterator[Token]:
        # Yields every token up to and including EOF
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Scan ``source`` into a list of tokens ending with ``EOF``."""
    return list(Lexer(source))
