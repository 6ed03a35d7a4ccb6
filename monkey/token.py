"""Token definitions for the Monkey language.

Token types are plain strings. Most of them double as the terminal names
of the lexer grammar in :mod:`monkey.lexer`, so a token produced by lark
can be converted without any lookup table.
"""

from dataclasses import dataclass

ILLEGAL = 'ILLEGAL'
EOF = 'EOF'

# Identifiers and literals
IDENT = 'IDENT'
INT = 'INT'

# Operators
ASSIGN = 'ASSIGN'
PLUS = 'PLUS'
MINUS = 'MINUS'
BANG = 'BANG'
ASTERISK = 'ASTERISK'
SLASH = 'SLASH'
LT = 'LT'
GT = 'GT'
EQ = 'EQ'
NOT_EQ = 'NOT_EQ'

# Delimiters
COMMA = 'COMMA'
SEMICOLON = 'SEMICOLON'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
LBRACE = 'LBRACE'
RBRACE = 'RBRACE'

# Keywords
FUNCTION = 'FUNCTION'
LET = 'LET'
TRUE = 'TRUE'
FALSE = 'FALSE'
IF = 'IF'
ELSE = 'ELSE'
RETURN = 'RETURN'

KEYWORDS = {
    'fn': FUNCTION,
    'let': LET,
    'true': TRUE,
    'false': FALSE,
    'if': IF,
    'else': ELSE,
    'return': RETURN,
}


@dataclass(frozen=True)
class Token:
    type: str
    literal: str
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.type}({self.literal!r}) at {self.line}:{self.column}"
