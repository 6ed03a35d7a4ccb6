# Monkey language package
# This package provides a Pratt parser and a tree-walking interpreter for the Monkey language.
from .interpreter import run_program, evaluate, Interpreter
from .parser import parse_program, Parser
from .lexer import Lexer
from .environment import Environment
from .errors import MonkeyError, ParseError

__all__ = [
    'run_program',
    'evaluate',
    'Interpreter',
    'parse_program',
    'Parser',
    'Lexer',
    'Environment',
    'MonkeyError',
    'ParseError',
]
