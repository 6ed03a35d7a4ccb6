"""Parser for the Monkey language.

This is a Pratt (precedence climbing) parser. Every token type that can
start an expression has a *prefix* parse function, and every token type
that can continue one has an *infix* parse function together with a
binding power in :data:`PRECEDENCES`. :meth:`Parser.parse_expression`
parses a prefix expression and then keeps folding infix operators into it
for as long as the next operator binds tighter than the caller's
threshold. Calls are handled as an infix ``(`` with the highest binding
power.

The parser never raises for syntax errors. Problems are recorded as
human readable messages in :attr:`Parser.errors` and parsing resumes at
the next token, so a single pass reports every error it can find. A
statement that fails to parse produces no node at all. Callers must check
``errors`` before trusting the returned :class:`Program`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
)
from .lexer import Lexer
from . import token
from .token import Token


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)


PRECEDENCES: Dict[str, Precedence] = {
    token.EQ: Precedence.EQUALS,
    token.NOT_EQ: Precedence.EQUALS,
    token.LT: Precedence.LESSGREATER,
    token.GT: Precedence.LESSGREATER,
    token.PLUS: Precedence.SUM,
    token.MINUS: Precedence.SUM,
    token.ASTERISK: Precedence.PRODUCT,
    token.SLASH: Precedence.PRODUCT,
    token.LPAREN: Precedence.CALL,
}


class Parser:
    def __init__(self, lexer: Lexer):
        # Any object with a next_token() method will do
        self.lexer = lexer
        self.errors: List[str] = []

        self.prefix_parse_fns: Dict[str, Callable[[], Optional[Expression]]] = {
            token.IDENT: self.parse_identifier,
            token.INT: self.parse_integer_literal,
            token.TRUE: self.parse_boolean,
            token.FALSE: self.parse_boolean,
            token.BANG: self.parse_prefix_expression,
            token.MINUS: self.parse_prefix_expression,
            token.LPAREN: self.parse_grouped_expression,
            token.IF: self.parse_if_expression,
            token.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[str, Callable[[Expression], Optional[Expression]]] = {
            token.PLUS: self.parse_infix_expression,
            token.MINUS: self.parse_infix_expression,
            token.ASTERISK: self.parse_infix_expression,
            token.SLASH: self.parse_infix_expression,
            token.LT: self.parse_infix_expression,
            token.GT: self.parse_infix_expression,
            token.EQ: self.parse_infix_expression,
            token.NOT_EQ: self.parse_infix_expression,
            token.LPAREN: self.parse_call_expression,
        }

        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

    # Token handling

    def advance(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: str) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: str) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: str) -> bool:
        """Advance if the next token has the given type, else record an error.

        On failure the parser stays where it is.
        """
        if self.peek_token_is(token_type):
            self.advance()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Diagnostics

    def error(self, message: str, tok: Token) -> None:
        self.errors.append(f"{message} at {tok.line}:{tok.column}")

    def peek_error(self, token_type: str) -> None:
        self.error(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, tok: Token) -> None:
        self.error(f"no prefix parse function for {tok.type} found", tok)

    # Statements

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.cur_token_is(token.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()
        return Program(tuple(statements))

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(token.LET):
            return self.parse_let_statement()
        if self.cur_token_is(token.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        if not self.expect_peek(token.IDENT):
            return None
        name = Identifier(self.cur_token.literal)
        if not self.expect_peek(token.ASSIGN):
            return None
        self.advance()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(token.SEMICOLON):
            self.advance()
        return LetStatement(name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        self.advance()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(token.SEMICOLON):
            self.advance()
        return ReturnStatement(value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if self.peek_token_is(token.SEMICOLON):
            self.advance()
        return ExpressionStatement(expression)

    def parse_block_statement(self) -> Optional[BlockStatement]:
        # cur_token is the opening brace
        statements: List[Statement] = []
        self.advance()
        while not self.cur_token_is(token.RBRACE):
            if self.cur_token_is(token.EOF):
                self.error(f"expected next token to be {token.RBRACE}, got {token.EOF} instead", self.cur_token)
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()
        return BlockStatement(tuple(statements))

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
            return None
        left = prefix()
        while (left is not None
               and not self.peek_token_is(token.SEMICOLON)
               and precedence < self.peek_precedence()):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.advance()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        try:
            return IntegerLiteral(int(self.cur_token.literal))
        except ValueError:
            self.error(f"could not parse {self.cur_token.literal!r} as integer", self.cur_token)
            return None

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token_is(token.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        operator = self.cur_token.literal
        self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        operator = self.cur_token.literal
        precedence = self.cur_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.advance()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self.expect_peek(token.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[Expression]:
        if not self.expect_peek(token.LPAREN):
            return None
        self.advance()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(token.RPAREN):
            return None
        if not self.expect_peek(token.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None
        alternative = None
        if self.peek_token_is(token.ELSE):
            self.advance()
            if not self.expect_peek(token.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None
        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        if not self.expect_peek(token.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(token.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(tuple(parameters), body)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(token.RPAREN):
            self.advance()
            return identifiers
        if not self.expect_peek(token.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token.literal))
        while self.peek_token_is(token.COMMA):
            self.advance()
            # trailing comma before the closing paren
            if self.peek_token_is(token.RPAREN):
                break
            if not self.expect_peek(token.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token.literal))
        if not self.expect_peek(token.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(function, tuple(arguments))

    def parse_call_arguments(self) -> Optional[List[Expression]]:
        args: List[Expression] = []
        if self.peek_token_is(token.RPAREN):
            self.advance()
            return args
        self.advance()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)
        while self.peek_token_is(token.COMMA):
            self.advance()
            if self.peek_token_is(token.RPAREN):
                break
            self.advance()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)
        if not self.expect_peek(token.RPAREN):
            return None
        return args


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Parse Monkey source code into a Program and its diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
