"""Tree-walking interpreter for the Monkey language.

:class:`Interpreter` evaluates the AST produced by :mod:`monkey.parser`
against an :class:`~monkey.environment.Environment`. Evaluation is
deliberately permissive. Unresolved identifiers, operands of the wrong
type and unknown operators all evaluate to ``null`` instead of failing.
Those cases are written to the debug log when ``debug_level`` is at
least 1. Only wrong argument counts, division by zero and calling a value
that is not a function raise :class:`~monkey.errors.MonkeyError`.

``return`` is modelled as a :class:`~monkey.types.ReturnSignal` value.
Block evaluation stops at the first signal and hands it up unchanged, so
a return inside nested ``if`` blocks escapes all of them. The signal is
unwrapped exactly once, by the enclosing function call or by the program.
"""

from __future__ import annotations

import sys
from typing import Any, Optional, Sequence

from .ast import (
    Node, Program, Statement, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression,
)
from .environment import Environment
from .errors import MonkeyError, ParseError
from .parser import parse_program
from .types import (
    NULL, ErrorVal, FunctionValue, ReturnSignal,
    divide_toward_zero, is_truthy, to_integer, to_string, type_name,
)


class Interpreter:
    """Core interpreter that evaluates Monkey ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 recursion_limit: int = 50000):
        self.global_env = Environment()
        # Each Monkey call costs several Python frames
        if sys.getrecursionlimit() < recursion_limit:
            sys.setrecursionlimit(recursion_limit)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        if env is None:
            env = self.global_env
        return self.evaluate(program, env)

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Program):
            return self.eval_program(node.statements, env)
        if isinstance(node, Statement):
            return self.execute(node, env)
        return self.eval_expression(node, env)

    def eval_program(self, statements: Sequence[Statement], env: Environment) -> Any:
        result = NULL
        for stmt in statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnSignal):
                return result.value
        return result

    def eval_block(self, statements: Sequence[Statement], env: Environment) -> Any:
        result = NULL
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals without unwrapping
            if isinstance(result, ReturnSignal):
                return result
        return result

    def execute(self, node: Statement, env: Environment) -> Any:
        if isinstance(node, ExpressionStatement):
            return self.eval_expression(node.expression, env)
        if isinstance(node, LetStatement):
            value = self.eval_expression(node.value, env)
            env.set(node.name.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.name}: {type_name(value)} = {to_string(value)}")
            return value
        if isinstance(node, ReturnStatement):
            value = self.eval_expression(node.value, env)
            return ReturnSignal(value)
        if isinstance(node, BlockStatement):
            return self.eval_block(node.statements, env)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def eval_expression(self, node: Node, env: Environment) -> Any:
        if isinstance(node, IntegerLiteral):
            return node.value
        if isinstance(node, BooleanLiteral):
            return node.value
        if isinstance(node, Identifier):
            value = env.get(node.name)
            if value is None:
                self.debug(f"unresolved identifier {node.name}, using null")
                return NULL
            return value
        if isinstance(node, PrefixExpression):
            right = self.eval_expression(node.right, env)
            return self.apply_prefix_op(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.eval_expression(node.left, env)
            right = self.eval_expression(node.right, env)
            return self.apply_infix_op(node.operator, left, right)
        if isinstance(node, IfExpression):
            cond = self.eval_expression(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.eval_block(node.consequence.statements, env)
            if node.alternative is not None:
                return self.eval_block(node.alternative.statements, env)
            return NULL
        if isinstance(node, FunctionLiteral):
            return FunctionValue(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            func = self.eval_expression(node.function, env)
            args = [self.eval_expression(arg, env) for arg in node.arguments]
            return self.call_function(func, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: Sequence[Any]) -> Any:
        if not isinstance(func, FunctionValue):
            raise MonkeyError(ErrorVal('TypeError', f'not a function: {type_name(func)}'))
        if len(args) != len(func.parameters):
            raise MonkeyError(ErrorVal(
                'TypeError',
                f"function expects {len(func.parameters)} arguments, got {len(args)}",
            ))
        # The new frame hangs off the closure's environment, not the caller's
        call_env = func.env.extend()
        for param, arg in zip(func.parameters, args):
            call_env.set(param.name, arg)
        if self.debug_level >= 2:
            self.debug(f"call {to_string(func)} with ({', '.join(to_string(a) for a in args)})")
        result = self.eval_block(func.body.statements, call_env)
        if isinstance(result, ReturnSignal):
            return result.value
        return result

    def apply_prefix_op(self, op: str, operand: Any) -> Any:
        if op == '!':
            if isinstance(operand, bool):
                return not operand
            return operand is NULL
        if op == '-':
            if isinstance(operand, int) and not isinstance(operand, bool):
                return -operand
            self.debug(f"unary - on {type_name(operand)}, using null")
            return NULL
        self.debug(f"unknown prefix operator {op}, using null")
        return NULL

    def apply_infix_op(self, op: str, left: Any, right: Any) -> Any:
        a = to_integer(left)
        b = to_integer(right)
        if a is None or b is None:
            self.debug(f"unsupported {op} for {type_name(left)} and {type_name(right)}, using null")
            return NULL
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            if b == 0:
                raise MonkeyError(ErrorVal('ZeroDivisionError', 'division by zero'))
            return divide_toward_zero(a, b)
        if op == '<':
            return a < b
        if op == '>':
            return a > b
        if op == '==':
            return a == b
        if op == '!=':
            return a != b
        self.debug(f"unknown operator {op}, using null")
        return NULL


def evaluate(node: Node, env: Environment) -> Any:
    """Evaluate a single AST node in ``env`` with a default interpreter."""
    return Interpreter().evaluate(node, env)


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Any:
    """Convenience function to parse and evaluate Monkey source code.

    Raises ParseError if the source has syntax errors.
    """
    program, errors = parse_program(source)
    if errors:
        raise ParseError(errors)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program, env)
    finally:
        interpreter.close()
