"""Runtime values for the Monkey interpreter.

Monkey integers and booleans are represented by Python ``int`` and
``bool``. Because ``bool`` is a subclass of ``int`` in Python, code that
needs to tell them apart must test for ``bool`` first. The remaining
values get small classes of their own:

* ``NULL``, the single instance of :class:`NullVal`;
* :class:`ReturnSignal`, which carries the value of a ``return`` statement
  up through nested blocks until a function call or the program unwraps it;
* :class:`FunctionValue`, a closure over the environment it was defined in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, TYPE_CHECKING

from .ast import BlockStatement, Identifier

if TYPE_CHECKING:
    from .environment import Environment


class NullVal:
    """Marker object for the Monkey ``null`` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'null'


NULL = NullVal()


@dataclass(frozen=True)
class ReturnSignal:
    value: Any


@dataclass(eq=False)
class FunctionValue:
    """Represents a user-defined Monkey function.

    ``env`` is the environment the function literal was evaluated in. It is
    held by reference, so bindings added to that frame later are visible
    to the function as well.
    """
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: Environment

    def __repr__(self) -> str:
        return f"<function {to_string(self)}>"


@dataclass
class ErrorVal:
    """Describes a runtime error: an error name and a message."""
    name: str
    message: str


def type_name(value: Any) -> str:
    if isinstance(value, bool):
        return 'BOOLEAN'
    if isinstance(value, int):
        return 'INTEGER'
    if isinstance(value, NullVal):
        return 'NULL'
    if isinstance(value, FunctionValue):
        return 'FUNCTION'
    if isinstance(value, ReturnSignal):
        return 'RETURN_VALUE'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Canonical textual rendering used by the REPL and the tests."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, FunctionValue):
        params = ', '.join(p.name for p in value.parameters)
        return f"fn({params}) {value.body}"
    if isinstance(value, ReturnSignal):
        return to_string(value.value)
    return str(value)


def is_truthy(value: Any) -> bool:
    # Only null and false are falsy; 0 is truthy
    if isinstance(value, bool):
        return value
    if isinstance(value, NullVal):
        return False
    return True


def to_integer(value: Any) -> Optional[int]:
    """Reduce an operand to a machine integer, or None if it has no integer form."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    return None


def divide_toward_zero(a: int, b: int) -> int:
    """Integer division truncating toward zero, exact for any size of int."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q
