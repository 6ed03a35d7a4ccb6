from typing import List

from monkey.types import ErrorVal


class MonkeyError(Exception):
    """Exception type used to propagate Monkey runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err


class ParseError(Exception):
    """Raised by the strict helpers when parsing produced diagnostics."""
    def __init__(self, errors: List[str]):
        super().__init__('\n'.join(errors))
        self.errors = list(errors)
