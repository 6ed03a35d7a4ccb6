from typing import Any, Dict, Optional


class Environment:
    """A scope mapping identifiers to runtime values.

    Lookups that miss the local frame continue in ``parent``. Bindings are
    always written to the local frame, so a function call can never rebind
    a name in the scope its closure captured.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: str) -> Optional[Any]:
        """Return the value bound to ``name``, or None when it is unbound."""
        if name in self.values:
            return self.values[name]
        if self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name: str, value: Any) -> Any:
        self.values[name] = value
        return value

    def extend(self) -> 'Environment':
        """Create a child scope whose parent is this environment."""
        return Environment(parent=self)

