from typing import Dict, Optional

from monkey.objects import Object


class Environment:
    """A scope mapping identifiers to values, chained to an outer scope.

    Lookups walk outward through the chain. Bindings only ever go into the
    local store, so a `let` in an inner scope shadows an outer name instead
    of reassigning it. Environments are shared by reference: every closure
    created in a scope holds the same `Environment` object and sees later
    additions to it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Object] = {}

    @classmethod
    def new_child(cls, outer: 'Environment') -> 'Environment':
        return cls(outer=outer)

    @classmethod
    def with_builtins(cls) -> 'Environment':
        from monkey.std import populate_builtins
        env = cls()
        populate_builtins(env)
        return env

    def get(self, name: str) -> Optional[Object]:
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        names = ', '.join(sorted(self.store))
        return f"<Environment [{names}]{' outer' if self.outer is not None else ''}>"
