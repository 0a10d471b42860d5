"""Runtime values for the Monkey interpreter.

Every value the interpreter produces is an instance of one of the `Object`
subclasses below. Values are never mutated once built: arrays hold tuples,
and built-ins that "change" a collection return a new one. Values are
shared freely between arrays, hashes and closures since nothing can change
them underneath another holder.

The arithmetic and comparison rules live here as well so the interpreter
only has to dispatch on the operator.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Sequence, Tuple

from .errors import InvalidHashKeyType, InvalidOperator, TypeMismatch

if TYPE_CHECKING:
    from .ast import BlockStatement
    from .environment import Environment


INT64_MASK = (1 << 64) - 1
INT64_SIGN = 1 << 63


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= INT64_MASK
    return value - (1 << 64) if value & INT64_SIGN else value


class Object:
    """Base class for all Monkey values."""
    type_name = 'Object'

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True)
class Null(Object):
    type_name = 'Null'

    def inspect(self) -> str:
        return 'null'


@dataclass(frozen=True)
class Integer(Object):
    value: int
    type_name = 'Int'

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool
    type_name = 'Bool'

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class String(Object):
    value: str
    type_name = 'String'

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class Array(Object):
    elements: Tuple[Object, ...] = ()
    type_name = 'Array'

    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass(frozen=True)
class HashKey:
    """64-bit digest identifying a hashable value."""
    digest: int


@dataclass(frozen=True)
class HashPair:
    key: Object
    value: Object


@dataclass(frozen=True)
class Hash(Object):
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)
    type_name = 'Hash'

    def get(self, key: HashKey) -> Object:
        pair = self.pairs.get(key)
        return NULL if pair is None else pair.value

    def inspect(self) -> str:
        return '{' + ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values()) + '}'


@dataclass(frozen=True, eq=False)
class Function(Object):
    """A user function together with the environment it was defined in.

    The environment is held by reference, never copied: bindings added to
    the defining scope after the function was created are visible to it.
    """
    parameters: List[str]
    body: 'BlockStatement'
    env: 'Environment'
    type_name = 'Function'

    def inspect(self) -> str:
        return f"fn({', '.join(self.parameters)}) {{ {self.body} }}"


BuiltinFn = Callable[[Sequence[Object]], Object]


@dataclass(frozen=True)
class Builtin(Object):
    name: str
    fn: BuiltinFn
    type_name = 'Builtin'

    def inspect(self) -> str:
        return f"builtin {self.name}"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a `return` while a block unwinds.

    Only the interpreter sees these; they are unwrapped at the enclosing
    function call or at the top of the program.
    """
    value: Object
    type_name = 'Return'

    def inspect(self) -> str:
        return f"return {self.value.inspect()}"


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool_to_object(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(value: Object) -> bool:
    """Only `false` and `null` are falsy; `0`, `""` and `[]` are truthy."""
    if isinstance(value, Boolean):
        return value.value
    if isinstance(value, Null):
        return False
    return True


def hash_key(value: Object) -> HashKey:
    """Compute the hash key of a Null, Bool, Int or String value."""
    if isinstance(value, Null):
        data = b'n'
    elif isinstance(value, Boolean):
        data = b'b' + (b'\x01' if value.value else b'\x00')
    elif isinstance(value, Integer):
        data = b'i' + (value.value & INT64_MASK).to_bytes(8, 'little')
    elif isinstance(value, String):
        data = b's' + value.value.encode('utf-8')
    else:
        raise InvalidHashKeyType(value)
    digest = hashlib.blake2b(data, digest_size=8).digest()
    return HashKey(int.from_bytes(digest, 'little'))


###############################################################################
# Operators
###############################################################################


def _unsupported(left: Object, operator: str, right: Object) -> Exception:
    if isinstance(left, Integer):
        return TypeMismatch(left, operator, right)
    return InvalidOperator(left, operator, right)


def apply_arithmetic(operator: str, left: Object, right: Object) -> Object:
    """Apply `+ - * /`; only Int/Int, plus String/String for `+`."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        a, b = left.value, right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                raise InvalidOperator(left, operator, right)
            # truncate toward zero
            quotient = abs(a) // abs(b)
            return Integer(wrap_int64(quotient if (a < 0) == (b < 0) else -quotient))
        raise InvalidOperator(left, operator, right)
    if operator == '+' and isinstance(left, String) and isinstance(right, String):
        return String(left.value + right.value)
    raise _unsupported(left, operator, right)


def compare(operator: str, left: Object, right: Object) -> Boolean:
    """Apply `== != < > <= >=`.

    Equality is defined between two values of the same scalar kind; ordering
    only between two integers. Anything else is an error, not `false`.
    """
    if operator in ('<', '>', '<=', '>='):
        if not (isinstance(left, Integer) and isinstance(right, Integer)):
            raise InvalidOperator(left, operator, right)
        a, b = left.value, right.value
        if operator == '<':
            return native_bool_to_object(a < b)
        if operator == '>':
            return native_bool_to_object(a > b)
        if operator == '<=':
            return native_bool_to_object(a <= b)
        return native_bool_to_object(a >= b)
    if operator in ('==', '!='):
        if isinstance(left, Null) and isinstance(right, Null):
            equal = True
        elif type(left) is type(right) and isinstance(left, (Integer, Boolean, String)):
            equal = left.value == right.value
        else:
            raise InvalidOperator(left, operator, right)
        return native_bool_to_object(equal if operator == '==' else not equal)
    raise InvalidOperator(left, operator, right)
