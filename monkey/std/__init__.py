from typing import Dict, Sequence

from monkey.environment import Environment
from monkey.errors import IndexOutOfBounds, InvalidOperation, InvalidParamCount, InvalidParamTypes
from monkey.objects import Array, Builtin, Integer, Object, String


def validate_param_count(expected: int, args: Sequence[Object]) -> None:
    if len(args) != expected:
        raise InvalidParamCount(expected, len(args))


def get_array(name: str, value: Object) -> Array:
    if not isinstance(value, Array):
        raise InvalidOperation(name, value)
    return value


def builtin_len(args: Sequence[Object]) -> Object:
    validate_param_count(1, args)
    value = args[0]
    if isinstance(value, String):
        # byte length of the UTF-8 encoding, not the number of characters
        return Integer(len(value.value.encode('utf-8')))
    if isinstance(value, Array):
        return Integer(len(value.elements))
    raise InvalidOperation('len', value)


def builtin_first(args: Sequence[Object]) -> Object:
    validate_param_count(1, args)
    elements = get_array('first', args[0]).elements
    if not elements:
        raise IndexOutOfBounds(0, 0)
    return elements[0]


def builtin_last(args: Sequence[Object]) -> Object:
    validate_param_count(1, args)
    elements = get_array('last', args[0]).elements
    if not elements:
        raise IndexOutOfBounds(0, 0)
    return elements[-1]


def builtin_rest(args: Sequence[Object]) -> Object:
    validate_param_count(1, args)
    elements = get_array('rest', args[0]).elements
    if not elements:
        raise IndexOutOfBounds(0, 0)
    return Array(elements[1:])


def builtin_push(args: Sequence[Object]) -> Object:
    validate_param_count(2, args)
    if not isinstance(args[0], Array):
        raise InvalidParamTypes('Array, Object', ', '.join(a.type_name for a in args))
    # the argument stays untouched; push always builds a new array
    return Array(args[0].elements + (args[1],))


BUILTINS: Dict[str, Builtin] = {
    'len': Builtin('len', builtin_len),
    'first': Builtin('first', builtin_first),
    'last': Builtin('last', builtin_last),
    'rest': Builtin('rest', builtin_rest),
    'push': Builtin('push', builtin_push),
}


def populate_builtins(env: Environment) -> Environment:
    """Bind every built-in function into `env`."""
    for name, builtin in BUILTINS.items():
        env.set(name, builtin)
    return env
