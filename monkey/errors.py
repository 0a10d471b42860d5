"""Error types raised by the Monkey parser and interpreter.

Parse errors are collected by the parser rather than raised out of it, so a
caller can report every syntax problem in one pass. Evaluation errors are
raised at the first failure and propagate unchanged to the caller.
"""

from __future__ import annotations

from typing import Any, Optional


###############################################################################
# Parse-time errors
###############################################################################


class ParseError(Exception):
    """A syntax error found while parsing Monkey source."""
    def __init__(self, message: str, token: Optional[Any] = None):
        self.message = message
        self.token = token
        self.line = getattr(token, 'line', None)
        self.column = getattr(token, 'column', None)
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at {self.line}:{self.column}"


class WrongTokenError(ParseError):
    """The parser expected one kind of token and found another."""
    def __init__(self, expected: str, actual: Any):
        self.expected = expected
        self.actual = actual.type
        super().__init__(f"expected {expected} token but found {actual.type} {actual.value!r}", actual)


class NoValidPrefixError(ParseError):
    """The current token cannot start an expression."""
    def __init__(self, token: Any):
        self.token_type = token.type
        super().__init__(f"{token.type} {token.value!r} is not a valid prefix", token)


###############################################################################
# Evaluation-time errors
###############################################################################


class EvalError(Exception):
    """Base class for every Monkey runtime error."""
    pass


class TypeMismatch(EvalError):
    def __init__(self, left, operator: str, right):
        self.left = left
        self.operator = operator
        self.right = right
        super().__init__(
            f"type mismatch: {left.type_name} {operator} {right.type_name} "
            f"({left.inspect()} and {right.inspect()} are different types)"
        )


class InvalidOperator(EvalError):
    def __init__(self, left, operator: str, right):
        self.left = left
        self.operator = operator
        self.right = right
        super().__init__(
            f"{left.inspect()} {operator} {right.inspect()} is an invalid operation "
            f"({left.type_name} {operator} {right.type_name})"
        )


class InvalidPrefixOperator(EvalError):
    def __init__(self, operator: str, operand):
        self.operator = operator
        self.operand = operand
        super().__init__(f"{operator} is an invalid prefix for {operand.type_name}")


class InvalidOperation(EvalError):
    def __init__(self, operation: str, value):
        self.operation = operation
        self.value = value
        super().__init__(f"{operation} is not a valid operation on {value.type_name} {value.inspect()}")


class IdentifierNotFound(EvalError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"identifier not found: {name}")


class InvalidParamCount(EvalError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"got {actual} params but was expecting {expected}")


class InvalidParamTypes(EvalError):
    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected params: ({expected}) but got ({actual})")


class InvalidObjectType(EvalError):
    def __init__(self, expected: str, value):
        self.expected = expected
        self.value = value
        super().__init__(f"{expected} was expected, but got {value.type_name}")


class IndexOperatorNotSupported(EvalError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"index operator not supported: {value.type_name}")


class IndexOutOfBounds(EvalError):
    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"index {index} out of bounds for length {length}")


class InvalidHashKeyType(EvalError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"unusable as hash key: {value.type_name}")


class ImpossibleState(EvalError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"reached an impossible state: {detail}")
