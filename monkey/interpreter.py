"""Tree-walking interpreter for the Monkey language.

`Interpreter.eval` walks a parsed AST directly. Blocks run in the scope they
are given; only a function call opens a new scope, chained to the scope the
function was defined in. A `return` produces a `ReturnValue` that stops
every enclosing block until the surrounding call (or the top of the program)
unwraps it.

Errors are raised as `EvalError` subclasses at the first failure and are not
caught anywhere inside the interpreter. Deep recursion in user code uses the
Python call stack and ends in a `RecursionError` like any other host-level
failure.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .ast import (
    Node, BlockStatement, Program, LetStatement, ReturnStatement, ExpressionStatement,
    Identifier, IntegerLiteral, StringLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression, ArrayLiteral, HashLiteral, IndexExpression,
)
from .environment import Environment
from .errors import (
    EvalError, IdentifierNotFound, ImpossibleState, IndexOperatorNotSupported,
    IndexOutOfBounds, InvalidObjectType, InvalidParamCount, InvalidPrefixOperator,
)
from .objects import (
    Object, Integer, String, Array, Hash, HashKey, HashPair, Function, Builtin, ReturnValue,
    NULL, native_bool_to_object, is_truthy, hash_key, apply_arithmetic, compare, wrap_int64,
)
from .parser import parse_program


ARITHMETIC_OPERATORS = ('+', '-', '*', '/')
COMPARISON_OPERATORS = ('==', '!=', '<', '>', '<=', '>=')


class Interpreter:
    """Evaluates Monkey ASTs against a root environment holding the built-ins."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment.with_builtins()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Object:
        """Evaluate a whole program, unwrapping a top-level `return`."""
        if env is None:
            env = self.global_env
        result = self.eval_block(program, env)
        if isinstance(result, ReturnValue):
            return result.value
        return result

    def eval(self, node: Node, env: Environment) -> Object:
        # Statements
        if isinstance(node, BlockStatement):
            return self.eval_block(node, env)
        if isinstance(node, ExpressionStatement):
            return self.eval(node.expression, env)
        if isinstance(node, LetStatement):
            value = self.eval(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name} = {value.inspect()}")
            return NULL
        if isinstance(node, ReturnStatement):
            return ReturnValue(self.eval(node.value, env))

        # Literals
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_object(node.value)
        if isinstance(node, ArrayLiteral):
            return Array(tuple(self.eval_expressions(node.elements, env)))
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)

        # Operators
        if isinstance(node, PrefixExpression):
            right = self.eval(node.right, env)
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.eval(node.left, env)
            right = self.eval(node.right, env)
            return self.eval_infix_expression(node.operator, left, right)

        if isinstance(node, Identifier):
            value = env.get(node.name)
            if value is None:
                raise IdentifierNotFound(node.name)
            return value
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, CallExpression):
            function = self.eval(node.function, env)
            args = self.eval_expressions(node.arguments, env)
            return self.apply_function(function, args)
        if isinstance(node, IndexExpression):
            left = self.eval(node.left, env)
            return self.eval_index_expression(left, node.index, env)
        raise ImpossibleState(f"cannot evaluate node {type(node).__name__}")

    def eval_block(self, block: BlockStatement, env: Environment) -> Object:
        result: Object = NULL
        for stmt in block.statements:
            result = self.eval(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnValue):
                if self.debug_level >= 3:
                    self.debug(f"block returns {result.value.inspect()}")
                return result
        return result

    def eval_expressions(self, nodes: Sequence[Node], env: Environment) -> List[Object]:
        return [self.eval(node, env) for node in nodes]

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return native_bool_to_object(not is_truthy(right))
        if operator == '-':
            if isinstance(right, Integer):
                return Integer(wrap_int64(-right.value))
            # non-integers negate to null rather than failing
            return NULL
        raise InvalidPrefixOperator(operator, right)

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if operator in ARITHMETIC_OPERATORS:
            return apply_arithmetic(operator, left, right)
        if operator in COMPARISON_OPERATORS:
            return compare(operator, left, right)
        raise ImpossibleState(f"unknown infix operator {operator}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.eval(node.condition, env)
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.eval_block(node.consequence, env)
        if node.alternative is not None:
            return self.eval_block(node.alternative, env)
        return NULL

    def eval_hash_literal(self, node: HashLiteral, env: Environment) -> Hash:
        pairs: Dict[HashKey, HashPair] = {}
        for key_node, value_node in node.pairs:
            key = self.eval(key_node, env)
            value = self.eval(value_node, env)
            pairs[hash_key(key)] = HashPair(key, value)
        return Hash(pairs)

    def eval_index_expression(self, left: Object, index_node: Node, env: Environment) -> Object:
        if isinstance(left, Array):
            index = self.eval(index_node, env)
            if not isinstance(index, Integer):
                raise InvalidObjectType('Int', index)
            length = len(left.elements)
            if index.value < 0 or index.value >= length:
                raise IndexOutOfBounds(index.value, length)
            return left.elements[index.value]
        if isinstance(left, Hash):
            index = self.eval(index_node, env)
            # a missing key is null, not an error
            return left.get(hash_key(index))
        raise IndexOperatorNotSupported(left)

    def apply_function(self, function: Object, args: List[Object]) -> Object:
        if isinstance(function, Builtin):
            if self.debug_level >= 1:
                self.debug(f"call builtin {function.name}({', '.join(a.inspect() for a in args)})")
            return function.fn(args)
        if isinstance(function, Function):
            if len(args) != len(function.parameters):
                raise InvalidParamCount(len(function.parameters), len(args))
            if self.debug_level >= 1:
                self.debug(f"call fn({', '.join(function.parameters)}) with ({', '.join(a.inspect() for a in args)})")
            call_env = Environment.new_child(function.env)
            for name, arg in zip(function.parameters, args):
                call_env.set(name, arg)
            result = self.eval_block(function.body, call_env)
            if isinstance(result, ReturnValue):
                return result.value
            return result
        raise InvalidObjectType('Function', function)


def run_program(source: str, debug_level: int = 0) -> Object:
    """Convenience function to parse and run a Monkey program from source."""
    program, errors = parse_program(source)
    if errors:
        raise errors[0]
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()


__all__ = ['Interpreter', 'EvalError', 'parse_program', 'run_program']
