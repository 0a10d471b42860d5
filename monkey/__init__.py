# Monkey language package
# This package provides a parser and tree-walking interpreter for the Monkey language.
from .environment import Environment
from .errors import EvalError, ParseError
from .interpreter import Interpreter, parse_program, run_program

__all__ = [
    'Environment',
    'EvalError',
    'Interpreter',
    'ParseError',
    'parse_program',
    'run_program',
]
