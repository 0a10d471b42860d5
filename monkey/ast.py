"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser produces these nodes and the interpreter walks them. Every node
renders to a canonical, fully parenthesised string, which is how the parser
tests check operator grouping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


class Expression(Node):
    pass


class Statement(Node):
    pass


@dataclass
class BlockStatement(Node):
    statements: List[Statement]

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)


# The whole program is just the outermost block.
Program = BlockStatement


###############################################################################
# Statements
###############################################################################


@dataclass
class LetStatement(Statement):
    name: str
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


###############################################################################
# Expressions
###############################################################################


@dataclass
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    operator: str
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if {self.condition} {{ {self.consequence} }}"
        if self.alternative is not None:
            out += f" else {{ {self.alternative} }}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: List[str]
    body: BlockStatement

    def __str__(self) -> str:
        return f"fn({', '.join(self.parameters)}) {{ {self.body} }}"


@dataclass
class CallExpression(Expression):
    function: Expression
    arguments: List[Expression]

    def __str__(self) -> str:
        return f"{self.function}({', '.join(str(a) for a in self.arguments)})"


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass
class HashLiteral(Expression):
    pairs: List[Tuple[Expression, Expression]]  # written order

    def __str__(self) -> str:
        return '{' + ', '.join(f"{k}: {v}" for k, v in self.pairs) + '}'


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"
