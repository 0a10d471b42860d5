"""Parser for the Monkey language.

This is a hand-written recursive-descent parser that handles expressions
with precedence climbing (a Pratt parser). Each token type that can start
an expression has a *prefix* rule, and each token type that can continue
one has an *infix* rule together with a binding precedence. Calls `f(x)`
and index access `a[i]` are infix rules on `(` and `[` that bind tighter
than any arithmetic operator.

The parser never stops at the first syntax error. A statement that fails
to parse is recorded in `Parser.errors`, the parser skips ahead to the next
statement boundary and carries on, so one pass reports every problem it
can find. Callers must check `errors` before evaluating the result.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from lark import Token

from .ast import (
    Program, BlockStatement, Statement, Expression,
    LetStatement, ReturnStatement, ExpressionStatement,
    Identifier, IntegerLiteral, StringLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression, ArrayLiteral, HashLiteral, IndexExpression,
)
from .errors import ParseError, WrongTokenError, NoValidPrefixError
from .lexer import Lexer, EOF


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2        # == !=
    LESS_GREATER = 3  # < > <= >=
    SUM = 4           # + -
    PRODUCT = 5       # * /
    PREFIX = 6        # -x !x
    CALL = 7          # f(x)
    INDEX = 8         # a[i]


PRECEDENCES: Dict[str, Precedence] = {
    'EQ': Precedence.EQUALS,
    'NOT_EQ': Precedence.EQUALS,
    'LT': Precedence.LESS_GREATER,
    'GT': Precedence.LESS_GREATER,
    'LTE': Precedence.LESS_GREATER,
    'GTE': Precedence.LESS_GREATER,
    'PLUS': Precedence.SUM,
    'MINUS': Precedence.SUM,
    'ASTERISK': Precedence.PRODUCT,
    'SLASH': Precedence.PRODUCT,
    'LPAREN': Precedence.CALL,
    'LBRACKET': Precedence.INDEX,
}


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[ParseError] = []
        self.block_depth = 0
        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

        self.prefix_parse_fns: Dict[str, Callable[[], Expression]] = {
            'IDENT': self.parse_identifier,
            'INT': self.parse_integer_literal,
            'STRING': self.parse_string_literal,
            'TRUE': self.parse_boolean,
            'FALSE': self.parse_boolean,
            'BANG': self.parse_prefix_expression,
            'MINUS': self.parse_prefix_expression,
            'LPAREN': self.parse_grouped_expression,
            'IF': self.parse_if_expression,
            'FUNCTION': self.parse_function_literal,
            'LBRACKET': self.parse_array_literal,
            'LBRACE': self.parse_hash_literal,
        }
        self.infix_parse_fns: Dict[str, Callable[[Expression], Expression]] = {
            op: self.parse_infix_expression
            for op in ('EQ', 'NOT_EQ', 'LT', 'GT', 'LTE', 'GTE', 'PLUS', 'MINUS', 'ASTERISK', 'SLASH')
        }
        self.infix_parse_fns['LPAREN'] = self.parse_call_expression
        self.infix_parse_fns['LBRACKET'] = self.parse_index_expression

    # Token helpers
    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: str) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: str) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: str) -> Token:
        """Advance if the next token has the given type, otherwise fail."""
        if not self.peek_token_is(token_type):
            raise WrongTokenError(token_type, self.peek_token)
        self.next_token()
        return self.cur_token

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Statements
    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.cur_token_is(EOF):
            stmt = self.parse_statement_or_recover()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(statements)

    def parse_statement_or_recover(self) -> Optional[Statement]:
        try:
            return self.parse_statement()
        except ParseError as e:
            self.errors.append(e)
            self.synchronize()
            return None

    def synchronize(self) -> None:
        # Stop on the statement's semicolon. Inside a block also stop just
        # before a closing brace so the block can still finish; at the top
        # level a stray brace is skipped with the rest of the statement.
        while not (self.cur_token_is('SEMICOLON') or self.cur_token_is(EOF)
                   or self.peek_token_is(EOF)
                   or (self.block_depth > 0 and self.peek_token_is('RBRACE'))):
            self.next_token()

    def parse_statement(self) -> Statement:
        if self.cur_token_is('LET'):
            return self.parse_let_statement()
        if self.cur_token_is('RETURN'):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        name = self.expect_peek('IDENT')
        self.expect_peek('ASSIGN')
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is('SEMICOLON'):
            self.next_token()
        return LetStatement(str(name.value), value)

    def parse_return_statement(self) -> ReturnStatement:
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is('SEMICOLON'):
            self.next_token()
        return ReturnStatement(value)

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is('SEMICOLON'):
            self.next_token()
        return ExpressionStatement(expression)

    def parse_block_statement(self) -> BlockStatement:
        # cur_token is the opening brace
        statements: List[Statement] = []
        self.block_depth += 1
        try:
            self.next_token()
            while not self.cur_token_is('RBRACE'):
                if self.cur_token_is(EOF):
                    raise WrongTokenError('RBRACE', self.cur_token)
                stmt = self.parse_statement_or_recover()
                if stmt is not None:
                    statements.append(stmt)
                self.next_token()
        finally:
            self.block_depth -= 1
        return BlockStatement(statements)

    # Expressions (Pratt parser)
    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            raise NoValidPrefixError(self.cur_token)
        left = prefix()
        while not self.peek_token_is('SEMICOLON') and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(str(self.cur_token.value))

    def parse_integer_literal(self) -> Expression:
        value = int(self.cur_token.value)
        if value > INT64_MAX:
            raise ParseError(f"could not parse {self.cur_token.value} as a 64-bit integer", self.cur_token)
        return IntegerLiteral(value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(str(self.cur_token.value)[1:-1])

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token_is('TRUE'))

    def parse_prefix_expression(self) -> Expression:
        operator = str(self.cur_token.value)
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> Expression:
        operator = str(self.cur_token.value)
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(operator, left, right)

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek('RPAREN')
        return expression

    def parse_if_expression(self) -> Expression:
        self.expect_peek('LPAREN')
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek('RPAREN')
        self.expect_peek('LBRACE')
        consequence = self.parse_block_statement()
        alternative = None
        if self.peek_token_is('ELSE'):
            self.next_token()
            self.expect_peek('LBRACE')
            alternative = self.parse_block_statement()
        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> Expression:
        self.expect_peek('LPAREN')
        parameters = self.parse_function_parameters()
        self.expect_peek('LBRACE')
        body = self.parse_block_statement()
        return FunctionLiteral(parameters, body)

    def parse_function_parameters(self) -> List[str]:
        parameters: List[str] = []
        if self.peek_token_is('RPAREN'):
            self.next_token()
            return parameters
        parameters.append(str(self.expect_peek('IDENT').value))
        while self.peek_token_is('COMMA'):
            self.next_token()
            parameters.append(str(self.expect_peek('IDENT').value))
        self.expect_peek('RPAREN')
        return parameters

    def parse_call_expression(self, function: Expression) -> Expression:
        arguments = self.parse_expression_list('RPAREN')
        return CallExpression(function, arguments)

    def parse_index_expression(self, left: Expression) -> Expression:
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        self.expect_peek('RBRACKET')
        return IndexExpression(left, index)

    def parse_array_literal(self) -> Expression:
        return ArrayLiteral(self.parse_expression_list('RBRACKET'))

    def parse_expression_list(self, end: str) -> List[Expression]:
        # cur_token is the opening delimiter
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items
        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is('COMMA'):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))
        self.expect_peek(end)
        return items

    def parse_hash_literal(self) -> Expression:
        pairs: List[Tuple[Expression, Expression]] = []
        while not self.peek_token_is('RBRACE'):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            self.expect_peek('COLON')
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            pairs.append((key, value))
            if not self.peek_token_is('RBRACE'):
                self.expect_peek('COMMA')
        self.expect_peek('RBRACE')
        return HashLiteral(pairs)


def parse_program(source: str) -> Tuple[Program, List[ParseError]]:
    """Parse Monkey source into a program and the list of syntax errors found."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
