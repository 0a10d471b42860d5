"""Tokenizer for the Monkey language.

The terminals are declared as a Lark grammar and scanned with Lark's basic
lexer. The parser pulls tokens one at a time through `Lexer.next_token`;
once the input is exhausted an EOF token is returned on every call.

Keywords are declared as plain string terminals. Lark recognises a string
terminal that is also matched by IDENT only when the whole identifier equals
it, so `letter` stays an identifier while `let` becomes LET.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark, Token


MONKEY_TOKENS = r"""
    start: token*

    ?token: LET | FUNCTION | IF | ELSE | RETURN | TRUE | FALSE
          | IDENT | INT | STRING
          | EQ | NOT_EQ | LTE | GTE | LT | GT | ASSIGN | BANG
          | PLUS | MINUS | ASTERISK | SLASH
          | COMMA | SEMICOLON | COLON
          | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
          | ILLEGAL

    // Keywords
    LET.1: "let"
    FUNCTION.1: "fn"
    IF.1: "if"
    ELSE.1: "else"
    RETURN.1: "return"
    TRUE.1: "true"
    FALSE.1: "false"

    // Identifiers and literals
    IDENT.1: /[A-Za-z_][A-Za-z0-9_]*/
    INT.1: /[0-9]+/
    STRING.1: /"[^"]*"/

    // Operators
    EQ.1: "=="
    NOT_EQ.1: "!="
    LTE.1: "<="
    GTE.1: ">="
    LT.1: "<"
    GT.1: ">"
    ASSIGN.1: "="
    BANG.1: "!"
    PLUS.1: "+"
    MINUS.1: "-"
    ASTERISK.1: "*"
    SLASH.1: "/"

    // Punctuation
    COMMA.1: ","
    SEMICOLON.1: ";"
    COLON.1: ":"
    LPAREN.1: "("
    RPAREN.1: ")"
    LBRACE.1: "{"
    RBRACE.1: "}"
    LBRACKET.1: "["
    RBRACKET.1: "]"

    // Anything else is a single illegal character; the lower priority keeps
    // it behind every real terminal.
    ILLEGAL: /[^\s]/

    %import common.WS
    %ignore WS
"""


MONKEY_LEXER = Lark(
    MONKEY_TOKENS,
    parser='lalr',
    lexer='basic',
)


EOF = 'EOF'


def _scan(source: str) -> Iterator[Token]:
    last = None
    for token in MONKEY_LEXER.lex(source):
        last = token
        yield token
    line = last.end_line if last is not None and last.end_line is not None else 1
    column = last.end_column if last is not None and last.end_column is not None else 1
    while True:
        yield Token(EOF, '', line=line, column=column)


class Lexer:
    """Pull-based token source over a piece of Monkey source text."""
    def __init__(self, source: str):
        self.source = source
        self._tokens = _scan(source)

    def next_token(self) -> Token:
        return next(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Return every token in `source`, ending with a single EOF token."""
    return list(Lexer(source))
