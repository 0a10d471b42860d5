import pytest

from monkey.ast import (
    ArrayLiteral, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
    HashLiteral, Identifier, IfExpression, IndexExpression, InfixExpression, IntegerLiteral,
    LetStatement, PrefixExpression, ReturnStatement, StringLiteral,
)
from monkey.errors import NoValidPrefixError, ParseError, WrongTokenError
from monkey.parser import parse_program


def parse_ok(source):
    program, errors = parse_program(source)
    assert errors == [], [str(e) for e in errors]
    return program


def single_expression(source):
    program = parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def test_let_statements():
    program = parse_ok("let x = 5;\nlet y = true\nlet foobar = y;")
    assert program.statements == [
        LetStatement('x', IntegerLiteral(5)),
        LetStatement('y', BooleanLiteral(True)),
        LetStatement('foobar', Identifier('y')),
    ]


def test_return_statements_without_semicolons():
    program = parse_ok("return (5)return 10;return 838383;")
    assert len(program.statements) == 3
    assert all(isinstance(s, ReturnStatement) for s in program.statements)
    assert program.statements[0].value == IntegerLiteral(5)


def test_identifier_and_literals():
    assert single_expression('foobar') == Identifier('foobar')
    assert single_expression('5;') == IntegerLiteral(5)
    assert single_expression('"foo bar"') == StringLiteral('foo bar')
    assert single_expression('false') == BooleanLiteral(False)


@pytest.mark.parametrize('source, operator, operand', [
    ('!5', '!', IntegerLiteral(5)),
    ('-15', '-', IntegerLiteral(15)),
    ('!true', '!', BooleanLiteral(True)),
    ('!false', '!', BooleanLiteral(False)),
])
def test_prefix_expressions(source, operator, operand):
    assert single_expression(source) == PrefixExpression(operator, operand)


@pytest.mark.parametrize('source, left, operator, right', [
    ('5 + 5', 5, '+', 5),
    ('5 - 5', 5, '-', 5),
    ('5 * 5', 5, '*', 5),
    ('5 / 5', 5, '/', 5),
    ('5 > 5', 5, '>', 5),
    ('5 >= 5', 5, '>=', 5),
    ('5 < 5', 5, '<', 5),
    ('5 <= 5', 5, '<=', 5),
    ('5 == 5', 5, '==', 5),
    ('5 != 5', 5, '!=', 5),
])
def test_infix_expressions(source, left, operator, right):
    assert single_expression(source) == InfixExpression(operator, IntegerLiteral(left), IntegerLiteral(right))


def test_string_infix_expressions():
    assert single_expression('"foo" + "bar"') == InfixExpression('+', StringLiteral('foo'), StringLiteral('bar'))


@pytest.mark.parametrize('source, expected', [
    ('-5 * b', '((-5) * b)'),
    ('!-5', '(!(-5))'),
    ('!-5 * 4', '((!(-5)) * 4)'),
    ('a + b + c', '((a + b) + c)'),
    ('a + b - c', '((a + b) - c)'),
    ('a * b * c', '((a * b) * c)'),
    ('a * b / c', '((a * b) / c)'),
    ('a + b * c + d / e - f', '(((a + (b * c)) + (d / e)) - f)'),
    ('3+4; -5 * 5', '(3 + 4)((-5) * 5)'),
    ('5>4==3<4', '((5 > 4) == (3 < 4))'),
    ('3 + 4  * 5 == 3 * 1 + 4 * 5', '((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))'),
    ('3 > 5 == false', '((3 > 5) == false)'),
    ('1 + (2 + 3) +4 ', '((1 + (2 + 3)) + 4)'),
    ('(5+5)*2', '((5 + 5) * 2)'),
    ('2 / (5 + 5)', '(2 / (5 + 5))'),
    ('!(true == true)', '(!(true == true))'),
    ('a + add(b * c) + d', '((a + add((b * c))) + d)'),
    ('add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))', 'add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))'),
    ('add(a + b + c * d / f + g)', 'add((((a + b) + ((c * d) / f)) + g))'),
    ('a * [1, 2, 3, 4][b * c] * d', '((a * ([1, 2, 3, 4][(b * c)])) * d)'),
    ('add(a * b[2], b[1], 2 * [1, 2][1])', 'add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))'),
    ('a <= b == c >= d', '((a <= b) == (c >= d))'),
])
def test_operator_precedence(source, expected):
    assert str(parse_ok(source)) == expected


def test_if_expression():
    expr = single_expression('if (x < y) { x }')
    assert isinstance(expr, IfExpression)
    assert expr.condition == InfixExpression('<', Identifier('x'), Identifier('y'))
    assert expr.consequence.statements == [ExpressionStatement(Identifier('x'))]
    assert expr.alternative is None


def test_if_else_expression():
    expr = single_expression('if (x < y) { x } else { 10 }')
    assert expr.alternative.statements == [ExpressionStatement(IntegerLiteral(10))]


def test_function_literal():
    expr = single_expression('fn(x, y) { x + y; }')
    assert isinstance(expr, FunctionLiteral)
    assert expr.parameters == ['x', 'y']
    assert expr.body.statements == [ExpressionStatement(InfixExpression('+', Identifier('x'), Identifier('y')))]


@pytest.mark.parametrize('source, expected', [
    ('fn() {};', []),
    ('fn(x) {};', ['x']),
    ('fn(x, y, z) {};', ['x', 'y', 'z']),
])
def test_function_parameters(source, expected):
    assert single_expression(source).parameters == expected


def test_call_expression():
    expr = single_expression('add(1, 2 * 3, 4 + 5, "test")')
    assert isinstance(expr, CallExpression)
    assert expr.function == Identifier('add')
    assert expr.arguments == [
        IntegerLiteral(1),
        InfixExpression('*', IntegerLiteral(2), IntegerLiteral(3)),
        InfixExpression('+', IntegerLiteral(4), IntegerLiteral(5)),
        StringLiteral('test'),
    ]


def test_calling_a_function_literal():
    expr = single_expression('fn(x) { x }(5)')
    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, FunctionLiteral)


def test_array_literals():
    assert single_expression('[]') == ArrayLiteral([])
    assert single_expression('[1, "foo", 2 + 3, 3 * 4]') == ArrayLiteral([
        IntegerLiteral(1),
        StringLiteral('foo'),
        InfixExpression('+', IntegerLiteral(2), IntegerLiteral(3)),
        InfixExpression('*', IntegerLiteral(3), IntegerLiteral(4)),
    ])


def test_index_expression():
    assert single_expression('myArray[1 + 1]') == IndexExpression(
        Identifier('myArray'), InfixExpression('+', IntegerLiteral(1), IntegerLiteral(1)),
    )


def test_hash_literals():
    assert single_expression('{}') == HashLiteral([])
    assert single_expression('{"foo": 3, "bar": 5}') == HashLiteral([
        (StringLiteral('foo'), IntegerLiteral(3)),
        (StringLiteral('bar'), IntegerLiteral(5)),
    ])
    expr = single_expression('{"one": 0 + 1, true: 10 - 8, 3: 15 / 5}')
    assert [str(k) for k, _ in expr.pairs] == ['"one"', 'true', '3']
    assert [str(v) for _, v in expr.pairs] == ['(0 + 1)', '(10 - 8)', '(15 / 5)']


def test_wrong_token_error_carries_expected_and_actual():
    _, errors = parse_program('let = 5;')
    assert len(errors) == 1
    assert isinstance(errors[0], WrongTokenError)
    assert errors[0].expected == 'IDENT'
    assert errors[0].actual == 'ASSIGN'
    assert errors[0].line == 1


def test_no_valid_prefix():
    _, errors = parse_program('+ 5;')
    assert isinstance(errors[0], NoValidPrefixError)
    assert errors[0].token_type == 'PLUS'


def test_illegal_token_has_no_prefix():
    _, errors = parse_program('@')
    assert isinstance(errors[0], NoValidPrefixError)
    assert errors[0].token_type == 'ILLEGAL'


def test_errors_accumulate_across_statements():
    program, errors = parse_program('let = 5;\nlet x 10;\nlet 838383;\nlet ok = 1;')
    assert len(errors) == 3
    assert all(isinstance(e, WrongTokenError) for e in errors)
    assert [e.line for e in errors] == [1, 2, 3]
    assert program.statements == [LetStatement('ok', IntegerLiteral(1))]


def test_errors_inside_blocks_do_not_end_the_block():
    program, errors = parse_program('if (true) { let = 1; 2 } 3')
    assert len(errors) == 1
    assert len(program.statements) == 2
    assert program.statements[0].expression.consequence.statements == [ExpressionStatement(IntegerLiteral(2))]


def test_errors_inside_blocks_without_semicolons():
    program, errors = parse_program('if (true) { let = 1 } 3')
    assert len(errors) == 1
    assert len(program.statements) == 2


def test_stray_closing_brace_at_top_level_is_skipped():
    program, errors = parse_program('let = 1 }; let y = 2;')
    assert len(errors) == 1
    assert isinstance(errors[0], WrongTokenError)
    assert program.statements == [LetStatement('y', IntegerLiteral(2))]


def test_unterminated_block():
    _, errors = parse_program('fn(x) { x')
    assert errors
    assert isinstance(errors[-1], WrongTokenError)
    assert errors[-1].expected == 'RBRACE'


def test_integer_literal_out_of_range():
    _, errors = parse_program('92233720368547758070')
    assert len(errors) == 1
    assert type(errors[0]) is ParseError
