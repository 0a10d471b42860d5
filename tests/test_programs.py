import io
from pathlib import Path

import pytest

from monkey.__main__ import main, repl
from monkey.interpreter import Interpreter


EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


@pytest.mark.parametrize('name, expected', [
    ('closures.monkey', '5'),
    ('fibonacci.monkey', '610'),
    ('map_reduce.monkey', '20'),
    ('people.monkey', 'Alice and Anna'),
])
def test_example_programs(name, expected, capsys):
    main([str(EXAMPLES / name)])
    out = capsys.readouterr().out.strip()
    assert out == expected


def test_runtime_error_exits_with_status_1(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(EXAMPLES / 'type_error.monkey')])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith('Runtime error: type mismatch: Int + Bool')


def test_parse_errors_are_all_reported(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(EXAMPLES / 'syntax_error.monkey')])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err.splitlines()
    assert err[0] == 'parser errors:'
    assert len(err) == 3


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'nope.monkey')])
    assert 'not found' in capsys.readouterr().err


def test_null_result_prints_nothing(tmp_path, capsys):
    program = tmp_path / 'let.monkey'
    program.write_text('let x = 1;', encoding='utf-8')
    main([str(program)])
    assert capsys.readouterr().out == ''


def test_repl_keeps_bindings_between_lines():
    stdin = io.StringIO('let a = 5;\nlet b = fn(x) { x * a };\nb(2)\nfoo\nlet = 1;\n\n"done"\n')
    stdout = io.StringIO()
    repl(Interpreter(), stdin, stdout)
    lines = stdout.getvalue().split('>> ')
    # one prompt per line read, plus the prompt answered by EOF
    assert lines[3] == '10\n'
    assert lines[4] == 'error: identifier not found: foo\n'
    assert lines[5].startswith('parser errors:\n\texpected IDENT token')
    assert lines[-2] == 'done\n'
