"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] <program_file>
    python -m monkey [-v...]

Options:
  -v            Increase debug verbosity (can be repeated)

With a program file, the program is parsed and evaluated and the final value
is printed unless it is null. Without one, an interactive prompt is started;
bindings made with `let` persist from one line to the next.

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .environment import Environment
from .errors import EvalError, ParseError
from .interpreter import Interpreter, parse_program
from .objects import Null

PROMPT = '>> '


def report_parse_errors(errors: List[ParseError], out: TextIO) -> None:
    print('parser errors:', file=out)
    for error in errors:
        print(f"\t{error}", file=out)


def run_file(program_file: Path, interpreter: Interpreter) -> int:
    with open(program_file, 'r', encoding='utf-8') as f:
        source = f.read()
    program, errors = parse_program(source)
    if errors:
        report_parse_errors(errors, sys.stderr)
        return 1
    try:
        result = interpreter.run(program)
    except EvalError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        return 1
    except RecursionError:
        print("Runtime error: maximum recursion depth exceeded", file=sys.stderr)
        return 1
    if not isinstance(result, Null):
        print(result.inspect())
    return 0


def repl(interpreter: Interpreter, stdin: TextIO, stdout: TextIO) -> None:
    env: Environment = interpreter.global_env
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write('\n')
            return
        if not line.strip():
            continue
        program, errors = parse_program(line)
        if errors:
            report_parse_errors(errors, stdout)
            continue
        try:
            result = interpreter.run(program, env)
        except EvalError as e:
            print(f"error: {e}", file=stdout)
            continue
        except RecursionError:
            print("error: maximum recursion depth exceeded", file=stdout)
            continue
        if not isinstance(result, Null):
            print(result.inspect(), file=stdout)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to execute')
    args = parser.parse_args(argv)

    interpreter = Interpreter(debug_level=args.v)
    try:
        if not args.program:
            repl(interpreter, sys.stdin, sys.stdout)
            return
        program_file = Path(args.program)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        status = run_file(program_file, interpreter)
    finally:
        interpreter.close()
    if status:
        sys.exit(status)


if __name__ == '__main__':
    main()
