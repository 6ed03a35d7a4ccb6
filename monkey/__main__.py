"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv]                  start the REPL
    python -m monkey [-v...] <program_file>
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Evaluate a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. When a program file is evaluated, its final
value is printed unless it is null.
"""

import argparse
import cmd
import json
import sys
from pathlib import Path
from typing import Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .environment import Environment
from .errors import MonkeyError
from .interpreter import Interpreter
from .parser import parse_program
from .types import NULL, to_string


class Repl(cmd.Cmd):
    """Read-eval-print loop. Bindings persist across input lines."""
    intro = "Monkey interpreter\nType 'exit' or press Ctrl-D to quit."
    prompt = ">> "

    def __init__(self, interpreter: Interpreter, env: Optional[Environment] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter
        self.env = env if env is not None else interpreter.global_env

    def parseline(self, line):
        """Only a bare `exit` or end of input is a command; anything else is Monkey code."""
        line = line.strip()
        if line in ('exit', 'EOF'):
            return line, '', line
        return None, None, line

    def default(self, line):
        """Evaluates a line of Monkey code."""
        program, errors = parse_program(line)
        if errors:
            for err in errors:
                print(f"\t{err}")
            return
        try:
            result = self.interpreter.run(program, self.env)
        except (MonkeyError, RecursionError) as e:
            print(f"Runtime error: {e}")
            return
        print(to_string(result))

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str) -> Program:
    program, errors = parse_program(source)
    if errors:
        print("Parse errors:", file=sys.stderr)
        for err in errors:
            print(f"\t{err}", file=sys.stderr)
        sys.exit(1)
    return program


def evaluate_or_exit(program: Program, interpreter: Interpreter) -> None:
    try:
        result = interpreter.run(program)
    except (MonkeyError, RecursionError) as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()
    if result is not NULL:
        print(to_string(result))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='evaluate AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to evaluate')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(args.emit_ast))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Evaluate from AST JSON
    if args.ast:
        source = read_source(args.ast)
        try:
            ast_program = ast_from_obj(json.loads(source))
        except (ValueError, TypeError, KeyError) as e:
            print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
            sys.exit(1)
        evaluate_or_exit(ast_program, Interpreter(debug_level=args.v))
        return

    # No file: interactive session
    if not args.program:
        interpreter = Interpreter(debug_level=args.v)
        try:
            Repl(interpreter).cmdloop()
        finally:
            interpreter.close()
        return

    ast_program = parse_or_exit(read_source(args.program))
    evaluate_or_exit(ast_program, Interpreter(debug_level=args.v))


if __name__ == '__main__':
    main()
