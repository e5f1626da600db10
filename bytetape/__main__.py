"""CLI entry point for the bytetape interpreter.

Usage:
    python -m bytetape [-v|-vv|-vvv] <program_file>
    python -m bytetape [-v...] --emit-ast <program_file>
    python -m bytetape [-v...] --ast <ast_json_file>
    python -m bytetape [-v...]

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given program file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive session is started. Each line is
run against the same tape; `:mem` shows the tape, `:reset` starts over
and `:quit` (or end of input) leaves.

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import builtins
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast import Node
from .ast_json import ast_to_obj, ast_from_obj
from .errors import BytetapeError
from .interpreter import Interpreter
from .parser import parse_program
from .state import State

PROMPT = 'bf> '


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str) -> List[Node]:
    try:
        return parse_program(source)
    except BytetapeError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def repl(interpreter: Interpreter) -> None:
    state = State()
    while True:
        try:
            line = builtins.input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return
        command = line.strip()
        if command == ':quit':
            return
        if command == ':reset':
            state = State()
            continue
        if command == ':mem':
            print(f"pointer={state.pointer} mem={state.mem}")
            continue
        try:
            program = parse_program(line)
        except BytetapeError as e:
            print(f"Syntax error: {e}", file=sys.stderr)
            continue
        try:
            interpreter.run(program, state)
        except KeyboardInterrupt:
            state.reset_outted()
            print()
            continue
        # Output has no trailing newline of its own; end it before the next prompt
        if state.reset_outted():
            print()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="bytetape interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_or_exit(read_source(program_file))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, indent=2)
        print(str(out_path))
        return

    if args.ast:
        ast_path = Path(args.ast)
        try:
            program = ast_from_obj(json.loads(read_source(ast_path)))
            if not isinstance(program, list):
                program = [program]
        except (TypeError, ValueError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.program:
        program = parse_or_exit(read_source(Path(args.program)))
    else:
        program = None

    interpreter = Interpreter(debug_level=args.v)
    try:
        if program is None:
            repl(interpreter)
        else:
            interpreter.run(program)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
