"""Interpreter for bytetape programs.

This module walks the instruction tree produced by the parser against a
`State`. Execution never raises: cell arithmetic wraps at 8 bits, the tape
grows to the right on demand, moving left from cell 0 does nothing, and
running out of input leaves the current cell alone.

Loops are executed by structural recursion, so the Python call depth
follows the loop nesting depth of the source program.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .ast import Node, Increment, Decrement, Forward, Backward, Loop, LoopEnd, Out, In
from .codec import to_char, from_char
from .parser import parse_program
from .state import State


class Interpreter:
    """Core interpreter that executes an instruction tree."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None
        # None means the sys streams as they are when an instruction runs
        self.stdin = stdin
        self.stdout = stdout

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: List[Node], state: Optional[State] = None) -> State:
        if state is None:
            state = State()
        if self.debug_level >= 1:
            self.debug(f"run {len(program)} instructions from pointer {state.pointer}")
        self.execute_block(program, state)
        if self.debug_level >= 1:
            self.debug(f"done: pointer={state.pointer} cells={len(state.mem)} outted={state.outted}")
        return state

    def execute_block(self, nodes: List[Node], state: State):
        for node in nodes:
            self.execute(node, state)

    def execute(self, node: Node, state: State):
        if self.debug_level >= 3 and not isinstance(node, Loop):
            self.debug(f"{type(node).__name__} @ {state.pointer} = {state.current}")

        if isinstance(node, Increment):
            state.mem[state.pointer] = (state.mem[state.pointer] + 1) & 0xFF
            return
        if isinstance(node, Decrement):
            state.mem[state.pointer] = (state.mem[state.pointer] - 1) & 0xFF
            return
        if isinstance(node, Forward):
            if state.pointer + 1 == len(state.mem):
                state.mem.append(0)
            state.pointer += 1
            return
        if isinstance(node, Backward):
            if state.pointer != 0:
                state.pointer -= 1
            return
        if isinstance(node, Loop):
            self.execute_loop(node, state)
            return
        if isinstance(node, Out):
            self.write_cell(state)
            return
        if isinstance(node, In):
            self.read_cell(state)
            return
        if isinstance(node, LoopEnd):
            return
        raise TypeError(f"unsupported node {type(node).__name__}")

    def execute_loop(self, loop: Loop, state: State):
        # The body always runs once; the cell is checked after each pass.
        iterations = 0
        while True:
            self.execute_block(loop.body, state)
            iterations += 1
            if state.current == 0:
                break
        if self.debug_level >= 2:
            self.debug(f"loop of {len(loop.body)} instructions ran {iterations} times")

    def write_cell(self, state: State):
        state.outted = True
        out = self.stdout if self.stdout is not None else sys.stdout
        try:
            out.write(to_char(state.current))
            out.flush()
        except (OSError, ValueError):
            if self.debug_level >= 2:
                self.debug("output stream unwritable; character dropped")

    def read_cell(self, state: State):
        inp = self.stdin if self.stdin is not None else sys.stdin
        try:
            c = inp.read(1)
        except (OSError, ValueError):
            if self.debug_level >= 2:
                self.debug("input stream unreadable; cell unchanged")
            return
        if not c:
            if self.debug_level >= 2:
                self.debug("end of input; cell unchanged")
            return
        state.mem[state.pointer] = from_char(c)
        state.outted = True


def parse(source: str) -> List[Node]:
    """Parse source text into instruction nodes."""
    return parse_program(source)


def execute(program: List[Node], state: State, debug_level: int = 0) -> State:
    """Execute already parsed instructions against an existing state."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program, state)
    finally:
        interpreter.close()


def run(source: str, debug_level: int = 0) -> State:
    """Convenience function to parse and run a program on a fresh state."""
    return execute(parse_program(source), State(), debug_level=debug_level)


def run_from_state(source: str, state: State, debug_level: int = 0) -> State:
    """Parse a program and run it on top of an existing state."""
    return execute(parse_program(source), state, debug_level=debug_level)
