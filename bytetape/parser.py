"""Parser for bytetape programs.

The source is fed into a Lark LALR parser whose grammar knows exactly the
eight instruction characters. Every other character is matched by an
ignored COMMENT terminal, so prose, whitespace and line breaks between
instructions never reach the parser. The resulting parse tree is turned
into instruction nodes (see `ast.py`) by `InstructionTransformer`.

Brackets must balance. An unmatched `]` or a `[` still open at the end of
the source raises `UnbalancedBracketError` with the position of the
offending bracket.

The `parse_program` function is the public entry point and returns the
list of top-level instruction nodes.
"""

from __future__ import annotations

from typing import List, Tuple

from lark import Lark, Transformer
from lark.exceptions import UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .ast import Node, Increment, Decrement, Forward, Backward, Loop, Out, In
from .errors import UnbalancedBracketError


BYTETAPE_GRAMMAR = r"""
    start: _instruction*

    _instruction: increment
                | decrement
                | forward
                | backward
                | loop
                | output
                | input

    increment: "+"
    decrement: "-"
    forward: ">"
    backward: "<"
    output: "."
    input: ","
    loop: "[" _instruction* "]"

    // Anything that is not an instruction is a comment
    COMMENT: /[^+\-<>\[\].,]+/
    %ignore COMMENT
"""


BYTETAPE_PARSER = Lark(
    BYTETAPE_GRAMMAR,
    parser='lalr',
    maybe_placeholders=False,
    lexer='basic',
)


class InstructionTransformer(Transformer):
    """Transforms the raw parse tree into instruction nodes."""

    def start(self, items):
        return list(items)

    def loop(self, items):
        return Loop(body=list(items))

    def increment(self, _):
        return Increment()

    def decrement(self, _):
        return Decrement()

    def forward(self, _):
        return Forward()

    def backward(self, _):
        return Backward()

    def output(self, _):
        return Out()

    def input(self, _):
        return In()


def _innermost_unclosed(source: str) -> Tuple[int, int]:
    """Return the 1-based (line, column) of the last '[' left open."""
    open_brackets: List[Tuple[int, int]] = []
    line, column = 1, 1
    for c in source:
        if c == '[':
            open_brackets.append((line, column))
        elif c == ']' and open_brackets:
            open_brackets.pop()
        if c == '\n':
            line += 1
            column = 1
        else:
            column += 1
    return open_brackets[-1] if open_brackets else (line, column)


def parse_program(source: str) -> List[Node]:
    """Parse source text into a list of top-level instruction nodes.

    Characters other than `+ - > < [ ] . ,` are skipped. Raises
    `UnbalancedBracketError` if the brackets do not pair up.
    """
    try:
        tree = BYTETAPE_PARSER.parse(source)
    except UnexpectedInput as e:
        at_end = isinstance(e, UnexpectedEOF) or (
            isinstance(e, UnexpectedToken) and e.token.type == '$END'
        )
        if at_end:
            line, column = _innermost_unclosed(source)
            raise UnbalancedBracketError("unclosed '['", line, column) from e
        raise UnbalancedBracketError("unmatched ']'", e.line, e.column) from e
    return InstructionTransformer().transform(tree)
