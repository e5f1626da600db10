"""Instruction tree definitions for bytetape programs.

A parsed program is a plain list of instruction nodes. Every node except
`Loop` is a leaf; a `Loop` owns the list of nodes that make up its body,
so a program is a forest of trees with no sharing and no cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Type

from .errors import NotAnInstructionError


@dataclass
class Node:
    """Base class for all instruction nodes."""
    pass


@dataclass
class Increment(Node):
    """`+`: add one to the current cell."""


@dataclass
class Decrement(Node):
    """`-`: subtract one from the current cell."""


@dataclass
class Forward(Node):
    """`>`: move to the next cell, growing the tape if needed."""


@dataclass
class Backward(Node):
    """`<`: move to the previous cell, stopping at cell 0."""


@dataclass
class Loop(Node):
    """`[...]`: repeat the body while the current cell is non-zero."""
    body: List[Node] = field(default_factory=list)


@dataclass
class LoopEnd(Node):
    """`]`: closing bracket marker.

    Only produced by `instruction_from_char`; never present in a parsed
    program.
    """


@dataclass
class Out(Node):
    """`.`: write the current cell as a character."""


@dataclass
class In(Node):
    """`,`: read one character into the current cell."""


INSTRUCTION_CHARS: Dict[str, Type[Node]] = {
    '+': Increment,
    '-': Decrement,
    '>': Forward,
    '<': Backward,
    '[': Loop,
    ']': LoopEnd,
    '.': Out,
    ',': In,
}


def instruction_from_char(c: str) -> Node:
    """Classify a single character as an instruction.

    `[` yields an empty `Loop` and `]` yields `LoopEnd`. Anything that is
    not one of the eight instruction characters raises
    `NotAnInstructionError`.
    """
    node_cls = INSTRUCTION_CHARS.get(c) if len(c) == 1 else None
    if node_cls is None:
        raise NotAnInstructionError(c)
    return node_cls()
