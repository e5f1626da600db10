# bytetape package
# This package provides a parser and interpreter for the eight-instruction tape language.
from .ast import instruction_from_char
from .codec import to_char, from_char
from .errors import BytetapeError, NotAnInstructionError, UnbalancedBracketError
from .interpreter import Interpreter, parse, execute, run, run_from_state
from .state import State

__all__ = [
    'parse',
    'execute',
    'run',
    'run_from_state',
    'Interpreter',
    'State',
    'instruction_from_char',
    'to_char',
    'from_char',
    'BytetapeError',
    'NotAnInstructionError',
    'UnbalancedBracketError',
]
