from typing import Optional


class BytetapeError(Exception):
    """Base exception for errors raised by the bytetape toolchain."""


class NotAnInstructionError(BytetapeError):
    """Raised when a single character does not name an instruction."""
    def __init__(self, char: str):
        super().__init__(f"unrecognized character {char!r}: not an instruction")
        self.char = char


class UnbalancedBracketError(BytetapeError):
    """Raised by the parser for an unmatched ']' or an unclosed '['."""
    def __init__(self, reason: str, line: Optional[int] = None, column: Optional[int] = None):
        where = f" at line {line}, column {column}" if line is not None else ''
        super().__init__(f"{reason}{where}")
        self.reason = reason
        self.line = line
        self.column = column
