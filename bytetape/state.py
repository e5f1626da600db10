from dataclasses import dataclass, field
from typing import List


@dataclass
class State:
    """Mutable context of a running program.

    `mem` is the tape: byte cells, starting with a single zero cell and
    growing one cell at a time to the right. `pointer` always indexes an
    existing cell. `outted` is set whenever `.` runs or `,` reads a
    character, so an interactive caller can tell that the terminal was
    written to. Nothing clears it except `reset_outted`.
    """
    mem: List[int] = field(default_factory=lambda: [0])
    pointer: int = 0
    outted: bool = False

    @property
    def current(self) -> int:
        return self.mem[self.pointer]

    def reset_outted(self) -> bool:
        """Clear the output flag and return its previous value."""
        outted = self.outted
        self.outted = False
        return outted
