"""Bytecode chunks: instruction bytes, source lines and a constant pool."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

Value = float


class OpCode(IntEnum):
    """Instructions understood by the virtual machine."""

    CONSTANT = 0
    ADD = 1
    SUBTRACT = 2
    MULTIPLY = 3
    DIVIDE = 4
    NEGATE = 5
    RETURN = 6


@dataclass
class Chunk:
    """A sequence of bytecode with per-byte line numbers and constants."""

    code: bytearray = field(default_factory=bytearray)
    lines: list[int] = field(default_factory=list)
    constants: list[Value] = field(default_factory=list)

    def write(self, byte: int, line: int) -> None:
        """Append one byte of code, remembering the source line it came from."""
        self.code.append(int(byte))
        self.lines.append(line)

    def add_constant(self, value: Value) -> int:
        """Add a value to the constant pool and return its index."""
        self.constants.append(value)
        return len(self.constants) - 1

    def __len__(self) -> int:
        return len(self.code)