"""Human-readable listings of bytecode chunks."""

from __future__ import annotations

import sys
from typing import TextIO

from .chunk import Chunk, OpCode, Value


def format_value(value: Value) -> str:
    """Render a value the way the interpreter prints it."""
    return "%g" % value


def print_value(value: Value, out: TextIO | None = None) -> None:
    """Write a value without a trailing newline."""
    (out or sys.stdout).write(format_value(value))


def disassemble_chunk(chunk: Chunk, name: str, out: TextIO | None = None) -> None:
    """Write a listing of every instruction in the chunk."""
    out = out or sys.stdout
    out.write(f"== {name} ==\n")
    offset = 0
    while offset < len(chunk):
        offset = disassemble_instruction(chunk, offset, out)


def disassemble_instruction(chunk: Chunk, offset: int, out: TextIO | None = None) -> int:
    """Write one instruction and return the offset of the next one."""
    out = out or sys.stdout
    out.write("%04d" % offset)
    if offset > 0 and chunk.lines[offset] == chunk.lines[offset - 1]:
        out.write("   | ")
    else:
        out.write("%4d " % chunk.lines[offset])

    instruction = chunk.code[offset]
    try:
        op = OpCode(instruction)
    except ValueError:
        out.write(f"Unknown opcode {instruction}\n")
        return offset + 1

    name = f"OP_{op.name}"
    if op is OpCode.CONSTANT:
        constant = chunk.code[offset + 1]
        out.write("%-16s %4d '" % (name, constant))
        out.write(format_value(chunk.constants[constant]))
        out.write("'\n")
        return offset + 2

    out.write(f"{name}\n")
    return offset + 1