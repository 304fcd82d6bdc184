"""Stack-based virtual machine executing compiled chunks."""

from __future__ import annotations

import math
import operator
import sys
from enum import Enum
from typing import Callable, TextIO

from .chunk import Chunk, OpCode, Value
from .compiler import Compiler
from .debug import disassemble_instruction, format_value


class InterpretResult(Enum):
    """Outcome of interpreting a piece of source."""

    OK = 0
    COMPILE_ERROR = 1
    RUNTIME_ERROR = 2


def _divide(a: Value, b: Value) -> Value:
    """IEEE division: a zero divisor yields an infinity or NaN."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


_BINARY: dict[OpCode, Callable[[Value, Value], Value]] = {
    OpCode.ADD: operator.add,
    OpCode.SUBTRACT: operator.sub,
    OpCode.MULTIPLY: operator.mul,
    OpCode.DIVIDE: _divide,
}


class VM:
    """Compiles and runs source, writing results to an output stream."""

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        print_code: bool = True,
        trace_execution: bool = True,
    ) -> None:
        self._out_stream = out
        self._err_stream = err
        self.print_code = print_code
        self.trace_execution = trace_execution
        self._stack: list[Value] = []

    @property
    def _out(self) -> TextIO:
        return self._out_stream or sys.stdout

    def interpret(self, source: str) -> InterpretResult:
        """Compile and run source."""
        chunk = Chunk()
        compiler = Compiler(
            out=self._out_stream, err=self._err_stream, print_code=self.print_code
        )
        if not compiler.compile(source, chunk):
            return InterpretResult.COMPILE_ERROR
        return self._run(chunk)

    def reset_stack(self) -> None:
        """Discard every value on the stack."""
        self._stack.clear()

    def push(self, value: Value) -> None:
        """Push a value onto the stack."""
        self._stack.append(value)

    def pop(self) -> Value:
        """Remove and return the top value; IndexError if the stack is empty."""
        return self._stack.pop()

    def _trace(self, chunk: Chunk, ip: int) -> None:
        out = self._out
        slots = "".join(f"[ {format_value(value)} ]" for value in self._stack)
        out.write(f"          {slots}\n")
        disassemble_instruction(chunk, ip, out)

    def _run(self, chunk: Chunk) -> InterpretResult:
        code = chunk.code
        ip = 0
        while True:
            if self.trace_execution:
                self._trace(chunk, ip)
            instruction = code[ip]
            ip += 1

            if instruction == OpCode.CONSTANT:
                self.push(chunk.constants[code[ip]])
                ip += 1
            elif instruction in _BINARY:
                b = self.pop()
                a = self.pop()
                self.push(_BINARY[OpCode(instruction)](a, b))
            elif instruction == OpCode.NEGATE:
                self.push(-self.pop())
            elif instruction == OpCode.RETURN:
                self._out.write(format_value(self.pop()) + "\n")
                return InterpretResult.OK