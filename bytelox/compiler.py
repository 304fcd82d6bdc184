"""Single-pass Pratt compiler from expression source to bytecode."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, TextIO

from .chunk import Chunk, OpCode, Value
from .debug import disassemble_chunk
from .scanner import Scanner, Token, TokenType

_MAX_CONSTANT_INDEX = 255


class Precedence(IntEnum):
    """Binding strength of operators, lowest first."""

    NONE = 0
    ASSIGNMENT = 1  # =
    OR = 2  # or
    AND = 3  # and
    EQUALITY = 4  # == !=
    COMPARISON = 5  # < > <= >=
    TERM = 6  # + -
    FACTOR = 7  # * /
    UNARY = 8  # ! -
    CALL = 9  # . ()
    PRIMARY = 10


ParseFn = Callable[["Compiler"], None]


@dataclass(frozen=True)
class ParseRule:
    """How a token parses in prefix and infix position."""

    prefix: Optional[ParseFn]
    infix: Optional[ParseFn]
    precedence: Precedence


_NO_TOKEN = Token(TokenType.EOF, "", 0)


class Compiler:
    """Compiles one expression into a chunk, reporting errors to a stream."""

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        print_code: bool = True,
    ) -> None:
        self._out_stream = out
        self._err_stream = err
        self.print_code = print_code
        self._scanner: Scanner | None = None
        self._chunk: Chunk | None = None
        self._current = _NO_TOKEN
        self._previous = _NO_TOKEN
        self.had_error = False
        self.panic_mode = False

    @property
    def _out(self) -> TextIO:
        return self._out_stream or sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._err_stream or sys.stderr

    def compile(self, source: str, chunk: Chunk) -> bool:
        """Compile source into chunk; return False if any error was reported."""
        self._scanner = Scanner(source)
        self._chunk = chunk
        self.had_error = False
        self.panic_mode = False

        self._advance()
        self._expression()
        self._consume(TokenType.EOF, "Expect end of expression.")
        self._end_compiler()
        return not self.had_error

    # Token handling.

    def _advance(self) -> None:
        self._previous = self._current
        while True:
            self._current = self._scanner.scan_token()
            if self._current.type is not TokenType.ERROR:
                break
            self._error_at_current(self._current.lexeme)

    def _consume(self, token_type: TokenType, message: str) -> None:
        if self._current.type is token_type:
            self._advance()
            return
        self._error_at_current(message)

    # Error reporting.

    def _error_at_current(self, message: str) -> None:
        self._error_at(self._current, message)

    def _error(self, message: str) -> None:
        self._error_at(self._previous, message)

    def _error_at(self, token: Token, message: str) -> None:
        if self.panic_mode:
            return
        self.panic_mode = True

        parts = [f"[line {token.line}] Error"]
        if token.type is TokenType.EOF:
            parts.append(" at end")
        elif token.type is not TokenType.ERROR:
            parts.append(f" at '{token.lexeme}'")
        parts.append(f": {message}\n")
        self._err.write("".join(parts))
        self.had_error = True

    # Code emission.

    def _emit_byte(self, byte: int) -> None:
        self._chunk.write(byte, self._previous.line)

    def _emit_bytes(self, first: int, second: int) -> None:
        self._emit_byte(first)
        self._emit_byte(second)

    def _emit_return(self) -> None:
        self._emit_byte(OpCode.RETURN)

    def _make_constant(self, value: Value) -> int:
        index = self._chunk.add_constant(value)
        if index > _MAX_CONSTANT_INDEX:
            self._error("Too many constants in one chunk.")
            return 0
        return index

    def _emit_constant(self, value: Value) -> None:
        self._emit_bytes(OpCode.CONSTANT, self._make_constant(value))

    def _end_compiler(self) -> None:
        self._emit_return()
        if self.print_code and not self.had_error:
            disassemble_chunk(self._chunk, "code", self._out)

    # Grammar.

    def _expression(self) -> None:
        self._parse_precedence(Precedence.ASSIGNMENT)

    def _number(self) -> None:
        self._emit_constant(float(self._previous.lexeme))

    def _grouping(self) -> None:
        self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")

    def _unary(self) -> None:
        operator_type = self._previous.type
        self._parse_precedence(Precedence.UNARY)
        if operator_type is TokenType.MINUS:
            self._emit_byte(OpCode.NEGATE)

    def _binary(self) -> None:
        operator_type = self._previous.type
        rule = get_rule(operator_type)
        self._parse_precedence(Precedence(rule.precedence + 1))
        opcode = _BINARY_OPCODES.get(operator_type)
        if opcode is not None:
            self._emit_byte(opcode)

    def _parse_precedence(self, precedence: Precedence) -> None:
        self._advance()
        prefix_rule = get_rule(self._previous.type).prefix
        if prefix_rule is None:
            self._error("Expect expression.")
            return
        prefix_rule(self)

        while precedence <= get_rule(self._current.type).precedence:
            self._advance()
            infix_rule = get_rule(self._previous.type).infix
            infix_rule(self)


_BINARY_OPCODES = {
    TokenType.PLUS: OpCode.ADD,
    TokenType.MINUS: OpCode.SUBTRACT,
    TokenType.STAR: OpCode.MULTIPLY,
    TokenType.SLASH: OpCode.DIVIDE,
}

_NO_RULE = ParseRule(None, None, Precedence.NONE)

_RULES: dict[TokenType, ParseRule] = {token_type: _NO_RULE for token_type in TokenType}
_RULES.update(
    {
        TokenType.LEFT_PAREN: ParseRule(Compiler._grouping, None, Precedence.NONE),
        TokenType.MINUS: ParseRule(Compiler._unary, Compiler._binary, Precedence.TERM),
        TokenType.PLUS: ParseRule(None, Compiler._binary, Precedence.TERM),
        TokenType.SLASH: ParseRule(None, Compiler._binary, Precedence.FACTOR),
        TokenType.STAR: ParseRule(None, Compiler._binary, Precedence.FACTOR),
        TokenType.NUMBER: ParseRule(Compiler._number, None, Precedence.NONE),
    }
)


def get_rule(token_type: TokenType) -> ParseRule:
    """Return the parse rule for a token type."""
    return _RULES[token_type]