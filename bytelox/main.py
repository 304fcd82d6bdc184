"""Command-line entry point: a REPL or a script runner."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from .vm import VM, InterpretResult

_EXIT_USAGE = 64
_EXIT_DATA_ERROR = 65
_EXIT_SOFTWARE = 70
_EXIT_IO_ERROR = 74


def repl(vm: VM | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Read lines until end of input, interpreting each one."""
    vm = vm or VM()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            break
        if line.endswith("\n"):
            line = line[:-1]
        vm.interpret(line)


def read_file(path: str) -> str:
    """Return the text of a file; exit with status 74 if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError:
        sys.stderr.write(f'Could not open file "{path}".\n')
        raise SystemExit(_EXIT_IO_ERROR) from None


def run_file(vm: VM, path: str) -> None:
    """Interpret a script file, exiting with 65 or 70 on failure."""
    result = vm.interpret(read_file(path))
    if result is InterpretResult.COMPILE_ERROR:
        raise SystemExit(_EXIT_DATA_ERROR)
    if result is InterpretResult.RUNTIME_ERROR:
        raise SystemExit(_EXIT_SOFTWARE)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the REPL with no arguments or a script with one."""
    args = list(sys.argv[1:] if argv is None else argv)
    vm = VM()
    if not args:
        repl(vm)
    elif len(args) == 1:
        run_file(vm, args[0])
    else:
        sys.stderr.write("Usage: bytelox [path]\n")
        return _EXIT_USAGE
    return 0


if __name__ == "__main__":
    sys.exit(main())