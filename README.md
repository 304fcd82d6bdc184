# bytelox

bytelox compiles Lox expressions to bytecode and runs them on a small
stack-based virtual machine. The language covers numeric literals,
grouping with parentheses, unary minus, and the binary operators `+`, `-`,
`*` and `/`. A program is a single expression. When it finishes, the
machine prints the value of that expression.

## Installation

```
pip install .
```

## Command line

Start an interactive prompt:

```
bytelox
```

The prompt compiles and runs each line you type. End the session with
end-of-file (Ctrl-D).

Run a file:

```
bytelox program.lox
```

With more than one argument the command prints `Usage: bytelox [path]`
to standard error.

The command always shows debug output. The compiler prints a disassembly
of each chunk it compiles without errors. The virtual machine prints the
value stack and the current instruction before it executes that
instruction.

Exit codes:

| Code | Meaning                                   |
|------|-------------------------------------------|
| 0    | success                                   |
| 64   | wrong command-line usage                  |
| 65   | compile error in the file                 |
| 70   | runtime error (the machine reports none yet) |
| 74   | the file could not be opened              |

Compile errors go to standard error in this form:

```
[line 1] Error at end: Expect expression.
```

## Library use

```python
import io

from bytelox.vm import VM, InterpretResult

out = io.StringIO()
vm = VM(out=out, print_code=False, trace_execution=False)
result = vm.interpret("(1 + 2) * -3")
assert result is InterpretResult.OK
assert out.getvalue() == "-9\n"
```

`VM(out=None, err=None, print_code=True, trace_execution=True)` writes results
and debug output to `out` and compile errors to `err`. Either one falls back to
standard output or standard error when you leave it out. `VM.push`, `VM.pop`
and `VM.reset_stack` work on the value stack directly.

The modules can also be used on their own:

- `bytelox.scanner`: `Scanner` turns source text into `Token`s, each with a `type`, a `lexeme` and a `line`. You can call `scan_token()` repeatedly, or iterate over the scanner to get every token up to and including `EOF`.
- `bytelox.chunk`: `Chunk` holds the bytecode (`code`), the line numbers (`lines`) and the constant pool (`constants`). The instructions are in `OpCode`.
- `bytelox.compiler`: `Compiler(out=None, err=None, print_code=True).compile(source, chunk)` fills a chunk and returns whether compilation succeeded. `get_rule` returns the `ParseRule` for a token type.
- `bytelox.debug`: `disassemble_chunk` and `disassemble_instruction` write a readable listing of a chunk to a text stream. `format_value` and `print_value` render numbers the way the interpreter prints them.
- `bytelox.main`: `main(argv=None)`, `repl`, `read_file` and `run_file` make up the command line.

## What it does not do

The scanner recognises the whole Lox vocabulary: strings, identifiers,
keywords, comparison operators and braces. The compiler handles only
numeric expressions. Statements, variables, strings, booleans, `nil`,
comparisons, control flow, functions and classes all give a compile error.
The virtual machine does not report runtime errors.

## Running the tests

```
pip install .[test]
pytest
```