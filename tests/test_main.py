import io

import pytest

from bytelox.main import main, read_file, repl, run_file
from bytelox.vm import VM


def quiet_vm(out=None):
    return VM(out=out, print_code=False, trace_execution=False)


def test_read_file_returns_contents(tmp_path):
    path = tmp_path / "script.lox"
    path.write_text("1 + 2\n", encoding="utf-8")
    assert read_file(str(path)) == "1 + 2\n"


def test_read_file_missing_exits_74(tmp_path, capsys):
    path = tmp_path / "missing.lox"
    with pytest.raises(SystemExit) as info:
        read_file(str(path))
    assert info.value.code == 74
    assert capsys.readouterr().err == f'Could not open file "{path}".\n'


def test_run_file_prints_result(tmp_path, capsys):
    path = tmp_path / "script.lox"
    path.write_text("6", encoding="utf-8")
    run_file(quiet_vm(), str(path))
    assert capsys.readouterr().out == "6\n"


def test_run_file_compile_error_exits_65(tmp_path, capsys):
    path = tmp_path / "bad.lox"
    path.write_text("1 +", encoding="utf-8")
    with pytest.raises(SystemExit) as info:
        run_file(quiet_vm(), str(path))
    assert info.value.code == 65
    assert "Expect expression." in capsys.readouterr().err


def test_repl_prompts_per_line():
    stdout = io.StringIO()
    stdin = io.StringIO("1\n2\n")
    repl(quiet_vm(out=stdout), stdin, stdout)
    text = stdout.getvalue()
    assert text.startswith("> ")
    assert text.count("> ") == 3
    assert text.endswith("> \n")


def test_repl_strips_newline_only():
    stdout = io.StringIO()
    repl(quiet_vm(out=stdout), io.StringIO("7"), stdout)
    assert stdout.getvalue() == "> 7\n> \n"


def test_main_too_many_arguments(capsys):
    assert main(["a.lox", "b.lox"]) == 64
    assert "Usage" in capsys.readouterr().err


def test_main_runs_file_with_listing(tmp_path, capsys):
    path = tmp_path / "script.lox"
    path.write_text("9", encoding="utf-8")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("== code ==\n")
    assert out.endswith("\n9\n")


def test_main_repl_on_empty_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 0
    assert capsys.readouterr().out == "> \n"