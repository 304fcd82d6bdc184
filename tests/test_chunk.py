import pytest

from bytelox.chunk import Chunk, OpCode


def test_new_chunk_is_empty():
    chunk = Chunk()
    assert len(chunk) == 0
    assert chunk.lines == []
    assert chunk.constants == []


def test_write_records_byte_and_line():
    chunk = Chunk()
    chunk.write(OpCode.RETURN, 7)
    assert len(chunk) == 1
    assert chunk.code[0] == OpCode.RETURN
    assert chunk.lines == [7]


def test_code_and_lines_stay_parallel():
    chunk = Chunk()
    for line, op in enumerate([OpCode.ADD, OpCode.NEGATE, OpCode.RETURN], start=1):
        chunk.write(op, line)
    assert len(chunk.code) == len(chunk.lines) == len(chunk)
    assert list(chunk.code) == [OpCode.ADD, OpCode.NEGATE, OpCode.RETURN]


def test_add_constant_returns_sequential_indices():
    chunk = Chunk()
    indices = [chunk.add_constant(v) for v in (1.5, 2.0, -3.25)]
    assert indices == list(range(3))
    assert [chunk.constants[i] for i in indices] == [1.5, 2.0, -3.25]


def test_add_constant_does_not_touch_code():
    chunk = Chunk()
    chunk.add_constant(4.0)
    assert len(chunk) == 0


def test_opcode_order_matches_instruction_set():
    chunk = Chunk()
    for op in OpCode:
        chunk.write(op, 1)
    assert [op.name for op in OpCode] == [
        "CONSTANT",
        "ADD",
        "SUBTRACT",
        "MULTIPLY",
        "DIVIDE",
        "NEGATE",
        "RETURN",
    ]
    assert list(chunk.code) == [0, 1, 2, 3, 4, 5, 6]
    assert len(chunk) == 7


def test_write_rejects_value_outside_byte_range():
    chunk = Chunk()
    with pytest.raises(ValueError):
        chunk.write(256, 1)


def test_chunks_do_not_share_storage():
    first = Chunk()
    second = Chunk()
    first.write(OpCode.RETURN, 1)
    first.add_constant(1.0)
    assert len(second) == 0
    assert second.constants == []