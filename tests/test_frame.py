import pytest

from xfrpclient.frame import Command, Frame, header_size


def test_header_size_is_sum_of_fields():
    assert header_size() == 8


def test_command_values():
    assert Command(0) is Command.SYN
    assert Command(1) is Command.FIN
    assert Command(2) is Command.PSH
    assert Command(3) is Command.NOP
    with pytest.raises(ValueError):
        Command(4)


def test_default_frame():
    frame = Frame(Command.FIN, 9)
    assert frame.ver == 1
    assert frame.length == 0
    assert frame.data is None
    assert frame.cmd == Command.FIN
    assert frame.sid == 9


def test_from_bytes_reads_fields_and_payload():
    raw = bytes([1, 2, 5, 0, 0, 0, 0, 7]) + b"abcde"
    frame = Frame.from_bytes(raw)
    assert frame.ver == 1
    assert frame.cmd == Command.PSH
    assert frame.length == 5
    assert frame.sid == 7
    assert frame.data == b"abcde"


def test_from_bytes_header_only_has_no_payload():
    frame = Frame.from_bytes(bytes([1, 0, 0, 0, 0, 0, 0, 3]))
    assert frame.data is None
    assert frame.sid == 3
    assert frame.cmd == Command.SYN


def test_from_bytes_rejects_short_buffer():
    with pytest.raises(ValueError):
        Frame.from_bytes(b"\x01\x02\x03")


def test_from_message():
    frame = Frame.from_message(b"hello")
    assert frame.ver == 1
    assert frame.cmd == 0
    assert frame.sid == 0
    assert frame.length == len(b"hello")
    assert frame.data == b"hello"


def test_fields_are_mutable():
    frame = Frame.from_message(b"xy")
    frame.cmd = Command.NOP
    frame.length = 1
    assert (frame.cmd, frame.length) == (Command.NOP, 1)