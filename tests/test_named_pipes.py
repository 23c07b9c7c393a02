import errno
import os
import stat
import threading

import pytest

from sotaller.named_pipes import (
    REQUEST_LENGTH,
    RESPONSE_LENGTH,
    PipeError,
    Queue,
    create_pipe,
    format_request,
    format_response,
    main_create,
    main_remove,
    parse_request,
    parse_response,
    remove_pipe,
)


def test_message_lengths_from_header():
    assert len(format_request(1, Queue.BASE)) == REQUEST_LENGTH == 9
    assert len(format_response(1, 1)) == RESPONSE_LENGTH == 14


def test_format_request_bytes():
    assert format_request(1234, Queue.MEDIUM) == b"001234 1\n"


def test_format_response_bytes():
    assert format_response(42, 7) == b"000042 000007\n"


@pytest.mark.parametrize("pid", [0, 1, 4321, 999999])
@pytest.mark.parametrize("queue", list(Queue))
def test_request_round_trip(pid, queue):
    data = format_request(pid, queue)
    assert len(data) == REQUEST_LENGTH
    assert parse_request(data) == (pid, queue)


@pytest.mark.parametrize("pid,value", [(0, 0), (17, 3), (999999, 999999)])
def test_response_round_trip(pid, value):
    data = format_response(pid, value)
    assert len(data) == RESPONSE_LENGTH
    assert parse_response(data) == (pid, value)


def test_parse_request_too_short():
    with pytest.raises(ValueError):
        parse_request(b"0001")


def test_parse_request_bad_queue():
    with pytest.raises(ValueError):
        parse_request(format_request(5, 7))


def test_parse_response_too_short():
    with pytest.raises(ValueError):
        parse_response(b"000001 ")


def test_create_and_remove(tmp_path):
    path = str(tmp_path / "fifo")
    create_pipe(path)
    assert stat.S_ISFIFO(os.stat(path).st_mode)

    def _write():
        with open(path, "wb") as writer:
            writer.write(format_request(321, Queue.MAXIMUM))

    writer_thread = threading.Thread(target=_write)
    writer_thread.start()
    with open(path, "rb") as reader:
        received = reader.read(REQUEST_LENGTH)
    writer_thread.join(timeout=5)
    assert parse_request(received) == (321, Queue.MAXIMUM)

    remove_pipe(path)
    assert os.path.exists(path) is False
    with pytest.raises(PipeError) as info:
        remove_pipe(path)
    assert info.value.errno == errno.ENOENT


def test_create_twice_fails(tmp_path):
    path = str(tmp_path / "fifo")
    create_pipe(path)
    with pytest.raises(PipeError) as info:
        create_pipe(path)
    assert info.value.errno == errno.EEXIST
    assert info.value.path == path


def test_remove_missing_fails(tmp_path):
    with pytest.raises(PipeError) as info:
        remove_pipe(str(tmp_path / "missing"))
    assert info.value.errno == errno.ENOENT


def test_mains(tmp_path, capsys):
    request = str(tmp_path / "req")
    response = str(tmp_path / "resp")
    assert main_create([request, response]) == 0
    assert stat.S_ISFIFO(os.stat(response).st_mode)
    assert f"Creada tuberia: {request} {response}" in capsys.readouterr().out
    assert main_remove([request, response]) == 0
    assert not os.path.exists(request)
    assert main_remove([request, response]) == 1
    assert "No se pudo borrar la tuberia" in capsys.readouterr().err