"""Named pipes shared by the counter server and its clients, and their messages."""

from __future__ import annotations

import os
import re
import sys
from enum import IntEnum

REQUEST_PIPE = "/tmp/tuberia_peticion"
RESPONSE_PIPE = "/tmp/tuberia_solicitud"

REQUEST_LENGTH = 9
RESPONSE_LENGTH = 14
PID_END = 6

_INTEGER = re.compile(rb"\s*([+-]?\d+)")


class Queue(IntEnum):
    """The counter queues a client may ask for a number from."""

    BASE = 0
    MEDIUM = 1
    MAXIMUM = 2


class PipeError(Exception):
    """A named pipe could not be created, removed or opened."""

    def __init__(self, message: str, path: str, errno: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.errno = errno


def _atoi(data: bytes) -> int:
    match = _INTEGER.match(data.split(b"\0", 1)[0])
    return int(match.group(1)) if match else 0


def create_pipe(path: str) -> None:
    """Create a named pipe readable and writable by everyone."""
    try:
        os.mkfifo(path, 0o666)
    except OSError as exc:
        raise PipeError(
            f"No se pudo crear la tuberia: {path} debido a {exc.errno} {exc.strerror}",
            path,
            exc.errno,
        ) from exc


def remove_pipe(path: str) -> None:
    """Remove a named pipe."""
    try:
        os.unlink(path)
    except OSError as exc:
        raise PipeError(
            f"No se pudo borrar la tuberia: {path} debido a {exc.errno} {exc.strerror}",
            path,
            exc.errno,
        ) from exc


def _fixed(text: str, length: int) -> bytes:
    return text.encode("ascii")[:length].ljust(length, b"\0")


def format_request(pid: int, queue: int) -> bytes:
    """The fixed-size request a client sends: its pid and the queue it wants."""
    return _fixed(f"{pid:06d} {int(queue)}\n", REQUEST_LENGTH)


def parse_request(data: bytes) -> tuple[int, Queue]:
    """Read the pid and queue out of a request."""
    if len(data) < REQUEST_LENGTH:
        raise ValueError(f"a request needs {REQUEST_LENGTH} bytes, got {len(data)}")
    pid = _atoi(data[:PID_END])
    queue = _atoi(data[PID_END + 1 : REQUEST_LENGTH - 1])
    return pid, Queue(queue)


def format_response(pid: int, value: int) -> bytes:
    """The fixed-size response the server sends: the pid and its number."""
    return _fixed(f"{pid:06d} {value:06d}\n", RESPONSE_LENGTH)


def parse_response(data: bytes) -> tuple[int, int]:
    """Read the pid and the number out of a response."""
    if len(data) < RESPONSE_LENGTH:
        raise ValueError(f"a response needs {RESPONSE_LENGTH} bytes, got {len(data)}")
    pid = _atoi(data[:PID_END])
    value = _atoi(data[PID_END + 1 : RESPONSE_LENGTH - 1])
    return pid, value


def _paths(argv: list[str] | None) -> tuple[str, str]:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) == 2:
        return args[0], args[1]
    return REQUEST_PIPE, RESPONSE_PIPE


def main_create(argv: list[str] | None = None) -> int:
    """Create the request and response pipes."""
    request, response = _paths(argv)
    try:
        create_pipe(request)
        create_pipe(response)
    except PipeError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    sys.stdout.write(f"Creada tuberia: {request} {response}\n")
    return 0


def main_remove(argv: list[str] | None = None) -> int:
    """Remove the request and response pipes."""
    request, response = _paths(argv)
    try:
        remove_pipe(request)
        remove_pipe(response)
    except PipeError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    sys.stdout.write(f"Tuberia borradas: {request} {response}\n")
    return 0