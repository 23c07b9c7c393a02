"""Counter server that hands out numbers over named pipes, and its client."""

from __future__ import annotations

import math
import os
import sys
from typing import IO

from .named_pipes import (
    REQUEST_LENGTH,
    REQUEST_PIPE,
    RESPONSE_LENGTH,
    RESPONSE_PIPE,
    PipeError,
    Queue,
    _atoi,
    format_request,
    format_response,
    parse_request,
    parse_response,
)


def _open(path: str, flags: int) -> int:
    try:
        return os.open(path, flags)
    except OSError as exc:
        raise PipeError(
            f"Error abriendo: {path} {exc.errno} {exc.strerror}", path, exc.errno
        ) from exc


def _write(out: IO[str], text: str) -> None:
    out.write(text)
    out.flush()


class CounterServer:
    """Answers each request with the next number of the queue it names."""

    def __init__(
        self,
        request_path: str = REQUEST_PIPE,
        response_path: str = RESPONSE_PIPE,
        out: IO[str] | None = None,
    ) -> None:
        self.request_path = request_path
        self.response_path = response_path
        self.out = out if out is not None else sys.stdout
        self.counters = {queue: 0 for queue in Queue}

    def handle(self, data: bytes) -> bytes:
        """Build the response to one request and advance its queue."""
        pid, queue = parse_request(data)
        _write(self.out, f"Peticion: {pid} en la cola: {int(queue)}\n")
        value = self.counters[queue]
        self.counters[queue] = value + 1
        return format_response(pid, value)

    def serve(self, max_requests: int | None = None) -> int:
        """Answer requests until ``max_requests`` are done; return how many."""
        handled = 0
        fd: int | None = None
        try:
            while max_requests is None or handled < max_requests:
                if fd is None:
                    fd = _open(self.request_path, os.O_RDONLY)
                _write(self.out, "Preparando lectura\n")
                try:
                    data = os.read(fd, REQUEST_LENGTH)
                except OSError:
                    break
                if data:
                    response = self.handle(data)
                    out_fd = _open(self.response_path, os.O_WRONLY)
                    try:
                        os.write(out_fd, response)
                    finally:
                        os.close(out_fd)
                    handled += 1
                else:
                    _write(self.out, f"No se leyeron caracteres {len(data)}.\n")
                    os.close(fd)
                    fd = None
        finally:
            if fd is not None:
                os.close(fd)
        return handled


def request_number(
    queue: int,
    request_path: str = REQUEST_PIPE,
    response_path: str = RESPONSE_PIPE,
    pid: int | None = None,
    out: IO[str] | None = None,
) -> tuple[int, int]:
    """Ask the server for the next number of ``queue``; return (pid, number)."""
    out = out if out is not None else sys.stdout
    queue = Queue(int(math.fmod(int(queue), len(Queue))))
    pid = os.getpid() if pid is None else pid
    _write(out, f"Consecutivo: {int(queue)}\n")

    write_fd = _open(request_path, os.O_WRONLY)
    try:
        _write(out, "Abriendo tuberia\n")
        message = format_request(pid, queue)
        _write(out, f"Mensaje: {message.decode('ascii').rstrip(chr(0))}")
        os.write(write_fd, message)
        read_fd = _open(response_path, os.O_RDONLY)
    finally:
        os.close(write_fd)

    try:
        _write(out, "Abriendo tuberia de solicitud\n")
        data = os.read(read_fd, RESPONSE_LENGTH)
    finally:
        os.close(read_fd)
    client, value = parse_response(data)
    _write(out, f"El proceso {client} recibe consecutivo {value}\n")
    return client, value


def server_main(argv: list[str] | None = None) -> int:
    """Serve numbers on the default pipes forever."""
    try:
        CounterServer(REQUEST_PIPE, RESPONSE_PIPE, sys.stdout).serve()
    except PipeError as exc:
        sys.stderr.write(str(exc))
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Request one number from the queue given on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stderr.write("Uso: cliente <consectivo>\n")
        return 1
    try:
        request_number(_atoi(os.fsencode(args[0])))
    except (PipeError, ValueError) as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0