"""Reading files in small chunks, filtering streams and reporting open errors."""

from __future__ import annotations

import sys
from typing import IO, BinaryIO, Iterator

POEM_PATH = "../data/lope-de-vega-poema.txt"
MISSING_PATH = "../data/no-existe.txt"
SHOW_BUFFER_SIZE = 12
FILTER_BUFFER_SIZE = 10


def _check_size(size: int) -> None:
    if size <= 0:
        raise ValueError("the chunk size must be positive")


def read_chunks(path: str, size: int = SHOW_BUFFER_SIZE) -> Iterator[bytes]:
    """Yield the contents of ``path`` in chunks of at most ``size`` bytes."""
    _check_size(size)
    with open(path, "rb") as stream:
        while chunk := stream.read(size):
            yield chunk


def show_file(
    path: str, out: BinaryIO | None = None, size: int = SHOW_BUFFER_SIZE
) -> int:
    """Copy ``path`` to ``out`` chunk by chunk; return the number of bytes copied."""
    out = out if out is not None else sys.stdout.buffer
    total = 0
    for chunk in read_chunks(path, size):
        out.write(chunk)
        total += len(chunk)
    out.flush()
    return total


def upper_filter(
    source: BinaryIO, sink: BinaryIO, size: int = FILTER_BUFFER_SIZE
) -> int:
    """Copy ``source`` to ``sink`` turning ASCII letters to upper case."""
    _check_size(size)
    total = 0
    while chunk := source.read(size):
        sink.write(chunk.upper())
        total += len(chunk)
    sink.flush()
    return total


def open_error_message(path: str) -> str | None:
    """Try to open ``path``; return the error report, or None if it opened."""
    try:
        with open(path, "rb"):
            return None
    except OSError as exc:
        return f"Error abriendo fichero debido a {exc.errno}"


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def main_show(argv: list[str] | None = None) -> int:
    """Print a file (the poem by default) in twelve-byte reads."""
    args = _args(argv)
    path = args[0] if args else POEM_PATH
    err = sys.stderr
    sys.stdout.flush()
    out = sys.stdout.buffer
    try:
        stream = open(path, "rb")
    except OSError as exc:
        err.write(f"Error abriendo archivo: {exc.errno}\n")
        return 1
    with stream:
        first = True
        while True:
            try:
                chunk = stream.read(SHOW_BUFFER_SIZE)
            except OSError as exc:
                err.write(f"Error leyendo archivo: {exc.errno}\n")
                return 2 if first else 3
            first = False
            if not chunk:
                break
            out.write(chunk)
    out.flush()
    return 0


def main_upper(argv: list[str] | None = None) -> int:
    """Copy standard input to standard output in upper case."""
    sys.stdout.flush()
    try:
        upper_filter(sys.stdin.buffer, sys.stdout.buffer)
    except OSError as exc:
        sys.stderr.write(f"CatW - Error escribiendo: {exc.errno}\r\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main_show())