"""Creating worker threads and collecting the values they return."""

from __future__ import annotations

import os
import sys
import threading
import time
from typing import IO, Callable

from .named_pipes import _atoi

SINGLE_FACTOR = 10
MANY_FACTOR = 100
PROG = "crear-hilos"

Sleep = Callable[[float], None]


def thread_worker(
    value: int,
    factor: int = SINGLE_FACTOR,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
) -> int:
    """Greet, sleep ``value`` seconds and return ``value * factor``."""
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    out.write(f"Hola Mundo del hilo {value}\n")
    sleep(value)
    return value * factor


def run_threads(
    count: int,
    factor: int = MANY_FACTOR,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
) -> list[int]:
    """Start ``count`` workers numbered from 0 and return their results in order."""
    if count <= 0:
        raise ValueError("the number of threads must be positive")
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    lock = threading.Lock()

    class _Locked:
        def write(self, text: str) -> None:
            with lock:
                out.write(text)

    shared = _Locked()
    results: list[int | None] = [None] * count

    def work(index: int) -> None:
        results[index] = thread_worker(index, factor, shared, sleep)  # type: ignore[arg-type]

    threads = [threading.Thread(target=work, args=(index,)) for index in range(count)]
    for thread in threads:
        thread.start()
    collected = []
    for index, thread in enumerate(threads):
        thread.join()
        value = results[index]
        assert value is not None
        shared.write(f"Valor de retorno: {value} del hilo: {thread.ident}\n")
        collected.append(value)
    return collected


def parse_thread_count(argv: list[str]) -> int:
    """Read the number of threads from the single command-line argument."""
    if len(argv) != 1:
        raise ValueError(f"Uso: {PROG} nHilos")
    count = _atoi(os.fsencode(argv[0]))
    if count <= 0:
        raise ValueError(f"Uso: {PROG} nHilos")
    return count


def main(argv: list[str] | None = None) -> int:
    """Run as many worker threads as the command line asks for."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        count = parse_thread_count(args)
    except ValueError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    run_threads(count, MANY_FACTOR, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())