"""Small services that log their progress and react to signals."""

from __future__ import annotations

import itertools
import os
import signal
import sys
import time
from typing import Callable

try:
    import syslog
except ImportError:  # pragma: no cover - platforms without syslog
    syslog = None  # type: ignore[assignment]

MAX_SIGNALS = 5
STEP_SECONDS = 10
SYSTEMD_STEP_SECONDS = 60
CAPTURE_SLEEP_SECONDS = 4
CAPTURE_LIMIT = 4

Logger = Callable[[str], None]


class _Finished(Exception):
    """Raised from a signal handler to end a service loop."""


def _syslog_logger(ident: str) -> Logger:
    if syslog is None:
        return lambda message: sys.stderr.write(message + "\n")
    syslog.openlog(ident, syslog.LOG_CONS | syslog.LOG_PID, syslog.LOG_USER)
    return lambda message: syslog.syslog(syslog.LOG_INFO | syslog.LOG_USER, message)


def _close_log() -> None:
    if syslog is not None:
        syslog.closelog()


def signal_label(signum: int) -> str:
    """Name of the signals the services handle, or DESCONOCIDA."""
    names = {int(signal.SIGTERM): "SIGTERM", int(signal.SIGINT): "SIGINT"}
    sigtstp = getattr(signal, "SIGTSTP", None)
    if sigtstp is not None:
        names[int(sigtstp)] = "SIGTSTP"
    return names.get(int(signum), "DESCONOCIDA")


class SignalCounter:
    """Counts received signals and reports when the limit is reached."""

    def __init__(self, limit: int = MAX_SIGNALS, logger: Logger | None = None) -> None:
        self.limit = limit
        self.logger = logger if logger is not None else _syslog_logger("servicio2")
        self.count = 0

    def handle(self, signum: int) -> bool:
        """Count one signal; return True once the limit has been reached."""
        self.count += 1
        self.logger(
            f"Senal recibida: {signal_label(signum)} ({int(signum)}). "
            f"Contador: {self.count}/{self.limit}"
        )
        if self.count >= self.limit:
            self.logger(f"Contador llego a {self.limit}. Terminando.")
            return True
        return False

    def step_message(self, step: int) -> str:
        """Progress line logged at each step of the service."""
        return f"Ejecutando paso {step} (senales recibidas: {self.count}/{self.limit})"


def _install(handler, signums) -> dict:
    return {signum: signal.signal(signum, handler) for signum in signums}


def _restore(previous: dict) -> None:
    for signum, old in previous.items():
        signal.signal(signum, old)


def service2_main(argv: list[str] | None = None) -> int:
    """Log a step every few seconds until five signals have been received."""
    counter = SignalCounter(MAX_SIGNALS, _syslog_logger("servicio2"))

    def handler(signum, frame):
        if counter.handle(signum):
            raise _Finished

    signums = [signal.SIGTERM, signal.SIGINT]
    if hasattr(signal, "SIGTSTP"):
        signums.append(signal.SIGTSTP)
    previous = _install(handler, signums)
    try:
        counter.logger("Servicio2 iniciado")
        for step in itertools.count():
            counter.logger(counter.step_message(step))
            time.sleep(STEP_SECONDS)
    except _Finished:
        pass
    finally:
        _restore(previous)
        _close_log()
    return 0


def systemd_service_main(argv: list[str] | None = None) -> int:
    """Log a running step every minute until SIGTERM arrives."""
    logger = _syslog_logger("systemd-service")

    def handler(signum, frame):
        logger(f"Receiving signal: {int(signum)} ending")
        raise _Finished

    previous = _install(handler, [signal.SIGTERM])
    try:
        for step in itertools.count():
            logger(f"running step: {step}")
            time.sleep(SYSTEMD_STEP_SECONDS)
    except _Finished:
        pass
    finally:
        _restore(previous)
        _close_log()
    return 0


def capture_main(argv: list[str] | None = None) -> int:
    """Wait, counting SIGINT, until it has arrived four times."""
    out = sys.stdout
    count = 0

    def handler(signum, frame):
        nonlocal count
        count += 1
        out.write(f"Obtuvo: {int(signum)} despues: {count}\n")

    previous = signal.signal(signal.SIGINT, handler)
    pid = os.getpid()
    try:
        while count < CAPTURE_LIMIT:
            out.write(f"Proceso: {pid} Esperando por {int(signal.SIGINT)}\n")
            time.sleep(CAPTURE_SLEEP_SECONDS)
    finally:
        signal.signal(signal.SIGINT, previous)
    out.write(f"Terminado despues de: {count}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(service2_main())