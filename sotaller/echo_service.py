"""Echo service over named pipes that answers each message with its case inverted."""

from __future__ import annotations

import contextlib
import os
import signal
import sys
from typing import IO, Union

try:
    import syslog
except ImportError:  # pragma: no cover - platforms without syslog
    syslog = None  # type: ignore[assignment]

BUFFER_SIZE = 1024
INPUT_FIFO = "/tmp/eco_entrada"
OUTPUT_FIFO = "/tmp/eco_salida"
LOG_FILE = "/tmp/servicio1.log"
PROMPT = "Escribe un mensaje: "

_LOWER = "abcdefghijklmnopqrstuvwxyz"
_UPPER = _LOWER.upper()
_STR_TABLE = str.maketrans(_LOWER + _UPPER, _UPPER + _LOWER)
_BYTES_TABLE = bytes.maketrans(
    (_LOWER + _UPPER).encode("ascii"), (_UPPER + _LOWER).encode("ascii")
)

Text = Union[str, bytes]


class _Stopped(Exception):
    """Raised from a signal handler to leave a blocking call."""


def invert_case(text: Text) -> Text:
    """Swap upper and lower case of the ASCII letters in ``text``."""
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).translate(_BYTES_TABLE)
    return text.translate(_STR_TABLE)


def _strip_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


class EchoService:
    """Reads messages from one pipe and writes them back, case inverted, on another."""

    def __init__(
        self,
        input_path: str = INPUT_FIFO,
        output_path: str = OUTPUT_FIFO,
        log_path: str = LOG_FILE,
    ) -> None:
        self.input_path = input_path
        self.output_path = output_path
        self.log_path = log_path
        self.running = True

    def log(self, message: str) -> None:
        """Record ``message`` in the system log and in the log file."""
        if syslog is not None:
            syslog.openlog("servicio1", syslog.LOG_CONS | syslog.LOG_PID, syslog.LOG_USER)
            syslog.syslog(syslog.LOG_INFO | syslog.LOG_USER, message)
            syslog.closelog()
        with contextlib.suppress(OSError):
            with open(self.log_path, "a", encoding="utf-8") as stream:
                stream.write(message + "\n")

    def handle(self, data: bytes) -> bytes:
        """Answer one message and log what was received and sent."""
        answer = invert_case(data)
        received = _strip_newline(data.decode("utf-8", "replace"))
        sent = _strip_newline(answer.decode("utf-8", "replace"))
        self.log(f"Recibido: '{received}' -> Enviado: '{sent}'")
        return answer

    def _make_fifos(self) -> None:
        try:
            os.mkfifo(self.input_path, 0o666)
        except FileExistsError:
            pass
        except OSError:
            self.log("Error creando FIFO entrada")
            raise
        try:
            os.mkfifo(self.output_path, 0o666)
        except FileExistsError:
            pass
        except OSError:
            self.log("Error creando FIFO salida")
            with contextlib.suppress(OSError):
                os.unlink(self.input_path)
            raise

    def _echo(self, in_fd: int, out_fd: int) -> None:
        while chunk := os.read(in_fd, BUFFER_SIZE - 1):
            answer = self.handle(chunk)
            try:
                os.write(out_fd, answer)
            except OSError:
                self.log("Error escribiendo FIFO salida")
                return

    def serve(self) -> None:
        """Create the pipes and answer clients until stopped; then remove the pipes."""
        self.log("Iniciando servicio1")
        self._make_fifos()
        self.log(f"FIFOs creadas: {self.input_path}, {self.output_path}")
        try:
            while self.running:
                try:
                    in_fd = os.open(self.input_path, os.O_RDONLY)
                except InterruptedError:
                    continue
                except OSError:
                    self.log("Error abriendo FIFO entrada")
                    break
                if not self.running:
                    os.close(in_fd)
                    break
                try:
                    out_fd = os.open(self.output_path, os.O_WRONLY)
                except OSError:
                    self.log("Error abriendo FIFO salida")
                    os.close(in_fd)
                    break
                try:
                    self._echo(in_fd, out_fd)
                finally:
                    os.close(in_fd)
                    os.close(out_fd)
        finally:
            for path in (self.input_path, self.output_path):
                with contextlib.suppress(OSError):
                    os.unlink(path)
            self.log("Servicio1 terminado")

    def stop(self, signum: int) -> None:
        """Ask the service to finish and wake it if it waits for a client."""
        self.log(f"Recibida senal {int(signum)}, terminando")
        self.running = False
        try:
            fd = os.open(self.input_path, os.O_WRONLY | os.O_NONBLOCK)
        except OSError:
            return
        os.close(fd)


def echo_client(
    input_path: str = INPUT_FIFO,
    output_path: str = OUTPUT_FIFO,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
) -> int:
    """Send every line of ``stdin`` to the service and print its answers."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    err = sys.stderr

    def say(text: str) -> None:
        stdout.write(text)
        stdout.flush()

    say("Cliente eco (Ctrl+D para salir)\n" + PROMPT)
    for line in stdin:
        data = line.encode("utf-8")
        if not data:
            say(PROMPT)
            continue
        try:
            in_fd = os.open(input_path, os.O_WRONLY)
        except OSError as exc:
            err.write(
                f"Error: No se pudo abrir FIFO entrada ({exc.errno}). "
                "¿Está corriendo servicio1?\n"
            )
            return 1
        try:
            out_fd = os.open(output_path, os.O_RDONLY)
        except OSError as exc:
            err.write(f"Error: No se pudo abrir FIFO salida ({exc.errno})\n")
            os.close(in_fd)
            return 1
        try:
            os.write(in_fd, data)
        except OSError as exc:
            err.write(f"Error escribiendo en FIFO entrada: {exc.errno}\n")
            os.close(in_fd)
            os.close(out_fd)
            return 1
        os.close(in_fd)
        try:
            answer = os.read(out_fd, BUFFER_SIZE - 1)
        finally:
            os.close(out_fd)
        if answer:
            say("Respuesta: " + answer.decode("utf-8", "replace"))
        else:
            err.write("Error leyendo respuesta\n")
        say(PROMPT)
    say("\nCliente terminado.\n")
    return 0


def service_main(argv: list[str] | None = None) -> int:
    """Run the echo service until SIGTERM or SIGINT arrives."""
    service = EchoService()

    def handler(signum, frame):
        service.stop(signum)
        raise _Stopped

    previous = {
        signum: signal.signal(signum, handler) for signum in (signal.SIGTERM, signal.SIGINT)
    }
    try:
        service.serve()
    except _Stopped:
        pass
    except OSError:
        return 1
    finally:
        for signum, old in previous.items():
            signal.signal(signum, old)
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Run the interactive echo client on the default pipes."""
    return echo_client()


if __name__ == "__main__":
    raise SystemExit(service_main())