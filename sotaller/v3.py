"""Multi-stage projectile launcher whose lateral charges are driven by threads.

Each stage owns a thread that waits for the projectile to reach it, fires its
lateral charge, tells the projectile it fired and then waits to be reloaded.
"""

from __future__ import annotations

import argparse
import sys
import threading
from dataclasses import dataclass, field
from typing import IO

STAGES = 5
SHOTS = 3


def _semaphore() -> threading.Semaphore:
    return threading.Semaphore(0)


@dataclass(eq=False)
class LateralStage:
    """One stage of the launcher: its number, its semaphores and the next stage."""

    number: int
    activation: threading.Semaphore = field(default_factory=_semaphore, repr=False)
    fired: threading.Semaphore = field(default_factory=_semaphore, repr=False)
    reloaded: threading.Semaphore = field(default_factory=_semaphore, repr=False)
    next_stage: LateralStage | None = field(default=None, repr=False)
    thread: threading.Thread | None = field(default=None, repr=False)


class V3Launcher:
    """A chain of lateral stages, each controlled by its own thread."""

    def __init__(self, stages: int = STAGES, out: IO[str] | None = None) -> None:
        if stages < 0:
            raise ValueError("the number of stages cannot be negative")
        self.out = out if out is not None else sys.stdout
        self._lock = threading.Lock()
        self._closed = False
        self.stages = [LateralStage(number) for number in range(1, stages + 1)]
        for stage, following in zip(self.stages, self.stages[1:]):
            stage.next_stage = following
        for stage in self.stages:
            stage.thread = threading.Thread(
                target=self._control,
                args=(stage,),
                name=f"lateral-stage-{stage.number}",
                daemon=True,
            )
            stage.thread.start()

    def _say(self, text: str) -> None:
        with self._lock:
            self.out.write(text)
            self.out.flush()

    def _control(self, stage: LateralStage) -> None:
        while True:
            stage.activation.acquire()
            if self._closed:
                return
            self._say(f"  [Etapa {stage.number}] *** DISPARO LATERAL ***\n")
            stage.fired.release()
            stage.reloaded.acquire()
            if self._closed:
                return
            self._say(f"  [Etapa {stage.number}] Recargada y lista.\n")

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("the launcher has been closed")

    def fire_projectile(self) -> None:
        """Send the projectile through every stage, waiting for each charge."""
        self._check_open()
        self._say(f"[Proyectil] Iniciando recorrido por {len(self.stages)} etapas...\n")
        for stage in self.stages:
            self._say(f"[Proyectil] Entrando a etapa {stage.number}\n")
            stage.activation.release()
            stage.fired.acquire()
            self._say(f"[Proyectil] Etapa {stage.number} completada. Mas velocidad\n")
        self._say("[Proyectil] Recorrido completo Velocidad maxima alcanzada.\n\n")

    def reload(self) -> None:
        """Reload every stage so that it is ready for the next shot."""
        self._check_open()
        self._say("[Recarga]   Recargando todas las etapas...\n")
        for stage in self.stages:
            stage.reloaded.release()
        self._say("[Recarga]   Todas las etapas recargadas.\n\n")

    def close(self) -> None:
        """Stop every stage thread and wait for it to finish."""
        if self._closed:
            return
        self._closed = True
        for stage in self.stages:
            stage.activation.release()
            stage.reloaded.release()
        for stage in self.stages:
            if stage.thread is not None:
                stage.thread.join()

    def __enter__(self) -> V3Launcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Fire the projectile several times through a five-stage launcher."""
    parser = argparse.ArgumentParser(
        prog="v3", description="Simulate the V-3 lateral charge control system."
    )
    parser.parse_args(argv)
    out = sys.stdout
    out.write(f"=== V-3 Control System  ({STAGES} etapas, {SHOTS} disparos) ===\n\n")
    with V3Launcher(STAGES, out) as launcher:
        for shot in range(1, SHOTS + 1):
            launcher._say(f"--- Disparo {shot} ---\n")
            launcher.fire_projectile()
            if shot < SHOTS:
                launcher.reload()
    out.write("=== Fin ===\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())