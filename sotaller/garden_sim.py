"""Visitors and an administrator wandering through an ornamental garden."""

from __future__ import annotations

import random
import sys
import threading
import time
from typing import IO, Callable

from .garden import (
    MAX_LIMITED_VISITORS,
    MAX_VISITORS,
    MAX_VISITS,
    TIME_OUTSIDE,
    TIME_VISIT,
    Garden,
    get_garden,
    get_limited_garden,
)

Sleep = Callable[[float], None]


def random_next(maximum: int, minimum: int, rng: random.Random | None = None) -> int:
    """Random integer scaled from ``minimum`` towards ``maximum``."""
    draw = (rng or random).random()
    return int(draw * (maximum - minimum)) + minimum


def visitor(
    garden: Garden,
    visits: int = MAX_VISITS,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
    rng: random.Random | None = None,
) -> None:
    """Walk in and out of the garden ``visits`` times."""
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    ident = threading.get_ident()
    for _ in range(visits):
        out.write(f"Visitante {ident} afuera\n")
        sleep(random_next(TIME_OUTSIDE, 0, rng))
        garden.enter()
        out.write(f"Visitante {ident} dentro del jardin\n")
        sleep(random_next(TIME_VISIT, 0, rng))
        garden.leave()
    out.write(f"Visitante {ident} termino su jornada\n")


def admin(
    garden: Garden,
    visits: int = MAX_VISITS,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
    rng: random.Random | None = None,
) -> None:
    """Report how many visitors are inside, ``visits`` times."""
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    for _ in range(visits):
        sleep(random_next(TIME_OUTSIDE * 2, 0, rng))
        out.write(f"Visitantes {garden.members()} dentro del jardin\n")
    out.write("Administrador termino su jornada\n")


def run_simulation(
    garden: Garden,
    visitors: int = MAX_VISITORS,
    visits: int = MAX_VISITS,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
    rng: random.Random | None = None,
) -> int:
    """Run the visitor threads and the admin thread; return who is left inside."""
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    rng = rng if rng is not None else random.Random()
    threads = [
        threading.Thread(target=visitor, args=(garden, visits, out, sleep, rng))
        for _ in range(visitors)
    ]
    threads.append(threading.Thread(target=admin, args=(garden, visits, out, sleep, rng)))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return garden.members()


def _wants_help(argv: list[str] | None) -> bool:
    args = sys.argv[1:] if argv is None else argv
    return "-h" in args


def main(argv: list[str] | None = None) -> int:
    """Run the unlimited garden simulation."""
    if _wants_help(argv):
        sys.stderr.write(
            "Uso: jardin_ornamental [-v <numero_visitantes>]\n"
            "     jardin_ornamental -h\n"
        )
        return 0
    out = sys.stdout
    garden = get_garden()
    out.write(f"Numero visitanes antes de iniciar: {garden.members()}\n")
    remaining = run_simulation(garden, MAX_VISITORS, MAX_VISITS, out)
    out.write(f"Numero visitantes antes de cerrar jardin: {remaining}\n")
    garden.close()
    return 0


def main_limited(argv: list[str] | None = None) -> int:
    """Run the simulation with a garden that admits a limited number of visitors."""
    if _wants_help(argv):
        sys.stderr.write(
            "Uso: jardin_ornamental_limitado [-l <max_visitantes>] "
            "[-v <numero_visitantes>]\r\n"
            "     jardin_ornamental_limitado -h\r\n"
        )
        return 0
    out = sys.stdout
    try:
        garden = get_limited_garden(MAX_LIMITED_VISITORS)
    except ValueError:
        sys.stderr.write("Error: Estructura del jardin ornamental no pudo ser creada\r\n")
        return 1
    out.write(f"Numero visitantes antes de iniciar: {garden.members()}\r\n")
    remaining = run_simulation(garden, MAX_VISITORS, MAX_VISITS, out)
    out.write(f"Numero visitantes antes de cerrar jardin: {remaining}\n")
    garden.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())