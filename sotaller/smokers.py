"""Cigarette smokers problem: an agent and three smokers synchronised by semaphores."""

from __future__ import annotations

import argparse
import itertools
import random
import sys
import threading
import time
from enum import IntEnum
from typing import IO, Callable, Mapping

PROG = "ctrl_fumadores"
GLOBAL_PREFIX = "/"
MAX_PREPARING_TIME = 4
MAX_SMOKING_TIME = 5

Sleep = Callable[[float], None]


class Ingredient(IntEnum):
    """Semaphores of the table: one per ingredient plus the agent's own."""

    MATCH = 0
    PAPER = 1
    TOBACCO = 2
    AGENT = 3


SMOKER_INGREDIENTS = (Ingredient.MATCH, Ingredient.PAPER, Ingredient.TOBACCO)

DEFAULT_NAMES = {
    Ingredient.MATCH: "cerilla",
    Ingredient.PAPER: "papel",
    Ingredient.TOBACCO: "tabaco",
    Ingredient.AGENT: "agente",
}

_AGENT_MESSAGES = {
    Ingredient.MATCH: "poniendo papel y tabaco",
    Ingredient.PAPER: "poniendo cerilla y tabaco",
    Ingredient.TOBACCO: "poniendo cerilla y papel",
}


def semaphore_name(prefix: str, name: str) -> str:
    """Full name of a semaphore: the prefix followed by its name."""
    return prefix + name


def agent_message(ingredient: Ingredient) -> str:
    """What the agent says when it wakes the smoker holding ``ingredient``."""
    try:
        return _AGENT_MESSAGES[Ingredient(ingredient)]
    except KeyError:
        raise ValueError(f"{ingredient!r} is not a smoker's ingredient") from None


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("-a", dest="agent")
    parser.add_argument("-c", dest="match")
    parser.add_argument("-p", dest="paper")
    parser.add_argument("-t", dest="tobacco")
    parser.add_argument("-h", dest="help", action="store_true")
    return parser


def _parse(argv: list[str] | None) -> argparse.Namespace:
    args = sys.argv[1:] if argv is None else list(argv)
    namespace, _unknown = _parser().parse_known_args(args)
    return namespace


def parse_names(argv: list[str] | None = None) -> dict[Ingredient, str]:
    """Semaphore names chosen with -a, -c, -p and -t, or their defaults."""
    namespace = _parse(argv)
    names = dict(DEFAULT_NAMES)
    overrides = {
        Ingredient.AGENT: namespace.agent,
        Ingredient.MATCH: namespace.match,
        Ingredient.PAPER: namespace.paper,
        Ingredient.TOBACCO: namespace.tobacco,
    }
    names.update({key: value for key, value in overrides.items() if value is not None})
    return names


class SmokersTable:
    """The shared table: one semaphore per ingredient and one for the agent."""

    def __init__(self, names: Mapping[Ingredient, str] | None = None) -> None:
        self.ids = dict(DEFAULT_NAMES)
        if names is not None:
            self.ids.update({Ingredient(key): value for key, value in names.items()})
        self.names = {
            key: semaphore_name(GLOBAL_PREFIX, value) for key, value in self.ids.items()
        }
        self.semaphores = {key: threading.Semaphore(0) for key in Ingredient}


def _rounds(rounds: int | None):
    return itertools.count() if rounds is None else range(rounds)


def run_agent(
    table: SmokersTable,
    rounds: int | None = None,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
    rng: random.Random | None = None,
) -> None:
    """Put two ingredients on the table and wait for a smoker, ``rounds`` times."""
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    rng = rng if rng is not None else random.Random()
    for _ in _rounds(rounds):
        ingredient = Ingredient(rng.randrange(Ingredient.AGENT))
        sleep(rng.randrange(MAX_PREPARING_TIME) + 1)
        out.write(f"[Agente] {agent_message(ingredient)}\n")
        table.semaphores[ingredient].release()
        out.write("[Agente] Esperando continuar\n")
        table.semaphores[Ingredient.AGENT].acquire()


def run_smoker(
    table: SmokersTable,
    ingredient: Ingredient,
    rounds: int | None = None,
    out: IO[str] | None = None,
    sleep: Sleep | None = None,
    rng: random.Random | None = None,
) -> None:
    """Wait for the missing ingredients, smoke and wake the agent, ``rounds`` times."""
    ingredient = Ingredient(ingredient)
    if ingredient not in SMOKER_INGREDIENTS:
        raise ValueError(f"{ingredient!r} is not a smoker's ingredient")
    out = out if out is not None else sys.stdout
    sleep = sleep if sleep is not None else time.sleep
    rng = rng if rng is not None else random.Random()
    ident = table.ids[ingredient]
    for _ in _rounds(rounds):
        out.write(f"[Fumador con {ident}] esperando\r\n")
        table.semaphores[ingredient].acquire()
        out.write(f"[Fumador con {ident}] tomo ingredientes, lio cigarrillo y a fumar\r\n")
        sleep(rng.randrange(MAX_SMOKING_TIME) + 1)
        table.semaphores[Ingredient.AGENT].release()


def main(argv: list[str] | None = None) -> int:
    """Start the agent and the three smokers and run until interrupted."""
    namespace = _parse(argv)
    if namespace.help:
        sys.stderr.write(
            f"Uso: {PROG} [-a <nombre>] [-c <nombre>] [-p <nombre>] [-t <nombre>]\r\n"
            f"     {PROG} -h\r\n"
        )
        return 0
    out = sys.stdout
    table = SmokersTable(parse_names(argv))
    for key in Ingredient:
        out.write(f"[Agente] Creando semaforo: {table.names[key]}\n")
    threads = [threading.Thread(target=run_agent, args=(table, None, out), daemon=True)]
    for ingredient in SMOKER_INGREDIENTS:
        ident = table.ids[ingredient]
        for key in (Ingredient.AGENT, ingredient):
            out.write(f"[fumador con {ident}]: abriendo semaforo {table.names[key]}\r\n")
        threads.append(
            threading.Thread(
                target=run_smoker, args=(table, ingredient, None, out), daemon=True
            )
        )
    for thread in threads:
        thread.start()
    try:
        for thread in threads:
            while thread.is_alive():
                thread.join(0.5)
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())