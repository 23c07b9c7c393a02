"""Banker's algorithm for deadlock avoidance."""

from __future__ import annotations

import sys
from enum import Enum
from typing import IO, Any, Iterable, Sequence

import yaml


class Reason(Enum):
    """Why a banker could not be built; the value prefixes the message."""

    INPUT = "Input exception "
    FORMAT = "Format exception "
    MEMORY_ALLOC = "Memory allocated exception: "


class InfoLevel(Enum):
    """Verbosity levels a banker may be configured with."""

    NO_INFO = 0
    LEVEL1 = 1
    LEVEL2 = 2
    LEVEL3 = 3


class RequestOutcome(Enum):
    """Result of evaluating a resource request; the value is its message."""

    EXHAUSTED = "Process has exhausted resources"
    MUST_WAIT = "Process has to wait"
    UNSAFE = "The requirement could cause a unsafe state\nrollback the previous requirement"
    GRANTED = "The requirement is possible to give"

    @property
    def message(self) -> str:
        return self.value


class BankerError(Exception):
    """Raised when the banker's description cannot be read or is malformed."""

    def __init__(self, reason: Reason, detail: str) -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason.value} {detail}")


class _NotAnInteger(Exception):
    pass


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise _NotAnInteger(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise _NotAnInteger(value) from None
    raise _NotAnInteger(value)


def _fits(x: Sequence[int], y: Sequence[int]) -> bool:
    return all(a <= b for a, b in zip(x, y))


def _row(values: Iterable[int]) -> str:
    return "".join(f"{value} " for value in values)


def _read_matrix(node: Any, processes: int, resources: int, msg: str) -> list[list[int]]:
    rows = node if isinstance(node, list) else []
    if len(rows) != processes:
        raise BankerError(Reason.FORMAT, msg)
    matrix = []
    for row in rows:
        cells = row if isinstance(row, list) else []
        if len(cells) != resources:
            raise BankerError(Reason.FORMAT, msg)
        matrix.append([_as_int(cell) for cell in cells])
    return matrix


class Banker:
    """State of the banker: available, maximum, allocated and need."""

    def __init__(
        self,
        available: Sequence[int],
        maximum: Sequence[Sequence[int]],
        allocated: Sequence[Sequence[int]],
    ) -> None:
        self.available = [int(v) for v in available]
        self.processes = len(maximum)
        self.resources = len(self.available)
        if any(len(row) != self.resources for row in maximum):
            raise BankerError(Reason.FORMAT, "reading max")
        if len(allocated) != self.processes or any(
            len(row) != self.resources for row in allocated
        ):
            raise BankerError(Reason.FORMAT, "reading allocated")
        self.maximum = [[int(v) for v in row] for row in maximum]
        self.allocated = [[int(v) for v in row] for row in allocated]
        self.need = [
            [m - a for m, a in zip(max_row, alloc_row)]
            for max_row, alloc_row in zip(self.maximum, self.allocated)
        ]
        self.safe_sequence: list[int] = []
        self.info_level = InfoLevel.NO_INFO

    @classmethod
    def from_mapping(cls, data: Any) -> "Banker":
        """Build a banker from a parsed description document."""
        if not isinstance(data, dict) or "processes" not in data or "resources" not in data:
            raise BankerError(Reason.FORMAT, "Not found process or resources numbers")
        try:
            processes = _as_int(data["processes"])
            resources = _as_int(data["resources"])
            vectors = data.get("vectors")
            if not isinstance(vectors, dict):
                vectors = {}

            if "availables" not in vectors:
                raise BankerError(Reason.FORMAT, "Vector available is not defined")
            node = vectors["availables"]
            cells = node if isinstance(node, list) else []
            if len(cells) != resources:
                raise BankerError(
                    Reason.FORMAT,
                    "Number of resources on available vector doesn't found",
                )
            available = [_as_int(cell) for cell in cells]

            if "max" not in vectors:
                raise BankerError(Reason.FORMAT, "Vector max is not found")
            maximum = _read_matrix(vectors["max"], processes, resources, "reading max")

            if "allocated" not in vectors:
                raise BankerError(Reason.FORMAT, "Vector allocated is not found")
            allocated = _read_matrix(
                vectors["allocated"], processes, resources, "reading allocated"
            )
        except _NotAnInteger:
            raise BankerError(Reason.MEMORY_ALLOC, "") from None
        return cls(available, maximum, allocated)

    @classmethod
    def from_file(cls, path: str) -> "Banker":
        """Load a banker from a YAML description file."""
        try:
            with open(path, encoding="utf-8") as stream:
                text = stream.read()
        except OSError:
            raise BankerError(Reason.INPUT, "opening file") from None
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            raise BankerError(Reason.MEMORY_ALLOC, "") from None
        return cls.from_mapping(data)

    def is_safe(self, out: IO[str] | None = None) -> bool:
        """Run the safety algorithm, tracing to ``out`` when given."""
        work = list(self.available)
        finish = [False] * self.processes
        sequence: list[int] = []
        if out is not None:
            out.write(self.format_matrices())
            out.write(self._format_process(None, finish, work))
        progressed = True
        while len(sequence) < self.processes and progressed:
            progressed = False
            for process, done in enumerate(finish):
                if done or not _fits(self.need[process], work):
                    continue
                if out is not None:
                    out.write(self._format_process(process, finish, work))
                work = [w + a for w, a in zip(work, self.allocated[process])]
                finish[process] = True
                sequence.append(process)
                progressed = True
                if out is not None:
                    out.write(self._format_process(process, finish, work))
        self.safe_sequence = sequence
        return len(sequence) == self.processes

    def format_matrices(self) -> str:
        """Render the allocated, max, need and available tables."""
        lines = ["\tAllocated\tMax\tNeed\tAvailable\n"]
        for process in range(self.processes):
            line = (
                f"{process}\t{_row(self.allocated[process])}\t\t"
                f"{_row(self.maximum[process])}\t{_row(self.need[process])}"
            )
            if process == 0:
                line += f"\t{_row(self.available)}"
            lines.append(line + "\n")
        return "".join(lines)

    def format_safe_sequence(self) -> str:
        """Render the last computed safe sequence on one line."""
        return _row(self.safe_sequence) + "\n"

    def _format_process(
        self, process: int | None, finish: Sequence[bool], work: Sequence[int]
    ) -> str:
        label = " " if process is None else str(process)
        return (
            f"Process: {label} finish: {_row(int(f) for f in finish)}"
            f"\twork: {_row(work)}\n"
        )

    def _apply(self, process: int, request: Sequence[int], sign: int) -> None:
        for j, amount in enumerate(request):
            self.available[j] -= sign * amount
            self.allocated[process][j] += sign * amount
            self.need[process][j] -= sign * amount

    def evaluate_request(
        self, process: int, request: Sequence[int], out: IO[str] | None = None
    ) -> RequestOutcome:
        """Grant ``request`` for ``process`` if it keeps the system safe."""
        if not 0 <= process < self.processes:
            raise IndexError(f"process {process} out of range")
        amounts = [int(v) for v in request]
        if len(amounts) != self.resources:
            raise ValueError(f"request must have {self.resources} values")
        if not _fits(amounts, self.need[process]):
            return RequestOutcome.EXHAUSTED
        if not _fits(amounts, self.available):
            return RequestOutcome.MUST_WAIT
        self._apply(process, amounts, 1)
        if not self.is_safe(out):
            self._apply(process, amounts, -1)
            return RequestOutcome.UNSAFE
        if out is not None:
            out.write(self.format_matrices())
        return RequestOutcome.GRANTED


def _default_out() -> IO[str]:
    return sys.stdout