"""Ornamental garden whose visitor count is guarded by semaphores."""

from __future__ import annotations

import threading

MAX_VISITORS = 20
MAX_VISITS = 10
TIME_OUTSIDE = 1
TIME_VISIT = 5
MAX_LIMITED_VISITORS = 5

_instances: dict[type, "Garden"] = {}
_instances_lock = threading.Lock()


class Garden:
    """A garden that counts the visitors inside it."""

    def __init__(self) -> None:
        self._mutex = threading.Semaphore(1)
        self._count = 0
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("the garden has been closed")

    def enter(self) -> None:
        """Register a visitor coming in."""
        self._check_open()
        with self._mutex:
            self._count += 1

    def leave(self) -> None:
        """Register a visitor going out."""
        self._check_open()
        with self._mutex:
            self._count -= 1

    def members(self) -> int:
        """Number of visitors currently inside."""
        self._check_open()
        with self._mutex:
            return self._count

    def close(self) -> None:
        """Close the garden and forget it as the shared instance."""
        self._closed = True
        with _instances_lock:
            if _instances.get(type(self)) is self:
                del _instances[type(self)]


class LimitedGarden(Garden):
    """A garden that admits at most ``limit`` visitors at a time."""

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError("the limit cannot be negative")
        super().__init__()
        self.limit = limit
        self._room = threading.Semaphore(limit)

    def enter(self) -> None:
        """Wait for room, then register a visitor coming in."""
        self._check_open()
        self._room.acquire()
        super().enter()

    def leave(self) -> None:
        """Register a visitor going out and free its place."""
        super().leave()
        self._room.release()


def get_garden() -> Garden:
    """Return the shared garden, creating it on first use."""
    with _instances_lock:
        garden = _instances.get(Garden)
        if garden is None:
            garden = _instances[Garden] = Garden()
        return garden


def get_limited_garden(limit: int) -> LimitedGarden:
    """Return the shared limited garden, creating it with ``limit`` if needed."""
    with _instances_lock:
        garden = _instances.get(LimitedGarden)
        if garden is None:
            if limit >= MAX_VISITORS:
                raise ValueError(
                    f"the limit must be below {MAX_VISITORS} visitors, got {limit}"
                )
            garden = _instances[LimitedGarden] = LimitedGarden(limit)
        return garden  # type: ignore[return-value]