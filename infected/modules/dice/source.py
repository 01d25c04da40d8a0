"""Draw sources for the dice engine.

Every roll takes its integers from a ``DrawSource`` instead of the process-wide
``random`` module, so tests can replay an exact sequence of faces.
"""

from __future__ import annotations

from collections import deque
from random import Random
from typing import Iterable, Protocol


class DrawSource(Protocol):
    def randint(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        ...


class SourceExhausted(RuntimeError):
    """A scripted source was asked for more draws than it was given."""


class RandomSource:
    """Wrapper around random.Random; pass a seed for reproducible sessions."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class ScriptedSource:
    """Replays a fixed sequence of draws, in order.

    Values outside the requested range are rejected so a script written for
    d6 rolls cannot silently feed impossible faces into the engine.
    """

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws: deque[int] = deque(draws)
        self.consumed: list[int] = []

    def randint(self, low: int, high: int) -> int:
        if not self._draws:
            raise SourceExhausted(
                f"Scripted source exhausted after {len(self.consumed)} draws"
            )
        value = self._draws.popleft()
        if not low <= value <= high:
            raise ValueError(f"Scripted draw {value} outside range {low}..{high}")
        self.consumed.append(value)
        return value

    @property
    def remaining(self) -> int:
        return len(self._draws)
