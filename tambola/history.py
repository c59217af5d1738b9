"""Ordered record of the numbers called in a game."""

from __future__ import annotations

from typing import Iterator, Optional

from .tickets.ticket import HIGHEST_NUMBER, LOWEST_NUMBER, check_number

BOARD_ROW_WIDTH = 10


class DrawHistory:
    """Draw-ordered sequence of unique numbers.

    One structure serves as both the call history (ordered view) and the set
    of drawn numbers (membership), so the two can never disagree.
    """

    def __init__(self) -> None:
        self._order: list[int] = []
        self._seen: set[int] = set()

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._order))

    def __contains__(self, number: object) -> bool:
        return number in self._seen

    def __repr__(self) -> str:
        return f"<DrawHistory(called={len(self)}, current={self.current})>"

    def append(self, number: int) -> None:
        """Record ``number`` as the latest call.

        Raises
        ------
        TypeError
            If ``number`` is not an int.
        ValueError
            If ``number`` is outside 1..90 or was already called.
        """
        check_number(number)
        if number in self._seen:
            raise ValueError(f"number {number} has already been drawn")
        self._order.append(number)
        self._seen.add(number)

    def clear(self) -> None:
        self._order.clear()
        self._seen.clear()

    @property
    def numbers(self) -> tuple[int, ...]:
        """Called numbers in draw order."""
        return tuple(self._order)

    def as_set(self) -> frozenset[int]:
        return frozenset(self._seen)

    @property
    def current(self) -> Optional[int]:
        """The most recent call, or ``None`` before the first draw."""
        return self._order[-1] if self._order else None

    def recent(self, limit: int = 10) -> list[int]:
        """Return up to ``limit`` latest calls, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._order[-limit:]))

    def call_order(self, number: int) -> Optional[int]:
        """1-based position at which ``number`` was called, or ``None``."""
        if number not in self._seen:
            return None
        return self._order.index(number) + 1

    def board(self) -> list[list[tuple[int, Optional[int]]]]:
        """The full 1..90 board grouped by tens.

        Each entry is ``(number, call_order)`` with ``call_order`` ``None``
        for numbers not called yet.
        """
        positions = {n: i + 1 for i, n in enumerate(self._order)}
        return [
            [
                (n, positions.get(n))
                for n in range(start, min(start + BOARD_ROW_WIDTH, HIGHEST_NUMBER + 1))
            ]
            for start in range(LOWEST_NUMBER, HIGHEST_NUMBER + 1, BOARD_ROW_WIDTH)
        ]


__all__ = ["DrawHistory"]
