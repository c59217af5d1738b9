"""Tambola ticket entity and layout rules."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Optional

ROWS = 3
COLUMNS = 9
NUMBERS_PER_ROW = 5
NUMBERS_PER_TICKET = ROWS * NUMBERS_PER_ROW
LOWEST_NUMBER = 1
HIGHEST_NUMBER = 90

Grid = tuple[tuple[Optional[int], ...], ...]


def column_range(column: int) -> tuple[int, int]:
    """Return the inclusive ``(low, high)`` range of values allowed in ``column``.

    Column ``c`` holds ``10c+1`` to ``10c+10``; the last column is capped at 90.
    """
    if not 0 <= column < COLUMNS:
        raise ValueError(f"column must be within 0..{COLUMNS - 1}, got {column}")
    low = column * 10 + 1
    return low, min(low + 9, HIGHEST_NUMBER)


def check_number(number: int) -> int:
    """Validate that ``number`` is a callable Tambola number and return it."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise TypeError("number must be an int")
    if not LOWEST_NUMBER <= number <= HIGHEST_NUMBER:
        raise ValueError(
            f"number must be within {LOWEST_NUMBER}..{HIGHEST_NUMBER}, got {number}"
        )
    return number


@dataclass(eq=False)
class Ticket:
    """A single player's 3x9 Tambola ticket.

    The grid is fixed when the ticket is created. ``marked_numbers`` grows as
    numbers are drawn and is only changed by the owning
    :class:`~tambola.session.GameSession`.

    Attributes
    ----------
    id : str
        Opaque identifier assigned at creation.
    grid : Grid
        Three rows of nine cells. Empty cells are ``None``.
    marked_numbers : set[int]
        Numbers drawn while this ticket was loaded, whether or not they
        appear on the grid.
    """

    id: str
    grid: Grid
    marked_numbers: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.grid = tuple(tuple(row) for row in self.grid)
        if len(self.grid) != ROWS or any(len(row) != COLUMNS for row in self.grid):
            raise ValueError(f"grid must be {ROWS} rows of {COLUMNS} cells")

    def __repr__(self) -> str:
        return (
            f"<Ticket(id='{self.id}', numbers={len(self.numbers)}, "
            f"marked={len(self.marked_numbers)})>"
        )

    @property
    def rows(self) -> Grid:
        return self.grid

    def column(self, column: int) -> tuple[Optional[int], ...]:
        """Return the cells of ``column`` from top to bottom."""
        return tuple(row[column] for row in self.grid)

    @property
    def numbers(self) -> frozenset[int]:
        """All values printed on the ticket."""
        return frozenset(cell for row in self.grid for cell in row if cell is not None)

    @property
    def column_counts(self) -> list[int]:
        """Number of filled cells in each column."""
        return [
            sum(1 for cell in self.column(c) if cell is not None)
            for c in range(COLUMNS)
        ]

    def has_number(self, number: int) -> bool:
        return number in self.numbers

    def is_marked(self, number: int) -> bool:
        """Whether ``number`` is on this ticket and has been drawn.

        This is what a renderer highlights; plain membership in
        ``marked_numbers`` also covers drawn numbers the ticket does not carry.
        """
        return number in self.marked_numbers and self.has_number(number)

    @property
    def matched_numbers(self) -> frozenset[int]:
        """Drawn numbers that actually appear on the grid."""
        return self.numbers & frozenset(self.marked_numbers)

    def mark(self, number: int) -> None:
        self.marked_numbers.add(check_number(number))

    def clear_marks(self) -> None:
        self.marked_numbers.clear()

    def layout_violations(self, *, require_every_column: bool = False) -> list[str]:
        """Check the grid against the Tambola layout rules.

        Parameters
        ----------
        require_every_column : bool, default: False
            Also report columns that hold no number at all.

        Returns
        -------
        list[str]
            Human-readable descriptions of every broken rule; empty when the
            ticket is valid.
        """
        problems: list[str] = []
        seen: set[int] = set()
        filled = 0

        for r, row in enumerate(self.grid):
            row_count = sum(1 for cell in row if cell is not None)
            filled += row_count
            if row_count != NUMBERS_PER_ROW:
                problems.append(
                    f"row {r} has {row_count} numbers (must be {NUMBERS_PER_ROW})"
                )

        if filled != NUMBERS_PER_TICKET:
            problems.append(
                f"ticket has {filled} numbers (must be {NUMBERS_PER_TICKET})"
            )

        for c in range(COLUMNS):
            low, high = column_range(c)
            values = [cell for cell in self.column(c) if cell is not None]
            if require_every_column and not values:
                problems.append(f"column {c} is empty")
            for value in values:
                if not low <= value <= high:
                    problems.append(
                        f"column {c} holds {value} outside {low}..{high}"
                    )
                if value in seen:
                    problems.append(f"number {value} appears more than once")
                seen.add(value)
            if any(a >= b for a, b in zip(values, values[1:])):
                problems.append(f"column {c} is not ascending top to bottom")

        stray = [n for n in self.marked_numbers if not LOWEST_NUMBER <= n <= HIGHEST_NUMBER]
        if stray:
            problems.append(f"marked numbers outside range: {sorted(stray)}")

        return problems

    def is_valid(self, *, require_every_column: bool = False) -> bool:
        return not self.layout_violations(require_every_column=require_every_column)

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-serialisable dict describing the ticket."""
        return {
            "id": self.id,
            "grid": [list(row) for row in self.grid],
            "marked_numbers": sorted(self.marked_numbers),
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json(), ensure_ascii=False)


__all__ = [
    "COLUMNS",
    "Grid",
    "HIGHEST_NUMBER",
    "LOWEST_NUMBER",
    "NUMBERS_PER_ROW",
    "NUMBERS_PER_TICKET",
    "ROWS",
    "Ticket",
    "check_number",
    "column_range",
]
