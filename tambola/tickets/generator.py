"""Random generation of Tambola ticket batches."""

from __future__ import annotations

import logging
import random
import re
from typing import Any, Optional

from ..config import load_settings, make_rng
from .ids import generate_ticket_id
from .layout import DEFAULT_LAYOUT_REGISTRY, LayoutRegistry, LayoutStrategy
from .ticket import COLUMNS, ROWS, Ticket, column_range

logger = logging.getLogger(__name__)

CANDIDATES_PER_COLUMN = ROWS
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class TicketGenerator:
    """Builds independent tickets from an injected random source."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        layout: Optional[str] = None,
        registry: Optional[LayoutRegistry] = None,
    ) -> None:
        """Create a ticket generator.

        Parameters
        ----------
        rng : Optional[random.Random], default: None
            Random generator used for every choice; pass a seeded instance for
            deterministic tests. If omitted, the shared default source from
            :func:`~tambola.config.default_rng` is used.
        layout : Optional[str], default: None
            Key of the row layout strategy. Defaults to ``TAMBOLA_LAYOUT``
            (``"row_sample"`` unless configured otherwise).
        registry : Optional[LayoutRegistry], default: None
            Registry to resolve ``layout`` against. Typically omitted, in which
            case the default registry is used.
        """
        self._rng = rng or make_rng()
        self._registry = registry or DEFAULT_LAYOUT_REGISTRY
        self._layout: LayoutStrategy = self._registry.get(
            layout or load_settings().layout
        )

    @property
    def layout(self) -> LayoutStrategy:
        return self._layout

    def _column_candidates(self) -> list[list[int]]:
        """Three ascending candidates per column, drawn from its range."""
        candidates: list[list[int]] = []
        for c in range(COLUMNS):
            low, high = column_range(c)
            pool = list(range(low, high + 1))
            self._rng.shuffle(pool)
            candidates.append(sorted(pool[:CANDIDATES_PER_COLUMN]))
        return candidates

    def generate_one(self, ticket_id: Optional[str] = None) -> Ticket:
        """Generate a single ticket.

        Each column's queue of candidates is already ascending, so popping
        from the front row by row keeps every column sorted top to bottom.
        """
        candidates = self._column_candidates()
        grid: list[list[Optional[int]]] = [[None] * COLUMNS for _ in range(ROWS)]

        for row, columns in enumerate(self._layout.choose(self._rng)):
            for c in sorted(columns):
                if candidates[c]:
                    grid[row][c] = candidates[c].pop(0)

        return Ticket(
            id=ticket_id or generate_ticket_id(),
            grid=tuple(tuple(row) for row in grid),
        )

    def generate(self, count: int) -> list[Ticket]:
        """Generate ``count`` independent tickets.

        Parameters
        ----------
        count : int
            Number of tickets. Callers clamp this to the configured maximum
            (see :func:`clamp_ticket_count`); only values below 1 are rejected.

        Returns
        -------
        list[Ticket]
            Fresh tickets with empty marks and ids unique within the batch.

        Raises
        ------
        ValueError
            If ``count`` is smaller than 1.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        tickets: list[Ticket] = []
        ids: set[str] = set()
        for _ in range(count):
            ticket_id = generate_ticket_id(taken=ids)
            ids.add(ticket_id)
            tickets.append(self.generate_one(ticket_id))

        logger.debug(
            f"Generated {count} ticket(s) using the '{self._layout.key}' layout"
        )
        return tickets


def generate_tickets(
    count: int,
    rng: Optional[random.Random] = None,
    layout: Optional[str] = None,
) -> list[Ticket]:
    """Generate a batch of tickets with a one-off :class:`TicketGenerator`."""
    return TicketGenerator(rng, layout=layout).generate(count)


def clamp_ticket_count(value: Any, maximum: Optional[int] = None) -> int:
    """Clamp a requested ticket count to ``[1, maximum]``.

    Mirrors the ticket-count input: strings are read up to their leading
    integer (``"5.7"`` is 5, ``"12abc"`` is 12) and anything without one
    becomes 1. ``maximum`` defaults to ``TAMBOLA_MAX_TICKETS``.
    """
    if maximum is None:
        maximum = load_settings().max_tickets
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        count = int(match.group()) if match else 0
    else:
        try:
            count = int(value)
        except (TypeError, ValueError):
            count = 0
    return max(1, min(maximum, count))


__all__ = [
    "TicketGenerator",
    "clamp_ticket_count",
    "generate_tickets",
]
