"""Game session state machine: draws, marking and lifecycle."""

from __future__ import annotations

from enum import Enum
import json
import logging
import random
from typing import Any, Callable, Iterable, Optional

from .config import make_rng
from .drawer import draw_number
from .history import DrawHistory
from .outcomes import DeclineReason, Declined, DrawOutcome, Drawn
from .tickets.generator import TicketGenerator
from .tickets.ticket import HIGHEST_NUMBER, LOWEST_NUMBER, Ticket, check_number

logger = logging.getLogger(__name__)

TOTAL_NUMBERS = HIGHEST_NUMBER - LOWEST_NUMBER + 1

DrawListener = Callable[[int, "GameSession"], None]


class SessionPhase(str, Enum):
    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"


class GameSession:
    """Coordinator owning the drawn numbers and the live ticket batch."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        generator: Optional[TicketGenerator] = None,
    ) -> None:
        """Create an empty, inactive session.

        Parameters
        ----------
        rng : Optional[random.Random], default: None
            Random source used to pick numbers. Pass a seeded instance for
            reproducible games; defaults to the shared source.
        generator : Optional[TicketGenerator], default: None
            Generator used by :meth:`generate_tickets`. Typically omitted, in
            which case one sharing ``rng`` is created on first use.
        """
        self._rng = rng or make_rng()
        self._generator = generator
        self._history = DrawHistory()
        self._tickets: list[Ticket] = []
        self._active = False
        self._listeners: list[DrawListener] = []

    def __repr__(self) -> str:
        return (
            f"<GameSession(phase='{self.phase.value}', called={self.called_count}, "
            f"tickets={len(self._tickets)})>"
        )

    # State views
    @property
    def phase(self) -> SessionPhase:
        if self._active:
            return SessionPhase.RUNNING
        if self._tickets:
            return SessionPhase.READY
        return SessionPhase.IDLE

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def tickets(self) -> tuple[Ticket, ...]:
        return tuple(self._tickets)

    @property
    def history(self) -> DrawHistory:
        return self._history

    @property
    def history_numbers(self) -> tuple[int, ...]:
        return self._history.numbers

    @property
    def drawn_numbers(self) -> frozenset[int]:
        return self._history.as_set()

    @property
    def current_number(self) -> Optional[int]:
        return self._history.current

    @property
    def called_count(self) -> int:
        return len(self._history)

    @property
    def remaining_count(self) -> int:
        return TOTAL_NUMBERS - len(self._history)

    @property
    def progress(self) -> float:
        """Share of the 90 numbers already called, as a percentage."""
        return len(self._history) / TOTAL_NUMBERS * 100

    # Tickets
    def load_tickets(self, tickets: Iterable[Ticket]) -> None:
        """Replace the ticket batch wholesale.

        Draw history and the active flag are left alone. The new tickets start
        without marks, even when numbers were already called for the previous
        batch.
        """
        self._tickets = list(tickets)
        if self._history:
            logger.info(
                f"Loaded {len(self._tickets)} ticket(s) mid-game; "
                f"{len(self._history)} earlier call(s) are not marked on them"
            )
        else:
            logger.info(f"Loaded {len(self._tickets)} ticket(s)")

    def generate_tickets(self, count: int) -> list[Ticket]:
        """Generate a new batch of ``count`` tickets and load it."""
        if self._generator is None:
            self._generator = TicketGenerator(self._rng)
        tickets = self._generator.generate(count)
        self.load_tickets(tickets)
        return tickets

    # Lifecycle
    def start(self) -> None:
        if not self._active:
            self._active = True
            logger.info("Game started")

    def pause(self) -> None:
        if self._active:
            self._active = False
            logger.info("Game paused")

    def toggle(self) -> bool:
        """Flip between running and paused; return the new active flag."""
        if self._active:
            self.pause()
        else:
            self.start()
        return self._active

    def reset(self) -> None:
        """Clear calls and marks and stop the game, keeping the tickets."""
        self._history.clear()
        self._active = False
        for ticket in self._tickets:
            ticket.clear_marks()
        logger.info("Game reset")

    # Drawing
    def check_draw(self) -> Optional[Declined]:
        """Return the reason a draw would be refused right now, if any."""
        if not self._active:
            return Declined(DeclineReason.INACTIVE)
        if self.remaining_count == 0:
            return Declined(DeclineReason.NO_NUMBERS_REMAINING)
        return None

    def draw_next(self) -> DrawOutcome:
        """Call the next number and mark it on every ticket.

        Returns
        -------
        DrawOutcome
            ``Drawn(number)`` on success. ``Declined(INACTIVE)`` while paused
            and ``Declined(NO_NUMBERS_REMAINING)`` after all 90 calls; in both
            cases the session is left unchanged.
        """
        declined = self.check_draw()
        if declined is not None:
            logger.debug(f"Draw declined: {declined.reason.value}")
            return declined
        return self.commit_draw()

    def commit_draw(self) -> DrawOutcome:
        """Draw and commit a number without checking the active flag.

        Paced callers check :meth:`check_draw` when a call is requested and
        commit here once their delay has elapsed, so a pause issued during
        the delay does not cancel the pending call. Only an exhausted pool
        still declines.
        """
        outcome = draw_number(self._history, self._rng)
        if isinstance(outcome, Drawn):
            self._apply(outcome.number)
            logger.debug(
                f"Drew {outcome.number} ({self.remaining_count} remaining)"
            )
            self._notify(outcome.number)
        return outcome

    def replay(self, numbers: Iterable[int]) -> None:
        """Apply ``numbers`` in order as if each had been drawn.

        The active flag is ignored and listeners are not notified. Replaying a
        session's history into a session holding the same tickets reproduces
        its marks exactly.

        Raises
        ------
        TypeError
            If a value is not an int.
        ValueError
            If a number is outside 1..90, already drawn, or repeated within
            ``numbers``. Nothing is applied in that case.
        """
        pending = list(numbers)
        seen: set[int] = set()
        for number in pending:
            check_number(number)
            if number in self._history or number in seen:
                raise ValueError(f"number {number} has already been drawn")
            seen.add(number)
        for number in pending:
            self._apply(number)

    def _apply(self, number: int) -> None:
        self._history.append(number)
        for ticket in self._tickets:
            ticket.mark(number)

    # Listeners
    def subscribe(self, listener: DrawListener) -> None:
        """Call ``listener(number, session)`` after every successful draw."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: DrawListener) -> None:
        self._listeners.remove(listener)

    def _notify(self, number: int) -> None:
        for listener in list(self._listeners):
            listener(number, self)

    # Serialisation
    def snapshot(self) -> dict[str, Any]:
        """Return a JSON-serialisable view of the session for renderers."""
        return {
            "phase": self.phase.value,
            "is_active": self._active,
            "current_number": self.current_number,
            "history": list(self._history.numbers),
            "called": self.called_count,
            "remaining": self.remaining_count,
            "progress": self.progress,
            "tickets": [ticket.to_json() for ticket in self._tickets],
        }

    def to_json(self) -> dict[str, Any]:
        return self.snapshot()

    def to_json_str(self) -> str:
        return json.dumps(self.snapshot(), ensure_ascii=False)


__all__ = ["DrawListener", "GameSession", "SessionPhase", "TOTAL_NUMBERS"]
