"""Paced number calling with a single pending draw at a time."""

from __future__ import annotations

import logging
from threading import Lock
import time
from typing import Callable, Optional

from .config import load_settings
from .outcomes import DeclineReason, Declined, DrawOutcome
from .session import GameSession

logger = logging.getLogger(__name__)


class NumberCaller:
    """Serialises draw requests and waits a fixed delay before each commit.

    The delay gives an announcer time to build suspense. The session itself
    is only touched once the delay has elapsed, in a single step.
    """

    def __init__(
        self,
        session: GameSession,
        *,
        delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Wrap ``session`` for paced calling.

        Parameters
        ----------
        session : GameSession
            Session whose numbers are called.
        delay : Optional[float], default: None
            Seconds to wait before committing each draw. Defaults to
            ``TAMBOLA_DRAW_DELAY``.
        sleep : Callable[[float], None], default: time.sleep
            Function used to wait; tests substitute a no-op.
        """
        self._session = session
        self._delay = load_settings().draw_delay if delay is None else delay
        self._sleep = sleep
        self._lock = Lock()

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def is_pending(self) -> bool:
        """Whether a call is waiting out its delay."""
        return self._lock.locked()

    def can_call(self) -> bool:
        """Whether :meth:`call_next` would currently attempt a draw."""
        return not self.is_pending and self._session.check_draw() is None

    def call_next(self) -> DrawOutcome:
        """Draw the next number after the pacing delay.

        Returns ``Declined(CALL_IN_PROGRESS)`` straight away if another call
        is still pending, and the session's own decline without waiting when
        the game is paused or exhausted. Once accepted, the call is committed
        after the delay even if the game is paused or reset meanwhile.
        """
        if not self._lock.acquire(blocking=False):
            logger.debug("Call refused: another call is pending")
            return Declined(DeclineReason.CALL_IN_PROGRESS)
        try:
            declined = self._session.check_draw()
            if declined is not None:
                return declined
            if self._delay > 0:
                self._sleep(self._delay)
            return self._session.commit_draw()
        finally:
            self._lock.release()


__all__ = ["NumberCaller"]
