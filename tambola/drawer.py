"""Selection of the next number to call."""

from __future__ import annotations

import logging
import random
from typing import Collection, Optional

from .outcomes import DeclineReason, Declined, DrawOutcome, Drawn
from .tickets.ticket import HIGHEST_NUMBER, LOWEST_NUMBER

logger = logging.getLogger(__name__)


def remaining_numbers(drawn: Collection[int]) -> list[int]:
    """Return the numbers in 1..90 not yet in ``drawn``, ascending."""
    return [n for n in range(LOWEST_NUMBER, HIGHEST_NUMBER + 1) if n not in drawn]


def draw_number(
    drawn: Collection[int], rng: Optional[random.Random] = None
) -> DrawOutcome:
    """Pick one not-yet-drawn number uniformly at random.

    Parameters
    ----------
    drawn : Collection[int]
        Numbers already called in the current game.
    rng : Optional[random.Random], default: None
        Random source; pass a seeded instance for deterministic results.

    Returns
    -------
    DrawOutcome
        ``Drawn(number)``, or ``Declined(NO_NUMBERS_REMAINING)`` once all 90
        numbers are out. The input is never modified.
    """
    remaining = remaining_numbers(drawn)
    if not remaining:
        logger.debug("No numbers remaining to draw")
        return Declined(DeclineReason.NO_NUMBERS_REMAINING)
    rng = rng or random.Random()
    return Drawn(rng.choice(remaining))


__all__ = ["draw_number", "remaining_numbers"]
