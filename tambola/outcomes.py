"""Result values returned by draw operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class DeclineReason(str, Enum):
    INACTIVE = "inactive"
    NO_NUMBERS_REMAINING = "no_numbers_remaining"
    CALL_IN_PROGRESS = "call_in_progress"


@dataclass(frozen=True)
class Drawn:
    """A number was drawn and committed."""

    number: int

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Declined:
    """The draw was refused and no state changed.

    Attributes
    ----------
    reason : DeclineReason
        Why nothing happened: the game is paused, all 90 numbers are out,
        or another paced call has not finished yet.
    """

    reason: DeclineReason

    @property
    def accepted(self) -> bool:
        return False


DrawOutcome = Union[Drawn, Declined]

__all__ = ["DeclineReason", "Declined", "DrawOutcome", "Drawn"]
