"""Row layout strategies deciding which columns each ticket row fills."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import Callable, Dict, Optional

from ..config import DEFAULT_LAYOUT
from .ticket import COLUMNS, NUMBERS_PER_ROW, ROWS

logger = logging.getLogger(__name__)

RowLayout = list[set[int]]


@dataclass(frozen=True)
class LayoutStrategy:
    """Definition of a row layout strategy.

    Attributes
    ----------
    key : str
        Registry key used to identify the strategy. This is used by
        :class:`LayoutRegistry` to map to the strategy definition.
    chooser : Callable[[random.Random], RowLayout]
        Callable that takes the random source and returns, for every ticket
        row, the set of column indices that row fills.
    description : Optional[str]
        Human-readable summary of the strategy's behaviour.
    """

    key: str
    chooser: Callable[[random.Random], RowLayout]
    description: Optional[str] = None

    def choose(self, rng: random.Random) -> RowLayout:
        """Return the column sets for each row, checked for shape.

        Parameters
        ----------
        rng : random.Random
            Random source consumed by the strategy.

        Returns
        -------
        RowLayout
            One set of column indices per row.
        """
        layout = self.chooser(rng)
        if len(layout) != ROWS:
            raise ValueError(
                f"Layout '{self.key}' returned {len(layout)} rows, expected {ROWS}"
            )
        for columns in layout:
            if len(columns) != NUMBERS_PER_ROW:
                raise ValueError(
                    f"Layout '{self.key}' filled {len(columns)} columns in a row, "
                    f"expected {NUMBERS_PER_ROW}"
                )
        return layout


class LayoutRegistry:
    """Mutable registry mapping layout keys to definitions."""

    def __init__(self) -> None:
        self._layouts: Dict[str, LayoutStrategy] = {}

    def register(self, strategy: LayoutStrategy, *, replace: bool = False) -> None:
        """Register a layout strategy under its key.

        Parameters
        ----------
        strategy : LayoutStrategy
            Strategy to add to the registry.
        replace : bool, default: False
            When ``True`` an existing registration with the same key is
            overwritten. Otherwise a duplicate raises :class:`ValueError`.
        """
        if not replace and strategy.key in self._layouts:
            raise ValueError(f"Layout '{strategy.key}' is already registered")
        self._layouts[strategy.key] = strategy

    def get(self, key: Optional[str] = None) -> LayoutStrategy:
        """Return the strategy registered under ``key``.

        An omitted or empty ``key`` selects ``DEFAULT_LAYOUT``. Unknown keys
        raise :class:`KeyError` listing the layouts that are registered.
        """
        key = key or DEFAULT_LAYOUT
        strategy = self._layouts.get(key)
        if strategy is None:
            known = ", ".join(sorted(self._layouts)) or "none"
            raise KeyError(f"Unknown ticket layout '{key}' (registered: {known})")
        return strategy

    def available_layouts(self) -> Dict[str, LayoutStrategy]:
        """Return a copy of the registered strategies keyed by identifier."""
        return dict(self._layouts)


def _sample_rows(rng: random.Random) -> RowLayout:
    """Pick a uniformly random set of columns for every row independently."""
    return [set(rng.sample(range(COLUMNS), NUMBERS_PER_ROW)) for _ in range(ROWS)]


def _covering_rows(rng: random.Random, *, max_attempts: int = 1000) -> RowLayout:
    """Resample row columns until every column is used by at least one row."""
    for attempt in range(1, max_attempts + 1):
        layout = _sample_rows(rng)
        covered = set().union(*layout)
        if len(covered) == COLUMNS:
            if attempt > 1:
                logger.debug(f"Column cover found after {attempt} attempts")
            return layout
    raise RuntimeError(
        f"Unable to cover all {COLUMNS} columns after {max_attempts} attempts"
    )


DEFAULT_LAYOUT_REGISTRY = LayoutRegistry()
DEFAULT_LAYOUT_REGISTRY.register(
    LayoutStrategy(
        key="row_sample",
        chooser=_sample_rows,
        description=(
            "Each row picks 5 of the 9 columns uniformly at random. A column "
            "that no row picks stays empty on the ticket."
        ),
    )
)
DEFAULT_LAYOUT_REGISTRY.register(
    LayoutStrategy(
        key="column_cover",
        chooser=_covering_rows,
        description=(
            "Like 'row_sample', but redraws the rows until every column holds "
            "between 1 and 3 numbers."
        ),
    )
)
__all__ = [
    "DEFAULT_LAYOUT",
    "DEFAULT_LAYOUT_REGISTRY",
    "LayoutRegistry",
    "LayoutStrategy",
    "RowLayout",
]
