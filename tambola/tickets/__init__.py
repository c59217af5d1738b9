"""Ticket model and generation."""

from .generator import TicketGenerator, clamp_ticket_count, generate_tickets
from .ids import generate_ticket_id
from .layout import (
    DEFAULT_LAYOUT,
    DEFAULT_LAYOUT_REGISTRY,
    LayoutRegistry,
    LayoutStrategy,
)
from .ticket import (
    COLUMNS,
    HIGHEST_NUMBER,
    LOWEST_NUMBER,
    NUMBERS_PER_ROW,
    NUMBERS_PER_TICKET,
    ROWS,
    Ticket,
    column_range,
)

__all__ = [
    "COLUMNS",
    "DEFAULT_LAYOUT",
    "DEFAULT_LAYOUT_REGISTRY",
    "HIGHEST_NUMBER",
    "LOWEST_NUMBER",
    "LayoutRegistry",
    "LayoutStrategy",
    "NUMBERS_PER_ROW",
    "NUMBERS_PER_TICKET",
    "ROWS",
    "Ticket",
    "TicketGenerator",
    "clamp_ticket_count",
    "column_range",
    "generate_ticket_id",
    "generate_tickets",
]
