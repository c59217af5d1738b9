"""Tambola (90-ball bingo) tickets and game sessions."""

from .caller import NumberCaller
from .config import Settings, default_rng, load_settings, make_rng, reset_default_rng
from .drawer import draw_number, remaining_numbers
from .history import DrawHistory
from .outcomes import DeclineReason, Declined, DrawOutcome, Drawn
from .session import GameSession, SessionPhase
from .tickets import (
    Ticket,
    TicketGenerator,
    clamp_ticket_count,
    generate_tickets,
)

__all__ = [
    "DeclineReason",
    "Declined",
    "DrawHistory",
    "DrawOutcome",
    "Drawn",
    "GameSession",
    "NumberCaller",
    "SessionPhase",
    "Settings",
    "Ticket",
    "TicketGenerator",
    "clamp_ticket_count",
    "default_rng",
    "draw_number",
    "generate_tickets",
    "load_settings",
    "make_rng",
    "remaining_numbers",
    "reset_default_rng",
]
