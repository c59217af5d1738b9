import os
import random
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from dotenv import load_dotenv

# Pick up a local .env the same way for every entry point
load_dotenv()

DEFAULT_MAX_TICKETS = 12
DEFAULT_DRAW_DELAY = 1.0
DEFAULT_LAYOUT = "row_sample"


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment.

    Attributes
    ----------
    max_tickets : int
        Upper bound applied when clamping requested ticket counts.
    draw_delay : float
        Seconds the number caller waits before committing a draw.
    layout : str
        Key of the ticket layout strategy used by default.
    seed : Optional[int]
        Seed for the default random source; ``None`` means OS entropy.
    """

    max_tickets: int = DEFAULT_MAX_TICKETS
    draw_delay: float = DEFAULT_DRAW_DELAY
    layout: str = DEFAULT_LAYOUT
    seed: Optional[int] = None


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be a number") from exc


def load_settings() -> Settings:
    """Build :class:`Settings` from ``TAMBOLA_*`` environment variables."""
    max_tickets = _env_int("TAMBOLA_MAX_TICKETS", DEFAULT_MAX_TICKETS)
    if max_tickets is None or max_tickets < 1:
        raise ValueError("Environment variable 'TAMBOLA_MAX_TICKETS' must be >= 1")
    draw_delay = _env_float("TAMBOLA_DRAW_DELAY", DEFAULT_DRAW_DELAY)
    if draw_delay < 0:
        raise ValueError("Environment variable 'TAMBOLA_DRAW_DELAY' must be >= 0")
    return Settings(
        max_tickets=max_tickets,
        draw_delay=draw_delay,
        layout=os.getenv("TAMBOLA_LAYOUT") or DEFAULT_LAYOUT,
        seed=_env_int("TAMBOLA_SEED", None),
    )


_default_rng: Optional[random.Random] = None
_default_rng_lock = Lock()


def default_rng() -> random.Random:
    """Return the process-wide random source, created once from ``TAMBOLA_SEED``.

    Every default-constructed generator and session draws from this one
    instance, so a configured seed makes a whole run reproducible while
    successive batches within the run still differ.
    """
    global _default_rng
    if _default_rng is not None:
        return _default_rng
    with _default_rng_lock:
        if _default_rng is None:
            _default_rng = random.Random(load_settings().seed)
        return _default_rng


def reset_default_rng() -> None:
    """Drop the shared random source so the next use re-reads the settings."""
    global _default_rng
    with _default_rng_lock:
        _default_rng = None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a new source for an explicit ``seed``, else the shared default."""
    if seed is None:
        return default_rng()
    return random.Random(seed)
