"""Environment-driven defaults for simulation runs.

Every simulation default can be overridden through a ``HANDSIM_*``
environment variable (or a ``.env`` file). Request models fall back to
these values when a field is omitted.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


DEFAULT_OPENING_HAND = 5
DEFAULT_NEXT_DRAWS = 10
DEFAULT_SAMPLES = 10_000
DEFAULT_CARDS_PER_TURN = 1.5
DEFAULT_BY_DRAW_THRESHOLD = 3
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SimSettings:
    """Default parameters for draw simulations."""

    opening_hand: int
    next_draws: int
    samples: int
    cards_per_turn: float
    by_draw_threshold: int
    seed: int | None
    log_level: str
    log_to_file: bool


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@lru_cache(maxsize=1)
def get_sim_settings() -> SimSettings:
    """Load simulation defaults from environment variables.

    Returns:
        SimSettings populated from ``HANDSIM_*`` variables.

    Raises:
        ValueError: If a numeric variable cannot be parsed.
    """
    return SimSettings(
        opening_hand=_int_env("HANDSIM_OPENING_HAND", DEFAULT_OPENING_HAND),
        next_draws=_int_env("HANDSIM_NEXT_DRAWS", DEFAULT_NEXT_DRAWS),
        samples=_int_env("HANDSIM_SAMPLES", DEFAULT_SAMPLES),
        cards_per_turn=_float_env("HANDSIM_CARDS_PER_TURN", DEFAULT_CARDS_PER_TURN),
        by_draw_threshold=_int_env("HANDSIM_BY_DRAW_THRESHOLD", DEFAULT_BY_DRAW_THRESHOLD),
        seed=_int_env("HANDSIM_SEED", None),
        log_level=os.getenv("HANDSIM_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_to_file=os.getenv("HANDSIM_LOG_TO_FILE", "false").strip().lower() in _TRUTHY,
    )


def clear_settings_cache() -> None:
    """Clear the cached settings.

    Useful for testing when environment variables change.
    """
    get_sim_settings.cache_clear()
