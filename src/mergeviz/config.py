"""Engine limits and auto-play defaults."""

from typing import Final

from .errors import ConfigError

# merges allowed per reset epoch
MAX_STEPS: Final[int] = 20

# auto-play timer bounds in milliseconds
DEFAULT_INTERVAL_MS: Final[int] = 1000
MIN_INTERVAL_MS: Final[int] = 100
MAX_INTERVAL_MS: Final[int] = 2000

DEFAULT_TEXT: Final[str] = "Who let the dogs out? ."


def check_max_steps(max_steps: int) -> int:
    """
    Validate a per-engine step limit.

    :raises ConfigError: If ``max_steps`` is not a non-negative integer.
    """
    # bool is an int subclass but never a meaningful limit
    if isinstance(max_steps, bool) or not isinstance(max_steps, int):
        raise ConfigError("max_steps must be an integer", value=max_steps)
    if max_steps < 0:
        raise ConfigError("max_steps must not be negative", value=max_steps)
    return max_steps


def check_interval_ms(interval_ms: int) -> int:
    """
    Validate an auto-play tick interval.

    :raises ConfigError: If ``interval_ms`` falls outside the supported range.
    """
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, int):
        raise ConfigError("interval_ms must be an integer", value=interval_ms)
    if not MIN_INTERVAL_MS <= interval_ms <= MAX_INTERVAL_MS:
        raise ConfigError(
            "interval_ms out of range",
            value=interval_ms,
            allowed=(MIN_INTERVAL_MS, MAX_INTERVAL_MS),
        )
    return interval_ms


__all__ = [
    "MAX_STEPS",
    "DEFAULT_INTERVAL_MS",
    "MIN_INTERVAL_MS",
    "MAX_INTERVAL_MS",
    "DEFAULT_TEXT",
    "check_max_steps",
    "check_interval_ms",
]
