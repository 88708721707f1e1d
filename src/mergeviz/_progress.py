import os

_enabled: bool = True


def enable_step_logging() -> None:
    """Log every applied merge at INFO level."""
    global _enabled
    _enabled = True


def disable_step_logging() -> None:
    """Demote per-merge log lines to DEBUG level."""
    global _enabled
    _enabled = False


def _is_enabled() -> bool:
    """Check if step logging is enabled (respects env var override)."""
    if os.environ.get("MERGEVIZ_QUIET", "").strip() == "1":
        return False
    return _enabled
