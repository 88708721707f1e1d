"""mergeviz: step-by-step visualization of BPE-style token merges."""

from ._bpe import Token
from ._progress import disable_step_logging, enable_step_logging
from .autoplay import AutoPlayer
from .config import MAX_STEPS
from .engine import EngineState, MergeEngine, MergeRecord, StepOutcome, StopReason
from .errors import ConfigError, InputError, MergeVizError
from .explain import describe_merge, explain_stage

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mergeviz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "MAX_STEPS",
    "Token",
    "MergeRecord",
    "StopReason",
    "StepOutcome",
    "EngineState",
    "MergeEngine",
    "AutoPlayer",
    "MergeVizError",
    "InputError",
    "ConfigError",
    "describe_merge",
    "explain_stage",
    "enable_step_logging",
    "disable_step_logging",
]
