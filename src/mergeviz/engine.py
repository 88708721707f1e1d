"""
Incremental merge engine.

The engine owns a single token sequence and grows it into longer symbols one
merge at a time. Every public operation publishes a fresh immutable
:class:`EngineState`, so readers holding a snapshot never see a half-applied
step.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from . import _progress
from ._bpe import (
    Token,
    merge_pair,
    most_frequent,
    next_token_id,
    pair_counts,
    split_pair,
    tokens_from_text,
)
from ._decorators import measure_time
from .config import MAX_STEPS, check_max_steps
from .errors import InputError
from .explain import describe_merge, describe_noop
from .types import PairKey, TokenId

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergeRecord:
    """
    A merge of ``left`` + ``right`` into a token with id ``new_id``.

    ``frequency`` is the pair count from the scan, overlapping runs included;
    ``replaced`` is how many non-overlapping occurrences were rewritten.
    """

    pair_key: PairKey
    new_id: TokenId
    frequency: int
    replaced: int
    left: str
    right: str
    step: int


class StopReason(str, Enum):
    """Why a call to :meth:`MergeEngine.step` changed nothing."""

    STEP_LIMIT = "step_limit"
    NO_PAIRS = "no_pairs"


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Result of one :meth:`MergeEngine.step` call."""

    applied: bool
    reason: StopReason | None = None
    record: MergeRecord | None = None

    def __post_init__(self) -> None:
        if self.applied and self.record is None:
            raise ValueError("an applied step must carry its merge record")
        if not self.applied and self.reason is None:
            raise ValueError("a no-op step must carry a stop reason")

    def describe(self) -> str:
        """Human-readable summary of what the step did."""
        if self.record is not None:
            return describe_merge(self.record)
        return describe_noop(self.reason)


@dataclass(frozen=True, slots=True)
class EngineState:
    """
    Snapshot of the engine after a ``reset`` or ``step``.

    ``ratios[i]`` is the compression ratio after ``i`` merges, so
    ``ratios[-1] == compression_ratio`` always holds.
    """

    source_text: str = ""
    sequence: tuple[Token, ...] = ()
    merges: Mapping[PairKey, MergeRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    history: tuple[MergeRecord, ...] = ()
    ratios: tuple[float, ...] = (1.0,)
    step_count: int = 0
    vocab_size: int = 0
    compression_ratio: float = 1.0

    @property
    def text(self) -> str:
        """Concatenation of all symbols, always equal to ``source_text``."""
        return "".join(tok.symbol for tok in self.sequence)

    @property
    def n_tokens(self) -> int:
        return len(self.sequence)


def _initial_state(text: str) -> EngineState:
    sequence = tuple(tokens_from_text(text))
    return EngineState(
        source_text=text,
        sequence=sequence,
        vocab_size=len({tok.id for tok in sequence}),
    )


class MergeEngine:
    """
    Deterministic, step-bounded BPE merge engine over a single string.

    Example:
       >>> engine = MergeEngine("aab")
       >>> engine.step().record.pair_key
       'aa'
       >>> [tok.symbol for tok in engine.sequence]
       ['aa', 'b']
       >>> engine.compression_ratio
       1.5
    """

    def __init__(self, text: str = "", max_steps: int = MAX_STEPS) -> None:
        """Initialize the engine and tokenize ``text``."""
        self.max_steps: int = check_max_steps(max_steps)
        # reset/step are serialized so a timer thread and a caller can share one engine
        self._lock = threading.RLock()
        self._state: EngineState = EngineState()
        self.reset(text)

    def reset(self, text: str) -> EngineState:
        """
        Replace all state with one token per character of ``text``.

        :param text: Source text; the empty string is allowed.
        :returns: The new initial snapshot.
        :raises InputError: If ``text`` is not a string.
        """
        if not isinstance(text, str):
            raise InputError("source text must be a string", got_type=type(text))

        state = _initial_state(text)
        with self._lock:
            self._state = state

        log.debug(
            f"reset: {len(text)} chars, {state.vocab_size} distinct initial tokens"
        )
        return state

    def step(self) -> StepOutcome:
        """
        Merge every non-overlapping occurrence of the most frequent pair.

        Exhaustion is reported through the outcome, never raised: the call is
        a no-op with ``StopReason.STEP_LIMIT`` once ``max_steps`` merges were
        applied, and with ``StopReason.NO_PAIRS`` when fewer than two tokens
        remain.
        """
        with self._lock:
            state = self._state

            if state.step_count >= self.max_steps:
                return StepOutcome(applied=False, reason=StopReason.STEP_LIMIT)

            best = most_frequent(pair_counts(state.sequence))
            if best is None:
                return StepOutcome(applied=False, reason=StopReason.NO_PAIRS)

            pair_key, frequency = best
            # split must be read from the sequence before it is rewritten
            left, right = split_pair(state.sequence, pair_key)
            new_id = next_token_id(state.sequence)
            sequence = tuple(merge_pair(state.sequence, pair_key, new_id))

            step_count = state.step_count + 1
            record = MergeRecord(
                pair_key=pair_key,
                new_id=new_id,
                frequency=frequency,
                replaced=len(state.sequence) - len(sequence),
                left=left,
                right=right,
                step=step_count,
            )
            ratio = len(state.source_text) / len(sequence)

            self._state = EngineState(
                source_text=state.source_text,
                sequence=sequence,
                merges=MappingProxyType({**state.merges, pair_key: record}),
                history=state.history + (record,),
                ratios=state.ratios + (ratio,),
                step_count=step_count,
                vocab_size=state.vocab_size + 1,
                compression_ratio=ratio,
            )

        if _progress._is_enabled():
            log.info(
                "merge %d/%d: %r + %r -> %d (x%d)",
                step_count,
                self.max_steps,
                left,
                right,
                new_id,
                frequency,
            )
        else:
            log.debug(f"merge {step_count}: {pair_key!r} -> {new_id}")

        return StepOutcome(applied=True, record=record)

    @measure_time
    def run(self, max_steps: int | None = None) -> list[StepOutcome]:
        """
        Step until the engine is exhausted or ``max_steps`` merges were applied.

        :param max_steps: Upper bound on merges for this call; ``None`` runs
            until a step is a no-op.
        :returns: The applied outcomes, in order.
        """
        if max_steps is not None:
            check_max_steps(max_steps)

        applied: list[StepOutcome] = []
        while max_steps is None or len(applied) < max_steps:
            outcome = self.step()
            if not outcome.applied:
                log.debug(f"run stopped: {outcome.reason.value}")
                break
            applied.append(outcome)
        return applied

    # read accessors
    # ---------------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        """Latest published snapshot."""
        return self._state

    @property
    def source_text(self) -> str:
        return self._state.source_text

    @property
    def sequence(self) -> tuple[Token, ...]:
        return self._state.sequence

    @property
    def merges(self) -> Mapping[PairKey, MergeRecord]:
        return self._state.merges

    @property
    def history(self) -> tuple[MergeRecord, ...]:
        return self._state.history

    @property
    def step_count(self) -> int:
        return self._state.step_count

    @property
    def vocab_size(self) -> int:
        return self._state.vocab_size

    @property
    def compression_ratio(self) -> float:
        return self._state.compression_ratio

    @property
    def exhausted(self) -> bool:
        """``True`` when the next :meth:`step` is guaranteed to be a no-op."""
        state = self._state
        return state.step_count >= self.max_steps or len(state.sequence) < 2

    def merge_frequencies(self) -> list[tuple[PairKey, int]]:
        """Merged pairs with their frequencies, in the order the merges happened."""
        return [(rec.pair_key, rec.frequency) for rec in self._state.history]

    def compression_series(self) -> list[tuple[int, float]]:
        """Compression ratio indexed by step, starting with step 0."""
        return list(enumerate(self._state.ratios))


__all__ = [
    "Token",
    "MergeRecord",
    "StopReason",
    "StepOutcome",
    "EngineState",
    "MergeEngine",
]
