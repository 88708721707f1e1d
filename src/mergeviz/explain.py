"""Explanatory text for each stage of the merge process."""

from typing import Final, TYPE_CHECKING

from ._sanitise import render_symbol

# need only classnames for type annotation
if TYPE_CHECKING:
    from .engine import MergeRecord, StopReason


STAGE_NOTES: Final[tuple[str, ...]] = (
    "Tokenization starts with individual characters as tokens.",
    "The most frequent pair of adjacent tokens is identified.",
    "This pair is merged to create a new token, reducing the total number of tokens.",
    "The process repeats, gradually building a vocabulary of common sequences.",
    "As merges occur, the text can be represented more efficiently.",
    "The trade-off is between vocabulary size and compression efficiency.",
)


def explain_stage(step_count: int) -> str:
    """Return the note for ``step_count`` merges; later steps reuse the last note."""
    return STAGE_NOTES[min(max(step_count, 0), len(STAGE_NOTES) - 1)]


def describe_merge(record: "MergeRecord") -> str:
    """Describe a merge from its pair, frequency and new id."""
    times = "time" if record.frequency == 1 else "times"
    return (
        f"step {record.step}: merged '{render_symbol(record.left)}' + "
        f"'{render_symbol(record.right)}' -> '{render_symbol(record.pair_key)}' "
        f"(seen {record.frequency} {times}, new id {record.new_id})"
    )


def describe_noop(reason: "StopReason") -> str:
    from .engine import StopReason

    if reason is StopReason.STEP_LIMIT:
        return "step limit reached, reset to start over"
    return "no adjacent pairs left to merge"


__all__ = ["STAGE_NOTES", "explain_stage", "describe_merge", "describe_noop"]
