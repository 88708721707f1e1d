"""Text-mode front end: step a merge engine and print its views."""

import argparse
import logging
import sys
from typing import Literal

from ._sanitise import render_symbol
from .autoplay import AutoPlayer
from .config import (
    DEFAULT_INTERVAL_MS,
    DEFAULT_TEXT,
    MAX_STEPS,
    check_interval_ms,
    check_max_steps,
)
from .engine import EngineState, MergeEngine, StepOutcome
from .errors import MergeVizError
from .explain import explain_stage

log = logging.getLogger(__name__)

View = Literal["tokens", "merges", "compression", "all"]

BAR_WIDTH = 40


def render_tokens(state: EngineState) -> str:
    """Token stream as ``[symbol:id]`` cells."""
    return " ".join(f"[{render_symbol(tok.symbol)}:{tok.id}]" for tok in state.sequence)


def render_merges(state: EngineState) -> str:
    """Horizontal bar chart of merge frequencies, in merge order."""
    if not state.history:
        return "(no merges yet)"
    labels = [render_symbol(rec.pair_key) for rec in state.history]
    width = max(len(label) for label in labels)
    top = max(rec.frequency for rec in state.history)
    lines = []
    for label, rec in zip(labels, state.history):
        bar = "#" * max(1, round(rec.frequency / top * BAR_WIDTH))
        lines.append(f"{label:<{width}} | {bar} {rec.frequency}")
    return "\n".join(lines)


def render_compression(state: EngineState) -> str:
    """Compression ratio per step, scaled against the best ratio so far."""
    top = max(state.ratios)
    lines = []
    for step, ratio in enumerate(state.ratios):
        bar = "*" * max(1, round(ratio / top * BAR_WIDTH))
        lines.append(f"step {step:>2} | {ratio:5.2f}x {bar}")
    return "\n".join(lines)


def render_state(state: EngineState, view: View = "tokens") -> str:
    """Stats header, stage note and the requested view(s)."""
    header = (
        f"step {state.step_count} | vocab {state.vocab_size} | "
        f"tokens {state.n_tokens} | compression {state.compression_ratio:.2f}x"
    )
    parts = [header, explain_stage(state.step_count)]
    match view:
        case "tokens":
            parts.append(render_tokens(state))
        case "merges":
            parts.append(render_merges(state))
        case "compression":
            parts.append(render_compression(state))
        case "all":
            parts.extend(
                [render_tokens(state), render_merges(state), render_compression(state)]
            )
    return "\n".join(parts)


def _print_step(outcome: StepOutcome, state: EngineState, view: View) -> None:
    print(outcome.describe())
    if outcome.applied:
        print(render_state(state, view))
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mergeviz",
        description="Watch a BPE-style tokenizer merge the most frequent token pairs.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        default=DEFAULT_TEXT,
        help=f"Source text to tokenize (default: {DEFAULT_TEXT!r}).",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Number of merges to apply; not with --play (default: until exhausted).",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=MAX_STEPS,
        help=f"Merge limit per reset (default: {MAX_STEPS}).",
    )
    parser.add_argument(
        "--view",
        choices=["tokens", "merges", "compression", "all"],
        default="tokens",
        help="What to print after each merge (default: tokens).",
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Step on a timer instead of as fast as possible.",
    )
    parser.add_argument(
        "--interval-ms",
        type=int,
        default=DEFAULT_INTERVAL_MS,
        help=f"Auto-play interval, 100-2000 ms (default: {DEFAULT_INTERVAL_MS}).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every merge."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.play and args.steps is not None:
        parser.error("--steps cannot be combined with --play")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        check_interval_ms(args.interval_ms)
        engine = MergeEngine(args.text, max_steps=args.max_steps)
        print(render_state(engine.state, args.view))
        print()

        if args.play:
            player = AutoPlayer(
                engine,
                interval_ms=args.interval_ms,
                on_step=lambda outcome, state: _print_step(outcome, state, args.view),
            )
            player.start()
            try:
                player.join()
            except KeyboardInterrupt:
                log.warning("interrupted, stopping auto-play")
            finally:
                player.stop()
        else:
            if args.steps is not None:
                check_max_steps(args.steps)
            applied = 0
            while args.steps is None or applied < args.steps:
                outcome = engine.step()
                _print_step(outcome, engine.state, args.view)
                if not outcome.applied:
                    break
                applied += 1
    except MergeVizError as e:
        log.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
