"""
Core Byte Pair Encoding (BPE) operations over string symbols.
"""

from dataclasses import dataclass
from collections.abc import Sequence

from .types import PairCounts, PairKey, TokenId


@dataclass(frozen=True, slots=True)
class Token:
    """One unit of the current tokenization."""

    symbol: str
    id: TokenId


def tokens_from_text(text: str) -> list[Token]:
    """Split text into one token per code point, keyed by ``ord``."""
    return [Token(ch, ord(ch)) for ch in text]


def pair_counts(tokens: Sequence[Token]) -> PairCounts:
    """
    Compute the frequency of all consecutive token pairs in the token list.

    Pairs are keyed by the concatenation of their two symbols. The returned
    dict iterates in the order each pair was first seen, which is what makes
    tie-breaking in :func:`most_frequent` deterministic.

    Args:
        tokens (Sequence[Token]): Current token sequence.

    Returns:
        PairCounts: Mapping of pair keys to their occurrence counts.
    """
    counts: PairCounts = {}

    for i in range(len(tokens) - 1):
        key = tokens[i].symbol + tokens[i + 1].symbol
        counts[key] = counts.get(key, 0) + 1

    return counts


def most_frequent(counts: PairCounts) -> tuple[PairKey, int] | None:
    """
    Pick the pair with the highest count.

    ``max`` keeps the first maximal item it meets, so equal counts resolve to
    the pair seen first during the scan.
    """
    if not counts:
        return None
    return max(counts.items(), key=lambda item: item[1])


def next_token_id(tokens: Sequence[Token]) -> TokenId:
    """Return an id strictly greater than every id in ``tokens``."""
    return max(tok.id for tok in tokens) + 1


def merge_pair(
    tokens: Sequence[Token], pair_key: PairKey, new_id: TokenId
) -> list[Token]:
    """
    Merge all occurrences of a target pair into a single new token.

    The scan runs left to right and never overlaps: once a pair is merged,
    both of its tokens are consumed and the merged token is not reconsidered
    as the left half of another match in the same pass.

    Args:
        tokens (Sequence[Token]): Original token sequence.
        pair_key (PairKey): Concatenated symbols of the pair to merge.
        new_id (TokenId): Id given to every merged token.

    Returns:
        list[Token]: New token list with every matching pair replaced.
    """
    merged = Token(pair_key, new_id)
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        if i < n - 1 and tokens[i].symbol + tokens[i + 1].symbol == pair_key:
            newtoks.append(merged)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


def split_pair(tokens: Sequence[Token], pair_key: PairKey) -> tuple[str, str] | None:
    """Return the symbols of the first adjacent pair that forms ``pair_key``."""
    for i in range(len(tokens) - 1):
        left, right = tokens[i].symbol, tokens[i + 1].symbol
        if left + right == pair_key:
            return left, right
    return None


__all__ = [
    "Token",
    "tokens_from_text",
    "pair_counts",
    "most_frequent",
    "next_token_id",
    "merge_pair",
    "split_pair",
]
