"""Unit tests for the pair counting and rewriting primitives."""

from mergeviz._bpe import (
    Token,
    merge_pair,
    most_frequent,
    next_token_id,
    pair_counts,
    split_pair,
    tokens_from_text,
)


def _symbols(tokens):
    return [tok.symbol for tok in tokens]


# Pair counting
# ---------------------------------------------------------------------------


def test_pair_counts_keep_first_seen_order():
    """Keys iterate in the order pairs first appear."""
    counts = pair_counts(tokens_from_text("banana"))
    assert list(counts) == ["ba", "an", "na"]
    assert counts == {"ba": 1, "an": 2, "na": 2}


def test_pair_counts_include_overlaps():
    """A run of n identical characters yields n - 1 pairs."""
    assert pair_counts(tokens_from_text("aaaa")) == {"aa": 3}


def test_pair_counts_short_sequences():
    """Fewer than two tokens have no pairs."""
    assert pair_counts([]) == {}
    assert pair_counts(tokens_from_text("a")) == {}


def test_pair_counts_key_by_concatenated_symbols():
    """Different splits of the same text share one key."""
    tokens = [Token("a", 97), Token("ab", 300), Token("aa", 301), Token("b", 98)]
    assert pair_counts(tokens)["aab"] == 2


# Selection
# ---------------------------------------------------------------------------


def test_most_frequent_tie_goes_to_first_seen():
    """"an" and "na" tie in "banana"; "an" was seen first."""
    assert most_frequent(pair_counts(tokens_from_text("banana"))) == ("an", 2)


def test_most_frequent_empty():
    assert most_frequent({}) is None


def test_next_token_id_exceeds_max():
    tokens = [Token("a", 97), Token("xy", 500), Token("b", 98)]
    assert next_token_id(tokens) == 501


# Rewriting
# ---------------------------------------------------------------------------


def test_merge_pair_non_overlapping_left_to_right():
    """An odd run leaves its last character unmerged."""
    merged = merge_pair(tokens_from_text("aaaaa"), "aa", 200)
    assert _symbols(merged) == ["aa", "aa", "a"]
    assert [tok.id for tok in merged] == [200, 200, 97]


def test_merge_pair_keeps_unrelated_tokens():
    merged = merge_pair(tokens_from_text("abcab"), "ab", 150)
    assert merged == [Token("ab", 150), Token("c", 99), Token("ab", 150)]


def test_merge_pair_without_match_is_identity():
    tokens = tokens_from_text("xyz")
    assert merge_pair(tokens, "qq", 999) == tokens


def test_split_pair_returns_first_occurrence():
    tokens = [Token("a", 97), Token("ab", 300), Token("aa", 301), Token("b", 98)]
    assert split_pair(tokens, "aab") == ("a", "ab")
    assert split_pair(tokens, "zz") is None
