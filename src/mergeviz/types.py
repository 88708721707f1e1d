"""
Core types for merge visualization.
"""

type TokenId = int
type PairKey = str
type PairCounts = dict[PairKey, int]
