"""
Core types for byte-pair encoding.
"""

type Rank = int
type TokenBytes = bytes
type RankMap = dict[TokenBytes, Rank]
type InverseRankMap = dict[Rank, TokenBytes]
