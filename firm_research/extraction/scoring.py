"""
Scored candidate collection.

Extraction strategies emit (value, score) pairs into a collector; one
deterministic sort picks the final order. Values flagged forced_first sort
ahead of everything else regardless of score, ties break on first-seen order.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoredCandidate:
    """A value with the evidence accumulated for it."""

    value: str
    score: float
    order: int  # First-seen position, used as the final tie-breaker
    forced_first: bool = False

    def sort_key(self) -> tuple:
        return (not self.forced_first, -self.score, self.order)


class CandidateCollector:
    """Accumulates scores per value; adding the same value again sums the scores."""

    def __init__(self):
        self._candidates: dict[str, ScoredCandidate] = {}

    def add(self, value: str, score: float, forced_first: bool = False) -> None:
        existing = self._candidates.get(value)
        if existing is None:
            self._candidates[value] = ScoredCandidate(
                value=value,
                score=score,
                order=len(self._candidates),
                forced_first=forced_first,
            )
            return
        existing.score += score
        existing.forced_first = existing.forced_first or forced_first

    def __len__(self) -> int:
        return len(self._candidates)

    def ranked(self, include_zero: bool = False) -> list[ScoredCandidate]:
        """Candidates in final order; zero-score values are kept only if forced."""
        kept = [
            c
            for c in self._candidates.values()
            if include_zero or c.forced_first or c.score > 0
        ]
        return sorted(kept, key=ScoredCandidate.sort_key)

    def values(self) -> list[str]:
        return [c.value for c in self.ranked()]
