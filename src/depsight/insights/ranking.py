"""
Ranking utility for small candidate sets.

Candidate sets are bounded by a node's degree, so a plain stable sort is
all that is needed.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ScoredItem:
    """An issue id paired with one metric score."""
    id: str
    score: float


def rank_by_score(items: Iterable[ScoredItem]) -> List[ScoredItem]:
    """
    Order items by score, highest first.

    Equal scores keep their input order. The input need not be sorted.
    """
    # sorted() is stable with reverse=True as well
    return sorted(items, key=lambda item: item.score, reverse=True)


def cap(items: Sequence[T], limit: int) -> Tuple[List[T], int]:
    """
    Split `items` into the first `limit` entries and the count left over.

    Example:
        >>> cap(["a", "b", "c"], 2)
        (['a', 'b'], 1)
    """
    shown = list(items[:max(limit, 0)])
    return shown, len(items) - len(shown)
