from __future__ import annotations

"""Tiered sorting: filter, bucket by tier, sort inside each bucket."""

from collections import defaultdict
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SortSpec(Generic[T]):
    """
    How to rank a list of things.

    Attributes
    ----------
    eligible : Callable[[T], bool]
        ``False`` drops the item from the results entirely.
    tier : Callable[[T], int]
        Bucket for the item. Lower tiers come first.
    compare : Callable[[T, T], int]
        Ordering inside a tier; negative means ``a`` goes before ``b``.
    """

    eligible: Callable[[T], bool]
    tier: Callable[[T], int]
    compare: Callable[[T, T], int]


def sort(spec: SortSpec[T], items: Iterable[T]) -> List[T]:
    """Return the eligible items, best first. Ties keep their input order."""

    tiers: Dict[int, List[T]] = defaultdict(list)
    for item in items:
        if spec.eligible(item):
            tiers[spec.tier(item)].append(item)

    ranked: List[T] = []
    for tier in sorted(tiers):
        ranked.extend(sorted(tiers[tier], key=cmp_to_key(spec.compare)))
    return ranked


def best(spec: SortSpec[T], items: Iterable[T]) -> Optional[T]:
    """Return the top item, or ``None`` when nothing is eligible."""

    ranked = sort(spec, items)
    return ranked[0] if ranked else None
