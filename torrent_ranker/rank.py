from __future__ import annotations

"""
Candidate ranking.

Listens to the profile, assigns a tier, and crowns the winner without
breaking a sweat.
"""

from typing import Iterable, List, Optional, TypeVar

from .matchers import compare_quality, quality_rank
from .models import Candidate, MediaType
from .profile import LARGEST_FILE_SIZE, MOST_SEEDERS, Profile
from .sort_engine import SortSpec, best, sort

C = TypeVar("C", bound=Candidate)


def satisfies_quality(profile: Profile, candidate: Candidate) -> bool:
    """Check the candidate's quality against the profile's bounds; equal ranks pass."""

    rank = quality_rank(candidate.quality)
    if profile.minimum and profile.minimum.quality:
        if rank > quality_rank(profile.minimum.quality):
            return False
    if profile.maximum and profile.maximum.quality:
        if rank < quality_rank(profile.maximum.quality):
            return False
    return True


def satisfies_seeders(profile: Profile, candidate: Candidate) -> bool:
    """Check the candidate's seeder count against the profile's bounds."""

    if profile.minimum and profile.minimum.seeders is not None:
        if candidate.seeders < profile.minimum.seeders:
            return False
    if profile.maximum and profile.maximum.seeders is not None:
        if candidate.seeders > profile.maximum.seeders:
            return False
    return True


def satisfies_tags(profile: Profile, candidate: Candidate) -> bool:
    """Every required tag present, no forbidden tag present."""

    if any(tag not in candidate.tags for tag in profile.required):
        return False
    if any(tag in candidate.tags for tag in profile.forbidden):
        return False
    return True


def satisfies(profile: Profile, candidate: Candidate) -> bool:
    """All of the profile's hard constraints hold."""

    return (
        satisfies_quality(profile, candidate)
        and satisfies_seeders(profile, candidate)
        and satisfies_tags(profile, candidate)
    )


def _tier(profile: Profile, candidate: Candidate) -> int:
    discouraged = sum(1 for tag in profile.discouraged if tag in candidate.tags)
    if discouraged:
        return discouraged
    preferred = sum(1 for tag in profile.preferred if tag in candidate.tags)
    if preferred:
        return -preferred
    return 0


def _compare(profile: Profile, a: Candidate, b: Candidate) -> int:
    by_quality = compare_quality(a.quality, b.quality)
    if by_quality:
        return by_quality
    if profile.sort == MOST_SEEDERS:
        return b.seeders - a.seeders
    if profile.sort == LARGEST_FILE_SIZE:
        return b.bytes - a.bytes
    raise ValueError(f"Unsupported sort: {profile.sort}")


def _spec(media_type: MediaType, profile: Profile) -> SortSpec[Candidate]:
    return SortSpec(
        eligible=lambda c: c.media_type == media_type and satisfies(profile, c),
        tier=lambda c: _tier(profile, c),
        compare=lambda a, b: _compare(profile, a, b),
    )


def sort_candidates(media_type: MediaType, profile: Profile, candidates: Iterable[C]) -> List[C]:
    """
    Rank candidates for one profile.

    Parameters
    ----------
    media_type : MediaType
        Only candidates of this type are considered.
    profile : Profile
        The policy doing the judging.
    candidates : Iterable[Candidate]
        Classified search results.

    Returns
    -------
    list[Candidate]
        Eligible candidates, best first. Empty when nothing qualifies.
    """

    return sort(_spec(media_type, profile), candidates)


def pick_best(media_type: MediaType, profile: Profile, candidates: Iterable[C]) -> Optional[C]:
    """Return the single best candidate for ``profile``, or ``None`` if none qualify."""

    return best(_spec(media_type, profile), candidates)
