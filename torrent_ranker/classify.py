from __future__ import annotations

"""
Title classification.

Runs the matcher tables over a tokenized title and squeezes out a quality,
a handful of tags and whatever season/episode numbering the uploader
bothered to include.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .matchers import QUALITY_MATCHERS, TAG_MATCHERS, MatcherRule
from .models import Episode, Movie, Numbering, Season
from .tokens import find_sliding_window_match, tokenize

_EPISODE_PATTERN = re.compile(r"\bs(\d+)e(\d+)\b", re.IGNORECASE)
_SEASON_PATTERN = re.compile(r"\bs(\d+)\b", re.IGNORECASE)


@dataclass(frozen=True)
class Classification:
    """Structured facts pulled out of a single title."""

    quality: str
    tags: Tuple[str, ...]
    numbering: Numbering = Movie()

    @property
    def season(self) -> Optional[int]:
        return getattr(self.numbering, "season", None)

    @property
    def episode(self) -> Optional[int]:
        return getattr(self.numbering, "episode", None)


def match_quality(tokens: Sequence[str], rules: Iterable[MatcherRule] = QUALITY_MATCHERS) -> Optional[str]:
    """
    Find the quality of a token stream.

    Parameters
    ----------
    tokens : Sequence[str]
        Output of :func:`tokenize`.
    rules : Iterable[MatcherRule], optional
        Quality rules in precedence order.

    Returns
    -------
    str | None
        Name of the first rule with a matching criterion, or ``None``.
    """

    for rule in rules:
        for criterion in rule.criteria:
            if find_sliding_window_match(tokens, criterion) is not None:
                return rule.name
    return None


def match_tags(tokens: Sequence[str], rules: Iterable[MatcherRule] = TAG_MATCHERS) -> List[str]:
    """
    Collect every tag whose rule matches the token stream.

    Parameters
    ----------
    tokens : Sequence[str]
        Output of :func:`tokenize`. Never modified.
    rules : Iterable[MatcherRule], optional
        Tag rules. Rules marked ``consume`` remove the tokens they matched
        so later rules can't claim them too.

    Returns
    -------
    list[str]
        Unique tag names, sorted ascending.
    """

    working = list(tokens)
    found: Set[str] = set()

    for rule in rules:
        for criterion in rule.criteria:
            index = find_sliding_window_match(working, criterion)
            if index is None:
                continue
            found.add(rule.name)
            if rule.consume:
                width = 1 if isinstance(criterion, str) else len(criterion)
                del working[index : index + width]
            break

    return sorted(found)


def parse_numbering(raw: str) -> Numbering:
    """Read ``SxxEyy`` or ``Sxx`` markers straight off the raw title."""

    match = _EPISODE_PATTERN.search(raw)
    if match:
        return Episode(season=int(match.group(1)), episode=int(match.group(2)))
    match = _SEASON_PATTERN.search(raw)
    if match:
        return Season(season=int(match.group(1)))
    return Movie()


def classify(raw: str) -> Optional[Classification]:
    """
    Classify a raw torrent title.

    Parameters
    ----------
    raw : str
        The title, however scruffy.

    Returns
    -------
    Classification | None
        The quality, tags and numbering, or ``None`` when no quality could be
        found and the title should be skipped.
    """

    tokens = tokenize(raw)
    quality = match_quality(tokens)
    if quality is None:
        return None
    return Classification(quality=quality, tags=tuple(match_tags(tokens)), numbering=parse_numbering(raw))
