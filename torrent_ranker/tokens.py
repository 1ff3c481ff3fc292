from __future__ import annotations

"""
Title tokenizer.

Scene release names come in every flavour of punctuation known to man. This
module boils them down to a tidy list of lowercase tokens the matchers can
chew on, and leaves the release group's autograph at the door.
"""

import re
from typing import List, Optional, Sequence, Tuple, Union

VIDEO_EXTENSIONS = frozenset({"mkv", "mp4", "avi", "wmv", "mov", "flv", "webm"})

Criterion = Union[str, Tuple[str, ...]]

_SPLITTER = re.compile(r"[\s.]+")
_BRACKETS = re.compile(r"[\[\]()]")
_GROUP_SUFFIX = re.compile(r"^(?P<head>[^-]+)-(?P<tail>.+)$")


def tokenize(raw: str) -> List[str]:
    """
    Break a raw title into matcher-ready tokens.

    Parameters
    ----------
    raw : str
        Title exactly as the indexer served it, emoji and all.

    Returns
    -------
    list[str]
        Lowercase tokens in their original order, with brackets and hyphens
        stripped, a trailing video extension removed and a trailing
        ``<head>-<group>`` token trimmed down to ``<head>``.
    """

    pairs: List[Tuple[str, str]] = []
    for piece in _SPLITTER.split(raw.lower()):
        if not piece:
            continue
        hyphenated = _BRACKETS.sub("", piece)
        token = hyphenated.replace("-", "")
        if token:
            pairs.append((hyphenated, token))

    if pairs and pairs[-1][1] in VIDEO_EXTENSIONS:
        pairs.pop()

    tokens = [token for _, token in pairs]
    if pairs:
        match = _GROUP_SUFFIX.match(pairs[-1][0])
        if match:
            tokens[-1] = match.group("head")
    return tokens


def find_sliding_window_match(tokens: Sequence[str], criterion: Criterion) -> Optional[int]:
    """
    Find the first place a token (or run of tokens) shows up.

    Parameters
    ----------
    tokens : Sequence[str]
        Token stream to scan.
    criterion : str | tuple[str, ...]
        A single token, or an ordered tuple that must appear contiguously.

    Returns
    -------
    int | None
        Start index of the first match, or ``None`` if it never turns up.
    """

    window = (criterion,) if isinstance(criterion, str) else tuple(criterion)
    size = len(window)
    for start in range(len(tokens) - size + 1):
        if tuple(tokens[start : start + size]) == window:
            return start
    return None
