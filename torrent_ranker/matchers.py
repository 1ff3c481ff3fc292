from __future__ import annotations

"""Static matcher tables for qualities and tags."""

from dataclasses import dataclass
from typing import Dict, Tuple

from .tokens import Criterion


@dataclass(frozen=True)
class MatcherRule:
    """Named rule that fires when any of its criteria shows up in a token stream."""

    name: str
    criteria: Tuple[Criterion, ...]
    consume: bool = False


# Highest resolution first. Position is rank.
QUALITY_MATCHERS: Tuple[MatcherRule, ...] = (
    MatcherRule("2160p", ("2160p", "4k")),
    MatcherRule("1080p", ("1080p", "fullhd", "fhd")),
    MatcherRule("720p", ("720p",)),
    MatcherRule("576p", ("576p", "pal")),
    MatcherRule("480p", ("480p", "ntsc", "sd")),
)

_BRREMUX: Tuple[Criterion, ...] = ("bdremux", "brremux")
_DOLBYVISION: Tuple[Criterion, ...] = ("dv", ("dolby", "vision"))
_HDR10: Tuple[Criterion, ...] = ("hdr10",)
_HDR10PLUS: Tuple[Criterion, ...] = ("hdr10plus", ("hdr10", "plus"), "hdr10+")
_HDR: Tuple[Criterion, ...] = (*_HDR10, *_HDR10PLUS, *_DOLBYVISION, "hdr", "10bit")

TAG_MATCHERS: Tuple[MatcherRule, ...] = (
    # video features
    MatcherRule("hdr", _HDR),
    MatcherRule("hdr10", _HDR10),
    MatcherRule("hdr10plus", _HDR10PLUS),
    MatcherRule("dolbyvision", _DOLBYVISION),
    MatcherRule("h265", ("x265", "h265", ("x", "265"), ("h", "265"), "hevc")),
    MatcherRule("h264", ("x264", "h264", ("x", "264"), ("h", "264"), "avc")),
    # source
    MatcherRule("remux", ("remux", *_BRREMUX)),
    MatcherRule("bluray", ("bluray", *_BRREMUX)),
    MatcherRule("web", ("web", "webdl", "webrip")),
    MatcherRule("hdtv", ("hdtv", "hdrip")),
    MatcherRule("cam", ("cam", "camrip", "hdts", "ts", "telesync", "telecine", "hdcam")),
    # languages and subtitles
    MatcherRule("hardsub", ("hc",)),
    MatcherRule("multisub", (("multi", "sub"),), consume=True),
    MatcherRule("dualaudio", ("dual",)),
    MatcherRule("multiaudio", ("multi",)),
)

QUALITY_RANKING: Tuple[str, ...] = tuple(rule.name for rule in QUALITY_MATCHERS)
TAGS: Tuple[str, ...] = tuple(rule.name for rule in TAG_MATCHERS)

_RANK_BY_QUALITY: Dict[str, int] = {name: index for index, name in enumerate(QUALITY_RANKING)}


def quality_rank(quality: str) -> int:
    """Return the table position of ``quality``; lower is better."""

    rank = _RANK_BY_QUALITY.get(quality)
    if rank is None:
        raise KeyError(f"Unknown quality: {quality}")
    return rank


def compare_quality(a: str, b: str) -> int:
    """Compare two qualities, best first (negative when ``a`` outranks ``b``)."""

    return quality_rank(a) - quality_rank(b)
