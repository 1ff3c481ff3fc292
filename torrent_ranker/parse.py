from __future__ import annotations

"""
Torrentio stream title parsing.

Torrentio crams everything into one multi-line title: the torrent name
(sometimes), the file name (always), and a summary line full of emoji.
This module pulls them apart and hands the names to the classifier.
"""

import re
from typing import List, Optional

from .classify import Classification, classify
from .models import Episode, Movie, Numbering, Season, TorrentInfo

UNKNOWN_TRACKER = "<unknown>"

_SEEDERS_PARSER = re.compile(r"👤\s*(\d+)")
_SIZE_PARSER = re.compile(r"💾\s*([\d.]+\s*[A-Za-z]*B)")
_TRACKER_PARSER = re.compile(r"⚙️\s*(.+)")
_SIZE_VALUE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([a-z]*)\s*$", re.IGNORECASE)

_UNITS = {
    "b": 1,
    "kb": 1 << 10,
    "mb": 1 << 20,
    "gb": 1 << 30,
    "tb": 1 << 40,
    "pb": 1 << 50,
}


def parse_size(raw: str) -> Optional[int]:
    """
    Convert a human-readable size into bytes.

    Parameters
    ----------
    raw : str
        Something like ``"5.76 GB"``. Units are binary (1 KB = 1024 B).

    Returns
    -------
    int | None
        Whole bytes, rounded down, or ``None`` if the string is gibberish.
    """

    match = _SIZE_VALUE.match(raw)
    if not match:
        return None
    multiplier = _UNITS.get(match.group(2).lower() or "b")
    if multiplier is None:
        return None
    return int(float(match.group(1)) * multiplier)


def _numbering_from(filename: Optional[Classification], torrent: Optional[Classification]) -> Numbering:
    # A season-only torrent name wins: the torrent is the whole season even if
    # the file inside it is a single episode.
    if torrent and isinstance(torrent.numbering, Season):
        return torrent.numbering
    if filename and isinstance(filename.numbering, (Episode, Season)):
        return filename.numbering
    if torrent and isinstance(torrent.numbering, Episode):
        return torrent.numbering
    return Movie()


def _merge(filename: Optional[Classification], torrent: Optional[Classification]) -> Optional[Classification]:
    # The file name is usually more descriptive than the torrent name.
    quality = (filename and filename.quality) or (torrent and torrent.quality)
    if not quality:
        return None
    tags = set(filename.tags if filename else ()) | set(torrent.tags if torrent else ())
    return Classification(quality=quality, tags=tuple(sorted(tags)), numbering=_numbering_from(filename, torrent))


def parse_torrent_info(title: str, url: str) -> Optional[TorrentInfo]:
    """
    Parse a Torrentio stream title into a ranked-ready candidate.

    Parameters
    ----------
    title : str
        The multi-line ``title`` field of a Torrentio stream.
    url : str
        The stream URL, kept for snatching later.

    Returns
    -------
    TorrentInfo | None
        The classified candidate, or ``None`` if the title has no summary
        line, no file name, or no recognisable quality.
    """

    lines: List[str] = title.split("\n")
    meta_index = next((index for index, line in enumerate(lines) if "👤" in line), -1)
    if meta_index < 1:
        return None
    meta_line = lines[meta_index]

    seeders_match = _SEEDERS_PARSER.search(meta_line)
    seeders = int(seeders_match.group(1)) if seeders_match else -1
    size_match = _SIZE_PARSER.search(meta_line)
    size = parse_size(size_match.group(1)) if size_match else None
    tracker_match = _TRACKER_PARSER.search(meta_line)
    tracker = tracker_match.group(1).strip() if tracker_match else UNKNOWN_TRACKER

    filename_line = lines[meta_index - 1]
    torrent_line = lines[meta_index - 2] if meta_index >= 2 else None
    if not filename_line.strip():
        return None

    filename = classify(filename_line)
    torrent = classify(torrent_line) if torrent_line and torrent_line.strip() else None
    classification = _merge(filename, torrent) if torrent_line else filename
    if classification is None:
        return None

    return TorrentInfo(
        media_type=classification.numbering.media_type,
        quality=classification.quality,
        tags=frozenset(classification.tags),
        seeders=seeders,
        bytes=size if size is not None else -1,
        numbering=classification.numbering,
        tracker=tracker,
        url=url,
        title=filename_line.strip(),
    )
