from __future__ import annotations

"""
High-level torrent selection logic.

Listens to Torrentio, classifies what comes back, and crowns one winner per
profile without breaking a sweat.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .models import ToFetch, TorrentInfo
from .parse import parse_torrent_info
from .profile import Profile
from .rank import pick_best
from .torrentio import TorrentioClient, TorrentioResult

DEFAULT_MAX_WORKERS = 5


@dataclass(frozen=True)
class Pick:
    """The winner for one profile."""

    profile: Profile
    profile_hash: str
    info: TorrentInfo


class TorrentFinder:
    """Wraps TorrentioClient to fetch candidates and choose the best ones."""

    def __init__(self, torrentio_client: TorrentioClient, max_workers: int = DEFAULT_MAX_WORKERS):
        """
        Parameters
        ----------
        torrentio_client : TorrentioClient
            I refuse to write what this is.
        max_workers : int, optional
            Upper bound on titles classified at once.
        """

        self._torrentio = torrentio_client
        self._max_workers = max(1, max_workers)

    @staticmethod
    def _classify(result: TorrentioResult) -> Optional[TorrentInfo]:
        info = parse_torrent_info(result.title, result.url)
        if info is None:
            logging.debug("Skipping unclassifiable result: %r", result.title)
        return info

    def find_candidates(self, media: ToFetch) -> List[TorrentInfo]:
        """
        Pull a fresh list of classified torrents.

        Parameters
        ----------
        media : ToFetch
            What the user asked for.

        Returns
        -------
        list[TorrentInfo]
            Every result that could be classified, in Torrentio's order.
        """

        results = self._torrentio.search(media)
        logging.debug("Finder received %d results", len(results))
        if not results:
            return []

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            classified = list(pool.map(self._classify, results))

        candidates = [info for info in classified if info is not None]
        logging.debug("Finder classified %d of %d results", len(candidates), len(results))
        return candidates

    def pick_best(self, media: ToFetch, profiles: Iterable[Profile], candidates: List[TorrentInfo]) -> List[Pick]:
        """
        Select the highest-ranked candidate for each profile.

        Parameters
        ----------
        media : ToFetch
            Decides which media type is eligible.
        profiles : Iterable[Profile]
            Each one judged independently.
        candidates : list[TorrentInfo]
            Potential torrents waiting to be judged.

        Returns
        -------
        list[Pick]
            One pick per profile that found something acceptable.
        """

        picks: List[Pick] = []
        for profile in profiles:
            best = pick_best(media.media_type, profile, candidates)
            if best is None:
                logging.info("No eligible candidate for profile %r", profile.name)
                continue
            logging.debug(
                "Best for %r: %s | quality=%s tags=%s seeders=%s bytes=%s",
                profile.name,
                best.title or "(no title)",
                best.quality,
                ",".join(sorted(best.tags)),
                best.seeders,
                best.bytes,
            )
            picks.append(Pick(profile=profile, profile_hash=profile.fingerprint(), info=best))
        return picks
