from __future__ import annotations

"""
Torrentio client logic.

This module translates polite media requests into Torrentio calls and
returns streams that might actually be worth your time.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, List, Optional

import requests

from .config import TorrentioConfig
from .models import Episode, Season, ToFetch


@dataclass(frozen=True)
class TorrentioResult:
    """One raw stream as Torrentio described it."""

    name: str
    title: str
    url: str

    @classmethod
    def from_stream(cls, stream: Any) -> Optional["TorrentioResult"]:
        """
        Validate a stream object from the Torrentio payload.

        Returns
        -------
        TorrentioResult | None
            The result, or ``None`` if any of ``name``/``title``/``url`` is
            missing or not a string.
        """

        if not isinstance(stream, dict):
            return None
        values = [stream.get(key) for key in ("name", "title", "url")]
        if not all(isinstance(value, str) for value in values):
            return None
        return cls(*values)


class TorrentioClient:
    """Thin wrapper around requests.Session dedicated to Torrentio endpoints."""

    def __init__(self, config: TorrentioConfig):
        """
        Parameters
        ----------
        config : TorrentioConfig
            Connection details and etiquette for Torrentio.
        """

        self.config = config
        self._session_local = threading.local()

    def _make_session(self) -> requests.Session:
        """
        Create a configured requests session.

        Returns
        -------
        requests.Session
            Session seeded with the configured User-Agent and headers.
        """

        session = requests.Session()
        session.headers.update({"User-Agent": self.config.user_agent, "Accept": "application/json"})
        return session

    def _get_session(self) -> requests.Session:
        """
        Return a thread-local session instance.
        """

        session = getattr(self._session_local, "session", None)
        if session is None:
            session = self._make_session()
            self._session_local.session = session
        return session

    def build_url(self, media: ToFetch) -> str:
        """
        Build the stream search URL for a piece of media.

        Parameters
        ----------
        media : ToFetch
            What we're after. Seasons search for their first episode, which
            is where Torrentio lists the season packs.

        Returns
        -------
        str
            Fully qualified ``.json`` stream URL.
        """

        numbering = media.numbering
        if isinstance(numbering, Episode):
            slug = f"series/{media.imdb_id}:{numbering.season}:{numbering.episode}"
        elif isinstance(numbering, Season):
            slug = f"series/{media.imdb_id}:{numbering.season}:1"
        else:
            slug = f"movie/{media.imdb_id}"
        return f"{self.config.host}/{self.config.debrid.path_part()}/stream/{slug}.json"

    def search(self, media: ToFetch) -> List[TorrentioResult]:
        """
        Query Torrentio for streams of ``media``.

        Parameters
        ----------
        media : ToFetch
            The movie, season or episode to look up.

        Returns
        -------
        list[TorrentioResult]
            Results that survived validation. Empty on any failure.
        """

        url = self.build_url(media)
        session = self._get_session()

        try:
            response = session.get(url, timeout=self.config.request_timeout)
        except requests.RequestException as exc:
            logging.error("Torrentio request failed: %s", exc)
            return []

        time.sleep(self.config.sleep_between_requests)

        if response.status_code != 200:
            logging.warning("Torrentio status %s, head: %r", response.status_code, response.text[:600])
            return []

        try:
            payload = response.json()
        except ValueError:
            logging.warning("Torrentio non-JSON head: %r", response.text[:600])
            return []

        streams = payload.get("streams") if isinstance(payload, dict) else None
        if not isinstance(streams, list):
            logging.warning("Torrentio payload has no stream list for %s", media.imdb_id)
            return []

        results: List[TorrentioResult] = []
        for stream in streams:
            result = TorrentioResult.from_stream(stream)
            if result is None:
                logging.warning("Malformed Torrentio result: %r", stream)
                continue
            results.append(result)

        logging.debug("Torrentio returned %d streams for %s", len(results), media.imdb_id)
        return results

    def snatch(self, url: str) -> bool:
        """
        Ask Debrid to fetch a stream by poking its Torrentio URL.

        Parameters
        ----------
        url : str
            Stream URL from a search result.

        Returns
        -------
        bool
            ``True`` when Torrentio answered with a non-error status.
        """

        try:
            response = self._get_session().head(url, timeout=self.config.request_timeout, allow_redirects=True)
        except requests.RequestException as exc:
            logging.error("Torrentio snatch failed: %s", exc)
            return False

        if response.status_code >= 400:
            logging.warning("Torrentio snatch status %s for %s", response.status_code, url)
            return False
        return True
