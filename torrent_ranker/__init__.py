from __future__ import annotations

"""
Convenience imports for the Torrent Ranker package.

Reach important stuff so downstream code can grab them
without complaining.
"""

from .classify import Classification, classify
from .config import AppConfig, ConfigError, ConfigLoader, TorrentioConfig
from .finder import Pick, TorrentFinder
from .models import Candidate, Episode, MediaType, Movie, Season, ToFetch, TorrentInfo
from .profile import Profile, ProfileError
from .rank import pick_best, sort_candidates
from .torrentio import TorrentioClient

__all__ = [
    "AppConfig",
    "Candidate",
    "Classification",
    "ConfigError",
    "ConfigLoader",
    "Episode",
    "MediaType",
    "Movie",
    "Pick",
    "Profile",
    "ProfileError",
    "Season",
    "ToFetch",
    "TorrentFinder",
    "TorrentInfo",
    "TorrentioClient",
    "TorrentioConfig",
    "classify",
    "pick_best",
    "sort_candidates",
]
