#!/usr/bin/env python3
from __future__ import annotations

"""
Main entry point for the Torrent Ranker CLI.

This module keeps the pace brisk: load the config, ask Torrentio what's out
there, let every profile pick its favourite, and optionally snatch the lot.
"""

import argparse
import logging
from typing import Any, Optional

from torrent_ranker.config import AppConfig, ConfigError, ConfigLoader
from torrent_ranker.finder import TorrentFinder
from torrent_ranker.models import Episode, Movie, Season, ToFetch
from torrent_ranker.torrentio import TorrentioClient


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Build and parse the CLI arguments.

    Returns
    -------
    argparse.Namespace
        The parsed arguments, ready for a night out with the main routine.
    """

    parser = argparse.ArgumentParser(description="Rank Torrentio results against your media profiles.")
    parser.add_argument("imdb_id", help="IMDb ID of the movie or show, e.g. tt0111161.")
    parser.add_argument("--season", type=int, help="Season number (shows only).")
    parser.add_argument("--episode", type=int, help="Episode number; requires --season.")
    parser.add_argument("--title", default="", help="Human-readable title, used for log lines only.")
    parser.add_argument("--config", default="config.json", help="Path to the JSON configuration file.")
    parser.add_argument(
        "--profile",
        dest="profile_names",
        action="append",
        help="Only evaluate this profile. Repeat to pick several.",
    )
    parser.add_argument("--host", help="Override the Torrentio host for this run.")
    parser.add_argument(
        "--timeout",
        dest="request_timeout",
        type=float,
        help="Override the Torrentio request timeout in seconds.",
    )
    parser.add_argument("--snatch", action="store_true", help="Trigger a Debrid fetch for every pick.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging regardless of config.")
    return parser.parse_args(argv)


def configure_logging(config: AppConfig, debug: bool) -> None:
    """
    Funnel the logging level into place.

    Parameters
    ----------
    config : AppConfig
        Freshly loaded configuration with its chosen verbosity.
    debug : bool
        When ``True`` we skip straight to DEBUG.
    """

    level_name = "DEBUG" if debug else config.logging.level.upper()
    level = getattr(logging, level_name, logging.INFO)
    # Warnings raised while loading the config may already have set up the root logger.
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Gather CLI overrides into a single place."""

    return {
        "host": args.host,
        "request_timeout": args.request_timeout,
        "profile_names": args.profile_names,
    }


def build_target(args: argparse.Namespace) -> ToFetch:
    """
    Turn the numbering flags into a ToFetch.

    Raises
    ------
    SystemExit
        When ``--episode`` shows up without ``--season``.
    """

    if args.episode is not None:
        if args.season is None:
            raise SystemExit("ERROR: --episode requires --season.")
        numbering = Episode(season=args.season, episode=args.episode)
    elif args.season is not None:
        numbering = Season(season=args.season)
    else:
        numbering = Movie()
    return ToFetch(imdb_id=args.imdb_id, title=args.title, numbering=numbering)


def main(argv: Optional[list[str]] = None) -> None:
    """
    Run the CLI workflow.

    Steps
    -----
    1. Parse CLI arguments like a polite bartender.
    2. Load config, refusing to go on with a broken profile.
    3. Ask Torrentio for leads, pick a winner per profile, snatch if asked.
    """

    args = parse_args(argv)
    target = build_target(args)

    loader = ConfigLoader(args.config)
    try:
        config = loader.load()
        config = ConfigLoader.apply_overrides(config, collect_overrides(args))
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    configure_logging(config, args.debug)

    logging.info("Searching Torrentio for: %s (%s)", args.title or args.imdb_id, target.media_type.value)
    client = TorrentioClient(config.torrentio)
    finder = TorrentFinder(client)
    candidates = finder.find_candidates(target)
    if not candidates:
        logging.error("Torrentio returned nothing we could classify. Check the IMDb ID and Debrid settings.")
        raise SystemExit("ERROR: No candidates found from Torrentio.")

    picks = finder.pick_best(target, config.profiles, candidates)
    if not picks:
        raise SystemExit("ERROR: No candidate satisfies any profile.")

    for pick in picks:
        info = pick.info
        logging.info(
            "[%s] %s | %s %s | seeders=%s size=%s tracker=%s",
            pick.profile.name,
            info.title or "(no title)",
            info.quality,
            ",".join(sorted(info.tags)) or "-",
            info.seeders,
            info.bytes,
            info.tracker,
        )
        logging.debug("URL: %s", info.url)
        if args.snatch and not client.snatch(info.url):
            logging.error("Snatch failed for profile %r", pick.profile.name)

    logging.info("Done.")


if __name__ == "__main__":
    main()
