from __future__ import annotations

"""Tests for Torrentio title parsing."""

import pytest

from torrent_ranker.models import Episode, MediaType, Season
from torrent_ranker.parse import UNKNOWN_TRACKER, parse_size, parse_torrent_info

URL = "https://tracker.example.com/some-path"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1021.66 MB", 1071288156),
        ("6.48 GB", 6957847019),
        ("512 KB", 524288),
        ("1TB", 1 << 40),
        ("17 B", 17),
        ("12", 12),
        ("lots", None),
        ("3 XB", None),
    ],
)
def test_parse_size(raw, expected) -> None:
    assert parse_size(raw) == expected


def test_single_file_title() -> None:
    raw = "\n".join(
        [
            "Star Trek Strange New World S02e05 [1080p Ita Eng Spa h265 10bit SubS] byMe7alh",
            "👤 27 💾 1021.66 MB ⚙️ ThePirateBay",
            "🇬🇧 / 🇮🇹 / 🇪🇸",
        ]
    )
    info = parse_torrent_info(raw, URL)
    assert info is not None
    assert info.quality == "1080p"
    assert info.tags == frozenset({"h265", "hdr"})
    assert info.numbering == Episode(season=2, episode=5)
    assert info.media_type is MediaType.EPISODE
    assert info.tracker == "ThePirateBay"
    assert info.seeders == 27
    assert info.bytes == 1071288156
    assert info.url == URL
    assert (info.season, info.episode) == (2, 5)


def test_torrent_and_file_names_are_merged() -> None:
    raw = "\n".join(
        [
            "Звездный путь: Странные новые миры / Star Trek: Strange New Worlds / Сезон: 2 / Серии: 1-9 из 10 "
            "[2023 HEVC HDR10+ Dolby Vision WEB-DL 2160p 4k] 3x MVO (LostFilm HDrezka Studio TVShows) "
            "+ Original + Sub (Rus Eng)",
            "Star.Trek.Strange.New.Worlds.S02E05.Charades.2160p.PMTP.WEB-DL.DDP5.1.DV.HDR.H.265.RGzsRutracker.mkv",
            "👤 1 💾 6.48 GB ⚙️ Rutracker",
            "🇬🇧 / 🇷🇺",
        ]
    )
    info = parse_torrent_info(raw, URL)
    assert info is not None
    assert info.quality == "2160p"
    assert info.tags == frozenset({"dolbyvision", "h265", "hdr", "hdr10plus", "web"})
    assert info.numbering == Episode(season=2, episode=5)
    assert info.tracker == "Rutracker"
    assert info.seeders == 1
    assert info.bytes == 6957847019
    assert info.title.startswith("Star.Trek.Strange.New.Worlds.S02E05")


def test_season_pack_torrent_name_wins_over_episode_file() -> None:
    raw = "\n".join(
        [
            "Show.S03.1080p.WEB-DL.x264-GROUP",
            "Show.S03E01.1080p.WEB-DL.x264-GROUP.mkv",
            "👤 40 💾 20 GB ⚙️ 1337x",
        ]
    )
    info = parse_torrent_info(raw, URL)
    assert info is not None
    assert info.numbering == Season(season=3)
    assert info.media_type is MediaType.SEASON


def test_quality_falls_back_to_torrent_name() -> None:
    raw = "\n".join(
        [
            "Some.Movie.2021.720p.BluRay",
            "some_movie_file",
            "👤 5 💾 700 MB ⚙️ YTS",
        ]
    )
    info = parse_torrent_info(raw, URL)
    assert info is not None
    assert info.quality == "720p"
    assert info.tags == frozenset({"bluray"})
    assert info.media_type is MediaType.MOVIE


def test_missing_summary_fields_use_sentinels() -> None:
    info = parse_torrent_info("Movie.2020.1080p.WEB\n👤", URL)
    assert info is not None
    assert info.seeders == -1
    assert info.bytes == -1
    assert info.tracker == UNKNOWN_TRACKER


@pytest.mark.parametrize(
    "raw",
    [
        "Movie.2020.1080p.WEB",
        "👤 5 💾 700 MB ⚙️ YTS\nMovie.2020.1080p.WEB",
        "Some.Movie.Without.Quality\n👤 5 💾 700 MB ⚙️ YTS",
        "\n👤 5 💾 700 MB ⚙️ YTS",
    ],
)
def test_unusable_titles_return_none(raw) -> None:
    assert parse_torrent_info(raw, URL) is None
