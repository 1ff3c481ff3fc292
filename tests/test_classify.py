from __future__ import annotations

"""Tests for the matcher tables and the classifier."""

import random
import unittest
from functools import cmp_to_key

from torrent_ranker.classify import Classification, classify, match_quality, match_tags, parse_numbering
from torrent_ranker.matchers import QUALITY_RANKING, TAG_MATCHERS, TAGS, compare_quality, quality_rank
from torrent_ranker.models import Episode, MediaType, Movie, Season
from torrent_ranker.tokens import tokenize


KNOWN_TITLES = [
    (
        "Star.Trek.Strange.New.Worlds.S02.COMPLETE.2160p.AMZN.WEB-DL.DDP5.1.H.265-NTb[TGx]",
        Classification("2160p", ("h265", "web"), Season(2)),
    ),
    (
        "Star Trek Strange New Worlds S02E05 MULTI 1080p WEB x264-HiggsBoson",
        Classification("1080p", ("h264", "multiaudio", "web"), Episode(2, 5)),
    ),
    (
        "Star.Trek.Strange.New.Worlds.S02E05.2160p.Dolby.Vision.Multi.Sub.DDP5.1.DV.x265.MP4-BEN.THE.MEN",
        Classification("2160p", ("dolbyvision", "h265", "hdr", "multisub"), Episode(2, 5)),
    ),
    (
        "Star.Trek.Strange.New.Worlds.S02E05.1080p.WEB-DL.DUAL",
        Classification("1080p", ("dualaudio", "web"), Episode(2, 5)),
    ),
    (
        "Barbie.2023.FRENCH.720p.WEBRip.x264-RZP",
        Classification("720p", ("h264", "web"), Movie()),
    ),
    (
        "Barbie.2023.HC.1080p.WEB-DL.AAC2.0.H.264-APEX[TGx]",
        Classification("1080p", ("h264", "hardsub", "web"), Movie()),
    ),
    (
        "Star.Trek.Strange.New.Worlds.S02E05.Charades.1080p.AMZN.WEB-DL.DDP5.1.H.264-NTb.mkv",
        Classification("1080p", ("h264", "web"), Episode(2, 5)),
    ),
    (
        "Star Trek Strange New World S02e05 [1080p Ita Eng Spa h265]",
        Classification("1080p", ("h265",), Episode(2, 5)),
    ),
]

EMOJI_TITLE = "Звёздный путь 🚀 [2023 HEVC WEB-DL 2160p 4k] 🇬🇧"

ALL_TITLES = [raw for raw, _ in KNOWN_TITLES] + [
    EMOJI_TITLE,
    "this is not a valid name",
    "",
    "Movie 720p 4k",
    "Old.Show.PAL.DVDRip",
    "Movie FullHD",
    "some.tokens.multi.sub.aac",
    "some.tokens.multi.aac",
    "some.tokens.with.HDR10+.in.them",
    "x265 HEVC HDR HDR10 DV Dolby Vision WEB WEBRip",
    "Show.s02e05.1080p",
    "Show S08 Complete 720p",
    "Barbie.2023.1080p",
]


class MatcherTableTests(unittest.TestCase):
    def test_quality_ranking_order(self) -> None:
        self.assertEqual(QUALITY_RANKING, ("2160p", "1080p", "720p", "576p", "480p"))

    def test_shuffled_qualities_sort_back_into_place(self) -> None:
        shuffled = list(QUALITY_RANKING)
        random.Random(7).shuffle(shuffled)
        self.assertEqual(sorted(shuffled, key=cmp_to_key(compare_quality)), list(QUALITY_RANKING))

    def test_compare_quality_sign(self) -> None:
        self.assertLess(compare_quality("2160p", "1080p"), 0)
        self.assertGreater(compare_quality("480p", "576p"), 0)
        self.assertEqual(compare_quality("720p", "720p"), 0)

    def test_unknown_quality_raises(self) -> None:
        with self.assertRaises(KeyError):
            quality_rank("8k")

    def test_tag_names_are_unique(self) -> None:
        self.assertEqual(len(TAGS), len(set(TAGS)))

    def test_only_multisub_consumes(self) -> None:
        self.assertEqual([rule.name for rule in TAG_MATCHERS if rule.consume], ["multisub"])


class ClassifyTests(unittest.TestCase):
    """Real-world titles, scruffy as ever."""

    def test_classifies_known_titles(self) -> None:
        for raw, expected in KNOWN_TITLES:
            with self.subTest(raw=raw):
                self.assertEqual(classify(raw), expected)

    def test_every_title_has_one_known_quality_and_sorted_tags(self) -> None:
        for raw in ALL_TITLES:
            with self.subTest(raw=raw):
                result = classify(raw)
                if result is None:
                    continue
                self.assertIn(result.quality, QUALITY_RANKING)
                self.assertEqual(list(result.tags), sorted(set(result.tags)))
                self.assertTrue(set(result.tags) <= set(TAGS))

    def test_tag_matching_is_sorted_and_unique_for_every_title(self) -> None:
        for raw in ALL_TITLES:
            with self.subTest(raw=raw):
                tags = match_tags(tokenize(raw))
                self.assertEqual(tags, sorted(set(tags)))

    def test_unclassifiable_title_returns_none(self) -> None:
        self.assertIsNone(classify("this is not a valid name"))
        self.assertIsNone(classify(""))

    def test_first_quality_rule_wins(self) -> None:
        self.assertEqual(match_quality(tokenize("Movie 720p 4k")), "2160p")

    def test_quality_aliases(self) -> None:
        self.assertEqual(match_quality(tokenize("Old.Show.PAL.DVDRip")), "576p")
        self.assertEqual(match_quality(tokenize("Movie FullHD")), "1080p")

    def test_emoji_and_mixed_scripts_do_not_break_classification(self) -> None:
        result = classify(EMOJI_TITLE)
        self.assertIsNotNone(result)
        self.assertEqual(result.quality, "2160p")
        self.assertEqual(result.tags, ("h265", "web"))


class MatchTagsTests(unittest.TestCase):
    def test_consuming_rule_hides_tokens_from_later_rules(self) -> None:
        tags = match_tags(tokenize("some.tokens.multi.sub.aac"))
        self.assertIn("multisub", tags)
        self.assertNotIn("multiaudio", tags)

    def test_multi_alone_is_multiaudio(self) -> None:
        self.assertEqual(match_tags(tokenize("some.tokens.multi.aac")), ["multiaudio"])

    def test_symbols_survive_tokenizing(self) -> None:
        rules = [rule for rule in TAG_MATCHERS if rule.name == "hdr10plus"]
        self.assertEqual(match_tags(tokenize("some.tokens.with.HDR10+.in.them"), rules), ["hdr10plus"])

    def test_tags_are_sorted_and_unique(self) -> None:
        tags = match_tags(tokenize("x265 HEVC HDR HDR10 DV Dolby Vision WEB WEBRip"))
        self.assertEqual(tags, sorted(set(tags)))
        self.assertEqual(tags, ["dolbyvision", "h265", "hdr", "hdr10", "web"])

    def test_input_tokens_are_not_modified(self) -> None:
        tokens = ["multi", "sub"]
        match_tags(tokens)
        self.assertEqual(tokens, ["multi", "sub"])


def test_numbering_episode_any_case() -> None:
    assert parse_numbering("Show.s02e05.1080p") == Episode(season=2, episode=5)
    assert parse_numbering("Show.S02E05.1080p") == Episode(season=2, episode=5)


def test_numbering_season_only() -> None:
    numbering = parse_numbering("Show S08 Complete 720p")
    assert numbering == Season(season=8)
    assert numbering.media_type is MediaType.SEASON


def test_numbering_movie() -> None:
    numbering = parse_numbering("Barbie.2023.1080p")
    assert numbering == Movie()
    assert numbering.media_type is MediaType.MOVIE


def test_classification_exposes_season_and_episode() -> None:
    result = classify("Show.S02E05.1080p.WEB")
    assert result is not None
    assert (result.season, result.episode) == (2, 5)

    movie = classify("Barbie.2023.1080p")
    assert movie is not None
    assert (movie.season, movie.episode) == (None, None)
