"""Unit tests for movie / series detection from title durations."""

from __future__ import annotations

import pytest
from builders import build_disc

from discrip.analyze.detect import ContentTypeDetector, detect_content_type
from discrip.model import ContentKind, DiscInfo, TitleInfo


class TestDegenerateInput:
    def test_empty_title_list_is_indeterminate(self) -> None:
        """No titles yields INDETERMINATE with zero confidence."""
        result = detect_content_type(DiscInfo(titles=[]))
        assert result.kind is ContentKind.INDETERMINATE
        assert result.confidence == 0.0
        assert result.rule == "empty"

    def test_missing_disc_is_indeterminate(self) -> None:
        result = detect_content_type(None)
        assert result.kind is ContentKind.INDETERMINATE
        assert result.confidence == 0.0

    def test_zero_durations_do_not_raise(self) -> None:
        """All-zero durations are handled without a division error."""
        assert detect_content_type(build_disc([0, 0])).kind is ContentKind.MOVIE
        assert detect_content_type(build_disc([0, 0, 0])).kind is ContentKind.MOVIE

    def test_negative_duration_rejected_by_model(self) -> None:
        with pytest.raises(ValueError):
            TitleInfo(id=0, duration_seconds=-1)


class TestSingleTitle:
    @pytest.mark.parametrize("duration", [0, 300, 5400, 12000])
    def test_single_title_is_movie(self, duration: int) -> None:
        result = detect_content_type(build_disc([duration]))
        assert result.kind is ContentKind.MOVIE
        assert result.confidence == 0.95


class TestTwoTitles:
    def test_feature_plus_bonus(self) -> None:
        """Ratio of exactly 3.0 counts as feature + bonus."""
        result = detect_content_type(build_disc([5400, 1800]))
        assert result.kind is ContentKind.MOVIE
        assert result.confidence == 0.85

    def test_alternate_cuts(self) -> None:
        """Two near-equal titles over 30 minutes are alternate cuts."""
        result = detect_content_type(build_disc([1850, 1900]))
        assert result.kind is ContentKind.MOVIE
        assert result.confidence == 0.75
        assert result.rule == "two-titles-alternate-cuts"

    def test_short_similar_titles_are_uncertain(self) -> None:
        result = detect_content_type(build_disc([1000, 1200]))
        assert result.kind is ContentKind.INDETERMINATE
        assert result.confidence == 0.5

    def test_exactly_thirty_minutes_is_not_substantial(self) -> None:
        """The alternate-cut rule needs both titles strictly over 1800s."""
        result = detect_content_type(build_disc([1800, 2000]))
        assert result.kind is ContentKind.INDETERMINATE

    @pytest.mark.parametrize(
        "durations",
        [(1400, 1450), (2600, 2700), (1500, 3000), (100, 250), (3000, 4000)],
    )
    def test_two_titles_never_series(self, durations: tuple[int, int]) -> None:
        result = detect_content_type(build_disc(list(durations)))
        assert result.kind is not ContentKind.SERIES


class TestMultipleTitles:
    def test_uniform_episode_lengths_are_series(self) -> None:
        result = detect_content_type(build_disc([1450, 1500, 1520, 1480]))
        assert result.kind is ContentKind.SERIES
        assert result.confidence == 0.92

    def test_looser_episode_lengths_are_series_with_lower_confidence(self) -> None:
        """CV between 0.15 and 0.25 still reads as a series."""
        result = detect_content_type(build_disc([1300, 1700, 2100, 1500]))
        assert result.kind is ContentKind.SERIES
        assert result.confidence == 0.78

    def test_feature_with_bonus_shorts(self) -> None:
        result = detect_content_type(build_disc([5500, 400, 500, 300]))
        assert result.kind is ContentKind.MOVIE
        assert result.confidence == 0.85

    def test_feature_with_shorts_needs_four_titles(self) -> None:
        """Three titles with one feature fall through to the shorts rule."""
        result = detect_content_type(build_disc([5500, 400, 500]))
        assert result.rule != "feature-with-shorts"

    def test_two_features_are_movie(self) -> None:
        result = detect_content_type(build_disc([7000, 6500, 600]))
        assert result.kind is ContentKind.MOVIE
        assert result.confidence == 0.75
        assert result.rule == "two-features"

    def test_uniform_substantial_titles_are_series(self) -> None:
        """Hour-long episodes sit above the TV band but are still uniform."""
        result = detect_content_type(build_disc([3400, 3500, 3450]))
        assert result.kind is ContentKind.SERIES
        assert result.confidence == 0.80

    def test_mostly_shorts_is_movie(self) -> None:
        result = detect_content_type(build_disc([300, 400, 500, 2000]))
        assert result.kind is ContentKind.MOVIE
        assert result.confidence == 0.70

    def test_mixed_durations_are_uncertain(self) -> None:
        result = detect_content_type(build_disc([1800, 2400, 4200]))
        assert result.kind is ContentKind.INDETERMINATE
        assert result.confidence <= 0.8

    def test_wide_tv_band_spread_falls_through(self) -> None:
        """High variation inside the TV band ends up undecided."""
        result = detect_content_type(build_disc([1200, 1300, 3300, 3200, 1250]))
        assert result.kind is ContentKind.INDETERMINATE
        assert result.rule == "uncertain"

    def test_tv_band_checked_before_feature_rule(self) -> None:
        """Episode majority wins even when one feature-length title exists."""
        result = detect_content_type(
            build_disc([1400, 1420, 1410, 1390, 1405, 5700, 300, 200])
        )
        assert result.kind is ContentKind.SERIES
        assert result.rule == "tv-band-tight"

    def test_title_order_is_irrelevant(self) -> None:
        forward = detect_content_type(build_disc([5500, 400, 500, 300]))
        backward = detect_content_type(build_disc([300, 500, 400, 5500]))
        assert forward == backward


class TestDetector:
    def test_last_confidence_tracks_latest_call(self) -> None:
        detector = ContentTypeDetector()
        assert detector.last_confidence == 0.0

        detector.detect(build_disc([5400]))
        assert detector.last_confidence == 0.95

        detector.detect(DiscInfo(titles=[]))
        assert detector.last_confidence == 0.0
        assert detector.last_detection is not None
        assert detector.last_detection.is_indeterminate

    def test_detect_is_idempotent(self) -> None:
        detector = ContentTypeDetector()
        disc = build_disc([1450, 1500, 1520, 1480])
        first = detector.detect(disc)
        second = detector.detect(disc)
        assert first == second
        assert detector.last_confidence == first.confidence

    def test_detect_does_not_mutate_disc(self) -> None:
        disc = build_disc([300, 5500, 400])
        before = list(disc.titles)
        ContentTypeDetector().detect(disc)
        assert disc.titles == before

    def test_fixture_discs(self, movie_disc, series_disc) -> None:
        assert detect_content_type(movie_disc).kind is ContentKind.MOVIE
        assert detect_content_type(series_disc).kind is ContentKind.SERIES


class TestThresholdBoundaries:
    """Each bucket and cutoff edge, pinned on both sides."""

    @pytest.mark.parametrize(
        ("durations", "kind", "confidence", "rule"),
        [
            # short is inclusive at 900, feature length exclusive at 4800
            ([4800, 900, 900, 900], ContentKind.MOVIE, 0.70, "mostly-shorts"),
            ([4801, 901, 900, 900, 900], ContentKind.MOVIE, 0.85, "feature-with-shorts"),
            # TV band is inclusive at both ends
            ([1200, 1200, 1200], ContentKind.SERIES, 0.92, "tv-band-tight"),
            ([1199, 1199, 1199], ContentKind.SERIES, 0.80, "substantial-uniform"),
            ([3300, 3300, 3300, 9000, 100], ContentKind.SERIES, 0.92, "tv-band-tight"),
            ([3301, 3301, 3301, 9000, 100], ContentKind.INDETERMINATE, 0.5, "uncertain"),
            # 3 of 5 meets the 0.6 majority, 3 of 6 does not
            ([1400, 1400, 1400, 100, 5000], ContentKind.SERIES, 0.92, "tv-band-tight"),
            ([1400, 1400, 1400, 100, 100, 5000], ContentKind.MOVIE, 0.85, "feature-with-shorts"),
            # uniform substantial titles need CV < 0.18 (0.171 vs 0.189 here)
            ([2300, 3400, 3400], ContentKind.SERIES, 0.80, "substantial-uniform"),
            ([2200, 3400, 3400], ContentKind.INDETERMINATE, 0.5, "uncertain"),
        ],
    )
    def test_multiple_title_edges(self, durations, kind, confidence, rule) -> None:
        result = detect_content_type(build_disc(durations))
        assert (result.kind, result.confidence, result.rule) == (kind, confidence, rule)

    @pytest.mark.parametrize(
        ("durations", "kind", "rule"),
        [
            # alternate cuts need a ratio strictly below 1.3
            ([2000, 2599], ContentKind.MOVIE, "two-titles-alternate-cuts"),
            ([2000, 2600], ContentKind.INDETERMINATE, "two-titles-uncertain"),
            # feature + bonus is inclusive at 3x
            ([6000, 2000], ContentKind.MOVIE, "two-titles-feature-bonus"),
            ([5999, 2000], ContentKind.INDETERMINATE, "two-titles-uncertain"),
            # both titles must be strictly over 1800 for alternate cuts
            ([1801, 1900], ContentKind.MOVIE, "two-titles-alternate-cuts"),
        ],
    )
    def test_two_title_edges(self, durations, kind, rule) -> None:
        result = detect_content_type(build_disc(durations))
        assert (result.kind, result.rule) == (kind, rule)
