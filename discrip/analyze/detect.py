"""Movie vs. TV series detection from title durations.

Movies tend to have one or two long titles with clearly shorter bonus
material; series discs carry several titles of near-identical episode
length.  Only durations are used, no external metadata.
"""

from __future__ import annotations

import logging

from discrip.analyze.stats import coefficient_of_variation
from discrip.model import ContentKind, Detection, DiscInfo, TitleInfo

log = logging.getLogger(__name__)

# Duration thresholds in seconds
SHORT_MAX = 900  # <= 15 min: bonus / chapter noise
TV_MIN = 1200  # 20 min
TV_MAX = 3300  # 55 min
FEATURE_MIN = 4800  # > 80 min: feature length
ALT_CUT_MIN = 1800  # both titles > 30 min for the alternate-cut rule

# Ratios
FEATURE_BONUS_RATIO = 3.0  # longer >= 3x shorter: feature + bonus
ALT_CUT_MAX_RATIO = 1.3
TV_MAJORITY = 0.6  # share of titles that must sit in the TV band

# Coefficient-of-variation cutoffs
TV_CV_TIGHT = 0.15
TV_CV_LOOSE = 0.25
SUBSTANTIAL_CV_MAX = 0.18

# Confidences
CONF_SINGLE_TITLE = 0.95
CONF_FEATURE_BONUS = 0.85
CONF_ALT_CUTS = 0.75
CONF_UNCERTAIN = 0.5
CONF_TV_TIGHT = 0.92
CONF_TV_LOOSE = 0.78
CONF_FEATURE_WITH_SHORTS = 0.85
CONF_TWO_FEATURES = 0.75
CONF_SUBSTANTIAL_UNIFORM = 0.80
CONF_SHORTS_ONLY = 0.70


def _result(kind: ContentKind, confidence: float, rule: str) -> Detection:
    return Detection(kind=kind, confidence=confidence, rule=rule)


def _analyze_two_titles(titles: list[TitleInfo]) -> Detection:
    """Two titles: main feature + bonus, alternate cuts, or undecided.

    Never reports a series.
    """
    longer, shorter = sorted((t.duration_seconds for t in titles), reverse=True)

    if longer >= shorter * FEATURE_BONUS_RATIO:
        return _result(ContentKind.MOVIE, CONF_FEATURE_BONUS, "two-titles-feature-bonus")

    if longer > ALT_CUT_MIN and shorter > ALT_CUT_MIN:
        if longer / shorter < ALT_CUT_MAX_RATIO:
            return _result(ContentKind.MOVIE, CONF_ALT_CUTS, "two-titles-alternate-cuts")

    return _result(ContentKind.INDETERMINATE, CONF_UNCERTAIN, "two-titles-uncertain")


def _analyze_multiple_titles(titles: list[TitleInfo]) -> Detection:
    """Three or more titles: bucket by duration and walk the rule cascade.

    Rule order matters; the first matching rule wins.
    """
    durations = [t.duration_seconds for t in titles]
    short = [d for d in durations if d <= SHORT_MAX]
    tv_likely = [d for d in durations if TV_MIN <= d <= TV_MAX]
    long_ = [d for d in durations if d > FEATURE_MIN]
    substantial = [d for d in durations if d > SHORT_MAX]

    log.debug(
        "buckets: %d titles, short=%d tv=%d long=%d substantial=%d",
        len(durations),
        len(short),
        len(tv_likely),
        len(long_),
        len(substantial),
    )

    # Most titles in the episode band with little spread
    if len(tv_likely) >= 3 and len(tv_likely) >= len(durations) * TV_MAJORITY:
        cv = coefficient_of_variation(tv_likely)
        log.debug("tv band cv=%.3f", cv)
        if cv < TV_CV_TIGHT:
            return _result(ContentKind.SERIES, CONF_TV_TIGHT, "tv-band-tight")
        if cv < TV_CV_LOOSE:
            return _result(ContentKind.SERIES, CONF_TV_LOOSE, "tv-band-loose")

    # One feature plus several bonus shorts
    if len(long_) == 1 and len(short) >= 2 and len(durations) >= 4:
        return _result(ContentKind.MOVIE, CONF_FEATURE_WITH_SHORTS, "feature-with-shorts")

    # Two features, hardly anything episode sized: cuts or parts
    if len(long_) == 2 and len(tv_likely) <= 1:
        return _result(ContentKind.MOVIE, CONF_TWO_FEATURES, "two-features")

    # No shorts at all and uniform lengths
    if len(substantial) >= 3 and not short:
        cv = coefficient_of_variation(substantial)
        log.debug("substantial cv=%.3f", cv)
        if cv < SUBSTANTIAL_CV_MAX:
            return _result(
                ContentKind.SERIES, CONF_SUBSTANTIAL_UNIFORM, "substantial-uniform"
            )

    if len(short) >= 3 and len(substantial) <= 2:
        return _result(ContentKind.MOVIE, CONF_SHORTS_ONLY, "mostly-shorts")

    return _result(ContentKind.INDETERMINATE, CONF_UNCERTAIN, "uncertain")


def detect_content_type(disc: DiscInfo | None) -> Detection:
    """Classify a disc as movie, series or indeterminate.

    Total over any input: an empty or missing title list yields
    INDETERMINATE with confidence 0.0.
    """
    titles = list(disc.titles) if disc is not None and disc.titles else []

    if not titles:
        detection = _result(ContentKind.INDETERMINATE, 0.0, "empty")
    elif len(titles) == 1:
        detection = _result(ContentKind.MOVIE, CONF_SINGLE_TITLE, "single-title")
    elif len(titles) == 2:
        detection = _analyze_two_titles(titles)
    else:
        detection = _analyze_multiple_titles(titles)

    log.debug(
        "detected %s (confidence=%.2f, rule=%s)",
        detection.kind.value,
        detection.confidence,
        detection.rule,
    )
    return detection


class ContentTypeDetector:
    """Stateful wrapper around :func:`detect_content_type`.

    Remembers the most recent result for diagnostics.  The returned
    :class:`Detection` is the authoritative value; an instance shared
    between threads must be guarded by the caller.
    """

    def __init__(self) -> None:
        self.last_confidence: float = 0.0
        self.last_detection: Detection | None = None

    def detect(self, disc: DiscInfo | None) -> Detection:
        self.last_confidence = 0.0
        detection = detect_content_type(disc)
        self.last_detection = detection
        self.last_confidence = detection.confidence
        return detection
