from __future__ import annotations

import logging
from itertools import combinations

from discrip.analyze.detect import (
    ALT_CUT_MAX_RATIO,
    ALT_CUT_MIN,
    SHORT_MAX,
    TV_MAX,
    TV_MIN,
)
from discrip.model import ContentKind, DiscInfo, TitleInfo

log = logging.getLogger(__name__)

# A play-all title matches the sum of its parts within this fraction
_PLAY_ALL_TOLERANCE = 0.02
# Largest episode count to try when matching play-all sums
_PLAY_ALL_MAX_PARTS = 12


def main_feature(titles: list[TitleInfo]) -> TitleInfo | None:
    """Return the longest title; ties go to the lowest id."""
    if not titles:
        return None
    return max(titles, key=lambda t: (t.duration_seconds, -t.id))


def movie_titles(titles: list[TitleInfo]) -> list[TitleInfo]:
    """Main feature plus any alternate cuts of it, in disc order."""
    main = main_feature(titles)
    if main is None:
        return []

    selected = [main]
    for t in titles:
        if t.id == main.id or t.duration_seconds <= ALT_CUT_MIN:
            continue
        if main.duration_seconds / t.duration_seconds < ALT_CUT_MAX_RATIO:
            selected.append(t)
    return sorted(selected, key=lambda t: t.id)


def find_play_all(titles: list[TitleInfo]) -> list[TitleInfo]:
    """Identify titles that are a concatenation of other episode titles.

    A title counts as "play all" when its duration is within 2% of the
    summed duration of two or more other titles in the episode band.
    """
    candidates = [t for t in titles if TV_MIN <= t.duration_seconds <= TV_MAX]
    if len(candidates) < 2:
        return []

    parts = sorted(t.duration_seconds for t in candidates)
    total_parts = sum(parts)
    play_all: list[TitleInfo] = []

    for t in titles:
        dur = t.duration_seconds
        if dur <= TV_MAX or dur > total_parts * (1 + _PLAY_ALL_TOLERANCE):
            continue
        if abs(dur - total_parts) <= total_parts * _PLAY_ALL_TOLERANCE:
            play_all.append(t)
            continue
        # Disc may also carry episodes that are not part of the play-all
        if len(parts) <= _PLAY_ALL_MAX_PARTS and _matches_subset_sum(parts, dur):
            play_all.append(t)

    if play_all:
        log.debug("play-all titles: %s", [t.id for t in play_all])
    return play_all


def _matches_subset_sum(parts: list[int], target: int) -> bool:
    for n in range(2, len(parts) + 1):
        for combo in combinations(parts, n):
            total = sum(combo)
            if abs(target - total) <= total * _PLAY_ALL_TOLERANCE:
                return True
    return False


def episode_titles(titles: list[TitleInfo]) -> list[TitleInfo]:
    """Episode-sized titles in disc order, play-all concatenations removed.

    Falls back to every substantial title when nothing sits in the
    episode band.
    """
    play_all_ids = {t.id for t in find_play_all(titles)}
    pool = [t for t in titles if t.id not in play_all_ids]

    episodes = [t for t in pool if TV_MIN <= t.duration_seconds <= TV_MAX]
    if not episodes:
        episodes = [t for t in pool if t.duration_seconds > SHORT_MAX]
    return sorted(episodes, key=lambda t: t.id)


def select_titles(disc: DiscInfo, kind: ContentKind) -> list[TitleInfo]:
    """Return the titles worth ripping for *kind*."""
    if kind is ContentKind.SERIES:
        return episode_titles(disc.titles)
    return movie_titles(disc.titles)
