"""Content-type detection and title selection."""

from __future__ import annotations

from discrip.analyze.detect import ContentTypeDetector, detect_content_type
from discrip.analyze.selection import (
    episode_titles,
    find_play_all,
    main_feature,
    movie_titles,
    select_titles,
)
from discrip.analyze.stats import coefficient_of_variation, std_dev, variance

__all__ = [
    "ContentTypeDetector",
    "detect_content_type",
    "variance",
    "std_dev",
    "coefficient_of_variation",
    "main_feature",
    "movie_titles",
    "find_play_all",
    "episode_titles",
    "select_titles",
]
