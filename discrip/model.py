from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ContentKind(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    INDETERMINATE = "indeterminate"


@dataclass(slots=True, frozen=True)
class TitleInfo:
    id: int
    duration_seconds: int
    name: str = ""
    chapters: int = 0
    size_bytes: int = 0
    output_file: str = ""  # file name makemkvcon writes for this title

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError(f"title {self.id}: negative duration {self.duration_seconds}")


@dataclass(slots=True)
class DiscInfo:
    titles: list[TitleInfo] = field(default_factory=list)
    name: str = ""
    disc_type: str = ""  # dvd, bd, uhd or "" when unknown

    @property
    def durations(self) -> list[int]:
        return [t.duration_seconds for t in self.titles]


@dataclass(slots=True, frozen=True)
class Detection:
    """Outcome of one content-type detection.

    *rule* names the heuristic branch that produced the result.
    """

    kind: ContentKind
    confidence: float
    rule: str = ""

    @property
    def is_series(self) -> bool:
        return self.kind is ContentKind.SERIES

    @property
    def is_movie(self) -> bool:
        return self.kind is ContentKind.MOVIE

    @property
    def is_indeterminate(self) -> bool:
        return self.kind is ContentKind.INDETERMINATE


@dataclass(slots=True)
class Metadata:
    title: str
    year: int | None = None
    type: str = "movie"  # movie or tv
    provider: str = ""

    @property
    def is_tv(self) -> bool:
        return self.type == "tv"


@dataclass(slots=True)
class RipResult:
    title_id: int
    exit_code: int
    path: Path | None = None
    episode: int | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and self.path is not None
