from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from discrip.makemkv.info import VALID_DISC_TYPES


class ContentMode(str, Enum):
    AUTO = "auto"
    MOVIE = "movie"
    TV = "tv"


_MODE_ALIASES = {
    "auto": ContentMode.AUTO,
    "detect": ContentMode.AUTO,
    "movie": ContentMode.MOVIE,
    "film": ContentMode.MOVIE,
    "tv": ContentMode.TV,
    "series": ContentMode.TV,
}


def parse_mode(value: str | None) -> ContentMode:
    """Parse ``--mode``; accepts series/film/detect as aliases."""
    if value is None:
        return ContentMode.AUTO
    mode = _MODE_ALIASES.get(value.strip().lower())
    if mode is None:
        raise ValueError("--mode must be 'movie', 'tv', or 'auto'")
    return mode


def parse_disc_type(value: str | None) -> str | None:
    if value is None:
        return None
    low = value.strip().lower()
    if low in ("bluray", "blu-ray"):
        low = "bd"
    if low not in VALID_DISC_TYPES:
        raise ValueError(f"--disc-type must be one of: {', '.join(VALID_DISC_TYPES)}")
    return low


@dataclass(slots=True)
class RipOptions:
    output: Path
    disc: str = "disc:0"
    temp: Path | None = None
    mode: ContentMode = ContentMode.AUTO
    title: str | None = None
    year: int | None = None
    season: int = 1
    episode_start: int = 1
    disc_type: str | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        if not str(self.output).strip():
            raise ValueError("--output is required")
        self.output = Path(self.output).expanduser()
        if self.temp is None or not str(self.temp).strip():
            self.temp = self.output / ".makemkv"
        else:
            self.temp = Path(self.temp).expanduser()
        if self.season < 0:
            raise ValueError("--season must not be negative")
        if self.episode_start < 1:
            raise ValueError("--episode-start must be at least 1")

    @property
    def auto_detect(self) -> bool:
        return self.mode is ContentMode.AUTO

    @property
    def tv(self) -> bool:
        return self.mode is ContentMode.TV
