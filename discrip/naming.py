"""Filesystem-safe names for ripped titles.

Movies:  ``Title (Year)[suffix].mkv``
Series:  ``Series - S01E02[ - Episode Title].mkv``
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from discrip.model import Metadata

log = logging.getLogger(__name__)

# Invalid on Windows (and '/' everywhere), plus control characters.
# \t \n \v \f \r are excluded; _WS_RE turns them into spaces.
_INVALID_CHARS = '<>:"/\\|?*'
_INVALID_RE = re.compile("[" + re.escape(_INVALID_CHARS) + r"\x00-\x08\x0e-\x1f\x7f]")
_WS_RE = re.compile(r"\s+")


def sanitize_file_name(name: str) -> str:
    """Drop characters that are not allowed in file names and trim whitespace."""
    cleaned = _INVALID_RE.sub("", name or "")
    cleaned = _WS_RE.sub(" ", cleaned)
    return cleaned.strip().rstrip(".")


def movie_file_name(metadata: Metadata, version_suffix: str = "", ext: str = ".mkv") -> str:
    title = sanitize_file_name(metadata.title) or "Movie"
    if metadata.year:
        base = f"{title} ({metadata.year})"
    else:
        base = title
    return f"{base}{version_suffix}{ext}"


def episode_file_name(
    series: str,
    season: int,
    episode: int,
    episode_title: str | None = None,
    ext: str = ".mkv",
) -> str:
    base = f"{sanitize_file_name(series) or 'Series'} - S{season:02d}E{episode:02d}"
    if episode_title:
        clean = sanitize_file_name(episode_title)
        if clean:
            base = f"{base} - {clean}"
    return f"{base}{ext}"


def unique_path(path: Path) -> Path:
    """Return *path*, or ``name (2).ext``, ``name (3).ext``... if taken."""
    if not path.exists():
        return path
    n = 2
    while True:
        candidate = path.with_name(f"{path.stem} ({n}){path.suffix}")
        if not candidate.exists():
            return candidate
        n += 1


def rename_file(
    path: str | Path,
    metadata: Metadata,
    episode_title: str | None = None,
    episode_num: int = 1,
    version_suffix: str = "",
    season: int = 1,
    dest_dir: str | Path | None = None,
) -> Path:
    """Move a ripped file to its final name and return the new path."""
    src = Path(path)
    target_dir = Path(dest_dir) if dest_dir is not None else src.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    ext = src.suffix or ".mkv"

    if metadata.is_tv:
        name = episode_file_name(metadata.title, season, episode_num, episode_title, ext=ext)
    else:
        name = movie_file_name(metadata, version_suffix, ext=ext)

    target = target_dir / name
    if target.resolve() == src.resolve():
        return src
    target = unique_path(target)
    log.debug("rename %s -> %s", src, target)
    return Path(shutil.move(str(src), str(target)))
