"""Parser for ``makemkvcon -r info`` robot output.

Relevant line shapes::

    CINFO:1,6209,"Blu-ray disc"
    CINFO:2,0,"THE_MATRIX"
    TINFO:0,9,0,"2:16:17"
    SINFO:0,0,19,0,"1920x1080"
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from discrip.model import DiscInfo, TitleInfo

log = logging.getLogger(__name__)

_CINFO_RE = re.compile(r'^CINFO:(?P<key>\d+),(?P<code>\d+),"(?P<value>.*)"$')
_TINFO_RE = re.compile(r'^TINFO:(?P<title>\d+),(?P<key>\d+),(?P<code>\d+),"(?P<value>.*)"$')
_SINFO_RE = re.compile(
    r'^SINFO:(?P<title>\d+),(?P<stream>\d+),(?P<key>\d+),(?P<code>\d+),"(?P<value>.*)"$'
)
_DEVICE_RE = re.compile(r"^/dev/sr(?P<num>\d+)$")

# Attribute ids (apdefs.h)
_AP_TYPE = 1
_AP_NAME = 2
_AP_CHAPTER_COUNT = 8
_AP_DURATION = 9
_AP_DISK_SIZE_BYTES = 11
_AP_VIDEO_SIZE = 19
_AP_OUTPUT_FILE_NAME = 27

_UHD_RESOLUTION = "3840x2160"
VALID_DISC_TYPES = ("dvd", "bd", "uhd")


def parse_duration(text: str) -> int:
    """Return seconds for ``H:MM:SS`` or ``MM:SS``; 0 when unparsable."""
    parts = (text or "").strip().split(":")
    try:
        nums = [int(p) for p in parts]
    except ValueError:
        return 0
    if len(nums) == 3:
        h, m, s = nums
    elif len(nums) == 2:
        h = 0
        m, s = nums
    else:
        return 0
    return h * 3600 + m * 60 + s


def _disc_type_from_label(label: str) -> str:
    low = label.lower()
    if "blu-ray" in low or "bluray" in low:
        return "bd"
    if "dvd" in low:
        return "dvd"
    return ""


def parse_info(info_text: str) -> DiscInfo:
    """Build a :class:`DiscInfo` from robot-mode info output.

    Titles without a duration are dropped.  Titles are sorted by id.
    """
    disc_name = ""
    disc_type = ""
    has_uhd_video = False
    raw: dict[int, dict] = {}

    for line in info_text.splitlines():
        line = line.strip()
        if line.startswith("CINFO:"):
            m = _CINFO_RE.match(line)
            if not m:
                continue
            key = int(m.group("key"))
            if key == _AP_TYPE:
                disc_type = _disc_type_from_label(m.group("value"))
            elif key == _AP_NAME:
                disc_name = m.group("value")
        elif line.startswith("TINFO:"):
            m = _TINFO_RE.match(line)
            if not m:
                continue
            meta = raw.setdefault(int(m.group("title")), {})
            meta[int(m.group("key"))] = m.group("value")
        elif line.startswith("SINFO:"):
            m = _SINFO_RE.match(line)
            if m and int(m.group("key")) == _AP_VIDEO_SIZE:
                if m.group("value").startswith(_UHD_RESOLUTION):
                    has_uhd_video = True

    if disc_type == "bd" and has_uhd_video:
        disc_type = "uhd"

    titles: list[TitleInfo] = []
    for tid in sorted(raw):
        meta = raw[tid]
        if _AP_DURATION not in meta:
            log.debug("title %d has no duration, skipped", tid)
            continue
        titles.append(
            TitleInfo(
                id=tid,
                duration_seconds=parse_duration(meta[_AP_DURATION]),
                name=meta.get(_AP_NAME, ""),
                chapters=_to_int(meta.get(_AP_CHAPTER_COUNT)),
                size_bytes=_to_int(meta.get(_AP_DISK_SIZE_BYTES)),
                output_file=meta.get(_AP_OUTPUT_FILE_NAME, ""),
            )
        )

    log.debug("parsed %d titles (disc=%r, type=%r)", len(titles), disc_name, disc_type)
    return DiscInfo(titles=titles, name=disc_name, disc_type=disc_type)


def _to_int(value: str | None) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def parse_info_file(path: str | Path) -> DiscInfo:
    """Parse a saved ``makemkvcon -r info`` dump."""
    return parse_info(Path(path).read_text(encoding="utf-8", errors="replace"))


def normalize_disc_target(disc: str) -> str:
    """Map a user-supplied disc reference to a makemkvcon source string.

    ``/dev/srN`` becomes ``disc:N``; an ``.iso`` file becomes ``iso:<path>``
    and a directory (VIDEO_TS / BDMV backup) becomes ``file:<path>``.
    Explicit ``disc:``/``dev:``/``iso:``/``file:`` sources pass through.
    """
    disc = disc.strip()
    if ":" in disc and disc.split(":", 1)[0] in ("disc", "dev", "iso", "file"):
        return disc

    m = _DEVICE_RE.match(disc)
    if m:
        return f"disc:{m.group('num')}"

    p = Path(disc).expanduser()
    if p.is_file() and p.suffix.lower() == ".iso":
        return f"iso:{p.resolve()}"
    if p.is_dir():
        return f"file:{p.resolve()}"

    if disc.startswith("/dev/"):
        return f"dev:{disc}"
    log.warning("Could not map disc %r to a makemkvcon source, using disc:0", disc)
    return "disc:0"
