"""Rip pipeline: scan, classify, select, rip, look up names, rename."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from discrip.analyze.detect import ContentTypeDetector
from discrip.analyze.selection import select_titles
from discrip.makemkv.runner import MakeMkv
from discrip.metadata.service import MetadataService
from discrip.model import ContentKind, Detection, DiscInfo, Metadata, RipResult, TitleInfo
from discrip.naming import rename_file
from discrip.options import ContentMode, RipOptions

log = logging.getLogger(__name__)

# Below this confidence an automatic decision is handed to choose_kind
PROMPT_CONFIDENCE = 0.7

KindChooser = Callable[[DiscInfo, Detection], ContentKind]
ProgressCallback = Callable[[str, int, int], None]


class RipperError(RuntimeError):
    pass


def title_from_label(label: str) -> str:
    """Turn a volume label like ``THE_MATRIX_DISC_1`` into ``The Matrix``."""
    text = re.sub(r"[_.]+", " ", label or "").strip()
    text = re.sub(r"\s+(DISC|DISK|D)\s*\d+$", "", text, flags=re.IGNORECASE)
    if text.isupper() or text.islower():
        text = text.title()
    return text


class DiscRipper:
    def __init__(
        self,
        makemkv: MakeMkv,
        metadata: MetadataService | None = None,
        detector: ContentTypeDetector | None = None,
        choose_kind: KindChooser | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.makemkv = makemkv
        self.metadata = metadata or MetadataService()
        self.detector = detector or ContentTypeDetector()
        self.choose_kind = choose_kind
        self.on_progress = on_progress

    # ── decisions ────────────────────────────────────────────────────

    def resolve_kind(
        self, options: RipOptions, disc: DiscInfo
    ) -> tuple[ContentKind, Detection | None]:
        """Decide movie vs. series; an explicit --mode skips detection."""
        if options.mode is ContentMode.TV:
            return ContentKind.SERIES, None
        if options.mode is ContentMode.MOVIE:
            return ContentKind.MOVIE, None

        detection = self.detector.detect(disc)
        log.info(
            "Detected %s (confidence %.0f%%, rule %s)",
            detection.kind.value,
            detection.confidence * 100,
            detection.rule,
        )
        uncertain = detection.is_indeterminate or detection.confidence < PROMPT_CONFIDENCE
        if uncertain and self.choose_kind is not None:
            kind = self.choose_kind(disc, detection)
            log.info("Content type chosen by user: %s", kind.value)
            return kind, detection
        if detection.is_indeterminate:
            log.warning("Content type undecided; treating disc as a movie")
            return ContentKind.MOVIE, detection
        return detection.kind, detection

    def lookup_metadata(
        self, options: RipOptions, disc: DiscInfo, kind: ContentKind
    ) -> Metadata:
        """Resolve the canonical name, degrading to the given title / label."""
        is_tv = kind is ContentKind.SERIES
        query = options.title or title_from_label(disc.name) or "Disc"
        found = self.metadata.lookup(query, is_tv, options.year)
        if found is None:
            return Metadata(title=query, year=options.year, type="tv" if is_tv else "movie")
        if found.year is None and options.year:
            found.year = options.year
        return found

    # ── ripping ──────────────────────────────────────────────────────

    def _rip_one(
        self, disc_target: str, title: TitleInfo, temp: Path
    ) -> tuple[int, Path | None]:
        before = set(temp.glob("*.mkv"))

        def _progress(cur: int, maximum: int) -> None:
            if self.on_progress is not None:
                self.on_progress(f"title {title.id}", cur, maximum)

        exit_code = self.makemkv.rip_title(disc_target, title.id, temp, on_progress=_progress)
        if exit_code != 0:
            return exit_code, None

        if title.output_file and (temp / title.output_file).is_file():
            return exit_code, temp / title.output_file
        created = set(temp.glob("*.mkv")) - before
        if not created:
            return exit_code, None
        return exit_code, max(created, key=lambda p: p.stat().st_mtime)

    def prepare(
        self, options: RipOptions
    ) -> tuple[DiscInfo, ContentKind, list[TitleInfo]]:
        """Scan the disc, settle its content kind and pick the titles to rip.

        This is where choose_kind may be called; nothing has been ripped yet.
        """
        disc = self.makemkv.scan(options.disc)
        if options.disc_type:
            disc.disc_type = options.disc_type
        if not disc.titles:
            raise RipperError("No titles with a duration found on the disc")
        log.info("Disc %r (%s): %d titles", disc.name, disc.disc_type or "?", len(disc.titles))

        kind, _ = self.resolve_kind(options, disc)
        titles = select_titles(disc, kind)
        if not titles:
            raise RipperError(f"No {kind.value}-sized titles found on the disc")
        log.info("Selected %d title(s): %s", len(titles), ", ".join(str(t.id) for t in titles))
        return disc, kind, titles

    def rip_titles(
        self,
        options: RipOptions,
        disc: DiscInfo,
        kind: ContentKind,
        titles: list[TitleInfo],
    ) -> list[RipResult]:
        metadata = self.lookup_metadata(options, disc, kind)
        temp = Path(options.temp)
        temp.mkdir(parents=True, exist_ok=True)
        options.output.mkdir(parents=True, exist_ok=True)

        results: list[RipResult] = []
        multiple_cuts = kind is not ContentKind.SERIES and len(titles) > 1

        for idx, title in enumerate(titles):
            episode = options.episode_start + idx if kind is ContentKind.SERIES else None
            exit_code, ripped = self._rip_one(options.disc, title, temp)
            if ripped is None:
                reason = (
                    f"makemkvcon exited with {exit_code}"
                    if exit_code != 0
                    else "no output file produced"
                )
                log.error("Title %d failed: %s", title.id, reason)
                results.append(
                    RipResult(title_id=title.id, exit_code=exit_code, episode=episode, error=reason)
                )
                continue

            if kind is ContentKind.SERIES:
                episode_title = self.metadata.episode_title(
                    metadata.title, options.season, episode, metadata.year
                )
                final = rename_file(
                    ripped,
                    metadata,
                    episode_title=episode_title,
                    episode_num=episode,
                    season=options.season,
                    dest_dir=options.output,
                )
            else:
                suffix = f" - title{title.id:02d}" if multiple_cuts else ""
                final = rename_file(
                    ripped, metadata, version_suffix=suffix, dest_dir=options.output
                )

            log.info("Title %d -> %s", title.id, final)
            results.append(
                RipResult(title_id=title.id, exit_code=exit_code, path=final, episode=episode)
            )

        if not any(r.ok for r in results):
            raise RipperError("No titles were ripped successfully")
        return results

    def run(self, options: RipOptions) -> list[RipResult]:
        disc, kind, titles = self.prepare(options)
        return self.rip_titles(options, disc, kind, titles)
