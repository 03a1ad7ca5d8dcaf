from __future__ import annotations

import logging
from collections.abc import Sequence

from discrip.metadata.providers import MetadataProvider
from discrip.metadata.variations import title_variations
from discrip.model import Metadata

log = logging.getLogger(__name__)


class MetadataService:
    """Ask each provider in turn, retrying with shortened title variants."""

    def __init__(self, providers: Sequence[MetadataProvider] = ()) -> None:
        self.providers = list(providers)

    def lookup(self, title: str, is_tv: bool, year: int | None) -> Metadata | None:
        if not title or not self.providers:
            return None

        for candidate in title_variations(title):
            for provider in self.providers:
                try:
                    found = provider.lookup(candidate, is_tv, year)
                except Exception:
                    log.warning("%s lookup for %r failed", provider.name, candidate, exc_info=True)
                    continue
                if found is not None:
                    log.info(
                        "%s matched %r -> %s (%s)",
                        provider.name,
                        candidate,
                        found.title,
                        found.year,
                    )
                    return found

        log.info("No metadata match for %r", title)
        return None

    def episode_title(
        self, series: str, season: int, episode: int, year: int | None = None
    ) -> str | None:
        for provider in self.providers:
            fetch = getattr(provider, "episode_title", None)
            if fetch is None:
                continue
            try:
                name = fetch(series, season, episode, year)
            except Exception:
                log.warning("%s episode lookup failed", provider.name, exc_info=True)
                continue
            if name:
                return name
        return None
