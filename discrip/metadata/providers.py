"""TMDB and OMDb lookups.

Network or payload errors are logged and reported as "no match"; nothing
raised here reaches the ripping pipeline.
"""

from __future__ import annotations

import logging
from typing import Protocol

import requests

from discrip.model import Metadata

log = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
OMDB_BASE_URL = "https://www.omdbapi.com/"
_TIMEOUT = 15
_USER_AGENT = "discrip/0.1"


class MetadataProvider(Protocol):
    name: str

    def lookup(self, title: str, is_tv: bool, year: int | None) -> Metadata | None: ...


def _year_from_date(value: str | None) -> int | None:
    if value and len(value) >= 4 and value[:4].isdigit():
        return int(value[:4])
    return None


def _session() -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = _USER_AGENT
    return session


class TmdbProvider:
    """The Movie Database search (v3 API key)."""

    name = "TMDB"

    def __init__(self, api_key: str, session: requests.Session | None = None) -> None:
        self.api_key = api_key
        self.session = session or _session()
        self._series_ids: dict[tuple[str, int | None], int | None] = {}

    def _get(self, path: str, **params) -> dict | None:
        params["api_key"] = self.api_key
        try:
            resp = self.session.get(f"{TMDB_BASE_URL}{path}", params=params, timeout=_TIMEOUT)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("TMDB request %s failed: %s", path, exc)
            return None

    def _search(self, title: str, is_tv: bool, year: int | None) -> dict | None:
        params: dict = {"query": title, "language": "en-US", "page": 1}
        if year:
            params["first_air_date_year" if is_tv else "year"] = year
        data = self._get("/search/tv" if is_tv else "/search/movie", **params)
        results = (data or {}).get("results") or []
        if not results:
            log.debug("TMDB: no results for %r (tv=%s)", title, is_tv)
            return None
        return _pick_best(results, title, year)

    def lookup(self, title: str, is_tv: bool, year: int | None) -> Metadata | None:
        best = self._search(title, is_tv, year)
        if best is None:
            return None
        if is_tv:
            self._series_ids[(title, year)] = best.get("id")
        name = best.get("name") if is_tv else best.get("title")
        if not name:
            return None
        date = best.get("first_air_date") if is_tv else best.get("release_date")
        return Metadata(
            title=name,
            year=_year_from_date(date),
            type="tv" if is_tv else "movie",
            provider=self.name,
        )

    def episode_title(
        self, series: str, season: int, episode: int, year: int | None
    ) -> str | None:
        key = (series, year)
        if key not in self._series_ids:
            best = self._search(series, True, year)
            self._series_ids[key] = best.get("id") if best else None
        series_id = self._series_ids[key]
        if series_id is None:
            return None
        data = self._get(f"/tv/{series_id}/season/{season}/episode/{episode}")
        if not data:
            return None
        return data.get("name") or None


class OmdbProvider:
    """OMDb search (``?s=``) with a ``?t=`` exact-title fallback."""

    name = "OMDb"

    def __init__(self, api_key: str, session: requests.Session | None = None) -> None:
        self.api_key = api_key
        self.session = session or _session()

    def _get(self, **params) -> dict | None:
        params["apikey"] = self.api_key
        params["r"] = "json"
        try:
            resp = self.session.get(OMDB_BASE_URL, params=params, timeout=_TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("OMDb request failed: %s", exc)
            return None
        if data.get("Response") == "False":
            log.debug("OMDb: %s", data.get("Error", "no match"))
            return None
        return data

    def lookup(self, title: str, is_tv: bool, year: int | None) -> Metadata | None:
        params: dict = {"type": "series" if is_tv else "movie"}
        if year:
            params["y"] = year

        data = self._get(s=title, **params)
        if data and data.get("Search"):
            item = data["Search"][0]
        else:
            item = self._get(t=title, **params)
        if not item or not item.get("Title"):
            return None

        return Metadata(
            title=item["Title"],
            year=_year_from_date(item.get("Year")),
            type="tv" if is_tv else "movie",
            provider=self.name,
        )


def _pick_best(results: list[dict], title: str, year: int | None) -> dict:
    """Score candidates: exact title, then partial title, year, popularity."""
    wanted = title.lower()

    def _score(item: dict) -> float:
        candidate = (item.get("title") or item.get("name") or "").lower()
        score = 0.0
        if candidate == wanted:
            score += 10
        elif wanted in candidate or candidate in wanted:
            score += 5
        if year:
            release = item.get("release_date") or item.get("first_air_date") or ""
            if release.startswith(str(year)):
                score += 3
        score += (item.get("popularity") or 0) / 1000
        return score

    return max(results, key=_score)


def build_providers(
    tmdb_api_key: str | None = None, omdb_api_key: str | None = None
) -> list[MetadataProvider]:
    """Providers in lookup order; those without an API key are skipped."""
    providers: list[MetadataProvider] = []
    if tmdb_api_key:
        providers.append(TmdbProvider(tmdb_api_key))
    if omdb_api_key:
        providers.append(OmdbProvider(omdb_api_key))
    if not providers:
        log.info("No metadata API keys configured; names come from --title / disc label")
    return providers
