from pathlib import Path

import pytest

from discrip.makemkv.info import parse_info_file

FIXTURE_DIR: Path = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def movie_info_path() -> Path:
    """Saved `makemkvcon -r info` dump of a movie Blu-ray."""
    return FIXTURE_DIR / "movie_bd.info"


@pytest.fixture
def series_info_path() -> Path:
    """Saved `makemkvcon -r info` dump of a TV series DVD with a play-all title."""
    return FIXTURE_DIR / "series_dvd.info"


@pytest.fixture
def series_disc(series_info_path):
    return parse_info_file(series_info_path)


@pytest.fixture
def movie_disc(movie_info_path):
    return parse_info_file(movie_info_path)
