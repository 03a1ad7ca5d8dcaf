"""Tests for rip option parsing and validation."""

from pathlib import Path

import pytest

from discrip.options import ContentMode, RipOptions, parse_disc_type, parse_mode


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ContentMode.AUTO),
        ("auto", ContentMode.AUTO),
        ("Movie", ContentMode.MOVIE),
        ("film", ContentMode.MOVIE),
        ("TV", ContentMode.TV),
        ("series", ContentMode.TV),
    ],
)
def test_parse_mode(value, expected) -> None:
    assert parse_mode(value) is expected


def test_parse_mode_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="--mode"):
        parse_mode("documentary")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("dvd", "dvd"),
        ("BD", "bd"),
        ("bluray", "bd"),
        ("Blu-Ray", "bd"),
        ("uhd", "uhd"),
    ],
)
def test_parse_disc_type(value, expected) -> None:
    assert parse_disc_type(value) == expected


def test_parse_disc_type_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="--disc-type"):
        parse_disc_type("hddvd")


class TestRipOptions:
    def test_defaults(self, tmp_path: Path) -> None:
        opts = RipOptions(output=tmp_path)
        assert opts.output == tmp_path
        assert opts.temp == tmp_path / ".makemkv"
        assert opts.disc == "disc:0"
        assert opts.auto_detect
        assert not opts.tv

    def test_explicit_temp(self, tmp_path: Path) -> None:
        opts = RipOptions(output=tmp_path / "out", temp=str(tmp_path / "tmp"))
        assert opts.temp == tmp_path / "tmp"

    def test_tv_mode(self, tmp_path: Path) -> None:
        opts = RipOptions(output=tmp_path, mode=ContentMode.TV)
        assert opts.tv
        assert not opts.auto_detect

    def test_blank_output_rejected(self) -> None:
        with pytest.raises(ValueError, match="--output is required"):
            RipOptions(output="  ")

    def test_bad_episode_start(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="--episode-start"):
            RipOptions(output=tmp_path, episode_start=0)

    def test_negative_season(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="--season"):
            RipOptions(output=tmp_path, season=-1)
