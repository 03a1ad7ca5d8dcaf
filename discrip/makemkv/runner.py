"""Thin wrapper around the ``makemkvcon`` command line.

Requires MakeMKV on PATH, in a common install location, or given
explicitly (``--makemkv-path`` / ``MAKEMKVCON``).
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

from discrip.makemkv.info import normalize_disc_target, parse_info
from discrip.model import DiscInfo

log = logging.getLogger(__name__)

_MSG_PREFIX = "MSG:"
_PROGRESS_PREFIX = "PRGV:"


class MakeMkvError(RuntimeError):
    """makemkvcon exited with an error while reading the disc."""

    def __init__(self, message: str, exit_code: int, messages: list[str] | None = None):
        super().__init__(message)
        self.exit_code = exit_code
        self.messages = messages or []


def _find_makemkvcon() -> str | None:
    """Return path to makemkvcon if found, else None."""
    env = os.environ.get("MAKEMKVCON")
    if env and Path(env).is_file():
        return env
    for name in ("makemkvcon", "makemkvcon64"):
        found = shutil.which(name)
        if found:
            return found
    for candidate in (
        Path("/Applications/MakeMKV.app/Contents/MacOS/makemkvcon"),
        Path(r"C:\Program Files (x86)\MakeMKV\makemkvcon64.exe"),
        Path(r"C:\Program Files\MakeMKV\makemkvcon64.exe"),
    ):
        if candidate.is_file():
            return str(candidate)
    return None


def message_text(line: str) -> str:
    """Extract the human-readable text of a ``MSG:`` robot line."""
    # MSG:code,flags,count,"message","format",...
    body = line[len(_MSG_PREFIX) :]
    parts = body.split(",", 3)
    if len(parts) < 4:
        return body
    text = parts[3]
    if text.startswith('"'):
        end = text.find('",', 1)
        text = text[1:end] if end != -1 else text.strip('"')
    return text


def parse_progress(line: str) -> tuple[int, int] | None:
    """Return (current, max) from a ``PRGV:cur,total,max`` line."""
    try:
        cur, _total, maximum = (int(x) for x in line[len(_PROGRESS_PREFIX) :].split(","))
    except ValueError:
        return None
    return cur, maximum


class MakeMkv:
    """Scan discs and rip titles through makemkvcon."""

    def __init__(self, executable: str | None = None) -> None:
        exe = executable or _find_makemkvcon()
        if exe is None:
            raise RuntimeError(
                "makemkvcon not found. Install MakeMKV or pass --makemkv-path.\n"
                "  https://www.makemkv.com/download/"
            )
        self.executable = exe

    def info_command(self, disc: str) -> list[str]:
        return [self.executable, "--noscan", "-r", "info", normalize_disc_target(disc)]

    def rip_command(self, disc: str, title_id: int, dest_dir: str | Path) -> list[str]:
        return [
            self.executable,
            "--noscan",
            "-r",
            "--progress=-same",
            "mkv",
            normalize_disc_target(disc),
            str(title_id),
            str(dest_dir),
        ]

    def scan_text(self, disc: str) -> str:
        """Run ``makemkvcon info`` and return its raw robot output."""
        cmd = self.info_command(disc)
        log.debug("running: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as exc:
            raise MakeMkvError(f"could not run {self.executable}: {exc}", -1) from exc
        if proc.returncode != 0:
            messages = [
                message_text(line)
                for line in proc.stdout.splitlines()
                if line.startswith(_MSG_PREFIX)
            ]
            tail = "; ".join(messages[-3:]) or proc.stderr.strip()
            raise MakeMkvError(
                f"makemkvcon info failed (exit {proc.returncode}): {tail}",
                proc.returncode,
                messages,
            )
        return proc.stdout

    def scan(self, disc: str) -> DiscInfo:
        return parse_info(self.scan_text(disc))

    def rip_title(
        self,
        disc: str,
        title_id: int,
        dest_dir: str | Path,
        on_output: Callable[[str], None] | None = None,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> int:
        """Rip one title into *dest_dir* and return makemkvcon's exit code.

        A failed rip is reported through the exit code, not an exception.
        """
        dest = Path(dest_dir)
        dest.mkdir(parents=True, exist_ok=True)
        cmd = self.rip_command(disc, title_id, dest)
        log.debug("running: %s", " ".join(cmd))

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
            )
        except OSError as exc:
            log.error("could not run %s: %s", self.executable, exc)
            return -1
        try:
            for raw_line in proc.stdout or ():
                line = raw_line.rstrip("\n")
                if line.startswith(_PROGRESS_PREFIX):
                    progress = parse_progress(line)
                    if progress is not None and on_progress is not None:
                        on_progress(*progress)
                elif line.startswith(_MSG_PREFIX):
                    text = message_text(line)
                    log.debug("makemkvcon: %s", text)
                    if on_output is not None:
                        on_output(text)
        except BaseException:
            # a failing callback must not leave makemkvcon running
            proc.kill()
            proc.wait()
            raise
        exit_code = proc.wait()
        if exit_code != 0:
            log.error("makemkvcon rip of title %d exited with %d", title_id, exit_code)
        return exit_code
