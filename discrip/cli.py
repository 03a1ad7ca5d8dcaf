"""discrip CLI — disc ripper with movie / series auto-detection."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.prompt import Prompt

from discrip.analyze import detect_content_type, select_titles
from discrip.export import export_json, text_report
from discrip.makemkv import MakeMkv, parse_info_file
from discrip.metadata import MetadataService, build_providers
from discrip.model import ContentKind, Detection, DiscInfo
from discrip.options import RipOptions, parse_disc_type, parse_mode
from discrip.ripper import DiscRipper

app = typer.Typer(
    name="discrip",
    help="Rip DVD / Blu-ray / UHD discs with MakeMKV into named MKV files",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)
console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def _ask_kind(disc: DiscInfo, detection: Detection) -> ContentKind:
    """Let the user settle an uncertain detection; non-interactive runs keep the guess."""
    default = "tv" if detection.is_series else "movie"
    if not sys.stdin.isatty():
        console.print(
            f"[yellow]Uncertain detection ({detection.confidence:.0%}), "
            f"assuming {default}[/yellow]"
        )
        return ContentKind.SERIES if default == "tv" else ContentKind.MOVIE

    console.print(
        f"Detected [bold]{detection.kind.value}[/bold] with "
        f"{detection.confidence:.0%} confidence ({len(disc.titles)} titles)."
    )
    answer = Prompt.ask(
        "Treat this disc as", choices=["movie", "tv"], default=default, console=console
    )
    return ContentKind.SERIES if answer == "tv" else ContentKind.MOVIE


def _load_disc(disc: str, info_file: Path | None, makemkv_path: str | None) -> DiscInfo:
    if info_file is not None:
        return parse_info_file(info_file)
    mkv = MakeMkv(makemkv_path)
    with console.status("[bold]Reading disc…"):
        return mkv.scan(disc)


@app.command()
def rip(
    output: str = typer.Option(..., "--output", "-o", help="Output directory for ripped files"),
    disc: str = typer.Option("disc:0", "--disc", help="Drive or source: disc:N, /dev/srN, ISO"),
    temp: str = typer.Option(
        None, "--temp", help="Temporary ripping directory (default: {output}/.makemkv)"
    ),
    tv: bool = typer.Option(False, "--tv", help="Shorthand for --mode tv"),
    mode: str = typer.Option("auto", "--mode", help="Content type: auto|movie|tv"),
    title: str = typer.Option(None, "--title", help="Title used for metadata lookup and naming"),
    year: int = typer.Option(None, "--year", help="Release year"),
    season: int = typer.Option(1, "--season", help="Season number (TV)"),
    episode_start: int = typer.Option(1, "--episode-start", help="First episode number (TV)"),
    disc_type: str = typer.Option(None, "--disc-type", help="Override disc type: dvd|bd|uhd"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    tmdb_api_key: str = typer.Option(None, "--tmdb-api-key", envvar="TMDB_API_KEY"),
    omdb_api_key: str = typer.Option(None, "--omdb-api-key", envvar="OMDB_API_KEY"),
    makemkv_path: str = typer.Option(None, "--makemkv-path", envvar="MAKEMKVCON"),
):
    """Rip a disc, detecting movie vs. TV series unless --mode says otherwise."""
    _configure_logging(debug)
    try:
        options = RipOptions(
            output=output,
            disc=disc,
            temp=temp,
            mode=parse_mode("tv" if tv else mode),
            title=title,
            year=year,
            season=season,
            episode_start=episode_start,
            disc_type=parse_disc_type(disc_type),
            debug=debug,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    try:
        makemkv = MakeMkv(makemkv_path)
        metadata = MetadataService(build_providers(tmdb_api_key, omdb_api_key))
        tasks: dict[str, int] = {}

        def _on_progress(name: str, current: int, maximum: int) -> None:
            if name not in tasks:
                tasks[name] = progress.add_task(f"Ripping {name}…", total=maximum or None)
            progress.update(tasks[name], completed=current, total=maximum or None)

        ripper = DiscRipper(
            makemkv,
            metadata,
            choose_kind=_ask_kind,
            on_progress=_on_progress,
        )
        # Prompting happens here, before the live progress display starts
        info, kind, titles = ripper.prepare(options)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            results = ripper.rip_titles(options, info, kind, titles)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    for r in results:
        if r.ok:
            console.print(f"[green]Created:[/green] {r.path}")
        else:
            console.print(f"[red]Failed:[/red] title {r.title_id} ({r.error})")


@app.command()
def scan(
    disc: str = typer.Option("disc:0", "--disc", help="Drive or source: disc:N, /dev/srN, ISO"),
    info_file: Path = typer.Option(
        None,
        "--info-file",
        exists=True,
        dir_okay=False,
        help="Read a saved `makemkvcon -r info` dump instead of the drive",
    ),
    disc_type: str = typer.Option(None, "--disc-type", help="Override disc type: dvd|bd|uhd"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of the text report"),
    output: str = typer.Option(None, "-o", "--output", help="Also write JSON to this file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    makemkv_path: str = typer.Option(None, "--makemkv-path", envvar="MAKEMKVCON"),
):
    """Show the disc's titles and the detected content type without ripping."""
    _configure_logging(debug)
    try:
        override = parse_disc_type(disc_type)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    try:
        info = _load_disc(disc, info_file, makemkv_path)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if override:
        info.disc_type = override

    detection = detect_content_type(info)
    selected = None if detection.is_indeterminate else select_titles(info, detection.kind)

    if as_json or output:
        json_str = export_json(info, detection, selected, path=output)
        if as_json:
            typer.echo(json_str)
        if output:
            console.print(f"[green]Wrote:[/green] {output}")
    if not as_json:
        typer.echo(text_report(info, detection, selected))


if __name__ == "__main__":
    app()
