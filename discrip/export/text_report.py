"""Text report for terminal display."""

from __future__ import annotations

from discrip.model import Detection, DiscInfo, TitleInfo

_DISC_TYPE_LABELS = {"dvd": "DVD", "bd": "Blu-ray", "uhd": "UHD Blu-ray"}


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS or MM:SS."""
    total_seconds = int(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_size(size_bytes: int) -> str:
    if size_bytes <= 0:
        return ""
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1000:
            return f"{size:.1f} {unit}"
        size /= 1000
    return f"{size:.1f} TB"


def text_report(
    disc: DiscInfo,
    detection: Detection | None = None,
    selected: list[TitleInfo] | None = None,
) -> str:
    """Generate a plain text summary of a scanned disc."""
    lines: list[str] = []
    selected_ids = {t.id for t in selected} if selected else set()

    lines.append("=" * 60)
    lines.append("Disc Summary")
    lines.append("=" * 60)
    lines.append(f"  Name:       {disc.name or '?'}")
    lines.append(f"  Type:       {_DISC_TYPE_LABELS.get(disc.disc_type, '?')}")
    lines.append(f"  Titles:     {len(disc.titles)}")
    lines.append("")

    lines.append("-" * 60)
    lines.append("Titles")
    lines.append("-" * 60)
    lines.append(f"  {'ID':>3} {'Duration':>10} {'Chapters':>8} {'Size':>10}  {'Name'}")
    lines.append(f"  {'--':>3} {'--------':>10} {'--------':>8} {'----':>10}  {'----'}")
    for t in disc.titles:
        mark = "*" if t.id in selected_ids else " "
        lines.append(
            f"{mark} {t.id:>3} {format_duration(t.duration_seconds):>10} "
            f"{t.chapters:>8} {format_size(t.size_bytes):>10}  {t.name}"
        )
    lines.append("")

    if detection is not None:
        lines.append("-" * 60)
        lines.append("Detection")
        lines.append("-" * 60)
        lines.append(f"  Content:    {detection.kind.value}")
        lines.append(f"  Confidence: {detection.confidence:.0%}")
        lines.append(f"  Rule:       {detection.rule}")
        if selected_ids:
            lines.append(f"  Selected:   {', '.join(str(i) for i in sorted(selected_ids))}")
        lines.append("")

    return "\n".join(lines)
