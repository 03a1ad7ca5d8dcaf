"""JSON export for disc scan results."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from discrip.model import Detection, DiscInfo, TitleInfo


def scan_to_dict(
    disc: DiscInfo,
    detection: Detection | None = None,
    selected: list[TitleInfo] | None = None,
) -> dict:
    """Convert a scan (and its detection) to a JSON-serializable dict."""
    titles = []
    for t in disc.titles:
        titles.append(
            {
                "id": t.id,
                "duration_seconds": t.duration_seconds,
                "name": t.name,
                "chapters": t.chapters,
                "size_bytes": t.size_bytes,
                "output_file": t.output_file,
            }
        )

    data: dict = {
        "schema_version": "discrip.scan.v1",
        "disc": {
            "name": disc.name,
            "type": disc.disc_type,
            "generated_at": datetime.now(timezone.utc).isoformat(),
        },
        "titles": titles,
        "detection": None,
        "selected": [t.id for t in selected] if selected is not None else [],
    }
    if detection is not None:
        data["detection"] = {
            "kind": detection.kind.value,
            "confidence": detection.confidence,
            "rule": detection.rule,
        }
    return data


def export_json(
    disc: DiscInfo,
    detection: Detection | None = None,
    selected: list[TitleInfo] | None = None,
    path: str | Path | None = None,
    pretty: bool = True,
) -> str:
    """Export a scan to JSON. If path given, write to file. Always returns JSON string."""
    data = scan_to_dict(disc, detection, selected)
    indent = 2 if pretty else None
    text = json.dumps(data, indent=indent, default=str)
    if path is not None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return text
