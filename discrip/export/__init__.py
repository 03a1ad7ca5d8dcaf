"""Output formatters (text report, JSON)."""

from discrip.export.json_out import export_json, scan_to_dict
from discrip.export.text_report import format_duration, text_report
