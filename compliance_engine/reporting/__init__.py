"""Reporting package — multi-format output generation."""

from .json_export import build_metadata, export_json
from .csv_export import export_csv
from .markdown_report import export_markdown, render_markdown
from .console import print_summary, score_status

__all__ = [
    "build_metadata",
    "export_json",
    "export_csv",
    "export_markdown",
    "render_markdown",
    "print_summary",
    "score_status",
]
