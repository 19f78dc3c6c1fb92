"""
Markdown compliance report — Per-framework deep-dive rendered via Jinja2.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .console import score_status

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "compliance_report.md.j2"

_STATUS_ICONS = {
    "PASS": "🟢",
    "WARN": "🟡",
    "FAIL": "🔴",
}


def render_markdown(report: Any, run_id: str, audit_name: str = "audit") -> str:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["status"] = score_status
    env.filters["icon"] = lambda score: _STATUS_ICONS[score_status(score)]
    template = env.get_template(TEMPLATE_NAME)
    return template.render(
        run_id=run_id,
        audit_name=audit_name,
        generated_utc=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
        summary=report.summary,
        results=report.results,
        errors=report.errors,
    )


def export_markdown(
    report: Any,
    output_dir: Path,
    run_id: str,
    audit_name: str = "audit",
) -> Path:
    """Generate the Markdown compliance report and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / f"compliance_report_{run_id}.md"

    content = render_markdown(report, run_id, audit_name)

    with open(filepath, "w", encoding="utf-8") as fh:
        fh.write(content)

    return filepath
