"""
JSON exporter — Writes the full compliance report with run metadata.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .. import __version__


def build_metadata(audit_file: str, frameworks: list[str]) -> dict:
    return {
        "auditFile": audit_file,
        "frameworks": list(frameworks),
        "checkDate": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }


def export_json(
    report: Any,
    output_path: Path,
    metadata: Optional[dict] = None,
) -> Path:
    """
    Write the compliance report to ``output_path``.

    Returns:
        Path to the created JSON file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {"metadata": metadata or {}, **report.to_dict()}

    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, default=str, ensure_ascii=False)

    return output_path
