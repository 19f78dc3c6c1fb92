"""
CSV exporter — Produces structured CSV summaries of control and framework scores.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

from ..config import GAP_THRESHOLD

CONTROL_FIELDS = [
    "framework", "framework_name", "control", "score", "max_score",
    "is_gap", "issue_count", "issues",
]


def export_csv(
    report: Any,
    output_dir: Path,
    run_id: str,
    gap_threshold: float = GAP_THRESHOLD,
) -> list[Path]:
    """
    Write CSV files for control scores and the run summary.

    Returns:
        List of created CSV file paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    created = []

    # --- Control Scores CSV ---
    controls_path = output_dir / f"control_scores_{run_id}.csv"
    with open(controls_path, "w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.DictWriter(fh, fieldnames=CONTROL_FIELDS)
        writer.writeheader()
        for code, result in report.results.items():
            for name, control in result.control_scores.items():
                writer.writerow({
                    "framework": code,
                    "framework_name": result.name,
                    "control": name,
                    "score": round(control.score, 1),
                    "max_score": control.max_score,
                    "is_gap": control.score < gap_threshold,
                    "issue_count": len(control.issues),
                    "issues": "; ".join(control.issues),
                })
    created.append(controls_path)

    # --- Summary CSV ---
    summary_path = output_dir / f"compliance_summary_{run_id}.csv"
    with open(summary_path, "w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.writer(fh)
        writer.writerow(["metric", "value"])
        writer.writerow(["overall_score", round(report.summary.overall_score, 1)])
        writer.writerow(["frameworks_evaluated", report.summary.frameworks_evaluated])
        for code, score in report.summary.framework_scores.items():
            writer.writerow([f"{code}_score", round(score, 1)])
        writer.writerow(["recommendations", len(report.summary.recommendations)])
    created.append(summary_path)

    return created
