"""
Console summary — Prints overall and per-framework scores plus recommendations.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from ..config import HIGH_PRIORITY_BELOW, MEDIUM_PRIORITY_BELOW


def score_status(score: float) -> str:
    if score >= MEDIUM_PRIORITY_BELOW:
        return "PASS"
    if score >= HIGH_PRIORITY_BELOW:
        return "WARN"
    return "FAIL"


def print_summary(report: Any, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    w = lambda line="": print(line, file=out)

    w("\n📋 Compliance Check Summary\n")
    w(f"Overall Compliance Score: {report.summary.overall_score:.1f}%")

    if report.summary.framework_scores:
        w("\nFramework Scores:")
        for code, score in report.summary.framework_scores.items():
            w(f"  {code:<12s} {score:5.1f}%  [{score_status(score)}]")
    else:
        w("\n  No frameworks evaluated.")

    for code, message in report.errors.items():
        w(f"  ❌ {code}: skipped — {message}")

    if report.summary.recommendations:
        w("\n⚠️  Recommendations:")
        for index, rec in enumerate(report.summary.recommendations, 1):
            w(f"{index}. {rec.title} ({rec.priority} Priority)")
            w(f"   {rec.description}")

    w("\n✅ Compliance check completed")
