"""
Configuration module for the Repository Compliance Scoring Engine.
Defines scoring thresholds, step tables, and operational settings.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


# ─── Scoring Thresholds ─────────────────────────────────────────────────────

GAP_THRESHOLD = 70.0              # Control percentage below this is a gap
ISSUE_RATIO = 0.7                 # Check score below ratio × weight raises an issue
NEUTRAL_RATIO = 0.5               # Score ratio for accepted-but-unevaluated checks

HIGH_PRIORITY_BELOW = 60.0        # Framework score below this → High priority
MEDIUM_PRIORITY_BELOW = 80.0      # Framework score below this → Medium priority
MAX_RECOMMENDATION_ACTIONS = 5    # Action list truncation per recommendation


# ─── Step Tables ────────────────────────────────────────────────────────────
# Each table is a sequence of (exclusive upper bound on match count, ratio).
# A count at or above every bound falls through to the floor ratio.

CODE_ALERT_STEPS = ((1, 1.0), (5, 0.7), (10, 0.4))
CODE_ALERT_FLOOR = 0.2

SECRET_ALERT_STEPS = ((1, 1.0), (3, 0.6))
SECRET_ALERT_FLOOR = 0.2

DEPENDENCY_ALERT_STEPS = ((1, 1.0), (10, 0.7), (25, 0.4))
DEPENDENCY_ALERT_FLOOR = 0.2

ALERT_STEPS = ((1, 1.0), (5, 0.8), (15, 0.5))
ALERT_FLOOR = 0.2

# Metric steps are multiples of the check threshold (inclusive upper bound).
METRIC_STEPS = ((1.0, 1.0), (2.0, 0.6))
METRIC_FLOOR = 0.2


# ─── Security Features ──────────────────────────────────────────────────────

KNOWN_FEATURES = ("codeScanning", "secretScanning", "dependabot", "branchProtection")

# Composite feature names → the features that must all be enabled
COMPOSITE_FEATURES = {
    "scanning": ("codeScanning", "secretScanning", "dependabot"),
}


# ─── Output Configuration ───────────────────────────────────────────────────

DEFAULT_FRAMEWORKS = ["OWASP", "NIST", "ISO27001"]
SUPPORTED_FORMATS = ["json", "markdown", "csv"]


@dataclass
class EngineConfig:
    """Top-level configuration for a compliance run."""
    frameworks: list[str] = field(default_factory=lambda: list(DEFAULT_FRAMEWORKS))
    output: Optional[str] = None           # Single JSON report path
    output_dir: Optional[str] = None       # Directory for multi-format exports
    formats: list[str] = field(default_factory=lambda: ["json"])
    strict: bool = False                   # Propagate InvalidAuditData instead of skipping
    verbose: bool = False

    @property
    def output_path(self) -> Optional[Path]:
        return Path(self.output) if self.output else None

    @property
    def export_dir(self) -> Optional[Path]:
        return Path(self.output_dir) if self.output_dir else None

    @classmethod
    def from_file(cls, path: str | Path) -> "EngineConfig":
        """Load configuration from a JSON file. Unknown keys are ignored."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        config = cls()
        if "frameworks" in data:
            frameworks = data["frameworks"]
            if isinstance(frameworks, str):
                frameworks = parse_framework_list(frameworks)
            config.frameworks = list(frameworks)
        if "formats" in data:
            config.formats = [f for f in data["formats"] if f in SUPPORTED_FORMATS]
        config.output = data.get("output", config.output)
        config.output_dir = data.get("output_dir", config.output_dir)
        config.strict = bool(data.get("strict", False))
        config.verbose = bool(data.get("verbose", False))
        return config


def parse_framework_list(value: str) -> list[str]:
    """Split a comma-separated framework selection, trimming blanks."""
    return [code.strip() for code in value.split(",") if code.strip()]
