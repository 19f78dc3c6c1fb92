"""
Scoring data models — Check specs, framework definitions, and result types.

Check specs form a tagged union keyed by ``kind``. Every variant is a frozen
dataclass whose parameters serialize through ``to_dict()``, so framework
tables stay plain data.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


# ---------------------------------------------------------------------------
# Check specs
# ---------------------------------------------------------------------------

class _Weighted:
    """Rejects non-positive weights on construction."""

    def __post_init__(self):
        if not self.weight > 0:
            raise ValueError(f"{type(self).__name__} weight must be positive, got {self.weight!r}")


@dataclass(frozen=True)
class FeatureCheck(_Weighted):
    name: str
    weight: float
    kind = "feature"

    def to_dict(self) -> dict:
        return {"type": self.kind, "name": self.name, "weight": self.weight}


@dataclass(frozen=True)
class CodeCheck(_Weighted):
    pattern: str                    # Case-insensitive regex source
    weight: float
    kind = "code"

    def to_dict(self) -> dict:
        return {"type": self.kind, "pattern": self.pattern, "weight": self.weight}


@dataclass(frozen=True)
class SecretCheck(_Weighted):
    weight: float
    pattern: Optional[str] = None   # None matches every secret alert
    encrypted: bool = False
    kind = "secret"

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"type": self.kind, "weight": self.weight}
        if self.pattern is not None:
            data["pattern"] = self.pattern
        if self.encrypted:
            data["encrypted"] = True
        return data


@dataclass(frozen=True)
class DependencyCheck(_Weighted):
    weight: float
    outdated: bool = False
    verified: bool = False
    current: bool = False
    packages: tuple[str, ...] = ()
    kind = "dependency"

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"type": self.kind, "weight": self.weight}
        for flag in ("outdated", "verified", "current"):
            if getattr(self, flag):
                data[flag] = True
        if self.packages:
            data["packages"] = list(self.packages)
        return data


@dataclass(frozen=True)
class AlertCheck(_Weighted):
    weight: float
    severity: tuple[str, ...] = ()  # Lower-case severities; empty → filter by state
    state: Optional[str] = None
    category: str = ""              # Informational label only
    response: bool = False          # Declares an incident-response check; informational
    kind = "alert"

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"type": self.kind, "weight": self.weight}
        if self.severity:
            data["severity"] = list(self.severity)
        if self.state is not None:
            data["state"] = self.state
        if self.category:
            data["category"] = self.category
        if self.response:
            data["response"] = True
        return data


@dataclass(frozen=True)
class MetricCheck(_Weighted):
    name: str
    weight: float
    threshold: Optional[float] = None
    kind = "metric"

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"type": self.kind, "name": self.name, "weight": self.weight}
        if self.threshold is not None:
            data["threshold"] = self.threshold
        return data


@dataclass(frozen=True)
class UnimplementedCheck(_Weighted):
    """A check kind the evaluator does not know; always scored neutrally."""
    kind: str
    weight: float
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def to_dict(self) -> dict:
        return {"type": self.kind, **self.params, "weight": self.weight}


CheckSpec = Union[
    FeatureCheck, CodeCheck, SecretCheck, DependencyCheck,
    AlertCheck, MetricCheck, UnimplementedCheck,
]


def check_from_dict(data: Mapping[str, Any]) -> CheckSpec:
    """Build a check spec from its serialized form."""
    params = dict(data)
    kind = params.pop("type", "")
    weight = float(params.pop("weight"))

    if kind == "feature":
        return FeatureCheck(name=params["name"], weight=weight)
    if kind == "code":
        return CodeCheck(pattern=params["pattern"], weight=weight)
    if kind == "secret":
        return SecretCheck(
            weight=weight,
            pattern=params.get("pattern"),
            encrypted=bool(params.get("encrypted", False)),
        )
    if kind == "dependency":
        return DependencyCheck(
            weight=weight,
            outdated=bool(params.get("outdated", False)),
            verified=bool(params.get("verified", False)),
            current=bool(params.get("current", False)),
            packages=tuple(params.get("packages", ())),
        )
    if kind == "alert":
        return AlertCheck(
            weight=weight,
            severity=tuple(s.lower() for s in params.get("severity", ())),
            state=params.get("state"),
            category=params.get("category", ""),
            response=bool(params.get("response", False)),
        )
    if kind == "metric":
        threshold = params.get("threshold")
        return MetricCheck(
            name=params["name"],
            weight=weight,
            threshold=float(threshold) if threshold is not None else None,
        )
    return UnimplementedCheck(kind=kind, weight=weight, params=params)


# ---------------------------------------------------------------------------
# Framework definitions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Control(_Weighted):
    weight: float
    checks: tuple[CheckSpec, ...]

    def to_dict(self) -> dict:
        return {"weight": self.weight, "checks": [c.to_dict() for c in self.checks]}


@dataclass(frozen=True)
class FrameworkDefinition:
    """A named compliance framework and its ordered, read-only control map."""
    name: str
    controls: Mapping[str, Control]

    def __post_init__(self):
        object.__setattr__(self, "controls", MappingProxyType(dict(self.controls)))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "controls": {name: c.to_dict() for name, c in self.controls.items()},
        }


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class CheckOutcome(str, enum.Enum):
    SCORED = "scored"                   # Evaluated against audit data
    NEUTRAL = "neutral"                 # Accepted parameters, not evaluated
    NOT_IMPLEMENTED = "not_implemented" # Unrecognized check kind


def _r(value: float) -> float:
    return round(value, 2)


@dataclass
class CheckResult:
    kind: str
    score: float
    max_score: float
    issue: Optional[str] = None
    outcome: CheckOutcome = CheckOutcome.SCORED
    matched: Optional[int] = None       # Matching alerts / enabled repositories

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "score": _r(self.score),
            "maxScore": self.max_score,
            "issue": self.issue,
            "outcome": self.outcome.value,
            "matched": self.matched,
        }


@dataclass
class ControlScore:
    """Score for a single control, as a 0-100 percentage."""
    score: float = 0.0
    max_score: float = 0.0
    issues: list[str] = field(default_factory=list)
    checks: list[CheckResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "score": _r(self.score),
            "maxScore": self.max_score,
            "issues": list(self.issues),
            "details": [c.to_dict() for c in self.checks],
        }


@dataclass
class Gap:
    control: str
    score: float
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"control": self.control, "score": _r(self.score), "issues": list(self.issues)}


@dataclass
class FrameworkResult:
    name: str
    overall_score: float = 0.0
    control_scores: dict[str, ControlScore] = field(default_factory=dict)
    gaps: list[Gap] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "overallScore": _r(self.overall_score),
            "controlScores": {k: v.to_dict() for k, v in self.control_scores.items()},
            "gaps": [g.to_dict() for g in self.gaps],
        }


@dataclass
class Recommendation:
    priority: str                       # "High" or "Medium"
    framework: str
    title: str
    description: str
    actions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "priority": self.priority,
            "framework": self.framework,
            "title": self.title,
            "description": self.description,
            "actions": list(self.actions),
        }


@dataclass
class ComplianceSummary:
    overall_score: float = 0.0
    framework_scores: dict[str, float] = field(default_factory=dict)
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def frameworks_evaluated(self) -> int:
        return len(self.framework_scores)

    def to_dict(self) -> dict:
        return {
            "overallScore": _r(self.overall_score),
            "frameworksEvaluated": self.frameworks_evaluated,
            "frameworkScores": {k: _r(v) for k, v in self.framework_scores.items()},
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass
class ComplianceReport:
    """Complete compliance result for one audit snapshot."""
    results: dict[str, FrameworkResult] = field(default_factory=dict)
    summary: ComplianceSummary = field(default_factory=ComplianceSummary)
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "results": {k: v.to_dict() for k, v in self.results.items()},
            "summary": self.summary.to_dict(),
            "errors": dict(self.errors),
        }
