"""Scoring package — check evaluation, framework aggregation, and the registry."""

from .engine import compute_report, generate_recommendations, score_control, score_framework
from .evaluator import evaluate_check
from .frameworks import COMPLIANCE_FRAMEWORKS, get_framework
from .matchers import RegexMatcher, TextMatcher, regex_matcher
from .models import (
    AlertCheck,
    CheckOutcome,
    CheckResult,
    CodeCheck,
    ComplianceReport,
    Control,
    ControlScore,
    DependencyCheck,
    FeatureCheck,
    FrameworkDefinition,
    FrameworkResult,
    Gap,
    MetricCheck,
    Recommendation,
    SecretCheck,
    UnimplementedCheck,
    check_from_dict,
)

__all__ = [
    "compute_report",
    "generate_recommendations",
    "score_control",
    "score_framework",
    "evaluate_check",
    "COMPLIANCE_FRAMEWORKS",
    "get_framework",
    "RegexMatcher",
    "TextMatcher",
    "regex_matcher",
    "AlertCheck",
    "CheckOutcome",
    "CheckResult",
    "CodeCheck",
    "ComplianceReport",
    "Control",
    "ControlScore",
    "DependencyCheck",
    "FeatureCheck",
    "FrameworkDefinition",
    "FrameworkResult",
    "Gap",
    "MetricCheck",
    "Recommendation",
    "SecretCheck",
    "UnimplementedCheck",
    "check_from_dict",
]
