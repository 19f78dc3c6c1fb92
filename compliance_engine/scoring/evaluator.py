"""
Check evaluator — Scores a single check spec against the audit snapshot.

Every check returns a sub-score in [0, weight]. Alert-count checks use a
descending step table (fewer matches → higher score); feature checks are
strictly proportional to the share of repositories with the feature on.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from ..audit.models import Alert, AuditData
from ..config import (
    ALERT_FLOOR,
    ALERT_STEPS,
    CODE_ALERT_FLOOR,
    CODE_ALERT_STEPS,
    COMPOSITE_FEATURES,
    DEPENDENCY_ALERT_FLOOR,
    DEPENDENCY_ALERT_STEPS,
    ISSUE_RATIO,
    KNOWN_FEATURES,
    METRIC_FLOOR,
    METRIC_STEPS,
    NEUTRAL_RATIO,
    SECRET_ALERT_FLOOR,
    SECRET_ALERT_STEPS,
)
from .matchers import MatcherFactory, regex_matcher
from .models import (
    AlertCheck,
    CheckOutcome,
    CheckResult,
    CheckSpec,
    CodeCheck,
    DependencyCheck,
    FeatureCheck,
    MetricCheck,
    SecretCheck,
)

logger = logging.getLogger("compliance_engine.scoring.evaluator")

IMPLEMENTED_METRICS = ("meanTimeToResolve",)


def step_ratio(count: float, steps: Sequence[tuple[float, float]], floor: float) -> float:
    """Return the ratio of the first step whose exclusive bound exceeds ``count``."""
    for bound, ratio in steps:
        if count < bound:
            return ratio
    return floor


def evaluate_check(
    check: CheckSpec,
    audit: AuditData,
    matcher_factory: MatcherFactory = regex_matcher,
) -> CheckResult:
    """
    Evaluate one check and attach an issue when it scores below
    ISSUE_RATIO of its weight.

    Raises:
        InvalidAuditData: a repository lacks a section the check reads.
    """
    handler = _HANDLERS.get(check.kind)
    if handler is None:
        logger.debug(f"Check type '{check.kind}' not implemented; scoring neutrally")
        return CheckResult(
            kind=check.kind,
            score=check.weight * NEUTRAL_RATIO,
            max_score=check.weight,
            issue=f"Check type '{check.kind}' not implemented",
            outcome=CheckOutcome.NOT_IMPLEMENTED,
        )

    result = handler(check, audit, matcher_factory)
    result.score = max(0.0, min(check.weight, result.score))
    if result.score < check.weight * ISSUE_RATIO:
        result.issue = _issue_message(check)
    return result


# ---------------------------------------------------------------------------
# Per-kind handlers
# ---------------------------------------------------------------------------

def _evaluate_feature(check: FeatureCheck, audit: AuditData, _factory) -> CheckResult:
    repos = audit.repositories
    if not repos:
        return CheckResult(check.kind, 0.0, check.weight, matched=0)

    required = COMPOSITE_FEATURES.get(check.name)
    if required is None:
        required = (check.name,) if check.name in KNOWN_FEATURES else None

    enabled = 0
    if required is not None:
        enabled = sum(
            1 for repo in repos
            if all(repo.feature_enabled(f) for f in required)
        )
    else:
        logger.debug(f"Unknown security feature '{check.name}'; counting no repositories")

    return CheckResult(
        check.kind, (enabled / len(repos)) * check.weight, check.weight, matched=enabled,
    )


def _count_matching(alerts: list[Alert], text: Callable[[Alert], str], matcher) -> int:
    return sum(1 for alert in alerts if matcher.matches(text(alert)))


def _evaluate_code(check: CodeCheck, audit: AuditData, factory: MatcherFactory) -> CheckResult:
    matches = _count_matching(audit.code_alerts(), lambda a: a.finding_text, factory(check.pattern))
    ratio = step_ratio(matches, CODE_ALERT_STEPS, CODE_ALERT_FLOOR)
    return CheckResult(check.kind, check.weight * ratio, check.weight, matched=matches)


def _evaluate_secret(check: SecretCheck, audit: AuditData, factory: MatcherFactory) -> CheckResult:
    matches = _count_matching(audit.secret_alerts(), lambda a: a.secret_text, factory(check.pattern))
    ratio = step_ratio(matches, SECRET_ALERT_STEPS, SECRET_ALERT_FLOOR)
    return CheckResult(check.kind, check.weight * ratio, check.weight, matched=matches)


def _evaluate_dependency(check: DependencyCheck, audit: AuditData, _factory) -> CheckResult:
    if not check.outdated:
        # verified / current / package lists are accepted but not evaluated
        return CheckResult(
            check.kind, check.weight * NEUTRAL_RATIO, check.weight, outcome=CheckOutcome.NEUTRAL,
        )
    count = len(audit.dependency_alerts())
    ratio = step_ratio(count, DEPENDENCY_ALERT_STEPS, DEPENDENCY_ALERT_FLOOR)
    return CheckResult(check.kind, check.weight * ratio, check.weight, matched=count)


def _evaluate_alert(check: AlertCheck, audit: AuditData, _factory) -> CheckResult:
    alerts = audit.all_alerts()
    if check.severity:
        wanted = {s.lower() for s in check.severity}
        matches = sum(1 for a in alerts if (a.severity or "").lower() in wanted)
    else:
        matches = sum(1 for a in alerts if a.state == check.state)
    ratio = step_ratio(matches, ALERT_STEPS, ALERT_FLOOR)
    return CheckResult(check.kind, check.weight * ratio, check.weight, matched=matches)


def _evaluate_metric(check: MetricCheck, audit: AuditData, _factory) -> CheckResult:
    repos = audit.repositories
    if not repos:
        return CheckResult(check.kind, 0.0, check.weight)
    if check.name not in IMPLEMENTED_METRICS or check.threshold is None:
        return CheckResult(
            check.kind, check.weight * NEUTRAL_RATIO, check.weight, outcome=CheckOutcome.NEUTRAL,
        )

    average = sum(repo.metric(check.name) for repo in repos) / len(repos)
    ratio = METRIC_FLOOR
    for multiple, step in METRIC_STEPS:
        if average <= check.threshold * multiple:
            ratio = step
            break
    return CheckResult(check.kind, check.weight * ratio, check.weight)


_HANDLERS = {
    "feature": _evaluate_feature,
    "code": _evaluate_code,
    "secret": _evaluate_secret,
    "dependency": _evaluate_dependency,
    "alert": _evaluate_alert,
    "metric": _evaluate_metric,
}


def _issue_message(check: CheckSpec) -> str:
    if isinstance(check, FeatureCheck):
        return f"Security feature '{check.name}' not adequately enabled"
    if isinstance(check, CodeCheck):
        return f"Code patterns for '{check.pattern}' need attention"
    if isinstance(check, SecretCheck):
        return f"Secret scanning alerts found for '{check.pattern or '*'}'"
    if isinstance(check, DependencyCheck):
        return "Dependency vulnerabilities need attention"
    if isinstance(check, AlertCheck):
        if check.severity:
            return f"{'/'.join(check.severity)} severity alerts need resolution"
        return f"Alerts in state '{check.state}' need resolution"
    if isinstance(check, MetricCheck):
        return f"Metric '{check.name}' exceeds threshold"
    return f"Check '{check.kind}' below target"
