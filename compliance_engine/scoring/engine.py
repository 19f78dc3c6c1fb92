"""
Scoring Engine — Computes 0-100 compliance scores from audit data.

Scoring model:
  - Each check yields a sub-score in [0, check weight].
  - A control's score is its summed check scores as a percentage of the
    summed check weights.
  - A framework's score is the control-weighted average of its controls.
  - The overall score is the unweighted mean of the evaluated frameworks.
  - Controls below GAP_THRESHOLD are gaps; frameworks below
    MEDIUM_PRIORITY_BELOW produce remediation recommendations.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..audit.models import AuditData, InvalidAuditData
from ..config import (
    GAP_THRESHOLD,
    HIGH_PRIORITY_BELOW,
    MAX_RECOMMENDATION_ACTIONS,
    MEDIUM_PRIORITY_BELOW,
)
from .evaluator import evaluate_check
from .frameworks import COMPLIANCE_FRAMEWORKS
from .matchers import MatcherFactory, regex_matcher
from .models import (
    ComplianceReport,
    ComplianceSummary,
    Control,
    ControlScore,
    FrameworkDefinition,
    FrameworkResult,
    Gap,
    Recommendation,
)

logger = logging.getLogger("compliance_engine.scoring")


def score_control(
    control: Control,
    audit: AuditData,
    matcher_factory: MatcherFactory = regex_matcher,
) -> ControlScore:
    """Evaluate every check of a control and return its 0-100 percentage."""
    result = ControlScore()
    total = 0.0

    for check in control.checks:
        check_result = evaluate_check(check, audit, matcher_factory)
        total += check_result.score
        result.max_score += check.weight
        result.checks.append(check_result)
        if check_result.issue:
            result.issues.append(check_result.issue)

    result.score = (total / result.max_score) * 100 if result.max_score > 0 else 0.0
    return result


def score_framework(
    framework: FrameworkDefinition,
    audit: AuditData,
    matcher_factory: MatcherFactory = regex_matcher,
) -> FrameworkResult:
    """Weighted average of control scores plus the list of gaps."""
    result = FrameworkResult(name=framework.name)
    total_weight = 0.0
    weighted_score = 0.0

    for control_name, control in framework.controls.items():
        control_score = score_control(control, audit, matcher_factory)
        result.control_scores[control_name] = control_score

        total_weight += control.weight
        weighted_score += control_score.score * control.weight

        if control_score.score < GAP_THRESHOLD:
            result.gaps.append(Gap(
                control=control_name,
                score=control_score.score,
                issues=list(control_score.issues),
            ))

    result.overall_score = weighted_score / total_weight if total_weight > 0 else 0.0
    return result


def compute_report(
    framework_codes: Iterable[str],
    audit: AuditData,
    registry: Mapping[str, FrameworkDefinition] = COMPLIANCE_FRAMEWORKS,
    strict: bool = False,
    matcher_factory: MatcherFactory = regex_matcher,
) -> ComplianceReport:
    """
    Score every requested framework and assemble the compliance report.

    Unknown framework codes are skipped. In non-strict mode a framework whose
    checks hit malformed audit data is recorded in ``report.errors`` and left
    out of the scores; with ``strict=True`` the InvalidAuditData propagates.

    Returns:
        ComplianceReport with per-framework results, summary, and
        recommendations.
    """
    report = ComplianceReport()

    for code in dict.fromkeys(framework_codes):
        framework = registry.get(code)
        if framework is None:
            logger.debug(f"Skipping unknown framework '{code}'")
            continue

        try:
            result = score_framework(framework, audit, matcher_factory)
        except InvalidAuditData as e:
            if strict:
                raise
            logger.warning(f"[{code}] Scoring skipped — invalid audit data: {e}")
            report.errors[code] = str(e)
            continue

        report.results[code] = result
        report.summary.framework_scores[code] = result.overall_score
        logger.info(f"[{code}] {result.name}: {result.overall_score:.1f}% "
                    f"({len(result.gaps)} gaps)")

    scores = list(report.summary.framework_scores.values())
    # Empty selection → 0.0 with frameworks_evaluated == 0
    report.summary.overall_score = sum(scores) / len(scores) if scores else 0.0
    report.summary.recommendations = generate_recommendations(report)
    return report


def generate_recommendations(report: ComplianceReport) -> list[Recommendation]:
    """High priority below 60%, Medium below 80%, none otherwise."""
    recommendations = []

    for code, score in report.summary.framework_scores.items():
        if score < HIGH_PRIORITY_BELOW:
            recommendations.append(Recommendation(
                priority="High",
                framework=code,
                title=f"Improve {code} Compliance",
                description=f"Current score ({score:.1f}%) is below target threshold",
                actions=framework_actions(report.results[code]),
            ))
        elif score < MEDIUM_PRIORITY_BELOW:
            recommendations.append(Recommendation(
                priority="Medium",
                framework=code,
                title=f"Enhance {code} Controls",
                description=f"Score ({score:.1f}%) has room for improvement",
                actions=framework_actions(report.results[code]),
            ))

    return recommendations


def framework_actions(result: FrameworkResult) -> list[str]:
    """One line per gap followed by its issues, capped at the action limit."""
    actions = []
    for gap in result.gaps:
        actions.append(f"Address gaps in {gap.control} (Score: {gap.score:.1f}%)")
        actions.extend(f"- {issue}" for issue in gap.issues if issue)
    return actions[:MAX_RECOMMENDATION_ACTIONS]
