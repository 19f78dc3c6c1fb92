"""
Audit data models — Typed view over a repository security-posture snapshot.

Nested sections are kept optional: a repository that never reported
``metrics`` only becomes invalid once a check actually needs them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

ALERT_GROUPS = ("code", "secret", "dependency")


class InvalidAuditData(ValueError):
    """Raised when audit data is missing a structure the engine depends on."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


@dataclass(frozen=True)
class Alert:
    """A single code, secret, or dependency alert."""
    severity: Optional[str] = None
    state: Optional[str] = None
    rule: str = ""
    description: str = ""
    secret_type: str = ""
    secret_type_display_name: str = ""

    @property
    def finding_text(self) -> str:
        """Text matched by code-pattern checks."""
        return f"{self.rule} {self.description}"

    @property
    def secret_text(self) -> str:
        """Text matched by secret-pattern checks."""
        return f"{self.secret_type} {self.secret_type_display_name}"


@dataclass(frozen=True)
class AlertSet:
    """Alert groups reported for a repository; None marks a group that was never reported."""
    code: Optional[tuple[Alert, ...]] = None
    secret: Optional[tuple[Alert, ...]] = None
    dependency: Optional[tuple[Alert, ...]] = None


@dataclass(frozen=True)
class RepositoryRecord:
    """Security posture for one repository."""
    name: str
    index: int = 0
    security_features: Optional[dict[str, bool]] = None   # feature → enabled
    alerts: Optional[AlertSet] = None
    metrics: Optional[dict[str, float]] = None

    @property
    def path(self) -> str:
        return f"repositories[{self.index}]"

    def feature_enabled(self, feature: str) -> bool:
        if self.security_features is None:
            raise InvalidAuditData(
                f"repository '{self.name}' has no securityFeatures section",
                f"{self.path}.securityFeatures",
            )
        if feature not in self.security_features:
            raise InvalidAuditData(
                f"repository '{self.name}' does not report feature '{feature}'",
                f"{self.path}.securityFeatures.{feature}",
            )
        return self.security_features[feature]

    def alert_group(self, group: str) -> tuple[Alert, ...]:
        if self.alerts is None:
            raise InvalidAuditData(
                f"repository '{self.name}' has no alerts section", f"{self.path}.alerts"
            )
        alerts = getattr(self.alerts, group)
        if alerts is None:
            raise InvalidAuditData(
                f"repository '{self.name}' does not report {group} alerts",
                f"{self.path}.alerts.{group}",
            )
        return alerts

    def metric(self, name: str) -> float:
        if self.metrics is None or name not in self.metrics:
            raise InvalidAuditData(
                f"repository '{self.name}' does not report metric '{name}'",
                f"{self.path}.metrics.{name}",
            )
        return self.metrics[name]


@dataclass(frozen=True)
class AuditData:
    """A full audit snapshot: every repository record in the scan."""
    repositories: tuple[RepositoryRecord, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.repositories)

    def _group(self, group: str) -> list[Alert]:
        return [a for repo in self.repositories for a in repo.alert_group(group)]

    def code_alerts(self) -> list[Alert]:
        return self._group("code")

    def secret_alerts(self) -> list[Alert]:
        return self._group("secret")

    def dependency_alerts(self) -> list[Alert]:
        return self._group("dependency")

    def all_alerts(self) -> list[Alert]:
        return [
            a for repo in self.repositories
            for group in ALERT_GROUPS
            for a in repo.alert_group(group)
        ]
