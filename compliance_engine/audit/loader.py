"""
Audit loader — Converts a decoded audit JSON document into AuditData.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .models import ALERT_GROUPS, Alert, AlertSet, AuditData, InvalidAuditData, RepositoryRecord

logger = logging.getLogger("compliance_engine.audit")


def load_audit_file(path: str | Path) -> AuditData:
    """Read and parse an audit results JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except json.JSONDecodeError as e:
        raise InvalidAuditData(f"not valid JSON ({e.msg} at line {e.lineno})", str(path)) from e
    except OSError as e:
        raise InvalidAuditData(f"cannot read audit file: {e.strerror or e}", str(path)) from e

    audit = parse_audit_data(payload)
    logger.info(f"Loaded {len(audit)} repositories from {path}")
    return audit


def parse_audit_data(payload: Any) -> AuditData:
    """Build AuditData from an already-decoded JSON payload."""
    if not isinstance(payload, Mapping):
        raise InvalidAuditData("audit document must be a JSON object")
    repos = payload.get("repositories")
    if repos is None:
        raise InvalidAuditData("missing 'repositories' collection", "repositories")
    if not isinstance(repos, list):
        raise InvalidAuditData("'repositories' must be a list", "repositories")

    return AuditData(repositories=tuple(
        _parse_repository(entry, index) for index, entry in enumerate(repos)
    ))


def _parse_repository(entry: Any, index: int) -> RepositoryRecord:
    path = f"repositories[{index}]"
    if not isinstance(entry, Mapping):
        raise InvalidAuditData("repository entry must be an object", path)

    name = entry.get("name") or entry.get("fullName") or entry.get("full_name") or path
    return RepositoryRecord(
        name=str(name),
        index=index,
        security_features=_parse_features(entry.get("securityFeatures"), f"{path}.securityFeatures"),
        alerts=_parse_alerts(entry.get("alerts"), f"{path}.alerts"),
        metrics=_parse_metrics(entry.get("metrics"), f"{path}.metrics"),
    )


def _parse_features(raw: Any, path: str) -> dict[str, bool] | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidAuditData("securityFeatures must be an object", path)
    features = {}
    for name, value in raw.items():
        # Accept both {"enabled": true} and a bare boolean
        flag_path = f"{path}.{name}"
        if isinstance(value, Mapping):
            value = value.get("enabled")
            flag_path += ".enabled"
        if value is None:
            value = False
        if not isinstance(value, bool):
            raise InvalidAuditData(f"feature '{name}' enabled flag must be a boolean", flag_path)
        features[name] = value
    return features


def _parse_alerts(raw: Any, path: str) -> AlertSet | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidAuditData("alerts must be an object", path)

    groups = {}
    for group in ALERT_GROUPS:
        items = raw.get(group)
        if items is None:
            groups[group] = None
            continue
        if not isinstance(items, list):
            raise InvalidAuditData(f"alerts.{group} must be a list", f"{path}.{group}")
        groups[group] = tuple(
            _parse_alert(item, f"{path}.{group}[{i}]") for i, item in enumerate(items)
        )
    return AlertSet(**groups)


def _parse_alert(raw: Any, path: str) -> Alert:
    if not isinstance(raw, Mapping):
        raise InvalidAuditData("alert must be an object", path)
    return Alert(
        severity=_opt_str(raw.get("severity")),
        state=_opt_str(raw.get("state")),
        rule=_text(raw.get("rule")),
        description=_text(raw.get("description")),
        secret_type=_text(raw.get("secretType")),
        secret_type_display_name=_text(raw.get("secretTypeDisplayName")),
    )


def _parse_metrics(raw: Any, path: str) -> dict[str, float] | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidAuditData("metrics must be an object", path)
    metrics = {}
    for name, value in raw.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidAuditData(f"metric '{name}' must be numeric", f"{path}.{name}")
        metrics[name] = float(value)
    return metrics


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    # Rules are sometimes nested objects ({"id": ..., "description": ...})
    if isinstance(value, Mapping):
        return " ".join(str(v) for v in value.values() if v is not None)
    return str(value)
