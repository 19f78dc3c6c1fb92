"""
Pytest configuration and shared fixtures

Provides audit payload builders and parsed AuditData snapshots.
"""

import pytest

from compliance_engine.audit import parse_audit_data

ALL_FEATURES = ("codeScanning", "secretScanning", "dependabot", "branchProtection")


def _repo_payload(
    name="org/service",
    enabled=ALL_FEATURES,
    code=(),
    secret=(),
    dependency=(),
    mttr=2.0,
):
    return {
        "name": name,
        "securityFeatures": {f: {"enabled": f in enabled} for f in ALL_FEATURES},
        "alerts": {
            "code": list(code),
            "secret": list(secret),
            "dependency": list(dependency),
        },
        "metrics": {"meanTimeToResolve": mttr},
    }


@pytest.fixture
def repo_payload():
    """Factory for a single repository dict in audit-file shape"""
    return _repo_payload


@pytest.fixture
def make_audit():
    """Factory: build AuditData from repository dicts"""
    def _make(*repos):
        return parse_audit_data({"repositories": list(repos)})
    return _make


@pytest.fixture
def code_alert():
    def _alert(rule="js/sql-injection", description="Database query built from user input",
               severity="high", state="open"):
        return {"rule": rule, "description": description, "severity": severity, "state": state}
    return _alert


@pytest.fixture
def secret_alert():
    def _alert(secret_type="github_personal_access_token",
               display="GitHub Personal Access Token", state="open"):
        return {
            "secretType": secret_type,
            "secretTypeDisplayName": display,
            "severity": "critical",
            "state": state,
        }
    return _alert


@pytest.fixture
def clean_audit(make_audit, repo_payload):
    """One repository, every feature on, no alerts, MTTR 2 days"""
    return make_audit(repo_payload())


@pytest.fixture
def audit_payload(repo_payload, code_alert, secret_alert):
    """A small realistic audit document with mixed posture"""
    return {
        "repositories": [
            repo_payload(
                name="org/api",
                code=[code_alert(), code_alert(rule="js/xss", description="Reflected XSS")],
                secret=[secret_alert()],
                dependency=[{"severity": "moderate", "state": "open"}],
                mttr=12,
            ),
            repo_payload(
                name="org/web",
                enabled=("codeScanning", "dependabot"),
                mttr=40,
            ),
        ]
    }
