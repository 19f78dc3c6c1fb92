"""
Framework registry — OWASP Top 10, NIST CSF, and ISO 27001 control tables.

Pure data: each control lists weighted checks. Check kinds the evaluator does
not implement yet (process, documentation, backup, ...) are declared as
UnimplementedCheck so they score neutrally instead of failing.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import (
    AlertCheck,
    CodeCheck,
    Control,
    DependencyCheck,
    FeatureCheck,
    FrameworkDefinition,
    MetricCheck,
    SecretCheck,
    UnimplementedCheck,
)


# ---------------------------------------------------------------------------
# OWASP Top 10 2021
# ---------------------------------------------------------------------------
OWASP = FrameworkDefinition(
    name="OWASP Top 10 2021",
    controls={
        "A01:2021 – Broken Access Control": Control(weight=10, checks=(
            CodeCheck(pattern=r"auth|authorization|access", weight=5),
            FeatureCheck(name="branchProtection", weight=3),
            AlertCheck(severity=("critical", "high"), category="access", weight=2),
        )),
        "A02:2021 – Cryptographic Failures": Control(weight=10, checks=(
            SecretCheck(pattern=r"key|token|password", weight=5),
            CodeCheck(pattern=r"crypto|encrypt|hash", weight=3),
            DependencyCheck(packages=("crypto", "bcrypt"), weight=2),
        )),
        "A03:2021 – Injection": Control(weight=10, checks=(
            CodeCheck(pattern=r"injection|sql|xss|cmd", weight=7),
            AlertCheck(severity=("critical", "high"), category="injection", weight=3),
        )),
        "A04:2021 – Insecure Design": Control(weight=8, checks=(
            FeatureCheck(name="codeScanning", weight=4),
            FeatureCheck(name="secretScanning", weight=4),
        )),
        "A05:2021 – Security Misconfiguration": Control(weight=8, checks=(
            FeatureCheck(name="branchProtection", weight=4),
            CodeCheck(pattern=r"config|setup|init", weight=2),
            AlertCheck(severity=("medium", "high"), category="config", weight=2),
        )),
        "A06:2021 – Vulnerable Components": Control(weight=9, checks=(
            DependencyCheck(outdated=True, weight=7),
            FeatureCheck(name="dependabot", weight=2),
        )),
        "A07:2021 – Authentication Failures": Control(weight=7, checks=(
            CodeCheck(pattern=r"login|auth|session", weight=4),
            SecretCheck(pattern=r"session|jwt|auth", weight=3),
        )),
        "A08:2021 – Software Integrity Failures": Control(weight=6, checks=(
            FeatureCheck(name="codeScanning", weight=3),
            DependencyCheck(verified=True, weight=3),
        )),
        "A09:2021 – Logging Failures": Control(weight=5, checks=(
            CodeCheck(pattern=r"log|audit|monitor", weight=3),
            SecretCheck(pattern=r"log|trace", weight=2),
        )),
        "A10:2021 – Server-Side Request Forgery": Control(weight=5, checks=(
            CodeCheck(pattern=r"ssrf|request|fetch", weight=3),
            AlertCheck(severity=("high",), category="ssrf", weight=2),
        )),
    },
)


# ---------------------------------------------------------------------------
# NIST Cybersecurity Framework
# ---------------------------------------------------------------------------
NIST = FrameworkDefinition(
    name="NIST Cybersecurity Framework",
    controls={
        "Identify (ID)": Control(weight=20, checks=(
            UnimplementedCheck(kind="repository", params={"count": True}, weight=10),
            FeatureCheck(name="scanning", weight=10),
        )),
        "Protect (PR)": Control(weight=25, checks=(
            FeatureCheck(name="branchProtection", weight=8),
            FeatureCheck(name="secretScanning", weight=8),
            DependencyCheck(current=True, weight=9),
        )),
        "Detect (DE)": Control(weight=25, checks=(
            FeatureCheck(name="codeScanning", weight=10),
            FeatureCheck(name="secretScanning", weight=8),
            FeatureCheck(name="dependabot", weight=7),
        )),
        "Respond (RS)": Control(weight=15, checks=(
            MetricCheck(name="meanTimeToResolve", threshold=30, weight=8),
            AlertCheck(state="open", weight=7),
        )),
        "Recover (RC)": Control(weight=15, checks=(
            UnimplementedCheck(kind="process", params={"name": "audit"}, weight=8),
            UnimplementedCheck(kind="documentation", params={"exists": True}, weight=7),
        )),
    },
)


# ---------------------------------------------------------------------------
# ISO 27001:2022
# ---------------------------------------------------------------------------
ISO27001 = FrameworkDefinition(
    name="ISO 27001:2022",
    controls={
        "A.5 Information Security Policies": Control(weight=5, checks=(
            UnimplementedCheck(kind="documentation", params={"policy": True}, weight=5),
        )),
        "A.8 Asset Management": Control(weight=10, checks=(
            UnimplementedCheck(kind="repository", params={"inventory": True}, weight=10),
        )),
        "A.12 Operations Security": Control(weight=15, checks=(
            FeatureCheck(name="codeScanning", weight=5),
            FeatureCheck(name="secretScanning", weight=5),
            UnimplementedCheck(kind="process", params={"name": "monitoring"}, weight=5),
        )),
        "A.13 Communications Security": Control(weight=10, checks=(
            SecretCheck(encrypted=True, weight=5),
            CodeCheck(pattern=r"tls|ssl|https", weight=5),
        )),
        "A.14 System Development": Control(weight=20, checks=(
            FeatureCheck(name="codeScanning", weight=7),
            FeatureCheck(name="branchProtection", weight=6),
            UnimplementedCheck(kind="process", params={"name": "secureSDLC"}, weight=7),
        )),
        # No severity and no state: counts alerts that report no state
        "A.16 Information Security Incident Management": Control(weight=15, checks=(
            AlertCheck(response=True, weight=8),
            MetricCheck(name="responseTime", weight=7),
        )),
        "A.17 Business Continuity": Control(weight=10, checks=(
            UnimplementedCheck(kind="backup", params={"exists": True}, weight=5),
            UnimplementedCheck(kind="process", params={"name": "recovery"}, weight=5),
        )),
        "A.18 Compliance": Control(weight=15, checks=(
            UnimplementedCheck(kind="audit", params={"regular": True}, weight=8),
            UnimplementedCheck(kind="documentation", params={"compliance": True}, weight=7),
        )),
    },
)


COMPLIANCE_FRAMEWORKS: Mapping[str, FrameworkDefinition] = MappingProxyType({
    "OWASP": OWASP,
    "NIST": NIST,
    "ISO27001": ISO27001,
})


def get_framework(code: str) -> FrameworkDefinition | None:
    """Look up a framework by its case-sensitive registry code."""
    return COMPLIANCE_FRAMEWORKS.get(code)
