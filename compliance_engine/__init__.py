"""
Repository Compliance Scoring Engine
====================================
Scores per-repository security posture (feature flags, alerts, metrics)
against OWASP Top 10, NIST CSF, and ISO 27001 control tables and derives
prioritized remediation recommendations.

The engine is a pure function of its inputs: it never touches the network
and never mutates the audit snapshot or framework definitions.
"""

__version__ = "1.0.0"

from .audit import AuditData, InvalidAuditData, load_audit_file, parse_audit_data
from .scoring import COMPLIANCE_FRAMEWORKS, ComplianceReport, compute_report

__all__ = [
    "__version__",
    "AuditData",
    "InvalidAuditData",
    "load_audit_file",
    "parse_audit_data",
    "COMPLIANCE_FRAMEWORKS",
    "ComplianceReport",
    "compute_report",
]
