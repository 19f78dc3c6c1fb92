"""Audit package — typed audit snapshot models and the JSON loader."""

from .models import Alert, AlertSet, AuditData, InvalidAuditData, RepositoryRecord
from .loader import load_audit_file, parse_audit_data

__all__ = [
    "Alert",
    "AlertSet",
    "AuditData",
    "InvalidAuditData",
    "RepositoryRecord",
    "load_audit_file",
    "parse_audit_data",
]
