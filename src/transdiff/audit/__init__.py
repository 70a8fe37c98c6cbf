"""Audit engine and report models."""

from transdiff.audit.engine import AuditError, run_audit, split_unreadable
from transdiff.audit.models import AuditReport, Unclassifiable

__all__ = ["AuditError", "AuditReport", "Unclassifiable", "run_audit", "split_unreadable"]
