"""Structural advice for schemas and the actions that fix it."""

from .findings import AdvisoryReport, Finding, RemediationAction
from .engine import analyze, analyze_logical, analyze_conceptual
from .remediation import RemediationResult, UnknownRemediationError, apply_remediation

__all__ = [
    "AdvisoryReport",
    "Finding",
    "RemediationAction",
    "analyze",
    "analyze_logical",
    "analyze_conceptual",
    "RemediationResult",
    "UnknownRemediationError",
    "apply_remediation",
]
