"""
Diagnostics package for map specials processing.

Public API:
    - SpecialsReport, SpecialIssue, Severity: Core result types
    - DiagnosticRule: Rule definition used to build issues
"""

from .core import (
    Severity,
    SpecialIssue,
    SpecialsReport,
)
from .rules import DiagnosticRule

__all__ = [
    'Severity',
    'SpecialIssue',
    'SpecialsReport',
    'DiagnosticRule',
]
