"""
Core data structures for specials diagnostics.

Defines the types used to report problems found while processing specials:
- Severity: Issue severity levels (INFO, WARN)
- SpecialIssue: Individual diagnostic finding
- SpecialsReport: Collection of issues from one run

Diagnostics never stop processing. The affected step is skipped and the
issue is logged and kept on the report for inspection.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Diagnostic severity levels.

    - INFO: Informational, logged at INFO
    - WARN: A special was ignored, logged at WARNING
    """
    INFO = auto()
    WARN = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class SpecialIssue:
    """Represents a single diagnostic.

    Attributes:
        severity: Issue severity
        code: Rule code (e.g., "ALIGN-001")
        message: Human-readable description
        location: Optional location (e.g., "line 12", "thing 3")
    """
    severity: Severity
    code: str
    message: str
    location: Optional[str] = None

    def format(self) -> str:
        """Format issue for display: [SEVERITY] CODE location :: message"""
        location = self.location or '-'
        return f"[{self.severity}] {self.code} {location} :: {self.message}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class SpecialsReport:
    """Collection of diagnostics from one specials run.

    Attributes:
        issues: List of SpecialIssue objects
        profile: Name of the profile the run used
    """
    issues: List[SpecialIssue] = field(default_factory=list)
    profile: Optional[str] = None

    @property
    def warnings(self) -> List[SpecialIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def infos(self) -> List[SpecialIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def merge(self, other: 'SpecialsReport') -> 'SpecialsReport':
        """Merge another report into this one; returns self for chaining."""
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Multi-line summary of all issues."""
        if not self.issues:
            return "Specials processed: No issues found"

        profile_str = f" ({self.profile})" if self.profile else ""
        lines = [f"Specials processed{profile_str}: {len(self.issues)} issue(s)", "-" * 60]
        for severity in [Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append(issue.format())

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'profile': self.profile,
            'issue_count': len(self.issues),
            'warn_count': len(self.warnings),
            'info_count': len(self.infos),
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'location': issue.location,
                }
                for issue in self.issues
            ]
        }
