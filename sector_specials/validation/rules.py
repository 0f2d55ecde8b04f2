"""
Diagnostic rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "ALIGN-001")
- Severity: WARN or INFO
- Message template: Human-readable description

Rules are organized by category:
- ALIGN: Plane_Align
- THING: Slope things
- PLANE: Plane fitting
- COPY: Plane_Copy
- SRB2: SRB2 slope lines
- FLOOR: 3D floors
- ACS: Script colour scanning
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, SpecialIssue


@dataclass(frozen=True)
class DiagnosticRule:
    """Definition of a diagnostic rule.

    Attributes:
        code: Unique rule code
        severity: Default severity for this rule
        message_template: Template for the message (use {placeholders})
    """
    code: str
    severity: Severity
    message_template: str

    def format_message(self, **kwargs) -> str:
        """Format the message template with provided values."""
        return self.message_template.format(**kwargs)

    def issue(self, location: Optional[str] = None, **kwargs) -> SpecialIssue:
        return SpecialIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            location=location,
        )


# =============================================================================
# PLANE_ALIGN RULES (ALIGN)
# =============================================================================

ALIGN_001 = DiagnosticRule(
    code="ALIGN-001",
    severity=Severity.WARN,
    message_template="Ignoring Plane_Align on one-sided line {line}",
)

ALIGN_002 = DiagnosticRule(
    code="ALIGN-002",
    severity=Severity.WARN,
    message_template="Ignoring Plane_Align on line {line}, which has the same sector on both sides",
)

ALIGN_003 = DiagnosticRule(
    code="ALIGN-003",
    severity=Severity.WARN,
    message_template="Ignoring Plane_Align on line {line}; sector {sector} has no appropriate reference vertex",
)

# =============================================================================
# SLOPE THING RULES (THING)
# =============================================================================

THING_001 = DiagnosticRule(
    code="THING-001",
    severity=Severity.WARN,
    message_template="Ignoring line slope thing {thing} with no lineid argument",
)

THING_002 = DiagnosticRule(
    code="THING-002",
    severity=Severity.WARN,
    message_template="Vavoom thing {thing} lies directly on its target line {line}",
)

THING_003 = DiagnosticRule(
    code="THING-003",
    severity=Severity.WARN,
    message_template="Vavoom thing {thing} has no matching line with first arg {tid}",
)

THING_004 = DiagnosticRule(
    code="THING-004",
    severity=Severity.WARN,
    message_template="Ignoring slope copy thing in sector {sector} with no argument",
)

THING_005 = DiagnosticRule(
    code="THING-005",
    severity=Severity.WARN,
    message_template="Ignoring slope copy thing in sector {sector}; no sectors have target tag {tag}",
)

THING_006 = DiagnosticRule(
    code="THING-006",
    severity=Severity.INFO,
    message_template="Slope thing {thing} is not inside any sector",
)

THING_007 = DiagnosticRule(
    code="THING-007",
    severity=Severity.WARN,
    message_template="Ignoring sector tilt thing {thing} with vertical tilt {tilt}",
)

THING_008 = DiagnosticRule(
    code="THING-008",
    severity=Severity.WARN,
    message_template="Ignoring vertex height thing {thing}; no vertex at ({x}, {y})",
)

# =============================================================================
# PLANE FITTING RULES (PLANE)
# =============================================================================

PLANE_001 = DiagnosticRule(
    code="PLANE-001",
    severity=Severity.WARN,
    message_template="Degenerate {surface} slope for sector {sector} from {source}; plane left unchanged",
)

# =============================================================================
# PLANE_COPY RULES (COPY)
# =============================================================================

COPY_001 = DiagnosticRule(
    code="COPY-001",
    severity=Severity.WARN,
    message_template="Ignoring Plane_Copy {slot} on line {line}; no sectors have tag {tag}",
)

# =============================================================================
# SRB2 RULES (SRB2)
# =============================================================================

SRB2_001 = DiagnosticRule(
    code="SRB2-001",
    severity=Severity.WARN,
    message_template="Ignoring vertex slope special on line {line}, the target back/front sector for this line don't exist",
)

SRB2_002 = DiagnosticRule(
    code="SRB2-002",
    severity=Severity.WARN,
    message_template="Ignoring vertex slope special on line {line}, no or insufficient vertex slope things (750) were provided",
)

SRB2_003 = DiagnosticRule(
    code="SRB2-003",
    severity=Severity.WARN,
    message_template="Ignoring copied slopes special on line {line}, no front sector on this line",
)

SRB2_004 = DiagnosticRule(
    code="SRB2-004",
    severity=Severity.WARN,
    message_template="Ignoring copied slopes special on line {line}, couldn't find sector with tag {tag}",
)

# =============================================================================
# 3D FLOOR RULES (FLOOR)
# =============================================================================

FLOOR_001 = DiagnosticRule(
    code="FLOOR-001",
    severity=Severity.WARN,
    message_template="Invalid Sector_Set3dFloor special on line {line}: Line has no front sector",
)

# =============================================================================
# SCRIPT RULES (ACS)
# =============================================================================

ACS_001 = DiagnosticRule(
    code="ACS-001",
    severity=Severity.INFO,
    message_template="Invalid Sector_SetColor parameters: {parameters}",
)

ACS_002 = DiagnosticRule(
    code="ACS-002",
    severity=Severity.INFO,
    message_template="Invalid Sector_SetFade parameters: {parameters}",
)
