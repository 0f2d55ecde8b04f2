"""
Base classes for specials passes.

A pass is one step of a slope sequence or of the per-line effect
processor. Passes run in a fixed order and each one scans its whole input
collection before the next begins.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sector_specials.conversion.plane_math import Plane, Vec3, plane_from_triangle
from sector_specials.map.map_objects import MapSector, SurfaceType
from sector_specials.validation.core import Severity, SpecialIssue
from sector_specials.validation.rules import DiagnosticRule, PLANE_001
from ..specials_state import SpecialsState

logger = logging.getLogger(__name__)


@dataclass
class PassConfig:
    """
    Configuration for a specials pass.

    Attributes:
        enabled: Whether this pass should run
        options: Pass-specific configuration options
    """
    enabled: bool = True
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PassResult:
    """
    Result of executing a specials pass.

    Attributes:
        state: The state the pass ran on
        issues: Diagnostics recorded while running
        metrics: Counters (planes written, entries created, ...)
    """
    state: SpecialsState
    issues: List[SpecialIssue] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def add_issue(self, rule: DiagnosticRule, location: Optional[str] = None, **kwargs) -> SpecialIssue:
        """Record a diagnostic from [rule] and log it."""
        issue = rule.issue(location, **kwargs)
        self.issues.append(issue)
        if issue.severity == Severity.WARN:
            logger.warning("%s", issue.format())
        else:
            logger.info("%s", issue.format())
        return issue

    def count(self, metric: str, amount: int = 1) -> None:
        self.metrics[metric] = self.metrics.get(metric, 0) + amount


class SpecialsPass(ABC):
    """
    Base class for specials passes.

    Passes only write the fields they are documented to mutate: sector
    planes, sector extra floor lists and line render properties.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this pass."""
        pass

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def execute(self, state: SpecialsState, config: PassConfig) -> PassResult:
        """
        Execute this pass on the given state.

        Args:
            state: The current specials state
            config: Pass configuration

        Returns:
            PassResult with any diagnostics
        """
        pass

    def run(self, state: SpecialsState, config: Optional[PassConfig] = None) -> PassResult:
        """Run this pass unless disabled by [config]."""
        config = config or PassConfig()
        if not config.enabled:
            return PassResult(state=state)

        result = self.execute(state, config)
        logger.debug("Pass %s: %s", self.name, result.metrics)
        return result

    # ------------------------------------------------------------------
    # Helpers shared by the slope passes
    # ------------------------------------------------------------------

    @staticmethod
    def fit_plane(
        result: PassResult,
        sector: MapSector,
        surface: SurfaceType,
        points: List[Vec3],
        source: str,
    ) -> Optional[Plane]:
        """
        Fit a plane through three points and write it to [sector]'s surface.

        Degenerate input (coincident/colinear points, vertical result) leaves
        the plane unchanged and records PLANE-001.
        """
        plane = plane_from_triangle(points[0], points[1], points[2])
        if plane is None:
            result.add_issue(
                PLANE_001,
                location=source,
                surface=surface.value,
                sector=sector.index,
                source=source,
            )
            return None

        sector.set_plane(surface, plane)
        result.count("planes_written")
        return plane

    @staticmethod
    def copy_plane(result: PassResult, target: MapSector, surface: SurfaceType, plane: Plane) -> None:
        target.set_plane(surface, plane)
        result.count("planes_copied")
