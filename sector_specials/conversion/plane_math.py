"""
Plane geometry for sector floors and ceilings.

Primary representation: coefficients (a, b, c, d) of ``ax + by + cz = d``.
Planes are fitted through three points (the form every slope special
reduces to) and evaluated at 2D positions to get a surface height.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Seg2 = Tuple[Vec2, Vec2]

EPSILON = 1e-6


@dataclass(frozen=True)
class Plane:
    """Sector surface plane ``ax + by + cz = d``.

    A floor or ceiling plane must never be vertical (``c == 0``); fitting
    helpers return None rather than produce one.
    """

    a: float = 0.0
    b: float = 0.0
    c: float = 1.0
    d: float = 0.0

    # ---------------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------------

    @classmethod
    def flat(cls, height: float) -> "Plane":
        """Horizontal plane at [height]."""
        return cls(0.0, 0.0, 1.0, float(height))

    # ---------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------

    def height_at(self, x: float, y: float) -> float:
        return (self.d - self.a * x - self.b * y) / self.c

    def height_at_point(self, point: Vec2) -> float:
        return self.height_at(point[0], point[1])

    @property
    def is_vertical(self) -> bool:
        return abs(self.c) < EPSILON

    @property
    def is_flat(self) -> bool:
        return abs(self.a) < EPSILON and abs(self.b) < EPSILON and not self.is_vertical

    def coefficients(self) -> Tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)


def plane_from_triangle(p1: Vec3, p2: Vec3, p3: Vec3) -> Optional[Plane]:
    """Compute the plane through three points.

    The normal is ``normalize(p3 - p1) x normalize(p2 - p1)``. Returns None
    when the points are coincident or colinear, or when the resulting plane
    is vertical and so cannot describe a floor or ceiling.
    """
    origin = np.asarray(p1, dtype=float)
    v1 = np.asarray(p3, dtype=float) - origin
    v2 = np.asarray(p2, dtype=float) - origin

    len1 = np.linalg.norm(v1)
    len2 = np.linalg.norm(v2)
    if len1 < EPSILON or len2 < EPSILON:
        return None

    normal = np.cross(v1 / len1, v2 / len2)
    length = np.linalg.norm(normal)
    if length < EPSILON:
        return None
    normal = normal / length

    plane = Plane(
        a=float(normal[0]),
        b=float(normal[1]),
        c=float(normal[2]),
        d=float(np.dot(normal, origin)),
    )
    if plane.is_vertical:
        return None
    return plane


# -------------------------------------------------------------------
# 2D segment helpers
# -------------------------------------------------------------------

def line_side(point: Vec2, seg: Seg2) -> float:
    """Which side of [seg] [point] is on: > 0 front (right), < 0 back, 0 on the line."""
    (x1, y1), (x2, y2) = seg
    return (point[0] - x1) * (y2 - y1) - (point[1] - y1) * (x2 - x1)


def closest_point_on_segment(point: Vec2, seg: Seg2) -> Vec2:
    (x1, y1), (x2, y2) = seg
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq < EPSILON:
        return (x1, y1)
    u = ((point[0] - x1) * dx + (point[1] - y1) * dy) / length_sq
    u = max(0.0, min(1.0, u))
    return (x1 + u * dx, y1 + u * dy)


def distance_to_segment(point: Vec2, seg: Seg2) -> float:
    cx, cy = closest_point_on_segment(point, seg)
    return math.hypot(point[0] - cx, point[1] - cy)


def distance_to_line(point: Vec2, seg: Seg2) -> float:
    """Perpendicular distance from [point] to the infinite line through [seg]."""
    (x1, y1), (x2, y2) = seg
    length = math.hypot(x2 - x1, y2 - y1)
    if length < EPSILON:
        return math.hypot(point[0] - x1, point[1] - y1)
    return abs(line_side(point, seg)) / length


def colinear(point: Vec2, seg: Seg2, tolerance: float = EPSILON) -> bool:
    return abs(line_side(point, seg)) < tolerance


def add3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])
