"""
Geometry and data conversion package.

Plane math used by the slope solvers, and JSON conversion of map dumps
(``sector_specials.conversion.map_json``).
"""

from .plane_math import (
    Plane,
    plane_from_triangle,
    line_side,
    distance_to_line,
    distance_to_segment,
)

__all__ = [
    'Plane',
    'plane_from_triangle',
    'line_side',
    'distance_to_line',
    'distance_to_segment',
]
