"""
Specials pipeline passes.

Each pass implements one step of a slope sequence or the per-line effect
processor. Passes are executed in order by MapSpecials.
"""

from .base import SpecialsPass, PassConfig, PassResult
from .plane_passes import ResetPlanesPass, UdmfPlanePropertiesPass
from .align_passes import PlaneAlignPass, apply_plane_align, furthest_vertex
from .thing_passes import ThingSlopePass, SlopeCopyThingPass, VertexHeightThingPass
from .vertex_passes import VertexTriangleSlopePass, EdgeRectangularSlopePass
from .copy_passes import PlaneCopyPass
from .srb2_passes import Srb2SlopePass, Srb2CopySlopePass
from .line_passes import LineEffectsPass

__all__ = [
    'SpecialsPass',
    'PassConfig',
    'PassResult',
    'ResetPlanesPass',
    'UdmfPlanePropertiesPass',
    'PlaneAlignPass',
    'apply_plane_align',
    'furthest_vertex',
    'ThingSlopePass',
    'SlopeCopyThingPass',
    'VertexHeightThingPass',
    'VertexTriangleSlopePass',
    'EdgeRectangularSlopePass',
    'PlaneCopyPass',
    'Srb2SlopePass',
    'Srb2CopySlopePass',
    'LineEffectsPass',
]
