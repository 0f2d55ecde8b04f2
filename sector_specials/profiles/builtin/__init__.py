"""
Built-in port profiles.

- ZDOOM_PROFILE: (G)ZDoom, full slope sequence plus line effects
- ETERNITY_PROFILE: Eternity, Plane_Align and Plane_Copy only
- SRB2_PROFILE: Sonic Robo Blast 2 slope lines
- EDGE_CLASSIC_PROFILE: EDGE-Classic vertex height slopes
"""

from sector_specials.profiles.port_profile import PortProfile


ZDOOM_PROFILE = PortProfile(
    name="ZDoom",
    port="zdoom",
    game="doom",
    description="(G)ZDoom in Hexen or UDMF format",
)

ETERNITY_PROFILE = PortProfile(
    name="Eternity",
    port="eternity",
    game="doom",
    description="Eternity Engine",
)

SRB2_PROFILE = PortProfile(
    name="SRB2",
    port="srb2",
    game="srb2",
    description="Sonic Robo Blast 2",
)

EDGE_CLASSIC_PROFILE = PortProfile(
    name="EDGE-Classic",
    port="edge_classic",
    game="doom",
    description="EDGE-Classic",
)

__all__ = ['ZDOOM_PROFILE', 'ETERNITY_PROFILE', 'SRB2_PROFILE', 'EDGE_CLASSIC_PROFILE']
