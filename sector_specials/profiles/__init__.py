"""
Port profile system.

A PortProfile is the whole configuration surface of the specials pipeline:
its port/game strings select which slope mechanisms run.

Usage:
    from sector_specials.profiles import PROFILE_CATALOG

    profile = PROFILE_CATALOG.get_profile("ZDoom")
    specials = MapSpecials(profile)
"""

from .port_profile import PortProfile, ProfileCatalog
from .profile_storage import save_profile_to_path, load_profile_from_path
from .builtin import ZDOOM_PROFILE, ETERNITY_PROFILE, SRB2_PROFILE, EDGE_CLASSIC_PROFILE

# Global catalog of the built-in profiles
PROFILE_CATALOG = ProfileCatalog()
PROFILE_CATALOG.register(ZDOOM_PROFILE)
PROFILE_CATALOG.register(ETERNITY_PROFILE)
PROFILE_CATALOG.register(SRB2_PROFILE)
PROFILE_CATALOG.register(EDGE_CLASSIC_PROFILE)

__all__ = [
    'PortProfile',
    'ProfileCatalog',
    'PROFILE_CATALOG',
    'ZDOOM_PROFILE',
    'ETERNITY_PROFILE',
    'SRB2_PROFILE',
    'EDGE_CLASSIC_PROFILE',
    'save_profile_to_path',
    'load_profile_from_path',
]
