"""
PortProfile dataclass and ProfileCatalog: select which specials are processed.

A profile names the target source port (and game) a map is built for. The
orchestrator compares these strings to pick the slope sequence; no global
configuration is consulted.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PortProfile:
    """
    Target port/game for map specials processing.

    Attributes:
        name: Display name (e.g., "ZDoom")
        port: Port string compared by the orchestrator ("zdoom", "eternity", ...)
        game: Game string ("doom", "srb2", ...)
        description: Human-readable description
    """

    name: str
    port: str
    game: str = "doom"
    description: str = ""

    @classmethod
    def for_port(cls, port: str, game: str = "doom") -> "PortProfile":
        """Build an unnamed profile from a bare port string."""
        return cls(name=port or "none", port=port, game=game)


class ProfileCatalog:
    """
    Registry of port profiles.

    Provides case-insensitive lookup by name and lookup by port string.
    """

    def __init__(self):
        self._profiles: Dict[str, PortProfile] = {}

    def register(self, profile: PortProfile) -> None:
        self._profiles[profile.name] = profile

    def get_profile(self, name: str) -> Optional[PortProfile]:
        """
        Get a profile by name (case-insensitive).

        Args:
            name: Profile name to look up

        Returns:
            PortProfile if found, None otherwise
        """
        if name in self._profiles:
            return self._profiles[name]

        name_lower = name.lower()
        for pname, profile in self._profiles.items():
            if pname.lower() == name_lower:
                return profile

        return None

    def get_profile_for_port(self, port: str) -> Optional[PortProfile]:
        """First registered profile targeting [port]."""
        for profile in self._profiles.values():
            if profile.port == port:
                return profile
        return None

    def list_profiles(self) -> List[str]:
        return sorted(self._profiles.keys())
