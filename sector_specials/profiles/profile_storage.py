"""
Profile persistence for custom port profiles.

Profiles are plain JSON objects with "name", "port", "game" and
"description" keys.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .port_profile import PortProfile

logger = logging.getLogger(__name__)


def _profile_to_dict(profile: PortProfile) -> Dict[str, Any]:
    """Convert a PortProfile to a JSON-serializable dictionary."""
    return {
        "name": profile.name,
        "port": profile.port,
        "game": profile.game,
        "description": profile.description,
    }


def _dict_to_profile(data: Dict[str, Any]) -> PortProfile:
    """Create a PortProfile from a dictionary."""
    port = data["port"]
    return PortProfile(
        name=data.get("name", port),
        port=port,
        game=data.get("game", "doom"),
        description=data.get("description", ""),
    )


def save_profile_to_path(profile: PortProfile, file_path: Path) -> Path:
    """
    Write a profile to [file_path].

    Raises:
        OSError: If the file cannot be written
    """
    file_path = Path(file_path)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(_profile_to_dict(profile), f, indent=2, ensure_ascii=False)
    return file_path


def load_profile_from_path(file_path: Path) -> Optional[PortProfile]:
    """
    Load a profile from a specific file path.

    Returns:
        PortProfile if valid, None otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return _dict_to_profile(data)
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        logger.warning("Invalid profile file %s: %s", file_path, e)
        return None
