"""Shared fixtures for the sector_specials test suite."""

import sys
from pathlib import Path

import pytest

# Make the project importable when running pytest from a source checkout
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sector_specials.pipeline.map_specials import MapSpecials  # noqa: E402
from sector_specials.profiles import (  # noqa: E402
    EDGE_CLASSIC_PROFILE,
    ETERNITY_PROFILE,
    SRB2_PROFILE,
    ZDOOM_PROFILE,
)


@pytest.fixture
def zdoom() -> MapSpecials:
    return MapSpecials(ZDOOM_PROFILE)


@pytest.fixture
def eternity() -> MapSpecials:
    return MapSpecials(ETERNITY_PROFILE)


@pytest.fixture
def srb2() -> MapSpecials:
    return MapSpecials(SRB2_PROFILE)


@pytest.fixture
def edge_classic() -> MapSpecials:
    return MapSpecials(EDGE_CLASSIC_PROFILE)
