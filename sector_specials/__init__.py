"""
Sector Specials.

Derives the implicit 3D geometry of a 2D sector map from its line
specials, slope things and ACS scripts:
- Sloped floor and ceiling planes
- 3D floor (ExtraFloor) stacks
- Translucent line render overrides
- Sector tint / fade colours set by OPEN scripts
"""

__version__ = "0.1.0"
