"""Unit conversions shared by the layout engine and both renderers."""

from __future__ import annotations

# Internal working scale of the layout engine. Renderers convert from this
# resolution to their own output units and must never hardcode another DPI.
REFERENCE_DPI = 96.0

POINTS_PER_INCH = 72.0

PX_TO_POINTS = POINTS_PER_INCH / REFERENCE_DPI
POINTS_TO_PX = REFERENCE_DPI / POINTS_PER_INCH


def inches_to_px(inches: float) -> float:
    return inches * REFERENCE_DPI


def points_to_px(points: float) -> float:
    return points * POINTS_TO_PX


__all__ = [
    "POINTS_PER_INCH",
    "POINTS_TO_PX",
    "PX_TO_POINTS",
    "REFERENCE_DPI",
    "inches_to_px",
    "points_to_px",
]
