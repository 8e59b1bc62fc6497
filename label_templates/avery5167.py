"""Avery 5167 return address labels (1/2" x 1-3/4", 80 per sheet)."""

from __future__ import annotations

from .base import LabelTemplate


class Template(LabelTemplate):
    KEY = "5167"
    NAME = "Avery 5167 (1/2\" x 1-3/4\")"
    LABEL_W = 1.75
    LABEL_H = 0.5
    COLS = 4
    ROWS = 20
    MARGIN_TOP = 0.5
    MARGIN_LEFT = 0.3125
    GAP_X = 0.28125
    GAP_Y = 0.0
