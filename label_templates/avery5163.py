"""Avery 5163 shipping labels (2" x 4", 10 per sheet)."""

from __future__ import annotations

from .base import LabelTemplate


class Template(LabelTemplate):
    KEY = "5163"
    NAME = "Avery 5163 (2\" x 4\")"
    LABEL_W = 4.0
    LABEL_H = 2.0
    COLS = 2
    ROWS = 5
    MARGIN_TOP = 0.5
    MARGIN_LEFT = 0.15625
    GAP_X = 0.1875
    GAP_Y = 0.0
