"""Avery 5161 address labels (1" x 4", 20 per sheet)."""

from __future__ import annotations

from .base import LabelTemplate


class Template(LabelTemplate):
    KEY = "5161"
    NAME = "Avery 5161 (1\" x 4\")"
    LABEL_W = 4.0
    LABEL_H = 1.0
    COLS = 2
    ROWS = 10
    MARGIN_TOP = 0.5
    MARGIN_LEFT = 0.15625
    GAP_X = 0.1875
    GAP_Y = 0.0
