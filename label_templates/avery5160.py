"""Avery 5160 address labels (1" x 2-5/8", 30 per sheet)."""

from __future__ import annotations

from .base import LabelTemplate


class Template(LabelTemplate):
    KEY = "5160"
    NAME = "Avery 5160 (1\" x 2-5/8\")"
    LABEL_W = 2.625
    LABEL_H = 1.0
    COLS = 3
    ROWS = 10
    MARGIN_TOP = 0.5
    MARGIN_LEFT = 0.1875
    GAP_X = 0.125
    GAP_Y = 0.0
