"""Generic shipping labels (3-1/3" x 4", 6 per sheet)."""

from __future__ import annotations

from .base import LabelTemplate


class Template(LabelTemplate):
    KEY = "shipping-6up"
    NAME = "Shipping Labels (3-1/3\" x 4\") - 6 per sheet"
    LABEL_W = 4.0
    LABEL_H = 3.333
    COLS = 2
    ROWS = 3
    MARGIN_TOP = 0.5
    MARGIN_LEFT = 0.15625
    GAP_X = 0.1875
    GAP_Y = 0.0
