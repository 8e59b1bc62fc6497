"""Base class for label sheet templates."""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch

from label_types import (
    FromPosition,
    LabelDimensions,
    LabelGeometry,
    LayoutMode,
    LineSpacing,
    ToAlignment,
)


@dataclass(frozen=True)
class TemplateOption:
    """Represents a configurable option exposed by a label template."""

    name: str
    possible_values: list[str]


class LabelTemplate:
    """A physical label sheet with stateful slot pagination.

    Subclasses only declare the sheet constants (inches). Slots are handed
    out row by row; ``on_new_page`` marks the first slot of every sheet.
    """

    KEY = ""
    NAME = ""
    LABEL_W = 0.0
    LABEL_H = 0.0
    COLS = 1
    ROWS = 1
    MARGIN_TOP = 0.0
    MARGIN_LEFT = 0.0
    GAP_X = 0.0
    GAP_Y = 0.0

    PAGE_SIZE = letter

    _slot_index: int

    def __init__(self) -> None:
        self._slot_index = 0
        self.reset()

    @property
    def page_size(self) -> tuple[float, float]:
        """Return the page size in points."""

        return self.PAGE_SIZE

    @property
    def dimensions(self) -> LabelDimensions:
        return LabelDimensions(self.LABEL_W, self.LABEL_H)

    @property
    def slots(self) -> int:
        return self.COLS * self.ROWS

    def reset(self) -> None:
        """Clear any pagination state before a new rendering run."""

        self._slot_index = 0

    def next_label_geometry(self) -> LabelGeometry:
        """Return the geometry for the next label slot."""

        row = self._slot_index // self.COLS
        col = self._slot_index % self.COLS

        _, page_height = self.PAGE_SIZE
        label_w = self.LABEL_W * inch
        label_h = self.LABEL_H * inch

        top = (
            page_height
            - self.MARGIN_TOP * inch
            - row * (label_h + self.GAP_Y * inch)
        )
        bottom = top - label_h
        left = self.MARGIN_LEFT * inch + col * (label_w + self.GAP_X * inch)
        right = left + label_w
        on_new_page = self._slot_index == 0
        self._slot_index = (self._slot_index + 1) % self.slots

        return LabelGeometry(left, bottom, right, top, on_new_page)

    def describe(self) -> dict[str, float | int | str]:
        return {
            "key": self.KEY,
            "name": self.NAME,
            "width": self.LABEL_W,
            "height": self.LABEL_H,
            "cols": self.COLS,
            "rows": self.ROWS,
            "margin_top": self.MARGIN_TOP,
            "margin_left": self.MARGIN_LEFT,
            "gap_x": self.GAP_X,
            "gap_y": self.GAP_Y,
        }

    def available_options(self) -> list[TemplateOption]:
        """Return the enumerated layout options a user can pick from."""

        return [
            TemplateOption(
                name="line_spacing",
                possible_values=[m.value for m in LineSpacing],
            ),
            TemplateOption(
                name="to_alignment",
                possible_values=[m.value for m in ToAlignment],
            ),
            TemplateOption(
                name="from_position",
                possible_values=[m.value for m in FromPosition],
            ),
            TemplateOption(
                name="layout_mode",
                possible_values=[m.value for m in LayoutMode],
            ),
        ]
