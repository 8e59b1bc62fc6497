"""Screen renderer: absolutely positioned boxes for an HTML label preview."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from label_content import fit_logo, text_area, zone_lines
from label_templates.base import LabelTemplate
from label_types import (
    CalculatedLayout,
    LabelCustomization,
    LabelData,
    LogoImage,
    ZoneBox,
    ZoneType,
)
from layout_engine import NOMINAL_TO_LINES, calculate_layout, zone_boxes
from logo import open_logo

REGULAR_FONT_FAMILY = "Helvetica, Arial, sans-serif"


def _px(value: float) -> str:
    return f"{value:.2f}px"


@dataclass(frozen=True)
class PreviewLine:
    text: str
    bold: bool
    style: str


@dataclass(frozen=True)
class PreviewBox:
    """A zone in screen px with the CSS needed to place it."""

    type: ZoneType
    box: ZoneBox
    style: str
    lines: tuple[PreviewLine, ...] = ()
    image_src: str | None = None
    image_style: str = ""


@dataclass(frozen=True)
class PreviewLabel:
    width: float
    height: float
    style: str
    boxes: tuple[PreviewBox, ...]
    label: LabelData


@dataclass(frozen=True)
class PreviewPage:
    number: int
    cols: int
    cells: list[PreviewLabel | None] = field(default_factory=list)

    @property
    def rows(self) -> list[list[PreviewLabel | None]]:
        return [
            self.cells[index:index + self.cols]
            for index in range(0, len(self.cells), self.cols)
        ]


class PreviewRenderer:
    """Builds preview boxes from the same layout the PDF renderer uses.

    Reference px are multiplied by ``zoom``; a zoom of 1 shows the label at
    the reference DPI.
    """

    def __init__(
        self,
        template: LabelTemplate,
        customization: LabelCustomization | None = None,
        zoom: float = 1.0,
    ) -> None:
        if zoom <= 0:
            raise ValueError("zoom must be positive")
        self.template = template
        self.customization = customization or LabelCustomization()
        self.zoom = zoom
        self.dimensions = template.dimensions.validate()
        self.layout: CalculatedLayout = calculate_layout(
            self.dimensions,
            self.customization.options,
            from_line_count=len(self.customization.return_address_lines),
            to_line_count=NOMINAL_TO_LINES,
        )
        self._reference_boxes = zone_boxes(self.dimensions, self.layout)
        self._logo = self._decode_logo()

    @property
    def label_width(self) -> float:
        return self.dimensions.width_px * self.zoom

    @property
    def label_height(self) -> float:
        return self.dimensions.height_px * self.zoom

    def zone_boxes(self) -> list[ZoneBox]:
        """Zone rectangles in screen px, relative to the label's top-left corner."""

        return [box.scaled(self.zoom) for box in self._reference_boxes]

    def render_label(self, label: LabelData) -> PreviewLabel:
        boxes = tuple(
            self._render_box(reference_box, label)
            for reference_box in self._reference_boxes
        )
        return PreviewLabel(
            width=self.label_width,
            height=self.label_height,
            style=(
                f"position:relative;width:{_px(self.label_width)};"
                f"height:{_px(self.label_height)};overflow:hidden"
            ),
            boxes=boxes,
            label=label,
        )

    def render_sheet(
        self,
        labels: Sequence[LabelData],
        skip: int = 0,
    ) -> list[PreviewPage]:
        """Lay ``labels`` out on sheets; unused cells are ``None``."""

        if skip < 0:
            raise ValueError("skip must be zero or positive")

        slots = self.template.slots
        cells: list[PreviewLabel | None] = [None] * (skip % slots)
        cells.extend(self.render_label(label) for label in labels)
        if len(cells) % slots or not cells:
            cells.extend([None] * (slots - len(cells) % slots))

        return [
            PreviewPage(
                number=page_index + 1,
                cols=self.template.COLS,
                cells=cells[start:start + slots],
            )
            for page_index, start in enumerate(range(0, len(cells), slots))
        ]

    def _render_box(self, reference_box: ZoneBox, label: LabelData) -> PreviewBox:
        box = reference_box.scaled(self.zoom)
        style = (
            f"position:absolute;left:{_px(box.left)};top:{_px(box.top)};"
            f"width:{_px(box.width)};height:{_px(box.height)}"
        )

        if reference_box.type is ZoneType.LOGO:
            return self._render_logo(reference_box, box, style)

        zone = self.layout.zone(reference_box.type)
        if zone is None:
            return PreviewBox(type=box.type, box=box, style=style)

        area = text_area(reference_box).scaled(self.zoom)
        inset = area.left - box.left
        lines = tuple(
            PreviewLine(
                text=placed.text,
                bold=placed.bold,
                style=(
                    f"position:absolute;left:{_px(inset)};top:{_px(placed.top)};"
                    f"width:{_px(area.width)};height:{_px(placed.line_height)};"
                    f"font-family:{REGULAR_FONT_FAMILY};"
                    f"font-size:{_px(placed.font_size)};"
                    f"line-height:{_px(placed.line_height)};"
                    f"font-weight:{'bold' if placed.bold else 'normal'};"
                    f"text-align:{placed.align.value};"
                    "white-space:nowrap;overflow:hidden;text-overflow:ellipsis"
                ),
            )
            for placed in (
                item.scaled(self.zoom)
                for item in zone_lines(zone, reference_box.height, label, self.customization)
            )
        )
        return PreviewBox(type=box.type, box=box, style=style, lines=lines)

    def _decode_logo(self) -> LogoImage | None:
        logo = self.customization.logo
        if not self.customization.options.show_logo or logo is None:
            return None
        decoded = open_logo(logo)
        return decoded[0] if decoded else None

    def _render_logo(self, reference_box: ZoneBox, box: ZoneBox, style: str) -> PreviewBox:
        logo = self._logo
        if logo is None:
            return PreviewBox(type=box.type, box=box, style=style)

        fitted = fit_logo(reference_box, logo).scaled(self.zoom)
        image_style = (
            f"position:absolute;left:{_px(fitted.left - box.left)};"
            f"top:{_px(fitted.top - box.top)};"
            f"width:{_px(fitted.width)};height:{_px(fitted.height)}"
        )
        return PreviewBox(
            type=box.type,
            box=box,
            style=style,
            image_src=logo.data_url(),
            image_style=image_style,
        )


__all__ = [
    "PreviewBox",
    "PreviewLabel",
    "PreviewLine",
    "PreviewPage",
    "PreviewRenderer",
]
