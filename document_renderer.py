"""Print renderer: paginated label sheets as ReportLab PDF documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Sequence

import fitz
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from label_content import fit_logo, text_area, zone_lines
from label_templates.base import LabelTemplate
from label_templates.utils import aligned_x, baseline_offset, truncate_to_width
from label_types import (
    CalculatedLayout,
    LabelCustomization,
    LabelData,
    LabelGeometry,
    ToAlignment,
    ZoneBox,
    ZoneType,
)
from layout_engine import NOMINAL_TO_LINES, calculate_layout, zone_boxes
from logo import open_logo
from units import PX_TO_POINTS, REFERENCE_DPI

logger = logging.getLogger(__name__)

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
OUTLINE_WIDTH = 0.5


@dataclass(frozen=True)
class _PreparedLogo:
    reader: ImageReader
    box: ZoneBox


class DocumentRenderer:
    """Draws a batch of labels onto the sheets of ``template``.

    The layout is computed once per renderer; every slot reuses the same zone
    boxes, converted from reference px to points with ``PX_TO_POINTS``.
    """

    def __init__(
        self,
        template: LabelTemplate,
        customization: LabelCustomization | None = None,
    ) -> None:
        self.template = template
        self.customization = customization or LabelCustomization()
        self.dimensions = template.dimensions.validate()
        self.layout: CalculatedLayout = calculate_layout(
            self.dimensions,
            self.customization.options,
            from_line_count=len(self.customization.return_address_lines),
            to_line_count=NOMINAL_TO_LINES,
        )
        self._reference_boxes = zone_boxes(self.dimensions, self.layout)

    def zone_boxes(self) -> list[ZoneBox]:
        """Zone rectangles in points, relative to the label's top-left corner."""

        return [box.scaled(PX_TO_POINTS) for box in self._reference_boxes]

    def render(
        self,
        labels: Sequence[LabelData],
        skip: int = 0,
        draw_outline: bool = False,
    ) -> bytes:
        """Render ``labels`` into PDF bytes, leaving ``skip`` slots empty first."""

        if skip < 0:
            raise ValueError("skip must be zero or positive")

        buffer = BytesIO()
        canvas_obj = canvas.Canvas(buffer, pagesize=self.template.page_size)
        canvas_obj.setTitle("Mailing labels")

        self.template.reset()
        for _ in range(skip):
            self.template.next_label_geometry()

        logo = self._prepare_logo()
        first_page = True
        for label in labels:
            geometry = self.template.next_label_geometry()
            if geometry.on_new_page and not first_page:
                canvas_obj.showPage()
            first_page = False

            if geometry.width <= 0 or geometry.height <= 0:
                raise SystemError("Template produced non-positive geometry dimensions.")

            self._draw_label(canvas_obj, geometry, label, logo)

            if draw_outline:
                canvas_obj.saveState()
                canvas_obj.setLineWidth(OUTLINE_WIDTH)
                canvas_obj.rect(
                    geometry.left,
                    geometry.bottom,
                    geometry.width,
                    geometry.height,
                )
                canvas_obj.restoreState()

        if not labels:
            logger.info("No labels to render; writing a blank page")

        canvas_obj.showPage()
        canvas_obj.save()
        return buffer.getvalue()

    def write(
        self,
        output_path: str | Path,
        labels: Sequence[LabelData],
        skip: int = 0,
        draw_outline: bool = False,
    ) -> str:
        pdf_bytes = self.render(labels, skip=skip, draw_outline=draw_outline)
        Path(output_path).write_bytes(pdf_bytes)
        return f"Wrote {len(labels)} labels to {output_path}"

    def _draw_label(
        self,
        canvas_obj: canvas.Canvas,
        geometry: LabelGeometry,
        label: LabelData,
        logo: _PreparedLogo | None,
    ) -> None:
        for reference_box in self._reference_boxes:
            if reference_box.type is ZoneType.LOGO:
                if logo is not None:
                    canvas_obj.drawImage(
                        logo.reader,
                        geometry.left + logo.box.left,
                        geometry.top - logo.box.bottom,
                        width=logo.box.width,
                        height=logo.box.height,
                        mask="auto",
                    )
                continue

            zone = self.layout.zone(reference_box.type)
            if zone is None:
                continue
            box = text_area(reference_box).scaled(PX_TO_POINTS)
            placed = zone_lines(zone, reference_box.height, label, self.customization)
            for line in (item.scaled(PX_TO_POINTS) for item in placed):
                font_name = BOLD_FONT if line.bold else REGULAR_FONT
                text = truncate_to_width(line.text, font_name, line.font_size, box.width)
                baseline = (
                    geometry.top
                    - box.top
                    - line.top
                    - baseline_offset(font_name, line.font_size, line.line_height)
                )
                x = geometry.left + aligned_x(line.align, box.left, box.width)

                canvas_obj.setFont(font_name, line.font_size)
                if line.align is ToAlignment.LEFT:
                    canvas_obj.drawString(x, baseline, text)
                elif line.align is ToAlignment.RIGHT:
                    canvas_obj.drawRightString(x, baseline, text)
                else:
                    canvas_obj.drawCentredString(x, baseline, text)

    def _prepare_logo(self) -> _PreparedLogo | None:
        """Decode the logo once per batch; failures are logged and skipped."""

        logo = self.customization.logo
        if not self.customization.options.show_logo or logo is None:
            return None
        logo_box = next(
            (box for box in self._reference_boxes if box.type is ZoneType.LOGO),
            None,
        )
        if logo_box is None:
            return None
        decoded = open_logo(logo)
        if decoded is None:
            return None

        sized, image = decoded
        return _PreparedLogo(
            reader=ImageReader(image),
            box=fit_logo(logo_box, sized).scaled(PX_TO_POINTS),
        )


def rasterize_first_page(pdf_bytes: bytes, dpi: int = int(REFERENCE_DPI)) -> bytes:
    """Return the first page of ``pdf_bytes`` as PNG bytes."""

    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        page = doc.load_page(0)
        pix = page.get_pixmap(dpi=dpi)
        return pix.tobytes("png")


__all__ = ["DocumentRenderer", "rasterize_first_page"]
