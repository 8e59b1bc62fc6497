"""Zone text and logo placement shared by the preview and PDF renderers.

All offsets are in reference px relative to the zone box; renderers scale the
results into their own units so both outputs stay geometrically identical.
"""

from __future__ import annotations

from dataclasses import dataclass

from label_types import (
    LabelCustomization,
    LabelData,
    LayoutZone,
    LogoImage,
    ToAlignment,
    ZoneBox,
    ZoneType,
)

TO_CAPTION = "To:"
FROM_CAPTION = "From:"
LOGO_MAX_WIDTH_SHARE = 0.8
# horizontal text padding inside a zone, reference px
TEXT_INSET = 4.0


@dataclass(frozen=True)
class TextLine:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class PlacedLine:
    """A single text line positioned inside a zone."""

    text: str
    bold: bool
    top: float
    font_size: float
    line_height: float
    align: ToAlignment

    def scaled(self, factor: float) -> PlacedLine:
        return PlacedLine(
            self.text,
            self.bold,
            self.top * factor,
            self.font_size * factor,
            self.line_height * factor,
            self.align,
        )


def to_address_lines(label: LabelData, show_to_label: bool) -> list[TextLine]:
    """Return the nominal destination block, empty slots included."""

    lines = [TextLine(TO_CAPTION, bold=True)] if show_to_label else []
    lines.extend(
        [
            TextLine(label.contact.strip(), bold=True),
            TextLine(label.address1.strip()),
            TextLine(label.address2.strip()),
            TextLine(label.city_state_zip),
        ]
    )
    return lines


def from_address_lines(customization: LabelCustomization) -> list[TextLine]:
    lines = (
        [TextLine(FROM_CAPTION, bold=True)]
        if customization.options.show_from_label
        else []
    )
    lines.extend(TextLine(line) for line in customization.return_address_lines)
    return lines


def _stack(
    lines: list[TextLine],
    block_top: float,
    zone: LayoutZone,
) -> list[PlacedLine]:
    placed: list[PlacedLine] = []
    cursor = block_top
    for line in lines:
        if not line.text:
            continue
        placed.append(
            PlacedLine(
                text=line.text,
                bold=line.bold,
                top=cursor,
                font_size=zone.font_size,
                line_height=zone.line_height,
                align=zone.align,
            )
        )
        cursor += zone.line_height
    return placed


def zone_lines(
    zone: LayoutZone,
    box_height: float,
    label: LabelData,
    customization: LabelCustomization,
) -> list[PlacedLine]:
    """Place the text of ``zone`` for ``label``; ``box_height`` in reference px.

    The destination block is centred on its nominal envelope, so an empty
    optional line leaves a gap at the bottom instead of re-centring.
    """

    if zone.type is ZoneType.TO:
        lines = to_address_lines(label, customization.options.show_to_label)
    elif zone.type is ZoneType.FROM:
        lines = from_address_lines(customization)
    elif zone.type is ZoneType.BRANDING:
        text = customization.branding_text.strip()
        lines = [TextLine(text, bold=True)] if text else []
    else:
        return []

    block_height = len(lines) * zone.line_height
    return _stack(lines, (box_height - block_height) / 2, zone)


def text_area(box: ZoneBox, inset: float = TEXT_INSET) -> ZoneBox:
    """Return ``box`` narrowed horizontally by ``inset`` on both sides."""

    width = max(box.width - 2 * inset, 0.0)
    return ZoneBox(box.type, box.left + inset, box.top, width, box.height)


def fit_logo(box: ZoneBox, logo: LogoImage) -> ZoneBox:
    """Return the logo rectangle inside ``box``, aspect preserved and centred."""

    aspect = logo.aspect_ratio
    height = box.height
    width = height * aspect
    max_width = box.width * LOGO_MAX_WIDTH_SHARE
    if width > max_width:
        width = max_width
        height = width / aspect
    return ZoneBox(
        type=box.type,
        left=box.left + (box.width - width) / 2,
        top=box.top + (box.height - height) / 2,
        width=width,
        height=height,
    )


__all__ = [
    "PlacedLine",
    "TextLine",
    "fit_logo",
    "from_address_lines",
    "text_area",
    "to_address_lines",
    "zone_lines",
]
