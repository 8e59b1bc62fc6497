"""Shared text helpers for drawing label content with ReportLab."""

from __future__ import annotations

from reportlab.pdfbase.pdfmetrics import getAscent, getDescent, stringWidth

from label_types import ToAlignment

ELLIPSIS = "..."


def truncate_to_width(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
    ellipsis: str = ELLIPSIS,
) -> str:
    """Return ``text`` shortened with ``ellipsis`` until it fits ``max_width_pt``.

    Trailing characters are removed one at a time; text is never wrapped.
    When not even the ellipsis fits the result is empty.
    """

    if not text:
        return ""
    if stringWidth(text, font_name, font_size) <= max_width_pt:
        return text
    if stringWidth(ellipsis, font_name, font_size) > max_width_pt:
        return ""

    truncated = text.rstrip()
    while truncated and stringWidth(truncated + ellipsis, font_name, font_size) > max_width_pt:
        truncated = truncated[:-1]
    return truncated.rstrip() + ellipsis


def aligned_x(align: ToAlignment, left: float, width: float) -> float:
    """Return the anchor x for ``drawString``/``drawCentredString``/``drawRightString``."""

    if align is ToAlignment.LEFT:
        return left
    if align is ToAlignment.RIGHT:
        return left + width
    return left + width / 2.0


def baseline_offset(font_name: str, font_size: float, line_height: float) -> float:
    """Return the distance from a line box top to its baseline.

    The glyph box (ascent + descent) is centred vertically in the line box.
    """

    ascent = getAscent(font_name) / 1000.0 * font_size
    descent = abs(getDescent(font_name)) / 1000.0 * font_size
    return (line_height - (ascent + descent)) / 2.0 + ascent
