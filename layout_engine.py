"""Label layout engine.

Single source of truth for zone geometry used by both the screen preview and
the PDF renderer. Zones always follow the hierarchy logo, return address,
destination address, branding (top to bottom, never overlapping).
"""

from __future__ import annotations

import math

from label_types import (
    LINE_HEIGHT_MULTIPLIERS,
    LOGO_MULTIPLIER_RANGE,
    CalculatedLayout,
    FromPosition,
    LabelDimensions,
    LayoutMode,
    LayoutOptions,
    LayoutZone,
    ToAlignment,
    ZoneBox,
    ZoneType,
    clamp,
)

MAX_AUTO_ADJUST_ATTEMPTS = 4
LOGO_SHRINK_FACTOR = 0.75
MAX_FROM_LINES = 3
NOMINAL_TO_LINES = 4

TWO_ZONE_MIN_HEIGHT_PX = 240
OVERFLOW_WARNING = "⚠️ Content may overflow"

_FONT_BUCKETS = (
    (80, 8),
    (120, 10),
    (180, 12),
    (260, 14),
    (350, 16),
)
_LARGEST_BASE_FONT = 18

# (with return address, without)
_TWO_ZONE_LOGO_SHARE = (0.30, 0.38)
_STANDARD_LOGO_SHARE = (0.18, 0.25)

# left %, width %, text alignment
_FROM_PLACEMENT: dict[FromPosition, tuple[float, float, ToAlignment]] = {
    FromPosition.TOP_LEFT: (2.0, 45.0, ToAlignment.LEFT),
    FromPosition.TOP_RIGHT: (50.0, 48.0, ToAlignment.RIGHT),
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def default_layout_options() -> LayoutOptions:
    return LayoutOptions()


def base_font_size(height_px: float) -> int:
    """Return the reference font size for a label ``height_px`` tall."""

    for limit, size in _FONT_BUCKETS:
        if height_px < limit:
            return size
    return _LARGEST_BASE_FONT


def uses_two_zone_layout(dimensions: LabelDimensions, options: LayoutOptions) -> bool:
    if options.layout_mode is LayoutMode.STACKED:
        return True
    if options.layout_mode is LayoutMode.SPLIT:
        return False
    return dimensions.height_px >= TWO_ZONE_MIN_HEIGHT_PX and options.show_logo


def logo_height_px(
    height_px: float,
    has_from_address: bool,
    two_zone: bool,
    multiplier: float,
) -> int:
    with_from, without_from = _TWO_ZONE_LOGO_SHARE if two_zone else _STANDARD_LOGO_SHARE
    share = with_from if has_from_address else without_from
    return _round_half_up(height_px * share * clamp(multiplier, LOGO_MULTIPLIER_RANGE))


def calculate_layout(
    dimensions: LabelDimensions,
    options: LayoutOptions,
    from_line_count: int = 0,
    to_line_count: int = NOMINAL_TO_LINES,
) -> CalculatedLayout:
    """Compute the zone layout for one label size and option set.

    When the content overflows and a logo is shown the logo is shrunk by
    ``LOGO_SHRINK_FACTOR`` per pass, for at most ``MAX_AUTO_ADJUST_ATTEMPTS``
    passes. The first fitting attempt wins; otherwise the last attempt is
    returned with ``has_overflow`` set.
    """

    attempt = 0
    layout = _compute_layout(dimensions, options, from_line_count, to_line_count, attempt)
    while (
        layout.has_overflow
        and options.show_logo
        and attempt < MAX_AUTO_ADJUST_ATTEMPTS
    ):
        attempt += 1
        layout = _compute_layout(
            dimensions, options, from_line_count, to_line_count, attempt
        )
    return layout


def _compute_layout(
    dimensions: LabelDimensions,
    options: LayoutOptions,
    from_line_count: int,
    to_line_count: int,
    attempt: int,
) -> CalculatedLayout:
    height_px = dimensions.height_px
    padding = max(4.0, height_px * 0.04)
    padding_pct = padding / height_px * 100
    gap_pct = padding_pct / 2

    two_zone = uses_two_zone_layout(dimensions, options)
    line_mult = LINE_HEIGHT_MULTIPLIERS[options.line_spacing]

    base_font = base_font_size(height_px)
    limits = options.clamped()
    font_mult = limits.font_size_multiplier
    from_mult = limits.from_font_size_multiplier
    main_font = _round_half_up(base_font * font_mult)
    from_font = _round_half_up(base_font * 0.8 * from_mult)
    branding_font = _round_half_up(base_font * 0.7 * font_mult)

    main_line = main_font * line_mult
    from_line = from_font * line_mult
    branding_line = branding_font * line_mult

    # logo multiplier is clamped after the shrink factor, not before
    effective_logo = clamp(
        options.logo_size_multiplier * LOGO_SHRINK_FACTOR ** attempt,
        LOGO_MULTIPLIER_RANGE,
    )
    logo_px = (
        logo_height_px(height_px, options.show_from_address, two_zone, effective_logo)
        if options.show_logo
        else 0
    )

    zones: list[LayoutZone] = []
    current_top = padding_pct

    if options.show_logo:
        logo_pct = logo_px / height_px * 100
        zones.append(
            LayoutZone(
                type=ZoneType.LOGO,
                top=current_top,
                left=0.0,
                width=100.0,
                height=logo_pct,
                font_size=0.0,
                line_height=0.0,
                align=ToAlignment.CENTER,
            )
        )
        current_top += logo_pct + gap_pct

    from_px = 0.0
    if options.show_from_address:
        from_lines = (1 if options.show_from_label else 0) + min(
            max(from_line_count, 0), MAX_FROM_LINES
        )
        from_px = from_lines * from_line + padding
        from_pct = from_px / height_px * 100
        left, width, align = _FROM_PLACEMENT[options.from_position]
        zones.append(
            LayoutZone(
                type=ZoneType.FROM,
                top=current_top,
                left=left,
                width=width,
                height=from_pct,
                font_size=float(from_font),
                line_height=from_line,
                align=align,
            )
        )
        current_top += from_pct + gap_pct

    to_bottom = 100 - padding_pct
    branding_zone: LayoutZone | None = None
    if options.show_branding:
        branding_pct = (branding_line + padding) / height_px * 100
        branding_top = 100 - branding_pct - padding_pct
        branding_zone = LayoutZone(
            type=ZoneType.BRANDING,
            top=branding_top,
            left=0.0,
            width=100.0,
            height=branding_pct,
            font_size=float(branding_font),
            line_height=branding_line,
            align=ToAlignment.CENTER,
        )
        to_bottom = branding_top

    zones.append(
        LayoutZone(
            type=ZoneType.TO,
            top=current_top,
            left=0.0,
            width=100.0,
            height=to_bottom - current_top,
            font_size=float(main_font),
            line_height=main_line,
            align=options.to_alignment,
        )
    )
    if branding_zone is not None:
        zones.append(branding_zone)

    to_lines = (1 if options.show_to_label else 0) + max(to_line_count, 0)
    total_px = (
        (logo_px + padding if options.show_logo else 0.0)
        + from_px
        + to_lines * main_line
        + (branding_line + padding if options.show_branding else 0.0)
    )
    has_overflow = total_px > height_px - padding * 2

    return CalculatedLayout(
        zones=tuple(zones),
        use_two_zone_layout=two_zone,
        total_content_height=total_px,
        label_height_px=height_px,
        has_overflow=has_overflow,
        description=_describe(options, two_zone, attempt, has_overflow),
        auto_adjust_attempts=attempt,
        logo_size_multiplier=effective_logo,
    )


def _describe(
    options: LayoutOptions,
    two_zone: bool,
    attempt: int,
    has_overflow: bool,
) -> str:
    if two_zone:
        steps = ["Logo"] if options.show_logo else []
        if options.show_from_address:
            steps.append("From")
        steps.append("To (centered)")
        description = "Stacked layout: " + " → ".join(steps)
    elif not options.show_logo and not options.show_from_address:
        description = "Centered: To address only"
    else:
        steps = []
        if options.show_logo:
            steps.append("Logo")
        if options.show_from_address:
            steps.append("From")
        steps.append("To")
        description = "Flow layout: " + " → ".join(steps)

    if attempt > 0:
        reduction = _round_half_up((1 - LOGO_SHRINK_FACTOR ** attempt) * 100)
        description += f" (logo auto-reduced {reduction}%)"
    if has_overflow:
        description += f" {OVERFLOW_WARNING}"
    return description


def zone_boxes(dimensions: LabelDimensions, layout: CalculatedLayout) -> list[ZoneBox]:
    """Convert percentage zones to absolute rectangles in reference px.

    Renderers scale these boxes into their own units; sizes never go below
    zero even when an overflowing layout squeezes the destination zone.
    """

    width_px = dimensions.width_px
    height_px = dimensions.height_px
    return [
        ZoneBox(
            type=zone.type,
            left=zone.left / 100 * width_px,
            top=zone.top / 100 * height_px,
            width=max(zone.width, 0.0) / 100 * width_px,
            height=max(zone.height, 0.0) / 100 * height_px,
        )
        for zone in layout.zones
        if zone.visible
    ]


__all__ = [
    "LOGO_SHRINK_FACTOR",
    "MAX_AUTO_ADJUST_ATTEMPTS",
    "NOMINAL_TO_LINES",
    "OVERFLOW_WARNING",
    "base_font_size",
    "calculate_layout",
    "default_layout_options",
    "logo_height_px",
    "uses_two_zone_layout",
    "zone_boxes",
]
