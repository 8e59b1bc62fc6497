"""Heuristic layout suggestions for a label size and content mix.

``suggest_layout`` runs three pure phases: pick a starting combination from
the label category, nudge sizes for content density, then resolve known bad
combinations. It never fails; callers may override anything it returns.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from label_types import (
    FromPosition,
    LabelDimensions,
    LayoutMode,
    LayoutOptions,
    LineSpacing,
    LogoPosition,
    ReturnAddressPosition,
    ToAlignment,
    clamp,
)
from layout_engine import TWO_ZONE_MIN_HEIGHT_PX

SMALL_HEIGHT_PX = 115
LARGE_HEIGHT_PX = 180
BALANCED_ASPECT = 1.5
WIDE_ASPECT = 2.5
SIDE_BY_SIDE_MIN_WIDTH = 3.0

OPTIMIZED_LOGO_RANGE = (0.6, 1.4)
OPTIMIZED_FONT_RANGE = (0.8, 1.2)


@dataclass(frozen=True)
class OptimizedLayout:
    logo_position: LogoPosition
    return_address_position: ReturnAddressPosition
    logo_size_multiplier: float
    font_size_multiplier: float
    show_from_label: bool
    show_to_label: bool
    reasoning: str

    def apply_to(self, options: LayoutOptions | None = None) -> LayoutOptions:
        """Carry the suggestion over onto ``options`` (defaults when omitted)."""

        right_side = self.return_address_position in (
            ReturnAddressPosition.TOP_RIGHT,
            ReturnAddressPosition.BOTTOM_RIGHT,
        )
        return replace(
            options or LayoutOptions(),
            logo_size_multiplier=self.logo_size_multiplier,
            font_size_multiplier=self.font_size_multiplier,
            show_from_label=self.show_from_label,
            show_to_label=self.show_to_label,
            from_position=FromPosition.TOP_RIGHT if right_side else FromPosition.TOP_LEFT,
        )


def _select_category(
    dimensions: LabelDimensions,
    has_logo: bool,
    has_from_address: bool,
) -> OptimizedLayout:
    aspect = dimensions.width / dimensions.height
    height_px = dimensions.height_px

    if height_px < SMALL_HEIGHT_PX and aspect < WIDE_ASPECT:
        layout = OptimizedLayout(
            logo_position=LogoPosition.TOP_CENTER,
            return_address_position=ReturnAddressPosition.TOP_LEFT,
            logo_size_multiplier=0.8,
            font_size_multiplier=0.9,
            show_from_label=False,
            show_to_label=False,
            reasoning="Compact layout - centered logo, minimal labels",
        )
    elif (
        SMALL_HEIGHT_PX <= height_px < LARGE_HEIGHT_PX
        and BALANCED_ASPECT <= aspect < WIDE_ASPECT
    ):
        # a logo beside the return address needs a full-width sheet label
        side_by_side = has_from_address and dimensions.width >= SIDE_BY_SIDE_MIN_WIDTH
        layout = OptimizedLayout(
            logo_position=(
                LogoPosition.TOP_RIGHT if side_by_side else LogoPosition.TOP_CENTER
            ),
            return_address_position=ReturnAddressPosition.TOP_LEFT,
            logo_size_multiplier=1.0,
            font_size_multiplier=1.0,
            show_from_label=True,
            show_to_label=True,
            reasoning=(
                "Balanced layout - logo right, return address left, with labels"
                if side_by_side
                else "Balanced layout - centered logo, return address left, with labels"
            ),
        )
    elif height_px >= LARGE_HEIGHT_PX:
        layout = OptimizedLayout(
            logo_position=LogoPosition.TOP_CENTER,
            return_address_position=ReturnAddressPosition.BOTTOM_LEFT,
            logo_size_multiplier=1.2,
            font_size_multiplier=1.1,
            show_from_label=True,
            show_to_label=True,
            reasoning="Spacious layout - prominent centered logo, separated return address",
        )
    elif aspect >= WIDE_ASPECT:
        layout = OptimizedLayout(
            logo_position=LogoPosition.TOP_LEFT,
            return_address_position=ReturnAddressPosition.BOTTOM_RIGHT,
            logo_size_multiplier=0.9,
            font_size_multiplier=0.95,
            show_from_label=False,
            show_to_label=True,
            reasoning="Wide layout - logo left, return address opposite corner",
        )
    else:
        layout = OptimizedLayout(
            logo_position=LogoPosition.TOP_LEFT,
            return_address_position=ReturnAddressPosition.TOP_RIGHT,
            logo_size_multiplier=1.0,
            font_size_multiplier=1.0,
            show_from_label=True,
            show_to_label=True,
            reasoning="Standard layout - classic opposing corners",
        )

    if not has_logo:
        layout = replace(layout, return_address_position=ReturnAddressPosition.TOP_LEFT)
    if not has_from_address:
        layout = replace(layout, logo_position=LogoPosition.TOP_CENTER)
    return layout


def _size_for_content(
    dimensions: LabelDimensions,
    layout: OptimizedLayout,
    has_logo: bool,
    from_line_count: int,
) -> OptimizedLayout:
    height_px = dimensions.height_px
    area = dimensions.width_px * height_px

    offset = 0.0
    if has_logo and from_line_count > 3:
        offset -= 0.15
    elif has_logo and from_line_count > 2:
        offset -= 0.1

    if area > 30000 and not has_logo:
        offset += 0.15
    elif area > 25000:
        offset += 0.1

    if height_px < 80:
        offset -= 0.2

    return replace(
        layout,
        logo_size_multiplier=clamp(layout.logo_size_multiplier + offset, OPTIMIZED_LOGO_RANGE),
        font_size_multiplier=clamp(
            layout.font_size_multiplier + offset * 0.5, OPTIMIZED_FONT_RANGE
        ),
    )


def _resolve_conflicts(dimensions: LabelDimensions, layout: OptimizedLayout) -> OptimizedLayout:
    if (
        layout.logo_position is LogoPosition.TOP_CENTER
        and layout.return_address_position is ReturnAddressPosition.TOP_LEFT
        and dimensions.width < SIDE_BY_SIDE_MIN_WIDTH
    ):
        layout = replace(
            layout,
            return_address_position=ReturnAddressPosition.BOTTOM_LEFT,
            reasoning=layout.reasoning + " (Moved return address to avoid overlap)",
        )

    if (
        layout.logo_position is LogoPosition.TOP_LEFT
        and layout.return_address_position is ReturnAddressPosition.TOP_LEFT
    ):
        layout = replace(
            layout,
            return_address_position=ReturnAddressPosition.TOP_RIGHT,
            reasoning=layout.reasoning + " (Separated conflicting elements)",
        )

    if dimensions.height_px < 90:
        layout = replace(layout, show_from_label=False, show_to_label=False)

    # leave room above the branding footer
    if layout.return_address_position in (
        ReturnAddressPosition.BOTTOM_LEFT,
        ReturnAddressPosition.BOTTOM_RIGHT,
    ):
        layout = replace(
            layout,
            font_size_multiplier=max(0.85, layout.font_size_multiplier - 0.05),
        )
    return layout


def suggest_layout(
    dimensions: LabelDimensions,
    has_logo: bool,
    has_from_address: bool,
    from_address_text: str | None = None,
) -> OptimizedLayout:
    """Return suggested positions and sizes for the given label and content."""

    from_line_count = len(from_address_text.split("\n")) if from_address_text else 0

    layout = _select_category(dimensions, has_logo, has_from_address)
    layout = _size_for_content(dimensions, layout, has_logo, from_line_count)
    return _resolve_conflicts(dimensions, layout)


def explain_optimization(dimensions: LabelDimensions, layout: OptimizedLayout) -> str:
    if dimensions.height < 1.2:
        size = "small"
    elif dimensions.height < 2:
        size = "medium"
    else:
        size = "large"

    aspect = dimensions.width / dimensions.height
    if aspect < BALANCED_ASPECT:
        shape = "square"
    elif aspect < WIDE_ASPECT:
        shape = "rectangular"
    else:
        shape = "wide"

    return (
        f"Auto-optimized for {size} {shape} labels "
        f"({dimensions.width:g}\" × {dimensions.height:g}\"): {layout.reasoning}"
    )


def suggest_layout_settings(
    dimensions: LabelDimensions,
    has_logo: bool,
    has_from_address: bool,
) -> dict[str, Any]:
    """Quick option overrides (layout mode, spacing, sizes) for ``LayoutOptions``.

    The result can be splatted into ``dataclasses.replace``.
    """

    height_px = dimensions.height_px
    aspect = dimensions.width_px / height_px
    is_large = height_px >= TWO_ZONE_MIN_HEIGHT_PX
    is_wide = aspect >= WIDE_ASPECT
    is_small = height_px < 100

    layout_mode = LayoutMode.AUTO
    if is_wide and has_logo and has_from_address:
        layout_mode = LayoutMode.SPLIT
    elif is_large and has_logo:
        layout_mode = LayoutMode.STACKED

    font_size_multiplier = 1.0
    if is_large and not has_logo and not has_from_address:
        font_size_multiplier = 1.3
    elif is_small:
        font_size_multiplier = 0.9

    logo_size_multiplier = 1.0
    if is_large:
        logo_size_multiplier = 1.2 if has_from_address else 1.5
    elif is_small:
        logo_size_multiplier = 0.7

    line_spacing = LineSpacing.NORMAL
    if is_large and not has_from_address:
        line_spacing = LineSpacing.RELAXED
    elif is_small:
        line_spacing = LineSpacing.COMPACT

    return {
        "layout_mode": layout_mode,
        "font_size_multiplier": font_size_multiplier,
        "logo_size_multiplier": logo_size_multiplier,
        "line_spacing": line_spacing,
        "to_alignment": ToAlignment.CENTER,
        "from_position": FromPosition.TOP_LEFT,
        "show_from_label": not is_small,
        "show_to_label": not is_small,
    }


def optimize_options(
    dimensions: LabelDimensions,
    options: LayoutOptions,
    has_logo: bool,
    return_address: str = "",
) -> LayoutOptions:
    """Apply the quick settings and then the full suggestion onto ``options``.

    Visibility toggles are kept; only sizes, spacing, mode and label flags move.
    """

    has_from_address = options.show_from_address and bool(return_address.strip())
    settings = suggest_layout_settings(dimensions, has_logo, has_from_address)
    suggestion = suggest_layout(
        dimensions,
        has_logo,
        has_from_address,
        return_address.strip() or None,
    )
    return suggestion.apply_to(replace(options, **settings))


def customization_ranges(dimensions: LabelDimensions) -> dict[str, Any]:
    """Slider ranges and a size blurb for the customization form."""

    height_px = dimensions.height_px
    is_large = dimensions.height >= 2.5

    if height_px < 100:
        description = "Small label - compact design"
    elif height_px < 150:
        description = "Medium label - balanced design"
    elif height_px < TWO_ZONE_MIN_HEIGHT_PX:
        description = "Large label - spacious design"
    else:
        description = "Extra large label - two-zone layout with prominent logo"

    return {
        "logo_multiplier": {
            "min": 0.25,
            "max": 2.5,
            "default": 1.2 if is_large else 1.0,
            "step": 0.05,
        },
        "font_multiplier": {
            "min": 0.5,
            "max": 2.0,
            "default": 1.1 if is_large else 1.0,
            "step": 0.05,
        },
        "description": description,
    }


__all__ = [
    "OptimizedLayout",
    "customization_ranges",
    "explain_optimization",
    "optimize_options",
    "suggest_layout",
    "suggest_layout_settings",
]
