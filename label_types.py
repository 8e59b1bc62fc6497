"""Typed data model for mailing label layout and rendering."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field, fields, replace
from enum import StrEnum
from typing import Callable, Mapping

from units import inches_to_px


class LineSpacing(StrEnum):
    COMPACT = "compact"
    NORMAL = "normal"
    RELAXED = "relaxed"


class ToAlignment(StrEnum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FromPosition(StrEnum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"


class LayoutMode(StrEnum):
    AUTO = "auto"
    STACKED = "stacked"
    SPLIT = "split"


class ZoneType(StrEnum):
    LOGO = "logo"
    FROM = "from"
    TO = "to"
    BRANDING = "branding"


class LogoPosition(StrEnum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    CENTER = "center"


class ReturnAddressPosition(StrEnum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


LINE_HEIGHT_MULTIPLIERS: dict[LineSpacing, float] = {
    LineSpacing.COMPACT: 1.15,
    LineSpacing.NORMAL: 1.35,
    LineSpacing.RELAXED: 1.55,
}

LOGO_MULTIPLIER_RANGE = (0.25, 2.5)
FONT_MULTIPLIER_RANGE = (0.5, 2.0)
FROM_FONT_MULTIPLIER_RANGE = (0.5, 1.5)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


@dataclass(frozen=True)
class LabelDimensions:
    """Physical label size in inches."""

    width: float
    height: float

    @property
    def width_px(self) -> float:
        return inches_to_px(self.width)

    @property
    def height_px(self) -> float:
        return inches_to_px(self.height)

    def validate(self) -> LabelDimensions:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Label dimensions must be positive, got {self.width}x{self.height} in."
            )
        return self


@dataclass(frozen=True)
class LayoutOptions:
    """User-facing layout configuration.

    ``show_*`` toggle the logo, return address ("From"), the "To:"/"From:"
    captions and the branding footer. The three multipliers scale the logo,
    the destination/branding fonts and the return address font; values
    outside their documented ranges are clamped when the layout is computed.
    ``line_spacing`` selects the line-height multiplier, ``to_alignment`` the
    horizontal alignment of the destination block and ``from_position`` the
    corner of the return address. ``layout_mode`` forces the stacked
    (logo zone above an address zone) or split (single flow) layout; ``auto``
    decides from the label height.
    """

    show_logo: bool = False
    show_from_address: bool = False
    show_to_label: bool = True
    show_from_label: bool = True
    show_branding: bool = False
    logo_size_multiplier: float = 1.0
    font_size_multiplier: float = 1.0
    from_font_size_multiplier: float = 1.0
    line_spacing: LineSpacing = LineSpacing.NORMAL
    to_alignment: ToAlignment = ToAlignment.CENTER
    from_position: FromPosition = FromPosition.TOP_LEFT
    layout_mode: LayoutMode = LayoutMode.AUTO

    def clamped(self) -> LayoutOptions:
        return replace(
            self,
            logo_size_multiplier=clamp(self.logo_size_multiplier, LOGO_MULTIPLIER_RANGE),
            font_size_multiplier=clamp(self.font_size_multiplier, FONT_MULTIPLIER_RANGE),
            from_font_size_multiplier=clamp(
                self.from_font_size_multiplier, FROM_FONT_MULTIPLIER_RANGE
            ),
        )

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, object],
        base: LayoutOptions | None = None,
    ) -> LayoutOptions:
        """Parse ``NAME -> value`` pairs (strings from a CLI or form) onto ``base``."""

        overrides: dict[str, object] = {}
        for raw_name, raw_value in values.items():
            name = raw_name.strip().lower().replace("-", "_")
            parser = _OPTION_PARSERS.get(name)
            if parser is None:
                available = ", ".join(LAYOUT_OPTION_NAMES)
                raise ValueError(
                    f"Unknown layout option '{raw_name}'. Available options: {available}"
                )
            overrides[name] = parser(raw_value)
        return replace(base or cls(), **overrides)


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean value, got '{value}'.")


def _parse_float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Expected a number, got '{value}'.") from exc


def _enum_parser(enum_cls: type[StrEnum]) -> Callable[[object], StrEnum]:
    def parse(value: object) -> StrEnum:
        text = str(value).strip().lower()
        if text in enum_cls._value2member_map_:
            return enum_cls(text)
        choices = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid value '{value}'. Choose one of: {choices}.")

    return parse


_OPTION_PARSERS: dict[str, Callable[[object], object]] = {
    "show_logo": _parse_bool,
    "show_from_address": _parse_bool,
    "show_to_label": _parse_bool,
    "show_from_label": _parse_bool,
    "show_branding": _parse_bool,
    "logo_size_multiplier": _parse_float,
    "font_size_multiplier": _parse_float,
    "from_font_size_multiplier": _parse_float,
    "line_spacing": _enum_parser(LineSpacing),
    "to_alignment": _enum_parser(ToAlignment),
    "from_position": _enum_parser(FromPosition),
    "layout_mode": _enum_parser(LayoutMode),
}

LAYOUT_OPTION_NAMES: tuple[str, ...] = tuple(f.name for f in fields(LayoutOptions))


@dataclass(frozen=True)
class LayoutZone:
    """A zone rectangle in percent of the label, fonts in reference px."""

    type: ZoneType
    top: float
    left: float
    width: float
    height: float
    font_size: float
    line_height: float
    align: ToAlignment
    visible: bool = True


@dataclass(frozen=True)
class CalculatedLayout:
    zones: tuple[LayoutZone, ...]
    use_two_zone_layout: bool
    total_content_height: float
    label_height_px: float
    has_overflow: bool
    description: str
    auto_adjust_attempts: int = 0
    logo_size_multiplier: float = 1.0

    def zone(self, zone_type: ZoneType) -> LayoutZone | None:
        for zone in self.zones:
            if zone.type is zone_type:
                return zone
        return None


@dataclass(frozen=True)
class ZoneBox:
    """Absolute zone rectangle (origin top-left) in renderer units."""

    type: ZoneType
    left: float
    top: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    def scaled(self, factor: float) -> ZoneBox:
        return ZoneBox(
            self.type,
            self.left * factor,
            self.top * factor,
            self.width * factor,
            self.height * factor,
        )


@dataclass(frozen=True)
class LabelData:
    """Recipient address printed as the destination block."""

    contact: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    @property
    def city_state_zip(self) -> str:
        city = self.city.strip()
        state = self.state.strip()
        separator = ", " if city and state else ""
        return f"{city}{separator}{state} {self.zip.strip()}".strip()


EMBEDDABLE_LOGO_FORMATS = frozenset({"PNG", "JPEG", "GIF", "BMP"})


@dataclass(frozen=True)
class LogoImage:
    """Encoded logo raster ready to be placed on a label."""

    format: str
    data: bytes = field(repr=False)
    width: int = 0
    height: int = 0

    @property
    def is_embeddable(self) -> bool:
        return self.format.upper() in EMBEDDABLE_LOGO_FORMATS and bool(self.data)

    @property
    def aspect_ratio(self) -> float:
        if self.width <= 0 or self.height <= 0:
            return 1.0
        return self.width / self.height

    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:image/{self.format.lower()};base64,{encoded}"


@dataclass(frozen=True)
class LabelCustomization:
    """Everything besides the recipient that ends up on a label."""

    options: LayoutOptions = field(default_factory=LayoutOptions)
    return_address: str = ""
    branding_text: str = ""
    logo: LogoImage | None = None

    @property
    def return_address_lines(self) -> list[str]:
        lines = [line.strip() for line in self.return_address.splitlines()]
        return [line for line in lines if line][:3]


@dataclass(frozen=True)
class LabelGeometry:
    """Slot rectangle on a sheet in PDF points (origin bottom-left)."""

    left: float
    bottom: float
    right: float
    top: float

    on_new_page: bool

    @property
    def width(self) -> float:
        return max(self.right - self.left, 0.0)

    @property
    def height(self) -> float:
        return max(self.top - self.bottom, 0.0)
