"""Logo provider: turn files or data URLs into embeddable raster descriptors."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from label_types import LogoImage

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:image/([\w.+-]+);base64,(.*)$", re.DOTALL)

_FORMAT_ALIASES = {"JPG": "JPEG"}


def _normalize_format(name: str) -> str:
    key = name.strip().upper()
    return _FORMAT_ALIASES.get(key, key)


def logo_from_bytes(data: bytes, format_hint: str = "") -> LogoImage:
    """Probe ``data`` with Pillow and return its descriptor.

    Undecodable data keeps the hinted format and a zero size;
    :func:`open_logo` logs and skips it when drawing.
    """

    try:
        with Image.open(BytesIO(data)) as img:
            fmt = img.format or format_hint
            width, height = img.size
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        logger.warning("Logo data could not be decoded: %s", exc)
        return LogoImage(format=_normalize_format(format_hint), data=data)
    return LogoImage(
        format=_normalize_format(fmt),
        data=data,
        width=width,
        height=height,
    )


def logo_from_data_url(url: str) -> LogoImage | None:
    """Parse a ``data:image/<fmt>;base64,...`` URL; other URLs yield ``None``."""

    match = _DATA_URL_RE.match((url or "").strip())
    if not match:
        logger.debug("Ignoring non data-URL logo source")
        return None
    fmt, payload = match.groups()
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Logo data URL is not valid base64: %s", exc)
        return None
    if not _normalize_format(fmt).isalnum():
        # vector formats such as svg+xml cannot be embedded
        return LogoImage(format=_normalize_format(fmt), data=data)
    return logo_from_bytes(data, fmt)


def open_logo(logo: LogoImage) -> tuple[LogoImage, Image.Image] | None:
    """Decode ``logo`` for drawing.

    Returns the descriptor with its decoded size and a loaded image copy.
    Non-raster formats are skipped quietly; malformed data is logged and
    skipped. Shared by the preview and PDF renderers.
    """

    if not logo.is_embeddable:
        logger.debug("Skipping logo with non-embeddable format '%s'", logo.format)
        return None
    try:
        with Image.open(BytesIO(logo.data)) as img:
            img.load()
            return LogoImage(logo.format, logo.data, *img.size), img.copy()
    except (OSError, ValueError, SyntaxError) as exc:
        logger.warning("Skipping malformed %s logo: %s", logo.format, exc)
        return None


def load_logo(source: str | Path | None) -> LogoImage | None:
    """Load a logo from a file path or a data URL."""

    if not source:
        return None
    text = str(source)
    if text.startswith("data:"):
        return logo_from_data_url(text)

    path = Path(text).expanduser()
    if not path.exists():
        raise SystemExit(f"Logo file '{path}' does not exist.")
    return logo_from_bytes(path.read_bytes(), path.suffix.lstrip("."))


__all__ = ["load_logo", "logo_from_bytes", "logo_from_data_url", "open_logo"]
