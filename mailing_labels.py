#!/usr/bin/env python3
"""Generate mailing label sheets from a JSON recipient list."""

import argparse
import logging
import os
from dataclasses import replace
from typing import Dict, Optional, Sequence

from dotenv import load_dotenv

from document_renderer import DocumentRenderer
from label_templates import DEFAULT_TEMPLATE, get_template
from label_types import LabelCustomization, LayoutOptions
from layout_optimizer import explain_optimization, optimize_options, suggest_layout
from logo import load_logo
from recipients import load_recipients

logger = logging.getLogger(__name__)


def _parse_layout_options(option_pairs: Sequence[str]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for pair in option_pairs:
        if "=" not in pair:
            raise SystemExit(
                f"Invalid --layout-option '{pair}'. Expected format NAME=VALUE."
            )
        key, value = pair.split("=", 1)
        key = key.strip().lower()
        value = value.strip()
        if not key:
            raise SystemExit("Layout option name cannot be empty.")
        parsed[key] = value
    return parsed


def _env_text(value: Optional[str]) -> str:
    """Environment values carry line breaks as a literal ``\\n``."""

    return (value or "").replace("\\n", "\n")


def build_customization(
    option_values: Dict[str, str],
    logo_source: Optional[str] = None,
    return_address: str = "",
    branding_text: str = "",
) -> LabelCustomization:
    """Combine layout options and content into a ``LabelCustomization``.

    Supplying a logo, return address or branding text switches the matching
    ``show_*`` option on unless it was set explicitly.
    """

    try:
        options = LayoutOptions.from_mapping(option_values)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    logo = load_logo(logo_source) if logo_source else None
    explicit = {key.replace("-", "_") for key in option_values}
    implied: Dict[str, bool] = {}
    if logo is not None and "show_logo" not in explicit:
        implied["show_logo"] = True
    if return_address.strip() and "show_from_address" not in explicit:
        implied["show_from_address"] = True
    if branding_text.strip() and "show_branding" not in explicit:
        implied["show_branding"] = True

    return LabelCustomization(
        options=replace(options, **implied),
        return_address=return_address,
        branding_text=branding_text,
        logo=logo,
    )


def _describe(renderer: DocumentRenderer) -> str:
    layout = renderer.layout
    info = renderer.template.describe()
    lines = [
        f"Template {info['key']}: {info['name']} "
        f"({info['width']}\" x {info['height']}\", {info['cols']}x{info['rows']})",
        f"Layout: {layout.description}",
        f"Content height: {layout.total_content_height:.1f}px of "
        f"{layout.label_height_px:.1f}px",
    ]
    for box in renderer.zone_boxes():
        lines.append(
            f"  {box.type.value:<8} left={box.left:.2f}pt top={box.top:.2f}pt "
            f"width={box.width:.2f}pt height={box.height:.2f}pt"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for generating the mailing label PDF."""

    parser = argparse.ArgumentParser(
        description="Recipient list -> printable mailing label sheets (PDF)"
    )
    parser.add_argument(
        "-i", "--input",
        default=os.getenv("MAILING_LABELS_RECIPIENTS"),
        help=(
            "JSON file with a list of recipients (defaults to "
            "MAILING_LABELS_RECIPIENTS from the environment/.env)."
        ),
    )
    parser.add_argument("-o", "--output", default="mailing_labels.pdf")
    parser.add_argument(
        "-t", "--template",
        default=os.getenv("MAILING_LABELS_TEMPLATE", DEFAULT_TEMPLATE),
        help=f"Label template identifier (default: {DEFAULT_TEMPLATE}).",
    )
    parser.add_argument(
        "--logo",
        default=os.getenv("MAILING_LABELS_LOGO"),
        help="Logo image file or data URL (defaults to MAILING_LABELS_LOGO).",
    )
    parser.add_argument(
        "--return-address",
        default=_env_text(os.getenv("MAILING_LABELS_RETURN_ADDRESS")),
        help=r"Return address, lines separated by '\n'.",
    )
    parser.add_argument(
        "--branding",
        default=os.getenv("MAILING_LABELS_BRANDING", ""),
        help="Footer text printed at the bottom of every label.",
    )
    parser.add_argument(
        "--layout-option",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help=(
            "Provide a layout option (repeatable). For example: "
            "--layout-option line_spacing=compact"
        ),
    )
    parser.add_argument(
        "--auto-optimize",
        action="store_true",
        help="Start from the suggested sizes and positions for the label size.",
    )
    parser.add_argument(
        "-s", "--skip",
        type=int,
        default=0,
        help="Number of labels to skip at start of first sheet",
    )
    parser.add_argument(
        "-d", "--draw-outline",
        action="store_true",
        help="Draw outline around every label",
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the computed layout instead of writing a PDF.",
    )
    parser.add_argument(
        "--web",
        action="store_true",
        help="Start a local web UI with a live preview.",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host/IP for the web UI (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=5000,
        help="Port for the web UI (default: 5000).",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.skip < 0:
        raise SystemExit("--skip must be zero or positive.")

    template = get_template(args.template)
    customization = build_customization(
        _parse_layout_options(args.layout_option),
        logo_source=args.logo,
        return_address=args.return_address or "",
        branding_text=args.branding or "",
    )

    if args.auto_optimize:
        dimensions = template.dimensions
        has_logo = customization.options.show_logo and customization.logo is not None
        customization = replace(
            customization,
            options=optimize_options(
                dimensions,
                customization.options,
                has_logo,
                customization.return_address,
            ),
        )
        suggestion = suggest_layout(
            dimensions,
            has_logo,
            customization.options.show_from_address
            and bool(customization.return_address_lines),
            customization.return_address or None,
        )
        logger.info(explain_optimization(dimensions, suggestion))

    if args.web:
        from mailing_labels_web import run_web_app

        run_web_app(
            recipients_path=args.input,
            customization=customization,
            template_name=template.KEY,
            host=args.web_host,
            port=args.web_port,
        )
        return 0

    renderer = DocumentRenderer(template, customization)
    if renderer.layout.has_overflow:
        logger.warning("Layout overflows the label: %s", renderer.layout.description)

    if args.describe:
        print(_describe(renderer))
        return 0

    if not args.input:
        raise SystemExit(
            "No recipient file given. Use --input or set MAILING_LABELS_RECIPIENTS."
        )
    labels = load_recipients(args.input)

    message = renderer.write(
        args.output,
        labels,
        skip=args.skip,
        draw_outline=args.draw_outline,
    )

    print(message)
    return 0


if __name__ == "__main__":

    load_dotenv()

    main()
