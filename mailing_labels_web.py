"""Web UI for previewing and downloading mailing label sheets."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import asdict, replace
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Mapping

from dotenv import load_dotenv
from flask import (
    Flask,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    url_for,
)
from werkzeug.wrappers import Response

from document_renderer import DocumentRenderer, rasterize_first_page
from label_templates import DEFAULT_TEMPLATE, LabelTemplate, get_template, list_templates
from label_types import LAYOUT_OPTION_NAMES, LabelCustomization, LabelData, LayoutOptions
from layout_optimizer import (
    customization_ranges,
    explain_optimization,
    optimize_options,
    suggest_layout,
    suggest_layout_settings,
)
from logo import logo_from_data_url
from mailing_labels import build_customization
from preview_renderer import PreviewRenderer
from recipients import load_recipients

logger = logging.getLogger(__name__)

__all__ = ["run_web_app", "create_app", "create_app_from_env"]

RecipientProvider = Callable[[], list[LabelData]]

_TRUE_VALUES = {"1", "true", "yes", "on"}
PREVIEW_ZOOM = 1.0


class RequestError(Exception):
    """Invalid request values, answered with a 400."""


def create_app(
    recipient_provider: RecipientProvider,
    customization: LabelCustomization | None = None,
    template_name: str = DEFAULT_TEMPLATE,
) -> Flask:
    """Create the Flask app wired to the provided recipient source."""
    template_dir = Path(__file__).resolve().parent / "templates"
    app = Flask(__name__, template_folder=str(template_dir))
    app.config["SECRET_KEY"] = os.getenv(
        "FLASK_SECRET_KEY", "mailing-labels-ui")

    base_customization = customization or LabelCustomization()

    template_choices = list(list_templates())
    if not template_choices:
        raise RuntimeError("No label templates are registered.")

    def _values() -> Mapping[str, str]:
        return request.values

    def _resolve_template(values: Mapping[str, str]) -> LabelTemplate:
        name = values.get("template") or template_name
        try:
            return get_template(name)
        except SystemExit as exc:
            raise RequestError(str(exc)) from exc

    def _skip(values: Mapping[str, str]) -> int:
        raw = values.get("skip", "0") or "0"
        try:
            skip = int(raw)
        except ValueError as exc:
            raise RequestError(f"Invalid skip value '{raw}'.") from exc
        if skip < 0:
            raise RequestError("skip must be zero or positive.")
        return skip

    def _build_customization(
        values: Mapping[str, str],
        template: LabelTemplate,
    ) -> LabelCustomization:
        option_values = {
            key: value
            for key, value in values.items()
            if key.replace("-", "_") in LAYOUT_OPTION_NAMES
        }
        try:
            options = LayoutOptions.from_mapping(
                option_values, base=base_customization.options)
        except ValueError as exc:
            raise RequestError(str(exc)) from exc

        logo = base_customization.logo
        if values.get("logo"):
            logo = logo_from_data_url(values["logo"])

        result = replace(
            base_customization,
            options=options,
            return_address=values.get(
                "return_address", base_customization.return_address),
            branding_text=values.get(
                "branding_text", base_customization.branding_text),
            logo=logo,
        )

        if (values.get("auto_optimize") or "").lower() in _TRUE_VALUES:
            has_logo = result.options.show_logo and result.logo is not None
            result = replace(
                result,
                options=optimize_options(
                    template.dimensions,
                    result.options,
                    has_logo,
                    result.return_address,
                ),
            )
        return result

    def _load_recipients() -> list[LabelData]:
        try:
            return recipient_provider()
        except SystemExit as exc:
            raise RequestError(str(exc)) from exc

    @app.errorhandler(RequestError)
    def handle_request_error(exc: RequestError) -> Response:  # pyright: ignore[reportUnusedFunction]
        logger.info("Rejected request: %s", exc)
        if request.path.endswith((".png", "/layout", "/suggest")):
            response = jsonify({"error": str(exc)})
            response.status_code = 400
            return response
        return Response(str(exc), status=400)

    @app.route("/", methods=["GET"])
    def index() -> Response:  # pyright: ignore[reportUnusedFunction]
        return redirect(url_for("labels_index"))

    @app.route("/labels", methods=["GET"])
    # pyright: ignore[reportUnusedFunction]
    def labels_index() -> Response | str:
        values = _values()
        template = _resolve_template(values)
        current = _build_customization(values, template)
        skip = _skip(values)
        recipients = _load_recipients()

        renderer = PreviewRenderer(template, current, zoom=PREVIEW_ZOOM)
        pages = renderer.render_sheet(recipients, skip=skip)

        return render_template(
            "labels.html",
            pages=pages,
            layout=renderer.layout,
            recipient_count=len(recipients),
            template_choices=template_choices,
            selected_template=template.KEY,
            template_info=template.describe(),
            option_specs=template.available_options(),
            options=asdict(current.options),
            return_address=current.return_address,
            branding_text=current.branding_text,
            ranges=customization_ranges(template.dimensions),
            skip_labels=skip,
            label_width=renderer.label_width,
            label_height=renderer.label_height,
        )

    @app.route("/labels/layout", methods=["GET"])
    # pyright: ignore[reportUnusedFunction]
    def labels_layout() -> Response:
        values = _values()
        template = _resolve_template(values)
        current = _build_customization(values, template)
        preview = PreviewRenderer(template, current)
        document = DocumentRenderer(template, current)
        payload: dict[str, Any] = {
            "template": template.describe(),
            "options": asdict(current.options),
            "layout": asdict(preview.layout),
            "preview_boxes": [asdict(box) for box in preview.zone_boxes()],
            "document_boxes": [asdict(box) for box in document.zone_boxes()],
        }
        return jsonify(payload)

    @app.route("/labels/suggest", methods=["GET"])
    # pyright: ignore[reportUnusedFunction]
    def labels_suggest() -> Response:
        values = _values()
        template = _resolve_template(values)
        current = _build_customization(values, template)
        dimensions = template.dimensions
        has_logo = current.options.show_logo and current.logo is not None
        has_from_address = bool(current.return_address_lines)

        suggestion = suggest_layout(
            dimensions,
            has_logo,
            has_from_address,
            current.return_address or None,
        )
        return jsonify(
            {
                "suggestion": asdict(suggestion),
                "explanation": explain_optimization(dimensions, suggestion),
                "settings": suggest_layout_settings(
                    dimensions, has_logo, has_from_address),
                "options": asdict(suggestion.apply_to(current.options)),
                "ranges": customization_ranges(dimensions),
            }
        )

    @app.route("/labels/preview.png", methods=["GET"])
    # pyright: ignore[reportUnusedFunction]
    def labels_preview_png() -> Response:
        values = _values()
        template = _resolve_template(values)
        current = _build_customization(values, template)
        renderer = DocumentRenderer(template, current)
        pdf_bytes = renderer.render(
            _load_recipients(),
            skip=_skip(values),
            draw_outline=True,
        )
        return Response(rasterize_first_page(pdf_bytes), mimetype="image/png")

    @app.route("/labels/generate", methods=["POST"])
    # pyright: ignore[reportUnusedFunction]
    def labels_generate() -> Response:
        values = _values()
        template = _resolve_template(values)
        current = _build_customization(values, template)
        skip = _skip(values)
        draw_outline = (values.get("draw_outline") or "").lower() in _TRUE_VALUES

        recipients = _load_recipients()
        try:
            pdf_bytes = DocumentRenderer(template, current).render(
                recipients, skip=skip, draw_outline=draw_outline)
        except Exception as exc:  # pragma: no cover
            logger.exception("Label generation failed")
            return Response(f"Unable to generate labels: {exc}", status=500)

        return send_file(
            BytesIO(pdf_bytes),
            mimetype="application/pdf",
            as_attachment=True,
            download_name="mailing_labels.pdf",
        )

    return app


def _recipient_provider(recipients_path: str | None) -> RecipientProvider:
    def provide() -> list[LabelData]:
        if not recipients_path:
            return []
        return load_recipients(recipients_path)

    return provide


def create_app_from_env() -> Flask:
    """Create the Flask app using MAILING_LABELS_* environment variables."""
    load_dotenv()
    customization = build_customization(
        {},
        logo_source=os.getenv("MAILING_LABELS_LOGO"),
        return_address=(os.getenv("MAILING_LABELS_RETURN_ADDRESS") or "").replace(
            "\\n", "\n"),
        branding_text=os.getenv("MAILING_LABELS_BRANDING", ""),
    )
    return create_app(
        _recipient_provider(os.getenv("MAILING_LABELS_RECIPIENTS")),
        customization=customization,
        template_name=os.getenv("MAILING_LABELS_TEMPLATE", DEFAULT_TEMPLATE),
    )


def _use_reloader() -> bool:
    use_reloader_env = os.getenv("USE_RELOADER")
    if use_reloader_env is None:
        return True
    return use_reloader_env.lower() in _TRUE_VALUES


def run_web_app(
    recipients_path: str | None,
    host: str,
    port: int,
    customization: LabelCustomization | None = None,
    template_name: str = DEFAULT_TEMPLATE,
) -> None:
    """Launch a lightweight Flask app with a live label preview."""
    app = create_app(
        _recipient_provider(recipients_path),
        customization=customization,
        template_name=template_name,
    )

    app.run(host=host, port=port, debug=False, use_reloader=_use_reloader())


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the web UI."""
    parser = argparse.ArgumentParser(
        description="Mailing label preview web UI"
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host/IP for the web UI (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=4000,
        help="Port for the web UI (default: 4000).",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    app = create_app_from_env()
    app.run(
        host=args.host,
        port=args.port,
        debug=False,
        use_reloader=_use_reloader(),
    )
    return 0


if __name__ == "__main__":
    load_dotenv()
    main()
