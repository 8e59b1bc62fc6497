import base64
import unittest
from io import BytesIO
from unittest.mock import Mock, patch

from flask import Flask
from flask.testing import FlaskClient
from PIL import Image
from werkzeug.wrappers import Response

from label_types import LabelCustomization, LabelData, LayoutOptions
from mailing_labels_web import create_app

RECIPIENTS = [
    LabelData("Jane Doe", "12 Elm Street", "", "Springfield", "IL", "62704"),
    LabelData("John Roe", "9 Oak Avenue", "Unit 3", "Shelbyville", "IL", "62565"),
]


class WebUiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = Mock(return_value=list(RECIPIENTS))
        self.app: Flask = create_app(
            self.provider,
            customization=LabelCustomization(
                options=LayoutOptions(show_from_address=True),
                return_address="Acme Clinic\n1 Main St",
            ),
        )
        self.app.config["TESTING"] = True
        self.client: FlaskClient = self.app.test_client()

    def test_index_redirects_to_labels(self) -> None:
        response: Response = self.client.get("/")
        self.assertEqual(response.status_code, 302)
        self.assertIn("/labels", response.headers.get("Location", ""))

    def test_labels_page_renders_preview(self) -> None:
        response: Response = self.client.get("/labels?template=5163&line_spacing=compact")
        self.assertEqual(response.status_code, 200)
        body = response.get_data(as_text=True)
        self.assertIn("Jane Doe", body)
        self.assertIn("Shelbyville, IL 62565", body)
        self.assertIn("Acme Clinic", body)
        self.assertIn("Sheet 1", body)
        self.assertIn('<option value="compact" selected>', body)

    def test_invalid_option_is_rejected(self) -> None:
        response: Response = self.client.get("/labels?line_spacing=cramped")
        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid value 'cramped'", response.get_data(as_text=True))

    def test_unknown_template_is_rejected(self) -> None:
        response: Response = self.client.get("/labels/layout?template=9999")
        self.assertEqual(response.status_code, 400)
        self.assertIn("Unknown template", response.get_json()["error"])

    def test_invalid_skip_is_rejected(self) -> None:
        response: Response = self.client.post("/labels/generate", data={"skip": "-2"})
        self.assertEqual(response.status_code, 400)

    def test_layout_json(self) -> None:
        response: Response = self.client.get(
            "/labels/layout?template=shipping-6up&show_logo=false&show_branding=true"
            "&branding_text=Thanks"
        )
        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        zone_types = [zone["type"] for zone in payload["layout"]["zones"]]
        self.assertEqual(zone_types, ["from", "to", "branding"])
        self.assertEqual(len(payload["preview_boxes"]), len(payload["document_boxes"]))
        self.assertFalse(payload["layout"]["has_overflow"])
        self.assertEqual(payload["template"]["key"], "shipping-6up")

    def test_suggest_json(self) -> None:
        response: Response = self.client.get("/labels/suggest?template=5163")
        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        self.assertIn("Auto-optimized for", payload["explanation"])
        self.assertIn("logo_position", payload["suggestion"])
        self.assertIn("logo_multiplier", payload["ranges"])
        self.provider.assert_not_called()

    def test_suggest_ignores_hidden_logo(self) -> None:
        buffer = BytesIO()
        Image.new("RGB", (30, 12), (0, 90, 160)).save(buffer, format="PNG")
        logo = "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")

        hidden: Response = self.client.get(
            "/labels/suggest",
            query_string={"template": "shipping-6up", "show_logo": "no", "logo": logo},
        )
        without: Response = self.client.get(
            "/labels/suggest", query_string={"template": "shipping-6up"})

        self.assertEqual(hidden.status_code, 200)
        self.assertEqual(hidden.get_json(), without.get_json())

    def test_generate_returns_pdf(self) -> None:
        response: Response = self.client.post(
            "/labels/generate",
            data={"template": "5160", "draw_outline": "on", "auto_optimize": "1"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.mimetype, "application/pdf")
        self.assertTrue(response.data.startswith(b"%PDF"))
        self.assertIn("mailing_labels.pdf", response.headers.get("Content-Disposition", ""))

    def test_preview_png(self) -> None:
        response: Response = self.client.get("/labels/preview.png?template=5167")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.mimetype, "image/png")
        self.assertTrue(response.data.startswith(b"\x89PNG"))

    @patch("mailing_labels_web.DocumentRenderer")
    def test_generate_passes_skip(self, mock_renderer: Mock) -> None:
        mock_renderer.return_value.render.return_value = b"%PDF-1.4"
        response: Response = self.client.post("/labels/generate", data={"skip": "3"})
        self.assertEqual(response.status_code, 200)
        mock_renderer.return_value.render.assert_called_once_with(
            RECIPIENTS, skip=3, draw_outline=False)

    def test_recipient_errors_become_400(self) -> None:
        self.provider.side_effect = SystemExit("Recipient file 'x.json' does not exist.")
        response: Response = self.client.get("/labels")
        self.assertEqual(response.status_code, 400)
        self.assertIn("does not exist", response.get_data(as_text=True))


if __name__ == "__main__":
    unittest.main()
