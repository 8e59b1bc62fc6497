import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import Mock, patch

import fitz

from mailing_labels import _parse_layout_options, build_customization, main


class ParseLayoutOptionsTests(unittest.TestCase):
    def test_parses_pairs(self) -> None:
        self.assertEqual(
            _parse_layout_options(["Line_Spacing = compact", "show_logo=1"]),
            {"line_spacing": "compact", "show_logo": "1"},
        )

    def test_rejects_malformed_pairs(self) -> None:
        with self.assertRaises(SystemExit):
            _parse_layout_options(["line_spacing"])
        with self.assertRaises(SystemExit):
            _parse_layout_options(["=compact"])


class BuildCustomizationTests(unittest.TestCase):
    def test_content_switches_on_zones(self) -> None:
        customization = build_customization(
            {}, return_address="Acme\n1 Main St", branding_text="Thanks")
        self.assertTrue(customization.options.show_from_address)
        self.assertTrue(customization.options.show_branding)
        self.assertFalse(customization.options.show_logo)

    def test_explicit_option_wins(self) -> None:
        customization = build_customization(
            {"show_from_address": "no"}, return_address="Acme")
        self.assertFalse(customization.options.show_from_address)

    def test_invalid_option_exits(self) -> None:
        with self.assertRaises(SystemExit):
            build_customization({"line_spacing": "cramped"})


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp_path = Path(self._tmp.name)
        self.recipients = self.tmp_path / "recipients.json"
        self.recipients.write_text(
            json.dumps([{"contact": f"Person {n}", "city": "Springfield"} for n in range(12)]),
            encoding="utf-8",
        )

    def test_writes_pdf(self) -> None:
        output = self.tmp_path / "labels.pdf"
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = main([
                "-i", str(self.recipients),
                "-o", str(output),
                "-t", "5163",
                "--return-address", "Acme\n1 Main St",
                "--layout-option", "to_alignment=left",
                "-s", "2",
            ])

        self.assertEqual(code, 0)
        self.assertIn("Wrote 12 labels", stdout.getvalue())
        with fitz.open(stream=output.read_bytes(), filetype="pdf") as doc:
            self.assertEqual(len(doc), 2)
            self.assertIn("Person 0", doc[0].get_text())

    def test_describe_prints_layout(self) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            main(["-t", "shipping-6up", "--branding", "Thanks", "--describe", "--auto-optimize"])

        text = stdout.getvalue()
        self.assertIn("Template shipping-6up", text)
        self.assertIn("Layout: ", text)
        self.assertIn("branding", text)

    def test_missing_input_exits(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(SystemExit):
                main(["-o", str(self.tmp_path / "out.pdf")])

    def test_unknown_template_exits(self) -> None:
        with self.assertRaises(SystemExit):
            main(["-i", str(self.recipients), "-t", "9999"])

    @patch("mailing_labels_web.run_web_app")
    def test_web_flag_starts_app(self, mock_run: Mock) -> None:
        code = main(["--web", "-i", str(self.recipients), "--web-port", "5055"])

        self.assertEqual(code, 0)
        kwargs = mock_run.call_args.kwargs
        self.assertEqual(kwargs["recipients_path"], str(self.recipients))
        self.assertEqual(kwargs["port"], 5055)
        self.assertEqual(kwargs["template_name"], "5160")


if __name__ == "__main__":
    unittest.main()
