import base64
import json
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

from label_types import LabelData
from logo import load_logo, logo_from_bytes, logo_from_data_url
from recipients import load_recipients, recipient_from_record, recipients_from_records


def _png_bytes(width: int = 30, height: int = 12) -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", (width, height), (0, 0, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


class RecipientTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp_path = Path(self._tmp.name)

    def _write(self, name: str, content: str) -> Path:
        path = self.tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_record_aliases_and_missing_fields(self) -> None:
        label = recipient_from_record(
            {"Contact": " Jane Doe ", "address1": "12 Elm", "zip_code": 62704, "state": None}
        )
        self.assertEqual(
            label,
            LabelData(contact="Jane Doe", address1="12 Elm", zip="62704"),
        )

    def test_load_recipients_from_list(self) -> None:
        path = self._write(
            "recipients.json",
            json.dumps(
                [
                    {"contact": "Jane Doe", "city": "Springfield", "state": "IL", "zip": "62704"},
                    {"contact": "John Roe"},
                ]
            ),
        )
        labels = load_recipients(path)
        self.assertEqual([label.contact for label in labels], ["Jane Doe", "John Roe"])
        self.assertEqual(labels[1].address1, "")

    def test_load_recipients_from_object(self) -> None:
        path = self._write("wrapped.json", json.dumps({"recipients": [{"name": "Jane"}]}))
        self.assertEqual(load_recipients(path), [LabelData(contact="Jane")])

    def test_load_recipients_errors(self) -> None:
        with self.assertRaises(SystemExit):
            load_recipients(self.tmp_path / "missing.json")
        with self.assertRaises(SystemExit):
            load_recipients(self._write("broken.json", "{not json"))
        with self.assertRaises(SystemExit):
            load_recipients(self._write("scalar.json", "42"))
        with self.assertRaises(SystemExit):
            load_recipients(self._write("items.json", "[1, 2]"))

    def test_recipients_from_records_rejects_non_objects(self) -> None:
        with self.assertRaises(ValueError):
            recipients_from_records([{"contact": "A"}, "B"])  # type: ignore[list-item]


class LogoTests(unittest.TestCase):
    def test_logo_from_bytes_reads_size(self) -> None:
        logo = logo_from_bytes(_png_bytes(), "png")
        self.assertEqual(logo.format, "PNG")
        self.assertEqual((logo.width, logo.height), (30, 12))
        self.assertTrue(logo.is_embeddable)

    def test_undecodable_bytes_keep_hint(self) -> None:
        with self.assertLogs("logo", level="WARNING"):
            logo = logo_from_bytes(b"garbage", "jpg")
        self.assertEqual(logo.format, "JPEG")
        self.assertEqual((logo.width, logo.height), (0, 0))

    def test_data_url(self) -> None:
        encoded = base64.b64encode(_png_bytes()).decode("ascii")
        logo = logo_from_data_url(f"data:image/png;base64,{encoded}")
        assert logo is not None
        self.assertEqual(logo.format, "PNG")
        self.assertEqual(logo.data_url(), f"data:image/png;base64,{encoded}")

    def test_vector_data_url_is_not_embeddable(self) -> None:
        encoded = base64.b64encode(b"<svg/>").decode("ascii")
        logo = logo_from_data_url(f"data:image/svg+xml;base64,{encoded}")
        assert logo is not None
        self.assertFalse(logo.is_embeddable)

    def test_invalid_data_urls(self) -> None:
        self.assertIsNone(logo_from_data_url("https://example.com/logo.png"))
        with self.assertLogs("logo", level="WARNING"):
            self.assertIsNone(logo_from_data_url("data:image/png;base64,@@@"))

    def test_load_logo_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "logo.png"
            path.write_bytes(_png_bytes(8, 8))
            logo = load_logo(path)
            assert logo is not None
            self.assertEqual(logo.aspect_ratio, 1.0)

            with self.assertRaises(SystemExit):
                load_logo(Path(tmp) / "missing.png")
        self.assertIsNone(load_logo(None))


if __name__ == "__main__":
    unittest.main()
