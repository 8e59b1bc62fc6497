import unittest

from label_content import (
    TO_CAPTION,
    fit_logo,
    from_address_lines,
    text_area,
    to_address_lines,
    zone_lines,
)
from label_types import (
    LabelCustomization,
    LabelData,
    LayoutOptions,
    LayoutZone,
    LogoImage,
    ToAlignment,
    ZoneBox,
    ZoneType,
)

RECIPIENT = LabelData("Jane Doe", "12 Elm Street", "", "Springfield", "IL", "62704")


def _zone(zone_type: ZoneType, line_height: float = 10.0) -> LayoutZone:
    return LayoutZone(
        type=zone_type,
        top=0.0,
        left=0.0,
        width=100.0,
        height=50.0,
        font_size=8.0,
        line_height=line_height,
        align=ToAlignment.LEFT,
    )


class AddressLineTests(unittest.TestCase):
    def test_to_lines_keep_empty_slots(self) -> None:
        lines = to_address_lines(RECIPIENT, show_to_label=True)
        self.assertEqual(
            [line.text for line in lines],
            [TO_CAPTION, "Jane Doe", "12 Elm Street", "", "Springfield, IL 62704"],
        )
        self.assertEqual([line.bold for line in lines], [True, True, False, False, False])
        self.assertEqual(len(to_address_lines(RECIPIENT, show_to_label=False)), 4)

    def test_from_lines(self) -> None:
        customization = LabelCustomization(
            options=LayoutOptions(show_from_label=False),
            return_address="Acme\n1 Main St",
        )
        self.assertEqual([line.text for line in from_address_lines(customization)], ["Acme", "1 Main St"])


class ZoneLineTests(unittest.TestCase):
    def test_to_block_centred_on_nominal_height(self) -> None:
        placed = zone_lines(_zone(ZoneType.TO), 80.0, RECIPIENT, LabelCustomization())

        # five nominal lines of 10px in an 80px box
        self.assertEqual(placed[0].top, 15.0)
        self.assertEqual([line.top for line in placed], [15.0, 25.0, 35.0, 45.0])
        self.assertEqual(placed[-1].text, "Springfield, IL 62704")

    def test_branding(self) -> None:
        zone = _zone(ZoneType.BRANDING)
        self.assertEqual(zone_lines(zone, 20.0, RECIPIENT, LabelCustomization()), [])

        placed = zone_lines(zone, 20.0, RECIPIENT, LabelCustomization(branding_text=" Thanks! "))
        self.assertEqual(len(placed), 1)
        self.assertEqual(placed[0].text, "Thanks!")
        self.assertEqual(placed[0].top, 5.0)

    def test_logo_zone_has_no_text(self) -> None:
        self.assertEqual(zone_lines(_zone(ZoneType.LOGO), 40.0, RECIPIENT, LabelCustomization()), [])

    def test_scaled_line(self) -> None:
        line = zone_lines(_zone(ZoneType.TO), 80.0, RECIPIENT, LabelCustomization())[0]
        scaled = line.scaled(0.75)
        self.assertEqual(scaled.top, 11.25)
        self.assertEqual(scaled.font_size, 6.0)
        self.assertEqual(scaled.text, line.text)


class LogoFitTests(unittest.TestCase):
    def test_tall_box_uses_full_height(self) -> None:
        box = ZoneBox(ZoneType.LOGO, 0, 10, 200, 40)
        fitted = fit_logo(box, LogoImage("PNG", b"x", 20, 10))

        self.assertEqual((fitted.width, fitted.height), (80.0, 40))
        self.assertEqual(fitted.left, 60.0)
        self.assertEqual(fitted.top, 10)

    def test_wide_logo_is_capped_at_box_share(self) -> None:
        box = ZoneBox(ZoneType.LOGO, 0, 0, 100, 40)
        fitted = fit_logo(box, LogoImage("PNG", b"x", 100, 10))

        self.assertAlmostEqual(fitted.width, 80.0)
        self.assertAlmostEqual(fitted.height, 8.0)
        self.assertAlmostEqual(fitted.top, 16.0)

    def test_text_area(self) -> None:
        area = text_area(ZoneBox(ZoneType.TO, 10, 5, 100, 20), inset=4)
        self.assertEqual((area.left, area.width, area.top, area.height), (14, 92, 5, 20))
        self.assertEqual(text_area(ZoneBox(ZoneType.TO, 0, 0, 4, 20), inset=4).width, 0.0)


if __name__ == "__main__":
    unittest.main()
