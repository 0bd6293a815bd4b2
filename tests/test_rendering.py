"""
Unit tests for the receipt preview layout and rasterization.
"""
import dataclasses
import json

import pytest

from maintenance_receipt.core.models import ReceiptInput
from maintenance_receipt.core.organization import (
    DEFAULT_ORGANIZATION,
    Organization,
    load_organization,
)
from maintenance_receipt.core.rendering import (
    BASE_WIDTH,
    COLUMN_WIDTH,
    _font,
    render_preview,
    wrap_text,
)

LONG_NAME = "Muhammad Abdul Rahman Siddiqui Khan Qureshi Chaudhry Malik"


# =====================================================================
# Layout
# =====================================================================
class TestRenderPreview:
    def test_formatted_fields(self, preview):
        assert preview.date == "5 March 2025"
        assert preview.resident == "John Doe"
        assert preview.flat_number == "A-101"
        assert preview.month == "January 2025"
        assert preview.previous_balance == "Rs. 5,000"
        assert preview.amount_paid == "Rs. 2,500"

    def test_unset_fields_fall_back(self):
        preview = render_preview(ReceiptInput())
        assert preview.date == "N/A"
        assert preview.resident == "N/A"
        assert preview.flat_number == "N/A"
        assert preview.month == "N/A"
        assert preview.previous_balance == "N/A"
        assert preview.amount_paid == "N/A"

    def test_garbage_amount_renders_zero(self, receipt):
        preview = render_preview(ReceiptInput(amount_paid="abc"))
        assert preview.amount_paid == "Rs. 0"

    def test_receipt_number_format(self, receipt):
        n = render_preview(receipt).receipt_number
        assert len(n) == 4 and n.isdigit()

    def test_receipt_number_changes_between_renders(self, receipt):
        numbers = {render_preview(receipt).receipt_number for _ in range(50)}
        assert len(numbers) > 1

    def test_default_organization(self, preview):
        assert preview.organization == DEFAULT_ORGANIZATION
        assert preview.organization.name == "RAHIM ARCADE"

    def test_text_preview(self, preview):
        text = preview.as_text()
        assert "RAHIM ARCADE" in text
        assert f"Receipt No. {preview.receipt_number}" in text
        assert "Rs. 2,500" in text
        assert "Authorised" in text
        assert "Usman" in text


# =====================================================================
# Snapshot
# =====================================================================
class TestSnapshot:
    def test_scaled_size(self, preview):
        one = preview.snapshot(scale=1)
        two = preview.snapshot(scale=2)
        assert one.width == BASE_WIDTH
        assert two.width == BASE_WIDTH * 2
        assert abs(two.height - one.height * 2) <= 2

    def test_opaque_white_background(self, preview):
        img = preview.snapshot(scale=2)
        assert img.mode == "RGB"
        assert img.getpixel((0, 0)) == (255, 255, 255)
        assert img.getpixel((img.width - 1, img.height - 1)) == (255, 255, 255)

    def test_draws_content(self, preview):
        img = preview.snapshot(scale=1)
        colors = img.getcolors(maxcolors=img.width * img.height)
        assert len(colors) > 1

    def test_rejects_bad_scale(self, preview):
        with pytest.raises(ValueError):
            preview.snapshot(scale=0)

    def test_long_name_adds_lines(self, preview, receipt):
        long = render_preview(dataclasses.replace(receipt, resident_name=LONG_NAME))
        assert long.snapshot(scale=1).height > preview.snapshot(scale=1).height
        assert long.snapshot(scale=1).width == BASE_WIDTH

    def test_long_amount_adds_lines(self, preview, receipt):
        long = render_preview(dataclasses.replace(receipt, amount_paid="9" * 60))
        assert long.snapshot(scale=1).height > preview.snapshot(scale=1).height


# =====================================================================
# Text wrapping
# =====================================================================
class TestWrapText:
    def test_short_text_is_one_line(self):
        assert wrap_text("John Doe", _font(16), COLUMN_WIDTH) == ["John Doe"]

    def test_breaks_on_spaces_within_width(self):
        font = _font(16)
        lines = wrap_text(LONG_NAME, font, COLUMN_WIDTH)
        assert len(lines) > 1
        assert " ".join(lines) == LONG_NAME
        assert all(font.getlength(line) <= COLUMN_WIDTH for line in lines)

    def test_splits_unbroken_word(self):
        font = _font(16)
        word = "X" * 80
        lines = wrap_text(word, font, COLUMN_WIDTH)
        assert len(lines) > 1
        assert "".join(lines) == word
        assert all(font.getlength(line) <= COLUMN_WIDTH for line in lines)


# =====================================================================
# Organization config
# =====================================================================
class TestOrganization:
    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_organization(tmp_path / "organization.json") == DEFAULT_ORGANIZATION

    def test_partial_file(self, tmp_path):
        path = tmp_path / "organization.json"
        path.write_text(json.dumps({"name": "GULSHAN TOWERS", "address": "Block 7, Karachi"}))
        org = load_organization(path)
        assert org.name == "GULSHAN TOWERS"
        assert org.address == ["Block 7, Karachi"]
        assert org.contact == DEFAULT_ORGANIZATION.contact
        assert org.signatory == "Usman"

    def test_custom_header_is_rendered(self, receipt):
        org = Organization(name="GULSHAN TOWERS", address=["Block 7"], contact="021-000", signatory="Ali")
        preview = render_preview(receipt, organization=org)
        text = preview.as_text()
        assert "GULSHAN TOWERS" in text
        assert "Ali" in text
        assert preview.snapshot(scale=1).width == BASE_WIDTH
