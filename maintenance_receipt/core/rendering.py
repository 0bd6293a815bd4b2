"""
Receipt preview layout and rasterization.
"""

import random
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .models import ReceiptInput
from .organization import DEFAULT_ORGANIZATION, Organization
from .utils import PLACEHOLDER, format_currency, format_date, generate_receipt_number

# Base geometry at scale 1; snapshots multiply by the scale factor
BASE_WIDTH = 672
PADDING = 40
COLUMN_GAP = 32
COLUMN_WIDTH = (BASE_WIDTH - 2 * PADDING - COLUMN_GAP) / 2
ROW_GAP = 24
VALUE_LINE = 24
AMOUNT_LINE = 32
AMOUNT_LABEL_WIDTH = 140

WHITE = "#ffffff"
TEXT = "#111827"
MUTED = "#6b7280"
RULE = "#e5e7eb"
RULE_LIGHT = "#f3f4f6"
PAID_BG = "#f0fdf4"
PAID_FG = "#15803d"

FONT_CANDIDATES = ["DejaVuSans.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"]


@lru_cache(maxsize=32)
def _font(size: int):
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def wrap_text(text: str, font, max_width: float) -> List[str]:
    """Break text into lines no wider than `max_width` pixels; long words are split."""
    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        candidate = f"{current} {word}" if current else word
        if font.getlength(candidate) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = ""
        for ch in word:
            if current and font.getlength(current + ch) > max_width:
                lines.append(current)
                current = ch
            else:
                current += ch
    lines.append(current)
    return lines


@dataclass(frozen=True)
class ReceiptPreview:
    """Display strings for one rendered receipt."""
    receipt_number: str
    date: str
    resident: str
    flat_number: str
    month: str
    previous_balance: str
    amount_paid: str
    organization: Organization = DEFAULT_ORGANIZATION

    def details(self) -> List[Tuple[str, str]]:
        """Label/value pairs of the details grid, in display order."""
        return [
            ("Resident", self.resident),
            ("Flat Number", self.flat_number),
            ("Month", self.month),
            ("Previous Balance", self.previous_balance),
        ]

    def as_text(self) -> str:
        """Plain-text rendering for the terminal."""
        org = self.organization
        lines = [org.name, *org.address, org.contact, ""]
        lines.append(f"Receipt No. {self.receipt_number}    {self.date}")
        lines.append("-" * 48)
        for label, value in self.details():
            lines.append(f"{label + ':':<20}{value}")
        lines.append("-" * 48)
        lines.append(f"{'Amount Paid:':<20}{self.amount_paid}")
        lines.append("")
        lines.append(f"[Paid]{'':<26}{org.signatory}")
        lines.append(f"{'':<32}Authorised")
        return "\n".join(lines)

    def snapshot(self, scale: float = 2, background: str = WHITE) -> Image.Image:
        """Rasterize the receipt at `scale` times the base geometry."""
        if scale <= 0:
            raise ValueError(f"Scale must be positive, got {scale}")
        return _ReceiptPainter(self, scale, background).paint()


class _ReceiptPainter:
    """Draws a ReceiptPreview onto an opaque RGB canvas."""

    def __init__(self, preview: ReceiptPreview, scale: float, background: str):
        self.preview = preview
        self.s = scale
        self.background = background
        self.value_lines = [self.wrap(value, 16, COLUMN_WIDTH) for _, value in preview.details()]
        self.amount_lines = self.wrap(preview.amount_paid, 24, BASE_WIDTH - 2 * PADDING - AMOUNT_LABEL_WIDTH)

    def px(self, v: float) -> int:
        return int(round(v * self.s))

    def font(self, size: int):
        return _font(max(1, self.px(size)))

    def text(self, draw, x, y, text, size, fill=TEXT, anchor_right=False):
        font = self.font(size)
        if anchor_right:
            x = x - draw.textlength(text, font=font) / self.s
        draw.text((self.px(x), self.px(y)), text, font=font, fill=fill)

    def wrap(self, text, size, max_width):
        return wrap_text(text, self.font(size), max_width * self.s)

    def row_heights(self) -> List[int]:
        heights = []
        for start in range(0, len(self.value_lines), 2):
            n = max(len(lines) for lines in self.value_lines[start:start + 2])
            heights.append(20 + VALUE_LINE * n)
        return heights

    def grid_height(self) -> int:
        heights = self.row_heights()
        return sum(heights) + ROW_GAP * (len(heights) - 1)

    def hline(self, draw, y, fill):
        draw.line([(self.px(PADDING), self.px(y)), (self.px(BASE_WIDTH - PADDING), self.px(y))],
                  fill=fill, width=max(1, self.px(1)))

    def layout_height(self) -> int:
        org = self.preview.organization
        header = max(64 + 20 * (len(org.address) + 1), 110)
        return (PADDING + header + 48      # header block + gap
                + 32 + 1 + 32              # divider
                + self.grid_height()       # details grid
                + 48 + 32 + AMOUNT_LINE * len(self.amount_lines)  # amount paid
                + 64 + 32 + 70             # footer
                + PADDING)

    def paint(self) -> Image.Image:
        p = self.preview
        org = p.organization
        right = BASE_WIDTH - PADDING

        img = Image.new("RGB", (self.px(BASE_WIDTH), self.px(self.layout_height())), self.background)
        draw = ImageDraw.Draw(img)

        # Header
        y = PADDING
        self.text(draw, PADDING, y, org.name, 24)
        line_y = y + 64
        for line in [*org.address, org.contact]:
            self.text(draw, PADDING, line_y, line, 14, fill=MUTED)
            line_y += 20
        self.text(draw, right, y, "Receipt No.", 14, fill=MUTED, anchor_right=True)
        self.text(draw, right, y + 22, p.receipt_number, 18, anchor_right=True)
        self.text(draw, right, y + 56, p.date, 14, fill=MUTED, anchor_right=True)
        y = max(line_y, y + 110) + 48

        # Divider
        y += 32
        self.hline(draw, y, RULE)
        y += 33

        # Details grid
        row_tops = [y]
        for h in self.row_heights():
            row_tops.append(row_tops[-1] + h + ROW_GAP)
        for i, ((label, _), lines) in enumerate(zip(p.details(), self.value_lines)):
            x = PADDING + (i % 2) * (COLUMN_WIDTH + COLUMN_GAP)
            row_y = row_tops[i // 2]
            self.text(draw, x, row_y, label, 14, fill=MUTED)
            for j, line in enumerate(lines):
                self.text(draw, x, row_y + 20 + j * VALUE_LINE, line, 16)
        y += self.grid_height()

        # Amount paid
        y += 48
        self.hline(draw, y, RULE_LIGHT)
        y += 32
        self.text(draw, PADDING, y + 8, "Amount Paid", 14, fill=MUTED)
        for line in self.amount_lines:
            self.text(draw, right, y, line, 24, anchor_right=True)
            y += AMOUNT_LINE

        # Footer: paid badge and signature
        y += 64
        self.hline(draw, y, RULE_LIGHT)
        y += 32
        badge = [self.px(PADDING), self.px(y + 40), self.px(PADDING + 72), self.px(y + 68)]
        draw.rounded_rectangle(badge, radius=self.px(14), fill=PAID_BG)
        check = [(PADDING + 14, y + 54), (PADDING + 18, y + 58), (PADDING + 26, y + 49)]
        draw.line([(self.px(cx), self.px(cy)) for cx, cy in check], fill=PAID_FG, width=max(1, self.px(2)))
        self.text(draw, PADDING + 32, y + 46, "Paid", 14, fill=PAID_FG)

        sig_left = right - 100
        self.text(draw, sig_left, y + 6, org.signatory, 16)
        draw.line([(self.px(sig_left), self.px(y + 30)), (self.px(right), self.px(y + 30))],
                  fill=TEXT, width=max(1, self.px(0.5)))
        self.text(draw, right, y + 48, "Authorised", 14, fill=MUTED, anchor_right=True)

        return img


def render_preview(receipt: ReceiptInput,
                   organization: Optional[Organization] = None,
                   rng: Optional[random.Random] = None) -> ReceiptPreview:
    """
    Lay out a receipt for preview.

    A fresh receipt number is drawn on every call; unset fields show 'N/A'.
    """
    return ReceiptPreview(
        receipt_number=generate_receipt_number(rng),
        date=format_date(receipt.date),
        resident=receipt.resident_name or PLACEHOLDER,
        flat_number=receipt.unit_number or PLACEHOLDER,
        month=receipt.billing_period or PLACEHOLDER,
        previous_balance=format_currency(receipt.previous_balance) if receipt.previous_balance else PLACEHOLDER,
        amount_paid=format_currency(receipt.amount_paid) if receipt.amount_paid else PLACEHOLDER,
        organization=organization or DEFAULT_ORGANIZATION,
    )
