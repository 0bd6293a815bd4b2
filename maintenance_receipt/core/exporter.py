"""
PDF export and sharing of rendered receipts.
"""

import io
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .models import Notification, ReceiptInput
from .rendering import ReceiptPreview
from .utils import SHARE_TITLE, receipt_filename, safe_filename, share_caption, whatsapp_share_url

# Snapshot scale factors (quality vs. payload size)
PDF_SCALE = 3
SHARE_SCALE = 2

# Page geometry in millimetres
PDF_IMAGE_WIDTH_MM = 190
PDF_TOP_MARGIN_MM = 10

SHARE_FILENAME = "receipt.png"
SHARE_MIME = "image/png"


class ExportError(Exception):
    """Raised when a receipt cannot be rasterized, saved or shared."""


class Notifier:
    """Prints user-facing notifications and keeps them for inspection."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.history: List[Notification] = []

    def notify(self, title: str, description: str, variant: str = "default") -> Notification:
        note = Notification(title=title, description=description, variant=variant)
        self.history.append(note)
        level = "ERROR" if note.is_error else "INFO"
        print(f"[{level}] {title}: {description}")
        return note

    def error(self, title: str, description: str) -> Notification:
        return self.notify(title, description, variant="destructive")

    def debug(self, message: str):
        if self.verbose:
            print(f"[DEBUG] {message}")


@dataclass(frozen=True)
class SharePayload:
    """An in-memory file handed to a share target."""
    filename: str
    mime_type: str
    data: bytes


class ShareTarget:
    """
    Platform share sheet.

    The base target has no native sharing, so sharing always takes the
    link fallback.
    """

    hint = "Choose WhatsApp from the share menu to send the receipt."

    def can_share(self, files: List[SharePayload]) -> bool:
        return False

    def share(self, files: List[SharePayload], title: str, text: str):
        raise ExportError("Native sharing is not available")


class DirectoryShareTarget(ShareTarget):
    """Hands shared files to a folder (e.g. a synced or phone-transfer folder)."""

    def __init__(self, directory: Path):
        self.directory = directory

    @property
    def hint(self) -> str:
        return f"Receipt image placed in {self.directory}; send it from there."

    def can_share(self, files: List[SharePayload]) -> bool:
        if not files:
            return False
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return self.directory.is_dir()

    def share(self, files: List[SharePayload], title: str, text: str):
        for payload in files:
            (self.directory / payload.filename).write_bytes(payload.data)
        (self.directory / "receipt.txt").write_text(f"{title}\n{text}\n", encoding="utf-8")


def _snapshot(preview: ReceiptPreview, scale: float, notifier: Notifier):
    try:
        img = preview.snapshot(scale=scale, background="#ffffff")
    except Exception as e:
        raise ExportError(f"Could not capture receipt: {e}") from e
    notifier.debug(f"Snapshot {img.width}x{img.height}px at {scale}x")
    return img


def build_pdf(img) -> bytes:
    """Place a receipt image on a white A4 page and return the PDF bytes."""
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.units import mm
    from reportlab.lib.utils import ImageReader
    from reportlab.pdfgen import canvas

    buf = io.BytesIO()
    page_w, page_h = A4
    c = canvas.Canvas(buf, pagesize=A4, pageCompression=1)

    c.setFillColorRGB(1, 1, 1)
    c.rect(0, 0, page_w, page_h, stroke=0, fill=1)

    w, h = img.size
    img_w = PDF_IMAGE_WIDTH_MM * mm
    img_h = h * img_w / w
    x = (page_w - img_w) / 2
    # PDF origin is bottom-left
    y = page_h - PDF_TOP_MARGIN_MM * mm - img_h
    c.drawImage(ImageReader(img), x, y, width=img_w, height=img_h)
    c.showPage()
    c.save()
    return buf.getvalue()


def export_pdf(preview: Optional[ReceiptPreview], receipt: ReceiptInput,
               output_dir: Path, notifier: Notifier,
               scale: float = PDF_SCALE) -> Optional[Path]:
    """
    Save the rendered receipt as a single-page A4 PDF.

    Returns the written path, or None when nothing was rendered or the
    export failed (failures are reported through the notifier).
    """
    if preview is None:
        return None

    name = receipt_filename(receipt.unit_number, receipt.billing_period)
    out_pdf = output_dir / safe_filename(name)
    part = out_pdf.with_name(out_pdf.name + ".part")
    try:
        img = _snapshot(preview, scale, notifier)
        data = build_pdf(img)
        output_dir.mkdir(parents=True, exist_ok=True)
        part.write_bytes(data)
        part.replace(out_pdf)
    except Exception as e:
        if part.exists():
            part.unlink()
        notifier.debug(f"Error generating PDF: {e}")
        notifier.error("Error", "Failed to generate PDF")
        return None

    notifier.debug(f"Wrote {out_pdf}")
    notifier.notify("Success", "Receipt downloaded successfully")
    return out_pdf


def _share_native(share_target: ShareTarget, files: List[SharePayload], caption: str,
                  notifier: Notifier) -> str:
    share_target.share(files, title=SHARE_TITLE, text=caption)
    notifier.notify("Share Initiated", share_target.hint)
    return "native"


def _share_via_link(caption: str, open_url: Callable[[str], object], notifier: Notifier) -> str:
    url = whatsapp_share_url(caption)
    notifier.debug(f"Opening {url}")
    open_url(url)
    notifier.notify("WhatsApp Opened", "Please paste the receipt image manually.")
    return "fallback"


def share_receipt(preview: Optional[ReceiptPreview], receipt: ReceiptInput,
                  notifier: Notifier,
                  share_target: Optional[ShareTarget] = None,
                  open_url: Callable[[str], object] = webbrowser.open,
                  scale: float = SHARE_SCALE) -> Optional[str]:
    """
    Share the rendered receipt as a PNG.

    Uses the share target when it can take the image, otherwise opens a
    WhatsApp link carrying only the caption. Returns "native", "fallback",
    or None when nothing was rendered or sharing failed.
    """
    if preview is None:
        return None

    share_target = share_target or ShareTarget()
    caption = share_caption(receipt.unit_number, receipt.billing_period)

    try:
        img = _snapshot(preview, scale, notifier)
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        files = [SharePayload(SHARE_FILENAME, SHARE_MIME, buf.getvalue())]

        if share_target.can_share(files):
            notifier.debug("Sharing through native target")
            return _share_native(share_target, files, caption, notifier)
        return _share_via_link(caption, open_url, notifier)
    except Exception as e:
        notifier.debug(f"Error sharing: {e}")
        notifier.error("Error", "Failed to share receipt. Please try again.")
        return None
