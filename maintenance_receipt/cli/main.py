#!/usr/bin/env python3
"""
Main CLI entrypoint for the maintenance receipt generator.
"""

import argparse
import sys
from pathlib import Path

from maintenance_receipt.core.exporter import (
    DirectoryShareTarget,
    Notifier,
    ShareTarget,
    export_pdf,
    share_receipt,
)
from maintenance_receipt.core.models import FIELD_LABELS, FIELD_NAMES, ViewMode
from maintenance_receipt.core.organization import load_organization
from maintenance_receipt.core.parsers import parse_date
from maintenance_receipt.core.rendering import render_preview
from maintenance_receipt.core.session import ReceiptSession

# Receipt field -> CLI flag destination
FIELD_FLAGS = {
    "date": "date",
    "resident_name": "name",
    "unit_number": "flat",
    "billing_period": "month",
    "previous_balance": "balance",
    "amount_paid": "amount",
}

MENU = "[d]ownload PDF / [s]hare / [e]dit / [q]uit: "
CLEAR = "-"


def apply_field(session: ReceiptSession, name: str, raw: str):
    """Feed raw text into a session field, parsing dates."""
    value = parse_date(raw) if name == "date" else raw
    return session.update(name, value)


def print_errors(errors):
    for name in FIELD_NAMES:
        if name in errors:
            print(f"  - {FIELD_LABELS[name]}: {errors[name]}")


def _current_display(session: ReceiptSession, name: str) -> str:
    value = getattr(session.values, name)
    if name == "date":
        return value.isoformat() if value else ""
    return value


def prompt_fields(session: ReceiptSession, names, input_fn=input):
    """Ask for each field; an empty answer keeps the current value, '-' clears it."""
    for name in names:
        current = _current_display(session, name)
        suffix = f" [{current}]" if current else ""
        raw = input_fn(f"{FIELD_LABELS[name]}{suffix}: ")
        if raw == "" and current:
            continue
        if raw == CLEAR:
            raw = ""
        err = apply_field(session, name, raw)
        if err:
            print(f"  - {err}")


def run_form(session: ReceiptSession, input_fn=input):
    """Collect fields until the validation gate passes."""
    names = list(FIELD_NAMES)
    while session.mode == ViewMode.FORM:
        prompt_fields(session, names, input_fn)
        result = session.submit()
        if not result.valid:
            print("[WARN] Please fix the following:")
            print_errors(result.errors)
            names = [n for n in FIELD_NAMES if n in result.errors]


def run_interactive(session: ReceiptSession, organization, output_dir: Path,
                    notifier: Notifier, share_target: ShareTarget,
                    input_fn=input) -> int:
    """Form/preview loop driven by prompts."""
    print("Maintenance Receipt Generator")
    print("Enter the details for the maintenance receipt.")
    print(f"Press Enter to keep the value in [brackets], or type '{CLEAR}' to clear it.\n")

    while True:
        run_form(session, input_fn)

        while session.mode == ViewMode.PREVIEW:
            preview = render_preview(session.record, organization)
            print()
            print(preview.as_text())
            print()
            choice = input_fn(MENU).strip().lower()
            if choice in ("d", "download"):
                export_pdf(preview, session.record, output_dir, notifier)
            elif choice in ("s", "share"):
                share_receipt(preview, session.record, notifier, share_target)
            elif choice in ("e", "edit"):
                session.edit()
            elif choice in ("q", "quit"):
                return 0
            else:
                print(f"[WARN] Unknown choice: {choice!r}")


def run_once(args, session: ReceiptSession, organization, output_dir: Path,
             notifier: Notifier, share_target: ShareTarget) -> int:
    """Fill the form from flags, preview, and run the requested exports."""
    for name, dest in FIELD_FLAGS.items():
        raw = getattr(args, dest)
        if raw is not None:
            apply_field(session, name, raw)

    result = session.submit()
    if not result.valid:
        print("[ERROR] Receipt details are incomplete:")
        print_errors(result.errors)
        return 1

    preview = render_preview(session.record, organization)
    print(preview.as_text())

    if args.pdf:
        export_pdf(preview, session.record, output_dir, notifier)
    if args.share:
        share_receipt(preview, session.record, notifier, share_target)

    return 1 if any(n.is_error for n in notifier.history) else 0


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Fill in, preview and export maintenance receipts (PDF or shared image)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive form and preview
  maintenance-receipt

  # One-shot receipt saved as PDF
  maintenance-receipt --name "John Doe" --flat A-101 --month "January 2025" \\
      --balance 5000 --amount 2500 --pdf

  # Share through WhatsApp (text only) or drop the image into a folder
  maintenance-receipt --name "John Doe" --flat A-101 --month "January 2025" \\
      --balance 5000 --amount 2500 --share --share-dir ~/Phone/Outbox
        """
    )
    parser.add_argument("--date",
                       help="Receipt date: YYYY-MM-DD, DD/MM/YYYY or 'March 5, 2025' (default: today)")
    parser.add_argument("--name", help="Resident name")
    parser.add_argument("--flat", help="Flat / unit number (e.g., A-101)")
    parser.add_argument("--month", help="Billing period (e.g., January 2025)")
    parser.add_argument("--balance", help="Previous balance (e.g., 5000)")
    parser.add_argument("--amount", help="Amount paid (e.g., 2500)")

    parser.add_argument("--pdf", action="store_true",
                       help="Save the receipt as an A4 PDF")
    parser.add_argument("--share", action="store_true",
                       help="Share the receipt image")
    parser.add_argument("--output", default="./output",
                       help="Folder for saved PDFs (default: ./output)")
    parser.add_argument("--org-config", default="./organization.json",
                       help="organization.json with header and signatory (default: ./organization.json)")
    parser.add_argument("--share-dir",
                       help="Folder that receives shared receipt images (default: open WhatsApp link)")
    parser.add_argument("--verbose", "-v", action="store_true",
                       help="Show detailed export information for debugging")

    args = parser.parse_args(argv)

    try:
        organization = load_organization(Path(args.org_config))
    except (OSError, ValueError) as e:
        print(f"[ERROR] Could not read {args.org_config}: {e}")
        return 1

    notifier = Notifier(verbose=args.verbose)
    share_target = DirectoryShareTarget(Path(args.share_dir).expanduser()) if args.share_dir else ShareTarget()
    output_dir = Path(args.output)
    session = ReceiptSession()

    if any(getattr(args, dest) is not None for dest in FIELD_FLAGS.values()):
        return run_once(args, session, organization, output_dir, notifier, share_target)

    try:
        return run_interactive(session, organization, output_dir, notifier, share_target)
    except (EOFError, KeyboardInterrupt):
        print()
        return 0


if __name__ == "__main__":
    sys.exit(main())
