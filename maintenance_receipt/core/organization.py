"""
Organization header shown on every receipt.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class Organization:
    """Static header block and signatory for the receipt template."""
    name: str = "RAHIM ARCADE"
    address: List[str] = field(default_factory=lambda: [
        "SC-24, Block-H, North Nazimabad",
        "Karachi, Pakistan",
    ])
    contact: str = "0333-2232354"
    signatory: str = "Usman"


DEFAULT_ORGANIZATION = Organization()


def load_organization(path: Path) -> Organization:
    """
    Load the organization header from a JSON file.

    Format:
        {
          "name": "RAHIM ARCADE",
          "address": ["SC-24, Block-H, North Nazimabad", "Karachi, Pakistan"],
          "contact": "0333-2232354",
          "signatory": "Usman"
        }

    Missing keys keep their defaults; a missing file returns the defaults.
    """
    if not path.exists():
        return DEFAULT_ORGANIZATION
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    address = data.get("address", DEFAULT_ORGANIZATION.address)
    if isinstance(address, str):
        address = [address]

    return Organization(
        name=data.get("name", DEFAULT_ORGANIZATION.name),
        address=list(address),
        contact=data.get("contact", DEFAULT_ORGANIZATION.contact),
        signatory=data.get("signatory", DEFAULT_ORGANIZATION.signatory),
    )
