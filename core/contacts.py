"""
Contact directory and author resolution.

Maps sender addresses to canonical contact names so that one person with
several addresses is reported once.
"""

import logging
import re
from typing import Dict, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)

# Loose address shape, no RFC validation.
ADDRESS_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def looks_like_address(value: Optional[str]) -> bool:
    """Check if a contact field has the shape of an email address."""
    return bool(value) and ADDRESS_PATTERN.match(value) is not None


def build_directory(rows: Iterable[Sequence[str]]) -> Dict[str, str]:
    """
    Build an address -> name mapping from contact rows.

    The first field of each row is the person's name; every field shaped
    like an address is registered under that name. When an address appears
    in several rows the last row wins.

    Args:
        rows: Contact rows, e.g. from a CSV export

    Returns:
        Dict mapping address to display name
    """
    directory: Dict[str, str] = {}
    for row in rows:
        if not row:
            continue
        fields = [f.strip() for f in row]
        name = fields[0]
        for value in fields:
            if looks_like_address(value):
                if value in directory and directory[value] != name:
                    logger.debug(f"Contact {value} moves from {directory[value]!r} to {name!r}")
                directory[value] = name
    logger.debug(f"Directory holds {len(directory)} addresses")
    return directory


def resolve_author(address: str, directory: Dict[str, str]) -> str:
    """Return the contact name for an address, or the address itself."""
    return directory.get(address, address)
