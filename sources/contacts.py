"""
Contacts file loader.

Reads a contacts CSV (one person per row: name, then any number of fields,
some of them email addresses) and builds the address directory.
"""

import csv
import logging
import os
from typing import Dict, List, Optional

from core.contacts import build_directory

logger = logging.getLogger(__name__)


def read_contact_rows(path: str, encoding: str = "utf-16") -> List[List[str]]:
    """
    Read contact rows with surrounding whitespace trimmed from each field.

    Args:
        path: Path to the CSV file
        encoding: File encoding (address book exports are usually UTF-16)

    Returns:
        List of rows, each a list of fields
    """
    with open(path, "r", encoding=encoding, newline="") as f:
        return [[field.strip() for field in row] for row in csv.reader(f)]


def load_directory(path: Optional[str], encoding: str = "utf-16") -> Dict[str, str]:
    """
    Load the address -> name directory.

    A missing path or file yields an empty directory; authors are then
    reported by address.
    """
    if not path:
        logger.warning("No contacts filename given - working without it...")
        return {}

    path = os.path.expanduser(path)
    if not os.path.isfile(path):
        logger.warning(f"Contacts file not found: {path} - working without it...")
        return {}

    rows = read_contact_rows(path, encoding=encoding)
    directory = build_directory(rows)
    logger.info(f"Loaded {len(directory)} contact addresses from {path}")
    return directory
