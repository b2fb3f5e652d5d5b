"""Sanity check that a reformatted file still parses as BibTeX."""

import logging
from pathlib import Path

import bibtexparser

from .exceptions import InvalidBibliographyError

logger = logging.getLogger(__name__)


def check_bibliography(bib_path: Path) -> list[str]:
    """Parse a .bib file with bibtexparser v2 and return its citekeys.

    Args:
        bib_path: Path to the .bib file

    Returns:
        Citekeys in file order

    Raises:
        FileNotFoundError: If bib file doesn't exist
        InvalidBibliographyError: If any block fails to parse
    """
    if not bib_path.exists():
        raise FileNotFoundError(f"Bibliography file not found: {bib_path}")

    logger.debug(f"Parsing .bib file for verification: {bib_path}")

    try:
        lib = bibtexparser.parse_file(str(bib_path))
    except Exception as e:  # pragma: no cover - parser raises many custom errors
        raise InvalidBibliographyError(f"Failed to parse {bib_path}: {e}") from e

    if lib.failed_blocks:
        failed = [str(block) for block in lib.failed_blocks]
        raise InvalidBibliographyError(
            f"Failed to parse {len(lib.failed_blocks)} blocks in {bib_path}: {failed}"
        )

    citekeys = [entry.key for entry in lib.entries]
    logger.debug(f"Found {len(citekeys)} entries in {bib_path.name}")
    return citekeys
