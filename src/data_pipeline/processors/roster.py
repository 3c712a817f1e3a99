"""Roster loading: four line-aligned text files into roster entries."""

from collections import Counter
from pathlib import Path
from typing import List

from config.config import MISSING_SECTION
from config.schemas import RosterEntry
from utils.errors import RosterMismatchError
from utils.io import read_lines
from utils.logging import get_logger

logger = get_logger(__name__)


def build_roster(
    rolls: List[str],
    names: List[str],
    urls: List[str],
    sections: List[str],
) -> List[RosterEntry]:
    """Zip the four roster lists into entries.

    Raises:
        RosterMismatchError: if the lists differ in length.
    """
    counts = {
        "rolls": len(rolls),
        "names": len(names),
        "urls": len(urls),
        "sections": len(sections),
    }
    if len(set(counts.values())) != 1:
        raise RosterMismatchError(counts)

    roster = [
        RosterEntry(roll=roll, name=name, url=url, section=section or MISSING_SECTION)
        for roll, name, url, section in zip(rolls, names, urls, sections)
    ]

    duplicates = [roll for roll, n in Counter(rolls).items() if n > 1]
    if duplicates:
        # Lookups by roll return the first match
        logger.warning(f"Duplicate roll numbers in roster: {', '.join(duplicates)}")

    return roster


def load_roster(
    rolls_path: str | Path,
    names_path: str | Path,
    urls_path: str | Path,
    sections_path: str | Path,
) -> List[RosterEntry]:
    """Read the roster files (blank lines ignored) and build entries."""
    return build_roster(
        read_lines(rolls_path),
        read_lines(names_path),
        read_lines(urls_path),
        read_lines(sections_path),
    )
