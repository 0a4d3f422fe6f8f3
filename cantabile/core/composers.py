"""Registry of well-known classical composers.

The table is fixed at import time. Lookups are exact, case-sensitive matches
against either the short or the full name of an entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# (short name, full name)
FAMOUS_COMPOSERS: tuple[tuple[str, str], ...] = (
    ("Bach", "Johann Sebastian Bach"),
    ("Beethoven", "Ludwig van Beethoven"),
    ("Bizet", "Georges Bizet"),
    ("Chopin", "Frédéric Chopin"),
    ("Dvořák", "Antonín Dvořák"),
    ("Grieg", "Edvard Grieg"),
    ("Mozart", "Wolfgang Amadeus Mozart"),
    ("Schubert", "Franz Schubert"),
    ("Schumann", "Robert Schumann"),
    ("Strauss I", "Johann Strauss I"),
    ("Strauss II", "Johann Strauss II"),
    ("R. Strauss", "Richard Strauss"),
    ("Tchaikovsky", "Pyotr Ilyich Tchaikovsky"),
)


@dataclass(frozen=True)
class Composer:
    """A known classical composer. Equal only when both names match."""

    short_name: str
    full_name: str


def lookup(candidate: str) -> Optional[Composer]:
    """Return the first registered composer named by ``candidate``.

    The candidate is trimmed, then compared with each entry's short and full
    name in registry order.

    Examples:
        >>> lookup("  Bach ")
        Composer(short_name='Bach', full_name='Johann Sebastian Bach')
        >>> lookup("bach") is None
        True
    """
    name = candidate.strip()
    for short_name, full_name in FAMOUS_COMPOSERS:
        if name == short_name.strip() or name == full_name.strip():
            return Composer(short_name=short_name, full_name=full_name)
    return None
