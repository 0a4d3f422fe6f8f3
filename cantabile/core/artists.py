"""Artist string classification.

Raw artist tags are free-form text such as ``"Bach/Beethoven feat. John Doe"``.
They are split into tokens and each token is classified against the composer
registry, producing an :class:`ArtistSet` of composers and other performers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from .composers import Composer, lookup


SEPARATOR = ";"

# Alternate separators rewritten to SEPARATOR before splitting
_ALTERNATE_SEPARATOR_PATTERN = re.compile(r"/|feat\.")


@dataclass(frozen=True)
class ArtistSet:
    """Deduplicated composers and other performers of a track or album.

    Immutable once built; use :class:`ArtistSetBuilder` to accumulate names.
    """

    composers: frozenset[Composer] = frozenset()
    others: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "composers", frozenset(self.composers))
        object.__setattr__(self, "others", frozenset(self.others))

    def __bool__(self) -> bool:
        return bool(self.composers or self.others)

    def to_text(self) -> str:
        """Render as a deterministic, ``"; "``-joined string for storage.

        Composers come first by full name, then the other performers.
        """
        names = sorted(composer.full_name for composer in self.composers)
        names.extend(sorted(self.others))
        return f"{SEPARATOR} ".join(names)


@dataclass
class ArtistSetBuilder:
    """Mutable accumulator that produces an ArtistSet."""

    composers: set[Composer] = field(default_factory=set)
    others: set[str] = field(default_factory=set)

    def add_composer(self, composer: Composer) -> None:
        self.composers.add(composer)

    def add_other(self, name: str) -> None:
        """Add a performer that is not a registered composer."""
        self.others.add(name)

    def add_string(self, name: str) -> None:
        """Add a trimmed name, routing it to composers when it is registered."""
        composer = lookup(name)
        if composer is not None:
            self.add_composer(composer)
        else:
            self.add_other(name.strip())

    def build(self) -> ArtistSet:
        return ArtistSet(composers=frozenset(self.composers), others=frozenset(self.others))


def split_artists(raw: str) -> list[str]:
    """Split one raw artist string into trimmed, non-empty tokens.

    Examples:
        >>> split_artists("Bach/Beethoven feat. John Doe")
        ['Bach', 'Beethoven', 'John Doe']
        >>> split_artists(" ; ")
        []
    """
    normalized = _ALTERNATE_SEPARATOR_PATTERN.sub(SEPARATOR, raw)
    tokens = (token.strip() for token in normalized.split(SEPARATOR))
    return [token for token in tokens if token]


def classify(raw_strings: Iterable[str]) -> ArtistSet:
    """Classify every token of every raw string into a single ArtistSet."""
    builder = ArtistSetBuilder()
    for raw in raw_strings:
        for token in split_artists(raw):
            builder.add_string(token)
    return builder.build()
