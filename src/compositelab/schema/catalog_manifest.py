"""Structured representation of the catalog index."""

from dataclasses import dataclass, field
from typing import Iterator

from compositelab.schema.category import Category


@dataclass(frozen=True)
class ManifestEntry:
    identifier: str
    location: str
    category: str


@dataclass(frozen=True)
class CatalogManifest:
    """
    Read-only index of material records grouped by category.

    Attributes
    ----------
    categories : dict[str, tuple[ManifestEntry, ...]]
        Manifest category key (e.g., "fibers") -> entries in manifest order.

    Notes
    -----
    - Identifiers are unique across all categories; the parser rejects duplicates.
    - Category order follows the source document.
    """

    categories: dict[str, tuple[ManifestEntry, ...]] = field(default_factory=dict)

    def entries(self) -> list[ManifestEntry]:
        """All entries, category by category, in manifest order."""
        return [entry for group in self.categories.values() for entry in group]

    def category_entries(self, category: str | Category) -> tuple[ManifestEntry, ...]:
        """Entries listed under one manifest category key."""
        key = category.manifest_key if isinstance(category, Category) else category
        return self.categories.get(key, ())

    def identifiers(self) -> list[str]:
        return [entry.identifier for entry in self.entries()]

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return sum(len(group) for group in self.categories.values())
