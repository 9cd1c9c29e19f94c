"""Parses the catalog index document into a CatalogManifest."""

from typing import Any

from compositelab.schema.catalog_manifest import CatalogManifest, ManifestEntry
from compositelab.utils.validation import validate_identifier, validate_location

MANIFEST_ROOT_KEY = "materials"


def parse_manifest(document: Any) -> CatalogManifest:
    """
    Build a manifest from the decoded index document.

    Parameters
    ----------
    document : Any
        Decoded JSON. Categories live under a top-level ``materials`` key, or at
        the top level when that key is absent. Each category is a list of
        ``{"id": ..., "file": ...}`` objects.

    Returns
    -------
    CatalogManifest
        Entries grouped by category, in document order.

    Raises
    ------
    ValueError
        If the structure is malformed or an identifier appears twice.
    """
    if not isinstance(document, dict):
        raise ValueError(f"Manifest must be a JSON object, got {type(document).__name__}")

    grouping = document.get(MANIFEST_ROOT_KEY, document)
    if not isinstance(grouping, dict):
        raise ValueError(f"Manifest '{MANIFEST_ROOT_KEY}' must map categories to lists")

    categories: dict[str, tuple[ManifestEntry, ...]] = {}
    seen: dict[str, str] = {}

    for category, items in grouping.items():
        if not isinstance(items, list):
            raise ValueError(f"Manifest category '{category}' must be a list, got {type(items).__name__}")

        entries = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValueError(f"Manifest entry {category}[{position}] must be an object")
            try:
                identifier = validate_identifier(item.get("id"))
                location = validate_location(item.get("file"))
            except (TypeError, ValueError) as e:
                raise ValueError(f"Manifest entry {category}[{position}] is invalid: {e}") from e

            if identifier in seen:
                raise ValueError(
                    f"Duplicate material identifier '{identifier}' in '{category}' (already listed in '{seen[identifier]}')"
                )
            seen[identifier] = category
            entries.append(ManifestEntry(identifier=identifier, location=location, category=category))

        categories[category] = tuple(entries)

    return CatalogManifest(categories=categories)


def find_record_location(manifest: CatalogManifest, identifier: str) -> str | None:
    """Return the file location of ``identifier``; first match in manifest order wins."""
    for entry in manifest:
        if entry.identifier == identifier:
            return entry.location
    return None


def rewrite_location(location: str, old_prefix: str, new_prefix: str) -> str:
    """Replace a leading ``old_prefix`` of ``location``; other locations pass through unchanged."""
    if old_prefix and location.startswith(old_prefix):
        return new_prefix + location[len(old_prefix):]
    return location
