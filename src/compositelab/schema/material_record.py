"""
Structured representation of material datasheets.

Defines the immutable dataclasses produced by the record parser: single property
entries, ordered property groups, the generated ABAQUS code section and the
material record that ties them together. Used by the record cache, the renderer
and JSON export.
"""

from dataclasses import dataclass, field
from typing import Any

from compositelab.schema.category import Category
from compositelab.utils.format import resolve_display_value


@dataclass(frozen=True)
class PropertyEntry:
    """
    One measured property inside a property group.

    Attributes
    ----------
    key : str
        Source key of the property (e.g., "tensile_modulus").
    label : str
        Human-readable label (e.g., "Tensile Modulus").
    value : Any
        Raw value as read from JSON; displayed verbatim.
    unit : str
        Unit string (e.g., "GPa"); empty when the source has none.
    display_value : str or None
        Precomputed display string; empty strings count as absent.
    extra : dict[str, Any]
        Unrecognised keys of the source entry, kept for export.
    """

    key: str
    label: str
    value: Any = None
    unit: str = ""
    display_value: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def display(self) -> str:
        """str: Text shown in the value column."""
        return resolve_display_value(self.display_value, self.value, self.unit)


@dataclass(frozen=True)
class PropertyGroup:
    name: str
    entries: tuple[PropertyEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> PropertyEntry | None:
        """Entry with the given source key, if present."""
        return next((entry for entry in self.entries if entry.key == key), None)


@dataclass(frozen=True)
class GeneratedCode:
    """ABAQUS material definition embedded in a record for copy/export."""

    template: str
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MaterialRecord:
    """
    Container for one catalog entry describing a fiber or matrix material.

    Attributes
    ----------
    identifier : str
        Catalog identifier, unique across the manifest (e.g., "T300").
    name : str
        Display name.
    category_tag : str
        Category tag as written in the record (e.g., "Fiber").
    description : str or None
        Short free-text description.
    manufacturer : str or None
        Manufacturer name, if known.
    detailed_description : str or None
        Long-form description; paragraphs separated by blank lines, ``**bold**`` spans.
    property_groups : tuple[PropertyGroup, ...]
        Groups present in the source, each in source entry order.
    code : GeneratedCode or None
        Generated ABAQUS template section.
    references : tuple[str, ...] or None
        Ordered reference strings; ``None`` when the key is absent.
    notes : str or None
        Free-text notes.
    extra : dict[str, Any]
        Unrecognised top-level keys, kept so exports lose nothing.

    Notes
    -----
    - Records are never mutated after parsing; an edit only previews data.
    """

    identifier: str
    name: str
    category_tag: str
    description: str | None = None
    manufacturer: str | None = None
    detailed_description: str | None = None
    property_groups: tuple[PropertyGroup, ...] = ()
    code: GeneratedCode | None = None
    references: tuple[str, ...] | None = None
    notes: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def category(self) -> Category | None:
        """Category | None: Canonical category for the record's tag."""
        return Category.parse(self.category_tag)

    def group(self, name: str) -> PropertyGroup | None:
        """Property group by canonical name, if present in the record."""
        return next((group for group in self.property_groups if group.name == name), None)

    def has_references(self) -> bool:
        return bool(self.references)

    @property
    def code_template(self) -> str | None:
        """str | None: Generated code text, if the record carries one."""
        return self.code.template if self.code else None
