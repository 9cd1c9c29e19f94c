"""Structured representations of catalog data, configuration and views."""

from compositelab.schema.catalog_manifest import CatalogManifest, ManifestEntry
from compositelab.schema.category import Category
from compositelab.schema.material_record import GeneratedCode, MaterialRecord, PropertyEntry, PropertyGroup
from compositelab.schema.viewer_config import ViewerConfig
from compositelab.schema.views import ActionResult, DetailState, DetailView, ListingView

__all__ = [
    "ActionResult",
    "CatalogManifest",
    "Category",
    "DetailState",
    "DetailView",
    "GeneratedCode",
    "ListingView",
    "ManifestEntry",
    "MaterialRecord",
    "PropertyEntry",
    "PropertyGroup",
    "ViewerConfig",
]
