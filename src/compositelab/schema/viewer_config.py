"""Configuration container for the catalog viewer."""

import logging
from dataclasses import dataclass, field

from compositelab.schema.category import Category


@dataclass
class ViewerConfig:
    """
    Settings shared by the index resolver, record cache and page controller.

    Attributes
    ----------
    index_location : str
        Manifest location relative to the catalog base.
    detail_page : str
        Link target for listing cards; the identifier is appended as ``?id=``.
    location_rewrite : tuple[str, str] or None
        ``(old_prefix, new_prefix)`` applied to record locations before fetching,
        for pages served from a different depth than the manifest.
    add_new_categories : tuple[Category, ...]
        Listing containers that end with an "add new" affordance.
    site_title : str
        Suffix of detail page titles.
    verbose : bool
        If True, enables detailed logging output.
    logger : logging.Logger or None
        Custom logger shared by the components built from this config.
    """

    index_location: str = "materials/materials-index.json"
    detail_page: str = "pages/material-detail.html"
    location_rewrite: tuple[str, str] | None = None
    add_new_categories: tuple[Category, ...] = (Category.MATRIX,)
    site_title: str = "CompositeLab"
    verbose: bool = False
    logger: logging.Logger | None = field(default=None, repr=False)
