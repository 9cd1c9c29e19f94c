"""
Orchestration layer for the catalog's listing and detail pages.

This module wires the index resolver, record cache and renderer together and is
the single place where catalog errors turn into user-visible messages. User
actions (copy, export, print, edit preview, add new) read cached data only.
"""

import logging
from collections.abc import Mapping
from urllib.parse import parse_qs, urlsplit

from markupsafe import Markup

from compositelab.core.errors import CapabilityUnavailable, IndexUnavailable, RecordNotFound, RecordUnavailable
from compositelab.core.fetchers import Fetcher
from compositelab.core.index_resolver import IndexResolver
from compositelab.core.platform import LocalPlatform, Platform
from compositelab.core.record_cache import RecordCache
from compositelab.parsers.record_parser import record_to_dict
from compositelab.schema.category import Category
from compositelab.schema.material_record import MaterialRecord
from compositelab.schema.viewer_config import ViewerConfig
from compositelab.schema.views import ActionResult, DetailState, DetailView, ListingView
from compositelab.utils.io import to_json_bytes
from compositelab.utils.logging import get_logger
from compositelab.viz.renderer import RecordRenderer

QUERY_PARAMETER = "id"
EXPORT_ALL_FILENAME = "all_materials.json"

CATALOG_UNAVAILABLE_MESSAGE = "The material catalog could not be loaded."
MISSING_RECORD_MESSAGE = "Material not found!"


def identifier_from_query(query: str | Mapping[str, object] | None) -> str | None:
    """
    Read the material identifier carried by the page address.

    Parameters
    ----------
    query : str, Mapping, or None
        A full URL, a query string (with or without ``?``), or already-parsed parameters.

    Returns
    -------
    str or None
        The stripped ``id`` parameter, or None when it is missing or blank.
    """
    if query is None:
        return None

    if isinstance(query, Mapping):
        value = query.get(QUERY_PARAMETER)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
    else:
        query_string = urlsplit(query).query if ("?" in query or "://" in query) else query
        value = parse_qs(query_string).get(QUERY_PARAMETER, [None])[0]

    if value is None:
        return None
    value = str(value).strip()
    return value or None


class PageController:
    """
    Drive the listing and detail pages for one browsing session.

    Parameters
    ----------
    fetcher : Fetcher
        Source of the manifest and material documents.
    config : ViewerConfig, optional
        Viewer settings; defaults match the static site layout.
    platform : Platform, optional
        Clipboard, file-save and print capabilities.
    renderer : RecordRenderer, optional
        Record-to-HTML renderer.
    logger : logging.Logger, optional
        Custom logger for diagnostics and traceability.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        config: ViewerConfig | None = None,
        platform: Platform | None = None,
        renderer: RecordRenderer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.logger = logger or self.config.logger or get_logger(
            f"{__name__}.{self.__class__.__name__}", verbose=self.config.verbose
        )
        self.resolver = IndexResolver(fetcher, self.config, logger=self.logger)
        self.cache = RecordCache(fetcher, logger=self.logger)
        self.renderer = renderer or RecordRenderer(self.config)
        self.platform = platform or LocalPlatform(logger=self.logger)

        self.detail_state = DetailState.INIT
        self.current_record: MaterialRecord | None = None
        self.current_view: DetailView | None = None

    async def show_listing(self) -> ListingView:
        """
        Load every catalog material and render one card per record.

        Cards are grouped by each record's category tag and keep manifest order,
        whatever order the fetches finish in.

        Returns
        -------
        ListingView
            Container markup keyed by manifest category, plus per-record failures.
        """
        try:
            manifest = await self.resolver.resolve_index()
        except IndexUnavailable as e:
            self.logger.error(f"Listing unavailable: {e}")
            return ListingView(
                containers={category.manifest_key: Markup("") for category in Category},
                message=CATALOG_UNAVAILABLE_MESSAGE,
            )

        report = await self.cache.populate(
            (entry.identifier, self.resolver.fetch_location(entry.location)) for entry in manifest
        )

        cards: dict[str, list[Markup]] = {key: [] for key in manifest.categories}
        for category in Category:
            cards.setdefault(category.manifest_key, [])

        for entry in manifest:
            record = self.cache.get(entry.identifier)
            if record is None:
                continue
            category = record.category
            if category is None:
                self.logger.warning(f"'{record.identifier}' has unknown category tag '{record.category_tag}'")
                continue
            cards[category.manifest_key].append(self.renderer.render_card(record))

        for category in self.config.add_new_categories:
            cards[category.manifest_key].append(self.renderer.render_add_new(category))

        return ListingView(
            containers={key: Markup("").join(fragments) for key, fragments in cards.items()},
            failures={identifier: error.reason or str(error) for identifier, error in report.failures.items()},
        )

    async def show_detail(self, query: str | Mapping[str, object] | None = None) -> DetailView:
        """
        Render the datasheet named by the page's ``id`` parameter.

        Parameters
        ----------
        query : str, Mapping, or None
            Page address or its query parameters.

        Returns
        -------
        DetailView
            Populated view, or a placeholder for a missing identifier, an
            identifier absent from the catalog, or a failed fetch.
        """
        self.detail_state = DetailState.INIT
        self.current_record = None
        self.current_view = None

        identifier = identifier_from_query(query)
        if identifier is None:
            return self._placeholder(
                DetailState.NO_IDENTIFIER, None, "No Material Specified", "Please select a material from the homepage."
            )

        self.detail_state = self.detail_state.advance(DetailState.RESOLVING_MANIFEST)
        try:
            location = await self.resolver.locate(identifier)
            record = await self.cache.get_or_fetch(identifier, location)
        except RecordNotFound as e:
            self.logger.warning(str(e))
            return self._placeholder(
                DetailState.RECORD_NOT_FOUND,
                identifier,
                "Material Not Found",
                "The requested material is not listed in the catalog.",
            )
        except (IndexUnavailable, RecordUnavailable) as e:
            self.logger.error(f"Error loading material: {e}")
            return self._placeholder(
                DetailState.FETCH_FAILED,
                identifier,
                "Material Unavailable",
                "The requested material could not be loaded.",
            )

        self.detail_state = self.detail_state.advance(DetailState.POPULATED)
        self.current_record = record
        self.current_view = DetailView(
            state=self.detail_state,
            title=self.renderer.page_title(record),
            body=self.renderer.render_detail(record),
            identifier=identifier,
        )
        return self.current_view

    def _placeholder(self, state: DetailState, identifier: str | None, title: str, message: str) -> DetailView:
        self.detail_state = self.detail_state.advance(state)
        self.current_view = DetailView(
            state=state,
            title=f"{title} - {self.config.site_title}",
            body=self.renderer.render_placeholder(title, message, state=state.value),
            identifier=identifier,
            message=message,
        )
        return self.current_view

    def _lookup(self, identifier: str | None) -> MaterialRecord | None:
        """Cached record for ``identifier``, or the record shown on the detail page."""
        if identifier is None:
            return self.current_record
        return self.cache.get(identifier)

    def copy_code(self, identifier: str | None = None) -> ActionResult:
        """Copy a material's ABAQUS template to the clipboard."""
        record = self._lookup(identifier)
        if record is None:
            return ActionResult(ok=False, message=MISSING_RECORD_MESSAGE)
        if record.code_template is None:
            return ActionResult(ok=False, message=f"{record.name} has no ABAQUS template to copy.")

        try:
            self.platform.copy_text(record.code_template)
        except CapabilityUnavailable as e:
            self.logger.error(f"Failed to copy: {e}")
            return ActionResult(
                ok=False, message="Failed to copy to clipboard. Please try selecting and copying manually."
            )
        return ActionResult(ok=True, feedback="✓ Copied!")

    def export_record(self, identifier: str | None = None) -> ActionResult:
        """Download one cached material as ``<id>.json``."""
        record = self._lookup(identifier)
        if record is None:
            return ActionResult(ok=False, message=MISSING_RECORD_MESSAGE)
        return self._save(f"{record.identifier}.json", to_json_bytes(record_to_dict(record)))

    def export_all(self) -> ActionResult:
        """Download every cached material as one document keyed by identifier."""
        payload = {identifier: record_to_dict(record) for identifier, record in self.cache.snapshot().items()}
        return self._save(EXPORT_ALL_FILENAME, to_json_bytes(payload))

    def _save(self, filename: str, payload: bytes) -> ActionResult:
        try:
            self.platform.save_file(filename, payload)
        except CapabilityUnavailable as e:
            self.logger.error(f"Failed to export {filename}: {e}")
            return ActionResult(ok=False, message=f"Could not save {filename}: {e.reason or e}")
        return ActionResult(ok=True, feedback="✓ Exported!", data=filename)

    def print_datasheet(self) -> ActionResult:
        """Send the datasheet currently shown on the detail page to the print facility."""
        if self.current_view is None or self.detail_state is not DetailState.POPULATED:
            return ActionResult(ok=False, message="There is no datasheet to print.")
        try:
            self.platform.print_document(str(self.current_view.body))
        except CapabilityUnavailable as e:
            self.logger.error(f"Failed to print: {e}")
            return ActionResult(ok=False, message="Printing is not available.")
        return ActionResult(ok=True)

    def preview_record(self, identifier: str | None = None) -> ActionResult:
        """Show the data behind the "Edit" button; records are never changed."""
        record = self._lookup(identifier)
        if record is None:
            return ActionResult(ok=False, message=MISSING_RECORD_MESSAGE)
        self.logger.info(f"Material data for '{record.identifier}' requested for editing")
        return ActionResult(
            ok=True,
            message=(
                f"Edit material: {record.name}\n\nA dedicated editor is not available yet. "
                "Edit the material's JSON file in the materials/ folder."
            ),
            data=record_to_dict(record),
        )

    def add_new_material(self, category: str | Category, name: str | None) -> ActionResult:
        """Acknowledge the "Add New" card; material creation is not supported."""
        parsed = Category.parse(category)
        if parsed is None:
            return ActionResult(ok=False, message=f"Unknown material category: {category}")
        if not name or not name.strip():
            return ActionResult(ok=False, message="No material name given.")
        self.logger.info(f"Would create {parsed.value} material: {name.strip()}")
        return ActionResult(
            ok=True,
            message=f"Creating new {parsed.value} material: {name.strip()}\n\nFull material creation interface coming soon!",
        )
