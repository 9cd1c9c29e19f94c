"""Resolves the catalog index once per session and looks up record locations."""

import asyncio
import logging

from compositelab.core.errors import IndexUnavailable, RecordNotFound
from compositelab.core.fetchers import Fetcher
from compositelab.parsers.manifest_parser import find_record_location, parse_manifest, rewrite_location
from compositelab.schema.catalog_manifest import CatalogManifest
from compositelab.schema.viewer_config import ViewerConfig
from compositelab.utils.logging import get_logger


class IndexResolver:
    """
    Fetch and memoise the catalog manifest.

    Parameters
    ----------
    fetcher : Fetcher
        Source of catalog documents.
    config : ViewerConfig, optional
        Supplies the manifest location and the record location rewrite.
    logger : logging.Logger, optional
        Custom logger for diagnostics and traceability.
    """

    def __init__(self, fetcher: Fetcher, config: ViewerConfig | None = None, logger: logging.Logger | None = None) -> None:
        self.fetcher = fetcher
        self.config = config or ViewerConfig()
        self.logger = logger or self.config.logger or get_logger(
            f"{__name__}.{self.__class__.__name__}", verbose=self.config.verbose
        )
        self._manifest: CatalogManifest | None = None
        self._pending: asyncio.Task[CatalogManifest] | None = None

    @property
    def manifest(self) -> CatalogManifest | None:
        """CatalogManifest | None: Parsed manifest, once resolved."""
        return self._manifest

    async def resolve_index(self) -> CatalogManifest:
        """
        Return the catalog manifest, fetching it on first use.

        Concurrent first calls share one fetch. A failed attempt is not memoised.

        Raises
        ------
        IndexUnavailable
            If the manifest cannot be fetched or parsed.
        """
        if self._manifest is not None:
            return self._manifest

        task = self._pending
        if task is None:
            task = self._pending = asyncio.ensure_future(self._load())
        try:
            self._manifest = await asyncio.shield(task)
        finally:
            if self._pending is task and task.done():
                self._pending = None
        return self._manifest

    async def _load(self) -> CatalogManifest:
        location = self.config.index_location
        self.logger.info(f"Loading catalog index from '{location}'")
        try:
            document = await self.fetcher.fetch_json(location)
            manifest = parse_manifest(document)
        except (OSError, ValueError, TypeError) as e:
            self.logger.error(f"Error loading catalog index '{location}': {e}")
            raise IndexUnavailable(location, str(e)) from e

        self.logger.info(f"Catalog index loaded: {len(manifest)} materials in {list(manifest.categories)}")
        return manifest

    def record_location(self, manifest: CatalogManifest, identifier: str) -> str:
        """
        Location to fetch ``identifier`` from, after the configured prefix rewrite.

        Raises
        ------
        RecordNotFound
            If the identifier is not listed in the manifest.
        """
        location = find_record_location(manifest, identifier)
        if location is None:
            raise RecordNotFound(identifier)
        return self.fetch_location(location)

    def fetch_location(self, location: str) -> str:
        """Apply the configured prefix rewrite to a manifest location."""
        if not self.config.location_rewrite:
            return location
        old_prefix, new_prefix = self.config.location_rewrite
        return rewrite_location(location, old_prefix, new_prefix)

    async def locate(self, identifier: str) -> str:
        """Resolve the manifest and return the fetch location of ``identifier``."""
        manifest = await self.resolve_index()
        return self.record_location(manifest, identifier)
