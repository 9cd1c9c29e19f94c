"""Catalog loading, caching and page orchestration."""

from compositelab.core.errors import (
    CapabilityUnavailable,
    CatalogError,
    IndexUnavailable,
    RecordNotFound,
    RecordUnavailable,
)
from compositelab.core.fetchers import FileFetcher, HttpFetcher
from compositelab.core.index_resolver import IndexResolver
from compositelab.core.page_controller import PageController, identifier_from_query
from compositelab.core.platform import LocalPlatform
from compositelab.core.record_cache import PopulateReport, RecordCache

__all__ = [
    "CapabilityUnavailable",
    "CatalogError",
    "FileFetcher",
    "HttpFetcher",
    "IndexResolver",
    "IndexUnavailable",
    "LocalPlatform",
    "PageController",
    "PopulateReport",
    "RecordCache",
    "RecordNotFound",
    "RecordUnavailable",
    "identifier_from_query",
]
