"""compositelab package."""

from compositelab._version import __version__
from compositelab.core import FileFetcher, HttpFetcher, IndexResolver, LocalPlatform, PageController, RecordCache
from compositelab.schema import Category, MaterialRecord, ViewerConfig
from compositelab.viz import RecordRenderer

__all__ = [
    "Category",
    "FileFetcher",
    "HttpFetcher",
    "IndexResolver",
    "LocalPlatform",
    "MaterialRecord",
    "PageController",
    "RecordCache",
    "RecordRenderer",
    "ViewerConfig",
    "__version__",
]
