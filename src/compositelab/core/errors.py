"""Failure kinds recovered by the page controller."""


class CatalogError(Exception):
    """Base class for catalog loading and action failures."""


class IndexUnavailable(CatalogError):
    def __init__(self, location: str, reason: str = "") -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Catalog index '{location}' unavailable" + (f": {reason}" if reason else ""))


class RecordNotFound(CatalogError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Material '{identifier}' is not listed in the catalog index")


class RecordUnavailable(CatalogError):
    def __init__(self, identifier: str, reason: str = "") -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Material '{identifier}' could not be loaded" + (f": {reason}" if reason else ""))


class CapabilityUnavailable(CatalogError):
    """Clipboard, file-save or print is not supported or was denied."""

    def __init__(self, capability: str, reason: str = "") -> None:
        self.capability = capability
        self.reason = reason
        super().__init__(f"{capability} unavailable" + (f": {reason}" if reason else ""))
