"""
Asynchronous static-file sources for catalog documents.

Both fetchers resolve locations relative to a catalog base (a URL or a local
directory) and return decoded JSON. They raise ``FileNotFoundError`` or
``ValueError`` on failure; translating those into catalog errors is left to the
index resolver and record cache.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx

from compositelab.utils.io import parse_json_bytes
from compositelab.utils.logging import get_logger
from compositelab.utils.validation import validate_path


class Fetcher(Protocol):
    async def fetch_json(self, location: str) -> Any: ...


class HttpFetcher:
    """
    Fetch catalog files over HTTP(S) with a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    base_url : str
        URL the manifest and record locations are relative to.
    client : httpx.AsyncClient, optional
        Client to reuse; one is created (and owned) when omitted.
    logger : logging.Logger, optional
        Custom logger for diagnostics and traceability.
    verbose : bool, optional
        If True, enables detailed logging output.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
        verbose: bool = False,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=self.base_url, follow_redirects=True)
        self.logger = logger or get_logger(f"{__name__}.{self.__class__.__name__}", verbose=verbose)

    def url_for(self, location: str) -> str:
        return str(httpx.URL(self.base_url).join(location))

    async def fetch_json(self, location: str) -> Any:
        url = self.url_for(location)
        self.logger.debug(f"GET {url}")
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            raise FileNotFoundError(f"Request for '{url}' failed: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise FileNotFoundError(f"No file at '{url}'")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FileNotFoundError(f"Request for '{url}' failed with status {response.status_code}") from e

        return parse_json_bytes(response.content)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class FileFetcher:
    """Fetch catalog files from a local directory (e.g., a checked-out static site)."""

    def __init__(self, root: str | Path, logger: logging.Logger | None = None, verbose: bool = False) -> None:
        self.root = validate_path(root)
        self.logger = logger or get_logger(f"{__name__}.{self.__class__.__name__}", verbose=verbose)

    def path_for(self, location: str) -> Path:
        return (self.root / location).resolve()

    async def fetch_json(self, location: str) -> Any:
        path = self.path_for(location)
        self.logger.debug(f"Reading {path}")
        if not path.is_file():
            raise FileNotFoundError(f"No file at '{path}'")
        payload = await asyncio.to_thread(path.read_bytes)
        return parse_json_bytes(payload)
