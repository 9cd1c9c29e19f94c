"""Session cache of material records with at-most-one fetch per identifier."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from compositelab.core.errors import CatalogError, RecordUnavailable
from compositelab.core.fetchers import Fetcher
from compositelab.parsers.record_parser import RecordParser
from compositelab.schema.category import Category
from compositelab.schema.material_record import MaterialRecord
from compositelab.utils.io import sorted_identifiers
from compositelab.utils.logging import get_logger


@dataclass
class PopulateReport:
    loaded: list[str] = field(default_factory=list)
    failures: dict[str, RecordUnavailable] = field(default_factory=dict)


class RecordCache:
    """
    Keyed store of fetched material records.

    Records are fetched lazily through ``get_or_fetch``; concurrent requests for
    the same identifier share one in-flight fetch, and a failed fetch leaves no
    entry behind. Reads (``get``, ``get_all``, ``get_by_category``) never fetch.

    Parameters
    ----------
    fetcher : Fetcher
        Source of material documents.
    parser : RecordParser, optional
        Parser for fetched documents.
    logger : logging.Logger, optional
        Custom logger for diagnostics and traceability.
    verbose : bool, optional
        If True, enables detailed logging output.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        parser: RecordParser | None = None,
        logger: logging.Logger | None = None,
        verbose: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.logger = logger or get_logger(f"{__name__}.{self.__class__.__name__}", verbose=verbose)
        self.parser = parser or RecordParser(logger=self.logger)
        self._records: dict[str, MaterialRecord] = {}
        self._pending: dict[str, asyncio.Future[MaterialRecord]] = {}

    async def get_or_fetch(self, identifier: str, location: str) -> MaterialRecord:
        """
        Return the cached record for ``identifier``, fetching it from ``location`` if needed.

        Raises
        ------
        RecordUnavailable
            If the fetch or parse fails; the cache keeps no entry for ``identifier``.
        """
        cached = self._records.get(identifier)
        if cached is not None:
            self.logger.debug(f"Cache hit for '{identifier}'")
            return cached

        task = self._pending.get(identifier)
        if task is None:
            task = asyncio.ensure_future(self._fetch(identifier, location))
            self._pending[identifier] = task
            task.add_done_callback(lambda done: self._forget(identifier, done))
        else:
            self.logger.debug(f"Joining in-flight fetch for '{identifier}'")

        # one cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(task)

    def _forget(self, identifier: str, task: "asyncio.Future[MaterialRecord]") -> None:
        if self._pending.get(identifier) is task:
            del self._pending[identifier]

    async def _fetch(self, identifier: str, location: str) -> MaterialRecord:
        self.logger.debug(f"Fetching '{identifier}' from '{location}'")
        try:
            document = await self.fetcher.fetch_json(location)
            record = self.parser.parse(document)
        except (OSError, ValueError, TypeError, RecursionError) as e:
            self.logger.error(f"Error loading material from {location}: {e}")
            raise RecordUnavailable(identifier, str(e)) from e

        if record.identifier != identifier:
            self.logger.error(f"File {location} describes '{record.identifier}', expected '{identifier}'")
            raise RecordUnavailable(identifier, f"file describes '{record.identifier}'")

        self._records[identifier] = record
        return record

    async def populate(self, entries: Iterable[tuple[str, str]]) -> PopulateReport:
        """
        Fetch many records concurrently and wait for every one of them.

        Parameters
        ----------
        entries : Iterable[tuple[str, str]]
            ``(identifier, location)`` pairs.

        Returns
        -------
        PopulateReport
            Identifiers now cached, in the given order, and per-identifier failures.
        """
        entries = list(entries)
        results = await asyncio.gather(
            *(self.get_or_fetch(identifier, location) for identifier, location in entries),
            return_exceptions=True,
        )

        report = PopulateReport()
        for (identifier, _), result in zip(entries, results):
            if isinstance(result, Exception) and not isinstance(result, RecordUnavailable):
                self.logger.error(f"Unexpected error loading '{identifier}': {result!r}")
                result = RecordUnavailable(identifier, str(result) or type(result).__name__)
            if isinstance(result, RecordUnavailable):
                self.logger.warning(f"Skipping '{identifier}': {result}")
                report.failures[identifier] = result
            elif isinstance(result, BaseException):
                raise result
            else:
                report.loaded.append(identifier)

        self.logger.info(f"Loaded {len(report.loaded)} materials ({len(report.failures)} failed)")
        return report

    def invalidate(self, identifier: str | None = None) -> None:
        """Drop one cached record, or every record when ``identifier`` is None."""
        if identifier is None:
            self._records.clear()
        else:
            self._records.pop(identifier, None)

    def get(self, identifier: str) -> MaterialRecord | None:
        """Get a cached record by identifier."""
        return self._records.get(identifier)

    def get_all(self) -> list[MaterialRecord]:
        """Get all cached records, in the order they arrived."""
        return list(self._records.values())

    def get_by_category(self, tag: str | Category) -> list[MaterialRecord]:
        """Get cached records whose category tag matches ``tag`` case-insensitively."""
        category = Category.parse(tag)
        if category is not None:
            return [record for record in self._records.values() if record.category is category]

        wanted = str(tag).strip().lower()
        return [record for record in self._records.values() if record.category_tag.strip().lower() == wanted]

    def snapshot(self) -> dict[str, MaterialRecord]:
        """Cached records keyed by identifier, in natural identifier order."""
        return {identifier: self._records[identifier] for identifier in sorted_identifiers(self._records)}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __iter__(self) -> Iterator[MaterialRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)
