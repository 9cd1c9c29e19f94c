"""Host capabilities used by user actions: clipboard, file save and print."""

import logging
from pathlib import Path
from typing import Callable, Protocol

from compositelab.core.errors import CapabilityUnavailable
from compositelab.utils.io import write_bytes
from compositelab.utils.logging import get_logger


class Platform(Protocol):
    def copy_text(self, text: str) -> None: ...

    def save_file(self, filename: str, payload: bytes) -> None: ...

    def print_document(self, html: str) -> None: ...


class LocalPlatform:
    """
    Capabilities backed by a local export directory and injected callables.

    Each capability raises :class:`CapabilityUnavailable` when it is not
    configured or when the underlying primitive fails.

    Parameters
    ----------
    export_dir : str or Path, optional
        Directory receiving downloaded JSON documents.
    clipboard : Callable[[str], None], optional
        Function placing text on the clipboard.
    printer : Callable[[str], None], optional
        Function sending an HTML document to the print facility.
    logger : logging.Logger, optional
        Custom logger for diagnostics and traceability.
    """

    def __init__(
        self,
        export_dir: str | Path | None = None,
        clipboard: Callable[[str], None] | None = None,
        printer: Callable[[str], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.export_dir = export_dir
        self.clipboard = clipboard
        self.printer = printer
        self.logger = logger or get_logger(f"{__name__}.{self.__class__.__name__}")
        self.saved: list[Path] = []

    def copy_text(self, text: str) -> None:
        if self.clipboard is None:
            raise CapabilityUnavailable("clipboard", "no clipboard configured")
        try:
            self.clipboard(text)
        except (OSError, RuntimeError) as e:
            raise CapabilityUnavailable("clipboard", str(e)) from e

    def save_file(self, filename: str, payload: bytes) -> None:
        if self.export_dir is None:
            raise CapabilityUnavailable("file save", "no export directory configured")
        try:
            target = write_bytes(self.export_dir, filename, payload)
        except (OSError, ValueError) as e:
            raise CapabilityUnavailable("file save", str(e)) from e
        self.logger.info(f"Saved {target}")
        self.saved.append(target)

    def print_document(self, html: str) -> None:
        if self.printer is None:
            raise CapabilityUnavailable("print", "no printer configured")
        try:
            self.printer(html)
        except (OSError, RuntimeError) as e:
            raise CapabilityUnavailable("print", str(e)) from e
