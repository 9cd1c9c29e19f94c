"""Structured results handed back by the page controller."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from markupsafe import Markup


class DetailState(Enum):
    INIT = "init"
    RESOLVING_MANIFEST = "resolving_manifest"
    NO_IDENTIFIER = "no_identifier"
    RECORD_NOT_FOUND = "record_not_found"
    FETCH_FAILED = "fetch_failed"
    POPULATED = "populated"

    @property
    def is_terminal(self) -> bool:
        return not DETAIL_TRANSITIONS[self]

    def advance(self, target: "DetailState") -> "DetailState":
        """Return ``target`` if the detail page may move there from this state."""
        if target not in DETAIL_TRANSITIONS[self]:
            raise RuntimeError(f"Detail page cannot move from {self.name} to {target.name}")
        return target


DETAIL_TRANSITIONS: dict[DetailState, frozenset[DetailState]] = {
    DetailState.INIT: frozenset({DetailState.NO_IDENTIFIER, DetailState.RESOLVING_MANIFEST}),
    DetailState.RESOLVING_MANIFEST: frozenset(
        {DetailState.RECORD_NOT_FOUND, DetailState.FETCH_FAILED, DetailState.POPULATED}
    ),
    DetailState.NO_IDENTIFIER: frozenset(),
    DetailState.RECORD_NOT_FOUND: frozenset(),
    DetailState.FETCH_FAILED: frozenset(),
    DetailState.POPULATED: frozenset(),
}


@dataclass
class DetailView:
    state: DetailState
    title: str
    body: Markup
    identifier: str | None = None
    message: str = ""


@dataclass
class ListingView:
    """
    Rendered listing page.

    Attributes
    ----------
    containers : dict[str, Markup]
        Manifest category key (e.g., "fibers") -> concatenated cards.
    failures : dict[str, str]
        Identifier -> reason for records that could not be loaded.
    message : str
        Page-level message, set when the catalog itself is unavailable.
    """

    containers: dict[str, Markup] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)
    message: str = ""

    @property
    def ok(self) -> bool:
        return not self.message


@dataclass
class ActionResult:
    """
    Outcome of a user action (copy, export, print, edit preview, add new).

    Attributes
    ----------
    ok : bool
        Whether the action completed.
    message : str
        Text to show the user inline.
    feedback : str
        Short button feedback on success (e.g., "✓ Copied!").
    data : Any
        Action payload, such as the record previewed by "edit".
    """

    ok: bool
    message: str = ""
    feedback: str = ""
    data: Any = None
