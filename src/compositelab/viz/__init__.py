"""HTML rendering of material records."""

from compositelab.viz.renderer import PropertySection, RecordRenderer

__all__ = ["PropertySection", "RecordRenderer"]
