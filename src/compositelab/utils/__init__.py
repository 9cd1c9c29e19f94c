"""Infrastructure helpers."""

from compositelab.utils.format import emphasize, format_long_description, format_number, format_value, resolve_display_value
from compositelab.utils.io import sorted_identifiers, to_json_bytes
from compositelab.utils.logging import get_logger
from compositelab.utils.validation import validate_identifier, validate_location, validate_path

__all__ = [
    "emphasize",
    "format_long_description",
    "format_number",
    "format_value",
    "get_logger",
    "resolve_display_value",
    "sorted_identifiers",
    "to_json_bytes",
    "validate_identifier",
    "validate_location",
    "validate_path",
]
