"""String and data formatting."""

import json
import math
import re
from decimal import Decimal
from re import Match
from typing import Any

from markupsafe import Markup, escape

EMPHASIS_PATTERN = re.compile(r"\*\*(.*?)\*\*")
PARAGRAPH_SEPARATOR = "\n\n"

# decimal-point positions printed without an exponent, as JSON viewers show numbers
PLAIN_NOTATION_RANGE = (-5, 21)


def format_number(value: float) -> str:
    """
    Print a float the way the catalog's JSON numbers read in a browser.

    Uses the shortest round-tripping digits, in plain decimal notation for
    magnitudes in [1e-6, 1e21) and exponent notation (``1e-7``, ``1e+21``) outside.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    # position of the decimal point relative to the first digit
    point = exponent + len(digits)

    low, high = PLAIN_NOTATION_RANGE
    if len(digits) <= point <= high:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= high:
        text = f"{digits[:point]}.{digits[point:]}"
    elif low <= point <= 0:
        text = f"0.{'0' * -point}{digits}"
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        text = f"{mantissa}e{'+' if point - 1 >= 0 else '-'}{abs(point - 1)}"
    return sign + text


def format_value(value: Any) -> str:
    """
    Format a raw property value verbatim, the way it reads in the source JSON.

    Integral floats drop the trailing ``.0``, booleans print as ``true``/``false``
    and missing values print as an empty string. No rounding or unit conversion.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def resolve_display_value(display_value: str | None, value: Any, unit: str) -> str:
    """Return the precomputed display string if non-empty, otherwise ``"{value} {unit}"``."""
    if display_value:
        return display_value
    return f"{format_value(value)} {unit}"


def split_paragraphs(text: str) -> list[str]:
    """Split long-form text on blank-line boundaries, dropping empty paragraphs."""
    normalized = text.replace("\r\n", "\n")
    return [para.strip() for para in normalized.split(PARAGRAPH_SEPARATOR) if para.strip()]


def emphasize(text: str) -> Markup:
    """
    Escape ``text`` and turn ``**span**`` markers into ``<strong>`` elements.

    Parameters
    ----------
    text : str
        One paragraph of free text.

    Returns
    -------
    Markup
        Safe markup where the emphasis span is the only element produced.
    """

    def strong(match: Match[str]) -> str:
        """Wrap an already-escaped span."""
        return f"<strong>{match.group(1)}</strong>"

    # asterisks survive escaping, so the marker search runs on escaped text
    return Markup(EMPHASIS_PATTERN.sub(strong, str(escape(text))))


def format_long_description(text: str) -> list[Markup]:
    """Convert a long-form description into a list of safe paragraph bodies."""
    return [emphasize(para) for para in split_paragraphs(text)]
