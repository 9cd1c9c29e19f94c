"""
Contains generic input validation utilities used across compositelab modules.

These functions are stateless and reusable, designed to enforce type, value, and structural constraints
without introducing domain-specific logic.
"""

import os
from pathlib import Path


def validate_path(path: str | Path, suffix: str = "") -> Path:
    """
    Resolve ``path`` and check that it exists and can be read.

    Parameters
    ----------
    path : str or Path
        Directory, or file when ``suffix`` is given.
    suffix : str, optional
        Required file suffix (e.g., ".json"). When empty, ``path`` must be a directory.

    Returns
    -------
    Path
        Absolute, resolved path.
    """
    # check type of path
    if not isinstance(path, (str, Path)):
        raise TypeError(f"Expected a string path, got {type(path).__name__}: {path}")

    # get path object; resolves symlinks to normalize path and anchor to root
    path = Path(path).resolve()

    if suffix:
        if not path.is_file():
            raise FileNotFoundError(f"Path is not a file: {path}")
        if path.suffix != suffix:
            raise ValueError(f"Suffix {suffix} does not match file suffix: {path.suffix}")
    elif not path.is_dir():
        raise ValueError(f"Path is not a directory: {path}")

    # check that path can be accessed and read
    if not os.access(path, os.R_OK):
        raise PermissionError(f"Cannot read files in path: {path}")

    return path


def validate_location(location: object) -> str:
    """Check that a manifest file location is a non-empty relative path string."""
    if not isinstance(location, str):
        raise TypeError(f"Expected a string location, got {type(location).__name__}: {location!r}")

    location = location.strip()
    if not location:
        raise ValueError("Location must not be empty")
    if location.startswith("/") or "://" in location:
        raise ValueError(f"Location must be relative to the catalog base: {location!r}")
    return location


def validate_identifier(identifier: object) -> str:
    """Check that a material identifier is a non-empty string."""
    if not isinstance(identifier, str) or not identifier.strip():
        raise ValueError(f"Material identifier must be a non-empty string, got {identifier!r}")
    return identifier.strip()
