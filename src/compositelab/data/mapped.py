"""Alias maps for determining canonical category and property-group names."""

import difflib

category_aliases = {
    "fiber": {"fiber", "fibers", "fibre", "fibres"},
    "matrix": {"matrix", "matrices", "resin", "resins"},
}

# rendering order of property groups; optional groups appear only when present
property_group_titles = {
    "mechanical": "Mechanical Properties",
    "thermal": "Thermal Properties",
    "cure_kinetics": "Cure Kinetics Parameters",
    "processing": "Processing Parameters",
    "rheological": "Rheological Properties",
}

required_groups = ("mechanical", "thermal", "cure_kinetics")
optional_groups = ("processing", "rheological")
card_groups = ("mechanical", "thermal", "rheological")


def get_group_title(name: str) -> str:
    """
    Retrieve the section heading for a property group.

    Parameters
    ----------
    name: str
        Canonical group name (e.g., "cure_kinetics").

    Returns
    -------
    str
        Heading shown above the group's property table.
    """
    try:
        return property_group_titles[name]
    except KeyError as e:
        raise KeyError(f"Key '{name}' does not exist in property_group_titles: {list(property_group_titles)}") from e


def resolve_attr_key(key: str, alias_map: dict[str, set[str]]) -> str:
    """
    Resolve a name to its canonical key using a case-insensitive alias lookup.

    Parameters
    ----------
    key : str
        The name to resolve.
    alias_map : dict[str, set[str]]
        Canonical key -> accepted aliases.

    Returns
    -------
    str
        The canonical key corresponding to the input value.

    Raises
    ------
    KeyError
        If no alias matches exactly; the message suggests the closest aliases.
    """
    # validate input
    try:
        value = key.strip().lower()
    except AttributeError as e:
        raise TypeError(f"Input value must be a string, got {type(key)}: {key!r}") from e

    match_to_key = {}
    for canonical_key, aliases in alias_map.items():
        if not isinstance(aliases, (list, tuple, set)):
            raise TypeError(f"Aliases for key '{canonical_key}' must be list/tuple/set, got {type(aliases)}")
        for alias in aliases:
            match_to_key[alias.lower()] = canonical_key.lower()

    if value in match_to_key:
        return match_to_key[value]

    suggestions = difflib.get_close_matches(value, sorted(match_to_key), n=3)
    hint = f" (did you mean: {', '.join(suggestions)}?)" if suggestions else ""
    raise KeyError(f"No alias matches '{value}'{hint}")
