"""Handles canonical names for categories and property groups."""

from compositelab.data.mapped import (
    card_groups,
    category_aliases,
    get_group_title,
    optional_groups,
    property_group_titles,
    required_groups,
    resolve_attr_key,
)

__all__ = [
    "card_groups",
    "category_aliases",
    "get_group_title",
    "optional_groups",
    "property_group_titles",
    "required_groups",
    "resolve_attr_key",
]
