"""Closed set of material categories shown by the catalog."""

from enum import Enum

from compositelab.data.mapped import category_aliases, resolve_attr_key


class Category(Enum):
    FIBER = "fiber"
    MATRIX = "matrix"

    @property
    def manifest_key(self) -> str:
        """str: Key grouping this category's entries in the catalog manifest."""
        return {Category.FIBER: "fibers", Category.MATRIX: "matrices"}[self]

    @property
    def label(self) -> str:
        """str: Tag used by material records (e.g., "Fiber")."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, tag: object) -> "Category | None":
        """Map a record tag or manifest key onto a category, ``None`` when unknown."""
        if isinstance(tag, Category):
            return tag
        if not isinstance(tag, str):
            return None
        try:
            return cls(resolve_attr_key(tag, category_aliases))
        except KeyError:
            return None
