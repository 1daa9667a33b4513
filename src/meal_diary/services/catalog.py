"""Lookup over the built-in recipe table."""

from collections.abc import Sequence
from dataclasses import dataclass

from meal_diary.domain.recipes import DEFAULT_RECIPES, RecipeRecord


@dataclass(frozen=True)
class RecipeCatalog:
    """Static catalog supporting autocomplete search and exact matching."""

    records: Sequence[RecipeRecord] = DEFAULT_RECIPES

    def search(self, query: str) -> list[RecipeRecord]:
        """Return records whose name or keywords contain the query."""
        if not query:
            return []
        lowered = query.lower()
        return [
            record
            for record in self.records
            if query in record.name
            or any(lowered in keyword for keyword in record.keywords)
        ]

    def exact_match(self, query: str) -> RecipeRecord | None:
        """Return the record named exactly as typed, else one with that keyword."""
        if not query:
            return None
        for record in self.records:
            if record.name == query:
                return record
        lowered = query.lower()
        for record in self.records:
            if lowered in record.keywords:
                return record
        return None
