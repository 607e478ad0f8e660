"""Read-only access to the curated ingredient reference data."""

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from labelwise.data.ingredients import (
    CAUTION_INGREDIENTS,
    HARMFUL_INGREDIENTS,
    MISLEADING_PRODUCTS,
    SAFE_INGREDIENTS,
    TIPS,
)
from labelwise.models.analysis import (
    TIERS,
    HealthCategory,
    IngredientEntry,
    MisleadingProduct,
)


def normalize_name(name: str) -> str:
    """Lowercase and trim an ingredient name for lookup."""
    return (name or "").strip().lower()


class LookupTable:
    """
    Immutable three-tier ingredient table.

    Built once and shared by every request. All mappings are exposed as
    MappingProxyType so nothing downstream can mutate them.
    """

    def __init__(
        self,
        tiers: Mapping[HealthCategory, Mapping[str, dict]],
        misleading_products: Optional[Mapping[str, dict]] = None,
        tips: Iterable[str] = (),
    ):
        built = {}
        for tier in TIERS:
            entries = {}
            for name, data in (tiers.get(tier) or {}).items():
                entries[normalize_name(name)] = IngredientEntry(
                    description=data["description"],
                    alternatives=tuple(data.get("alternatives", ())),
                )
            built[tier] = MappingProxyType(entries)
        self._tiers = MappingProxyType(built)

        self._misleading = MappingProxyType(
            {
                normalize_name(name): MisleadingProduct(
                    description=data["description"],
                    real_ingredients=data["real_ingredients"],
                )
                for name, data in (misleading_products or {}).items()
            }
        )
        self._tips = tuple(tips)

    @property
    def tiers(self) -> Mapping[HealthCategory, Mapping[str, IngredientEntry]]:
        return self._tiers

    @property
    def misleading_products(self) -> Mapping[str, MisleadingProduct]:
        return self._misleading

    @property
    def tips(self) -> tuple[str, ...]:
        return self._tips

    def find(self, name: str) -> Optional[tuple[HealthCategory, IngredientEntry]]:
        """
        Resolve an ingredient name against the tiers.

        Tiers are checked in fixed priority order (safe, caution, harmful) and
        the first hit wins, so a name listed in several tiers always resolves
        the same way.

        Returns:
            (category, entry) tuple, or None if no tier knows the name
        """
        key = normalize_name(name)
        if not key:
            return None
        for tier in TIERS:
            entry = self._tiers[tier].get(key)
            if entry is not None:
                return tier, entry
        return None

    def find_misleading_products(
        self, texts: Iterable[str]
    ) -> list[tuple[str, MisleadingProduct]]:
        """
        Find misleading product names mentioned in any of the given texts.

        A name matches when it appears as a whole phrase (word boundaries on
        both ends). Results follow the table's own order, each name once.
        """
        haystack = [normalize_name(t) for t in texts if t]
        found = []
        for name, product in self._misleading.items():
            pattern = re.compile(rf"\b{re.escape(name)}\b")
            if any(pattern.search(text) for text in haystack):
                found.append((name, product))
        return found


LOOKUP_TABLE = LookupTable(
    tiers={
        HealthCategory.SAFE: SAFE_INGREDIENTS,
        HealthCategory.CAUTION: CAUTION_INGREDIENTS,
        HealthCategory.HARMFUL: HARMFUL_INGREDIENTS,
    },
    misleading_products=MISLEADING_PRODUCTS,
    tips=TIPS,
)
