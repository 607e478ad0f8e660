"""
Allergy re-scoring for classified ingredients.

Any result whose ingredient name matches one of the user's allergies is
escalated to HARMFUL, with the original verdict kept in the description.
Re-scoring is idempotent: each result carries an allergen_escalated flag
and is annotated at most once.
"""

import re
from functools import lru_cache
from typing import Iterable

from labelwise.models.analysis import AnalysisResult, HealthCategory

ESCALATED_TEMPLATE = (
    "Marked as harmful because it's in your allergy profile "
    "(original classification: {category}). Original description: {description}"
)
ALSO_ALLERGEN_TEMPLATE = (
    "This ingredient is classified as harmful and is also listed in your "
    "allergy profile. Original description: {description}"
)


@lru_cache(maxsize=256)
def _allergen_pattern(allergy: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(allergy)}\b")


def matches_allergen(ingredient: str, allergies: Iterable[str]) -> bool:
    """
    Return True if the ingredient name matches any allergy.

    A match is case-insensitive equality, or the allergy appearing as a
    whole word in the name: "milk" matches "nonfat milk solids" but not
    "buttermilk".
    """
    name = (ingredient or "").strip().lower()
    if not name:
        return False

    for allergy in allergies:
        allergy = (allergy or "").strip().lower()
        if not allergy:
            continue
        if name == allergy or _allergen_pattern(allergy).search(name):
            return True
    return False


def escalate(result: AnalysisResult) -> AnalysisResult:
    """Return a copy of the result annotated as an allergen."""
    if result.allergen_escalated:
        return result

    if result.category == HealthCategory.HARMFUL:
        description = ALSO_ALLERGEN_TEMPLATE.format(description=result.description)
        category = result.category
    else:
        description = ESCALATED_TEMPLATE.format(
            category=result.category.value, description=result.description
        )
        category = HealthCategory.HARMFUL

    return result.model_copy(
        update={
            "category": category,
            "description": description,
            "allergen_escalated": True,
        }
    )


def apply_allergy_overrides(
    results: list[AnalysisResult], allergies: Iterable[str]
) -> list[AnalysisResult]:
    """
    Escalate every result that matches a user allergy.

    Inputs are not mutated; unmatched results are returned as-is.

    Args:
        results: Classified ingredients, in display order
        allergies: The user's allergy list (read-only)

    Returns:
        New list, same order and length as results
    """
    allergies = [a for a in allergies if a and a.strip()]
    if not allergies:
        return list(results)

    return [
        escalate(result) if matches_allergen(result.ingredient, allergies) else result
        for result in results
    ]
