"""Reduce per-ingredient verdicts to one product score."""

from typing import Iterable

from labelwise.models.analysis import AnalysisResult, HealthCategory, OverallScore
from labelwise.services.allergy_service import matches_allergen

CONCERNING_FRACTION = 0.4
SAFE_FRACTION = 0.7

# Display order: allergens first, then worst tier to best, unknown last
_DISPLAY_RANK = {
    HealthCategory.HARMFUL: 1,
    HealthCategory.CAUTION: 2,
    HealthCategory.SAFE: 3,
    HealthCategory.UNKNOWN: 4,
}


def overall_score(
    results: list[AnalysisResult], allergies: Iterable[str] = ()
) -> OverallScore:
    """
    Score a product from its ingredient verdicts.

    Rules, first match wins:
    1. No results -> safe
    2. A harmful result matching an allergy -> harmful
    3. Any harmful result -> harmful
    4. More than 40% caution or harmful -> caution
    5. More than 70% safe -> safe
    6. Otherwise -> caution

    Unknown results count toward the total only.
    """
    if not results:
        return OverallScore(score=HealthCategory.SAFE, reason="No ingredients to analyze")

    allergies = list(allergies)
    harmful = [r for r in results if r.category == HealthCategory.HARMFUL]

    if any(matches_allergen(r.ingredient, allergies) for r in harmful):
        return OverallScore(
            score=HealthCategory.HARMFUL,
            reason="Contains an ingredient you are allergic to.",
        )

    if harmful:
        return OverallScore(
            score=HealthCategory.HARMFUL,
            reason="Contains one or more harmful, toxic, or allergenic ingredients.",
        )

    total = len(results)
    caution = sum(1 for r in results if r.category == HealthCategory.CAUTION)
    safe = sum(1 for r in results if r.category == HealthCategory.SAFE)

    concerning = caution + len(harmful)
    if concerning / total > CONCERNING_FRACTION:
        return OverallScore(
            score=HealthCategory.CAUTION,
            reason=f"{concerning} out of {total} ingredients are concerning or harmful",
        )

    if safe / total > SAFE_FRACTION:
        return OverallScore(
            score=HealthCategory.SAFE,
            reason=f"{safe} out of {total} ingredients are generally safe and natural",
        )

    return OverallScore(
        score=HealthCategory.CAUTION, reason="Mixed ingredients with some concerns"
    )


def rank_for_display(
    results: list[AnalysisResult], allergies: Iterable[str] = ()
) -> list[AnalysisResult]:
    """Order results allergen, harmful, caution, safe, unknown; stable within a band."""
    allergies = list(allergies)

    def sort_key(result: AnalysisResult) -> int:
        if matches_allergen(result.ingredient, allergies):
            return 0
        return _DISPLAY_RANK[result.category]

    return sorted(results, key=sort_key)
