"""
Pipeline value types for Labelwise.

Import all models here so callers have a single place to pull them from.
"""

from labelwise.models.analysis import (
    TIERS,
    AnalysisReport,
    AnalysisResult,
    HealthCategory,
    IngredientEntry,
    MisleadingProduct,
    MisleadingProductNote,
    OverallScore,
)

__all__ = [
    "TIERS",
    "AnalysisReport",
    "AnalysisResult",
    "HealthCategory",
    "IngredientEntry",
    "MisleadingProduct",
    "MisleadingProductNote",
    "OverallScore",
]
