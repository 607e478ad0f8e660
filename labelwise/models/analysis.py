"""Value types produced by the label analysis pipeline. Nothing here is persisted."""

import enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthCategory(str, enum.Enum):
    """Health tier of a single ingredient."""
    SAFE = "safe"
    CAUTION = "caution"
    HARMFUL = "harmful"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, value: str) -> "HealthCategory":
        """
        Map a tier label from either vocabulary onto the enum.

        Accepts green/yellow/red (traffic-light labels used by the knowledge
        source) as well as safe/caution/harmful, case-insensitively.

        Raises:
            ValueError: If the label is not one of the three tiers
        """
        label = (value or "").strip().lower()
        category = _LABEL_ALIASES.get(label)
        if category is None:
            raise ValueError(f"Unrecognised health category: {value!r}")
        return category


_LABEL_ALIASES = {
    "green": HealthCategory.SAFE,
    "safe": HealthCategory.SAFE,
    "yellow": HealthCategory.CAUTION,
    "caution": HealthCategory.CAUTION,
    "red": HealthCategory.HARMFUL,
    "harmful": HealthCategory.HARMFUL,
}

# Lookup priority: first tier that knows the ingredient wins.
TIERS = (HealthCategory.SAFE, HealthCategory.CAUTION, HealthCategory.HARMFUL)


class IngredientEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    alternatives: tuple[str, ...] = ()


class MisleadingProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    real_ingredients: str


class AnalysisResult(BaseModel):
    """Verdict for one candidate ingredient."""

    ingredient: str
    category: HealthCategory
    description: str
    alternatives: list[str] = Field(default_factory=list)
    # Set once the allergy re-scorer has annotated this result
    allergen_escalated: bool = False


class OverallScore(BaseModel):
    score: HealthCategory
    reason: str


class MisleadingProductNote(BaseModel):
    name: str
    description: str
    real_ingredients: str


AnalysisStatus = Literal["ok", "no_ingredients", "all_unknown"]


class AnalysisReport(BaseModel):
    """
    Everything one label submission produces.

    status distinguishes a label where nothing could be extracted
    ("no_ingredients") from one where extraction worked but no ingredient
    could be classified ("all_unknown").
    """

    raw_text: str = ""
    ingredients: list[str] = Field(default_factory=list)
    results: list[AnalysisResult] = Field(default_factory=list)
    overall: OverallScore
    status: AnalysisStatus = "ok"
    misleading_products: list[MisleadingProductNote] = Field(default_factory=list)
