"""
Pydantic models for validating structured JSON responses from Claude AI.

Each schema corresponds to one AI method's expected response format.
Used by _call_with_schema_retry() in ai_service.py for validation + retry.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from labelwise.models.analysis import HealthCategory


# --- Unknown ingredient classification (query_unknown_ingredients) ---


class UnknownIngredientsSchema(RootModel[dict[str, dict[str, Any]]]):
    """
    Top-level shape only: ingredient name -> verdict object.

    Individual verdicts are validated one at a time with
    IngredientVerdictSchema so a single bad entry does not reject the batch.
    """


class IngredientVerdictSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    health_category: HealthCategory = Field(alias="healthCategory")
    description: str = Field(min_length=1)
    alternatives: list[str] = []

    @field_validator("health_category", mode="before")
    @classmethod
    def _map_label(cls, value):
        if isinstance(value, HealthCategory):
            if value == HealthCategory.UNKNOWN:
                raise ValueError("healthCategory must be one of GREEN, YELLOW, RED")
            return value
        if not isinstance(value, str):
            raise ValueError("healthCategory must be a string")
        return HealthCategory.from_label(value)

    @field_validator("alternatives", mode="before")
    @classmethod
    def _drop_blank_alternatives(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [str(v).strip() for v in value if v is not None and str(v).strip()]
        return value
