"""
Ingredient classification: lookup table first, knowledge source for the rest.

The knowledge source is consulted at most once per classify() call, with the
whole batch of names the table does not know. Whatever goes wrong with that
call, the affected ingredients come back as UNKNOWN and the rest of the
request carries on.
"""

import logging
from typing import Iterable, Optional, Protocol

from pydantic import ValidationError

from labelwise.models.analysis import AnalysisResult, HealthCategory
from labelwise.services.ai_schemas import IngredientVerdictSchema
from labelwise.services.allergy_service import apply_allergy_overrides
from labelwise.services.lookup_table import LOOKUP_TABLE, LookupTable, normalize_name

logger = logging.getLogger(__name__)

UNKNOWN_DESCRIPTION = "Unknown ingredient, could not be analyzed"


class KnowledgeSource(Protocol):
    async def query_unknown_ingredients(
        self, names: list[str], allergies: Iterable[str] = ()
    ) -> Optional[dict[str, dict]]: ...


def unknown_result(name: str) -> AnalysisResult:
    return AnalysisResult(
        ingredient=name,
        category=HealthCategory.UNKNOWN,
        description=UNKNOWN_DESCRIPTION,
        alternatives=[],
    )


class IngredientClassifier:
    """Classify candidate ingredients. Holds no per-request state."""

    def __init__(
        self,
        lookup_table: LookupTable = LOOKUP_TABLE,
        knowledge_source: Optional[KnowledgeSource] = None,
    ):
        self.lookup_table = lookup_table
        if knowledge_source is None:
            from labelwise.services.ai_service import ClaudeService

            knowledge_source = ClaudeService()
        self.knowledge_source = knowledge_source

    async def classify(
        self, ingredients: list[str], allergies: Iterable[str] = ()
    ) -> list[AnalysisResult]:
        """
        Classify ingredients and apply the user's allergy overrides.

        Args:
            ingredients: Candidate names from the tokenizer, in label order
            allergies: The user's allergy list (read-only)

        Returns:
            One AnalysisResult per distinct non-empty name, in input order
        """
        allergies = list(allergies)
        names = list(dict.fromkeys(n for n in map(normalize_name, ingredients) if n))

        resolved: dict[str, AnalysisResult] = {}
        unresolved: list[str] = []
        for name in names:
            hit = self.lookup_table.find(name)
            if hit is None:
                unresolved.append(name)
                continue
            category, entry = hit
            resolved[name] = AnalysisResult(
                ingredient=name,
                category=category,
                description=entry.description,
                alternatives=list(entry.alternatives),
            )

        if unresolved:
            resolved.update(await self._classify_unresolved(unresolved, allergies))

        results = [resolved[name] for name in names]
        return apply_allergy_overrides(results, allergies)

    async def _classify_unresolved(
        self, names: list[str], allergies: list[str]
    ) -> dict[str, AnalysisResult]:
        """Ask the knowledge source about the whole batch in one call."""
        try:
            response = await self.knowledge_source.query_unknown_ingredients(
                names, allergies
            )
        except Exception as e:
            logger.warning(
                "Knowledge source failed for %d ingredients: %s", len(names), e
            )
            response = None

        if not isinstance(response, dict) or not response:
            if response:
                logger.warning(
                    "Knowledge source returned %s, expected a mapping",
                    type(response).__name__,
                )
            return {name: unknown_result(name) for name in names}

        entries = {
            normalize_name(key): value
            for key, value in response.items()
            if isinstance(key, str)
        }

        results = {}
        for name in names:
            results[name] = self._result_from_entry(name, entries.get(name))
        return results

    def _result_from_entry(self, name: str, entry) -> AnalysisResult:
        if entry is None:
            logger.warning("Knowledge source returned no verdict for %r", name)
            return unknown_result(name)

        try:
            verdict = IngredientVerdictSchema.model_validate(entry)
        except ValidationError as e:
            logger.warning("Malformed verdict for %r: %s", name, e)
            return unknown_result(name)

        return AnalysisResult(
            ingredient=name,
            category=verdict.health_category,
            description=verdict.description,
            alternatives=verdict.alternatives,
        )
