"""Label analysis pipeline: text or image in, report out."""

import logging
from typing import Iterable, Optional

from labelwise.models.analysis import (
    AnalysisReport,
    HealthCategory,
    MisleadingProductNote,
)
from labelwise.services.classifier import IngredientClassifier
from labelwise.services.scoring import overall_score, rank_for_display
from labelwise.services.tokenizer import extract_ingredients

logger = logging.getLogger(__name__)


def normalize_allergies(values: Optional[Iterable[str]]) -> list[str]:
    """
    Clean a user-entered allergy list.

    Splits comma-separated entries, lowercases, trims, drops blanks and
    removes duplicates while keeping the user's order.
    """
    if not values:
        return []
    if isinstance(values, str):
        values = [values]

    cleaned = []
    for value in values:
        for part in (value or "").split(","):
            part = part.strip().lower()
            if part:
                cleaned.append(part)
    return list(dict.fromkeys(cleaned))


class AnalysisService:
    """
    Runs the full pipeline for one label submission.

    tokenizer -> classifier (lookup table, knowledge source, allergy
    overrides) -> scoring. Every call builds its own report; nothing is
    kept on the instance between requests.
    """

    def __init__(
        self,
        classifier: Optional[IngredientClassifier] = None,
        ocr=None,
    ):
        if classifier is None or ocr is None:
            from labelwise.services.ai_service import ClaudeService

            claude_service = ClaudeService()
            classifier = classifier or IngredientClassifier(
                knowledge_source=claude_service
            )
            ocr = ocr or claude_service
        self.classifier = classifier
        self.ocr = ocr

    async def analyze_text(
        self, text: str, allergies: Optional[Iterable[str]] = None
    ) -> AnalysisReport:
        """
        Analyze raw label text.

        Args:
            text: Raw label text (typically OCR output)
            allergies: The user's allergy list

        Returns:
            AnalysisReport with results ranked for display
        """
        allergies = normalize_allergies(allergies)
        ingredients = extract_ingredients(text or "")

        if not ingredients:
            logger.info("No ingredients extracted from %d chars of text", len(text or ""))
            return AnalysisReport(
                raw_text=text or "",
                overall=overall_score([], allergies),
                status="no_ingredients",
            )

        results = await self.classifier.classify(ingredients, allergies)
        overall = overall_score(results, allergies)

        if results and all(r.category == HealthCategory.UNKNOWN for r in results):
            status = "all_unknown"
        else:
            status = "ok"

        misleading = self.classifier.lookup_table.find_misleading_products(
            [text or "", *ingredients]
        )

        logger.info(
            "Analyzed %d ingredients: overall=%s status=%s",
            len(results),
            overall.score.value,
            status,
        )

        return AnalysisReport(
            raw_text=text or "",
            ingredients=ingredients,
            results=rank_for_display(results, allergies),
            overall=overall,
            status=status,
            misleading_products=[
                MisleadingProductNote(
                    name=name,
                    description=product.description,
                    real_ingredients=product.real_ingredients,
                )
                for name, product in misleading
            ],
        )

    async def analyze_image(
        self, image_path: str, allergies: Optional[Iterable[str]] = None
    ) -> AnalysisReport:
        """
        Read a label photo, then analyze its text.

        Raises:
            OcrError: The label text could not be extracted
        """
        text = await self.ocr.extract_label_text(image_path)
        return await self.analyze_text(text, allergies)
