"""API endpoints for food label analysis."""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, Field

from labelwise.models.analysis import AnalysisReport, MisleadingProductNote
from labelwise.services.ai_service import OcrError
from labelwise.services.analysis_service import AnalysisService, normalize_allergies
from labelwise.services.file_service import FileService
from labelwise.services.lookup_table import LOOKUP_TABLE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])

analysis_service = AnalysisService()
file_service = FileService()


class AnalyzeTextRequest(BaseModel):
    text: str = Field(max_length=20000)
    allergies: list[str] = []


class TipsResponse(BaseModel):
    tips: list[str]
    misleading_products: list[MisleadingProductNote]


@router.post("/text", response_model=AnalysisReport)
async def analyze_text(payload: AnalyzeTextRequest):
    """Analyze label text that has already been transcribed."""
    return await analysis_service.analyze_text(payload.text, payload.allergies)


@router.post("/image", response_model=AnalysisReport)
async def analyze_image(
    image: UploadFile = File(...),
    allergies: Optional[str] = Form(None),
):
    """
    Read a label photo and analyze it.

    allergies is a comma-separated list. The uploaded image is deleted once
    analysis finishes.
    """
    try:
        image_path = await file_service.save_label_image(image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await analysis_service.analyze_image(
            image_path, normalize_allergies(allergies)
        )
    except OcrError as e:
        logger.warning("Label text extraction failed: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    finally:
        file_service.delete_file(image_path)


@router.get("/tips", response_model=TipsResponse)
async def label_tips():
    """Label-reading tips and commonly misleading product names."""
    return TipsResponse(
        tips=list(LOOKUP_TABLE.tips),
        misleading_products=[
            MisleadingProductNote(
                name=name,
                description=product.description,
                real_ingredients=product.real_ingredients,
            )
            for name, product in LOOKUP_TABLE.misleading_products.items()
        ],
    )
