"""
Claude AI integration for label reading and unknown-ingredient classification.

This service provides the two external collaborators of the analysis pipeline:
1. Label text extraction from a photo (OCR via a vision model)
2. Batched classification of ingredients missing from the lookup table

The Anthropic client is synchronous; every call is pushed onto a worker
thread so concurrent requests do not block the event loop.
"""

import asyncio
import base64
import json
import logging
import random
import re
from functools import wraps
from pathlib import Path
from typing import Iterable

import anthropic
import httpx
from anthropic import Anthropic
from pydantic import BaseModel, TypeAdapter, ValidationError

from labelwise.config import settings
from labelwise.services.ai_schemas import UnknownIngredientsSchema
from labelwise.services.prompts import (
    LABEL_OCR_SYSTEM_PROMPT,
    LABEL_OCR_USER_PROMPT,
    UNKNOWN_INGREDIENTS_SYSTEM_PROMPT,
    build_unknown_ingredients_message,
)


logger = logging.getLogger(__name__)


def _strip_markdown_json(text: str) -> str:
    """Strip markdown code block wrappers from JSON text."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    return text


def _fix_trailing_commas(text: str) -> str:
    """Fix trailing commas in JSON (common LLM error)."""
    text = re.sub(r",\s*}", "}", text)
    text = re.sub(r",\s*]", "]", text)
    return text


def retry_on_connection_error(max_attempts=3, base_delay=1.0):
    """
    Retry decorator for API calls that may fail due to transient network issues.

    Args:
        max_attempts: Maximum retry attempts (default 3)
        base_delay: Base delay in seconds for exponential backoff (default 1.0)
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except anthropic.APIConnectionError as e:
                    last_exception = e

                    if attempt < max_attempts - 1:
                        # Exponential backoff with ±10% jitter
                        delay = base_delay * (2**attempt)
                        jitter = delay * 0.1 * (2 * random.random() - 1)
                        sleep_time = delay + jitter

                        logger.warning(
                            "Connection error on attempt %d/%d, retrying in %.1fs...",
                            attempt + 1,
                            max_attempts,
                            sleep_time,
                        )
                        await asyncio.sleep(sleep_time)
                    else:
                        logger.error("All %d attempts failed", max_attempts)

            raise ServiceUnavailableError(
                "AI service temporarily unavailable after retries"
            ) from last_exception

        return wrapper

    return decorator


class ClaudeService:
    """Claude API integration for the label analysis pipeline."""

    def __init__(self):
        timeout = httpx.Timeout(
            timeout=settings.anthropic_timeout,
            connect=settings.anthropic_connect_timeout,
        )
        self.client = Anthropic(api_key=settings.anthropic_api_key, timeout=timeout)
        self.ocr_model = settings.ocr_model
        self.knowledge_model = settings.knowledge_model

    # =========================================================================
    # SCHEMA VALIDATION + CONVERSATIONAL RETRY
    # =========================================================================

    def _call_with_schema_retry(
        self,
        messages: list[dict],
        schema_class: type[BaseModel],
        request_params: dict,
        max_retries: int = 2,
        prefill: str | None = "{",
    ) -> tuple[dict, str, object]:
        """
        Call Claude API with JSON schema validation and conversational retry.

        On schema failure: appends the bad response + error feedback to messages,
        re-calls with full conversation context so the LLM can self-correct.

        Args:
            messages: The messages list (will be mutated on retry)
            schema_class: Pydantic model class to validate against
            request_params: Dict of params for client.messages.create
                            (model, max_tokens, system, etc.)
                            NOTE: do NOT include 'messages' - they're passed separately
            max_retries: Number of retry attempts after initial call (default 2, so 3 total)
            prefill: Assistant prefill string, or None for no prefill

        Returns:
            (validated_dict, raw_response_text, response_object) tuple

        Raises:
            ValueError: If all attempts fail schema validation
        """
        response = None

        for attempt in range(1 + max_retries):
            call_messages = list(messages)
            if prefill:
                call_messages.append({"role": "assistant", "content": prefill})

            response = self.client.messages.create(
                messages=call_messages,
                **request_params,
            )

            response_text = ""
            for block in response.content:
                if hasattr(block, "text"):
                    response_text += block.text

            if not response_text:
                if attempt < max_retries:
                    messages.append(
                        {"role": "assistant", "content": "(empty response)"}
                    )
                    messages.append(
                        {
                            "role": "user",
                            "content": "Your response contained no text. Please respond with valid JSON.",
                        }
                    )
                    continue
                raise ValueError("No text content in AI response after retries")

            # Reconstruct JSON (handle prefill)
            raw_text = response_text.strip()
            json_str = (prefill or "") + raw_text if prefill else raw_text

            json_str = _strip_markdown_json(json_str)
            json_str = _fix_trailing_commas(json_str)

            try:
                parsed = json.loads(json_str)
                adapter = TypeAdapter(schema_class)
                validated = adapter.validate_python(parsed)
                return validated.model_dump(), raw_text, response
            except (json.JSONDecodeError, ValidationError) as e:
                error_msg = str(e)
                logger.warning(
                    "AI response schema validation failed (attempt %d/%d) for %s: %s",
                    attempt + 1,
                    1 + max_retries,
                    schema_class.__name__,
                    error_msg,
                )

                if attempt < max_retries:
                    messages.append(
                        {
                            "role": "assistant",
                            "content": (prefill or "") + raw_text,
                        }
                    )
                    messages.append(
                        {
                            "role": "user",
                            "content": (
                                f"Your response had a schema error:\n{error_msg}\n\n"
                                f"Please fix and return valid JSON matching the required schema."
                            ),
                        }
                    )
                    continue

                raise ValueError(
                    f"AI response failed schema validation after {1 + max_retries} attempts: {error_msg}"
                )

        raise ValueError("AI response failed schema validation")

    # =========================================================================
    # LABEL TEXT EXTRACTION (OCR)
    # =========================================================================

    async def extract_label_text(self, image_path: str) -> str:
        """
        Read the text printed on a food label photo.

        Args:
            image_path: Path to the uploaded label image

        Returns:
            The transcribed label text ("" if the model saw no text)

        Raises:
            OcrError: The image could not be read or the AI call failed
        """
        try:
            image_data = self._load_image_base64(image_path)
        except OSError as e:
            raise OcrError(f"Could not read image file: {image_path}") from e

        media_type = self._get_media_type(image_path)

        try:
            return await self._request_label_text(image_data, media_type)
        except ServiceUnavailableError as e:
            raise OcrError("Label reading service temporarily unavailable") from e
        except anthropic.RateLimitError as e:
            raise OcrError("Too many requests, please try again in 1 minute") from e
        except anthropic.APIStatusError as e:
            raise OcrError(f"Label reading failed: {e.message}") from e

    @retry_on_connection_error(max_attempts=3, base_delay=1.0)
    async def _request_label_text(self, image_data: str, media_type: str) -> str:
        response = await asyncio.to_thread(
            self.client.messages.create,
            model=self.ocr_model,
            max_tokens=settings.ocr_max_tokens,
            system=LABEL_OCR_SYSTEM_PROMPT,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": media_type,
                                "data": image_data,
                            },
                        },
                        {"type": "text", "text": LABEL_OCR_USER_PROMPT},
                    ],
                }
            ],
        )

        text = "".join(
            block.text for block in response.content if hasattr(block, "text")
        )
        logger.debug("OCR returned %d characters", len(text))
        return text.strip()

    # =========================================================================
    # UNKNOWN INGREDIENT CLASSIFICATION
    # =========================================================================

    async def query_unknown_ingredients(
        self, names: list[str], allergies: Iterable[str] = ()
    ) -> dict[str, dict]:
        """
        Classify a batch of ingredients the lookup table does not know.

        One API call per batch, never one per ingredient.

        Args:
            names: Normalized ingredient names, in label order
            allergies: The user's allergy list, passed along as context

        Returns:
            {
                "soy sauce": {
                    "healthCategory": "YELLOW",
                    "description": "High in sodium ...",
                    "alternatives": ["coconut aminos"]
                },
                ...
            }
            Individual entries are NOT validated here.

        Raises:
            ServiceUnavailableError: AI service temporarily down
            RateLimitError: Too many requests
            ValueError: Invalid response or request error
        """
        if not names:
            return {}

        allergies = sorted({a.strip().lower() for a in allergies if a and a.strip()})
        messages = [
            {
                "role": "user",
                "content": build_unknown_ingredients_message(list(names), allergies),
            }
        ]

        try:
            validated, _raw_text, response = await asyncio.to_thread(
                self._call_with_schema_retry,
                messages=messages,
                schema_class=UnknownIngredientsSchema,
                request_params={
                    "model": self.knowledge_model,
                    "max_tokens": settings.knowledge_max_tokens,
                    "system": UNKNOWN_INGREDIENTS_SYSTEM_PROMPT,
                },
                max_retries=settings.knowledge_max_retries,
            )
        except anthropic.APIConnectionError as e:
            raise ServiceUnavailableError("AI service temporarily unavailable") from e
        except anthropic.RateLimitError as e:
            raise RateLimitError(
                "Too many requests, please try again in 1 minute"
            ) from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("AI service error") from e
            raise ValueError(f"Request error: {e.message}") from e

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                "Classified %d unknown ingredients (input_tokens=%s, output_tokens=%s)",
                len(names),
                getattr(usage, "input_tokens", 0),
                getattr(usage, "output_tokens", 0),
            )

        return validated

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _load_image_base64(self, image_path: str) -> str:
        """Load image file and encode as base64."""
        with open(image_path, "rb") as f:
            return base64.standard_b64encode(f.read()).decode("utf-8")

    def _get_media_type(self, image_path: str) -> str:
        """Determine media type from file extension."""
        suffix = Path(image_path).suffix.lower()
        media_types = {
            ".jpg": "image/jpeg",
            ".jpeg": "image/jpeg",
            ".png": "image/png",
            ".gif": "image/gif",
            ".webp": "image/webp",
        }
        return media_types.get(suffix, "image/jpeg")


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class ServiceUnavailableError(Exception):
    """AI service is temporarily unavailable."""

    pass


class RateLimitError(Exception):
    """Rate limit exceeded."""

    pass


class OcrError(Exception):
    """Label text could not be extracted from an image."""

    pass
