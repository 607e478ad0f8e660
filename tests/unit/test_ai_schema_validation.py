"""
Unit tests for AI schema validation and conversational retry logic.

Tests the Pydantic schema models and _call_with_schema_retry() helper
directly, using mocked Claude API responses.
"""

import json

import pytest
from unittest.mock import MagicMock, patch
from pydantic import ValidationError

from labelwise.models.analysis import HealthCategory
from labelwise.services.ai_schemas import (
    IngredientVerdictSchema,
    UnknownIngredientsSchema,
)
from labelwise.services.ai_service import (
    _strip_markdown_json,
    _fix_trailing_commas,
)


# =============================================================================
# Schema Validation Tests
# =============================================================================


class TestIngredientVerdictSchema:
    def test_valid_verdict(self):
        data = {
            "healthCategory": "YELLOW",
            "description": "High in sodium",
            "alternatives": ["coconut aminos"],
        }
        result = IngredientVerdictSchema.model_validate(data)
        assert result.health_category == HealthCategory.CAUTION
        assert result.description == "High in sodium"
        assert result.alternatives == ["coconut aminos"]

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("GREEN", HealthCategory.SAFE),
            ("green", HealthCategory.SAFE),
            ("Yellow", HealthCategory.CAUTION),
            ("RED", HealthCategory.HARMFUL),
            ("harmful", HealthCategory.HARMFUL),
            (" safe ", HealthCategory.SAFE),
        ],
    )
    def test_category_labels(self, label, expected):
        data = {"healthCategory": label, "description": "x"}
        result = IngredientVerdictSchema.model_validate(data)
        assert result.health_category == expected

    @pytest.mark.parametrize("label", ["PURPLE", "unknown", "", 3, None])
    def test_invalid_category(self, label):
        data = {"healthCategory": label, "description": "x"}
        with pytest.raises(ValidationError):
            IngredientVerdictSchema.model_validate(data)

    def test_missing_category(self):
        with pytest.raises(ValidationError):
            IngredientVerdictSchema.model_validate({"description": "x"})

    def test_empty_description(self):
        data = {"healthCategory": "GREEN", "description": ""}
        with pytest.raises(ValidationError):
            IngredientVerdictSchema.model_validate(data)

    def test_missing_alternatives_default(self):
        data = {"healthCategory": "GREEN", "description": "x"}
        result = IngredientVerdictSchema.model_validate(data)
        assert result.alternatives == []

    def test_null_alternatives(self):
        data = {"healthCategory": "GREEN", "description": "x", "alternatives": None}
        result = IngredientVerdictSchema.model_validate(data)
        assert result.alternatives == []

    def test_blank_alternatives_dropped(self):
        data = {
            "healthCategory": "GREEN",
            "description": "x",
            "alternatives": ["", "  ", "stevia ", None],
        }
        result = IngredientVerdictSchema.model_validate(data)
        assert result.alternatives == ["stevia"]

    def test_populate_by_field_name(self):
        result = IngredientVerdictSchema(
            health_category=HealthCategory.SAFE, description="x"
        )
        assert result.health_category == HealthCategory.SAFE

    def test_unknown_enum_rejected(self):
        with pytest.raises(ValidationError):
            IngredientVerdictSchema(
                health_category=HealthCategory.UNKNOWN, description="x"
            )


class TestUnknownIngredientsSchema:
    def test_mapping_of_objects(self):
        data = {"soy sauce": {"healthCategory": "YELLOW", "description": "Salty"}}
        result = UnknownIngredientsSchema.model_validate(data)
        assert result.model_dump() == data

    def test_bad_entries_not_rejected_at_top_level(self):
        data = {"soy sauce": {"healthCategory": "PURPLE"}}
        result = UnknownIngredientsSchema.model_validate(data)
        assert result.model_dump() == data

    def test_entry_must_be_object(self):
        with pytest.raises(ValidationError):
            UnknownIngredientsSchema.model_validate({"soy sauce": "YELLOW"})

    def test_top_level_must_be_object(self):
        with pytest.raises(ValidationError):
            UnknownIngredientsSchema.model_validate([{"healthCategory": "RED"}])


# =============================================================================
# Helper Function Tests
# =============================================================================


class TestStripMarkdownJson:
    def test_json_code_block(self):
        text = '```json\n{"key": "value"}\n```'
        assert _strip_markdown_json(text) == '{"key": "value"}'

    def test_generic_code_block(self):
        text = '```\n{"key": "value"}\n```'
        assert _strip_markdown_json(text) == '{"key": "value"}'

    def test_no_code_block(self):
        text = '{"key": "value"}'
        assert _strip_markdown_json(text) == '{"key": "value"}'

    def test_json_block_with_surrounding_text(self):
        text = 'Here is the result:\n```json\n{"key": "value"}\n```\nDone.'
        assert _strip_markdown_json(text) == '{"key": "value"}'

    def test_empty_code_block(self):
        text = "```json\n\n```"
        assert _strip_markdown_json(text) == ""


class TestFixTrailingCommas:
    def test_trailing_comma_in_object(self):
        assert _fix_trailing_commas('{"a": 1,}') == '{"a": 1}'

    def test_trailing_comma_in_array(self):
        assert _fix_trailing_commas("[1, 2, 3,]") == "[1, 2, 3]"

    def test_trailing_comma_with_whitespace(self):
        assert _fix_trailing_commas('{"a": 1 , }') == '{"a": 1 }'

    def test_no_trailing_comma(self):
        assert _fix_trailing_commas('{"a": 1}') == '{"a": 1}'

    def test_nested_trailing_commas(self):
        text = '{"a": [1, 2,], "b": {"c": 3,},}'
        result = _fix_trailing_commas(text)
        assert json.loads(result) == {"a": [1, 2], "b": {"c": 3}}


# =============================================================================
# Retry Logic Tests (mock Claude API)
# =============================================================================


GOOD_BATCH = '"soy sauce": {"healthCategory": "YELLOW", "description": "Salty", "alternatives": []}}'


def _make_mock_response(text_content: str):
    """Create a mock Anthropic response with given text content."""
    mock_block = MagicMock()
    mock_block.text = text_content

    mock_response = MagicMock()
    mock_response.content = [mock_block]
    mock_response.usage = MagicMock()
    mock_response.usage.input_tokens = 100
    mock_response.usage.output_tokens = 50

    return mock_response


def _make_empty_response():
    """Create a mock Anthropic response with no text blocks."""
    mock_block = MagicMock(spec=[])  # no text attribute

    mock_response = MagicMock()
    mock_response.content = [mock_block]
    mock_response.usage = MagicMock()

    return mock_response


def _make_service(mock_create):
    """Create a ClaudeService with a mocked client."""
    with patch("labelwise.services.ai_service.settings") as mock_settings:
        mock_settings.anthropic_api_key = "test-key"
        mock_settings.anthropic_timeout = 30
        mock_settings.anthropic_connect_timeout = 10
        mock_settings.ocr_model = "test-ocr"
        mock_settings.knowledge_model = "test-knowledge"

        with patch("labelwise.services.ai_service.Anthropic") as MockAnthropic:
            mock_client = MagicMock()
            mock_client.messages.create = mock_create
            MockAnthropic.return_value = mock_client

            from labelwise.services.ai_service import ClaudeService

            return ClaudeService()


class TestCallWithSchemaRetry:
    """Tests for ClaudeService._call_with_schema_retry()."""

    def _call(self, service, messages, **kwargs):
        return service._call_with_schema_retry(
            messages=messages,
            schema_class=UnknownIngredientsSchema,
            request_params={"model": "test", "max_tokens": 100},
            **kwargs,
        )

    def test_first_attempt_succeeds(self):
        """Valid response on first try - no retries needed."""
        mock_create = MagicMock(return_value=_make_mock_response(GOOD_BATCH))
        service = _make_service(mock_create)

        messages = [{"role": "user", "content": "Classify these."}]
        validated, raw_text, response = self._call(service, messages)

        assert validated["soy sauce"]["healthCategory"] == "YELLOW"
        assert mock_create.call_count == 1
        # Messages should NOT be mutated on success
        assert len(messages) == 1

    def test_retry_on_bad_json_then_succeeds(self):
        """First attempt returns invalid JSON, second succeeds."""
        mock_create = MagicMock(
            side_effect=[
                _make_mock_response("not json at all"),
                _make_mock_response(GOOD_BATCH),
            ]
        )
        service = _make_service(mock_create)

        messages = [{"role": "user", "content": "Classify these."}]
        validated, raw_text, response = self._call(service, messages)

        assert "soy sauce" in validated
        assert mock_create.call_count == 2
        # Messages should have grown: original + failed attempt + error feedback
        assert len(messages) == 3
        assert messages[1] == {"role": "assistant", "content": "{not json at all"}
        assert "schema error" in messages[2]["content"]

    def test_retry_on_schema_error_then_succeeds(self):
        """Valid JSON but wrong shape, then correct on retry."""
        mock_create = MagicMock(
            side_effect=[
                _make_mock_response('"soy sauce": "YELLOW"}'),
                _make_mock_response(GOOD_BATCH),
            ]
        )
        service = _make_service(mock_create)

        messages = [{"role": "user", "content": "Classify these."}]
        validated, raw_text, response = self._call(service, messages)

        assert validated["soy sauce"]["description"] == "Salty"
        assert mock_create.call_count == 2

    def test_all_attempts_fail(self):
        """All 3 attempts fail - ValueError raised."""
        mock_create = MagicMock(return_value=_make_mock_response("not valid json {{{"))
        service = _make_service(mock_create)

        messages = [{"role": "user", "content": "Classify these."}]
        with pytest.raises(
            ValueError, match="failed schema validation after 3 attempts"
        ):
            self._call(service, messages)

        assert mock_create.call_count == 3

    def test_custom_max_retries(self):
        """Custom max_retries=0 means only 1 attempt."""
        mock_create = MagicMock(return_value=_make_mock_response("not json"))
        service = _make_service(mock_create)

        with pytest.raises(ValueError, match="after 1 attempts"):
            self._call(service, [{"role": "user", "content": "x"}], max_retries=0)

        assert mock_create.call_count == 1

    def test_empty_response_retries(self):
        """Empty response triggers retry."""
        mock_create = MagicMock(
            side_effect=[_make_empty_response(), _make_mock_response(GOOD_BATCH)]
        )
        service = _make_service(mock_create)

        validated, raw_text, response = self._call(
            service, [{"role": "user", "content": "Classify these."}]
        )

        assert "soy sauce" in validated
        assert mock_create.call_count == 2

    def test_all_empty_responses_raise(self):
        """All empty responses raise ValueError."""
        mock_create = MagicMock(return_value=_make_empty_response())
        service = _make_service(mock_create)

        with pytest.raises(ValueError, match="No text content"):
            self._call(service, [{"role": "user", "content": "Classify these."}])

    def test_prefill_included_in_call(self):
        """Prefill '{' is added to each API call."""
        mock_create = MagicMock(return_value=_make_mock_response(GOOD_BATCH))
        service = _make_service(mock_create)

        self._call(service, [{"role": "user", "content": "Classify."}], prefill="{")

        call_messages = mock_create.call_args[1]["messages"]
        assert call_messages[-1] == {"role": "assistant", "content": "{"}

    def test_no_prefill(self):
        """When prefill=None, no assistant message added."""
        mock_create = MagicMock(
            return_value=_make_mock_response("{" + GOOD_BATCH)
        )
        service = _make_service(mock_create)

        validated, raw_text, response = self._call(
            service, [{"role": "user", "content": "Classify."}], prefill=None
        )

        assert "soy sauce" in validated
        call_messages = mock_create.call_args[1]["messages"]
        assert all(m["role"] == "user" for m in call_messages)

    def test_markdown_wrapped_response(self):
        """Response wrapped in markdown code blocks is handled."""
        markdown_json = "```json\n{" + GOOD_BATCH + "\n```"
        mock_create = MagicMock(return_value=_make_mock_response(markdown_json))
        service = _make_service(mock_create)

        validated, raw_text, response = self._call(
            service, [{"role": "user", "content": "Classify."}], prefill=None
        )

        assert "soy sauce" in validated

    def test_trailing_commas_fixed(self):
        """Response with trailing commas is fixed before parsing."""
        json_with_commas = '"teff": {"healthCategory": "GREEN", "description": "Grain", "alternatives": [],},}'
        mock_create = MagicMock(return_value=_make_mock_response(json_with_commas))
        service = _make_service(mock_create)

        validated, raw_text, response = self._call(
            service, [{"role": "user", "content": "Classify."}]
        )

        assert validated["teff"]["healthCategory"] == "GREEN"

    def test_multi_block_response(self):
        """Text from every text block is joined."""
        block1 = MagicMock()
        block1.text = '"teff": {"healthCategory": "GREEN", '

        block2 = MagicMock()
        block2.text = '"description": "Grain"}}'

        other_block = MagicMock(spec=[])

        mock_response = MagicMock()
        mock_response.content = [other_block, block1, block2]
        mock_response.usage = MagicMock()

        mock_create = MagicMock(return_value=mock_response)
        service = _make_service(mock_create)

        validated, raw_text, response = self._call(
            service, [{"role": "user", "content": "Classify."}]
        )

        assert validated["teff"]["description"] == "Grain"
