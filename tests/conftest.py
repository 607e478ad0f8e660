"""
Test configuration and fixtures for Labelwise.

- Mock Claude service standing in for OCR and the knowledge source
- Classifier and pipeline service wired to the mock
- Small lookup table for tier-priority tests
- TestClient with the router's services swapped for mocked ones
"""

import pytest
from fastapi.testclient import TestClient

from labelwise.models.analysis import HealthCategory
from labelwise.services.lookup_table import LookupTable


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_claude_service(monkeypatch):
    """
    Mock Claude service for testing AI functionality.

    Returns a mock service that can be configured per test.
    """
    from tests.fixtures.mocks import MockClaudeService

    mock_service = MockClaudeService()

    # Patch the ClaudeService import in services
    monkeypatch.setattr(
        "labelwise.services.ai_service.ClaudeService", lambda: mock_service
    )

    return mock_service


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def classifier(mock_claude_service):
    """Classifier backed by the real lookup table and the mock knowledge source."""
    from labelwise.services.classifier import IngredientClassifier

    return IngredientClassifier(knowledge_source=mock_claude_service)


@pytest.fixture
def analysis_service(classifier, mock_claude_service):
    """Full pipeline service with every external call mocked."""
    from labelwise.services.analysis_service import AnalysisService

    return AnalysisService(classifier=classifier, ocr=mock_claude_service)


@pytest.fixture
def small_lookup_table() -> LookupTable:
    """A tiny table where "dual" is listed in both the safe and harmful tiers."""
    return LookupTable(
        tiers={
            HealthCategory.SAFE: {
                "Oats": {"description": "Whole grain oats", "alternatives": []},
                "dual": {"description": "Safe entry", "alternatives": []},
            },
            HealthCategory.CAUTION: {
                "sugar": {
                    "description": "Added sugar",
                    "alternatives": ["dates"],
                },
            },
            HealthCategory.HARMFUL: {
                "dual": {"description": "Harmful entry", "alternatives": []},
                "aspartame": {
                    "description": "Artificial sweetener",
                    "alternatives": ["stevia"],
                },
            },
        },
        misleading_products={
            "maple syrup": {
                "description": "Often mostly corn syrup",
                "real_ingredients": "Check for pure maple syrup",
            }
        },
        tips=["Read the first three ingredients"],
    )


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client(monkeypatch, analysis_service, tmp_path):
    """TestClient whose router uses the mocked pipeline and a temp upload dir."""
    from labelwise.api import analysis as analysis_api
    from labelwise.main import app
    from labelwise.services.file_service import FileService

    monkeypatch.setattr(analysis_api, "analysis_service", analysis_service)
    monkeypatch.setattr(
        analysis_api, "file_service", FileService(upload_dir=str(tmp_path / "uploads"))
    )

    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m not slow')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
