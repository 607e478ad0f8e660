"""Unit tests for allergy re-scoring."""

import pytest

from labelwise.models.analysis import HealthCategory
from labelwise.services.allergy_service import (
    apply_allergy_overrides,
    escalate,
    matches_allergen,
)
from tests.factories import make_result


class TestMatchesAllergen:
    @pytest.mark.parametrize(
        "ingredient,allergies,expected",
        [
            ("milk", ["milk"], True),
            ("Milk Powder", ["MILK"], True),
            ("nonfat milk solids", ["milk"], True),
            ("buttermilk", ["milk"], False),
            ("peanuts", ["peanut"], False),
            ("peanut oil", ["soy", "peanut"], True),
            ("wheat flour", [], False),
            ("wheat flour", ["", "  "], False),
            ("", ["milk"], False),
        ],
    )
    def test_matching(self, ingredient, allergies, expected):
        assert matches_allergen(ingredient, allergies) is expected

    def test_multi_word_allergy(self):
        assert matches_allergen("organic tree nut butter", ["tree nut"]) is True


class TestEscalate:
    def test_safe_becomes_harmful(self):
        result = escalate(make_result("milk", HealthCategory.SAFE, "Dairy product"))

        assert result.category == HealthCategory.HARMFUL
        assert result.allergen_escalated is True
        assert "original classification: safe" in result.description
        assert "Dairy product" in result.description

    def test_unknown_becomes_harmful(self):
        result = escalate(make_result("quinoa", HealthCategory.UNKNOWN, "No idea"))
        assert result.category == HealthCategory.HARMFUL
        assert "original classification: unknown" in result.description

    def test_harmful_stays_harmful_with_note(self):
        result = escalate(make_result("carmine", HealthCategory.HARMFUL, "Insect dye"))

        assert result.category == HealthCategory.HARMFUL
        assert "also listed in your allergy profile" in result.description
        assert "Insect dye" in result.description

    def test_already_escalated_unchanged(self):
        once = escalate(make_result("milk", HealthCategory.SAFE, "Dairy product"))
        assert escalate(once) == once

    def test_original_not_mutated(self):
        original = make_result("milk", HealthCategory.SAFE, "Dairy product")
        escalate(original)
        assert original.category == HealthCategory.SAFE
        assert original.description == "Dairy product"
        assert original.allergen_escalated is False


class TestApplyAllergyOverrides:
    def test_only_matching_results_change(self):
        results = [
            make_result("milk", HealthCategory.SAFE),
            make_result("honey", HealthCategory.SAFE),
            make_result("buttermilk", HealthCategory.SAFE),
        ]
        updated = apply_allergy_overrides(results, ["milk"])

        assert [r.category for r in updated] == [
            HealthCategory.HARMFUL,
            HealthCategory.SAFE,
            HealthCategory.SAFE,
        ]
        assert updated[1] is results[1]

    def test_idempotent(self):
        results = [
            make_result("milk", HealthCategory.CAUTION),
            make_result("aspartame", HealthCategory.HARMFUL),
        ]
        once = apply_allergy_overrides(results, ["milk", "aspartame"])
        twice = apply_allergy_overrides(once, ["milk", "aspartame"])
        assert twice == once

    def test_input_list_not_mutated(self):
        results = [make_result("milk", HealthCategory.SAFE)]
        apply_allergy_overrides(results, ["milk"])
        assert results[0].category == HealthCategory.SAFE

    def test_no_allergies_returns_copy(self):
        results = [make_result("milk", HealthCategory.SAFE)]
        updated = apply_allergy_overrides(results, [])
        assert updated == results
        assert updated is not results

    def test_order_and_length_preserved(self):
        results = [
            make_result(name, HealthCategory.SAFE) for name in ["a1", "milk", "b2"]
        ]
        updated = apply_allergy_overrides(results, ["milk"])
        assert [r.ingredient for r in updated] == ["a1", "milk", "b2"]
