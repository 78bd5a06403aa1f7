"""
Tests for the labelled evaluation harness.
"""
import pytest
from breakdown_resolver.config import ResolverConfig
from breakdown_resolver.resolver import EntityResolver
from evaluation.cases import EVAL_CASES
from evaluation.metrics import calculate_metrics
from evaluation.runner import run_evaluation


@pytest.fixture
def case():
    return {
        "id": "phones",
        "category": "props",
        "items": ["Phone", "Cellphone", "Gun", "Pistol"],
        "expected_groups": [["Phone", "Cellphone"], ["Gun", "Pistol"]],
        "expected_parents": ["Phone", "Gun"],
    }


class TestMetrics:
    """Tests for calculate_metrics."""

    def test_perfect_result(self, case):
        """Test that a matching result scores 1.0 everywhere."""
        result = {
            "id": "phones",
            "groups": [["Phone", "Cellphone"], ["Gun", "Pistol"]],
            "parents": ["Gun", "Phone"],
            "emitted": ["Phone", "Cellphone", "Gun", "Pistol"],
            "excluded": [],
        }

        metrics = calculate_metrics([result], [case])

        assert metrics["merge_precision"] == 1.0
        assert metrics["merge_recall"] == 1.0
        assert metrics["parent_name_accuracy"] == 1.0
        assert metrics["coverage_rate"] == 1.0
        assert metrics["total_cases"] == 1

    def test_overmerge_and_missing_item(self, case):
        """Test that a cross-merge lowers precision and a lost item fails coverage."""
        result = {
            "id": "phones",
            "groups": [["Phone", "Cellphone", "Gun"]],
            "parents": ["Phone"],
            "emitted": ["Phone", "Cellphone", "Gun"],
            "excluded": [],
        }

        metrics = calculate_metrics([result], [case])

        assert metrics["merge_precision"] == pytest.approx(1 / 3)
        assert metrics["merge_recall"] == pytest.approx(1 / 2)
        assert metrics["parent_name_accuracy"] == 0.0
        assert metrics["coverage_rate"] == 0.0


class TestLabelledCases:
    """Runs the engine over the labelled cases."""

    def test_all_cases_pass(self):
        """Test that the engine reproduces every labelled case."""
        resolver = EntityResolver(ResolverConfig(id_strategy="sequential"))

        results = run_evaluation(resolver, EVAL_CASES)
        metrics = calculate_metrics(results, EVAL_CASES)

        assert metrics["total_cases"] == len(EVAL_CASES)
        assert metrics["coverage_rate"] == 1.0
        assert metrics["merge_precision"] == 1.0
