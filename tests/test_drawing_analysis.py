"""
End-to-end tests for the analysis pipeline and its JSON payload.

Run with: pytest tests/test_drawing_analysis.py -v
"""
import json
import math

import pytest

from cost_estimation import CostPolicy
from drawing_analysis import analyze, main, result_to_payload
from extraction_utils import Dimension, DimensionKind
from form_classification import Form
from material_mappings import MaterialCatalog

SAMPLE_LINES = ["Ø25,00 h6 (0,008)", "120,50", "1.2210", "12.34.56-7890"]
SAMPLE_TEXT = "\n".join(SAMPLE_LINES)


class TestAnalyze:

    @pytest.fixture
    def result(self):
        return analyze(SAMPLE_TEXT, 1)

    def test_identifiers(self, result):
        assert result.drawing_number == "12.34.56-7890"
        assert result.material.designation == "1.2210"

    def test_dimensions(self, result):
        assert result.dimensions == [
            Dimension(25.0, True, DimensionKind.FIT),
            Dimension(25.0, True, DimensionKind.PLAIN),
            Dimension(120.5, False, DimensionKind.PLAIN),
        ]
        assert result.fits[0].fit_class == "h6"

    def test_form_and_geometry(self, result):
        expected_volume = math.pi * (26.25 / 2) ** 2 * 126.525 / 1000
        assert result.form == Form.CYLINDER
        assert result.volume_cm3 == pytest.approx(expected_volume)
        assert result.volume_cm3 == pytest.approx(68.47, abs=0.01)
        assert result.weight_kg == pytest.approx(expected_volume * 7.85 / 1000)
        assert result.weight_kg == pytest.approx(0.5375, abs=0.001)

    def test_cost(self, result):
        weight = result.weight_kg
        expected = (60 + 30 + weight * 1.50 + weight * 0.3 * 35 / 60) * 1.15
        assert result.cost.final_price == pytest.approx(expected)
        assert result.quantity == 1
        assert result.warnings == []

    def test_idempotent(self):
        first = analyze(SAMPLE_TEXT, 1)
        second = analyze(SAMPLE_TEXT, 1)
        assert first == second
        assert json.dumps(result_to_payload(first)) == json.dumps(result_to_payload(second))

    def test_empty_text_degrades_to_defaults(self):
        result = analyze("", 1)

        assert result.drawing_number is None
        assert result.material.is_default
        assert result.dimensions == []
        assert result.form == Form.UNKNOWN
        assert result.volume_cm3 == 0.0
        assert result.weight_kg == 0.0
        assert result.cost.final_price == pytest.approx(90 * 1.15)
        assert len(result.warnings) == 4

    def test_none_text(self):
        assert analyze(None).form == Form.UNKNOWN

    def test_invalid_quantity_coerced(self):
        assert analyze(SAMPLE_TEXT, "-2").quantity == 1

    def test_batch_policy(self):
        result = analyze(SAMPLE_TEXT, 4, policy="batch")
        assert result.cost.policy == CostPolicy.BATCH
        assert result.cost.setup_cost == 60.0

    def test_custom_catalog(self):
        catalog = MaterialCatalog({'1.2210': 8.0}, {'1.2210': 3.0}, source="test")
        result = analyze(SAMPLE_TEXT, 1, catalog=catalog)
        assert result.material.price_per_kg == 3.0
        assert result.weight_kg == pytest.approx(result.volume_cm3 * 8.0 / 1000)

    def test_block(self):
        result = analyze("100x50x20\nC45", 1)
        assert result.form == Form.BLOCK
        assert result.material.designation == "C45"

    def test_thread_alone_is_not_a_cylinder(self):
        assert analyze("M20x2", 1).form == Form.UNKNOWN

    def test_hole_pattern_count_is_not_a_length(self):
        result = analyze("4xØ10\n60", 1)
        assert [d.value for d in result.dimensions] == [10.0, 60.0]
        assert result.form == Form.CYLINDER


class TestPayload:

    def test_payload_shape(self):
        payload = result_to_payload(analyze(SAMPLE_TEXT, 1))

        assert payload['drawingNumber'] == "12.34.56-7890"
        assert payload['material'] == "1.2210"
        assert payload['dimensions'] == ["Ø25.00", "Ø25.00", "120.50"]
        assert payload['form'] == "Cylinder"
        assert payload['volumeCm3'] == "68.47"
        assert payload['weightKg'] == "0.538"
        assert payload['cost']['setupCost'] == "60.00"
        assert payload['cost']['programmingCost'] == "30.00"
        assert set(payload['cost']) == {
            'setupCost', 'programmingCost', 'materialCost', 'machiningCost', 'finalPrice',
        }
        assert payload['quantity'] == 1
        assert payload['costPolicy'] == "amortized"
        assert payload['fits'] == [{'diameter': 25.0, 'fitClass': 'h6', 'tolerance': 0.008}]

    def test_missing_drawing_number_is_null(self):
        payload = result_to_payload(analyze("Ø20\n50", 1))
        assert payload['drawingNumber'] is None
        assert json.loads(json.dumps(payload))['drawingNumber'] is None


def test_cli(tmp_path, capsys):
    path = tmp_path / "drawing.txt"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")

    assert main([str(path), "--quantity", "2"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload['drawingNumber'] == "12.34.56-7890"
    assert payload['quantity'] == 2
    assert payload['cost']['setupCost'] == "30.00"
