"""
Drawing analysis pipeline: recognized text in, manufacturing metadata and
cost estimate out.

The pipeline is a pure function of (text, quantity, catalog, policy). It
performs no I/O and keeps no state between calls, so it can be run
concurrently for independent requests.
"""
import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cost_estimation import CostBreakdown, CostPolicy, estimate_cost, normalize_quantity
from drawing_number import resolve_drawing_number
from extraction_utils import Dimension, FitAnnotation, ThreadCallout, extract_dimensions
from form_classification import Form, classify_form
from geometry_estimation import estimate_geometry
from material_mappings import MaterialCatalog, MaterialRecord, resolve_material
from text_utils import split_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    drawing_number: Optional[str]
    material: MaterialRecord
    dimensions: List[Dimension]
    form: Form
    volume_cm3: float
    weight_kg: float
    cost: CostBreakdown
    threads: List[ThreadCallout] = field(default_factory=list)
    fits: List[FitAnnotation] = field(default_factory=list)
    quantity: int = 1
    warnings: List[str] = field(default_factory=list)


def validate_extracted_data(drawing_number, material, dimensions, form) -> List[str]:
    """
    Collect remarks about incomplete extraction. Remarks never fail the
    analysis; they are shown next to the estimate.
    """
    issues = []
    if not drawing_number:
        issues.append("Drawing number not found in drawing")
    if material.is_default:
        issues.append(f"Material not found, default {material.designation} assumed")
    if not dimensions:
        issues.append("No dimensions found in drawing")
    if form == Form.UNKNOWN:
        issues.append("Part form could not be determined, volume and weight set to 0")
    return issues


def analyze(ocr_text, quantity=1, catalog: Optional[MaterialCatalog] = None,
            policy=None) -> ExtractionResult:
    """
    Run the full extraction and estimation pipeline over recognized text.

    Args:
        ocr_text: recognized drawing text (None or non-string input is coerced)
        quantity: requested part count; invalid values become 1
        catalog: material density/price tables, built-ins when omitted
        policy: CostPolicy or its name, amortized when omitted
    """
    quantity = normalize_quantity(quantity)
    lines = split_lines(ocr_text)
    logger.info(f"Analyzing {len(lines)} text lines, quantity={quantity}")

    extraction = extract_dimensions(lines)
    material = resolve_material(lines, catalog)
    drawing_number = resolve_drawing_number(lines)

    form = classify_form(extraction.dimensions)
    geometry = estimate_geometry(form, extraction.dimensions, material)
    cost = estimate_cost(geometry.volume_cm3, geometry.weight_kg, material, quantity, policy)

    warnings = validate_extracted_data(drawing_number, material, extraction.dimensions, form)
    for warning in warnings:
        logger.warning(warning)

    return ExtractionResult(
        drawing_number=drawing_number,
        material=material,
        dimensions=list(extraction.dimensions),
        form=form,
        volume_cm3=geometry.volume_cm3,
        weight_kg=geometry.weight_kg,
        cost=cost,
        threads=list(extraction.threads),
        fits=list(extraction.fits),
        quantity=quantity,
        warnings=warnings,
    )


def _money(value: float) -> str:
    return f"{value:.2f}"


def result_to_payload(result: ExtractionResult) -> Dict[str, Any]:
    """Serialize a result to the JSON response shape."""
    return {
        'drawingNumber': result.drawing_number,
        'material': result.material.designation,
        'dimensions': [d.format() for d in result.dimensions],
        'form': result.form.value,
        'volumeCm3': f"{result.volume_cm3:.2f}",
        'weightKg': f"{result.weight_kg:.3f}",
        'cost': {
            'setupCost': _money(result.cost.setup_cost),
            'programmingCost': _money(result.cost.programming_cost),
            'materialCost': _money(result.cost.material_cost),
            'machiningCost': _money(result.cost.machining_cost),
            'finalPrice': _money(result.cost.final_price),
        },
        'quantity': result.quantity,
        'costPolicy': result.cost.policy.value,
        'density': result.material.density_g_cm3,
        'pricePerKg': result.material.price_per_kg,
        'threads': [
            {'nominalDiameter': t.nominal_diameter, 'pitch': t.pitch}
            for t in result.threads
        ],
        'fits': [
            {'diameter': f.diameter, 'fitClass': f.fit_class, 'tolerance': f.tolerance}
            for f in result.fits
        ],
        'warnings': list(result.warnings),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Estimate a quote from recognized drawing text")
    parser.add_argument('text_file', nargs='?', help="text file to analyze (stdin when omitted)")
    parser.add_argument('-q', '--quantity', default=1, help="number of parts")
    parser.add_argument('-p', '--policy', choices=[p.value for p in CostPolicy], default=None,
                        help="cost policy")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if args.text_file:
        with open(args.text_file, encoding='utf-8') as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    result = analyze(text, args.quantity, policy=args.policy)
    print(json.dumps(result_to_payload(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
