"""
Volume and weight estimation from the classified form and its governing dimensions.
"""
import math
import logging
from dataclasses import dataclass
from typing import List, Sequence

from extraction_utils import Dimension
from form_classification import Form
from material_mappings import MaterialRecord

logger = logging.getLogger(__name__)

# Extracted values tend to undershoot the real part; bias the estimate upward.
SAFETY_INFLATION_FACTOR = 1.05
MM3_PER_CM3 = 1000.0
G_PER_KG = 1000.0


@dataclass(frozen=True)
class GeometryEstimate:
    volume_cm3: float
    weight_kg: float


def _inflated_desc(values: Sequence[float]) -> List[float]:
    return sorted((v * SAFETY_INFLATION_FACTOR for v in values), reverse=True)


def cylinder_volume_cm3(diameter_mm: float, height_mm: float) -> float:
    """Volume of a cylinder in cm³ from diameter and height in mm."""
    return math.pi * (diameter_mm / 2) ** 2 * height_mm / MM3_PER_CM3


def block_volume_cm3(x_mm: float, y_mm: float, z_mm: float) -> float:
    return x_mm * y_mm * z_mm / MM3_PER_CM3


def estimate_volume_cm3(form: Form, dimensions: Sequence[Dimension]) -> float:
    diameters = _inflated_desc([d.value for d in dimensions if d.is_diameter])
    lengths = _inflated_desc([d.value for d in dimensions if not d.is_diameter])

    if form in (Form.CYLINDER, Form.FLANGE):
        if not diameters or not lengths:
            logger.warning(f"{form.value} without a diameter and a length, volume set to 0")
            return 0.0
        # for a flange the largest length is taken as its thickness
        volume = cylinder_volume_cm3(diameters[0], lengths[0])
        logger.info(f"{form.value}: D={diameters[0]:.2f}mm H={lengths[0]:.2f}mm -> {volume:.2f}cm3")
        return volume

    if form == Form.BLOCK:
        if len(lengths) < 3:
            logger.warning("Block with fewer than three lengths, volume set to 0")
            return 0.0
        x, y, z = lengths[:3]
        volume = block_volume_cm3(x, y, z)
        logger.info(f"Block: {x:.2f} x {y:.2f} x {z:.2f}mm -> {volume:.2f}cm3")
        return volume

    logger.info("Form unknown, volume set to 0")
    return 0.0


def estimate_geometry(form: Form, dimensions: Sequence[Dimension], material: MaterialRecord) -> GeometryEstimate:
    """Estimate volume (cm³) and weight (kg); never negative."""
    volume_cm3 = max(estimate_volume_cm3(form, dimensions), 0.0)
    weight_kg = max(volume_cm3 * material.density_g_cm3 / G_PER_KG, 0.0)
    return GeometryEstimate(volume_cm3=volume_cm3, weight_kg=weight_kg)
