"""
Coarse part form from the mix of diameter and length dimensions.
"""
import logging
from enum import Enum
from typing import Iterable, Tuple

from extraction_utils import Dimension

logger = logging.getLogger(__name__)


class Form(str, Enum):
    CYLINDER = "Cylinder"
    BLOCK = "Block"
    FLANGE = "Flange"
    UNKNOWN = "Unknown"


def count_dimensions(dimensions: Iterable[Dimension]) -> Tuple[int, int]:
    """Return (diameter count, other count)."""
    n_diameter = 0
    n_other = 0
    for dim in dimensions:
        if dim.is_diameter:
            n_diameter += 1
        else:
            n_other += 1
    return n_diameter, n_other


def classify_counts(n_diameter: int, n_other: int) -> Form:
    # one diameter + one length: turned part
    if n_diameter >= 1 and n_other == 1:
        return Form.CYLINDER
    # three plain lengths: prismatic block
    if n_diameter == 0 and n_other == 3:
        return Form.BLOCK
    # diameter + thickness + further features
    if n_diameter >= 1 and n_other >= 2:
        return Form.FLANGE
    return Form.UNKNOWN


def classify_form(dimensions: Iterable[Dimension]) -> Form:
    n_diameter, n_other = count_dimensions(dimensions)
    form = classify_counts(n_diameter, n_other)
    logger.info(f"Form classified as {form.value} (diameters={n_diameter}, other={n_other})")
    return form
