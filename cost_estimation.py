"""
Cost breakdown and final price for a part or batch.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from material_mappings import MaterialRecord

logger = logging.getLogger(__name__)

# ---- Process constants -------------------------------------------------

SETUP_COST = 60.0
PROGRAMMING_COST = 30.0
# minutes of machine time per kg of stock
MACHINE_TIME_FACTOR = 0.3
RATE_PER_MINUTE = 35.0 / 60.0
MARGIN_FACTOR = 1.15


class CostPolicy(str, Enum):
    # per-part price, one-time costs spread over the batch
    AMORTIZED = "amortized"
    # whole-batch price, one-time costs charged once
    BATCH = "batch"


@dataclass(frozen=True)
class CostBreakdown:
    setup_cost: float
    programming_cost: float
    material_cost: float
    machining_cost: float
    final_price: float
    quantity: int = 1
    policy: CostPolicy = CostPolicy.AMORTIZED


def normalize_quantity(value: Union[int, float, str, None]) -> int:
    """Coerce a requested quantity to a positive int; anything else becomes 1."""
    if value is None:
        return 1
    try:
        quantity = int(float(str(value).strip().replace(',', '.')))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Invalid quantity {value!r}, using 1")
        return 1
    if quantity <= 0:
        logger.warning(f"Non-positive quantity {value!r}, using 1")
        return 1
    return quantity


def resolve_policy(policy: Union[CostPolicy, str, None]) -> CostPolicy:
    if isinstance(policy, CostPolicy):
        return policy
    if policy:
        try:
            return CostPolicy(str(policy).strip().lower())
        except ValueError:
            logger.warning(f"Unknown cost policy {policy!r}, using {CostPolicy.AMORTIZED.value}")
    return CostPolicy.AMORTIZED


def estimate_cost(volume_cm3: float, weight_kg: float, material: MaterialRecord,
                  quantity=1, policy: Optional[Union[CostPolicy, str]] = None) -> CostBreakdown:
    """
    Compute setup, programming, material and machining cost plus the
    final price with margin.

    volume_cm3 is carried for callers that price by volume; the current
    cost model is driven by weight alone.
    """
    quantity = normalize_quantity(quantity)
    policy = resolve_policy(policy)
    weight_kg = max(weight_kg, 0.0)

    material_cost = weight_kg * material.price_per_kg
    machining_cost = weight_kg * MACHINE_TIME_FACTOR * RATE_PER_MINUTE

    if policy == CostPolicy.BATCH:
        setup_cost = SETUP_COST
        programming_cost = PROGRAMMING_COST
        material_cost *= quantity
        machining_cost *= quantity
    else:
        setup_cost = SETUP_COST / quantity
        programming_cost = PROGRAMMING_COST / quantity

    final_price = (setup_cost + programming_cost + material_cost + machining_cost) * MARGIN_FACTOR

    logger.info(f"Cost ({policy.value}, qty={quantity}, {volume_cm3:.2f}cm3, {weight_kg:.3f}kg): "
                f"setup={setup_cost:.2f} programming={programming_cost:.2f} "
                f"material={material_cost:.2f} machining={machining_cost:.2f} final={final_price:.2f}")

    return CostBreakdown(
        setup_cost=setup_cost,
        programming_cost=programming_cost,
        material_cost=material_cost,
        machining_cost=machining_cost,
        final_price=final_price,
        quantity=quantity,
        policy=policy,
    )
