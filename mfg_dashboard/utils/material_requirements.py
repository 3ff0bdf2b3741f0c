"""
Material requirements aggregation (MRP view).

Folds the material lines of a set of production orders into one
requirement per material, then classifies each shortage against the
material's safety stock.

The functions here only read attributes, so ORM rows and pydantic schemas
can both be passed in. Nothing is mutated and nothing is stored.
"""
import logging
from typing import Dict, Iterable, List, NamedTuple, Sequence

from mfg_dashboard.schemas.enums import RequirementStatus
from mfg_dashboard.schemas.requirements import MaterialRequirement, RequirementSummary

logger = logging.getLogger(__name__)


class MaterialStockLevel(NamedTuple):
    available: float
    lead_time: int
    safety_stock: float
    known: bool


# Substituted for materials that are missing from the stock lookup
UNKNOWN_MATERIAL_STOCK = MaterialStockLevel(available=0.0, lead_time=0, safety_stock=0.0, known=False)


def build_material_lookup(materials: Iterable) -> Dict[str, object]:
    """Map material id to record; the first record wins on duplicate ids."""
    lookup: Dict[str, object] = {}
    for material in materials:
        lookup.setdefault(material.id, material)
    return lookup


def resolve_material_stock(material_id: str, lookup: Dict[str, object]) -> MaterialStockLevel:
    """
    Stock figures for ``material_id``.

    Unknown materials resolve to ``UNKNOWN_MATERIAL_STOCK`` (zero stock,
    zero lead time, zero safety stock) so they surface as shortages rather
    than errors. Missing numbers on a known material count as zero.
    """
    material = lookup.get(material_id)
    if material is None:
        logger.warning("Material %s not found in stock, assuming zero availability", material_id)
        return UNKNOWN_MATERIAL_STOCK

    return MaterialStockLevel(
        available=material.available_stock or 0.0,
        lead_time=material.lead_time or 0,
        safety_stock=material.safety_stock or 0.0,
        known=True,
    )


def classify_shortage(shortage: float, safety_stock: float) -> RequirementStatus:
    if shortage <= 0:
        return RequirementStatus.OK
    if shortage > (safety_stock or 0.0):
        return RequirementStatus.CRITICAL
    return RequirementStatus.WARNING


def _allocated_by_material(allocations: Iterable) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for allocation in allocations:
        totals[allocation.material_id] = totals.get(allocation.material_id, 0.0) + (allocation.quantity or 0.0)
    return totals


def aggregate_requirements(
    orders: Iterable,
    materials: Iterable,
    allocations: Iterable = (),
) -> List[MaterialRequirement]:
    """
    Aggregate order material lines into per-material requirements.

    Args:
        orders: objects with a ``materials`` list of lines
            (``material_id``, ``required_quantity``); None means no lines
        materials: stock records (``id``, ``available_stock``,
            ``safety_stock``, ``lead_time``)
        allocations: records with ``material_id`` and ``quantity``; summed
            into ``allocated`` for display only

    Returns:
        One MaterialRequirement per material, in the order each material
        was first seen across the orders' lines.
    """
    lookup = build_material_lookup(materials)
    allocated = _allocated_by_material(allocations)

    # Insertion order of this dict is the output order
    requirements: Dict[str, dict] = {}
    safety_stock: Dict[str, float] = {}

    for order in orders:
        for line in getattr(order, "materials", None) or []:
            quantity = line.required_quantity or 0.0
            entry = requirements.get(line.material_id)
            if entry is not None:
                entry["required"] += quantity
                continue

            stock = resolve_material_stock(line.material_id, lookup)
            safety_stock[line.material_id] = stock.safety_stock
            requirements[line.material_id] = {
                "material_id": line.material_id,
                "required": quantity,
                "available": stock.available,
                "allocated": allocated.get(line.material_id, 0.0),
                "lead_time": stock.lead_time,
                "known_material": stock.known,
            }

    result = []
    for material_id, entry in requirements.items():
        shortage = max(0.0, entry["required"] - entry["available"])
        result.append(MaterialRequirement(
            shortage=shortage,
            status=classify_shortage(shortage, safety_stock[material_id]),
            **entry,
        ))
    return result


def summarize_requirements(requirements: Sequence[MaterialRequirement], order_count: int) -> RequirementSummary:
    """Headline numbers for the MRP dashboard cards."""
    return RequirementSummary(
        total_materials=len(requirements),
        critical_shortages=sum(1 for r in requirements if r.status == RequirementStatus.CRITICAL),
        warnings=sum(1 for r in requirements if r.status == RequirementStatus.WARNING),
        pending_orders=order_count,
        total_shortage=sum(r.shortage for r in requirements),
    )
