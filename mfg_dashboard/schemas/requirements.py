from pydantic import BaseModel
from typing import List
from mfg_dashboard.schemas.enums import RequirementStatus
from mfg_dashboard.schemas.material import MaterialStock, MaterialAllocationBase
from mfg_dashboard.schemas.production_order import OrderMaterials


class MaterialRequirement(BaseModel):
    """
    Aggregated requirement for one material.

    Derived on every request from the current orders and stock; never stored.
    """
    material_id: str
    required: float
    available: float
    allocated: float = 0.0
    shortage: float = 0.0
    lead_time: int = 0
    status: RequirementStatus = RequirementStatus.OK
    known_material: bool = True


class RequirementSummary(BaseModel):
    total_materials: int
    critical_shortages: int
    warnings: int
    pending_orders: int
    total_shortage: float


class RequirementsResponse(BaseModel):
    requirements: List[MaterialRequirement]
    summary: RequirementSummary


class RequirementsCalculateRequest(BaseModel):
    """Ad-hoc aggregation input; ``orders`` and ``materials`` are required."""
    orders: List[OrderMaterials]
    materials: List[MaterialStock]
    allocations: List[MaterialAllocationBase] = []
