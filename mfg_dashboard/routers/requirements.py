"""
Material requirements planning router.

Both endpoints run the same aggregation; one loads its inputs from the
database, the other takes them from the request body.
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from mfg_dashboard.database import get_db
from mfg_dashboard import models, schemas
from mfg_dashboard.routers.production_orders import query_orders
from mfg_dashboard.utils.material_requirements import aggregate_requirements, summarize_requirements

logger = logging.getLogger(__name__)

router = APIRouter(tags=["MRP"])


@router.get("/requirements/", response_model=schemas.RequirementsResponse)
def get_requirements(
    project_id: Optional[int] = None,
    production_line_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Material requirements for the orders of a project and/or production line.

    Orders and allocations are narrowed to the scope; stock levels come
    from all materials. Nothing is written back.
    """
    orders = query_orders(db, project_id, production_line_id).all()
    materials = db.query(models.Material).all()

    allocations = db.query(models.MaterialAllocation)
    if project_id:
        allocations = allocations.filter(models.MaterialAllocation.project_id == project_id)
    if production_line_id:
        allocations = allocations.filter(models.MaterialAllocation.production_line_id == production_line_id)

    requirements = aggregate_requirements(orders, materials, allocations.all())
    logger.info(
        "MRP for project=%s line=%s: %d orders, %d materials",
        project_id, production_line_id, len(orders), len(requirements)
    )
    return schemas.RequirementsResponse(
        requirements=requirements,
        summary=summarize_requirements(requirements, len(orders)),
    )


@router.post("/requirements/calculate", response_model=schemas.RequirementsResponse)
def calculate_requirements(payload: schemas.RequirementsCalculateRequest):
    """Aggregate requirements for orders and stock supplied in the request."""
    requirements = aggregate_requirements(payload.orders, payload.materials, payload.allocations)
    return schemas.RequirementsResponse(
        requirements=requirements,
        summary=summarize_requirements(requirements, len(payload.orders)),
    )
