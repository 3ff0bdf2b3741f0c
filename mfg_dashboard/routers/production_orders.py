from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from mfg_dashboard.database import get_db
from mfg_dashboard import models, schemas
from mfg_dashboard.utils.project import get_project_by_id

router = APIRouter(tags=["Production Orders"])


def query_orders(db: Session, project_id: Optional[int] = None, production_line_id: Optional[str] = None):
    query = db.query(models.ProductionOrder)

    if project_id:
        query = query.filter(models.ProductionOrder.project_id == project_id)
    if production_line_id:
        query = query.filter(models.ProductionOrder.production_line_id == production_line_id)

    return query.order_by(models.ProductionOrder.id)


@router.get("/orders/", response_model=List[schemas.ProductionOrder])
def get_orders(
    project_id: Optional[int] = None,
    production_line_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    return query_orders(db, project_id, production_line_id).all()


@router.post("/orders/", response_model=schemas.ProductionOrder)
def create_order(order: schemas.ProductionOrderCreate, db: Session = Depends(get_db)):
    """
    Create a production order with its material lines.

    Lines may reference materials that are not in stock records yet.
    """
    if order.project_id is not None and not get_project_by_id(db, order.project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    new_order = models.ProductionOrder(**order.model_dump(exclude={"materials"}))
    new_order.materials = [
        models.OrderMaterialLine(material_id=line.material_id, required_quantity=line.required_quantity)
        for line in order.materials
    ]
    db.add(new_order)
    db.commit()
    db.refresh(new_order)
    return new_order


@router.get("/orders/{order_id}", response_model=schemas.ProductionOrder)
def get_order(order_id: int, db: Session = Depends(get_db)):
    order = db.query(models.ProductionOrder).filter(models.ProductionOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Production order not found")
    return order


@router.delete("/orders/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)):
    order = db.query(models.ProductionOrder).filter(models.ProductionOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Production order not found")

    db.delete(order)
    db.commit()
    return {"message": "Production order deleted successfully"}
