from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from mfg_dashboard.database import get_db
from mfg_dashboard import models, schemas

router = APIRouter(tags=["Materials"])


# Materials

@router.get("/materials/", response_model=List[schemas.Material])
def get_materials(db: Session = Depends(get_db)):
    return db.query(models.Material).order_by(models.Material.id).all()


@router.post("/materials/", response_model=schemas.Material)
def create_material(material: schemas.MaterialCreate, db: Session = Depends(get_db)):
    if db.query(models.Material).filter(models.Material.id == material.id).first():
        raise HTTPException(status_code=400, detail="Material already exists")

    new_material = models.Material(**material.model_dump())
    db.add(new_material)
    db.commit()
    db.refresh(new_material)
    return new_material


@router.get("/materials/{material_id}", response_model=schemas.Material)
def get_material(material_id: str, db: Session = Depends(get_db)):
    material = db.query(models.Material).filter(models.Material.id == material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")
    return material


@router.put("/materials/{material_id}", response_model=schemas.Material)
def update_material(material_id: str, update: schemas.MaterialUpdate, db: Session = Depends(get_db)):
    material = db.query(models.Material).filter(models.Material.id == material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")

    for field, value in update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(material, field, value)

    db.commit()
    db.refresh(material)
    return material


@router.delete("/materials/{material_id}")
def delete_material(material_id: str, db: Session = Depends(get_db)):
    """
    Delete a material.

    Order lines that still reference it stay in place and show up as
    zero-stock shortages in the requirements view.
    """
    material = db.query(models.Material).filter(models.Material.id == material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")

    db.delete(material)
    db.commit()
    return {"message": "Material deleted successfully"}


# Allocations

@router.get("/allocations/", response_model=List[schemas.MaterialAllocation])
def get_allocations(
    material_id: Optional[str] = None,
    project_id: Optional[int] = None,
    production_line_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    query = db.query(models.MaterialAllocation)

    if material_id:
        query = query.filter(models.MaterialAllocation.material_id == material_id)
    if project_id:
        query = query.filter(models.MaterialAllocation.project_id == project_id)
    if production_line_id:
        query = query.filter(models.MaterialAllocation.production_line_id == production_line_id)

    return query.order_by(models.MaterialAllocation.id).all()


@router.post("/allocations/", response_model=schemas.MaterialAllocation)
def create_allocation(allocation: schemas.MaterialAllocationCreate, db: Session = Depends(get_db)):
    material = db.query(models.Material).filter(models.Material.id == allocation.material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")

    new_allocation = models.MaterialAllocation(**allocation.model_dump())
    db.add(new_allocation)
    db.commit()
    db.refresh(new_allocation)
    return new_allocation
