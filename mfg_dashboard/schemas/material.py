from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class MaterialBase(BaseModel):
    sku: Optional[str] = None
    name: str
    unit: Optional[str] = "ea"
    available_stock: float = 0.0
    safety_stock: float = Field(default=0.0, ge=0)
    lead_time: int = Field(default=0, ge=0)


class MaterialCreate(MaterialBase):
    id: str


class MaterialUpdate(BaseModel):
    sku: Optional[str] = None
    name: Optional[str] = None
    unit: Optional[str] = None
    available_stock: Optional[float] = None
    safety_stock: Optional[float] = Field(default=None, ge=0)
    lead_time: Optional[int] = Field(default=None, ge=0)


class Material(MaterialBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MaterialStock(BaseModel):
    """Stock snapshot of a material, as consumed by the requirements aggregation."""
    id: str
    available_stock: Optional[float] = 0.0
    safety_stock: Optional[float] = 0.0
    lead_time: Optional[int] = 0


class MaterialAllocationBase(BaseModel):
    material_id: str
    quantity: float = Field(default=0.0, ge=0)
    project_id: Optional[int] = None
    production_line_id: Optional[str] = None
    production_order_id: Optional[int] = None
    status: Optional[str] = "planned"
    required_date: Optional[str] = None


class MaterialAllocationCreate(MaterialAllocationBase):
    pass


class MaterialAllocation(MaterialAllocationBase):
    id: int
    allocation_date: datetime

    class Config:
        from_attributes = True
