from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class OrderMaterialLine(BaseModel):
    material_id: str
    required_quantity: float = Field(default=0.0, ge=0)

    class Config:
        from_attributes = True


class OrderMaterials(BaseModel):
    """An order reduced to its material lines."""
    id: Optional[int] = None
    materials: Optional[List[OrderMaterialLine]] = None


class ProductionOrderCreate(BaseModel):
    order_number: str
    product_name: Optional[str] = None
    quantity: float = Field(default=1.0, gt=0)
    status: Optional[str] = "scheduled"
    project_id: Optional[int] = None
    production_line_id: Optional[str] = None
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    materials: List[OrderMaterialLine] = []


class ProductionOrder(BaseModel):
    id: int
    order_number: str
    product_name: Optional[str] = None
    quantity: float
    status: str
    project_id: Optional[int] = None
    production_line_id: Optional[str] = None
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    materials: List[OrderMaterialLine] = []
    created_at: datetime

    class Config:
        from_attributes = True
