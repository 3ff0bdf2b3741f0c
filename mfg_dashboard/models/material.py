from sqlalchemy import Column, Integer, String, Float, DateTime
from datetime import datetime
from mfg_dashboard.database import Base


class Material(Base):
    __tablename__ = "materials"

    # Planner-facing identifier ("M1", "ALU-SHEET-4x8", ...)
    id = Column(String, primary_key=True, index=True)
    sku = Column(String, nullable=True, index=True)
    name = Column(String, nullable=False)
    unit = Column(String, nullable=True, default="ea")

    available_stock = Column(Float, nullable=False, default=0.0)
    safety_stock = Column(Float, nullable=False, default=0.0)
    lead_time = Column(Integer, nullable=False, default=0)  # days

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class MaterialAllocation(Base):
    """Stock reserved for a project / production line."""
    __tablename__ = "material_allocations"

    id = Column(Integer, primary_key=True, index=True)
    # Not a foreign key: allocations may outlive the material record
    material_id = Column(String, nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=0.0)

    project_id = Column(Integer, nullable=True, index=True)
    production_line_id = Column(String, nullable=True, index=True)
    production_order_id = Column(Integer, nullable=True)

    status = Column(String, nullable=False, default="planned")  # planned, allocated, consumed, returned
    allocation_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    required_date = Column(String, nullable=True)
