from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship, backref
from datetime import datetime
from mfg_dashboard.database import Base


class ProductionOrder(Base):
    __tablename__ = "production_orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, nullable=False, index=True)
    product_name = Column(String, nullable=True)
    quantity = Column(Float, nullable=False, default=1.0)
    status = Column(String, nullable=False, default="scheduled")  # scheduled, in_progress, completed, on_hold

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    production_line_id = Column(String, nullable=True, index=True)

    start_date = Column(String, nullable=True)
    due_date = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    project = relationship("Project", backref=backref("orders", cascade="all, delete-orphan"))
    materials = relationship(
        "OrderMaterialLine",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderMaterialLine.id",
    )


class OrderMaterialLine(Base):
    """
    One material requirement of a production order.

    ``material_id`` is a plain string, not a foreign key. A line may point at a
    material that is not (or no longer) in the materials table, and the
    requirements aggregation reports it as a zero-stock shortage.
    """
    __tablename__ = "order_material_lines"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("production_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    material_id = Column(String, nullable=False, index=True)
    required_quantity = Column(Float, nullable=False, default=0.0)

    order = relationship("ProductionOrder", back_populates="materials")
