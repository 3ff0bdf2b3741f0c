from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from datetime import datetime
from mfg_dashboard.database import Base


class Project(Base):
    """
    Production project tracked on the manufacturing dashboard.

    Milestone dates are kept as the ISO strings the planners entered.
    They are parsed only when a status is derived, so a malformed value
    is preserved here and simply treated as "not reached" later on.

    ``status`` is either derived from the milestones or, when
    ``manual_status`` is set, an operator override that automatic
    recomputation must leave alone.
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_number = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=True)
    location = Column(String, nullable=True)
    team = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    # Production milestones (ISO dates, all optional)
    fabrication_start = Column(String, nullable=True)
    assembly_start = Column(String, nullable=True)
    wrap_graphics = Column(String, nullable=True)
    ntc_testing = Column(String, nullable=True)
    qc_start = Column(String, nullable=True)
    ship = Column(String, nullable=True)

    # Other schedule dates; they do not drive the status
    contract_date = Column(String, nullable=True)
    chassis_eta = Column(String, nullable=True)
    executive_review = Column(String, nullable=True)
    delivery = Column(String, nullable=True)

    # Lifecycle status
    status = Column(String, nullable=False, default="NOT_STARTED")
    manual_status = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_project_status', 'status'),
        Index('idx_project_updated', 'updated_at'),
    )
