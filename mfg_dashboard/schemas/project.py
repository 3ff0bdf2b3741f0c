from pydantic import BaseModel, Field
from typing import Optional, List, Tuple
from datetime import date, datetime
from mfg_dashboard.schemas.enums import DurationBand, ProjectStatus


class ProjectMilestones(BaseModel):
    """Milestone dates as entered by planners (ISO date strings)."""
    fabrication_start: Optional[str] = None
    assembly_start: Optional[str] = None
    wrap_graphics: Optional[str] = None
    ntc_testing: Optional[str] = None
    qc_start: Optional[str] = None
    ship: Optional[str] = None


class ProjectBase(ProjectMilestones):
    """Base schema for Project"""
    project_number: str = Field(min_length=1)
    name: Optional[str] = None
    location: Optional[str] = None
    team: Optional[str] = None
    notes: Optional[str] = None
    contract_date: Optional[str] = None
    chassis_eta: Optional[str] = None
    executive_review: Optional[str] = None
    delivery: Optional[str] = None


class ProjectCreate(ProjectBase):
    """Schema for creating a new project - status is derived from the milestones"""
    pass


class ProjectUpdate(BaseModel):
    """Schema for updating a project (only provided fields are changed)"""
    project_number: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = None
    location: Optional[str] = None
    team: Optional[str] = None
    notes: Optional[str] = None
    fabrication_start: Optional[str] = None
    assembly_start: Optional[str] = None
    wrap_graphics: Optional[str] = None
    ntc_testing: Optional[str] = None
    qc_start: Optional[str] = None
    ship: Optional[str] = None
    contract_date: Optional[str] = None
    chassis_eta: Optional[str] = None
    executive_review: Optional[str] = None
    delivery: Optional[str] = None


class ProjectStatusInput(ProjectMilestones):
    """Status-relevant fields of a project, usable without a database row."""
    status: ProjectStatus = ProjectStatus.NOT_STARTED
    manual_status: bool = False
    executive_review: Optional[str] = None


class ProjectResponse(ProjectBase):
    """Schema for project response"""
    id: int
    status: ProjectStatus
    manual_status: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    """Schema for listing projects"""
    id: int
    project_number: str
    name: Optional[str] = None
    location: Optional[str] = None
    status: ProjectStatus
    manual_status: bool
    qc_start: Optional[str] = None
    ship: Optional[str] = None
    updated_at: datetime

    class Config:
        from_attributes = True


class StatusOverride(BaseModel):
    """Operator-set status; suppresses recomputation until cleared"""
    status: ProjectStatus


class StageDurations(BaseModel):
    """Working-day lengths of the NTC and QC stages (0 when not scheduled)"""
    ntc_days: int = 0
    ntc_band: DurationBand = DurationBand.GREEN
    qc_days: int = 0
    qc_band: DurationBand = DurationBand.GREEN


class DerivedStatusResponse(BaseModel):
    status: ProjectStatus
    as_of: date
    out_of_order_milestones: List[Tuple[str, str]] = []
    durations: StageDurations = StageDurations()


class ProjectStatusResponse(DerivedStatusResponse):
    project_id: int
    stored_status: ProjectStatus
    manual_status: bool
    persisted: bool = False


class StatusRefreshResponse(BaseModel):
    as_of: date
    evaluated: int
    updated: int
    skipped_manual: int
