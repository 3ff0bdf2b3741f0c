"""
Project management router.

CRUD for production projects plus the status endpoints: derive the
milestone-based status, pin or release a manual override, and render
the production timeline. Statuses can also be derived for milestones sent
in the request without touching the database.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from mfg_dashboard.database import get_db
from mfg_dashboard.models.project import Project
from mfg_dashboard.schemas.enums import ProjectStatus
from mfg_dashboard.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse,
    ProjectStatusInput,
    ProjectStatusResponse,
    DerivedStatusResponse,
    StatusOverride,
    StatusRefreshResponse,
)
from mfg_dashboard.schemas.timeline import ProductionTimeline
from mfg_dashboard.utils.project import (
    get_project_by_id,
    get_project_by_number,
    milestones_changed,
    apply_derived_status,
    set_manual_status,
    clear_manual_status,
    refresh_project_statuses,
)
from mfg_dashboard.utils.project_status import current_date, derive_status, find_out_of_order_milestones
from mfg_dashboard.utils.production_timeline import build_timeline
from mfg_dashboard.utils.stage_durations import stage_durations

router = APIRouter(tags=["Projects"])


def _get_project_or_404(db: Session, project_id: int) -> Project:
    project = get_project_by_id(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("/projects/", response_model=ProjectResponse)
def create_project(
    project: ProjectCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new project.

    The status is derived from the milestone dates straight away.
    """
    if get_project_by_number(db, project.project_number):
        raise HTTPException(status_code=400, detail="Project number already exists")

    new_project = Project(
        **project.model_dump(),
        status=ProjectStatus.NOT_STARTED.value,
        manual_status=False,
    )
    apply_derived_status(new_project, current_date())
    db.add(new_project)
    db.commit()
    db.refresh(new_project)
    return new_project


@router.get("/projects/", response_model=List[ProjectListResponse])
def list_projects(
    status: Optional[ProjectStatus] = None,
    db: Session = Depends(get_db)
):
    """
    List all projects, most recently updated first.

    Can filter by the stored status.
    """
    query = db.query(Project)

    if status:
        query = query.filter(Project.status == status.value)

    return query.order_by(Project.updated_at.desc(), Project.id.desc()).all()


@router.post("/projects/refresh-statuses", response_model=StatusRefreshResponse)
def refresh_statuses(
    as_of: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Re-derive and store the status of every project without a manual override."""
    as_of = as_of or current_date()
    counts = refresh_project_statuses(db, as_of)
    db.commit()
    return StatusRefreshResponse(as_of=as_of, **counts)


@router.post("/projects/status/calculate", response_model=DerivedStatusResponse)
def calculate_project_status(
    project: ProjectStatusInput,
    as_of: Optional[date] = None,
):
    """
    Derive a status from milestones sent in the request.

    Nothing is read from or written to the database.
    """
    as_of = as_of or current_date()
    return DerivedStatusResponse(
        status=derive_status(project, as_of),
        as_of=as_of,
        out_of_order_milestones=find_out_of_order_milestones(project),
        durations=stage_durations(project),
    )


@router.get("/projects/by-number/{project_number}", response_model=ProjectResponse)
def get_project_by_project_number(
    project_number: str,
    db: Session = Depends(get_db)
):
    project = get_project_by_number(db, project_number)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    return _get_project_or_404(db, project_id)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a project's details and milestone dates.

    Changing any milestone re-derives the status, unless an operator
    has set it manually.
    """
    project = _get_project_or_404(db, project_id)

    changes = project_update.model_dump(exclude_unset=True)
    if "project_number" in changes and changes["project_number"] != project.project_number:
        if changes["project_number"] is None or get_project_by_number(db, changes["project_number"]):
            raise HTTPException(status_code=400, detail="Invalid or duplicate project number")

    for field, value in changes.items():
        setattr(project, field, value)

    if milestones_changed(changes):
        apply_derived_status(project, current_date())

    db.commit()
    db.refresh(project)
    return project


@router.delete("/projects/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a project and its production orders.

    Use with caution - this action cannot be undone.
    """
    project = _get_project_or_404(db, project_id)

    db.delete(project)
    db.commit()
    return {"message": "Project deleted successfully"}


@router.get("/projects/{project_id}/status", response_model=ProjectStatusResponse)
def get_project_status(
    project_id: int,
    as_of: Optional[date] = None,
    persist: bool = False,
    db: Session = Depends(get_db)
):
    """
    Derive the project's status as of a day (default: today).

    With ``persist=true`` the derived status is also stored. Manually set
    statuses are reported as-is and never overwritten.
    """
    project = _get_project_or_404(db, project_id)
    as_of = as_of or current_date()

    stored_status = project.status
    status = derive_status(project, as_of)

    persisted = False
    if persist and apply_derived_status(project, as_of):
        db.commit()
        persisted = True

    return ProjectStatusResponse(
        project_id=project.id,
        status=status,
        stored_status=stored_status,
        manual_status=project.manual_status,
        as_of=as_of,
        persisted=persisted,
        out_of_order_milestones=find_out_of_order_milestones(project),
        durations=stage_durations(project),
    )


@router.put("/projects/{project_id}/status", response_model=ProjectResponse)
def override_project_status(
    project_id: int,
    override: StatusOverride,
    db: Session = Depends(get_db)
):
    """Pin the status by hand; milestone changes no longer move it."""
    project = _get_project_or_404(db, project_id)

    set_manual_status(project, override.status)
    db.commit()
    db.refresh(project)
    return project


@router.delete("/projects/{project_id}/status/override", response_model=ProjectResponse)
def clear_project_status_override(
    project_id: int,
    as_of: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Release a manual status and re-derive it from the milestones."""
    project = _get_project_or_404(db, project_id)

    clear_manual_status(project, as_of or current_date())
    db.commit()
    db.refresh(project)
    return project


@router.get("/projects/{project_id}/timeline", response_model=ProductionTimeline)
def get_project_timeline(
    project_id: int,
    as_of: Optional[date] = None,
    db: Session = Depends(get_db)
):
    project = _get_project_or_404(db, project_id)
    return build_timeline(project, as_of or current_date())
