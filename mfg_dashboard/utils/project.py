"""
Utility functions for managing projects.

Lookups plus the bits of glue that keep a stored project status in step
with its milestones. Callers own the transaction: nothing here commits.
"""
import logging
from datetime import date
from sqlalchemy.orm import Session
from mfg_dashboard.models.project import Project
from mfg_dashboard.schemas.enums import ProjectStatus
from mfg_dashboard.utils.project_status import MILESTONE_FIELDS, derive_status
from typing import Dict, Optional

logger = logging.getLogger(__name__)


def get_project_by_id(db: Session, project_id: int) -> Optional[Project]:
    """
    Get a project by its unique ID.

    Returns:
        Project instance if found, None otherwise
    """
    return db.query(Project).filter(Project.id == project_id).first()


def get_project_by_number(db: Session, project_number: str) -> Optional[Project]:
    if project_number is None:
        return None
    return db.query(Project).filter(Project.project_number == project_number).first()


def milestones_changed(changes: Dict[str, object]) -> bool:
    return any(field in changes for field in MILESTONE_FIELDS)


def apply_derived_status(project: Project, as_of: date) -> bool:
    """
    Store the derived status on ``project`` unless it is manually set.

    Returns:
        True if the stored status changed
    """
    if project.manual_status:
        return False

    status = derive_status(project, as_of)
    if project.status == status.value:
        return False

    logger.info(
        "Project %s status %s -> %s (as of %s)",
        project.project_number, project.status, status.value, as_of
    )
    project.status = status.value
    return True


def set_manual_status(project: Project, status: ProjectStatus) -> None:
    logger.info("Project %s status manually set to %s", project.project_number, status.value)
    project.status = status.value
    project.manual_status = True


def clear_manual_status(project: Project, as_of: date) -> None:
    """Hand the status back to milestone derivation."""
    project.manual_status = False
    apply_derived_status(project, as_of)


def refresh_project_statuses(db: Session, as_of: date) -> Dict[str, int]:
    """
    Re-derive and store the status of every project that is not manually set.

    Note:
        Caller is responsible for committing the transaction.
    """
    counts = {"evaluated": 0, "updated": 0, "skipped_manual": 0}
    for project in db.query(Project).all():
        if project.manual_status:
            counts["skipped_manual"] += 1
            continue
        counts["evaluated"] += 1
        if apply_derived_status(project, as_of):
            counts["updated"] += 1

    db.flush()
    return counts
