"""
Project lifecycle status derivation.

A project's status follows its production milestones: the latest milestone
whose date has been reached decides the status. Operators can pin a status
by hand (``manual_status``), in which case the stored value always wins.

``derive_status`` is pure: the caller passes the "as of" calendar date.
Use ``current_date`` / ``current_status`` when "today" in the plant's
reference timezone is wanted.
"""
import logging
import re
from datetime import date, datetime
from typing import Any, List, Optional, Tuple
from zoneinfo import ZoneInfo

from mfg_dashboard.core.config import settings
from mfg_dashboard.schemas.enums import ProjectStatus

logger = logging.getLogger(__name__)

# YYYY-MM-DD, optionally followed by a time part
ISO_DATE_PREFIX = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:[T ]|$)")

# Milestones in production order
MILESTONE_FIELDS = (
    "fabrication_start",
    "assembly_start",
    "wrap_graphics",
    "ntc_testing",
    "qc_start",
    "ship",
)

# Checked latest stage first; ship is handled separately (SHIPPING vs COMPLETED)
STAGE_STATUSES = (
    ("qc_start", ProjectStatus.IN_QC),
    ("ntc_testing", ProjectStatus.IN_NTC_TESTING),
    ("wrap_graphics", ProjectStatus.IN_WRAP),
    ("assembly_start", ProjectStatus.IN_ASSEMBLY),
    ("fabrication_start", ProjectStatus.IN_FAB),
)


def parse_milestone_date(value: Any) -> Optional[date]:
    """
    Turn a stored milestone value into a calendar date.

    Returns None for anything that is missing or cannot be parsed, which
    callers treat as "milestone not reached". Datetime strings keep the
    calendar date as written; no timezone conversion is applied.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if not ISO_DATE_PREFIX.match(text):
        logger.debug("Ignoring unparseable milestone date %r", value)
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        logger.debug("Ignoring unparseable milestone date %r", value)
        return None


def as_calendar_date(as_of) -> date:
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


def derive_status(project, as_of) -> ProjectStatus:
    """
    Derive the lifecycle status of ``project`` on the calendar day ``as_of``.

    ``project`` is anything exposing ``status``, ``manual_status`` and the
    milestone attributes (an ORM row or a ``ProjectStatusInput``).

    - manual_status set: the stored status is returned unchanged
    - ship reached: SHIPPING on the ship day itself, COMPLETED afterwards
    - otherwise the latest reached milestone decides, else NOT_STARTED

    Milestone order is not validated; with out-of-order dates the latest
    stage that has been reached still wins.
    """
    if getattr(project, "manual_status", False):
        logger.debug("Manual status %s kept", project.status)
        return project.status

    today = as_calendar_date(as_of)

    ship = parse_milestone_date(getattr(project, "ship", None))
    if ship is not None and today >= ship:
        status = ProjectStatus.SHIPPING if today == ship else ProjectStatus.COMPLETED
        logger.debug("Ship date %s reached on %s: %s", ship, today, status.value)
        return status

    for field, status in STAGE_STATUSES:
        milestone = parse_milestone_date(getattr(project, field, None))
        if milestone is not None and today >= milestone:
            logger.debug("%s %s reached on %s: %s", field, milestone, today, status.value)
            return status

    logger.debug("No milestone reached on %s", today)
    return ProjectStatus.NOT_STARTED


def current_date(timezone: Optional[str] = None) -> date:
    """Today's calendar date in the reference timezone."""
    tz = ZoneInfo(timezone or settings.status_timezone)
    return datetime.now(tz).date()


def current_status(project, timezone: Optional[str] = None) -> ProjectStatus:
    return derive_status(project, current_date(timezone))


def find_out_of_order_milestones(project) -> List[Tuple[str, str]]:
    """
    List consecutive (earlier, later) milestone pairs whose dates run backwards.

    Only milestones with a parseable date take part. Derivation does not use
    this; it is reported so planners can spot data-entry mistakes.
    """
    dated = []
    for field in MILESTONE_FIELDS:
        milestone = parse_milestone_date(getattr(project, field, None))
        if milestone is not None:
            dated.append((field, milestone))

    return [
        (earlier, later)
        for (earlier, earlier_date), (later, later_date) in zip(dated, dated[1:])
        if later_date < earlier_date
    ]
