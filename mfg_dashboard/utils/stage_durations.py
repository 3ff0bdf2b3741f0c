"""
Working-day lengths of the late production stages.

NTC days run from NTC testing to QC start. QC days run from QC start to the
executive review, or to the ship date when no review is scheduled. Both
ends are counted and weekends are skipped; holidays are not known here.
Any missing or unparseable end makes the length 0.
"""
from datetime import timedelta

from mfg_dashboard.schemas.enums import DurationBand
from mfg_dashboard.schemas.project import StageDurations
from mfg_dashboard.utils.project_status import parse_milestone_date

# Upper bounds (inclusive) of the green and yellow bands
GREEN_MAX_DAYS = 3
YELLOW_MAX_DAYS = 7


def working_days(start, end) -> int:
    """Monday-to-Friday days from ``start`` to ``end``, both included."""
    start = parse_milestone_date(start)
    end = parse_milestone_date(end)
    if start is None or end is None or end < start:
        return 0

    full_weeks, extra = divmod((end - start).days + 1, 7)
    days = full_weeks * 5
    for offset in range(extra):
        if (start + timedelta(days=offset)).weekday() < 5:
            days += 1
    return days


def ntc_days(project) -> int:
    return working_days(getattr(project, "ntc_testing", None), getattr(project, "qc_start", None))


def qc_days(project) -> int:
    end = getattr(project, "executive_review", None)
    if parse_milestone_date(end) is None:
        end = getattr(project, "ship", None)
    return working_days(getattr(project, "qc_start", None), end)


def duration_band(days: int) -> DurationBand:
    if days <= GREEN_MAX_DAYS:
        return DurationBand.GREEN
    if days <= YELLOW_MAX_DAYS:
        return DurationBand.YELLOW
    return DurationBand.RED


def stage_durations(project) -> StageDurations:
    ntc = ntc_days(project)
    qc = qc_days(project)
    return StageDurations(
        ntc_days=ntc,
        ntc_band=duration_band(ntc),
        qc_days=qc,
        qc_band=duration_band(qc),
    )
