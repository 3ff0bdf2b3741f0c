"""
Production timeline view-model.

Lays a project's milestones out on a 0-100 scale, works out how far the
build has progressed between its start and ship dates and produces the
shipping countdown shown above the timeline.
"""
from datetime import date
from typing import List, Optional

from mfg_dashboard.schemas.timeline import ProductionTimeline, TimelineEvent
from mfg_dashboard.utils.project_status import as_calendar_date, derive_status, parse_milestone_date

# (field, label, type) in display order
TIMELINE_MILESTONES = (
    ("fabrication_start", "Fabrication Start", "fab"),
    ("assembly_start", "Assembly Start", "assembly"),
    ("wrap_graphics", "Wrap/Graphics", "wrap"),
    ("ntc_testing", "NTC Testing", "ntc"),
    ("qc_start", "QC Start", "qc"),
    ("ship", "Ship", "ship"),
)

# Markers closer than this (in percent of the timeline) get staggered
MIN_MARKER_GAP = 15.0
FIRST_MARKER_PREVIOUS_POSITION = -20.0


def milestone_events(project, as_of) -> List[TimelineEvent]:
    today = as_calendar_date(as_of)

    dated = []
    for field, label, event_type in TIMELINE_MILESTONES:
        milestone = parse_milestone_date(getattr(project, field, None))
        if milestone is None:
            continue
        if field == "ship" and today > milestone:
            label = "SHIPPED"
        dated.append((field, label, event_type, milestone))

    if not dated:
        return []

    start = dated[0][3]
    span = (dated[-1][3] - start).days

    events = []
    previous_position = FIRST_MARKER_PREVIOUS_POSITION
    for field, label, event_type, milestone in dated:
        position = ((milestone - start).days / span) * 100 if span else 0.0
        events.append(TimelineEvent(
            key=field,
            label=label,
            type=event_type,
            date=milestone,
            reached=milestone <= today,
            position=position,
            needs_offset=position - previous_position < MIN_MARKER_GAP,
        ))
        previous_position = position
    return events


def timeline_progress(project, as_of) -> float:
    """
    Percentage of the build elapsed on ``as_of``.

    The build runs from fabrication start (assembly start when fabrication
    has no date) to the ship date. Without both ends the progress is 0.
    """
    today = as_calendar_date(as_of)
    start = parse_milestone_date(getattr(project, "fabrication_start", None)) \
        or parse_milestone_date(getattr(project, "assembly_start", None))
    end = parse_milestone_date(getattr(project, "ship", None))
    if start is None or end is None:
        return 0.0

    total = (end - start).days
    if total <= 0:
        return 100.0 if today >= end else 0.0

    elapsed = (today - start).days
    return min(100.0, max(0.0, elapsed / total * 100))


def next_milestone(events: List[TimelineEvent], as_of) -> Optional[TimelineEvent]:
    today = as_calendar_date(as_of)
    for event in events:
        if event.date >= today:
            return event
    return None


def shipping_message(project, as_of) -> Optional[str]:
    today = as_calendar_date(as_of)
    ship = parse_milestone_date(getattr(project, "ship", None))
    if ship is None:
        return None
    if ship == today:
        return "SHIPPING TODAY"
    if today > ship:
        return "SHIPPED"
    return f"{(ship - today).days} days until shipping"


def build_timeline(project, as_of: date) -> ProductionTimeline:
    as_of = as_calendar_date(as_of)
    events = milestone_events(project, as_of)
    return ProductionTimeline(
        as_of=as_of,
        status=derive_status(project, as_of),
        progress=round(timeline_progress(project, as_of), 2),
        events=events,
        next_milestone=next_milestone(events, as_of),
        shipping_message=shipping_message(project, as_of),
    )
