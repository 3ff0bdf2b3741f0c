import datetime
from pydantic import BaseModel
from typing import List, Optional
from mfg_dashboard.schemas.enums import ProjectStatus


class TimelineEvent(BaseModel):
    key: str
    label: str
    type: str
    date: datetime.date
    reached: bool
    position: float = 0.0
    needs_offset: bool = False


class ProductionTimeline(BaseModel):
    as_of: datetime.date
    status: ProjectStatus
    progress: float
    events: List[TimelineEvent]
    next_milestone: Optional[TimelineEvent] = None
    shipping_message: Optional[str] = None
