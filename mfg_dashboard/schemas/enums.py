from enum import Enum


class ProjectStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_FAB = "IN FAB"
    IN_ASSEMBLY = "IN ASSEMBLY"
    IN_WRAP = "IN WRAP"
    IN_NTC_TESTING = "IN NTC TESTING"
    IN_QC = "IN QC"
    SHIPPING = "SHIPPING"
    COMPLETED = "COMPLETED"


class RequirementStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class DurationBand(str, Enum):
    """Traffic-light rating for a stage length in working days."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
