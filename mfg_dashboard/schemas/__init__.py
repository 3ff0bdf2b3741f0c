from .enums import DurationBand, ProjectStatus, RequirementStatus
from .project import (
    ProjectMilestones,
    ProjectCreate,
    ProjectUpdate,
    ProjectStatusInput,
    ProjectResponse,
    ProjectListResponse,
    StatusOverride,
    ProjectStatusResponse,
    StatusRefreshResponse,
    StageDurations,
    DerivedStatusResponse,
)
from .material import (
    Material,
    MaterialCreate,
    MaterialUpdate,
    MaterialStock,
    MaterialAllocation,
    MaterialAllocationCreate,
)
from .production_order import (
    OrderMaterialLine,
    OrderMaterials,
    ProductionOrder,
    ProductionOrderCreate,
)
from .requirements import (
    MaterialRequirement,
    RequirementSummary,
    RequirementsResponse,
    RequirementsCalculateRequest,
)
from .timeline import TimelineEvent, ProductionTimeline
