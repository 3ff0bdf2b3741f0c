from .project import Project
from .material import Material, MaterialAllocation
from .production_order import ProductionOrder, OrderMaterialLine
