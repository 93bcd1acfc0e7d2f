from kitchen_ops.models.menu import MenuItem, Ingredient
from kitchen_ops.models.food_safety import CriticalControlPoint, Hazard, HACCPPlan
from kitchen_ops.models.asset import Asset
from kitchen_ops.models.operation_report import OperationReport
from kitchen_ops.models.sale import Sale
from kitchen_ops.models.checklist import ChecklistMaster

__all__ = [
    "MenuItem",
    "Ingredient",
    "CriticalControlPoint",
    "Hazard",
    "HACCPPlan",
    "Asset",
    "OperationReport",
    "Sale",
    "ChecklistMaster",
]
