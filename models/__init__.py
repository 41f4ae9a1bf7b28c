# models/__init__.py
from .work_order import (
    InvalidWorkOrderError,
    WorkOrderCustomer,
    WorkOrderDetail,
    WorkOrderLineItem,
)

__all__ = [
    "InvalidWorkOrderError",
    "WorkOrderCustomer",
    "WorkOrderDetail",
    "WorkOrderLineItem",
]
