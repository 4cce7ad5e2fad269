"""Order service helpers."""

from .service import (
    coerce_status,
    coerce_zone,
    create_order,
    get_order,
    list_orders,
    optimize_orders,
    summarize_orders,
    update_status,
)

__all__ = [
    "create_order",
    "list_orders",
    "get_order",
    "update_status",
    "summarize_orders",
    "optimize_orders",
    "coerce_zone",
    "coerce_status",
]
