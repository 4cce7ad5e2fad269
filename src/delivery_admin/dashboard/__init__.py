"""Dashboard client, session state and text views."""

from .client import ApiError, DeliveryAdminClient
from .state import DashboardState
from .views import render_batches, render_orders, render_summary

__all__ = [
    "ApiError",
    "DeliveryAdminClient",
    "DashboardState",
    "render_orders",
    "render_batches",
    "render_summary",
]
