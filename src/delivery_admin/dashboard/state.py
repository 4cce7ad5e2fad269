"""Session state for the dashboard views."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from ..errors import OrderServiceError
from ..models.domain import BatchingResult, Order, OrderStatus, OrderSummary, Zone
from .client import DeliveryAdminClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DashboardState:
    """Single source of truth for order data within one dashboard session.

    Data changes only through the action methods below; nothing is polled.
    A failed action records ``last_error`` and keeps the previously loaded data.
    """

    client: DeliveryAdminClient
    orders: list[Order] = field(default_factory=list)
    zone_filter: Optional[Zone] = None
    last_result: Optional[BatchingResult] = None
    summary: Optional[OrderSummary] = None
    last_error: Optional[str] = None
    stale: bool = False

    def _run(self, action: Callable[[], T]) -> Optional[T]:
        try:
            value = action()
        except OrderServiceError as exc:
            logger.warning(f"Dashboard action failed: {exc}")
            self.last_error = str(exc)
            return None
        self.last_error = None
        return value

    def refresh(self) -> bool:
        orders = self._run(lambda: self.client.list_orders(self.zone_filter))
        if orders is None:
            return False
        self.orders = orders
        self.stale = False
        return True

    def set_zone_filter(self, zone: Optional[Zone]) -> bool:
        self.zone_filter = zone
        return self.refresh()

    def _refresh_after_write(self) -> None:
        # The write went through; a failed reload leaves ``orders`` stale and says so
        if not self.refresh():
            self.stale = True
            self.last_error = f"Order list may be stale: {self.last_error}"

    def create_order(self, customer: str, dispensary: str, zone: Zone | str) -> Optional[Order]:
        order = self._run(lambda: self.client.create_order(customer, dispensary, zone))
        if order is not None:
            self._refresh_after_write()
        return order

    def update_status(self, order_id: str, status: OrderStatus | str) -> Optional[Order]:
        order = self._run(lambda: self.client.update_status(order_id, status))
        if order is not None:
            self._refresh_after_write()
        return order

    def load_summary(self) -> Optional[OrderSummary]:
        summary = self._run(self.client.summary)
        if summary is not None:
            self.summary = summary
        return summary

    def run_optimize(self) -> Optional[BatchingResult]:
        result = self._run(self.client.optimize)
        if result is not None:
            self.last_result = result
        return result
