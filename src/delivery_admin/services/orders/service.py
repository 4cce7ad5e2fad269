"""Order service: create, list, look up and update delivery orders."""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Optional

from ...config import settings
from ...errors import NotFoundError, ValidationError
from ...models.domain import BatchingResult, Order, OrderStatus, OrderSummary, Zone
from ...persistence.orders import OrderStore, get_order_store
from ..batching import optimize

logger = logging.getLogger(__name__)


def _require_text(value: Any, field: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field}' is required")
    return value.strip()


def coerce_zone(value: Any) -> Zone:
    """Resolve a zone from an enum member or its display name (case-insensitive)."""
    if isinstance(value, Zone):
        return value
    text = _require_text(value, "zone")
    for zone in Zone:
        if zone.value.lower() == text.lower():
            return zone
    allowed = ", ".join(zone.value for zone in Zone)
    raise ValidationError(f"Unknown zone '{text}'. Expected one of: {allowed}")


def coerce_status(value: Any) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    text = _require_text(value, "status")
    try:
        return OrderStatus(text.upper())
    except ValueError as exc:
        allowed = ", ".join(status.value for status in OrderStatus)
        raise ValidationError(f"Unknown status '{text}'. Expected one of: {allowed}") from exc


def create_order(
    customer: Any,
    dispensary: Any,
    zone: Any,
    *,
    store: Optional[OrderStore] = None,
) -> Order:
    """Create a new PLACED order stamped with the current UTC time."""
    order = Order(
        id=uuid.uuid4().hex,
        customer=_require_text(customer, "customer"),
        dispensary=_require_text(dispensary, "dispensary"),
        zone=coerce_zone(zone),
        status=OrderStatus.PLACED,
        created_at=datetime.now(timezone.utc),
    )
    saved = (store or get_order_store()).add(order)
    logger.info(f"Created order {saved.id} for {saved.customer} in {saved.zone.value}")
    return saved


def list_orders(zone: Any = None, *, store: Optional[OrderStore] = None) -> list[Order]:
    """Return all orders oldest first, or only those in ``zone`` when given."""
    zone_filter = coerce_zone(zone) if zone is not None else None
    return (store or get_order_store()).list_orders(zone=zone_filter)


def get_order(order_id: str, *, store: Optional[OrderStore] = None) -> Order:
    order = (store or get_order_store()).get(order_id)
    if order is None:
        raise NotFoundError(order_id)
    return order


def update_status(order_id: str, new_status: Any, *, store: Optional[OrderStore] = None) -> Order:
    """Overwrite the status of an order.

    Any status may replace any other; transitions are not checked.
    """
    status = coerce_status(new_status)
    updated = (store or get_order_store()).set_status(order_id, status)
    if updated is None:
        raise NotFoundError(order_id)
    logger.info(f"Order {order_id} set to {status.value}")
    return updated


def summarize_orders(*, store: Optional[OrderStore] = None) -> OrderSummary:
    orders = list_orders(store=store)
    status_counts = Counter(order.status for order in orders)
    zone_counts = Counter(order.zone for order in orders)
    return OrderSummary(
        total=len(orders),
        placed=status_counts[OrderStatus.PLACED],
        by_status={status.value: status_counts[status] for status in OrderStatus},
        by_zone={zone.value: zone_counts[zone] for zone in Zone},
    )


def optimize_orders(
    threshold: Optional[int] = None,
    *,
    store: Optional[OrderStore] = None,
) -> BatchingResult:
    """Batch the current placed orders using the configured threshold."""
    return optimize(
        list_orders(store=store),
        threshold=threshold if threshold is not None else settings.batch_threshold,
        label_prefix=settings.fleet_label_prefix,
    )
