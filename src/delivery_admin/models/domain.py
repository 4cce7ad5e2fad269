"""Domain models for delivery orders and derived batches."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Zone(str, Enum):
    """Delivery areas orders are grouped by."""

    MANHATTAN = "Manhattan"
    BROOKLYN = "Brooklyn"
    QUEENS = "Queens"
    BRONX = "Bronx"
    STATEN_ISLAND = "Staten Island"


class OrderStatus(str, Enum):
    """Lifecycle states of an order. Any state may be set to any other."""

    PLACED = "PLACED"
    DISPATCHED = "DISPATCHED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


@dataclass(slots=True)
class Order:
    """Represents one delivery request from a customer to a dispensary."""

    id: str
    customer: str
    dispensary: str
    zone: Zone
    status: OrderStatus
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Batch:
    """Placed orders of one zone grouped under a fleet label."""

    zone: Zone
    assignment: str
    order_ids: tuple[str, ...]

    @property
    def order_count(self) -> int:
        return len(self.order_ids)


@dataclass(frozen=True, slots=True)
class BatchingResult:
    batches: tuple[Batch, ...] = ()
    unbatched_count: int = 0
    threshold: int = 5


@dataclass(slots=True)
class OrderSummary:
    total: int
    placed: int
    by_status: dict[str, int] = field(default_factory=dict)
    by_zone: dict[str, int] = field(default_factory=dict)
