"""Pydantic request/response models for order endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Batch, BatchingResult, Order, OrderSummary


class OrderCreateRequest(BaseModel):
    # Fields are optional here so missing values reach the service and surface as 400s.
    customer: Optional[str] = Field(default=None, description="Customer name.")
    dispensary: Optional[str] = Field(default=None, description="Dispensary fulfilling the order.")
    zone: Optional[str] = Field(default=None, description="Delivery zone, e.g. 'Brooklyn'.")


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = Field(default=None, description="New order status, e.g. 'DISPATCHED'.")


class OrderModel(BaseModel):
    id: str
    customer: str
    dispensary: str
    zone: str
    status: str
    createdAt: datetime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderModel":
        return cls(
            id=order.id,
            customer=order.customer,
            dispensary=order.dispensary,
            zone=order.zone.value,
            status=order.status.value,
            createdAt=order.created_at,
        )


class BatchModel(BaseModel):
    zone: str
    orderCount: int
    assignment: str
    orderIds: List[str]

    @classmethod
    def from_domain(cls, batch: Batch) -> "BatchModel":
        return cls(
            zone=batch.zone.value,
            orderCount=batch.order_count,
            assignment=batch.assignment,
            orderIds=list(batch.order_ids),
        )


class OptimizeResponse(BaseModel):
    batches: List[BatchModel]
    unbatchedCount: int

    @classmethod
    def from_domain(cls, result: BatchingResult) -> "OptimizeResponse":
        return cls(
            batches=[BatchModel.from_domain(batch) for batch in result.batches],
            unbatchedCount=result.unbatched_count,
        )


class OrderSummaryResponse(BaseModel):
    totalOrders: int
    placedOrders: int
    byStatus: dict[str, int]
    byZone: dict[str, int]

    @classmethod
    def from_domain(cls, summary: OrderSummary) -> "OrderSummaryResponse":
        return cls(
            totalOrders=summary.total,
            placedOrders=summary.placed,
            byStatus=summary.by_status,
            byZone=summary.by_zone,
        )
