"""Error taxonomy shared by the service, the API and the dashboard client."""

from __future__ import annotations


class OrderServiceError(Exception):
    """Base class for order service failures."""


class ValidationError(OrderServiceError):
    """Missing or malformed input fields."""


class NotFoundError(OrderServiceError):
    """No order exists for the requested id."""

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order '{order_id}' not found")
        self.order_id = order_id


class StoreError(OrderServiceError):
    """The backing store is unavailable or rejected the call."""
