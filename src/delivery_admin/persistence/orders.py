"""Order record stores: an in-process store and a Supabase table store."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import StoreError
from ..models.domain import Order, OrderStatus, Zone

logger = logging.getLogger(__name__)


class OrderStore(ABC):
    """Flat record store keyed by order id."""

    @abstractmethod
    def add(self, order: Order) -> Order:
        raise NotImplementedError

    @abstractmethod
    def get(self, order_id: str) -> Order | None:
        raise NotImplementedError

    @abstractmethod
    def list_orders(self, zone: Zone | None = None) -> list[Order]:
        """Return orders oldest first, optionally restricted to one zone."""
        raise NotImplementedError

    @abstractmethod
    def set_status(self, order_id: str, status: OrderStatus) -> Order | None:
        """Overwrite the status of an order. Returns None when the id is unknown."""
        raise NotImplementedError


class InMemoryOrderStore(OrderStore):
    """Keeps orders in a dict guarded by a lock. Insertion order breaks created_at ties."""

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._lock = threading.Lock()

    def add(self, order: Order) -> Order:
        with self._lock:
            if order.id in self._orders:
                raise StoreError(f"Order id '{order.id}' already exists")
            self._orders[order.id] = replace(order)
        return replace(order)

    def get(self, order_id: str) -> Order | None:
        with self._lock:
            order = self._orders.get(order_id)
        return replace(order) if order else None

    def list_orders(self, zone: Zone | None = None) -> list[Order]:
        with self._lock:
            orders = [replace(order) for order in self._orders.values()]
        if zone is not None:
            orders = [order for order in orders if order.zone == zone]
        return sorted(orders, key=lambda order: order.created_at)

    def set_status(self, order_id: str, status: OrderStatus) -> Order | None:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            order.status = status
            return replace(order)

    def clear(self) -> None:
        with self._lock:
            self._orders.clear()


def _order_to_record(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "customer": order.customer,
        "dispensary": order.dispensary,
        "zone": order.zone.value,
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
    }


def _order_from_record(record: dict[str, Any]) -> Order:
    created_at = record["created_at"]
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Order(
        id=str(record["id"]),
        customer=record["customer"],
        dispensary=record["dispensary"],
        zone=Zone(record["zone"]),
        status=OrderStatus(record["status"]),
        created_at=created_at,
    )


class SupabaseOrderStore(OrderStore):
    """Stores orders as rows of a Supabase table."""

    def __init__(self, client: Any = None, table: str | None = None) -> None:
        self._client = client
        self.table = table or settings.orders_table

    def _table(self):
        client = self._client or get_supabase_client()
        if client is None:
            raise StoreError(
                "Database not configured. Set DELIVERY_SUPABASE_URL and DELIVERY_SUPABASE_KEY."
            )
        return client.table(self.table)

    def add(self, order: Order) -> Order:
        try:
            response = self._table().insert(_order_to_record(order)).execute()
        except StoreError:
            raise
        except Exception as exc:
            logger.exception(f"Failed to insert order {order.id}: {exc}")
            raise StoreError(f"Failed to save order: {exc}") from exc
        rows = response.data or []
        return _order_from_record(rows[0]) if rows else order

    def get(self, order_id: str) -> Order | None:
        try:
            response = self._table().select("*").eq("id", order_id).limit(1).execute()
        except StoreError:
            raise
        except Exception as exc:
            logger.exception(f"Failed to load order {order_id}: {exc}")
            raise StoreError(f"Failed to load order: {exc}") from exc
        rows = response.data or []
        return _order_from_record(rows[0]) if rows else None

    def list_orders(self, zone: Zone | None = None) -> list[Order]:
        try:
            query = self._table().select("*")
            if zone is not None:
                query = query.eq("zone", zone.value)
            # id breaks created_at ties so repeated reads return the same sequence
            response = query.order("created_at").order("id").execute()
        except StoreError:
            raise
        except Exception as exc:
            logger.exception(f"Failed to list orders: {exc}")
            raise StoreError(f"Failed to list orders: {exc}") from exc
        return [_order_from_record(row) for row in (response.data or [])]

    def set_status(self, order_id: str, status: OrderStatus) -> Order | None:
        try:
            response = (
                self._table()
                .update({"status": status.value})
                .eq("id", order_id)
                .execute()
            )
        except StoreError:
            raise
        except Exception as exc:
            logger.exception(f"Failed to update order {order_id}: {exc}")
            raise StoreError(f"Failed to update order: {exc}") from exc
        rows = response.data or []
        return _order_from_record(rows[0]) if rows else None


@lru_cache()
def get_order_store() -> OrderStore:
    """Get the process-wide order store for the configured backend."""
    if settings.store_backend == "supabase":
        logger.info(f"Using Supabase order store (table '{settings.orders_table}')")
        return SupabaseOrderStore()
    logger.info("Using in-memory order store")
    return InMemoryOrderStore()
