"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check that the configured order store answers a query."""
    from ...errors import StoreError
    from ...persistence.orders import get_order_store

    if settings.store_backend == "memory":
        return {
            "backend": "memory",
            "configured": True,
            "connected": True,
            "orders_count": len(get_order_store().list_orders()),
            "message": "Using in-memory order store. Orders are lost on restart.",
        }

    try:
        orders = get_order_store().list_orders()
    except StoreError as exc:
        return {
            "backend": settings.store_backend,
            "configured": "not configured" not in str(exc).lower(),
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {
        "backend": settings.store_backend,
        "configured": True,
        "connected": True,
        "orders_count": len(orders),
        "message": f"Database connected. Found {len(orders)} orders in '{settings.orders_table}'.",
    }
