"""Order CRUD and batching endpoints."""

from __future__ import annotations

import logging
from typing import List, NoReturn

from fastapi import APIRouter, HTTPException, Path, Query, status

from ...errors import NotFoundError, OrderServiceError, StoreError, ValidationError
from ...schemas.orders import (
    OptimizeResponse,
    OrderCreateRequest,
    OrderModel,
    OrderSummaryResponse,
    StatusUpdateRequest,
)
from ...services.orders import (
    create_order,
    get_order,
    list_orders,
    optimize_orders,
    summarize_orders,
    update_status,
)

router = APIRouter(prefix="/orders", tags=["orders"])


def _raise_http(exc: OrderServiceError) -> NoReturn:
    if isinstance(exc, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, StoreError):
        logging.error(f"Order store unavailable: {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    logging.exception(f"Unexpected order service error: {exc}")
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("", response_model=List[OrderModel], status_code=status.HTTP_200_OK)
def get_orders(
    zone: str | None = Query(default=None, description="Optional zone filter"),
) -> List[OrderModel]:
    try:
        orders = list_orders(zone)
    except OrderServiceError as exc:
        _raise_http(exc)
    return [OrderModel.from_domain(order) for order in orders]


@router.post("", response_model=OrderModel, status_code=status.HTTP_201_CREATED)
def post_order(payload: OrderCreateRequest) -> OrderModel:
    try:
        order = create_order(payload.customer, payload.dispensary, payload.zone)
    except OrderServiceError as exc:
        _raise_http(exc)
    return OrderModel.from_domain(order)


@router.get("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize_placed_orders() -> OptimizeResponse:
    """Group placed orders into fleet batches by zone.

    Batches are computed on every call and never stored; orders are left untouched.
    """
    try:
        result = optimize_orders()
    except OrderServiceError as exc:
        _raise_http(exc)
    return OptimizeResponse.from_domain(result)


@router.get("/summary", response_model=OrderSummaryResponse, status_code=status.HTTP_200_OK)
def get_order_summary() -> OrderSummaryResponse:
    try:
        summary = summarize_orders()
    except OrderServiceError as exc:
        _raise_http(exc)
    return OrderSummaryResponse.from_domain(summary)


@router.get("/{order_id}", response_model=OrderModel, status_code=status.HTTP_200_OK)
def get_order_by_id(order_id: str = Path(..., description="Order identifier")) -> OrderModel:
    try:
        order = get_order(order_id)
    except OrderServiceError as exc:
        _raise_http(exc)
    return OrderModel.from_domain(order)


@router.patch("/{order_id}/status", response_model=OrderModel, status_code=status.HTTP_200_OK)
def patch_order_status(
    payload: StatusUpdateRequest,
    order_id: str = Path(..., description="Order identifier"),
) -> OrderModel:
    try:
        order = update_status(order_id, payload.status)
    except OrderServiceError as exc:
        _raise_http(exc)
    return OrderModel.from_domain(order)
