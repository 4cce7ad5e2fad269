"""HTTP client the dashboard uses to talk to the order API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from ..config import settings
from ..errors import NotFoundError, StoreError, ValidationError
from ..models.domain import Batch, BatchingResult, Order, OrderStatus, OrderSummary, Zone

logger = logging.getLogger(__name__)


class ApiError(StoreError):
    """The API could not be reached or answered with a server error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _order_from_payload(payload: dict[str, Any]) -> Order:
    return Order(
        id=payload["id"],
        customer=payload["customer"],
        dispensary=payload["dispensary"],
        zone=Zone(payload["zone"]),
        status=OrderStatus(payload["status"]),
        created_at=datetime.fromisoformat(payload["createdAt"]),
    )


def _result_from_payload(payload: dict[str, Any]) -> BatchingResult:
    batches = tuple(
        Batch(
            zone=Zone(item["zone"]),
            assignment=item["assignment"],
            order_ids=tuple(item["orderIds"]),
        )
        for item in payload.get("batches", [])
    )
    return BatchingResult(batches=batches, unbatched_count=int(payload.get("unbatchedCount", 0)))


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


class DeliveryAdminClient:
    """Thin wrapper over the order endpoints. Failures are raised, never retried."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client_timeout_seconds
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=transport,
        )

    def __enter__(self) -> "DeliveryAdminClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(f"Request {method} {path} failed: {exc}")
            raise ApiError(f"Failed to reach order API at {self.base_url}: {exc}") from exc

        if response.status_code == httpx.codes.BAD_REQUEST or response.status_code == 422:
            raise ValidationError(_detail(response))
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(path.split("/")[2] if path.count("/") >= 2 else path)
        if response.is_error:
            raise ApiError(
                f"Order API returned {response.status_code}: {_detail(response)}",
                status_code=response.status_code,
            )
        return response.json()

    def health(self) -> bool:
        try:
            return self._request("GET", "/health").get("status") == "ok"
        except ApiError:
            return False

    def list_orders(self, zone: Zone | str | None = None) -> list[Order]:
        params = {}
        if zone is not None:
            params["zone"] = zone.value if isinstance(zone, Zone) else zone
        payload = self._request("GET", "/orders", params=params)
        return [_order_from_payload(item) for item in payload]

    def create_order(self, customer: str, dispensary: str, zone: Zone | str) -> Order:
        body = {
            "customer": customer,
            "dispensary": dispensary,
            "zone": zone.value if isinstance(zone, Zone) else zone,
        }
        return _order_from_payload(self._request("POST", "/orders", json=body))

    def update_status(self, order_id: str, status: OrderStatus | str) -> Order:
        body = {"status": status.value if isinstance(status, OrderStatus) else status}
        return _order_from_payload(self._request("PATCH", f"/orders/{order_id}/status", json=body))

    def optimize(self) -> BatchingResult:
        return _result_from_payload(self._request("GET", "/orders/optimize"))

    def summary(self) -> OrderSummary:
        payload = self._request("GET", "/orders/summary")
        return OrderSummary(
            total=payload["totalOrders"],
            placed=payload["placedOrders"],
            by_status=dict(payload["byStatus"]),
            by_zone=dict(payload["byZone"]),
        )
