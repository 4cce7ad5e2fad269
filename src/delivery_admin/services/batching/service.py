"""Zone batching for placed delivery orders."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from ...models.domain import Batch, BatchingResult, Order, OrderStatus, Zone

DEFAULT_BATCH_THRESHOLD = 5

logger = logging.getLogger(__name__)


def fleet_label(index: int, prefix: str = "Fleet") -> str:
    """Return the label for the ``index``-th batch: A..Z, then AA, AB, ..."""
    if index < 0:
        raise ValueError("index must be >= 0")
    letters = ""
    value = index + 1
    while value:
        value, remainder = divmod(value - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return f"{prefix} {letters}"


def _group_by_zone(orders: Sequence[Order]) -> Dict[Zone, List[str]]:
    groups: Dict[Zone, List[str]] = {}
    for order in orders:
        groups.setdefault(order.zone, []).append(order.id)
    return groups


def optimize(
    orders: Sequence[Order],
    *,
    threshold: int = DEFAULT_BATCH_THRESHOLD,
    label_prefix: str = "Fleet",
) -> BatchingResult:
    """Batch placed orders by zone.

    Zones are taken in the order they first appear among the placed orders,
    so labels depend only on the input sequence. Orders are never mutated.
    """
    if threshold < 1:
        raise ValueError("threshold must be >= 1")

    placed = [order for order in orders if order.status == OrderStatus.PLACED]
    batches: list[Batch] = []
    unbatched = 0

    for zone, order_ids in _group_by_zone(placed).items():
        if len(order_ids) < threshold:
            unbatched += len(order_ids)
            continue
        batches.append(
            Batch(
                zone=zone,
                assignment=fleet_label(len(batches), label_prefix),
                order_ids=tuple(order_ids),
            )
        )

    logger.info(
        f"Batched {len(placed) - unbatched} of {len(placed)} placed orders into {len(batches)} batch(es)"
    )
    return BatchingResult(batches=tuple(batches), unbatched_count=unbatched, threshold=threshold)
