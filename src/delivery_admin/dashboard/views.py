"""Plain-text renderings of orders, batches and summaries."""

from __future__ import annotations

from typing import Sequence

from ..models.domain import BatchingResult, Order, OrderSummary


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]
    line = "  ".join(header.ljust(width) for header, width in zip(headers, widths))
    rule = "  ".join("-" * width for width in widths)
    body = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)) for row in rows]
    return "\n".join([line.rstrip(), rule, *(row.rstrip() for row in body)])


def render_orders(orders: Sequence[Order], zone_filter: str | None = None) -> str:
    title = f"ORDERS ({zone_filter})" if zone_filter else "ORDERS"
    if not orders:
        return f"{title}\n  No orders found."
    rows = [
        (
            order.id,
            order.customer,
            order.dispensary,
            order.zone.value,
            order.status.value,
            order.created_at.strftime("%Y-%m-%d %H:%M"),
        )
        for order in orders
    ]
    table = _table(("ID", "Customer", "Dispensary", "Zone", "Status", "Created"), rows)
    return f"{title}\n{table}"


def render_batches(result: BatchingResult) -> str:
    if not result.batches:
        header = "BATCHES\n  No zone has enough placed orders to batch."
    else:
        rows = [
            (batch.assignment, batch.zone.value, str(batch.order_count), ", ".join(batch.order_ids))
            for batch in result.batches
        ]
        header = "BATCHES\n" + _table(("Fleet", "Zone", "Orders", "Order IDs"), rows)
    return f"{header}\nUnbatched placed orders: {result.unbatched_count}"


def render_summary(summary: OrderSummary) -> str:
    status_rows = [(name, str(count)) for name, count in summary.by_status.items()]
    zone_rows = [(name, str(count)) for name, count in summary.by_zone.items()]
    return "\n".join(
        [
            f"Total orders: {summary.total} ({summary.placed} placed)",
            "",
            _table(("Status", "Orders"), status_rows),
            "",
            _table(("Zone", "Orders"), zone_rows),
        ]
    )
