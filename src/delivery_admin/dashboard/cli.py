#!/usr/bin/env python3
"""Command-line dashboard for the order API."""

import argparse
import sys

from ..config import configure_logging, settings
from ..models.domain import OrderStatus, Zone
from .client import DeliveryAdminClient
from .state import DashboardState
from .views import render_batches, render_orders, render_summary


def _zone_arg(value: str) -> Zone:
    for zone in Zone:
        if zone.value.lower() == value.strip().lower():
            return zone
    raise argparse.ArgumentTypeError(
        f"unknown zone '{value}' (choose from {', '.join(z.value for z in Zone)})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="delivery-admin",
        description="Manage dispensary delivery orders and preview fleet batches.",
    )
    parser.add_argument(
        "--api-url",
        default=settings.api_base_url,
        help="Base URL of the order API (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List orders, oldest first")
    list_parser.add_argument("--zone", type=_zone_arg, default=None, help="Only show one zone")

    create_parser = subparsers.add_parser("create", help="Place a new order")
    create_parser.add_argument("--customer", required=True)
    create_parser.add_argument("--dispensary", required=True)
    create_parser.add_argument("--zone", type=_zone_arg, required=True)

    status_parser = subparsers.add_parser("set-status", help="Change the status of an order")
    status_parser.add_argument("order_id")
    status_parser.add_argument("status", choices=[status.value for status in OrderStatus])

    subparsers.add_parser("optimize", help="Preview fleet batches for placed orders")
    subparsers.add_parser("summary", help="Show order counts by status and zone")
    return parser


def run(args, client: DeliveryAdminClient) -> int:
    """Execute one command against the API. Returns the process exit code."""
    state = DashboardState(client=client)

    if args.command == "list":
        ok = state.set_zone_filter(args.zone)
        if ok:
            print(render_orders(state.orders, args.zone.value if args.zone else None))
    elif args.command == "create":
        order = state.create_order(args.customer, args.dispensary, args.zone)
        if order is not None:
            print(f"Created order {order.id} ({order.zone.value}, {order.status.value})")
        ok = order is not None
    elif args.command == "set-status":
        order = state.update_status(args.order_id, args.status)
        if order is not None:
            print(f"Order {order.id} is now {order.status.value}")
        ok = order is not None
    elif args.command == "optimize":
        result = state.run_optimize()
        if result is not None:
            print(render_batches(result))
        ok = result is not None
    else:
        summary = state.load_summary()
        if summary is not None:
            print(render_summary(summary))
        ok = summary is not None

    if ok and state.stale:
        print(f"Warning: {state.last_error}", file=sys.stderr)

    if not ok:
        print(f"Error: {state.last_error}", file=sys.stderr)
        return 1
    return 0


def main(argv=None) -> int:
    configure_logging("WARNING")
    args = build_parser().parse_args(argv)
    with DeliveryAdminClient(base_url=args.api_url) as client:
        return run(args, client)


if __name__ == "__main__":
    sys.exit(main())
