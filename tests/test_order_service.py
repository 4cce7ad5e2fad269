import pytest

from delivery_admin.errors import NotFoundError, ValidationError
from delivery_admin.models.domain import OrderStatus, Zone
from delivery_admin.persistence.orders import InMemoryOrderStore
from delivery_admin.services import orders as order_service


@pytest.fixture
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


def _seed(store: InMemoryOrderStore, zones: list[str]) -> list[str]:
    return [
        order_service.create_order(f"Customer {i}", "Green Leaf", zone, store=store).id
        for i, zone in enumerate(zones)
    ]


def test_create_order_starts_placed(store):
    order = order_service.create_order("  Ada  ", "Green Leaf", "brooklyn", store=store)

    assert order.status == OrderStatus.PLACED
    assert order.zone == Zone.BROOKLYN
    assert order.customer == "Ada"
    assert order.created_at.tzinfo is not None
    assert store.get(order.id) == order


@pytest.mark.parametrize(
    ("customer", "dispensary", "zone"),
    [
        (None, "Green Leaf", "Queens"),
        ("Ada", "", "Queens"),
        ("Ada", "Green Leaf", None),
        ("Ada", "Green Leaf", "Hoboken"),
    ],
)
def test_create_order_rejects_missing_or_invalid_fields(store, customer, dispensary, zone):
    with pytest.raises(ValidationError):
        order_service.create_order(customer, dispensary, zone, store=store)

    assert store.list_orders() == []


def test_order_ids_are_unique(store):
    ids = _seed(store, ["Queens"] * 20)

    assert len(set(ids)) == 20


def test_list_orders_is_oldest_first(store):
    ids = _seed(store, ["Queens", "Brooklyn", "Queens", "Bronx"])

    orders = order_service.list_orders(store=store)

    assert [order.id for order in orders] == ids
    assert [order.created_at for order in orders] == sorted(order.created_at for order in orders)


def test_zone_filter_is_ordered_subset(store):
    _seed(store, ["Queens", "Brooklyn", "Queens", "Bronx", "Queens"])

    everything = order_service.list_orders(store=store)
    queens = order_service.list_orders("Queens", store=store)

    assert [order.id for order in queens] == [order.id for order in everything if order.zone == Zone.QUEENS]
    assert len(queens) == 3


def test_zone_filter_rejects_unknown_zone(store):
    with pytest.raises(ValidationError):
        order_service.list_orders("Atlantis", store=store)


def test_update_status_overwrites_status(store):
    (order_id,) = _seed(store, ["Manhattan"])

    updated = order_service.update_status(order_id, "dispatched", store=store)

    assert updated.status == OrderStatus.DISPATCHED
    assert order_service.get_order(order_id, store=store).status == OrderStatus.DISPATCHED


def test_update_status_allows_any_transition(store):
    (order_id,) = _seed(store, ["Manhattan"])
    order_service.update_status(order_id, OrderStatus.DELIVERED, store=store)

    reverted = order_service.update_status(order_id, OrderStatus.PLACED, store=store)

    assert reverted.status == OrderStatus.PLACED


def test_update_status_unknown_id_leaves_store_unchanged(store):
    _seed(store, ["Queens", "Bronx"])
    before = order_service.list_orders(store=store)

    with pytest.raises(NotFoundError):
        order_service.update_status("missing", "DISPATCHED", store=store)

    assert order_service.list_orders(store=store) == before


def test_update_status_rejects_unknown_status(store):
    (order_id,) = _seed(store, ["Queens"])

    with pytest.raises(ValidationError):
        order_service.update_status(order_id, "LOST", store=store)
    with pytest.raises(ValidationError):
        order_service.update_status(order_id, None, store=store)

    assert order_service.get_order(order_id, store=store).status == OrderStatus.PLACED


def test_get_order_unknown_id(store):
    with pytest.raises(NotFoundError):
        order_service.get_order("missing", store=store)


def test_summarize_orders(store):
    ids = _seed(store, ["Queens", "Queens", "Bronx"])
    order_service.update_status(ids[0], "CANCELLED", store=store)

    summary = order_service.summarize_orders(store=store)

    assert summary.total == 3
    assert summary.placed == 2
    assert summary.by_status["CANCELLED"] == 1
    assert summary.by_zone == {
        "Manhattan": 0,
        "Brooklyn": 0,
        "Queens": 2,
        "Bronx": 1,
        "Staten Island": 0,
    }


def test_optimize_orders_reads_from_store(store):
    ids = _seed(store, ["Brooklyn"] * 6 + ["Queens"] * 3)
    order_service.update_status(ids[0], "DISPATCHED", store=store)

    result = order_service.optimize_orders(store=store)

    assert len(result.batches) == 1
    assert result.batches[0].order_ids == tuple(ids[1:6])
    assert result.unbatched_count == 3
    # batching never touches stored orders
    assert order_service.get_order(ids[1], store=store).status == OrderStatus.PLACED
