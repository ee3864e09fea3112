"""Tests for the CartStore: persistence, notifications and storage sync.

Uses an in-memory fake repository, no file I/O.
"""

from storefront.application.cart_store import CartChanged, CartStore
from storefront.domain.model.cart import CartEntry
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, make_product


def _setup(entries: list[CartEntry] | None = None) -> tuple[CartStore, FakeCartRepository, list[CartChanged]]:
    repo = FakeCartRepository(entries)
    store = CartStore(repo)
    store.load()
    events: list[CartChanged] = []
    store.subscribe(events.append)
    return store, repo, events


class TestHydration:

    def test_starts_empty_without_stored_cart(self):
        store, _, _ = _setup()
        assert store.get_item_count() == 0

    def test_loads_stored_entries(self):
        store, _, _ = _setup([CartEntry(make_product(stock=5), 3)])
        assert store.get_item_count() == 3

    def test_unreadable_storage_is_an_empty_cart(self):
        repo = FakeCartRepository([CartEntry(make_product(), 2)])
        repo.fail_reads = True
        store = CartStore(repo)
        store.load()
        assert store.entries == []


class TestMutations:

    def test_every_mutation_persists_full_cart(self):
        store, repo, _ = _setup()
        store.add_item(make_product("1", stock=5), 2)
        store.add_item(make_product("2", name="Pan", stock=5), 1)
        store.update_quantity("1", 4)
        store.remove_item("2")
        assert repo.save_count == 4
        assert [(e.product_id, e.quantity) for e in repo.stored] == [("1", 4)]

    def test_every_mutation_notifies_with_item_count(self):
        store, _, events = _setup()
        store.add_item(make_product(stock=5), 2)
        store.update_quantity("1", 3)
        store.clear_cart()
        assert [e.item_count for e in events] == [2, 3, 0]

    def test_event_carries_subtotal(self):
        store, _, events = _setup()
        store.add_item(make_product(price="4.50", stock=5), 2)
        assert events[-1].total == Money.of("9.00")

    def test_add_clamps_to_stock(self):
        store, repo, _ = _setup()
        product = make_product(stock=5)
        store.add_item(product, 3)
        store.add_item(product, 10)
        assert store.cart.get("1").quantity == 5
        assert repo.stored[0].quantity == 5

    def test_clear_empties_storage(self):
        store, repo, _ = _setup([CartEntry(make_product(), 2)])
        store.clear_cart()
        assert store.get_item_count() == 0
        assert repo.stored == []

    def test_write_failure_is_swallowed(self):
        store, repo, events = _setup()
        repo.fail_writes = True
        store.add_item(make_product(stock=5), 2)
        assert store.get_item_count() == 2
        assert events[-1].item_count == 2

    def test_totals(self):
        store, _, _ = _setup()
        store.add_item(make_product("1", price="4.50", stock=9), 2)
        store.add_item(make_product("2", name="Pan", price="0.50", stock=9), 3)
        assert store.get_total() == Money.of("10.50")
        assert store.get_item_count() == 5


class TestSubscriptions:

    def test_unsubscribe_stops_notifications(self):
        store, _, _ = _setup()
        seen: list[int] = []
        unsubscribe = store.subscribe(lambda e: seen.append(e.item_count))
        store.add_item(make_product(stock=5))
        unsubscribe()
        store.add_item(make_product(stock=5))
        assert seen == [1]

    def test_unsubscribe_twice_is_harmless(self):
        store, _, _ = _setup()
        unsubscribe = store.subscribe(lambda e: None)
        unsubscribe()
        unsubscribe()


class TestSyncFromStorage:

    def test_identical_storage_is_ignored(self):
        store, repo, events = _setup()
        store.add_item(make_product(stock=5), 2)
        events.clear()
        saves = repo.save_count

        assert store.sync_from_storage() is False
        assert events == []
        assert repo.save_count == saves

    def test_external_change_rehydrates_and_notifies(self):
        store, repo, events = _setup([CartEntry(make_product(stock=5), 1)])
        repo.write_externally([CartEntry(make_product(stock=5), 4)])

        assert store.sync_from_storage() is True
        assert store.get_item_count() == 4
        assert [e.item_count for e in events] == [4]

    def test_sync_never_writes_back(self):
        store, repo, _ = _setup()
        repo.write_externally([CartEntry(make_product(stock=5), 4)])
        store.sync_from_storage()
        store.sync_from_storage()
        assert repo.save_count == 0

    def test_listener_reacting_to_sync_does_not_loop(self):
        store, repo, _ = _setup()
        calls: list[bool] = []
        store.subscribe(lambda e: calls.append(store.sync_from_storage()))
        repo.write_externally([CartEntry(make_product(stock=5), 2)])
        store.sync_from_storage()
        assert calls == [False]

    def test_round_trip_through_storage(self):
        store, repo, _ = _setup()
        store.add_item(make_product("1", stock=5), 2)
        store.add_item(make_product("2", name="Pan", stock=9), 7)

        fresh = CartStore(repo)
        fresh.load()
        assert fresh.entries == store.entries
