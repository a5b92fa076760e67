from screenshot_panel.services.selection_store import SelectionStore


class DirtyCounter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


def test_add_region_prepopulates_eligible_variants(catalog):
    dirty = DirtyCounter()
    store = SelectionStore(catalog, on_dirty=dirty)

    assert store.add_region("Region A") is True
    assert store.add_region("Region C") is True

    assert store.snapshot() == [
        ("Region A", frozenset({"v1", "v2", "v3"})),
        ("Region C", frozenset({"v1"})),
    ]
    assert dirty.count == 2


def test_add_region_ignores_unknown_and_duplicates(catalog):
    dirty = DirtyCounter()
    store = SelectionStore(catalog, on_dirty=dirty)
    store.add_region("Region A")
    store.toggle_variant("Region A", "v2")

    assert store.add_region("Region A") is False
    assert store.add_region("Nowhere") is False
    assert store.add_region(None) is False

    # The existing entry keeps its edited variants.
    assert store.variants_for("Region A") == frozenset({"v1", "v3"})
    assert len(store) == 1
    assert dirty.count == 1


def test_add_all_eligible_skips_pending_and_always_marks_dirty(catalog):
    dirty = DirtyCounter()
    store = SelectionStore(catalog, on_dirty=dirty)
    store.add_region("Region C")
    store.toggle_variant("Region C", "v1")

    assert store.add_all_eligible() == 2
    assert [name for name, _ in store.snapshot()] == ["Region C", "Region A", "Region B"]
    assert store.variants_for("Region B") == frozenset()
    assert store.variants_for("Region C") == frozenset()

    assert store.add_all_eligible() == 0
    assert dirty.count == 3


def test_toggle_twice_restores_membership_without_dirtying(catalog):
    dirty = DirtyCounter()
    store = SelectionStore(catalog, on_dirty=dirty)
    store.add_region("Region A")
    dirty.count = 0

    assert store.toggle_variant("Region A", "v2") is False
    assert store.toggle_variant("Region A", "v2") is True
    assert store.variants_for("Region A") == frozenset({"v1", "v2", "v3"})
    assert store.toggle_variant("Region B", "v1") is None
    assert dirty.count == 0


def test_toggle_can_add_ineligible_variant(catalog):
    store = SelectionStore(catalog)
    store.add_region("Region C")

    assert store.toggle_variant("Region C", "v2") is True
    assert store.variants_for("Region C") == frozenset({"v1", "v2"})


def test_remove_and_clear(catalog):
    dirty = DirtyCounter()
    store = SelectionStore(catalog, on_dirty=dirty)
    store.add_region("Region A")
    store.add_region("Region C")

    assert store.remove_region("Region A") is True
    assert store.remove_region("Region A") is False
    assert not store.contains("Region A")
    assert store.variants_for("Region A") is None

    store.clear()
    assert len(store) == 0
    assert store.snapshot() == []
    assert dirty.count == 5


def test_snapshot_is_detached_from_store(catalog):
    store = SelectionStore(catalog)
    store.add_region("Region A")
    snapshot = store.snapshot()

    store.toggle_variant("Region A", "v1")

    assert snapshot == [("Region A", frozenset({"v1", "v2", "v3"}))]
