"""Tests for the key-value storage and the JSON product store."""

import json
from decimal import Decimal

import pytest

from catalog.application.product_session import ProductSession
from catalog.domain.exceptions import CorruptStateWarning, PersistenceWriteFailure
from catalog.domain.model.draft import Draft
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price, Stock
from catalog.infrastructure.persistence.key_value_storage import FileStorage
from catalog.infrastructure.persistence.local_storage_product_store import (
    STORAGE_KEY,
    LocalStorageProductStore,
)
from tests.fakes import FailingStorage, InMemoryStorage


def _catalog() -> list[Product]:
    return [
        Product(id="1", name="Widget", price=Price.of("9.99"), description="", stock=Stock(5)),
        Product(id="2", name="Gadget", price=Price.of("120"), description="Shiny", stock=Stock(0)),
        Product(id="3", name="Gizmo", price=Price.of("0.5"), description="", stock=Stock(12)),
    ]


class TestFileStorage:

    def test_missing_key_returns_none(self, tmp_path):
        assert FileStorage(tmp_path).get_item("products") is None

    def test_set_then_get(self, tmp_path):
        storage = FileStorage(tmp_path / "nested")
        storage.set_item("products", "[]")
        assert storage.get_item("products") == "[]"
        assert (tmp_path / "nested" / "products.json").read_text(encoding="utf-8") == "[]"

    def test_set_overwrites_and_leaves_no_temp_files(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set_item("products", "first")
        storage.set_item("products", "second")
        assert storage.get_item("products") == "second"
        assert [p.name for p in tmp_path.iterdir()] == ["products.json"]

    def test_remove_item(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.set_item("products", "[]")
        storage.remove_item("products")
        storage.remove_item("products")
        assert storage.get_item("products") is None

    def test_invalid_key_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid storage key"):
            FileStorage(tmp_path).get_item("../escape")

    def test_write_failure_is_reported(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(PersistenceWriteFailure, match="Could not write 'products'"):
            FileStorage(blocker).set_item("products", "[]")


class TestLocalStorageProductStore:

    def test_empty_storage_loads_empty_catalog(self):
        assert LocalStorageProductStore(InMemoryStorage()).load() == []

    def test_round_trip(self):
        store = LocalStorageProductStore(InMemoryStorage())
        store.save(_catalog())
        assert store.load() == _catalog()

    def test_round_trip_keeps_high_precision_price_exact(self):
        catalog = [
            Product(
                id="1",
                name="Precise",
                price=Price.of("123456.789012345"),
                description="",
                stock=Stock(1),
            )
        ]
        store = LocalStorageProductStore(InMemoryStorage())
        store.save(catalog)

        [loaded] = store.load()
        assert loaded == catalog[0]
        assert loaded.price.amount == Decimal("123456.789012345")

    def test_round_trip_empty(self):
        store = LocalStorageProductStore(InMemoryStorage())
        store.save([])
        assert store.load() == []

    def test_round_trip_through_files(self, tmp_path):
        store = LocalStorageProductStore(FileStorage(tmp_path))
        store.save(_catalog())
        assert LocalStorageProductStore(FileStorage(tmp_path)).load() == _catalog()

    def test_persisted_layout(self):
        storage = InMemoryStorage()
        LocalStorageProductStore(storage).save(_catalog()[:1])
        assert json.loads(storage.items[STORAGE_KEY]) == [
            {"id": "1", "name": "Widget", "price": 9.99, "description": "", "stock": 5}
        ]

    def test_save_overwrites_previous_blob(self):
        storage = InMemoryStorage()
        store = LocalStorageProductStore(storage)
        store.save(_catalog())
        store.save(_catalog()[2:])
        assert [p.id for p in store.load()] == ["3"]

    def test_custom_key(self):
        storage = InMemoryStorage()
        LocalStorageProductStore(storage, key="shop").save([])
        assert storage.items == {"shop": "[]\n"}

    def test_price_read_as_exact_decimal(self):
        storage = InMemoryStorage(
            {STORAGE_KEY: '[{"id": "1", "name": "A", "price": 0.1, "description": "", "stock": 1}]'}
        )
        [product] = LocalStorageProductStore(storage).load()
        assert product.price.amount == Decimal("0.1")

    def test_missing_description_defaults_to_empty(self):
        storage = InMemoryStorage({STORAGE_KEY: '[{"id": "1", "name": "A", "price": 1, "stock": 1}]'})
        [product] = LocalStorageProductStore(storage).load()
        assert product.description == ""

    @pytest.mark.parametrize(
        "blob",
        [
            "not json",
            '{"id": "1"}',
            "[1, 2]",
            '[{"id": 1, "name": "A", "price": 1, "description": "", "stock": 1}]',
            '[{"id": "1", "name": "A", "price": "1", "description": "", "stock": 1}]',
            '[{"id": "1", "name": "A", "price": -1, "description": "", "stock": 1}]',
            '[{"id": "1", "name": "A", "price": 1, "description": "", "stock": 1.5}]',
            '[{"id": "1", "name": "A", "price": 1, "description": ""}]',
            '[{"id": "1", "name": "A", "price": 1, "stock": 1},'
            ' {"id": "1", "name": "B", "price": 1, "stock": 1}]',
        ],
    )
    def test_corrupt_blob_degrades_to_empty(self, blob):
        store = LocalStorageProductStore(InMemoryStorage({STORAGE_KEY: blob}))
        with pytest.warns(CorruptStateWarning, match="starting with an empty catalog"):
            assert store.load() == []

    def test_write_failure_propagates(self):
        store = LocalStorageProductStore(FailingStorage())
        with pytest.raises(PersistenceWriteFailure):
            store.save(_catalog())


class TestSessionWithLocalStorage:

    def test_session_survives_restart(self, tmp_path):
        first = ProductSession(LocalStorageProductStore(FileStorage(tmp_path)))
        created = first.create(Draft(name="Widget", price="9.99", stock="5")).products[0]

        second = ProductSession(LocalStorageProductStore(FileStorage(tmp_path)))
        assert second.products == (created,)

    def test_corrupt_storage_starts_empty_and_recovers_on_write(self):
        storage = InMemoryStorage({STORAGE_KEY: "{{{"})
        with pytest.warns(CorruptStateWarning):
            session = ProductSession(LocalStorageProductStore(storage))
        assert session.products == ()

        session.delete("anything")
        assert json.loads(storage.items[STORAGE_KEY]) == []
