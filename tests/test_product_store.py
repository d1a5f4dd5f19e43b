"""Tests for ProductStore using in-memory SQLite."""

from __future__ import annotations

import pytest

from catalog.services.errors import InsufficientStockError, ProductNotFoundError
from catalog.services.product_store import ProductStore


def test_seed_creates_demo_products():
    store = ProductStore(":memory:")
    assert store.seed(100) == 100
    assert store.count() == 100

    p = store.find_by_id(42)
    assert p.name == "Product 42"
    assert p.price == 42000
    assert p.description == "Description 42"
    assert p.stock == 1000


def test_seed_skips_non_empty_table(store):
    assert store.seed(5) == 0
    assert store.count() == 10


def test_find_missing_raises(store):
    with pytest.raises(ProductNotFoundError) as info:
        store.find_by_id(999)
    assert info.value.product_id == 999


def test_find_all_ordered(store):
    ids = [p.id for p in store.find_all()]
    assert ids == list(range(1, 11))


def test_create_assigns_id(store):
    p = store.create("Widget", 1500, "A widget", 3)
    assert p.id == 11
    assert store.find_by_id(11).name == "Widget"


def test_decrease_stock(store):
    p = store.decrease_stock(1, 10)
    assert p.stock == 990
    assert store.find_by_id(1).stock == 990


def test_decrease_stock_insufficient(store):
    store.create("Rare", 100, stock=2)
    with pytest.raises(InsufficientStockError):
        store.decrease_stock(11, 3)
    assert store.find_by_id(11).stock == 2


def test_decrease_stock_missing_product(store):
    with pytest.raises(ProductNotFoundError):
        store.decrease_stock(999, 1)


def test_file_backed_store_persists(tmp_path):
    db = tmp_path / "catalog.db"
    store = ProductStore(db)
    store.seed(3)
    store.close()

    reopened = ProductStore(db)
    assert reopened.count() == 3
    assert reopened.seed(3) == 0
    reopened.close()
