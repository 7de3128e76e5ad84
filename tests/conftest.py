"""Shared fixtures for catalog tests."""

from datetime import datetime

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.catalog.store import MemoryProductStore
from app.main import app
from app.utils.dependencies import get_product_store


def make_doc(**fields) -> dict:
    """Build a stored catalog document with sensible defaults."""
    doc = {
        "_id": ObjectId(),
        "name": "Gold Bar",
        "price": 100.0,
        "stock": 1,
        "createdAt": datetime(2024, 1, 1),
        "isActive": True,
        "views": 0,
    }
    doc.update(fields)
    return doc


@pytest.fixture
def catalog_docs() -> list[dict]:
    """Five active products and one retired product."""
    return [
        make_doc(
            _id=ObjectId("65a000000000000000000001"),
            name="1 oz Gold Bar",
            description="Minted bar with assay card",
            brand="PAMP",
            manufacturer="PAMP Suisse",
            price=2100.0,
            stock=5,
            weight="1 oz",
            purity="999.9",
            placement="featured",
            createdAt=datetime(2024, 1, 10, 9, 30),
            views=120,
            image="/img/pamp-1oz.png",
        ),
        make_doc(
            _id=ObjectId("65a000000000000000000002"),
            name="100 g Gold Bar",
            description="Cast bar",
            brand="Valcambi",
            manufacturer="Valcambi",
            price=6500.0,
            stock=60,
            weight="100 g",
            purity="999.9",
            placement="homepage",
            createdAt=datetime(2024, 1, 15, 23, 59, 59),
            views=80,
        ),
        make_doc(
            _id=ObjectId("65a000000000000000000003"),
            name="Krugerrand Gold Coin",
            description="South African bullion coin",
            brand="Rand Refinery",
            manufacturer="South African Mint",
            price=2050.0,
            stock=0,
            weight="1 oz",
            purity="916",
            placement="featured",
            createdAt=datetime(2024, 1, 16, 0, 0, 0, 1000),
            views=300,
        ),
        make_doc(
            _id=ObjectId("65a000000000000000000004"),
            name="Maple Leaf Coin",
            brand="Royal Canadian Mint",
            manufacturer="Royal Canadian Mint",
            price=2150.0,
            stock=25,
            weight="31.1 g",
            purity="999.9",
            createdAt=datetime(2024, 2, 1),
            views=80,
        ),
        make_doc(
            _id=ObjectId("65a000000000000000000005"),
            name="Lunar Dragon Special",
            description="Limited release",
            brand="Perth Mint",
            manufacturer="Perth Mint",
            price=3200.0,
            stock=12,
            weight="assorted",
            placement="seasonal",
            createdAt=datetime(2024, 3, 5),
            views=45,
        ),
        make_doc(
            _id=ObjectId("65a000000000000000000006"),
            name="Retired 5 g Gold Bar",
            brand="Heraeus",
            manufacturer="Heraeus",
            price=450.0,
            stock=3,
            weight="5 g",
            purity="999.5",
            placement="clearance",
            createdAt=datetime(2023, 12, 1),
            isActive=False,
            views=999,
        ),
    ]


@pytest.fixture
def store(catalog_docs: list[dict]) -> MemoryProductStore:
    """In-memory store seeded with the catalog fixture."""
    return MemoryProductStore.from_documents(catalog_docs)


@pytest.fixture
def client(store: MemoryProductStore):
    """Test client whose catalog reads go to the in-memory store."""
    app.dependency_overrides[get_product_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
