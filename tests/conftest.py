from __future__ import annotations

import json
import os
import sys
from collections.abc import Callable, Iterator
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENABLE_TRACING", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from sales_insights.api.deps import get_db_session, get_seed_source
from sales_insights.main import app
from sales_insights.models import Base, Transaction
from sales_insights.services import SeedSourceClient

SEED_SOURCE_URL = "http://seed.test/product_transaction.json"

DATABASE_URL = "sqlite+pysqlite://"


engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def make_transaction(
    *,
    title: str = "Plain item",
    description: str = "Nothing special",
    price: str | int | float = "10",
    category: str = "misc",
    sold: bool = True,
    date_of_sale: datetime = datetime(2023, 3, 5, 12, 0),
) -> Transaction:
    return Transaction(
        title=title,
        description=description,
        price=Decimal(str(price)),
        category=category,
        sold=sold,
        date_of_sale=date_of_sale,
    )


def seed_record(**overrides: object) -> dict[str, object]:
    """Record in the upstream feed's wire format."""
    record: dict[str, object] = {
        "id": 1,
        "title": "Fjallraven Backpack",
        "price": 329.85,
        "description": "Your perfect pack for everyday use",
        "category": "men's clothing",
        "image": "https://images.example/backpack.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    }
    record.update(overrides)
    return record


@pytest.fixture()
def db_session() -> Iterator[Session]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture()
def add_transactions(db_session: Session) -> Callable[..., list[Transaction]]:
    def _add(*transactions: Transaction) -> list[Transaction]:
        db_session.add_all(transactions)
        db_session.commit()
        return list(transactions)

    return _add


@pytest.fixture()
def seed_payload() -> list[dict[str, object]]:
    return [
        seed_record(id=1),
        seed_record(
            id=2,
            title="Mens Casual T-Shirt",
            price=22.3,
            category="men's clothing",
            sold=True,
            dateOfSale="2022-03-27T20:29:54+05:30",
        ),
        seed_record(
            id=3,
            title="Solid Gold Petite Micropave",
            price=168,
            category="jewelery",
            sold=True,
            dateOfSale="2022-03-02T10:00:00+00:00",
        ),
    ]


@pytest.fixture()
def seed_requests() -> list[httpx.Request]:
    return []


@pytest.fixture()
def seed_handler(
    seed_payload: list[dict[str, object]], seed_requests: list[httpx.Request]
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        seed_requests.append(request)
        return httpx.Response(200, content=json.dumps(seed_payload), headers={"Content-Type": "application/json"})

    return handler


@pytest.fixture()
def seed_source(seed_handler: Callable[[httpx.Request], httpx.Response]) -> Iterator[SeedSourceClient]:
    http_client = httpx.Client(transport=httpx.MockTransport(seed_handler))
    yield SeedSourceClient(SEED_SOURCE_URL, client=http_client)
    http_client.close()


@pytest.fixture()
def client(db_session: Session, seed_source: SeedSourceClient) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[Session]:
        try:
            yield db_session
        finally:
            db_session.rollback()

    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_seed_source] = lambda: seed_source

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db_session, None)
    app.dependency_overrides.pop(get_seed_source, None)
