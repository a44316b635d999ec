import asyncio
import os
import tempfile
from decimal import Decimal
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

# Must be set before config.py is imported anywhere
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(tempfile.mkdtemp(), 'app.db')}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ASSISTANT_REPLY_DELAY_SECONDS"] = "0"
os.environ["SECRET_KEY"] = "test-secret-key"

from pos_backend.database.base import Base  # noqa: E402
from pos_backend.database.models import MenuCategory, MenuItem  # noqa: E402
from pos_backend.database.session import build_engine, build_session_factory, get_db  # noqa: E402

OWNER_PASSWORD = "Owner#2024"
STAFF_PASSWORD = "Staff#2024"


@pytest.fixture()
def session_factory(tmp_path):
    """
    Fresh SQLite file per test.

    Tables are created through a plain sync engine; the async engine uses
    NullPool so no connection outlives the event loop that opened it.
    """
    db_file = tmp_path / "pos_test.db"
    sync_engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = build_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    yield build_session_factory(engine)


@pytest.fixture()
def run_db(session_factory):
    """
    Run an async callable against a new session and return its result.

        stock = run_db(lambda db: MenuService.get_item(db, 1))
    """
    def _run(fn):
        async def _inner():
            async with session_factory() as db:
                return await fn(db)
        return asyncio.run(_inner())
    return _run


@pytest.fixture()
def seed(session_factory):
    """Insert ORM objects and return them (ids populated)"""
    def _seed(*objects):
        async def _insert():
            async with session_factory() as db:
                db.add_all(objects)
                await db.commit()
        asyncio.run(_insert())
        return objects if len(objects) > 1 else objects[0]
    return _seed


@pytest.fixture()
def app(session_factory, monkeypatch):
    import main

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def skip_create_tables():
        return None

    monkeypatch.setattr(main, "create_tables", skip_create_tables)
    main.app.dependency_overrides[get_db] = override_get_db
    yield main.app
    main.app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register_and_login(client: TestClient, username: str, email: str, password: str) -> Dict[str, str]:
    response = client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    response = client.post(
        "/api/v1/auth/token",
        data={"username": username, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def owner_headers(client) -> Dict[str, str]:
    """First registered account, therefore the owner"""
    return register_and_login(client, "meena", "meena@spicehouse.in", OWNER_PASSWORD)


@pytest.fixture()
def staff_headers(client, owner_headers) -> Dict[str, str]:
    return register_and_login(client, "ravi", "ravi@spicehouse.in", STAFF_PASSWORD)


@pytest.fixture()
def menu(seed):
    """A small South Indian menu: Masala Dosa (100), Filter Coffee (50), Vada (30, out of stock)"""
    category = seed(MenuCategory(name="South Indian", name_tamil="தென் இந்திய", display_order=1))
    dosa, coffee, vada = seed(
        MenuItem(name="Masala Dosa", name_tamil="மசாலா தோசை", emoji="🥞", price=Decimal("100.00"),
                 current_stock=5, min_stock_level=2, category_id=category.id),
        MenuItem(name="Filter Coffee", name_tamil="பில்டர் காபி", emoji="☕", price=Decimal("50.00"),
                 current_stock=20, min_stock_level=5, category_id=category.id),
        MenuItem(name="Medu Vada", emoji="🍩", price=Decimal("30.00"),
                 current_stock=0, min_stock_level=5, category_id=category.id),
    )
    return {"category": category, "dosa": dosa, "coffee": coffee, "vada": vada}
