"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

from estate_ledger.app.main import app
from estate_ledger.app.db.session import Database, get_db, get_session_factory
from estate_ledger.app.domain.payments.payment_coordinator import PaymentCoordinator
from estate_ledger.app.models.ledger_entry import LedgerEntry
from estate_ledger.app.models.payee import Payee
from estate_ledger.app.models.payee_enums import PayeeKind


# File-backed SQLite so concurrent transactions get their own connections
@pytest.fixture
async def test_database(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'ledger_test.db'}")
    database.connect()
    await database.create_all()
    
    yield database
    
    await database.disconnect()


@pytest.fixture
def session_factory(test_database):
    return test_database.session_factory


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def coordinator(session_factory):
    return PaymentCoordinator(session_factory)


@pytest.fixture
async def client(session_factory):
    """Async client for testing, wired to the isolated store."""
    
    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_session_factory():
        return session_factory

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = override_get_session_factory
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides = {}


@pytest.fixture
def make_payee(session_factory):
    """Insert a payee directly and return it."""
    
    async def _make(kind: PayeeKind = PayeeKind.WORKER, name: str = "Emeka Obi", **fields) -> Payee:
        async with session_factory() as session:
            payee = Payee(kind=kind, name=name, **fields)
            session.add(payee)
            await session.commit()
            await session.refresh(payee)
            return payee
    
    return _make


@pytest.fixture
def load_payee(session_factory):
    """Read a payee back through a fresh session."""
    
    async def _load(payee_id: int):
        async with session_factory() as session:
            return await session.get(Payee, payee_id)
    
    return _load


@pytest.fixture
def count_entries(session_factory):
    
    async def _count(payee_id: int = None) -> int:
        stmt = select(func.count(LedgerEntry.id))
        if payee_id is not None:
            stmt = stmt.where(LedgerEntry.payee_id == payee_id)
        async with session_factory() as session:
            return (await session.execute(stmt)).scalar()
    
    return _count
