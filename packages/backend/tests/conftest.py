"""Test fixtures — a fresh SQLite database per test.

Learn: Each test gets its own database file under tmp_path with the
schema created straight from the ORM metadata, so tests are isolated
without transactions or cleanup. The identity service is replaced by an
in-memory fake that behaves like the real one (tokens are signed with the
app secret, failures use the real client's exception classes).
"""

import itertools

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dietracker.api.deps import get_identity_client
from dietracker.auth.claims import VerifiedClaims
from dietracker.auth.jwt import create_access_token
from dietracker.clients.identity import (
    IdentityInvalidArgumentError,
    IdentityUserExistsError,
    IdentityUserNotFoundError,
    LoginResult,
)
from dietracker.db.engine import build_engine, get_db
from dietracker.db.models import Base
from dietracker.db.storage import Storage
from dietracker.main import app
from dietracker.services.account_service import AccountService
from dietracker.services.auth_service import AuthService
from dietracker.services.record_service import RecordService


class FakeIdentityClient:
    """In-memory stand-in for the identity service."""

    def __init__(self):
        self.users: dict[str, tuple[str, int]] = {}
        self._ids = itertools.count(101)

    async def register(self, email: str, password: str) -> int:
        if not email or not password:
            raise IdentityInvalidArgumentError("identity.register: email and password required")
        if email in self.users:
            raise IdentityUserExistsError("identity.register: user exists")
        identity_id = next(self._ids)
        self.users[email] = (password, identity_id)
        return identity_id

    async def login(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            raise IdentityInvalidArgumentError("identity.login: email and password required")
        stored = self.users.get(email)
        if stored is None or stored[0] != password:
            raise IdentityUserNotFoundError("identity.login: invalid credentials")
        identity_id = stored[1]
        return LoginResult(token=create_access_token(identity_id, email), identity_id=identity_id)

    async def aclose(self) -> None:
        pass


@pytest.fixture()
def make_claims():
    """Build VerifiedClaims for an identity id (or any raw uid value)."""

    def _make(uid):
        return VerifiedClaims({"uid": uid, "email": "user@example.com"})

    return _make


@pytest.fixture()
def auth_headers():
    """Authorization header with a real token for an identity id."""

    def _headers(identity_id: int) -> dict:
        return {"Authorization": f"Bearer {create_access_token(identity_id)}"}

    return _headers


@pytest_asyncio.fixture()
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def storage(db_session):
    return Storage(db_session)


@pytest.fixture()
def accounts(storage):
    return AccountService(storage)


@pytest.fixture()
def records(storage, accounts):
    return RecordService(storage, accounts)


@pytest.fixture()
def identity():
    return FakeIdentityClient()


@pytest.fixture()
def auth(identity, accounts, storage):
    return AuthService(identity, accounts, storage)


@pytest_asyncio.fixture()
async def client(session_factory, identity):
    """HTTP client with get_db and the identity client overridden.

    Learn: Auth is NOT overridden — tokens are real JWTs signed with the
    app secret, so the full bearer verification path runs.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_client] = lambda: identity

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
