"""
Shared test fixtures — async SQLite DB, FastAPI test client, auth helpers.

Each test gets a fresh in-memory SQLite database so tests are fast, isolated,
and don't require PostgreSQL or an SMTP server.
"""

from __future__ import annotations

import os
import re
from typing import AsyncGenerator, Awaitable, Callable

# ── Configure settings BEFORE any app imports ────────────
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["VERIFICATION_STRATEGY"] = "link"
os.environ["SMTP_HOST"] = ""
os.environ["DEBUG"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from japama.config import settings  # noqa: E402
from japama.core.roles import Role  # noqa: E402
from japama.core.security import hash_password  # noqa: E402
from japama.core.tokens import create_session_token  # noqa: E402
from japama.database import Base, get_db  # noqa: E402
from japama.main import create_app  # noqa: E402
from japama.models.user import User  # noqa: E402
from japama.services.email_service import DeliveryError, EmailSender  # noqa: E402
import japama.models  # noqa: E402, F401  ensure every table is created

DEFAULT_PASSWORD = "secret123"


# ── Fake email transport ────────────────────────────────

class FakeMailer(EmailSender):
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        super().__init__(host="fake", from_email="noreply@japama.gob.mx")
        self.sent: list[dict[str, str]] = []
        self.fail = False

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        if self.fail:
            raise DeliveryError(f"Failed to send email to {to}")
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})

    def last_to(self, email: str) -> dict[str, str]:
        messages = [m for m in self.sent if m["to"] == email]
        assert messages, f"no email sent to {email}"
        return messages[-1]

    def token_for(self, email: str) -> str:
        match = re.search(r"token=([\w\-\.%]+)", self.last_to(email)["text"])
        assert match, "no verification link in email"
        return match.group(1)

    def code_for(self, email: str) -> str:
        match = re.search(r"\b(\d{6})\b", self.last_to(email)["text"])
        assert match, "no verification code in email"
        return match.group(1)


# ── Database lifecycle ──────────────────────────────────

@pytest_asyncio.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables for one test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        """Enable foreign keys for SQLite."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ── HTTP client fixture ─────────────────────────────────

@pytest.fixture()
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest_asyncio.fixture()
async def app_client(session_factory, mailer: FakeMailer) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an ``httpx.AsyncClient`` wired to the FastAPI app with the DB
    dependency pointed at the per-test SQLite database and a fake mailer.
    """
    app = create_app(mailer=mailer)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture()
def code_strategy(monkeypatch):
    """Run the test with 6-digit code verification instead of links."""
    monkeypatch.setattr(settings, "VERIFICATION_STRATEGY", "code")


# ── Auth helper fixtures ────────────────────────────────

UserFactory = Callable[..., Awaitable[User]]


@pytest.fixture()
def make_user(session_factory) -> UserFactory:
    """Insert a user straight into the database."""
    counter = {"n": 0}

    async def _make(
        role: Role = Role.INSPECTOR,
        verified: bool = True,
        email: str | None = None,
        username: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        counter["n"] += 1
        n = counter["n"]
        async with session_factory() as session:
            user = User(
                name=f"Name{n}",
                lastname=f"Lastname{n}",
                email=email or f"{role.value}{n}@japama.gob.mx",
                username=username or f"{role.value}{n}",
                hashed_password=hash_password(password),
                role=role.value,
                is_verified=verified,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_session_token(user.id, user.role)}"}


@pytest_asyncio.fixture()
async def admin_user(make_user) -> User:
    return await make_user(Role.ADMIN)


@pytest_asyncio.fixture()
async def admin_headers(admin_user) -> dict[str, str]:
    return bearer(admin_user)


@pytest_asyncio.fixture()
async def inspector_user(make_user) -> User:
    return await make_user(Role.INSPECTOR)


@pytest_asyncio.fixture()
async def inspector_headers(inspector_user) -> dict[str, str]:
    return bearer(inspector_user)


@pytest_asyncio.fixture()
async def cobrador_user(make_user) -> User:
    return await make_user(Role.COBRADOR)


@pytest_asyncio.fixture()
async def cobrador_headers(cobrador_user) -> dict[str, str]:
    return bearer(cobrador_user)


NEW_USER = {
    "name": "Ana",
    "lastname": "López",
    "email": "a@b.com",
    "username": "a1",
    "password": "secret1",
    "role": "inspector",
}


@pytest_asyncio.fixture()
async def registered_user(app_client: AsyncClient, admin_headers) -> dict:
    """Register NEW_USER through the admin endpoint (pending verification)."""
    resp = await app_client.post("/api/auth/register", json=NEW_USER, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()
