import os

# before quotedesk is imported: keep the module-level engine off the disk
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quotedesk import models  # noqa: F401  (registers SQLAlchemy models)
from quotedesk.auth.session import PIN_COOKIE, ROLE_COOKIE
from quotedesk.core.clock import get_clock
from quotedesk.db import Base, get_db
from quotedesk.main import app
from quotedesk.models.pin import PinProfile
from quotedesk.repositories.quotes import create_quote
from quotedesk.services.telegram import NotificationError, SentMessage, get_notifier
from quotedesk.services.totals import calc_totals, normalize_items

ADMIN_PIN = "123456"
USER_PIN = "654321"
MASTER_PIN = "000000"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class FakeNotifier:
    """Records outgoing chat messages; set ``fail`` to simulate a dispatch error."""

    def __init__(self):
        self.sent = []
        self.fail = None
        self._next_id = 100

    def send_message(self, text, *, parse_mode=None, disable_web_page_preview=True, buttons=None):
        if self.fail:
            raise NotificationError(self.fail)
        self._next_id += 1
        self.sent.append({"text": text, "parse_mode": parse_mode, "buttons": buttons})
        return SentMessage(message_id=self._next_id, chat_id="-100200300")


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def client(db, notifier, clock):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def pins(db):
    admin = PinProfile(
        id="pin-admin", pin=ADMIN_PIN, first_name="Somchai", last_name="Jaidee", role="admin"
    )
    user = PinProfile(
        id="pin-user", pin=USER_PIN, first_name="Suda", last_name="Rakdee", role="user"
    )
    db.add_all([admin, user])
    db.commit()
    return {"admin": admin, "user": user}


@pytest.fixture
def quote(db):
    items = normalize_items(
        [
            {"description": "CAM-01 - IP Camera 4MP", "qty": 2, "price": 100},
            {"description": "Installation", "qty": 1, "price": 50},
        ]
    )
    totals = calc_totals(items, 30)
    return create_quote(
        db,
        customer_id=None,
        company_name="ACME Co., Ltd.",
        system_name="CCTV",
        items=items,
        total=totals.total,
        note=None,
    )


@pytest.fixture
def login(client):
    """Put a PIN session on the test client the way POST /pin would."""

    def _login(pin: str, role: str = "user") -> TestClient:
        client.cookies.set(PIN_COOKIE, pin)
        client.cookies.set(ROLE_COOKIE, role)
        return client

    return _login
