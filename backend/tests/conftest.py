"""Pytest fixtures: in-memory database, stubbed gateway and a wired TestClient."""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from payrelay.config import Settings, get_settings
from payrelay.database import Base, get_db
from payrelay.dependencies import get_gateway_client
from payrelay.main import app
from payrelay.services.gateway_client import GatewayClient
from payrelay.services.identifiers import TransactionIdGenerator
from payrelay.services.network_resolver import NetworkResolver
from payrelay.services.payment_service import PaymentService
from payrelay.services.payment_store import PaymentStore

AUTH_URL = "https://gateway.test/api/auth"
NAME_ENQUIRY_URL = "https://gateway.test/api/name-enquiry"
COLLECTION_URL = "https://gateway.test/api/collection"


def _endpoint(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


class GatewayStub:
    """httpx MockTransport handler keyed by endpoint.

    Each entry is ``(status, body)`` or an exception instance to raise.
    A ``str`` body is sent as plain text, anything else as JSON.
    """

    def __init__(self):
        self.responses = {
            AUTH_URL: (200, {"result": "tok-123"}),
            NAME_ENQUIRY_URL: (200, {"data": {"nametocredit": "AMA MENSAH"}}),
            COLLECTION_URL: (200, {"message": {"status": "000", "text": "Successful"}}),
        }
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = _endpoint(request)
        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def calls_to(self, url: str):
        return [r for r in self.requests if _endpoint(r) == url]


@pytest.fixture
def settings():
    return Settings(
        AUTH_API_URL=AUTH_URL,
        NAME_ENQUIRY_API_URL=NAME_ENQUIRY_URL,
        COLLECTION_API_URL=COLLECTION_URL,
        GATEWAY_USERNAME="relay-user",
        GATEWAY_PASSWORD="relay-pass",
        PARTNER_CODE="PC001",
        MTN_BANK_CODE="300591",
        AIRTELTIGO_BANK_CODE="300592",
        TELECEL_BANK_CODE="300594",
        TRANSACTION_ID_GAP_MS=0,
    )


@pytest.fixture
def db_session():
    """Single-connection in-memory SQLite shared by the app and the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def gateway_stub():
    return GatewayStub()


@pytest.fixture
def gateway(settings, gateway_stub):
    return GatewayClient.from_settings(settings, transport=httpx.MockTransport(gateway_stub))


@pytest.fixture
def store(db_session):
    return PaymentStore(db_session)


@pytest.fixture
def service(settings, gateway, store):
    return PaymentService(
        gateway=gateway,
        store=store,
        id_generator=TransactionIdGenerator(prefix=settings.TRANSACTION_ID_PREFIX),
        resolver=NetworkResolver.from_settings(settings),
        partner_code=settings.PARTNER_CODE,
        default_narration=settings.DEFAULT_NARRATION,
        id_gap_seconds=0,
    )


@pytest.fixture
def client(settings, db_session, gateway):
    def _db():
        yield db_session

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gateway_client] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
