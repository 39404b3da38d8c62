"""
MoodLog Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No real provider is ever contacted:
       - Firestore is replaced by InMemoryStore
       - Firebase Auth is replaced by FakeIdentityProvider
       - Gemini HTTP calls go to FakeGemini through httpx.MockTransport

Fixture Hierarchy (all function-scoped):
    ├── memory_store: fresh in-memory document store
    ├── fake_identity: in-memory account registry
    ├── fake_gemini: scripted Gemini REST endpoint
    ├── test_settings: Settings with test keys and the memory backend
    ├── services: service graph wired to the fakes above
    └── test_client: HTTPX AsyncClient talking to create_app(services=...)
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["FIREBASE_API_KEY"] = "test-firebase-key"
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

import uuid
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.dependencies import build_services
from app.exceptions import IdentityProviderError
from app.services.identity_base import Account, IdentityProvider
from app.services.memory_store import InMemoryStore


# ══════════════════════════════════════════════════════════════════════════
# Provider Fakes
# ══════════════════════════════════════════════════════════════════════════

class FakeIdentityProvider(IdentityProvider):
    """
    Account registry with Firebase-style error codes.
    `accounts` maps email → (uid, password).
    """

    def __init__(self):
        self.accounts: Dict[str, tuple] = {}

    @staticmethod
    def _reject(code: str) -> IdentityProviderError:
        return IdentityProviderError(code=code, message=f"Firebase: Error ({code}).")

    async def create_account(self, email: str, password: str) -> Account:
        if not email:
            raise self._reject("auth/missing-email")
        if email in self.accounts:
            raise self._reject("auth/email-already-in-use")
        if len(password) < 6:
            raise IdentityProviderError(
                code="auth/weak-password",
                message="Firebase: Password should be at least 6 characters (auth/weak-password).",
            )
        uid = uuid.uuid4().hex[:28]
        self.accounts[email] = (uid, password)
        return Account(uid=uid, email=email)

    async def verify_credentials(self, email: str, password: str) -> Account:
        record = self.accounts.get(email)
        if record is None or record[1] != password:
            raise self._reject("auth/invalid-credential")
        return Account(uid=record[0], email=email)


class FakeGemini:
    """
    Scripted generateContent endpoint for httpx.MockTransport.

    Set `status_code` / `payload` to shape the next answers, or `error` to an
    httpx exception to simulate a transport failure. Every request received
    is kept in `requests`.
    """

    def __init__(self):
        self.status_code = 200
        self.payload: Any = {
            "candidates": [{"content": {"role": "model", "parts": [{"text": "Hello from Gemini"}]}}]
        }
        self.error: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    def reply_text(self, text: str) -> None:
        self.payload = {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, text=str(self.payload))


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def fake_identity():
    return FakeIdentityProvider()


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def test_settings():
    return Settings(
        gemini_api_key="test-gemini-key",
        firebase_api_key="test-firebase-key",
        store_backend="memory",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def services(test_settings, memory_store, fake_identity, fake_gemini):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_gemini))
    graph = build_services(
        test_settings,
        store=memory_store,
        identity=fake_identity,
        http_client=http_client,
    )
    yield graph
    await http_client.aclose()


@pytest_asyncio.fixture
async def test_client(test_settings, services):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app(config=test_settings, services=services)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
