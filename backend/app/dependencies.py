"""
MoodLog Backend — Composition Root
====================================

What:  Builds every provider client and service once, and hands them to
       route handlers through FastAPI's dependency injection.
Why:   The document store, identity provider and HTTP client live for the
       whole process. Building them here (instead of at module import) lets
       tests pass in fakes through create_app(services=...).
How:   build_services() returns a Services bundle; create_app() stores it on
       app.state; the get_* functions below read it back per request.

Lifecycle:
    Built when the app is created, closed by the lifespan on shutdown.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from app.config import Settings
from app.services.account_service import AccountService
from app.services.firebase_identity import FirebaseIdentityProvider
from app.services.firestore_store import FirestoreStore
from app.services.gemini_service import GeminiService
from app.services.identity_base import IdentityProvider
from app.services.journal_service import JournalService
from app.services.memory_store import InMemoryStore
from app.services.mood_service import MoodService
from app.services.store_base import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    store: DocumentStore
    http_client: httpx.AsyncClient
    accounts: AccountService
    moods: MoodService
    journal: JournalService
    gemini: GeminiService

    async def aclose(self) -> None:
        """Release provider resources. Called once at shutdown."""
        await self.http_client.aclose()
        await self.store.close()


def build_store(settings: Settings) -> DocumentStore:
    if settings.store_backend == "memory":
        logger.warning("Using in-memory document store; data will not survive a restart")
        return InMemoryStore()
    return FirestoreStore(project=settings.firebase_project_id)


def build_services(
    settings: Settings,
    store: Optional[DocumentStore] = None,
    identity: Optional[IdentityProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Services:
    """
    Assemble the service graph. Any provider passed in replaces the one the
    settings would select.
    """
    store = store or build_store(settings)
    # httpx.Timeout(None) disables timeouts; PROVIDER_TIMEOUT opts in
    http_client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(settings.provider_timeout))
    identity = identity or FirebaseIdentityProvider(
        http_client=http_client,
        api_key=settings.firebase_api_key,
        base_url=settings.identity_base_url,
    )

    return Services(
        store=store,
        http_client=http_client,
        accounts=AccountService(identity),
        moods=MoodService(store, collection=settings.moods_collection),
        journal=JournalService(store, collection=settings.journal_collection),
        gemini=GeminiService(
            http_client=http_client,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
        ),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_account_service(request: Request) -> AccountService:
    return get_services(request).accounts


def get_mood_service(request: Request) -> MoodService:
    return get_services(request).moods


def get_journal_service(request: Request) -> JournalService:
    return get_services(request).journal


def get_gemini_service(request: Request) -> GeminiService:
    return get_services(request).gemini
