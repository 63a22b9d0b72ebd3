"""Database utilities for Supabase integration.

Routes never talk to tables directly: they receive a ``Marketplace`` that
bundles the marketplace services over ``SupabaseMarketplaceStorage``.
Tests swap it for in-memory storage via ``app.dependency_overrides``.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends

from gigboard.marketplace.config import MarketplaceConfig
from gigboard.marketplace.jobs.service import JobService
from gigboard.marketplace.payments.service import PaymentLedger
from gigboard.marketplace.profiles.service import ProfileService
from gigboard.marketplace.supabase_storage import SupabaseMarketplaceStorage
from supabase import Client, create_client

from .config import Settings, get_settings

_supabase_client: Client | None = None


def get_supabase_client(settings: Settings | None = None) -> Client:
    """Get cached Supabase client (secret key, bypasses row level security)."""
    global _supabase_client
    if _supabase_client is None:
        if settings is None:
            settings = get_settings()
        if not settings.supabase_secret_key:
            raise ValueError("SUPABASE_SECRET_KEY must be set")
        _supabase_client = create_client(settings.supabase_url, settings.supabase_secret_key)
    return _supabase_client


def get_db(settings: Annotated[Settings, Depends(get_settings)]) -> Client:
    """FastAPI dependency for Supabase client."""
    return get_supabase_client(settings)


def get_auth_client(settings: Annotated[Settings, Depends(get_settings)]) -> Client:
    """Fresh client for sign-up/sign-in.

    Signing in stores the user's session on the client, so these calls must
    not share the cached data client.
    """
    api_key = settings.supabase_publishable_key or settings.supabase_secret_key
    if not api_key:
        raise ValueError("SUPABASE_PUBLISHABLE_KEY or SUPABASE_SECRET_KEY must be set")
    return create_client(settings.supabase_url, api_key)


# Type aliases for dependency injection
Database = Annotated[Client, Depends(get_db)]
AuthClient = Annotated[Client, Depends(get_auth_client)]


@dataclass
class Marketplace:
    """Marketplace services sharing one storage backend."""

    storage: object
    profiles: ProfileService
    jobs: JobService
    ledger: PaymentLedger


def build_marketplace(storage, config: MarketplaceConfig | None = None) -> Marketplace:
    """Wire the services over a storage object implementing all three protocols.

    ``storage`` may also be a (profiles, jobs, payments) tuple of separate
    stores.
    """
    config = config or MarketplaceConfig.from_env()
    if isinstance(storage, tuple):
        profile_store, job_store, payment_store = storage
    else:
        profile_store = job_store = payment_store = storage
    return Marketplace(
        storage=storage,
        profiles=ProfileService(profile_store, config=config),
        jobs=JobService(job_store, config=config, profiles=profile_store),
        ledger=PaymentLedger(payment_store, config=config, jobs=job_store, profiles=profile_store),
    )


def get_marketplace(db: Database) -> Marketplace:
    """FastAPI dependency for the Supabase-backed marketplace."""
    return build_marketplace(SupabaseMarketplaceStorage(db))


MarketplaceDep = Annotated[Marketplace, Depends(get_marketplace)]
