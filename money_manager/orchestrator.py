"""
Application Wiring for Money Manager

This module picks the persistence backend from configuration and ties
the ledger store, the dashboard and the audit logger together.

DESIGN DECISION: The UI never builds components itself. Everything it
needs comes from ``create_app_components`` so that tests and the app
share exactly the same wiring.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import structlog

from money_manager.audit import AuditLogger
from money_manager.config import get_settings
from money_manager.dashboard import DashboardService
from money_manager.ledger import LedgerStore
from money_manager.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsLedgerStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
)

logger = structlog.get_logger(__name__)


@dataclass
class AppComponents:
    """Everything the UI talks to."""

    store: LedgerStore
    dashboard: DashboardService
    audit_logger: AuditLogger
    storage: LedgerStorageInterface


def create_storage(
    backend: Optional[str] = None,
    data_dir: Optional[Path] = None,
) -> LedgerStorageInterface:
    """
    Build the configured persistence backend.

    Google Sheets falls back to in-memory storage when it is not
    configured, so the app still starts.
    """
    storage_settings = get_settings().storage
    backend = backend or storage_settings.backend

    if backend == "memory":
        return InMemoryLedgerStorage()

    if backend == "json":
        return JsonFileLedgerStorage(data_dir or storage_settings.data_dir)

    if backend == "sheets":
        try:
            return GoogleSheetsLedgerStorage(GoogleSheetsClient())
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("sheets_storage_unavailable", error=str(e), fallback="memory")
            return InMemoryLedgerStorage()

    raise ValueError(f"Unknown storage backend: {backend}")


def create_app_components(
    storage: Optional[LedgerStorageInterface] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        storage: Persistence backend. Built from settings when omitted.
        clock: Source of "now". Defaults to the system clock.

    Returns:
        AppComponents with a loaded store.
    """
    if storage is None:
        storage = create_storage()
    audit_logger = AuditLogger()

    store = LedgerStore(storage, audit_logger=audit_logger, clock=clock)
    dashboard = DashboardService(store)

    logger.info(
        "app_components_created",
        storage=type(storage).__name__,
        accounts=len(store.accounts),
        transactions=len(store.transactions),
    )

    return AppComponents(
        store=store,
        dashboard=dashboard,
        audit_logger=audit_logger,
        storage=storage,
    )
