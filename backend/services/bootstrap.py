# services/bootstrap.py
from __future__ import annotations
import logging
from typing import Optional

from core.interfaces import RecordStore

logger = logging.getLogger(__name__)


def attach_store(app, store: RecordStore) -> None:
    """Point the app at ``store`` and resubscribe the dashboard state to it."""
    from core.state import AppStateSync

    old = getattr(app.state, "sync", None)
    if old is not None:
        old.close()
    app.state.store = store
    app.state.sync = AppStateSync(store)


def build_services(app, store: Optional[RecordStore] = None) -> None:
    """Wire store, state, factors, AI client and diagnostics onto ``app.state``."""
    from config import get_settings
    from core.register_providers import active_provider
    from services.ai.groq_client import GroqChatClient
    from services.emissions.emissions_factory import active_factors
    from services.store.store_factory import build_store

    settings_obj = get_settings()

    attach_store(app, store or build_store(settings_obj))
    app.state.factors = active_factors()
    app.state.ai_client = GroqChatClient.from_settings(settings_obj)
    app.state.diagnostics = active_provider()

    logger.info(
        "Services ready: store=%s factors=%s ai=%s",
        type(app.state.store).__name__,
        app.state.factors.name,
        "configured" if settings_obj.GROQ_API_KEY else "missing key",
    )
