from __future__ import annotations

import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from .users.session_store import SessionStore

logger = logging.getLogger(__name__)


def sweep_auth_tokens(store: SessionStore) -> int:
    removed = store.sweep_expired()
    logger.debug("Auth token sweep removed %d token(s)", removed)
    return removed


def start_session_sweeper(store: SessionStore, *, minutes: int) -> BackgroundScheduler:
    """Periodically drop expired auth tokens; expired tokens already fail to resolve."""

    scheduler = BackgroundScheduler()
    scheduler.add_job(
        func=sweep_auth_tokens,
        args=[store],
        trigger="interval",
        minutes=minutes,
        id="sweep_auth_tokens",
        name="Drop expired auth tokens",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Auth token sweeper started (every %d min)", minutes)

    def _shutdown() -> None:
        if scheduler.running:
            scheduler.shutdown(wait=False)

    atexit.register(_shutdown)
    return scheduler
