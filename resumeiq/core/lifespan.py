from contextlib import asynccontextmanager
import logging

from resumeiq.analytics.db import init_db, purge_old_records
from resumeiq.history.store import get_history_store
from resumeiq.taxonomy import get_default_taxonomy_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_default_taxonomy_provider()
    try:
        init_db()
        deleted = purge_old_records()
        if any(deleted.values()):
            logger.info("analytics_retention_purge deleted=%s", deleted)
    except Exception as exc:  # pragma: no cover - analytics is optional at startup
        logger.warning("analytics_init_failed: %s", exc)
    yield
    # Only close a store this process actually opened.
    if get_history_store.cache_info().currsize:
        get_history_store().close()
