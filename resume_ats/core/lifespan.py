import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from resume_ats.core.config import settings
from resume_ats.core.resume_store import get_resume_store
from resume_ats.core.scoring import get_scoring_config
from resume_ats.services.completion import get_completion_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    get_resume_store().init()
    service = get_completion_service()
    logger.info("ai_service_ready enabled=%s model=%s", service.enabled, settings.ai_model)

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            cache = service.cache
            if cache is not None:
                try:
                    deleted = cache.purge_expired()
                    if deleted:
                        logger.info("ai_cache_purge deleted=%s", deleted)
                except Exception as exc:  # pragma: no cover - purge is best effort
                    logger.warning("ai_cache_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=settings.ai_cache_purge_interval_s)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
    get_resume_store().close()
