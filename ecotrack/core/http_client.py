# ecotrack/core/http_client.py
import httpx
import logging
from typing import Optional
from ecotrack.api.v1.schemas.result import PersistencePayload
from ecotrack.core.config import settings

logger = logging.getLogger(__name__)

EXPORT_TIMEOUT_SECONDS = 10.0


async def export_result(payload: PersistencePayload, target_url: Optional[str] = None) -> bool:
    """
    Pushes a computed footprint (the same record that is stored in the database)
    to the results service configured in RESULT_EXPORT_URL.
    Returns True once the service accepted it. Failures are logged, never raised.
    """
    target_url = target_url or settings.RESULT_EXPORT_URL
    if not target_url:
        logger.debug("No results service configured (RESULT_EXPORT_URL); footprint export skipped.")
        return False

    owner = payload.userId or "anonymous"
    summary = f"{payload.totalCO2} t CO2e footprint of {owner}"
    try:
        async with httpx.AsyncClient(timeout=EXPORT_TIMEOUT_SECONDS) as client:
            response = await client.post(target_url, json=payload.model_dump())
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Results service rejected the {summary}: HTTP {e.response.status_code} - {e.response.text}")
        return False
    except httpx.RequestError as e:
        logger.error(f"Results service unreachable, {summary} not exported: {e}")
        return False
    except Exception as e:
        logger.error(f"Footprint export failed for the {summary}: {e}")
        return False

    logger.info(f"Exported the {summary} (HTTP {response.status_code}).")
    return True
