import logging
import time
import uuid
from typing import Any, Dict, List, Optional

import httpx
from fastapi import HTTPException

from backend.app.core.config import settings

logger = logging.getLogger(__name__)

USAGE_METRIC = 'ai_predictive_maintenance'


class HTTPResources:
    client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    if HTTPResources.client is None:
        raise HTTPException(status_code=500, detail="HTTP client is not initialized.")
    return HTTPResources.client


def generate_request_id() -> str:
    return f"req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:11]}"


def calculate_maintenance_complexity(has_sensor_data: bool, history_length: int,
                                     goal_count: int, prediction_horizon: str) -> int:
    complexity = 1
    if has_sensor_data:
        complexity += 2
    if history_length > 5:
        complexity += 1
    if goal_count > 2:
        complexity += 1
    if prediction_horizon == '1y':
        complexity += 1
    return complexity


async def fetch_fleet_snapshots(client: httpx.AsyncClient, equipment_type: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Equipment snapshots from the data service.

    Raises httpx.HTTPStatusError / httpx.RequestError; the router maps them to
    the upstream status or 503.
    """
    params = {'equipment_type': equipment_type} if equipment_type else None
    response = await client.get(f"{settings.DATA_SERVICE_URL}/equipment", params=params,
                                timeout=settings.HTTP_TIMEOUT_SECONDS)
    response.raise_for_status()
    payload = response.json()
    if isinstance(payload, dict):
        payload = payload.get('equipment', [])
    return payload


async def record_usage(client: Optional[httpx.AsyncClient], metric: str, value: int, metadata: Dict[str, Any]):
    """Fire-and-forget billing event; a metering outage never fails the prediction."""
    event = {'metric': metric, 'value': value, 'metadata': metadata}
    if not settings.USAGE_METERING_URL or client is None:
        logger.info("Recording usage: %s", event)
        return
    try:
        response = await client.post(settings.USAGE_METERING_URL, json=event, timeout=settings.HTTP_TIMEOUT_SECONDS)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Usage metering failed for %s: %s", metric, e)
