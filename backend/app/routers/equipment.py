import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx
from fastapi import APIRouter, Depends

from backend.app.core.clients import fetch_fleet_snapshots, generate_request_id, get_http_client
from backend.app.core.config import settings
from backend.app.core.errors import FLEET_INSIGHTS_ERROR, APIError
from backend.app.schemas.models import FleetInsights, FleetInsightsResponse, FleetMeta, FleetRequest
from src.errors import MaintenanceValidationError
from src.fleet import get_fleet_maintenance_insights
from src.schemas import PredictionHorizon

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_PREFIX)


async def _fleet_response(snapshots: Sequence[Mapping[str, Any]], time_horizon: str, include_optimization: bool,
                          equipment_type: Optional[str], start: float) -> FleetInsightsResponse:
    insights = await get_fleet_maintenance_insights(
        snapshots,
        time_horizon=time_horizon,
        include_optimization=include_optimization,
        equipment_type=equipment_type,
        config=settings.HEURISTICS,
    )
    return FleetInsightsResponse(
        data=FleetInsights(**insights),
        meta=FleetMeta(
            request_id=generate_request_id(),
            response_time_ms=int((time.perf_counter() - start) * 1000),
            model_version=settings.MODEL_VERSION,
            equipment_type=equipment_type,
            time_horizon=time_horizon,
        ),
    )


@router.get("/fleet", response_model=FleetInsightsResponse, tags=["Fleet Insights"])
async def get_fleet_insights(
    time_horizon: PredictionHorizon = settings.DEFAULT_PREDICTION_HORIZON,
    include_optimization: bool = False,
    equipment_type: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    start = time.perf_counter()
    try:
        snapshots: List[Dict[str, Any]] = await fetch_fleet_snapshots(client, equipment_type)
    except httpx.HTTPStatusError as e:
        raise APIError(e.response.status_code, FLEET_INSIGHTS_ERROR, f"Data service error: {e.response.text}")
    except httpx.RequestError as e:
        raise APIError(503, FLEET_INSIGHTS_ERROR, f"Unable to reach the data service: {e}")

    try:
        return await _fleet_response(snapshots, time_horizon, include_optimization, equipment_type, start)
    except Exception as e:
        logger.exception("fleet_maintenance_error (GET, %d snapshots)", len(snapshots))
        raise APIError(500, FLEET_INSIGHTS_ERROR, "Failed to fetch fleet maintenance insights") from e


@router.post("/fleet", response_model=FleetInsightsResponse, tags=["Fleet Insights"])
async def post_fleet_insights(request: FleetRequest):
    start = time.perf_counter()
    snapshots = [snapshot.model_dump() for snapshot in request.equipment]
    try:
        return await _fleet_response(snapshots, request.time_horizon, request.include_optimization,
                                     request.equipment_type, start)
    except MaintenanceValidationError:
        raise
    except Exception as e:
        logger.exception("fleet_maintenance_error (POST, %d snapshots)", len(snapshots))
        raise APIError(500, FLEET_INSIGHTS_ERROR, "Failed to fetch fleet maintenance insights") from e
