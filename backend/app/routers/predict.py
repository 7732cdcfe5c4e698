import logging
import time
from datetime import datetime, timezone

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends

from backend.app.core.clients import (
    USAGE_METRIC,
    calculate_maintenance_complexity,
    generate_request_id,
    get_http_client,
    record_usage,
)
from backend.app.core.config import settings
from backend.app.core.errors import MAINTENANCE_PREDICTION_ERROR, APIError
from backend.app.schemas.models import PredictiveMaintenanceRequest, PredictiveMaintenanceResponse, ResponseMeta
from src.errors import MaintenanceValidationError
from src.pipeline import generate_maintenance_recommendations

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_PREFIX)


@router.post("", response_model=PredictiveMaintenanceResponse, tags=["Predictive Maintenance"])
async def predict_maintenance_endpoint(
    request: PredictiveMaintenanceRequest,
    background_tasks: BackgroundTasks,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    start = time.perf_counter()
    analysis_time = datetime.now(timezone.utc)

    try:
        result = await generate_maintenance_recommendations(
            request.equipment_data,
            request.sensor_data,
            request.maintenance_history,
            prediction_horizon=request.prediction_horizon,
            optimization_goals=request.optimization_goals,
            config=settings.HEURISTICS,
            reference_time=analysis_time,
        )
    except MaintenanceValidationError:
        raise
    except Exception as e:
        logger.exception("predictive_maintenance_error for equipment %s", request.equipment_data.equipment_id)
        raise APIError(500, MAINTENANCE_PREDICTION_ERROR, "Failed to generate maintenance predictions") from e

    background_tasks.add_task(record_usage, client, USAGE_METRIC, 1, {
        'equipment_type': request.equipment_data.equipment_type,
        'prediction_horizon': request.prediction_horizon,
        'has_sensor_data': request.sensor_data is not None,
        'complexity_score': calculate_maintenance_complexity(
            request.sensor_data is not None,
            len(request.maintenance_history),
            len(request.optimization_goals),
            request.prediction_horizon,
        ),
    })

    return PredictiveMaintenanceResponse(
        data=result.analysis,
        meta=ResponseMeta(
            request_id=generate_request_id(),
            response_time_ms=int((time.perf_counter() - start) * 1000),
            model_version=settings.MODEL_VERSION,
            analysis_timestamp=analysis_time.isoformat(),
            data_sources=list(settings.DATA_SOURCES),
            prediction_horizon=request.prediction_horizon,
            data_gaps=result.data_gaps,
        ),
    )
