import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ValidationError

import configs.config as cfg
from src.cost_benefit import analyze_cost_benefit
from src.customer_impact import analyze_customer_impact
from src.errors import ComputationError, MaintenanceValidationError, PipelineError
from src.health_scoring import score_equipment_health
from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.insights import present_sensor_categories, synthesize_insights
from src.inventory import plan_inventory
from src.predict_utils import finite_readings
from src.recommendations import generate_recommendations
from src.scheduling import PriorityScheduler, SchedulingStrategy, sort_by_priority
from src.schemas import (
    DegradedDataWarning,
    EquipmentRecord,
    MaintenanceAnalysis,
    MaintenanceHistoryEntry,
    PipelineResult,
    SensorReadingSet,
)

logger = logging.getLogger(__name__)

EquipmentInput = Union[EquipmentRecord, Mapping[str, Any], None]
SensorInput = Union[SensorReadingSet, Mapping[str, Any], None]
HistoryInput = Optional[Sequence[Union[MaintenanceHistoryEntry, Mapping[str, Any]]]]


def _validation_fields(exc: ValidationError, prefix: str) -> List[dict]:
    return [
        {'field': '.'.join([prefix] + [str(part) for part in err['loc']]), 'message': err['msg']}
        for err in exc.errors()
    ]


def _coerce(model: type, value: Any, prefix: str) -> BaseModel:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise MaintenanceValidationError(f"{prefix} is invalid", _validation_fields(e, prefix)) from e


def validate_inputs(equipment: EquipmentInput, sensors: SensorInput = None, history: HistoryInput = None):
    """Coerce raw inputs into domain models; any failure is reported before a stage runs."""
    if equipment is None:
        raise MaintenanceValidationError(
            "equipment_data with equipment_id is required",
            [{'field': 'equipment_data', 'message': 'Field required'}],
        )
    if isinstance(equipment, Mapping) and not str(equipment.get('equipment_id') or '').strip():
        raise MaintenanceValidationError(
            "equipment_data with equipment_id is required",
            [{'field': 'equipment_data.equipment_id', 'message': 'Field required'}],
        )
    record = _coerce(EquipmentRecord, equipment, 'equipment_data')
    if not record.equipment_id.strip():
        raise MaintenanceValidationError(
            "equipment_data with equipment_id is required",
            [{'field': 'equipment_data.equipment_id', 'message': 'Field required'}],
        )

    sensor_set = None if sensors is None else _coerce(SensorReadingSet, sensors, 'sensor_data')
    entries = [
        _coerce(MaintenanceHistoryEntry, entry, f'maintenance_history.{i}')
        for i, entry in enumerate(history or [])
    ]
    return record, sensor_set, entries


def check_sensor_series(sensors: Optional[SensorReadingSet]) -> None:
    if sensors is None:
        return
    for name in cfg.READING_SERIES:
        finite_readings(name, getattr(sensors, name))


def degraded_data_warnings(
    sensors: Optional[SensorReadingSet],
    history: Sequence[MaintenanceHistoryEntry],
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> List[DegradedDataWarning]:
    gaps = []
    if sensors is None:
        gaps.append(DegradedDataWarning(
            field='sensor_data', message='No sensor data supplied; confidence reduced to the base level.'))
    elif not present_sensor_categories(sensors, config):
        gaps.append(DegradedDataWarning(
            field='sensor_data', message='Sensor data carries no readings; confidence reduced to the base level.'))
    if not history:
        gaps.append(DegradedDataWarning(
            field='maintenance_history', message='No maintenance history supplied; history patterns not assessed.'))
    return gaps


async def generate_maintenance_recommendations(
    equipment: EquipmentInput,
    sensors: SensorInput = None,
    history: HistoryInput = None,
    prediction_horizon: str = cfg.DEFAULT_PREDICTION_HORIZON,
    optimization_goals: Optional[Sequence[str]] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
    strategy: Optional[SchedulingStrategy] = None,
    reference_time: Optional[datetime] = None,
    current_stock: Optional[Mapping[str, int]] = None,
) -> PipelineResult:
    """
    Run the full analytics pipeline for one piece of equipment.

    Health scoring and recommendation generation run in sequence; the five
    downstream stages only read the shared, immutable recommendation list and
    run as independent tasks joined before the response is assembled.
    """
    record, sensor_set, entries = validate_inputs(equipment, sensors, history)
    reference_time = reference_time or datetime.now(timezone.utc)
    strategy = strategy or PriorityScheduler(config)

    data_gaps = degraded_data_warnings(sensor_set, entries, config)
    for gap in data_gaps:
        logger.warning("Equipment %s: %s", record.equipment_id, gap.message)

    try:
        check_sensor_series(sensor_set)
        health = score_equipment_health(record, sensor_set, entries, reference_time, config)
        recommendations = tuple(sort_by_priority(
            generate_recommendations(record, health, prediction_horizon, reference_time, config), config))

        scheduling, cost_benefit, inventory, impact, insights = await asyncio.gather(
            asyncio.to_thread(strategy.build, recommendations, optimization_goals, reference_time),
            asyncio.to_thread(analyze_cost_benefit, recommendations, health, entries, record.equipment_type, config),
            asyncio.to_thread(plan_inventory, recommendations, record.equipment_type, current_stock, config),
            asyncio.to_thread(analyze_customer_impact, recommendations, config),
            asyncio.to_thread(synthesize_insights, sensor_set, health, config),
        )
    except PipelineError:
        raise
    except (ArithmeticError, TypeError, ValueError) as e:
        logger.exception("Pipeline computation failed for equipment %s", record.equipment_id)
        raise ComputationError(f"Failed to compute maintenance analysis for {record.equipment_id}") from e

    analysis = MaintenanceAnalysis(
        equipment_health=health,
        maintenance_recommendations=list(recommendations),
        optimal_scheduling=scheduling,
        cost_benefit_analysis=cost_benefit,
        inventory_recommendations=inventory,
        customer_impact_analysis=impact,
        machine_learning_insights=insights,
    )
    logger.info("Equipment %s: health=%s (%s), %d recommendations",
                record.equipment_id, health.overall_health_score, health.health_trend, len(recommendations))
    return PipelineResult(analysis=analysis, data_gaps=data_gaps)


def generate_maintenance_recommendations_sync(*args, **kwargs) -> PipelineResult:
    """Blocking wrapper for callers outside an event loop."""
    return asyncio.run(generate_maintenance_recommendations(*args, **kwargs))
