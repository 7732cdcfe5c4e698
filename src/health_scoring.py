import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig, RuleOutcome
from src.predict_utils import classify_by_bands, finite_readings, months_between
from src.schemas import (
    EquipmentHealth,
    EquipmentRecord,
    FailureModePrediction,
    MaintenanceHistoryEntry,
    RiskFactor,
    SensorReadingSet,
)

logger = logging.getLogger(__name__)


def get_health_trend(score: float, config: HeuristicConfig = DEFAULT_HEURISTICS) -> str:
    # 60-80 and 40-60 both map to "declining"; kept as-is until the intended band is confirmed
    return classify_by_bands(score, config.health_trend_bands, config.health_trend_floor)


def emergency_ratio(history: Sequence[MaintenanceHistoryEntry]) -> float:
    if not history:
        return 0.0
    emergencies = sum(1 for entry in history if entry.type == 'emergency')
    return emergencies / len(history)


def score_equipment_health(
    equipment: EquipmentRecord,
    sensors: Optional[SensorReadingSet] = None,
    history: Optional[Sequence[MaintenanceHistoryEntry]] = None,
    reference_time: Optional[datetime] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> EquipmentHealth:
    """
    Baseline score minus every applicable deduction (gates are independent and additive),
    plus the risk factors and failure modes each fired gate contributes.
    """
    reference_time = reference_time or datetime.now(timezone.utc)
    score = config.baseline_health_score
    risk_factors: List[RiskFactor] = []
    failure_modes: List[FailureModePrediction] = []

    def apply(outcome: RuleOutcome) -> None:
        nonlocal score
        score -= outcome.deduction
        risk_factors.append(RiskFactor.model_validate(outcome.risk_factor))
        if outcome.failure_mode:
            failure_modes.append(FailureModePrediction.model_validate(outcome.failure_mode))

    if sensors is not None:
        temperatures = finite_readings('temperature_readings', sensors.temperature_readings)
        if temperatures is not None and temperatures.max() > config.overheat_temperature_limit:
            apply(config.overheating)

        vibration = finite_readings('vibration_levels', sensors.vibration_levels)
        if vibration is not None and vibration.mean() > config.excessive_vibration_limit:
            apply(config.excessive_vibration)

    age_months = months_between(equipment.installation_date, reference_time, config.days_per_month)
    if age_months > config.equipment_age_limit_months:
        apply(config.equipment_age)

    if history and emergency_ratio(history) > config.emergency_ratio_limit:
        apply(config.emergency_history)

    score = min(100.0, max(0.0, float(score)))
    logger.debug("Equipment %s: age=%s months, score=%s, risk_factors=%s",
                 equipment.equipment_id, age_months, score, [r.factor for r in risk_factors])

    return EquipmentHealth(
        overall_health_score=score,
        health_trend=get_health_trend(score, config),
        risk_factors=risk_factors,
        predicted_failure_modes=failure_modes,
    )
