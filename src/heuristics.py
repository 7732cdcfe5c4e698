import json
import logging
from typing import Any, Dict, List, Tuple

from pydantic import ConfigDict, Field

import configs.config as cfg
from src.schemas import FrozenModel, LongTermBenefit, RecommendationTemplate, SeasonalAdjustment

logger = logging.getLogger(__name__)


class RuleOutcome(FrozenModel):
    deduction: float
    risk_factor: Dict[str, object]
    failure_mode: Dict[str, object] = Field(default_factory=dict)


class HeuristicConfig(FrozenModel):
    """
    Every tunable constant of the pipeline in one injectable structure.

    Defaults come from configs/config.py; recalibrated values can be loaded
    from JSON with `load_heuristics` without touching the code.
    """
    model_config = ConfigDict(frozen=True, validate_default=True)

    baseline_health_score: float = cfg.BASELINE_HEALTH_SCORE
    days_per_month: int = cfg.DAYS_PER_MONTH

    overheat_temperature_limit: float = cfg.OVERHEAT_TEMPERATURE_LIMIT
    overheating: RuleOutcome = RuleOutcome(
        deduction=cfg.OVERHEAT_DEDUCTION,
        risk_factor=cfg.RISK_FACTORS['overheating'],
        failure_mode=cfg.FAILURE_MODES['overheating'],
    )
    excessive_vibration_limit: float = cfg.EXCESSIVE_VIBRATION_LIMIT
    excessive_vibration: RuleOutcome = RuleOutcome(
        deduction=cfg.EXCESSIVE_VIBRATION_DEDUCTION,
        risk_factor=cfg.RISK_FACTORS['vibration'],
        failure_mode=cfg.FAILURE_MODES['vibration'],
    )
    equipment_age_limit_months: int = cfg.EQUIPMENT_AGE_LIMIT_MONTHS
    equipment_age: RuleOutcome = RuleOutcome(
        deduction=cfg.EQUIPMENT_AGE_DEDUCTION,
        risk_factor=cfg.RISK_FACTORS['age'],
    )
    emergency_ratio_limit: float = cfg.EMERGENCY_RATIO_LIMIT
    emergency_history: RuleOutcome = RuleOutcome(
        deduction=cfg.EMERGENCY_RATIO_DEDUCTION,
        risk_factor=cfg.RISK_FACTORS['emergency_history'],
    )
    health_trend_bands: List[Tuple[float, str]] = cfg.HEALTH_TREND_BANDS
    health_trend_floor: str = cfg.HEALTH_TREND_FLOOR

    inspection_health_threshold: float = cfg.INSPECTION_HEALTH_THRESHOLD
    hvac_type_marker: str = cfg.HVAC_TYPE_MARKER
    temperature_marker: str = cfg.TEMPERATURE_MARKER
    temperature_part_name: str = cfg.TEMPERATURE_PART_NAME
    generic_part_name: str = cfg.GENERIC_PART_NAME
    inspection_template: RecommendationTemplate = RecommendationTemplate.model_validate(cfg.INSPECTION_TEMPLATE)
    hvac_cleaning_template: RecommendationTemplate = RecommendationTemplate.model_validate(cfg.HVAC_CLEANING_TEMPLATE)
    part_replacement_template: RecommendationTemplate = RecommendationTemplate.model_validate(cfg.PART_REPLACEMENT_TEMPLATE)

    priority_rank: Dict[str, int] = cfg.PRIORITY_RANK
    schedule_time_window: str = cfg.SCHEDULE_TIME_WINDOW
    placeholder_technician_ids: List[str] = cfg.PLACEHOLDER_TECHNICIAN_IDS
    schedule_optimization_score: float = cfg.SCHEDULE_OPTIMIZATION_SCORE
    alternative_schedules: List[Dict[str, object]] = cfg.ALTERNATIVE_SCHEDULES

    risk_adjustment_factor: float = cfg.RISK_ADJUSTMENT_FACTOR
    long_term_benefits: Dict[str, List[LongTermBenefit]] = cfg.LONG_TERM_BENEFITS

    min_recommended_stock: int = cfg.MIN_RECOMMENDED_STOCK
    stock_multiplier: int = cfg.STOCK_MULTIPLIER
    min_reorder_point: int = cfg.MIN_REORDER_POINT
    inventory_lead_time_days: int = cfg.INVENTORY_LEAD_TIME_DAYS
    annual_usage_multiplier: int = cfg.ANNUAL_USAGE_MULTIPLIER
    seasonal_adjustments: Dict[str, List[SeasonalAdjustment]] = cfg.SEASONAL_ADJUSTMENTS

    disruption_bands: List[Tuple[float, str]] = cfg.DISRUPTION_BANDS
    disruption_floor: str = cfg.DISRUPTION_FLOOR
    urgent_priorities: List[str] = cfg.URGENT_PRIORITIES
    urgent_notification_timeline: str = cfg.URGENT_NOTIFICATION_TIMELINE
    routine_notification_timeline: str = cfg.ROUTINE_NOTIFICATION_TIMELINE
    urgent_notification_timing: str = cfg.URGENT_NOTIFICATION_TIMING
    routine_notification_timing: str = cfg.ROUTINE_NOTIFICATION_TIMING
    communication_channel: str = cfg.COMMUNICATION_CHANNEL
    mitigation_strategies: List[str] = cfg.MITIGATION_STRATEGIES
    key_messages: List[str] = cfg.KEY_MESSAGES
    value_proposition: str = cfg.VALUE_PROPOSITION

    sensor_categories: List[str] = cfg.SENSOR_CATEGORIES

    no_sensor_data_quality: float = cfg.NO_SENSOR_DATA_QUALITY
    base_model_confidence: float = cfg.BASE_MODEL_CONFIDENCE
    confidence_data_weight: float = cfg.CONFIDENCE_DATA_WEIGHT
    max_model_confidence: float = cfg.MAX_MODEL_CONFIDENCE
    historical_accuracy: float = cfg.HISTORICAL_ACCURACY
    reliability_bands: List[Tuple[float, str]] = cfg.RELIABILITY_BANDS
    reliability_floor: str = cfg.RELIABILITY_FLOOR
    learning_recommendations: List[str] = cfg.LEARNING_RECOMMENDATIONS
    sensor_optimization_suggestions: List[str] = cfg.SENSOR_OPTIMIZATION_SUGGESTIONS

    def category_rows(self, table: Dict[str, list], equipment_type: str) -> list:
        """Rows of a per-category table whose key occurs in `equipment_type` ('default' as fallback)."""
        rows = []
        for marker, entries in table.items():
            if marker != 'default' and marker in equipment_type:
                rows.extend(entries)
        if not rows:
            rows = list(table.get('default', []))
        return rows


DEFAULT_HEURISTICS = HeuristicConfig()


def merge_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay `overrides` on `base`; nested mappings merge key by key, anything else replaces."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_heuristics(path: str = '') -> HeuristicConfig:
    if not path:
        return DEFAULT_HEURISTICS
    with open(path, encoding="utf-8") as f:
        overrides = json.load(f)
    merged = merge_overrides(DEFAULT_HEURISTICS.model_dump(), overrides)
    logger.info("Loaded heuristic overrides for %s from %s", sorted(overrides), path)
    return HeuristicConfig.model_validate(merged)
