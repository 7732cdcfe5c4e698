from typing import List, Optional

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.predict_utils import classify_by_bands
from src.schemas import EquipmentHealth, MLInsights, SensorReadingSet


def present_sensor_categories(
    sensors: Optional[SensorReadingSet],
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> List[str]:
    """Sensor categories that carry data; an empty series counts as absent."""
    if sensors is None:
        return []
    present = []
    for category in config.sensor_categories:
        value = getattr(sensors, category)
        if value is None:
            continue
        if isinstance(value, list) and not value:
            continue
        present.append(category)
    return present


def synthesize_insights(
    sensors: Optional[SensorReadingSet],
    health: Optional[EquipmentHealth] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> MLInsights:
    present = present_sensor_categories(sensors, config)
    if present:
        data_quality = len(present) / len(config.sensor_categories) * 100
        confidence = min(config.max_model_confidence,
                         config.base_model_confidence + data_quality / 100 * config.confidence_data_weight)
    else:
        data_quality = config.no_sensor_data_quality
        confidence = config.base_model_confidence

    return MLInsights(
        model_confidence=round(confidence, 2),
        prediction_accuracy_history=config.historical_accuracy,
        data_quality_score=round(data_quality),
        recommendation_reliability=classify_by_bands(data_quality, config.reliability_bands, config.reliability_floor),
        learning_recommendations=list(config.learning_recommendations),
        sensor_optimization_suggestions=list(config.sensor_optimization_suggestions),
    )
