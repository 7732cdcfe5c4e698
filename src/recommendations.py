import logging
from datetime import datetime, timezone
from typing import List, Optional

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.predict_utils import date_after
from src.schemas import (
    EquipmentHealth,
    EquipmentRecord,
    MaintenanceRecommendation,
    PartRequirement,
    RecommendationTemplate,
    RequiredResources,
)

logger = logging.getLogger(__name__)


def recommendation_from_template(
    template: RecommendationTemplate,
    reference_time: datetime,
    parts_needed: Optional[List[PartRequirement]] = None,
) -> MaintenanceRecommendation:
    return MaintenanceRecommendation(
        maintenance_type=template.maintenance_type,
        priority=template.priority,
        recommended_date=date_after(reference_time, template.days_until_due),
        confidence_score=template.confidence_score,
        cost_estimate=template.cost_estimate,
        benefits=template.benefits,
        required_resources=RequiredResources(
            technician_skill_level=template.technician_skill_level,
            specialized_tools=list(template.specialized_tools),
            duration=template.duration,
            parts_needed=list(template.parts_needed if parts_needed is None else parts_needed),
        ),
    )


def replacement_part_name(risk_factor_name: str, config: HeuristicConfig = DEFAULT_HEURISTICS) -> str:
    if config.temperature_marker in risk_factor_name:
        return config.temperature_part_name
    return config.generic_part_name


def generate_recommendations(
    equipment: EquipmentRecord,
    health: EquipmentHealth,
    prediction_horizon: str = '90d',
    reference_time: Optional[datetime] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> List[MaintenanceRecommendation]:
    """
    Independent rules, evaluated in a fixed order: inspection for unhealthy equipment,
    seasonal cleaning for HVAC, and one part replacement per high-severity risk factor.

    The list is returned in emission order; priority sorting is left to the scheduler.
    `prediction_horizon` is accepted for the call contract but does not change the rules.
    """
    reference_time = reference_time or datetime.now(timezone.utc)
    recommendations: List[MaintenanceRecommendation] = []

    if health.overall_health_score < config.inspection_health_threshold:
        recommendations.append(recommendation_from_template(config.inspection_template, reference_time))

    if config.hvac_type_marker in equipment.equipment_type:
        recommendations.append(recommendation_from_template(config.hvac_cleaning_template, reference_time))

    template = config.part_replacement_template
    for risk_factor in health.risk_factors:
        if risk_factor.severity != 'high':
            continue
        parts = [
            part.model_copy(update={'part': replacement_part_name(risk_factor.factor, config)})
            for part in template.parts_needed
        ]
        recommendations.append(recommendation_from_template(template, reference_time, parts_needed=parts))

    logger.debug("Equipment %s (horizon %s): %d recommendations",
                 equipment.equipment_id, prediction_horizon, len(recommendations))
    return recommendations
