from typing import Sequence

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.predict_utils import classify_by_bands, format_number
from src.schemas import (
    CustomerCommunication,
    CustomerImpactAssessment,
    MaintenanceRecommendation,
    ServiceDisruption,
)


def total_estimated_hours(recommendations: Sequence[MaintenanceRecommendation]) -> float:
    # lower bound of each duration range
    return sum(rec.required_resources.duration.min_hours for rec in recommendations)


def analyze_customer_impact(
    recommendations: Sequence[MaintenanceRecommendation],
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> CustomerImpactAssessment:
    total_hours = total_estimated_hours(recommendations)
    urgent = any(rec.priority in config.urgent_priorities for rec in recommendations)

    return CustomerImpactAssessment(
        service_disruption=ServiceDisruption(
            estimated_downtime=f"{format_number(total_hours)} hours",
            disruption_level=classify_by_bands(total_hours, config.disruption_bands, config.disruption_floor),
            customer_notification_timeline=(config.urgent_notification_timeline if urgent
                                            else config.routine_notification_timeline),
            mitigation_strategies=list(config.mitigation_strategies),
        ),
        customer_communication=CustomerCommunication(
            optimal_notification_timing=(config.urgent_notification_timing if urgent
                                         else config.routine_notification_timing),
            communication_channel=config.communication_channel,
            key_messages=list(config.key_messages),
            value_proposition=config.value_proposition,
        ),
    )
