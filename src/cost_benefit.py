from typing import Optional, Sequence, Union

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.predict_utils import round_half_up
from src.schemas import (
    CostBenefitSummary,
    EquipmentHealth,
    LongTermBenefit,
    MaintenanceHistoryEntry,
    MaintenanceRecommendation,
)

NOT_APPLICABLE = 'not_applicable'


def roi_percentage(net_savings: float, preventive_cost: float) -> int:
    if preventive_cost == 0:
        return 0
    return round_half_up(net_savings / preventive_cost * 100)


def payback_period_months(preventive_cost: float, avoided_cost: float, months_per_year: int = 12) -> Union[int, str]:
    if preventive_cost == 0:
        return 0
    if avoided_cost == 0:
        return NOT_APPLICABLE
    return round_half_up(preventive_cost / (avoided_cost / months_per_year))


def analyze_cost_benefit(
    recommendations: Sequence[MaintenanceRecommendation],
    health: Optional[EquipmentHealth] = None,
    history: Optional[Sequence[MaintenanceHistoryEntry]] = None,
    equipment_type: str = '',
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> CostBenefitSummary:
    """`health` and `history` are part of the call contract but do not enter the arithmetic."""
    preventive_cost = sum(rec.cost_estimate.total_estimated_cost for rec in recommendations)
    avoided_cost = sum(rec.benefits.avoided_emergency_costs for rec in recommendations)
    net_savings = avoided_cost - preventive_cost

    benefits = [
        LongTermBenefit.model_validate(row)
        for row in config.category_rows(config.long_term_benefits, equipment_type)
    ]
    return CostBenefitSummary(
        preventive_maintenance_cost=preventive_cost,
        reactive_maintenance_risk_cost=avoided_cost,
        net_savings=net_savings,
        roi_percentage=roi_percentage(net_savings, preventive_cost),
        payback_period_months=payback_period_months(preventive_cost, avoided_cost),
        risk_adjusted_savings=round(net_savings * config.risk_adjustment_factor, 2),
        long_term_benefits=benefits,
    )
