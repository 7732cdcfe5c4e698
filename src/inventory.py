from typing import List, Mapping, Optional, Sequence

import pandas as pd

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.schemas import (
    InventoryRecommendation,
    MaintenanceRecommendation,
    PartStockRecommendation,
    SeasonalAdjustment,
)


def aggregate_part_quantities(recommendations: Sequence[MaintenanceRecommendation]) -> pd.Series:
    """Total quantity per distinct part name, in order of first appearance."""
    rows = [
        {'part': part.part, 'quantity': part.quantity}
        for rec in recommendations
        for part in rec.required_resources.parts_needed
    ]
    if not rows:
        return pd.Series(dtype='int64', name='quantity')
    df_parts = pd.DataFrame(rows)
    return df_parts.groupby('part', sort=False)['quantity'].sum()


def plan_inventory(
    recommendations: Sequence[MaintenanceRecommendation],
    equipment_type: str = '',
    current_stock: Optional[Mapping[str, int]] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> InventoryRecommendation:
    current_stock = current_stock or {}
    quantities = aggregate_part_quantities(recommendations)

    critical_parts: List[PartStockRecommendation] = []
    for part, quantity in quantities.items():
        quantity = int(quantity)
        critical_parts.append(PartStockRecommendation(
            part=part,
            recommended_stock_level=max(config.min_recommended_stock, config.stock_multiplier * quantity),
            current_stock_level=int(current_stock.get(part, 0)),
            reorder_point=max(config.min_reorder_point, quantity),
            lead_time_days=config.inventory_lead_time_days,
            # naive quarterly extrapolation until real usage history is available
            annual_usage_forecast=quantity * config.annual_usage_multiplier,
        ))

    seasonal = [SeasonalAdjustment.model_validate(row) for marker, rows in config.seasonal_adjustments.items()
                if marker in equipment_type for row in rows]
    return InventoryRecommendation(critical_parts_to_stock=critical_parts, seasonal_adjustments=seasonal)
