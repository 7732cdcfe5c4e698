import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

import configs.config as cfg
from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.pipeline import generate_maintenance_recommendations
from src.predict_utils import as_utc, classify_by_bands
from src.schemas import PipelineResult

logger = logging.getLogger(__name__)

_DISTRIBUTION_LABELS = [label for _, label in cfg.HEALTH_DISTRIBUTION_BANDS] + [cfg.HEALTH_DISTRIBUTION_FLOOR]


def _snapshot_equipment(snapshot: Mapping[str, Any]) -> Mapping[str, Any]:
    return snapshot.get('equipment_data') or {}


def _matches_type(snapshot: Mapping[str, Any], equipment_type: Optional[str]) -> bool:
    if not equipment_type:
        return True
    return equipment_type.lower() in str(_snapshot_equipment(snapshot).get('equipment_type', '')).lower()


def _task_frame(results: Sequence[PipelineResult], snapshots: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    """One row per recommendation across the fleet."""
    rows = []
    for snapshot, result in zip(snapshots, results):
        equipment = _snapshot_equipment(snapshot)
        location = equipment.get('location') or {}
        for rec in result.analysis.maintenance_recommendations:
            rows.append({
                'equipment_id': equipment.get('equipment_id'),
                'customer': equipment.get('customer_id') or '',
                'city': location.get('city', ''),
                'maintenance_type': rec.maintenance_type,
                'priority': rec.priority,
                'due_date': rec.recommended_date,
                'total_cost': rec.cost_estimate.total_estimated_cost,
                'parts_cost': rec.cost_estimate.parts_cost,
                'labor_hours': rec.cost_estimate.labor_hours,
                'parts': [p.part for p in rec.required_resources.parts_needed],
            })
    columns = ['equipment_id', 'customer', 'city', 'maintenance_type', 'priority', 'due_date',
               'total_cost', 'parts_cost', 'labor_hours', 'parts']
    return pd.DataFrame(rows, columns=columns)


def _cost_due_within(tasks: pd.DataFrame, reference_time: datetime, days: int) -> float:
    if tasks.empty:
        return 0.0
    cutoff = (as_utc(reference_time) + timedelta(days=days)).date().isoformat()
    return float(tasks.loc[tasks['due_date'] <= cutoff, 'total_cost'].sum())


def _optimization_opportunities(tasks: pd.DataFrame) -> List[Dict[str, Any]]:
    opportunities = []
    if tasks.empty:
        return opportunities

    parts = tasks.explode('parts').dropna(subset=['parts'])
    if not parts.empty:
        equipment_per_part = parts.groupby('parts')['equipment_id'].nunique()
        shared_parts = equipment_per_part[equipment_per_part >= 2].index
        if len(shared_parts):
            shared = tasks[tasks['parts'].apply(lambda names: any(n in shared_parts for n in names))]
            opportunities.append({
                'opportunity': 'Bulk Parts Ordering',
                'potential_savings': round(float(shared['parts_cost'].sum()) * cfg.BULK_ORDER_DISCOUNT, 2),
                'implementation_effort': 'low',
            })

    located = tasks[tasks['city'] != '']
    equipment_per_city = located.groupby('city')['equipment_id'].nunique()
    shared_cities = equipment_per_city[equipment_per_city >= 2].index
    if len(shared_cities):
        routed = located[located['city'].isin(shared_cities)]
        labor_cost = float(routed['labor_hours'].sum()) * cfg.LABOR_RATE_PER_HOUR
        opportunities.append({
            'opportunity': 'Route Optimization',
            'potential_savings': round(labor_cost * cfg.ROUTE_OPTIMIZATION_SAVINGS, 2),
            'implementation_effort': 'medium',
        })
    return opportunities


async def get_fleet_maintenance_insights(
    snapshots: Sequence[Mapping[str, Any]],
    time_horizon: str = cfg.DEFAULT_PREDICTION_HORIZON,
    include_optimization: bool = False,
    equipment_type: Optional[str] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
    reference_time: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Fleet-wide view built by running the per-equipment pipeline for every snapshot.

    A snapshot is `{"equipment_data": ..., "sensor_data"?: ..., "maintenance_history"?: ...}`,
    the same shape the single-equipment endpoint accepts.
    """
    reference_time = reference_time or datetime.now(timezone.utc)
    horizon_days = cfg.HORIZON_DAYS[time_horizon]
    selected = [s for s in snapshots if _matches_type(s, equipment_type)]

    results: List[PipelineResult] = await asyncio.gather(*(
        generate_maintenance_recommendations(
            snapshot.get('equipment_data'),
            snapshot.get('sensor_data'),
            snapshot.get('maintenance_history'),
            prediction_horizon=time_horizon,
            config=config,
            reference_time=reference_time,
        )
        for snapshot in selected
    ))

    scores = pd.Series([r.analysis.equipment_health.overall_health_score for r in results], dtype=float)
    buckets = scores.apply(lambda s: classify_by_bands(s, cfg.HEALTH_DISTRIBUTION_BANDS, cfg.HEALTH_DISTRIBUTION_FLOOR))
    distribution = {label: int((buckets == label).sum()) for label in _DISTRIBUTION_LABELS}

    equipment_types = list(dict.fromkeys(
        str(_snapshot_equipment(s).get('equipment_type', '')) for s in selected))
    maintenance_due = sum(
        1 for r in results
        if any(rec.priority in config.urgent_priorities for rec in r.analysis.maintenance_recommendations)
    )

    tasks = _task_frame(results, selected)
    cutoff = (as_utc(reference_time) + timedelta(days=horizon_days)).date().isoformat()
    upcoming = tasks[tasks['due_date'] <= cutoff].copy() if not tasks.empty else tasks
    if not upcoming.empty:
        upcoming['rank'] = upcoming['priority'].map(config.priority_rank)
        upcoming = upcoming.sort_values(['due_date', 'rank'], ascending=[True, False], kind='stable')
    upcoming_maintenance = [
        {
            'equipment_id': row.equipment_id,
            'customer': row.customer,
            'maintenance_type': row.maintenance_type,
            'due_date': row.due_date,
            'priority': row.priority,
        }
        for row in upcoming.itertuples(index=False)
    ]

    next_90_days = _cost_due_within(tasks, reference_time, 90)
    logger.info("Fleet insights: %d equipment (filter=%r, horizon=%s)", len(selected), equipment_type, time_horizon)

    return {
        'fleet_summary': {
            'total_equipment': len(selected),
            'equipment_types': equipment_types,
            'average_health_score': round(float(scores.mean()), 1) if len(scores) else 0.0,
            'at_risk_equipment': int((scores < cfg.AT_RISK_HEALTH_THRESHOLD).sum()),
            'maintenance_due': maintenance_due,
        },
        'health_distribution': distribution,
        'upcoming_maintenance': upcoming_maintenance,
        'cost_projections': {
            'next_30_days': _cost_due_within(tasks, reference_time, 30),
            'next_90_days': next_90_days,
            'annual_projection': next_90_days * cfg.QUARTERS_PER_YEAR,
        },
        'optimization_opportunities': _optimization_opportunities(tasks) if include_optimization else [],
    }
