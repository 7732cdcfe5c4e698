import asyncio

import pytest

from src.errors import MaintenanceValidationError
from src.fleet import get_fleet_maintenance_insights
from src.heuristics import HeuristicConfig


@pytest.fixture
def snapshots(old_hvac, failing_sensors, make_history, young_compressor, old_compressor):
    return [
        {'equipment_data': old_hvac, 'sensor_data': failing_sensors, 'maintenance_history': make_history(4, 10)},
        {'equipment_data': {**old_hvac, 'equipment_id': 'HVAC-301', 'installation_date': '2022-06-01',
                            'customer_id': 'cust-2'}},
        {'equipment_data': young_compressor},
        {'equipment_data': old_compressor, 'sensor_data': {'temperature_readings': [240.0]}},
    ]


def insights(snapshots, reference_time, **kwargs):
    return asyncio.run(get_fleet_maintenance_insights(snapshots, reference_time=reference_time, **kwargs))


def test_fleet_summary(snapshots, reference_time):
    result = insights(snapshots, reference_time)

    # scores: 25, 85, 85, 50
    assert result['fleet_summary'] == {
        'total_equipment': len(snapshots),
        'equipment_types': ['HVAC Rooftop Unit', 'Air Compressor'],
        'average_health_score': 61.2,
        'at_risk_equipment': 2,
        'maintenance_due': 3,
    }
    assert result['health_distribution'] == {'excellent': 2, 'good': 0, 'fair': 1, 'poor': 1}
    assert result['optimization_opportunities'] == []


def test_upcoming_maintenance_order(snapshots, reference_time):
    upcoming = insights(snapshots, reference_time)['upcoming_maintenance']

    assert [(u['equipment_id'], u['maintenance_type'], u['due_date']) for u in upcoming] == [
        ('HVAC-300', 'inspection', '2025-01-22'),
        ('COMP-200', 'inspection', '2025-01-22'),
        ('HVAC-300', 'cleaning', '2025-01-29'),
        ('HVAC-301', 'cleaning', '2025-01-29'),
        ('HVAC-300', 'part_replacement', '2025-02-05'),
        ('HVAC-300', 'part_replacement', '2025-02-05'),
        ('COMP-200', 'part_replacement', '2025-02-05'),
    ]
    assert upcoming[0]['customer'] == 'cust-1'


def test_horizon_limits_upcoming_and_costs(snapshots, reference_time):
    base = HeuristicConfig()
    config = HeuristicConfig(
        inspection_template=base.inspection_template.model_copy(update={'days_until_due': 45}))

    short = insights(snapshots, reference_time, time_horizon='30d', config=config)
    long = insights(snapshots, reference_time, time_horizon='90d', config=config)

    assert 'inspection' not in [u['maintenance_type'] for u in short['upcoming_maintenance']]
    assert [u['maintenance_type'] for u in long['upcoming_maintenance']].count('inspection') == 2
    assert short['cost_projections'] == long['cost_projections']
    projections = long['cost_projections']
    assert projections['next_90_days'] - projections['next_30_days'] == 400
    assert projections['annual_projection'] == projections['next_90_days'] * 4


def test_optimization_opportunities(snapshots, reference_time):
    opportunities = insights(snapshots, reference_time, include_optimization=True)['optimization_opportunities']

    # every part is shared by two units: 15% of 630 in parts
    # Austin hosts HVAC-300 (13 labor hours) and HVAC-301 (3 labor hours)
    assert opportunities == [
        {'opportunity': 'Bulk Parts Ordering', 'potential_savings': 94.5, 'implementation_effort': 'low'},
        {'opportunity': 'Route Optimization', 'potential_savings': 160.0, 'implementation_effort': 'medium'},
    ]


def test_equipment_type_filter_is_case_insensitive(snapshots, reference_time):
    result = insights(snapshots, reference_time, equipment_type='compressor')

    assert result['fleet_summary']['total_equipment'] == 2
    assert result['fleet_summary']['equipment_types'] == ['Air Compressor']


def test_empty_fleet(reference_time):
    result = insights([], reference_time, include_optimization=True)

    assert result['fleet_summary']['total_equipment'] == 0
    assert result['fleet_summary']['average_health_score'] == 0.0
    assert result['health_distribution'] == {'excellent': 0, 'good': 0, 'fair': 0, 'poor': 0}
    assert result['upcoming_maintenance'] == []
    assert result['cost_projections'] == {'next_30_days': 0.0, 'next_90_days': 0.0, 'annual_projection': 0.0}
    assert result['optimization_opportunities'] == []


def test_invalid_snapshot_fails_the_fleet(snapshots, reference_time):
    snapshots.append({'equipment_data': {'equipment_type': 'HVAC'}})

    with pytest.raises(MaintenanceValidationError):
        insights(snapshots, reference_time)
