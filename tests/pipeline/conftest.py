from datetime import datetime, timezone

import pytest

from src.health_scoring import score_equipment_health
from src.recommendations import generate_recommendations
from src.scheduling import sort_by_priority
from src.schemas import EquipmentRecord, MaintenanceHistoryEntry, SensorReadingSet

REFERENCE_TIME = datetime(2025, 1, 15, tzinfo=timezone.utc)


@pytest.fixture
def make_history():
    def _make(emergencies: int, total: int):
        """`total` maintenance entries of which the first `emergencies` are emergency repairs."""
        return [
            {'date': f'2024-{(i % 12) + 1:02d}-10', 'type': 'emergency' if i < emergencies else 'preventive',
             'cost': 250}
            for i in range(total)
        ]
    return _make


@pytest.fixture
def reference_time():
    return REFERENCE_TIME


@pytest.fixture
def young_compressor():
    # 56 months old at the reference time
    return {
        'equipment_id': 'COMP-100',
        'equipment_type': 'Air Compressor',
        'model': 'AC-20',
        'installation_date': '2020-06-01',
        'customer_id': 'cust-9',
        'location': {'address': '9 Elm St', 'city': 'Dallas', 'state': 'TX'},
    }


@pytest.fixture
def old_compressor(young_compressor):
    # 134 months old at the reference time
    return {**young_compressor, 'equipment_id': 'COMP-200', 'installation_date': '2014-01-01'}


@pytest.fixture
def old_hvac():
    return {
        'equipment_id': 'HVAC-300',
        'equipment_type': 'HVAC Rooftop Unit',
        'installation_date': '2012-03-01',
        'customer_id': 'cust-1',
        'location': {'city': 'Austin'},
    }


@pytest.fixture
def failing_sensors():
    return {
        'temperature_readings': [180.0, 215.0, 190.0],
        'vibration_levels': [5.5, 6.5, 6.0],
    }


@pytest.fixture
def hvac_recommendations(old_hvac, failing_sensors, make_history, reference_time):
    """Priority-sorted recommendations for a worn HVAC unit: inspection, cleaning, two replacements."""
    record = EquipmentRecord.model_validate(old_hvac)
    health = score_equipment_health(
        record,
        SensorReadingSet.model_validate(failing_sensors),
        [MaintenanceHistoryEntry.model_validate(e) for e in make_history(4, 10)],
        reference_time,
    )
    return tuple(sort_by_priority(generate_recommendations(record, health, '90d', reference_time)))
