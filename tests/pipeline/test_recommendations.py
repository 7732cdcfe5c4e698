from src.health_scoring import score_equipment_health
from src.heuristics import DEFAULT_HEURISTICS
from src.recommendations import generate_recommendations, replacement_part_name
from src.schemas import DurationRange, EquipmentRecord, SensorReadingSet


def recommend(equipment, reference_time, sensors=None):
    record = EquipmentRecord.model_validate(equipment)
    sensor_set = SensorReadingSet.model_validate(sensors) if sensors else None
    health = score_equipment_health(record, sensor_set, [], reference_time)
    return health, generate_recommendations(record, health, '90d', reference_time)


def test_healthy_equipment_gets_no_recommendations(young_compressor, reference_time):
    health, recommendations = recommend(young_compressor, reference_time)

    assert health.overall_health_score == 85
    assert recommendations == []


def test_unhealthy_equipment_gets_immediate_inspection(old_compressor, reference_time):
    health, recommendations = recommend(old_compressor, reference_time, {'temperature_readings': [230.0]})

    assert health.overall_health_score < 60
    inspection = recommendations[0]
    assert (inspection.maintenance_type, inspection.priority) == ('inspection', 'immediate')
    assert inspection.recommended_date == '2025-01-22'
    assert inspection.required_resources.estimated_duration == '2-3 hours'
    assert inspection.required_resources.parts_needed == []


def test_emission_order_and_part_names(old_hvac, failing_sensors, reference_time):
    _, recommendations = recommend(old_hvac, reference_time, failing_sensors)

    # inspection, HVAC cleaning, one replacement for the only high-severity factor (Overheating)
    assert [r.maintenance_type for r in recommendations] == ['inspection', 'cleaning', 'part_replacement']
    cleaning, replacement = recommendations[1], recommendations[2]
    assert cleaning.recommended_date == '2025-01-29'
    assert [(p.part, p.quantity) for p in cleaning.required_resources.parts_needed] == [
        ('Air Filter', 2), ('Cleaning Solution', 1)]
    assert replacement.recommended_date == '2025-02-05'
    assert [p.part for p in replacement.required_resources.parts_needed] == ['Component Part']
    assert replacement.required_resources.estimated_duration == '4-6 hours'


def test_generation_leaves_templates_untouched(old_hvac, failing_sensors, reference_time):
    recommend(old_hvac, reference_time, failing_sensors)

    template_parts = DEFAULT_HEURISTICS.part_replacement_template.parts_needed
    assert [p.part for p in template_parts] == ['Component Part']


def test_replacement_part_name():
    assert replacement_part_name('Temperature Drift') == 'Temperature Sensor'
    assert replacement_part_name('High Emergency Maintenance') == 'Component Part'


def test_duration_range_rendering():
    assert str(DurationRange(min_hours=4, max_hours=6)) == '4-6 hours'
    assert str(DurationRange(min_hours=1.5, max_hours=2)) == '1.5-2 hours'
