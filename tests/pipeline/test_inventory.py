from src.inventory import aggregate_part_quantities, plan_inventory


def test_parts_are_aggregated_once(hvac_recommendations):
    quantities = aggregate_part_quantities(hvac_recommendations)

    assert quantities.to_dict() == {'Air Filter': 2, 'Cleaning Solution': 1, 'Component Part': 2}
    assert list(quantities.index) == ['Air Filter', 'Cleaning Solution', 'Component Part']


def test_stock_levels(hvac_recommendations):
    plan = plan_inventory(hvac_recommendations, 'HVAC Rooftop Unit', current_stock={'Air Filter': 5})

    by_part = {p.part: p for p in plan.critical_parts_to_stock}
    assert list(by_part) == ['Air Filter', 'Cleaning Solution', 'Component Part']
    assert by_part['Air Filter'].recommended_stock_level == 4
    assert by_part['Air Filter'].current_stock_level == 5
    assert by_part['Cleaning Solution'].recommended_stock_level == 2
    assert by_part['Cleaning Solution'].reorder_point == 1
    assert by_part['Component Part'].recommended_stock_level == 4
    assert by_part['Component Part'].current_stock_level == 0
    assert by_part['Component Part'].annual_usage_forecast == 8

    needed = {}
    for rec in hvac_recommendations:
        for part in rec.required_resources.parts_needed:
            needed[part.part] = needed.get(part.part, 0) + part.quantity
    for part, quantity in needed.items():
        assert by_part[part].recommended_stock_level >= 2 * quantity


def test_seasonal_adjustments_only_for_hvac(hvac_recommendations):
    hvac = plan_inventory(hvac_recommendations, 'HVAC Rooftop Unit')
    compressor = plan_inventory(hvac_recommendations, 'Air Compressor')

    assert [(s.season, s.part) for s in hvac.seasonal_adjustments] == [
        ('Summer', 'Air Filter'), ('Winter', 'Heating Element')]
    assert compressor.seasonal_adjustments == []


def test_no_parts_no_stock():
    plan = plan_inventory([])

    assert plan.critical_parts_to_stock == []
