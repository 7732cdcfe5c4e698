import os


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

MODEL_VERSION = 'predictive-maintenance-v3.2.1'
API_PREFIX = '/api/v1/ai/predictive-maintenance'
DATA_SOURCES = ['sensor_data', 'maintenance_history', 'equipment_specs', 'industry_benchmarks']
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# JSON file with HeuristicConfig overrides (empty -> built-in defaults)
HEURISTICS_FILE = os.getenv('HEURISTICS_FILE', '')

DATA_SERVICE_URL = os.getenv('DATA_SERVICE_URL', 'http://data-service:8000')
USAGE_METERING_URL = os.getenv('USAGE_METERING_URL', '')
HTTP_TIMEOUT_SECONDS = float(os.getenv('HTTP_TIMEOUT_SECONDS', '10.0'))

DEFAULT_PREDICTION_HORIZON = '90d'
HORIZON_DAYS = {'30d': 30, '90d': 90, '6m': 180, '1y': 365}

# --- Health scoring ---
BASELINE_HEALTH_SCORE = 85
DAYS_PER_MONTH = 30

OVERHEAT_TEMPERATURE_LIMIT = 200
OVERHEAT_DEDUCTION = 15
EXCESSIVE_VIBRATION_LIMIT = 5.0
EXCESSIVE_VIBRATION_DEDUCTION = 10
EQUIPMENT_AGE_LIMIT_MONTHS = 120
EQUIPMENT_AGE_DEDUCTION = 20
EMERGENCY_RATIO_LIMIT = 0.3
EMERGENCY_RATIO_DEDUCTION = 15

# lower bounds (exclusive): score > 80 -> stable, > 60 / > 40 -> declining
HEALTH_TREND_BANDS = [(80, 'stable'), (60, 'declining'), (40, 'declining')]
HEALTH_TREND_FLOOR = 'critical'

RISK_FACTORS = {
    'overheating': {
        'factor': 'Overheating',
        'severity': 'high',
        'description': 'Temperature readings exceed safe operating limits',
        'probability': 0.78,
        'potential_impact': 'Component damage and reduced lifespan',
    },
    'vibration': {
        'factor': 'Excessive Vibration',
        'severity': 'medium',
        'description': 'Vibration levels indicate potential mechanical issues',
        'probability': 0.55,
        'potential_impact': 'Premature wear of moving components',
    },
    'age': {
        'factor': 'Equipment Age',
        'severity': 'medium',
        'description': 'Equipment approaching end of typical service life',
        'probability': 0.85,
        'potential_impact': 'Increased maintenance needs and failure risk',
    },
    'emergency_history': {
        'factor': 'High Emergency Maintenance',
        'severity': 'high',
        'description': 'Frequent emergency repairs indicate underlying issues',
        'probability': 0.70,
        'potential_impact': 'Continued reliability issues and higher costs',
    },
}

FAILURE_MODES = {
    'overheating': {
        'failure_type': 'Thermal Overload',
        'probability': 0.65,
        'estimated_time_to_failure': '2-4 weeks',
        'failure_indicators': ['Rising temperature trends', 'Increased energy consumption'],
        'preventive_actions': ['Clean heat exchangers', 'Check refrigerant levels', 'Inspect insulation'],
    },
    'vibration': {
        'failure_type': 'Mechanical Wear',
        'probability': 0.45,
        'estimated_time_to_failure': '6-12 weeks',
        'failure_indicators': ['Increasing vibration', 'Unusual noises', 'Performance degradation'],
        'preventive_actions': ['Lubricate bearings', 'Align components', 'Replace worn parts'],
    },
}

# --- Recommendation rules ---
INSPECTION_HEALTH_THRESHOLD = 60
HVAC_TYPE_MARKER = 'HVAC'
TEMPERATURE_MARKER = 'Temperature'
TEMPERATURE_PART_NAME = 'Temperature Sensor'
GENERIC_PART_NAME = 'Component Part'

INSPECTION_TEMPLATE = {
    'maintenance_type': 'inspection',
    'priority': 'immediate',
    'days_until_due': 7,
    'confidence_score': 0.92,
    'cost_estimate': {'labor_hours': 2, 'parts_cost': 0, 'total_estimated_cost': 200, 'cost_confidence': 0.85},
    'benefits': {
        'prevented_downtime_hours': 24,
        'avoided_emergency_costs': 800,
        'customer_satisfaction_impact': 15,
        'equipment_life_extension_months': 6,
    },
    'technician_skill_level': 'intermediate',
    'specialized_tools': ['Diagnostic equipment', 'Multimeter'],
    'duration': {'min_hours': 2, 'max_hours': 3},
    'parts_needed': [],
}

HVAC_CLEANING_TEMPLATE = {
    'maintenance_type': 'cleaning',
    'priority': 'high',
    'days_until_due': 14,
    'confidence_score': 0.88,
    'cost_estimate': {'labor_hours': 3, 'parts_cost': 45, 'total_estimated_cost': 345, 'cost_confidence': 0.90},
    'benefits': {
        'prevented_downtime_hours': 12,
        'avoided_emergency_costs': 500,
        'customer_satisfaction_impact': 10,
        'equipment_life_extension_months': 3,
    },
    'technician_skill_level': 'basic',
    'specialized_tools': ['Cleaning supplies', 'Vacuum equipment'],
    'duration': {'min_hours': 3, 'max_hours': 4},
    'parts_needed': [
        {'part': 'Air Filter', 'quantity': 2, 'lead_time_days': 1, 'availability_status': 'in_stock'},
        {'part': 'Cleaning Solution', 'quantity': 1, 'lead_time_days': 1, 'availability_status': 'in_stock'},
    ],
}

# part name is filled in per risk factor
PART_REPLACEMENT_TEMPLATE = {
    'maintenance_type': 'part_replacement',
    'priority': 'high',
    'days_until_due': 21,
    'confidence_score': 0.75,
    'cost_estimate': {'labor_hours': 4, 'parts_cost': 180, 'total_estimated_cost': 580, 'cost_confidence': 0.70},
    'benefits': {
        'prevented_downtime_hours': 48,
        'avoided_emergency_costs': 1200,
        'customer_satisfaction_impact': 20,
        'equipment_life_extension_months': 12,
    },
    'technician_skill_level': 'advanced',
    'specialized_tools': ['Specialized repair tools'],
    'duration': {'min_hours': 4, 'max_hours': 6},
    'parts_needed': [
        {'part': GENERIC_PART_NAME, 'quantity': 1, 'lead_time_days': 3, 'availability_status': 'order_required'},
    ],
}

# --- Scheduling ---
PRIORITY_RANK = {'immediate': 4, 'high': 3, 'medium': 2, 'low': 1, 'scheduled': 0}
SCHEDULE_TIME_WINDOW = '09:00-12:00'
PLACEHOLDER_TECHNICIAN_IDS = ['tech-001']
SCHEDULE_OPTIMIZATION_SCORE = 90.0

ALTERNATIVE_SCHEDULES = [
    {
        'schedule_type': 'cost_optimized',
        'days_from_now': 30,
        'pros': ['Lower labor costs', 'Bulk parts ordering savings'],
        'cons': ['Higher failure risk', 'Potential customer impact'],
        'efficiency_score': 78,
    },
    {
        'schedule_type': 'time_optimized',
        'days_from_now': 3,
        'pros': ['Minimized equipment downtime', 'Quick issue resolution'],
        'cons': ['Higher emergency labor costs', 'Parts availability risk'],
        'efficiency_score': 92,
    },
]

# --- Cost-benefit ---
RISK_ADJUSTMENT_FACTOR = 0.85
MONTHS_PER_YEAR = 12

LONG_TERM_BENEFITS = {
    'default': [
        {'benefit': 'Extended equipment lifespan', 'estimated_value': 2500, 'timeframe': '2-3 years'},
        {'benefit': 'Improved energy efficiency', 'estimated_value': 1200, 'timeframe': '1 year'},
        {'benefit': 'Enhanced customer satisfaction', 'estimated_value': 800, 'timeframe': '6 months'},
    ],
}

# --- Inventory ---
MIN_RECOMMENDED_STOCK = 2
STOCK_MULTIPLIER = 2
MIN_REORDER_POINT = 1
INVENTORY_LEAD_TIME_DAYS = 3
ANNUAL_USAGE_MULTIPLIER = 4

SEASONAL_ADJUSTMENTS = {
    'HVAC': [
        {'season': 'Summer', 'part': 'Air Filter', 'adjustment_factor': 1.5,
         'rationale': 'Higher usage during cooling season'},
        {'season': 'Winter', 'part': 'Heating Element', 'adjustment_factor': 1.3,
         'rationale': 'Increased heating system stress'},
    ],
}

# --- Customer impact ---
# lower bounds (exclusive) in hours
DISRUPTION_BANDS = [(8, 'significant'), (4, 'moderate'), (2, 'minimal')]
DISRUPTION_FLOOR = 'none'
URGENT_PRIORITIES = ['immediate', 'high']
URGENT_NOTIFICATION_TIMELINE = '24-48 hours advance notice'
ROUTINE_NOTIFICATION_TIMELINE = '1 week advance notice'
URGENT_NOTIFICATION_TIMING = 'Immediate'
ROUTINE_NOTIFICATION_TIMING = '3-5 days before'
COMMUNICATION_CHANNEL = 'Phone call followed by email confirmation'
MITIGATION_STRATEGIES = [
    'Schedule during low-usage periods',
    'Provide temporary alternative solutions',
    'Expedite service completion',
]
KEY_MESSAGES = [
    'Proactive maintenance to prevent future issues',
    'Minimal service disruption expected',
    'Investment in long-term system reliability',
]
VALUE_PROPOSITION = ('Preventive maintenance ensures continued reliable service '
                     'and avoids costly emergency repairs')

# --- ML insights ---
SENSOR_CATEGORIES = [
    'temperature_readings', 'pressure_readings', 'vibration_levels',
    'energy_consumption', 'runtime_hours', 'cycle_counts',
]
# numeric series checked for non-numeric and non-finite values before scoring
READING_SERIES = ['temperature_readings', 'pressure_readings', 'vibration_levels', 'energy_consumption']
NO_SENSOR_DATA_QUALITY = 30
BASE_MODEL_CONFIDENCE = 0.60
CONFIDENCE_DATA_WEIGHT = 0.35
MAX_MODEL_CONFIDENCE = 0.95
HISTORICAL_ACCURACY = 0.89
RELIABILITY_BANDS = [(70, 'high'), (40, 'medium')]
RELIABILITY_FLOOR = 'low'
LEARNING_RECOMMENDATIONS = [
    'Install additional temperature sensors for better thermal monitoring',
    'Add energy consumption tracking for efficiency analysis',
    'Implement vibration sensors for mechanical health monitoring',
]
SENSOR_OPTIMIZATION_SUGGESTIONS = [
    'Increase sensor reading frequency during peak usage',
    'Implement anomaly detection algorithms on sensor data',
    'Add predictive alerts based on sensor trend analysis',
]

# --- Fleet ---
AT_RISK_HEALTH_THRESHOLD = 60
HEALTH_DISTRIBUTION_BANDS = [(80, 'excellent'), (60, 'good'), (40, 'fair')]
HEALTH_DISTRIBUTION_FLOOR = 'poor'
LABOR_RATE_PER_HOUR = 100
BULK_ORDER_DISCOUNT = 0.15
ROUTE_OPTIMIZATION_SAVINGS = 0.10
QUARTERS_PER_YEAR = 4
