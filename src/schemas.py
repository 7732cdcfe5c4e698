from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.predict_utils import format_number


Severity = Literal['low', 'medium', 'high', 'critical']
HealthTrend = Literal['improving', 'stable', 'declining', 'critical']
MaintenanceType = Literal['inspection', 'cleaning', 'lubrication', 'calibration', 'part_replacement', 'system_upgrade']
Priority = Literal['immediate', 'high', 'medium', 'low', 'scheduled']
SkillLevel = Literal['basic', 'intermediate', 'advanced', 'specialist']
AvailabilityStatus = Literal['in_stock', 'order_required', 'back_ordered']
PredictionHorizon = Literal['30d', '90d', '6m', '1y']
OptimizationGoal = Literal['cost_minimization', 'uptime_maximization', 'customer_satisfaction', 'resource_optimization']


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Inputs ---

class EquipmentLocation(FrozenModel):
    address: str = ''
    city: str = ''
    state: str = ''
    access_instructions: Optional[str] = None


class EquipmentRecord(FrozenModel):
    equipment_id: str = Field(..., min_length=1, description="Unique equipment identifier.")
    equipment_type: str = Field('', description="Free-text category, e.g. 'HVAC Rooftop Unit'.")
    model: str = ''
    installation_date: Union[datetime, date]
    last_maintenance_date: Optional[Union[datetime, date]] = None
    customer_id: Optional[str] = None
    location: EquipmentLocation = Field(default_factory=EquipmentLocation)


class SensorReadingSet(FrozenModel):
    # series items are checked numerically by the pipeline, not here
    temperature_readings: Optional[List[Any]] = None
    pressure_readings: Optional[List[Any]] = None
    vibration_levels: Optional[List[Any]] = None
    energy_consumption: Optional[List[Any]] = None
    runtime_hours: Optional[float] = None
    cycle_counts: Optional[int] = None
    error_codes: Optional[List[str]] = None
    performance_metrics: Optional[Dict[str, float]] = None


class MaintenanceHistoryEntry(FrozenModel):
    date: Union[datetime, date]
    type: Literal['preventive', 'corrective', 'emergency']
    work_performed: List[str] = Field(default_factory=list)
    parts_replaced: List[str] = Field(default_factory=list)
    cost: float = Field(0.0, ge=0)
    technician_id: Optional[str] = None
    duration_hours: float = Field(0.0, ge=0)


# --- Health ---

class RiskFactor(FrozenModel):
    factor: str
    severity: Severity
    description: str
    probability: float = Field(..., ge=0, le=1)
    potential_impact: str


class FailureModePrediction(FrozenModel):
    failure_type: str
    probability: float = Field(..., ge=0, le=1)
    estimated_time_to_failure: str
    failure_indicators: List[str]
    preventive_actions: List[str]


class EquipmentHealth(FrozenModel):
    overall_health_score: float = Field(..., ge=0, le=100)
    health_trend: HealthTrend
    risk_factors: List[RiskFactor]
    predicted_failure_modes: List[FailureModePrediction]


# --- Recommendations ---

class DurationRange(FrozenModel):
    min_hours: float = Field(..., ge=0)
    max_hours: float = Field(..., ge=0)
    unit: Literal['hours'] = 'hours'

    def __str__(self) -> str:
        return f"{format_number(self.min_hours)}-{format_number(self.max_hours)} {self.unit}"


class CostEstimate(FrozenModel):
    labor_hours: float = Field(..., ge=0)
    parts_cost: float = Field(..., ge=0)
    total_estimated_cost: float = Field(..., ge=0)
    cost_confidence: float = Field(..., ge=0, le=1)


class BenefitEstimate(FrozenModel):
    prevented_downtime_hours: float = Field(..., ge=0)
    avoided_emergency_costs: float = Field(..., ge=0)
    customer_satisfaction_impact: float
    equipment_life_extension_months: float = Field(..., ge=0)


class PartRequirement(FrozenModel):
    part: str
    quantity: int = Field(..., ge=0)
    lead_time_days: int = Field(..., ge=0)
    availability_status: AvailabilityStatus


class RequiredResources(FrozenModel):
    technician_skill_level: SkillLevel
    specialized_tools: List[str]
    duration: DurationRange
    parts_needed: List[PartRequirement]

    @computed_field
    @property
    def estimated_duration(self) -> str:
        return str(self.duration)


class MaintenanceRecommendation(FrozenModel):
    maintenance_type: MaintenanceType
    priority: Priority
    recommended_date: str
    confidence_score: float = Field(..., ge=0, le=1)
    cost_estimate: CostEstimate
    benefits: BenefitEstimate
    required_resources: RequiredResources


class RecommendationTemplate(FrozenModel):
    """Static shape of one recommendation rule; the due date is filled in at generation time."""
    maintenance_type: MaintenanceType
    priority: Priority
    days_until_due: int
    confidence_score: float
    cost_estimate: CostEstimate
    benefits: BenefitEstimate
    technician_skill_level: SkillLevel
    specialized_tools: List[str]
    duration: DurationRange
    parts_needed: List[PartRequirement]


# --- Scheduling ---

class ScheduleResourceRequirements(FrozenModel):
    technician_ids: List[str]
    estimated_duration: str
    customer_notification_required: bool
    parts_needed: List[str]


class ScheduleEntry(FrozenModel):
    date: str
    time_window: str
    maintenance_tasks: List[str]
    resource_requirements: ScheduleResourceRequirements
    optimization_score: float
    scheduling_rationale: str


class AlternativeSchedule(FrozenModel):
    schedule_type: Literal['cost_optimized', 'time_optimized', 'customer_optimized']
    date: str
    pros: List[str]
    cons: List[str]
    efficiency_score: float


class OptimalScheduling(FrozenModel):
    recommended_schedule: List[ScheduleEntry]
    alternative_schedules: List[AlternativeSchedule]


# --- Cost-benefit ---

class LongTermBenefit(FrozenModel):
    benefit: str
    estimated_value: float = Field(..., ge=0)
    timeframe: str


class CostBenefitSummary(FrozenModel):
    preventive_maintenance_cost: float
    reactive_maintenance_risk_cost: float
    net_savings: float
    roi_percentage: int
    payback_period_months: Union[int, Literal['not_applicable']]
    risk_adjusted_savings: float
    long_term_benefits: List[LongTermBenefit]


# --- Inventory ---

class PartStockRecommendation(FrozenModel):
    part: str
    recommended_stock_level: int
    current_stock_level: int
    reorder_point: int
    lead_time_days: int
    annual_usage_forecast: int


class SeasonalAdjustment(FrozenModel):
    season: str
    part: str
    adjustment_factor: float
    rationale: str


class InventoryRecommendation(FrozenModel):
    critical_parts_to_stock: List[PartStockRecommendation]
    seasonal_adjustments: List[SeasonalAdjustment]


# --- Customer impact ---

class ServiceDisruption(FrozenModel):
    estimated_downtime: str
    disruption_level: Literal['none', 'minimal', 'moderate', 'significant']
    customer_notification_timeline: str
    mitigation_strategies: List[str]


class CustomerCommunication(FrozenModel):
    optimal_notification_timing: str
    communication_channel: str
    key_messages: List[str]
    value_proposition: str


class CustomerImpactAssessment(FrozenModel):
    service_disruption: ServiceDisruption
    customer_communication: CustomerCommunication


# --- ML insights ---

class MLInsights(FrozenModel):
    model_confidence: float = Field(..., ge=0, le=1)
    prediction_accuracy_history: float
    data_quality_score: int = Field(..., ge=0, le=100)
    recommendation_reliability: Literal['high', 'medium', 'low']
    learning_recommendations: List[str]
    sensor_optimization_suggestions: List[str]


# --- Assembled result ---

class DegradedDataWarning(FrozenModel):
    """Optional input that was absent; lowers confidence, never fails the run."""
    field: str
    message: str


class MaintenanceAnalysis(FrozenModel):
    equipment_health: EquipmentHealth
    maintenance_recommendations: List[MaintenanceRecommendation]
    optimal_scheduling: OptimalScheduling
    cost_benefit_analysis: CostBenefitSummary
    inventory_recommendations: InventoryRecommendation
    customer_impact_analysis: CustomerImpactAssessment
    machine_learning_insights: MLInsights


class PipelineResult(FrozenModel):
    analysis: MaintenanceAnalysis
    data_gaps: List[DegradedDataWarning]
