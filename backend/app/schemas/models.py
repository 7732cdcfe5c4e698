from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Literal

import configs.config as cfg
from src.schemas import (
    DegradedDataWarning,
    EquipmentRecord,
    MaintenanceAnalysis,
    MaintenanceHistoryEntry,
    OptimizationGoal,
    PredictionHorizon,
    Priority,
    SensorReadingSet,
)


class PredictiveMaintenanceRequest(BaseModel):
    equipment_data: EquipmentRecord = Field(..., description="Equipment record; equipment_id is required.")
    sensor_data: Optional[SensorReadingSet] = Field(None, description="Recent sensor readings; absence lowers confidence.")
    maintenance_history: List[MaintenanceHistoryEntry] = Field(default_factory=list)
    prediction_horizon: PredictionHorizon = cfg.DEFAULT_PREDICTION_HORIZON
    optimization_goals: List[OptimizationGoal] = Field(default_factory=list)


class ResponseMeta(BaseModel):
    request_id: str
    response_time_ms: int
    model_version: str
    analysis_timestamp: str
    data_sources: List[str]
    prediction_horizon: PredictionHorizon
    data_gaps: List[DegradedDataWarning]


class PredictiveMaintenanceResponse(BaseModel):
    data: MaintenanceAnalysis
    meta: ResponseMeta


class EquipmentSnapshot(BaseModel):
    equipment_data: EquipmentRecord
    sensor_data: Optional[SensorReadingSet] = None
    maintenance_history: List[MaintenanceHistoryEntry] = Field(default_factory=list)


class FleetRequest(BaseModel):
    equipment: List[EquipmentSnapshot] = Field(..., description="Snapshots already held by the caller.")
    time_horizon: PredictionHorizon = cfg.DEFAULT_PREDICTION_HORIZON
    include_optimization: bool = False
    equipment_type: Optional[str] = Field(None, description="Case-insensitive substring filter on equipment_type.")


class FleetSummary(BaseModel):
    total_equipment: int
    equipment_types: List[str]
    average_health_score: float
    at_risk_equipment: int
    maintenance_due: int


class UpcomingMaintenance(BaseModel):
    equipment_id: str
    customer: str
    maintenance_type: str
    due_date: str
    priority: Priority


class CostProjections(BaseModel):
    next_30_days: float
    next_90_days: float
    annual_projection: float


class OptimizationOpportunity(BaseModel):
    opportunity: str
    potential_savings: float
    implementation_effort: Literal['low', 'medium', 'high']


class FleetInsights(BaseModel):
    fleet_summary: FleetSummary
    health_distribution: Dict[str, int]
    upcoming_maintenance: List[UpcomingMaintenance]
    cost_projections: CostProjections
    optimization_opportunities: List[OptimizationOpportunity]


class FleetMeta(BaseModel):
    request_id: str
    response_time_ms: int
    model_version: str
    equipment_type: Optional[str] = None
    time_horizon: PredictionHorizon


class FleetInsightsResponse(BaseModel):
    data: FleetInsights
    meta: FleetMeta


class FieldError(BaseModel):
    field: str
    message: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    fields: Optional[List[FieldError]] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
