import abc
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from src.heuristics import DEFAULT_HEURISTICS, HeuristicConfig
from src.predict_utils import date_after
from src.schemas import (
    AlternativeSchedule,
    MaintenanceRecommendation,
    OptimalScheduling,
    ScheduleEntry,
    ScheduleResourceRequirements,
)

logger = logging.getLogger(__name__)


def sort_by_priority(
    recommendations: Sequence[MaintenanceRecommendation],
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> List[MaintenanceRecommendation]:
    # sorted() is stable: equal priorities keep their generation order
    return sorted(recommendations, key=lambda rec: -config.priority_rank.get(rec.priority, 0))


class SchedulingStrategy(abc.ABC):
    """Turns a recommendation list into a primary schedule plus alternatives."""

    def __init__(self, config: HeuristicConfig = DEFAULT_HEURISTICS):
        self.config = config

    @abc.abstractmethod
    def build(
        self,
        recommendations: Sequence[MaintenanceRecommendation],
        optimization_goals: Optional[Sequence[str]] = None,
        reference_time: Optional[datetime] = None,
    ) -> OptimalScheduling:
        raise NotImplementedError


class PriorityScheduler(SchedulingStrategy):
    """
    One entry per recommendation in priority order, in a fixed morning window.

    Technician ids and scores are placeholders until a capacity-aware
    assignment is plugged in as another SchedulingStrategy.
    """

    def build(self, recommendations, optimization_goals=None, reference_time=None):
        reference_time = reference_time or datetime.now(timezone.utc)
        if optimization_goals:
            logger.info("Optimization goals %s are advisory for %s", list(optimization_goals), type(self).__name__)

        schedule = [self._entry(rec) for rec in sort_by_priority(recommendations, self.config)]
        alternatives = [
            AlternativeSchedule(
                schedule_type=alt['schedule_type'],
                date=date_after(reference_time, alt['days_from_now']),
                pros=list(alt['pros']),
                cons=list(alt['cons']),
                efficiency_score=alt['efficiency_score'],
            )
            for alt in self.config.alternative_schedules
        ]
        return OptimalScheduling(recommended_schedule=schedule, alternative_schedules=alternatives)

    def _entry(self, rec: MaintenanceRecommendation) -> ScheduleEntry:
        resources = rec.required_resources
        return ScheduleEntry(
            date=rec.recommended_date,
            time_window=self.config.schedule_time_window,
            maintenance_tasks=[rec.maintenance_type],
            resource_requirements=ScheduleResourceRequirements(
                technician_ids=list(self.config.placeholder_technician_ids),
                estimated_duration=resources.estimated_duration,
                customer_notification_required=rec.priority == 'immediate',
                parts_needed=[p.part for p in resources.parts_needed],
            ),
            optimization_score=self.config.schedule_optimization_score,
            scheduling_rationale=f"Scheduled based on {rec.priority} priority and optimal resource allocation",
        )


def optimize_schedule(
    recommendations: Sequence[MaintenanceRecommendation],
    optimization_goals: Optional[Sequence[str]] = None,
    reference_time: Optional[datetime] = None,
    strategy: Optional[SchedulingStrategy] = None,
    config: HeuristicConfig = DEFAULT_HEURISTICS,
) -> OptimalScheduling:
    strategy = strategy or PriorityScheduler(config)
    return strategy.build(recommendations, optimization_goals, reference_time)
