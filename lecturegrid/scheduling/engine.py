"""
One scheduling run: score, order, allocate.

Every call builds its own grid and rewrites ``conflict_score`` on the courses
it is given, so concurrent runs must not share Course objects.
"""
import logging
from typing import List, Optional

from ..algorithms.ordering import order_courses
from ..config import RunConfig
from ..errors import ValidationError
from ..graph_build import build_conflict_graph, compute_conflict_scores
from ..models import Course, ScheduleResult, Unavailability
from .assign_timeslots import assign_timeslots
from .grid import SlotGrid

logger = logging.getLogger(__name__)

UNSCHEDULED_MESSAGE = "Unable to schedule all classes."


def schedule_courses(courses: List[Course], config: RunConfig,
                     unavailability: Optional[Unavailability] = None) -> ScheduleResult:
    """Run the greedy allocator.

    ConfigurationError and ValidationError (duplicate course ids) propagate
    before any work is done. Anything else that goes wrong is reported through
    ``ScheduleResult.error`` with an empty grid.
    """
    config.validate()
    try:
        G = build_conflict_graph(courses)
        grid = SlotGrid(config.days, config.periods, rooms=config.rooms, unavailability=unavailability)
        logger.info("Scheduling %d course(s) on %d day(s) x %d period(s), rooms=%s, unavailability=%s",
                    len(courses), grid.days, grid.periods, config.rooms, unavailability is not None)
        compute_conflict_scores(courses, unavailability, G=G)
        ordered = order_courses(courses)
        unassigned = assign_timeslots(ordered, grid)
    except ValidationError:
        raise
    except Exception as e:
        logger.exception("Scheduling run failed")
        return ScheduleResult(error=f"An unexpected error occurred during scheduling: {e}")

    return ScheduleResult(
        grid=grid,
        graph=G,
        periods=grid.max_period_used(),
        unassigned=unassigned,
        error=UNSCHEDULED_MESSAGE if unassigned else None,
    )
