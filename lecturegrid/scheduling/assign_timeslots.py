import logging
from typing import List

from ..models import Course
from .grid import SlotGrid

logger = logging.getLogger(__name__)


def allocate_course(grid: SlotGrid, course: Course) -> int:
    """Place up to ``required_sessions`` sessions of one course; returns how many landed."""
    placed = 0
    for slot in course.preferred_slots:
        if placed >= course.required_sessions:
            break
        if grid.try_place(slot, course):
            placed += 1
    if placed < course.required_sessions:
        tried = set(course.preferred_slots)
        for slot in grid:
            if slot in tried:
                continue
            if grid.try_place(slot, course):
                placed += 1
                if placed >= course.required_sessions:
                    break
    return placed


def assign_timeslots(ordered: List[Course], grid: SlotGrid) -> List[Course]:
    """Greedy pass over already-sorted courses. Placements are never undone.

    Returns the courses that ended short of their required sessions.
    """
    unassigned: List[Course] = []
    for course in ordered:
        placed = allocate_course(grid, course)
        if placed < course.required_sessions:
            logger.info("%r placed %d of %d sessions", course, placed, course.required_sessions)
            unassigned.append(course)
    return unassigned
