from typing import List

from ..models import Course


def sort_key(course: Course):
    return (course.priority_tier, -course.conflict_score, course.id)


def order_courses(courses: List[Course]) -> List[Course]:
    """Tier first, then most contended, then ingestion order."""
    return sorted(courses, key=sort_key)
