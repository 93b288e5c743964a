from typing import Dict, Iterable, List, Optional
import networkx as nx

from .errors import ValidationError
from .models import Course, Unavailability


def conflict(c1: Course, c2: Course) -> bool:
    """Two courses clash if they share a teacher or any section."""
    if c1 is c2:
        return False
    return c1.teacher == c2.teacher or not c1.sections.isdisjoint(c2.sections)


def build_conflict_graph(courses: Iterable[Course]) -> nx.Graph:
    """Nodes are course ids (with the Course under ``course``); edges join clashing pairs."""
    courses = list(courses)
    G = nx.Graph()
    for c in courses:
        if c.id in G:
            raise ValidationError(f"Duplicate course id {c.id} ({c.name!r})")
        G.add_node(c.id, course=c)
    for i in range(len(courses)):
        for j in range(i + 1, len(courses)):
            u, v = courses[i], courses[j]
            if conflict(u, v):
                G.add_edge(u.id, v.id)
    return G


def compute_conflict_scores(courses: List[Course], unavailability: Optional[Unavailability] = None,
                            G: Optional[nx.Graph] = None) -> Dict[int, int]:
    """Score each course by how contended it is and store it on ``conflict_score``.

    Every clashing partner counts 1, or 2 when an unavailability map was
    supplied; with a map, the teacher's number of blocked slots is added on top.
    """
    if G is None:
        G = build_conflict_graph(courses)
    weight = 2 if unavailability is not None else 1
    scores: Dict[int, int] = {}
    for c in courses:
        score = weight * G.degree(c.id)
        if unavailability is not None:
            score += len(unavailability.get(c.teacher, ()))
        c.conflict_score = score
        scores[c.id] = score
    return scores
