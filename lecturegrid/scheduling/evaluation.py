from typing import Dict, List, Optional
import networkx as nx

from ..config import RunConfig
from ..models import Course, ScheduleResult, Unavailability
from .validation import availability_ok, capacity_ok, conflicts_ok, sessions_ok


def clique_lower_bound(G: nx.Graph, courses: List[Course]) -> int:
    """Lower bound on distinct slots any clash-free timetable needs.

    Grows a clique greedily from the most session-hungry, best connected
    course; members of a clique can never share a slot, so the bound is the
    sum of their required sessions.
    """
    if G.number_of_nodes() == 0:
        return 0
    need: Dict[int, int] = {c.id: c.required_sessions for c in courses}
    rank = lambda u: (need.get(u, 1), G.degree(u), -u)
    seed = max(G.nodes(), key=rank)
    clique = {seed}
    candidates = set(G.neighbors(seed))
    while candidates:
        u = max(candidates, key=rank)
        clique.add(u)
        candidates = candidates.intersection(G.neighbors(u))
    return sum(need.get(u, 1) for u in clique)


def summary(G: Optional[nx.Graph], courses: List[Course], config: RunConfig, result: ScheduleResult,
            unavailability: Optional[Unavailability] = None) -> str:
    if G is None:
        G = nx.Graph()
    required = sum(c.required_sessions for c in courses)
    placed = sum(result.grid.sessions_by_course().values()) if result.grid is not None else 0
    total_slots = config.days * config.periods
    lb = clique_lower_bound(G, courses)
    warning = ""
    if total_slots < lb:
        warning = (
            f"Warning: slots={total_slots} < clique LB={lb}; a clash-free timetable is impossible.\n"
        )
    return (
        f"Courses: {len(courses)}  Conflicts: {G.number_of_edges()}\n"
        f"Grid: {config.days} day(s) x {config.periods} period(s)  Rooms: {config.rooms or 'unlimited'}\n"
        f"Sessions required: {required}  Placed: {placed}\n"
        f"Periods used: {result.periods}  Unassigned courses: {len(result.unassigned)}\n"
        f"Clique lower bound: {lb}\n"
        f"Valid (conflicts): {conflicts_ok(result)}  Valid (capacity): {capacity_ok(result, config.rooms)}  "
        f"Valid (availability): {availability_ok(result, unavailability)}  Valid (sessions): {sessions_ok(result)}\n"
        f"{warning}"
    )
