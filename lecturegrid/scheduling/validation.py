from typing import Dict, List, Optional

from ..graph_build import conflict
from ..models import ScheduleResult, TimeSlot, Unavailability


def placements(result: ScheduleResult) -> Dict[int, List[TimeSlot]]:
    out: Dict[int, List[TimeSlot]] = {}
    for slot, occupants in result.occupied().items():
        for c in occupants:
            out.setdefault(c.id, []).append(slot)
    return out


def conflicts_ok(result: ScheduleResult) -> bool:
    for occupants in result.occupied().values():
        for i in range(len(occupants)):
            for j in range(i + 1, len(occupants)):
                if conflict(occupants[i], occupants[j]):
                    return False
    return True


def capacity_ok(result: ScheduleResult, rooms: Optional[int]) -> bool:
    if rooms is None:
        return True
    return all(len(occ) <= rooms for occ in result.occupied().values())


def availability_ok(result: ScheduleResult, unavailability: Optional[Unavailability]) -> bool:
    if not unavailability:
        return True
    for slot, occupants in result.occupied().items():
        for c in occupants:
            if slot in unavailability.get(c.teacher, ()):
                return False
    return True


def sessions_ok(result: ScheduleResult) -> bool:
    """Fully placed courses hold exactly their sessions; unassigned ones hold fewer."""
    if result.grid is None:
        return True
    counts = result.grid.sessions_by_course()
    short = {c.id for c in result.unassigned}
    seen = {}
    for occupants in result.occupied().values():
        for c in occupants:
            seen[c.id] = c
    for cid, c in seen.items():
        n = counts.get(cid, 0)
        if cid in short:
            if n >= c.required_sessions:
                return False
        elif n != c.required_sessions:
            return False
    return all(counts.get(c.id, 0) < c.required_sessions for c in result.unassigned)
