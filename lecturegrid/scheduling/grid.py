import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import ConfigurationError
from ..graph_build import conflict
from ..models import Course, TimeSlot, Unavailability

logger = logging.getLogger(__name__)


class SlotGrid:
    """Occupancy of every (day, period) slot for one run.

    Slots are created periods-outer, days-inner; that is also the fallback
    order the allocator walks. The room limit and unavailability map of the
    run travel with the grid so ``try_place`` can check them.
    """

    def __init__(self, days: int, periods: int, rooms: Optional[int] = None,
                 unavailability: Optional[Unavailability] = None):
        if days < 1:
            raise ConfigurationError(f"Grid needs at least one day (got {days})")
        if periods < 1:
            raise ConfigurationError(f"Grid needs at least one period (got {periods})")
        self.days = days
        self.periods = periods
        self.rooms = rooms
        self.unavailability = unavailability
        self._slots: Dict[TimeSlot, List[Course]] = {}
        for period in range(1, periods + 1):
            for day in range(1, days + 1):
                self._slots[TimeSlot(day, period)] = []
        self._max_period = 0

    @classmethod
    def from_budget(cls, days: int, total_slot_budget: int, **kwargs) -> "SlotGrid":
        if days < 1:
            raise ConfigurationError(f"Grid needs at least one day (got {days})")
        return cls(days, total_slot_budget // days, **kwargs)

    def __contains__(self, slot: TimeSlot) -> bool:
        return slot in self._slots

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def items(self) -> Iterator[Tuple[TimeSlot, Sequence[Course]]]:
        for slot, occupants in self._slots.items():
            yield slot, tuple(occupants)

    def occupants_of(self, slot: TimeSlot) -> Tuple[Course, ...]:
        return tuple(self._slots.get(slot, ()))

    def can_place(self, slot: TimeSlot, course: Course) -> bool:
        occupants = self._slots.get(slot)
        if occupants is None:
            logger.debug("Slot %s is outside the %dx%d grid; skipped for %r",
                         slot, self.days, self.periods, course)
            return False
        if any(other is course for other in occupants):
            return False
        if self.rooms is not None and len(occupants) >= self.rooms:
            return False
        if self.unavailability is not None and slot in self.unavailability.get(course.teacher, ()):
            return False
        return not any(conflict(course, other) for other in occupants)

    def try_place(self, slot: TimeSlot, course: Course) -> bool:
        if not self.can_place(slot, course):
            return False
        self._slots[slot].append(course)
        self._max_period = max(self._max_period, slot.period)
        return True

    def max_period_used(self) -> int:
        return self._max_period

    def sessions_by_course(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for occupants in self._slots.values():
            for c in occupants:
                counts[c.id] = counts.get(c.id, 0) + 1
        return counts

    def slots_of(self, course: Course) -> List[TimeSlot]:
        return [s for s, occ in self._slots.items() if any(c is course for c in occ)]
