from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .errors import ValidationError


@dataclass(frozen=True, order=True)
class TimeSlot:
    day: int
    period: int

    @property
    def key(self) -> str:
        return f"{self.day}.{self.period}"

    def __str__(self) -> str:
        return self.key


def parse_slot(token: str) -> TimeSlot:
    """Parse a ``"<day>.<period>"`` token, e.g. ``"2.3"`` -> TimeSlot(2, 3)."""
    parts = str(token).strip().split('.')
    if len(parts) != 2:
        raise ValidationError(f"Invalid slot {token!r}; expected '<day>.<period>'")
    try:
        day, period = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid slot {token!r}; day and period must be integers") from None
    if day < 1 or period < 1:
        raise ValidationError(f"Invalid slot {token!r}; day and period start at 1")
    return TimeSlot(day, period)


def parse_slot_list(text: Optional[str]) -> Tuple[TimeSlot, ...]:
    """Comma separated slot tokens, blanks dropped, first occurrence kept."""
    if not text:
        return ()
    seen = []
    for tok in str(text).split(','):
        tok = tok.strip()
        if not tok:
            continue
        slot = parse_slot(tok)
        if slot not in seen:
            seen.append(slot)
    return tuple(seen)


@dataclass(eq=False)
class Course:
    id: int
    name: str
    teacher: str
    sections: FrozenSet[str]
    required_sessions: int = 1
    priority_tier: int = 2
    preferred_slots: Tuple[TimeSlot, ...] = ()
    conflict_score: int = 0  # rewritten once per run

    def __post_init__(self):
        self.sections = frozenset(self.sections)
        self.preferred_slots = tuple(dict.fromkeys(self.preferred_slots))
        if not self.sections:
            raise ValidationError(f"Course {self.name!r} has no sections")
        if self.required_sessions < 1:
            raise ValidationError(f"Course {self.name!r} needs at least one session")

    def section_label(self) -> str:
        return ", ".join(sorted(self.sections))

    def __repr__(self) -> str:
        return f"Course(id={self.id}, name={self.name!r}, teacher={self.teacher!r})"


# teacher name -> slots that teacher cannot take
Unavailability = Dict[str, FrozenSet[TimeSlot]]


@dataclass
class ScheduleResult:
    # grid is a SlotGrid and graph the conflict graph; both None for a failed run
    grid: Optional[object] = None
    graph: Optional[object] = None
    periods: int = 0
    unassigned: List[Course] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def has_unassigned(self) -> bool:
        return bool(self.unassigned)

    def occupied(self) -> Dict[TimeSlot, List[Course]]:
        if self.grid is None:
            return {}
        return {s: list(cs) for s, cs in self.grid.items() if cs}
