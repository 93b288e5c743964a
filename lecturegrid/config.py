"""
Run settings for a scheduling run.

Days, optional room limit and the size of the period axis. Values can come
from a YAML file and be overridden from the command line.
"""
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

MAX_DAYS = 7
DEFAULT_SLOT_BUDGET = 1000


@dataclass
class RunConfig:
    days: int = 5
    rooms: Optional[int] = None
    # explicit period count; when unset it is derived from slot_budget // days
    periods_per_day: Optional[int] = None
    slot_budget: int = DEFAULT_SLOT_BUDGET

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        merged = asdict(cls())
        for k, v in data.items():
            if k in merged:
                merged[k] = v
        return cls(**merged)

    def validate(self) -> "RunConfig":
        if not isinstance(self.days, int) or not 1 <= self.days <= MAX_DAYS:
            raise ConfigurationError(f"Invalid value for days: {self.days!r} (expected 1-{MAX_DAYS})")
        if self.rooms is not None and (not isinstance(self.rooms, int) or self.rooms < 1):
            raise ConfigurationError(f"Invalid value for rooms: {self.rooms!r} (expected >= 1)")
        if self.periods_per_day is not None:
            if not isinstance(self.periods_per_day, int) or self.periods_per_day < 1:
                raise ConfigurationError(f"Invalid value for periods_per_day: {self.periods_per_day!r}")
        elif not isinstance(self.slot_budget, int) or self.slot_budget < self.days:
            raise ConfigurationError(
                f"slot_budget={self.slot_budget!r} leaves no periods for {self.days} day(s)"
            )
        return self

    @property
    def periods(self) -> int:
        if self.periods_per_day is not None:
            return self.periods_per_day
        return self.slot_budget // self.days


def load_config(path: str = "lecturegrid.yaml", required: bool = False) -> RunConfig:
    """Defaults when the file is absent, unless the caller asked for that exact file."""
    cfg_path = Path(path)
    if not cfg_path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return RunConfig()
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping of settings")
    return RunConfig.from_dict(data)
