"""Setpoint change schedule."""
from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence


class SetpointSchedule:
    def __init__(self, changes: Iterable[Sequence[int]] = ()) -> None:
        self.changes: Dict[int, int] = {}
        for change in changes:
            if len(change) != 2:
                raise ValueError(f"setpoint change must be [step, target_adc], got {list(change)}")
            step, target = int(change[0]), int(change[1])
            if step < 0:
                raise ValueError(f"setpoint step must be >= 0, got {step}")
            # Later entries for the same step win.
            self.changes[step] = target

    def __len__(self) -> int:
        return len(self.changes)

    def due(self, step: int) -> Optional[int]:
        return self.changes.get(step)
