from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from contentgen.domain.errors import DefinitionError
from contentgen.domain.models.event import CombatWave, WaveSchedule


@dataclass(frozen=True)
class ScheduledWave:
    start_offset: float
    wave: CombatWave


class WaveScheduler:
    """Expands a schedule into start offsets. Every delay is measured from event start."""

    def __init__(self, time_limit: Optional[float] = None) -> None:
        self._time_limit = time_limit

    def timeline(self, schedule: WaveSchedule, *, record_id: str = "") -> list[ScheduledWave]:
        problems = schedule.validate()
        if self._time_limit is not None:
            for wave in schedule:
                if float(wave.delay_seconds) > float(self._time_limit):
                    problems.append(
                        f"wave {wave.wave_number} starts at {wave.delay_seconds:g}s, after the {self._time_limit:g}s limit"
                    )
        if problems:
            raise DefinitionError(record_id, "invalid wave schedule", problems=problems)
        ordered = sorted(schedule.waves, key=lambda wave: int(wave.wave_number))
        return [ScheduledWave(start_offset=float(wave.delay_seconds), wave=wave) for wave in ordered]

    def due(self, schedule: WaveSchedule, elapsed: float) -> list[CombatWave]:
        return [row.wave for row in self.timeline(schedule) if row.start_offset <= float(elapsed)]

    @staticmethod
    def monster_counts(schedule: WaveSchedule) -> dict[str, int]:
        counts: Counter[str] = Counter()
        for wave in schedule:
            counts[wave.variant_id] += int(wave.count)
        return dict(counts)
