"""Per-guard shift and attendance totals for a calendar month."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus, ShiftType
from ..core.exceptions import NotFoundError
from ..guards.repository import GuardRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository


@dataclass(frozen=True)
class GuardMonthlySummary:
    guard_id: int
    guard_name: str
    year: int
    month: int
    day_shifts: int
    night_shifts: int
    absent_days: int
    total_records: int

    @property
    def total_shifts(self) -> int:
        return self.day_shifts + self.night_shifts

    @property
    def attendance_rate(self) -> float:
        """Percent of recorded shifts worked, 2 decimals."""
        if self.total_records == 0:
            return 0.0
        return round(self.total_shifts / self.total_records * 100, 2)


def summarize_guard(
    guard_id: int,
    guard_name: str,
    year: int,
    month: int,
    records: Iterable[AttendanceRecord],
) -> GuardMonthlySummary:
    records = list(records)
    present = [r for r in records if r.status == AttendanceStatus.PRESENT]
    return GuardMonthlySummary(
        guard_id=guard_id,
        guard_name=guard_name,
        year=year,
        month=month,
        day_shifts=sum(1 for r in present if r.shift_type == ShiftType.DAY),
        night_shifts=sum(1 for r in present if r.shift_type == ShiftType.NIGHT),
        absent_days=sum(1 for r in records if r.status == AttendanceStatus.ABSENT),
        total_records=len(records),
    )


class GuardMonthlySummaryService:
    def __init__(self, attendance: AttendanceRepository, guards: GuardRepository):
        self._attendance = attendance
        self._guards = guards

    def for_guard(self, guard_id: int, *, year: int, month: int) -> GuardMonthlySummary:
        guard = self._guards.get_by_id(int(guard_id))
        if not guard:
            raise NotFoundError("Guard not found")
        start, end = month_bounds(year, month)
        records = self._attendance.list_between(start, end, guard_id=guard.guard_id)
        return summarize_guard(guard.guard_id, guard.name, year, month, records)

    def for_all_guards(self, *, year: int, month: int) -> Sequence[GuardMonthlySummary]:
        """Guards with at least one record in the month, busiest first."""
        start, end = month_bounds(year, month)
        by_guard: dict[int, list[AttendanceRecord]] = {}
        for record in self._attendance.list_between(start, end):
            by_guard.setdefault(record.guard_id, []).append(record)

        names: Mapping[int, str] = {g.guard_id: g.name for g in self._guards.list_all()}
        summaries = [
            summarize_guard(guard_id, names.get(guard_id, "Unknown"), year, month, records)
            for guard_id, records in by_guard.items()
        ]
        summaries.sort(key=lambda s: (-s.total_shifts, s.guard_name))
        return summaries
