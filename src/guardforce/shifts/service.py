from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..common.validators import (
    require_list,
    require_mapping,
    require_non_empty,
    require_non_negative_int,
    require_positive,
)
from ..core.enums import Role, ShiftType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..sites.repository import SiteRepository
from .model import NewShift, Shift, TemporarySlotRequest
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

SHIFT_MANAGER_ROLES = frozenset({Role.ADMIN, Role.SUPERVISOR})


def _require_manager(current_role: Role, action: str) -> None:
    if current_role not in SHIFT_MANAGER_ROLES:
        raise AuthorizationError(f"Only admins and supervisors can {action}")


def _unique_ids(values: Iterable[Any]) -> tuple[int, ...]:
    seen: dict[int, None] = {}
    for v in values:
        seen.setdefault(int(v), None)
    return tuple(seen)


@dataclass(frozen=True)
class AllocationPlan:
    """Diff between the assigned guards of a shift type and the desired set."""

    to_remove: tuple[Shift, ...]
    to_add: tuple[int, ...]

    @property
    def removed_guard_ids(self) -> tuple[int, ...]:
        return _unique_ids(s.guard_id for s in self.to_remove)


def plan_allocation(current_shifts: Sequence[Shift], target_guard_ids: Iterable[int]) -> AllocationPlan:
    """Compute which shift rows to delete and which guards to insert.

    `current_shifts` are the rows of one (site, shift type) holding a guard.
    Guards present in both sets are left untouched.
    """
    target = _unique_ids(target_guard_ids)
    target_set = set(target)
    assigned = {s.guard_id for s in current_shifts if s.guard_id is not None}

    to_remove = tuple(s for s in current_shifts if s.guard_id is not None and s.guard_id not in target_set)
    to_add = tuple(g for g in target if g not in assigned)
    return AllocationPlan(to_remove=to_remove, to_add=to_add)


@dataclass(frozen=True)
class AttendanceConflict:
    attendance_id: int
    guard_id: int
    status: str


@dataclass(frozen=True)
class AllocationFailure:
    action: str
    ref: int
    error: str


@dataclass
class AllocationResult:
    site_id: int
    shift_type: ShiftType
    on_date: date
    conflicts: list[AttendanceConflict] = field(default_factory=list)
    needs_confirmation: bool = False
    added: list[int] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)
    deleted_attendance_ids: list[int] = field(default_factory=list)
    failures: list[AllocationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.needs_confirmation and not self.failures


@dataclass(frozen=True)
class SiteShiftSummary:
    site_id: int
    day_shifts: int
    night_shifts: int
    day_filled: int
    night_filled: int
    day_slots: int
    night_slots: int

    @property
    def day_fill_percent(self) -> float:
        return fill_percent(self.day_filled, self.day_slots)

    @property
    def night_fill_percent(self) -> float:
        return fill_percent(self.night_filled, self.night_slots)


def fill_percent(filled: int, slots: int) -> float:
    if slots <= 0:
        return 0.0
    return round(filled * 100.0 / slots, 1)


class ShiftAllocationService:
    """Use case: assign guards to a site's day or night shift.

    Writes are issued one row at a time. A failing row is logged and reported
    in the result; the remaining rows still go through.
    """

    def __init__(self, shifts: ShiftRepository, attendance: AttendanceRepository, sites: SiteRepository):
        self._shifts = shifts
        self._attendance = attendance
        self._sites = sites

    def _require_site(self, site_id: int):
        site = self._sites.get_by_id(int(site_id))
        if not site:
            raise NotFoundError("Site not found")
        return site

    def allocate(
        self,
        *,
        current_role: Role,
        site_id: int,
        shift_type: ShiftType,
        guard_ids: Iterable[int],
        confirm: bool = False,
        on_date: Optional[date] = None,
    ) -> AllocationResult:
        _require_manager(current_role, "allocate shifts")
        site_id = int(site_id)
        self._require_site(site_id)
        on_date = on_date or today_local()

        current = [s for s in self._shifts.list_by_site(site_id) if s.shift_type == shift_type and s.guard_id is not None]
        plan = plan_allocation(current, guard_ids)
        result = AllocationResult(site_id=site_id, shift_type=shift_type, on_date=on_date)

        blocked: set[int] = set()
        if plan.to_remove:
            records = self._attendance.find_for_guards(
                site_id=site_id,
                shift_type=shift_type,
                on_date=on_date,
                guard_ids=plan.removed_guard_ids,
            )
            result.conflicts = [
                AttendanceConflict(attendance_id=r.attendance_id, guard_id=r.guard_id, status=r.status.value)
                for r in records
            ]
            if result.conflicts and not confirm:
                result.needs_confirmation = True
                logger.info(
                    "Allocation for site %s %s needs confirmation: %d attendance record(s) on %s",
                    site_id,
                    shift_type.value,
                    len(result.conflicts),
                    on_date,
                )
                return result

            for conflict in result.conflicts:
                try:
                    self._attendance.delete_by_id(conflict.attendance_id)
                    result.deleted_attendance_ids.append(conflict.attendance_id)
                except Exception as e:
                    logger.exception("Failed to delete attendance %s", conflict.attendance_id)
                    result.failures.append(AllocationFailure("delete_attendance", conflict.attendance_id, str(e)))
                    blocked.add(conflict.guard_id)

        for shift in plan.to_remove:
            if shift.guard_id in blocked:
                continue
            try:
                self._shifts.delete_by_id(shift.shift_id)
                result.removed.append(shift.guard_id)
            except Exception as e:
                logger.exception("Failed to remove shift %s", shift.shift_id)
                result.failures.append(AllocationFailure("remove_shift", shift.shift_id, str(e)))

        for guard_id in plan.to_add:
            try:
                self._shifts.create(NewShift(site_id=site_id, shift_type=shift_type, guard_id=guard_id))
                result.added.append(guard_id)
            except Exception as e:
                logger.exception("Failed to assign guard %s to site %s", guard_id, site_id)
                result.failures.append(AllocationFailure("add_shift", guard_id, str(e)))

        logger.info(
            "Allocated site %s %s: +%d -%d (%d failure(s))",
            site_id,
            shift_type.value,
            len(result.added),
            len(result.removed),
            len(result.failures),
        )
        return result

    def reassign(self, *, current_role: Role, from_shift_id: int, to_shift_id: int) -> Shift:
        """Move the guard of one shift row onto another; the source row becomes open."""
        _require_manager(current_role, "reassign shifts")
        if int(from_shift_id) == int(to_shift_id):
            raise ValidationError("Source and target shift must differ")

        source = self._shifts.get_by_id(int(from_shift_id))
        target = self._shifts.get_by_id(int(to_shift_id))
        if not source or not target:
            raise NotFoundError("Shift not found")
        if source.guard_id is None:
            raise ValidationError("Source shift has no guard assigned")
        if target.guard_id is not None:
            raise ValidationError("Target shift already has a guard assigned")

        self._shifts.set_guard(target.shift_id, source.guard_id)
        self._shifts.set_guard(source.shift_id, None)
        logger.info("Moved guard %s from shift %s to shift %s", source.guard_id, source.shift_id, target.shift_id)
        return self._shifts.get_by_id(target.shift_id)

    def site_summary(self, site_id: int) -> SiteShiftSummary:
        site = self._require_site(site_id)
        shifts = self._shifts.list_by_site(site.site_id)
        day = [s for s in shifts if s.shift_type == ShiftType.DAY]
        night = [s for s in shifts if s.shift_type == ShiftType.NIGHT]
        return SiteShiftSummary(
            site_id=site.site_id,
            day_shifts=len(day),
            night_shifts=len(night),
            day_filled=sum(1 for s in day if s.guard_id is not None),
            night_filled=sum(1 for s in night if s.guard_id is not None),
            day_slots=site.day_slots,
            night_slots=site.night_slots,
        )

    def shifts_for_date(self, site_id: int, on_date: date) -> Sequence[Shift]:
        self._require_site(site_id)
        return self._shifts.list_by_site_and_date(int(site_id), on_date)


def parse_temporary_slots(rows: Sequence[Mapping[str, Any]]) -> list[TemporarySlotRequest]:
    slots = []
    for i, raw in enumerate(require_list(rows, "Slots"), start=1):
        raw = require_mapping(raw, f"Slot #{i}")
        role = require_non_empty(raw.get("role_type"), f"Role of slot #{i}")
        day = require_non_negative_int(raw.get("day_slots"), f"Day slots of {role}")
        night = require_non_negative_int(raw.get("night_slots"), f"Night slots of {role}")
        pay_rate = require_positive(raw.get("pay_rate"), f"Pay rate of {role}")
        if day + night == 0:
            raise ValidationError(f"{role} needs at least one day or night slot")
        slots.append(TemporarySlotRequest(role_type=role, day_slots=day, night_slots=night, pay_rate=pay_rate))
    return slots


class TemporarySlotService:
    """Use case: one-day temporary slots at a site."""

    def __init__(self, shifts: ShiftRepository, sites: SiteRepository):
        self._shifts = shifts
        self._sites = sites

    def add_slots(
        self,
        *,
        current_role: Role,
        site_id: int,
        on_date: date,
        slots: Sequence[TemporarySlotRequest],
    ) -> int:
        _require_manager(current_role, "add temporary slots")
        if not self._sites.get_by_id(int(site_id)):
            raise NotFoundError("Site not found")
        if not slots:
            raise ValidationError("Add at least one temporary slot")

        rows: list[NewShift] = []
        for slot in slots:
            if not slot.role_type or not slot.role_type.strip():
                raise ValidationError("Every temporary slot needs a role")
            if slot.pay_rate <= 0:
                raise ValidationError(f"Pay rate of {slot.role_type} must be greater than zero")
            if slot.day_slots < 0 or slot.night_slots < 0 or slot.day_slots + slot.night_slots == 0:
                raise ValidationError(f"{slot.role_type} needs at least one day or night slot")

            for shift_type, count in ((ShiftType.DAY, slot.day_slots), (ShiftType.NIGHT, slot.night_slots)):
                rows.extend(
                    NewShift(
                        site_id=int(site_id),
                        shift_type=shift_type,
                        is_temporary=True,
                        role_type=slot.role_type,
                        temporary_pay_rate=slot.pay_rate,
                        created_for_date=on_date,
                    )
                    for _ in range(count)
                )

        created = self._shifts.create_many(rows)
        logger.info("Added %d temporary slot(s) to site %s for %s", created, site_id, on_date)
        return created

    def copy_slots(self, *, current_role: Role, site_id: int, from_date: date, to_date: date) -> int:
        """Copy a date's temporary slots to another date, unassigned. Returns the count copied."""
        _require_manager(current_role, "copy temporary slots")
        if from_date == to_date:
            raise ValidationError("Source and target date must differ")

        source = self._shifts.list_temporary(int(site_id), from_date)
        if not source:
            return 0

        copies = [
            NewShift(
                site_id=s.site_id,
                shift_type=s.shift_type,
                guard_id=None,
                is_temporary=True,
                role_type=s.role_type,
                temporary_pay_rate=s.temporary_pay_rate,
                created_for_date=to_date,
            )
            for s in source
        ]
        copied = self._shifts.create_many(copies)
        logger.info("Copied %d temporary slot(s) of site %s from %s to %s", copied, site_id, from_date, to_date)
        return copied
