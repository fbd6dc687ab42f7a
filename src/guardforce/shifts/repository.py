from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import NewShift, Shift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def list_by_site(self, site_id: int) -> Sequence[Shift]:
        """Permanent shift rows of a site (temporary rows excluded)."""

        raise NotImplementedError

    def list_by_site_and_date(self, site_id: int, on_date: date) -> Sequence[Shift]:
        """Permanent rows plus temporary rows valid on `on_date`."""

        raise NotImplementedError

    def list_temporary(self, site_id: int, on_date: date) -> Sequence[Shift]:
        raise NotImplementedError

    def list_assigned(self) -> Sequence[Shift]:
        """Every shift row across all sites with a non-null guard."""

        raise NotImplementedError

    def create(self, shift: NewShift) -> int:
        raise NotImplementedError

    def create_many(self, shifts: Sequence[NewShift]) -> int:
        raise NotImplementedError

    def set_guard(self, shift_id: int, guard_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, shift_id: int) -> bool:
        raise NotImplementedError
