from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import StaffingRequestStatus
from .model import NewStaffingRequest, TemporaryStaffingRequest


class StaffingRequestRepository(Protocol):
    def list_all(self) -> Sequence[TemporaryStaffingRequest]:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[TemporaryStaffingRequest]:
        raise NotImplementedError

    def create(self, request: NewStaffingRequest) -> int:
        raise NotImplementedError

    def set_status(self, request_id: int, status: StaffingRequestStatus) -> bool:
        raise NotImplementedError
