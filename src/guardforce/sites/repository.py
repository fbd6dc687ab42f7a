from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Site, SiteDraft, StaffingRequirement


class SiteRepository(Protocol):
    """Repository interface for sites and their staffing requirements.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def list_all(self) -> Sequence[Site]:
        raise NotImplementedError

    def get_by_id(self, site_id: int) -> Optional[Site]:
        raise NotImplementedError

    def create(self, draft: SiteDraft) -> int:
        raise NotImplementedError

    def update(self, site_id: int, draft: SiteDraft) -> bool:
        """Update site columns and replace its staffing requirements wholesale."""

        raise NotImplementedError

    def delete_by_id(self, site_id: int) -> bool:
        raise NotImplementedError

    def list_requirements(self, site_id: int) -> Sequence[StaffingRequirement]:
        raise NotImplementedError
