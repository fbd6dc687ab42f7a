from __future__ import annotations

from typing import Optional, Protocol

from .model import CompanySettings


class CompanySettingsRepository(Protocol):
    def get(self) -> Optional[CompanySettings]:
        raise NotImplementedError

    def save(self, settings: CompanySettings) -> None:
        """Insert the row on first save, update it afterwards."""

        raise NotImplementedError
