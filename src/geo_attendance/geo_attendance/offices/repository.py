from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Office


class OfficeRepository(Protocol):
    """Read access to admin-managed office reference rows."""

    def list_active(self) -> Sequence[Office]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Office]:
        raise NotImplementedError

    def get_by_id(self, office_id: int) -> Optional[Office]:
        raise NotImplementedError
