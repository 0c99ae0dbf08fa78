from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class RosterRepository(Protocol):
    """Read-only view of the user directory.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Sequence[int]) -> Sequence[Employee]:
        raise NotImplementedError

    def list_active_roster(self, *, branch_id: Optional[int] = None) -> Sequence[Employee]:
        """Active non-admin users, optionally restricted to one branch."""

        raise NotImplementedError
