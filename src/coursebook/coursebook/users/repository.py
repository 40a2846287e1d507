from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int, *, client_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_idn(self, idn: int, *, client_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        """Lookup across all clients; ``username`` is already lower-cased."""
        raise NotImplementedError

    def get_by_api_key(self, api_key: str) -> Optional[User]:
        raise NotImplementedError

    def max_idn(self, client_id: int) -> Optional[int]:
        raise NotImplementedError

    def list_for_client(self, client_id: int) -> Sequence[User]:
        """Users of a client, sorted by last name."""
        raise NotImplementedError

    def list_by_ids(self, user_ids: Sequence[int], *, client_id: int) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, *, client_id: int, idn: int, username: str, fields: Mapping[str, Any]) -> User:
        raise NotImplementedError

    def update_fields(self, user_id: int, *, client_id: int, fields: Mapping[str, Any]) -> Optional[User]:
        raise NotImplementedError

    def replace_attendance(self, user_id: int, attendance: Sequence[datetime]) -> None:
        raise NotImplementedError

    def delete_by_id(self, user_id: int, *, client_id: int) -> bool:
        raise NotImplementedError
