"""UserRepository protocol: defines identity lookup contract."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class UserRepository(Protocol):
    """Repository interface for User and session access."""

    async def get_by_id(self, user_id: str) -> Optional[object]:
        ...

    async def get_session_by_token(self, token: str) -> Optional[object]:
        """Look up a bearer session by its token."""
        ...

    async def ensure_user(self, user_id: str, name: str, email: str) -> object:
        """Return the user row, inserting it first if absent."""
        ...
