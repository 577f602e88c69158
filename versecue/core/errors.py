"""Exceptions for VerseCue.

Lookups that find nothing return None or an empty list; exceptions are
reserved for conditions the caller cannot treat as a normal miss.
"""


class VerseCueError(Exception):
    """Base exception for VerseCue errors."""

    pass


class StoreUnavailableError(VerseCueError):
    """The passage store's backing database could not be opened or queried."""

    pass


class ProfileNotFoundError(VerseCueError, KeyError):
    """No pastor profile exists with the requested id."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(profile_id)
        self.profile_id = profile_id

    def __str__(self) -> str:
        return f"No pastor profile '{self.profile_id}'"


__all__ = ["ProfileNotFoundError", "StoreUnavailableError", "VerseCueError"]
