"""
Storage exceptions. Driver errors that are not translated here propagate unchanged.
"""


class StorageError(Exception):
    """Base storage exception."""

    def __init__(self, message: str = "Storage error"):
        self.message = message
        super().__init__(self.message)


class NoSuchUser(StorageError):
    """Lookup by id, username or email matched no row."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class NoSuchSession(StorageError):
    """Lookup by session key matched no row."""

    def __init__(self, message: str = "Session not found"):
        super().__init__(message)


class AmbiguousCredentials(StorageError):
    """Insert or update violated a unique constraint (username, or email when enforced)."""

    def __init__(self, message: str = "User with given credentials already exists"):
        super().__init__(message)


class SessionKeyExists(StorageError):
    """Insert of a session whose key is already stored."""

    def __init__(self, message: str = "Session key already exists"):
        super().__init__(message)


class InvalidFieldName(StorageError, ValueError):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f'invalid field name "{field_name}": must be a valid field name of UserModel')


class NullTimeError(StorageError):
    """A DATETIME column was NULL where a value is required."""

    def __init__(self, message: str = "got NULL datetime, expected to be not NULL"):
        super().__init__(message)


class UnresolvedPlaceholderError(StorageError, ValueError):
    def __init__(self, placeholders):
        self.placeholders = sorted(set(placeholders))
        super().__init__("unresolved SQL template placeholders: " + ", ".join(self.placeholders))
