from dataclasses import dataclass
from typing import Optional

from .enums import ResourceType


@dataclass(frozen=True)
class Intent:
    """What a statement was trying to do, for error reporting."""

    action: str
    resource_type: ResourceType
    name: str

    def __str__(self):
        return f"{self.action} {str(self.resource_type).lower()} {self.name}"


class SnowsyncException(Exception):
    retryable = False

    def __init__(self, message: str, intent: Optional[Intent] = None, errno: Optional[int] = None, sql: str = None):
        self.intent = intent
        self.errno = errno
        self.sql = sql
        if intent is not None:
            message = f"Failed to {intent}: {message}"
        super().__init__(message)


class ResourceNotFoundException(SnowsyncException):
    pass


class ResourceAlreadyExistsException(SnowsyncException):
    pass


class TransientConnectionException(SnowsyncException):
    retryable = True


class SyntaxOrPermissionException(SnowsyncException):
    pass


class WrongEditionException(SnowsyncException):
    pass


class InvalidChangeException(SnowsyncException):
    pass
