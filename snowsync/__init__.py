import logging

from .exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    SnowsyncException,
    SyntaxOrPermissionException,
    TransientConnectionException,
)
from .identifiers import quote_identifier, unquote_identifier
from .operations.connector import ConnectionParameters, InvalidConnectionConfiguration, SnowflakeConnectionError
from .resources import *  # noqa: F403
from .session import ProviderConfig, configure

logger = logging.getLogger("snowsync")


__all__ = [
    "ConnectionParameters",
    "InvalidConnectionConfiguration",
    "ProviderConfig",
    "ResourceAlreadyExistsException",
    "ResourceNotFoundException",
    "SnowflakeConnectionError",
    "SnowsyncException",
    "SyntaxOrPermissionException",
    "TransientConnectionException",
    "configure",
    "quote_identifier",
    "unquote_identifier",
]
