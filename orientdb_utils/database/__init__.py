"""
Database package: connection URL building and embedded server bootstrap.
"""

from .base import (
    OrientDBUtilError,
    MissingArgumentError,
    InvalidFormatError,
    ServerConfigurationError,
    DatabaseConnectionError,
)
from .url import build_database_url, parse_port
from .embedded_server import (
    EmbeddedServer,
    DEFAULT_BINARY_PROTOCOL_PORTRANGE,
    build_server_configuration,
    create_server,
    start_embedded_server,
)


# Export all public classes and functions
__all__ = [
    # Exceptions
    "OrientDBUtilError",
    "MissingArgumentError",
    "InvalidFormatError",
    "ServerConfigurationError",
    "DatabaseConnectionError",
    # URL building
    "build_database_url",
    "parse_port",
    # Embedded server
    "EmbeddedServer",
    "DEFAULT_BINARY_PROTOCOL_PORTRANGE",
    "build_server_configuration",
    "create_server",
    "start_embedded_server",
]
