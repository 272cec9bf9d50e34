"""
Models package for OrientDB engine and server configuration definitions.

This package contains:
- Engine: The storage/access mode token used in connection URLs
- ServerConfiguration: The record handed to an embedded server at startup
"""

from .engine import Engine
from .server_config import (
    ServerConfiguration,
    ServerUserConfiguration,
    ServerEntryConfiguration,
    NetworkConfiguration,
    NetworkListenerConfiguration,
    NetworkProtocolConfiguration,
    BINARY_PROTOCOL_NAME,
    BINARY_PROTOCOL_IMPLEMENTATION,
)

__all__ = [
    "Engine",
    "ServerConfiguration",
    "ServerUserConfiguration",
    "ServerEntryConfiguration",
    "NetworkConfiguration",
    "NetworkListenerConfiguration",
    "NetworkProtocolConfiguration",
    "BINARY_PROTOCOL_NAME",
    "BINARY_PROTOCOL_IMPLEMENTATION",
]
