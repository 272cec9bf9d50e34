"""
OrientDB Utilities

Small helpers for development with OrientDB:
- Building connection URLs from their parts
- Starting an embedded OrientDB server for local use and tests
"""

from .models.engine import Engine
from .database import build_database_url, start_embedded_server

__version__ = "0.1.0"
__author__ = "OrientDB Utilities Team"
__description__ = "Connection URL building and embedded server bootstrap for OrientDB"

__all__ = ["Engine", "build_database_url", "start_embedded_server"]
