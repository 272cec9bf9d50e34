#!/usr/bin/env python3
"""
Configuration Management for the OrientDB utilities.

This module provides centralized configuration management including:
- Environment variable loading (with .env support)
- The named OrientDB toggles and their property names
- Factory functions for connection URLs and embedded servers
- Logging configuration
"""

import os
import logging
from typing import Dict, Any, Optional, Mapping

from dotenv import load_dotenv

from .database import (
    EmbeddedServer,
    build_database_url,
    start_embedded_server,
)
from .models.engine import Engine


# ================================
# Environment Setup
# ================================

# Load environment variables from .env file
load_dotenv()


# ================================
# Property Names
# ================================

PROPERTY_NAME_ODB_EMBEDDED = "orientdb.embedded"
PROPERTY_NAME_ODB_SERVER_ENGINE = "orientdb.server.engine"
PROPERTY_NAME_ODB_SERVER_REMOTE_HOSTNAME = "orientdb.server.remote.hostname"
PROPERTY_NAME_ODB_SERVER_REMOTE_PORT_RANGE = "orientdb.server.remote.portRange"
PROPERTY_NAME_ODB_DATABASE_PATH = "orientdb.databasePath"
PROPERTY_NAME_ODB_DATABASE_NAME = "orientdb.databaseName"
PROPERTY_NAME_ODB_USERNAME = "orientdb.server.username"
PROPERTY_NAME_ODB_PASSWORD = "orientdb.server.password"

# Property name -> environment variable
PROPERTY_ENV_VARS = {
    PROPERTY_NAME_ODB_EMBEDDED: "ORIENTDB_EMBEDDED",
    PROPERTY_NAME_ODB_SERVER_ENGINE: "ORIENTDB_SERVER_ENGINE",
    PROPERTY_NAME_ODB_SERVER_REMOTE_HOSTNAME: "ORIENTDB_SERVER_REMOTE_HOSTNAME",
    PROPERTY_NAME_ODB_SERVER_REMOTE_PORT_RANGE: "ORIENTDB_SERVER_REMOTE_PORT_RANGE",
    PROPERTY_NAME_ODB_DATABASE_PATH: "ORIENTDB_DATABASE_PATH",
    PROPERTY_NAME_ODB_DATABASE_NAME: "ORIENTDB_DATABASE_NAME",
    PROPERTY_NAME_ODB_USERNAME: "ORIENTDB_SERVER_USERNAME",
    PROPERTY_NAME_ODB_PASSWORD: "ORIENTDB_SERVER_PASSWORD",
}

LOCAL_HOSTNAMES = {"localhost", "127.0.0.1", "::1", "0.0.0.0"}


# ================================
# Configuration Classes
# ================================

class DatabaseConfig:
    """OrientDB connection and embedded server configuration."""

    def __init__(self, properties: Optional[Mapping[str, str]] = None):
        """
        Read the OrientDB toggles.

        Args:
            properties: Optional mapping keyed by property name
                (e.g. "orientdb.server.engine"). Values found there win
                over environment variables.
        """
        self._properties = dict(properties or {})
        self.embedded = self._get(PROPERTY_NAME_ODB_EMBEDDED, "false").lower().strip() == "true"
        self.engine = self.parse_engine(self._get(PROPERTY_NAME_ODB_SERVER_ENGINE, "plocal"))
        self.hostname = self._get(PROPERTY_NAME_ODB_SERVER_REMOTE_HOSTNAME, "localhost")
        self.port_range = self._get(PROPERTY_NAME_ODB_SERVER_REMOTE_PORT_RANGE)
        self.database_path = self._get(PROPERTY_NAME_ODB_DATABASE_PATH)
        self.database_name = self._get(PROPERTY_NAME_ODB_DATABASE_NAME)
        self.username = self._get(PROPERTY_NAME_ODB_USERNAME)
        self.password = self._get(PROPERTY_NAME_ODB_PASSWORD)

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "DatabaseConfig":
        """Build a configuration from a mapping of property names."""
        return cls(properties)

    def _get(self, property_name: str, default: Optional[str] = None) -> Optional[str]:
        if property_name in self._properties:
            return self._properties[property_name]
        return os.getenv(PROPERTY_ENV_VARS[property_name], default)

    @staticmethod
    def parse_engine(engine_name: str) -> Engine:
        """
        Resolve an engine name.

        Returns:
            Engine: The matching engine

        Raises:
            ValueError: If the name matches no engine
        """
        engine = Engine.from_string(engine_name.strip())
        if engine is None:
            valid = ", ".join(f"'{e.value}'" for e in Engine)
            raise ValueError(
                f"Invalid {PROPERTY_ENV_VARS[PROPERTY_NAME_ODB_SERVER_ENGINE]} '{engine_name}'. "
                f"Must be one of {valid}"
            )
        return engine

    def get_database_url(self) -> str:
        """
        Build the connection URL for the configured database.

        Raises:
            MissingArgumentError: If the database name (or hostname for remote) is missing
            InvalidFormatError: If the port range is malformed
        """
        return build_database_url(
            self.database_name,
            self.engine,
            self.hostname,
            self.port_range,
            self.database_path
        )

    def start_server(self, **server_options) -> EmbeddedServer:
        """
        Start an embedded server with the configured credentials and port range.

        Args:
            **server_options: Passed to EmbeddedServer

        Returns:
            EmbeddedServer: The active server
        """
        return start_embedded_server(
            self.username,
            self.password,
            self.port_range,
            **server_options
        )

    def as_dict(self) -> Dict[str, Any]:
        """Return the configuration with the password masked."""
        return {
            "embedded": self.embedded,
            "engine": self.engine.value,
            "hostname": self.hostname,
            "port_range": self.port_range,
            "database_path": self.database_path,
            "database_name": self.database_name,
            "username": self.username,
            "password": "***" if self.password else None,
        }


class LoggingConfig:
    """Logging configuration management."""

    def __init__(self):
        self.level = os.getenv("ORIENTDB_LOG_LEVEL", "INFO").upper()
        self.log_file = os.getenv("ORIENTDB_LOG_FILE") or None
        self.format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        # Ensure logs directory exists
        if self.log_file:
            log_dir = os.path.dirname(self.log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)

    def configure_logging(self):
        """Configure Python logging."""
        handlers = [logging.StreamHandler()]
        if self.log_file:
            handlers.append(logging.FileHandler(self.log_file))
        logging.basicConfig(
            level=getattr(logging, self.level, logging.INFO),
            format=self.format,
            handlers=handlers
        )


# ================================
# Global Configuration Instance
# ================================

class Config:
    """Main configuration class that aggregates all configuration sections."""

    def __init__(self):
        self.database = DatabaseConfig()
        self.logging = LoggingConfig()

        # Configure logging on initialization
        self.logging.configure_logging()

    def validate_configuration(self) -> Dict[str, Any]:
        """
        Validate the entire configuration and return status.

        Returns:
            Dict[str, Any]: Validation results with any errors or warnings
        """
        results = {
            "valid": True,
            "errors": [],
            "warnings": [],
            "engine": self.database.engine.value,
            "embedded": self.database.embedded
        }

        if self.database.database_name is not None:
            try:
                results["database_url"] = self.database.get_database_url()
            except ValueError as e:
                results["valid"] = False
                results["errors"].append(f"Database URL error: {str(e)}")
        else:
            results["warnings"].append("No database name configured")

        if self.database.embedded:
            if self.database.username is None or self.database.password is None:
                results["valid"] = False
                results["errors"].append(
                    "Embedded mode requires ORIENTDB_SERVER_USERNAME and ORIENTDB_SERVER_PASSWORD"
                )
            if (self.database.engine is Engine.REMOTE
                    and self.database.hostname not in LOCAL_HOSTNAMES):
                results["warnings"].append(
                    f"Embedded mode enabled but remote hostname is '{self.database.hostname}'"
                )

        return results


# Create global configuration instance
config = Config()

# Convenience access to specific configurations
db_config = config.database
logging_config = config.logging


# ================================
# Factory Functions
# ================================

def get_engine() -> Engine:
    """Get the configured engine."""
    return db_config.engine


def get_database_url() -> str:
    """Build the connection URL for the configured database."""
    return db_config.get_database_url()


def start_configured_server(**server_options) -> Optional[EmbeddedServer]:
    """
    Start an embedded server if embedded mode is enabled.

    Returns:
        Optional[EmbeddedServer]: The active server, None when embedded mode is off
    """
    if not db_config.embedded:
        return None
    return db_config.start_server(**server_options)


# ================================
# Environment Helpers
# ================================

def get_environment_info() -> Dict[str, Any]:
    """
    Get comprehensive environment information for debugging.

    Returns:
        Dict[str, Any]: Environment details and configuration status
    """
    return {
        **config.database.as_dict(),
        "orientdb_home": os.getenv("ORIENTDB_HOME"),
        "log_level": config.logging.level,
        "configuration_valid": config.validate_configuration()["valid"]
    }


def load_env_file(env_file: Optional[str] = None) -> bool:
    """
    Load environment variables from a specific file.

    Args:
        env_file: Path to environment file (defaults to .env)

    Returns:
        bool: True if file was loaded successfully
    """
    if env_file:
        return load_dotenv(env_file)
    return load_dotenv()


# ================================
# Module Exports
# ================================

__all__ = [
    # Property names
    "PROPERTY_NAME_ODB_EMBEDDED",
    "PROPERTY_NAME_ODB_SERVER_ENGINE",
    "PROPERTY_NAME_ODB_SERVER_REMOTE_HOSTNAME",
    "PROPERTY_NAME_ODB_SERVER_REMOTE_PORT_RANGE",
    "PROPERTY_NAME_ODB_DATABASE_PATH",
    "PROPERTY_NAME_ODB_DATABASE_NAME",
    "PROPERTY_NAME_ODB_USERNAME",
    "PROPERTY_NAME_ODB_PASSWORD",
    "PROPERTY_ENV_VARS",

    # Configuration classes
    "Config",
    "DatabaseConfig",
    "LoggingConfig",

    # Global instances
    "config",
    "db_config",
    "logging_config",

    # Factory functions
    "get_engine",
    "get_database_url",
    "start_configured_server",

    # Environment helpers
    "get_environment_info",
    "load_env_file"
]
