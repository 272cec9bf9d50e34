"""
Embedded OrientDB Server

This module starts an OrientDB server owned by the calling process. The
server distribution found under ORIENTDB_HOME is launched as a child JVM
with a server configuration file rendered from a ServerConfiguration.

The lifecycle follows the engine's own: create a handle, call startup()
with a configuration, then activate(). Shutting the server down is the
caller's responsibility.
"""

import logging
import os
import shutil
import subprocess
import tempfile
import time
from pathlib import Path
from typing import Optional

from ..models.server_config import (
    BINARY_PROTOCOL_IMPLEMENTATION,
    BINARY_PROTOCOL_NAME,
    NetworkConfiguration,
    NetworkListenerConfiguration,
    NetworkProtocolConfiguration,
    ServerConfiguration,
    ServerEntryConfiguration,
    ServerUserConfiguration,
)
from .base import (
    DatabaseConnectionError,
    ServerConfigurationError,
    require_not_none,
)

logger = logging.getLogger(__name__)


# The default port range of the server's binary protocol listener.
DEFAULT_BINARY_PROTOCOL_PORTRANGE = "2424-2430"

# Administrative account always registered on an embedded server.
# NOTE: weak fixed credentials, suitable for local development only.
ADMIN_USERNAME = "root"
ADMIN_PASSWORD = "password"

DEFAULT_DATABASE_PATH = "target/dbs"

SERVER_MAIN_CLASS = "com.orientechnologies.orient.server.OServerMain"
ACTIVATION_MARKER = "OrientDB Server is active"
CONFIG_FILE_NAME = "orientdb-server-config.xml"
LOG_FILE_NAME = "server.log"


def build_server_configuration(
    username: str,
    password: str,
    port_range: str = DEFAULT_BINARY_PROTOCOL_PORTRANGE
) -> ServerConfiguration:
    """
    Assemble the configuration for an embedded server.

    Args:
        username: Account to register in addition to the administrative one
        password: Password of that account
        port_range: Port range of the binary protocol listener

    Returns:
        ServerConfiguration: The frozen configuration record
    """
    return ServerConfiguration(
        users=(
            ServerUserConfiguration(name=ADMIN_USERNAME, password=ADMIN_PASSWORD, resources="*"),
            ServerUserConfiguration(name=username, password=password, resources="*"),
        ),
        network=NetworkConfiguration(
            protocols=(
                NetworkProtocolConfiguration(
                    name=BINARY_PROTOCOL_NAME,
                    implementation=BINARY_PROTOCOL_IMPLEMENTATION
                ),
            ),
            listeners=(
                NetworkListenerConfiguration(ip_address="0.0.0.0", port_range=port_range),
            ),
        ),
        properties=(
            ServerEntryConfiguration(name="server.cache.staticResources", value="false"),
            ServerEntryConfiguration(name="server.database.path", value=DEFAULT_DATABASE_PATH),
            ServerEntryConfiguration(name="plugin.dynamic", value="false"),
        ),
    )


class EmbeddedServer:
    """
    Handle to an OrientDB server process started by this process.

    Use start_embedded_server() for the common case; the handle can also
    be driven directly through startup() and activate().
    """

    poll_interval = 0.1
    shutdown_grace_period = 10.0

    def __init__(
        self,
        orientdb_home: Optional[str] = None,
        java_executable: Optional[str] = None,
        work_dir: Optional[str] = None
    ):
        """
        Create a server handle. Nothing is started yet.

        Args:
            orientdb_home: OrientDB server distribution (defaults to ORIENTDB_HOME)
            java_executable: Java binary (defaults to $JAVA_HOME/bin/java, then java)
            work_dir: Directory for the rendered config and server log
                (defaults to a new temporary directory)
        """
        self.orientdb_home = orientdb_home or os.getenv("ORIENTDB_HOME")
        self.java_executable = java_executable or self._default_java_executable()
        self.work_dir = Path(work_dir).resolve() if work_dir else None
        self._configuration: Optional[ServerConfiguration] = None
        self._process: Optional[subprocess.Popen] = None
        self._owns_work_dir = False
        self._log_handle = None

    @staticmethod
    def _default_java_executable() -> str:
        java_home = os.getenv("JAVA_HOME")
        if java_home:
            return os.path.join(java_home, "bin", "java")
        return "java"

    @property
    def configuration(self) -> Optional[ServerConfiguration]:
        """The configuration passed to startup(), if any."""
        return self._configuration

    @property
    def config_file(self) -> Optional[Path]:
        if self.work_dir is None:
            return None
        return self.work_dir / CONFIG_FILE_NAME

    @property
    def log_file(self) -> Optional[Path]:
        if self.work_dir is None:
            return None
        return self.work_dir / LOG_FILE_NAME

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    @property
    def is_active(self) -> bool:
        """True while the server process is running."""
        return self._process is not None and self._process.poll() is None

    def startup(self, configuration: ServerConfiguration) -> None:
        """
        Prepare the server with a configuration.

        Writes the configuration file the server process will read.

        Args:
            configuration: The server configuration

        Raises:
            ServerConfigurationError: If no usable OrientDB home is known
        """
        if not isinstance(configuration, ServerConfiguration):
            raise ServerConfigurationError("configuration must be a ServerConfiguration")
        if not self.orientdb_home:
            raise ServerConfigurationError(
                "OrientDB home is not set. Pass orientdb_home or set ORIENTDB_HOME"
            )
        lib_dir = Path(self.orientdb_home) / "lib"
        if not lib_dir.is_dir():
            raise ServerConfigurationError(f"OrientDB lib directory not found: {lib_dir}")

        if self.work_dir is None:
            self.work_dir = Path(tempfile.mkdtemp(prefix="orientdb-"))
            self._owns_work_dir = True
        self.work_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(configuration.to_xml(), encoding="utf-8")
        self._configuration = configuration
        logger.debug(f"Wrote server configuration to {self.config_file}")

    def _build_command(self) -> list:
        home = Path(self.orientdb_home)
        classpath = os.path.join(str(home / "lib"), "*")
        return [
            self.java_executable,
            "-cp", classpath,
            f"-DORIENTDB_HOME={home}",
            f"-Dorientdb.config.file={self.config_file}",
            SERVER_MAIN_CLASS,
        ]

    def activate(self) -> None:
        """
        Launch the server process and block until it reports activation.

        Raises:
            ServerConfigurationError: If startup() has not been called
            DatabaseConnectionError: If the process exits before activation
        """
        if self._configuration is None:
            raise ServerConfigurationError("startup() must be called before activate()")
        if self.is_active:
            return

        # a previous process may have exited without shutdown()
        self._process = None
        self._close_log()
        self._log_handle = open(self.log_file, "wb")
        try:
            self._process = subprocess.Popen(
                self._build_command(),
                cwd=str(self.work_dir),
                stdout=self._log_handle,
                stderr=subprocess.STDOUT,
            )
        except OSError:
            self._close_log()
            raise
        logger.debug(f"Launched OrientDB server process {self._process.pid}")

        while True:
            if self._log_reports_active():
                logger.info(f"OrientDB server {self._process.pid} is active")
                return
            exit_code = self._process.poll()
            if exit_code is not None:
                self._close_log()
                logger.error(f"OrientDB server exited with code {exit_code} before activation")
                raise DatabaseConnectionError(
                    f"OrientDB server exited with code {exit_code} before activation; "
                    f"see {self.log_file}",
                    exit_code=exit_code
                )
            time.sleep(self.poll_interval)

    def _log_reports_active(self) -> bool:
        try:
            content = self.log_file.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return False
        return ACTIVATION_MARKER in content

    def _close_log(self) -> None:
        if self._log_handle is not None:
            self._log_handle.close()
            self._log_handle = None

    def shutdown(self) -> None:
        """
        Stop the server process. Calling it again is a no-op.

        A work directory created by startup() is removed as well, after
        which startup() must be called again before activate().
        """
        if self._process is not None and self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=self.shutdown_grace_period)
            except subprocess.TimeoutExpired:
                logger.warning(f"OrientDB server {self._process.pid} did not stop, killing it")
                self._process.kill()
                self._process.wait()
            logger.info(f"OrientDB server {self._process.pid} shut down")
        self._process = None
        self._close_log()
        if self._owns_work_dir:
            shutil.rmtree(self.work_dir, ignore_errors=True)
            self.work_dir = None
            self._owns_work_dir = False
            self._configuration = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()


def create_server(**options) -> EmbeddedServer:
    """Create an unstarted server handle. Options go to EmbeddedServer."""
    return EmbeddedServer(**options)


def start_embedded_server(
    username: Optional[str],
    password: Optional[str],
    port_range: Optional[str] = None,
    **server_options
) -> EmbeddedServer:
    """
    Start an embedded OrientDB server.

    Args:
        username: Account to register on the server
        password: Password of that account
        port_range: Port range the server listens on (default "2424-2430")
        **server_options: Passed to EmbeddedServer (orientdb_home,
            java_executable, work_dir)

    Returns:
        EmbeddedServer: The active server

    Raises:
        MissingArgumentError: If username or password is missing
        ServerConfigurationError: If the server cannot be configured
        DatabaseConnectionError: If the server exits before activation
    """
    logger.debug("Starting embedded OrientDB server")
    require_not_none(username, "Username must be specified")
    require_not_none(password, "Password must be specified")
    if port_range is None:
        port_range = DEFAULT_BINARY_PROTOCOL_PORTRANGE

    configuration = build_server_configuration(username, password, port_range)
    server = create_server(**server_options)
    server.startup(configuration)
    server.activate()
    return server
