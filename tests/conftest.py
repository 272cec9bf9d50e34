#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for the test suite.

This module provides fake OrientDB installations and process doubles so
the embedded server can be exercised without a JVM.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for all tests
sys.path.insert(0, '.')

from orientdb_utils.database.embedded_server import ACTIVATION_MARKER


# ================================
# Core Fixtures
# ================================

@pytest.fixture
def orientdb_home(tmp_path) -> Path:
    """A directory laid out like an OrientDB server distribution."""
    home = tmp_path / "orientdb"
    (home / "lib").mkdir(parents=True)
    return home


@pytest.fixture
def server_options(orientdb_home, tmp_path) -> dict:
    """Options for EmbeddedServer pointing at the fake installation."""
    return {
        "orientdb_home": str(orientdb_home),
        "java_executable": "java",
        "work_dir": str(tmp_path / "work"),
    }


def make_process(exit_code=None, pid=4242):
    """Build a Popen double whose poll() returns exit_code."""
    process = MagicMock()
    process.pid = pid
    process.poll.return_value = exit_code
    process.wait.return_value = 0
    return process


@pytest.fixture
def activating_popen():
    """
    Popen replacement that writes the activation line to the server log.

    The created process double is exposed as ``activating_popen.process``.
    """
    process = make_process()

    def fake_popen(command, cwd=None, stdout=None, stderr=None):
        stdout.write(f"INFO {ACTIVATION_MARKER} v3.2.0\n".encode("utf-8"))
        stdout.flush()
        return process

    fake = MagicMock(side_effect=fake_popen)
    fake.process = process
    return fake


@pytest.fixture
def failing_popen():
    """Popen replacement whose process exits with code 1 straight away."""
    return MagicMock(return_value=make_process(exit_code=1))


@pytest.fixture
def real_orientdb_home():
    """ORIENTDB_HOME of a real installation; skips the test when unset."""
    home = os.environ.get("ORIENTDB_HOME")
    if not home or not os.path.isdir(os.path.join(home, "lib")):
        pytest.skip("ORIENTDB_HOME not set to an OrientDB installation")
    return home
