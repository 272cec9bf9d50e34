#!/usr/bin/env python3
"""
OrientDB Utilities Demonstration

This script demonstrates:

1. Engine lookup from free-form names
2. Connection URL building and its validation errors
3. Embedded server configuration assembly
4. Starting an embedded server (only when ORIENTDB_HOME is set)

Run with: python examples/database_demo.py
"""

import os
import sys

# Add parent directory to path to import orientdb_utils
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from orientdb_utils.database import (
    DatabaseConnectionError,
    InvalidFormatError,
    MissingArgumentError,
    build_database_url,
    build_server_configuration,
    start_embedded_server,
)
from orientdb_utils.models import Engine


def demo_engines():
    """Demonstrate engine lookup."""
    print("\n" + "="*50)
    print("🔧 Engine Lookup Demo")
    print("="*50)

    for name in ["plocal", "REMOTE", "memory"]:
        engine = Engine.from_string(name)
        print(f"   {name!r:10} -> {engine.name if engine else None}")


def demo_urls():
    """Demonstrate URL building."""
    print("\n" + "="*50)
    print("🔗 URL Building Demo")
    print("="*50)

    print(f"   {build_database_url('db1', Engine.PLOCAL, None, None, 'target/dbs')}")
    print(f"   {build_database_url('db1', Engine.REMOTE, 'localhost', None, None)}")
    print(f"   {build_database_url('db1', Engine.REMOTE, 'localhost', '2424-2430', '/')}")

    print("\n⚠️  Validation errors...")
    try:
        build_database_url("db1", Engine.REMOTE, None)
    except MissingArgumentError as e:
        print(f"   MissingArgumentError: {e}")
    try:
        build_database_url("db1", Engine.REMOTE, "localhost", "A123")
    except InvalidFormatError as e:
        print(f"   InvalidFormatError: {e} (cause: {e.__cause__})")


def demo_server():
    """Demonstrate server configuration and startup."""
    print("\n" + "="*50)
    print("🖥️  Embedded Server Demo")
    print("="*50)

    configuration = build_server_configuration("demo", "demopassword", "2424-2430")
    print(configuration.to_xml())

    if not os.getenv("ORIENTDB_HOME"):
        print("⏭️  ORIENTDB_HOME not set, skipping server startup")
        return

    try:
        with start_embedded_server("demo", "demopassword", "2424-2430") as server:
            print(f"✅ Server active (pid {server.pid}), log at {server.log_file}")
            print(f"   Connect with: {build_database_url('db1', Engine.REMOTE, 'localhost', '2424', None)}")
        print("🛑 Server shut down")
    except DatabaseConnectionError as e:
        print(f"❌ Server failed to start: {e}")


def main():
    print("🚀 OrientDB Utilities Demo")
    demo_engines()
    demo_urls()
    demo_server()


if __name__ == "__main__":
    main()
