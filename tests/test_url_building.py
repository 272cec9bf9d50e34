"""
Connection URL Building Tests

Tests for the Engine enumeration and build_database_url.
"""

import pytest

from orientdb_utils.database import (
    InvalidFormatError,
    MissingArgumentError,
    build_database_url,
    parse_port,
)
from orientdb_utils.models import Engine

DB_NAME = "validDatabaseName"
DB_HOSTNAME = "localhost"
DB_PORT = "7654"


class TestEngine:
    """Test engine lookup and tokens."""

    def test_engine_tokens(self):
        """Test each engine carries its lowercase token."""
        assert Engine.PLOCAL.to_string_value() == "plocal"
        assert Engine.REMOTE.to_string_value() == "remote"
        assert len(list(Engine)) == 2

    @pytest.mark.parametrize("engine", list(Engine))
    def test_from_string_any_casing(self, engine):
        """Test lookup by token ignores case."""
        assert Engine.from_string(engine.value) is engine
        assert Engine.from_string(engine.value.upper()) is engine
        assert Engine.from_string(engine.value.capitalize()) is engine
        assert Engine.from_string(engine.name) is engine

    def test_from_string_no_match(self):
        """Test unknown names return None rather than raising."""
        assert Engine.from_string("invalidEngine") is None
        assert Engine.from_string("") is None
        assert Engine.from_string(" remote ") is None
        assert Engine.from_string(None) is None

    def test_lookup_by_member_name(self):
        """Test lookup by member name keeps standard enum behavior."""
        for engine in Engine:
            assert Engine[engine.name] is engine
        with pytest.raises(KeyError):
            Engine["invalidEngine"]

    @pytest.mark.parametrize("engine", list(Engine))
    def test_every_engine_builds_url(self, engine):
        """Test a URL can be built for every engine."""
        url = build_database_url(DB_NAME, engine, DB_HOSTNAME, DB_PORT, "/validPath")
        assert url.startswith(engine.value + ":")
        assert url.endswith("/validPath/" + DB_NAME)


class TestRequiredArguments:
    """Test missing-argument validation."""

    def test_database_name_required(self):
        """Test database name is checked first."""
        with pytest.raises(MissingArgumentError, match="databaseName must be provided"):
            build_database_url(None, None, None, None, None)

    def test_engine_required(self):
        """Test engine must be provided."""
        with pytest.raises(MissingArgumentError, match="engine must be provided"):
            build_database_url(DB_NAME, None, None, None, None)

    def test_missing_argument_is_value_error(self):
        """Test callers guarding on ValueError still catch it."""
        with pytest.raises(ValueError):
            build_database_url(DB_NAME, None)

    @pytest.mark.parametrize("engine", list(Engine))
    def test_hostname_only_required_for_remote(self, engine):
        """Test hostname may be None unless the engine is remote."""
        if engine is Engine.REMOTE:
            with pytest.raises(MissingArgumentError, match="hostname must be provided"):
                build_database_url(DB_NAME, engine, None, DB_PORT, "/")
        else:
            assert build_database_url(DB_NAME, engine, None, DB_PORT, "/") == "plocal:/" + DB_NAME

    def test_plocal_ignores_host_and_port(self):
        """Test non-remote URLs never contain a host or port segment."""
        url = build_database_url(DB_NAME, Engine.PLOCAL, DB_HOSTNAME, "not-a-port", "/data")
        assert url == "plocal:/data/" + DB_NAME


class TestPortRange:
    """Test port range handling for the remote engine."""

    def test_no_port_range(self):
        """Test a None port range omits the port segment."""
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, None, "/")
        assert url == "remote:" + DB_HOSTNAME + "/" + DB_NAME

    def test_single_port(self):
        """Test a single integer port."""
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, "7654", "/")
        assert url == "remote:" + DB_HOSTNAME + ":7654/" + DB_NAME

    def test_port_range_uses_low_bound(self):
        """Test only the low bound of a range is used."""
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, "7654-9098", "/")
        assert url == "remote:" + DB_HOSTNAME + ":7654/" + DB_NAME

    @pytest.mark.parametrize("port_range", [
        "A123", "-1234", "", " 7654", "76.54", "7654\n", "7654\n-9098", "+", "\u00b2"
    ])
    def test_invalid_port_range(self, port_range):
        """Test unparseable port ranges raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError,
                           match="portRange must be a string representing an integer"):
            build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, port_range, "/")

    def test_invalid_port_range_keeps_cause(self):
        """Test the parse failure is attached as the cause."""
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_port("A123")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_parse_port(self):
        """Test parsing of single ports and ranges."""
        assert parse_port("2424") == 2424
        assert parse_port("2424-2430") == 2424
        assert parse_port("+2424") == 2424

    def test_parse_port_unicode_digits(self):
        """Test non-ASCII decimal digits parse like Java Integer.parseInt."""
        assert parse_port("\u0667\u0666\u0665\u0664") == 7654
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, "\u0667\u0666\u0665\u0664-9098", "/")
        assert url == "remote:" + DB_HOSTNAME + ":7654/" + DB_NAME


class TestDatabasePath:
    """Test path segment normalization."""

    def test_no_path_defaults_to_slash(self):
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, DB_PORT, None)
        assert url == "remote:" + DB_HOSTNAME + ":" + DB_PORT + "/" + DB_NAME

    def test_path_with_trailing_slash(self):
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, DB_PORT, "validPath/")
        assert url == "remote:" + DB_HOSTNAME + ":" + DB_PORT + "validPath/" + DB_NAME

    def test_path_without_trailing_slash(self):
        url = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, DB_PORT, "validPath")
        assert url == "remote:" + DB_HOSTNAME + ":" + DB_PORT + "validPath/" + DB_NAME

    def test_trailing_slash_normalization_is_identical(self):
        """Test paths with and without a trailing slash give the same URL."""
        with_slash = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, DB_PORT, "p/")
        without_slash = build_database_url(DB_NAME, Engine.REMOTE, DB_HOSTNAME, DB_PORT, "p")
        assert with_slash == without_slash == "remote:" + DB_HOSTNAME + ":7654p/" + DB_NAME

    def test_plocal_path(self):
        url = build_database_url("db1", Engine.PLOCAL, None, None, "target/dbs")
        assert url == "plocal:target/dbs/db1"
