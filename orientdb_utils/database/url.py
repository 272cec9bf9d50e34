"""
Connection URL building for OrientDB.

URLs have the shape ``<engine>:[<hostname>[:<port>]]<path>/<database>``.
The host and port are only present for the remote engine.
"""

from typing import Optional

from ..models.engine import Engine
from .base import InvalidFormatError, require_not_none


_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1


def parse_port(port_range: str) -> int:
    """
    Parse the low bound of a port range.

    Follows Java Integer.parseInt: an optional sign and decimal digits
    (any Unicode decimal digits), nothing else, within 32-bit range.

    Args:
        port_range: A single port ("2424") or a range ("2424-2430")

    Returns:
        int: The port before the first '-', or the whole value if there is none

    Raises:
        InvalidFormatError: If that part is not an integer
    """
    low = port_range.split("-", 1)[0]
    try:
        digits = low[1:] if low[:1] in ("+", "-") else low
        if not (digits and digits.isdecimal()):
            raise ValueError(f"invalid literal for port: '{low}'")
        port = int(low)
        if not _INT_MIN <= port <= _INT_MAX:
            raise ValueError(f"port out of range: '{low}'")
    except ValueError as e:
        raise InvalidFormatError(
            "portRange must be a string representing an integer value or an integer range"
        ) from e
    return port


def build_database_url(
    database_name: Optional[str],
    engine: Optional[Engine],
    hostname: Optional[str] = None,
    port_range: Optional[str] = None,
    database_path: Optional[str] = None
) -> str:
    """
    Build a URL that can be used to connect to OrientDB.

    Args:
        database_name: Name of the database
        engine: Engine to connect with
        hostname: Server hostname, required for the remote engine only
        port_range: Server port or port range; only the low bound is used
        database_path: Path prefix of the database, "/" when omitted

    Returns:
        str: The formatted connection URL

    Raises:
        MissingArgumentError: If database_name or engine is missing, or
            hostname is missing for the remote engine
        InvalidFormatError: If port_range is not an integer or integer range
    """
    require_not_none(database_name, "A databaseName must be provided")
    require_not_none(engine, "An engine must be provided")

    parts = [engine.to_string_value(), ":"]
    if engine is Engine.REMOTE:
        require_not_none(hostname, "When remote engine is used, a hostname must be provided")
        parts.append(hostname)
        if port_range is not None:
            parts.append(f":{parse_port(port_range)}")

    if database_path is not None:
        parts.append(database_path)
        if not database_path.endswith("/"):
            parts.append("/")
    else:
        parts.append("/")

    parts.append(database_name)
    return "".join(parts)
