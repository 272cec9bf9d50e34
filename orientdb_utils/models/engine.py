"""
Engine enumeration for OrientDB connection URLs.

The engine token is used both as the URL scheme prefix and as the value
matched when an engine is looked up from free-form text.
"""

from enum import Enum
from typing import Optional


class Engine(str, Enum):
    """Supported OrientDB engines."""
    PLOCAL = "plocal"  # paged local
    REMOTE = "remote"

    def to_string_value(self) -> str:
        """Return the lowercase token for this engine."""
        return self.value

    @classmethod
    def from_string(cls, engine_name: Optional[str]) -> Optional["Engine"]:
        """
        Look up an engine by its token, ignoring case.

        Args:
            engine_name: Engine token such as "plocal" or "REMOTE"

        Returns:
            Optional[Engine]: The matching engine, None if nothing matches
        """
        if engine_name is None:
            return None
        for engine in cls:
            if engine_name.lower() == engine.value:
                return engine
        return None

    def __str__(self) -> str:
        return self.value
