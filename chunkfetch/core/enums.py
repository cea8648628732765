"""Core enumerations and data-source limit presets.

Architecture:
    Data sources cap how many values one query may carry, either as an
    IN-list length limit or as a total bind-parameter limit. This module
    collects the well-known caps so callers can size chunks from a named
    preset instead of a magic number.

Key Types:
    - DataSourceLimit: Per-query list/parameter caps of common databases

See Also:
    - ChunkPolicy: Consumes the chunk size derived here
"""

from enum import IntEnum

from .exceptions import ConfigurationError

DEFAULT_CHUNK_SIZE = 1000


class DataSourceLimit(IntEnum):
    """Maximum number of values a single query may carry."""

    ORACLE_IN_LIST = 1000  # ORA-01795
    SQLSERVER_PARAMETERS = 2100
    SQLITE_LEGACY_VARIABLES = 999  # SQLITE_MAX_VARIABLE_NUMBER before 3.32
    SQLITE_VARIABLES = 32766
    POSTGRESQL_PARAMETERS = 65535
    MYSQL_PLACEHOLDERS = 65535


def chunk_size_for(limit: int, reserved: int = 0) -> int:
    """Derive a chunk size from a data-source limit.

    Args:
        limit: Per-query cap (a DataSourceLimit or plain int)
        reserved: Parameters the rest of the query already uses

    Returns:
        Number of filter values that fit in one query

    Raises:
        ConfigurationError: If the reservation leaves no room for values

    Examples:
        >>> chunk_size_for(DataSourceLimit.SQLSERVER_PARAMETERS, reserved=3)
        2097
    """
    if reserved < 0:
        raise ConfigurationError("reserved must not be negative", field="reserved")
    size = int(limit) - reserved
    if size < 1:
        raise ConfigurationError(
            f"limit {int(limit)} leaves no room for values after reserving {reserved}",
            field="reserved",
        )
    return size
