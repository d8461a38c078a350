"""Database access module"""

from .connection import (
    create_pool,
    init_pool,
    get_pool,
    close_all_connections,
    pooled_connection,
    check_connection,
)
from .operations import CrosswordRepository

__all__ = [
    "create_pool",
    "init_pool",
    "get_pool",
    "close_all_connections",
    "pooled_connection",
    "check_connection",
    "CrosswordRepository",
]
