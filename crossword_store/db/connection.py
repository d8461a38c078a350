"""Database connection management"""

import logging
from contextlib import contextmanager
from typing import Optional, Iterator

from psycopg2.pool import ThreadedConnectionPool, AbstractConnectionPool

from ..config import Config
from ..errors import InternalError

logger = logging.getLogger(__name__)

# Process-wide pool for command-line entry points
_pool: Optional[ThreadedConnectionPool] = None


def create_pool(minconn: Optional[int] = None, maxconn: Optional[int] = None) -> ThreadedConnectionPool:
    """Create a thread-safe connection pool from Config"""
    minconn = Config.DB_POOL_MIN if minconn is None else minconn
    maxconn = Config.DB_POOL_MAX if maxconn is None else maxconn
    try:
        pool = ThreadedConnectionPool(minconn, maxconn, **Config.get_db_params())
        logger.info(f"Database connection pool created ({minconn}-{maxconn} connections)")
        return pool
    except Exception as e:
        logger.error(f"Failed to create connection pool: {e}")
        raise


def init_pool(minconn: Optional[int] = None, maxconn: Optional[int] = None) -> ThreadedConnectionPool:
    """Initialize the process-wide connection pool"""
    global _pool
    if _pool is None:
        _pool = create_pool(minconn, maxconn)
    return _pool


def get_pool() -> ThreadedConnectionPool:
    """Get the process-wide pool, initializing it on first use"""
    if _pool is None:
        return init_pool()
    return _pool


def close_all_connections() -> None:
    """Close all connections in the process-wide pool"""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("All database connections closed")


@contextmanager
def pooled_connection(pool: AbstractConnectionPool) -> Iterator:
    """
    Borrow a connection for the duration of a block

    The connection is rolled back if the block raises and is always
    returned to the pool. A failure to return it is logged, not raised.

    Raises:
        InternalError: If no connection can be acquired
    """
    try:
        conn = pool.getconn()
    except Exception as e:
        logger.error(f"Failed to get connection from pool: {e}")
        raise InternalError(f"Could not acquire database connection: {e}") from e

    try:
        yield conn
    except BaseException:
        try:
            conn.rollback()
        except Exception as e:
            logger.warning(f"Rollback failed: {e}")
        raise
    finally:
        # A failed release must not replace the block's own outcome
        try:
            pool.putconn(conn)
        except Exception as e:
            logger.warning(f"Failed to return connection to pool: {e}")


def check_connection(pool: AbstractConnectionPool) -> bool:
    """Test database connectivity"""
    try:
        with pooled_connection(pool) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            result = cursor.fetchone()
            cursor.close()
        logger.info("Database connection test successful")
        return result[0] == 1
    except Exception as e:
        logger.error(f"Database connection test failed: {e}")
        return False
