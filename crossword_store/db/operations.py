"""Database operations for stored crosswords"""

import asyncio
import json
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial
from typing import Optional, List, Sequence

from psycopg2.extras import execute_values

from ..config import Config
from ..errors import CrosswordNotFound, InternalError
from ..models import Crossword, CrosswordMetadata, GuardianCrossword, InsertableCrossword
from .connection import pooled_connection

logger = logging.getLogger(__name__)


class CrosswordRepository:
    """
    Reads and writes the crossword table

    Every operation borrows one connection from the given pool, runs a
    single statement on a worker thread and returns the connection before
    the awaiting coroutine resumes.
    """

    def __init__(self, pool, executor: Optional[Executor] = None):
        """
        Initialize the repository.

        Args:
            pool: psycopg2 connection pool (anything with getconn/putconn)
            executor: Executor for blocking calls (a bounded thread pool is
                created if not provided)
        """
        self.pool = pool
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=Config.DB_WORKERS,
            thread_name_prefix="crossword-db",
        )

    def close(self) -> None:
        """Shut down the executor if this repository created it"""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    async def _run(self, func, *args):
        """Run a blocking call on the executor and wait for it"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(func, *args))

    # =========================================================================
    # READS
    # =========================================================================

    async def get_ids_for_series(self, series: str) -> List[str]:
        """Get the ids of all crosswords in a series"""
        return await self._run(self._select_ids, series)

    def _select_ids(self, series: str) -> List[str]:
        with pooled_connection(self.pool) as conn:
            try:
                cursor = conn.cursor()
                cursor.execute("SELECT id FROM crossword WHERE series = %s", (series,))
                rows = cursor.fetchall()
                cursor.close()
            except Exception as e:
                logger.error(f"Error getting crossword ids for series {series}: {e}")
                raise InternalError(str(e)) from e

        logger.debug(f"Found {len(rows)} crosswords in series {series}")
        return [row[0] for row in rows]

    async def get_metadata_for_series(self, series: str) -> List[CrosswordMetadata]:
        """Get id, series and date of all crosswords in a series"""
        return await self._run(self._select_metadata, series)

    def _select_metadata(self, series: str) -> List[CrosswordMetadata]:
        with pooled_connection(self.pool) as conn:
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT id, series, date FROM crossword WHERE series = %s",
                    (series,)
                )
                rows = cursor.fetchall()
                cursor.close()
            except Exception as e:
                logger.error(f"Error getting crossword metadata for series {series}: {e}")
                raise InternalError(str(e)) from e

        return [CrosswordMetadata(id=row[0], series=row[1], date=row[2]) for row in rows]

    async def get_by_series_and_id(self, crossword_id: str, series: str) -> GuardianCrossword:
        """
        Get a single crossword

        Args:
            crossword_id: Crossword id
            series: Series the crossword belongs to

        Returns:
            The parsed crossword document

        Raises:
            CrosswordNotFound: If no row matches, or the lookup itself fails
            InternalError: If no connection is available or the stored
                document is not a valid Guardian crossword
        """
        document = await self._run(self._select_document, crossword_id, series)

        try:
            if isinstance(document, (str, bytes)):
                document = json.loads(document)
            return GuardianCrossword.from_dict(document)
        except ValueError as e:
            logger.error(f"Stored crossword {crossword_id} in series {series} is invalid: {e}")
            raise InternalError(str(e)) from e

    def _select_document(self, crossword_id: str, series: str):
        with pooled_connection(self.pool) as conn:
            # A failed lookup is reported the same way as a missing row
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT crossword_json FROM crossword WHERE id = %s AND series = %s",
                    (crossword_id, series)
                )
                row = cursor.fetchone()
                cursor.close()
            except Exception as e:
                logger.warning(f"Lookup of crossword {crossword_id} in series {series} failed: {e}")
                raise CrosswordNotFound(crossword_id) from e

        if row is None:
            raise CrosswordNotFound(crossword_id)
        return row[0]

    # =========================================================================
    # WRITES
    # =========================================================================

    async def store_crosswords(self, crosswords: Sequence[Crossword]) -> int:
        """
        Insert crosswords in a single statement

        No conflict handling: one duplicate id aborts the whole insert.

        Args:
            crosswords: Crosswords to insert

        Returns:
            Number of rows inserted
        """
        if not crosswords:
            return 0
        return await self._run(self._insert_crosswords, list(crosswords))

    def _insert_crosswords(self, crosswords: List[Crossword]) -> int:
        rows = [InsertableCrossword.from_crossword(c).as_row() for c in crosswords]

        with pooled_connection(self.pool) as conn:
            try:
                cursor = conn.cursor()
                execute_values(
                    cursor,
                    "INSERT INTO crossword (id, series, date, crossword_json) VALUES %s",
                    rows,
                    page_size=len(rows)
                )
                count = cursor.rowcount
                conn.commit()
                cursor.close()
            except Exception as e:
                logger.error(f"Error storing {len(rows)} crosswords: {e}")
                raise InternalError(str(e)) from e

        logger.info(f"Stored {count} crosswords")
        return count
