from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from crossword_store.db import CrosswordRepository


@pytest.fixture()
def cursor():
    cur = MagicMock(name="cursor")
    cur.fetchall.return_value = []
    cur.fetchone.return_value = None
    return cur


@pytest.fixture()
def conn(cursor):
    connection = MagicMock(name="connection")
    connection.cursor.return_value = cursor
    return connection


@pytest.fixture()
def pool(conn):
    """Fake psycopg2 pool handing out a single mock connection"""
    fake = MagicMock(name="pool")
    fake.getconn.return_value = conn
    return fake


@pytest.fixture()
def executor():
    ex = ThreadPoolExecutor(max_workers=2)
    yield ex
    ex.shutdown(wait=True)


@pytest.fixture()
def repository(pool, executor):
    return CrosswordRepository(pool, executor=executor)


def guardian_document(crossword_id="crosswords/cryptic/29000"):
    return {
        "id": crossword_id,
        "number": 29000,
        "name": "Cryptic crossword No 29,000",
        "creator": {"name": "Paul", "webUrl": "https://www.theguardian.com/profile/paul"},
        "date": 1704067200000,
        "webPublicationDate": 1704067200000,
        "entries": [
            {
                "id": "1-across",
                "number": 1,
                "humanNumber": "1",
                "clue": "Bird in a tree (5)",
                "direction": "across",
                "length": 5,
                "group": ["1-across"],
                "position": {"x": 0, "y": 0},
                "separatorLocations": {},
                "solution": "ROBIN",
            }
        ],
        "solutionAvailable": True,
        "dateSolutionAvailable": 1704153600000,
        "dimensions": {"cols": 15, "rows": 15},
        "crosswordType": "cryptic",
        "pdf": "https://crosswords-static.guim.co.uk/gdn.cryptic.20240101.pdf",
    }
