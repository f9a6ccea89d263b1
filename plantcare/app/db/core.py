import logging
import os
import time
from contextlib import contextmanager

import pymysql

from ..errors import PersistenceFailure

__all__ = [
    "get_conn",
    "connect",
    "store_cursor",
]


def get_conn():
    """Create and return a new PyMySQL connection (autocommit enabled).

    Pings the connection (with reconnect) before returning it and retries once
    on transient connection errors. A second failure is raised to the caller.
    """
    host = os.getenv("DB_HOST", "db")
    user = os.getenv("DB_USER", "appuser")
    password = os.getenv("DB_PASSWORD", "apppass")
    # When TEST_MODE=1 and DB_NAME is not set, default to the test database.
    test_mode = os.getenv("TEST_MODE") == "1"
    database = os.getenv("DB_NAME") or ("plantcare_test" if test_mode else "plantcare")

    for attempt in range(2):
        try:
            conn = pymysql.connect(
                host=host,
                user=user,
                password=password,
                database=database,
                autocommit=True,
                connect_timeout=int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
                read_timeout=int(os.getenv("DB_READ_TIMEOUT", "10")),
                write_timeout=int(os.getenv("DB_WRITE_TIMEOUT", "10")),
                charset="utf8mb4",
                use_unicode=True,
            )
            try:
                conn.ping(reconnect=True)
            except Exception:
                conn.close()
                raise
            return conn
        except Exception as e:
            logging.error(f"Error connecting to DB: {e}")
            if attempt == 0:
                time.sleep(0.2)
                continue
            raise


@contextmanager
def connect(conn_factory=None):
    """Context manager that yields a DB connection and closes it afterwards."""
    conn = (conn_factory or get_conn)()
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def store_cursor(conn_factory, failure_message: str):
    """Yield a cursor on a fresh connection.

    Driver errors (including failing to connect) are logged and re-raised as
    PersistenceFailure. Other exceptions, e.g. NotFound, pass through untouched.
    """
    try:
        with connect(conn_factory) as conn:
            with conn.cursor() as cur:
                yield cur
    except pymysql.MySQLError as e:
        logging.error(f"{failure_message}: {e}")
        raise PersistenceFailure(failure_message) from e
