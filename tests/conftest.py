import sqlite3

import psycopg2
import pytest

from tests.connection import open_test_connection, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_DATABASE, \
    DEFAULT_USER, DEFAULT_PASSWORD


@pytest.fixture
def pg_conn():
    try:
        conn = open_test_connection()
    except psycopg2.OperationalError:
        pytest.skip(
            """It seems the test database is inaccessible.
            Default connection settings are:
              host="{}", port={}, database="{}", user="{}", password="{}".
            You can set your own settings in .env file in the root of the project.
            Example:
              PYTEST_CONN_HOST=<paste your address>
              PYTEST_CONN_PORT=<paste your port>
              PYTEST_CONN_DATABASE=<paste your database name>
              PYTEST_CONN_USER=<paste your user>
              PYTEST_CONN_PASSWORD=<paste your password>
            """.format(DEFAULT_HOST, DEFAULT_PORT, DEFAULT_DATABASE, DEFAULT_USER, DEFAULT_PASSWORD)
        )
    try:
        yield conn
    finally:
        conn.rollback()
        conn.close()


@pytest.fixture
def sqlite_conn():
    conn = sqlite3.connect(':memory:')
    try:
        yield conn
    finally:
        conn.close()
