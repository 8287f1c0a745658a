"""
Exceptions raised by the query builders and the runners.
psycopg2 errors are redeclared here as well. The module serves as a facade, so
driver failures coming through the runners can be caught without importing the driver.
For docs of the driver errors please refer to the psycopg2 documentation
"""

import psycopg2

Error = psycopg2.Error
InterfaceError = psycopg2.InterfaceError
DatabaseError = psycopg2.DatabaseError
DataError = psycopg2.DataError
OperationalError = psycopg2.OperationalError
IntegrityError = psycopg2.IntegrityError
InternalError = psycopg2.InternalError
ProgrammingError = psycopg2.ProgrammingError
NotSupportedError = psycopg2.NotSupportedError


class SqlChainError(Exception):
    """Base class for every error raised by sqlchain itself."""


class SqlBuildError(SqlChainError):
    """A statement or a fragment cannot be rendered to SQL."""


class NoTableError(SqlBuildError):
    """The statement omits its target table."""


class NoColumnsError(SqlBuildError):
    """SELECT has no result column."""


class NoValuesError(SqlBuildError):
    """INSERT has neither VALUES rows nor a SELECT source."""


class NoSetError(SqlBuildError):
    """UPDATE has no SET clause."""


class EmptyWhenError(SqlBuildError):
    """CASE has no WHEN clause."""


class InvalidSqlError(SqlBuildError):
    """
    Malformed raw expression, predicate of unsupported type or a mismatch
    between placeholders and arguments.
    """


class RunnerError(SqlChainError):
    """Base class for execution errors."""


class RunnerNotSetError(RunnerError):
    """Execution was requested but no runner was given with `run_with`."""

    def __init__(self, message='cannot run; no runner set (run_with)'):
        super().__init__(message)


class NotQueryRunnerError(RunnerError):
    """The runner cannot return rows."""

    def __init__(self, message='cannot query_row; runner is not a query_row runner'):
        super().__init__(message)


class NoContextSupportError(RunnerError):
    """The runner has no context-aware variant of the requested method."""

    def __init__(self, message='runner does not support context variants'):
        super().__init__(message)
