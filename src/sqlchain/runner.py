"""
Runners execute rendered statements. A runner is any object providing some of
the following methods, each taking the SQL text followed by the bound arguments:
 * `exec_(sql, *args)` - execute a statement
 * `query(sql, *args)` - execute a statement returning rows
 * `query_row(sql, *args)` - execute a statement and return a row scanner (`scan()` method)
Context variants `exec_context`, `query_context` and `query_row_context` take an
opaque context object (cancellation, deadline, ...) as the first argument.
"""

import logging

logger = logging.getLogger('sqlchain')

__all__ = (
    'exec_with',
    'query_with',
    'query_row_with',
    'exec_context_with',
    'query_context_with',
    'query_row_context_with',
    'wrap_runner',
    'is_query_rower',
    'is_execer_context',
    'is_queryer_context',
    'is_query_rower_context',
)


def _has(runner, method):
    return callable(getattr(runner, method, None))


def is_query_rower(runner):
    return _has(runner, 'query_row')


def is_execer_context(runner):
    return _has(runner, 'exec_context')


def is_queryer_context(runner):
    return _has(runner, 'query_context')


def is_query_rower_context(runner):
    return _has(runner, 'query_row_context')


def wrap_runner(runner):
    """
    Return a runner for the given object. DB-API connections (objects with `cursor()`)
    are wrapped into `ConnRunner`, everything else is returned as it is.
    """
    if runner is None:
        return None
    if not _has(runner, 'exec_') and _has(runner, 'cursor'):
        from .conn import ConnRunner
        return ConnRunner(runner)
    return runner


def _render(sqlizer):
    sql, args = sqlizer.to_sql()
    logger.debug('Running %s with %d args', sql, len(args))
    return sql, args


def exec_with(runner, sqlizer):
    """Render `sqlizer` and execute it with `runner.exec_`."""
    sql, args = _render(sqlizer)
    return runner.exec_(sql, *args)


def query_with(runner, sqlizer):
    """Render `sqlizer` and execute it with `runner.query`."""
    sql, args = _render(sqlizer)
    return runner.query(sql, *args)


def query_row_with(runner, sqlizer):
    """Render `sqlizer` and execute it with `runner.query_row`."""
    sql, args = _render(sqlizer)
    return runner.query_row(sql, *args)


def exec_context_with(ctx, runner, sqlizer):
    """Render `sqlizer` and execute it with `runner.exec_context`."""
    sql, args = _render(sqlizer)
    return runner.exec_context(ctx, sql, *args)


def query_context_with(ctx, runner, sqlizer):
    """Render `sqlizer` and execute it with `runner.query_context`."""
    sql, args = _render(sqlizer)
    return runner.query_context(ctx, sql, *args)


def query_row_context_with(ctx, runner, sqlizer):
    """Render `sqlizer` and execute it with `runner.query_row_context`."""
    sql, args = _render(sqlizer)
    return runner.query_row_context(ctx, sql, *args)
