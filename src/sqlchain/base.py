"""
Defines the rendering protocol and `BaseCommand`, the base type for every statement builder.
"""

import copy

from .errors import SqlBuildError, RunnerNotSetError, NotQueryRunnerError, NoContextSupportError
from .expr import Expr, Sqlizer, nested_to_sql
from .placeholder import QUESTION
from . import runner as runners


class BuildContext:
    """
    Collects bound arguments while a statement is rendered left to right.
    """

    def __init__(self):
        self.args = []

    def set_param(self, value):
        """Bind a new argument. Return its placeholder."""
        self.args.append(value)
        return '?'

    def build(self, sqlizer):
        """Render a nested fragment and take over its arguments."""
        sql, args = nested_to_sql(sqlizer)
        self.args.extend(args)
        return sql

    def join(self, sqlizers, sep):
        """Render fragments one by one and glue non-empty results with `sep`."""
        res = [self.build(s) for s in sqlizers]
        return sep.join(x for x in res if x)


class BaseCommand(Sqlizer):
    """
    The base class for all statement builders.
    Builders are immutable values: every chained method returns a new builder and
    leaves the original one untouched. Slots holding several parts are tuples.
    """

    def __init__(self, placeholder_format=QUESTION, runner=None):
        """Create a new object."""
        self._placeholder_format = placeholder_format
        self._runner = None
        self._prefixes = ()
        self._suffixes = ()
        if runner is not None:
            self._runner = runners.wrap_runner(runner)

    def _replace(self, **slots):
        """Return a copy of the builder with the given slots replaced."""
        res = copy.copy(self)
        for name, value in slots.items():
            setattr(res, '_' + name, value)
        return res

    def placeholder_format(self, fmt):
        """
        Set the placeholder format (e.g. QUESTION or DOLLAR) for the statement.
        :param fmt: `PlaceholderFormat` member
        :return: a new builder
        """
        return self._replace(placeholder_format=fmt)

    def get_placeholder_format(self):
        """Return the current placeholder format."""
        return self._placeholder_format

    def prefix(self, sql, *args):
        """
        Add an expression to the beginning of the statement.
        Example:
            prefix('WITH prefix AS ?', 0) => WITH prefix AS ? SELECT ...
        """
        return self.prefix_expr(Expr(sql, *args))

    def prefix_expr(self, expr):
        """Add a fragment to the very beginning of the statement."""
        return self._replace(prefixes=self._prefixes + (expr,))

    def suffix(self, sql, *args):
        """
        Add an expression to the end of the statement.
        Example:
            suffix('RETURNING ?', 5) => ... RETURNING ?
        """
        return self.suffix_expr(Expr(sql, *args))

    def suffix_expr(self, expr):
        """Add a fragment to the very end of the statement."""
        return self._replace(suffixes=self._suffixes + (expr,))

    def to_sql(self):
        """
        Render the statement and rewrite its placeholders to the chosen format.
        Raises a `SqlBuildError` subclass when the statement cannot be rendered.
        :return: tuple (sql, args)
        """
        sql, args = self.to_sql_raw()
        return self._placeholder_format.replace_placeholders(sql), args

    def to_sql_raw(self):
        """Render the statement keeping `?` markers as they are."""
        ctx = BuildContext()
        sql = self._on_build_query(ctx)
        return sql, ctx.args

    def must_sql(self):
        """
        Same as `to_sql`, but a build error is turned into `RuntimeError`.
        :return: tuple (sql, args)
        """
        try:
            return self.to_sql()
        except SqlBuildError as exc:
            raise RuntimeError(str(exc)) from exc

    def _on_build_query(self, ctx):
        raise NotImplementedError

    @staticmethod
    def _join_query(parts):
        return ' '.join(p for p in parts if p)

    def _build_query_prefixes(self, ctx):
        if not self._prefixes:
            return None
        return ctx.join(self._prefixes, ' ')

    def _build_query_suffixes(self, ctx):
        if not self._suffixes:
            return None
        return ctx.join(self._suffixes, ' ')

    # Runner methods

    def run_with(self, runner):
        """
        Set a runner to be used with `exec_`, `query`, `query_row` and `scan`.
        For most cases the runner is a DB-API connection; it is wrapped into `ConnRunner`.
        :return: a new builder
        """
        return self._replace(runner=runners.wrap_runner(runner))

    def exec_(self):
        """Execute the statement. Return whatever the runner returns (a cursor for `ConnRunner`)."""
        if self._runner is None:
            raise RunnerNotSetError()
        return runners.exec_with(self._runner, self)

    def query(self):
        """Execute the statement and return the rows source given by the runner."""
        if self._runner is None:
            raise RunnerNotSetError()
        return runners.query_with(self._runner, self)

    def query_row(self):
        """Execute the statement and return a row scanner."""
        if self._runner is None:
            raise RunnerNotSetError()
        if not runners.is_query_rower(self._runner):
            raise NotQueryRunnerError()
        return runners.query_row_with(self._runner, self)

    def scan(self):
        """Shortcut for `query_row().scan()`."""
        return self.query_row().scan()

    def exec_context(self, ctx):
        """Context variant of `exec_`. `ctx` is passed through to the runner."""
        if self._runner is None:
            raise RunnerNotSetError()
        if not runners.is_execer_context(self._runner):
            raise NoContextSupportError()
        return runners.exec_context_with(ctx, self._runner, self)

    def query_context(self, ctx):
        """Context variant of `query`."""
        if self._runner is None:
            raise RunnerNotSetError()
        if not runners.is_queryer_context(self._runner):
            raise NoContextSupportError()
        return runners.query_context_with(ctx, self._runner, self)

    def query_row_context(self, ctx):
        """Context variant of `query_row`."""
        if self._runner is None:
            raise RunnerNotSetError()
        if not runners.is_query_rower_context(self._runner):
            if not runners.is_queryer_context(self._runner):
                raise NotQueryRunnerError()
            raise NoContextSupportError()
        return runners.query_row_context_with(ctx, self._runner, self)

    def scan_context(self, ctx):
        """Shortcut for `query_row_context(ctx).scan()`."""
        return self.query_row_context(ctx).scan()
