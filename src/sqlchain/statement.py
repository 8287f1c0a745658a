"""
`StatementBuilder` produces statement builders sharing the same defaults:
a placeholder format, a runner and WHERE conditions.
Module-level shortcuts `select`, `insert`, `replace`, `update`, `delete` and `case`
use the default builder (QUESTION placeholders, no runner).
"""

from .case import Case
from .constants import STATEMENT_REPLACE
from .delete import Delete
from .insert import Insert
from .placeholder import QUESTION
from .query import Query
from .runner import wrap_runner
from .update import Update


class StatementBuilder:
    """
    Immutable factory of statement builders.
    Example:
        psql = StatementBuilder().placeholder_format(DOLLAR)
        psql.select('id').from_('users').where('age > ?', 18).to_sql()
            => ('SELECT id FROM users WHERE age > $1', [18])
    """
    def __init__(self, placeholder_format=QUESTION, runner=None, where_parts=()):
        self._placeholder_format = placeholder_format
        self._runner = wrap_runner(runner)
        self._where_parts = tuple(where_parts)

    def placeholder_format(self, fmt):
        """Return a new factory with the placeholder format replaced."""
        return StatementBuilder(fmt, self._runner, self._where_parts)

    def run_with(self, runner):
        """Return a new factory whose builders run with `runner`."""
        return StatementBuilder(self._placeholder_format, runner, self._where_parts)

    def where(self, pred, *args):
        """
        Return a new factory adding the condition to every SELECT, UPDATE and DELETE it creates.
        """
        return StatementBuilder(
            self._placeholder_format, self._runner, self._where_parts + ((pred, args),))

    def _seed_where(self, builder):
        for pred, args in self._where_parts:
            builder = builder.where(pred, *args)
        return builder

    def select(self, *columns):
        """Return a new SELECT builder, optionally with result columns."""
        res = Query(self._placeholder_format, self._runner).columns(*columns)
        return self._seed_where(res)

    def insert(self, into):
        """Return a new INSERT builder for the table."""
        return Insert(self._placeholder_format, self._runner).into(into)

    def replace(self, into):
        """Return a new INSERT builder with REPLACE statement keyword."""
        return Insert(self._placeholder_format, self._runner, STATEMENT_REPLACE).into(into)

    def update(self, table):
        """Return a new UPDATE builder for the table."""
        return self._seed_where(Update(self._placeholder_format, self._runner).table(table))

    def delete(self, from_):
        """Return a new DELETE builder for the table."""
        return self._seed_where(Delete(self._placeholder_format, self._runner).from_(from_))

    def case(self, *what):
        """
        Return a new CASE builder. `what` is the optional value after CASE:
        a string (with arguments for its placeholders) or a fragment.
        """
        return Case(*what).placeholder_format(self._placeholder_format)


STATEMENT_BUILDER = StatementBuilder()


def select(*columns):
    """
    Return a new SELECT builder.
    Example:
        select('id', 'name').from_('users') => SELECT id, name FROM users
    """
    return STATEMENT_BUILDER.select(*columns)


def insert(into):
    """Return a new INSERT builder."""
    return STATEMENT_BUILDER.insert(into)


def replace(into):
    """Return a new REPLACE builder."""
    return STATEMENT_BUILDER.replace(into)


def update(table):
    """Return a new UPDATE builder."""
    return STATEMENT_BUILDER.update(table)


def delete(from_):
    """Return a new DELETE builder."""
    return STATEMENT_BUILDER.delete(from_)


def case(*what):
    """Return a new CASE builder."""
    return STATEMENT_BUILDER.case(*what)
