"""
class `Case` for building CASE expressions. A CASE expression is a fragment and
can be used as a column, a condition or a SET value of other statements.
"""

import copy
from collections import namedtuple

from .errors import EmptyWhenError, SqlBuildError
from .expr import Part, Sqlizer
from .base import BuildContext
from .placeholder import QUESTION

WhenPart = namedtuple('WhenPart', ['when', 'then'])


class Case(Sqlizer):
    """
    Builder for CASE expression.
    Usage examples:
    * With a value:
        Case('status').when('1', '2').when('2', '1').else_('0')
            => CASE status WHEN 1 THEN 2 WHEN 2 THEN 1 ELSE 0 END
    * Without a value, with fragments:
        Case().when(Eq(x=0), "'zero'").when(Expr('x > ?', 1), Expr('?', 'big'))
            => CASE WHEN x = ? THEN 'zero' WHEN x > ? THEN ? END
    Placeholders are rewritten only when the expression is rendered on its own.
    Inside another statement the outer statement numbers them.
    """
    def __init__(self, *what):
        self._placeholder_format = QUESTION
        self._what = None
        self._whens = ()
        self._else = None
        if len(what) == 1:
            self._what = Part(what[0])
        elif len(what) > 1:
            self._what = Part(what[0], *what[1:])

    def _replace(self, **slots):
        res = copy.copy(self)
        for name, value in slots.items():
            setattr(res, '_' + name, value)
        return res

    def placeholder_format(self, fmt):
        """
        Set the placeholder format used by `to_sql`.
        :return: a new builder
        """
        return self._replace(placeholder_format=fmt)

    def get_placeholder_format(self):
        return self._placeholder_format

    def when(self, when, then):
        """
        Adds "WHEN ... THEN ..." part. Both arguments are strings of SQL or fragments.
        :return: a new builder
        """
        return self._replace(whens=self._whens + (WhenPart(Part(when), Part(then)),))

    def else_(self, expr):
        """
        Sets "ELSE ..." part.
        :return: a new builder
        """
        return self._replace(**{'else': Part(expr)})

    def to_sql(self):
        """
        Render the expression with placeholders in the chosen format.
        :return: tuple (sql, args)
        """
        sql, args = self.to_sql_raw()
        return self._placeholder_format.replace_placeholders(sql), args

    def to_sql_raw(self):
        """Render the expression keeping `?` markers as they are."""
        if not self._whens:
            raise EmptyWhenError('case expression must contain at least one WHEN clause')
        ctx = BuildContext()
        parts = ['CASE']
        if self._what is not None:
            parts.append(ctx.build(self._what))
        for part in self._whens:
            parts.extend(['WHEN', ctx.build(part.when), 'THEN', ctx.build(part.then)])
        if self._else is not None:
            parts.extend(['ELSE', ctx.build(self._else)])
        parts.append('END')
        return ' '.join(parts), ctx.args

    def must_sql(self):
        """
        Same as `to_sql`, but a build error is turned into `RuntimeError`.
        """
        try:
            return self.to_sql()
        except SqlBuildError as exc:
            raise RuntimeError(str(exc)) from exc
