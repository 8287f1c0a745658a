"""
Define `Query` class for building SELECT queries. Also it includes `Select` class.
`Select` is only a alias to `Query`.
"""

import functools

from .constants import JOIN, JOIN_LEFT, JOIN_RIGHT, JOIN_INNER, JOIN_CROSS, DISTINCT
from .errors import NoColumnsError
from .expr import Part, WherePart
from .base import BaseCommand
from .behaviours import FromBehaviour, WhereBehaviour, LimitBehaviour, _is_empty_pred
from .placeholder import QUESTION


class Query(BaseCommand, FromBehaviour, WhereBehaviour, LimitBehaviour):
    """
    Builder for SELECT query
    Example:
        Query().columns('id', 'name').from_('users').where({'active': True}).limit(10)
            => SELECT id, name FROM users WHERE active = ? LIMIT 10
    """
    def __init__(self, placeholder_format=QUESTION, runner=None):
        super().__init__(placeholder_format, runner)
        FromBehaviour.__init__(self)
        WhereBehaviour.__init__(self)
        LimitBehaviour.__init__(self)
        self._options = ()
        self._columns = ()
        self._joins = ()
        self._group_bys = ()
        self._having_parts = ()
        self._order_by_parts = ()

    def distinct(self):
        """
        Adds DISTINCT option.
        :return: a new builder
        """
        return self.options(DISTINCT)

    def options(self, *options):
        """
        Adds select options, e.g. options('SQL_NO_CACHE') => SELECT SQL_NO_CACHE ...
        :return: a new builder
        """
        return self._replace(options=self._options + options)

    def columns(self, *columns):
        """
        Adds result columns to the query.
        Usage examples:
            columns('id', 'name') => SELECT id, name
            columns('count(*) AS cnt') => SELECT count(*) AS cnt
        :param columns: strings with column expressions
        :return: a new builder
        """
        return self._replace(columns=self._columns + tuple(Part(c) for c in columns))

    def remove_columns(self):
        """
        Removes all the result columns. A column has to be added again, otherwise
        `to_sql` raises `NoColumnsError`.
        :return: a new builder
        """
        return self._replace(columns=())

    def column(self, column, *args):
        """
        Adds a result column. Unlike `columns`, accepts arguments for the placeholders
        of the column and fragments.
        Usage examples:
            column('IF(col IN (' + placeholders(3) + '), 1, 0) as col', 1, 2, 3)
            column(Alias(Eq({'b': [1, 2]}), 'b_alias')) => (b IN (?,?)) AS b_alias
            column(Alias(select('count(*)').from_('cars'), 'cnt'))
                => (SELECT count(*) FROM cars) AS cnt
        :return: a new builder
        """
        return self._replace(columns=self._columns + (Part(column, *args),))

    def join_clause(self, pred, *args):
        """
        Adds a whole join clause.
        Example:
            join_clause('LEFT JOIN cars c ON c.user_id = u.id AND c.age > ?', 3)
        :return: a new builder
        """
        return self._replace(joins=self._joins + (Part(pred, *args),))

    def join_table(self, join_type, join, *args):
        """
        Adds a join clause of the given type. There are following methods available:
        * `join` - for JOIN
        * `left_join` - for LEFT JOIN
        * `right_join` - for RIGHT JOIN
        * `inner_join` - for INNER JOIN
        * `cross_join` - for CROSS JOIN
        Usage examples:
        * join('cars c ON c.user_id = u.id') => JOIN cars c ON c.user_id = u.id
        * left_join('cars c ON c.user_id = u.id AND c.age > ?', 3)
            => LEFT JOIN cars c ON c.user_id = u.id AND c.age > ?
        :param join_type: available values JOIN, JOIN_LEFT, JOIN_RIGHT, JOIN_INNER, JOIN_CROSS
        :param join: joining table with its condition
        :return: a new builder
        """
        return self.join_clause('{} {}'.format(join_type, join), *args)

    join = functools.partialmethod(join_table, JOIN)
    left_join = functools.partialmethod(join_table, JOIN_LEFT)
    right_join = functools.partialmethod(join_table, JOIN_RIGHT)
    inner_join = functools.partialmethod(join_table, JOIN_INNER)
    cross_join = functools.partialmethod(join_table, JOIN_CROSS)

    def group_by(self, *group_bys):
        """
        Adds GROUP BY expressions.
        Example:
            group_by('id', 'name') => GROUP BY id, name
        :return: a new builder
        """
        return self._replace(group_bys=self._group_bys + tuple(Part(g) for g in group_bys))

    def having(self, pred, *args):
        """
        Adds an expression to the HAVING query block. Accepts the same conditions as `where`.
        :return: a new builder
        """
        if _is_empty_pred(pred):
            return self
        return self._replace(having_parts=self._having_parts + (WherePart(pred, *args),))

    def order_by_clause(self, pred, *args):
        """
        Adds an ORDER BY expression with arguments.
        Example:
            order_by_clause('? DESC', 1) => ORDER BY ? DESC
        :return: a new builder
        """
        return self._replace(order_by_parts=self._order_by_parts + (Part(pred, *args),))

    def order_by(self, *order_bys):
        """
        Adds ORDER BY expressions.
        Example:
            order_by('id ASC', 'name DESC') => ORDER BY id ASC, name DESC
        :return: a new builder
        """
        return self._replace(
            order_by_parts=self._order_by_parts + tuple(Part(o) for o in order_bys))

    def _on_build_query(self, ctx):
        if not self._columns:
            raise NoColumnsError('select statements must have at least one result column')
        parts = [
            self._build_query_prefixes(ctx),
            self._build_query_select(ctx),
            self._build_query_from(ctx),
            self._build_query_join(ctx),
            self._build_query_where(ctx),
            self._build_query_group(ctx),
            self._build_query_having(ctx),
            self._build_query_order(ctx),
            self._build_query_limit(),
            self._build_query_suffixes(ctx),
        ]
        return self._join_query(parts)

    def _build_query_select(self, ctx):
        columns = ctx.join(self._columns, ', ')
        if not columns:
            raise NoColumnsError('select statements must have at least one result column')
        return self._join_query(['SELECT', *self._options, columns])

    def _build_query_join(self, ctx):
        if not self._joins:
            return None
        return ctx.join(self._joins, ' ')

    def _build_query_group(self, ctx):
        if not self._group_bys:
            return None
        res = ctx.join(self._group_bys, ', ')
        return 'GROUP BY ' + res if res else None

    def _build_query_having(self, ctx):
        if not self._having_parts:
            return None
        res = ctx.join(self._having_parts, ' AND ')
        return 'HAVING ' + res if res else None

    def _build_query_order(self, ctx):
        if not self._order_by_parts:
            return None
        res = ctx.join(self._order_by_parts, ', ')
        return 'ORDER BY ' + res if res else None


Select = Query
