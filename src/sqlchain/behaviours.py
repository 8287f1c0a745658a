"""
The module provides different behaviours to be used in statement builder classes:
 * `FromBehaviour` - for FROM query block (a table or a subquery)
 * `WhereBehaviour` - for WHERE query block
 * `OrderByBehaviour` - for ORDER BY query block of UPDATE and DELETE
 * `LimitBehaviour` - for LIMIT and OFFSET query blocks
Behaviours keep their state in the builder itself, so they can only be mixed into
`BaseCommand` subclasses.
"""

from .expr import Alias, Part, WherePart
from .placeholder import QUESTION


def _is_empty_pred(pred):
    return pred is None or (isinstance(pred, str) and not pred)


class FromBehaviour:
    """
    Implements FROM query block.
    """

    def __init__(self):
        self._from_part = None

    def from_(self, from_):
        """
        Sets FROM query block
        Usage examples:
            from_('users') => FROM users
            from_('users u') => FROM users u
        :param from_: table name or any SQL valid after FROM
        :return: a new builder
        """
        return self._replace(from_part=Part(from_))

    def from_select(self, subquery, alias):
        """
        Sets a subquery into FROM query block.
        The subquery placeholders are left to the outer statement, so they are numbered once.
        Example:
            subq = select('id').from_('cars').where('age > ?', 3)
            from_select(subq, 'c')
                => FROM (SELECT id FROM cars WHERE age > ?) AS c
        :param subquery: `Query` builder
        :param alias: alias for the subquery
        :return: a new builder
        """
        return self._replace(from_part=Alias(subquery.placeholder_format(QUESTION), alias))

    def _build_query_from(self, ctx):
        if self._from_part is None:
            return None
        res = ctx.build(self._from_part)
        return 'FROM ' + res if res else None


class WhereBehaviour:
    """
    Implementation of WHERE query block.
    """

    def __init__(self):
        self._where_parts = ()

    def where(self, pred, *args):
        """
        Adds an expression to the WHERE query block. Expressions are ANDed together.
        `pred` parameter may be one of:
        * None or empty string - ignored
        * string - SQL expression with a `?` placeholder for every argument:
            where('id = ?', 7) => WHERE id = ?
        * mapping - equality conditions, keys are rendered in sorted order:
            where({'id': 12, 'name': None, 'age': [12, 13]})
                => WHERE age IN (?,?) AND id = ? AND name IS NULL
        * any fragment (`Eq`, `Or`, `Expr`, a subquery ...):
            where(Or([Eq(a=1), Gt(b=2)])) => WHERE (a = ? OR b > ?)
        Any other type makes `to_sql` raise `InvalidSqlError`.
        :param pred: the condition
        :param args: arguments for the placeholders of a string condition
        :return: a new builder
        """
        if _is_empty_pred(pred):
            return self
        return self._replace(where_parts=self._where_parts + (WherePart(pred, *args),))

    def _build_query_where(self, ctx):
        if not self._where_parts:
            return None
        res = ctx.join(self._where_parts, ' AND ')
        return 'WHERE ' + res if res else None


class OrderByBehaviour:
    """
    Implementation of ORDER BY query block for UPDATE and DELETE commands.
    """

    def __init__(self):
        self._order_bys = ()

    def order_by(self, *order_bys):
        """
        Adds ORDER BY expressions.
        Example:
            order_by('id', 'name DESC') => ORDER BY id, name DESC
        :return: a new builder
        """
        return self._replace(order_bys=self._order_bys + tuple(Part(o) for o in order_bys))

    def _build_query_order(self, ctx):
        if not self._order_bys:
            return None
        res = ctx.join(self._order_bys, ', ')
        return 'ORDER BY ' + res if res else None


def _format_count(value, name):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError('{} must be an integer, not {}'.format(name, type(value).__name__))
    if value < 0:
        raise ValueError('{} must not be negative'.format(name))
    return '%d' % value


class LimitBehaviour:
    """
    Implementation of LIMIT and OFFSET query blocks.
    """

    def __init__(self):
        self._limit = ''
        self._offset = ''

    def limit(self, limit: int):
        """
        Sets LIMIT query block
        Usage example:
        * limit(15) => LIMIT 15
        :param limit: integer to limit result query rows
        :return: a new builder
        """
        return self._replace(limit=_format_count(limit, 'limit'))

    def remove_limit(self):
        """Drops LIMIT query block."""
        return self._replace(limit='')

    def offset(self, offset: int):
        """
        Sets OFFSET query block
        Usage example:
        * offset(30) => OFFSET 30
        :return: a new builder
        """
        return self._replace(offset=_format_count(offset, 'offset'))

    def remove_offset(self):
        """Drops OFFSET query block."""
        return self._replace(offset='')

    def _build_query_limit(self):
        parts = []
        if self._limit:
            parts.append('LIMIT ' + self._limit)
        if self._offset:
            parts.append('OFFSET ' + self._offset)
        return ' '.join(parts) if parts else None
