"""
Implementation for UPDATE query.
"""

from collections import namedtuple

from .errors import NoTableError, NoSetError
from .expr import Sqlizer
from .base import BaseCommand
from .behaviours import FromBehaviour, WhereBehaviour, OrderByBehaviour, LimitBehaviour
from .placeholder import QUESTION
from .query import Query

SetClause = namedtuple('SetClause', ['column', 'value'])


class Update(BaseCommand, FromBehaviour, WhereBehaviour, OrderByBehaviour, LimitBehaviour):
    """
    Builder for UPDATE commands.
    Example:
        q = Update() \
            .table('users') \
            .set('fullname', Expr("concat(first_name, ' ', last_name)")) \
            .set_map({'active': True, 'gender': 'male'}) \
            .set('cars', select('count(*)').from_('cars').where('cars.user_id = users.id')) \
            .where(Eq({'last_name': ['Doe', 'Smith']}))
        That code constructs this query:
            UPDATE users
            SET fullname = concat(first_name, ' ', last_name), active = ?, gender = ?,
                cars = (SELECT count(*) FROM cars WHERE cars.user_id = users.id)
            WHERE last_name IN (?,?)
    """
    def __init__(self, placeholder_format=QUESTION, runner=None):
        super().__init__(placeholder_format, runner)
        FromBehaviour.__init__(self)
        WhereBehaviour.__init__(self)
        OrderByBehaviour.__init__(self)
        LimitBehaviour.__init__(self)
        self._table = ''
        self._set_clauses = ()

    def table(self, table):
        """
        Sets the table to update.
        :return: a new builder
        """
        return self._replace(table=table)

    def set(self, column, value):
        """
        Adds a single item into the SET query block.
        Usage examples:
            set('gender', 'male') => SET gender = ?
            set('age', Expr('age + ?', 1)) => SET age = age + ?
            set('cnt', select('count(*)').from_('cars')) => SET cnt = (SELECT count(*) FROM cars)
        :param column: column name
        :param value: a value to bind or a fragment
        :return: a new builder
        """
        return self._replace(set_clauses=self._set_clauses + (SetClause(column, value),))

    def set_map(self, clauses):
        """
        Adds SET items from a mapping of columns to values. The columns are sorted.
        :param clauses: mapping
        :return: a new builder
        """
        res = tuple(SetClause(col, clauses[col]) for col in sorted(clauses))
        return self._replace(set_clauses=self._set_clauses + res)

    def _on_build_query(self, ctx):
        if not self._table:
            raise NoTableError('update statements must specify a table')
        if not self._set_clauses:
            raise NoSetError('update statements must have at least one Set clause')
        parts = [
            self._build_query_prefixes(ctx),
            'UPDATE ' + self._table,
            self._build_query_set(ctx),
            self._build_query_from(ctx),
            self._build_query_where(ctx),
            self._build_query_order(ctx),
            self._build_query_limit(),
            self._build_query_suffixes(ctx),
        ]
        return self._join_query(parts)

    def _build_query_set(self, ctx):
        res = []
        for clause in self._set_clauses:
            if isinstance(clause.value, Sqlizer):
                value = ctx.build(clause.value)
                if isinstance(clause.value, Query):
                    value = '({})'.format(value)
            else:
                value = ctx.set_param(clause.value)
            res.append('{} = {}'.format(clause.column, value))
        return 'SET ' + ', '.join(res)
