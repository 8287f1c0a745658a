"""
class `Insert` for building INSERT and REPLACE commands.
"""

from .constants import STATEMENT_INSERT
from .errors import NoTableError, NoValuesError
from .expr import Sqlizer
from .base import BaseCommand
from .placeholder import QUESTION


class Insert(BaseCommand):
    """
    Builder for INSERT command.
    Usage examples:
    * Rows of values:
        Insert().into('users').columns('id', 'name').values(1, 'John').values(2, 'James')
            => INSERT INTO users (id,name) VALUES (?,?),(?,?)
    * Fragments are placed as they are:
        Insert().into('users').columns('id', 'created').values(1, Expr('now()'))
            => INSERT INTO users (id,created) VALUES (?,now())
    * Mapping (columns are sorted):
        Insert().into('users').set_map({'name': 'John', 'id': 1})
            => INSERT INTO users (id,name) VALUES (?,?)
    * Combining with SELECT:
        Insert().into('users').columns('id', 'name').select(select('id', 'name').from_('noobies'))
            => INSERT INTO users (id,name) SELECT id, name FROM noobies
    """
    def __init__(self, placeholder_format=QUESTION, runner=None, statement_keyword=STATEMENT_INSERT):
        super().__init__(placeholder_format, runner)
        self._statement_keyword = statement_keyword
        self._options = ()
        self._into = ''
        self._columns = ()
        self._values = ()
        self._select = None

    def options(self, *options):
        """
        Adds keyword options before the INTO clause, e.g. options('IGNORE')
        :return: a new builder
        """
        return self._replace(options=self._options + options)

    def into(self, table):
        """
        Sets the table to insert into.
        :return: a new builder
        """
        return self._replace(into=table)

    def columns(self, *columns):
        """
        Adds insert columns.
        :return: a new builder
        """
        return self._replace(columns=self._columns + columns)

    def values(self, *values):
        """
        Adds a single row of values.
        :return: a new builder
        """
        return self._replace(values=self._values + (values,))

    def set_map(self, clauses):
        """
        Adds columns and a single row of values from a mapping of column names to values.
        The columns are sorted to keep the statement stable.
        :param clauses: mapping
        :return: a new builder
        """
        cols = tuple(sorted(clauses))
        row = tuple(clauses[col] for col in cols)
        return self._replace(columns=self._columns + cols, values=self._values + (row,))

    def select(self, select):
        """
        Sets SELECT as the source of the inserted rows. It takes priority over `values`.
        :param select: `Query` builder or any fragment
        :return: a new builder
        """
        return self._replace(select=select)

    def _on_build_query(self, ctx):
        if not self._into:
            raise NoTableError('insert statements must specify a table')
        if not self._values and self._select is None:
            raise NoValuesError('insert statements must have at least one set of values or select clause')
        parts = [
            self._build_query_prefixes(ctx),
            self._statement_keyword or STATEMENT_INSERT,
            ' '.join(self._options),
            'INTO ' + self._into,
            self._build_query_columns(),
            self._build_query_values(ctx),
            self._build_query_suffixes(ctx),
        ]
        return self._join_query(parts)

    def _build_query_columns(self):
        if not self._columns:
            return None
        return '({})'.format(','.join(self._columns))

    def _build_query_values(self, ctx):
        if self._select is not None:
            return ctx.build(self._select)
        res = []
        for row in self._values:
            items = []
            for value in row:
                if isinstance(value, Sqlizer):
                    items.append(ctx.build(value))
                else:
                    items.append(ctx.set_param(value))
            res.append('({})'.format(','.join(items)))
        return 'VALUES ' + ','.join(res)
