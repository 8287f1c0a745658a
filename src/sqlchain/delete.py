"""
The module includes:
 - class `Delete` - builder for the DELETE SQL statement
"""

from .errors import NoTableError
from .base import BaseCommand
from .behaviours import WhereBehaviour, OrderByBehaviour, LimitBehaviour
from .placeholder import QUESTION


class Delete(BaseCommand, WhereBehaviour, OrderByBehaviour, LimitBehaviour):
    """
    Builder for DELETE command.
    Example:
        Delete().from_('users').where('NOT active').order_by('id').limit(10)
    It builds the following query:
        DELETE FROM users WHERE NOT active ORDER BY id LIMIT 10
    """
    def __init__(self, placeholder_format=QUESTION, runner=None):
        super().__init__(placeholder_format, runner)
        WhereBehaviour.__init__(self)
        OrderByBehaviour.__init__(self)
        LimitBehaviour.__init__(self)
        self._table = ''

    def from_(self, from_):
        """
        Sets the table to delete from.
        :return: a new builder
        """
        return self._replace(table=from_)

    def _on_build_query(self, ctx):
        if not self._table:
            raise NoTableError('delete statements must specify a From table')
        parts = [
            self._build_query_prefixes(ctx),
            'DELETE FROM ' + self._table,
            self._build_query_where(ctx),
            self._build_query_order(ctx),
            self._build_query_limit(),
            self._build_query_suffixes(ctx),
        ]
        return self._join_query(parts)
