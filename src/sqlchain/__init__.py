"""
sqlchain - composable, immutable SQL statement builders.
Every builder renders to a pair `(sql, args)` ready for parameterized execution:

    >>> select('id').from_('users').where({'age': [18, 19]}).placeholder_format(DOLLAR).to_sql()
    ('SELECT id FROM users WHERE age IN ($1,$2)', [18, 19])
"""

from .base import BaseCommand, BuildContext
from .case import Case
from .conn import ConnRunner, DBCursor, DBRow, Row
from .delete import Delete
from .errors import (
    SqlChainError, SqlBuildError, NoTableError, NoColumnsError, NoValuesError, NoSetError,
    EmptyWhenError, InvalidSqlError, RunnerError, RunnerNotSetError, NotQueryRunnerError,
    NoContextSupportError,
)
from .expr import (
    Sqlizer, Expr, Part, WherePart, Alias, ConcatExpr, Eq, NotEq, Lt, LtOrEq, Gt, GtOrEq,
    Like, NotLike, ILike, NotILike, And, Or, expr, alias, concat_expr,
)
from .insert import Insert
from .placeholder import (
    PlaceholderFormat, QUESTION, DOLLAR, COLON, AT_P, FORMAT, placeholders,
)
from .query import Query, Select
from .runner import (
    exec_with, query_with, query_row_with, exec_context_with, query_context_with,
    query_row_context_with,
)
from .statement import (
    StatementBuilder, STATEMENT_BUILDER, select, insert, replace, update, delete, case,
)
from .update import Update
