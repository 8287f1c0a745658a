"""
The module declares the fragments statements are composed of:
 * `Sqlizer` - the protocol every fragment implements
 * `Expr` - raw SQL with bound arguments
 * `Alias` - a parenthesized fragment with an alias: `(...) AS name`
 * `Eq`, `NotEq`, `Lt`, `LtOrEq`, `Gt`, `GtOrEq`, `Like`, `NotLike`, `ILike`, `NotILike` -
   predicates built from a mapping of columns to values
 * `And`, `Or` - conjunctions of predicates
"""

import abc
from collections import namedtuple
from collections.abc import Mapping, Sequence

from .errors import InvalidSqlError
from .placeholder import placeholders

SQL_TRUE = '(1=1)'
SQL_FALSE = '(1=0)'


class Sqlizer(abc.ABC):
    """
    Anything that renders itself to SQL text with `?` markers and the list of bound arguments.
    """

    @abc.abstractmethod
    def to_sql(self):
        """
        Render the fragment.
        :return: tuple (sql, args)
        """


def nested_to_sql(sqlizer):
    """
    Render a fragment embedded into another one. Statement builders are rendered
    without placeholder rewriting, so the outer statement numbers all the markers once.
    """
    if not isinstance(sqlizer, Sqlizer):
        raise InvalidSqlError('expected Sqlizer, not {}'.format(type(sqlizer).__name__))
    to_sql_raw = getattr(sqlizer, 'to_sql_raw', None)
    if to_sql_raw is not None:
        return to_sql_raw()
    return sqlizer.to_sql()


def _is_list(value):
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _placeholder_positions(sql):
    res = []
    i = 0
    while True:
        i = sql.find('?', i)
        if i < 0:
            return res
        if sql[i + 1:i + 2] == '?':
            i += 2
            continue
        res.append(i)
        i += 1


class Expr(Sqlizer):
    """
    Raw SQL expression with `?` markers and one argument for each marker.
    An argument may be a fragment itself; it is rendered in place of its marker.
    Usage examples:
        Expr('FROM_UNIXTIME(?)', t)
        Expr('id IN ?', select('id').from_('other'))
            => id IN SELECT id FROM other
    """

    def __init__(self, sql, *args):
        self.sql = sql
        self.args = args

    def to_sql(self):
        if not isinstance(self.sql, str):
            raise InvalidSqlError('expected SQL string, not {}'.format(type(self.sql).__name__))
        positions = _placeholder_positions(self.sql)
        if len(positions) != len(self.args):
            raise InvalidSqlError('expression {!r} has {} placeholders but {} args'.format(
                self.sql, len(positions), len(self.args)))
        if not any(isinstance(arg, Sqlizer) for arg in self.args):
            return self.sql, list(self.args)
        res = []
        args = []
        start = 0
        for pos, arg in zip(positions, self.args):
            if isinstance(arg, Sqlizer):
                res.append(self.sql[start:pos])
                nested_sql, nested_args = nested_to_sql(arg)
                res.append(nested_sql)
                args.extend(nested_args)
            else:
                res.append(self.sql[start:pos + 1])
                args.append(arg)
            start = pos + 1
        res.append(self.sql[start:])
        return ''.join(res), args

    def __repr__(self):
        return 'Expr({!r}, {})'.format(self.sql, ', '.join(repr(a) for a in self.args))


def expr(sql, *args):
    """Shortcut for `Expr(sql, *args)`."""
    return Expr(sql, *args)


class Part(Sqlizer):
    """
    Uniform wrapper for statement parts: a string with optional args or a ready fragment.
    """

    def __init__(self, pred, *args):
        self.pred = pred
        self.args = args

    def to_sql(self):
        if self.pred is None:
            return '', []
        if isinstance(self.pred, Sqlizer):
            return nested_to_sql(self.pred)
        if isinstance(self.pred, str):
            return Expr(self.pred, *self.args).to_sql()
        raise InvalidSqlError('expected string or Sqlizer, not {}'.format(type(self.pred).__name__))


def _snapshot(pred):
    """Copy predicate sugar together with nested conjunctions and IN-lists."""
    if isinstance(pred, Sqlizer) and isinstance(pred, dict):
        return type(pred)(
            (key, list(value) if isinstance(value, list) else value) for key, value in pred.items())
    if isinstance(pred, Sqlizer) and isinstance(pred, list):
        return type(pred)(_snapshot(p) for p in pred)
    return pred


class WherePart(Part):
    """
    Part of WHERE or HAVING block. Besides strings and fragments it accepts
    a plain mapping, which is treated as `Eq`.
    """

    def __init__(self, pred, *args):
        if isinstance(pred, Mapping) and not isinstance(pred, Sqlizer):
            pred = Eq(pred)
        super().__init__(_snapshot(pred), *args)

    def to_sql(self):
        if self.pred is None or isinstance(self.pred, (str, Sqlizer)):
            return super().to_sql()
        raise InvalidSqlError(
            'expected string-keyed map or string, not {}'.format(type(self.pred).__name__))


class Alias(namedtuple('Alias', ['expr', 'alias']), Sqlizer):
    """
    Fragment with an alias.
    Example:
        Alias(select('count(*)').from_('cars'), 'cnt')
            => (SELECT count(*) FROM cars) AS cnt
    """

    def to_sql(self):
        sql, args = nested_to_sql(self.expr)
        return '({}) AS {}'.format(sql, self.alias), args


def alias(sqlizer, name):
    """Shortcut for `Alias(sqlizer, name)`."""
    return Alias(sqlizer, name)


class ConcatExpr(Sqlizer):
    """
    Glues strings and fragments together.
    Example:
        ConcatExpr('COALESCE(full_name,', Expr('CONCAT(?,?)', 'first', 'last'), ')')
            => COALESCE(full_name,CONCAT(?,?))
    """

    def __init__(self, *parts):
        self.parts = parts

    def to_sql(self):
        res = []
        args = []
        for part in self.parts:
            if isinstance(part, str):
                res.append(part)
            elif isinstance(part, Sqlizer):
                nested_sql, nested_args = nested_to_sql(part)
                res.append(nested_sql)
                args.extend(nested_args)
            else:
                raise InvalidSqlError(
                    'concat_expr accepts strings and Sqlizers, not {}'.format(type(part).__name__))
        return ''.join(res), args


def concat_expr(*parts):
    """Shortcut for `ConcatExpr(*parts)`."""
    return ConcatExpr(*parts)


class Eq(dict, Sqlizer):
    """
    Equality predicate built from a mapping of columns to values.
    Keys are rendered in sorted order.
    Usage examples:
        Eq({'id': 1}) => id = ?
        Eq(name=None) => name IS NULL
        Eq({'id': [1, 2, 3]}) => id IN (?,?,?)
        Eq({'id': []}) => (1=0)
        Eq({'b': 2, 'a': 1}) => a = ? AND b = ?
    """

    _equal_op = '='
    _in_op = 'IN'
    _null_op = 'IS NULL'
    _empty_list = SQL_FALSE

    def to_sql(self):
        if not self:
            return SQL_TRUE, []
        exprs = []
        args = []
        for key in sorted(self):
            value = self[key]
            if value is None:
                exprs.append('{} {}'.format(key, self._null_op))
            elif isinstance(value, Sqlizer):
                nested_sql, nested_args = nested_to_sql(value)
                exprs.append('{} {} ({})'.format(key, self._equal_op, nested_sql))
                args.extend(nested_args)
            elif _is_list(value):
                if len(value) == 0:
                    exprs.append(self._empty_list)
                else:
                    exprs.append('{} {} ({})'.format(key, self._in_op, placeholders(len(value))))
                    args.extend(value)
            else:
                exprs.append('{} {} ?'.format(key, self._equal_op))
                args.append(value)
        return ' AND '.join(exprs), args


class NotEq(Eq):
    """
    Inequality predicate. Mirrors `Eq`.
    Usage examples:
        NotEq({'id': 1}) => id <> ?
        NotEq(name=None) => name IS NOT NULL
        NotEq({'id': [1, 2]}) => id NOT IN (?,?)
        NotEq({'id': []}) => (1=1)
    """

    _equal_op = '<>'
    _in_op = 'NOT IN'
    _null_op = 'IS NOT NULL'
    _empty_list = SQL_TRUE


class _Compare(dict, Sqlizer):
    _op = None

    def to_sql(self):
        if not self:
            return SQL_TRUE, []
        exprs = []
        args = []
        for key in sorted(self):
            value = self[key]
            if value is None:
                raise InvalidSqlError('cannot use null with {} operator'.format(self._op))
            if isinstance(value, Sqlizer):
                nested_sql, nested_args = nested_to_sql(value)
                exprs.append('{} {} ({})'.format(key, self._op, nested_sql))
                args.extend(nested_args)
            elif _is_list(value):
                raise InvalidSqlError(
                    'cannot use array or slice with {} operator'.format(self._op))
            else:
                exprs.append('{} {} ?'.format(key, self._op))
                args.append(value)
        return ' AND '.join(exprs), args


class Lt(_Compare):
    """Lt({'age': 18}) => age < ?"""
    _op = '<'


class LtOrEq(_Compare):
    """LtOrEq({'age': 18}) => age <= ?"""
    _op = '<='


class Gt(_Compare):
    """Gt({'age': 18}) => age > ?"""
    _op = '>'


class GtOrEq(_Compare):
    """GtOrEq({'age': 18}) => age >= ?"""
    _op = '>='


class Like(_Compare):
    """Like({'name': '%john%'}) => name LIKE ?"""
    _op = 'LIKE'


class NotLike(_Compare):
    _op = 'NOT LIKE'


class ILike(_Compare):
    """ILike({'name': '%john%'}) => name ILIKE ?"""
    _op = 'ILIKE'


class NotILike(_Compare):
    _op = 'NOT ILIKE'


class _Conjunction(list, Sqlizer):
    _sep = None
    _default = None

    def to_sql(self):
        res = []
        args = []
        for pred in self:
            pred_sql, pred_args = nested_to_sql(pred)
            if pred_sql:
                res.append(pred_sql)
                args.extend(pred_args)
        if not res:
            return self._default, []
        return '({})'.format(self._sep.join(res)), args


class And(_Conjunction):
    """
    Conjunction of predicates.
    Usage examples:
        And([Eq(a=1), Expr('b > ?', 2)]) => (a = ? AND b > ?)
        And([]) => (1=1)
    """
    _sep = ' AND '
    _default = SQL_TRUE


class Or(_Conjunction):
    """
    Disjunction of predicates.
    Usage examples:
        Or([Eq(a=1), Expr('b > ?', 2)]) => (a = ? OR b > ?)
        Or([]) => (1=0)
    """
    _sep = ' OR '
    _default = SQL_FALSE
