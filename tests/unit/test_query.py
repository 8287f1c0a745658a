import pytest

from sqlchain import (
    Query, Select, Expr, Eq, Gt, Or, And, Alias, select, placeholders, DOLLAR, COLON, QUESTION, Case,
)
from sqlchain.base import BaseCommand
from sqlchain.behaviours import WhereBehaviour, FromBehaviour, LimitBehaviour
from sqlchain.errors import NoColumnsError, InvalidSqlError
from tests.funcs import assert_query


def test_inheritance():
    assert issubclass(Query, BaseCommand)
    assert issubclass(Query, WhereBehaviour)
    assert issubclass(Query, FromBehaviour)
    assert issubclass(Query, LimitBehaviour)


def test_query_is_select():
    assert Query is Select


def test_full_select():
    sub = select('aa', 'bb').from_('dd')
    q = select('a', 'b') \
        .prefix('WITH prefix AS ?', 0) \
        .distinct() \
        .columns('c') \
        .column('IF(d IN (' + placeholders(3) + '), 1, 0) as stat_column', 1, 2, 3) \
        .column(Expr('a > ?', 100)) \
        .column(Alias(Eq({'b': [101, 102, 103]}), 'b_alias')) \
        .column(Alias(sub, 'subq')) \
        .from_('e') \
        .join_clause('CROSS JOIN j1') \
        .join('j2') \
        .left_join('j3') \
        .right_join('j4') \
        .inner_join('j5') \
        .cross_join('j6') \
        .where('f = ?', 4) \
        .where(Eq({'g': 5})) \
        .where({'h': 6}) \
        .where(Eq({'i': [7, 8, 9]})) \
        .where(Or([Expr('j = ?', 10), And([Eq({'k': 11}), Expr('true')])])) \
        .group_by('l') \
        .having('m = n') \
        .order_by_clause('? DESC', 1) \
        .order_by('o ASC', 'p DESC') \
        .limit(12) \
        .offset(13) \
        .suffix('FETCH FIRST ? ROWS ONLY', 14)
    assert_query(
        q,
        'WITH prefix AS ? '
        'SELECT DISTINCT a, b, c, IF(d IN (?,?,?), 1, 0) as stat_column, a > ?, '
        '(b IN (?,?,?)) AS b_alias, '
        '(SELECT aa, bb FROM dd) AS subq '
        'FROM e '
        'CROSS JOIN j1 JOIN j2 LEFT JOIN j3 RIGHT JOIN j4 INNER JOIN j5 CROSS JOIN j6 '
        'WHERE f = ? AND g = ? AND h = ? AND i IN (?,?,?) AND (j = ? OR (k = ? AND true)) '
        'GROUP BY l HAVING m = n ORDER BY ? DESC, o ASC, p DESC LIMIT 12 OFFSET 13 '
        'FETCH FIRST ? ROWS ONLY',
        [0, 1, 2, 3, 100, 101, 102, 103, 4, 5, 6, 7, 8, 9, 10, 11, 1, 14],
    )


def test_select_without_from():
    assert_query(select('1'), 'SELECT 1', [])
    assert_query(select('now()').column('? AS x', 5).placeholder_format(DOLLAR), 'SELECT now(), $1 AS x', [5])


def test_no_columns():
    with pytest.raises(NoColumnsError):
        Query().from_('users').to_sql()
    with pytest.raises(NoColumnsError):
        select('id').from_('users').remove_columns().to_sql()


def test_must_sql():
    assert select('id').from_('users').must_sql() == ('SELECT id FROM users', [])
    with pytest.raises(RuntimeError) as exc:
        Query().from_('users').must_sql()
    assert isinstance(exc.value.__cause__, NoColumnsError)


def test_where():
    q = select('id').from_('users')
    assert_query(q.where(None), 'SELECT id FROM users', [])
    assert_query(q.where(''), 'SELECT id FROM users', [])
    assert_query(q.where({}), 'SELECT id FROM users WHERE (1=1)', [])
    assert_query(q.where({'age': [12, 13], 'id': 12, 'name': None}),
                 'SELECT id FROM users WHERE age IN (?,?) AND id = ? AND name IS NULL', [12, 13, 12])
    assert_query(q.where(Gt({'age': 18})).where('active'),
                 'SELECT id FROM users WHERE age > ? AND active', [18])


def test_where_invalid_predicate():
    with pytest.raises(InvalidSqlError):
        select('id').from_('users').where(5).to_sql()
    with pytest.raises(InvalidSqlError):
        select('id').from_('users').where('a = ? AND b = ?', 1).to_sql()


def test_where_empty_in():
    assert_query(select('id').from_('users').where(Eq({'id': []})),
                 'SELECT id FROM users WHERE (1=0)', [])


def test_dollar():
    q = select('id').from_('users') \
        .where('a = ?', 1) \
        .where(Eq({'b': [2, 3]})) \
        .placeholder_format(DOLLAR)
    assert_query(q, 'SELECT id FROM users WHERE a = $1 AND b IN ($2,$3)', [1, 2, 3])
    assert q.get_placeholder_format() is DOLLAR


def test_from_select():
    sub = select('c').from_('t').where(Gt({'c': 1})).placeholder_format(DOLLAR)
    q = select('c').from_select(sub, 'subq').where(Expr('c < ?', 2)).placeholder_format(DOLLAR)
    assert_query(q, 'SELECT c FROM (SELECT c FROM t WHERE c > $1) AS subq WHERE c < $2', [1, 2])


def test_from_select_keeps_subquery_format():
    sub = select('c').from_('t').placeholder_format(DOLLAR)
    select('c').from_select(sub, 'subq')
    assert sub.get_placeholder_format() is DOLLAR


def test_subquery_in_where():
    sub = select('id').from_('cars').where('age > ?', 3).placeholder_format(DOLLAR)
    q = select('name').from_('users') \
        .where('active = ?', True) \
        .where(Expr('id IN (?)', sub)) \
        .placeholder_format(DOLLAR)
    assert_query(q, 'SELECT name FROM users WHERE active = $1 AND id IN (SELECT id FROM cars WHERE age > $2)',
                 [True, 3])


def test_join_with_args():
    q = select('u.id').from_('users u').left_join('cars c ON c.user_id = u.id AND c.age > ?', 3)
    assert_query(q, 'SELECT u.id FROM users u LEFT JOIN cars c ON c.user_id = u.id AND c.age > ?', [3])


def test_having():
    q = select('name', 'count(*)').from_('users').group_by('name') \
        .having('count(*) > ?', 1) \
        .having({'name': 'John'})
    assert_query(q, 'SELECT name, count(*) FROM users GROUP BY name HAVING count(*) > ? AND name = ?',
                 [1, 'John'])


def test_case_column():
    q = select('id').column(Alias(Case('status').when('1', "'on'").else_("'off'"), 'state')).from_('t')
    assert_query(q, "SELECT id, (CASE status WHEN 1 THEN 'on' ELSE 'off' END) AS state FROM t", [])


def test_options():
    assert_query(select('id').options('SQL_NO_CACHE').distinct().from_('t'),
                 'SELECT SQL_NO_CACHE DISTINCT id FROM t', [])


def test_limit_offset():
    q = select('id').from_('t').limit(10).offset(20)
    assert_query(q, 'SELECT id FROM t LIMIT 10 OFFSET 20', [])
    assert_query(q.remove_limit(), 'SELECT id FROM t OFFSET 20', [])
    assert_query(q.remove_offset(), 'SELECT id FROM t LIMIT 10', [])
    assert_query(q.limit(0), 'SELECT id FROM t LIMIT 0 OFFSET 20', [])
    with pytest.raises(ValueError):
        q.limit(-1)
    with pytest.raises(TypeError):
        q.offset('10')
    with pytest.raises(TypeError):
        q.limit(True)


def test_immutable():
    base = select('id').from_('users').where('a = ?', 1)
    q1 = base.where('b = ?', 2)
    q2 = base.where('c = ?', 3).limit(5)
    assert_query(base, 'SELECT id FROM users WHERE a = ?', [1])
    assert_query(q1, 'SELECT id FROM users WHERE a = ? AND b = ?', [1, 2])
    assert_query(q2, 'SELECT id FROM users WHERE a = ? AND c = ? LIMIT 5', [1, 3])

    q3 = base.placeholder_format(DOLLAR)
    assert base.get_placeholder_format() is QUESTION
    assert_query(q3, 'SELECT id FROM users WHERE a = $1', [1])


def test_render_twice():
    q = select('id').from_('users').where(Eq({'id': [1, 2]})).placeholder_format(DOLLAR)
    assert q.to_sql() == q.to_sql()


def test_escaped_question_mark():
    q = select('id').from_('nodes').where("data ??| array['a']").where('id = ?', 1) \
        .placeholder_format(DOLLAR)
    assert_query(q, "SELECT id FROM nodes WHERE data ?| array['a'] AND id = $1", [1])


def test_join_subquery_numbering():
    sub = select('id', 'z').from_('t').where('x = ?', 1).placeholder_format(COLON)
    q = select('a.id').from_('a') \
        .join_clause('JOIN (?) s ON s.id = a.id AND s.z = ?', sub, 2) \
        .where('y = ?', 0) \
        .placeholder_format(COLON)
    assert_query(q, 'SELECT a.id FROM a JOIN (SELECT id, z FROM t WHERE x = :1) s ON s.id = a.id AND s.z = :2 '
                    'WHERE y = :3', [1, 2, 0])


def test_subquery_in_conjunction_numbering():
    sub = select('id').from_('cars').where('age > ?', 3).placeholder_format(DOLLAR)
    q = select('name').from_('users') \
        .where('active = ?', True) \
        .where(Or([Eq({'id': sub}), And([Eq({'vip': True}), Gt({'score': 10})])])) \
        .placeholder_format(DOLLAR)
    assert_query(q, 'SELECT name FROM users WHERE active = $1 AND '
                    '(id = (SELECT id FROM cars WHERE age > $2) OR (vip = $3 AND score > $4))',
                 [True, 3, True, 10])


def test_aliased_subquery_column_numbering():
    sub = select('count(*)').from_('cars').where('cars.age > ?', 5).placeholder_format(DOLLAR)
    q = select('id') \
        .column('? AS flag', 'x') \
        .column(Alias(sub, 'old_cars')) \
        .from_('users') \
        .where('id > ?', 7) \
        .placeholder_format(DOLLAR)
    assert_query(q, 'SELECT id, $1 AS flag, (SELECT count(*) FROM cars WHERE cars.age > $2) AS old_cars '
                    'FROM users WHERE id > $3', ['x', 5, 7])


def test_group_by_and_order_by_check_placeholders():
    with pytest.raises(InvalidSqlError):
        select('a').from_('t').group_by('x ?').where('y = ?', 1).to_sql()
    with pytest.raises(InvalidSqlError):
        select('a').from_('t').order_by('x ?').to_sql()
    assert_query(select('a').from_('t').group_by('a', Expr('b + ?', 1)).placeholder_format(DOLLAR),
                 'SELECT a FROM t GROUP BY a, b + $1', [1])


def test_columns_rendering_empty():
    with pytest.raises(NoColumnsError):
        Query().column(None).from_('t').to_sql()
    with pytest.raises(NoColumnsError):
        select('').from_('t').to_sql()


def test_nested_predicates_are_copied():
    inner = Eq({'a': 1})
    ids = [1, 2]
    q = select('id').from_('t').where(And([inner, Or([Eq({'id': ids})])]))
    inner['b'] = 2
    ids.append(3)
    assert_query(q, 'SELECT id FROM t WHERE (a = ? AND (id IN (?,?)))', [1, 1, 2])
