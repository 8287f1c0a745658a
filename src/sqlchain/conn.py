"""
Runner for DB-API connections (psycopg2, sqlite3, ...).
`DBCursor` can be passed as a cursor factory for psycopg2 connections to get rows
accessible by field names (like a dict object) and by attributes.
"""

from psycopg2.extras import DictRow, DictCursor


class DBRow(DictRow):
    """
    Dict-like object for accessing data fields using brackets [] or attributes
    """
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError:
            raise AttributeError(item) from None


class DBCursor(DictCursor):
    """
    Custom psycopg2 cursor class provides dict behavior for rows.
    Example: row['field1'], row.field1
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.row_factory = DBRow


class Row:
    """
    Row scanner returned by `ConnRunner.query_row`.
    """
    def __init__(self, cursor):
        self._cursor = cursor

    def scan(self):
        """
        Return the first row of the result or None if there are no rows
        """
        return self._cursor.fetchone()


class ConnRunner:
    """
    Executes statements on a DB-API connection. Every call opens a new cursor.
    Example:
        runner = ConnRunner(psycopg2.connect(dsn), cursor_factory=DBCursor)
        select('id', 'name').from_('users').placeholder_format(FORMAT).run_with(runner).query()
    """
    def __init__(self, conn, cursor_factory=None):
        self.conn = conn
        self.cursor_factory = cursor_factory

    def _cursor(self):
        if self.cursor_factory is None:
            return self.conn.cursor()
        return self.conn.cursor(cursor_factory=self.cursor_factory)

    def exec_(self, query, *args):
        """
        Execute the query. Return the cursor, e.g. for reading `rowcount`.
        """
        cursor = self._cursor()
        cursor.execute(query, args)
        return cursor

    def query(self, query, *args):
        """
        Execute the query. Return a cursor which can be used to iterate the query result
        Usage example:
            for row in runner.query('SELECT id FROM users WHERE age > ?', 18):
                ... do what you want
        """
        return self.exec_(query, *args)

    def query_row(self, query, *args):
        """Execute the query and return a `Row` scanner for its first row."""
        return Row(self.query(query, *args))
