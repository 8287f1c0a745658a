"""
Placeholder formats. Every fragment renders `?` markers; the outermost statement
rewrites them once into the marker style of the target database:
 * `QUESTION` - ?
 * `DOLLAR` - $1, $2, ...
 * `COLON` - :1, :2, ...
 * `AT_P` - @p1, @p2, ...
 * `FORMAT` - %s (DB-API "format" paramstyle, e.g. psycopg2)
`??` is an escaped question mark. It is collapsed to a literal `?` in every format.
"""

import enum

from .errors import InvalidSqlError


class PlaceholderFormat(enum.Enum):
    """Marker style of the bound parameters."""

    QUESTION = '?'
    DOLLAR = '$'
    COLON = ':'
    AT_P = '@p'
    FORMAT = '%s'

    def replace_placeholders(self, sql):
        """
        Replace every unescaped `?` with the marker of its position and collapse `??` into `?`.
        Usage examples:
            DOLLAR.replace_placeholders('x = ? AND y = ?') => 'x = $1 AND y = $2'
            DOLLAR.replace_placeholders("x IN ('??',?)") => "x IN ('?',$1)"
        :param sql: rendered SQL with `?` markers
        :return: str
        """
        if not isinstance(sql, str):
            raise InvalidSqlError('expected SQL string, got {}'.format(type(sql).__name__))
        res = []
        num = 1
        i = 0
        length = len(sql)
        while i < length:
            char = sql[i]
            if char == '?':
                if i + 1 < length and sql[i + 1] == '?':
                    res.append('?')
                    i += 2
                    continue
                res.append(self._marker(num))
                num += 1
            elif char == '%' and self is PlaceholderFormat.FORMAT:
                res.append('%%')
            else:
                res.append(char)
            i += 1
        return ''.join(res)

    def _marker(self, num):
        if self is PlaceholderFormat.QUESTION or self is PlaceholderFormat.FORMAT:
            return self.value
        return '{}{}'.format(self.value, num)

    @classmethod
    def from_paramstyle(cls, paramstyle):
        """
        Return the format matching a DB-API module `paramstyle`.
        Example:
            PlaceholderFormat.from_paramstyle(sqlite3.paramstyle) => QUESTION
        """
        try:
            return _PARAMSTYLES[paramstyle]
        except KeyError:
            raise InvalidSqlError('unsupported paramstyle {!r}'.format(paramstyle)) from None


_PARAMSTYLES = {
    'qmark': PlaceholderFormat.QUESTION,
    'numeric': PlaceholderFormat.COLON,
    'format': PlaceholderFormat.FORMAT,
    'pyformat': PlaceholderFormat.FORMAT,
}

QUESTION = PlaceholderFormat.QUESTION
DOLLAR = PlaceholderFormat.DOLLAR
COLON = PlaceholderFormat.COLON
AT_P = PlaceholderFormat.AT_P
FORMAT = PlaceholderFormat.FORMAT


def placeholders(count):
    """
    Return `count` comma-separated question marks.
    Example:
        placeholders(3) => '?,?,?'
    """
    if count < 1:
        return ''
    return ','.join('?' * count)
