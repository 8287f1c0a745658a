"""Keywords used by the builders."""

JOIN = 'JOIN'
JOIN_LEFT = 'LEFT JOIN'
JOIN_RIGHT = 'RIGHT JOIN'
JOIN_INNER = 'INNER JOIN'
JOIN_CROSS = 'CROSS JOIN'

DISTINCT = 'DISTINCT'

STATEMENT_INSERT = 'INSERT'
STATEMENT_REPLACE = 'REPLACE'
