"""PostgreSQL store delegate built on asyncpg.

Translates the manager's where mappings, order-by lists and cursors into
parameterized SQL against one table. Column and table names are validated
as plain identifiers since they are interpolated into the statement.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import asyncpg

from ....core.exceptions import StoreRecordMissingError

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

COMPARISON_OPERATORS = {
    "gte": ">=",
    "lte": "<=",
    "gt": ">",
    "lt": "<",
    "not": "!=",
}


def validate_identifier(name: str) -> str:
    """Validate a SQL identifier, returning it unchanged."""
    if not IDENTIFIER_PATTERN.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


class AsyncpgStoreDelegate:
    """Store delegate for a single PostgreSQL table."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        table: str,
        schema: str = "public",
        json_columns: Iterable[str] = (),
    ):
        self._pool = pool
        self.table = validate_identifier(table)
        self.schema = validate_identifier(schema)
        self.json_columns = frozenset(validate_identifier(c) for c in json_columns)

    @property
    def qualified_table(self) -> str:
        return f"{self.schema}.{self.table}"

    # SQL building

    def _encode(self, column: str, value: Any) -> Any:
        if column in self.json_columns and isinstance(value, (dict, list)):
            return json.dumps(value)
        return value

    def _decode_row(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        record = dict(row)
        for column in self.json_columns:
            value = record.get(column)
            if isinstance(value, str):
                record[column] = json.loads(value)
        return record

    def build_where_clause(
        self,
        where: Optional[Mapping[str, Any]],
        param_offset: int = 0,
    ) -> Tuple[str, List[Any], int]:
        """
        Build WHERE clause from a where mapping.

        Args:
            where: Column to value, or column to ``{operator: value}``
            param_offset: Number of placeholders already used

        Returns:
            Tuple of (where_clause, parameters, next_param_offset)
        """
        if not where:
            return "1=1", [], param_offset

        where_parts: List[str] = []
        params: List[Any] = []
        param_count = param_offset

        for column, condition in where.items():
            column = validate_identifier(column)

            if isinstance(condition, Mapping):
                for operator, value in condition.items():
                    if operator == "in":
                        param_count += 1
                        where_parts.append(f"{column} = ANY(${param_count})")
                        params.append(list(value))
                    elif operator == "not" and value is None:
                        where_parts.append(f"{column} IS NOT NULL")
                    elif operator in COMPARISON_OPERATORS:
                        param_count += 1
                        where_parts.append(f"{column} {COMPARISON_OPERATORS[operator]} ${param_count}")
                        params.append(self._encode(column, value))
                    else:
                        raise ValueError(f"Unsupported where operator: {operator}")
            elif condition is None:
                where_parts.append(f"{column} IS NULL")
            else:
                param_count += 1
                where_parts.append(f"{column} = ${param_count}")
                params.append(self._encode(column, condition))

        return " AND ".join(where_parts) or "1=1", params, param_count

    def build_order_terms(self, order_by: Optional[Sequence[Mapping[str, str]]]) -> List[Tuple[str, str]]:
        terms: List[Tuple[str, str]] = []
        for item in order_by or []:
            for column, direction in item.items():
                direction = direction.lower()
                if direction not in ("asc", "desc"):
                    raise ValueError(f"Invalid sort direction: {direction}")
                terms.append((validate_identifier(column), direction))
        return terms or [("id", "asc")]

    def build_cursor_clause(
        self,
        cursor: Mapping[str, Any],
        order_terms: Sequence[Tuple[str, str]],
        param_offset: int,
    ) -> Tuple[str, List[Any], int]:
        """Position the query strictly after the cursor row.

        Uses a row-value comparison against the cursor row, so all sort terms
        must share one direction. The cursor row is looked up without the
        page filter, so a cursor row that no longer matches it still anchors
        the next page.
        """
        directions = {direction for _, direction in order_terms}
        if len(directions) != 1:
            raise ValueError("Cursor pagination requires a single sort direction")
        if len(cursor) != 1:
            raise ValueError("Cursor must name exactly one unique column")

        (cursor_column, cursor_value), = cursor.items()
        cursor_column = validate_identifier(cursor_column)
        columns = ", ".join(column for column, _ in order_terms)
        comparison = ">" if directions.pop() == "asc" else "<"
        param_count = param_offset + 1
        clause = (
            f"({columns}) {comparison} "
            f"(SELECT {columns} FROM {self.qualified_table} WHERE {cursor_column} = ${param_count})"
        )
        return clause, [cursor_value], param_count

    # StoreDelegate

    async def find_unique(self, where: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return await self.find_first(where)

    async def find_first(self, where: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        rows = await self.find_many(where=where, take=1)
        return rows[0] if rows else None

    async def find_many(
        self,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[Sequence[Mapping[str, str]]] = None,
        take: Optional[int] = None,
        skip: Optional[int] = None,
        cursor: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        where_clause, params, param_count = self.build_where_clause(where)
        order_terms = self.build_order_terms(order_by)

        query = f"SELECT * FROM {self.qualified_table} WHERE {where_clause}"
        if cursor:
            cursor_clause, cursor_params, param_count = self.build_cursor_clause(
                cursor, order_terms, param_count
            )
            query += f" AND {cursor_clause}"
            params.extend(cursor_params)

        query += " ORDER BY " + ", ".join(f"{column} {direction.upper()}" for column, direction in order_terms)
        if take is not None:
            param_count += 1
            query += f" LIMIT ${param_count}"
            params.append(take)
        if skip:
            param_count += 1
            query += f" OFFSET ${param_count}"
            params.append(skip)

        logger.debug(f"find_many on {self.qualified_table}: {query}")
        rows = await self._pool.fetch(query, *params)
        return [self._decode_row(row) for row in rows]

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        columns = [validate_identifier(column) for column in data]
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        query = (
            f"INSERT INTO {self.qualified_table} ({', '.join(columns)}) "
            f"VALUES ({placeholders}) RETURNING *"
        )
        row = await self._pool.fetchrow(query, *[self._encode(c, data[c]) for c in columns])
        return self._decode_row(row)

    async def update(self, where: Mapping[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
        if not where:
            raise ValueError("Update requires a where clause")
        columns = [validate_identifier(column) for column in data]
        if not columns:
            raise ValueError("Update requires at least one column")
        set_clause = ", ".join(f"{column} = ${i}" for i, column in enumerate(columns, start=1))
        where_clause, where_params, _ = self.build_where_clause(where, param_offset=len(columns))

        query = f"UPDATE {self.qualified_table} SET {set_clause} WHERE {where_clause} RETURNING *"
        params = [self._encode(c, data[c]) for c in columns] + where_params
        row = await self._pool.fetchrow(query, *params)
        if row is None:
            raise StoreRecordMissingError(self.table, dict(where))
        return self._decode_row(row)

    async def delete(self, where: Mapping[str, Any]) -> Dict[str, Any]:
        if not where:
            raise ValueError("Delete requires a where clause")
        where_clause, params, _ = self.build_where_clause(where)
        query = f"DELETE FROM {self.qualified_table} WHERE {where_clause} RETURNING *"
        row = await self._pool.fetchrow(query, *params)
        if row is None:
            raise StoreRecordMissingError(self.table, dict(where))
        return self._decode_row(row)

    async def count(self, where: Optional[Mapping[str, Any]] = None) -> int:
        where_clause, params, _ = self.build_where_clause(where)
        query = f"SELECT COUNT(*) FROM {self.qualified_table} WHERE {where_clause}"
        return int(await self._pool.fetchval(query, *params))
