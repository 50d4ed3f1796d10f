"""
Record store over SQLite.

The scheduling and drill layers only ever talk to the database through the
three calls exposed here: get, upsert and delete. Each call opens its own
connection and commits before returning, so every record write is atomic on
its own even though a read-then-write sequence is not.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from errors import StoreUnavailableError
from .schema import JSON_COLUMNS, TABLE_COLUMNS, TABLE_KEYS

logger = logging.getLogger(__name__)

FILTER_OPERATORS = {
    "lte": "<=",
    "lt": "<",
    "gte": ">=",
    "gt": ">",
    "in": "IN",
}


def _to_db_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


class RecordStore:
    """CRUD access to the ACT Coach tables in one SQLite file."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    @contextmanager
    def _connect(self, table: str):
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StoreUnavailableError(str(exc), table=table) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Store call on %s failed: %s", table, exc)
            raise StoreUnavailableError(str(exc), table=table) from exc
        finally:
            conn.close()

    def _check_table(self, table: str) -> Tuple[str, ...]:
        if table not in TABLE_COLUMNS:
            raise ValueError(f"Unknown table: {table}")
        return TABLE_COLUMNS[table]

    def _where(self, table: str, filters: Optional[Dict[str, Any]]) -> Tuple[str, List[Any]]:
        columns = self._check_table(table)
        if not filters:
            return "", []
        clauses: List[str] = []
        params: List[Any] = []
        for key, value in filters.items():
            column, _, op_name = key.partition("__")
            if column not in columns:
                raise ValueError(f"Unknown column {column!r} for table {table}")
            if op_name and op_name not in FILTER_OPERATORS:
                raise ValueError(f"Unknown filter operator: {op_name}")
            if op_name == "in":
                values = [_to_db_value(item) for item in value]
                if not values:
                    # IN () matches nothing
                    clauses.append("0")
                    continue
                placeholders = ", ".join("?" for _ in values)
                clauses.append(f"{column} IN ({placeholders})")
                params.extend(values)
            elif value is None and not op_name:
                clauses.append(f"{column} IS NULL")
            else:
                operator = FILTER_OPERATORS.get(op_name, "=")
                clauses.append(f"{column} {operator} ?")
                params.append(_to_db_value(value))
        return " WHERE " + " AND ".join(clauses), params

    def _decode(self, table: str, row: sqlite3.Row) -> Dict[str, Any]:
        record = dict(row)
        for column in JSON_COLUMNS.get(table, ()):
            raw = record.get(column)
            if raw is None:
                continue
            try:
                record[column] = json.loads(raw)
            except ValueError:
                logger.warning("Undecodable %s.%s value; returning None", table, column)
                record[column] = None
        return record

    def get(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return records matching all filters, e.g. {"next_review_date__lte": today}."""
        columns = self._check_table(table)
        where, params = self._where(table, filters)
        sql = f"SELECT * FROM {table}{where}"
        if order_by:
            parts = []
            for item in order_by:
                descending = item.startswith("-")
                column = item.lstrip("-")
                if column not in columns:
                    raise ValueError(f"Unknown column {column!r} for table {table}")
                parts.append(f"{column} {'DESC' if descending else 'ASC'}")
            sql += " ORDER BY " + ", ".join(parts)
        if limit is not None:
            sql += " LIMIT ?"
            params.append(max(int(limit), 0))
        with self._connect(table) as conn:
            cursor = conn.cursor()
            cursor.execute(sql, params)
            return [self._decode(table, row) for row in cursor.fetchall()]

    def upsert(self, table: str, record: Dict[str, Any]) -> None:
        """Insert a record or overwrite the row sharing its key columns."""
        columns = self._check_table(table)
        keys = TABLE_KEYS[table]
        missing = [key for key in keys if record.get(key) is None]
        if missing:
            raise ValueError(f"Record for {table} is missing key columns: {missing}")
        unknown = [column for column in record if column not in columns]
        if unknown:
            raise ValueError(f"Unknown columns for {table}: {unknown}")
        values = dict(record)
        if "updated_at" in columns:
            values["updated_at"] = datetime.now(timezone.utc).isoformat()
        for column in JSON_COLUMNS.get(table, ()):
            if column in values:
                values[column] = json.dumps(values[column])
        names = list(values)
        placeholders = ", ".join("?" for _ in names)
        updates = [name for name in names if name not in keys]
        sql = f"INSERT INTO {table} ({', '.join(names)}) VALUES ({placeholders})"
        if updates:
            assignments = ", ".join(f"{name} = excluded.{name}" for name in updates)
            sql += f" ON CONFLICT({', '.join(keys)}) DO UPDATE SET {assignments}"
        else:
            sql += f" ON CONFLICT({', '.join(keys)}) DO NOTHING"
        with self._connect(table) as conn:
            conn.execute(sql, [_to_db_value(values[name]) for name in names])
            conn.commit()

    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        """Delete matching records and return how many were removed."""
        if not filters:
            raise ValueError("delete requires at least one filter")
        where, params = self._where(table, filters)
        with self._connect(table) as conn:
            cursor = conn.execute(f"DELETE FROM {table}{where}", params)
            conn.commit()
            return cursor.rowcount or 0
