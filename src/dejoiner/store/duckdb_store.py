"""DuckDB-based resource store."""

import json
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import duckdb

from dejoiner.exceptions import ResourceNotFoundError, StoreConnectionError, StoreError
from dejoiner.search.indexer import detect_source_type
from dejoiner.search.models import IndexEntry
from dejoiner.store.base import ResourceStore
from dejoiner.store.schema import ALL_TABLES, RESOURCE_COLUMNS
from dejoiner.utils.logging import get_logger

logger = get_logger(__name__)


class DuckDBResourceStore(ResourceStore):
    """Resource store backed by a DuckDB database.

    Attributes:
        db_path: Path to the database file, or None for in-memory.
    """

    _UPSERT = """
        INSERT OR REPLACE INTO resources
        (id, title, type, url, thumbnail_url, last_edited_at,
         metadata, content_index, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
    """

    _SELECT = f"SELECT {', '.join(RESOURCE_COLUMNS)} FROM resources"

    _SELECT_RECENT = (
        _SELECT
        + " ORDER BY last_edited_at DESC NULLS LAST, created_at DESC LIMIT ?"
    )

    _SELECT_BY_ID = _SELECT + " WHERE id = ?"

    _UPDATE_CONTENT_INDEX = "UPDATE resources SET content_index = ? WHERE id = ?"

    _COUNT_ALL = "SELECT COUNT(*) FROM resources"

    _SELECT_SETTINGS = "SELECT key, value FROM settings"

    _UPSERT_SETTING = "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)"

    def __init__(self, db_path: Path | str | None = None) -> None:
        """Open (and create if needed) the resource database.

        Args:
            db_path: Path to the database file. If None, uses in-memory database.
        """
        self.db_path = Path(db_path) if db_path else None
        self._conn: duckdb.DuckDBPyConnection | None = None
        self._init_db()

    def _init_db(self) -> None:
        try:
            if self.db_path:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = duckdb.connect(str(self.db_path))
            else:
                self._conn = duckdb.connect(":memory:")

            for table_sql in ALL_TABLES:
                self._conn.execute(table_sql)

        except Exception as e:
            raise StoreConnectionError(
                f"Failed to open resource database: {e}"
            ) from e

    def _ensure_connection(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            self._init_db()
        if self._conn is None:
            raise StoreConnectionError("Database connection not available")
        return self._conn

    def upsert(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Insert or replace a resource.

        Accepts storage column names or the API's camel-case names.
        """
        url = row.get("url")
        if not url:
            raise StoreError(
                "Resource row has no url", user_message="Every resource needs a url"
            )

        resource_id = str(row.get("id") or uuid.uuid4())
        content_index = row.get("content_index", row.get("contentIndex"))

        params = [
            resource_id,
            row.get("title"),
            str(row.get("type") or detect_source_type(url)).lower(),
            url,
            row.get("thumbnail_url", row.get("thumbnailUrl")),
            _parse_timestamp(row.get("last_edited_at", row.get("lastEditedAt"))),
            _to_json(row.get("metadata")),
            _to_json(_entries_to_dicts(content_index)),
            _parse_timestamp(row.get("created_at")) or datetime.now(),
        ]

        try:
            self._ensure_connection().execute(self._UPSERT, params)
        except duckdb.Error as e:
            raise StoreError(f"Failed to store resource {resource_id}: {e}") from e

        stored = self.get(resource_id)
        if stored is None:
            raise StoreError(f"Resource {resource_id} missing after write")
        return stored

    def get(self, resource_id: str) -> dict[str, Any] | None:
        try:
            result = (
                self._ensure_connection()
                .execute(self._SELECT_BY_ID, [resource_id])
                .fetchone()
            )
        except duckdb.Error as e:
            raise StoreError(f"Failed to read resource {resource_id}: {e}") from e
        return self._row_to_dict(result) if result else None

    def recent(self, limit: int) -> list[dict[str, Any]]:
        try:
            rows = (
                self._ensure_connection()
                .execute(self._SELECT_RECENT, [max(limit, 0)])
                .fetchall()
            )
        except duckdb.Error as e:
            raise StoreError(f"Failed to list resources: {e}") from e
        return [self._row_to_dict(row) for row in rows]

    def set_content_index(self, resource_id: str, entries: list[IndexEntry]) -> None:
        if self.get(resource_id) is None:
            raise ResourceNotFoundError(f"No resource with id {resource_id!r}")

        payload = json.dumps([entry.to_dict() for entry in entries])
        try:
            self._ensure_connection().execute(
                self._UPDATE_CONTENT_INDEX, [payload, resource_id]
            )
        except duckdb.Error as e:
            raise StoreError(f"Failed to update content index: {e}") from e
        logger.info("Stored %d index entries for %s", len(entries), resource_id)

    def count(self) -> int:
        try:
            result = self._ensure_connection().execute(self._COUNT_ALL).fetchone()
        except duckdb.Error as e:
            raise StoreError(f"Failed to count resources: {e}") from e
        return result[0] if result else 0

    def get_settings(self) -> dict[str, str]:
        try:
            rows = self._ensure_connection().execute(self._SELECT_SETTINGS).fetchall()
        except duckdb.Error as e:
            raise StoreError(f"Failed to read settings: {e}") from e
        return {key: value for key, value in rows if value is not None}

    def set_setting(self, key: str, value: str) -> None:
        try:
            self._ensure_connection().execute(self._UPSERT_SETTING, [key, value])
        except duckdb.Error as e:
            raise StoreError(f"Failed to store setting {key!r}: {e}") from e

    def _row_to_dict(self, row: tuple[Any, ...]) -> dict[str, Any]:
        """Convert a database row to a resource dict with parsed JSON columns."""
        data = dict(zip(RESOURCE_COLUMNS, row, strict=True))
        for column in ("metadata", "content_index"):
            value = data[column]
            if isinstance(value, str):
                try:
                    data[column] = json.loads(value)
                except json.JSONDecodeError:
                    data[column] = None
        return data

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __repr__(self) -> str:
        path = str(self.db_path) if self.db_path else ":memory:"
        return f"DuckDBResourceStore(path={path!r})"


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO timestamp into a naive UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _entries_to_dicts(value: Any) -> Any:
    if isinstance(value, list):
        return [item.to_dict() if isinstance(item, IndexEntry) else item for item in value]
    return value


def _to_json(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)
