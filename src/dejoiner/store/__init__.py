"""Resource storage using DuckDB.

The store keeps indexed resources and integration settings, and hands
resources to the search layer as plain rows.

Usage:
    from dejoiner.store import DuckDBResourceStore

    with DuckDBResourceStore("resources.duckdb") as store:
        store.upsert({"title": "Checkout Flow", "type": "figma", "url": "..."})
        rows = store.recent(100)
"""

from dejoiner.store.base import ResourceStore
from dejoiner.store.duckdb_store import DuckDBResourceStore

__all__ = [
    "DuckDBResourceStore",
    "ResourceStore",
]
