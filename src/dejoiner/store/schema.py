"""DuckDB schema for the resource store."""

CREATE_RESOURCES_TABLE = """
    CREATE TABLE IF NOT EXISTS resources (
        id VARCHAR PRIMARY KEY,
        title VARCHAR,
        type VARCHAR NOT NULL,
        url VARCHAR NOT NULL,
        thumbnail_url VARCHAR,
        last_edited_at TIMESTAMP,
        metadata JSON,
        content_index JSON,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

# No secondary indexes: upserts rewrite every column, and DuckDB rejects
# ON CONFLICT updates that touch indexed columns.

# Key/value integration settings edited from the admin surface
CREATE_SETTINGS_TABLE = """
    CREATE TABLE IF NOT EXISTS settings (
        key VARCHAR PRIMARY KEY,
        value VARCHAR
    )
"""

RESOURCE_COLUMNS = [
    "id",
    "title",
    "type",
    "url",
    "thumbnail_url",
    "last_edited_at",
    "metadata",
    "content_index",
    "created_at",
]

ALL_TABLES = [CREATE_RESOURCES_TABLE, CREATE_SETTINGS_TABLE]
