"""SQLAlchemy table definitions for the SQLite storage backend.

Both tables share the same layout: the record key and its JSON text.
"""

from sqlalchemy import Column, MetaData, Table, Text

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# AUTH STATE TABLE (in-flight authorization attempts, keyed by state)
# ============================================================================
auth_state_table = Table(
    "auth_state",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),
)

# ============================================================================
# AUTH SESSION TABLE (token material, keyed by DID)
# ============================================================================
auth_session_table = Table(
    "auth_session",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),
)
