"""API layer: canonical query/transform surface for the CLI and exports.

Key rules:

1. No SQLAlchemy imports - the store is reached through RecordStore only
2. Query, pagination, aggregation and export are pure functions over a snapshot
3. Return Pydantic models or composition wrappers only
4. Exports always take the filtered and sorted set, never a page of it
"""
