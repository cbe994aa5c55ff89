"""
Single source of truth for database tables that exist after migrations.

The cache is ephemeral: cache_entries holds TTL-bound JSON values only and may be
truncated at any time.
"""
ALL_TABLE_NAMES = ("cache_entries",)
