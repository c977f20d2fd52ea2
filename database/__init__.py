"""
Database package for the hotel booking application.

All data lives in the hosted backend (Supabase). This package provides:
- connection: Request-scoped client management (get_db, close_db)
- tables: Remote table names
"""

from database.connection import (
    get_db,
    close_db,
    create_db_client,
    store_tokens,
    clear_tokens,
    SESSION_TOKENS_KEY,
)
from database import tables

__all__ = [
    # Connection
    'get_db',
    'close_db',
    'create_db_client',
    'store_tokens',
    'clear_tokens',
    'SESSION_TOKENS_KEY',
    # Tables
    'tables',
]
