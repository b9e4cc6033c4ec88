"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL database connectivity via asyncpg
- Supabase auth client and access token verification
- FastAPI dependency injection utilities

Usage Examples:
    from faculty_rating.core import get_settings, DBSessionDep, CurrentUserDep
"""

from faculty_rating.core.config import Settings, get_settings
from faculty_rating.core.database import init_db, close_db, get_db_pool
from faculty_rating.core.dependencies import (
    get_db_session,
    get_settings_dependency,
    get_current_user,
    require_admin,
    SettingsDep,
    DBSessionDep,
    CurrentUserDep,
    AdminUserDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    # FastAPI dependency injection (from dependencies.py)
    'get_db_session',
    'get_settings_dependency',
    'get_current_user',
    'require_admin',
    'SettingsDep',
    'DBSessionDep',
    'CurrentUserDep',
    'AdminUserDep',
]
