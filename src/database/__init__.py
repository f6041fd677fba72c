"""
Curated Competitor Database Layer

Usage:
    from src.database import (
        # Session management
        init_db, get_db_context,

        # Models
        Niche, CompetitorStore,

        # Repository
        get_curated, replace_curated, list_curated,
    )

    init_db()
    replace_curated("golf", stores)
    stores = get_curated("golf")
"""

# Models
from .models import Base, CompetitorStore, Niche

# Session management
from .session import (
    check_db_connection,
    configure_engine,
    create_db_engine,
    get_database_url,
    get_db_context,
    get_engine,
    get_session_factory,
    init_db,
)

# Repository
from .repository import (
    count_curated,
    get_curated,
    get_or_create_niche_id,
    list_curated,
    list_niche_names,
    replace_curated,
)

__all__ = [
    # Models
    "Base",
    "Niche",
    "CompetitorStore",
    # Session
    "check_db_connection",
    "configure_engine",
    "create_db_engine",
    "get_database_url",
    "get_db_context",
    "get_engine",
    "get_session_factory",
    "init_db",
    # Repository
    "count_curated",
    "get_curated",
    "get_or_create_niche_id",
    "list_curated",
    "list_niche_names",
    "replace_curated",
]
