"""
Repository Layer - Clean Interface for Curated Competitors

Provides simple functions to store and retrieve curated competitor
stores per niche. Handles all SQLAlchemy complexity internally.
"""

import logging
from typing import Any, Dict, Iterable, List, Union

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.discovery.models import StoreRecord
from .models import CompetitorStore, Niche
from .session import get_db_context

logger = logging.getLogger(__name__)

StoreLike = Union[StoreRecord, Dict[str, Any]]


# =============================================================================
# NICHES
# =============================================================================

def _get_or_create_niche(db: Session, name: str) -> Niche:
    niche = db.execute(select(Niche).where(Niche.name == name)).scalar_one_or_none()
    if niche is None:
        niche = Niche(name=name)
        db.add(niche)
        db.flush()
        logger.info(f"Created niche '{name}'")
    return niche


def get_or_create_niche_id(name: str) -> int:
    """
    Get the id of a niche, creating the row if needed.

    Args:
        name: Niche name

    Returns:
        Niche primary key
    """
    with get_db_context() as db:
        return _get_or_create_niche(db, name).id


def list_niche_names() -> List[str]:
    """All stored niche names, alphabetically."""
    with get_db_context() as db:
        return list(db.execute(select(Niche.name).order_by(Niche.name)).scalars())


# =============================================================================
# CURATED STORES
# =============================================================================

def _to_record(row: CompetitorStore) -> StoreRecord:
    return StoreRecord(name=row.name, url=row.url, domain=row.domain)


def _coerce(store: StoreLike) -> Union[StoreRecord, None]:
    if isinstance(store, StoreRecord):
        return StoreRecord.from_dict(store.to_dict())
    return StoreRecord.from_dict(store)


def get_curated(niche: str) -> List[StoreRecord]:
    """
    Get curated stores for a niche in insertion order.

    Returns an empty list for unknown niches.
    """
    with get_db_context() as db:
        rows = db.execute(
            select(CompetitorStore)
            .join(Niche)
            .where(Niche.name == niche)
            .order_by(CompetitorStore.id)
        ).scalars()
        return [_to_record(row) for row in rows]


def replace_curated(niche: str, stores: Iterable[StoreLike]) -> bool:
    """
    Replace all curated stores of a niche.

    Domains are cleaned, missing URLs and names are defaulted, entries
    without a domain and repeated domains are skipped.

    Returns:
        True when the replacement was committed
    """
    records = []
    seen = set()
    for store in stores:
        record = _coerce(store)
        if record is None or record.domain in seen:
            continue
        seen.add(record.domain)
        records.append(record)

    try:
        with get_db_context() as db:
            niche_row = _get_or_create_niche(db, niche)
            db.execute(delete(CompetitorStore).where(CompetitorStore.niche_id == niche_row.id))
            for record in records:
                db.add(CompetitorStore(
                    niche_id=niche_row.id,
                    name=record.name,
                    url=record.url,
                    domain=record.domain,
                ))
    except SQLAlchemyError as e:
        logger.error(f"Failed to replace curated stores for '{niche}': {e}")
        return False

    logger.info(f"Stored {len(records)} curated stores for '{niche}'")
    return True


def count_curated(niche: str) -> int:
    """Number of curated stores stored for a niche."""
    with get_db_context() as db:
        return db.execute(
            select(func.count(CompetitorStore.id))
            .select_from(CompetitorStore)
            .join(Niche)
            .where(Niche.name == niche)
        ).scalar() or 0


def list_curated() -> Dict[str, List[StoreRecord]]:
    """All curated stores grouped by niche name."""
    with get_db_context() as db:
        rows = db.execute(
            select(Niche.name, CompetitorStore)
            .select_from(Niche)
            .join(CompetitorStore, CompetitorStore.niche_id == Niche.id)
            .order_by(Niche.name, CompetitorStore.id)
        ).all()

        grouped: Dict[str, List[StoreRecord]] = {}
        for name, row in rows:
            grouped.setdefault(name, []).append(_to_record(row))
        return grouped
