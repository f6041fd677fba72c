"""
SQLAlchemy Models for curated competitor storage

Two tables:
1. niches             - one row per niche name
2. competitor_stores  - curated stores attached to a niche
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, Index, UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


# =============================================================================
# TABLES
# =============================================================================

class Niche(Base):
    """Niches that have curated competitor stores."""
    __tablename__ = "niches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    stores = relationship(
        "CompetitorStore",
        back_populates="niche",
        cascade="all, delete-orphan",
        order_by="CompetitorStore.id",
    )

    def __repr__(self):
        return f"<Niche {self.name}>"


class CompetitorStore(Base):
    """A curated competitor store for one niche."""
    __tablename__ = "competitor_stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    niche_id = Column(Integer, ForeignKey("niches.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(255), nullable=False)
    url = Column(String(500), nullable=False)
    domain = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    niche = relationship("Niche", back_populates="stores")

    __table_args__ = (
        UniqueConstraint("niche_id", "domain", name="uq_competitor_store_niche_domain"),
        Index("idx_competitor_stores_niche", "niche_id"),
    )

    def __repr__(self):
        return f"<CompetitorStore {self.domain}>"
