"""
SQLAlchemy models for the hadith store.

Only the columns the categorizer reads or writes are mapped; the bulk
import owns the rest of the table.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.dialects.postgresql import JSONB


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Hadith(Base):
    """
    A hadith text plus its categorization annotation.

    category_id / subcategory / keywords are written by the categorization
    run and nothing else.
    """
    __tablename__ = "hadiths"

    id = Column(Integer, primary_key=True)

    # Source texts (field names differ between import batches)
    source = Column(String(200), nullable=True)
    hadith_text = Column(Text, nullable=True)
    hadith_english = Column(Text, nullable=True)
    text_en = Column(Text, nullable=True)
    text_ar = Column(Text, nullable=True)

    # Categorization annotation
    category_id = Column(String(100), nullable=True)
    subcategory = Column(String(100), nullable=True)  # cluster id
    keywords = Column(JSONB, nullable=True)  # ordered evidence keywords
    categorized_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index('ix_hadiths_category_id', 'category_id'),
        Index('ix_hadiths_subcategory', 'subcategory'),
    )
