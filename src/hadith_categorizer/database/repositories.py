"""
Repository for hadith reads and categorization write-back.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from sqlalchemy import select, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hadith_categorizer.database.models import Hadith
from hadith_categorizer.schemas import HadithCategoryUpdate


class HadithRepository:
    """
    Repository for Hadith operations used by the categorization pipeline.

    Each method is its own unit of work: failures roll the session back
    before re-raising so the next page starts on a clean transaction.
    """

    def __init__(self, session: AsyncSession, text_fields: Sequence[str] = ("hadith_english", "text_en", "hadith_text")):
        self.session = session
        self.text_columns = [getattr(Hadith, name) for name in text_fields]

    async def count(self) -> int:
        """Total number of hadiths."""
        try:
            result = await self.session.execute(select(func.count()).select_from(Hadith))
            return result.scalar_one()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def get_page(self, offset: int, limit: int) -> List[Dict[str, Any]]:
        """
        One page of hadiths ordered by id.

        Returns:
            List of dicts with id and the candidate text columns
        """
        query = (
            select(Hadith.id, *self.text_columns)
            .order_by(Hadith.id)
            .offset(offset)
            .limit(limit)
        )
        try:
            result = await self.session.execute(query)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def bulk_update_categories(self, updates: List[HadithCategoryUpdate]) -> int:
        """
        Write categorization results in one transaction (update by id).

        Args:
            updates: Records for hadiths in this batch

        Returns:
            Number of records written
        """
        if not updates:
            return 0

        categorized_at = datetime.now(timezone.utc).replace(tzinfo=None)
        rows = [
            {
                "id": u.id,
                "category_id": u.category_id,
                "subcategory": u.subcategory,
                "keywords": u.keywords,
                "categorized_at": categorized_at,
            }
            for u in updates
        ]
        try:
            # ORM bulk UPDATE by primary key
            await self.session.execute(update(Hadith), rows)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return len(rows)
