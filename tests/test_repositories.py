"""
Tests for HadithRepository.

Uses a mocked AsyncSession; statements are built but never executed.
"""

from datetime import datetime

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hadith_categorizer.database.repositories import HadithRepository
from hadith_categorizer.schemas import HadithCategoryUpdate


@pytest.fixture
def mock_db_session():
    """Mock database session."""
    session = AsyncMock(spec=AsyncSession)
    return session


def _update(hadith_id, category_id="ibaadah"):
    return HadithCategoryUpdate(
        id=hadith_id,
        category_id=category_id,
        subcategory="salah-times",
        keywords=["prayer"],
    )


class TestHadithRepositoryReads:
    """Test count and paging."""

    @pytest.mark.asyncio
    async def test_count(self, mock_db_session):
        result = MagicMock()
        result.scalar_one.return_value = 42
        mock_db_session.execute.return_value = result

        repo = HadithRepository(mock_db_session)

        assert await repo.count() == 42
        mock_db_session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_get_page_returns_dicts(self, mock_db_session):
        rows = [
            {"id": 1, "hadith_english": "Establish the prayer", "text_en": None, "hadith_text": None},
            {"id": 2, "hadith_english": None, "text_en": "Give charity", "hadith_text": None},
        ]
        result = MagicMock()
        result.mappings.return_value.all.return_value = rows
        mock_db_session.execute.return_value = result

        repo = HadithRepository(mock_db_session)
        page = await repo.get_page(0, 100)

        assert page == rows
        assert all(isinstance(row, dict) for row in page)

    def test_text_fields_map_to_columns(self, mock_db_session):
        repo = HadithRepository(mock_db_session, text_fields=["text_en"])
        assert [c.key for c in repo.text_columns] == ["text_en"]

    def test_unknown_text_field(self, mock_db_session):
        with pytest.raises(AttributeError):
            HadithRepository(mock_db_session, text_fields=["no_such_column"])

    @pytest.mark.asyncio
    async def test_read_failure_rolls_back(self, mock_db_session):
        """A failed read rolls back so the next page starts clean."""
        mock_db_session.execute.side_effect = SQLAlchemyError("connection reset")

        repo = HadithRepository(mock_db_session)

        with pytest.raises(SQLAlchemyError):
            await repo.get_page(100, 100)

        mock_db_session.rollback.assert_called_once()


class TestHadithRepositoryWrites:
    """Test bulk categorization write-back."""

    @pytest.mark.asyncio
    async def test_empty_batch_is_noop(self, mock_db_session):
        repo = HadithRepository(mock_db_session)

        assert await repo.bulk_update_categories([]) == 0
        mock_db_session.execute.assert_not_called()
        mock_db_session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_bulk_update_commits_once(self, mock_db_session):
        repo = HadithRepository(mock_db_session)

        written = await repo.bulk_update_categories([_update(1), _update(2, "family")])

        assert written == 2
        mock_db_session.execute.assert_called_once()
        mock_db_session.commit.assert_called_once()

        rows = mock_db_session.execute.call_args.args[1]
        assert [row["id"] for row in rows] == [1, 2]
        assert rows[1]["category_id"] == "family"
        assert rows[0]["keywords"] == ["prayer"]
        assert rows[0]["categorized_at"] == rows[1]["categorized_at"]
        assert isinstance(rows[0]["categorized_at"], datetime)
        assert rows[0]["categorized_at"].tzinfo is None

    @pytest.mark.asyncio
    async def test_write_failure_rolls_back(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("deadlock detected")

        repo = HadithRepository(mock_db_session)

        with pytest.raises(SQLAlchemyError):
            await repo.bulk_update_categories([_update(1)])

        mock_db_session.rollback.assert_called_once()
        mock_db_session.commit.assert_not_called()
