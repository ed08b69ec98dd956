"""
Batch categorization pipeline.

Pages through the hadith store strictly sequentially:
1. Count hadiths (failure here means the run cannot start)
2. Fetch one page, categorize each hadith independently
3. Keep results at or above the confidence floor, flush them as one bulk write
4. Move to the next page

Problems are recovered locally and tallied: a failed page fetch skips the
page, a failed bulk write marks its whole batch failed, a failing hadith is
counted and its siblings carry on. Nothing is retried.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import structlog

from hadith_categorizer.errors import PipelineError
from hadith_categorizer.schemas import HadithCategoryUpdate
from hadith_categorizer.services.categorizer import CategorizationConfig, HadithCategorizer

logger = structlog.get_logger()


def extract_text(record: Any, fields: Sequence[str]) -> str:
    """
    First non-empty text among candidate fields.

    Works for mappings and attribute-style rows; returns "" when every
    field is missing or blank.
    """
    for field in fields:
        if isinstance(record, Mapping):
            value = record.get(field)
        else:
            value = getattr(record, field, None)
        if value and str(value).strip():
            return str(value)
    return ""


def _record_id(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record["id"]
    return record.id


def new_run_stats() -> Dict[str, int]:
    """Zeroed counters for one run."""
    return {
        "total": 0,
        "processed": 0,
        "categorized": 0,
        "low_confidence": 0,
        "failed": 0,
        "semantic_used": 0,
        "pages_failed": 0,
    }


class CategorizationPipeline:
    """
    Runs the categorizer over every hadith in the store.

    The store needs three coroutines:
        count() -> int
        get_page(offset, limit) -> list of records with id and text fields
        bulk_update_categories(updates) -> int

    Usage:
        async with AsyncSessionFactory() as session:
            pipeline = CategorizationPipeline(HadithRepository(session), categorizer)
            stats = await pipeline.run()
    """

    def __init__(
        self,
        store: Any,
        categorizer: HadithCategorizer,
        config: Optional[CategorizationConfig] = None,
    ):
        self.store = store
        self.categorizer = categorizer
        self.config = config or categorizer.config

    async def run(self, on_progress: Optional[Callable[[Dict[str, int]], None]] = None) -> Dict[str, int]:
        """
        Categorize every hadith in the store.

        Args:
            on_progress: Called with a copy of the counters after each page

        Returns:
            Run counters: total, processed, categorized, low_confidence,
            failed, semantic_used, pages_failed

        Raises:
            PipelineError: If the hadith count cannot be read
        """
        stats = new_run_stats()

        try:
            stats["total"] = await self.store.count()
        except Exception as e:
            raise PipelineError(f"Cannot count hadiths: {e}") from e

        batch_size = self.config.batch_size
        logger.info("run_started",
                    total=stats["total"],
                    batch_size=batch_size,
                    semantic_fallback=self.config.semantic_fallback,
                    confidence_floor=self.config.confidence_floor)

        for offset in range(0, stats["total"], batch_size):
            await self._process_page(offset, batch_size, stats)
            if on_progress is not None:
                on_progress(dict(stats))

        logger.info("run_complete", **stats)
        return stats

    async def _process_page(self, offset: int, limit: int, stats: Dict[str, int]) -> None:
        """Fetch, categorize and flush one page."""
        try:
            records = await self.store.get_page(offset, limit)
        except Exception:
            stats["pages_failed"] += 1
            logger.error("page_fetch_failed", offset=offset, limit=limit, exc_info=True)
            return

        if not records:
            logger.warning("page_empty", offset=offset, limit=limit)
            return

        updates = self.categorize_records(records, stats)

        if updates:
            try:
                await self.store.bulk_update_categories(updates)
                stats["categorized"] += len(updates)
            except Exception:
                stats["failed"] += len(updates)
                logger.error("batch_write_failed", offset=offset, batch=len(updates), exc_info=True)

        logger.info("page_complete",
                    offset=offset,
                    processed=stats["processed"],
                    total=stats["total"],
                    categorized=stats["categorized"],
                    low_confidence=stats["low_confidence"],
                    semantic_used=stats["semantic_used"])

    def categorize_records(self, records: List[Any], stats: Dict[str, int]) -> List[HadithCategoryUpdate]:
        """
        Categorize one page of records.

        Returns:
            Write-back records for results at or above the confidence floor
        """
        updates: List[HadithCategoryUpdate] = []
        for record in records:
            stats["processed"] += 1
            try:
                hadith_id = _record_id(record)
                text = extract_text(record, self.config.text_fields)
                outcome = self.categorizer.evaluate(text)
            except Exception:
                stats["failed"] += 1
                logger.error("categorization_failed", record=repr(record)[:200], exc_info=True)
                continue

            result = outcome.result
            if result.confidence < self.config.confidence_floor:
                stats["low_confidence"] += 1
                continue

            if outcome.semantic_fallback_used:
                stats["semantic_used"] += 1
            updates.append(HadithCategoryUpdate.from_result(hadith_id, result))
        return updates
