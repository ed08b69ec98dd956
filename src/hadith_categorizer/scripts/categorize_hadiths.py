#!/usr/bin/env python3
"""
Hadith categorization script.

Assigns every hadith a category, a cluster (where evidence allows) and
evidence keywords, and writes the results back to the hadiths table. Safe to
re-run: unchanged texts with an unchanged taxonomy get identical results.

Usage:
    categorize-hadiths [--batch-size 100] [--no-semantic] [--min-similarity 0.15]
                       [--confidence-floor 10] [--taxonomy path/to/taxonomy.yaml]

Options:
    --batch-size <n>         Hadiths fetched and written per round trip (default: 100)
    --no-semantic            Disable the cosine-similarity cluster fallback
    --min-similarity <f>     Minimum cosine similarity for the fallback (default: 0.15)
    --confidence-floor <n>   Minimum confidence for a result to be written (default: 10)
    --taxonomy <path>        Taxonomy YAML (default: bundled taxonomy)
"""

import asyncio
import argparse
import sys

import structlog

from hadith_categorizer.config import settings
from hadith_categorizer.errors import CategorizationError
from hadith_categorizer.logging_config import configure_logging
from hadith_categorizer.services.categorizer import CategorizationConfig, HadithCategorizer
from hadith_categorizer.services.pipeline import CategorizationPipeline
from hadith_categorizer.taxonomy.loader import load_taxonomy

logger = structlog.get_logger()


def print_progress(stats: dict):
    """Print one progress line after a page."""
    total = stats["total"] or 1
    progress = stats["processed"] / total * 100
    print(
        f"  {stats['processed']}/{stats['total']} ({progress:.1f}%) | "
        f"categorized {stats['categorized']} | low confidence {stats['low_confidence']} | "
        f"semantic {stats['semantic_used']}"
    )


def print_stats(stats: dict):
    """Print statistics summary."""
    print("\n" + "=" * 60)
    print("CATEGORIZATION SUMMARY")
    print("=" * 60)
    print(f"Total hadiths:          {stats['total']}")
    print(f"Processed:              {stats['processed']}")
    print(f"Categorized (written):  {stats['categorized']}")
    print(f"Low confidence:         {stats['low_confidence']}")
    print(f"Failed:                 {stats['failed']}")
    print(f"Pages skipped:          {stats['pages_failed']}")
    print(f"Semantic fallback used: {stats['semantic_used']}")
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Categorize hadiths into topical categories and clusters"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help=f"Hadiths per round trip (default: {settings.CATEGORIZE_BATCH_SIZE})"
    )
    parser.add_argument(
        "--no-semantic",
        action="store_true",
        help="Disable the cosine-similarity cluster fallback"
    )
    parser.add_argument(
        "--min-similarity",
        type=float,
        default=None,
        help=f"Minimum cosine similarity for the fallback (default: {settings.SEMANTIC_MIN_SIMILARITY})"
    )
    parser.add_argument(
        "--confidence-floor",
        type=int,
        default=None,
        help=f"Minimum confidence for write-back (default: {settings.CONFIDENCE_FLOOR})"
    )
    parser.add_argument(
        "--taxonomy",
        type=str,
        default=None,
        help="Taxonomy YAML file (default: bundled taxonomy)"
    )
    return parser


async def main(argv=None) -> int:
    """Main entry point for the script; returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.batch_size is not None and args.batch_size < 1:
        parser.error("--batch-size must be at least 1")
    configure_logging(settings.LOG_LEVEL, json=settings.LOG_JSON)

    config = CategorizationConfig.from_settings(
        batch_size=args.batch_size,
        confidence_floor=args.confidence_floor,
        min_similarity=args.min_similarity,
        semantic_fallback=False if args.no_semantic else None,
    )

    try:
        taxonomy = load_taxonomy(args.taxonomy or settings.TAXONOMY_PATH)
    except CategorizationError as e:
        print(f"Error loading taxonomy: {e}")
        return 1

    categorizer = HadithCategorizer(taxonomy, config)
    keyword_count = len(categorizer.scorer.index)
    print(f"Loaded {len(taxonomy.categories)} categories, {keyword_count} unique keywords")
    print(f"Batch size: {config.batch_size}")
    print(f"Semantic fallback: {config.semantic_fallback} (min similarity {config.min_similarity})")

    # Imported here so a bad taxonomy fails before any engine is created
    from hadith_categorizer.database.repositories import HadithRepository
    from hadith_categorizer.database.session import AsyncSessionFactory, engine

    try:
        async with AsyncSessionFactory() as session:
            repo = HadithRepository(session, text_fields=config.text_fields)
            pipeline = CategorizationPipeline(repo, categorizer, config)
            stats = await pipeline.run(on_progress=print_progress)
    except CategorizationError as e:
        logger.error("run_aborted", error=str(e))
        print(f"Error: {e}")
        return 1
    finally:
        await engine.dispose()

    print_stats(stats)

    # Exit with error code if any failures
    return 1 if stats["failed"] > 0 else 0


def run():
    """Console entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
