"""Shared fixtures: small taxonomies and an in-memory hadith store."""

import pytest

from hadith_categorizer.services.categorizer import CategorizationConfig, HadithCategorizer
from hadith_categorizer.taxonomy.schema import Taxonomy


WORSHIP_TAXONOMY = {
    "categories": [
        {
            "id": "worship",
            "title": "Worship",
            "keywords": {
                "primary": ["prayer"],
                "secondary": ["charity"],
            },
        },
    ],
}


AQEEDAH_TAXONOMY = {
    "categories": [
        {
            "id": "aqeedah",
            "title": "Creed",
            "keywords": {"primary": ["tawheed"]},
            "clusters": [
                {
                    "id": "divine-mercy",
                    "title": "Mercy of Allah",
                    "keywords": ["rahmah", "compassion"],
                    "examples": [
                        "Allah is merciful to His servants",
                        "The mercy of Allah covers all creation",
                    ],
                },
                {
                    "id": "divine-decree",
                    "title": "Divine decree",
                    "keywords": ["qadar", "destiny"],
                    "examples": [
                        "Everything is written by decree",
                        "The pen wrote destiny before the heavens",
                    ],
                },
            ],
        },
        {
            "id": "ibaadah",
            "title": "Worship",
            "keywords": {"primary": ["prayer"]},
            "clusters": [
                {
                    "id": "salah-times",
                    "title": "Prayer times",
                    "keywords": ["fajr", "maghrib"],
                    "examples": ["Pray Fajr before sunrise"],
                },
            ],
        },
    ],
}


@pytest.fixture
def worship_taxonomy():
    """One category, primary keyword 'prayer' and secondary 'charity'."""
    return Taxonomy.model_validate(WORSHIP_TAXONOMY)


@pytest.fixture
def aqeedah_taxonomy():
    """Two categories; aqeedah has a mercy cluster and a decree cluster."""
    return Taxonomy.model_validate(AQEEDAH_TAXONOMY)


@pytest.fixture
def worship_categorizer(worship_taxonomy):
    return HadithCategorizer(worship_taxonomy, CategorizationConfig())


class InMemoryHadithStore:
    """
    Hadith store double for pipeline tests.

    Records are served by offset; offsets in failing_offsets raise on fetch,
    and every write raises when fail_writes is set.
    """

    def __init__(self, records, failing_offsets=(), fail_writes=False):
        self.records = list(records)
        self.failing_offsets = set(failing_offsets)
        self.fail_writes = fail_writes
        self.fetched = []
        self.written = {}

    async def count(self):
        return len(self.records)

    async def get_page(self, offset, limit):
        self.fetched.append(offset)
        if offset in self.failing_offsets:
            raise ConnectionError(f"fetch failed for offset {offset}")
        return self.records[offset:offset + limit]

    async def bulk_update_categories(self, updates):
        if self.fail_writes:
            raise ConnectionError("bulk write failed")
        for update in updates:
            self.written[update.id] = update
        return len(updates)


@pytest.fixture
def store_factory():
    return InMemoryHadithStore
