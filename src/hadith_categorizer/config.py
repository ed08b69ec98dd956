"""
Configuration management for the hadith categorizer.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database configuration
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "hadith"
    POSTGRES_USER: str = "hadith"
    POSTGRES_PASSWORD: str = ""

    # Categorization run configuration
    CATEGORIZE_BATCH_SIZE: int = 100  # documents per round trip
    CONFIDENCE_FLOOR: int = 10  # results below this are not written back
    MAX_EVIDENCE_KEYWORDS: int = 10

    # Cosine-similarity cluster fallback
    SEMANTIC_FALLBACK_ENABLED: bool = True
    SEMANTIC_MIN_SIMILARITY: float = 0.15

    # Candidate text columns, first non-empty one wins
    TEXT_FIELDS: List[str] = ["hadith_english", "text_en", "hadith_text"]

    # Taxonomy asset (bundled YAML when unset)
    TAXONOMY_PATH: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> str:
        """Construct PostgreSQL connection URL."""
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def async_database_url(self) -> str:
        """Construct async PostgreSQL connection URL."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


# Global settings instance
settings = Settings()
