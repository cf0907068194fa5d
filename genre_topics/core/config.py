# genre_topics/core/config.py

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    # topic model
    TOPIC_BACKEND: Literal["variational", "sklearn"] = "variational"
    NUM_TOPICS: int | None = 10  # None = estimate K by perplexity
    RANDOM_STATE: int = 42
    MAX_ITER: int = 100
    TOL: float = 1e-4
    N_JOBS: int = 1

    # modeling rows: one per genre (default) or one per document
    GRANULARITY: Literal["genre", "document"] = "genre"

    # downstream views
    TOP_N_WORDS: int = 10
    PCA_TOP_TERMS: int = 50

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
    )


settings = Settings()
