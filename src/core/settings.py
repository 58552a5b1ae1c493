from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central application configuration.

    All values can be overridden via environment variables. There is no
    configuration file: the only host input besides the environment is the
    processor count used to size the worker pools.
    """

    # General project information
    PROJECT_NAME: str = "textstats"

    # -------------------
    # Logging
    # -------------------
    ENV: str = Field(default="dev", description="Environment name (dev|staging|prod)")
    LOG_LEVEL: str = Field(default="WARNING", description="Logging level")

    # -------------
    # Engine settings
    # -------------
    STATS_LOG_NAME: str = Field(default="textstats.app", description="Python Logger name for the engine.")
    STATS_BATCH_SIZE: int = Field(default=5, gt=0, description="Files processed together before the next batch.")
    STATS_CHUNK_SIZE: int = Field(default=100, gt=0, description="Lines per chunk of work inside one file.")
    STATS_FILE_WORKERS: int | None = Field(
        default=None, gt=0, description="File pool size (None = available processors)"
    )
    STATS_CHUNK_WORKERS: int | None = Field(
        default=None, gt=0, description="Chunk pool size (None = available processors)"
    )
    STATS_TOP_K: int = Field(default=5, ge=0, description="Most frequent words listed per summary")
    STATS_ENCODING: str = Field(default="utf-8", description="Encoding used to decode input files")
    STATS_ON_FILE_ERROR: Literal["abort", "skip"] = Field(
        default="abort", description="abort|skip: what a failing file does to the run"
    )

    # -------------
    # Pydantic cfg
    # -------------
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    def file_workers(self) -> int:
        return self.STATS_FILE_WORKERS or available_parallelism()

    def chunk_workers(self) -> int:
        return self.STATS_CHUNK_WORKERS or available_parallelism()


def available_parallelism() -> int:
    """Processor count reported by the host, never less than 1."""
    return os.cpu_count() or 1


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached accessor so the environment is parsed once.
    """
    return Settings()
