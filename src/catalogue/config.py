from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _default_mongo_host() -> str:
    return os.getenv("MONGO_HOST", "localhost")


def _default_mongo_url() -> str:
    return os.getenv("MONGO_URL", f"mongodb://{_default_mongo_host()}:27017/catalogue")


class CatalogueSettings(BaseModel):
    """Runtime configuration for the Catalogue Service."""

    mongo_host: str = Field(default_factory=_default_mongo_host)
    mongo_url: str = Field(default_factory=_default_mongo_url)
    mongo_database: str = Field(default_factory=lambda: os.getenv("MONGO_DATABASE", "catalogue"))
    mongo_collection: str = Field(default_factory=lambda: os.getenv("MONGO_COLLECTION", "products"))
    retry_interval_ms: int = Field(
        default_factory=lambda: int(os.getenv("MONGO_RETRY_INTERVAL_MS", "2000")), ge=0
    )
    port: int = Field(default_factory=lambda: int(os.getenv("USER_SERVER_PORT", "8080")))
    service_name: str = Field(default_factory=lambda: os.getenv("SERVICE_NAME", "catalogue"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def retry_interval(self) -> float:
        return self.retry_interval_ms / 1000.0


@lru_cache(maxsize=1)
def get_settings() -> CatalogueSettings:
    return CatalogueSettings()


__all__ = ["CatalogueSettings", "get_settings"]
