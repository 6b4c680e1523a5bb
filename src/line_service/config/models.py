"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Literal, Optional

from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    """Configuration for the file producer."""

    path: str = Field(default="data/sample.txt", min_length=1)
    encoding: str = Field(default="utf-8")


class CacheConfig(BaseModel):
    """Configuration for the caching layer."""

    enabled: bool = True
    ttl_seconds: float = Field(default=300.0, ge=0)
    progress_interval: int = Field(default=50_000, ge=1)
    shared_store: bool = False

    @property
    def ttl(self) -> timedelta:
        """TTL as a timedelta."""
        return timedelta(seconds=self.ttl_seconds)


class LoggingConfig(BaseModel):
    """Configuration for logging and message sinks."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    sink: Literal["console", "stdlib", "structured"] = "console"
    use_json: bool = False
    log_calls: bool = True
    service_name: Optional[str] = None


class ServiceConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    source: SourceConfig = Field(default_factory=SourceConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
