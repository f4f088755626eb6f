"""Pydantic models for btmeta.

Provides validated data models for the torrent file list, DHT node hints
and the package configuration.
"""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class TorrentFile(BaseModel):
    """One file of a torrent, placed in the overall content stream.

    ``offset`` is the first byte of the file within the concatenation of all
    files in declared order; ``end`` is derived from it.
    """

    name: str = Field(..., description="File name (last path segment)")
    path: str = Field(..., description="Display path, torrent name first")
    length: int = Field(..., ge=0, description="File length in bytes")
    offset: int = Field(default=0, ge=0, description="Start byte in content stream")

    @property
    def end(self) -> int:
        """One past the last byte of this file in the content stream."""
        return self.offset + self.length

    def to_json(self) -> str:
        """Render the file as a compact JSON object."""
        return self.model_dump_json(include={"name", "path", "length", "offset"})

    def __str__(self) -> str:
        """String representation of the file entry."""
        return (
            f"TorrentFile{{name: {self.name}, path: {self.path}, "
            f"length: {self.length}, offset: {self.offset}}}"
        )


class DHTNode(BaseModel):
    """DHT bootstrap node hint from the ``nodes`` key (BEP 5)."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., description="Node host name or IP address")
    port: int = Field(..., description="Node UDP port")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Reject empty host names."""
        if not v:
            msg = "Host cannot be empty"
            raise ValueError(msg)
        return v

    def __str__(self) -> str:
        """String representation of the node."""
        return f"{self.host}:{self.port}"


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Write JSON log lines instead of plain text",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log level names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class ExecutorConfig(BaseModel):
    """Worker pool used to offload parsing and serialization."""

    max_workers: int = Field(
        default_factory=lambda: min(4, os.cpu_count() or 1),
        ge=1,
        le=64,
        description="Maximum worker threads",
    )
    thread_name_prefix: str = Field(
        default="btmeta-offload",
        description="Name prefix for worker threads",
    )


class Config(BaseModel):
    """Main configuration model."""

    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
    executor: ExecutorConfig = Field(
        default_factory=ExecutorConfig,
        description="Offload executor configuration",
    )
