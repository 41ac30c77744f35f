"""Configuration management for the tabular engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MergeConfig(BaseModel):
    """Merge engine configuration."""

    selection_width: Literal[5] = Field(
        default=5, description="Number of columns selected from each source table"
    )
    prefix_a: str = Field(
        default="CustomerProfile_", min_length=1, description="Column prefix for source A"
    )
    prefix_b: str = Field(
        default="CustomerTransactions_", min_length=1, description="Column prefix for source B"
    )


class InventoryConfig(BaseModel):
    """Inventory workflow configuration."""

    table_name: str = Field(default="Products", min_length=1, description="Product table name")
    empty_source_is_error: bool = Field(
        default=False, description="Raise instead of logging when the row source is empty"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="tabular_engine", description="Service name for tracing")
    metrics_enabled: bool = Field(default=False, description="Serve Prometheus metrics over HTTP")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class Config(BaseSettings):
    """Main configuration for the tabular engine."""

    model_config = SettingsConfigDict(
        env_prefix="TABULAR_ENGINE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    merge: MergeConfig = Field(default_factory=MergeConfig)
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
