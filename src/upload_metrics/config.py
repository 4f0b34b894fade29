"""Configuration utilities for the upload metrics estimators."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, validator

GIB = 1024 ** 3


class DiskEstimatorConfig(BaseModel):
    """Settings for the heuristic disk usage estimator."""

    uploads_path: Path = Field(
        Path("./uploads"), description="Directory whose contents count as used space."
    )
    disk_to_memory_ratio: int = Field(
        10,
        ge=0,
        description="Estimated disk capacity as a multiple of total physical memory.",
    )
    free_memory_multiplier: int = Field(
        5,
        ge=0,
        description=(
            "Lower bound for reported free space as a multiple of currently free memory. "
            "Keeps readings sane when used space exceeds the estimated capacity."
        ),
    )
    fallback_total_bytes: int = Field(
        500 * GIB, ge=0, description="Total size reported when estimation fails."
    )
    fallback_free_bytes: int = Field(
        100 * GIB, ge=0, description="Free size reported when estimation fails."
    )

    @validator("fallback_free_bytes")
    def _free_within_total(cls, value: int, values: Dict[str, Any]) -> int:  # noqa: N805
        total = values.get("fallback_total_bytes")
        if total is not None and value > total:
            raise ValueError("fallback_free_bytes must not exceed fallback_total_bytes")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root logging level.")
    log_dir: Path = Field(Path("logs"), description="Directory for log files.")


class MetricsConfig(BaseModel):
    """Top-level configuration object."""

    disk: DiskEstimatorConfig = DiskEstimatorConfig()
    logging: LoggingConfig = LoggingConfig()

    class Config:
        arbitrary_types_allowed = True


def load_config(path: Optional[os.PathLike[str]] = None) -> MetricsConfig:
    """Load configuration from a YAML file.

    Args:
        path: Optional path to a configuration file. If not provided, the default
            configuration bundled with the project is used, or the built-in
            defaults when that file is absent.

    Returns:
        MetricsConfig: Parsed configuration model.
    """

    project_root = Path(__file__).resolve().parents[2]
    default_path = project_root / "config" / "default.yaml"
    config_path = Path(path) if path else default_path

    data: Dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    elif path:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    overrides_path = config_path.parent / "overrides.yaml"
    if overrides_path.exists():
        with overrides_path.open("r", encoding="utf-8") as handle:
            overrides: Dict[str, Any] = yaml.safe_load(handle) or {}
        data = _deep_update(data, overrides)

    return MetricsConfig(**data)


def _deep_update(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge update mapping into base mapping."""

    merged = dict(base)
    for key, value in updates.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged
