"""Unified configuration loader (calsat_config.yaml)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .solver import SolverConfig

CONFIG_FILE_NAME = "calsat_config.yaml"


class OutputConfig(BaseModel):
    """Configuration for printing solutions."""

    date_format: str = "%Y-%m-%d"  # strftime format
    show_statistics: bool = False


class UnifiedConfig(BaseModel):
    """Unified configuration for solving and output."""

    solver: SolverConfig = SolverConfig()
    output: OutputConfig = OutputConfig()


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load unified configuration from a YAML file.

    Args:
        config_path: Path to calsat_config.yaml

    Returns:
        UnifiedConfig with defaults for missing sections

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping at the root level")

    unknown = set(data) - set(UnifiedConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    solver_config = SolverConfig()
    if data.get("solver") is not None:
        solver_config = SolverConfig.model_validate(data["solver"])

    output_config = OutputConfig()
    if data.get("output") is not None:
        output_config = OutputConfig.model_validate(data["output"])

    return UnifiedConfig(solver=solver_config, output=output_config)


def discover_config(
    problem_path: Path,
    config_path: Path | None = None,
) -> UnifiedConfig | None:
    """Find the configuration for a problem file.

    Search order:
    1. Explicit config_path argument
    2. Problem file directory / calsat_config.yaml
    3. Current directory / calsat_config.yaml
    """
    if config_path is not None:
        return load_unified_config(config_path)

    dir_config = Path(problem_path).parent / CONFIG_FILE_NAME
    if dir_config.exists():
        return load_unified_config(dir_config)

    cwd_config = Path(CONFIG_FILE_NAME)
    if cwd_config.exists():
        return load_unified_config(cwd_config)

    return None
