"""Configuration loading with YAML parsing and validation."""

from pathlib import Path
from typing import Any

import pydantic_yaml

from .schema import PipelineConfig


def load_config(config_path: Path | str) -> PipelineConfig:
    """
    Load and validate pipeline configuration from YAML file.

    Relative reference paths are resolved against the directory holding
    the config file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PipelineConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        yaml_content = f.read()

    config = pydantic_yaml.parse_yaml_raw_as(PipelineConfig, yaml_content)

    return _resolve_reference_paths(config, config_path.parent)


def load_config_with_overrides(
    config_path: Path | str,
    overrides: dict[str, Any],
) -> PipelineConfig:
    """
    Load config from YAML and apply dictionary overrides.

    Useful for CLI flags that override config file values.

    Args:
        config_path: Path to YAML configuration file
        overrides: Dictionary of values to override (nested keys supported)

    Returns:
        Validated PipelineConfig with overrides applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If final config is invalid
    """
    config = load_config(config_path)

    config_dict = config.model_dump()

    for key, value in overrides.items():
        if "." in key:
            # Nested keys like "normalization.target_total"
            parts = key.split(".")
            target = config_dict
            for part in parts[:-1]:
                target = target[part]
            target[parts[-1]] = value
        else:
            config_dict[key] = value

    return PipelineConfig.model_validate(config_dict)


def _resolve_reference_paths(config: PipelineConfig, base_dir: Path) -> PipelineConfig:
    reference = config.reference
    updates = {}
    for name in ("genes_path", "categories_path", "interactions_path"):
        path = getattr(reference, name)
        if not path.is_absolute():
            updates[name] = base_dir / path

    if not updates:
        return config

    return config.model_copy(
        update={"reference": reference.model_copy(update=updates)}
    )
