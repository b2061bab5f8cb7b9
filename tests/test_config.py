"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from interactome_pipeline.config import load_config, load_config_with_overrides
from interactome_pipeline.config.schema import NormalizationSettings, PipelineConfig


def _write_config(tmp_path, normalization: str = "") -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"""
output_dir: {tmp_path / "results"}
reference:
  genes_path: reference/genes.tsv
  categories_path: reference/categories.tsv
  interactions_path: {tmp_path / "elsewhere" / "interactions.tsv"}
{normalization}
""")
    return config_path


def test_load_default_config():
    """Test loading the bundled default configuration."""
    config = load_config("config/default.yaml")

    assert isinstance(config, PipelineConfig)
    assert config.normalization.target_total == 300000.0
    assert config.normalization.lower_trim == 0.05
    assert config.normalization.upper_trim == 0.95
    assert config.reference.genes_path.exists()
    assert config.reference.interactions_path.exists()


def test_normalization_defaults(tmp_path):
    """Omitted normalization block -> 300000 target, 5%-95% trim."""
    config = load_config(_write_config(tmp_path))

    assert config.normalization == NormalizationSettings()
    assert config.reference.version == "unversioned"


def test_relative_reference_paths_resolved(tmp_path):
    """Relative paths resolve against the config file's directory."""
    config = load_config(_write_config(tmp_path))

    assert config.reference.genes_path == tmp_path / "reference" / "genes.tsv"
    assert config.reference.interactions_path == tmp_path / "elsewhere" / "interactions.tsv"


def test_invalid_config_missing_field(tmp_path):
    """Test that missing required field raises ValidationError."""
    invalid_config = tmp_path / "invalid.yaml"
    invalid_config.write_text("""
reference:
  genes_path: genes.tsv
  categories_path: categories.tsv
  interactions_path: interactions.tsv
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(invalid_config)

    assert "output_dir" in str(exc_info.value)


def test_invalid_trim_order(tmp_path):
    """lower_trim >= upper_trim is rejected."""
    config_path = _write_config(tmp_path, """
normalization:
  lower_trim: 0.5
  upper_trim: 0.4
""")

    with pytest.raises(ValidationError, match="lower_trim"):
        load_config(config_path)


def test_invalid_target_total(tmp_path):
    config_path = _write_config(tmp_path, """
normalization:
  target_total: 0
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(config_path)

    assert "target_total" in str(exc_info.value)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_config_hash_deterministic(tmp_path):
    """Test that config hash is deterministic and changes with config."""
    config_path = _write_config(tmp_path)
    config1 = load_config(config_path)
    config2 = load_config(config_path)

    assert config1.config_hash() == config2.config_hash()
    assert len(config1.config_hash()) == 64

    config3 = load_config_with_overrides(
        config_path,
        {"normalization.target_total": 1000000.0},
    )
    assert config3.normalization.target_total == 1000000.0
    assert config3.config_hash() != config1.config_hash()


def test_config_creates_output_directory(tmp_path):
    output_dir = tmp_path / "results"
    assert not output_dir.exists()

    load_config(_write_config(tmp_path))

    assert output_dir.is_dir()
