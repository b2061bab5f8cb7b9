"""Pydantic models for pipeline configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator


class ReferenceFiles(BaseModel):
    """Locations and version of the curated reference database tables."""

    genes_path: Path = Field(
        ...,
        description="TSV with one row per transcript variant (entrez_id, symbol, refseq_id)",
    )
    categories_path: Path = Field(
        ...,
        description="TSV assigning genes to the cancer or stromal category",
    )
    interactions_path: Path = Field(
        ...,
        description="TSV of ligand-receptor interactions with role gene sets",
    )
    version: str = Field(
        default="unversioned",
        description="Reference database release label",
    )


class NormalizationSettings(BaseModel):
    """Parameters of the trimmed-sum expression rescaling."""

    target_total: float = Field(
        default=300000.0,
        gt=0.0,
        description="Value the trimmed category sum is rescaled to",
    )
    lower_trim: float = Field(
        default=0.05,
        ge=0.0,
        lt=1.0,
        description="Fraction of lowest-ranked values excluded from the sum",
    )
    upper_trim: float = Field(
        default=0.95,
        gt=0.0,
        lt=1.0,
        description="Rank fraction of the highest value included in the sum",
    )

    @model_validator(mode="after")
    def check_trim_order(self) -> "NormalizationSettings":
        """Lower trim bound must sit below the upper one."""
        if self.lower_trim >= self.upper_trim:
            raise ValueError(
                f"lower_trim ({self.lower_trim}) must be less than "
                f"upper_trim ({self.upper_trim})"
            )
        return self


class PipelineConfig(BaseModel):
    """Main pipeline configuration."""

    output_dir: Path = Field(
        ...,
        description="Directory for result tables and provenance files",
    )
    reference: ReferenceFiles = Field(
        ...,
        description="Reference database tables",
    )
    normalization: NormalizationSettings = Field(
        default_factory=NormalizationSettings,
        description="Trimmed-sum normalization parameters",
    )

    @field_validator("output_dir")
    @classmethod
    def create_directory(cls, v: Path) -> Path:
        """Create directory if it doesn't exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        recorded in provenance so result sets can be traced to settings.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
