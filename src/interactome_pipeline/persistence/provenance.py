"""Run provenance: which inputs and settings produced a sample's result tables."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class ProvenanceTracker:
    """
    Provenance record for one sample run.

    Holds the inputs that determine the numbers in the output tables
    (pipeline version, config hash, reference version, normalization
    settings), the steps taken, and a summary of the analysis outcome.
    """

    def __init__(self, sample_id: str, pipeline_version: str, config: "PipelineConfig"):
        self.sample_id = sample_id
        self.pipeline_version = pipeline_version
        self.config_hash = config.config_hash()
        self.reference_version = config.reference.version
        self.normalization_settings = config.normalization.model_dump()
        self.processing_steps = []
        self.analysis = None
        self.created_at = datetime.now(timezone.utc)

    def record_step(self, step_name: str, details: Optional[dict] = None) -> None:
        """Append a timestamped step; details are stored only when given."""
        step = {
            "step_name": step_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if details:
            step["details"] = details
        self.processing_steps.append(step)

    def record_analysis(self, result: "AnalysisResult") -> None:
        """
        Store the per-category scaling and interaction outcome of a run.

        Args:
            result: Successful AnalysisResult from run_analysis()
        """
        self.analysis = {
            "gene_count": result.gene_count,
            "interaction_count": len(result.results),
            "categories": [
                {
                    "category": n.category,
                    "gene_count": n.gene_count,
                    "trimmed_sum": n.trimmed_sum,
                    "scaling_sum": n.scaling_sum,
                    "used_fallback": n.used_fallback,
                    "degenerate": n.degenerate,
                }
                for n in result.normalizations
            ],
            "degenerate_categories": result.degenerate_categories,
            "skipped_interactions": result.skipped_interactions,
        }
        self.record_step("run_analysis", {
            "skipped_count": len(result.skipped_interactions),
            "degenerate_count": len(result.degenerate_categories),
        })

    def create_metadata(self) -> dict:
        return {
            "sample_id": self.sample_id,
            "pipeline_version": self.pipeline_version,
            "reference_version": self.reference_version,
            "config_hash": self.config_hash,
            "normalization_settings": self.normalization_settings,
            "created_at": self.created_at.isoformat(),
            "analysis": self.analysis,
            "processing_steps": self.processing_steps,
        }

    def save_sidecar(self, output_dir: Path) -> Path:
        """
        Write {sample_id}.provenance.json into output_dir.

        Returns:
            Path of the written sidecar
        """
        sidecar_path = Path(output_dir) / f"{self.sample_id}.provenance.json"
        sidecar_path.parent.mkdir(parents=True, exist_ok=True)

        with open(sidecar_path, "w") as f:
            json.dump(self.create_metadata(), f, indent=2, default=str)

        return sidecar_path

    @classmethod
    def from_config(
        cls,
        config: "PipelineConfig",
        sample_id: str,
        version: Optional[str] = None,
    ) -> "ProvenanceTracker":
        """
        Create a tracker for one sample.

        Args:
            config: PipelineConfig instance
            sample_id: Sample label used for the sidecar file name
            version: Pipeline version string. If None, uses interactome_pipeline.__version__
        """
        if version is None:
            from interactome_pipeline import __version__
            version = __version__

        return cls(sample_id, version, config)
