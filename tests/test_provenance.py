"""Tests for run provenance tracking."""

import json

import pytest

from interactome_pipeline import __version__
from interactome_pipeline.analysis import AnalysisResult, CategoryNormalization
from interactome_pipeline.config.loader import load_config
from interactome_pipeline.persistence import ProvenanceTracker


@pytest.fixture
def test_config(tmp_path):
    """Create a minimal test config."""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text("""
output_dir: {output_dir}
reference:
  genes_path: genes.tsv
  categories_path: categories.tsv
  interactions_path: interactions.tsv
  version: "2024.1"
normalization:
  target_total: 300000
""".format(output_dir=str(tmp_path / "results")))
    return load_config(config_path)


def _analysis_result():
    return AnalysisResult(
        success=True,
        gene_count=5,
        normalizations=[
            CategoryNormalization(
                category="cancer", gene_count=3, trimmed_sum=40.0, scaling_sum=40.0,
                used_fallback=False, degenerate=False,
            ),
            CategoryNormalization(
                category="stromal", gene_count=2, trimmed_sum=0.0, scaling_sum=0.0,
                used_fallback=True, degenerate=True,
            ),
        ],
        skipped_interactions=["I0"],
    )


def test_provenance_metadata_structure(test_config):
    tracker = ProvenanceTracker("S1", "0.1.0", test_config)

    metadata = tracker.create_metadata()

    assert metadata["sample_id"] == "S1"
    assert metadata["pipeline_version"] == "0.1.0"
    assert metadata["reference_version"] == "2024.1"
    assert metadata["normalization_settings"]["target_total"] == 300000.0
    assert metadata["config_hash"] == test_config.config_hash()
    assert "created_at" in metadata
    assert metadata["analysis"] is None
    assert metadata["processing_steps"] == []


def test_provenance_records_steps(test_config):
    tracker = ProvenanceTracker("S1", "0.1.0", test_config)

    tracker.record_step("load_reference_db")
    tracker.record_step("load_true_expression", {"transcript_count": 12})

    steps = tracker.processing_steps
    assert [step["step_name"] for step in steps] == ["load_reference_db", "load_true_expression"]
    assert "timestamp" in steps[0]
    assert "details" not in steps[0]
    assert steps[1]["details"]["transcript_count"] == 12


def test_record_analysis_summary(test_config):
    """Category scaling and skipped interactions are carried into the record."""
    tracker = ProvenanceTracker("S1", "0.1.0", test_config)

    tracker.record_analysis(_analysis_result())

    analysis = tracker.create_metadata()["analysis"]
    assert analysis["gene_count"] == 5
    assert [c["category"] for c in analysis["categories"]] == ["cancer", "stromal"]
    assert analysis["categories"][0]["scaling_sum"] == 40.0
    assert analysis["categories"][1]["used_fallback"] is True
    assert analysis["degenerate_categories"] == ["stromal"]
    assert analysis["skipped_interactions"] == ["I0"]
    assert tracker.processing_steps[-1]["step_name"] == "run_analysis"
    assert tracker.processing_steps[-1]["details"]["skipped_count"] == 1


def test_save_sidecar(test_config, tmp_path):
    tracker = ProvenanceTracker("S1", "0.1.0", test_config)
    tracker.record_analysis(_analysis_result())

    sidecar_path = tracker.save_sidecar(tmp_path / "out")

    assert sidecar_path == tmp_path / "out" / "S1.provenance.json"
    with open(sidecar_path) as f:
        loaded = json.load(f)
    assert loaded["config_hash"] == test_config.config_hash()
    assert loaded["analysis"]["degenerate_categories"] == ["stromal"]
    assert loaded["processing_steps"][0]["step_name"] == "run_analysis"


def test_from_config_uses_package_version(test_config):
    tracker = ProvenanceTracker.from_config(test_config, "S1")

    assert tracker.pipeline_version == __version__
    assert tracker.sample_id == "S1"
