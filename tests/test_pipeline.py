"""Integration tests for the full analysis pipeline on synthetic samples."""

import math

import pytest
from polars.testing import assert_frame_equal

from interactome_pipeline.analysis import run_analysis
from interactome_pipeline.output import gene_expression_to_frame, interaction_results_to_frame


@pytest.fixture
def sample_context(make_context, make_interaction):
    """25 cancer and 25 stromal genes, three interactions (two on EGFR)."""
    cancer = {f"C{i}": float(10 + 7 * i) for i in range(25)}
    stromal = {f"S{i}": float(5 + 3 * i) for i in range(25)}
    interactions = [
        make_interaction(
            "EGF_EGFR", "EGFR",
            ligand_cancer=["C1", "C2"],
            ligand_stroma=["S1"],
            receptor_cancer=["C10"],
            receptor_stroma=["S10", "S11"],
        ),
        make_interaction(
            "TGFA_EGFR", "EGFR",
            ligand_cancer=["C3"],
            ligand_stroma=["S3"],
            receptor_cancer=["C10"],
            receptor_stroma=["S10", "S11"],
            valid_stroma_to_cancer=False,
        ),
        make_interaction(
            "IGF1_IGF1R", "IGF1R",
            ligand_cancer=["C5"],
            receptor_cancer=["C6"],
            receptor_stroma=["S6"],
        ),
    ]
    return make_context(cancer=cancer, stromal=stromal, interactions=interactions)


def test_run_analysis_success(sample_context):
    result = run_analysis(sample_context)

    assert result.success is True
    assert result.error is None
    assert result.gene_count == 50
    assert [n.category for n in result.normalizations] == ["cancer", "stromal"]
    assert result.degenerate_categories == []
    assert result.skipped_interactions == ["IGF1_IGF1R"]

    egf = result.results["EGF_EGFR"]
    assert egf.ginput_ligand_cancer.entrez_id == "C2"
    assert egf.ginput_receptor_stroma.entrez_id == "S11"

    lc = egf.ginput_ligand_cancer.normalized_expression
    rs = egf.ginput_receptor_stroma.normalized_expression
    assert egf.average_cancer2stroma == math.sqrt(lc * rs)

    # Possession across the two EGFR interactions sums to 1
    tgfa = result.results["TGFA_EGFR"]
    total = egf.ligand_posession_for_same_receptor + tgfa.ligand_posession_for_same_receptor
    assert total == pytest.approx(1.0)
    assert tgfa.average_stroma2cancer is None


def test_run_analysis_idempotent(sample_context):
    """Re-running on the unmodified store gives identical outputs."""
    first = run_analysis(sample_context)
    first_genes = gene_expression_to_frame(sample_context.reference, sample_context.sample)
    first_interactions = interaction_results_to_frame(sample_context.reference, first.results)

    second = run_analysis(sample_context)
    second_genes = gene_expression_to_frame(sample_context.reference, sample_context.sample)
    second_interactions = interaction_results_to_frame(sample_context.reference, second.results)

    assert_frame_equal(first_genes, second_genes)
    assert_frame_equal(first_interactions, second_interactions)


def test_configuration_failure_reported(sample_context):
    """A missing transcript record fails the run without raising."""
    del sample_context.sample.refseq_inputs["NM_C3"]

    result = run_analysis(sample_context)

    assert result.success is False
    assert "NM_C3" in result.error
    assert result.results == {}


def test_degenerate_category_detectable(make_context, make_interaction):
    interaction = make_interaction(
        "I1", "EGFR",
        ligand_cancer=["C1"],
        ligand_stroma=["S1"],
        receptor_cancer=["C2"],
        receptor_stroma=["S2"],
    )
    context = make_context(
        cancer={"C1": 4.0, "C2": 8.0},
        stromal={"S1": 0.0, "S2": 0.0},
        interactions=[interaction],
    )

    result = run_analysis(context)

    assert result.success is True
    assert result.degenerate_categories == ["stromal"]
    assert math.isnan(context.sample.gene_inputs["S1"].normalized_expression)
    assert math.isnan(result.results["I1"].average_cancer2stroma)
