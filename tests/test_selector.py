"""Unit tests for representative-transcript selection."""

import pytest

from interactome_pipeline.analysis import AnalysisContext, select_representative_transcripts
from interactome_pipeline.errors import ConfigurationIntegrityError
from interactome_pipeline.reference.models import Gene, ReferenceDB, Variant
from interactome_pipeline.sample.models import SampleInput


def _context(variants_by_gene: dict[str, list[tuple[str, float]]]) -> AnalysisContext:
    """Build a context from entrez_id -> [(refseq_id, true_expression), ...]."""
    gene_db = {
        entrez_id: Gene(
            entrez_id=entrez_id,
            variants=tuple(Variant(refseq_id=refseq_id) for refseq_id, _ in variants),
        )
        for entrez_id, variants in variants_by_gene.items()
    }
    reference = ReferenceDB(gene_db=gene_db)
    expressions = {
        refseq_id: value
        for variants in variants_by_gene.values()
        for refseq_id, value in variants
    }
    sample = SampleInput.from_reference(reference, "S1", expressions)
    return AnalysisContext(reference=reference, sample=sample)


def test_selects_maximum_variant():
    """Representative expression is the maximum across variants."""
    context = _context({
        "100": [("NM_1", 5.0), ("NM_2", 9.0), ("NM_3", 3.0)],
        "200": [("NM_4", 1.5)],
    })

    gene_count = select_representative_transcripts(context)

    assert gene_count == 2
    ginput = context.sample.gene_inputs["100"]
    assert ginput.representative_refseq.refseq_id == "NM_2"
    assert ginput.representative_expression == 9.0

    single = context.sample.gene_inputs["200"]
    assert single.representative_refseq.refseq_id == "NM_4"
    assert single.representative_expression == 1.5


def test_tie_keeps_lowest_index_variant():
    """Equal expression -> first variant in reference order wins."""
    context = _context({
        "100": [("NM_1", 2.0), ("NM_2", 9.0), ("NM_3", 9.0)],
    })

    select_representative_transcripts(context)

    assert context.sample.gene_inputs["100"].representative_refseq.refseq_id == "NM_2"


def test_all_zero_variants_select_first():
    context = _context({"100": [("NM_1", 0.0), ("NM_2", 0.0)]})

    select_representative_transcripts(context)

    ginput = context.sample.gene_inputs["100"]
    assert ginput.representative_refseq.refseq_id == "NM_1"
    assert ginput.representative_expression == 0.0


def test_gene_without_variants_fails():
    context = _context({"100": []})

    with pytest.raises(ConfigurationIntegrityError, match="no transcript variants"):
        select_representative_transcripts(context)


def test_missing_transcript_record_fails():
    context = _context({"100": [("NM_1", 4.0), ("NM_2", 6.0)]})
    del context.sample.refseq_inputs["NM_2"]

    with pytest.raises(ConfigurationIntegrityError, match="NM_2"):
        select_representative_transcripts(context)


def test_missing_gene_input_fails():
    context = _context({"100": [("NM_1", 4.0)]})
    del context.sample.gene_inputs["100"]

    with pytest.raises(ConfigurationIntegrityError, match="GeneInput"):
        select_representative_transcripts(context)
